"""logic/wander.py — Idle wander target selection.

Picks where an idle creature strolls next:

  - patrol species circle the house
  - homed creatures pick a point inside their home
  - homeless river kinds pick a river point
  - everyone else takes a short hop from where they stand
"""

from __future__ import annotations
import math
import random
from typing import TYPE_CHECKING

from components import Position, Creature, Terrain
from core.constants import FENCE_PADDING, HOME_PADDING, ROUND_HOME_SCALE
from core.geometry import Point, clamp, random_point_in_disk
from logic.placement import is_position_invalid, random_river_point
from logic.residency import buildings_of_type
from logic.species import has_tag, is_flying, is_river_kind

if TYPE_CHECKING:
    from core.ecs import World
    from components import Building


def round_home(bld: "Building") -> bool:
    return bld.type in ("lake", "laboratory")


def round_radius(bld: "Building") -> float:
    return min(bld.w, bld.h) / 2 * ROUND_HOME_SCALE


def point_in_home(world: "World", bld: "Building") -> Point | None:
    """A random point where a resident of *bld* may stand."""
    if bld.type == "river_area":
        return random_river_point(world)
    if round_home(bld):
        return random_point_in_disk(*bld.center, round_radius(bld))
    pad = HOME_PADDING
    return (bld.x + random.randint(int(pad), max(int(pad), int(bld.w - pad))),
            bld.y + random.randint(int(pad), max(int(pad), int(bld.h - pad))))


def _patrol_point(world: "World") -> Point | None:
    houses = buildings_of_type(world, "house")
    if not houses:
        return None
    cx, cy = houses[0][1].center
    for _ in range(10):
        angle = random.random() * math.tau
        radius = 80 + random.random() * 120
        x, y = cx + math.cos(angle) * radius, cy + math.sin(angle) * radius
        if not is_position_invalid(world, x, y):
            return (x, y)
    return None


def _hop_point(world: "World", pos: Position, flying: bool) -> Point | None:
    terrain = world.res(Terrain)
    if terrain is None:
        return None
    for _ in range(10):
        x = clamp(pos.x + random.randint(-120, 120), FENCE_PADDING, terrain.width - FENCE_PADDING)
        y = clamp(pos.y + random.randint(-120, 120), FENCE_PADDING, terrain.height - FENCE_PADDING)
        if not is_position_invalid(world, x, y, flying):
            return (x, y)
    return None


def pick_wander_target(world: "World", eid: int, home: "Building | None") -> Point | None:
    """Return the next stroll target for *eid*, or None to stay put.

    *home* is the building confining the creature this tick (None when
    homeless or teleported away).
    """
    species = world.get(eid, Creature).species
    flying = is_flying(species)

    if has_tag(species, "patrol"):
        return _patrol_point(world)
    if home is not None and not flying:
        return point_in_home(world, home)
    if is_river_kind(species):
        return random_river_point(world)
    return _hop_point(world, world.get(eid, Position), flying)
