"""logic/placement.py — Where things may go.

Two checks share the terrain rules:

``is_position_invalid``  point test used by every spawn search and by
                         homeless-creature confinement
``check_placement``      footprint test for construction; pure, so a
                         presentation layer can call it every frame for
                         a live preview

The spawn-point searches (``find_spawn_point``, ``random_valid_point``,
``random_river_point``) are bounded rejection samplers; they return
None instead of retrying forever.
"""

from __future__ import annotations
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator

from components import Building, Terrain, FertileZone
from core.constants import STRUCT_PADDING, BOUNDARY_PADDING, SPAWN_MARGIN
from core.geometry import (
    Point, point_in_polygon, rect_contains, rects_overlap, bounding_box,
    random_point_in, distance,
)

if TYPE_CHECKING:
    from core.ecs import World


@dataclass(frozen=True, slots=True)
class PlacementResult:
    clear: bool
    message: str = ""


def structures(world: "World") -> Iterator[tuple[int, Building]]:
    """Every building that blocks space (the river area doesn't)."""
    for eid, bld in world.all_of(Building):
        if bld.type != "river_area":
            yield eid, bld


def in_fertile_zone(zone: FertileZone, x: float, y: float) -> bool:
    if zone.shape == "poly":
        return point_in_polygon((x, y), zone.points)
    return distance(x, y, *zone.center) < zone.radius


def is_position_invalid(world: "World", x: float, y: float,
                        flying: bool = False) -> bool:
    """True when (x, y) is on water, in the quarry, or near a structure.

    Flying creatures go anywhere.
    """
    if flying:
        return False
    for _, bld in structures(world):
        if rect_contains(bld.x, bld.y, bld.w, bld.h, x, y, STRUCT_PADDING):
            return True
    terrain = world.res(Terrain)
    if terrain is not None:
        for special in terrain.specials:
            if point_in_polygon((x, y), special.points):
                return True
    return False


def check_placement(world: "World", x: float, y: float, w: float, h: float,
                    type_: str | None) -> PlacementResult:
    """Can a *type_* building with top-left (x, y) and size w×h go here?"""
    terrain = world.res(Terrain)
    if terrain is None:
        return PlacementResult(False, "No terrain loaded.")
    x2, y2 = x + w, y + h
    quarry = terrain.special("quarry")

    if type_ == "mine":
        if quarry is None:
            return PlacementResult(False, "There is no quarry on this map.")
        if not point_in_polygon((x + w / 2, y + h / 2), quarry.points):
            return PlacementResult(False, "A mine must be built on the quarry.")

    if (x < BOUNDARY_PADDING or x2 > terrain.width - BOUNDARY_PADDING
            or y < BOUNDARY_PADDING or y2 > terrain.height - BOUNDARY_PADDING):
        return PlacementResult(False, "You can't build outside the farm.")

    checkpoints = [(x, y), (x2, y), (x, y2), (x2, y2), (x + w / 2, y + h / 2)]
    for point in checkpoints:
        for special in terrain.specials:
            if not point_in_polygon(point, special.points):
                continue
            if special.kind == "quarry":
                if type_ != "mine":
                    return PlacementResult(False, "You can't build on the quarry.")
            else:
                return PlacementResult(False, "You can't build on the water.")
        for zone in terrain.fertile_zones:
            if in_fertile_zone(zone, *point):
                return PlacementResult(False, "You can't build on fertile soil.")

    for _, bld in structures(world):
        if rects_overlap((x, y, w, h), bld.rect):
            return PlacementResult(False, "That space is already taken.")

    return PlacementResult(True)


# ── Spawn-point searches ─────────────────────────────────────────────

def random_valid_point(world: "World", attempts: int = 100,
                       margin: float = SPAWN_MARGIN,
                       flying: bool = False) -> Point | None:
    terrain = world.res(Terrain)
    if terrain is None:
        return None
    for _ in range(attempts):
        x = random.randint(int(margin), int(terrain.width - margin))
        y = random.randint(int(margin), int(terrain.height - margin))
        if not is_position_invalid(world, x, y, flying):
            return (x, y)
    return None


def _point_in_random_fertile_zone(world: "World", attempts: int = 50) -> Point | None:
    terrain = world.res(Terrain)
    if terrain is None or not terrain.fertile_zones:
        return None
    zone = random.choice(terrain.fertile_zones)
    if zone.shape != "poly" or not zone.points:
        return None
    min_x, min_y, max_x, max_y = bounding_box(zone.points)
    for _ in range(attempts):
        x = random.randint(int(min_x), int(max_x))
        y = random.randint(int(min_y), int(max_y))
        if point_in_polygon((x, y), zone.points) and not is_position_invalid(world, x, y):
            return (x, y)
    return None


def find_spawn_point(world: "World", type_: str) -> Point | None:
    """Shared search for resource spawns (generation and respawn).

    Trees try a random fertile zone first half of the time.
    """
    if type_.endswith("_tree") and random.random() < 0.5:
        point = _point_in_random_fertile_zone(world)
        if point is not None:
            return point
    return random_valid_point(world)


def random_river_point(world: "World") -> Point | None:
    terrain = world.res(Terrain)
    if terrain is None:
        return None
    river = terrain.special("river")
    if river is None:
        return None
    return random_point_in(river.points)


def in_river(world: "World", x: float, y: float) -> bool:
    terrain = world.res(Terrain)
    river = terrain.special("river") if terrain else None
    return river is not None and point_in_polygon((x, y), river.points)
