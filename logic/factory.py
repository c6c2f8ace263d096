"""logic/factory.py — Entity spawning.

One function per entity kind so generation, respawn, commands and the
save/load bridge all build entities the same way.  Each accepts an
optional ``eid`` to restore a specific id.
"""

from __future__ import annotations
import random
from typing import TYPE_CHECKING

from components import (
    Position, Brain, Home, Teleporter, Creature, Happiness,
    Building, Harvestable, CropPlot, Farmer, DevLog, GameClock,
)
from core.constants import (
    PLOT_COLS, PLOT_ROWS, PLOT_SPACING, PLOT_MATURE_DAYS,
)
from core.geometry import rotate_about
from logic import species as sp

if TYPE_CHECKING:
    from core.ecs import World


def log_activity(world: "World", eid: int, cat: str, msg: str, name: str = "",
                 details: dict | None = None) -> None:
    log = world.res(DevLog)
    if log is None:
        return
    clock = world.res(GameClock)
    log.record(eid, cat, msg, name=name, t=clock.time if clock else 0.0,
               details=details)


# ── Creatures ────────────────────────────────────────────────────────

def spawn_creature(world: "World", species: str, x: float, y: float,
                   home_id: int | None = None, *,
                   shiny: bool | None = None,
                   undying: bool = False,
                   gender: str | None = None,
                   is_new: bool = True,
                   power: int | None = None,
                   eid: int | None = None) -> int:
    """Create a creature of *species* at (x, y).

    ``shiny=None`` rolls against the farmer's lucky skill.
    """
    if shiny is None:
        farmer = world.res(Farmer)
        shiny = sp.roll_shiny(farmer.skills.lucky if farmer else 0)

    eid = world.spawn(eid)
    world.add(eid, Position(float(x), float(y)))
    world.add(eid, Creature(
        species=species,
        shiny=shiny,
        gender=gender or sp.roll_gender(species),
        max_age=sp.lifespan(species),
        undying=undying,
        is_new=is_new,
        power=power,
    ))
    world.add(eid, Brain(speed=sp.speed_of(species)))
    world.add(eid, Home(home_id))
    world.add(eid, Happiness())
    if sp.has_tag(species, "teleport"):
        world.add(eid, Teleporter(timer=random.uniform(30.0, 60.0)))

    log_activity(world, eid, "spawn", f"{species} arrived" + (" (shiny)" if shiny else ""),
                 name=species, details={"home": home_id})
    return eid


def set_species(world: "World", eid: int, species: str) -> None:
    """Re-point *eid* at *species* (evolution, day/night swap)."""
    creature = world.get(eid, Creature)
    if creature is None:
        return
    renamed = creature.name == creature.species
    creature.species = species
    if renamed:
        creature.name = species
    creature.max_age = sp.lifespan(species)
    brain = world.get(eid, Brain)
    if brain is not None:
        brain.speed = sp.speed_of(species)
    if sp.has_tag(species, "teleport"):
        if not world.has(eid, Teleporter):
            world.add(eid, Teleporter(timer=random.uniform(30.0, 60.0)))
    else:
        world.remove(eid, Teleporter)


# ── Buildings ────────────────────────────────────────────────────────

def spawn_building(world: "World", type_: str, x: float, y: float,
                   w: float, h: float, rotation: int = 0,
                   storage: dict | None = None, *,
                   eid: int | None = None) -> int:
    """Create a building with top-left (x, y) and footprint w×h as placed."""
    eid = world.spawn(eid)
    world.add(eid, Building(type_, float(x), float(y), float(w), float(h),
                            int(rotation), dict(storage or {})))
    return eid


# ── Harvestables ─────────────────────────────────────────────────────

def spawn_resource(world: "World", type_: str, x: float, y: float, *,
                   day: int | None = None,
                   eid: int | None = None) -> int:
    """Create a tree, rock or wild plant at (x, y).

    Wild plants start as bushes and record *day* so the daily cycle can
    flower them.
    """
    eid = world.spawn(eid)
    world.add(eid, Position(float(x), float(y)))
    res = Harvestable(
        type=type_,
        size=random.uniform(0.8, 1.2),
        shape_variant=random.randint(0, 2),
        size_variant=random.randint(0, 2),
    )
    if type_ == "wild_plant":
        if day is None:
            clock = world.res(GameClock)
            day = clock.day if clock else 1
        res.spawn_day = day
        res.state = "bush"
    world.add(eid, res)
    return eid


# ── Crop plots ───────────────────────────────────────────────────────

def spawn_plot(world: "World", x: float, y: float, rotation: int = 0, *,
               eid: int | None = None) -> int:
    eid = world.spawn(eid)
    world.add(eid, Position(float(x), float(y)))
    world.add(eid, CropPlot(mature_days=PLOT_MATURE_DAYS, rotation=int(rotation)))
    return eid


def plot_grid_points(bld: Building) -> list[tuple[float, float]]:
    """Centres of the 5×3 plot grid for a farm area, rotated with it."""
    cx, cy = bld.center
    grid_w = (PLOT_COLS - 1) * PLOT_SPACING
    grid_h = (PLOT_ROWS - 1) * PLOT_SPACING
    points = []
    for row in range(PLOT_ROWS):
        for col in range(PLOT_COLS):
            ox = col * PLOT_SPACING - grid_w / 2
            oy = row * PLOT_SPACING - grid_h / 2
            rx, ry = rotate_about(ox, oy, bld.rotation)
            points.append((cx + rx, cy + ry))
    return points


def lay_plot_grid(world: "World", farm_eid: int) -> list[int]:
    """Spawn the crop-plot grid inside farm area *farm_eid*."""
    bld = world.get(farm_eid, Building)
    if bld is None:
        return []
    return [spawn_plot(world, x, y, bld.rotation) for x, y in plot_grid_points(bld)]


def plots_in(world: "World", bld: Building) -> list[int]:
    """Crop plots whose centre lies inside *bld*'s footprint."""
    out = []
    for eid, pos, _ in world.query(Position, CropPlot):
        if bld.x <= pos.x <= bld.x + bld.w and bld.y <= pos.y <= bld.y + bld.h:
            out.append(eid)
    return out

