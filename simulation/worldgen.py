"""simulation/worldgen.py — New-farm terrain and starting layout.

Runs once per new game, in order:

  1. river ribbon and quarry blob (``Terrain.specials``)
  2. fertile zones by rejection sampling
  3. the river area building that homes river creatures
  4. house + first farm area, placed jointly
  5. the farm area's crop-plot grid
  6. starting trees, rocks and wild plants
  7. cosmetic decorations

Usage::

    from simulation.worldgen import generate_world
    generate_world(world)          # world already holds an empty Terrain
"""

from __future__ import annotations
import random
from typing import TYPE_CHECKING

from components import Terrain, Special, FertileZone, Decoration
from core import tuning
from core.geometry import (
    organic_polygon, river_ribbon, bounding_box, distance,
)
from data.buildings import BUILDINGS
from logic.factory import spawn_building, spawn_resource, lay_plot_grid
from logic.placement import (
    check_placement, find_spawn_point, is_position_invalid, random_valid_point,
)

if TYPE_CHECKING:
    from core.ecs import World

DECORATION_KINDS = ("grass", "flower_patch", "pebble", "mushroom")


# ── Terrain features ─────────────────────────────────────────────────

def make_quarry(width: float, height: float) -> list[tuple[float, float]]:
    """Organic blob hugging one of the four corners."""
    corner = random.randint(0, 3)
    avg_radius = 220 + random.random() * 40
    margin = avg_radius + 50
    cx = margin if corner in (0, 3) else width - margin
    cy = margin if corner in (0, 1) else height - margin
    return organic_polygon((cx, cy), avg_radius, 16, 0.45)


def make_fertile_zones(world: "World", count: int) -> list[FertileZone]:
    """Place up to *count* fertile blobs clear of water, quarry and each other."""
    terrain = world.res(Terrain)
    zones: list[FertileZone] = []
    attempts = 0
    while len(zones) < count and attempts < 200:
        attempts += 1
        radius = 150 + random.random() * 50
        cx = random.randint(int(radius), int(terrain.width - radius))
        cy = random.randint(int(radius), int(terrain.height - radius))
        if is_position_invalid(world, cx, cy):
            continue
        if any(distance(cx, cy, *z.center) < radius + z.radius
               for z in zones):
            continue
        points = organic_polygon((cx, cy), radius, 12, 0.4)
        if any(is_position_invalid(world, px, py) for px, py in points):
            continue
        zones.append(FertileZone("poly", (cx, cy), radius, points))
    return zones


def _place_river_area(world: "World", river: Special) -> int:
    min_x, min_y, max_x, max_y = bounding_box(river.points)
    return spawn_building(world, "river_area", min_x, min_y,
                          max_x - min_x, max_y - min_y)


def _place_homestead(world: "World") -> tuple[int, int]:
    terrain = world.res(Terrain)
    hw, hh = BUILDINGS["house"]["size"]
    fw, fh = BUILDINGS["farm_area"]["size"]

    spot = None
    for _ in range(100):
        hx = random.randint(200, terrain.width - 400)
        hy = random.randint(200, terrain.height - 400)
        if not check_placement(world, hx, hy, hw, hh, None).clear:
            continue
        if not check_placement(world, hx, hy + hh + 20, fw, fh, None).clear:
            continue
        spot = (hx, hy)
        break
    if spot is None:
        print("[WORLD] No clear homestead spot, using fallback")
        spot = (terrain.width / 2 - 200, terrain.height / 2)

    hx, hy = spot
    house = spawn_building(world, "house", hx, hy, hw, hh)
    farm = spawn_building(world, "farm_area", hx, hy + hh + 20, fw, fh)
    return house, farm


def _scatter_resources(world: "World") -> int:
    counts = (
        ("oak_tree", tuning.get("world", "initial_oak_trees", 15)),
        ("pine_tree", tuning.get("world", "initial_pine_trees", 10)),
        ("rock", tuning.get("world", "initial_rocks", 15)),
        ("wild_plant", tuning.get("world", "initial_wild_plants", 15)),
    )
    placed = 0
    for type_, n in counts:
        for _ in range(n):
            point = find_spawn_point(world, type_)
            if point is not None:
                spawn_resource(world, type_, *point, day=1)
                placed += 1
    return placed


def _scatter_decorations(world: "World") -> None:
    terrain = world.res(Terrain)
    for _ in range(tuning.get("world", "decorations", 60)):
        point = random_valid_point(world, attempts=20)
        if point is None:
            continue
        terrain.decorations.append(Decoration(
            kind=random.choice(DECORATION_KINDS),
            x=point[0], y=point[1],
            size=random.uniform(0.6, 1.4),
            shape_variant=random.randint(0, 2),
            size_variant=random.randint(0, 2),
        ))


def generate_world(world: "World") -> dict[str, int]:
    """Populate *world*'s terrain and starting entities.

    Returns the ids of the generated fixtures (``house``, ``farm_area``,
    ``river_area``).
    """
    terrain = world.res(Terrain)
    if terrain is None:
        terrain = Terrain(width=tuning.get("world", "width", 2400),
                          height=tuning.get("world", "height", 1600))
        world.set_res(terrain)

    terrain.specials.append(Special("river", river_ribbon(terrain.width, terrain.height)))
    terrain.specials.append(Special("quarry", make_quarry(terrain.width, terrain.height)))
    terrain.fertile_zones = make_fertile_zones(world, tuning.get("world", "fertile_zones", 2))

    river_area = _place_river_area(world, terrain.specials[0])
    house, farm = _place_homestead(world)
    plots = lay_plot_grid(world, farm)
    placed = _scatter_resources(world)
    _scatter_decorations(world)

    print(f"[WORLD] Generated {terrain.width}x{terrain.height} farm: "
          f"{len(terrain.fertile_zones)} fertile zones, {len(plots)} plots, "
          f"{placed} resources, {len(terrain.decorations)} decorations")
    return {"house": house, "farm_area": farm, "river_area": river_area}
