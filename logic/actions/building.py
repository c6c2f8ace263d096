"""logic/actions/building.py — Placing and demolishing buildings."""

from __future__ import annotations
import random
from typing import TYPE_CHECKING

from components import (
    Position, Creature, Home, Building, Harvestable, Farmer, GameClock,
)
from core.events import EventBus, CreatureArrived, CreatureEscaped
from data.buildings import BUILDINGS, DEFAULT_SIZE, DEFAULT_COST
from logic.actions import ActionResult
from logic.factory import spawn_building, spawn_creature, lay_plot_grid, plots_in
from logic.inventory_ops import has_items, remove_items
from logic.placement import check_placement
from logic.residency import residents_of, buildings_of_type, has_room
from logic.species import family, species_for_hour

if TYPE_CHECKING:
    from core.ecs import World

ROTATIONS = (0, 90, 180, 270)


def footprint(type_: str, rotation: int = 0) -> tuple[float, float]:
    """Size of *type_* as placed; 90°/270° swap width and height."""
    w, h = BUILDINGS.get(type_, {}).get("size", DEFAULT_SIZE)
    if rotation in (90, 270):
        return h, w
    return w, h


def _emit(world: "World", event) -> None:
    bus = world.res(EventBus)
    if bus is not None:
        bus.emit(event)


def _clear_footprint(world: "World", bld: Building) -> int:
    removed = 0
    for eid, pos, _ in world.query(Position, Harvestable):
        if bld.x <= pos.x <= bld.x + bld.w and bld.y <= pos.y <= bld.y + bld.h:
            world.kill(eid)
            removed += 1
    return removed


def _move_in_founders(world: "World", type_: str, bld_eid: int, bld: Building) -> list[int]:
    clock = world.res(GameClock)
    hour = clock.hour if clock else 12
    arrived = []
    for species, chance, homed, timed in BUILDINGS[type_].get("founders", []):
        if random.random() >= chance:
            continue
        if timed:
            species = species_for_hour(species, hour)
        x = bld.x + random.randint(20, max(20, int(bld.w) - 20))
        y = bld.y + random.randint(20, max(20, int(bld.h) - 20))
        power = random.randint(1, 10) if species == "Machop" else None
        eid = spawn_creature(world, species, x, y, bld_eid if homed else None, power=power)
        creature = world.get(eid, Creature)
        shiny = " shiny" if creature.shiny else ""
        _emit(world, CreatureArrived(
            eid=eid, species=species, shiny=creature.shiny,
            message=f"A{shiny} {species} moved into the new {bld.type.replace('_', ' ')}!"))
        arrived.append(eid)
    return arrived


def place_building(world: "World", x: float, y: float, type_: str,
                   rotation: int = 0) -> ActionResult:
    """Build *type_* centred on (x, y).

    ``stable_miltank`` / ``stable_mareep`` place a ``stable`` tagged
    with its resident species.
    """
    spec = BUILDINGS.get(type_)
    if spec is None or not spec.get("buildable", False):
        return ActionResult(False, f"{type_} can't be built.")
    if rotation not in ROTATIONS:
        return ActionResult(False, "Rotation must be 0, 90, 180 or 270.")

    w, h = footprint(type_, rotation)
    left, top = int(x - w / 2), int(y - h / 2)
    placement = check_placement(world, left, top, w, h, type_)
    if not placement.clear:
        return ActionResult(False, placement.message)

    farmer = world.res(Farmer)
    cost = spec.get("cost", DEFAULT_COST)
    if farmer.money < cost["money"] or not has_items(farmer.inventory, cost["items"]):
        return ActionResult(False, "Not enough resources!")
    farmer.money -= cost["money"]
    remove_items(farmer.inventory, cost["items"])

    base = spec.get("base", type_)
    storage = {"species": spec["species"]} if "species" in spec else {}
    bld_eid = spawn_building(world, base, left, top, w, h, rotation, storage)
    bld = world.get(bld_eid, Building)
    cleared = _clear_footprint(world, bld)
    if base == "farm_area":
        lay_plot_grid(world, bld_eid)
    founders = _move_in_founders(world, type_, bld_eid, bld)

    print(f"[BUILD] {type_} placed at ({left}, {top}) rot={rotation}, "
          f"cleared {cleared} resources, {len(founders)} founders")
    return ActionResult(True, f"Built a {base.replace('_', ' ')}.", bld_eid)


# ── Demolition ───────────────────────────────────────────────────────


def _leave_farm(world: "World", eid: int) -> None:
    farmer = world.res(Farmer)
    if farmer is not None and eid in farmer.team:
        farmer.team.remove(eid)
    world.kill(eid)


def destroy_building(world: "World", building_id: int) -> ActionResult:
    """Demolish a building.

    Residents move to another building of the same type with room;
    otherwise they leave the farm with one ``CreatureEscaped`` each.
    A lake's Squirtle line always leaves with it.  A farm area takes
    its crop plots with it.
    """
    bld = world.get(building_id, Building)
    if bld is None:
        return ActionResult(False, "That building doesn't exist.")
    if not BUILDINGS.get(bld.type, {}).get("buildable", True) and bld.type != "stable":
        return ActionResult(False, f"The {bld.type.replace('_', ' ')} can't be demolished.")

    species_tag = bld.storage.get("species") if bld.type == "stable" else None
    candidates = [(eid, b) for eid, b in buildings_of_type(world, bld.type, species_tag)
                  if eid != building_id]
    squirtles = family("squirtle")

    relocated = escaped = 0
    for eid in residents_of(world, building_id):
        creature = world.get(eid, Creature)
        if bld.type == "lake" and creature.species in squirtles:
            _leave_farm(world, eid)
            continue
        for home_eid, _ in candidates:
            if has_room(world, home_eid):
                world.get(eid, Home).building_id = home_eid
                relocated += 1
                break
        else:
            _leave_farm(world, eid)
            escaped += 1
            _emit(world, CreatureEscaped(
                eid=eid, name=creature.name, species=creature.species,
                message=f"{creature.name} ran away, it has no home."))

    if bld.type == "farm_area":
        for plot in plots_in(world, bld):
            world.kill(plot)
    world.kill(building_id)

    print(f"[BUILD] {bld.type} {building_id} destroyed: "
          f"{relocated} relocated, {escaped} escaped")
    return ActionResult(True, f"Demolished the {bld.type.replace('_', ' ')}.")
