"""logic/actions/creatures.py — Commands that act on individual creatures."""

from __future__ import annotations
import random
from typing import TYPE_CHECKING

from components import Creature, Happiness, Modifier, Building, Farmer, FarmFlags
from core import tuning
from core.constants import TEAM_SIZE, HAPPINESS_MIN, HAPPINESS_MAX
from core.events import EventBus, CreatureArrived, CreatureEvolved
from data.species import FOSSILS, STARTERS
from logic.actions import ActionResult
from logic.factory import spawn_creature, set_species
from logic.inventory_ops import consume_item
from logic.residency import buildings_of_type, residents_of
from logic.species import next_evolution, family

if TYPE_CHECKING:
    from core.ecs import World

TEAM_BONUS_KEY = "Team Bonus"
TEAM_BONUS = 10


def _emit(world: "World", event) -> None:
    bus = world.res(EventBus)
    if bus is not None:
        bus.emit(event)


def evolve_creature(world: "World", creature_id: int) -> ActionResult:
    creature = world.get(creature_id, Creature)
    if creature is None:
        return ActionResult(False, "That creature isn't on the farm.")
    target = next_evolution(creature.species)
    if target is None:
        return ActionResult(False, f"{creature.species} doesn't evolve.")
    if not consume_item(world.res(Farmer).inventory, "evolution_stone", 1):
        return ActionResult(False, "You need an evolution stone!")

    old_name, old_species = creature.name, creature.species
    set_species(world, creature_id, target)
    creature.age = 0
    _emit(world, CreatureEvolved(eid=creature_id, old_species=old_species, new_species=target,
                                 message=f"Congratulations! Your {old_name} evolved into {target}!"))
    return ActionResult(True, f"{old_name} evolved into {target}!", creature_id)


def choose_starter(world: "World", species: str) -> ActionResult:
    """One-time pick of the first companion, homed in the farmhouse."""
    flags = world.res(FarmFlags)
    if flags.chose_starter:
        return ActionResult(False, "You already have a starter.")
    if species not in STARTERS:
        return ActionResult(False, f"Choose one of: {', '.join(STARTERS)}.")
    houses = buildings_of_type(world, "house")
    if not houses:
        return ActionResult(False, "There's no farmhouse.")

    house_eid, house = houses[0]
    shiny = random.random() < tuning.get("creatures", "starter_shiny_chance", 0.005)
    eid = spawn_creature(world, species, house.x + house.w / 2, house.y + house.h + 10,
                         house_eid, shiny=shiny)
    flags.chose_starter = True
    prefix = "a shiny " if shiny else "your new "
    _emit(world, CreatureArrived(eid=eid, species=species, shiny=shiny,
                                 message=f"You and {prefix}{species} are ready to begin!"))
    return ActionResult(True, f"{species} joined you.", eid)


def release_creature(world: "World", creature_id: int) -> ActionResult:
    creature = world.get(creature_id, Creature)
    if creature is None:
        return ActionResult(False, "That creature isn't on the farm.")
    farmer = world.res(Farmer)
    if creature_id in farmer.team:
        farmer.team.remove(creature_id)
    world.kill(creature_id)
    return ActionResult(True, f"{creature.name} was released back into the wild.")


def rename_creature(world: "World", creature_id: int, name: str) -> ActionResult:
    creature = world.get(creature_id, Creature)
    if creature is None:
        return ActionResult(False, "That creature isn't on the farm.")
    name = name.strip()
    if not name:
        return ActionResult(False, "A name can't be empty.")
    creature.name = name
    return ActionResult(True, f"Renamed to {name}.", creature_id)


def set_team(world: "World", creature_ids: list[int]) -> ActionResult:
    """Replace the team; joiners gain and leavers lose a one-shot bonus."""
    if len(creature_ids) > TEAM_SIZE:
        return ActionResult(False, f"A team holds at most {TEAM_SIZE} creatures.")
    if len(set(creature_ids)) != len(creature_ids):
        return ActionResult(False, "A creature can only take one team slot.")
    for eid in creature_ids:
        if world.get(eid, Creature) is None:
            return ActionResult(False, "That creature isn't on the farm.")

    farmer = world.res(Farmer)
    old, new = set(farmer.team), set(creature_ids)
    for eid in new - old:
        hap = world.get(eid, Happiness)
        if hap is not None:
            hap.value = min(HAPPINESS_MAX, hap.value + TEAM_BONUS)
            hap.modifiers[TEAM_BONUS_KEY] = Modifier(TEAM_BONUS)
    for eid in old - new:
        hap = world.get(eid, Happiness)
        if hap is not None:
            hap.value = max(HAPPINESS_MIN, hap.value - TEAM_BONUS)
            hap.modifiers.pop(TEAM_BONUS_KEY, None)
    farmer.team = list(creature_ids)
    return ActionResult(True, "Team saved.")


def meditate(world: "World", building_id: int) -> ActionResult:
    """Meditate at a lake; sometimes an Abra is drawn to it."""
    lake = world.get(building_id, Building)
    if lake is None or lake.type != "lake":
        return ActionResult(False, "You can only meditate at a lake.")
    farmer = world.res(Farmer)
    cost = tuning.get("farmer", "meditate_energy", 5)
    if farmer.energy < cost:
        return ActionResult(False, "Not enough energy to meditate.")
    abras = family("abra")
    if any(world.get(e, Creature).species in abras for e in residents_of(world, building_id)):
        return ActionResult(False, "The psychic presence at this lake is already strong.")

    farmer.energy -= cost
    if random.random() >= tuning.get("creatures", "abra_chance", 0.10):
        return ActionResult(True, "You meditated deeply, feeling the calm of the lake.")
    cx, cy = lake.center
    eid = spawn_creature(world, "Abra", cx, cy, building_id)
    shiny = world.get(eid, Creature).shiny
    msg = "Your meditation attracted a shiny Abra!" if shiny else \
        "Your meditation attracted an Abra to the lake!"
    _emit(world, CreatureArrived(eid=eid, species="Abra", shiny=shiny, message=msg))
    return ActionResult(True, msg, eid)


def start_fossil_revival(world: "World", building_id: int, fossil: str) -> ActionResult:
    lab = world.get(building_id, Building)
    if lab is None or lab.type != "laboratory":
        return ActionResult(False, "Fossils can only be revived in a laboratory.")
    if lab.storage.get("fossil"):
        return ActionResult(False, "This laboratory is already reviving a fossil.")
    if fossil not in FOSSILS:
        return ActionResult(False, f"{fossil} isn't a fossil.")
    if not consume_item(world.res(Farmer).inventory, fossil, 1):
        return ActionResult(False, f"You don't have a {fossil.replace('_', ' ')}.")
    lab.storage["fossil"] = fossil
    lab.storage["progress"] = 0.0
    return ActionResult(True, f"Revival of the {fossil.replace('_', ' ')} has begun!")
