"""logic/actions/farming.py — Crop plots and harvestable resources."""

from __future__ import annotations
import random
from typing import TYPE_CHECKING

from components import (
    Position, Creature, CropPlot, Harvestable, Farmer, DailyLedger, GameClock,
)
from core import tuning
from core.constants import PLOT_MATURE_DAYS
from core.events import EventBus, CreatureArrived
from data.species import SEEDS, RESOURCE_CREATURES
from logic.actions import ActionResult
from logic.factory import spawn_creature, log_activity
from logic.inventory_ops import add_item, consume_item
from logic.respawn import queue_respawn
from logic.species import species_for_hour

if TYPE_CHECKING:
    from core.ecs import World


def _plot(world: "World", plot_id: int) -> CropPlot | None:
    return world.get(plot_id, CropPlot)


# ── Crop plots ───────────────────────────────────────────────────────

def plant_seed(world: "World", plot_id: int, seed: str) -> ActionResult:
    plot = _plot(world, plot_id)
    if plot is None:
        return ActionResult(False, "That plot doesn't exist.")
    if seed not in SEEDS:
        return ActionResult(False, f"{seed} isn't a seed.")
    if plot.state != "empty":
        return ActionResult(False, "Something is already growing there.")
    farmer = world.res(Farmer)
    if not consume_item(farmer.inventory, seed, 1):
        return ActionResult(False, f"You don't have any {seed.replace('_', ' ')}.")
    plot.plant(seed, tuning.get("crops", "mature_days", PLOT_MATURE_DAYS))
    return ActionResult(True, "Planted.", plot_id)


def apply_fertilizer(world: "World", plot_id: int) -> ActionResult:
    plot = _plot(world, plot_id)
    if plot is None:
        return ActionResult(False, "That plot doesn't exist.")
    if plot.state != "growing" or plot.fertilized:
        return ActionResult(False, "Only a growing, unfertilized plot can be fertilized.")
    farmer = world.res(Farmer)
    cost = tuning.get("farmer", "fertilize_energy", 5)
    if farmer.energy < cost:
        return ActionResult(False, "Not enough energy!")
    if not consume_item(farmer.inventory, "fertilizer", 1):
        return ActionResult(False, "You need fertilizer.")
    farmer.energy -= cost
    plot.fertilized = True
    return ActionResult(True, "Fertilized.", plot_id)


def harvest_plot(world: "World", plot_id: int) -> ActionResult:
    """Pick a mature plot; fertilized plots double up more often."""
    plot = _plot(world, plot_id)
    if plot is None:
        return ActionResult(False, "That plot doesn't exist.")
    if plot.state != "mature" or not plot.crop:
        return ActionResult(False, "Nothing is ready to harvest.")
    if plot.fertilized:
        chance = tuning.get("crops", "fertilized_double_chance", 0.30)
    else:
        chance = tuning.get("crops", "double_chance", 0.15)
    amount = 2 if random.random() < chance else 1
    crop = plot.crop.removeprefix("seed_")
    add_item(world.res(Farmer).inventory, crop, amount)
    plot.reset()
    return ActionResult(True, f"Harvested {amount} {crop.replace('_', ' ')}.", plot_id)


# ── Harvestables ─────────────────────────────────────────────────────

def collect_cost(type_: str) -> int | None:
    """Energy to collect *type_*, or None if it can't be collected."""
    if type_ == "wild_plant":
        return tuning.get("collect", "wild_plant_energy", 5)
    if type_ == "apple_tree":
        return tuning.get("collect", "apple_tree_energy", 10)
    if type_.endswith("_tree"):
        return tuning.get("collect", "tree_energy", 8)
    if type_ == "rock":
        return tuning.get("collect", "rock_energy", 10)
    return None


def _yield(farmer: Farmer, res: Harvestable) -> dict[str, int]:
    got: dict[str, int] = {}
    if res.type == "wild_plant":
        got["fiber" if res.state == "bush" else "flower"] = 1
    elif res.type == "apple_tree":
        got["apple"] = random.randint(1, 3)
    elif res.is_tree:
        got["wood"] = random.randint(1, 3)
    elif res.type == "rock":
        got["stone"] = random.randint(1, 3)
        if random.random() < tuning.get("collect", "metal_chance", 0.05):
            got["metal"] = 1
    for item, n in got.items():
        add_item(farmer.inventory, item, n)
    return got


def _maybe_attract(world: "World", res: Harvestable, pos: Position) -> int | None:
    """Collecting sometimes draws out a wild creature, once per species per day."""
    base = RESOURCE_CREATURES.get(res.type)
    if base is None:
        return None
    clock = world.res(GameClock)
    species = species_for_hour(base, clock.hour if clock else 12)
    ledger = world.res(DailyLedger)
    if ledger.resource_spawns.get(species):
        return None
    if random.random() >= tuning.get("collect", "creature_chance", 0.15):
        return None
    ledger.resource_spawns[species] = True
    eid = spawn_creature(world, species,
                         pos.x + random.randint(-15, 15), pos.y + random.randint(-15, 15))
    shiny = "shiny " if world.get(eid, Creature).shiny else ""
    bus = world.res(EventBus)
    if bus is not None:
        bus.emit(CreatureArrived(eid=eid, species=species, shiny=bool(shiny),
                                 message=f"A wild {shiny}{species} appeared!"))
    return eid


def collect_resource(world: "World", resource_id: int) -> ActionResult:
    res = world.get(resource_id, Harvestable)
    pos = world.get(resource_id, Position)
    if res is None or pos is None:
        return ActionResult(False, "There's nothing to collect there.")
    cost = collect_cost(res.type)
    if cost is None:
        return ActionResult(False, f"{res.type} can't be collected.")
    farmer = world.res(Farmer)
    if farmer.energy < cost:
        return ActionResult(False, "Not enough energy!")

    farmer.energy -= cost
    got = _yield(farmer, res)
    world.kill(resource_id)
    queue_respawn(world, res.type)
    log_activity(world, resource_id, "collect", f"collected {res.type}", details=got)

    spawned = _maybe_attract(world, res, pos)
    summary = ", ".join(f"{n} {item}" for item, n in got.items())
    return ActionResult(True, f"Collected {summary}.", spawned)
