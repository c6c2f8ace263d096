"""logic/abilities.py — Cooldown-gated automatic abilities.

``run_tick_ability`` is the single dispatch over the tick-driven ability
records in ``components.abilities``.  Each handler returns True when it
actually did something; only then does the creature pay the cooldown
and play its working animation.

Daily abilities are resolved by ``simulation.daily``; farm-wide ones
(protector, biter, healer, fossil accelerator) by the systems that own
those effects.
"""

from __future__ import annotations
import math
import random
from typing import TYPE_CHECKING

from components import (
    Position, Brain, Creature, Harvestable, CropPlot, Farmer,
)
from components.abilities import (
    ConsumeAndYield, WaterCrop, FertilizeCrop, HarvestAppleTree,
    HarvestWildPlant, ProduceItem, TICK_ABILITIES,
)
from core.constants import ACTION_ANIM_TIME
from core.geometry import distance, rect_contains
from logic.factory import log_activity
from logic.inventory_ops import add_item
from logic.residency import home_of
from logic.respawn import queue_respawn
from logic.species import ability_of

if TYPE_CHECKING:
    from core.ecs import World


def _first_resource(world: "World", type_: str) -> int | None:
    for eid, res in world.all_of(Harvestable):
        if res.type == type_:
            return eid
    return None


def _closest_plot(world: "World", pos: Position, wanted) -> tuple[int, CropPlot] | None:
    best = None
    best_d = math.inf
    for eid, ppos, plot in world.query(Position, CropPlot):
        if not wanted(plot):
            continue
        d = distance(ppos.x, ppos.y, pos.x, pos.y)
        if d < best_d:
            best, best_d = (eid, plot), d
    return best


def _grant(world: "World", item: str, amount: int = 1) -> None:
    farmer = world.res(Farmer)
    if farmer is not None:
        add_item(farmer.inventory, item, amount)


# ── Handlers ─────────────────────────────────────────────────────────

def _consume_and_yield(world, eid, ab: ConsumeAndYield) -> bool:
    target = _first_resource(world, ab.target)
    if target is None:
        return False
    world.kill(target)
    queue_respawn(world, "oak_tree")
    _grant(world, ab.item, ab.amount)
    return True


def _water_crop(world, eid, ab: WaterCrop) -> bool:
    found = _closest_plot(world, world.get(eid, Position),
                          lambda p: p.state == "growing" and not p.watered)
    if found is None:
        return False
    found[1].watered = True
    return True


def _fertilize_crop(world, eid, ab: FertilizeCrop) -> bool:
    found = _closest_plot(world, world.get(eid, Position),
                          lambda p: p.state == "growing" and not p.fertilized)
    if found is None:
        return False
    found[1].fertilized = True
    return True


def _harvest_apple_tree(world, eid, ab: HarvestAppleTree) -> bool:
    tree = _first_resource(world, "apple_tree")
    if tree is None:
        return False
    world.kill(tree)
    queue_respawn(world, "oak_tree")
    apples = random.randint(1, 3)
    _grant(world, "apple", apples)
    creature = world.get(eid, Creature)
    creature.counters["apples_harvested"] = creature.counters.get("apples_harvested", 0) + apples
    return True


def _harvest_wild_plant(world, eid, ab: HarvestWildPlant) -> bool:
    plant = _first_resource(world, "wild_plant")
    if plant is None:
        return False
    res = world.get(plant, Harvestable)
    _grant(world, "fiber" if res.state == "bush" else "flower")
    world.kill(plant)
    queue_respawn(world, "wild_plant")
    return True


def _produce_item(world, eid, ab: ProduceItem) -> bool:
    if ab.home_only:
        found = home_of(world, eid)
        if found is None:
            return False
        bld = found[1]
        pos = world.get(eid, Position)
        if not rect_contains(bld.x, bld.y, bld.w, bld.h, pos.x, pos.y):
            return False
    _grant(world, ab.item)
    return True


_HANDLERS = {
    ConsumeAndYield: _consume_and_yield,
    WaterCrop: _water_crop,
    FertilizeCrop: _fertilize_crop,
    HarvestAppleTree: _harvest_apple_tree,
    HarvestWildPlant: _harvest_wild_plant,
    ProduceItem: _produce_item,
}


def run_tick_ability(world: "World", eid: int) -> bool:
    """Fire *eid*'s tick ability if it is off cooldown and not busy."""
    creature = world.get(eid, Creature)
    brain = world.get(eid, Brain)
    if creature is None or brain is None:
        return False
    if brain.cooldown > 0 or brain.state == "working":
        return False
    ability = ability_of(creature.species)
    if not isinstance(ability, TICK_ABILITIES):
        return False

    if not _HANDLERS[type(ability)](world, eid, ability):
        return False

    brain.cooldown = ability.cooldown
    brain.state = "working"
    brain.action_timer = ACTION_ANIM_TIME
    log_activity(world, eid, "ability", type(ability).__name__, name=creature.name)
    return True
