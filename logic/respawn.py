"""logic/respawn.py — Timed, capped resource respawn.

Collected resources come back as ``Ticket``s on the ``RespawnQueue``.
Every tick the timers run down; an expired ticket turns into a new
harvestable only while its category is under the world cap, counting
spawns already approved in the same pass.  A capped ticket re-arms
with the retry delay instead of being dropped.
"""

from __future__ import annotations
import random
from typing import TYPE_CHECKING

from components import (
    Position, Harvestable, Creature, RespawnQueue, DailyLedger,
)
from core.events import EventBus, CreatureArrived
from core import tuning
from core.geometry import distance
from logic.factory import spawn_resource, spawn_creature
from logic.placement import find_spawn_point
from logic.species import family

if TYPE_CHECKING:
    from core.ecs import World


def category(type_: str) -> str | None:
    if type_.endswith("_tree"):
        return "tree"
    if type_ in ("rock", "wild_plant"):
        return type_
    return None


def cap_for(cat: str) -> int:
    if cat == "tree":
        return tuning.get("world", "max_trees", 40)
    if cat == "rock":
        return tuning.get("world", "max_rocks", 25)
    return tuning.get("world", "max_wild_plants", 30)


def category_counts(world: "World") -> dict[str, int]:
    counts = {"tree": 0, "rock": 0, "wild_plant": 0}
    for _, res in world.all_of(Harvestable):
        cat = category(res.type)
        if cat is not None:
            counts[cat] += 1
    return counts


def respawn_delay(type_: str) -> float:
    """Seconds before a collected *type_* is queued to come back."""
    key = {"oak_tree": "tree", "pine_tree": "tree"}.get(type_, type_)
    return float(tuning.get("respawn", key, tuning.get("respawn", "default", 1800)))


def queue_respawn(world: "World", type_: str) -> None:
    queue = world.res(RespawnQueue)
    if queue is not None:
        queue.push(type_, respawn_delay(type_))


def respawn_system(world: "World", dt: float) -> None:
    queue = world.res(RespawnQueue)
    if queue is None or not queue.tickets:
        return

    expired = []
    for ticket in queue.tickets:
        ticket.timer -= dt
        if ticket.timer <= 0:
            expired.append(ticket)
    if not expired:
        return

    counts = category_counts(world)
    retry = tuning.get("respawn", "retry", 10.0)

    for ticket in expired:
        cat = category(ticket.type)
        if cat is None:
            queue.tickets.remove(ticket)
            continue
        if counts[cat] >= cap_for(cat):
            ticket.timer = retry
            continue

        point = find_spawn_point(world, ticket.type)
        if point is None:
            ticket.timer = retry
            continue
        queue.tickets.remove(ticket)
        counts[cat] += 1

        type_ = ticket.type
        if type_ in ("oak_tree", "pine_tree") and \
                random.random() < tuning.get("respawn", "apple_upgrade_chance", 0.1):
            type_ = "apple_tree"
        eid = spawn_resource(world, type_, *point)
        if cat == "tree":
            _maybe_spawn_combee(world, eid)


def _maybe_spawn_combee(world: "World", tree_eid: int) -> None:
    """Bees follow new trees that land near flowering wild plants."""
    ledger = world.res(DailyLedger)
    if ledger is None or ledger.spawns.get("Combee", 0) >= 1:
        return
    bees = family("combee")
    if sum(1 for _, c in world.all_of(Creature) if c.species in bees) >= \
            tuning.get("respawn", "combee_max", 3):
        return

    tree = world.get(tree_eid, Position)
    radius = tuning.get("respawn", "combee_radius", 80.0)
    flowers = 0
    for _, pos, res in world.query(Position, Harvestable):
        if res.type == "wild_plant" and res.state == "flower" and \
                distance(pos.x, pos.y, tree.x, tree.y) < radius:
            flowers += 1
    if flowers < tuning.get("respawn", "combee_min_flowers", 2):
        return
    if random.random() >= tuning.get("respawn", "combee_chance", 0.25):
        return

    bee = spawn_creature(world, "Combee",
                         tree.x + random.randint(-20, 20),
                         tree.y + random.randint(-20, 20))
    ledger.spawns["Combee"] = ledger.spawns.get("Combee", 0) + 1
    bus = world.res(EventBus)
    if bus is not None:
        bus.emit(CreatureArrived(eid=bee, species="Combee",
                                 message="A Combee was drawn in by the flowers!"))
    print(f"[SPAWN] Combee buzzed in near tree {tree_eid}")
