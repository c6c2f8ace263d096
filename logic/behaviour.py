"""logic/behaviour.py — Per-tick creature state machine.

For every creature, in order:

  1. scheduled death (mourning, ghost roll, team removal)
  2. cooldown bookkeeping; sleeping creatures stop here
  3. working-pose timer and the Abra-line teleport cycle
  4. tick ability (``logic.abilities``)
  5. movement toward the current target
  6. confinement to home, river or fence
  7. idle wander (``logic.wander``)

Usage::

    from logic.behaviour import creature_system
    creature_system(world, dt)
"""

from __future__ import annotations
import math
import random
from typing import TYPE_CHECKING

from components import (
    Position, Brain, Creature, Happiness, Modifier, Teleporter,
    Farmer, Terrain, GameClock,
)
from core import tuning
from core.constants import (
    ARRIVAL_RADIUS, FENCE_PADDING, HOME_PADDING, WANDER_CHANCE,
)
from core.events import EventBus, CreatureDied
from core.geometry import clamp, distance, random_point_in_disk
from logic.abilities import run_tick_ability
from logic.factory import spawn_creature, log_activity
from logic.placement import (
    is_position_invalid, random_valid_point, random_river_point, in_river,
)
from logic.residency import home_of, home_mates
from logic.species import is_flying, is_river_kind, shiny_chance
from logic.wander import pick_wander_target, round_home, round_radius

if TYPE_CHECKING:
    from core.ecs import World
    from components import Building


# ── Death ────────────────────────────────────────────────────────────

def _roll_ghost(world: "World", creature: Creature, pos: Position) -> int | None:
    if creature.species == "Primeape":
        chance = tuning.get("creatures", "annihilape_chance", 0.05)
        kind = "Annihilape"
    else:
        chance = tuning.get("creatures", "ghost_chance", 0.15)
        kind = random.choice(("Gastly", "Litwick"))
    if random.random() >= chance:
        return None

    farmer = world.res(Farmer)
    shiny = random.random() < shiny_chance(farmer.skills.lucky if farmer else 0)
    undying_chance = tuning.get("creatures", "undying_ghost_chance", 0.001)
    if creature.shiny or shiny:
        undying_chance = tuning.get("creatures", "undying_shiny_chance", 0.5)
    return spawn_creature(world, kind, pos.x, pos.y, shiny=shiny,
                          undying=random.random() < undying_chance)


def kill_creature(world: "World", eid: int) -> None:
    """Remove *eid* for good: mourning, ghost roll, team cleanup, event."""
    creature = world.get(eid, Creature)
    pos = world.get(eid, Position)
    if creature is None:
        return

    for mate in home_mates(world, eid):
        mate_c = world.get(mate, Creature)
        hap = world.get(mate, Happiness)
        if hap is None:
            continue
        if mate_c.species == creature.species:
            hap.modifiers["Mourning (Same Species)"] = Modifier(-20, 3)
        else:
            hap.modifiers["Mourning (Companion)"] = Modifier(-10, 3)

    ghost = _roll_ghost(world, creature, pos) if pos is not None else None

    farmer = world.res(Farmer)
    if farmer is not None and eid in farmer.team:
        farmer.team.remove(eid)

    world.kill(eid)
    log_activity(world, eid, "death", f"{creature.name} passed away", name=creature.name,
                 details={"ghost": ghost})
    bus = world.res(EventBus)
    if bus is not None:
        msg = f"{creature.name} passed away."
        if ghost is not None:
            msg += f" A {world.get(ghost, Creature).species} appeared where it rested."
        bus.emit(CreatureDied(eid=eid, species=creature.species, name=creature.name,
                              ghost_eid=ghost, message=msg))


# ── Teleport ─────────────────────────────────────────────────────────

def _teleport(world: "World", eid: int, tp: Teleporter, pos: Position,
              brain: Brain, dt: float) -> None:
    tp.timer = max(0.0, tp.timer - dt)
    if tp.timer > 0:
        return

    if tp.state == "home":
        point = random_valid_point(world)
        if point is None:
            tp.timer = 30.0
            return
        tp.state = "away"
        tp.timer = float(random.randint(60, 120))
    else:
        tp.state = "home"
        tp.timer = float(random.randint(180, 300))
        found = home_of(world, eid)
        if found is None or found[1].type != "lake":
            tp.timer = 60.0
            return
        bld = found[1]
        point = random_point_in_disk(*bld.center, round_radius(bld))

    pos.x, pos.y = point
    brain.target = None
    brain.state = "idle"


# ── Movement / confinement ───────────────────────────────────────────

def _step(pos: Position, brain: Brain, dt: float) -> None:
    if brain.target is None:
        return
    tx, ty = brain.target
    dist = distance(tx, ty, pos.x, pos.y)
    if dist > ARRIVAL_RADIUS:
        step = brain.speed * dt
        pos.x += (tx - pos.x) / dist * step
        pos.y += (ty - pos.y) / dist * step
    else:
        brain.target = None
        brain.state = "idle"


def _resnap_to_river(world: "World", pos: Position, brain: Brain) -> None:
    if in_river(world, pos.x, pos.y):
        return
    point = random_river_point(world)
    if point is not None:
        pos.x, pos.y = point
        brain.target = None
        brain.state = "idle"


def confine(world: "World", eid: int, pos: Position, brain: Brain,
            home: "Building | None") -> None:
    """Keep *eid* where it belongs after moving."""
    species = world.get(eid, Creature).species
    flying = is_flying(species)

    if home is not None and not flying:
        if home.type == "river_area":
            _resnap_to_river(world, pos, brain)
        elif round_home(home):
            cx, cy = home.center
            radius = round_radius(home)
            if distance(pos.x, pos.y, cx, cy) > radius:
                angle = math.atan2(pos.y - cy, pos.x - cx)
                pos.x = cx + math.cos(angle) * radius
                pos.y = cy + math.sin(angle) * radius
                brain.target = None
                brain.state = "idle"
        else:
            pos.x = clamp(pos.x, home.x + HOME_PADDING, home.x + home.w - HOME_PADDING)
            pos.y = clamp(pos.y, home.y + HOME_PADDING, home.y + home.h - HOME_PADDING)
    elif is_river_kind(species):
        _resnap_to_river(world, pos, brain)
    else:
        terrain = world.res(Terrain)
        if terrain is not None:
            pos.x = clamp(pos.x, FENCE_PADDING, terrain.width - FENCE_PADDING)
            pos.y = clamp(pos.y, FENCE_PADDING, terrain.height - FENCE_PADDING)
        if not flying and is_position_invalid(world, pos.x, pos.y):
            brain.target = None
            brain.state = "idle"


def _confining_home(world: "World", eid: int) -> "Building | None":
    tp = world.get(eid, Teleporter)
    if tp is not None and tp.state == "away":
        return None
    found = home_of(world, eid)
    return found[1] if found else None


# ── System ───────────────────────────────────────────────────────────

def creature_system(world: "World", dt: float) -> None:
    clock = world.res(GameClock)
    hour = clock.hour if clock else 12

    for eid, creature, pos, brain in world.query(Creature, Position, Brain):
        if creature.death_hour is not None and hour >= creature.death_hour:
            kill_creature(world, eid)
            continue

        brain.cooldown = max(0.0, brain.cooldown - dt)
        if brain.sleeping:
            continue

        if brain.action_timer > 0:
            brain.action_timer -= dt
            if brain.action_timer <= 0:
                brain.action_timer = 0.0
                if brain.state == "working":
                    brain.state = "idle"

        tp = world.get(eid, Teleporter)
        if tp is not None:
            _teleport(world, eid, tp, pos, brain, dt)

        run_tick_ability(world, eid)
        _step(pos, brain, dt)

        home = _confining_home(world, eid)
        confine(world, eid, pos, brain, home)

        if brain.state == "idle" and random.random() < WANDER_CHANCE:
            target = pick_wander_target(world, eid, home)
            if target is not None:
                brain.target = target
                brain.state = "moving"
