"""simulation/spawns.py — Daily spawn rolls and the day/night swap.

Every rule is gated on occupancy: a species only rolls when the
creatures already counted against its buildings are below
``building count × capacity``.  Timed species (Pidgey, Diglett,
Squirtle…) go through ``species_for_hour`` so a spawn at night arrives
as the night counterpart.
"""

from __future__ import annotations
import random
from typing import TYPE_CHECKING

from components import Creature, Brain, Home, Building, GameClock, FarmFlags
from core import tuning
from core.constants import DAWN_HOUR, NIGHT_HOUR
from core.events import EventBus, CreatureArrived, PestAppeared
from logic.factory import spawn_creature
from logic.residency import buildings_of_type, capacity_of, count_species, residents_of
from logic.species import (
    family, has_tag, species_for_hour, sleep_hour, night_counterpart,
    day_counterpart,
)

if TYPE_CHECKING:
    from core.ecs import World


def _chance() -> float:
    return tuning.get("spawns", "daily_chance", 0.15)


def _hour(world: "World") -> int:
    clock = world.res(GameClock)
    return clock.hour if clock else 12


def _emit(world: "World", event) -> None:
    bus = world.res(EventBus)
    if bus is not None:
        bus.emit(event)


def _spawn_home(world: "World", species: str, bld_eid: int, bld: Building) -> int:
    cx, cy = bld.center
    eid = spawn_creature(world, species, cx, cy, bld_eid)
    print(f"[SPAWN] {species} moved into {bld.type} {bld_eid}")
    return eid


def _pooled_rule(world: "World", buildings: list[tuple[int, Building]],
                 members: tuple[str, ...], species: str) -> int | None:
    """One roll for a pool of same-kind buildings sharing a cap."""
    if not buildings:
        return None
    cap = sum(capacity_of(b) for _, b in buildings)
    if count_species(world, members) >= cap or random.random() >= _chance():
        return None
    bld_eid, bld = random.choice(buildings)
    return _spawn_home(world, species, bld_eid, bld)


def daily_spawns(world: "World") -> list[int]:
    """Roll every building category once.  Returns the new creature ids."""
    hour = _hour(world)
    spawned: list[int] = []

    def keep(eid):
        if eid is not None:
            spawned.append(eid)

    keep(_pooled_rule(world, buildings_of_type(world, "coop"),
                      family("Torchic"), "Torchic"))
    keep(_pooled_rule(world, buildings_of_type(world, "stable", species="Miltank"),
                      ("Miltank",), "Miltank"))
    keep(_pooled_rule(world, buildings_of_type(world, "stable", species="Mareep"),
                      family("Mareep"), "Mareep"))

    for area_eid, area in buildings_of_type(world, "farm_area"):
        residents = [e for e in residents_of(world, area_eid)
                     if has_tag(world.get(e, Creature).species, "farm")]
        if len(residents) < capacity_of(area) and random.random() < _chance():
            kind = "Pidgey" if random.random() < 0.5 else "Diglett"
            keep(_spawn_home(world, species_for_hour(kind, hour), area_eid, area))

    lakes = buildings_of_type(world, "lake")
    squirtles = family("squirtle")
    if lakes and count_species(world, squirtles) < len(lakes) and random.random() < _chance():
        taken = {world.get(eid, Home).building_id
                 for eid, c in world.all_of(Creature)
                 if c.species in squirtles and world.has(eid, Home)}
        free = [(eid, b) for eid, b in lakes if eid not in taken]
        if free:
            lake_eid, lake = free[0]
            keep(_spawn_home(world, species_for_hour("Squirtle", hour), lake_eid, lake))

    porygons = family("porygon")
    for lab_eid, lab in buildings_of_type(world, "laboratory"):
        count = sum(1 for e in residents_of(world, lab_eid)
                    if world.get(e, Creature).species in porygons)
        if count < capacity_of(lab) and random.random() < _chance():
            eid = _spawn_home(world, "Porygon", lab_eid, lab)
            keep(eid)
            _emit(world, CreatureArrived(eid=eid, species="Porygon",
                                         message="A new Porygon appeared in the laboratory!"))

    rivers = buildings_of_type(world, "river_area")
    river_kinds = family("river")
    if rivers and count_species(world, river_kinds) < capacity_of(rivers[0][1]) \
            and random.random() < _chance():
        river_eid, river = rivers[0]
        kind = "Magikarp" if random.random() < 0.5 else "Psyduck"
        keep(_spawn_home(world, kind, river_eid, river))

    return spawned


def special_spawns(world: "World") -> None:
    """Pests and the coop's Spearow guard."""
    flags = world.res(FarmFlags)
    if flags is None:
        flags = FarmFlags()
        world.set_res(flags)

    if count_species(world, family("rattata")) < tuning.get("spawns", "rattata_max", 3) \
            and random.random() < tuning.get("spawns", "rattata_chance", 0.2):
        areas = buildings_of_type(world, "farm_area")
        if areas:
            area = areas[0][1]
            eid = spawn_creature(world, "Rattata",
                                 area.x + random.randint(0, int(area.w)),
                                 area.y + random.randint(0, int(area.h)))
            _emit(world, PestAppeared(eid=eid, species="Rattata",
                                      message="A Rattata showed up and may cause trouble!"))

    coops = buildings_of_type(world, "coop")
    if not coops:
        return
    coop_eid, coop = coops[0]
    if not flags.met_ekans:
        if random.random() < tuning.get("spawns", "ekans_chance", 0.1):
            flags.met_ekans = True
            eid = spawn_creature(world, "Ekans", coop.x, coop.y, coop_eid)
            _emit(world, PestAppeared(eid=eid, species="Ekans",
                                      message="An Ekans appeared near the coop!"))
    elif not flags.met_spearow:
        if random.random() < tuning.get("spawns", "spearow_chance", 0.15):
            flags.met_spearow = True
            eid = spawn_creature(world, "Spearow", coop.x, coop.y, coop_eid)
            _emit(world, CreatureArrived(eid=eid, species="Spearow",
                                         message="A Spearow arrived to guard the coop!"))


def is_night(hour: int) -> bool:
    return hour >= NIGHT_HOUR or hour < DAWN_HOUR


def sleep_cycle(world: "World") -> None:
    """Put day species to bed and wake their night counterparts, or the reverse."""
    hour = _hour(world)
    pairs = [(eid, c, b) for eid, c, b in world.query(Creature, Brain)]

    if is_night(hour):
        for _, creature, brain in pairs:
            sleeps_at = sleep_hour(creature.species)
            if sleeps_at is None or brain.sleeping:
                continue
            if hour < sleeps_at and hour >= DAWN_HOUR:
                continue
            brain.sleeping = True
            night = night_counterpart(creature.species)
            for _, other, other_brain in pairs:
                if other.species == night and other_brain.sleeping:
                    other_brain.sleeping = False
                    break
    else:
        for _, creature, brain in pairs:
            if sleep_hour(creature.species) is not None and brain.sleeping:
                brain.sleeping = False
            if day_counterpart(creature.species) is not None and not brain.sleeping:
                brain.sleeping = True
