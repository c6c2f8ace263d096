"""simulation/daily.py — Once-per-day production cycle.

``daily_production`` runs when ``advance()`` detects a new day key, in
this order:

  1. reset the daily ledger
  2. reset crop watering (rain and storms water every growing plot)
  3. protectors chase off pests (at most one each)
  4. well-being recompute
  5. daily abilities (production, conversion, finds)
  6. fossil revival progress
  7. wild plants flower
  8. ageing and death scheduling

``roll_weather`` runs just before it.
"""

from __future__ import annotations
import random
from typing import TYPE_CHECKING

from components import (
    Creature, Brain, CropPlot, Harvestable,
    Farmer, DailyLedger, Weather, GameClock,
)
from components.abilities import (
    DailyProduction, DailyConversion, DailyFind, Protector, FossilAccelerator,
)
from core import tuning
from core.constants import TRAINER_HUNT_BONUS, DEATH_HOUR_RANGE
from core.events import EventBus, PestRepelled, AbilityFind, FossilRevived
from data.species import FOSSILS
from logic.factory import spawn_creature, log_activity
from logic.inventory_ops import add_item, consume_item
from logic.residency import buildings_of_type, residents_of
from logic.species import ability_of, is_pest, is_protector
from logic.wellbeing import update_happiness

if TYPE_CHECKING:
    from core.ecs import World

WEATHER_KINDS = ("clear", "rain", "storm", "harsh_sunlight")


def roll_weather(world: "World") -> str:
    """Pick today's weather; long rainy spells are broken up."""
    weather = world.res(Weather)
    if weather is None:
        weather = Weather()
        world.set_res(weather)
    weights = [tuning.get("weather", kind, default)
               for kind, default in zip(WEATHER_KINDS, (0.55, 0.25, 0.08, 0.12))]
    today = random.choices(WEATHER_KINDS, weights=weights)[0]
    wet = today in ("rain", "storm")
    if wet and weather.rain_streak >= tuning.get("weather", "max_rain_streak", 3):
        today = "clear"
        wet = False

    weather.yesterday = weather.today
    weather.today = today
    weather.rain_streak = weather.rain_streak + 1 if wet else 0
    return today


def _awake(world: "World", eid: int) -> bool:
    brain = world.get(eid, Brain)
    return brain is None or not brain.sleeping


def _emit(world: "World", event) -> None:
    bus = world.res(EventBus)
    if bus is not None:
        bus.emit(event)


# ── Steps ────────────────────────────────────────────────────────────

def reset_watering(world: "World") -> None:
    weather = world.res(Weather)
    wet = weather is not None and weather.today in ("rain", "storm")
    for _, plot in world.all_of(CropPlot):
        plot.watered = wet and plot.state == "growing"


def resolve_pests(world: "World") -> list[int]:
    """Each awake protector may chase off one awake pest.  Returns removed ids."""
    creatures = [(eid, c) for eid, c in world.all_of(Creature) if _awake(world, eid)]
    pests = [(eid, c) for eid, c in creatures if is_pest(c.species)]
    protectors = [(eid, c) for eid, c in creatures if is_protector(c.species)]
    if not pests or not protectors:
        return []

    farmer = world.res(Farmer)
    bonus = TRAINER_HUNT_BONUS[farmer.skills.trainer] if farmer else 0.0
    removed = []
    for pid, protector in protectors:
        if not pests:
            break
        ability = ability_of(protector.species)
        if not isinstance(ability, Protector):
            continue
        if random.random() < ability.hunt_chance + bonus:
            pest_eid, pest = pests.pop(0)
            world.kill(pest_eid)
            removed.append(pest_eid)
            if farmer is not None and pest_eid in farmer.team:
                farmer.team.remove(pest_eid)
            _emit(world, PestRepelled(
                protector_eid=pid, pest_eid=pest_eid, pest_species=pest.species,
                message=f"{protector.name} protected the farm and chased off a {pest.species}!"))
    return removed


def run_daily_abilities(world: "World") -> None:
    farmer = world.res(Farmer)
    if farmer is None:
        return
    inv = farmer.inventory
    for eid, creature in world.all_of(Creature):
        if not _awake(world, eid):
            continue
        ability = ability_of(creature.species)
        if isinstance(ability, DailyProduction):
            amount = ability.amount
            if ability.double_chance and random.random() < ability.double_chance:
                amount *= 2
            add_item(inv, ability.item, amount)
            log_activity(world, eid, "daily", f"produced {amount} {ability.item}",
                         name=creature.name)
        elif isinstance(ability, DailyConversion):
            if consume_item(inv, ability.source, ability.amount):
                add_item(inv, ability.product, ability.amount)
                log_activity(world, eid, "daily",
                             f"turned {ability.amount} {ability.source} into {ability.product}",
                             name=creature.name)
        elif isinstance(ability, DailyFind):
            if ability.items and random.random() < ability.chance:
                item = random.choice(ability.items)
                add_item(inv, item, 1)
                _emit(world, AbilityFind(eid=eid, item=item,
                                         message=f"{creature.name} found a {item}!"))


def advance_fossils(world: "World") -> None:
    days = tuning.get("fossils", "days", 7)
    for lab_eid, lab in buildings_of_type(world, "laboratory"):
        fossil = lab.storage.get("fossil")
        if not fossil:
            continue
        bonus = 0.0
        for eid in residents_of(world, lab_eid):
            ability = ability_of(world.get(eid, Creature).species)
            if isinstance(ability, FossilAccelerator):
                bonus += ability.bonus
        lab.storage["progress"] = lab.storage.get("progress", 0.0) + (1 / days) * (1 + bonus)
        if lab.storage["progress"] < 1:
            continue

        species = FOSSILS.get(fossil)
        lab.storage.pop("fossil", None)
        lab.storage.pop("progress", None)
        if species is None:
            continue
        cx, cy = lab.center
        eid = spawn_creature(world, species, cx, cy, undying=True)
        print(f"[FARM] Fossil {fossil} revived as {species} (eid={eid})")
        _emit(world, FossilRevived(eid=eid, species=species, lab_eid=lab_eid,
                                   message=f"The fossil was revived! A {species} appeared!"))


def bloom_wild_plants(world: "World") -> None:
    clock = world.res(GameClock)
    for _, res in world.all_of(Harvestable):
        if res.type == "wild_plant" and res.spawn_day is not None \
                and clock.day - res.spawn_day >= 1:
            res.state = "flower"


def age_creatures(world: "World") -> None:
    lo, hi = DEATH_HOUR_RANGE
    for _, creature in world.all_of(Creature):
        if creature.undying:
            continue
        creature.age += 1
        if creature.age > creature.max_age and creature.death_hour is None:
            creature.death_hour = random.randint(lo, hi)


def daily_production(world: "World") -> None:
    world.set_res(DailyLedger())
    reset_watering(world)
    removed = resolve_pests(world)
    if removed:
        world.purge()
    update_happiness(world)
    run_daily_abilities(world)
    advance_fossils(world)
    bloom_wild_plants(world)
    age_creatures(world)

