"""logic/wellbeing.py — Daily happiness recomputation.

Happiness is never stored independently: it is always
``clamp(50 + sum(modifiers), 0, 100)``.  Once a day the modifier map is
rebuilt:

  - decaying modifiers lose a day (dropped after their last one)
  - flat modifiers are dropped, except the caretaker skill bonus
  - conditional modifiers are reapplied from current farm conditions
  - weather modifiers are applied from today's weather

New arrivals hand out "New Companion" modifiers to their home-mates
first.  After the recompute, biters may bite a cohabiting Torchic and
healers may cure a bite.
"""

from __future__ import annotations
import random
from typing import TYPE_CHECKING

from components import Creature, Happiness, Modifier, Brain, Home, Farmer, Weather
from components.abilities import Biter, Healer
from core.constants import (
    CARETAKER_HAPPINESS, HAPPINESS_BASE, HAPPINESS_MIN, HAPPINESS_MAX,
)
from core.geometry import clamp
from logic.factory import log_activity
from logic.residency import home_of, residents_of
from logic.species import ability_of, family, is_pest, is_protector, types_of

if TYPE_CHECKING:
    from core.ecs import World

CARETAKER_KEY = "Caretaker Bonus"


def recompute(hap: Happiness) -> float:
    hap.value = clamp(HAPPINESS_BASE + hap.total(), HAPPINESS_MIN, HAPPINESS_MAX)
    return hap.value


def _greet_new_arrivals(world: "World") -> None:
    for eid, creature in world.all_of(Creature):
        if not creature.is_new:
            continue
        found = home_of(world, eid)
        if found is not None:
            for mate in residents_of(world, found[0]):
                if mate == eid:
                    continue
                hap = world.get(mate, Happiness)
                if hap is None:
                    continue
                if world.get(mate, Creature).species == creature.species:
                    hap.modifiers["New Companion (Same Species)"] = Modifier(20, 3)
                hap.modifiers["New Companion"] = Modifier(10, 3)
        creature.is_new = False


def _age_modifiers(hap: Happiness) -> None:
    kept: dict[str, Modifier] = {}
    for name, mod in hap.modifiers.items():
        if mod.decaying:
            if mod.days_left > 1:
                kept[name] = Modifier(mod.value, mod.days_left - 1)
        elif name == CARETAKER_KEY:
            kept[name] = mod
    hap.modifiers = kept


def _weather_modifiers(weather: str, types: tuple[str, ...]) -> dict[str, float]:
    if weather == "rain":
        out = {}
        if "water" in types:
            out["Rain Bonus"] = 10
        if "fire" in types:
            out["Rain Discomfort"] = -10
        return out
    if weather == "harsh_sunlight":
        return {"Harsh Sun Bonus": 10} if "fire" in types else {"Sun Discomfort": -5}
    if weather == "storm":
        return {"Storm Bonus": 10} if "electric" in types else {"Storm Stress": -5}
    return {}


def update_happiness(world: "World") -> None:
    """Rebuild every creature's modifier map and happiness value."""
    species = [c.species for _, c in world.all_of(Creature)]
    has_protector = any(is_protector(s) for s in species)
    pest_count = sum(1 for s in species if is_pest(s))
    has_tauros = "Tauros" in species
    has_bouffalant = "Bouffalant" in species

    farmer = world.res(Farmer)
    caretaker = CARETAKER_HAPPINESS[farmer.skills.caretaker] if farmer else 0
    weather = world.res(Weather)
    today = weather.today if weather else "clear"

    _greet_new_arrivals(world)

    for _, creature, hap in world.query(Creature, Happiness):
        _age_modifiers(hap)
        mods = hap.modifiers
        kind = creature.species

        if has_protector and not is_protector(kind):
            mods["Protection Bonus"] = Modifier(10)
        if pest_count > 0 and not is_pest(kind):
            mods["Pest Stress"] = Modifier(-5 * pest_count)
        if kind == "Miltank" and (has_tauros or has_bouffalant):
            mods["Companionship Bonus"] = Modifier(10)
        if (kind == "Tauros" and has_bouffalant) or (kind == "Bouffalant" and has_tauros):
            mods["Rivalry"] = Modifier(-10)
        if caretaker > 0:
            mods[CARETAKER_KEY] = Modifier(caretaker)

        for name, value in _weather_modifiers(today, types_of(kind)).items():
            mods[name] = Modifier(value)

        recompute(hap)

    _bites(world)
    _heals(world)


def _awake(world: "World", eid: int) -> bool:
    brain = world.get(eid, Brain)
    return brain is None or not brain.sleeping


def _bites(world: "World") -> None:
    prey = family("Torchic")
    victims = [(eid, world.get(eid, Home).building_id)
               for eid, c in world.all_of(Creature)
               if c.species in prey and _awake(world, eid) and world.has(eid, Home)]
    for eid, creature in world.all_of(Creature):
        ability = ability_of(creature.species)
        if not isinstance(ability, Biter) or not _awake(world, eid):
            continue
        if random.random() >= ability.bite_chance:
            continue
        home = world.get(eid, Home)
        if home is None or home.building_id is None:
            continue
        target = next((v for v, bid in victims if bid == home.building_id), None)
        if target is None:
            continue
        hap = world.get(target, Happiness)
        hap.modifiers["Snake Bite"] = Modifier(-20, 1)
        recompute(hap)
        log_activity(world, eid, "bite", f"bit {world.get(target, Creature).name}",
                     name=creature.name, details={"target": target})


def _heals(world: "World") -> None:
    bitten = [eid for eid, hap in world.all_of(Happiness) if "Snake Bite" in hap.modifiers]
    for eid, creature in world.all_of(Creature):
        if not bitten:
            return
        ability = ability_of(creature.species)
        if not isinstance(ability, Healer) or not _awake(world, eid):
            continue
        if random.random() >= ability.chance:
            continue
        patient = bitten.pop(random.randrange(len(bitten)))
        hap = world.get(patient, Happiness)
        del hap.modifiers["Snake Bite"]
        recompute(hap)
        creature.counters["cured"] = creature.counters.get("cured", 0) + 1
        log_activity(world, eid, "heal", "cured a snake bite", name=creature.name,
                     details={"patient": patient})
