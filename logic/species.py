"""logic/species.py — Species table lookups.

Thin read-only helpers over ``data/species.py`` so systems never index
the raw dicts directly::

    from logic.species import ability_of, has_tag, species_for_hour
"""

from __future__ import annotations
import random

from core.constants import DAWN_HOUR, LUCKY_SHINY_BONUS
from core import tuning
from data.species import (
    SPECIES, FAMILIES, EVOLUTIONS, NIGHT_COUNTERPARTS, DAY_COUNTERPARTS,
)

_PREVOLUTIONS: dict[str, str] = {v: k for k, v in EVOLUTIONS.items()}


def info(species: str) -> dict:
    return SPECIES.get(species, {})


def ability_of(species: str):
    """Return the species' ability record, or None."""
    return info(species).get("ability")


def lifespan(species: str) -> int:
    return int(info(species).get("lifespan", 100))


def speed_of(species: str) -> float:
    return float(info(species).get("speed", tuning.get("creatures", "default_speed", 30.0)))


def types_of(species: str) -> tuple[str, ...]:
    return tuple(info(species).get("types", ()))


def has_tag(species: str, tag: str) -> bool:
    return tag in info(species).get("tags", ())


def is_flying(species: str) -> bool:
    return has_tag(species, "flying")


def is_river_kind(species: str) -> bool:
    return has_tag(species, "river")


def is_protector(species: str) -> bool:
    return has_tag(species, "protector")


def is_pest(species: str) -> bool:
    return has_tag(species, "pest")


# ── Families / evolution ─────────────────────────────────────────────

def evolution_line(species: str) -> tuple[str, ...]:
    """Return the full evolution chain *species* belongs to."""
    base = species
    while base in _PREVOLUTIONS:
        base = _PREVOLUTIONS[base]
    line = [base]
    while line[-1] in EVOLUTIONS:
        line.append(EVOLUTIONS[line[-1]])
    return tuple(line)


def family(key: str) -> tuple[str, ...]:
    """Named family from ``FAMILIES``, else the evolution line of *key*."""
    if key in FAMILIES:
        return FAMILIES[key]
    return evolution_line(key)


def next_evolution(species: str) -> str | None:
    return EVOLUTIONS.get(species)


# ── Day / night timetable ────────────────────────────────────────────

def sleep_hour(species: str) -> int | None:
    """Hour a day species goes to sleep, or None if it never does."""
    pair = NIGHT_COUNTERPARTS.get(species)
    return pair[1] if pair else None


def night_counterpart(species: str) -> str | None:
    pair = NIGHT_COUNTERPARTS.get(species)
    return pair[0] if pair else None


def day_counterpart(species: str) -> str | None:
    return DAY_COUNTERPARTS.get(species)


def species_for_hour(species: str, hour: int) -> str:
    """Swap a day species for its night form when it is asleep at *hour*."""
    pair = NIGHT_COUNTERPARTS.get(species)
    if pair is None:
        return species
    night, sleeps_at = pair
    if hour >= sleeps_at or hour < DAWN_HOUR:
        return night
    return species


# ── Rolls ────────────────────────────────────────────────────────────

def shiny_chance(lucky_level: int = 0) -> float:
    base = tuning.get("creatures", "shiny_base", 0.003)
    lvl = max(0, min(lucky_level, len(LUCKY_SHINY_BONUS) - 1))
    return base + LUCKY_SHINY_BONUS[lvl]


def roll_shiny(lucky_level: int = 0) -> bool:
    return random.random() < shiny_chance(lucky_level)


def roll_gender(species: str) -> str:
    pinned = info(species).get("gender")
    if pinned:
        return pinned
    return "male" if random.random() < 0.5 else "female"
