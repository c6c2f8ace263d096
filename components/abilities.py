"""components.abilities — The closed set of creature abilities.

Each species has zero or one ability (see ``data/species.py``).  The
records are immutable; systems dispatch on the record type:

  tick-driven     ConsumeAndYield, WaterCrop, FertilizeCrop,
                  HarvestAppleTree, HarvestWildPlant, ProduceItem
  daily           DailyProduction, DailyConversion, DailyFind
  continuous      PassiveIncome
  farm-wide       Protector, Biter, Healer, FossilAccelerator
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Union


# ── Tick-driven (cooldown gated) ─────────────────────────────────────

@dataclass(frozen=True, slots=True)
class ConsumeAndYield:
    """Eat a harvestable of type *target*, turn it into *item*."""
    target: str
    item: str
    amount: int
    cooldown: float


@dataclass(frozen=True, slots=True)
class WaterCrop:
    cooldown: float


@dataclass(frozen=True, slots=True)
class FertilizeCrop:
    cooldown: float


@dataclass(frozen=True, slots=True)
class HarvestAppleTree:
    cooldown: float


@dataclass(frozen=True, slots=True)
class HarvestWildPlant:
    cooldown: float


@dataclass(frozen=True, slots=True)
class ProduceItem:
    """One *item* per cooldown; ``home_only`` needs the creature indoors."""
    item: str
    cooldown: float
    home_only: bool = False


# ── Daily ────────────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class DailyProduction:
    item: str
    amount: int
    double_chance: float = 0.0


@dataclass(frozen=True, slots=True)
class DailyConversion:
    source: str
    product: str
    amount: int


@dataclass(frozen=True, slots=True)
class DailyFind:
    chance: float
    items: tuple[str, ...]


# ── Continuous ───────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class PassiveIncome:
    rate: float                     # $ per second awake


# ── Farm-wide ────────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class Protector:
    hunt_chance: float


@dataclass(frozen=True, slots=True)
class Biter:
    bite_chance: float


@dataclass(frozen=True, slots=True)
class Healer:
    chance: float


@dataclass(frozen=True, slots=True)
class FossilAccelerator:
    bonus: float


Ability = Union[
    ConsumeAndYield, WaterCrop, FertilizeCrop, HarvestAppleTree,
    HarvestWildPlant, ProduceItem, DailyProduction, DailyConversion,
    DailyFind, PassiveIncome, Protector, Biter, Healer, FossilAccelerator,
]

TICK_ABILITIES = (ConsumeAndYield, WaterCrop, FertilizeCrop,
                  HarvestAppleTree, HarvestWildPlant, ProduceItem)
DAILY_ABILITIES = (DailyProduction, DailyConversion, DailyFind)
