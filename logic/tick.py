"""logic/tick.py — Continuous per-frame systems.

Houses the small systems that run every ``advance()`` call and don't
warrant their own files: farmer energy regen, passive income, crop
growth.

Usage::

    from logic.tick import tick_systems
    tick_systems(world, dt)
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from components import Creature, Brain, CropPlot, Farmer, DailyLedger, GameClock
from components.abilities import PassiveIncome
from core import tuning
from core.constants import MANAGER_INCOME_MULT, SECONDS_PER_DAY
from core.geometry import clamp
from logic.behaviour import creature_system
from logic.respawn import respawn_system
from logic.species import ability_of

if TYPE_CHECKING:
    from core.ecs import World


def energy_system(world: "World", dt: float) -> None:
    farmer = world.res(Farmer)
    if farmer is None:
        return
    regen = tuning.get("farmer", "energy_regen", 0.05)
    farmer.energy = clamp(farmer.energy + regen * dt, 0.0, farmer.max_energy)


def passive_income_system(world: "World", dt: float) -> None:
    """Awake earners pay out every frame, scaled by the manager skill."""
    farmer = world.res(Farmer)
    if farmer is None:
        return
    ledger = world.res(DailyLedger)
    mult = MANAGER_INCOME_MULT[farmer.skills.manager]
    for _, creature, brain in world.query(Creature, Brain):
        if brain.sleeping:
            continue
        ability = ability_of(creature.species)
        if not isinstance(ability, PassiveIncome):
            continue
        income = ability.rate * dt * mult
        if income <= 0:
            continue
        farmer.money += income
        if ledger is not None:
            ledger.income[creature.species] = ledger.income.get(creature.species, 0.0) + income


def crop_growth_system(world: "World", dt: float) -> None:
    """Advance growing plots; watering speeds growth up.

    Growth is measured in in-game days, so a fixed-mode clock with a
    short ``day_length`` grows crops just as many days per day.  A plot
    flips to ``mature`` exactly once, the first frame ``growth_days``
    reaches ``mature_days``.
    """
    clock = world.res(GameClock)
    days = (clock.game_dt(dt) if clock else dt) / SECONDS_PER_DAY
    bonus = tuning.get("crops", "watered_bonus", 0.5)
    for _, plot in world.all_of(CropPlot):
        if plot.state != "growing":
            continue
        rate = 1.0 + (bonus if plot.watered else 0.0)
        plot.growth_days += days * rate
        if plot.growth_days >= plot.mature_days:
            plot.state = "mature"


def tick_systems(world: "World", dt: float) -> None:
    """The continuous pipeline, in order."""
    energy_system(world, dt)
    passive_income_system(world, dt)
    crop_growth_system(world, dt)
    creature_system(world, dt)
    respawn_system(world, dt)
