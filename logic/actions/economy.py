"""logic/actions/economy.py — Crafting, the market, progression, settings."""

from __future__ import annotations
from typing import TYPE_CHECKING

from components import Farmer, DailyLedger, GameClock
from core import tuning
from core.constants import SKILL_MAX
from data.recipes import RECIPES, MARKET_PRICES, TASK_REWARDS
from logic.actions import ActionResult
from logic.inventory_ops import add_item, consume_item, missing_items, remove_items
from logic.residency import buildings_of_type

if TYPE_CHECKING:
    from core.ecs import World


def craft(world: "World", recipe_id: str) -> ActionResult:
    recipe = RECIPES.get(recipe_id)
    if recipe is None:
        return ActionResult(False, f"There's no recipe for {recipe_id}.")
    required = recipe.get("requires")
    if required and not buildings_of_type(world, required):
        return ActionResult(False, f"You need a {required} to make that.")
    farmer = world.res(Farmer)
    cost = tuning.get("farmer", "craft_energy", 5)
    if farmer.energy < cost:
        return ActionResult(False, "Not enough energy!")
    missing = missing_items(farmer.inventory, recipe["ingredients"])
    if missing:
        short = ", ".join(f"{n} {item}" for item, n in missing.items())
        return ActionResult(False, f"Missing ingredients: {short}.")

    remove_items(farmer.inventory, recipe["ingredients"])
    for item, n in recipe["output"].items():
        add_item(farmer.inventory, item, n)
    farmer.energy -= cost
    return ActionResult(True, f"Crafted {recipe_id.replace('_', ' ')}.")


# ── Market ───────────────────────────────────────────────────────────

def buy_item(world: "World", item: str, quantity: int = 1) -> ActionResult:
    price = MARKET_PRICES.get(item, {}).get("buy")
    if price is None:
        return ActionResult(False, f"The market doesn't sell {item}.")
    if quantity < 1:
        return ActionResult(False, "Buy at least one.")
    farmer = world.res(Farmer)
    total = price * quantity
    if farmer.money < total:
        return ActionResult(False, "Not enough money!")
    farmer.money -= total
    add_item(farmer.inventory, item, quantity)
    return ActionResult(True, f"Bought {quantity} {item} for ${total}.")


def sell_item(world: "World", item: str, quantity: int = 1) -> ActionResult:
    price = MARKET_PRICES.get(item, {}).get("sell")
    if price is None:
        return ActionResult(False, f"The market doesn't buy {item}.")
    if quantity < 1:
        return ActionResult(False, "Sell at least one.")
    farmer = world.res(Farmer)
    if not consume_item(farmer.inventory, item, quantity):
        return ActionResult(False, f"You don't have {quantity} {item}.")
    earnings = price * quantity
    farmer.money += earnings
    ledger = world.res(DailyLedger)
    if ledger is not None:
        ledger.income["Sales"] = ledger.income.get("Sales", 0.0) + earnings
    return ActionResult(True, f"Sold {quantity} {item} for ${earnings}.")


# ── Progression ──────────────────────────────────────────────────────

def upgrade_skill(world: "World", skill: str) -> ActionResult:
    farmer = world.res(Farmer)
    if skill not in SKILL_MAX:
        return ActionResult(False, f"Unknown skill {skill}.")
    if farmer.skill_points <= 0:
        return ActionResult(False, "No skill points to spend.")
    level = farmer.skills.level(skill)
    if level >= SKILL_MAX[skill]:
        return ActionResult(False, f"{skill.title()} is already maxed.")
    setattr(farmer.skills, skill, level + 1)
    farmer.skill_points -= 1
    return ActionResult(True, f"{skill.title()} is now level {level + 1}.")


def reward_task(world: "World", difficulty: str) -> ActionResult:
    """Energy and XP for a finished real-life task; XP may level the farmer up."""
    reward = TASK_REWARDS.get(difficulty)
    if reward is None:
        return ActionResult(False, f"Unknown difficulty {difficulty}.")
    energy, xp = reward
    farmer = world.res(Farmer)
    farmer.energy = min(farmer.max_energy, farmer.energy + energy)
    farmer.experience += xp

    levels = 0
    while farmer.experience >= farmer.experience_to_next:
        farmer.experience -= farmer.experience_to_next
        farmer.level += 1
        farmer.skill_points += 1
        farmer.experience_to_next *= 2
        levels += 1
    if levels:
        print(f"[FARM] Farmer reached level {farmer.level}")
        return ActionResult(True, f"+{xp} XP! You reached level {farmer.level}!")
    return ActionResult(True, f"+{xp} XP!")


# ── Settings ─────────────────────────────────────────────────────────

def set_day_change_hour(world: "World", hour: int) -> ActionResult:
    if not 0 <= hour <= 23:
        return ActionResult(False, "The day change hour must be between 0 and 23.")
    world.res(GameClock).day_change_hour = int(hour)
    return ActionResult(True, f"New days now start at {hour:02d}:00.")
