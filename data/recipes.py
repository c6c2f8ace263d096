"""data/recipes.py — Crafting recipes, market prices, task rewards."""

# recipe_id → ingredients, output, optional structure the farm must have.
RECIPES: dict[str, dict] = {
    # ── Processing ───────────────────────────────────────────────────
    "fertilizer": {
        "ingredients": {"fiber": 3},
        "output": {"fertilizer": 1},
    },
    "planks": {
        "ingredients": {"wood": 4},
        "output": {"planks": 1},
    },
    "evolution_stone": {
        "ingredients": {"stone": 10, "metal": 2},
        "output": {"evolution_stone": 1},
    },
    "seed_sweet_berry": {
        "ingredients": {"apple": 2, "flower": 1},
        "output": {"seed_sweet_berry": 2},
    },
    "cheese": {
        "ingredients": {"milk": 3},
        "output": {"cheese": 1},
    },
    "yarn": {
        "ingredients": {"wool": 2},
        "output": {"yarn": 1},
    },

    # ── Cooking (needs a campfire) ───────────────────────────────────
    "charcoal": {
        "ingredients": {"wood": 3},
        "output": {"charcoal": 1},
        "requires": "campfire",
    },
    "omelette": {
        "ingredients": {"egg": 2, "milk": 1},
        "output": {"omelette": 1},
        "requires": "campfire",
    },
    "berry_pie": {
        "ingredients": {"sweet_berry": 3, "grain_berry": 2, "egg": 1},
        "output": {"berry_pie": 1},
        "requires": "campfire",
    },
    "hot_cocoa": {
        "ingredients": {"cocoa_berry": 2, "milk": 1},
        "output": {"hot_cocoa": 1},
        "requires": "campfire",
    },
    "coffee": {
        "ingredients": {"coffee_berry": 3},
        "output": {"coffee": 1},
        "requires": "campfire",
    },
    "honey_cake": {
        "ingredients": {"honey": 2, "grain_berry": 2, "egg": 1},
        "output": {"honey_cake": 1},
        "requires": "campfire",
    },
}

# item → {"buy": price or None, "sell": price}.  ``buy=None`` means the
# market never stocks it.
MARKET_PRICES: dict[str, dict] = {
    "wood":              {"buy": 5,    "sell": 2},
    "stone":             {"buy": 6,    "sell": 3},
    "metal":             {"buy": 40,   "sell": 15},
    "fiber":             {"buy": None, "sell": 2},
    "flower":            {"buy": None, "sell": 4},
    "apple":             {"buy": 8,    "sell": 3},
    "egg":               {"buy": None, "sell": 6},
    "milk":              {"buy": None, "sell": 8},
    "wool":              {"buy": None, "sell": 10},
    "honey":             {"buy": None, "sell": 14},
    "pearl":             {"buy": None, "sell": 60},
    "charcoal":          {"buy": None, "sell": 9},
    "fertilizer":        {"buy": 12,   "sell": 4},
    "evolution_stone":   {"buy": 500,  "sell": 100},
    "seed_grain_berry":  {"buy": 5,    "sell": 1},
    "seed_sweet_berry":  {"buy": 8,    "sell": 2},
    "seed_cocoa_berry":  {"buy": 12,   "sell": 3},
    "seed_coffee_berry": {"buy": 15,   "sell": 4},
    "grain_berry":       {"buy": None, "sell": 6},
    "sweet_berry":       {"buy": None, "sell": 9},
    "cocoa_berry":       {"buy": None, "sell": 14},
    "coffee_berry":      {"buy": None, "sell": 18},
    "berry_pie":         {"buy": None, "sell": 60},
    "coffee":            {"buy": None, "sell": 70},
    "hot_cocoa":         {"buy": None, "sell": 55},
    "omelette":          {"buy": None, "sell": 25},
    "honey_cake":        {"buy": None, "sell": 75},
    "cheese":            {"buy": None, "sell": 30},
    "yarn":              {"buy": None, "sell": 28},
    "planks":            {"buy": None, "sell": 10},
}

# difficulty → (energy restored, experience gained)
TASK_REWARDS: dict[str, tuple[int, int]] = {
    "trivial": (10, 5),
    "easy":    (25, 20),
    "medium":  (50, 50),
    "hard":    (100, 100),
}
