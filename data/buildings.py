"""data/buildings.py — Building catalogue.

    size        unrotated footprint (w, h)
    cost        money + item costs
    capacity    resident cap for relocation and daily spawn rolls
    shape       "rect" or "round" (round homes confine residents radially)
    founders    creatures that move in when the building is placed:
                (species, chance, homed, timed) — ``timed`` species go
                through the day/night timetable first
    buildable   False for map-generated structures

``stable_miltank`` / ``stable_mareep`` are build menu variants that
place a ``stable`` tagged with its resident species.
"""

BUILDINGS: dict[str, dict] = {
    "house": {
        "size": (100, 80), "cost": {"money": 0, "items": {}},
        "capacity": 2, "shape": "rect", "buildable": False,
    },
    "river_area": {
        "size": (0, 0), "cost": {"money": 0, "items": {}},
        "capacity": 4, "shape": "river", "buildable": False,
    },
    "farm_area": {
        "size": (160, 100), "cost": {"money": 100, "items": {"wood": 20}},
        "capacity": 3, "shape": "rect", "buildable": True,
        "founders": [("Diglett", 0.15, True, True), ("Pidgey", 0.15, True, True)],
    },
    "stable": {
        "size": (100, 80), "cost": {"money": 250, "items": {"wood": 50, "stone": 10}},
        "capacity": 4, "shape": "rect", "buildable": False,
    },
    "stable_miltank": {
        "base": "stable", "species": "Miltank",
        "size": (100, 80), "cost": {"money": 250, "items": {"wood": 50, "stone": 10}},
        "capacity": 4, "shape": "rect", "buildable": True,
        "founders": [("Miltank", 1.0, True, False)],
    },
    "stable_mareep": {
        "base": "stable", "species": "Mareep",
        "size": (100, 80), "cost": {"money": 250, "items": {"wood": 50, "stone": 10}},
        "capacity": 3, "shape": "rect", "buildable": True,
        "founders": [("Mareep", 1.0, True, False)],
    },
    "coop": {
        "species": "Torchic",
        "size": (80, 60), "cost": {"money": 150, "items": {"wood": 30}},
        "capacity": 4, "shape": "rect", "buildable": True,
        "founders": [("Torchic", 1.0, True, False)],
    },
    "mine": {
        "species": "Onix",
        "size": (120, 120), "cost": {"money": 500, "items": {"wood": 100, "stone": 50}},
        "capacity": 1, "shape": "rect", "buildable": True,
        "founders": [("Onix", 1.0, True, False)],
    },
    "lake": {
        "species": "Goldeen",
        "size": (150, 150), "cost": {"money": 300, "items": {"stone": 40}},
        "capacity": 2, "shape": "round", "buildable": True,
        "founders": [("Goldeen", 1.0, True, False), ("Squirtle", 0.15, True, True)],
    },
    "campfire": {
        "size": (50, 50), "cost": {"money": 50, "items": {"wood": 10, "stone": 5}},
        "capacity": 0, "shape": "rect", "buildable": True,
        "founders": [("Charmander", 0.15, False, False)],
    },
    "pokemon_gym": {
        "size": (180, 140), "cost": {"money": 5000, "items": {"wood": 250}},
        "capacity": 2, "shape": "rect", "buildable": True,
        "founders": [("Machop", 1.0, True, False)],
    },
    "laboratory": {
        "size": (120, 120), "cost": {"money": 10000, "items": {"wood": 200, "stone": 200, "metal": 50}},
        "capacity": 4, "shape": "round", "buildable": True,
        "founders": [("Porygon", 1.0, True, False)],
    },
}

DEFAULT_SIZE = (100, 100)
DEFAULT_COST = {"money": 100, "items": {}}
