"""data/species.py — Creature species table.

One entry per species.  Keys:

    lifespan   max age in days (default 100)
    speed      walk speed, u/s (default 30)
    types      elemental types that weather reacts to
    tags       behaviour flags:
                 protector  scares pests, cheers the farm up
                 pest       stresses everyone else
                 patrol     wanders around the house
                 flying     ignores terrain when moving
                 river      lives in the river polygon
                 teleport   blinks between home and a random spot
                 farm       counts toward farm-area occupancy
    gender     pinned gender, otherwise 50/50
    ability    one record from components.abilities, or absent
"""

from components.abilities import (
    ConsumeAndYield, WaterCrop, FertilizeCrop, HarvestAppleTree,
    HarvestWildPlant, ProduceItem, DailyProduction, DailyConversion,
    DailyFind, PassiveIncome, Protector, Biter, Healer, FossilAccelerator,
)

SEEDS = ("seed_grain_berry", "seed_sweet_berry", "seed_cocoa_berry", "seed_coffee_berry")

SPECIES: dict[str, dict] = {
    # ── Guards ───────────────────────────────────────────────────────
    "Growlithe":  {"lifespan": 90,  "types": ("fire",), "tags": ("protector", "patrol"),
                   "ability": Protector(hunt_chance=0.5)},
    "Arcanine":   {"lifespan": 140, "speed": 40, "types": ("fire",), "tags": ("protector", "patrol"),
                   "ability": Protector(hunt_chance=0.7)},
    "Meowth":     {"lifespan": 80,  "tags": ("protector", "patrol"),
                   "ability": PassiveIncome(rate=0.0025)},
    "Persian":    {"lifespan": 120, "speed": 38, "tags": ("protector", "patrol"),
                   "ability": PassiveIncome(rate=0.004)},
    "Spearow":    {"lifespan": 60,  "speed": 40, "tags": ("protector", "flying"),
                   "ability": Protector(hunt_chance=0.4)},
    "Fearow":     {"lifespan": 100, "speed": 50, "tags": ("protector", "flying"),
                   "ability": Protector(hunt_chance=0.6)},

    # ── Pests ────────────────────────────────────────────────────────
    "Rattata":    {"lifespan": 30,  "speed": 36, "tags": ("pest",)},
    "Raticate":   {"lifespan": 50,  "speed": 36, "tags": ("pest",)},
    "Ekans":      {"lifespan": 60,  "tags": ("pest",), "ability": Biter(bite_chance=0.3)},
    "Arbok":      {"lifespan": 100, "tags": ("pest",), "ability": Biter(bite_chance=0.5)},

    # ── Coop ─────────────────────────────────────────────────────────
    "Torchic":    {"lifespan": 70,  "types": ("fire",),
                   "ability": DailyProduction(item="egg", amount=1, double_chance=0.1)},
    "Combusken":  {"lifespan": 100, "types": ("fire",),
                   "ability": DailyProduction(item="egg", amount=2, double_chance=0.1)},
    "Blaziken":   {"lifespan": 150, "types": ("fire",),
                   "ability": DailyProduction(item="egg", amount=3, double_chance=0.15)},

    # ── Stables ──────────────────────────────────────────────────────
    "Miltank":    {"lifespan": 120, "gender": "female",
                   "ability": DailyProduction(item="milk", amount=2, double_chance=0.2)},
    "Tauros":     {"lifespan": 120, "speed": 36, "gender": "male",
                   "ability": ConsumeAndYield(target="apple_tree", item="fertilizer", amount=1, cooldown=600)},
    "Bouffalant": {"lifespan": 120, "speed": 34,
                   "ability": ConsumeAndYield(target="apple_tree", item="fertilizer", amount=1, cooldown=600)},
    "Mareep":     {"lifespan": 70,  "types": ("electric",),
                   "ability": DailyProduction(item="wool", amount=1, double_chance=0.1)},
    "Flaaffy":    {"lifespan": 100, "types": ("electric",),
                   "ability": DailyProduction(item="wool", amount=2, double_chance=0.1)},
    "Ampharos":   {"lifespan": 150, "types": ("electric",),
                   "ability": DailyProduction(item="wool", amount=3, double_chance=0.15)},
    "Pichu":      {"lifespan": 50,  "types": ("electric",)},
    "Pikachu":    {"lifespan": 90,  "types": ("electric",),
                   "ability": DailyFind(chance=0.15, items=("metal",))},
    "Raichu":     {"lifespan": 130, "types": ("electric",),
                   "ability": DailyFind(chance=0.25, items=("metal",))},

    # ── Farm area (day) ──────────────────────────────────────────────
    "Diglett":    {"lifespan": 70,  "tags": ("farm",), "ability": FertilizeCrop(cooldown=300)},
    "Dugtrio":    {"lifespan": 110, "tags": ("farm",), "ability": FertilizeCrop(cooldown=180)},
    "Pidgey":     {"lifespan": 60,  "speed": 40, "tags": ("farm", "flying"),
                   "ability": DailyFind(chance=0.2, items=SEEDS)},
    "Pidgeotto":  {"lifespan": 90,  "speed": 45, "tags": ("farm", "flying"),
                   "ability": DailyFind(chance=0.3, items=SEEDS)},
    "Pidgeot":    {"lifespan": 130, "speed": 55, "tags": ("farm", "flying"),
                   "ability": DailyFind(chance=0.4, items=SEEDS)},
    "Bulbasaur":  {"lifespan": 80,  "tags": ("farm",), "ability": HarvestWildPlant(cooldown=240)},
    "Ivysaur":    {"lifespan": 110, "tags": ("farm",), "ability": HarvestWildPlant(cooldown=180)},
    "Venusaur":   {"lifespan": 160, "tags": ("farm",), "ability": HarvestWildPlant(cooldown=120)},

    # ── Farm area (night) ────────────────────────────────────────────
    "Zubat":      {"lifespan": 60,  "speed": 42, "tags": ("farm", "flying"),
                   "ability": FertilizeCrop(cooldown=300)},
    "Golbat":     {"lifespan": 90,  "speed": 48, "tags": ("farm", "flying"),
                   "ability": FertilizeCrop(cooldown=220)},
    "Crobat":     {"lifespan": 130, "speed": 60, "tags": ("farm", "flying"),
                   "ability": FertilizeCrop(cooldown=150)},
    "Hoothoot":   {"lifespan": 70,  "speed": 40, "tags": ("farm", "flying"),
                   "ability": DailyFind(chance=0.2, items=SEEDS)},
    "Noctowl":    {"lifespan": 120, "speed": 48, "tags": ("farm", "flying"),
                   "ability": DailyFind(chance=0.35, items=SEEDS)},
    "Oddish":     {"lifespan": 70,  "tags": ("farm",), "ability": HarvestWildPlant(cooldown=240)},
    "Gloom":      {"lifespan": 100, "tags": ("farm",), "ability": HarvestWildPlant(cooldown=180)},
    "Vileplume":  {"lifespan": 140, "tags": ("farm",), "ability": HarvestWildPlant(cooldown=120)},

    # ── Lake ─────────────────────────────────────────────────────────
    "Squirtle":   {"lifespan": 80,  "types": ("water",), "ability": WaterCrop(cooldown=120)},
    "Wartortle":  {"lifespan": 110, "types": ("water",), "ability": WaterCrop(cooldown=90)},
    "Blastoise":  {"lifespan": 160, "types": ("water",), "ability": WaterCrop(cooldown=60)},
    "Lotad":      {"lifespan": 80,  "types": ("water",), "ability": WaterCrop(cooldown=120)},
    "Lombre":     {"lifespan": 110, "types": ("water",), "ability": WaterCrop(cooldown=90)},
    "Ludicolo":   {"lifespan": 160, "types": ("water",), "ability": WaterCrop(cooldown=60)},
    "Goldeen":    {"lifespan": 60,  "types": ("water",),
                   "ability": DailyFind(chance=0.1, items=("pearl",))},
    "Seaking":    {"lifespan": 100, "types": ("water",),
                   "ability": DailyFind(chance=0.2, items=("pearl",))},
    "Abra":       {"lifespan": 80,  "tags": ("teleport",),
                   "ability": DailyFind(chance=0.05, items=("evolution_stone",))},
    "Kadabra":    {"lifespan": 110, "tags": ("teleport",),
                   "ability": DailyFind(chance=0.08, items=("evolution_stone",))},
    "Alakazam":   {"lifespan": 160, "tags": ("teleport",),
                   "ability": DailyFind(chance=0.12, items=("evolution_stone",))},

    # ── River ────────────────────────────────────────────────────────
    "Magikarp":   {"lifespan": 40,  "types": ("water",), "tags": ("river",)},
    "Gyarados":   {"lifespan": 180, "speed": 45, "types": ("water",), "tags": ("river",)},
    "Psyduck":    {"lifespan": 80,  "types": ("water",), "tags": ("river",),
                   "ability": DailyFind(chance=0.1, items=("pearl",))},
    "Golduck":    {"lifespan": 120, "types": ("water",), "tags": ("river",),
                   "ability": DailyFind(chance=0.2, items=("pearl",))},
    "Lapras":     {"lifespan": 250, "types": ("water",), "tags": ("river",)},

    # ── Mine / rocks / trees ─────────────────────────────────────────
    "Onix":       {"lifespan": 200, "ability": ProduceItem(item="stone", cooldown=300, home_only=True)},
    "Steelix":    {"lifespan": 300, "ability": ProduceItem(item="metal", cooldown=600, home_only=True)},
    "Geodude":    {"lifespan": 90,  "ability": ProduceItem(item="stone", cooldown=400)},
    "Graveler":   {"lifespan": 130, "ability": ProduceItem(item="stone", cooldown=300)},
    "Golem":      {"lifespan": 180, "ability": ProduceItem(item="stone", cooldown=200)},
    "Timburr":    {"lifespan": 80,  "ability": ProduceItem(item="wood", cooldown=300)},
    "Gurdurr":    {"lifespan": 120, "ability": ProduceItem(item="wood", cooldown=220)},
    "Conkeldurr": {"lifespan": 170, "ability": ProduceItem(item="wood", cooldown=150)},

    # ── Orchard ──────────────────────────────────────────────────────
    "Mankey":     {"lifespan": 70,  "speed": 36, "ability": HarvestAppleTree(cooldown=300)},
    "Primeape":   {"lifespan": 100, "speed": 40, "ability": HarvestAppleTree(cooldown=240)},
    "Annihilape": {"lifespan": 200, "speed": 44, "ability": HarvestAppleTree(cooldown=180)},
    "Aipom":      {"lifespan": 80,  "speed": 38, "ability": HarvestAppleTree(cooldown=300)},
    "Ambipom":    {"lifespan": 120, "speed": 42, "ability": HarvestAppleTree(cooldown=200)},
    "Combee":     {"lifespan": 40,  "speed": 36, "tags": ("flying",),
                   "ability": DailyProduction(item="honey", amount=1, double_chance=0.2)},
    "Vespiquen":  {"lifespan": 120, "speed": 36, "gender": "female", "tags": ("flying",),
                   "ability": DailyProduction(item="honey", amount=3, double_chance=0.2)},

    # ── Campfire / gym / lab ─────────────────────────────────────────
    "Charmander": {"lifespan": 80,  "types": ("fire",),
                   "ability": DailyConversion(source="wood", product="charcoal", amount=2)},
    "Charmeleon": {"lifespan": 110, "types": ("fire",),
                   "ability": DailyConversion(source="wood", product="charcoal", amount=3)},
    "Charizard":  {"lifespan": 170, "speed": 45, "types": ("fire",),
                   "ability": DailyConversion(source="wood", product="charcoal", amount=5)},
    "Machop":     {"lifespan": 80,  "ability": PassiveIncome(rate=0.003)},
    "Machoke":    {"lifespan": 110, "ability": PassiveIncome(rate=0.005)},
    "Machamp":    {"lifespan": 160, "ability": PassiveIncome(rate=0.008)},
    "Porygon":    {"lifespan": 150, "ability": FossilAccelerator(bonus=0.25)},
    "Porygon2":   {"lifespan": 200, "ability": FossilAccelerator(bonus=0.5)},
    "Porygon-Z":  {"lifespan": 250, "ability": FossilAccelerator(bonus=1.0)},
    "Happiny":    {"lifespan": 70,  "gender": "female", "ability": Healer(chance=0.3)},
    "Chansey":    {"lifespan": 120, "gender": "female", "ability": Healer(chance=0.5)},
    "Blissey":    {"lifespan": 180, "gender": "female", "ability": Healer(chance=0.8)},

    # ── Ghosts ───────────────────────────────────────────────────────
    "Gastly":     {"lifespan": 100, "tags": ("flying",),
                   "ability": DailyFind(chance=0.1, items=("evolution_stone",))},
    "Haunter":    {"lifespan": 140, "tags": ("flying",),
                   "ability": DailyFind(chance=0.15, items=("evolution_stone",))},
    "Gengar":     {"lifespan": 200, "ability": DailyFind(chance=0.2, items=("evolution_stone",))},
    "Litwick":    {"lifespan": 100, "types": ("fire",)},
    "Lampent":    {"lifespan": 140, "types": ("fire",)},
    "Chandelure": {"lifespan": 200, "types": ("fire",)},

    # ── Fossils ──────────────────────────────────────────────────────
    "Kabuto":     {"types": ("water",)},
    "Kabutops":   {"types": ("water",)},
    "Omanyte":    {"types": ("water",)},
    "Omastar":    {"types": ("water",)},
    "Aerodactyl": {"speed": 60, "tags": ("flying",)},
    "Tyrunt":     {},
    "Tyrantrum":  {},
    "Amaura":     {},
    "Aurorus":    {},
    "Tirtouga":   {"types": ("water",)},
    "Carracosta": {"types": ("water",)},
    "Archen":     {},
    "Archeops":   {"speed": 50},
    "Cranidos":   {},
    "Rampardos":  {},
    "Shieldon":   {},
    "Bastiodon":  {},
    "Lileep":     {},
    "Cradily":    {},
    "Anorith":    {},
    "Armaldo":    {},
}

FAMILIES: dict[str, tuple[str, ...]] = {
    "torchic":  ("Torchic", "Combusken", "Blaziken"),
    "mareep":   ("Mareep", "Flaaffy", "Ampharos"),
    "squirtle": ("Squirtle", "Wartortle", "Blastoise", "Lotad", "Lombre", "Ludicolo"),
    "porygon":  ("Porygon", "Porygon2", "Porygon-Z"),
    "abra":     ("Abra", "Kadabra", "Alakazam"),
    "combee":   ("Combee", "Vespiquen"),
    "rattata":  ("Rattata", "Raticate"),
    "ekans":    ("Ekans", "Arbok"),
    "onix":     ("Onix", "Steelix"),
    "river":    ("Magikarp", "Gyarados", "Psyduck", "Golduck", "Lapras"),
}

EVOLUTIONS: dict[str, str] = {
    "Growlithe": "Arcanine", "Meowth": "Persian", "Spearow": "Fearow",
    "Rattata": "Raticate", "Ekans": "Arbok",
    "Torchic": "Combusken", "Combusken": "Blaziken",
    "Mareep": "Flaaffy", "Flaaffy": "Ampharos",
    "Pichu": "Pikachu", "Pikachu": "Raichu",
    "Diglett": "Dugtrio",
    "Pidgey": "Pidgeotto", "Pidgeotto": "Pidgeot",
    "Bulbasaur": "Ivysaur", "Ivysaur": "Venusaur",
    "Zubat": "Golbat", "Golbat": "Crobat",
    "Hoothoot": "Noctowl",
    "Oddish": "Gloom", "Gloom": "Vileplume",
    "Squirtle": "Wartortle", "Wartortle": "Blastoise",
    "Lotad": "Lombre", "Lombre": "Ludicolo",
    "Goldeen": "Seaking",
    "Abra": "Kadabra", "Kadabra": "Alakazam",
    "Magikarp": "Gyarados", "Psyduck": "Golduck",
    "Onix": "Steelix",
    "Geodude": "Graveler", "Graveler": "Golem",
    "Timburr": "Gurdurr", "Gurdurr": "Conkeldurr",
    "Mankey": "Primeape", "Primeape": "Annihilape",
    "Aipom": "Ambipom", "Combee": "Vespiquen",
    "Charmander": "Charmeleon", "Charmeleon": "Charizard",
    "Machop": "Machoke", "Machoke": "Machamp",
    "Porygon": "Porygon2", "Porygon2": "Porygon-Z",
    "Happiny": "Chansey", "Chansey": "Blissey",
    "Gastly": "Haunter", "Haunter": "Gengar",
    "Litwick": "Lampent", "Lampent": "Chandelure",
    "Kabuto": "Kabutops", "Omanyte": "Omastar", "Tyrunt": "Tyrantrum",
    "Amaura": "Aurorus", "Tirtouga": "Carracosta", "Archen": "Archeops",
    "Cranidos": "Rampardos", "Shieldon": "Bastiodon", "Lileep": "Cradily",
    "Anorith": "Armaldo",
}

# Day species → (night species, hour the day form goes to sleep).
NIGHT_COUNTERPARTS: dict[str, tuple[str, int]] = {
    "Pidgey":    ("Hoothoot", 20),
    "Diglett":   ("Zubat", 21),
    "Bulbasaur": ("Oddish", 20),
    "Squirtle":  ("Lotad", 19),
}
DAY_COUNTERPARTS: dict[str, str] = {night: day for day, (night, _) in NIGHT_COUNTERPARTS.items()}

FOSSILS: dict[str, str] = {
    "dome_fossil": "Kabuto",
    "helix_fossil": "Omanyte",
    "old_amber": "Aerodactyl",
    "jaw_fossil": "Tyrunt",
    "sail_fossil": "Amaura",
    "cover_fossil": "Tirtouga",
    "plume_fossil": "Archen",
    "skull_fossil": "Cranidos",
    "armor_fossil": "Shieldon",
    "root_fossil": "Lileep",
    "claw_fossil": "Anorith",
}

# Collecting one of these may shake a creature loose (once per species per day).
RESOURCE_CREATURES: dict[str, str] = {
    "oak_tree": "Timburr",
    "pine_tree": "Timburr",
    "rock": "Geodude",
    "wild_plant": "Bulbasaur",
    "apple_tree": "Mankey",
}

GHOSTS: tuple[str, ...] = ("Gastly", "Litwick")
STARTERS: tuple[str, ...] = ("Growlithe", "Meowth")
