"""components — ECS component dataclasses, organised by domain.

Submodules
----------
spatial        Position
ai             Brain, Home, Teleporter
creature       Creature, Happiness, Modifier
farm           Building, Harvestable, CropPlot
abilities      the ability records (ConsumeAndYield … FossilAccelerator)
rpg            Inventory, Skills
resources      GameClock, Terrain, Farmer, RespawnQueue, DailyLedger, …
dev_log        DevLog

All public names are re-exported here so systems can simply
``from components import Position``.
"""

# ── Spatial ──────────────────────────────────────────────────────────
from components.spatial import Position

# ── AI ───────────────────────────────────────────────────────────────
from components.ai import Brain, Home, Teleporter

# ── Creatures ────────────────────────────────────────────────────────
from components.creature import Creature, Happiness, Modifier

# ── Farm objects ─────────────────────────────────────────────────────
from components.farm import Building, Harvestable, CropPlot

# ── RPG ──────────────────────────────────────────────────────────────
from components.rpg import Inventory, Skills

# ── World resources / singletons ─────────────────────────────────────
from components.resources import (
    GameClock, Terrain, Special, FertileZone, Decoration,
    Farmer, Ticket, RespawnQueue, DailyLedger, Weather, FarmFlags,
)

# ── Logging ──────────────────────────────────────────────────────────
from components.dev_log import DevLog

__all__ = [
    # spatial
    "Position",
    # ai
    "Brain", "Home", "Teleporter",
    # creatures
    "Creature", "Happiness", "Modifier",
    # farm
    "Building", "Harvestable", "CropPlot",
    # rpg
    "Inventory", "Skills",
    # resources
    "GameClock", "Terrain", "Special", "FertileZone", "Decoration",
    "Farmer", "Ticket", "RespawnQueue", "DailyLedger", "Weather", "FarmFlags",
    # logging
    "DevLog",
]
