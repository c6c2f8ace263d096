"""core/save.py — Farm persistence (separate from terrain templates).

Save files (JSON) store the whole runtime state produced by
``simulation.snapshot.snapshot``:
- clock, farmer, weather, flags, respawn queue, daily ledger
- terrain (so a save is self-contained)
- every building, resource, crop plot and creature, keyed by id

Terrain templates (NBT, ``core/nbt.py``) store only the static map.

When loading:
1. Read the slot's JSON
2. ``rehydrate`` it (same ids, offline catch-up)
3. On a missing or unreadable file, start a new farm instead
"""

from __future__ import annotations
import json
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from core.ecs import World


SAVES_DIR = Path("saves")


def get_save_file(slot: int = 0) -> Path:
    """Get the path for a save slot."""
    SAVES_DIR.mkdir(parents=True, exist_ok=True)
    return SAVES_DIR / f"slot{slot}.json"


def save_farm(world: "World", slot: int = 0, now: datetime | None = None) -> Path:
    """Write *world* to its slot.  Returns the path written."""
    from components import GameClock
    from simulation.snapshot import snapshot

    now = now or datetime.now()
    clock = world.res(GameClock)
    if clock is not None:
        clock.last_update = now.timestamp()

    save_path = get_save_file(slot)
    with open(save_path, "w") as f:
        json.dump(snapshot(world), f, indent=2)
    print(f"[SAVE] Farm saved to {save_path}")
    return save_path


def load_farm(slot: int = 0, now: datetime | None = None) -> "World":
    """Load a slot, or start a new farm if there's nothing usable there."""
    from simulation.farm import new_game
    from simulation.snapshot import rehydrate

    save_path = get_save_file(slot)
    if not save_path.exists():
        print(f"[SAVE] No save in slot {slot}, starting a new farm")
        return new_game(now)

    try:
        with open(save_path, "r") as f:
            data = json.load(f)
        world = rehydrate(data, now)
    except Exception as ex:
        print(f"[SAVE] Error loading save file: {ex}, starting a new farm")
        return new_game(now)
    print(f"[SAVE] Loaded farm from {save_path}")
    return world
