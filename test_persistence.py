"""test_persistence.py — Snapshot, save slots, offline catch-up, NBT templates.

A generated farm is flattened, pushed through JSON and rebuilt; every
id, home link and team slot must survive.  Save slots are written to a
temporary directory.

Run:  python test_persistence.py
"""
from __future__ import annotations
import sys, json, random, tempfile, traceback
from datetime import datetime
from pathlib import Path

# ── Bootstrap ────────────────────────────────────────────────────────
from core.tuning import load as _load_tuning
_load_tuning()

import core.save as save_mod
from components import (
    Position, Creature, Home, Building, Harvestable, CropPlot, Terrain,
    Farmer, RespawnQueue, GameClock, Happiness, Modifier,
)
from core.events import EventBus
from core.nbt import save_terrain_nbt, load_terrain_nbt
from logic.factory import spawn_creature
from logic.residency import buildings_of_type
from simulation.farm import new_game
from simulation.snapshot import snapshot, rehydrate


# ── Test harness ─────────────────────────────────────────────────────

_passed = 0
_failed = 0
_UNDER_PYTEST = "pytest" in sys.modules

def ok(label: str):
    global _passed
    _passed += 1
    print(f"  [PASS] {label}")

def fail(label: str, detail: str = ""):
    global _failed
    _failed += 1
    msg = f"  [FAIL] {label}"
    if detail:
        msg += f" — {detail}"
    print(msg)

def check(cond: bool, label: str, detail: str = ""):
    if cond:
        ok(label)
    else:
        fail(label, detail)
        if _UNDER_PYTEST:
            raise AssertionError(f"{label}: {detail}" if detail else label)


NOW = datetime(2026, 4, 12, 10, 30)


def _populated_farm():
    """A generated farm with a homed creature on the team and some stock."""
    random.seed(11)
    w = new_game(NOW, mode="fixed")
    house_eid, house = buildings_of_type(w, "house")[0]
    pup = spawn_creature(w, "Growlithe", house.x + 20, house.y + 20, house_eid)
    w.get(pup, Happiness).modifiers["Companionship"] = Modifier(5, 2)
    farmer = w.res(Farmer)
    farmer.team = [pup]
    farmer.inventory.items["pearl"] = 2
    farmer.money = 1234.0
    w.res(RespawnQueue).push("rock", 300.0)
    w.res(GameClock).last_update = NOW.timestamp()
    return w, pup, house_eid


def _through_json(data: dict) -> dict:
    return json.loads(json.dumps(data))


# ═══════════════════════════════════════════════════════════════════════
#  1. Round trip
# ═══════════════════════════════════════════════════════════════════════

def test_round_trip():
    print("\n=== 1. snapshot → JSON → rehydrate ===")
    w, pup, house_eid = _populated_farm()
    data = _through_json(snapshot(w))
    back = rehydrate(data, NOW)

    for marker in (Building, Harvestable, CropPlot, Creature):
        before = sorted(eid for eid, _ in w.all_of(marker))
        after = sorted(eid for eid, _ in back.all_of(marker))
        check(before == after, f"1a: {marker.__name__} ids survive", f"{len(before)} vs {len(after)}")

    check(back.get(pup, Creature).species == "Growlithe", "1b: species restored")
    pos, orig = back.get(pup, Position), w.get(pup, Position)
    check((pos.x, pos.y) == (orig.x, orig.y), "1c: position restored")
    check(back.get(pup, Home).building_id == house_eid, "1d: home link restored")
    mod = back.get(pup, Happiness).modifiers.get("Companionship")
    check(mod is not None and mod.value == 5 and mod.days_left == 2,
          "1e: happiness modifiers restored")
    check(back.get(pup, Creature).is_new is False, "1f: loaded creatures aren't greeted again")

    farmer = back.res(Farmer)
    check(farmer.team == [pup] and farmer.money == 1234.0, "1g: team and wallet restored")
    check(farmer.inventory.items.get("pearl") == 2, "1h: inventory restored")
    tickets = back.res(RespawnQueue).tickets
    check(len(tickets) == 1 and tickets[0].type == "rock" and tickets[0].timer == 300.0,
          "1i: respawn queue restored", f"{tickets}")

    terrain, orig_t = back.res(Terrain), w.res(Terrain)
    check([s.kind for s in terrain.specials] == [s.kind for s in orig_t.specials]
          and terrain.specials[0].points == orig_t.specials[0].points,
          "1j: river and quarry outlines restored")
    check(len(terrain.fertile_zones) == len(orig_t.fertile_zones)
          and len(terrain.decorations) == len(orig_t.decorations),
          "1k: fertile zones and decorations restored")
    farm = [b for _, b in back.all_of(Building) if b.type == "farm_area"][0]
    check(farm.rect == [b for _, b in w.all_of(Building) if b.type == "farm_area"][0].rect,
          "1l: building footprints restored")
    check(back.res(EventBus) is not None, "1m: a loaded farm has an event bus")


def test_next_id():
    print("\n=== 2. Id allocation after load ===")
    w, _, _ = _populated_farm()
    highest = max(eid for eid, _ in w.all_of(Creature))
    back = rehydrate(_through_json(snapshot(w)), NOW)
    fresh = spawn_creature(back, "Rattata", 500, 500)
    check(fresh > highest, "2a: new ids don't collide with loaded ones",
          f"{fresh} <= {highest}")

    data = _through_json(snapshot(w))
    data.pop("next_id")
    back = rehydrate(data, NOW)
    fresh = spawn_creature(back, "Rattata", 500, 500)
    everything = [e for e, _ in w.all_of(Building)] + [e for e, _ in w.all_of(Creature)]
    check(fresh > max(everything), "2b: a missing counter is rebuilt from the loaded ids")


# ═══════════════════════════════════════════════════════════════════════
#  3. Offline catch-up
# ═══════════════════════════════════════════════════════════════════════

def test_offline_catch_up():
    print("\n=== 3. Offline catch-up ===")
    w, _, _ = _populated_farm()
    w.res(Farmer).energy = 10.0
    w.res(RespawnQueue).tickets[0].timer = 100.0
    data = _through_json(snapshot(w))

    data["clock"]["last_update"] = NOW.timestamp() - 60
    back = rehydrate(data, NOW)
    check(abs(back.res(Farmer).energy - 13.0) < 1e-6, "3a: energy regenerates while away",
          f"{back.res(Farmer).energy}")
    check(abs(back.res(RespawnQueue).tickets[0].timer - 40.0) < 1e-6,
          "3b: respawn timers run while away")
    check(back.res(GameClock).last_update == NOW.timestamp(), "3c: the clock is re-stamped")

    data["clock"]["last_update"] = NOW.timestamp() - 3
    back = rehydrate(data, NOW)
    check(back.res(Farmer).energy == 10.0, "3d: a short gap is ignored")

    data["clock"]["last_update"] = NOW.timestamp() - 100_000
    back = rehydrate(data, NOW)
    check(back.res(Farmer).energy == back.res(Farmer).max_energy, "3e: catch-up caps energy")


# ═══════════════════════════════════════════════════════════════════════
#  4. Save slots
# ═══════════════════════════════════════════════════════════════════════

def test_save_slots():
    print("\n=== 4. Save slots ===")
    old_dir = save_mod.SAVES_DIR
    with tempfile.TemporaryDirectory() as tmp:
        save_mod.SAVES_DIR = Path(tmp)
        try:
            w, pup, _ = _populated_farm()
            path = save_mod.save_farm(w, slot=2, now=NOW)
            check(path.exists() and path.name == "slot2.json", "4a: slot file written")

            back = save_mod.load_farm(slot=2, now=NOW)
            check(back.get(pup, Creature) is not None
                  and back.res(Farmer).inventory.items.get("pearl") == 2,
                  "4b: the saved farm loads back")

            random.seed(12)
            fresh = save_mod.load_farm(slot=5, now=NOW)
            check(len(buildings_of_type(fresh, "house")) == 1
                  and fresh.count(Creature) == 0, "4c: an empty slot starts a new farm")

            path.write_text("{ not json")
            random.seed(13)
            fresh = save_mod.load_farm(slot=2, now=NOW)
            check(fresh.get(pup, Creature) is None and len(buildings_of_type(fresh, "house")) == 1,
                  "4d: a corrupt save falls back to a new farm")

            for label, text in (("a list", "[]"),
                                ("a list inventory", '{"farmer": {"inventory": []}}')):
                path.write_text(text)
                fresh = save_mod.load_farm(slot=2, now=NOW)
                check(len(buildings_of_type(fresh, "house")) == 1
                      and fresh.res(Farmer) is not None,
                      f"4e: valid JSON of the wrong shape ({label}) starts a new farm")
        finally:
            save_mod.SAVES_DIR = old_dir


# ═══════════════════════════════════════════════════════════════════════
#  5. Terrain templates
# ═══════════════════════════════════════════════════════════════════════

def test_terrain_nbt():
    print("\n=== 5. NBT terrain templates ===")
    random.seed(14)
    terrain = new_game(NOW, mode="fixed").res(Terrain)
    with tempfile.TemporaryDirectory() as tmp:
        path = save_terrain_nbt(terrain, "farm", dir_path=Path(tmp))
        check(path.exists() and path.suffix == ".nbt", "5a: template written")
        back = load_terrain_nbt(path)

    check((back.width, back.height) == (terrain.width, terrain.height), "5b: map size kept")
    check([s.kind for s in back.specials] == [s.kind for s in terrain.specials],
          "5c: specials kept in order")
    close = all(abs(ax - bx) < 1e-9 and abs(ay - by) < 1e-9
                for a, b in zip(back.specials, terrain.specials)
                for (ax, ay), (bx, by) in zip(a.points, b.points))
    check(close and len(back.specials[0].points) == len(terrain.specials[0].points),
          "5d: outlines kept")
    check([(z.shape, z.center, z.radius) for z in back.fertile_zones]
          == [(z.shape, z.center, z.radius) for z in terrain.fertile_zones],
          "5e: fertile zones kept")
    check([d.kind for d in back.decorations] == [d.kind for d in terrain.decorations],
          "5f: decorations kept")


# ═══════════════════════════════════════════════════════════════════════
#  MAIN
# ═══════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    sections = [
        ("snapshot → JSON → rehydrate", test_round_trip),
        ("Id allocation after load", test_next_id),
        ("Offline catch-up", test_offline_catch_up),
        ("Save slots", test_save_slots),
        ("NBT terrain templates", test_terrain_nbt),
    ]

    for name, fn in sections:
        try:
            fn()
        except Exception:
            _failed += 1
            print(f"\n  [CRASH] {name} — unhandled exception:")
            traceback.print_exc()

    total = _passed + _failed
    print(f"\n{'=' * 60}")
    print(f"  Persistence Tests: {_passed} passed, {_failed} failed  "
          f"(total {total})")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
