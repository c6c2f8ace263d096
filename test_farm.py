"""test_farm.py — Day rollover, daily production, spawn rolls, sleep swap.

Most sections run against a blank farm (resources installed, no
terrain features) so every building and creature is placed by hand.
Odds are pinned with ``tuning.override`` where a section needs a roll
to land; ``tuning.reset()`` undoes them.

Run:  python test_farm.py
"""
from __future__ import annotations
import sys, math, random, traceback
from datetime import datetime

# ── Bootstrap ────────────────────────────────────────────────────────
from core.tuning import load as _load_tuning
_load_tuning()

from core import tuning
from core.ecs import World
from core.events import (
    EventBus, PestRepelled, PestAppeared, CreatureArrived, FossilRevived,
)
from components import (
    GameClock, Terrain, Farmer, RespawnQueue, DailyLedger, Weather, FarmFlags,
    DevLog, Creature, Brain, Home, Happiness, Harvestable, CropPlot, Building,
    Position,
)
from logic.actions import plant_seed
from logic.factory import spawn_building, spawn_creature, spawn_resource, spawn_plot
from logic.residency import residents_of
from logic.species import family
from simulation.daily import (
    roll_weather, resolve_pests, reset_watering, advance_fossils,
    bloom_wild_plants, age_creatures, run_daily_abilities, daily_production,
)
from simulation.farm import advance, new_game, setup_bus
from simulation.spawns import daily_spawns, special_spawns, sleep_cycle, is_night


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


# ── Farm builders ────────────────────────────────────────────────────

def _blank_farm(hour: int = 12) -> World:
    w = World()
    w.set_res(GameClock(mode="fixed", seconds_of_day=hour * 3600.0))
    w.set_res(Terrain())
    w.set_res(Farmer())
    w.set_res(RespawnQueue())
    w.set_res(DailyLedger())
    w.set_res(Weather())
    w.set_res(FarmFlags())
    w.set_res(DevLog())
    setup_bus(w)
    return w


def _set_hour(w: World, hour: int):
    w.res(GameClock).seconds_of_day = hour * 3600.0


def _pending(w: World, event_type: type) -> list:
    return [e for e in w.res(EventBus).pending() if isinstance(e, event_type)]


# ═══════════════════════════════════════════════════════════════════════
#  1. advance() and the day boundary
# ═══════════════════════════════════════════════════════════════════════

def test_advance_rollover():
    print("\n=== 1. advance() rollover ===")
    tuning.reset()
    random.seed(10)

    w = new_game(NOW, mode="fixed")
    clock = w.res(GameClock)
    farmer = w.res(Farmer)
    seconds, money, day = clock.game_seconds, farmer.money, clock.day

    first = advance(w, 0, NOW)
    second = advance(w, 0, NOW)
    check(not first and not second, "1a: advance(0) never rolls the day")
    check(clock.day == day and clock.game_seconds == seconds,
          "1b: advance(0) leaves game time alone")
    check(farmer.money == money, "1c: advance(0) earns nothing")

    # fixed mode: 100 real s = 2 in-game hours; 08:00 → 06:00 is 11 steps
    rollovers = sum(1 for _ in range(12) if advance(w, 100, NOW))
    check(rollovers == 1, "1d: exactly one rollover across the boundary",
          f"got {rollovers}")
    check(clock.day == day + 1, "1e: day counter advanced once", f"day={clock.day}")

    before = clock.day
    check(advance(w, 5000, NOW), "1f: a multi-day step reports a new day")
    check(clock.day == before + 1, "1g: a multi-day step runs the cycle once",
          f"day {before} -> {clock.day}")
    check(not advance(w, 0, NOW), "1h: the skipped days are not replayed")


def test_crops_on_fast_clock():
    print("\n=== 1b. Crops on a one-minute day ===")
    tuning.reset()
    random.seed(12)

    w = new_game(NOW, mode="fixed")
    clock = w.res(GameClock)
    clock.day_length = 60.0
    plot_eid = next(eid for eid, _ in w.all_of(CropPlot))
    plot = w.get(plot_eid, CropPlot)
    check(plant_seed(w, plot_eid, "seed_grain_berry").ok, "1i: a plot is planted")

    # 0.1 real s = 144 in-game s; half a day is 300 steps
    for _ in range(250):
        advance(w, 0.1, NOW)
    check(plot.state == "growing", "1j: still growing after under half a day",
          f"{plot.growth_days:.3f} days")
    for _ in range(100):
        advance(w, 0.1, NOW)
    check(plot.state == "mature", "1k: mature after half an in-game day",
          f"{plot.growth_days:.3f} days")
    day = clock.day
    rolled = sum(1 for _ in range(250) if advance(w, 0.1, NOW))
    check(rolled == 1 and clock.day == day + 1, "1l: the same minute also turns the day")


def test_wall_clock():
    print("\n=== 2. Wall clock ===")
    tuning.reset()
    random.seed(11)

    start = datetime(2026, 3, 1, 12, 0)
    w = new_game(start, mode="wall")
    clock = w.res(GameClock)

    check(not advance(w, 1, datetime(2026, 3, 1, 23, 0)), "2a: same evening, same day")
    check(not advance(w, 1, datetime(2026, 3, 2, 5, 59)),
          "2b: before the day change hour still counts as yesterday")
    check(advance(w, 1, datetime(2026, 3, 2, 6, 0)), "2c: the day changes at 06:00")
    check(not advance(w, 1, datetime(2026, 3, 2, 6, 0)), "2d: and only once")
    check(clock.day == 2, "2e: day counter is 2", f"day={clock.day}")
    check(clock.hour == 6, "2f: hour follows the wall clock", f"hour={clock.hour}")


def test_new_day_resets_ledger():
    print("\n=== 3. Daily ledger ===")
    tuning.reset()
    random.seed(12)
    w = new_game(NOW, mode="fixed")
    w.res(DailyLedger).income["Meowth"] = 5.0
    w.res(DailyLedger).resource_spawns["Geodude"] = True
    advance(w, 1200, NOW)
    ledger = w.res(DailyLedger)
    check("Meowth" not in ledger.income, "3a: income resets on a new day")
    check(not ledger.resource_spawns, "3b: once-per-day resource spawns reset")


# ═══════════════════════════════════════════════════════════════════════
#  4. Pests and protectors
# ═══════════════════════════════════════════════════════════════════════

def test_pests():
    print("\n=== 4. Pest resolution ===")
    tuning.reset()

    worst = 0
    events_match = True
    for seed in range(30):
        random.seed(seed)
        w = _blank_farm()
        spawn_creature(w, "Growlithe", 500, 500)
        for i in range(3):
            spawn_creature(w, "Rattata", 600 + i * 10, 500)
        removed = resolve_pests(w)
        worst = max(worst, len(removed))
        if len(_pending(w, PestRepelled)) != len(removed):
            events_match = False
    check(worst <= 1, "4a: one protector chases off at most one pest", f"max {worst}")
    check(events_match, "4b: one PestRepelled per pest removed")

    hits = 0
    for seed in range(30):
        random.seed(seed)
        w = _blank_farm()
        for i in range(2):
            spawn_creature(w, "Growlithe", 500 + i * 10, 500)
        pest = spawn_creature(w, "Rattata", 600, 500)
        w.res(Farmer).team.append(pest)
        removed = resolve_pests(w)
        check(len(removed) <= 1, f"4c[{seed}]: never more removals than pests")
        if removed:
            hits += 1
            check(pest not in w.res(Farmer).team, f"4d[{seed}]: removed pest leaves the team")
    check(hits > 0, "4e: protectors do catch pests sometimes")

    random.seed(1)
    w = _blank_farm()
    guard = spawn_creature(w, "Growlithe", 500, 500)
    w.get(guard, Brain).sleeping = True
    spawn_creature(w, "Rattata", 600, 500)
    check(resolve_pests(w) == [], "4f: a sleeping protector does nothing")


# ═══════════════════════════════════════════════════════════════════════
#  5. Weather
# ═══════════════════════════════════════════════════════════════════════

def test_weather():
    print("\n=== 5. Weather ===")
    tuning.reset()
    random.seed(5)
    for kind, weight in (("clear", 0), ("rain", 1), ("storm", 0), ("harsh_sunlight", 0)):
        tuning.override("weather", kind, weight)

    w = _blank_farm()
    days = [roll_weather(w) for _ in range(12)]
    streak = longest = 0
    for today in days:
        streak = streak + 1 if today in ("rain", "storm") else 0
        longest = max(longest, streak)
    check(longest <= 3, "5a: no more than three wet days in a row", f"{days}")
    check("clear" in days, "5b: a forced clear day breaks the streak")
    check(w.res(Weather).yesterday == days[-2], "5c: yesterday's weather is kept")

    plot_eid = spawn_plot(w, 100, 100)
    plot = w.get(plot_eid, CropPlot)
    plot.plant("seed_grain_berry")
    w.res(Weather).today = "rain"
    reset_watering(w)
    check(plot.watered, "5d: rain waters growing plots")
    w.res(Weather).today = "clear"
    reset_watering(w)
    check(not plot.watered, "5e: a dry day resets watering")
    tuning.reset()


# ═══════════════════════════════════════════════════════════════════════
#  6. Daily spawns
# ═══════════════════════════════════════════════════════════════════════

def test_daily_spawns():
    print("\n=== 6. Daily spawns ===")
    tuning.reset()
    tuning.override("spawns", "daily_chance", 1.0)
    random.seed(6)

    w = _blank_farm()
    coop = spawn_building(w, "coop", 200, 200, 80, 60, storage={"species": "Torchic"})
    for _ in range(10):
        daily_spawns(w)
    chicks = [eid for eid, c in w.all_of(Creature) if c.species in family("Torchic")]
    check(len(chicks) == 4, "6a: coop fills to capacity and stops", f"got {len(chicks)}")
    check(all(w.get(e, Home).building_id == coop for e in chicks),
          "6b: coop spawns are homed in the coop")

    w = _blank_farm(hour=12)
    lakes = [spawn_building(w, "lake", 400 + i * 300, 300, 150, 150,
                            storage={"species": "Goldeen"}) for i in range(2)]
    for _ in range(5):
        daily_spawns(w)
    squirtles = [eid for eid, c in w.all_of(Creature) if c.species in family("squirtle")]
    homes = {w.get(e, Home).building_id for e in squirtles}
    check(len(squirtles) == 2, "6c: one Squirtle-line creature per lake", f"got {len(squirtles)}")
    check(homes == set(lakes), "6d: each lake gets its own")

    w = _blank_farm(hour=2)
    spawn_building(w, "lake", 400, 300, 150, 150)
    daily_spawns(w)
    kinds = [c.species for _, c in w.all_of(Creature)]
    check(kinds == ["Lotad"], "6e: a night lake spawn arrives as the night form", f"{kinds}")

    w = _blank_farm(hour=12)
    area = spawn_building(w, "farm_area", 600, 600, 160, 100)
    for _ in range(6):
        daily_spawns(w)
    residents = residents_of(w, area)
    check(len(residents) == 3, "6f: farm area fills to three", f"got {len(residents)}")
    kinds = {w.get(e, Creature).species for e in residents}
    check(kinds <= {"Pidgey", "Diglett"}, "6g: daytime farm spawns are day species", f"{kinds}")

    w = _blank_farm(hour=12)
    lab = spawn_building(w, "laboratory", 1000, 200, 120, 120)
    new = daily_spawns(w)
    check(len(new) == 1 and w.get(new[0], Creature).species == "Porygon",
          "6h: a laboratory attracts Porygon")
    check(_pending(w, CreatureArrived), "6i: Porygon arrival is announced")
    tuning.reset()


def test_daily_spawns_never_roll():
    print("\n=== 7. Spawn odds of zero ===")
    tuning.reset()
    tuning.override("spawns", "daily_chance", 0.0)
    random.seed(7)
    w = _blank_farm()
    spawn_building(w, "coop", 200, 200, 80, 60, storage={"species": "Torchic"})
    spawn_building(w, "lake", 400, 300, 150, 150)
    check(daily_spawns(w) == [] and w.count(Creature) == 0, "7a: nothing spawns at zero odds")
    tuning.reset()


def test_special_spawns():
    print("\n=== 8. Special spawns ===")
    tuning.reset()
    tuning.override("spawns", "rattata_chance", 0.0)
    tuning.override("spawns", "ekans_chance", 1.0)
    tuning.override("spawns", "spearow_chance", 1.0)
    random.seed(8)

    w = _blank_farm()
    coop = spawn_building(w, "coop", 200, 200, 80, 60, storage={"species": "Torchic"})
    flags = w.res(FarmFlags)

    special_spawns(w)
    kinds = [c.species for _, c in w.all_of(Creature)]
    check(kinds == ["Ekans"] and flags.met_ekans, "8a: Ekans comes first", f"{kinds}")
    check(_pending(w, PestAppeared), "8b: Ekans is announced as a pest")
    special_spawns(w)
    kinds = sorted(c.species for _, c in w.all_of(Creature))
    check(kinds == ["Ekans", "Spearow"] and flags.met_spearow,
          "8c: Spearow follows the Ekans", f"{kinds}")
    special_spawns(w)
    check(w.count(Creature) == 2, "8d: each arrives only once")
    ekans = next(eid for eid, c in w.all_of(Creature) if c.species == "Ekans")
    check(w.get(ekans, Home).building_id == coop, "8e: Ekans lives in the coop")

    tuning.override("spawns", "rattata_chance", 1.0)
    w = _blank_farm()
    area_eid = spawn_building(w, "farm_area", 600, 600, 160, 100)
    area = w.get(area_eid, Building)
    for _ in range(6):
        special_spawns(w)
    rats = [eid for eid, c in w.all_of(Creature) if c.species == "Rattata"]
    check(len(rats) == 3, "8f: Rattata stop at the cap", f"got {len(rats)}")
    inside = all(area.x <= w.get(e, Position).x <= area.x + area.w
                 and area.y <= w.get(e, Position).y <= area.y + area.h for e in rats)
    check(inside, "8g: Rattata turn up in the farm area")
    tuning.reset()


# ═══════════════════════════════════════════════════════════════════════
#  9. Sleep cycle
# ═══════════════════════════════════════════════════════════════════════

def test_sleep_cycle():
    print("\n=== 9. Sleep cycle ===")
    check(is_night(21) and is_night(3) and not is_night(12), "9a: night is 20:00 to 06:00")

    w = _blank_farm(hour=21)
    pidgey = spawn_creature(w, "Pidgey", 100, 100)
    owl = spawn_creature(w, "Hoothoot", 120, 100)
    w.get(owl, Brain).sleeping = True

    sleep_cycle(w)
    check(w.get(pidgey, Brain).sleeping, "9b: Pidgey goes to sleep at night")
    check(not w.get(owl, Brain).sleeping, "9c: Hoothoot wakes up in its place")

    _set_hour(w, 10)
    sleep_cycle(w)
    check(not w.get(pidgey, Brain).sleeping, "9d: Pidgey wakes up in the morning")
    check(w.get(owl, Brain).sleeping, "9e: Hoothoot goes to sleep by day")

    w = _blank_farm(hour=19)
    turtle = spawn_creature(w, "Squirtle", 100, 100)
    sleep_cycle(w)
    check(not w.get(turtle, Brain).sleeping, "9f: before nightfall nobody sleeps")
    _set_hour(w, 2)
    sleep_cycle(w)
    check(w.get(turtle, Brain).sleeping, "9g: small hours count as past the sleep hour")

    w = _blank_farm(hour=21)
    cow = spawn_creature(w, "Miltank", 100, 100)
    sleep_cycle(w)
    check(not w.get(cow, Brain).sleeping, "9h: species without a timetable stay awake")


# ═══════════════════════════════════════════════════════════════════════
#  10. Fossils, blooms, ageing, production
# ═══════════════════════════════════════════════════════════════════════

def test_fossils():
    print("\n=== 10. Fossil revival ===")
    tuning.reset()
    tuning.override("fossils", "days", 1)
    random.seed(10)

    w = _blank_farm()
    lab = spawn_building(w, "laboratory", 1000, 200, 120, 120,
                         storage={"fossil": "old_amber", "progress": 0.0})
    advance_fossils(w)
    revived = [(eid, c) for eid, c in w.all_of(Creature) if c.species == "Aerodactyl"]
    check(len(revived) == 1, "10a: a one-day fossil revives after one day")
    check(revived and revived[0][1].undying, "10b: revived fossils never age out")
    check("fossil" not in w.get(lab, Building).storage, "10c: the lab is free again")
    check(_pending(w, FossilRevived), "10d: revival is announced")

    tuning.override("fossils", "days", 2)
    w = _blank_farm()
    lab = spawn_building(w, "laboratory", 1000, 200, 120, 120,
                         storage={"fossil": "dome_fossil", "progress": 0.0})
    spawn_creature(w, "Porygon", 1060, 260, lab)
    advance_fossils(w)
    progress = w.get(lab, Building).storage.get("progress", 0.0)
    check(math.isclose(progress, 0.625), "10e: Porygon speeds revival up by a quarter",
          f"progress={progress}")
    advance_fossils(w)
    kinds = {c.species for _, c in w.all_of(Creature)}
    check("Kabuto" in kinds, "10f: the accelerated fossil revives on day two", f"{kinds}")
    tuning.reset()


def test_bloom_and_ageing():
    print("\n=== 11. Blooms and ageing ===")
    random.seed(11)
    w = _blank_farm()
    w.res(GameClock).day = 2
    old = spawn_resource(w, "wild_plant", 100, 100, day=1)
    fresh = spawn_resource(w, "wild_plant", 200, 100, day=2)
    bloom_wild_plants(w)
    check(w.get(old, Harvestable).state == "flower", "11a: a day-old bush flowers")
    check(w.get(fresh, Harvestable).state == "bush", "11b: a new bush doesn't")

    elder = spawn_creature(w, "Rattata", 300, 300)
    c = w.get(elder, Creature)
    c.age = c.max_age
    ghost = spawn_creature(w, "Gastly", 320, 300, undying=True)
    age_creatures(w)
    check(c.age == c.max_age + 1, "11c: creatures age a day")
    check(c.death_hour is not None and 7 <= c.death_hour <= 19,
          "11d: past lifespan a daylight death hour is set", f"{c.death_hour}")
    check(w.get(ghost, Creature).age == 0, "11e: undying creatures don't age")


def test_daily_abilities():
    print("\n=== 12. Daily abilities ===")
    random.seed(12)
    w = _blank_farm()
    spawn_creature(w, "Torchic", 100, 100)
    cow = spawn_creature(w, "Miltank", 200, 100)
    run_daily_abilities(w)
    items = w.res(Farmer).inventory.items
    check(items.get("egg") in (1, 2), "12a: Torchic lays an egg (or two)", f"{items.get('egg')}")
    check(items.get("milk") in (2, 4), "12b: Miltank gives milk", f"{items.get('milk')}")

    w.get(cow, Brain).sleeping = True
    milk = items.get("milk", 0)
    run_daily_abilities(w)
    check(items.get("milk", 0) == milk, "12c: sleeping creatures don't produce")

    caught = 0
    for seed in range(20):
        random.seed(seed)
        w = _blank_farm()
        guard = spawn_creature(w, "Growlithe", 100, 100)
        rat = spawn_creature(w, "Rattata", 200, 100)
        daily_production(w)
        mods = w.get(guard, Happiness).modifiers
        if w.alive(rat):
            check("Pest Stress" in mods, f"12d[{seed}]: a surviving pest stresses the farm")
        else:
            caught += 1
            check("Pest Stress" not in mods,
                  f"12e[{seed}]: a chased-off pest is gone before happiness is counted")
    check(caught > 0, "12f: daily production does chase pests off")


# ═══════════════════════════════════════════════════════════════════════
#  MAIN
# ═══════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    sections = [
        ("advance() rollover", test_advance_rollover),
        ("Crops on a one-minute day", test_crops_on_fast_clock),
        ("Wall clock", test_wall_clock),
        ("Daily ledger", test_new_day_resets_ledger),
        ("Pest resolution", test_pests),
        ("Weather", test_weather),
        ("Daily spawns", test_daily_spawns),
        ("Spawn odds of zero", test_daily_spawns_never_roll),
        ("Special spawns", test_special_spawns),
        ("Sleep cycle", test_sleep_cycle),
        ("Fossil revival", test_fossils),
        ("Blooms and ageing", test_bloom_and_ageing),
        ("Daily abilities", test_daily_abilities),
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
    print(f"  Farm Cycle Tests: {_passed} passed, {_failed} failed  "
          f"(total {total})")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
