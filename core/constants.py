"""core/constants.py — Shared constants used across the codebase.

Centralises the fixed rules of the farm so there's exactly one place to
change them.  Balance numbers (caps, odds, costs) live in
``data/tuning.toml`` instead; what's here is structural.

Unit System
-----------
    Distance / position     u       (world units, the map is ~2400×1600)
    Speed                   u/s
    Time (real)             s       (seconds of ``dt``)
    Time of day             s       (0 … 86 399, from the wall clock)
    Ages / lifespans        days    (in-game days = detected day changes)
    Money                   $       (float, passive income accrues per s)

Day Model
~~~~~~~~~
In ``wall`` mode the hour comes from the real clock and a day changes when
the date (shifted back by ``day_change_hour``) differs from the last one
processed.  In ``fixed`` mode ``DAY_LENGTH`` real seconds make one day.
"""

# ── Time ─────────────────────────────────────────────────────────────
SECONDS_PER_DAY: int = 86_400
DAY_LENGTH: float = 1_200.0            # real seconds per day in fixed mode
DAWN_HOUR = 6                          # night species give way at dawn
NIGHT_HOUR = 20                        # day/night swap threshold
DEATH_HOUR_RANGE = (7, 19)             # scheduled deaths happen in daylight
OFFLINE_THRESHOLD = 5.0                # seconds before offline catch-up applies

# ── Movement / behaviour ─────────────────────────────────────────────
ARRIVAL_RADIUS = 10.0
ACTION_ANIM_TIME = 1.0                 # "working" pose after an ability fires
WANDER_CHANCE = 0.01                   # per tick, while idle
HOME_PADDING = 10.0                    # rect homes keep residents this far in
FENCE_PADDING = 50.0                   # homeless creatures stay off the edge
ROUND_HOME_SCALE = 0.9                 # lakes / labs confine to 90% radius

# ── Placement ────────────────────────────────────────────────────────
STRUCT_PADDING = 20.0                  # no spawning this close to a building
BOUNDARY_PADDING = 20.0                # no building this close to the edge
SPAWN_MARGIN = 50                      # random spawns stay this far in

# ── Crop plot grid ───────────────────────────────────────────────────
PLOT_COLS = 5
PLOT_ROWS = 3
PLOT_W = 24
PLOT_H = 16
PLOT_SPACING = 28
PLOT_MATURE_DAYS = 0.5

# ── Player ───────────────────────────────────────────────────────────
TEAM_SIZE = 6
SKILL_MAX = {"manager": 5, "lucky": 2, "caretaker": 5, "trainer": 3}
MANAGER_INCOME_MULT = (1.0, 1.05, 1.10, 1.15, 1.20, 1.25)
LUCKY_SHINY_BONUS = (0.0, 0.0005, 0.001)
CARETAKER_HAPPINESS = (0, 2, 4, 6, 8, 10)
TRAINER_HUNT_BONUS = (0.0, 0.10, 0.15, 0.20)

# ── Well-being ───────────────────────────────────────────────────────
HAPPINESS_BASE = 50
HAPPINESS_MIN = 0
HAPPINESS_MAX = 100
