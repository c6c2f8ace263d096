"""simulation/clock.py — Time of day and day-boundary detection.

Two clock modes share one contract: ``day_key()`` returns a string that
changes exactly once per in-game day, and ``advance()`` runs the daily
cycle whenever it differs from ``GameClock.last_date``.

``"wall"``   hour comes from the real clock; the key is the calendar
             date shifted back by ``day_change_hour`` (so with the
             default 6, 05:59 still counts as yesterday)
``"fixed"``  ``dt`` accumulates into ``game_seconds`` at
             ``86400 / day_length`` in-game seconds per real second; the
             key is the whole-day count past ``day_change_hour``
"""

from __future__ import annotations
import math
from datetime import datetime, timedelta

from components import GameClock
from core.constants import SECONDS_PER_DAY


def day_key(clock: GameClock, now: datetime) -> str:
    if clock.mode == "fixed":
        shifted = clock.game_seconds - clock.day_change_hour * 3600
        return str(math.floor(shifted / SECONDS_PER_DAY))
    shifted = now - timedelta(hours=clock.day_change_hour)
    return f"{shifted.year}-{shifted.month:02d}-{shifted.day:02d}"


def sync_clock(clock: GameClock, dt: float, now: datetime) -> None:
    """Advance the clock by *dt* and refresh the time of day."""
    clock.time += dt
    if clock.mode == "fixed":
        clock.game_seconds += clock.game_dt(dt)
        clock.seconds_of_day = clock.game_seconds % SECONDS_PER_DAY
    else:
        clock.seconds_of_day = float(now.hour * 3600 + now.minute * 60 + now.second)
    clock.last_update = now.timestamp()


def stamp(clock: GameClock, now: datetime) -> None:
    """Mark today as already processed (new games, loads)."""
    sync_clock(clock, 0.0, now)
    clock.last_date = day_key(clock, now)
    clock.last_hour = clock.hour
