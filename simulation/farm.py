"""simulation/farm.py — Top-level entry points: new games and the frame step.

The host (``main.py``, a UI, a test) owns the loop and calls
``advance(world, dt)`` once per frame.  Everything else in the core is
reached from here.

    world = new_game()
    while running:
        if advance(world, dt):
            save_farm(world)        # a new day was processed

Frame order:
  1. clock sync (wall time or fixed-rate game time)
  2. continuous systems (energy, income, crops, creatures, respawns)
  3. day rollover, at most once: weather, daily production, daily spawns,
     special spawns, sleep swap
  4. otherwise, on an hour change, the sleep swap alone
  5. event drain and dead-entity purge
"""

from __future__ import annotations
from datetime import datetime
from typing import Any

from components import (
    GameClock, Farmer, RespawnQueue, DailyLedger, Weather, FarmFlags, Terrain,
    DevLog,
)
from core import tuning
from core.ecs import World
from core.events import EventBus, FARM_EVENTS
from logic.tick import tick_systems
from simulation.clock import day_key, sync_clock, stamp
from simulation.daily import roll_weather, daily_production
from simulation.spawns import daily_spawns, special_spawns, sleep_cycle
from simulation.worldgen import generate_world


def setup_bus(world: World) -> EventBus:
    """Install an ``EventBus`` that mirrors every farm event into the DevLog."""
    bus = EventBus()
    world.set_res(bus)
    if world.res(DevLog) is None:
        world.set_res(DevLog())

    def _mirror(event: Any) -> None:
        log = world.res(DevLog)
        clock = world.res(GameClock)
        eid = getattr(event, "eid", getattr(event, "protector_eid", -1))
        log.record(eid, "notice", event.message, name=type(event).__name__,
                   t=clock.time if clock else 0.0)
        print(f"[FARM] {event.message}")

    for event_type in FARM_EVENTS:
        bus.subscribe(event_type.__name__, _mirror)
    return bus


def new_game(now: datetime | None = None, *, mode: str | None = None) -> World:
    """Fresh farm with generated terrain and the day already stamped."""
    now = now or datetime.now()
    world = World()
    world.set_res(GameClock(
        mode=mode or tuning.get("clock", "mode", "wall"),
        day_length=tuning.get("clock", "day_length", 1200.0),
        day_change_hour=tuning.get("clock", "day_change_hour", 6),
    ))
    world.set_res(Terrain(width=tuning.get("world", "width", 2400),
                          height=tuning.get("world", "height", 1600)))
    world.set_res(Farmer())
    world.set_res(RespawnQueue())
    world.set_res(DailyLedger())
    world.set_res(Weather())
    world.set_res(FarmFlags())
    world.set_res(DevLog())
    setup_bus(world)

    generate_world(world)
    stamp(world.res(GameClock), now)
    print(f"[FARM] New farm started on day {world.res(GameClock).day}")
    return world


def advance(world: World, dt: float, now: datetime | None = None) -> bool:
    """Step the farm by *dt* seconds.  Returns True if a new day was processed."""
    now = now or datetime.now()
    clock = world.res(GameClock)
    sync_clock(clock, dt, now)

    tick_systems(world, dt)

    new_day = False
    key = day_key(clock, now)
    if key != clock.last_date:
        clock.last_date = key
        clock.day += 1
        weather = roll_weather(world)
        print(f"[FARM] Day {clock.day} begins ({weather})")
        daily_production(world)
        daily_spawns(world)
        special_spawns(world)
        sleep_cycle(world)
        new_day = True
    elif clock.hour != clock.last_hour:
        sleep_cycle(world)
    clock.last_hour = clock.hour

    bus = world.res(EventBus)
    if bus is not None:
        bus.drain()
    world.purge()
    return new_day
