"""simulation/snapshot.py — World ⇄ plain-dict bridge for saves.

``snapshot`` flattens the world into JSON-able data; ``rehydrate``
rebuilds a live world from it, keeping every entity id so home links
and team slots stay valid.

A single ``_COMPONENT_TABLE`` maps descriptor keys to component classes
and their loaders.  Each entity is written as ``{"id": eid, <key>: {...}}``
with one sub-dict per component it carries; the category it is listed
under comes from its marker component (Building, Harvestable, CropPlot,
Creature).
"""

from __future__ import annotations
from dataclasses import asdict, fields
from datetime import datetime
from typing import Any, Callable

from components import (
    Position, Brain, Home, Teleporter, Creature, Happiness, Modifier,
    Building, Harvestable, CropPlot, Inventory, Skills,
    GameClock, Terrain, Special, FertileZone, Decoration,
    Farmer, Ticket, RespawnQueue, DailyLedger, Weather, FarmFlags, DevLog,
)
from core import tuning
from core.constants import OFFLINE_THRESHOLD
from core.ecs import World

FORMAT_VERSION = 1


# ── Field helpers ────────────────────────────────────────────────────

def _build(cls: type, data: dict | None) -> Any:
    """Construct *cls* from *data*, ignoring keys it doesn't know."""
    data = data or {}
    names = {f.name for f in fields(cls)}
    return cls(**{k: v for k, v in data.items() if k in names})


def _points(raw) -> list[tuple[float, float]]:
    return [(float(x), float(y)) for x, y in raw or []]


def _load_brain(d: dict) -> Brain:
    brain = _build(Brain, d)
    if brain.target is not None:
        brain.target = (float(brain.target[0]), float(brain.target[1]))
    return brain


def _load_happiness(d: dict) -> Happiness:
    mods = {name: _build(Modifier, m) for name, m in d.get("modifiers", {}).items()}
    return Happiness(value=float(d.get("value", 50.0)), modifiers=mods)


# ── Component table ──────────────────────────────────────────────────
# Each entry: (descriptor_key, ComponentClass, loader)

_COMPONENT_TABLE: list[tuple[str, type, Callable[[dict], Any]]] = [
    ("position",    Position,    lambda d: _build(Position, d)),
    ("building",    Building,    lambda d: _build(Building, d)),
    ("harvestable", Harvestable, lambda d: _build(Harvestable, d)),
    ("plot",        CropPlot,    lambda d: _build(CropPlot, d)),
    ("creature",    Creature,    lambda d: _build(Creature, d)),
    ("brain",       Brain,       _load_brain),
    ("home",        Home,        lambda d: _build(Home, d)),
    ("happiness",   Happiness,   _load_happiness),
    ("teleporter",  Teleporter,  lambda d: _build(Teleporter, d)),
]

# (list key, marker component)
_CATEGORIES: list[tuple[str, type]] = [
    ("buildings", Building),
    ("resources", Harvestable),
    ("plots", CropPlot),
    ("creatures", Creature),
]


def _dump_entity(world: World, eid: int) -> dict[str, Any]:
    ent: dict[str, Any] = {"id": eid}
    for key, cls, _ in _COMPONENT_TABLE:
        comp = world.get(eid, cls)
        if comp is not None:
            ent[key] = asdict(comp)
    return ent


# ── Resources ────────────────────────────────────────────────────────

def _dump_terrain(terrain: Terrain) -> dict[str, Any]:
    return {
        "width": terrain.width,
        "height": terrain.height,
        "specials": [{"kind": s.kind, "points": [list(p) for p in s.points]}
                     for s in terrain.specials],
        "fertile_zones": [{"shape": z.shape, "center": list(z.center),
                           "radius": z.radius,
                           "points": [list(p) for p in z.points]}
                          for z in terrain.fertile_zones],
        "decorations": [asdict(d) for d in terrain.decorations],
    }


def _load_terrain(d: dict) -> Terrain:
    return Terrain(
        width=int(d.get("width", 2400)),
        height=int(d.get("height", 1600)),
        specials=[Special(s["kind"], _points(s.get("points")))
                  for s in d.get("specials", [])],
        fertile_zones=[FertileZone(z.get("shape", "poly"),
                                   tuple(z.get("center", (0.0, 0.0))),
                                   float(z.get("radius", 0.0)),
                                   _points(z.get("points")))
                       for z in d.get("fertile_zones", [])],
        decorations=[_build(Decoration, dec) for dec in d.get("decorations", [])],
    )


def _load_farmer(d: dict) -> Farmer:
    farmer = _build(Farmer, {k: v for k, v in d.items()
                             if k not in ("inventory", "skills")})
    if "inventory" in d:
        farmer.inventory = Inventory(dict(d["inventory"].get("items", {})))
    farmer.skills = _build(Skills, d.get("skills"))
    farmer.team = [int(e) for e in d.get("team", [])]
    return farmer


def snapshot(world: World) -> dict[str, Any]:
    """Flatten *world* into a JSON-able dict."""
    clock = world.res(GameClock)
    queue = world.res(RespawnQueue) or RespawnQueue()
    data: dict[str, Any] = {
        "version": FORMAT_VERSION,
        "next_id": world.next_id,
        "clock": asdict(clock) if clock else None,
        "farmer": asdict(world.res(Farmer) or Farmer()),
        "terrain": _dump_terrain(world.res(Terrain) or Terrain()),
        "queue": [asdict(t) for t in queue.tickets],
        "ledger": asdict(world.res(DailyLedger) or DailyLedger()),
        "weather": asdict(world.res(Weather) or Weather()),
        "flags": asdict(world.res(FarmFlags) or FarmFlags()),
    }
    seen: set[int] = set()
    for list_key, marker in _CATEGORIES:
        entries = []
        for eid, _ in world.all_of(marker):
            if eid in seen:
                continue
            seen.add(eid)
            entries.append(_dump_entity(world, eid))
        data[list_key] = entries
    return data


def _catch_up(world: World, elapsed: float) -> None:
    """Apply time that passed while the game was closed."""
    farmer = world.res(Farmer)
    regen = tuning.get("farmer", "energy_regen", 0.05)
    farmer.energy = min(farmer.max_energy, farmer.energy + regen * elapsed)
    for ticket in world.res(RespawnQueue).tickets:
        ticket.timer -= elapsed
    print(f"[SAVE] Caught up {elapsed:.0f}s of offline time")


def rehydrate(data: dict[str, Any], now: datetime | None = None) -> World:
    """Rebuild a live world from ``snapshot`` output."""
    from simulation.farm import setup_bus

    now = now or datetime.now()
    world = World()

    clock = _build(GameClock, data.get("clock"))
    world.set_res(clock)
    world.set_res(_load_farmer(data.get("farmer") or {}))
    world.set_res(_load_terrain(data.get("terrain") or {}))
    world.set_res(RespawnQueue([_build(Ticket, t) for t in data.get("queue", [])]))
    world.set_res(_build(DailyLedger, data.get("ledger")))
    world.set_res(_build(Weather, data.get("weather")))
    world.set_res(_build(FarmFlags, data.get("flags")))
    world.set_res(DevLog())
    setup_bus(world)

    for list_key, _ in _CATEGORIES:
        for ent in data.get(list_key, []):
            eid = world.spawn(int(ent["id"]))
            for key, _, loader in _COMPONENT_TABLE:
                if key in ent:
                    world.add(eid, loader(ent[key]))
    world.next_id = data.get("next_id", 0)

    for _, creature in world.all_of(Creature):
        creature.is_new = False

    if clock.last_update:
        elapsed = now.timestamp() - clock.last_update
        if elapsed > OFFLINE_THRESHOLD:
            _catch_up(world, elapsed)
    clock.last_update = now.timestamp()
    return world
