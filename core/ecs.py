"""
core/ecs.py — Entity-Component-System

Entities are ints. Components are any object, stored by type.
Creatures, buildings, harvestables and crop plots are all entities;
their eids double as the ids the outside world refers to.

    w = World()
    e = w.spawn()
    w.add(e, Position(120.0, 340.0))
    w.add(e, Creature(species="Pidgey", name="Pidgey"))

    for eid, pos, creature in w.query(Position, Creature):
        pos.x += 1

Singletons (terrain, farmer, clock...) are stored as resources under the
reserved id ``-1``.
"""

from __future__ import annotations
from typing import Any, Iterator


class World:
    def __init__(self):
        self._next_id = 0
        self._stores: dict[type, dict[int, Any]] = {}
        self._dead: set[int] = set()

    # -- Entities --

    def spawn(self, eid: int | None = None) -> int:
        """Allocate a new entity id.

        Passing *eid* restores a specific id (used when rehydrating a
        snapshot); the counter is bumped past it so later spawns never
        collide.
        """
        if eid is None:
            self._next_id += 1
            return self._next_id
        if eid > self._next_id:
            self._next_id = eid
        self._dead.discard(eid)
        return eid

    @property
    def next_id(self) -> int:
        return self._next_id

    @next_id.setter
    def next_id(self, value: int):
        self._next_id = max(self._next_id, int(value))

    def kill(self, eid: int):
        self._dead.add(eid)

    def alive(self, eid: int | None) -> bool:
        if eid is None or eid in self._dead:
            return False
        return any(eid in store for store in self._stores.values())

    def purge(self):
        """Remove dead entities from all stores. Call once per frame."""
        for store in self._stores.values():
            for eid in self._dead:
                store.pop(eid, None)
        self._dead.clear()

    # -- Components --

    def add(self, eid: int, comp: Any):
        t = type(comp)
        if t not in self._stores:
            self._stores[t] = {}
        self._stores[t][eid] = comp

    def get(self, eid: int, comp_type: type) -> Any | None:
        if eid in self._dead:
            return None
        return self._stores.get(comp_type, {}).get(eid)

    def has(self, eid: int, comp_type: type) -> bool:
        return eid not in self._dead and eid in self._stores.get(comp_type, {})

    def remove(self, eid: int, comp_type: type):
        store = self._stores.get(comp_type)
        if store and eid in store:
            del store[eid]

    # -- Queries --

    def query(self, *types: type) -> Iterator[tuple]:
        """Yield (eid, comp1, comp2, ...) for entities that have ALL types.

        The smallest bucket is snapshotted before iterating, so systems
        may spawn or kill entities while walking the results.
        """
        if not types:
            return
        buckets = [(t, self._stores.get(t, {})) for t in types]
        buckets.sort(key=lambda b: len(b[1]))
        smallest = list(buckets[0][1])
        for eid in smallest:
            if eid < 0 or eid in self._dead:
                continue
            if all(eid in b for _, b in buckets):
                yield (eid, *(self._stores[t][eid] for t in types))

    def all_of(self, comp_type: type) -> Iterator[tuple[int, Any]]:
        """Yield (eid, component) for every living entity with this type."""
        for eid, comp in list(self._stores.get(comp_type, {}).items()):
            if eid >= 0 and eid not in self._dead:
                yield eid, comp

    def count(self, comp_type: type) -> int:
        return sum(1 for _ in self.all_of(comp_type))

    # -- Resources (singletons, not tied to entities) --

    def set_res(self, resource: Any):
        t = type(resource)
        if t not in self._stores:
            self._stores[t] = {}
        self._stores[t][-1] = resource

    def res(self, res_type: type) -> Any | None:
        return self._stores.get(res_type, {}).get(-1)
