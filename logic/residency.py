"""logic/residency.py — Derived views of who lives where.

Buildings never hold resident lists.  A creature's ``Home`` stores a
building id and everything here recomputes residency by filtering
creatures on demand.  A ``Home`` whose id no longer names a live
building is treated as homeless.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from components import Building, Creature, Home
from data.buildings import BUILDINGS
from logic.species import family

if TYPE_CHECKING:
    from core.ecs import World


def home_of(world: "World", eid: int) -> tuple[int, Building] | None:
    """Return ``(building_eid, Building)`` for *eid*'s home, or None."""
    home = world.get(eid, Home)
    if home is None or home.building_id is None:
        return None
    bld = world.get(home.building_id, Building)
    if bld is None:
        return None
    return home.building_id, bld


def residents_of(world: "World", building_id: int) -> list[int]:
    return [eid for eid, _, home in world.query(Creature, Home)
            if home.building_id == building_id]


def home_mates(world: "World", eid: int) -> list[int]:
    """Other creatures sharing *eid*'s home (empty when homeless)."""
    found = home_of(world, eid)
    if found is None:
        return []
    return [other for other in residents_of(world, found[0]) if other != eid]


def buildings_of_type(world: "World", type_: str,
                      species: str | None = None) -> list[tuple[int, Building]]:
    """Every live building of *type_*, optionally filtered by resident tag."""
    out = []
    for eid, bld in world.all_of(Building):
        if bld.type != type_:
            continue
        if species is not None and bld.storage.get("species") != species:
            continue
        out.append((eid, bld))
    return out


def capacity_of(bld: Building) -> int:
    """Resident cap of *bld* (Mareep stables are smaller than Miltank ones)."""
    if bld.type == "stable":
        variant = {"Miltank": "stable_miltank", "Mareep": "stable_mareep"}.get(
            bld.storage.get("species"), "stable")
        return int(BUILDINGS[variant]["capacity"])
    return int(BUILDINGS.get(bld.type, {}).get("capacity", 0))


def has_room(world: "World", building_id: int) -> bool:
    """True if *building_id* can take one more resident.

    A lake's Squirtle line doesn't take a slot.
    """
    bld = world.get(building_id, Building)
    if bld is None:
        return False
    residents = residents_of(world, building_id)
    if bld.type == "lake":
        squirtles = family("squirtle")
        residents = [e for e in residents if world.get(e, Creature).species not in squirtles]
    return len(residents) < capacity_of(bld)


def count_species(world: "World", species: tuple[str, ...] | set[str]) -> int:
    return sum(1 for _, c in world.all_of(Creature) if c.species in species)
