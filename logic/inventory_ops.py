"""logic/inventory_ops.py — Canonical inventory item operations.

Every command that spends or grants items goes through here so the
"entries that reach 0 are deleted" rule holds everywhere.

Public API
----------
``count``          — quantity held (0 when absent)
``add_item``       — grant items
``consume_item``   — decrement item count, delete if zero
``has_items``      — check a whole ingredient/cost dict
``remove_items``   — spend a whole ingredient/cost dict (all or nothing)
"""

from __future__ import annotations


def count(inv, item_id: str) -> int:
    return inv.items.get(item_id, 0)


def add_item(inv, item_id: str, amount: int = 1) -> None:
    """Add *amount* of *item_id*.  Non-positive amounts are ignored."""
    if amount <= 0:
        return
    inv.items[item_id] = inv.items.get(item_id, 0) + amount


def consume_item(inv, item_id: str, count: int = 1) -> bool:
    """Decrement *item_id* in *inv.items* by *count*.  Delete if zero.

    Returns True if the item was available and consumed.
    """
    qty = inv.items.get(item_id, 0)
    if qty < count:
        return False
    inv.items[item_id] = qty - count
    if inv.items[item_id] <= 0:
        del inv.items[item_id]
    return True


def has_items(inv, items: dict[str, int]) -> bool:
    return all(inv.items.get(k, 0) >= v for k, v in items.items())


def remove_items(inv, items: dict[str, int]) -> bool:
    """Spend every entry of *items*, or nothing if any is short."""
    if not has_items(inv, items):
        return False
    for item_id, qty in items.items():
        consume_item(inv, item_id, qty)
    return True


def missing_items(inv, items: dict[str, int]) -> dict[str, int]:
    """Return ``{item: shortfall}`` for every entry *inv* can't cover."""
    return {k: v - inv.items.get(k, 0)
            for k, v in items.items() if inv.items.get(k, 0) < v}
