"""components.rpg — Items and the farmer's progression."""

from __future__ import annotations
from dataclasses import dataclass, field


@dataclass
class Inventory:
    """Sparse item counts.  Entries that reach 0 are deleted."""
    items: dict[str, int] = field(default_factory=dict)


@dataclass
class Skills:
    manager: int = 0        # passive income multiplier
    lucky: int = 0          # shiny odds
    caretaker: int = 0      # flat happiness bonus
    trainer: int = 0        # protector hunt bonus

    def level(self, name: str) -> int:
        return int(getattr(self, name))
