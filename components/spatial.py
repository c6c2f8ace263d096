"""components.spatial — Where things are on the farm map.

All coordinates are world units; ``(0, 0)`` is the top-left corner.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Position:
    """Centre point of a creature, harvestable or crop plot."""
    x: float = 0.0
    y: float = 0.0
