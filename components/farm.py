"""components.farm — Buildings, harvestables and crop plots."""

from __future__ import annotations
from dataclasses import dataclass, field


@dataclass
class Building:
    """A placed structure.

    ``x, y`` is the top-left corner and ``w, h`` the footprint as placed
    (already swapped for 90°/270° rotations).  ``storage`` is a small
    bag: ``species`` (resident tag for stables, mines, coops, lakes),
    ``fossil`` + ``progress`` (laboratory revival).
    """
    type: str
    x: float
    y: float
    w: float
    h: float
    rotation: int = 0
    storage: dict = field(default_factory=dict)

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.w / 2, self.y + self.h / 2)

    @property
    def rect(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.w, self.h)


@dataclass
class Harvestable:
    """Tree, rock or wild plant.  Paired with a ``Position``."""
    type: str
    size: float = 1.0
    shape_variant: int = 0
    size_variant: int = 0
    spawn_day: int | None = None
    state: str | None = None        # wild plants: "bush" → "flower"

    @property
    def is_tree(self) -> bool:
        return self.type.endswith("_tree")


@dataclass
class CropPlot:
    """One tile of a farm area's planting grid.  Paired with a ``Position``.

    ``empty → growing`` on planting, ``growing → mature`` once
    ``growth_days`` reaches ``mature_days``, ``mature → empty`` on harvest.
    """
    state: str = "empty"
    crop: str | None = None          # seed id while growing / mature
    watered: bool = False
    fertilized: bool = False
    growth_days: float = 0.0
    mature_days: float = 0.5
    rotation: int = 0

    def plant(self, seed: str, mature_days: float = 0.5) -> None:
        self.state = "growing"
        self.crop = seed
        self.growth_days = 0.0
        self.mature_days = mature_days
        self.fertilized = False
        self.watered = False

    def reset(self) -> None:
        self.state = "empty"
        self.crop = None
        self.growth_days = 0.0
        self.fertilized = False
        self.watered = False
