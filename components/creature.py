"""components.creature — Species identity, life cycle and well-being."""

from __future__ import annotations
from dataclasses import dataclass, field


@dataclass
class Creature:
    """A farm creature's identity and life cycle.

    ``age`` and ``max_age`` are in days.  Once ``age`` passes ``max_age``
    the daily cycle sets ``death_hour`` and the behaviour engine removes
    the creature when the clock reaches it.  ``undying`` creatures (fossils,
    lucky ghosts) never age.

    ``counters`` holds species-specific tallies such as
    ``apples_harvested`` (Mankey line) or ``cured`` (Happiny line).
    """
    species: str
    name: str = ""
    shiny: bool = False
    gender: str = "female"
    age: int = 0
    max_age: int = 100
    undying: bool = False
    death_hour: int | None = None
    is_new: bool = True
    power: int | None = None
    counters: dict[str, int] = field(default_factory=dict)

    def __post_init__(self):
        if not self.name:
            self.name = self.species


@dataclass
class Modifier:
    """Named happiness contribution.

    ``days_left=None`` is a flat modifier; otherwise it decays by one
    each day and disappears after its last day.
    """
    value: float
    days_left: int | None = None

    @property
    def decaying(self) -> bool:
        return self.days_left is not None


@dataclass
class Happiness:
    value: float = 50.0
    modifiers: dict[str, Modifier] = field(default_factory=dict)

    def total(self) -> float:
        return sum(m.value for m in self.modifiers.values())
