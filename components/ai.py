"""components.ai — Creature brain state, home link, teleport timer."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Brain:
    """Per-creature behaviour state machine.

    ``state`` is one of ``"idle"``, ``"moving"``, ``"working"``.
    ``sleeping`` is orthogonal: a sleeping creature only does cooldown
    bookkeeping until the day/night swap wakes it.
    """
    state: str = "idle"
    target: tuple[float, float] | None = None
    cooldown: float = 0.0          # s until the next ability may fire
    action_timer: float = 0.0      # s left in the "working" pose
    speed: float = 30.0            # u/s
    sleeping: bool = False


@dataclass
class Home:
    """Weak link to the building a creature lives in.

    Only the id is stored; resolve it with ``logic.residency.home_of``.
    A dangling id simply means the creature is homeless.
    """
    building_id: int | None = None


@dataclass
class Teleporter:
    """Home/away blink cycle (Abra line)."""
    state: str = "home"            # "home" | "away"
    timer: float = 0.0             # s until the next blink
