"""core/events.py — Lightweight event bus.

Decouples the systems that *notice* something happened on the farm from
whatever *reports* it (toasts, the activity log, sounds).  The bus lives
as an ECS resource::

    from core.events import EventBus, CreatureEscaped
    bus = world.res(EventBus)
    bus.emit(CreatureEscaped(eid=42, name="Miltank", species="Miltank",
                             message="Miltank ran away, it has no home."))

Consumers subscribe with a callable::

    bus.subscribe("CreatureEscaped", my_handler)

And ``advance()`` drains once per frame::

    bus.drain()          # calls all handlers for pending events

Design rules:
  - Events are plain dataclasses — no behaviour.
  - ``emit()`` is O(1) (just appends).
  - ``drain()`` processes all queued events in FIFO order.
  - Handlers may emit new events; those are processed in the same drain.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable
from collections import defaultdict
import traceback


# ═══════════════════════════════════════════════════════════════════
#  Event definitions
# ═══════════════════════════════════════════════════════════════════

@dataclass
class CreatureArrived:
    """A creature joined the farm (spawn roll, founder, fossil, ghost)."""
    eid: int
    species: str
    shiny: bool = False
    message: str = ""


@dataclass
class CreatureDied:
    """A creature reached its scheduled death hour."""
    eid: int
    species: str
    name: str = ""
    ghost_eid: int | None = None
    message: str = ""


@dataclass
class CreatureEvolved:
    eid: int
    old_species: str
    new_species: str
    message: str = ""


@dataclass
class CreatureEscaped:
    """A resident lost its home and nowhere else had room."""
    eid: int
    name: str
    species: str
    message: str = ""


@dataclass
class AbilityFind:
    """A daily-find ability turned something up."""
    eid: int
    item: str
    message: str = ""


@dataclass
class PestAppeared:
    eid: int
    species: str
    message: str = ""


@dataclass
class PestRepelled:
    protector_eid: int
    pest_eid: int
    pest_species: str
    message: str = ""


@dataclass
class FossilRevived:
    eid: int
    species: str
    lab_eid: int
    message: str = ""


FARM_EVENTS: tuple[type, ...] = (
    CreatureArrived, CreatureDied, CreatureEvolved, CreatureEscaped,
    AbilityFind, PestAppeared, PestRepelled, FossilRevived,
)


# ═══════════════════════════════════════════════════════════════════
#  Event Bus
# ═══════════════════════════════════════════════════════════════════

class EventBus:
    """Fire-and-forget event bus stored as an ECS resource."""

    def __init__(self):
        self._queue: list[Any] = []
        self._subs: dict[str, list[Callable]] = defaultdict(list)

    # ── Public API ───────────────────────────────────────────────────

    def emit(self, event) -> None:
        """Queue an event for processing on next ``drain()``."""
        self._queue.append(event)

    def subscribe(self, event_type: str, handler: Callable) -> None:
        """Register *handler* for *event_type* (the class name)."""
        self._subs[event_type].append(handler)

    def drain(self) -> int:
        """Process all queued events.  Returns number processed."""
        processed = 0
        safety = 1000
        while self._queue and safety > 0:
            batch = self._queue[:]
            self._queue.clear()
            for event in batch:
                name = type(event).__name__
                for handler in self._subs.get(name, []):
                    try:
                        handler(event)
                    except Exception as exc:
                        print(f"[EVENT] handler error for {name}: {exc}")
                        traceback.print_exc()
            processed += len(batch)
            safety -= 1
        return processed

    def pending(self) -> list[Any]:
        """Events waiting to be drained (oldest first)."""
        return list(self._queue)

    def clear(self) -> None:
        """Discard all pending events."""
        self._queue.clear()

    def __repr__(self) -> str:
        return f"EventBus(pending={len(self._queue)}, subs={len(self._subs)})"
