"""components.resources — World-level singletons (not per-entity)."""

from __future__ import annotations
from dataclasses import dataclass, field

from components.rpg import Inventory, Skills


@dataclass
class GameClock:
    """Farm time.

    ``time`` is the monotonic sum of ``dt`` since session start.
    ``seconds_of_day`` is refreshed every ``advance()``, from the wall
    clock in ``"wall"`` mode or from ``game_seconds`` in ``"fixed"`` mode.
    ``last_date`` is the day key the daily cycle last ran for.
    ``last_update`` is the epoch time of the last advance or save, used
    to fast-forward offline time on load.
    """
    time: float = 0.0
    seconds_of_day: float = 0.0
    day: int = 1
    last_date: str = ""
    day_change_hour: int = 6
    mode: str = "wall"               # "wall" | "fixed"
    day_length: float = 1_200.0      # real s per day in fixed mode
    game_seconds: float = 8 * 3600.0
    last_update: float = 0.0
    last_hour: int = -1

    @property
    def hour(self) -> int:
        return int(self.seconds_of_day // 3600) % 24

    def game_dt(self, dt: float) -> float:
        """In-game seconds that pass in *dt* real seconds."""
        if self.mode == "fixed":
            return dt * 86_400 / self.day_length
        return dt


# ── Terrain ──────────────────────────────────────────────────────────

@dataclass
class Special:
    """Fixed non-buildable polygon ("river" or "quarry")."""
    kind: str
    points: list[tuple[float, float]]


@dataclass
class FertileZone:
    """Tree-friendly ground that blocks construction.

    ``shape="poly"`` uses ``points`` (with cached ``center``/``radius``),
    ``shape="circle"`` uses ``center``/``radius`` only.
    """
    shape: str
    center: tuple[float, float]
    radius: float
    points: list[tuple[float, float]] = field(default_factory=list)


@dataclass
class Decoration:
    kind: str
    x: float
    y: float
    size: float = 1.0
    shape_variant: int = 0
    size_variant: int = 0


@dataclass
class Terrain:
    """Static map features; never mutated after generation."""
    width: int = 2400
    height: int = 1600
    specials: list[Special] = field(default_factory=list)
    fertile_zones: list[FertileZone] = field(default_factory=list)
    decorations: list[Decoration] = field(default_factory=list)

    def special(self, kind: str) -> Special | None:
        for sp in self.specials:
            if sp.kind == kind:
                return sp
        return None


# ── Player ───────────────────────────────────────────────────────────

def _starting_items() -> dict[str, int]:
    return {"wood": 10, "stone": 5, "seed_grain_berry": 5, "seed_coffee_berry": 3}


@dataclass
class Farmer:
    """The single player: energy, wallet, items, progression, team."""
    name: str = "Farmer"
    energy: float = 100.0
    max_energy: float = 100.0
    money: float = 200.0
    inventory: Inventory = field(default_factory=lambda: Inventory(_starting_items()))
    level: int = 1
    experience: int = 0
    experience_to_next: int = 250
    skills: Skills = field(default_factory=Skills)
    skill_points: int = 0
    team: list[int] = field(default_factory=list)


# ── Respawn / daily bookkeeping ──────────────────────────────────────

@dataclass
class Ticket:
    """Timed, cap-gated request to recreate a harvested resource."""
    type: str
    timer: float


@dataclass
class RespawnQueue:
    tickets: list[Ticket] = field(default_factory=list)

    def push(self, type_: str, timer: float) -> None:
        self.tickets.append(Ticket(type_, float(timer)))


@dataclass
class DailyLedger:
    """Counters reset at the top of each daily cycle."""
    income: dict[str, float] = field(default_factory=dict)
    spawns: dict[str, int] = field(default_factory=dict)
    resource_spawns: dict[str, bool] = field(default_factory=dict)


@dataclass
class Weather:
    today: str = "clear"             # clear | rain | storm | harsh_sunlight
    yesterday: str = "clear"
    rain_streak: int = 0


@dataclass
class FarmFlags:
    chose_starter: bool = False
    met_ekans: bool = False
    met_spearow: bool = False
