"""core/tuning.py — Data-driven tuning constants.

Every gameplay number (world size, caps, energy costs, spawn odds) lives
in ``data/tuning.toml``.  Systems read a value with::

    from core.tuning import get
    cap = get("world", "max_trees", 40)

The default passed at the call site is authoritative when the file (or
the key) is missing, so a bare checkout still simulates.

Tests pin values with ``override()`` and undo them with ``reset()``.
"""

from __future__ import annotations
from pathlib import Path

try:
    import tomllib                         # Python 3.11+
except ModuleNotFoundError:                # Python < 3.11
    import tomli as tomllib


DEFAULT_PATH = Path(__file__).resolve().parent.parent / "data" / "tuning.toml"

_data: dict = {}
_overrides: dict[tuple[str, str], object] = {}
_loaded = False


def load(path: str | Path | None = None) -> None:
    """Load (or reload) tuning constants from *path*."""
    global _data, _loaded

    path = DEFAULT_PATH if path is None else Path(path)
    _loaded = True

    if not path.exists():
        print(f"[TUNING] {path} not found, using defaults")
        _data = {}
        return

    try:
        with open(path, "rb") as f:
            _data = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        print(f"[TUNING] {path} is malformed ({exc}), using defaults")
        _data = {}
        return

    print(f"[TUNING] Loaded {_count_leaves(_data)} values from {path}")


def _node(section_path: str):
    if not _loaded:
        load()
    node = _data
    for part in section_path.split("."):
        if not isinstance(node, dict):
            return None
        node = node.get(part)
        if node is None:
            return None
    return node


def get(section: str, key: str, default=None):
    """Read a tuning value.

    *section* uses dot-notation for nested tables, e.g.
    ``"spawns.daily"`` looks up ``[spawns.daily]``.
    """
    if (section, key) in _overrides:
        return _overrides[(section, key)]
    node = _node(section)
    if isinstance(node, dict):
        return node.get(key, default)
    return default


def override(section: str, key: str, value) -> None:
    """Pin *section.key* to *value* until ``reset()``."""
    _overrides[(section, key)] = value


def reset() -> None:
    """Drop every ``override()``."""
    _overrides.clear()


def _count_leaves(d: dict, _n: int = 0) -> int:
    for v in d.values():
        if isinstance(v, dict):
            _n = _count_leaves(v, _n)
        else:
            _n += 1
    return _n
