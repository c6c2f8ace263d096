"""logic/actions — Player commands.

Thin wrappers a host (UI, CLI, test) calls in response to clicks.
Each command validates, mutates the world, and returns an
``ActionResult``; rule violations come back as ``ok=False`` with a
player-facing message instead of raising.

Public API (re-exported here)
-----------------------------
``ActionResult``          — outcome of every command
``place_building``        — build at a centre point, founders move in
``destroy_building``      — relocate or evict residents, drop plots
``plant_seed``            — sow an empty plot
``apply_fertilizer``      — fertilize a growing plot
``harvest_plot``          — pick a mature plot
``collect_resource``      — chop / mine / gather a harvestable
``evolve_creature``       — spend an evolution stone
``choose_starter``        — first-run Growlithe / Meowth pick
``release_creature``      — let a creature go
``rename_creature``       — give a creature a nickname
``set_team``              — replace the six-slot team
``meditate``              — lake meditation, may attract an Abra
``start_fossil_revival``  — load a fossil into a laboratory
``craft``                 — turn ingredients into products
``buy_item`` / ``sell_item``
``upgrade_skill``         — spend a skill point
``reward_task``           — energy + XP for a finished task
``set_day_change_hour``   — move the day boundary
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ActionResult:
    """Outcome of a player command.

    ``eid`` carries the id of whatever the command created (building,
    creature), when it created something.
    """
    ok: bool
    message: str = ""
    eid: int | None = None


# ── Re-exports from submodules ───────────────────────────────────────
# These imports MUST come after ActionResult because the submodules
# import it from here.

from logic.actions.building import place_building, destroy_building      # noqa: E402, F401
from logic.actions.farming import (                                     # noqa: E402, F401
    plant_seed, apply_fertilizer, harvest_plot, collect_resource,
)
from logic.actions.creatures import (                                   # noqa: E402, F401
    evolve_creature, choose_starter, release_creature, rename_creature,
    set_team, meditate, start_fossil_revival,
)
from logic.actions.economy import (                                     # noqa: E402, F401
    craft, buy_item, sell_item, upgrade_skill, reward_task,
    set_day_change_hour,
)
