"""logic — Farm systems and rules.

Subpackages
-----------
actions/    — player commands (build, farm, creatures, economy)

Top-level modules
-----------------
tick            — continuous per-frame systems (energy, income, crops)
behaviour       — creature state machine, confinement, deaths, teleport
abilities       — cooldown-gated creature abilities
wander          — wander-target selection per home shape
wellbeing       — daily happiness recompute, bites and heals
respawn         — respawn queue and resource caps
placement       — build checks and spawn-point searches
factory         — entity creation
residency       — home / capacity lookups
species         — species table queries and the day/night timetable
inventory_ops   — item counting and spending
"""
