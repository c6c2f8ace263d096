"""simulation — World generation and the farm's clock-driven cycles.

Submodules
----------
farm        new_game / advance — the entry points
clock       day keys, wall and fixed time modes
worldgen    terrain, homestead, starting resources
daily       weather and the once-per-day production cycle
spawns      daily spawn rolls, special spawns, day/night swap
snapshot    world ⇄ plain dict for saves
"""
