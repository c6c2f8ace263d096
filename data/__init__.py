"""data — Static game tables and the tuning file.

species     species, families, evolutions, night counterparts, fossils
buildings   building catalogue (sizes, costs, capacities, founders)
recipes     crafting recipes, market prices, task rewards
tuning.toml balance numbers read through ``core.tuning``
"""
