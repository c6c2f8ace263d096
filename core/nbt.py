"""core/nbt.py — NBT export of generated terrain.

A generated map's static features (river and quarry outlines, fertile
zones, decorations) can be written out as a terrain template and read
back, so a farm layout can be shared or regenerated identically.
Runtime state never goes here; that is ``core/save.py``'s JSON.

Structure (TAG_Compound):
  - width, height: TAG_Int
  - specials: TAG_List of TAG_Compound { kind:TAG_String, xs, ys:TAG_List[TAG_Double] }
  - fertile_zones: TAG_List of TAG_Compound { shape, cx, cy, radius, xs, ys }
  - decorations: TAG_List of TAG_Compound { kind, x, y, size, shape_variant, size_variant }
"""
from __future__ import annotations
from pathlib import Path

import nbtlib
from nbtlib import tag

from components import Terrain, Special, FertileZone, Decoration

TEMPLATES_DIR = Path("templates")


def _coords(points: list[tuple[float, float]]) -> tuple[nbtlib.List, nbtlib.List]:
    xs = nbtlib.List[tag.Double]([tag.Double(float(x)) for x, _ in points])
    ys = nbtlib.List[tag.Double]([tag.Double(float(y)) for _, y in points])
    return xs, ys


def _points(comp) -> list[tuple[float, float]]:
    if "xs" not in comp or "ys" not in comp:
        return []
    return [(float(x), float(y)) for x, y in zip(comp["xs"], comp["ys"])]


def save_terrain_nbt(terrain: Terrain, name: str = "terrain",
                     dir_path: Path | None = None) -> Path:
    """Write *terrain* to ``<dir_path>/<name>.nbt`` and return the path."""
    dir_path = Path(dir_path or TEMPLATES_DIR)
    dir_path.mkdir(parents=True, exist_ok=True)

    root = nbtlib.Compound()
    root["width"] = tag.Int(int(terrain.width))
    root["height"] = tag.Int(int(terrain.height))

    specials = nbtlib.List[nbtlib.Compound]()
    for sp in terrain.specials:
        comp = nbtlib.Compound()
        comp["kind"] = tag.String(sp.kind)
        comp["xs"], comp["ys"] = _coords(sp.points)
        specials.append(comp)
    root["specials"] = specials

    zones = nbtlib.List[nbtlib.Compound]()
    for zone in terrain.fertile_zones:
        comp = nbtlib.Compound()
        comp["shape"] = tag.String(zone.shape)
        comp["cx"] = tag.Double(float(zone.center[0]))
        comp["cy"] = tag.Double(float(zone.center[1]))
        comp["radius"] = tag.Double(float(zone.radius))
        if zone.points:
            comp["xs"], comp["ys"] = _coords(zone.points)
        zones.append(comp)
    root["fertile_zones"] = zones

    decorations = nbtlib.List[nbtlib.Compound]()
    for dec in terrain.decorations:
        comp = nbtlib.Compound()
        comp["kind"] = tag.String(dec.kind)
        comp["x"] = tag.Double(float(dec.x))
        comp["y"] = tag.Double(float(dec.y))
        comp["size"] = tag.Double(float(dec.size))
        comp["shape_variant"] = tag.Int(int(dec.shape_variant))
        comp["size_variant"] = tag.Int(int(dec.size_variant))
        decorations.append(comp)
    root["decorations"] = decorations

    out_path = dir_path / f"{name}.nbt"
    # Remove old file if exists to ensure clean overwrite
    if out_path.exists():
        out_path.unlink()
    nbtlib.File(root).save(out_path)
    print(f"[WORLD] Terrain template written to {out_path}")
    return out_path


def load_terrain_nbt(path: Path) -> Terrain:
    """Read a terrain template written by ``save_terrain_nbt``."""
    root = nbtlib.load(Path(path))
    terrain = Terrain(width=int(root.get("width") or 0),
                      height=int(root.get("height") or 0))
    for comp in root.get("specials", []):
        terrain.specials.append(Special(str(comp["kind"]), _points(comp)))
    for comp in root.get("fertile_zones", []):
        terrain.fertile_zones.append(FertileZone(
            shape=str(comp["shape"]),
            center=(float(comp["cx"]), float(comp["cy"])),
            radius=float(comp["radius"]),
            points=_points(comp),
        ))
    for comp in root.get("decorations", []):
        terrain.decorations.append(Decoration(
            kind=str(comp["kind"]),
            x=float(comp["x"]), y=float(comp["y"]),
            size=float(comp["size"]),
            shape_variant=int(comp["shape_variant"]),
            size_variant=int(comp["size_variant"]),
        ))
    return terrain
