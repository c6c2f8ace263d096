"""test_geometry.py — Polygon primitives and construction placement.

Covers the even-odd point test, the river ribbon, organic blobs, and
every ``check_placement`` refusal on a hand-built terrain (a straight
river band, a square quarry, one round fertile zone).

Run:  python test_geometry.py
"""
from __future__ import annotations
import sys, math, random, traceback

# ── Bootstrap ────────────────────────────────────────────────────────
from core.tuning import load as _load_tuning
_load_tuning()

from core.ecs import World
from core.geometry import (
    point_in_polygon, organic_polygon, river_centerline, river_ribbon,
    rect_contains, rects_overlap, distance, rotate_about, random_point_in,
    RIVER_HALF_WIDTH,
)
from components import Terrain, Special, FertileZone, Building
from logic.factory import spawn_building
from logic.placement import check_placement, is_position_invalid, in_fertile_zone


# ── Test harness ─────────────────────────────────────────────────────

_passed = 0
_failed = 0
_UNDER_PYTEST = "pytest" in sys.modules

def ok(label: str):
    global _passed
    _passed += 1
    print(f"  [PASS] {label}")

def fail(label: str, detail: str = ""):
    global _failed
    _failed += 1
    msg = f"  [FAIL] {label}"
    if detail:
        msg += f" — {detail}"
    print(msg)

def check(cond: bool, label: str, detail: str = ""):
    if cond:
        ok(label)
    else:
        fail(label, detail)
        if _UNDER_PYTEST:
            raise AssertionError(f"{label}: {detail}" if detail else label)


# ── Map builder ──────────────────────────────────────────────────────

RIVER_BAND = [(0, 700), (2400, 700), (2400, 900), (0, 900)]
QUARRY_BOX = [(100, 100), (500, 100), (500, 500), (100, 500)]


def _test_map(quarry: bool = True) -> World:
    w = World()
    terrain = Terrain(width=2400, height=1600)
    terrain.specials.append(Special("river", list(RIVER_BAND)))
    if quarry:
        terrain.specials.append(Special("quarry", list(QUARRY_BOX)))
    terrain.fertile_zones.append(FertileZone("circle", (1500, 400), 100))
    w.set_res(terrain)
    return w


# ═══════════════════════════════════════════════════════════════════════
#  1. Point in polygon
# ═══════════════════════════════════════════════════════════════════════

def test_point_in_polygon():
    print("\n=== 1. Point in polygon ===")

    square = [(0, 0), (10, 0), (10, 10), (0, 10)]
    check(point_in_polygon((5, 5), square), "1a: centre of a square is inside")
    check(not point_in_polygon((15, 5), square), "1b: point right of a square is outside")
    check(not point_in_polygon((5, -1), square), "1c: point above a square is outside")

    # L shape: the notch at the top right is outside
    ell = [(0, 0), (10, 0), (10, 4), (4, 4), (4, 10), (0, 10)]
    check(point_in_polygon((2, 8), ell), "1d: concave ring, inside the long arm")
    check(not point_in_polygon((8, 8), ell), "1e: concave ring, notch is outside")

    rotated = ell[3:] + ell[:3]
    same = all(point_in_polygon(p, ell) == point_in_polygon(p, rotated)
               for p in [(2, 8), (8, 8), (8, 2), (5, 5), (-1, 3)])
    check(same, "1f: answer does not depend on the starting vertex")

    check(not point_in_polygon((0, 0), [(0, 0), (1, 1)]),
          "1g: degenerate ring contains nothing")


# ═══════════════════════════════════════════════════════════════════════
#  2. Shapes
# ═══════════════════════════════════════════════════════════════════════

def test_shapes():
    print("\n=== 2. Generated shapes ===")
    random.seed(7)

    blob = organic_polygon((500, 500), 200, 16, 0.45)
    check(len(blob) == 16, "2a: organic polygon has one vertex per segment",
          f"got {len(blob)}")
    radii = [math.hypot(x - 500, y - 500) for x, y in blob]
    lo, hi = 200 - 0.45 * 200 / 2, 200 + 0.45 * 200 / 2
    check(all(lo - 1e-6 <= r <= hi + 1e-6 for r in radii),
          "2b: vertex radii stay within the irregularity band",
          f"range {min(radii):.1f}..{max(radii):.1f}")
    check(point_in_polygon((500, 500), blob), "2c: blob contains its centre")

    center = river_centerline(2400, 1600)
    check(center[0][0] < 0 and center[-1][0] > 2400,
          "2d: centerline runs past both map edges")
    ribbon = river_ribbon(2400, 1600)
    check(len(ribbon) == 2 * len(center), "2e: ribbon has both banks")
    inside = sum(1 for p in center[1:-1] if point_in_polygon(p, ribbon))
    check(inside == len(center) - 2, "2f: every interior centerline sample is in the river",
          f"{inside}/{len(center) - 2}")
    far = (1200, 800 + 80 + RIVER_HALF_WIDTH + 50)
    check(not point_in_polygon(far, ribbon), "2g: well below the river is dry land")

    found = random_point_in(blob)
    check(found is not None and point_in_polygon(found, blob),
          "2h: random_point_in samples inside the ring")


# ═══════════════════════════════════════════════════════════════════════
#  3. Rectangle helpers
# ═══════════════════════════════════════════════════════════════════════

def test_rects():
    print("\n=== 3. Rectangles ===")

    check(rect_contains(0, 0, 10, 10, 5, 5), "3a: centre is contained")
    check(not rect_contains(0, 0, 10, 10, 10, 5), "3b: containment is strict on the edge")
    check(rect_contains(0, 0, 10, 10, 12, 5, pad=5), "3c: padding grows the rect")
    check(rects_overlap((0, 0, 10, 10), (5, 5, 10, 10)), "3d: overlapping rects")
    check(not rects_overlap((0, 0, 10, 10), (10, 0, 10, 10)), "3e: touching rects don't overlap")

    rx, ry = rotate_about(1, 0, 90)
    check(abs(rx) < 1e-9 and abs(ry - 1) < 1e-9, "3f: rotating (1,0) by 90 gives (0,1)",
          f"got ({rx:.3f}, {ry:.3f})")
    check(distance(0, 0, 3, 4) == 5.0 and distance(3, 4, 0, 0) == 5.0,
          "3g: distance is symmetric")


# ═══════════════════════════════════════════════════════════════════════
#  4. Placement
# ═══════════════════════════════════════════════════════════════════════

def test_placement():
    print("\n=== 4. check_placement ===")
    w = _test_map()

    res = check_placement(w, 1000, 300, 80, 60, "coop")
    check(res.clear, "4a: open ground is clear", res.message)

    res = check_placement(w, 10, 300, 80, 60, "coop")
    check(not res.clear and res.message == "You can't build outside the farm.",
          "4b: too close to the edge", res.message)
    res = check_placement(w, 2330, 300, 80, 60, "coop")
    check(res.message == "You can't build outside the farm.",
          "4c: footprint past the right edge", res.message)

    res = check_placement(w, 1000, 760, 80, 60, "coop")
    check(res.message == "You can't build on the water.", "4d: on the river", res.message)

    res = check_placement(w, 1000, 650, 80, 80, "coop")
    check(res.message == "You can't build on the water.",
          "4e: a corner dipping into the river is refused", res.message)

    res = check_placement(w, 200, 200, 80, 60, "coop")
    check(res.message == "You can't build on the quarry.", "4f: coop on the quarry", res.message)

    res = check_placement(w, 240, 240, 120, 120, "mine")
    check(res.clear, "4g: mine on the quarry is allowed", res.message)

    res = check_placement(w, 1200, 240, 120, 120, "mine")
    check(res.message == "A mine must be built on the quarry.",
          "4h: mine off the quarry", res.message)

    no_quarry = _test_map(quarry=False)
    res = check_placement(no_quarry, 1200, 240, 120, 120, "mine")
    check(res.message == "There is no quarry on this map.",
          "4i: mine on a map without a quarry", res.message)

    res = check_placement(w, 1460, 370, 80, 60, "coop")
    check(res.message == "You can't build on fertile soil.",
          "4j: on a fertile zone", res.message)

    spawn_building(w, "coop", 1000, 300, 80, 60)
    res = check_placement(w, 1040, 320, 80, 60, "coop")
    check(res.message == "That space is already taken.", "4k: overlapping a building",
          res.message)
    res = check_placement(w, 1080, 300, 80, 60, "coop")
    check(res.clear, "4l: edge-to-edge with a building is fine", res.message)

    before = w.count(Building)
    for _ in range(20):
        check_placement(w, random.randint(0, 2400), random.randint(0, 1600), 80, 60, "coop")
    check(w.count(Building) == before, "4m: placement checks never change the world")


def test_position_rules():
    print("\n=== 5. Spawn-point rules ===")
    w = _test_map()
    spawn_building(w, "coop", 1000, 300, 80, 60)

    check(is_position_invalid(w, 1200, 800), "5a: river point is invalid")
    check(is_position_invalid(w, 300, 300), "5b: quarry point is invalid")
    check(is_position_invalid(w, 1090, 330), "5c: within padding of a building is invalid")
    check(not is_position_invalid(w, 1200, 300), "5d: open ground is valid")
    check(not is_position_invalid(w, 1200, 800, flying=True), "5e: flying goes anywhere")

    zone = w.res(Terrain).fertile_zones[0]
    check(in_fertile_zone(zone, 1500, 450), "5f: circle zone contains a near point")
    check(not in_fertile_zone(zone, 1500, 520), "5g: circle zone excludes a far point")
    check(not is_position_invalid(w, 1500, 400), "5h: fertile soil is fine for spawning")


# ═══════════════════════════════════════════════════════════════════════
#  MAIN
# ═══════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    sections = [
        ("Point in polygon", test_point_in_polygon),
        ("Generated shapes", test_shapes),
        ("Rectangles", test_rects),
        ("check_placement", test_placement),
        ("Spawn-point rules", test_position_rules),
    ]

    for name, fn in sections:
        try:
            fn()
        except Exception:
            _failed += 1
            print(f"\n  [CRASH] {name} — unhandled exception:")
            traceback.print_exc()

    total = _passed + _failed
    print(f"\n{'=' * 60}")
    print(f"  Geometry Tests: {_passed} passed, {_failed} failed  "
          f"(total {total})")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
