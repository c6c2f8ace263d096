"""core/geometry.py — Polygon and rectangle primitives for the farm map.

These live in ``core/`` (not ``logic/``) because the world generator,
placement checks and creature confinement all lean on them.

Points are ``(x, y)`` tuples in world units.  A ring is an ordered list
of points; the closing edge back to the first vertex is implicit.
"""

from __future__ import annotations
import math
import random

Point = tuple[float, float]

# River ribbon shape.
RIVER_AMPLITUDE = 80.0
RIVER_HALF_WIDTH = 70.0
RIVER_STEP = 20.0


def point_in_polygon(point: Point, ring: list[Point]) -> bool:
    """Even-odd ray cast.  O(n) in the number of vertices.

    Works for concave rings; the answer does not depend on which
    vertex the ring starts from.
    """
    px, py = point
    inside = False
    n = len(ring)
    if n < 3:
        return False
    j = n - 1
    for i in range(n):
        xi, yi = ring[i]
        xj, yj = ring[j]
        if (yi > py) != (yj > py):
            x_cross = (xj - xi) * (py - yi) / (yj - yi) + xi
            if px < x_cross:
                inside = not inside
        j = i
    return inside


def organic_polygon(center: Point, avg_radius: float, segments: int,
                    irregularity: float) -> list[Point]:
    """Blob-shaped ring around *center*.

    Vertices sit at equal angular steps; each radius is jittered
    independently by up to ``±irregularity·avg_radius/2``.
    """
    cx, cy = center
    points: list[Point] = []
    for i in range(segments):
        angle = (i / segments) * math.tau
        radius = avg_radius + (random.random() - 0.5) * avg_radius * irregularity
        points.append((cx + math.cos(angle) * radius,
                       cy + math.sin(angle) * radius))
    return points


def river_centerline(width: float, height: float) -> list[Point]:
    """Sine wave across the map, ~1.5 periods, centred vertically.

    Sampled one step past either edge so the ribbon covers the border.
    """
    wavelength = width / 1.5
    frequency = math.tau / wavelength
    offset = height / 2
    points: list[Point] = []
    x = -RIVER_STEP
    while x <= width + RIVER_STEP:
        points.append((x, RIVER_AMPLITUDE * math.sin(frequency * x) + offset))
        x += RIVER_STEP
    return points


def river_ribbon(width: float, height: float,
                 half_width: float = RIVER_HALF_WIDTH) -> list[Point]:
    """Watertight river polygon built by offsetting the centerline.

    Every sample is pushed ±*half_width* along the normal of its local
    tangent (central difference).  Left bank + reversed right bank.
    """
    path = river_centerline(width, height)
    left: list[Point] = []
    right: list[Point] = []
    last = len(path) - 1
    for i, (x, y) in enumerate(path):
        bx, by = path[i - 1] if i > 0 else path[i]
        ax, ay = path[i + 1] if i < last else path[i]
        angle = math.atan2(ay - by, ax - bx)
        nx, ny = -math.sin(angle), math.cos(angle)
        left.append((x + nx * half_width, y + ny * half_width))
        right.append((x - nx * half_width, y - ny * half_width))
    right.reverse()
    return left + right


# ── Small helpers ────────────────────────────────────────────────────

def bounding_box(ring: list[Point]) -> tuple[float, float, float, float]:
    """Return ``(min_x, min_y, max_x, max_y)``."""
    xs = [p[0] for p in ring]
    ys = [p[1] for p in ring]
    return min(xs), min(ys), max(xs), max(ys)


def random_point_in(ring: list[Point], attempts: int = 100) -> Point | None:
    """Rejection-sample an integer point inside *ring* via its bbox."""
    min_x, min_y, max_x, max_y = bounding_box(ring)
    for _ in range(attempts):
        p = (random.randint(int(min_x), int(max_x)),
             random.randint(int(min_y), int(max_y)))
        if point_in_polygon(p, ring):
            return p
    return None


def rect_contains(rx: float, ry: float, rw: float, rh: float,
                  x: float, y: float, pad: float = 0.0) -> bool:
    """Strict containment of ``(x, y)`` in a rect grown by *pad*."""
    return (rx - pad < x < rx + rw + pad) and (ry - pad < y < ry + rh + pad)


def rects_overlap(a: tuple[float, float, float, float],
                  b: tuple[float, float, float, float]) -> bool:
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    return ax < bx + bw and ax + aw > bx and ay < by + bh and ay + ah > by


def clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def distance(ax: float, ay: float, bx: float, by: float) -> float:
    return math.hypot(ax - bx, ay - by)


def rotate_about(x: float, y: float, degrees: float) -> Point:
    """Rotate the offset ``(x, y)`` about the origin."""
    rad = math.radians(degrees)
    c, s = math.cos(rad), math.sin(rad)
    return (x * c - y * s, x * s + y * c)


def random_point_in_disk(cx: float, cy: float, radius: float) -> Point:
    angle = random.random() * math.tau
    r = random.random() * radius
    return (cx + math.cos(angle) * r, cy + math.sin(angle) * r)
