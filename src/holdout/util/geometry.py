"""Geometry utilities — circle/rect push-out, containment, segment tests.

All functions are pure except resolve_circle_rect, which moves the
entity it is given.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol

_EPS = 1e-9


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle (top-left origin)."""

    x: float
    y: float
    w: float
    h: float

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.w / 2, self.y + self.h / 2)

    def expanded(self, pad: float) -> Rect:
        """Return a copy grown by ``pad`` on every side."""
        return Rect(self.x - pad, self.y - pad, self.w + pad * 2, self.h + pad * 2)


class Positioned(Protocol):
    x: float
    y: float


def distance(ax: float, ay: float, bx: float, by: float) -> float:
    """Euclidean distance between two points."""
    return math.hypot(bx - ax, by - ay)


def resolve_circle_rect(entity: Positioned, radius: float, rect: Rect) -> None:
    """Push a circle out of an AABB.

    Finds the nearest point on the rect to the circle centre and, if it
    is closer than ``radius``, moves the entity out along the
    penetration vector. A centre lying inside the rect exits through the
    nearest edge. Modifies ``entity.x`` / ``entity.y`` in place.
    """
    near_x = max(rect.x, min(entity.x, rect.right))
    near_y = max(rect.y, min(entity.y, rect.bottom))
    dx = entity.x - near_x
    dy = entity.y - near_y
    dist_sq = dx * dx + dy * dy
    if dist_sq >= radius * radius:
        return

    if dist_sq > 0:
        dist = math.sqrt(dist_sq)
        overlap = radius - dist
        entity.x += (dx / dist) * overlap
        entity.y += (dy / dist) * overlap
        return

    # centre inside (or on the boundary of) the rect
    to_left = entity.x - rect.x
    to_right = rect.right - entity.x
    to_top = entity.y - rect.y
    to_bottom = rect.bottom - entity.y
    nearest = min(to_left, to_right, to_top, to_bottom)
    if nearest == to_left:
        entity.x = rect.x - radius
    elif nearest == to_right:
        entity.x = rect.right + radius
    elif nearest == to_top:
        entity.y = rect.y - radius
    else:
        entity.y = rect.bottom + radius


def point_in_rect(px: float, py: float, rect: Rect) -> bool:
    """True if (px, py) lies inside rect, boundary included."""
    return rect.x <= px <= rect.right and rect.y <= py <= rect.bottom


def segment_intersects_aabb(x1: float, y1: float, x2: float, y2: float, rect: Rect) -> bool:
    """Slab test: does any point of segment (x1,y1)-(x2,y2) lie within rect?

    An axis with (near) zero extent falls back to a plain interval check
    on that axis.
    """
    t_min = 0.0
    t_max = 1.0
    for start, delta, lo, hi in (
        (x1, x2 - x1, rect.x, rect.right),
        (y1, y2 - y1, rect.y, rect.bottom),
    ):
        if abs(delta) < _EPS:
            if start < lo or start > hi:
                return False
            continue
        t1 = (lo - start) / delta
        t2 = (hi - start) / delta
        if t1 > t2:
            t1, t2 = t2, t1
        t_min = max(t_min, t1)
        t_max = min(t_max, t2)
        if t_min > t_max:
            return False
    return True


def path_length(x: float, y: float, points: list[tuple[float, float]]) -> float:
    """Total length of a polyline starting at (x, y) through ``points``."""
    total = 0.0
    px, py = x, y
    for qx, qy in points:
        total += distance(px, py, qx, qy)
        px, py = qx, qy
    return total
