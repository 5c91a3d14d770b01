"""Detour routing around the building.

There is only one obstacle worth routing around (the building, grown by
a small padding), so instead of a grid search this enumerates direct,
one-corner and two-corner routes and keeps the shortest one whose every
segment stays clear of the padded box.
"""

from __future__ import annotations

import itertools
import logging
from typing import TYPE_CHECKING

from holdout.util.constants import CORNER_CLEARANCE
from holdout.util.geometry import Rect, path_length, segment_intersects_aabb

if TYPE_CHECKING:
    from holdout.models.world import Building, Window

log = logging.getLogger(__name__)

Point = tuple[float, float]


def padded_corners(box: Rect) -> list[Point]:
    """Corners of ``box`` pushed diagonally outward by the corner clearance."""
    c = CORNER_CLEARANCE
    return [
        (box.x - c, box.y - c),
        (box.right + c, box.y - c),
        (box.right + c, box.bottom + c),
        (box.x - c, box.bottom + c),
    ]


def segment_clear(ax: float, ay: float, bx: float, by: float, box: Rect) -> bool:
    return not segment_intersects_aabb(ax, ay, bx, by, box)


def _route_clear(x: float, y: float, points: list[Point], box: Rect) -> bool:
    px, py = x, y
    for qx, qy in points:
        if not segment_clear(px, py, qx, qy, box):
            return False
        px, py = qx, qy
    return True


def compute_path_to_window(
    start_x: float, start_y: float, window: Window, building: Building,
) -> list[Point]:
    """Waypoints from (start_x, start_y) to the approach point of ``window``.

    Tries, in order: the direct segment, every single-corner detour and
    every ordered pair of distinct corners. Within a tier the shortest
    clear route wins. If nothing is clear (start inside the padded box,
    for instance) the approach point alone is returned.
    """
    box = building.padded_box
    target = window.approach_point

    if segment_clear(start_x, start_y, target[0], target[1], box):
        return [target]

    corners = padded_corners(box)

    best: list[Point] | None = None
    best_len = float("inf")
    for corner in corners:
        route = [corner, target]
        if not _route_clear(start_x, start_y, route, box):
            continue
        length = path_length(start_x, start_y, route)
        if length < best_len:
            best, best_len = route, length
    if best is not None:
        return best

    for a, b in itertools.permutations(corners, 2):
        route = [a, b, target]
        if not _route_clear(start_x, start_y, route, box):
            continue
        length = path_length(start_x, start_y, route)
        if length < best_len:
            best, best_len = route, length
    if best is not None:
        return best

    log.debug("No clear route from (%.0f, %.0f) to window %d", start_x, start_y, window.index)
    return [target]


def has_line_of_sight(x: float, y: float, window: Window, building: Building) -> bool:
    """True if the straight segment to the window's approach point is clear."""
    ax, ay = window.approach_point
    return segment_clear(x, y, ax, ay, building.padded_box)
