"""Tests for circle/rect push-out and segment tests."""

import math
from dataclasses import dataclass

import pytest

from holdout.util.geometry import (
    Rect,
    distance,
    path_length,
    point_in_rect,
    resolve_circle_rect,
    segment_intersects_aabb,
)


@dataclass
class _Pos:
    x: float
    y: float


def _dist_to_rect(p: _Pos, rect: Rect) -> float:
    nx = max(rect.x, min(p.x, rect.right))
    ny = max(rect.y, min(p.y, rect.bottom))
    return math.hypot(p.x - nx, p.y - ny)


BOX = Rect(0, 0, 100, 100)


class TestRect:
    def test_edges_and_center(self):
        r = Rect(10, 20, 30, 40)
        assert r.right == 40
        assert r.bottom == 60
        assert r.center == (25, 40)

    def test_expanded(self):
        assert Rect(10, 10, 10, 10).expanded(5) == Rect(5, 5, 20, 20)


class TestResolveCircleRect:
    def test_no_overlap_unchanged(self):
        p = _Pos(120, 50)
        resolve_circle_rect(p, 10, BOX)
        assert (p.x, p.y) == (120, 50)

    def test_pushed_out_along_penetration(self):
        p = _Pos(105, 50)
        resolve_circle_rect(p, 10, BOX)
        assert p.x == pytest.approx(110)
        assert p.y == pytest.approx(50)

    def test_corner_push_is_diagonal(self):
        p = _Pos(104, 103)
        resolve_circle_rect(p, 10, BOX)
        assert _dist_to_rect(p, BOX) == pytest.approx(10)
        assert p.x > 104 and p.y > 103

    def test_centre_inside_exits_nearest_edge(self):
        p = _Pos(95, 50)
        resolve_circle_rect(p, 10, BOX)
        assert p.x == pytest.approx(110)
        assert p.y == pytest.approx(50)

    def test_centre_inside_near_top(self):
        p = _Pos(50, 3)
        resolve_circle_rect(p, 10, BOX)
        assert p.y == pytest.approx(-10)
        assert p.x == pytest.approx(50)

    @pytest.mark.parametrize("x, y", [
        (-5, 50), (50, -8), (108, 108), (-3, -3), (50, 50), (99, 1), (100, 50),
    ])
    def test_result_never_overlaps(self, x, y):
        p = _Pos(x, y)
        resolve_circle_rect(p, 14, BOX)
        assert _dist_to_rect(p, BOX) >= 14 - 1e-6


class TestPointInRect:
    def test_inside(self):
        assert point_in_rect(50, 50, BOX)

    def test_boundary_inclusive(self):
        assert point_in_rect(0, 0, BOX)
        assert point_in_rect(100, 100, BOX)

    def test_outside(self):
        assert not point_in_rect(100.01, 50, BOX)


class TestSegmentIntersectsAabb:
    def test_crossing(self):
        assert segment_intersects_aabb(-10, 50, 110, 50, BOX)

    def test_miss(self):
        assert not segment_intersects_aabb(-10, -10, -10, 200, BOX)

    def test_ends_before_box(self):
        assert not segment_intersects_aabb(-50, 50, -1, 50, BOX)

    def test_vertical_inside_interval(self):
        assert segment_intersects_aabb(50, -20, 50, -1, BOX) is False
        assert segment_intersects_aabb(50, -20, 50, 20, BOX)

    def test_degenerate_point(self):
        assert segment_intersects_aabb(50, 50, 50, 50, BOX)
        assert not segment_intersects_aabb(150, 50, 150, 50, BOX)

    def test_touching_edge_counts(self):
        assert segment_intersects_aabb(-10, 0, 110, 0, BOX)

    def test_diagonal_past_corner(self):
        assert not segment_intersects_aabb(90, -20, 120, 10, BOX)


class TestDistanceHelpers:
    def test_distance(self):
        assert distance(0, 0, 3, 4) == pytest.approx(5)

    def test_path_length(self):
        assert path_length(0, 0, [(3, 4), (3, 10)]) == pytest.approx(11)

    def test_path_length_empty(self):
        assert path_length(1, 1, []) == 0.0
