"""Tests for planar/geometry.py pure functions."""
import math
import pytest
from planar.geometry import (
    GeometryError,
    left_norm, unit_dir, off_pt, dist, cross, line_isect, arc_poly,
    signed_area, poly_area, is_ccw, bbox, bbox_contains,
    winding_number, point_in_ring, seg_param, point_seg_dist, seg_isect,
    lerp, ring_is_simple, boundary_dist,
)

SQUARE = [(0, 0), (2, 0), (2, 2), (0, 2), (0, 0)]


# --- left_norm / unit_dir / off_pt ---

def test_left_norm_horizontal():
    n = left_norm((0, 0), (1, 0))
    assert abs(n[0] - 0.0) < 1e-12
    assert abs(n[1] - 1.0) < 1e-12


def test_left_norm_vertical():
    n = left_norm((0, 0), (0, 1))
    assert abs(n[0] - (-1.0)) < 1e-12
    assert abs(n[1] - 0.0) < 1e-12


def test_unit_dir():
    d = unit_dir((1, 1), (4, 5))
    assert d == pytest.approx((0.6, 0.8))


def test_off_pt():
    p = off_pt((3, 4), (0, 1), 2.0)
    assert abs(p[0] - 3.0) < 1e-12
    assert abs(p[1] - 6.0) < 1e-12


def test_cross_sign():
    assert cross((0, 0), (1, 0), (0, 1)) > 0
    assert cross((0, 0), (1, 0), (0, -1)) < 0
    assert cross((0, 0), (1, 0), (2, 0)) == 0


# --- line_isect ---

def test_line_isect_perpendicular():
    # Horizontal line y=1 and vertical line x=2
    p = line_isect((0, 1), (1, 0), (2, 0), (0, 1))
    assert abs(p[0] - 2.0) < 1e-10
    assert abs(p[1] - 1.0) < 1e-10


def test_line_isect_parallel_raises():
    with pytest.raises(GeometryError, match="Parallel"):
        line_isect((0, 0), (1, 0), (0, 1), (1, 0))


# --- arc_poly ---

def test_arc_poly_endpoints():
    pts = arc_poly(0, 0, 2.0, 0, math.pi/2, n=10)
    assert pts[0] == pytest.approx((2.0, 0.0))
    assert pts[-1] == pytest.approx((0.0, 2.0), abs=1e-12)
    assert all(abs(dist(p, (0, 0)) - 2.0) < 1e-12 for p in pts)


# --- areas and boxes ---

def test_signed_area_orientation():
    assert signed_area(SQUARE) == pytest.approx(4.0)
    assert signed_area(SQUARE[::-1]) == pytest.approx(-4.0)
    assert poly_area(SQUARE[::-1]) == pytest.approx(4.0)
    assert is_ccw(SQUARE)
    assert not is_ccw(SQUARE[::-1])


def test_signed_area_open_ring_matches_closed():
    assert signed_area(SQUARE[:-1]) == pytest.approx(signed_area(SQUARE))


def test_bbox_helpers():
    b = bbox([(1, 5), (-2, 3), (4, -1)])
    assert b == (-2, -1, 4, 5)
    assert bbox_contains((0, 0, 10, 10), (1, 1, 2, 2))
    assert not bbox_contains((0, 0, 10, 10), (1, 1, 12, 2))


# --- containment ---

def test_winding_number_ccw_and_cw():
    assert winding_number((1, 1), SQUARE) == 1
    assert winding_number((1, 1), SQUARE[::-1]) == -1
    assert winding_number((3, 1), SQUARE) == 0


def test_winding_number_double_loop():
    loop = SQUARE[:-1] * 2 + [SQUARE[0]]
    assert winding_number((1, 1), loop) == 2


def test_point_in_ring():
    assert point_in_ring((1, 1), SQUARE) == 1
    assert point_in_ring((2, 1), SQUARE) == 0
    assert point_in_ring((3, 1), SQUARE) == -1
    # orientation does not matter for containment
    assert point_in_ring((1, 1), SQUARE[::-1]) == 1


# --- segments ---

def test_seg_param_and_distance():
    assert seg_param((1, 5), (0, 0), (2, 0)) == pytest.approx(0.5)
    assert point_seg_dist((1, 5), (0, 0), (2, 0)) == pytest.approx(5.0)
    assert point_seg_dist((5, 4), (0, 0), (2, 0)) == pytest.approx(5.0)


def test_seg_isect_cross():
    t, u = seg_isect((0, 0), (2, 2), (0, 2), (2, 0))
    assert t == pytest.approx(0.5)
    assert u == pytest.approx(0.5)


def test_seg_isect_miss_and_parallel():
    assert seg_isect((0, 0), (1, 0), (2, -1), (2, 1)) is None
    assert seg_isect((0, 0), (1, 0), (0, 1), (1, 1)) is None


def test_seg_isect_tolerance_reaches_near_miss():
    assert seg_isect((0, 0), (1, 0), (1.001, -1), (1.001, 1)) is None
    t, _ = seg_isect((0, 0), (1, 0), (1.001, -1), (1.001, 1), tol=0.01)
    assert t == 1.0


def test_lerp():
    assert lerp((0, 0), (4, 2), 0.25) == pytest.approx((1.0, 0.5))


def test_ring_is_simple():
    assert ring_is_simple(SQUARE)
    bowtie = [(0, 0), (2, 2), (2, 0), (0, 2), (0, 0)]
    assert not ring_is_simple(bowtie)


def test_boundary_dist():
    assert boundary_dist((1, 1), [SQUARE]) == pytest.approx(1.0)
    assert boundary_dist((5, 0), [[(0, 0)]]) == pytest.approx(5.0)
    assert boundary_dist((1, 3), [SQUARE, [(1, 3.5)]]) == pytest.approx(0.5)
