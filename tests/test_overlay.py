"""Tests for overlay noding, planar graph and polygon repair."""
import numpy as np
import pytest
from planar.geometry import signed_area, point_in_ring, ring_is_simple
from planar.types import PointGeom
from planar.model import make_polygon
from offset.curves import source_stroke
from bufferop.params import BufferParams
from overlay.noding import node_rings, candidate_pairs, _segments
from overlay.graph import build_graph, components, face_windings, cycle_coords
from overlay.polygonize import (
    NumericDegeneracyWarning, union_rings, node_tolerance, interior_point,
    assemble, keep_face,
)

SQ_A = ((0, 0), (2, 0), (2, 2), (0, 2), (0, 0))
SQ_B = ((1, 1), (3, 1), (3, 3), (1, 3), (1, 1))
SQ_C = ((2, 0), (3, 0), (3, 2), (2, 2), (2, 0))   # shares the edge x=2 with SQ_A
CENTRE = PointGeom((1.5, 1.5))
NOTCH = [(0, 0), (10, 0), (10, 10), (5.5, 10), (5, 4), (4.5, 10), (0, 10)]


def _face_at(g, p):
    """Smallest positive cycle containing p."""
    best = None
    for c in range(len(g.cycles)):
        if g.area[c] > 0 and point_in_ring(p, cycle_coords(g, c), 0.0) > 0:
            if best is None or g.area[c] < g.area[best]:
                best = c
    return best


# --- noding ---

def test_segments_drop_zero_length():
    segs = _segments([((0, 0), (1, 0), (1, 0), (0, 1), (0, 0))])
    assert segs.shape == (3, 5)


def test_candidate_pairs_only_overlapping_boxes():
    segs = np.array([[0, 0, 1, 0, 0], [0.5, -1, 0.5, 1, 0], [5, 5, 6, 6, 0]], dtype=float)
    assert sorted(candidate_pairs(segs, 0.0)) == [(0, 1)]


class TestNodeRings:
    def test_crossing_squares(self):
        noded = node_rings([SQ_A, SQ_B], 1e-9)
        assert len(noded.nodes) == 10
        assert len(noded.edges) == 12
        assert set(noded.edges.values()) <= {1, -1}

    def test_shared_edge_cancels(self):
        noded = node_rings([SQ_A, SQ_C], 1e-9)
        assert len(noded.nodes) == 6
        assert len(noded.edges) == 7
        assert sorted(noded.edges.values(), key=abs)[0] == 0

    def test_near_coincident_vertices_snap(self):
        shifted = tuple((x + 1e-12, y) for x, y in SQ_C)
        noded = node_rings([SQ_A, shifted], 1e-9)
        assert len(noded.nodes) == 6

    def test_ring_nodes(self):
        noded = node_rings([SQ_A, SQ_B], 1e-9)
        assert noded.nodes[noded.ring_nodes[0]] == (0, 0)
        assert noded.nodes[noded.ring_nodes[1]] == (1, 1)


# --- planar graph ---

class TestGraph:
    @pytest.fixture(scope="class")
    def crossing(self):
        noded = node_rings([SQ_A, SQ_B], 1e-9)
        g = build_graph(noded)
        comps = components(g)
        wind = face_windings(g, comps, [SQ_A, SQ_B], noded.ring_nodes)
        return g, comps, wind

    def test_faces(self, crossing):
        g, comps, _ = crossing
        assert len(g.cycles) == 4
        assert sorted(round(a, 9) for a in g.area) == [-7.0, 1.0, 3.0, 3.0]
        assert len(comps.outer) == 1

    def test_every_half_edge_in_one_cycle(self, crossing):
        g, _, _ = crossing
        assert sorted(h for cyc in g.cycles for h in cyc) == list(range(len(g.tail)))

    def test_windings(self, crossing):
        g, comps, wind = crossing
        assert wind[_face_at(g, (1.5, 1.5))] == 2
        assert wind[_face_at(g, (0.5, 0.5))] == 1
        assert wind[_face_at(g, (2.5, 2.5))] == 1
        assert wind[next(iter(comps.outer.values()))] == 0

    def test_nested_component_parent_face(self):
        inner = ((4, 4), (6, 4), (6, 6), (4, 6), (4, 4))
        outer = ((0, 0), (10, 0), (10, 10), (0, 10), (0, 0))
        noded = node_rings([outer, inner], 1e-9)
        g = build_graph(noded)
        comps = components(g)
        assert len(comps.outer) == 2
        parents = sorted(comps.parent_face.values())
        assert parents[0] == -1
        assert g.area[parents[1]] == pytest.approx(100.0)
        wind = face_windings(g, comps, [outer, inner], noded.ring_nodes)
        assert wind[_face_at(g, (5, 5))] == 2


# --- polygon repair ---

def test_node_tolerance_scales_with_extent():
    ring = ((0, 0), (1000, 0), (0, 5), (0, 0))
    assert node_tolerance([ring], 2.0) == pytest.approx(1e-6)
    assert node_tolerance([((0, 0), (0.1, 0), (0, 0.1), (0, 0))], 0.01) == pytest.approx(1e-9)


def test_interior_point_avoids_hole():
    hole = ((1, 1), (1, 3), (3, 3), (3, 1), (1, 1))
    shell = ((0, 0), (4, 0), (4, 4), (0, 4), (0, 0))
    p = interior_point(shell, [hole])
    assert point_in_ring(p, shell, 0.0) == 1
    assert point_in_ring(p, hole, 0.0) == -1


def test_interior_point_of_square_is_central():
    p = interior_point(SQ_A)
    assert p == pytest.approx((1.0, 1.0))


def test_keep_face_rules(unit_square, params):
    stroke = source_stroke(unit_square, 0.25, params)
    # erosion keeps positive faces inside the source and clear of the swept region
    assert keep_face(1, (0.5, 0.5), unit_square, -0.25, stroke)
    assert not keep_face(1, (0.1, 0.5), unit_square, -0.25, stroke)
    assert not keep_face(0, (0.5, 0.5), unit_square, -0.25, stroke)
    # dilation keeps covered faces even with zero winding
    assert keep_face(0, (1.1, 0.5), unit_square, 0.25, stroke)
    assert not keep_face(0, (2.0, 0.5), unit_square, 0.25, stroke)


def test_keep_face_outside_bevel_chord(unit_square):
    bevel = source_stroke(unit_square, 0.25, BufferParams(join_style="bevel"))
    rnd = source_stroke(unit_square, 0.25, BufferParams())
    assert not keep_face(0, (1.15, 1.15), unit_square, 0.25, bevel)
    assert keep_face(0, (1.15, 1.15), unit_square, 0.25, rnd)


def test_keep_face_below_reflex_bevel():
    notch = make_polygon(NOTCH)
    below_tip = (5.0, 3.0)   # 1.0 from the notch tip, under the bevel chord
    bevel = source_stroke(notch, 1.5, BufferParams(join_style="bevel"))
    rnd = source_stroke(notch, 1.5, BufferParams())
    assert keep_face(1, below_tip, notch, -1.5, bevel)
    assert not keep_face(1, below_tip, notch, -1.5, rnd)


def test_assemble_assigns_holes_to_smallest_shell():
    big = ((0, 0), (10, 0), (10, 10), (0, 10), (0, 0))
    small = ((2, 2), (5, 2), (5, 5), (2, 5), (2, 2))
    hole = ((3, 3), (3, 4), (4, 4), (4, 3), (3, 3))
    polys = assemble([big, small, hole])
    assert len(polys) == 2
    by_area = sorted(polys, key=lambda p: signed_area(p.shell))
    assert by_area[0].holes == (hole,)
    assert by_area[1].holes == ()


class TestUnionRings:
    def test_overlapping_squares_merge(self):
        polys = union_rings([SQ_A, SQ_B], 1.0, CENTRE, BufferParams())
        assert len(polys) == 1
        assert signed_area(polys[0].shell) == pytest.approx(7.0)
        assert len(polys[0].shell) == 9
        assert ring_is_simple(polys[0].shell)

    def test_erosion_curve(self, unit_square):
        ring = ((0.25, 0.25), (0.75, 0.25), (0.75, 0.75), (0.25, 0.75), (0.25, 0.25))
        polys = union_rings([ring], -0.25, unit_square, BufferParams())
        assert len(polys) == 1
        assert signed_area(polys[0].shell) == pytest.approx(0.25)

    def test_self_crossing_ring_keeps_positive_lobe(self):
        # figure eight: left lobe CCW, right lobe CW
        ring = ((0, 0), (2, 1), (2, 0), (0, 1), (0, 0))
        polys = union_rings([ring], 0.001, PointGeom((50, 50)), BufferParams())
        assert len(polys) == 1
        assert signed_area(polys[0].shell) == pytest.approx(0.5)

    def test_empty_input(self):
        assert union_rings([], 1.0, CENTRE, BufferParams()) == []

    def test_sliver_dropped_with_warning(self):
        tiny = ((0, 0), (1e-6, 0), (0, 1e-6), (0, 0))
        with pytest.warns(NumericDegeneracyWarning, match="sliver"):
            polys = union_rings([tiny], 1.0, PointGeom((0, 0)), BufferParams())
        assert polys == []
