"""Noding, planar graph and polygon repair for raw offset curves."""

from .noding import NodedGraph, node_rings, candidate_pairs
from .graph import PlanarGraph, build_graph, components, face_windings
from .polygonize import (
    NumericDegeneracyWarning, union_rings, node_tolerance,
    interior_point, inside_source, keep_face, assemble,
)
