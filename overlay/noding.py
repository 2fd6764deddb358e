"""Noding: split raw curves at every crossing and merge near-coincident nodes.

Candidate segment pairs come from a sweep over x (segments sorted by their
left end); each pair is then tested exactly. A segment is split wherever
another segment crosses it and wherever another segment's endpoint lies
within the tolerance of it, which also covers T-junctions and collinear
overlaps.
"""
import logging
from typing import NamedTuple

import numpy as np
from scipy.spatial import cKDTree

from planar.types import Point
from planar.geometry import seg_isect, seg_param, point_seg_dist, lerp

log = logging.getLogger(__name__)


class NodedGraph(NamedTuple):
    nodes: list[Point]
    edges: dict[tuple[int, int], int]   # (lo, hi) -> net traversals lo → hi
    ring_nodes: list[int]                # node id of each ring's first vertex


def _segments(rings) -> np.ndarray:
    """(N, 5) array of x1, y1, x2, y2, ring index; zero-length segments dropped."""
    rows = []
    for k, ring in enumerate(rings):
        for a, b in zip(ring[:-1], ring[1:]):
            if a != b:
                rows.append((a[0], a[1], b[0], b[1], k))
    return np.array(rows, dtype=float).reshape(-1, 5)

def candidate_pairs(segs: np.ndarray, tol: float):
    """Index pairs (i, j), i < j, whose tolerance-expanded boxes overlap."""
    if len(segs) == 0:
        return
    minx = np.minimum(segs[:, 0], segs[:, 2]) - tol
    maxx = np.maximum(segs[:, 0], segs[:, 2]) + tol
    miny = np.minimum(segs[:, 1], segs[:, 3]) - tol
    maxy = np.maximum(segs[:, 1], segs[:, 3]) + tol
    order = np.argsort(minx, kind="stable")
    sorted_minx = minx[order]
    for pos, i in enumerate(order):
        hi = np.searchsorted(sorted_minx, maxx[i], side="right")
        if hi <= pos + 1:
            continue
        cand = order[pos+1:hi]
        cand = cand[(miny[cand] <= maxy[i]) & (maxy[cand] >= miny[i])]
        for j in cand:
            yield (int(i), int(j)) if i < j else (int(j), int(i))

def _split_params(segs: np.ndarray, tol: float) -> list[list[float]]:
    splits: list[list[float]] = [[] for _ in range(len(segs))]
    n_pairs = 0
    for i, j in candidate_pairs(segs, tol):
        n_pairs += 1
        a = (segs[i, 0], segs[i, 1]); b = (segs[i, 2], segs[i, 3])
        c = (segs[j, 0], segs[j, 1]); d = (segs[j, 2], segs[j, 3])
        hit = seg_isect(a, b, c, d, tol)
        if hit is not None:
            splits[i].append(hit[0]); splits[j].append(hit[1])
        for p in (c, d):
            if point_seg_dist(p, a, b) <= tol:
                splits[i].append(seg_param(p, a, b))
        for p in (a, b):
            if point_seg_dist(p, c, d) <= tol:
                splits[j].append(seg_param(p, c, d))
    log.debug("noding: %d segments, %d candidate pairs", len(segs), n_pairs)
    return splits

def _snap_clusters(points: np.ndarray, tol: float) -> np.ndarray:
    """Cluster label per point; points within tol of each other share a label."""
    parent = np.arange(len(points))

    def find(i):
        while parent[i] != i:
            parent[i] = parent[parent[i]]
            i = parent[i]
        return i

    for i, j in cKDTree(points).query_pairs(tol):
        ri, rj = find(i), find(j)
        if ri != rj:
            parent[max(ri, rj)] = min(ri, rj)
    return np.array([find(i) for i in range(len(points))])

def node_rings(rings, tol: float) -> NodedGraph:
    """Node a set of closed rings into a planar graph with signed edge counts."""
    segs = _segments(rings)
    splits = _split_params(segs, tol)

    pts: list[Point] = []
    chains: list[list[int]] = []
    first_of_ring: dict[int, int] = {}
    for s in range(len(segs)):
        x1, y1, x2, y2 = (float(v) for v in segs[s, :4]); k = int(segs[s, 4])
        ts = sorted(t for t in set(splits[s]) if 0.0 < t < 1.0)
        chain = []
        for t in [0.0] + ts + [1.0]:
            chain.append(len(pts))
            pts.append(lerp((x1, y1), (x2, y2), t))
        chains.append(chain)
        first_of_ring.setdefault(k, chain[0])

    if not pts:
        return NodedGraph([], {}, [])
    labels = _snap_clusters(np.array(pts), tol)
    roots, node_of = np.unique(labels, return_inverse=True)
    nodes = [pts[r] for r in roots]

    edges: dict[tuple[int, int], int] = {}
    for chain in chains:
        for a, b in zip(chain[:-1], chain[1:]):
            u = int(node_of[a]); v = int(node_of[b])
            if u == v:
                continue
            key = (u, v) if u < v else (v, u)
            edges[key] = edges.get(key, 0) + (1 if u < v else -1)
    ring_nodes = [int(node_of[first_of_ring[k]]) if k in first_of_ring else -1
                  for k in range(len(rings))]
    log.debug("noding: %d nodes, %d edges", len(nodes), len(edges))
    return NodedGraph(nodes, edges, ring_nodes)
