"""Planar graph over noded edges: half-edges, face cycles, components, winding.

Half-edge 2k runs along edge k from its lower to its higher node id and
half-edge 2k+1 runs back. Each half-edge has exactly one face on its left;
tracing "next" keeps that face on the left, so bounded faces come out as CCW
cycles and the outside of each connected component as a CW cycle.
"""
import math
from collections import deque
from typing import NamedTuple

from planar.types import Point
from planar.geometry import winding_number, signed_area, point_in_ring, bbox
from .noding import NodedGraph


class PlanarGraph(NamedTuple):
    nodes: list[Point]
    tail: list[int]            # per half-edge
    head: list[int]
    weight: list[int]          # net raw traversals along the half-edge
    outgoing: list[list[int]]  # per node, half-edges sorted by angle (CCW)
    nxt: list[int]             # per half-edge, next half-edge around its left face
    cycle_of: list[int]        # per half-edge
    cycles: list[list[int]]
    area: list[float]          # signed area per cycle
    comp_of_node: list[int]


def twin(h: int) -> int:
    return h ^ 1

def cycle_coords(g: PlanarGraph, c: int) -> list[Point]:
    """Closed coordinate ring of a face cycle."""
    pts = [g.nodes[g.tail[h]] for h in g.cycles[c]]
    pts.append(pts[0])
    return pts

def build_graph(noded: NodedGraph) -> PlanarGraph:
    nodes = noded.nodes
    tail: list[int] = []; head: list[int] = []; weight: list[int] = []
    for (u, v), w in noded.edges.items():
        tail += [u, v]; head += [v, u]; weight += [w, -w]

    outgoing: list[list[int]] = [[] for _ in nodes]
    for h in range(len(tail)):
        outgoing[tail[h]].append(h)
    pos = [0]*len(tail)
    for v, hs in enumerate(outgoing):
        p = nodes[v]
        hs.sort(key=lambda h: math.atan2(nodes[head[h]][1]-p[1], nodes[head[h]][0]-p[0]))
        for i, h in enumerate(hs):
            pos[h] = i

    # next around the left face: the first outgoing edge clockwise from the twin
    nxt = [0]*len(tail)
    for h in range(len(tail)):
        t = twin(h); hs = outgoing[head[h]]
        nxt[h] = hs[pos[t]-1]

    cycle_of = [-1]*len(tail)
    cycles: list[list[int]] = []
    for h0 in range(len(tail)):
        if cycle_of[h0] >= 0:
            continue
        cyc = []; h = h0
        while cycle_of[h] < 0:
            cycle_of[h] = len(cycles); cyc.append(h); h = nxt[h]
        cycles.append(cyc)
    area = [signed_area([nodes[tail[h]] for h in cyc]) for cyc in cycles]

    parent = list(range(len(nodes)))
    def find(i):
        while parent[i] != i:
            parent[i] = parent[parent[i]]; i = parent[i]
        return i
    for u, v in noded.edges:
        ru, rv = find(u), find(v)
        if ru != rv:
            parent[max(ru, rv)] = min(ru, rv)
    comp_of_node = [find(i) for i in range(len(nodes))]

    return PlanarGraph(nodes, tail, head, weight, outgoing, nxt, cycle_of,
                       cycles, area, comp_of_node)

# ============================================================
# Components and nesting
# ============================================================
class Components(NamedTuple):
    outer: dict[int, int]          # component -> its CW outer cycle
    anchor: dict[int, int]         # component -> its lowest-left node
    parent_face: dict[int, int]    # component -> enclosing bounded cycle, or -1

def components(g: PlanarGraph) -> Components:
    """Outer cycle, anchor node and enclosing face of every component."""
    outer: dict[int, int] = {}
    for c, cyc in enumerate(g.cycles):
        k = g.comp_of_node[g.tail[cyc[0]]]
        if k not in outer or g.area[c] < g.area[outer[k]]:
            outer[k] = c
    anchor: dict[int, int] = {}
    for v, k in enumerate(g.comp_of_node):
        if k in outer and (k not in anchor or g.nodes[v] < g.nodes[anchor[k]]):
            anchor[k] = v

    outers = set(outer.values())
    bounded = [c for c in range(len(g.cycles)) if c not in outers and g.area[c] > 0]
    rings = {c: cycle_coords(g, c) for c in bounded}
    boxes = {c: bbox(rings[c]) for c in bounded}
    parent_face: dict[int, int] = {}
    for k, v in anchor.items():
        p = g.nodes[v]; best = -1
        for c in bounded:
            if g.comp_of_node[g.tail[g.cycles[c][0]]] == k:
                continue
            b = boxes[c]
            if not (b[0] <= p[0] <= b[2] and b[1] <= p[1] <= b[3]):
                continue
            if point_in_ring(p, rings[c], 0.0) > 0 and (best < 0 or g.area[c] < g.area[best]):
                best = c
        parent_face[k] = best
    return Components(outer, anchor, parent_face)

# ============================================================
# Winding
# ============================================================
def face_windings(g: PlanarGraph, comps: Components, rings, ring_nodes) -> list[int]:
    """Winding number of the raw rings on the left face of every cycle.

    Each component starts from the winding just outside it, which only the
    rings of other components contribute to, then crosses its own edges:
    the face left of a half-edge winds weight more than the face right of it.
    """
    ring_comp = [g.comp_of_node[n] if n >= 0 else -1 for n in ring_nodes]
    wind = [0]*len(g.cycles)
    for k, c0 in comps.outer.items():
        p = g.nodes[comps.anchor[k]]
        wind[c0] = sum(winding_number(p, ring) for ring, rk in zip(rings, ring_comp)
                       if rk != k and rk >= 0)
        seen = {c0}; queue = deque([c0])
        while queue:
            c = queue.popleft()
            for h in g.cycles[c]:
                c2 = g.cycle_of[twin(h)]
                if c2 not in seen:
                    wind[c2] = wind[c] - g.weight[h]
                    seen.add(c2); queue.append(c2)
    return wind
