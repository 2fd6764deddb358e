"""Union/repair: turn raw offset curves into valid polygons.

Faces of the noded arrangement are classified by winding number and then
checked against the region swept by the source's segments, joins and caps:
an erosion keeps only faces inside the source and outside that region, a
dilation also keeps any face the region covers. The boundary between kept
and dropped faces is traced into rings, which are assembled into polygons
with holes.
"""
import logging
import warnings

from planar.types import Point, Polygon
from planar.geometry import (
    signed_area, cross, dist, point_in_ring, boundary_dist, bbox, bbox_contains,
)
from offset.curves import Stroke, source_stroke
from .constants import (
    NODE_TOLERANCE_FACTOR, SLIVER_AREA_FACTOR, FACE_DISTANCE_FACTOR, MAX_SCANLINES,
)
from .noding import node_rings
from .graph import build_graph, components, face_windings, cycle_coords, twin

log = logging.getLogger(__name__)


class NumericDegeneracyWarning(UserWarning):
    """A result ring collapsed below the area tolerance and was dropped."""


def node_tolerance(rings, distance: float) -> float:
    """Snapping tolerance scaled to the distance and the coordinates in play."""
    scale = abs(distance)
    for ring in rings:
        b = bbox(ring)
        scale = max(scale, b[2]-b[0], b[3]-b[1], abs(b[0]), abs(b[1]), abs(b[2]), abs(b[3]))
    return NODE_TOLERANCE_FACTOR * max(scale, 1.0)

# ============================================================
# Face sampling
# ============================================================
def _crossings(rings, y: float) -> list[float]:
    """X values where the ring edges cross the horizontal line at y."""
    xs = []
    for ring in rings:
        for i in range(len(ring)-1):
            (x1, y1), (x2, y2) = ring[i], ring[i+1]
            if (y1 <= y < y2) or (y2 <= y < y1):
                xs.append(x1 + (y-y1)*(x2-x1)/(y2-y1))
    return sorted(xs)

def interior_point(shell, holes=()):
    """A point well inside the region bounded by shell minus holes, or None.

    Scanlines run through the middle of the widest gaps between vertex
    heights; the interval midpoint farthest from the boundary wins.
    """
    rings = [shell] + list(holes)
    ys = sorted({p[1] for ring in rings for p in ring})
    gaps = sorted(zip(ys[:-1], ys[1:]), key=lambda g: g[0]-g[1])[:MAX_SCANLINES]
    best = None; best_d = 0.0
    for y0, y1 in gaps:
        y = (y0+y1)/2
        xs = _crossings(rings, y)
        for i in range(0, len(xs)-1, 2):
            p = ((xs[i]+xs[i+1])/2, y)
            d = boundary_dist(p, rings)
            if d > best_d:
                best, best_d = p, d
    return best

def inside_source(p: Point, source) -> bool:
    """True if p is strictly inside a polygon source; never for points or lines."""
    if not isinstance(source, Polygon):
        return False
    return (point_in_ring(p, source.shell, 0.0) > 0
            and all(point_in_ring(p, h, 0.0) < 0 for h in source.holes))

def keep_face(w: int, p: Point, source, distance: float, stroke: Stroke) -> bool:
    covered = stroke.covers(p, abs(distance)*FACE_DISTANCE_FACTOR)
    if distance < 0:
        return w > 0 and inside_source(p, source) and not covered
    return w > 0 or inside_source(p, source) or covered

# ============================================================
# Ring assembly
# ============================================================
def _drop_collinear(pts: list[Point], tol: float) -> list[Point]:
    """Remove vertices lying on the straight run between their neighbours."""
    changed = True
    while changed and len(pts) > 3:
        changed = False
        n = len(pts)
        for i in range(n):
            a, b, c = pts[i-1], pts[i], pts[(i+1) % n]
            ab = (b[0]-a[0], b[1]-a[1]); bc = (c[0]-b[0], c[1]-b[1])
            if (abs(cross(a, b, c)) <= tol*dist(a, c)
                    and ab[0]*bc[0]+ab[1]*bc[1] > 0):
                del pts[i]; changed = True
                break
    return pts

def _ring_side(ring, shell):
    for p in ring[:-1]:
        loc = point_in_ring(p, shell, 0.0)
        if loc != 0:
            return loc
    a, b = ring[0], ring[1]
    return point_in_ring(((a[0]+b[0])/2, (a[1]+b[1])/2), shell, 0.0)

def assemble(rings) -> list[Polygon]:
    """Group CCW shells and CW holes into polygons.

    Each hole goes to the smallest shell that contains it.
    """
    shells = sorted((r for r in rings if signed_area(r) > 0), key=signed_area)
    holes = [r for r in rings if signed_area(r) < 0]
    owned: dict[int, list] = {i: [] for i in range(len(shells))}
    for hole in holes:
        hb = bbox(hole)
        for i, shell in enumerate(shells):
            if bbox_contains(bbox(shell), hb) and _ring_side(hole, shell) > 0:
                owned[i].append(hole)
                break
        else:
            log.debug("dropping hole with no shell at %s", hole[0])
    return [Polygon(tuple(shells[i]), tuple(tuple(h) for h in owned[i]))
            for i in range(len(shells))]

# ============================================================
# Union
# ============================================================
def _classify(g, comps, wind, distance: float, source, stroke) -> dict[int, bool]:
    """Kept flag for every bounded face."""
    outers = set(comps.outer.values())
    children: dict[int, list[int]] = {}
    for k, pf in comps.parent_face.items():
        if pf >= 0:
            children.setdefault(pf, []).append(comps.outer[k])
    kept: dict[int, bool] = {}
    for c in range(len(g.cycles)):
        if c in outers or g.area[c] <= 0:
            continue
        holes = [cycle_coords(g, h) for h in children.get(c, [])]
        p = interior_point(cycle_coords(g, c), holes)
        kept[c] = p is not None and keep_face(wind[c], p, source, distance, stroke)
    return kept

def _trace(g, is_boundary) -> list[list[Point]]:
    """Closed vertex loops along the boundary half-edges.

    At each node the walk turns onto the first boundary half-edge clockwise
    from where it came in, so loops that touch at a vertex come out separate.
    """
    used = set()
    loops = []
    for h0 in range(len(g.tail)):
        if h0 in used or not is_boundary(h0):
            continue
        loop = []; h = h0
        while h not in used:
            used.add(h); loop.append(g.nodes[g.tail[h]])
            hs = g.outgoing[g.head[h]]
            i = hs.index(twin(h))
            for k in range(1, len(hs)+1):
                cand = hs[(i-k) % len(hs)]
                if is_boundary(cand):
                    h = cand
                    break
        loops.append(loop)
    return loops

def union_rings(rings, distance: float, source, params) -> list[Polygon]:
    """Valid polygons covered by the raw closed curves *rings*.

    *source* is the primitive the curves were offset from and *params* the
    join and cap settings they were built with. An empty list is a normal
    outcome, e.g. for a fully eroded polygon.
    """
    rings = [r for r in rings if len(r) >= 4]
    if not rings:
        return []
    tol = node_tolerance(rings, distance)
    noded = node_rings(rings, tol)
    g = build_graph(noded)
    if not g.cycles:
        return []
    comps = components(g)
    wind = face_windings(g, comps, rings, noded.ring_nodes)
    stroke = source_stroke(source, abs(distance), params)
    kept = _classify(g, comps, wind, distance, source, stroke)

    outer_of = {c: k for k, c in comps.outer.items()}

    def kept_left(h):
        c = g.cycle_of[h]
        if c in outer_of:
            pf = comps.parent_face[outer_of[c]]
            return pf >= 0 and kept.get(pf, False)
        return kept.get(c, False)

    def is_boundary(h):
        return kept_left(h) and not kept_left(twin(h))

    min_area = SLIVER_AREA_FACTOR*distance*distance
    out_rings = []
    for loop in _trace(g, is_boundary):
        pts = _drop_collinear(loop, tol)
        if len(pts) < 3:
            continue
        pts.append(pts[0])
        area = signed_area(pts)
        if abs(area) < min_area:
            warnings.warn(f"Dropped sliver ring of area {area:.3g} at {pts[0]}",
                          NumericDegeneracyWarning, stacklevel=2)
            continue
        out_rings.append(pts)
    result = assemble(out_rings)
    log.debug("union: %d raw rings, %d faces kept of %d, %d polygons",
              len(rings), sum(kept.values()), len(kept), len(result))
    return result
