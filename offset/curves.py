"""Raw offset curves for points, lines and polygon rings.

A raw curve follows the input at a fixed distance, with caps at line ends and
joins at vertices. It is not noded and will often cross itself; the overlay
package turns a set of raw curves into valid polygons.
"""
import logging
import math
from typing import NamedTuple

from planar.types import Point, LineString, Polygon
from planar.geometry import (
    left_norm, unit_dir, off_pt, dist, line_isect, seg_isect, arc_poly, lerp,
    GeometryError, signed_area, bbox, cross,
)
from .constants import (
    QUADRANT_SEGMENTS, OFFSET_SEGMENT_SEPARATION_FACTOR,
    INSIDE_TURN_VERTEX_SNAP_FACTOR, CURVE_VERTEX_SNAP_FACTOR,
    CLOSING_SEG_LEN_FACTOR, MAX_CLOSING_SEG_LEN_FACTOR,
)

log = logging.getLogger(__name__)


class OffsetCurve(NamedTuple):
    points: tuple[Point, ...]
    kind: str  # "left", "right", "cap", "ring" or "circle"


class LineCurves(NamedTuple):
    """Raw pieces of an open line's buffer, in CCW boundary order.

    right runs forward along the line, left runs backward; each cap starts at
    the last point of the side before it and ends at the first point of the
    side after it.
    """
    right: OffsetCurve
    end_cap: OffsetCurve
    left: OffsetCurve
    start_cap: OffsetCurve

    def ring(self) -> tuple[Point, ...]:
        """Single closed raw boundary: right, end cap, left, start cap."""
        pts = (list(self.right.points) + list(self.end_cap.points[1:-1])
               + list(self.left.points) + list(self.start_cap.points[1:-1]))
        pts.append(pts[0])
        return tuple(pts)


# ============================================================
# Point helpers
# ============================================================
def _fillet(c: Point, p0: Point, p1: Point, r: float, quantum: float,
            clockwise: bool) -> list[Point]:
    """Arc points strictly between p0 and p1 around centre c.

    The number of facets is the swept angle divided by *quantum*, rounded.
    """
    sa = math.atan2(p0[1]-c[1], p0[0]-c[0])
    ea = math.atan2(p1[1]-c[1], p1[0]-c[0])
    if clockwise:
        if sa <= ea:
            sa += 2*math.pi
    elif sa >= ea:
        sa -= 2*math.pi
    n = int(abs(ea - sa)/quantum + 0.5)
    if n < 2:
        return []
    return arc_poly(c[0], c[1], r, sa, ea, n)[1:-1]

def _append(out: list[Point], p: Point, min_sep: float) -> None:
    if not out or dist(out[-1], p) > min_sep:
        out.append(p)

def _closing_factor(params) -> int:
    if params.quadrant_segments >= QUADRANT_SEGMENTS and params.join_style == "round":
        return MAX_CLOSING_SEG_LEN_FACTOR
    return CLOSING_SEG_LEN_FACTOR

# ============================================================
# Joins
# ============================================================
def join_points(s0: Point, s1: Point, s2: Point, r: float, params) -> list[Point]:
    """Left-offset points at vertex s1 between segments s0-s1 and s1-s2.

    The left side is the outside of a right turn: there the join follows
    params.join_style. On a left turn the offset segments are clipped at
    their intersection, or connected by closing segments toward the vertex
    when they do not meet.
    """
    n0 = left_norm(s0, s1); n1 = left_norm(s1, s2)
    o0 = off_pt(s1, n0, r); o1 = off_pt(s1, n1, r)
    d0 = unit_dir(s0, s1); d1 = unit_dir(s1, s2)
    turn = d0[0]*d1[1] - d0[1]*d1[0]
    quantum = math.pi/2/params.quadrant_segments

    if abs(turn) < 1e-12:
        if d0[0]*d1[0] + d0[1]*d1[1] > 0:
            return [o0]
        # reversal: half-turn around the vertex
        if params.join_style == "round":
            return [o0] + _fillet(s1, o0, o1, r, quantum, True) + [o1]
        return [o0, o1]

    if turn < 0:
        if dist(o0, o1) < r*OFFSET_SEGMENT_SEPARATION_FACTOR:
            return [o0]
        if params.join_style == "mitre":
            return mitre_points(s1, o0, d0, o1, d1, r, params.mitre_limit)
        if params.join_style == "bevel":
            return [o0, o1]
        return [o0] + _fillet(s1, o0, o1, r, quantum, True) + [o1]

    hit = seg_isect(off_pt(s0, n0, r), o0, o1, off_pt(s2, n1, r))
    if hit is not None:
        return [lerp(off_pt(s0, n0, r), o0, hit[0])]
    if dist(o0, o1) < r*INSIDE_TURN_VERTEX_SNAP_FACTOR:
        return [o0]
    f = _closing_factor(params)
    if f == 0:
        return [o0, s1, o1]
    mid0 = lerp(o0, s1, 1/(f+1))
    mid1 = lerp(o1, s1, 1/(f+1))
    return [o0, mid0, mid1, o1]

def mitre_points(s1: Point, o0: Point, d0: Point, o1: Point, d1: Point,
                 r: float, mitre_limit: float) -> list[Point]:
    """Mitre corner, or the bevel chord when the spike exceeds mitre_limit*r."""
    try:
        m = line_isect(o0, d0, o1, d1)
    except GeometryError:
        return [o0, o1]
    if dist(m, s1) > mitre_limit*r:
        return [o0, o1]
    return [m]

# ============================================================
# Curve builders
# ============================================================
def point_curve(p: Point, r: float, params) -> OffsetCurve:
    """CCW circle of 4*quadrant_segments vertices around p."""
    pts = arc_poly(p[0], p[1], r, 0.0, 2*math.pi, 4*params.quadrant_segments)[:-1]
    pts.append(pts[0])
    return OffsetCurve(tuple(pts), "circle")

def left_side(path, r: float, params) -> list[Point]:
    """Left offset of an open path at distance r, joins included."""
    min_sep = r*CURVE_VERTEX_SNAP_FACTOR
    out: list[Point] = []
    _append(out, off_pt(path[0], left_norm(path[0], path[1]), r), min_sep)
    for i in range(1, len(path)-1):
        for p in join_points(path[i-1], path[i], path[i+1], r, params):
            _append(out, p, min_sep)
    _append(out, off_pt(path[-1], left_norm(path[-2], path[-1]), r), min_sep)
    return out

def cap_points(end: Point, t: Point, a: Point, b: Point, r: float, params) -> list[Point]:
    """Cap at *end* from side point a to side point b, bulging along unit t."""
    if params.cap_style == "flat":
        return [a, b]
    if params.cap_style == "square":
        return [a, off_pt(a, t, r), off_pt(b, t, r), b]
    sa = math.atan2(a[1]-end[1], a[0]-end[0])
    arc = arc_poly(end[0], end[1], r, sa, sa+math.pi, 2*params.quadrant_segments)[1:-1]
    return [a] + arc + [b]

def line_curves(line: LineString, r: float, params) -> LineCurves:
    """Two sides and two caps of an open line buffered by r > 0."""
    path = list(line.coords)
    rev = path[::-1]
    right = left_side(rev, r, params)[::-1]
    left = left_side(path, r, params)[::-1]
    t_end = unit_dir(path[-2], path[-1])
    t_start = unit_dir(path[1], path[0])
    end_cap = cap_points(path[-1], t_end, right[-1], left[0], r, params)
    start_cap = cap_points(path[0], t_start, left[-1], right[0], r, params)
    log.debug("line curves: right=%d left=%d cap=%s", len(right), len(left), params.cap_style)
    return LineCurves(
        right=OffsetCurve(tuple(right), "right"),
        end_cap=OffsetCurve(tuple(end_cap), "cap"),
        left=OffsetCurve(tuple(left), "left"),
        start_cap=OffsetCurve(tuple(start_cap), "cap"),
    )

def ring_left(ring, r: float, params) -> list[Point]:
    """Closed left offset of a closed ring, joins at every vertex."""
    pts = list(ring[:-1]) if ring[0] == ring[-1] else list(ring)
    n = len(pts); min_sep = r*CURVE_VERTEX_SNAP_FACTOR
    out: list[Point] = []
    for i in range(n):
        for p in join_points(pts[i-1], pts[i], pts[(i+1)%n], r, params):
            _append(out, p, min_sep)
    while len(out) > 1 and dist(out[0], out[-1]) <= min_sep:
        out.pop()
    out.append(out[0])
    return out

def ring_curve(ring, d: float, params) -> OffsetCurve:
    """Offset a ring by d: right side for d > 0, left side for d < 0.

    Shells are CCW and holes CW, so the right side is always away from the
    polygon material. The curve keeps the ring's orientation.
    """
    if d < 0:
        pts = ring_left(ring, -d, params)
    else:
        pts = ring_left(ring[::-1], d, params)[::-1]
    return OffsetCurve(tuple(pts), "ring")

def is_eroded_completely(ring, r: float) -> bool:
    """True if offsetting the ring inward by r leaves nothing.

    Triangles compare r with their inradius; other rings compare 2r with the
    smaller bounding box dimension.
    """
    pts = list(ring[:-1]) if ring[0] == ring[-1] else list(ring)
    if len(pts) < 3:
        return True
    if len(pts) == 3:
        perim = sum(dist(pts[i], pts[(i+1)%3]) for i in range(3))
        return 2*abs(signed_area(pts))/perim <= r
    b = bbox(pts)
    return 2*r >= min(b[2]-b[0], b[3]-b[1])

def polygon_curves(poly: Polygon, d: float, params) -> list[OffsetCurve]:
    """Raw ring curves of a polygon; shells and holes that vanish are skipped."""
    if d < 0 and is_eroded_completely(poly.shell, -d):
        log.debug("shell eroded completely at d=%g", d)
        return []
    curves = [ring_curve(poly.shell, d, params)]
    for hole in poly.holes:
        if d > 0 and is_eroded_completely(hole, d):
            continue
        curves.append(ring_curve(hole, d, params))
    return curves

# ============================================================
# Swept region
# ============================================================
class Fan(NamedTuple):
    """Convex corner piece: apex, then rim points in order.

    The two edges at the apex are seams shared with the bands beside the
    fan; only the rim is an outer edge of the swept region.
    """
    apex: Point
    rim: tuple[Point, ...]
    sign: float   # +1 if apex-rim is CCW, -1 if CW

    def contains(self, p: Point, tol: float) -> bool:
        poly = (self.apex,) + self.rim
        n = len(poly)
        for i in range(n):
            a, b = poly[i], poly[(i+1) % n]
            ln = dist(a, b)
            if ln == 0:
                continue
            s = self.sign*cross(a, b, p)/ln
            seam = i == 0 or i == n-1
            if (s < -tol) if seam else (s <= tol):
                return False
        return True


def _fan(apex: Point, rim, r: float) -> Fan | None:
    area = signed_area([apex] + list(rim))
    if abs(area) <= 1e-12*r*r:
        return None
    return Fan(apex, tuple(rim), 1.0 if area > 0 else -1.0)


class Stroke(NamedTuple):
    """Region within r of a source's segments, shaped by the emitted joins
    and caps: a band along every segment plus a fan at every outside turn
    and line end.
    """
    bands: tuple[tuple[Point, Point], ...]
    fans: tuple[Fan, ...]
    r: float

    def covers(self, p: Point, tol: float = 0.0) -> bool:
        """True if p lies in the region by more than tol from its outline."""
        for a, b in self.bands:
            ln = dist(a, b)
            if ln == 0:
                continue
            t = ((p[0]-a[0])*(b[0]-a[0]) + (p[1]-a[1])*(b[1]-a[1]))/ln
            if -tol <= t <= ln + tol and abs(cross(a, b, p))/ln < self.r - tol:
                return True
        return any(f.contains(p, tol) for f in self.fans)


def _vertex_fan(s0: Point, s1: Point, s2: Point, r: float, params) -> Fan | None:
    """Join fan on the outside of the turn at s1, or None when straight."""
    d0 = unit_dir(s0, s1); d1 = unit_dir(s1, s2)
    turn = d0[0]*d1[1] - d0[1]*d1[0]
    if abs(turn) < 1e-12 and d0[0]*d1[0] + d0[1]*d1[1] > 0:
        return None
    if turn > 0:
        s0, s2 = s2, s0
    o0 = off_pt(s1, left_norm(s0, s1), r); o1 = off_pt(s1, left_norm(s1, s2), r)
    rim = join_points(s0, s1, s2, r, params)
    if rim[0] != o0:
        rim = [o0] + rim
    if rim[-1] != o1:
        rim = rim + [o1]
    return _fan(s1, rim, r)

def _path_stroke(path, closed: bool, r: float, params):
    bands = [(path[i], path[i+1]) for i in range(len(path)-1)]
    fans = []
    if closed:
        bands.append((path[-1], path[0]))
        ends = range(len(path))
    else:
        ends = range(1, len(path)-1)
    n = len(path)
    for i in ends:
        fans.append(_vertex_fan(path[i-1], path[i], path[(i+1) % n], r, params))
    return bands, fans

def source_stroke(source, r: float, params) -> Stroke:
    """Swept region of a point, a line or a polygon's rings at distance r."""
    if isinstance(source, Polygon):
        bands, fans = [], []
        for ring in (source.shell,) + tuple(source.holes):
            b, f = _path_stroke(list(ring[:-1]), True, r, params)
            bands += b; fans += f
    elif isinstance(source, LineString):
        path = list(source.coords)
        bands, fans = _path_stroke(path, False, r, params)
        for end, prev in ((path[-1], path[-2]), (path[0], path[1])):
            n = left_norm(prev, end)
            rim = cap_points(end, unit_dir(prev, end), off_pt(end, n, -r),
                             off_pt(end, n, r), r, params)
            fans.append(_fan(end, rim, r))
    else:
        c = source.coord
        circle = list(point_curve(c, r, params).points[:-1])
        half = len(circle)//2
        bands = []
        fans = [_fan(c, circle[:half+1], r), _fan(c, circle[half:] + circle[:1], r)]
    return Stroke(tuple(bands), tuple(f for f in fans if f is not None), r)
