"""Pure planar geometry functions: vectors, rings, intersections, distances."""
import math
from .types import Point, BBox

# ============================================================
# Error Types
# ============================================================
class GeometryError(ValueError):
    """Raised for impossible geometry operations."""

class InvalidGeometryError(GeometryError):
    """Raised when an input primitive is malformed."""

# ============================================================
# Vector Utilities
# ============================================================
def left_norm(p1: Point, p2: Point) -> Point:
    """Unit normal vector to the left of the direction p1 → p2 (CCW perpendicular)."""
    dx = p2[0]-p1[0]; dy = p2[1]-p1[1]; Ln = math.sqrt(dx**2+dy**2)
    return (-dy/Ln, dx/Ln)

def unit_dir(p1: Point, p2: Point) -> Point:
    """Unit vector in the direction p1 → p2."""
    dx = p2[0]-p1[0]; dy = p2[1]-p1[1]; Ln = math.sqrt(dx**2+dy**2)
    return (dx/Ln, dy/Ln)

def off_pt(p: Point, n: Point, d: float) -> Point:
    """Offset point p by distance d along unit direction n."""
    return (p[0]+d*n[0], p[1]+d*n[1])

def dist(p: Point, q: Point) -> float:
    return math.hypot(q[0]-p[0], q[1]-p[1])

def cross(o: Point, a: Point, b: Point) -> float:
    """Z component of (a - o) x (b - o); positive when o → a → b turns left."""
    return (a[0]-o[0])*(b[1]-o[1]) - (a[1]-o[1])*(b[0]-o[0])

def line_isect(p1: Point, d1: Point, p2: Point, d2: Point) -> Point:
    """Intersection of two lines (p1+t*d1) and (p2+s*d2). Raises GeometryError if parallel."""
    det = d1[0]*d2[1]-d1[1]*d2[0]
    if abs(det) < 1e-12:
        raise GeometryError(f"Parallel lines: det={det:.2e}")
    t = ((p2[0]-p1[0])*d2[1]-(p2[1]-p1[1])*d2[0])/det
    return (p1[0]+t*d1[0], p1[1]+t*d1[1])

def arc_poly(cx: float, cy: float, r: float, sa: float, ea: float, n: int = 60) -> list[Point]:
    """Generate n+1 points along a circular arc from angle sa to ea (radians)."""
    return [(cx+r*math.cos(sa+(ea-sa)*i/n), cy+r*math.sin(sa+(ea-sa)*i/n))
            for i in range(n+1)]

# ============================================================
# Ring Measures
# ============================================================
def signed_area(verts) -> float:
    """Shoelace area, positive for CCW. A repeated closing vertex adds nothing."""
    n = len(verts); a = 0.0
    for i in range(n):
        j = (i+1)%n; a += verts[i][0]*verts[j][1]-verts[j][0]*verts[i][1]
    return a/2

def poly_area(verts) -> float:
    """Polygon area via the shoelace formula. Works for either winding order."""
    return abs(signed_area(verts))

def is_ccw(verts) -> bool:
    return signed_area(verts) > 0

def bbox(points) -> BBox:
    """Axis-aligned bounding box (min_x, min_y, max_x, max_y)."""
    xs = [p[0] for p in points]; ys = [p[1] for p in points]
    return (min(xs), min(ys), max(xs), max(ys))

def bbox_contains(outer: BBox, inner: BBox) -> bool:
    return (outer[0] <= inner[0] and outer[1] <= inner[1]
            and inner[2] <= outer[2] and inner[3] <= outer[3])

# ============================================================
# Containment
# ============================================================
def winding_number(p: Point, ring) -> int:
    """Winding number of a closed ring around p (CCW counts +1).

    The ring may or may not repeat its first vertex. Points on the ring give
    an arbitrary but finite answer; callers keep p off the boundary.
    """
    wn = 0; n = len(ring); x, y = p
    for i in range(n):
        a = ring[i]; b = ring[(i+1)%n]
        if a[1] <= y:
            if b[1] > y and cross(a, b, p) > 0:
                wn += 1
        elif b[1] <= y and cross(a, b, p) < 0:
            wn -= 1
    return wn

def point_in_ring(p: Point, ring, tol: float = 1e-12) -> int:
    """Locate p against a ring: 1 inside, 0 on the boundary, -1 outside."""
    n = len(ring)
    for i in range(n):
        if point_seg_dist(p, ring[i], ring[(i+1)%n]) <= tol:
            return 0
    return 1 if winding_number(p, ring) != 0 else -1

# ============================================================
# Segments
# ============================================================
def seg_param(p: Point, a: Point, b: Point) -> float:
    """Parameter of the projection of p onto the line a → b (0 at a, 1 at b)."""
    dx = b[0]-a[0]; dy = b[1]-a[1]; L2 = dx*dx+dy*dy
    if L2 == 0:
        return 0.0
    return ((p[0]-a[0])*dx+(p[1]-a[1])*dy)/L2

def point_seg_dist(p: Point, a: Point, b: Point) -> float:
    """Distance from p to the closed segment a-b."""
    t = min(1.0, max(0.0, seg_param(p, a, b)))
    return math.hypot(p[0]-(a[0]+t*(b[0]-a[0])), p[1]-(a[1]+t*(b[1]-a[1])))

def seg_isect(p1: Point, p2: Point, q1: Point, q2: Point, tol: float = 0.0):
    """Proper crossing of segments p1-p2 and q1-q2.

    Returns (t, u) parameters along each segment, or None when the segments
    are parallel or do not cross within [-tol, 1+tol] (in parameter space
    scaled by segment length). Collinear overlaps are not reported here; the
    noder finds them through endpoint-on-segment tests.
    """
    rx = p2[0]-p1[0]; ry = p2[1]-p1[1]
    sx = q2[0]-q1[0]; sy = q2[1]-q1[1]
    det = rx*sy - ry*sx
    Lr = math.hypot(rx, ry); Ls = math.hypot(sx, sy)
    if Lr == 0 or Ls == 0 or abs(det) <= 1e-12 * Lr * Ls:
        return None
    qpx = q1[0]-p1[0]; qpy = q1[1]-p1[1]
    t = (qpx*sy - qpy*sx)/det
    u = (qpx*ry - qpy*rx)/det
    et = tol/Lr; eu = tol/Ls
    if -et <= t <= 1+et and -eu <= u <= 1+eu:
        return (min(1.0, max(0.0, t)), min(1.0, max(0.0, u)))
    return None

def lerp(a: Point, b: Point, t: float) -> Point:
    """Linear interpolation between two points."""
    return (a[0] + t * (b[0] - a[0]), a[1] + t * (b[1] - a[1]))

def ring_is_simple(ring) -> bool:
    """True when no two non-adjacent edges of the closed ring touch or cross."""
    pts = list(ring[:-1]) if ring[0] == ring[-1] else list(ring)
    n = len(pts)
    edges = [(pts[i], pts[(i+1)%n]) for i in range(n)]
    boxes = [bbox(e) for e in edges]
    for i in range(n):
        a1, a2 = edges[i]; bi = boxes[i]
        for j in range(i+1, n):
            if j == i+1 or (i == 0 and j == n-1):
                continue
            bj = boxes[j]
            if bi[2] < bj[0] or bj[2] < bi[0] or bi[3] < bj[1] or bj[3] < bi[1]:
                continue
            b1, b2 = edges[j]
            if seg_isect(a1, a2, b1, b2) is not None:
                return False
            if min(point_seg_dist(b1, a1, a2), point_seg_dist(b2, a1, a2),
                   point_seg_dist(a1, b1, b2), point_seg_dist(a2, b1, b2)) == 0.0:
                return False
    return True

def boundary_dist(p: Point, paths) -> float:
    """Minimum distance from p to any segment of the given point sequences."""
    best = math.inf
    for path in paths:
        if len(path) == 1:
            best = min(best, dist(p, path[0]))
            continue
        for i in range(len(path)-1):
            d = point_seg_dist(p, path[i], path[i+1])
            if d < best:
                best = d
    return best
