"""Geometry construction, validation and typed traversal."""
import math
from typing import Callable

from .types import (
    Point, Ring, PointGeom, LineString, Polygon,
    MultiPoint, MultiLineString, MultiPolygon, Geometry,
)
from .geometry import (
    InvalidGeometryError,
    signed_area, is_ccw, bbox, bbox_contains, point_in_ring, ring_is_simple,
    seg_isect,
)

# ============================================================
# Primitive Constructors
# ============================================================
def _coord(c) -> Point:
    if len(c) < 2:
        raise InvalidGeometryError(f"Coordinate needs x and y: {c!r}")
    x = float(c[0]); y = float(c[1])
    if not (math.isfinite(x) and math.isfinite(y)):
        raise InvalidGeometryError(f"Non-finite coordinate: ({x}, {y})")
    return (x, y)

def _dedupe(coords) -> list[Point]:
    """Drop consecutive duplicate points."""
    out: list[Point] = []
    for c in coords:
        p = _coord(c)
        if not out or p != out[-1]:
            out.append(p)
    return out

def make_ring(coords) -> Ring:
    """Closed ring with no consecutive duplicates.

    An open coordinate list is closed by repeating its first point. Raises
    InvalidGeometryError for fewer than 3 distinct vertices.
    """
    pts = _dedupe(coords)
    if len(pts) > 1 and pts[0] == pts[-1]:
        pts.pop()
    if len(set(pts)) < 3:
        raise InvalidGeometryError(f"Ring needs 3 distinct vertices, got {len(set(pts))}")
    pts.append(pts[0])
    if abs(signed_area(pts)) == 0.0:
        raise InvalidGeometryError("Ring has zero area")
    return tuple(pts)

def oriented(ring: Ring, ccw: bool) -> Ring:
    """Ring reversed if needed so its orientation matches *ccw*."""
    if is_ccw(ring) != ccw:
        return tuple(reversed(ring))
    return ring

def make_point(coord) -> PointGeom:
    return PointGeom(_coord(coord))

def make_linestring(coords) -> LineString:
    pts = _dedupe(coords)
    if len(pts) < 2:
        raise InvalidGeometryError(f"LineString needs 2 distinct points, got {len(pts)}")
    return LineString(tuple(pts))

def make_polygon(shell, holes=()) -> Polygon:
    """Polygon with a CCW shell and CW holes."""
    return Polygon(oriented(make_ring(shell), True),
                   tuple(oriented(make_ring(h), False) for h in holes))

# ============================================================
# Tagged Construction
# ============================================================
_DIMENSION = {PointGeom: 0, MultiPoint: 0, LineString: 1, MultiLineString: 1,
              Polygon: 2, MultiPolygon: 2}

def make_geometry(kind: str, coordinates) -> Geometry:
    """Build a geometry from a type tag and nested coordinate lists.

    ``GeometryCollection`` takes a list of (kind, coordinates) pairs and is
    accepted only when every member has the same dimension; it comes back as
    the matching multi-geometry.
    """
    if kind == "Point":
        return make_point(coordinates)
    if kind == "LineString":
        return make_linestring(coordinates)
    if kind == "Polygon":
        if not coordinates:
            raise InvalidGeometryError("Polygon needs a shell ring")
        return make_polygon(coordinates[0], coordinates[1:])
    if kind == "MultiPoint":
        return MultiPoint(tuple(make_point(c) for c in coordinates))
    if kind == "MultiLineString":
        return MultiLineString(tuple(make_linestring(c) for c in coordinates))
    if kind == "MultiPolygon":
        return MultiPolygon(tuple(make_geometry("Polygon", c) for c in coordinates))
    if kind == "GeometryCollection":
        members = [make_geometry(k, c) for k, c in coordinates]
        dims = {_DIMENSION[type(m)] for m in members}
        if len(dims) > 1:
            raise InvalidGeometryError(f"Mixed dimensionality collection: {sorted(dims)}")
        flat = [p for m in members for p in primitives(m)]
        if not dims or dims == {2}:
            return MultiPolygon(tuple(flat))
        if dims == {1}:
            return MultiLineString(tuple(flat))
        return MultiPoint(tuple(flat))
    raise InvalidGeometryError(f"Unknown geometry type: {kind!r}")

# ============================================================
# Traversal
# ============================================================
def primitives(geom: Geometry) -> list:
    """Member primitives of a geometry (the geometry itself for primitives)."""
    if isinstance(geom, (MultiPoint, MultiLineString, MultiPolygon)):
        return list(geom.members)
    if isinstance(geom, (PointGeom, LineString, Polygon)):
        return [geom]
    raise InvalidGeometryError(f"Not a geometry: {type(geom).__name__}")

def map_coords(geom: Geometry, fn: Callable[[Point], Point]) -> Geometry:
    """Apply fn to every coordinate, preserving the geometry's structure."""
    if isinstance(geom, PointGeom):
        return PointGeom(fn(geom.coord))
    if isinstance(geom, LineString):
        return LineString(tuple(fn(p) for p in geom.coords))
    if isinstance(geom, Polygon):
        return Polygon(tuple(fn(p) for p in geom.shell),
                       tuple(tuple(fn(p) for p in h) for h in geom.holes))
    if isinstance(geom, MultiPoint):
        return MultiPoint(tuple(map_coords(m, fn) for m in geom.members))
    if isinstance(geom, MultiLineString):
        return MultiLineString(tuple(map_coords(m, fn) for m in geom.members))
    if isinstance(geom, MultiPolygon):
        return MultiPolygon(tuple(map_coords(m, fn) for m in geom.members))
    raise InvalidGeometryError(f"Not a geometry: {type(geom).__name__}")

def coords_of(geom: Geometry) -> list[Point]:
    """Every coordinate of a geometry, flattened."""
    out: list[Point] = []
    for prim in primitives(geom):
        if isinstance(prim, PointGeom):
            out.append(prim.coord)
        elif isinstance(prim, LineString):
            out.extend(prim.coords)
        else:
            out.extend(prim.shell)
            for h in prim.holes:
                out.extend(h)
    return out

def geometry_bbox(geom: Geometry):
    return bbox(coords_of(geom))

def normalize(geom: Geometry) -> Geometry:
    """Rebuild a geometry through the constructors (dedupe, close, orient)."""
    if isinstance(geom, PointGeom):
        return make_point(geom.coord)
    if isinstance(geom, LineString):
        return make_linestring(geom.coords)
    if isinstance(geom, Polygon):
        return make_polygon(geom.shell, geom.holes)
    if isinstance(geom, MultiPoint):
        return MultiPoint(tuple(normalize(m) for m in geom.members))
    if isinstance(geom, MultiLineString):
        return MultiLineString(tuple(normalize(m) for m in geom.members))
    if isinstance(geom, MultiPolygon):
        return MultiPolygon(tuple(normalize(m) for m in geom.members))
    raise InvalidGeometryError(f"Not a geometry: {type(geom).__name__}")

# ============================================================
# Validation
# ============================================================
def _rings_cross(r1: Ring, r2: Ring) -> bool:
    for i in range(len(r1)-1):
        for j in range(len(r2)-1):
            if seg_isect(r1[i], r1[i+1], r2[j], r2[j+1]) is not None:
                return True
    return False

def validate_polygon(poly: Polygon) -> None:
    """Check ring closure, simplicity, orientation and hole placement."""
    rings = (poly.shell,) + tuple(poly.holes)
    for ring in rings:
        if len(ring) < 4 or ring[0] != ring[-1]:
            raise InvalidGeometryError(f"Ring must be closed with 4+ points, got {len(ring)}")
        if not ring_is_simple(ring):
            raise InvalidGeometryError(f"Self-intersecting ring starting at {ring[0]}")
    if signed_area(poly.shell) <= 0:
        raise InvalidGeometryError("Shell must be counter-clockwise")
    shell_box = bbox(poly.shell)
    for k, hole in enumerate(poly.holes):
        if signed_area(hole) >= 0:
            raise InvalidGeometryError(f"Hole {k} must be clockwise")
        if not bbox_contains(shell_box, bbox(hole)) or _rings_cross(poly.shell, hole):
            raise InvalidGeometryError(f"Hole {k} is not inside the shell")
        if any(point_in_ring(p, poly.shell) < 0 for p in hole[:-1]):
            raise InvalidGeometryError(f"Hole {k} is not inside the shell")
    for a in range(len(poly.holes)):
        for b in range(a+1, len(poly.holes)):
            ha, hb = poly.holes[a], poly.holes[b]
            ba, bb = bbox(ha), bbox(hb)
            if ba[2] < bb[0] or bb[2] < ba[0] or ba[3] < bb[1] or bb[3] < ba[1]:
                continue
            if (_rings_cross(ha, hb) or point_in_ring(hb[0], ha) > 0
                    or point_in_ring(ha[0], hb) > 0):
                raise InvalidGeometryError(f"Holes {a} and {b} overlap")

def validate(geom: Geometry) -> None:
    """Raise InvalidGeometryError if the geometry cannot be buffered."""
    for prim in primitives(geom):
        if isinstance(prim, PointGeom):
            _coord(prim.coord)
        elif isinstance(prim, LineString):
            if len(prim.coords) < 2 or len(set(prim.coords)) < 2:
                raise InvalidGeometryError("LineString needs 2 distinct points")
            for c in prim.coords:
                _coord(c)
        else:
            validate_polygon(prim)
