"""Planar geometry model: types, primitive geometry and validation."""

from .types import (
    Point, Ring, BBox, CapStyle, JoinStyle,
    PointGeom, LineString, Polygon, MultiPoint, MultiLineString, MultiPolygon,
    Primitive, Collection, Geometry,
)
from .geometry import (
    GeometryError, InvalidGeometryError,
    signed_area, poly_area, is_ccw, bbox, point_in_ring, winding_number,
    boundary_dist, ring_is_simple,
)
from .model import (
    make_ring, make_point, make_linestring, make_polygon, make_geometry,
    primitives, map_coords, coords_of, geometry_bbox, normalize,
    validate, validate_polygon,
)
