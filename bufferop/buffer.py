"""Buffer a geometry by a signed distance.

Positive distances grow the geometry, negative ones shrink polygons. Each
primitive is offset into raw curves, and the curves are repaired into valid
polygons; members of a collection are buffered independently.
"""
import logging

from planar.types import PointGeom, Polygon, Geometry
from planar.model import normalize, validate, primitives
from offset.curves import point_curve, line_curves, polygon_curves
from overlay.polygonize import union_rings
from .params import BufferParams, validate_params, validate_distance

log = logging.getLogger(__name__)


def buffer_primitive(prim, distance: float, params: BufferParams) -> list[Polygon]:
    """Buffer one point, line or polygon; an empty list means nothing is left."""
    if isinstance(prim, Polygon):
        if distance == 0:
            return [prim]
        rings = [c.points for c in polygon_curves(prim, distance, params)]
    elif distance <= 0:
        return []
    elif isinstance(prim, PointGeom):
        rings = [point_curve(prim.coord, distance, params).points]
    else:
        rings = [line_curves(prim, distance, params).ring()]
    return union_rings(rings, distance, prim, params)

def compute_buffer(geometry: Geometry, distance, params: BufferParams | None = None) -> list[Polygon]:
    """Polygons covering every point within *distance* of *geometry*.

    For negative distances, the polygons left after shrinking each input
    polygon by |distance|. Raises InvalidParameterError for bad params or
    distance and InvalidGeometryError for bad geometry.
    """
    params = validate_params(params if params is not None else BufferParams())
    distance = validate_distance(distance)
    geometry = normalize(geometry)
    validate(geometry)

    result: list[Polygon] = []
    for prim in primitives(geometry):
        polys = buffer_primitive(prim, distance, params)
        log.debug("%s buffered by %g: %d polygon(s)", type(prim).__name__, distance, len(polys))
        result.extend(polys)
    return result
