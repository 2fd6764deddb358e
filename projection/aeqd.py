"""Local azimuthal-equidistant projection for buffering lon/lat geometry.

Distances from the projection centre are true, so a geometry of modest
extent can be buffered in metres in the projected plane and mapped back.
"""
import logging

from pyproj import CRS, Transformer

from planar.types import Geometry, Polygon
from planar.model import map_coords, geometry_bbox, normalize
from bufferop.buffer import compute_buffer
from bufferop.params import BufferParams, validate_params, validate_distance
from .constants import GEOGRAPHIC_PROJ, AEQD_PROJ

log = logging.getLogger(__name__)


class LocalProjection:
    """Lon/lat <-> local metres around a fixed centre."""

    def __init__(self, lon_0: float, lat_0: float):
        self.lon_0 = lon_0
        self.lat_0 = lat_0
        geo = CRS.from_proj4(GEOGRAPHIC_PROJ)
        local = CRS.from_proj4(AEQD_PROJ.format(lat_0=lat_0, lon_0=lon_0))
        self._fwd = Transformer.from_crs(geo, local, always_xy=True)
        self._inv = Transformer.from_crs(local, geo, always_xy=True)

    @classmethod
    def for_geometry(cls, geometry: Geometry) -> "LocalProjection":
        """Projection centred on the middle of the geometry's lon/lat bbox."""
        min_x, min_y, max_x, max_y = geometry_bbox(geometry)
        return cls((min_x+max_x)/2, (min_y+max_y)/2)

    def forward(self, geometry: Geometry) -> Geometry:
        return map_coords(geometry, lambda p: self._fwd.transform(p[0], p[1]))

    def inverse(self, geometry: Geometry) -> Geometry:
        return map_coords(geometry, lambda p: self._inv.transform(p[0], p[1]))


def buffer_geographic(geometry: Geometry, distance_m: float,
                      params: BufferParams | None = None) -> list[Polygon]:
    """Buffer lon/lat geometry by distance_m metres; results are lon/lat."""
    validate_params(params if params is not None else BufferParams())
    validate_distance(distance_m)
    geometry = normalize(geometry)
    proj = LocalProjection.for_geometry(geometry)
    log.debug("aeqd centre lon=%.6f lat=%.6f", proj.lon_0, proj.lat_0)
    return [proj.inverse(p) for p in compute_buffer(proj.forward(geometry), distance_m, params)]
