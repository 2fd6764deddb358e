"""Planar geometry types for the buffer engine."""
from typing import Literal, NamedTuple

Point = tuple[float, float]
Ring = tuple[Point, ...]
BBox = tuple[float, float, float, float]  # (min_x, min_y, max_x, max_y)

CapStyle = Literal["round", "flat", "square"]
JoinStyle = Literal["round", "mitre", "bevel"]

class PointGeom(NamedTuple):
    coord: Point

class LineString(NamedTuple):
    coords: tuple[Point, ...]

class Polygon(NamedTuple):
    shell: Ring
    holes: tuple[Ring, ...] = ()

class MultiPoint(NamedTuple):
    members: tuple[PointGeom, ...]

class MultiLineString(NamedTuple):
    members: tuple[LineString, ...]

class MultiPolygon(NamedTuple):
    members: tuple[Polygon, ...]

Primitive = PointGeom | LineString | Polygon
Collection = MultiPoint | MultiLineString | MultiPolygon
Geometry = Primitive | Collection
