"""Raw offset curves: joins, caps, line sides and polygon rings."""

from .curves import (
    OffsetCurve, LineCurves,
    join_points, mitre_points, cap_points,
    point_curve, left_side, line_curves, ring_curve, polygon_curves,
    is_eroded_completely, Fan, Stroke, source_stroke,
)
