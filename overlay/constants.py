"""Numeric tolerances for noding and polygon repair."""

# Node snapping: tolerance = factor * max(|distance|, input extent, max |coordinate|)
NODE_TOLERANCE_FACTOR = 1.0e-9

# Result rings below factor * distance^2 are degenerate slivers
SLIVER_AREA_FACTOR = 1.0e-8

# Face samples within this fraction of |distance| of the swept outline count as outside it
FACE_DISTANCE_FACTOR = 1.0e-3

# Horizontal scanlines tried when looking for a face's interior point
MAX_SCANLINES = 12
