"""Named constants for offset curve generation.

Factors are relative to the buffer distance unless noted.
"""

# Defaults for buffer parameters
QUADRANT_SEGMENTS = 8             # facets per 90 degrees of arc (< 2% distance error)
MITRE_LIMIT = 5.0                 # mitre length / distance before bevelling
CAP_STYLES = ("round", "flat", "square")
JOIN_STYLES = ("round", "mitre", "bevel")

# Vertex snapping
OFFSET_SEGMENT_SEPARATION_FACTOR = 1.0e-3   # outside turn endpoints closer than this share a vertex
INSIDE_TURN_VERTEX_SNAP_FACTOR = 1.0e-3     # inside turn endpoints closer than this share a vertex
CURVE_VERTEX_SNAP_FACTOR = 1.0e-6           # consecutive curve points closer than this are merged

# Closing segments on inside turns: 0 runs to the vertex, 1 halfway, 80 runs 1/81 of the way
CLOSING_SEG_LEN_FACTOR = 1
MAX_CLOSING_SEG_LEN_FACTOR = 80   # used for round joins with QUADRANT_SEGMENTS or more
