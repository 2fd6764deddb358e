"""Buffer parameters and their validation."""
import math
from typing import NamedTuple

from planar.types import CapStyle, JoinStyle
from offset.constants import QUADRANT_SEGMENTS, MITRE_LIMIT, CAP_STYLES, JOIN_STYLES


class InvalidParameterError(ValueError):
    pass


class BufferParams(NamedTuple):
    """How a buffer is shaped; the signed distance travels separately."""
    quadrant_segments: int = QUADRANT_SEGMENTS
    cap_style: CapStyle = "round"
    join_style: JoinStyle = "round"
    mitre_limit: float = MITRE_LIMIT


def validate_distance(distance) -> float:
    if isinstance(distance, bool) or not isinstance(distance, (int, float)):
        raise InvalidParameterError(f"Distance must be a number, got {distance!r}")
    if not math.isfinite(distance):
        raise InvalidParameterError(f"Distance must be finite, got {distance}")
    return float(distance)

def validate_params(params: BufferParams) -> BufferParams:
    """Return params unchanged, or raise InvalidParameterError."""
    qs = params.quadrant_segments
    if isinstance(qs, bool) or not isinstance(qs, int) or qs < 1:
        raise InvalidParameterError(f"quadrant_segments must be an integer >= 1, got {qs!r}")
    if params.cap_style not in CAP_STYLES:
        raise InvalidParameterError(f"Unknown cap style {params.cap_style!r}, expected one of {CAP_STYLES}")
    if params.join_style not in JOIN_STYLES:
        raise InvalidParameterError(f"Unknown join style {params.join_style!r}, expected one of {JOIN_STYLES}")
    ml = params.mitre_limit
    if (isinstance(ml, bool) or not isinstance(ml, (int, float))
            or not math.isfinite(ml) or ml <= 0):
        raise InvalidParameterError(f"mitre_limit must be a finite number > 0, got {ml!r}")
    return params

# ============================================================
# Wrapper option names
# ============================================================
_OPTION_FIELDS = {
    "steps": "quadrant_segments",
    "endCapStyle": "cap_style",
    "joinStyle": "join_style",
    "mitreLimit": "mitre_limit",
}

def buffer_options(options=None) -> BufferParams:
    """BufferParams from an options mapping in the wrapper's naming.

    Accepts ``steps``, ``endCapStyle``, ``joinStyle``, ``mitreLimit`` and
    ``units``. Missing keys take the defaults; unknown keys and invalid
    values raise InvalidParameterError. Only ``units="meters"`` is accepted.
    """
    options = dict(options or {})
    units = options.pop("units", "meters")
    if units != "meters":
        raise InvalidParameterError(f"Unsupported units {units!r}, only 'meters'")
    unknown = sorted(set(options) - set(_OPTION_FIELDS))
    if unknown:
        raise InvalidParameterError(f"Unknown buffer options: {', '.join(unknown)}")
    fields = {_OPTION_FIELDS[k]: v for k, v in options.items()}
    return validate_params(BufferParams(**fields))
