"""Geographic adapter: buffer lon/lat geometry through a local AEQD plane."""

from .aeqd import LocalProjection, buffer_geographic
from .constants import EARTH_RADIUS
