"""Buffer orchestration: parameters and the compute_buffer entry point."""

from .params import (
    BufferParams, InvalidParameterError,
    buffer_options, validate_params, validate_distance,
)
from .buffer import compute_buffer, buffer_primitive
