"""Shared SVG utilities for buffer previews."""

from .svg import (
    make_svg_transform, ring_path, polygon_svg, polyline_svg, svg_document, W, H,
)
