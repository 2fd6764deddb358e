"""SVG transform factory and polygon rendering for buffer previews."""
from typing import Callable

from planar.types import BBox, Point, Polygon

# US Letter landscape at 72 dpi (11" x 8.5")
W, H = 792, 612
MARGIN = 36  # half inch on every side


def make_svg_transform(box: BBox, w: float = W, h: float = H,
                       margin: float = MARGIN) -> Callable[[float, float], tuple[float, float]]:
    """Create to_svg closure fitting *box* into the page, y pointing up."""
    min_x, min_y, max_x, max_y = box
    span_x = max(max_x - min_x, 1e-12); span_y = max(max_y - min_y, 1e-12)
    s = min((w - 2*margin)/span_x, (h - 2*margin)/span_y)
    px = (w - s*span_x)/2 - s*min_x
    py = (h + s*span_y)/2 + s*min_y
    def to_svg(x: float, y: float) -> tuple[float, float]:
        return (px + x*s, py - y*s)
    return to_svg

def ring_path(ring, to_svg) -> str:
    return "M "+" L ".join(f"{to_svg(*p)[0]:.1f},{to_svg(*p)[1]:.1f}" for p in ring[:-1])+" Z"

def polygon_svg(poly: Polygon, to_svg, fill: str = "rgba(70,130,180,0.35)",
                stroke: str = "#246") -> str:
    """One <path> for a polygon; holes cut out by the even-odd rule."""
    d = " ".join(ring_path(r, to_svg) for r in (poly.shell,) + tuple(poly.holes))
    return (f'<path d="{d}" fill="{fill}" fill-rule="evenodd" stroke="{stroke}"'
            f' stroke-width="0.8"/>')

def polyline_svg(points: list[Point], to_svg, stroke: str = "#c33") -> str:
    svg_pts = " ".join(f"{to_svg(*p)[0]:.1f},{to_svg(*p)[1]:.1f}" for p in points)
    return f'<polyline points="{svg_pts}" fill="none" stroke="{stroke}" stroke-width="1.2"/>'

def svg_document(body: list[str], w: float = W, h: float = H) -> str:
    lines = [f'<svg xmlns="http://www.w3.org/2000/svg" width="{w}" height="{h}" viewBox="0 0 {w} {h}">',
             f'<rect width="{w}" height="{h}" fill="white"/>']
    lines.extend(body)
    lines.append('</svg>')
    return "\n".join(lines)
