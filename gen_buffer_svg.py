"""Generate a preview SVG of buffers for every cap and join style.

Each column buffers the same zig-zag line with one cap/join combination; the
bottom row grows and shrinks an L-shaped polygon with a hole.

Outputs buffer_preview.svg beside this script.
"""
import os, sys

# Ensure project root is on sys.path for package imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from planar.model import make_linestring, make_polygon, map_coords
from planar.geometry import poly_area, bbox
from bufferop import compute_buffer, BufferParams
from offset.constants import CAP_STYLES, JOIN_STYLES
from shared.svg import make_svg_transform, polygon_svg, polyline_svg, ring_path, svg_document

LINE = [(0, 0), (4, 3), (6, 0), (7, 2)]
L_SHAPE = [(0, 0), (6, 0), (6, 2), (2, 2), (2, 5), (0, 5)]
L_HOLE = [(0.6, 0.6), (1.4, 0.6), (1.4, 1.4), (0.6, 1.4)]
DISTANCE = 0.8
COL_W, ROW_H = 10.0, 8.0


def polygon_area(poly):
    return poly_area(poly.shell) - sum(poly_area(h) for h in poly.holes)

def shifted(geom, dx, dy):
    return map_coords(geom, lambda p: (p[0]+dx, p[1]+dy))


def main(svg_path=None):
    line = make_linestring(LINE)
    l_poly = make_polygon(L_SHAPE, [L_HOLE])
    polys, lines, outlines = [], [], []

    print(f"=== LINE BUFFERS (d={DISTANCE}) ===")
    for col, cap in enumerate(CAP_STYLES):
        for row, join in enumerate(JOIN_STYLES):
            g = shifted(line, col*COL_W, (len(JOIN_STYLES)-row)*ROW_H)
            result = compute_buffer(g, DISTANCE, BufferParams(cap_style=cap, join_style=join))
            polys.extend(result); lines.append(g.coords)
            area = sum(polygon_area(p) for p in result)
            print(f"  cap={cap:<6s} join={join:<6s} area={area:.4f}  parts={len(result)}")

    print("=== POLYGON BUFFERS ===")
    for col, d in enumerate((DISTANCE, -0.2, -1.2)):
        g = shifted(l_poly, col*COL_W, 0.0)
        result = compute_buffer(g, d)
        polys.extend(result); outlines.append(g)
        area = sum(polygon_area(p) for p in result)
        print(f"  d={d:+.2f} area={area:.4f} (source {polygon_area(g):.4f})  parts={len(result)}")

    pts = [p for poly in polys for p in poly.shell] + [p for l in lines for p in l]
    to_svg = make_svg_transform(bbox(pts))
    body = [polygon_svg(p, to_svg) for p in polys]
    body += [polyline_svg(list(l), to_svg) for l in lines]
    for g in outlines:
        d = " ".join(ring_path(r, to_svg) for r in (g.shell,) + g.holes)
        body.append(f'<path d="{d}" fill="none" stroke="#c33" stroke-width="1.2"/>')

    if svg_path is None:
        svg_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "buffer_preview.svg")
    with open(svg_path, "w", encoding="utf-8") as f:
        f.write(svg_document(body))
    print(f"\nSVG written to {os.path.basename(svg_path)} ({len(polys)} polygons)")


if __name__ == "__main__":
    main()
