"""Geometry engine: shared types, bubble/cut/mask builders, and SVG path data."""

from .types import Point, Rect, LineSeg, QuadSeg, Segment, Path
from .geometry import (
    GeometryError, InvalidGeometry,
    unit_dir, left_norm, off_pt, cross,
    tapered_segment, half_plane_mask,
    point_in_rect, on_segment, segments_cross, segments_touch,
    rect_corners, segment_intersects_rect,
    quad_poly, path_polygon, poly_area, signed_area, is_simple_polygon, poly_bbox,
)
from .bubble import TailBase, safe_radius, tail_side, tail_base, bubble_path
from .svg import (
    PathSyntaxError, fmt_num, path_d, poly_d, multi_poly_d, path_points,
    parse_path_d, escape_xml,
)
