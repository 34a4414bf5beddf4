"""Pure geometry functions: cut occluders, intersection tests, polygon utilities."""
import math
import numpy as np
from .types import Point, Rect, LineSeg, Path
from .constants import MASK_EXTENT, QUAD_FLATTEN_STEPS

# ============================================================
# Error Types
# ============================================================
class GeometryError(ValueError):
    """Base class for geometry errors."""

class InvalidGeometry(GeometryError):
    """Raised at the scene boundary for descriptors no shape can be built from."""

# ============================================================
# Vector Utilities
# ============================================================
def unit_dir(p1: Point, p2: Point) -> Point:
    """Unit direction p1 → p2, or (0, 0) when the points coincide."""
    dx = p2[0]-p1[0]; dy = p2[1]-p1[1]; Ln = math.sqrt(dx**2+dy**2)
    if Ln == 0:
        return (0.0, 0.0)
    return (dx/Ln, dy/Ln)

def left_norm(p1: Point, p2: Point) -> Point:
    """Unit perpendicular (-uy, ux) of the direction p1 → p2; (0, 0) if degenerate."""
    ux, uy = unit_dir(p1, p2)
    return (-uy, ux)

def off_pt(p: Point, n: Point, d: float) -> Point:
    """Offset point p by distance d along direction n."""
    return (p[0]+d*n[0], p[1]+d*n[1])

def cross(o: Point, a: Point, b: Point) -> float:
    """Z component of (a - o) x (b - o). Positive when o → a → b turns clockwise on screen."""
    return (a[0]-o[0])*(b[1]-o[1]) - (b[0]-o[0])*(a[1]-o[1])

# ============================================================
# Tapered Segment & Half-Plane Mask
# ============================================================
def tapered_segment(p1: Point, p2: Point, t1: float, t2: float) -> list[Point]:
    """Quadrilateral of width t1 at p1 and t2 at p2, centred on the segment.

    Returns [p1_left, p2_left, p2_right, p1_right], or [] for a zero-length segment.
    """
    if p1[0] == p2[0] and p1[1] == p2[1]:
        return []
    n = left_norm(p1, p2)
    h1 = t1/2; h2 = t2/2
    return [off_pt(p1, n, h1), off_pt(p2, n, h2), off_pt(p2, n, -h2), off_pt(p1, n, -h1)]

def half_plane_mask(p1: Point, p2: Point, keep: Point, extent: float = MASK_EXTENT) -> list[Point]:
    """Large quadrilateral covering the side of line p1-p2 opposite *keep*.

    The line is extended by *extent* past both endpoints, then pushed away from
    *keep* along its (unnormalised) normal scaled by *extent*. Points exactly on
    the line count as the keep side, so the mask goes to the normal's side.
    """
    dx = p2[0]-p1[0]; dy = p2[1]-p1[1]
    nx, ny = -dy, dx
    dot = nx*(keep[0]-p1[0]) + ny*(keep[1]-p1[1])
    sign = -1 if dot > 0 else 1
    mx = nx*sign*extent; my = ny*sign*extent
    Ln = math.sqrt(dx**2+dy**2) or 1.0
    lx = dx/Ln*extent; ly = dy/Ln*extent
    P1 = (p1[0]-lx, p1[1]-ly); P2 = (p2[0]+lx, p2[1]+ly)
    return [P1, P2, (P2[0]+mx, P2[1]+my), (P1[0]+mx, P1[1]+my)]

# ============================================================
# Intersection Tests
# ============================================================
def point_in_rect(p: Point, rect: Rect) -> bool:
    """True if p lies inside or on the boundary of rect."""
    return (rect.x <= p[0] <= rect.x+rect.width and
            rect.y <= p[1] <= rect.y+rect.height)

def on_segment(p: Point, a: Point, b: Point) -> bool:
    """True if p lies within the bounding box of segment a-b (assumes collinear).

    Helper for segments_touch.
    """
    return (min(a[0], b[0]) <= p[0] <= max(a[0], b[0]) and
            min(a[1], b[1]) <= p[1] <= max(a[1], b[1]))

def segments_cross(p1: Point, p2: Point, p3: Point, p4: Point) -> bool:
    """Proper crossing of segments p1-p2 and p3-p4 (strict orientation signs).

    Touching endpoints and collinear overlap are not reported.
    """
    d1 = cross(p1, p2, p3); d2 = cross(p1, p2, p4)
    d3 = cross(p3, p4, p1); d4 = cross(p3, p4, p2)
    return (((d1 > 0 and d2 < 0) or (d1 < 0 and d2 > 0)) and
            ((d3 > 0 and d4 < 0) or (d3 < 0 and d4 > 0)))

def segments_touch(p1: Point, p2: Point, p3: Point, p4: Point) -> bool:
    """Inclusive segment intersection: crossing, touching, or collinear overlap.

    Used by is_simple_polygon to verify outlines, not by mask selection.
    """
    if segments_cross(p1, p2, p3, p4):
        return True
    d1 = cross(p1, p2, p3); d2 = cross(p1, p2, p4)
    d3 = cross(p3, p4, p1); d4 = cross(p3, p4, p2)
    return ((d1 == 0 and on_segment(p3, p1, p2)) or
            (d2 == 0 and on_segment(p4, p1, p2)) or
            (d3 == 0 and on_segment(p1, p3, p4)) or
            (d4 == 0 and on_segment(p2, p3, p4)))

def rect_corners(rect: Rect) -> list[Point]:
    """Corners TL, TR, BR, BL."""
    x, y, w, h = rect
    return [(x, y), (x+w, y), (x+w, y+h), (x, y+h)]

def segment_intersects_rect(p1: Point, p2: Point, rect: Rect) -> bool:
    """True if segment p1-p2 has an endpoint in rect or properly crosses one of
    its edges or diagonals.

    The diagonals catch a segment passing corner to corner through the
    interior. A segment that only grazes a corner or runs along an edge, with
    both endpoints outside, is reported as not intersecting.
    """
    if point_in_rect(p1, rect) or point_in_rect(p2, rect):
        return True
    c = rect_corners(rect)
    for i in range(4):
        if segments_cross(p1, p2, c[i], c[(i+1)%4]):
            return True
    return segments_cross(p1, p2, c[0], c[2]) or segments_cross(p1, p2, c[1], c[3])

# ============================================================
# Polygon Utilities
# ============================================================
def quad_poly(p0: Point, ctrl: Point, p1: Point, n: int = QUAD_FLATTEN_STEPS) -> list[Point]:
    """Generate n+1 points along the quadratic Bezier p0 → ctrl → p1."""
    t = np.linspace(0.0, 1.0, n+1)[:, None]
    P = (1-t)**2*np.asarray(p0, float) + 2*(1-t)*t*np.asarray(ctrl, float) + t**2*np.asarray(p1, float)
    return [(float(px), float(py)) for px, py in P]

def path_polygon(path: Path, n_quad: int = QUAD_FLATTEN_STEPS) -> list[Point]:
    """Flatten a closed Path into a polygon vertex list, for outline verification."""
    polygon = [path.start]; cur = path.start
    for seg in path.segs:
        if isinstance(seg, LineSeg):
            polygon.append(seg.end)
        else:
            polygon.extend(quad_poly(cur, seg.ctrl, seg.end, n_quad)[1:])
        cur = seg.end
    if len(polygon) > 1 and polygon[-1] == polygon[0]:
        polygon.pop()  # remove closing point (= polygon[0])
    return polygon

def poly_area(verts: list[Point]) -> float:
    """Polygon area via the shoelace formula. Works for either winding order."""
    n = len(verts); a = 0
    for i in range(n):
        j = (i+1)%n; a += verts[i][0]*verts[j][1]-verts[j][0]*verts[i][1]
    return abs(a)/2

def signed_area(verts: list[Point]) -> float:
    """Shoelace area with sign: positive for clockwise on screen (y down).

    Outline verification uses it to confirm bubble paths wind clockwise.
    """
    n = len(verts); a = 0
    for i in range(n):
        j = (i+1)%n; a += verts[i][0]*verts[j][1]-verts[j][0]*verts[i][1]
    return a/2

def is_simple_polygon(verts: list[Point]) -> bool:
    """True if no two non-adjacent edges of the closed polygon touch.

    Outline verification: a tail base wider than its edge shows up as a bow-tie.
    """
    n = len(verts)
    edges = [(verts[i], verts[(i+1)%n]) for i in range(n)]
    for i in range(n):
        for j in range(i+2, n):
            if i == 0 and j == n-1:
                continue  # first and last edges share verts[0]
            if segments_touch(*edges[i], *edges[j]):
                return False
    return True

def poly_bbox(verts: list[Point]) -> Rect:
    """Axis-aligned bounding box of a polygon, for outline verification."""
    xs = [p[0] for p in verts]; ys = [p[1] for p in verts]
    return Rect(min(xs), min(ys), max(xs)-min(xs), max(ys)-min(ys))
