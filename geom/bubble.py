"""Speech-bubble outline: a rounded rectangle with a triangular tail spliced into one edge.

The outline is traversed clockwise on screen (y down) starting just after the
top-left corner. The tail replaces a stretch of exactly one straight edge, the
edge hit by the ray from the rectangle centre towards the anchor. Its base is
kept off the rounded corners by clamping the base centre along the edge.
"""
import math
from typing import Literal, NamedTuple

from .types import Point, LineSeg, QuadSeg, Path
from .constants import TAIL_BASE_WIDTH, BUBBLE_CORNER_RADIUS, SIDE_TIE_TOLERANCE

Side = Literal["top", "right", "bottom", "left"]


class TailBase(NamedTuple):
    """Where the tail meets the rectangle."""
    side: Side
    mid: Point      # clamped base centre on the edge
    first: Point    # base vertex reached first when walking the edge clockwise
    second: Point   # base vertex reached second


def safe_radius(w: float, h: float, radius: float) -> float:
    """Corner radius clamped to half the smaller dimension."""
    return min(radius, min(w, h)/2)


def _ray_hit(x, y, w, h, anchor):
    """Centre, unit direction, ray parameters (tX, tY) and hit parameter t."""
    cx = x + w/2; cy = y + h/2
    dx = anchor[0]-cx; dy = anchor[1]-cy
    Ln = math.sqrt(dx**2+dy**2)
    nx = dx/Ln if Ln else 0.0
    ny = dy/Ln if Ln else 0.0
    tX = (w/2 if nx > 0 else -w/2)/nx if nx != 0 else math.inf
    tY = (h/2 if ny > 0 else -h/2)/ny if ny != 0 else math.inf
    t = min(abs(tX), abs(tY))
    return (cx, cy), (nx, ny), tX, t


def tail_side(x: float, y: float, w: float, h: float, anchor: Point) -> Side:
    """Edge of the rectangle the tail attaches to.

    Near-ties between a vertical and a horizontal edge (within
    SIDE_TIE_TOLERANCE of the ray parameter) go to the left/right edge.
    An anchor at the centre gives no direction and resolves to the top edge.
    """
    _, (nx, ny), tX, t = _ray_hit(x, y, w, h, anchor)
    if math.isinf(t):
        return "top"
    if abs(t - abs(tX)) < SIDE_TIE_TOLERANCE:
        return "right" if nx > 0 else "left"
    return "bottom" if ny > 0 else "top"


def tail_base(
    x: float, y: float, w: float, h: float, anchor: Point,
    radius: float = BUBBLE_CORNER_RADIUS,
    base_width: float = TAIL_BASE_WIDTH,
    fit_base: bool = False,
) -> TailBase:
    """Clamped tail base on the hit edge and its two vertices in traversal order.

    The base centre is clamped to the straight part of the edge (inset by the
    safe corner radius at each end). The base vertices themselves are not
    clamped unless *fit_base* is set, in which case the half-width is limited
    to half the straight edge length.
    """
    side = tail_side(x, y, w, h, anchor)
    (cx, cy), (nx, ny), _, t = _ray_hit(x, y, w, h, anchor)
    if math.isinf(t):
        t = 0.0
    px = cx + nx*t; py = cy + ny*t
    r = safe_radius(w, h, radius)
    half = base_width/2

    if side in ("top", "bottom"):
        px = max(x + r, min(x + w - r, px))
        py = y if side == "top" else y + h
        if fit_base:
            half = min(half, (w - 2*r)/2)
        lo = (px - half, py); hi = (px + half, py)
    else:
        py = max(y + r, min(y + h - r, py))
        px = x if side == "left" else x + w
        if fit_base:
            half = min(half, (h - 2*r)/2)
        lo = (px, py - half); hi = (px, py + half)

    # top and right edges run towards increasing coordinates, bottom and left back
    if side in ("top", "right"):
        return TailBase(side, (px, py), lo, hi)
    return TailBase(side, (px, py), hi, lo)


def bubble_path(
    x: float, y: float, w: float, h: float, anchor: Point,
    radius: float = BUBBLE_CORNER_RADIUS,
    base_width: float = TAIL_BASE_WIDTH,
    fit_base: bool = False,
) -> Path:
    """Closed outline of a rounded rectangle with a tail pointing at *anchor*.

    Corners are quadratic Beziers with the rectangle corner as control point,
    so they stay tangent to the adjacent edges.
    """
    r = safe_radius(w, h, radius)
    tb = tail_base(x, y, w, h, anchor, radius, base_width, fit_base)
    tail = [LineSeg(tb.first), LineSeg(anchor), LineSeg(tb.second)]

    segs = []
    segs += tail if tb.side == "top" else []
    segs += [LineSeg((x+w-r, y)), QuadSeg((x+w, y), (x+w, y+r))]
    segs += tail if tb.side == "right" else []
    segs += [LineSeg((x+w, y+h-r)), QuadSeg((x+w, y+h), (x+w-r, y+h))]
    segs += tail if tb.side == "bottom" else []
    segs += [LineSeg((x+r, y+h)), QuadSeg((x, y+h), (x, y+h-r))]
    segs += tail if tb.side == "left" else []
    segs += [LineSeg((x, y+r)), QuadSeg((x, y), (x+r, y))]
    return Path((x+r, y), segs)
