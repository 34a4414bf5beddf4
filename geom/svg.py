"""SVG path-data formatting and parsing, and XML text escaping."""
import re
from xml.sax.saxutils import escape

import svgpathtools

from .types import Point, LineSeg, Path
from .geometry import GeometryError


class PathSyntaxError(GeometryError):
    """Raised for path data that cannot be parsed."""


def fmt_num(v: float) -> str:
    """Compact decimal: 3 places, trailing zeros stripped, never '-0'."""
    s = f"{v:.3f}".rstrip('0').rstrip('.')
    return "0" if s in ("-0", "") else s


def _pt(p: Point) -> str:
    return f"{fmt_num(p[0])} {fmt_num(p[1])}"


def path_d(path: Path) -> str:
    """Path data for a closed Path: 'M x y L x y ... Q cx cy x y ... Z'."""
    ops = [f"M {_pt(path.start)}"]
    for seg in path.segs:
        if isinstance(seg, LineSeg):
            ops.append(f"L {_pt(seg.end)}")
        else:
            ops.append(f"Q {_pt(seg.ctrl)} {_pt(seg.end)}")
    ops.append("Z")
    return " ".join(ops)


def poly_d(poly: list[Point]) -> str:
    """Path data for a closed polygon, or '' for an empty one."""
    if not poly:
        return ""
    return " ".join([f"M {_pt(poly[0])}"] + [f"L {_pt(p)}" for p in poly[1:]] + ["Z"])


def multi_poly_d(polys: list[list[Point]]) -> str:
    """Path data with one closed subpath per non-empty polygon."""
    return " ".join(d for d in (poly_d(p) for p in polys) if d)


def path_points(path: Path) -> list[Point]:
    """Start point followed by every segment point (control points included)."""
    pts = [path.start]
    for seg in path.segs:
        pts.extend(seg[:])
    return pts


_BAD_CHAR = re.compile(r"[^MmLlHhVvCcSsQqTtAaZz0-9eE.,+\-\s]")


def _seg_points(seg) -> list[Point]:
    if isinstance(seg, svgpathtools.QuadraticBezier):
        zs = [seg.control, seg.end]
    elif isinstance(seg, svgpathtools.CubicBezier):
        zs = [seg.control1, seg.control2, seg.end]
    else:
        zs = [seg.end]
    return [(z.real, z.imag) for z in zs]


def parse_path_d(d: str) -> list[list[Point]]:
    """Parse SVG path data into one point list per continuous subpath.

    Each list holds the subpath's start followed by every segment point in
    order, control points included. A closing line back to the start point
    (explicit or from Z) is not repeated. Subpaths that join end to start are
    reported as one.
    """
    bad = _BAD_CHAR.search(d)
    if bad:
        raise PathSyntaxError(f"Unexpected character {bad.group()!r} in path data")
    try:
        parsed = svgpathtools.parse_path(d)
    except (ValueError, IndexError) as e:
        raise PathSyntaxError(f"Malformed path data {d!r}: {e}") from e
    if len(parsed) == 0:
        return []
    subpaths: list[list[Point]] = []
    for sub in parsed.continuous_subpaths():
        segs = list(sub)
        if not segs:
            continue
        if len(segs) > 1 and sub.isclosed() and isinstance(segs[-1], svgpathtools.Line):
            segs.pop()
        pts = [(segs[0].start.real, segs[0].start.imag)]
        for seg in segs:
            pts.extend(_seg_points(seg))
        subpaths.append(pts)
    return subpaths


def escape_xml(text: str) -> str:
    """Escape the five XML special characters < > & ' \"."""
    return escape(text, {"'": "&apos;", '"': "&quot;"})
