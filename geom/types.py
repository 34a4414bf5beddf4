"""Shared type definitions for the bubblegen geometry engine."""
from typing import NamedTuple

Point = tuple[float, float]

class Rect(NamedTuple):
    x: float; y: float; width: float; height: float

class LineSeg(NamedTuple):
    end: Point

class QuadSeg(NamedTuple):
    ctrl: Point; end: Point

Segment = LineSeg | QuadSeg

class Path(NamedTuple):
    """Closed path: start point followed by line / quadratic segments."""
    start: Point
    segs: list[Segment]
