"""Immutable scene state: shape descriptors and snapshot-producing mutations.

A Scene is never modified in place. Every mutation validates its input and
returns a new Scene, so the geometry builders only ever see consistent
snapshots.
"""
import math
import uuid
import logging
from typing import NamedTuple

from geom.types import Point, Rect
from geom.geometry import InvalidGeometry
from geom.constants import BUBBLE_CORNER_RADIUS
from scene.constants import (
    CANVAS_W, CANVAS_H,
    DEFAULT_BUBBLE_WIDTH, DEFAULT_BUBBLE_HEIGHT, ANCHOR_DROP,
    DEFAULT_CUT_THICKNESS, CUT_START, CUT_END,
    FRAME_MARGIN, DEFAULT_FRAME_COLOR,
    DEFAULT_IMAGE_SIZE, IMAGE_GRID,
)

log = logging.getLogger(__name__)


class Bubble(NamedTuple):
    """Rounded text box with a tail pointing at *anchor*."""
    id: str
    x: float; y: float; width: float; height: float
    anchor: Point
    text: str = ""
    radius: float = BUBBLE_CORNER_RADIUS


class Cut(NamedTuple):
    """Tapered occluding line: thickness t1 at p1, t2 at p2."""
    id: str
    p1: Point; p2: Point
    t1: float = DEFAULT_CUT_THICKNESS
    t2: float = DEFAULT_CUT_THICKNESS


class Frame(NamedTuple):
    """Window quad (TL, TR, BR, BL) cut out of an opaque wall."""
    id: str
    p1: Point; p2: Point; p3: Point; p4: Point
    color: str = DEFAULT_FRAME_COLOR


class ImageBox(NamedTuple):
    """Image container; when locked only *locked_cut_ids* may mask it."""
    id: str
    x: float; y: float; width: float; height: float
    scale: float = 1.0
    src: str | None = None
    locked: bool = False
    locked_cut_ids: tuple[str, ...] = ()

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    @property
    def center(self) -> Point:
        return (self.x + self.width/2, self.y + self.height/2)


class Scene(NamedTuple):
    width: float = CANVAS_W
    height: float = CANVAS_H
    bubbles: tuple[Bubble, ...] = ()
    cuts: tuple[Cut, ...] = ()
    frames: tuple[Frame, ...] = ()
    images: tuple[ImageBox, ...] = ()


def new_id() -> str:
    return uuid.uuid4().hex[:9]

# ============================================================
# Validation
# ============================================================
def _check_finite(kind: str, sid: str, *vals: float):
    for v in vals:
        if not math.isfinite(v):
            raise InvalidGeometry(f"{kind} {sid}: non-finite coordinate {v!r}")

def validate_bubble(b: Bubble) -> Bubble:
    _check_finite("bubble", b.id, b.x, b.y, b.width, b.height, *b.anchor, b.radius)
    if b.width <= 0 or b.height <= 0:
        raise InvalidGeometry(f"bubble {b.id}: size must be positive, got {b.width}x{b.height}")
    if b.radius < 0:
        raise InvalidGeometry(f"bubble {b.id}: negative corner radius {b.radius}")
    return b

def validate_cut(c: Cut) -> Cut:
    _check_finite("cut", c.id, *c.p1, *c.p2, c.t1, c.t2)
    if c.t1 < 0 or c.t2 < 0:
        raise InvalidGeometry(f"cut {c.id}: negative thickness ({c.t1}, {c.t2})")
    return c

def validate_frame(f: Frame) -> Frame:
    _check_finite("frame", f.id, *f.p1, *f.p2, *f.p3, *f.p4)
    return f

def validate_image(img: ImageBox) -> ImageBox:
    _check_finite("image", img.id, img.x, img.y, img.width, img.height, img.scale)
    if img.width <= 0 or img.height <= 0:
        raise InvalidGeometry(f"image {img.id}: size must be positive, got {img.width}x{img.height}")
    if img.scale <= 0:
        raise InvalidGeometry(f"image {img.id}: scale must be positive, got {img.scale}")
    return img

_VALIDATORS = {
    "bubbles": validate_bubble, "cuts": validate_cut,
    "frames": validate_frame, "images": validate_image,
}

# ============================================================
# New-shape defaults
# ============================================================
def new_bubble(canvas_w: float, canvas_h: float, text: str = "", id: str | None = None) -> Bubble:
    """Default-size bubble centred on the canvas, tail pointing straight down."""
    x = canvas_w/2 - DEFAULT_BUBBLE_WIDTH/2
    y = canvas_h/2 - DEFAULT_BUBBLE_HEIGHT/2
    anchor = (x + DEFAULT_BUBBLE_WIDTH/2, y + DEFAULT_BUBBLE_HEIGHT + ANCHOR_DROP)
    return Bubble(id or new_id(), x, y, DEFAULT_BUBBLE_WIDTH, DEFAULT_BUBBLE_HEIGHT,
                  anchor, text)

def new_cut(canvas_w: float, canvas_h: float, id: str | None = None) -> Cut:
    """Diagonal cut across the middle of the canvas."""
    p1 = (canvas_w*CUT_START[0], canvas_h*CUT_START[1])
    p2 = (canvas_w*CUT_END[0], canvas_h*CUT_END[1])
    return Cut(id or new_id(), p1, p2)

def new_frame(canvas_w: float, canvas_h: float, id: str | None = None) -> Frame:
    """Frame inset FRAME_MARGIN from every canvas edge."""
    m = FRAME_MARGIN
    return Frame(id or new_id(), (m, m), (canvas_w - m, m),
                 (canvas_w - m, canvas_h - m), (m, canvas_h - m))

def new_image(canvas_w: float, canvas_h: float, id: str | None = None) -> ImageBox:
    """Empty square image container near the centre, snapped to IMAGE_GRID."""
    half = DEFAULT_IMAGE_SIZE/2
    x = round((canvas_w/2 - half)/IMAGE_GRID)*IMAGE_GRID
    y = round((canvas_h/2 - half)/IMAGE_GRID)*IMAGE_GRID
    return ImageBox(id or new_id(), float(x), float(y), DEFAULT_IMAGE_SIZE, DEFAULT_IMAGE_SIZE)

# ============================================================
# Mutations (each returns a new Scene)
# ============================================================
def _add(scene: Scene, field: str, shape) -> Scene:
    _VALIDATORS[field](shape)
    items = getattr(scene, field)
    if any(s.id == shape.id for s in items):
        raise InvalidGeometry(f"duplicate id {shape.id!r} in {field}")
    log.debug("add %s %s", field, shape.id)
    return scene._replace(**{field: items + (shape,)})

def _update(scene: Scene, field: str, sid: str, changes: dict) -> Scene:
    items = getattr(scene, field)
    out = []; found = False
    for s in items:
        if s.id == sid:
            s = _VALIDATORS[field](s._replace(**changes)); found = True
        out.append(s)
    if not found:
        raise KeyError(f"no {field[:-1]} with id {sid!r}")
    return scene._replace(**{field: tuple(out)})

def _delete(scene: Scene, field: str, sid: str) -> Scene:
    items = getattr(scene, field)
    kept = tuple(s for s in items if s.id != sid)
    if len(kept) == len(items):
        raise KeyError(f"no {field[:-1]} with id {sid!r}")
    log.debug("delete %s %s", field, sid)
    return scene._replace(**{field: kept})

def find(scene: Scene, field: str, sid: str):
    """Shape with id *sid* in scene.<field>; KeyError if absent."""
    for s in getattr(scene, field):
        if s.id == sid:
            return s
    raise KeyError(f"no {field[:-1]} with id {sid!r}")

def add_bubble(scene: Scene, bubble: Bubble) -> Scene:
    return _add(scene, "bubbles", bubble)

def add_cut(scene: Scene, cut: Cut) -> Scene:
    return _add(scene, "cuts", cut)

def add_frame(scene: Scene, frame: Frame) -> Scene:
    return _add(scene, "frames", frame)

def add_image(scene: Scene, image: ImageBox) -> Scene:
    return _add(scene, "images", image)

def update_bubble(scene: Scene, sid: str, **changes) -> Scene:
    return _update(scene, "bubbles", sid, changes)

def update_cut(scene: Scene, sid: str, **changes) -> Scene:
    return _update(scene, "cuts", sid, changes)

def update_frame(scene: Scene, sid: str, **changes) -> Scene:
    return _update(scene, "frames", sid, changes)

def update_image(scene: Scene, sid: str, **changes) -> Scene:
    return _update(scene, "images", sid, changes)

def delete_bubble(scene: Scene, sid: str) -> Scene:
    return _delete(scene, "bubbles", sid)

def delete_cut(scene: Scene, sid: str) -> Scene:
    return _delete(scene, "cuts", sid)

def delete_frame(scene: Scene, sid: str) -> Scene:
    return _delete(scene, "frames", sid)

def delete_image(scene: Scene, sid: str) -> Scene:
    return _delete(scene, "images", sid)

def set_bubble_text(scene: Scene, sid: str, text: str) -> Scene:
    return update_bubble(scene, sid, text=text)

def set_frame_color(scene: Scene, sid: str, color: str) -> Scene:
    return update_frame(scene, sid, color=color)

def set_cut_thickness(scene: Scene, sid: str, end: str, value: float) -> Scene:
    """Set the thickness at one end ("p1" or "p2") of a cut."""
    if end == "p1":
        return update_cut(scene, sid, t1=value)
    if end == "p2":
        return update_cut(scene, sid, t2=value)
    raise ValueError(f"cut end must be 'p1' or 'p2', got {end!r}")
