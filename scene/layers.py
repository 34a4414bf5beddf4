"""Drawable geometry for every layer of a scene snapshot.

Shared by on-screen display and SVG export. Layers are listed bottom to top:
images (masked by cuts), cuts, frame walls, bubbles.
"""
from typing import NamedTuple

from geom.types import Point, Rect, Path
from geom.geometry import tapered_segment
from geom.bubble import bubble_path
from geom.constants import FRAME_WALL_EXTENT
from scene.model import Scene, Bubble, Cut, Frame, ImageBox
from scene.masks import image_masks


class ImageLayer(NamedTuple):
    image: ImageBox
    clip: Rect                  # container rectangle
    placed: Rect                # image rectangle after scaling about the centre
    masks: list[list[Point]]    # half-plane polygons to subtract

class CutLayer(NamedTuple):
    cut: Cut
    poly: list[Point]

class FrameLayer(NamedTuple):
    frame: Frame
    polys: list[list[Point]]    # outer wall square, then the window quad (even-odd)

class BubbleLayer(NamedTuple):
    bubble: Bubble
    path: Path

class SceneLayers(NamedTuple):
    images: list[ImageLayer]
    cuts: list[CutLayer]
    frames: list[FrameLayer]
    bubbles: list[BubbleLayer]


def placed_rect(image: ImageBox) -> Rect:
    """Image rectangle scaled by image.scale about the container centre."""
    w = image.width*image.scale; h = image.height*image.scale
    return Rect(image.x + (image.width - w)/2, image.y + (image.height - h)/2, w, h)


def frame_wall_polys(frame: Frame, extent: float = FRAME_WALL_EXTENT) -> list[list[Point]]:
    """Wall square of half-size *extent* followed by the frame quad.

    Filled with the even-odd rule this leaves the quad as a window.
    """
    e = extent
    return [[(-e, -e), (e, -e), (e, e), (-e, e)],
            [frame.p1, frame.p2, frame.p3, frame.p4]]


def build_layers(scene: Scene) -> SceneLayers:
    """Compute every drawable boundary of *scene*."""
    images = [ImageLayer(img, img.rect, placed_rect(img), image_masks(img, scene.cuts))
              for img in scene.images]
    cuts = []
    for c in scene.cuts:
        poly = tapered_segment(c.p1, c.p2, c.t1, c.t2)
        if poly:
            cuts.append(CutLayer(c, poly))
    frames = [FrameLayer(f, frame_wall_polys(f)) for f in scene.frames]
    bubbles = [BubbleLayer(b, bubble_path(b.x, b.y, b.width, b.height, b.anchor, b.radius))
               for b in scene.bubbles]
    return SceneLayers(images, cuts, frames, bubbles)
