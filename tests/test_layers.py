"""Tests for scene/layers.py drawable geometry."""
from geom.geometry import tapered_segment
from geom.bubble import bubble_path
from geom.constants import FRAME_WALL_EXTENT
from scene.model import Scene, Cut, Frame, ImageBox, add_cut, add_frame, add_image
from scene.layers import build_layers, placed_rect, frame_wall_polys


class TestDemoLayers:
    def test_layer_counts(self, demo, demo_layers):
        assert len(demo_layers.images) == len(demo.images) == 1
        assert len(demo_layers.cuts) == 2
        assert len(demo_layers.frames) == 1
        assert len(demo_layers.bubbles) == 3

    def test_locked_image_masked_by_locked_cut_only(self, demo_layers):
        il = demo_layers.images[0]
        assert il.image.locked_cut_ids == ("cut1",)
        assert len(il.masks) == 1

    def test_bubble_paths_match_builder(self, demo_layers):
        for bl in demo_layers.bubbles:
            b = bl.bubble
            assert bl.path == bubble_path(b.x, b.y, b.width, b.height, b.anchor, b.radius)

    def test_cut_polys_match_builder(self, demo_layers):
        for cl in demo_layers.cuts:
            c = cl.cut
            assert cl.poly == tapered_segment(c.p1, c.p2, c.t1, c.t2)

    def test_rebuild_is_identical(self, demo, demo_layers):
        assert build_layers(demo) == demo_layers


def test_zero_length_cut_skipped():
    s = add_cut(Scene(), Cut("dot", (5, 5), (5, 5)))
    assert build_layers(s).cuts == []


def test_placed_rect_scales_about_centre():
    r = placed_rect(ImageBox("i", 100, 200, 256, 128, scale=0.5))
    assert tuple(r) == (164, 232, 128, 64)


def test_placed_rect_upscale():
    r = placed_rect(ImageBox("i", 0, 0, 100, 100, scale=2))
    assert tuple(r) == (-50, -50, 200, 200)


def test_frame_wall_polys():
    f = Frame("f", (1, 2), (3, 2), (3, 4), (1, 4))
    outer, window = frame_wall_polys(f)
    e = FRAME_WALL_EXTENT
    assert outer == [(-e, -e), (e, -e), (e, e), (-e, e)]
    assert window == [(1, 2), (3, 2), (3, 4), (1, 4)]


def test_image_without_cuts_has_no_masks():
    s = add_image(add_frame(Scene(), Frame("f", (0, 0), (1, 0), (1, 1), (0, 1))),
                  ImageBox("i", 0, 0, 10, 10))
    layers = build_layers(s)
    assert layers.images[0].masks == []
    assert tuple(layers.images[0].clip) == (0, 0, 10, 10)
