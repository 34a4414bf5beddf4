"""Tests for scene/masks.py lock state and mask selection."""
import pytest
from geom.geometry import cross
from scene.model import Scene, Cut, ImageBox, add_cut, add_image, update_cut, find
from scene.masks import (
    intersecting_cut_ids, lock_image, unlock_image, toggle_image_lock,
    masking_cuts, image_masks,
)

# Image rect (50, 50, 10, 10), centre (55, 55).
_IMG = ImageBox("img", 50, 50, 10, 10)
_CUTS = (
    Cut("cross", (0, 5), (200, 205)),       # crosses the left and bottom edges
    Cut("far", (0, 0), (10, 0)),            # disjoint
    Cut("inside", (57, 52), (500, 10)),     # one endpoint inside
)


@pytest.fixture
def scene():
    s = add_image(Scene(), _IMG)
    for c in _CUTS:
        s = add_cut(s, c)
    return s


def test_intersecting_cut_ids():
    assert intersecting_cut_ids(_IMG, _CUTS) == ("cross", "inside")


def test_lock_records_current_cuts():
    img = lock_image(_IMG, _CUTS)
    assert img.locked
    assert img.locked_cut_ids == ("cross", "inside")


def test_unlock_clears():
    img = unlock_image(lock_image(_IMG, _CUTS))
    assert not img.locked and img.locked_cut_ids == ()


def test_toggle_image_lock(scene):
    s = toggle_image_lock(scene, "img")
    assert find(s, "images", "img").locked_cut_ids == ("cross", "inside")
    s = toggle_image_lock(s, "img")
    img = find(s, "images", "img")
    assert not img.locked and img.locked_cut_ids == ()


def test_toggle_unknown_image(scene):
    with pytest.raises(KeyError):
        toggle_image_lock(scene, "nope")


def test_unlocked_uses_live_intersections():
    cuts = _CUTS + (Cut("new", (40, 55), (70, 55)),)
    assert [c.id for c in masking_cuts(_IMG, cuts)] == ["cross", "inside", "new"]


def test_locked_ignores_new_cuts():
    img = lock_image(_IMG, _CUTS)
    cuts = _CUTS + (Cut("new", (40, 55), (70, 55)),)
    assert [c.id for c in masking_cuts(img, cuts)] == ["cross", "inside"]


def test_locked_cut_moved_away_stops_applying(scene):
    s = toggle_image_lock(scene, "img")
    s = update_cut(s, "cross", p1=(0, 300), p2=(10, 300))
    img = find(s, "images", "img")
    assert img.locked_cut_ids == ("cross", "inside")
    assert [c.id for c in masking_cuts(img, s.cuts)] == ["inside"]


def test_locked_cut_moved_back_applies_again(scene):
    s = toggle_image_lock(scene, "img")
    s = update_cut(s, "cross", p1=(0, 300), p2=(10, 300))
    s = update_cut(s, "cross", p1=(0, 5), p2=(200, 205))
    img = find(s, "images", "img")
    assert [c.id for c in masking_cuts(img, s.cuts)] == ["cross", "inside"]


def test_image_masks_hide_side_away_from_centre():
    masks = image_masks(_IMG, _CUTS)
    assert len(masks) == 2
    centre = _IMG.center
    for cut, poly in zip(masking_cuts(_IMG, _CUTS), masks):
        side = cross(cut.p1, cut.p2, centre)
        # pushed-out corners are on the opposite side of the cut from the centre
        for p in poly[2:]:
            assert cross(cut.p1, cut.p2, p) * side < 0


def test_image_masks_none_without_cuts():
    assert image_masks(_IMG, ()) == []
