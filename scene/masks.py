"""Image lock state and selection of the cuts that mask an image."""
import logging

from geom.types import Point
from geom.geometry import segment_intersects_rect, half_plane_mask
from scene.model import Scene, Cut, ImageBox, find, update_image

log = logging.getLogger(__name__)


def intersecting_cut_ids(image: ImageBox, cuts) -> tuple[str, ...]:
    """Ids of the cuts whose centre line meets the image rectangle, in cut order."""
    rect = image.rect
    return tuple(c.id for c in cuts if segment_intersects_rect(c.p1, c.p2, rect))


def lock_image(image: ImageBox, cuts) -> ImageBox:
    """Freeze the set of cuts allowed to mask *image* to those crossing it now."""
    ids = intersecting_cut_ids(image, cuts)
    log.debug("lock image %s with cuts %s", image.id, ids)
    return image._replace(locked=True, locked_cut_ids=ids)


def unlock_image(image: ImageBox) -> ImageBox:
    return image._replace(locked=False, locked_cut_ids=())


def toggle_image_lock(scene: Scene, sid: str) -> Scene:
    """Lock an unlocked image against the scene's current cuts, or unlock it."""
    img = find(scene, "images", sid)
    new = unlock_image(img) if img.locked else lock_image(img, scene.cuts)
    return update_image(scene, sid, locked=new.locked, locked_cut_ids=new.locked_cut_ids)


def masking_cuts(image: ImageBox, cuts) -> list[Cut]:
    """Cuts that currently mask *image*.

    A cut must geometrically meet the image rectangle. For a locked image it
    must also be in the locked set, so a locked cut that has been moved away
    stops applying while new cuts are ignored.
    """
    rect = image.rect
    out = []
    for c in cuts:
        if not segment_intersects_rect(c.p1, c.p2, rect):
            continue
        if image.locked and c.id not in image.locked_cut_ids:
            continue
        out.append(c)
    if image.locked:
        stale = set(image.locked_cut_ids) - {c.id for c in out}
        if stale:
            log.debug("image %s: locked cuts no longer applying: %s", image.id, sorted(stale))
    return out


def image_masks(image: ImageBox, cuts) -> list[list[Point]]:
    """One half-plane polygon per masking cut, hiding the side away from the image centre."""
    keep = image.center
    return [half_plane_mask(c.p1, c.p2, keep) for c in masking_cuts(image, cuts)]
