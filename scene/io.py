"""Scene persistence as JSON.

Points are stored as {"x", "y"} objects and keys follow the editor's
camelCase names (borderRadius, isLocked, lockedCutIds), so scenes saved by
the browser editor load unchanged.
"""
import json
import logging
from pathlib import Path

from geom.geometry import GeometryError
from geom.constants import BUBBLE_CORNER_RADIUS
from scene.model import (
    Scene, Bubble, Cut, Frame, ImageBox,
    validate_bubble, validate_cut, validate_frame, validate_image,
    add_bubble, add_cut, add_frame, add_image,
)
from scene.constants import CANVAS_W, CANVAS_H, DEFAULT_CUT_THICKNESS, DEFAULT_FRAME_COLOR

log = logging.getLogger(__name__)


class SceneFormatError(GeometryError):
    """Raised for scene documents with missing or mistyped fields."""


def _pt(d) -> tuple[float, float]:
    return (float(d["x"]), float(d["y"]))

def _pt_dict(p) -> dict:
    return {"x": p[0], "y": p[1]}


def bubble_from_dict(d: dict) -> Bubble:
    return validate_bubble(Bubble(
        str(d["id"]), float(d["x"]), float(d["y"]), float(d["width"]), float(d["height"]),
        _pt(d["anchor"]), str(d.get("text", "")),
        float(d.get("borderRadius", BUBBLE_CORNER_RADIUS)),
    ))

def cut_from_dict(d: dict) -> Cut:
    return validate_cut(Cut(
        str(d["id"]), _pt(d["p1"]), _pt(d["p2"]),
        float(d.get("t1", DEFAULT_CUT_THICKNESS)), float(d.get("t2", DEFAULT_CUT_THICKNESS)),
    ))

def frame_from_dict(d: dict) -> Frame:
    return validate_frame(Frame(
        str(d["id"]), _pt(d["p1"]), _pt(d["p2"]), _pt(d["p3"]), _pt(d["p4"]),
        str(d.get("color", DEFAULT_FRAME_COLOR)),
    ))

def image_from_dict(d: dict) -> ImageBox:
    return validate_image(ImageBox(
        str(d["id"]), float(d["x"]), float(d["y"]), float(d["width"]), float(d["height"]),
        float(d.get("scale", 1.0)), d.get("src"),
        bool(d.get("isLocked", False)), tuple(str(i) for i in d.get("lockedCutIds", ())),
    ))


def scene_from_dict(data: dict) -> Scene:
    """Build a validated Scene from its JSON dictionary form.

    Shapes are added one by one, so duplicate ids are rejected as they are
    when editing.
    """
    if not isinstance(data, dict):
        raise SceneFormatError(f"scene must be a JSON object, got {type(data).__name__}")
    try:
        scene = Scene(float(data.get("width", CANVAS_W)), float(data.get("height", CANVAS_H)))
        for d in data.get("bubbles", []):
            scene = add_bubble(scene, bubble_from_dict(d))
        for d in data.get("cuts", []):
            scene = add_cut(scene, cut_from_dict(d))
        for d in data.get("frames", []):
            scene = add_frame(scene, frame_from_dict(d))
        for d in data.get("images", []):
            scene = add_image(scene, image_from_dict(d))
        return scene
    except KeyError as e:
        raise SceneFormatError(f"missing field {e.args[0]!r}") from e
    except GeometryError:
        raise
    except (TypeError, ValueError) as e:
        raise SceneFormatError(f"bad field value: {e}") from e


def scene_to_dict(scene: Scene) -> dict:
    return {
        "width": scene.width, "height": scene.height,
        "bubbles": [{"id": b.id, "x": b.x, "y": b.y, "width": b.width, "height": b.height,
                     "anchor": _pt_dict(b.anchor), "text": b.text, "borderRadius": b.radius}
                    for b in scene.bubbles],
        "cuts": [{"id": c.id, "p1": _pt_dict(c.p1), "p2": _pt_dict(c.p2), "t1": c.t1, "t2": c.t2}
                 for c in scene.cuts],
        "frames": [{"id": f.id, "p1": _pt_dict(f.p1), "p2": _pt_dict(f.p2),
                    "p3": _pt_dict(f.p3), "p4": _pt_dict(f.p4), "color": f.color}
                   for f in scene.frames],
        "images": [{"id": i.id, "x": i.x, "y": i.y, "width": i.width, "height": i.height,
                    "scale": i.scale, "src": i.src, "isLocked": i.locked,
                    "lockedCutIds": list(i.locked_cut_ids)}
                   for i in scene.images],
    }


def load_scene(path: str | Path) -> Scene:
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SceneFormatError(f"{p}: invalid JSON: {e}") from e
    scene = scene_from_dict(data)
    log.info("loaded %s: %d bubbles, %d cuts, %d frames, %d images", p,
             len(scene.bubbles), len(scene.cuts), len(scene.frames), len(scene.images))
    return scene


def save_scene(scene: Scene, path: str | Path) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(scene_to_dict(scene), indent=2), encoding="utf-8")
    log.info("saved scene to %s", p)
    return p
