"""Deterministic demo scene built from the editor's add-shape defaults."""
from scene.model import (
    Scene, new_bubble, new_cut, new_frame, new_image,
    add_bubble, add_cut, add_frame, add_image,
)
from scene.masks import toggle_image_lock
from scene.constants import CANVAS_W, CANVAS_H, DEMO_TEXTS


def demo_scene(width: float = CANVAS_W, height: float = CANVAS_H) -> Scene:
    """Image crossed by a locked cut, a second free cut, a frame, and three bubbles."""
    scene = Scene(width, height)
    scene = add_image(scene, new_image(width, height, id="img1"))
    scene = add_cut(scene, new_cut(width, height, id="cut1"))
    scene = toggle_image_lock(scene, "img1")
    # added after locking, so it never masks img1
    scene = add_cut(scene, new_cut(width, height, id="cut2")._replace(
        p1=(width*0.5, height*0.1), p2=(width*0.55, height*0.9), t1=4.0, t2=18.0))
    scene = add_frame(scene, new_frame(width, height, id="frame1"))

    b = new_bubble(width, height, DEMO_TEXTS[0], id="b1")
    scene = add_bubble(scene, b._replace(x=b.x - width*0.25, y=b.y - height*0.2))
    b = new_bubble(width, height, DEMO_TEXTS[3], id="b2")
    scene = add_bubble(scene, b._replace(x=b.x + width*0.25, y=b.y - height*0.2,
                                         anchor=(width*0.5, height*0.5)))
    b = new_bubble(width, height, DEMO_TEXTS[4], id="b3")
    scene = add_bubble(scene, b._replace(y=b.y + height*0.25,
                                         anchor=(b.x - 80, b.y + height*0.25 + 40)))
    return scene
