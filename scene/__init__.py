"""Scene state, image lock state, layer building, persistence, and SVG export."""

from .model import (
    Bubble, Cut, Frame, ImageBox, Scene, new_id, find,
    validate_bubble, validate_cut, validate_frame, validate_image,
    new_bubble, new_cut, new_frame, new_image,
    add_bubble, add_cut, add_frame, add_image,
    update_bubble, update_cut, update_frame, update_image,
    delete_bubble, delete_cut, delete_frame, delete_image,
    set_bubble_text, set_frame_color, set_cut_thickness,
)
from .masks import (
    intersecting_cut_ids, lock_image, unlock_image, toggle_image_lock,
    masking_cuts, image_masks,
)
from .layers import SceneLayers, build_layers, placed_rect, frame_wall_polys
from .io import SceneFormatError, scene_from_dict, scene_to_dict, load_scene, save_scene
from .demo import demo_scene
