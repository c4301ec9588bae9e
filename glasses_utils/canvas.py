"""
Canvas wrapper module - Bridges streamlit-drawable-canvas and the app state.

The interactive canvas (Fabric.js underneath) does the hit-testing, dragging
and transform handles. This module seeds it from the scene, and reads the
sticker node it reports after each gesture back into the state through the
selection controller and the transform bridge.
"""

import math

from streamlit_drawable_canvas import st_canvas as raw_st_canvas

from glasses_core.scene import FABRIC_VERSION, node_from_fabric
from glasses_core.selection import STICKER, pointer_down
from glasses_core.transform import BoundingBox, drag_end, transform_end, limit_bound_box, sticker_box
from .encoding import image_to_url
from .logger import get_logger

logger = get_logger("canvas")

# Fabric serializes coordinates with two decimals
POSITION_TOLERANCE = 0.01
SCALE_TOLERANCE = 1e-3

TRANSPARENT = "rgba(0,0,0,0)"


def _background_object(url, width, height):
    """Fabric image object pinned to the canvas origin at canvas size."""
    return {
        "type": "image",
        "version": FABRIC_VERSION,
        "originX": "left",
        "originY": "top",
        "left": 0,
        "top": 0,
        "width": width,
        "height": height,
        "src": url,
    }


def st_canvas(*args, background_image=None, background_id="", initial_drawing=None, **kwargs):
    """
    streamlit_drawable_canvas with the photo baked into the seeded drawing.

    The component's own ``background_image`` argument re-sends the pixels on
    every rerun; here the photo travels as a cached data URL inside
    ``initial_drawing`` instead.

    Args:
        background_image: Cover-fitted RGB array, or None for a bare canvas
        background_id: Cache key of the encoded photo
        initial_drawing: Scene JSON from ``scene_to_fabric``
    """
    drawing = dict(initial_drawing or {"version": FABRIC_VERSION, "objects": []})
    if background_image is not None:
        url = image_to_url(background_image, background_id)
        drawing["background"] = TRANSPARENT
        drawing["backgroundImage"] = _background_object(url, kwargs.get("width"), kwargs.get("height"))
    return raw_st_canvas(*args, background_color=TRANSPARENT, initial_drawing=drawing, **kwargs)


def _moved(a, b):
    return not math.isclose(a, b, abs_tol=POSITION_TOLERANCE)


def apply_canvas_result(state, json_data):
    """
    Turn the canvas' report into selection and gesture events.

    A sticker that moved, stretched or turned was grabbed, so it becomes
    selected. A stretch or turn is a finished transform (its scale is folded
    into the font size); a pure move is a finished drag. A report that matches
    the state (the canvas echoing its seed) changes nothing.

    Returns:
        tuple: (new_state, reseed) where ``reseed`` asks for the canvas to be
        rebuilt from the new state.
    """
    node = node_from_fabric(json_data)
    if node is None:
        return state, False

    sticker = state.sticker
    scaled = abs(node.scale_x - 1.0) > SCALE_TOLERANCE or abs(node.scale_y - 1.0) > SCALE_TOLERANCE
    turned = _moved(node.rotation, sticker.rotation)
    moved = _moved(node.x, sticker.x) or _moved(node.y, sticker.y)
    if not (scaled or turned or moved):
        return state, False

    was_selected = state.is_selected
    state = pointer_down(state, STICKER)

    if scaled:
        old_box = sticker_box(state)
        new_box = BoundingBox(node.x, node.y, old_box.width * node.scale_x, old_box.height * node.scale_y, node.rotation)
        if limit_bound_box(old_box, new_box) is old_box:
            logger.debug(f"Resize to {new_box.width:.1f}x{new_box.height:.1f} rejected")
            node.reset_scale()
            node.x, node.y = old_box.x, old_box.y

    if scaled or turned:
        state = transform_end(state, node)
        logger.debug(f"Canvas transform -> font {state.sticker.font_size:.2f}, rotation {state.sticker.rotation:.1f}")
        return state, True

    state = drag_end(state, node)
    # Newly selected: the canvas must show the handles
    return state, not was_selected
