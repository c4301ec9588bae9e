"""
Transform bridge - folds end-of-gesture reports from the canvas into state.

The canvas library moves, stretches and rotates its own copy of the sticker
node. When a gesture ends it reports the node back; the functions here copy
the result into ``AppState``. Size lives only in ``font_size``: a resize's
scale factor is folded into it and the node's scale is reset to 1 right away,
so consecutive resizes never compound against a stale baseline.
"""

import logging
from dataclasses import dataclass

from app_config.constants import CanvasConfig
from .glyphs import measure_glyph
from .state import AppState, update_sticker

logger = logging.getLogger(__name__)


@dataclass
class ShapeNode:
    """Mutable mirror of the canvas library's sticker node."""

    x: float
    y: float
    rotation: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0

    def reset_scale(self):
        self.scale_x = 1.0
        self.scale_y = 1.0


@dataclass(frozen=True)
class BoundingBox:
    x: float
    y: float
    width: float
    height: float
    rotation: float = 0.0


def drag_end(state: AppState, node: ShapeNode) -> AppState:
    """Copy the dropped position verbatim (no clamping to the canvas edges)."""
    logger.debug("drag end at (%.1f, %.1f)", node.x, node.y)
    return update_sticker(state, x=node.x, y=node.y)


def transform_end(state: AppState, node: ShapeNode) -> AppState:
    """
    Fold a finished resize/rotate into the sticker.

    Only the horizontal scale factor is read (uniform scaling); the node's
    scale is reset to 1 on both axes before the new state is returned.
    Ignored unless the sticker is selected, since the handles only exist then.
    """
    if not state.is_selected:
        logger.debug("transform end ignored: sticker not selected")
        return state

    scale_x = node.scale_x
    font_size = state.sticker.font_size * scale_x
    node.reset_scale()

    logger.debug(
        "transform end: scale %.3f, font %.2f -> %.2f, rotation %.1f",
        scale_x, state.sticker.font_size, font_size, node.rotation,
    )
    return update_sticker(
        state,
        font_size=font_size,
        x=node.x,
        y=node.y,
        rotation=node.rotation,
    )


def limit_bound_box(old_box: BoundingBox, new_box: BoundingBox) -> BoundingBox:
    """Live resize clamp: reject any box narrower or shorter than the minimum."""
    if new_box.width < CanvasConfig.MIN_BOX_SIZE or new_box.height < CanvasConfig.MIN_BOX_SIZE:
        return old_box
    return new_box


def sticker_box(state: AppState) -> BoundingBox:
    sticker = state.sticker
    width, height = measure_glyph(sticker.glyph, sticker.font_size)
    return BoundingBox(sticker.x, sticker.y, width, height, sticker.rotation)


def min_scale_limit(box: BoundingBox) -> float:
    """The minimum box size expressed as a scale factor on ``box``."""
    smallest = min(box.width, box.height)
    if smallest <= 0:
        return 1.0
    return CanvasConfig.MIN_BOX_SIZE / smallest
