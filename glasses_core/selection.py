"""
Selection controller.

Two states: nothing selected (``None``) and the sticker selected. A pointer-down
on the sticker selects it; a pointer-down whose target is the canvas surface
itself clears the selection. Any other target leaves the selection alone.
"""

import logging
from dataclasses import replace

from app_config.constants import CanvasConfig, StickerConfig
from .state import AppState

logger = logging.getLogger(__name__)

STAGE = CanvasConfig.STAGE_ID
STICKER = StickerConfig.STICKER_ID


def pointer_down(state: AppState, target: str) -> AppState:
    """Apply a pointer-down (mouse) on ``target`` to the selection."""
    if target == STICKER:
        new_id = STICKER
    elif target == STAGE:
        new_id = None
    else:
        return state

    if new_id != state.selected_id:
        logger.debug("selection %r -> %r", state.selected_id, new_id)
        return replace(state, selected_id=new_id)
    return state


def tap(state: AppState, target: str) -> AppState:
    """Touch counterpart of :func:`pointer_down`."""
    return pointer_down(state, target)
