"""
Application state for the glasses maker.

The whole widget is described by one immutable ``AppState``. Every UI event
has a pure reducer here (or in ``selection`` / ``transform``) that returns a
new state; nothing mutates a state in place.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Optional

import numpy as np

from app_config.constants import StickerConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Sticker:
    """The single glyph overlay and its placement on the canvas."""

    glyph: str = StickerConfig.DEFAULT_GLYPH
    x: float = StickerConfig.DEFAULT_X
    y: float = StickerConfig.DEFAULT_Y
    font_size: float = StickerConfig.DEFAULT_FONT_SIZE
    rotation: float = StickerConfig.DEFAULT_ROTATION
    draggable: bool = True


@dataclass(frozen=True)
class AppState:
    """
    Top-level widget state.

    Attributes:
        photo: Decoded RGB photo (H, W, 3) uint8 or None. Replaced wholesale,
            never modified in place.
        sticker: The one and only sticker.
        selected_id: ``StickerConfig.STICKER_ID`` while the sticker is selected,
            otherwise None.
    """

    photo: Optional[np.ndarray] = field(default=None, compare=False, repr=False)
    sticker: Sticker = field(default_factory=Sticker)
    selected_id: Optional[str] = None

    @property
    def has_photo(self) -> bool:
        return self.photo is not None

    @property
    def is_selected(self) -> bool:
        return self.selected_id == StickerConfig.STICKER_ID


def initial_state() -> AppState:
    return AppState()


def update_sticker(state: AppState, **changes) -> AppState:
    """Replace the given sticker fields, leaving every other field untouched."""
    return replace(state, sticker=replace(state.sticker, **changes))


def set_glyph(state: AppState, glyph: str) -> AppState:
    # Any text is accepted; the style picker only offers StickerConfig.GLYPHS
    logger.debug("glyph %r -> %r", state.sticker.glyph, glyph)
    return update_sticker(state, glyph=glyph)


def set_font_size(state: AppState, font_size: float) -> AppState:
    return update_sticker(state, font_size=font_size)


def set_rotation(state: AppState, rotation: float) -> AppState:
    return update_sticker(state, rotation=rotation)


def photo_loaded(state: AppState, photo: np.ndarray) -> AppState:
    logger.debug("photo replaced (%s)", "x".join(str(d) for d in photo.shape[:2]))
    return replace(state, photo=photo)

