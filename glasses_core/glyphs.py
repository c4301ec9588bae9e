import logging
import math
from functools import lru_cache
from typing import Tuple

from PIL import Image, ImageDraw, ImageFont

from app_config.constants import StickerConfig

logger = logging.getLogger(__name__)


@lru_cache(maxsize=64)
def load_font(size: int):
    """
    Find a font able to draw the sticker glyph at ``size`` pixels.

    Returns:
        tuple: (font, scale) where ``scale`` is the resize factor to apply to
        text drawn with ``font`` (bitmap emoji fonts only load at one size).
    """
    size = max(1, int(size))
    for name in StickerConfig.SCALABLE_FONTS:
        try:
            return ImageFont.truetype(name, size), 1.0
        except OSError:
            continue

    for name in StickerConfig.BITMAP_FONTS:
        try:
            strike = StickerConfig.BITMAP_STRIKE_SIZE
            return ImageFont.truetype(name, strike), size / strike
        except OSError:
            continue

    for name in StickerConfig.FALLBACK_FONTS:
        try:
            return ImageFont.truetype(name, size), 1.0
        except OSError:
            continue

    logger.warning("No emoji font found, falling back to Pillow's default font")
    return ImageFont.load_default(size), 1.0


@lru_cache(maxsize=128)
def render_glyph(glyph: str, font_size: float) -> Image.Image:
    """
    Draw ``glyph`` on a transparent tile whose top-left is the text anchor.

    The tile is cached and shared: paste it, never draw on it.
    """
    font, scale = load_font(round(font_size))
    native_size = font_size
    if scale != 1.0:
        native_size = StickerConfig.BITMAP_STRIKE_SIZE
        scale = font_size / native_size

    left, top, right, bottom = font.getbbox(glyph or " ")
    width = max(1, math.ceil(max(font.getlength(glyph or " "), right)))
    height = max(1, math.ceil(max(native_size, bottom)))

    tile = Image.new("RGBA", (width, height), (0, 0, 0, 0))
    ImageDraw.Draw(tile).text((0, 0), glyph, font=font, fill=(0, 0, 0, 255), embedded_color=True)

    if scale != 1.0:
        tile = tile.resize(
            (max(1, round(width * scale)), max(1, round(height * scale))),
            Image.LANCZOS,
        )
    return tile


def measure_glyph(glyph: str, font_size: float) -> Tuple[int, int]:
    """Width and height of the glyph's box in canvas units."""
    return render_glyph(glyph, font_size).size
