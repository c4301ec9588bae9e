"""
Canvas scene - the declarative projection of ``AppState``.

``build_scene`` turns the state into a small scene graph (background photo,
sticker glyph, and the transform-handle overlay while the sticker is
selected). The graph is then either rasterized with Pillow (preview and
export) or projected into the drawing JSON understood by the interactive
canvas component.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

import cv2
import numpy as np
from PIL import Image, ImageDraw

from app_config.constants import CanvasConfig, StickerConfig
from .glyphs import render_glyph
from .state import AppState
from .transform import BoundingBox, ShapeNode, min_scale_limit, sticker_box

FABRIC_VERSION = "4.4.0"
TEXT_TYPES = ("text", "i-text", "textbox")


@dataclass
class BackgroundLayer:
    image: np.ndarray  # already cover-fitted to the canvas


@dataclass
class StickerLayer:
    node_id: str
    glyph: str
    x: float
    y: float
    font_size: float
    rotation: float
    draggable: bool = True


@dataclass
class TransformerLayer:
    target_id: str
    box: BoundingBox
    min_box_size: int = CanvasConfig.MIN_BOX_SIZE
    visible: bool = True


@dataclass
class SceneGraph:
    width: int
    height: int
    sticker: StickerLayer
    background: Optional[BackgroundLayer] = None
    transformer: Optional[TransformerLayer] = None

    @property
    def layers(self) -> List[object]:
        """Layers back to front, skipping absent ones."""
        return [layer for layer in (self.background, self.sticker, self.transformer) if layer is not None]


def cover_fit(photo: np.ndarray, width: int, height: int) -> np.ndarray:
    """Scale to completely cover the box (aspect preserved), then centre-crop."""
    h, w = photo.shape[:2]
    scale = max(width / w, height / h)
    new_w = max(width, int(math.ceil(w * scale)))
    new_h = max(height, int(math.ceil(h * scale)))

    interpolation = cv2.INTER_AREA if scale < 1.0 else cv2.INTER_LINEAR
    resized = cv2.resize(photo, (new_w, new_h), interpolation=interpolation)

    x = (new_w - width) // 2
    y = (new_h - height) // 2
    return resized[y:y + height, x:x + width]


def build_scene(state: AppState) -> SceneGraph:
    width, height = CanvasConfig.WIDTH, CanvasConfig.HEIGHT
    sticker = state.sticker

    background = None
    if state.has_photo:
        background = BackgroundLayer(cover_fit(state.photo, width, height))

    transformer = None
    if state.is_selected:
        transformer = TransformerLayer(target_id=StickerConfig.STICKER_ID, box=sticker_box(state))

    return SceneGraph(
        width=width,
        height=height,
        background=background,
        sticker=StickerLayer(
            node_id=StickerConfig.STICKER_ID,
            glyph=sticker.glyph,
            x=sticker.x,
            y=sticker.y,
            font_size=sticker.font_size,
            rotation=sticker.rotation,
            draggable=sticker.draggable,
        ),
        transformer=transformer,
    )


# --- Rasterizing ---

def rotate_point(px: float, py: float, degrees: float) -> Tuple[float, float]:
    """Rotate clockwise on screen (y axis pointing down) about the origin."""
    rad = math.radians(degrees)
    cos, sin = math.cos(rad), math.sin(rad)
    return px * cos - py * sin, px * sin + py * cos


def box_corners(box: BoundingBox) -> List[Tuple[float, float]]:
    """Corners of ``box`` rotated about its top-left anchor, clockwise from top-left."""
    corners = [(0, 0), (box.width, 0), (box.width, box.height), (0, box.height)]
    result = []
    for cx, cy in corners:
        rx, ry = rotate_point(cx, cy, box.rotation)
        result.append((box.x + rx, box.y + ry))
    return result


def _paste_sticker(canvas: Image.Image, layer: StickerLayer) -> Image.Image:
    tile = render_glyph(layer.glyph, layer.font_size)
    box = BoundingBox(0, 0, tile.width, tile.height, layer.rotation)
    min_x = min(cx for cx, _ in box_corners(box))
    min_y = min(cy for _, cy in box_corners(box))

    rotated = tile.rotate(-layer.rotation, resample=Image.BICUBIC, expand=True)
    overlay = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
    overlay.paste(rotated, (round(layer.x + min_x), round(layer.y + min_y)), rotated)
    return Image.alpha_composite(canvas, overlay)


def _draw_transformer(canvas: Image.Image, layer: TransformerLayer) -> Image.Image:
    corners = box_corners(layer.box)
    color = CanvasConfig.HANDLE_COLOR
    half = CanvasConfig.HANDLE_SIZE / 2

    anchors = list(corners)
    for i in range(4):
        (ax, ay), (bx, by) = corners[i], corners[(i + 1) % 4]
        anchors.append(((ax + bx) / 2, (ay + by) / 2))

    # Rotate anchor sits above the middle of the top edge
    (tlx, tly), (trx, try_) = corners[0], corners[1]
    ux, uy = rotate_point(0, -CanvasConfig.ROTATE_ANCHOR_OFFSET, layer.box.rotation)
    rotater = ((tlx + trx) / 2 + ux, (tly + try_) / 2 + uy)

    overlay = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)
    draw.polygon(corners, outline=color, width=CanvasConfig.HANDLE_STROKE)
    for ax, ay in anchors:
        draw.rectangle((ax - half, ay - half, ax + half, ay + half), fill=(255, 255, 255, 255), outline=color)
    rx, ry = rotater
    draw.ellipse((rx - half, ry - half, rx + half, ry + half), fill=(255, 255, 255, 255), outline=color)
    return Image.alpha_composite(canvas, overlay)


def rasterize(scene: SceneGraph) -> Image.Image:
    """Render the scene to an RGBA image of the canvas size."""
    canvas = Image.new("RGBA", (scene.width, scene.height), CanvasConfig.BACKGROUND_COLOR)

    if scene.background is not None:
        photo = Image.fromarray(scene.background.image).convert("RGBA")
        canvas = Image.alpha_composite(canvas, photo)

    canvas = _paste_sticker(canvas, scene.sticker)

    if scene.transformer is not None and scene.transformer.visible:
        canvas = _draw_transformer(canvas, scene.transformer)
    return canvas


# --- Interactive canvas projection ---

def scene_to_fabric(scene: SceneGraph) -> dict:
    """
    Project the scene into the drawing JSON of the interactive canvas.

    The background photo is attached separately by the canvas wrapper. The
    sticker's handles are shown only while a transformer layer exists, and
    its minimum scale mirrors the live box clamp.
    """
    layer = scene.sticker
    selected = scene.transformer is not None
    min_scale = 0.0
    if selected:
        min_scale = min_scale_limit(scene.transformer.box)

    sticker = {
        "type": "text",
        "version": FABRIC_VERSION,
        "originX": "left",
        "originY": "top",
        "left": layer.x,
        "top": layer.y,
        "angle": layer.rotation,
        "scaleX": 1,
        "scaleY": 1,
        "text": layer.glyph,
        "fontSize": layer.font_size,
        "fontFamily": StickerConfig.CANVAS_FONT_FAMILY,
        "fill": "#000000",
        "selectable": layer.draggable,
        "hasControls": selected,
        "hasBorders": selected,
        "lockScalingFlip": True,
        "minScaleLimit": min_scale,
    }
    return {"version": FABRIC_VERSION, "objects": [sticker]}


def node_from_fabric(json_data: Optional[dict]) -> Optional[ShapeNode]:
    """Read the sticker node back from the canvas JSON, or None if it is missing."""
    if not json_data:
        return None
    for obj in reversed(json_data.get("objects", [])):
        if obj.get("type") in TEXT_TYPES:
            return ShapeNode(
                x=float(obj.get("left", 0.0)),
                y=float(obj.get("top", 0.0)),
                rotation=float(obj.get("angle", 0.0)),
                scale_x=float(obj.get("scaleX", 1.0)),
                scale_y=float(obj.get("scaleY", 1.0)),
            )
    return None
