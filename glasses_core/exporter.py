"""
Exporter - turns the live scene into a downloadable PNG.

The transform-handle overlay is hidden while the pixels are captured and put
back afterwards, so the file never shows the handles whatever the selection.
"""

import base64
import logging
from dataclasses import dataclass
from io import BytesIO
from typing import Optional

from PIL import Image

from app_config.constants import ExportConfig
from .scene import SceneGraph, rasterize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportResult:
    file_name: str
    data_uri: str
    png_bytes: bytes
    mime_type: str = ExportConfig.MIME_TYPE


def encode_png(image: Image.Image) -> bytes:
    buf = BytesIO()
    image.save(buf, format=ExportConfig.FORMAT)
    return buf.getvalue()


def to_data_uri(data: bytes, mime_type: str = ExportConfig.MIME_TYPE) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode()}"


def snapshot(scene: SceneGraph) -> Image.Image:
    """Rasterize ``scene`` with the overlay hidden, restoring its visibility after."""
    overlay = scene.transformer
    if overlay is None:
        return rasterize(scene)

    was_visible = overlay.visible
    overlay.visible = False
    try:
        return rasterize(scene)
    finally:
        overlay.visible = was_visible


def export_scene(scene: Optional[SceneGraph], has_photo: bool) -> Optional[ExportResult]:
    """
    Capture the visible composition minus the transform handles.

    Returns None (nothing to download) when no photo has been loaded or there
    is no scene to capture.
    """
    if not has_photo:
        return None
    if scene is None:
        logger.debug("Export skipped: no canvas surface")
        return None

    png_bytes = encode_png(snapshot(scene))
    logger.info(f"Exported {ExportConfig.FILE_NAME} ({len(png_bytes)} bytes)")
    return ExportResult(
        file_name=ExportConfig.FILE_NAME,
        data_uri=to_data_uri(png_bytes),
        png_bytes=png_bytes,
    )
