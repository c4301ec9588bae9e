"""Data URLs in and out: the canvas background going to the browser, the PNG coming back for download."""

import base64
from io import BytesIO

import numpy as np
import streamlit as st
from PIL import Image

from app_config.constants import PerformanceConfig
from .logger import get_logger

logger = get_logger("encoding")


@st.cache_data(show_spinner=False, max_entries=PerformanceConfig.IMAGE_ENCODING_CACHE_SIZE)
def _background_url(_photo, photo_id):
    # Leading underscore: Streamlit keys the cache on photo_id only
    try:
        rgb = Image.fromarray(np.ascontiguousarray(_photo)).convert("RGB")
        out = BytesIO()
        rgb.save(out, format="JPEG", quality=PerformanceConfig.BACKGROUND_IMAGE_QUALITY)
    except (OSError, ValueError) as e:
        logger.warning(f"Could not encode background for photo {photo_id}: {e}")
        return ""
    return "data:image/jpeg;base64," + base64.b64encode(out.getvalue()).decode("ascii")


def image_to_url(photo, photo_id=""):
    """JPEG data URL for an RGB array already sized to the canvas, cached per ``photo_id``."""
    return _background_url(photo, str(photo_id))


def data_uri_to_bytes(data_uri):
    """Payload of a ``data:<mime>[;base64],<payload>`` URI; empty bytes for anything else."""
    if not data_uri or "," not in data_uri:
        return b""
    header, payload = data_uri.split(",", 1)
    if header.endswith(";base64"):
        return base64.b64decode(payload)
    return payload.encode()
