import streamlit as st
from app_config.constants import StickerConfig
from glasses_core.state import initial_state, set_glyph, set_font_size, set_rotation, photo_loaded
from glasses_core.selection import STAGE, STICKER, pointer_down
from glasses_core.loader import ImageLoader
from .logger import get_logger

logger = get_logger("state")

SIZE_SLIDER_KEY = "size_slider"
ROTATION_SLIDER_KEY = "rotation_slider"


def initialize_session_state():
    """Initialize all session state variables with multi-layer safety."""
    defaults = {
        "app_state": initial_state(),
        "image_loader": None,       # created lazily, one per session
        "image_path": None,         # key of the last uploaded file
        "photo_id": 0,              # request id of the photo on screen
        "canvas_id": 0,
        SIZE_SLIDER_KEY: int(StickerConfig.DEFAULT_FONT_SIZE),
        ROTATION_SLIDER_KEY: int(StickerConfig.DEFAULT_ROTATION),
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value
    if st.session_state["image_loader"] is None:
        st.session_state["image_loader"] = ImageLoader()


def get_app_state():
    return st.session_state["app_state"]


def dispatch(reducer, *args, reseed=False):
    """
    Run ``reducer(state, *args)`` and store the result.

    Args:
        reseed: Rebuild the interactive canvas from the new state (needed
            whenever the canvas' own copy of the sticker is now stale).

    Returns:
        bool: True if the state changed
    """
    old = st.session_state["app_state"]
    new = reducer(old, *args)
    st.session_state["app_state"] = new
    changed = new is not old
    if changed and reseed:
        st.session_state["canvas_id"] = st.session_state.get("canvas_id", 0) + 1
    return changed


def sync_sliders():
    """Point the sliders at the sticker's current size and rotation."""
    sticker = get_app_state().sticker
    st.session_state[SIZE_SLIDER_KEY] = int(round(min(max(sticker.font_size, StickerConfig.FONT_SIZE_MIN), StickerConfig.FONT_SIZE_MAX)))
    st.session_state[ROTATION_SLIDER_KEY] = int(round(min(max(sticker.rotation, StickerConfig.ROTATION_MIN), StickerConfig.ROTATION_MAX)))


def cb_select_glyph(glyph):
    dispatch(set_glyph, glyph, reseed=True)


def cb_size_change():
    dispatch(set_font_size, float(st.session_state[SIZE_SLIDER_KEY]), reseed=True)


def cb_rotation_change():
    dispatch(set_rotation, float(st.session_state[ROTATION_SLIDER_KEY]), reseed=True)


def cb_select():
    """Pointer-down on the sticker."""
    dispatch(pointer_down, STICKER, reseed=True)


def cb_deselect():
    """Pointer-down on the empty canvas surface."""
    dispatch(pointer_down, STAGE, reseed=True)


def submit_upload(uploaded_file):
    """Queue a decode for a newly chosen file; re-runs with the same file are ignored."""
    if uploaded_file is None:
        return False
    file_key = getattr(uploaded_file, "file_id", f"{uploaded_file.name}_{uploaded_file.size}")
    if st.session_state.get("image_path") == file_key:
        return False

    uploaded_file.seek(0)
    request_id = st.session_state["image_loader"].submit(uploaded_file.read())
    st.session_state["image_path"] = file_key
    logger.info(f"Decoding {uploaded_file.name} (request {request_id})")
    return True


def poll_loader():
    """
    Move a finished decode into the app state.

    Returns:
        bool: True while the newest decode is still running
    """
    loader = st.session_state["image_loader"]
    result = loader.collect()
    if result is not None:
        if result.ok:
            dispatch(photo_loaded, result.photo, reseed=True)
            st.session_state["photo_id"] = result.request_id
        else:
            logger.warning(f"Request {result.request_id} produced no photo; keeping the current one")
    return loader.pending
