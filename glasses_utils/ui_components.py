import streamlit as st
import textwrap

from app_config.constants import CanvasConfig, StickerConfig, UploadConfig, UIConfig
from glasses_core.scene import build_scene, scene_to_fabric
from glasses_core.exporter import export_scene
from .canvas import st_canvas, apply_canvas_result
from .encoding import data_uri_to_bytes
from .logger import log_exceptions, log_performance
from .state_manager import (
    SIZE_SLIDER_KEY,
    ROTATION_SLIDER_KEY,
    get_app_state,
    cb_select_glyph,
    cb_size_change,
    cb_rotation_change,
    cb_select,
    cb_deselect,
    submit_upload,
    sync_sliders,
)


def setup_styles():
    """Apply the pink theme and canvas frame styling."""
    full_css = textwrap.dedent(f"""
        <style>
        :root {{
            --primary-color: {UIConfig.BUTTON_COLOR};
            --font: "Segoe UI", sans-serif;
        }}

        html, body, .stApp, [data-testid="stApp"] {{
            background-color: {UIConfig.PAGE_BACKGROUND} !important;
            color: #ffffff;
        }}

        /* Lock page gestures over the canvas so drags stay on the sticker */
        iframe[title="streamlit_drawable_canvas.st_canvas"] {{
            touch-action: none !important;
            -webkit-user-select: none !important;
            user-select: none !important;
        }}

        .glasses-title {{ text-align: center; font-size: 2.25rem; font-weight: 700; margin-bottom: 0.5rem; }}
        .glasses-sub {{ text-align: center; font-size: 1.1rem; margin-bottom: 1rem; }}

        [data-testid="stVerticalBlockBorderWrapper"] {{
            background-color: {UIConfig.PANEL_BACKGROUND};
            border-radius: 0.75rem;
        }}

        .stButton > button, .stDownloadButton > button {{
            background-color: {UIConfig.BUTTON_COLOR};
            color: #ffffff;
            border: none;
        }}
        .stButton > button[kind="primary"] {{
            background-color: {UIConfig.BUTTON_ACTIVE};
        }}
        .style-grid .stButton > button {{ font-size: 1.8rem; }}

        .canvas-frame {{
            width: {CanvasConfig.WIDTH}px;
            margin: 0 auto;
            border-radius: 1rem;
            overflow: hidden;
            box-shadow: 0 10px 15px rgba(0, 0, 0, 0.2);
        }}
        .glasses-caption {{ text-align: center; margin-top: 1rem; color: {UIConfig.CAPTION_COLOR}; }}
        </style>
    """)
    st.markdown(full_css, unsafe_allow_html=True)


def helper_caption(state):
    return UIConfig.CAPTION_READY if state.has_photo else UIConfig.CAPTION_EMPTY


def render_header():
    st.markdown(f"<div class='glasses-title'>{UIConfig.TITLE}</div>", unsafe_allow_html=True)
    st.markdown(f"<div class='glasses-sub'>{UIConfig.SUBTITLE}</div>", unsafe_allow_html=True)


def render_upload():
    uploaded_file = st.file_uploader(
        "📤 Upload Photo",
        type=UploadConfig.ALLOWED_TYPES,
        accept_multiple_files=False,
        key="photo_uploader",
    )
    if submit_upload(uploaded_file):
        st.rerun()


def render_style_picker():
    st.markdown("**Choose Glasses Style:**")
    current = get_app_state().sticker.glyph
    st.markdown('<div class="style-grid">', unsafe_allow_html=True)
    cols = st.columns(len(StickerConfig.GLYPHS))
    for col, glyph in zip(cols, StickerConfig.GLYPHS):
        with col:
            st.button(
                glyph,
                key=f"style_{glyph}",
                type="primary" if glyph == current else "secondary",
                on_click=cb_select_glyph,
                args=(glyph,),
                use_container_width=True,
            )
    st.markdown('</div>', unsafe_allow_html=True)


def render_sliders():
    st.slider(
        "Size:",
        min_value=StickerConfig.FONT_SIZE_MIN,
        max_value=StickerConfig.FONT_SIZE_MAX,
        step=StickerConfig.FONT_SIZE_STEP,
        key=SIZE_SLIDER_KEY,
        on_change=cb_size_change,
    )
    st.slider(
        "Rotation:",
        min_value=StickerConfig.ROTATION_MIN,
        max_value=StickerConfig.ROTATION_MAX,
        step=StickerConfig.ROTATION_STEP,
        key=ROTATION_SLIDER_KEY,
        on_change=cb_rotation_change,
    )


@log_exceptions
def render_download():
    """Download button; inert until a photo is loaded."""
    state = get_app_state()
    result = export_scene(build_scene(state), state.has_photo)
    data = data_uri_to_bytes(result.data_uri) if result is not None else b""
    st.download_button(
        label="⬇️ Download Image",
        data=data,
        file_name=result.file_name if result is not None else None,
        mime=result.mime_type if result is not None else None,
        disabled=result is None,
        use_container_width=True,
    )


def render_controls():
    """Side panel: upload, style picker, sliders and download."""
    with st.container(border=True):
        render_upload()
        render_style_picker()
        render_sliders()
        render_download()


@log_performance
def render_canvas():
    """
    The interactive composition canvas.

    Gestures reported by the canvas are folded into the state here; when they
    change it the whole app reruns so the sliders follow the sticker.
    """
    state = get_app_state()
    scene = build_scene(state)

    st.markdown('<div class="canvas-frame">', unsafe_allow_html=True)
    canvas_result = st_canvas(
        background_image=scene.background.image if scene.background is not None else None,
        background_id=st.session_state.get("photo_id", 0),
        initial_drawing=scene_to_fabric(scene),
        drawing_mode="transform",
        update_streamlit=True,
        width=CanvasConfig.WIDTH,
        height=CanvasConfig.HEIGHT,
        display_toolbar=False,
        key=f"glasses_canvas_{st.session_state.get('canvas_id', 0)}",
    )
    st.markdown('</div>', unsafe_allow_html=True)

    new_state, reseed = apply_canvas_result(state, canvas_result.json_data)
    if new_state is not state:
        st.session_state["app_state"] = new_state
        if reseed:
            st.session_state["canvas_id"] = st.session_state.get("canvas_id", 0) + 1
        sync_sliders()
        st.rerun()

    if state.is_selected:
        st.button("✅ Done", key="deselect_btn", on_click=cb_deselect, use_container_width=True,
                  help="Hide the handles (same as clicking an empty spot of the canvas)")
    else:
        st.button("✋ Adjust glasses", key="select_btn", on_click=cb_select, use_container_width=True,
                  help="Show the resize and rotate handles")

    st.markdown(f"<p class='glasses-caption'>{helper_caption(state)}</p>", unsafe_allow_html=True)
