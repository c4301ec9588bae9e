import time
import streamlit as st

# 🎯 CRITICAL: Must be the VERY FIRST Streamlit command
from app_config.constants import UIConfig

st.set_page_config(
    page_title=UIConfig.PAGE_TITLE,
    page_icon=UIConfig.PAGE_ICON,
    layout="wide",
    initial_sidebar_state="collapsed"
)

# --- UTILITIES IMPORT ---
from glasses_utils.logger import logger
from glasses_utils.state_manager import initialize_session_state, poll_loader
from glasses_utils.ui_components import setup_styles, render_header, render_controls, render_canvas

# --- 1️⃣ SESSION INITIALIZATION (VERY TOP)
initialize_session_state()


def main():
    setup_styles()
    render_header()

    # --- 2️⃣ LAND FINISHED DECODES BEFORE ANYTHING READS THE PHOTO ---
    decoding = poll_loader()

    # Canvas first: its gestures may move the sliders, which must not exist yet this run
    panel_col, canvas_col = st.columns(2, gap="large")
    with canvas_col:
        render_canvas()
    with panel_col:
        render_controls()

    # --- 3️⃣ KEEP POLLING WHILE A DECODE IS IN FLIGHT ---
    if decoding:
        logger.debug("Decode still running, polling again")
        time.sleep(UIConfig.DECODE_POLL_INTERVAL)
        st.rerun()


if __name__ == "__main__":
    main()
