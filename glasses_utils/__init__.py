"""
Streamlit layer for the glasses maker: session state, the canvas bridge,
encoding helpers, logging and the page components.
"""

from .logger import logger, setup_logging
from .state_manager import initialize_session_state, poll_loader
from .ui_components import setup_styles, render_header, render_controls, render_canvas

__all__ = [
    'logger',
    'setup_logging',
    'initialize_session_state',
    'poll_loader',
    'setup_styles',
    'render_header',
    'render_controls',
    'render_canvas'
]
