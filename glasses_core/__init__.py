"""
Core of the glasses maker: state, reducers, scene projection, decoding and
export. Nothing in here imports Streamlit.
"""

from .state import AppState, Sticker, initial_state, set_glyph, set_font_size, set_rotation, photo_loaded
from .selection import STAGE, STICKER, pointer_down, tap
from .transform import BoundingBox, ShapeNode, drag_end, transform_end, limit_bound_box
from .scene import SceneGraph, build_scene, rasterize, scene_to_fabric, node_from_fabric
from .loader import ImageLoader, LoadResult, decode_image
from .exporter import ExportResult, export_scene

__all__ = [
    'AppState',
    'Sticker',
    'initial_state',
    'set_glyph',
    'set_font_size',
    'set_rotation',
    'photo_loaded',
    'STAGE',
    'STICKER',
    'pointer_down',
    'tap',
    'BoundingBox',
    'ShapeNode',
    'drag_end',
    'transform_end',
    'limit_bound_box',
    'SceneGraph',
    'build_scene',
    'rasterize',
    'scene_to_fabric',
    'node_from_fabric',
    'ImageLoader',
    'LoadResult',
    'decode_image',
    'ExportResult',
    'export_scene',
]
