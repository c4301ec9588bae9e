"""
Configuration constants for Custom Glasses Maker.
All tunable parameters and magic numbers are defined here with explanations.
"""


class CanvasConfig:
    """Configuration for the composition canvas."""

    # --- Surface ---
    # Fixed canvas size in canvas units (pixels)
    WIDTH = 320
    HEIGHT = 320

    # Stage fill where no photo covers it (transparent, like the exported surface)
    BACKGROUND_COLOR = (0, 0, 0, 0)

    # --- Transform Handles ---
    # A live resize may not shrink the sticker box below this (canvas units)
    MIN_BOX_SIZE = 10

    # Overlay styling (matches the canvas library's default blue)
    HANDLE_COLOR = (0, 161, 255, 255)
    HANDLE_SIZE = 10
    HANDLE_STROKE = 1

    # Distance of the rotate anchor above the box (canvas units)
    ROTATE_ANCHOR_OFFSET = 50

    # Stage id reported when the pointer lands on the empty canvas surface
    STAGE_ID = "stage"


class StickerConfig:
    """Configuration for the glasses sticker and its controls."""

    # Node id of the sticker shape (also the only selectable id)
    STICKER_ID = "glasses"

    # --- Style Picker ---
    GLYPHS = ("😎", "🕶️", "👓", "🥽", "🤓")
    DEFAULT_GLYPH = "😎"

    # --- Initial Placement ---
    DEFAULT_X = 160.0
    DEFAULT_Y = 120.0
    DEFAULT_FONT_SIZE = 50.0
    DEFAULT_ROTATION = 0.0

    # --- Slider Ranges ---
    FONT_SIZE_MIN = 10
    FONT_SIZE_MAX = 100
    FONT_SIZE_STEP = 1

    ROTATION_MIN = 0
    ROTATION_MAX = 360
    ROTATION_STEP = 1

    # --- Glyph Fonts ---
    # Scalable emoji fonts tried first (Windows, macOS, Linux)
    SCALABLE_FONTS = ("seguiemj.ttf", "Apple Color Emoji.ttc", "TwemojiMozilla.ttf")

    # Bitmap color emoji fonts only load at their native strike size
    BITMAP_FONTS = ("NotoColorEmoji.ttf",)
    BITMAP_STRIKE_SIZE = 109

    # Plain fallbacks (render emoji as outlines or boxes)
    FALLBACK_FONTS = ("DejaVuSans.ttf", "arial.ttf")

    # Font family handed to the interactive canvas
    CANVAS_FONT_FAMILY = "Apple Color Emoji, Segoe UI Emoji, Noto Color Emoji, sans-serif"


class ExportConfig:
    """Configuration for the downloaded composition."""

    FILE_NAME = "custom-glasses-photo.png"
    FORMAT = "PNG"
    MIME_TYPE = "image/png"


class UploadConfig:
    """Configuration for the photo upload control."""

    # Extensions offered by the file picker (any image type)
    ALLOWED_TYPES = ["jpg", "jpeg", "png", "webp", "bmp", "gif", "tiff"]


class UIConfig:
    """Configuration for user interface copy and theme."""

    PAGE_TITLE = "Custom Glasses Maker"
    PAGE_ICON = "😎"

    TITLE = "Custom Glasses Maker"
    SUBTITLE = "Upload your photo and add glasses."

    CAPTION_EMPTY = "Upload a photo to get started"
    CAPTION_READY = "Drag the glasses to position them on your photo"

    # --- Theme ---
    PAGE_BACKGROUND = "#db2777"
    PANEL_BACKGROUND = "#be185d"
    BUTTON_COLOR = "#ec4899"
    BUTTON_ACTIVE = "#f472b6"
    CAPTION_COLOR = "#fbcfe8"

    # Poll interval while a decode is still running (seconds)
    DECODE_POLL_INTERVAL = 0.1


class PerformanceConfig:
    """Configuration for performance optimization."""

    # --- Image Processing ---
    # Maximum image dimension kept after decode (larger images are resized)
    # The canvas is 320 units wide so anything beyond a few multiples is wasted
    MAX_IMAGE_DIMENSION = 1280

    # --- Caching ---
    # Maximum cache entries for background data URL encoding
    IMAGE_ENCODING_CACHE_SIZE = 10

    # JPEG quality for the canvas background payload (1-100)
    BACKGROUND_IMAGE_QUALITY = 85

    # --- Threading ---
    # Decode workers shared by all sessions
    DECODE_WORKERS = 2
