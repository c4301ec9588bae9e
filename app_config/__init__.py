"""
Configuration package for Custom Glasses Maker.
Centralizes all tunable parameters and constants.
"""

from .constants import (
    CanvasConfig,
    StickerConfig,
    ExportConfig,
    UploadConfig,
    UIConfig,
    PerformanceConfig
)

__all__ = [
    'CanvasConfig',
    'StickerConfig',
    'ExportConfig',
    'UploadConfig',
    'UIConfig',
    'PerformanceConfig'
]
