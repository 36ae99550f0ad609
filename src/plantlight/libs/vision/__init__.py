from .brightness import PixelBuffer, brightness, load_image, to_pil_image
from .errors import (
    InvalidGridSize,
    InvalidRegion,
    InvalidThresholds,
    LightingAnalysisError,
    UnsupportedPixelFormat,
)
from .grid import GridCell, NormalizedRect, PixelRect, partition
from .levels import DEFAULT_THRESHOLDS, LightLevel, Thresholds, classify

__all__ = [
    "PixelBuffer",
    "brightness",
    "load_image",
    "to_pil_image",
    "LightingAnalysisError",
    "InvalidGridSize",
    "InvalidRegion",
    "InvalidThresholds",
    "UnsupportedPixelFormat",
    "GridCell",
    "NormalizedRect",
    "PixelRect",
    "partition",
    "DEFAULT_THRESHOLDS",
    "LightLevel",
    "Thresholds",
    "classify",
]
