"""Error taxonomy for lighting analysis.

All errors are raised synchronously before any result is built, so a caller
either receives a complete analysis or an exception.
"""

from __future__ import annotations


class LightingAnalysisError(ValueError):
    """Base class for every failure raised by the lighting analysis core."""


class InvalidGridSize(LightingAnalysisError):
    """Raised when the requested grid size is not a positive integer."""

    def __init__(self, grid_size: object) -> None:
        self.grid_size = grid_size
        super().__init__(f"Grid size must be a positive integer, got {grid_size!r}")


class InvalidRegion(LightingAnalysisError):
    """Raised when a pixel region has zero area or lies outside the image."""


class UnsupportedPixelFormat(LightingAnalysisError):
    """Raised when the input cannot be interpreted as a pixel buffer."""


class InvalidThresholds(LightingAnalysisError):
    """Raised when classification thresholds violate ``0 <= low < high <= 255``."""


__all__ = [
    "LightingAnalysisError",
    "InvalidGridSize",
    "InvalidRegion",
    "UnsupportedPixelFormat",
    "InvalidThresholds",
]
