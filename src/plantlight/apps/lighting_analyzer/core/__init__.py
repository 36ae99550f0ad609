"""Lighting analyzer core: zone analysis, overlay rendering and configuration."""

from .analyzer import (
    DEFAULT_GRID_SIZE,
    analyze_lighting,
    analyze_overall,
    identify_zones,
    summarize_zones,
)
from .config import LightingConfig, load_config
from .models import LightingAnalysis, LightingSummary, LightingZone, dominant_level
from .overlay import LEVEL_COLORS, render_overlay, save_overlay

__all__ = [
    "DEFAULT_GRID_SIZE",
    "analyze_lighting",
    "analyze_overall",
    "identify_zones",
    "summarize_zones",
    "LightingConfig",
    "load_config",
    "LightingAnalysis",
    "LightingSummary",
    "LightingZone",
    "dominant_level",
    "LEVEL_COLORS",
    "render_overlay",
    "save_overlay",
]
