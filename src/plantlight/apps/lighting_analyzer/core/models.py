"""Result types produced by the lighting analyzer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Tuple

from plantlight.libs.vision.grid import NormalizedRect
from plantlight.libs.vision.levels import LightLevel, Thresholds

LightingSummary = Dict[LightLevel, float]


@dataclass(frozen=True)
class LightingZone:
    """One grid cell tagged with its light level and share of the image area."""

    level: LightLevel
    percentage: float
    region: NormalizedRect
    brightness: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level.value,
            "label": self.level.label,
            "percentage": self.percentage,
            "brightness": self.brightness,
            "region": self.region.to_dict(),
        }


def dominant_level(summary: Mapping[LightLevel, float]) -> LightLevel:
    """Level holding the largest share; ties go to the darker level.

    Presentation helper only. :attr:`LightingAnalysis.overall_level` comes
    from the whole-image brightness and may disagree on mixed lighting.
    """
    best = LightLevel.LOW
    for level in LightLevel:
        if summary.get(level, 0.0) > summary.get(best, 0.0):
            best = level
    return best


@dataclass(frozen=True)
class LightingAnalysis:
    """Complete, immutable result of a single analysis call."""

    overall_level: LightLevel
    overall_brightness: int
    grid_size: int
    thresholds: Thresholds
    zones: Tuple[LightingZone, ...]
    summary_items: Tuple[Tuple[LightLevel, float], ...]
    width: int
    height: int

    @property
    def summary(self) -> LightingSummary:
        """Fresh ``{LightLevel: percentage}`` mapping covering all levels."""
        return dict(self.summary_items)

    @property
    def dominant_level(self) -> LightLevel:
        return dominant_level(self.summary)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overall_level": self.overall_level.value,
            "overall_label": self.overall_level.label,
            "overall_description": self.overall_level.description,
            "overall_brightness": self.overall_brightness,
            "dominant_level": self.dominant_level.value,
            "grid_size": self.grid_size,
            "thresholds": {"low": self.thresholds.low, "high": self.thresholds.high},
            "width": self.width,
            "height": self.height,
            "summary": {level.value: pct for level, pct in self.summary_items},
            "zones": [zone.to_dict() for zone in self.zones],
        }


__all__ = [
    "LightingSummary",
    "LightingZone",
    "LightingAnalysis",
    "dominant_level",
]
