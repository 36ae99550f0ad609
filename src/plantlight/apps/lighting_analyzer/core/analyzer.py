"""Grid-based lighting analysis of a room image.

The image is split into an N x N grid; each cell's mean brightness is
classified with the same thresholds used for the whole image. The overall
level comes from the whole image, not from the grid, so it can differ from
the level holding the largest share of the summary.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

from plantlight.libs.vision.brightness import ImageInput, PixelBuffer, brightness
from plantlight.libs.vision.grid import partition, validate_grid_size
from plantlight.libs.vision.levels import (
    DEFAULT_THRESHOLDS,
    LightLevel,
    Thresholds,
    classify,
)

from .models import LightingAnalysis, LightingSummary, LightingZone

logger = logging.getLogger(__name__)

DEFAULT_GRID_SIZE = 3


def identify_zones(
    image: ImageInput,
    grid_size: int = DEFAULT_GRID_SIZE,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> List[LightingZone]:
    """Classify every cell of a ``grid_size`` x ``grid_size`` partition.

    Returns ``grid_size**2`` zones in row-major order, each carrying an equal
    ``100 / grid_size**2`` share of the image.
    """
    n = validate_grid_size(grid_size)
    buffer = PixelBuffer.from_image(image)
    cells = partition(buffer.width, buffer.height, n)
    share = 100.0 / (n * n)

    zones: List[LightingZone] = []
    for cell in cells:
        cell_brightness = brightness(buffer.region(cell.pixel_rect))
        zones.append(
            LightingZone(
                level=classify(cell_brightness, thresholds),
                percentage=share,
                region=cell.region,
                brightness=cell_brightness,
            )
        )
    return zones


def summarize_zones(zones: Iterable[LightingZone]) -> LightingSummary:
    """Sum zone percentages per level; every level is present, possibly at 0."""
    summary: LightingSummary = {level: 0.0 for level in LightLevel}
    for zone in zones:
        summary[zone.level] += zone.percentage
    return summary


def analyze_overall(
    image: ImageInput, thresholds: Thresholds = DEFAULT_THRESHOLDS
) -> Tuple[LightLevel, int]:
    """Classify the mean brightness of the entire image."""
    value = brightness(PixelBuffer.from_image(image))
    return classify(value, thresholds), value


def analyze_lighting(
    image: ImageInput,
    grid_size: int = DEFAULT_GRID_SIZE,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> LightingAnalysis:
    """Run the full analysis: zones, summary and overall level.

    Either every part of the result is produced or an exception from
    :mod:`plantlight.libs.vision.errors` is raised; nothing partial is
    returned.
    """
    n = validate_grid_size(grid_size)
    buffer = PixelBuffer.from_image(image)

    zones = identify_zones(buffer, n, thresholds)
    summary = summarize_zones(zones)
    overall_level, overall_brightness = analyze_overall(buffer, thresholds)

    logger.debug(
        "Analysed %dx%d image on a %dx%d grid: overall=%s (%d), summary=%s",
        buffer.width,
        buffer.height,
        n,
        n,
        overall_level.value,
        overall_brightness,
        {level.value: round(pct, 2) for level, pct in summary.items()},
    )

    return LightingAnalysis(
        overall_level=overall_level,
        overall_brightness=overall_brightness,
        grid_size=n,
        thresholds=thresholds,
        zones=tuple(zones),
        summary_items=tuple((level, summary[level]) for level in LightLevel),
        width=buffer.width,
        height=buffer.height,
    )


__all__ = [
    "DEFAULT_GRID_SIZE",
    "identify_zones",
    "summarize_zones",
    "analyze_overall",
    "analyze_lighting",
]
