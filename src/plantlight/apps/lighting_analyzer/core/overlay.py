"""Diagnostic overlay showing the light level of each zone."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, Tuple

from PIL import Image, ImageDraw, ImageFont

from plantlight.libs.vision.brightness import ImageInput, to_pil_image
from plantlight.libs.vision.levels import LightLevel

from .models import LightingZone

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]

LEVEL_COLORS: Dict[LightLevel, RGB] = {
    LightLevel.LOW: (77, 128, 179),  # blue-ish
    LightLevel.MEDIUM: (230, 179, 0),  # amber
    LightLevel.HIGH: (255, 153, 0),  # orange
}
OVERLAY_ALPHA_DEFAULT = 0.3
LABEL_FILL: RGB = (255, 255, 255)
LABEL_STROKE: RGB = (0, 0, 0)
LABEL_STROKE_WIDTH = 1

_TRANSLUCENT_MODES = {"RGBA", "LA", "PA"}


def _stroke_offsets(width: int):
    for dx in range(-width, width + 1):
        for dy in range(-width, width + 1):
            if dx or dy:
                yield dx, dy


def _draw_label(
    draw: ImageDraw.ImageDraw,
    box: Tuple[int, int, int, int],
    label: str,
    font: ImageFont.ImageFont,
) -> None:
    left, top, right, bottom = box
    bbox = draw.textbbox((0, 0), label, font=font)
    text_w = bbox[2] - bbox[0]
    text_h = bbox[3] - bbox[1]
    # Centred on the zone even when the label is wider than it.
    x = (left + right) // 2 - text_w // 2 - bbox[0]
    y = (top + bottom) // 2 - text_h // 2 - bbox[1]
    for dx, dy in _stroke_offsets(LABEL_STROKE_WIDTH):
        draw.text((x + dx, y + dy), label, font=font, fill=LABEL_STROKE + (255,))
    draw.text((x, y), label, font=font, fill=LABEL_FILL + (255,))


def render_overlay(
    image: ImageInput,
    zones: Iterable[LightingZone],
    alpha: float = OVERLAY_ALPHA_DEFAULT,
) -> Image.Image:
    """Return a copy of ``image`` with each zone tinted and labelled.

    The output has the same pixel dimensions as the input and the source is
    never modified. No randomness is involved, so identical inputs always
    produce byte-identical images.
    """
    if not 0.0 <= alpha <= 1.0:
        raise ValueError(f"Overlay alpha must be within [0, 1], got {alpha!r}")

    source = to_pil_image(image)
    width, height = source.size
    base = source.convert("RGBA")
    fill_alpha = int(alpha * 255 + 0.5)

    zones = list(zones)
    tint = Image.new("RGBA", base.size, (0, 0, 0, 0))
    tint_draw = ImageDraw.Draw(tint)
    boxes = []
    for zone in zones:
        box = zone.region.denormalize(width, height)
        boxes.append(box)
        left, top, right, bottom = box
        if right <= left or bottom <= top:
            continue
        tint_draw.rectangle(
            [left, top, right - 1, bottom - 1],
            fill=LEVEL_COLORS[zone.level] + (fill_alpha,),
        )

    composed = Image.alpha_composite(base, tint)
    label_draw = ImageDraw.Draw(composed)
    font = ImageFont.load_default()
    for zone, box in zip(zones, boxes):
        _draw_label(label_draw, box, zone.level.label, font)

    logger.debug("Rendered overlay for %d zones on %dx%d image", len(zones), width, height)

    if source.mode in _TRANSLUCENT_MODES:
        return composed
    return composed.convert("RGB")


def save_overlay(overlay: Image.Image, path: Path) -> Path:
    """Write ``overlay`` as PNG, creating parent directories as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    overlay.save(path, format="PNG")
    return path


__all__ = [
    "LEVEL_COLORS",
    "OVERLAY_ALPHA_DEFAULT",
    "render_overlay",
    "save_overlay",
]
