"""Mean grayscale brightness of image regions.

Brightness is the arithmetic mean luma of a region on the 0-255 scale. Luma
is obtained by discarding chrominance with Rec. 709 weights, which is what a
zero-saturation colour transform produces; any alpha channel is ignored.
Channel sums are accumulated as int64 before weighting so large regions
cannot overflow, and the mean is rounded half away from zero so repeated
calls on identical input return identical integers.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from .errors import InvalidRegion, UnsupportedPixelFormat
from .grid import PixelRect

logger = logging.getLogger(__name__)

LUMA_WEIGHTS: Tuple[float, float, float] = (0.2125, 0.7154, 0.0721)

# PIL modes we hand back to Pillow for an 8-bit RGB conversion.
_CONVERTIBLE_MODES = {"1", "P", "PA", "CMYK", "YCbCr", "RGBX"}

ImageInput = Union["PixelBuffer", Image.Image, np.ndarray]


def _round_half_away_from_zero(value: float) -> int:
    if value >= 0:
        return int(math.floor(value + 0.5))
    return -int(math.floor(-value + 0.5))


def _pil_to_array(image: Image.Image) -> np.ndarray:
    mode = image.mode
    if mode in ("L", "RGB"):
        return np.asarray(image, dtype=np.uint8)
    if mode == "LA":
        return np.asarray(image, dtype=np.uint8)[..., 0]
    if mode == "RGBA":
        return np.asarray(image, dtype=np.uint8)[..., :3]
    if mode in _CONVERTIBLE_MODES:
        try:
            return np.asarray(image.convert("RGB"), dtype=np.uint8)
        except (ValueError, OSError) as exc:
            raise UnsupportedPixelFormat(
                f"Cannot convert PIL mode {mode!r} to RGB: {exc}"
            ) from exc
    raise UnsupportedPixelFormat(f"Unsupported PIL image mode: {mode!r}")


def _ndarray_to_array(array: np.ndarray) -> np.ndarray:
    if array.dtype != np.uint8:
        raise UnsupportedPixelFormat(
            f"Pixel arrays must be uint8, got dtype {array.dtype}"
        )
    if array.ndim == 2:
        return array
    if array.ndim == 3:
        channels = array.shape[2]
        if channels == 1:
            return array[..., 0]
        if channels == 3:
            return array
        if channels == 4:
            return array[..., :3]
    raise UnsupportedPixelFormat(
        f"Pixel arrays must be shaped (H, W), (H, W, 1), (H, W, 3) or (H, W, 4), "
        f"got {array.shape}"
    )


class PixelBuffer:
    """Read-only view over decoded 8-bit pixels.

    Holds either a single luma plane ``(H, W)`` or an RGB array ``(H, W, 3)``.
    :meth:`region` returns another buffer sharing the same memory, so
    cropping never copies pixels.
    """

    __slots__ = ("_pixels",)

    def __init__(self, pixels: np.ndarray) -> None:
        self._pixels = pixels

    @classmethod
    def from_image(cls, image: ImageInput) -> "PixelBuffer":
        """Wrap a PIL image, a uint8 numpy array or an existing buffer."""
        if isinstance(image, PixelBuffer):
            return image
        if isinstance(image, Image.Image):
            pixels = _pil_to_array(image)
        elif isinstance(image, np.ndarray):
            pixels = _ndarray_to_array(image)
        else:
            raise UnsupportedPixelFormat(
                f"Expected a PIL image or numpy array, got {type(image).__name__}"
            )
        pixels = pixels.view()
        pixels.flags.writeable = False
        return cls(pixels)

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def is_grayscale(self) -> bool:
        return self._pixels.ndim == 2

    def region(self, rect: PixelRect) -> "PixelBuffer":
        """Return the sub-buffer covered by ``rect``."""
        if rect.width <= 0 or rect.height <= 0:
            raise InvalidRegion(
                f"Region {rect.width}x{rect.height} at ({rect.x}, {rect.y}) has zero area"
            )
        left, top, right, bottom = rect.as_box()
        if left < 0 or top < 0 or right > self.width or bottom > self.height:
            raise InvalidRegion(
                f"Region {rect.as_box()} exceeds image bounds {self.width}x{self.height}"
            )
        return PixelBuffer(self._pixels[top:bottom, left:right])

    def luma_sum(self) -> float:
        """Sum of luma over all pixels, accumulated without byte overflow."""
        if self.is_grayscale:
            return float(self._pixels.sum(dtype=np.int64))
        channel_sums = self._pixels.sum(axis=(0, 1), dtype=np.int64)
        return float(
            LUMA_WEIGHTS[0] * float(channel_sums[0])
            + LUMA_WEIGHTS[1] * float(channel_sums[1])
            + LUMA_WEIGHTS[2] * float(channel_sums[2])
        )

    def __repr__(self) -> str:
        kind = "L" if self.is_grayscale else "RGB"
        return f"PixelBuffer({self.width}x{self.height}, {kind})"


def brightness(region: ImageInput, rect: Optional[PixelRect] = None) -> int:
    """Return the mean luma of ``region`` (optionally cropped to ``rect``) in 0-255."""
    buffer = PixelBuffer.from_image(region)
    if rect is not None:
        buffer = buffer.region(rect)
    pixel_count = buffer.width * buffer.height
    if pixel_count == 0:
        raise InvalidRegion(
            f"Cannot measure brightness of a {buffer.width}x{buffer.height} region"
        )
    mean = buffer.luma_sum() / pixel_count
    return min(255, max(0, _round_half_away_from_zero(mean)))


def load_image(path: Path) -> Image.Image:
    """Decode an image file into memory with Pillow."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Image not found: {path}")
    try:
        with Image.open(path) as img:
            img.load()
            loaded = img.copy()
    except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as exc:
        raise UnsupportedPixelFormat(f"Unable to decode image {path}: {exc}") from exc
    logger.debug("Loaded %s (%s, %dx%d)", path, loaded.mode, *loaded.size)
    return loaded


def to_pil_image(image: ImageInput) -> Image.Image:
    """Return ``image`` as a PIL image without modifying the source."""
    if isinstance(image, Image.Image):
        return image
    if isinstance(image, PixelBuffer):
        raise UnsupportedPixelFormat(
            "PixelBuffer holds luma-ready pixels only; pass the decoded image instead"
        )
    if isinstance(image, np.ndarray):
        if image.dtype != np.uint8:
            raise UnsupportedPixelFormat(
                f"Pixel arrays must be uint8, got dtype {image.dtype}"
            )
        if image.ndim == 3 and image.shape[2] == 1:
            image = image[..., 0]
        if image.ndim == 2 or (image.ndim == 3 and image.shape[2] in (3, 4)):
            return Image.fromarray(np.ascontiguousarray(image))
        raise UnsupportedPixelFormat(f"Unsupported pixel array shape {image.shape}")
    raise UnsupportedPixelFormat(
        f"Expected a PIL image or numpy array, got {type(image).__name__}"
    )


__all__ = [
    "LUMA_WEIGHTS",
    "ImageInput",
    "PixelBuffer",
    "brightness",
    "load_image",
    "to_pil_image",
]
