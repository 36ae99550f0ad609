"""N x N grid partitioning of image dimensions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .errors import InvalidGridSize, InvalidRegion


@dataclass(frozen=True)
class PixelRect:
    """Integer pixel rectangle, origin at the top-left corner."""

    x: int
    y: int
    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height

    def as_box(self) -> Tuple[int, int, int, int]:
        """Return ``(left, top, right, bottom)`` with exclusive right/bottom."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)


@dataclass(frozen=True)
class NormalizedRect:
    """Resolution-independent rectangle with every component in ``[0, 1]``."""

    x: float
    y: float
    w: float
    h: float

    def denormalize(self, width: int, height: int) -> Tuple[int, int, int, int]:
        """Scale to pixel space as ``(left, top, right, bottom)``, right/bottom exclusive."""
        left = int(round(self.x * width))
        top = int(round(self.y * height))
        right = int(round((self.x + self.w) * width))
        bottom = int(round((self.y + self.h) * height))
        return left, top, right, bottom

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "w": self.w, "h": self.h}


@dataclass(frozen=True)
class GridCell:
    """One partition cell: its grid position, pixel rect and normalized rect."""

    row: int
    col: int
    pixel_rect: PixelRect
    region: NormalizedRect


def validate_grid_size(grid_size: object) -> int:
    """Return ``grid_size`` as an int, raising :class:`InvalidGridSize` otherwise."""
    if isinstance(grid_size, bool) or not isinstance(grid_size, int):
        raise InvalidGridSize(grid_size)
    if grid_size <= 0:
        raise InvalidGridSize(grid_size)
    return grid_size


def partition(width: int, height: int, grid_size: int) -> List[GridCell]:
    """Divide ``width x height`` pixels into ``grid_size**2`` cells, row-major.

    Cell dimensions use integer division; the remainder pixels are absorbed
    by the last column and the last row so every pixel belongs to exactly
    one cell. Normalized rects are always exactly ``1/grid_size`` square and
    tile the unit square regardless of the pixel remainder.
    """
    n = validate_grid_size(grid_size)
    if width <= 0 or height <= 0:
        raise InvalidRegion(f"Cannot partition a {width}x{height} image")

    cell_width = width // n
    cell_height = height // n

    cells: List[GridCell] = []
    for row in range(n):
        for col in range(n):
            x = col * cell_width
            y = row * cell_height
            w = cell_width if col < n - 1 else width - x
            h = cell_height if row < n - 1 else height - y
            cells.append(
                GridCell(
                    row=row,
                    col=col,
                    pixel_rect=PixelRect(x, y, w, h),
                    region=NormalizedRect(
                        x=col / n,
                        y=row / n,
                        w=1.0 / n,
                        h=1.0 / n,
                    ),
                )
            )
    return cells


__all__ = [
    "PixelRect",
    "NormalizedRect",
    "GridCell",
    "partition",
    "validate_grid_size",
]
