"""Light level classification from mean brightness."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import Tuple

from .errors import InvalidThresholds


@total_ordering
class LightLevel(Enum):
    """Three-valued light level, ordered ``LOW < MEDIUM < HIGH``."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _LEVEL_ORDER.index(self)

    @property
    def label(self) -> str:
        """Human-readable name, e.g. ``"Low Light"``."""
        return _LABELS[self]

    @property
    def description(self) -> str:
        """Plant-suitability text used when building recommendations."""
        return _DESCRIPTIONS[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, LightLevel):
            return NotImplemented
        return self.rank < other.rank

    @classmethod
    def parse(cls, value: str) -> "LightLevel":
        """Accept either the enum value (``"low"``) or the label (``"Low Light"``)."""
        text = value.strip().lower()
        for level in cls:
            if text in (level.value, level.label.lower()):
                return level
        raise ValueError(f"Unknown light level: {value!r}")


_LEVEL_ORDER: Tuple[LightLevel, ...] = (
    LightLevel.LOW,
    LightLevel.MEDIUM,
    LightLevel.HIGH,
)

_LABELS = {
    LightLevel.LOW: "Low Light",
    LightLevel.MEDIUM: "Medium Light",
    LightLevel.HIGH: "High Light",
}

_DESCRIPTIONS = {
    LightLevel.LOW: (
        "Perfect for shade-loving plants like Snake Plants, ZZ Plants, "
        "and Peace Lilies."
    ),
    LightLevel.MEDIUM: (
        "Great for plants that prefer indirect light such as Pothos, "
        "Philodendrons, and Spider Plants."
    ),
    LightLevel.HIGH: (
        "Ideal for sun-loving plants like Succulents, Cacti, and Fiddle Leaf Figs."
    ),
}


LOW_THRESHOLD_DEFAULT = 85.0
HIGH_THRESHOLD_DEFAULT = 170.0


@dataclass(frozen=True)
class Thresholds:
    """Classification boundaries on the 0-255 brightness scale."""

    low: float = LOW_THRESHOLD_DEFAULT
    high: float = HIGH_THRESHOLD_DEFAULT

    def __post_init__(self) -> None:
        if not (0.0 <= self.low < self.high <= 255.0):
            raise InvalidThresholds(
                f"Thresholds must satisfy 0 <= low < high <= 255, "
                f"got low={self.low!r} high={self.high!r}"
            )


DEFAULT_THRESHOLDS = Thresholds()


def classify(brightness: float, thresholds: Thresholds = DEFAULT_THRESHOLDS) -> LightLevel:
    """Map a brightness value to a :class:`LightLevel`.

    ``brightness < low`` is LOW, ``low <= brightness < high`` is MEDIUM and
    anything at or above ``high`` is HIGH.
    """
    if brightness < thresholds.low:
        return LightLevel.LOW
    if brightness < thresholds.high:
        return LightLevel.MEDIUM
    return LightLevel.HIGH


__all__ = [
    "LightLevel",
    "Thresholds",
    "DEFAULT_THRESHOLDS",
    "LOW_THRESHOLD_DEFAULT",
    "HIGH_THRESHOLD_DEFAULT",
    "classify",
]
