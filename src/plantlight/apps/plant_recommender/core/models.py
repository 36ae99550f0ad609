"""Plant recommendation records, fallbacks and placement categories."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Mapping, Tuple

from plantlight.libs.vision.levels import LightLevel


class RecommendationError(RuntimeError):
    """Base class for recommendation failures."""


class RecommendationParseError(RecommendationError):
    """Raised when a model reply cannot be decoded into recommendations."""


class RecommendationServiceError(RecommendationError):
    """Raised when the chat backend fails or returns no content."""


_JSON_KEYS = {
    "common_name": "commonName",
    "scientific_name": "scientificName",
    "care_instructions": "careInstructions",
    "suitability_reason": "suitabilityReason",
}


@dataclass(frozen=True)
class PlantRecommendation:
    common_name: str
    scientific_name: str
    care_instructions: str
    suitability_reason: str

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> "PlantRecommendation":
        """Build from the camelCase JSON object returned by the model."""
        if not isinstance(payload, Mapping):
            raise RecommendationParseError(
                f"Recommendation entries must be objects, got {type(payload).__name__}"
            )
        values: Dict[str, str] = {}
        for attr, key in _JSON_KEYS.items():
            value = payload.get(key)
            if not isinstance(value, str):
                raise RecommendationParseError(
                    f"Recommendation field '{key}' missing or not a string"
                )
            values[attr] = value
        return cls(**values)

    def to_json(self) -> Dict[str, str]:
        return {key: getattr(self, attr) for attr, key in _JSON_KEYS.items()}


@dataclass(frozen=True)
class PlantRecommendations:
    """Recommendations for one light level, with their provenance."""

    level: LightLevel
    recommendations: Tuple[PlantRecommendation, ...]
    is_fallback: bool = False
    raw_response: str = field(default="", repr=False)

    def to_json(self) -> Dict[str, Any]:
        return {"recommendations": [rec.to_json() for rec in self.recommendations]}


_FALLBACKS: Dict[LightLevel, Tuple[PlantRecommendation, ...]] = {
    LightLevel.LOW: (
        PlantRecommendation(
            "Snake Plant",
            "Sansevieria trifasciata",
            "Water every 2-3 weeks, allow soil to dry completely between waterings.",
            "Extremely tolerant of low light conditions and neglect.",
        ),
        PlantRecommendation(
            "ZZ Plant",
            "Zamioculcas zamiifolia",
            "Water sparingly, only when soil is completely dry.",
            "Thrives in low light and is very drought tolerant.",
        ),
        PlantRecommendation(
            "Peace Lily",
            "Spathiphyllum",
            "Keep soil consistently moist but not soggy.",
            "One of the few flowering plants that can bloom in low light.",
        ),
    ),
    LightLevel.MEDIUM: (
        PlantRecommendation(
            "Pothos",
            "Epipremnum aureum",
            "Allow top inch of soil to dry between waterings.",
            "Adaptable to various light conditions, perfect for medium light.",
        ),
        PlantRecommendation(
            "Spider Plant",
            "Chlorophytum comosum",
            "Keep soil lightly moist, tolerates occasional drying out.",
            "Thrives in medium indirect light and produces plantlets.",
        ),
        PlantRecommendation(
            "Philodendron",
            "Philodendron hederaceum",
            "Water when top inch of soil is dry.",
            "Adaptable to medium light and easy to care for.",
        ),
    ),
    LightLevel.HIGH: (
        PlantRecommendation(
            "Fiddle Leaf Fig",
            "Ficus lyrata",
            "Water when top 2 inches of soil are dry, rotate regularly for even growth.",
            "Thrives in bright, indirect light and makes a dramatic statement.",
        ),
        PlantRecommendation(
            "Succulents",
            "Various",
            "Water sparingly, only when soil is completely dry.",
            "Perfect for bright light conditions, drought-tolerant.",
        ),
        PlantRecommendation(
            "Bird of Paradise",
            "Strelitzia nicolai",
            "Keep soil consistently moist in growing season, less in winter.",
            "Loves bright light and adds a tropical feel to any space.",
        ),
    ),
}


def fallback_recommendations(level: LightLevel) -> PlantRecommendations:
    """Fixed list of three plants used when the model reply is unusable."""
    return PlantRecommendations(
        level=level, recommendations=_FALLBACKS[level], is_fallback=True
    )


class PlantType(Enum):
    """Plant categories offered for placement, keyed by display name."""

    SMALL_PLANT = "Small Plant"
    MEDIUM_PLANT = "Medium Plant"
    TALL_PLANT = "Tall Plant"
    HANGING_PLANT = "Hanging Plant"
    CACTUS = "Cactus"

    @property
    def suitable_for(self) -> FrozenSet[LightLevel]:
        return _SUITABILITY[self]


_SUITABILITY: Dict[PlantType, FrozenSet[LightLevel]] = {
    PlantType.SMALL_PLANT: frozenset(LightLevel),
    PlantType.MEDIUM_PLANT: frozenset({LightLevel.MEDIUM, LightLevel.HIGH}),
    PlantType.TALL_PLANT: frozenset({LightLevel.MEDIUM, LightLevel.HIGH}),
    PlantType.HANGING_PLANT: frozenset({LightLevel.LOW, LightLevel.MEDIUM}),
    PlantType.CACTUS: frozenset({LightLevel.HIGH}),
}


def plant_types_for(level: LightLevel) -> List[PlantType]:
    """Plant categories that can be placed in a room with ``level`` light."""
    return [plant for plant in PlantType if level in plant.suitable_for]


__all__ = [
    "RecommendationError",
    "RecommendationParseError",
    "RecommendationServiceError",
    "PlantRecommendation",
    "PlantRecommendations",
    "fallback_recommendations",
    "PlantType",
    "plant_types_for",
]
