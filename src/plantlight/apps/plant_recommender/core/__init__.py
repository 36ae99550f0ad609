"""Plant recommendation primitives built on the lighting analysis output."""

from .models import (
    PlantRecommendation,
    PlantRecommendations,
    PlantType,
    RecommendationError,
    RecommendationParseError,
    RecommendationServiceError,
    fallback_recommendations,
    plant_types_for,
)
from .prompts import build_prompt
from .recommender import (
    PlantRecommender,
    encode_image,
    parse_recommendations,
    strip_code_fence,
)

__all__ = [
    "PlantRecommendation",
    "PlantRecommendations",
    "PlantType",
    "RecommendationError",
    "RecommendationParseError",
    "RecommendationServiceError",
    "fallback_recommendations",
    "plant_types_for",
    "build_prompt",
    "PlantRecommender",
    "encode_image",
    "parse_recommendations",
    "strip_code_fence",
]
