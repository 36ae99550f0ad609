"""Prompt text for plant recommendation requests."""

from __future__ import annotations

from plantlight.libs.vision.levels import LightLevel

RECOMMENDATION_COUNT = 5

RECOMMENDATION_TEMPLATE = """I need plant recommendations for a room with {label} conditions.

Based on the image and the lighting level ({label}), please recommend {count} plants that would thrive in this environment.

For each plant, provide:
1. Common name
2. Scientific name
3. Brief care instructions (watering, soil, etc.)
4. A short description of why it's suitable for this lighting condition

Format your response as a JSON object with this structure:
{{
  "recommendations": [
    {{
      "commonName": "Plant name",
      "scientificName": "Scientific name",
      "careInstructions": "Care details",
      "suitabilityReason": "Why it's suitable"
    }},
    ...
  ]
}}

Only respond with the JSON object, no other text."""


def build_prompt(level: LightLevel, count: int = RECOMMENDATION_COUNT) -> str:
    return RECOMMENDATION_TEMPLATE.format(label=level.label, count=count)


__all__ = ["RECOMMENDATION_COUNT", "RECOMMENDATION_TEMPLATE", "build_prompt"]
