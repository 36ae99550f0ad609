"""Client that asks a vision chat model for plants suited to a room.

The request carries the room photo as a base64 JPEG and the overall light
level label. Replies are expected to be a JSON object, possibly wrapped in a
markdown code fence; when the reply cannot be parsed the fixed fallback list
for the light level is returned instead. Transport failures are not masked.
"""

from __future__ import annotations

import base64
import io
import json
import logging
import re
from typing import Any, Dict, Optional

import requests

from plantlight.libs.vision.brightness import ImageInput, to_pil_image
from plantlight.libs.vision.levels import LightLevel
from plantlight.libs.vlm import ChatCompletionClient, VLMBackendError

from .models import (
    PlantRecommendation,
    PlantRecommendations,
    RecommendationParseError,
    RecommendationServiceError,
    fallback_recommendations,
)
from .prompts import build_prompt

logger = logging.getLogger(__name__)

JPEG_QUALITY = 70

_FENCE_RE = re.compile(r"```(?:json)?[ \t]*\n?(.*?)(?:```|$)", re.DOTALL | re.IGNORECASE)


def encode_image(image: ImageInput, quality: int = JPEG_QUALITY) -> str:
    """Encode ``image`` as a base64 JPEG string."""
    pil_image = to_pil_image(image)
    if pil_image.mode != "RGB":
        pil_image = pil_image.convert("RGB")
    buffer = io.BytesIO()
    pil_image.save(buffer, format="JPEG", quality=quality)
    return base64.b64encode(buffer.getvalue()).decode("utf-8")


def strip_code_fence(content: str) -> str:
    """Return the body of the first markdown code fence, or ``content`` itself."""
    text = content.strip()
    match = _FENCE_RE.search(text)
    if match:
        return match.group(1).strip()
    return text


def parse_recommendations(content: str, level: LightLevel) -> PlantRecommendations:
    """Decode a model reply into :class:`PlantRecommendations`."""
    text = strip_code_fence(content)
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise RecommendationParseError(f"Reply is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise RecommendationParseError("Reply must be a JSON object")
    items = payload.get("recommendations")
    if not isinstance(items, list):
        raise RecommendationParseError("Reply has no 'recommendations' list")
    if not items:
        raise RecommendationParseError("Reply contains no recommendations")

    return PlantRecommendations(
        level=level,
        recommendations=tuple(PlantRecommendation.from_json(item) for item in items),
        raw_response=content,
    )


class PlantRecommender:
    """Facade over a chat backend that returns plant recommendations."""

    def __init__(
        self,
        *,
        base_url: str = "https://api.openai.com/v1",
        model_name: str = "gpt-4o",
        api_key: str = "EMPTY",
        timeout: int = 120,
        max_tokens: int = 1000,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.model_name = model_name
        self.max_tokens = max_tokens
        self._client = ChatCompletionClient(
            base_url, api_key=api_key, timeout=timeout, session=session
        )
        self.last_error: Optional[str] = None

    @classmethod
    def from_config(cls, config) -> "PlantRecommender":
        """Build from a :class:`~plantlight.apps.lighting_analyzer.core.config.LightingConfig`."""
        return cls(
            base_url=config.base_url,
            model_name=config.model,
            api_key=config.api_key,
            timeout=config.timeout,
            max_tokens=config.max_tokens,
        )

    def build_payload(self, encoded_image: str, level: LightLevel) -> Dict[str, Any]:
        return {
            "model": self.model_name,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": build_prompt(level)},
                        {
                            "type": "image_url",
                            "image_url": {
                                "url": f"data:image/jpeg;base64,{encoded_image}",
                                "detail": "high",
                            },
                        },
                    ],
                }
            ],
            "max_tokens": self.max_tokens,
            "stream": False,
        }

    def recommend(self, image: ImageInput, level: LightLevel) -> PlantRecommendations:
        """Request recommendations for ``level``; unparseable replies use the fallback."""
        payload = self.build_payload(encode_image(image), level)

        try:
            response = self._client.post(payload)
        except VLMBackendError as exc:
            self.last_error = f"Chat request failed: {exc}"
            raise RecommendationServiceError(self.last_error) from exc

        if response.status_code != 200:
            self.last_error = f"API error {response.status_code}: {response.text[:200]}"
            raise RecommendationServiceError(self.last_error)

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            self.last_error = f"Malformed chat completion response: {exc}"
            raise RecommendationServiceError(self.last_error) from exc

        if not isinstance(content, str) or not content.strip():
            self.last_error = "Empty response from recommendation backend"
            raise RecommendationServiceError(self.last_error)

        self.last_error = None
        try:
            return parse_recommendations(content, level)
        except RecommendationParseError as exc:
            logger.warning(
                "Falling back to default %s recommendations: %s", level.value, exc
            )
            return fallback_recommendations(level)

    def close(self) -> None:
        self._client.close()


__all__ = [
    "JPEG_QUALITY",
    "encode_image",
    "strip_code_fence",
    "parse_recommendations",
    "PlantRecommender",
]
