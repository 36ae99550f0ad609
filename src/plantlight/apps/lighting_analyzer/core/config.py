"""Configuration helpers for the lighting analyzer."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, Optional

import tomllib

from plantlight.libs.vision.levels import (
    HIGH_THRESHOLD_DEFAULT,
    LOW_THRESHOLD_DEFAULT,
    Thresholds,
)

from .analyzer import DEFAULT_GRID_SIZE
from .overlay import OVERLAY_ALPHA_DEFAULT

logger = logging.getLogger(__name__)

_CONFIG_ENV_PREFIX = "PLANTLIGHT_LIGHTING__"
_API_KEY_ENV = "OPENAI_API_KEY"


def _find_pyproject(start: Optional[Path] = None) -> Optional[Path]:
    """Locate the closest ``pyproject.toml`` relative to *start*."""

    current = (start or Path.cwd()).resolve()
    for candidate in [current, *current.parents]:
        pyproject = candidate / "pyproject.toml"
        if pyproject.exists():
            return pyproject
    return None


def _coerce_int(value: object, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _coerce_float(value: object, default: float) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _coerce_str(value: object, default: str) -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text or default


@dataclass(frozen=True)
class LightingConfig:
    """Fully resolved runtime configuration for an analyzer invocation."""

    grid_size: int = DEFAULT_GRID_SIZE
    low_threshold: float = LOW_THRESHOLD_DEFAULT
    high_threshold: float = HIGH_THRESHOLD_DEFAULT
    overlay_alpha: float = OVERLAY_ALPHA_DEFAULT
    base_url: str = "https://api.openai.com/v1"
    model: str = "gpt-4o"
    api_key: str = "EMPTY"
    timeout: int = 120
    max_tokens: int = 1000

    @property
    def thresholds(self) -> Thresholds:
        return Thresholds(low=self.low_threshold, high=self.high_threshold)


def _load_pyproject_settings(start: Optional[Path]) -> Dict[str, object]:
    pyproject = _find_pyproject(start)
    if not pyproject:
        return {}

    try:
        with pyproject.open("rb") as handle:
            data = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning("Ignoring unreadable %s: %s", pyproject, exc)
        return {}

    tool_cfg = data.get("tool", {}).get("plantlight", {})
    if not isinstance(tool_cfg, dict):
        return {}

    lighting_cfg = tool_cfg.get("lighting")
    return dict(lighting_cfg) if isinstance(lighting_cfg, dict) else {}


def _load_env_settings() -> Dict[str, object]:
    values: Dict[str, object] = {}
    for env_key, env_value in os.environ.items():
        if not env_key.startswith(_CONFIG_ENV_PREFIX):
            continue
        key = env_key[len(_CONFIG_ENV_PREFIX) :].lower()
        values[key] = env_value
    return values


def load_config(start: Optional[Path] = None, **overrides: object) -> LightingConfig:
    """Resolve configuration: pyproject defaults, then environment, then overrides.

    ``None`` overrides are ignored so CLI options that were not supplied fall
    through to the configured defaults.
    """

    raw = _load_pyproject_settings(start)
    raw.update(_load_env_settings())
    raw.update({key: value for key, value in overrides.items() if value is not None})

    defaults = LightingConfig()
    api_key = raw.get("api_key") or os.environ.get(_API_KEY_ENV)

    config = replace(
        defaults,
        grid_size=_coerce_int(raw.get("grid_size"), defaults.grid_size),
        low_threshold=_coerce_float(raw.get("low_threshold"), defaults.low_threshold),
        high_threshold=_coerce_float(
            raw.get("high_threshold"), defaults.high_threshold
        ),
        overlay_alpha=_coerce_float(raw.get("overlay_alpha"), defaults.overlay_alpha),
        base_url=_coerce_str(raw.get("base_url"), defaults.base_url),
        model=_coerce_str(raw.get("model"), defaults.model),
        api_key=_coerce_str(api_key, defaults.api_key),
        timeout=_coerce_int(raw.get("timeout"), defaults.timeout),
        max_tokens=_coerce_int(raw.get("max_tokens"), defaults.max_tokens),
    )
    return config


__all__ = ["LightingConfig", "load_config"]
