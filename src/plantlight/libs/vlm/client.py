"""HTTP client for OpenAI-compatible ``/chat/completions`` endpoints.

Hosted OpenAI and self-hosted servers (vLLM, LMDeploy) share the same chat
surface, so one client covers all of them; only ``base_url`` differs.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)

CHAT_COMPLETIONS_PATH = "/chat/completions"


class VLMBackendError(RuntimeError):
    """Raised when a chat request cannot reach the server."""


class ChatCompletionClient:
    """Posts chat completion payloads over a shared :class:`requests.Session`."""

    def __init__(
        self,
        base_url: str,
        *,
        api_key: str = "EMPTY",
        timeout: int = 120,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.endpoint = base_url.rstrip("/") + CHAT_COMPLETIONS_PATH
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            }
        )

    def post(self, payload: Dict[str, Any]) -> requests.Response:
        """Send ``payload`` and return the raw response, whatever its status."""
        logger.debug("POST %s (model=%s)", self.endpoint, payload.get("model"))
        try:
            return self.session.post(self.endpoint, json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            raise VLMBackendError(f"{self.endpoint}: {exc}") from exc

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "ChatCompletionClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
