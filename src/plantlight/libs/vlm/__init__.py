"""Shared helpers for talking to vision chat models."""

from .client import ChatCompletionClient, VLMBackendError

__all__ = ["ChatCompletionClient", "VLMBackendError"]
