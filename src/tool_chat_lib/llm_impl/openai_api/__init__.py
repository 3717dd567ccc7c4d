"""Expose the OpenAI-compatible completion client."""

from .client import OpenAICompletionClient

__all__ = ["OpenAICompletionClient"]
