"""Collect concrete completion model clients."""

from .openai_api import OpenAICompletionClient

__all__ = ["OpenAICompletionClient"]
