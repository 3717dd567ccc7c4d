"""Re-export the completion client interface shared by all providers."""

from .base import CompletionClient

__all__ = [
    "CompletionClient",
]
