"""Expose the message model types used for conversation history."""

from .models import BaseMessage, UserMessage, AssistantMessage, SystemMessage

__all__ = [
    "BaseMessage",
    "UserMessage",
    "AssistantMessage",
    "SystemMessage",
]
