"""Provider-agnostic message models for chat history."""

from pydantic import BaseModel
from abc import ABC


class BaseMessage(ABC, BaseModel):
    """Base model for a message in a conversation.

    Attributes:
        role: Role associated with the message.
        content: Text payload of the message.
    """

    role: str
    content: str


class SystemMessage(BaseMessage):
    """Message authored by the system to steer behavior."""

    role: str = "system"


class UserMessage(BaseMessage):
    """Message authored by an end user."""

    role: str = "user"


class AssistantMessage(BaseMessage):
    """Message authored by the assistant."""

    role: str = "assistant"
