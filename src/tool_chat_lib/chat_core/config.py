"""Runtime settings for the chat orchestrator."""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

_ENV_PREFIX = "TOOL_CHAT_"


class ChatSettings(BaseModel):
    """
    Tunables of the tool-calling loop.

    Attributes:
        max_iterations: Upper bound on model calls that execute tools within one turn.
        history_window: Number of most recent history messages included in the prompt.
        include_examples: Whether to append few-shot tool usage examples to the system prompt.
    """

    max_iterations: int = Field(default=5, ge=1)
    history_window: int = Field(default=10, ge=0)
    include_examples: bool = False

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "ChatSettings":
        """Build settings from ``TOOL_CHAT_*`` environment variables.

        A ``.env`` file is loaded first; variables already set in the environment win.

        Args:
            dotenv_path: Optional explicit path to a ``.env`` file.

        Returns:
            Settings with every unset variable left at its default.
        """
        load_dotenv(dotenv_path)

        values = {}
        for field_name in cls.model_fields:
            raw = os.getenv(f"{_ENV_PREFIX}{field_name.upper()}")
            if raw is not None and raw.strip() != "":
                values[field_name] = raw.strip()
        return cls.model_validate(values)
