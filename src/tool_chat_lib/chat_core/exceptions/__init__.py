"""Export the exception hierarchy used across registration, execution and model calls."""

from .exceptions import (
    ChatToolError,
    ToolRegistrationError,
    ToolNotFoundError,
    ToolValidationError,
    ArgumentCoercionError,
    ToolExecutionError,
    ModelCallError,
)

__all__ = [
    "ChatToolError",
    "ToolRegistrationError",
    "ToolNotFoundError",
    "ToolValidationError",
    "ArgumentCoercionError",
    "ToolExecutionError",
    "ModelCallError",
]
