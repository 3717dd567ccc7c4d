"""
Custom exception classes for the tool chat system.

This module defines the exceptions raised while registering tools, coercing
model-supplied arguments and talking to the completion model. Errors that
happen while a single tool call is handled are converted into failed
execution records by the executor and never reach the caller.
"""


class ChatToolError(Exception):
    """Base exception for all tool chat errors."""

    pass


class ToolRegistrationError(ChatToolError):
    """Raised when there is an error registering a tool."""

    pass


class ToolNotFoundError(ChatToolError):
    """Raised when a requested tool is not found in the registry."""

    pass


class ToolValidationError(ChatToolError):
    """Raised when a tool definition is invalid."""

    pass


class ArgumentCoercionError(ChatToolError):
    """Raised when model-supplied arguments do not match a tool's parameter schema."""

    pass


class ToolExecutionError(ChatToolError):
    """Raised by a tool to report an expected failure.

    The executor turns it into a failed record and logs it without a traceback.
    """

    pass


class ModelCallError(ChatToolError):
    """Raised when the completion model call fails. Fatal to the current turn."""

    pass
