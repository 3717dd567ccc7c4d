"""Tool-related data models."""

from .models import ArgumentValue, CoercedArguments, ParameterType, ToolParameter, ToolDefinition
from .tool_call import ExecutionContext, ToolOutcome, ExecutionRecord

__all__ = [
    "ArgumentValue",
    "CoercedArguments",
    "ParameterType",
    "ToolParameter",
    "ToolDefinition",
    "ExecutionContext",
    "ToolOutcome",
    "ExecutionRecord",
]
