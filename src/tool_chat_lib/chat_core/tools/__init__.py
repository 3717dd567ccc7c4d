from .models import (
    ArgumentValue,
    CoercedArguments,
    ParameterType,
    ToolParameter,
    ToolDefinition,
    ExecutionContext,
    ToolOutcome,
    ExecutionRecord,
)
from .base import ChatTool, FunctionTool
from .parsing import INVALID_CALL_NAME, ParsedCall, ParseResult, ToolCallParser
from .registry import ToolRegistry
from .schema import ArgumentCoercer, ToolParameterFactory
from .execution import ToolExecutor
from .builtin import ScrollToLocationTool

__all__ = [
    "ArgumentValue",
    "CoercedArguments",
    "ParameterType",
    "ToolParameter",
    "ToolDefinition",
    "ExecutionContext",
    "ToolOutcome",
    "ExecutionRecord",
    "ChatTool",
    "FunctionTool",
    "INVALID_CALL_NAME",
    "ParsedCall",
    "ParseResult",
    "ToolCallParser",
    "ToolRegistry",
    "ArgumentCoercer",
    "ToolParameterFactory",
    "ToolExecutor",
    "ScrollToLocationTool",
]
