"""Public exports for the core tool chat abstractions and utilities."""

from .base import CompletionClient
from .config import ChatSettings
from .exceptions import (
    ChatToolError,
    ToolRegistrationError,
    ToolNotFoundError,
    ToolValidationError,
    ArgumentCoercionError,
    ToolExecutionError,
    ModelCallError,
)
from .logger import get_logger, setup_logging
from .messages import BaseMessage, UserMessage, AssistantMessage, SystemMessage
from .tools import (
    ArgumentValue,
    CoercedArguments,
    ParameterType,
    ToolParameter,
    ToolDefinition,
    ExecutionContext,
    ToolOutcome,
    ExecutionRecord,
    ChatTool,
    FunctionTool,
    ParsedCall,
    ParseResult,
    ToolCallParser,
    ToolRegistry,
    ArgumentCoercer,
    ToolExecutor,
    ScrollToLocationTool,
)
from .usage_log import UsageLog, UsageLogEntry, UsageSink, UsageStats
from .chat import (
    ChatOrchestrator,
    TurnResult,
    FocusEntity,
    FocusResolver,
    ToolCallingPrompts,
    StreamEvent,
    StartEvent,
    DeltaEvent,
    ToolCallStartedEvent,
    ToolCallFinishedEvent,
    DoneEvent,
    ErrorEvent,
)

__all__ = [
    "CompletionClient",
    "ChatSettings",
    "ChatToolError",
    "ToolRegistrationError",
    "ToolNotFoundError",
    "ToolValidationError",
    "ArgumentCoercionError",
    "ToolExecutionError",
    "ModelCallError",
    "get_logger",
    "setup_logging",
    "BaseMessage",
    "UserMessage",
    "AssistantMessage",
    "SystemMessage",
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
    "ParsedCall",
    "ParseResult",
    "ToolCallParser",
    "ToolRegistry",
    "ArgumentCoercer",
    "ToolExecutor",
    "ScrollToLocationTool",
    "UsageLog",
    "UsageLogEntry",
    "UsageSink",
    "UsageStats",
    "ChatOrchestrator",
    "TurnResult",
    "FocusEntity",
    "FocusResolver",
    "ToolCallingPrompts",
    "StreamEvent",
    "StartEvent",
    "DeltaEvent",
    "ToolCallStartedEvent",
    "ToolCallFinishedEvent",
    "DoneEvent",
    "ErrorEvent",
]
