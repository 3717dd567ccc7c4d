"""Tool Chat Library - tool calling for plain text-completion models."""

from .chat_core import (
    ChatOrchestrator,
    ChatSettings,
    ChatTool,
    CompletionClient,
    ExecutionContext,
    ExecutionRecord,
    FunctionTool,
    ParameterType,
    StreamEvent,
    ToolCallParser,
    ToolDefinition,
    ToolExecutor,
    ToolOutcome,
    ToolParameter,
    ToolRegistry,
    TurnResult,
    UsageLog,
    UserMessage,
    AssistantMessage,
)
from .llm_impl import OpenAICompletionClient

__all__ = [
    "ChatOrchestrator",
    "ChatSettings",
    "ChatTool",
    "CompletionClient",
    "ExecutionContext",
    "ExecutionRecord",
    "FunctionTool",
    "ParameterType",
    "StreamEvent",
    "ToolCallParser",
    "ToolDefinition",
    "ToolExecutor",
    "ToolOutcome",
    "ToolParameter",
    "ToolRegistry",
    "TurnResult",
    "UsageLog",
    "UserMessage",
    "AssistantMessage",
    "OpenAICompletionClient",
]
