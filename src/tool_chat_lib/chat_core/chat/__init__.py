"""Chat orchestration over the tool-calling protocol."""

from .events import (
    StreamEvent,
    StartEvent,
    DeltaEvent,
    ToolCallStartedEvent,
    ToolCallFinishedEvent,
    DoneEvent,
    ErrorEvent,
)
from .models import TurnResult, FocusEntity, FocusResolver
from .orchestrator import ChatOrchestrator, ITERATION_LIMIT_NOTE
from .prompts import ToolCallingPrompts, ChatExample, FEW_SHOT_EXAMPLES

__all__ = [
    "StreamEvent",
    "StartEvent",
    "DeltaEvent",
    "ToolCallStartedEvent",
    "ToolCallFinishedEvent",
    "DoneEvent",
    "ErrorEvent",
    "TurnResult",
    "FocusEntity",
    "FocusResolver",
    "ChatOrchestrator",
    "ITERATION_LIMIT_NOTE",
    "ToolCallingPrompts",
    "ChatExample",
    "FEW_SHOT_EXAMPLES",
]
