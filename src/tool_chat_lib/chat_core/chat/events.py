"""Events emitted while a chat turn is streamed."""

import json
from typing import Annotated, Any, ClassVar, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ..tools.models import ExecutionRecord


class _BaseEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Name of the server-sent event carrying this event.
    sse_event: ClassVar[str] = ""

    @property
    def is_terminal(self) -> bool:
        return False

    def payload(self) -> Dict[str, Any]:
        return {}

    def to_sse(self) -> str:
        """Render the event as a server-sent-events frame."""
        return f"event: {self.sse_event}\ndata: {json.dumps(self.payload())}\n\n"


class StartEvent(_BaseEvent):
    sse_event: ClassVar[str] = "start"
    type: Literal["start"] = "start"


class DeltaEvent(_BaseEvent):
    """Text of one model response."""

    sse_event: ClassVar[str] = "delta"
    type: Literal["delta"] = "delta"
    text: str

    def payload(self) -> Dict[str, Any]:
        return {"content": self.text}


class ToolCallStartedEvent(_BaseEvent):
    sse_event: ClassVar[str] = "tool_call"
    type: Literal["tool_call_started"] = "tool_call_started"
    tool_name: str

    def payload(self) -> Dict[str, Any]:
        return {"toolName": self.tool_name}


class ToolCallFinishedEvent(_BaseEvent):
    sse_event: ClassVar[str] = "tool_result"
    type: Literal["tool_call_finished"] = "tool_call_finished"
    tool_name: str
    success: bool
    error: Optional[str] = None

    def payload(self) -> Dict[str, Any]:
        return {"toolName": self.tool_name, "success": self.success, "error": self.error}


class DoneEvent(_BaseEvent):
    """Final content and all tool executions of the turn."""

    sse_event: ClassVar[str] = "done"
    type: Literal["done"] = "done"
    content: str
    records: List[ExecutionRecord] = Field(default_factory=list)

    @property
    def is_terminal(self) -> bool:
        return True

    def payload(self) -> Dict[str, Any]:
        return {"content": self.content, "toolExecutions": [r.to_summary() for r in self.records]}


class ErrorEvent(_BaseEvent):
    sse_event: ClassVar[str] = "error"
    type: Literal["error"] = "error"
    message: str

    @property
    def is_terminal(self) -> bool:
        return True

    def payload(self) -> Dict[str, Any]:
        return {"error": self.message}


StreamEvent = Annotated[
    Union[StartEvent, DeltaEvent, ToolCallStartedEvent, ToolCallFinishedEvent, DoneEvent, ErrorEvent],
    Field(discriminator="type"),
]
