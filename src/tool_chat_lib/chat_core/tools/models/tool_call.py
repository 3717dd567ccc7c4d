"""Data models for tool execution."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ExecutionContext(BaseModel):
    """Per-turn context handed to every tool invocation.

    Attributes:
        focus_id: Id of the focus document (e.g. the open paper), if any.
        session_id: Chat session the turn belongs to.
        user_id: Optional user id.
    """

    model_config = ConfigDict(frozen=True)

    focus_id: Optional[str] = None
    session_id: str
    user_id: Optional[str] = None

    @property
    def has_focus(self) -> bool:
        return self.focus_id is not None


class ToolOutcome(BaseModel):
    """Result a tool returns for a single invocation."""

    model_config = ConfigDict(frozen=True)

    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def ok(cls, data: Any = None, metadata: Optional[Dict[str, Any]] = None) -> "ToolOutcome":
        return cls(success=True, data=data, metadata=metadata or {})

    @classmethod
    def fail(cls, error: str, metadata: Optional[Dict[str, Any]] = None) -> "ToolOutcome":
        return cls(success=False, error=error, metadata=metadata or {})


class ExecutionRecord(BaseModel):
    """Outcome of one tool call attempt, as collected into a turn result.

    Attributes:
        tool_name: Name of the tool the model asked for.
        success: Whether the call succeeded.
        data: Tool-specific payload on success.
        error: Human-readable failure reason.
        metadata: Additional tool-supplied metadata.
        duration_ms: Wall-clock time spent inside the tool, in milliseconds.
    """

    model_config = ConfigDict(frozen=True)

    tool_name: str
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    duration_ms: int = 0

    @classmethod
    def from_outcome(cls, tool_name: str, outcome: ToolOutcome, duration_ms: int) -> "ExecutionRecord":
        return cls(
            tool_name=tool_name,
            success=outcome.success,
            data=outcome.data,
            error=outcome.error,
            metadata=dict(outcome.metadata),
            duration_ms=duration_ms,
        )

    @classmethod
    def failure(cls, tool_name: str, error: str) -> "ExecutionRecord":
        return cls(tool_name=tool_name, success=False, error=error)

    def to_summary(self) -> Dict[str, Any]:
        """Build a JSON-safe summary for API responses.

        Payload values that are not plain JSON types are converted to strings.

        Returns:
            A dictionary with the tool name, status, data, error and duration.
        """
        return {
            "toolName": self.tool_name,
            "success": self.success,
            "data": _to_json_safe(self.data),
            "error": self.error,
            "durationMs": self.duration_ms,
        }


def _to_json_safe(value: Any) -> Any:
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, dict):
        return {str(k): _to_json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_json_safe(v) for v in value]
    return str(value)
