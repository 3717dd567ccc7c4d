"""In-memory usage log for model calls and tool executions."""

import itertools
import threading
from datetime import datetime, timezone
from typing import Dict, List, Optional, Protocol

from pydantic import BaseModel, Field


class UsageSink(Protocol):
    """Fire-and-forget observability sink used by the tool executor."""

    def log(
        self,
        purpose: str,
        input_summary: str,
        output_summary: Optional[str],
        duration_ms: int,
        success: bool,
        error: Optional[str] = None,
    ) -> object:
        ...


class UsageLogEntry(BaseModel):
    """A single logged model call or tool execution."""

    id: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    purpose: str
    input_summary: str
    input_tokens_estimate: int
    output_summary: Optional[str] = None
    output_tokens_estimate: Optional[int] = None
    duration_ms: int
    success: bool
    error: Optional[str] = None


class UsageStats(BaseModel):
    """Summary statistics over the retained log entries."""

    total_calls: int
    successful_calls: int
    failed_calls: int
    total_input_tokens_estimate: int
    total_output_tokens_estimate: int
    average_duration_ms: int
    calls_by_purpose: Dict[str, int]


def estimate_tokens(text: str) -> int:
    """Rough token estimate, about three characters per token for mixed text."""
    return max(1, len(text) // 3)


class UsageLog:
    """
    Keeps the most recent ``max_entries`` entries, newest first.

    All methods are safe to call from concurrent turns.
    """

    def __init__(self, max_entries: int = 100) -> None:
        self.max_entries = max_entries
        self._entries: List[UsageLogEntry] = []
        self._lock = threading.Lock()
        self._ids = itertools.count(1)

    def log(
        self,
        purpose: str,
        input_summary: str,
        output_summary: Optional[str],
        duration_ms: int,
        success: bool,
        error: Optional[str] = None,
    ) -> UsageLogEntry:
        with self._lock:
            entry = UsageLogEntry(
                id=f"usage_{next(self._ids)}",
                purpose=purpose,
                input_summary=input_summary,
                input_tokens_estimate=estimate_tokens(input_summary),
                output_summary=output_summary,
                output_tokens_estimate=estimate_tokens(output_summary) if output_summary is not None else None,
                duration_ms=duration_ms,
                success=success,
                error=error,
            )
            self._entries.insert(0, entry)
            del self._entries[self.max_entries :]
        return entry

    def entries(self, limit: int = 50) -> List[UsageLogEntry]:
        with self._lock:
            return self._entries[:limit]

    def entries_by_purpose(self, purpose: str, limit: int = 50) -> List[UsageLogEntry]:
        with self._lock:
            return [e for e in self._entries if e.purpose == purpose][:limit]

    def stats(self) -> UsageStats:
        with self._lock:
            entries = list(self._entries)

        total = len(entries)
        successful = sum(1 for e in entries if e.success)
        by_purpose: Dict[str, int] = {}
        for e in entries:
            by_purpose[e.purpose] = by_purpose.get(e.purpose, 0) + 1

        return UsageStats(
            total_calls=total,
            successful_calls=successful,
            failed_calls=total - successful,
            total_input_tokens_estimate=sum(e.input_tokens_estimate for e in entries),
            total_output_tokens_estimate=sum(e.output_tokens_estimate or 0 for e in entries),
            average_duration_ms=sum(e.duration_ms for e in entries) // total if total else 0,
            calls_by_purpose=by_purpose,
        )

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
