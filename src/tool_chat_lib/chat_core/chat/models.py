"""Models exchanged with callers of the chat orchestrator."""

from typing import List, Optional, Protocol

from pydantic import BaseModel, Field

from ..tools.models import ExecutionRecord


class TurnResult(BaseModel):
    """Final output of one chat turn.

    Attributes:
        content: The text shown to the user, possibly with an appended note.
        records: Every tool execution that happened during the turn, in order.
    """

    content: str
    records: List[ExecutionRecord] = Field(default_factory=list)


class FocusEntity(BaseModel):
    """The document a conversation is focused on, e.g. the paper open in the viewer."""

    id: str
    title: str
    authors: List[str] = Field(default_factory=list)
    year: Optional[int] = None
    venue: Optional[str] = None

    @property
    def formatted_authors(self) -> str:
        if not self.authors:
            return "Unknown"
        if len(self.authors) <= 3:
            return ", ".join(self.authors)
        return f"{self.authors[0]} et al."


class FocusResolver(Protocol):
    """Looks up the focus document for a turn."""

    async def lookup_focus_entity(self, focus_id: str) -> Optional[FocusEntity]:
        ...
