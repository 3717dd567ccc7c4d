"""Extraction of tool calls embedded in plain model text.

Text-completion models have no native function calling, so the model is asked to
emit each call as a fenced markdown block tagged ``tool``::

    ```tool
    {"name": "scroll_to_location", "arguments": {"page": 3}}
    ```

A response can contain any number of such blocks mixed with ordinary prose.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ...logger import get_logger

logger = get_logger(__name__)

INVALID_CALL_NAME = "invalid"

_TOOL_BLOCK_RE = re.compile(r"```tool[ \t]*\r?\n(.*?)\r?\n?```", re.DOTALL)
_HTML_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")


def _reject_constant(token: str) -> Any:
    raise ValueError(f"{token} is not valid JSON")


@dataclass(frozen=True)
class ParsedCall:
    """A single tool call found in a model response.

    Attributes:
        name: Tool name, or ``"invalid"`` when the block could not be parsed.
        arguments: Raw JSON arguments keyed by parameter name.
        raw: The block content as written by the model, kept for debugging.
        error: Parse diagnostic. ``None`` exactly when the call is valid.
    """

    name: str
    arguments: Dict[str, Any] = field(default_factory=dict)
    raw: str = ""
    error: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.error is None

    @classmethod
    def invalid(cls, raw: str, error: str) -> "ParsedCall":
        return cls(name=INVALID_CALL_NAME, arguments={}, raw=raw, error=error)


@dataclass(frozen=True)
class ParseResult:
    """Tool calls extracted from a response, plus the response text without them."""

    calls: List[ParsedCall]
    text: str

    @property
    def valid_calls(self) -> List[ParsedCall]:
        return [call for call in self.calls if call.is_valid]

    @property
    def invalid_calls(self) -> List[ParsedCall]:
        return [call for call in self.calls if not call.is_valid]

    @property
    def has_calls(self) -> bool:
        return bool(self.calls)

    @property
    def all_valid(self) -> bool:
        return bool(self.calls) and all(call.is_valid for call in self.calls)


class ToolCallParser:
    """Parses ``tool`` blocks out of raw model responses.

    ``parse`` never raises: malformed blocks are reported as invalid calls and
    processing continues with the next block.
    """

    def parse(self, response: str) -> ParseResult:
        """Extract tool calls and clean text from a model response.

        Args:
            response: The raw text returned by the model.

        Returns:
            A ParseResult with the calls in order of appearance and the cleaned text.
        """
        response = response or ""
        calls = [self._parse_block(match.group(1).strip()) for match in _TOOL_BLOCK_RE.finditer(response)]

        if calls:
            logger.debug("Found %d tool block(s), %d invalid.", len(calls), sum(1 for c in calls if not c.is_valid))

        return ParseResult(calls=calls, text=self.clean_text(response))

    @staticmethod
    def clean_text(response: str) -> str:
        """Remove tool blocks and HTML comments and collapse blank-line runs.

        Args:
            response: The raw model text.

        Returns:
            The user-facing remainder of the response.
        """
        text = _TOOL_BLOCK_RE.sub("", response).strip()
        # Comments such as <!-- tools: none --> are model annotations, not content.
        text = _HTML_COMMENT_RE.sub("", text).strip()
        return _EXCESS_NEWLINES_RE.sub("\n\n", text)

    @staticmethod
    def _parse_block(block: str) -> ParsedCall:
        # Oversized integers raise a plain ValueError and deep nesting a RecursionError.
        try:
            payload = json.loads(block, parse_constant=_reject_constant)
        except (ValueError, RecursionError) as exc:
            return ParsedCall.invalid(block, f"Failed to parse tool call: {exc}")

        if not isinstance(payload, dict):
            return ParsedCall.invalid(block, "Failed to parse tool call: expected a JSON object")

        name = payload.get("name")
        if not isinstance(name, str) or not name.strip():
            return ParsedCall.invalid(block, "Failed to parse tool call: 'name' must be a non-empty string")

        arguments = payload.get("arguments", {})
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            return ParsedCall.invalid(block, f"Failed to parse tool call '{name}': 'arguments' must be a JSON object")

        return ParsedCall(name=name.strip(), arguments=arguments, raw=block)
