"""Parsing of tool calls from model text."""

from .call_parser import INVALID_CALL_NAME, ParsedCall, ParseResult, ToolCallParser

__all__ = ["INVALID_CALL_NAME", "ParsedCall", "ParseResult", "ToolCallParser"]
