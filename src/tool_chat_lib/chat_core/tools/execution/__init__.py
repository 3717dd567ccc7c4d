"""Tool execution."""

from .executor import ToolExecutor, TOOL_EXECUTION_PURPOSE

__all__ = ["ToolExecutor", "TOOL_EXECUTION_PURPOSE"]
