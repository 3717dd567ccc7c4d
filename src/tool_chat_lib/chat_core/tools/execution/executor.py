"""Execution of a single parsed tool call."""

from __future__ import annotations

import asyncio
import inspect
import time
from typing import Any, Optional

from ..base import ChatTool
from ..models import CoercedArguments, ExecutionContext, ExecutionRecord, ToolOutcome
from ..parsing import ParsedCall
from ..registry import ToolRegistry
from ..schema import ArgumentCoercer
from ...exceptions import ArgumentCoercionError, ToolExecutionError
from ...logger import get_logger
from ...usage_log import UsageSink

logger = get_logger(__name__)

TOOL_EXECUTION_PURPOSE = "tool_execution"


class ToolExecutor:
    """Resolves, validates, runs, times and logs one tool call.

    ``execute`` never raises for a bad call: unknown tools, a missing focus document,
    invalid arguments and exceptions thrown by the tool all come back as failed
    ``ExecutionRecord`` objects.
    """

    def __init__(self, registry: ToolRegistry, usage_sink: Optional[UsageSink] = None) -> None:
        """Initialize the executor.

        Args:
            registry: Registry used to resolve tools by name.
            usage_sink: Optional observability sink receiving one entry per invocation.
        """
        self._registry = registry
        self._usage_sink = usage_sink

    async def execute(self, call: ParsedCall, context: ExecutionContext) -> ExecutionRecord:
        """Execute a parsed tool call.

        Args:
            call: The call extracted from the model response.
            context: The turn's execution context.

        Returns:
            The execution record, successful or not.
        """
        if not call.is_valid:
            return ExecutionRecord.failure(call.name, call.error or "Invalid tool call")

        tool = self._registry.lookup(call.name)
        if tool is None:
            available = ", ".join(self._registry.names())
            msg = f"Unknown tool: {call.name}. Available tools: {available}"
            logger.warning(msg)
            return ExecutionRecord.failure(call.name, msg)

        if tool.definition.requires_focus and not context.has_focus:
            logger.warning(f"Tool '{call.name}' requested without a focus document.")
            return ExecutionRecord.failure(
                call.name, "This tool requires a focus document. Please open a paper first."
            )

        try:
            arguments = ArgumentCoercer.coerce(call.arguments, tool.definition.parameters)
        except ArgumentCoercionError as exc:
            logger.warning(f"Argument validation failed for '{call.name}': {exc}")
            return ExecutionRecord.failure(call.name, f"Invalid arguments: {exc}")

        logger.info(f"Executing tool '{call.name}'...")
        start = time.perf_counter()
        outcome = await self._invoke(tool, arguments, context)
        duration_ms = int((time.perf_counter() - start) * 1000)

        if outcome.success:
            logger.info(f"Tool '{call.name}' executed successfully in {duration_ms} ms.")
        else:
            logger.warning(f"Tool '{call.name}' failed: {outcome.error}")

        self._log_usage(call, outcome, duration_ms)
        return ExecutionRecord.from_outcome(call.name, outcome, duration_ms)

    @staticmethod
    async def _invoke(tool: ChatTool, arguments: CoercedArguments, context: ExecutionContext) -> ToolOutcome:
        try:
            if inspect.iscoroutinefunction(tool.execute):
                result: Any = await tool.execute(arguments, context)
            else:
                result = await asyncio.to_thread(tool.execute, arguments, context)
                if inspect.isawaitable(result):
                    result = await result
        except asyncio.CancelledError:
            raise
        except ToolExecutionError as exc:
            logger.warning(f"Tool '{tool.name}' reported a failure: {exc}")
            return ToolOutcome.fail(f"Tool execution failed: {exc}")
        except Exception as exc:
            logger.error(f"Tool execution failed: {tool.name} - {exc}", exc_info=True)
            return ToolOutcome.fail(f"Tool execution failed: {exc}")

        if not isinstance(result, ToolOutcome):
            msg = f"Tool '{tool.name}' returned {type(result).__name__} instead of ToolOutcome"
            logger.error(msg)
            return ToolOutcome.fail(f"Tool execution failed: {msg}")
        return result

    def _log_usage(self, call: ParsedCall, outcome: ToolOutcome, duration_ms: int) -> None:
        if self._usage_sink is None:
            return

        output = f"Success: {outcome.data}" if outcome.success else f"Error: {outcome.error}"
        try:
            self._usage_sink.log(
                purpose=TOOL_EXECUTION_PURPOSE,
                input_summary=f"Tool: {call.name}, Args: {call.raw}",
                output_summary=output,
                duration_ms=duration_ms,
                success=outcome.success,
                error=outcome.error,
            )
        except Exception as exc:
            logger.warning(f"Usage sink rejected entry for '{call.name}': {exc}")
