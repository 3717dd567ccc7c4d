from typing import Any, Dict

import pytest

from tool_chat_lib.chat_core import (
    ExecutionContext,
    FunctionTool,
    ParameterType,
    ParsedCall,
    ToolDefinition,
    ToolExecutionError,
    ToolExecutor,
    ToolOutcome,
    ToolParameter,
    ToolRegistry,
    UsageLog,
)
from tool_chat_lib.chat_core.tools.execution import TOOL_EXECUTION_PURPOSE

from conftest import CountingTool, ExplodingTool


@pytest.mark.asyncio
async def test_execute_valid_call(registry, page_tool, context, usage_log) -> None:
    executor = ToolExecutor(registry, usage_sink=usage_log)

    record = await executor.execute(ParsedCall(name="go_to_page", arguments={"page": 3}), context)

    assert record.success
    assert record.tool_name == "go_to_page"
    assert record.data == {"page": 3, "highlight": False}
    assert record.metadata == {"session": "session-1"}
    assert record.duration_ms >= 0
    assert page_tool.calls == [{"page": 3, "highlight": False}]

    entries = usage_log.entries()
    assert len(entries) == 1
    assert entries[0].purpose == TOOL_EXECUTION_PURPOSE
    assert entries[0].success


@pytest.mark.asyncio
async def test_execute_invalid_call_skips_lookup(context) -> None:
    registry = ToolRegistry()
    executor = ToolExecutor(registry)

    record = await executor.execute(ParsedCall.invalid("{oops", "Failed to parse tool call: bad"), context)

    assert not record.success
    assert record.tool_name == "invalid"
    assert record.error == "Failed to parse tool call: bad"


@pytest.mark.asyncio
async def test_execute_unknown_tool(registry, context) -> None:
    executor = ToolExecutor(registry)

    record = await executor.execute(ParsedCall(name="nope"), context)

    assert not record.success
    assert record.error == "Unknown tool: nope. Available tools: go_to_page"


@pytest.mark.asyncio
async def test_execute_requires_focus(context, focus_context) -> None:
    tool = CountingTool(name="focused", requires_focus=True)
    registry = ToolRegistry()
    registry.register(tool)
    executor = ToolExecutor(registry)

    record = await executor.execute(ParsedCall(name="focused"), context)

    assert not record.success
    assert "requires a focus document" in (record.error or "")
    assert tool.calls == []

    record = await executor.execute(ParsedCall(name="focused"), focus_context)
    assert record.success
    assert len(tool.calls) == 1


@pytest.mark.asyncio
async def test_missing_required_parameter_never_invokes_tool(registry, page_tool, context, usage_log) -> None:
    executor = ToolExecutor(registry, usage_sink=usage_log)

    record = await executor.execute(ParsedCall(name="go_to_page", arguments={"highlight": True}), context)

    assert not record.success
    assert record.error == "Invalid arguments: Missing required parameter: page"
    assert page_tool.calls == []
    assert len(usage_log) == 0


@pytest.mark.asyncio
async def test_bad_argument_type_never_invokes_tool(registry, page_tool, context) -> None:
    executor = ToolExecutor(registry)

    record = await executor.execute(ParsedCall(name="go_to_page", arguments={"page": "three"}), context)

    assert not record.success
    assert "'page' must be a number" in (record.error or "")
    assert page_tool.calls == []


@pytest.mark.asyncio
async def test_execute_is_total_when_tool_raises(context, usage_log) -> None:
    registry = ToolRegistry()
    registry.register(ExplodingTool())
    executor = ToolExecutor(registry, usage_sink=usage_log)

    record = await executor.execute(ParsedCall(name="exploding"), context)

    assert not record.success
    assert record.error == "Tool execution failed: boom"
    assert usage_log.entries()[0].success is False


@pytest.mark.asyncio
async def test_tool_execution_error_becomes_failed_record(context, usage_log) -> None:
    def lookup_figure(label: str) -> Dict[str, Any]:
        raise ToolExecutionError(f"No figure labelled {label}")

    definition = ToolDefinition(
        name="lookup_figure",
        description="Find a figure by label",
        parameters={"label": ToolParameter(type=ParameterType.STRING, description="Figure label")},
    )
    registry = ToolRegistry()
    registry.register(FunctionTool(definition, lookup_figure))
    executor = ToolExecutor(registry, usage_sink=usage_log)

    record = await executor.execute(ParsedCall(name="lookup_figure", arguments={"label": "7"}), context)

    assert not record.success
    assert record.error == "Tool execution failed: No figure labelled 7"
    assert usage_log.entries()[0].error == record.error


@pytest.mark.asyncio
async def test_execute_sync_function_tool(context) -> None:
    def add(a: float, b: float, context: ExecutionContext) -> Dict[str, Any]:
        return {"sum": a + b, "session": context.session_id}

    definition = ToolDefinition(
        name="add",
        description="Add two numbers",
        parameters={
            "a": ToolParameter(type=ParameterType.NUMBER, description="a"),
            "b": ToolParameter(type=ParameterType.NUMBER, description="b"),
        },
    )
    registry = ToolRegistry()
    registry.register(FunctionTool(definition, add))

    record = await ToolExecutor(registry).execute(ParsedCall(name="add", arguments={"a": 1, "b": 2.5}), context)

    assert record.success
    assert record.data == {"sum": 3.5, "session": "session-1"}


@pytest.mark.asyncio
async def test_function_tool_can_return_outcome(context) -> None:
    async def refuse() -> ToolOutcome:
        return ToolOutcome.fail("not today", metadata={"reason": "test"})

    registry = ToolRegistry()
    registry.register(FunctionTool(ToolDefinition(name="refuse", description="refuses"), refuse))

    record = await ToolExecutor(registry).execute(ParsedCall(name="refuse"), context)

    assert not record.success
    assert record.error == "not today"
    assert record.metadata == {"reason": "test"}


@pytest.mark.asyncio
async def test_broken_usage_sink_does_not_fail_execution(registry, context) -> None:
    class BrokenSink:
        def log(self, *args: Any, **kwargs: Any) -> None:
            raise OSError("disk full")

    record = await ToolExecutor(registry, usage_sink=BrokenSink()).execute(
        ParsedCall(name="go_to_page", arguments={"page": 1}), context
    )

    assert record.success


@pytest.mark.asyncio
async def test_decorated_tool_runs_through_executor(annotated_search_func, context) -> None:
    registry = ToolRegistry()
    registry.tool(annotated_search_func)

    record = await ToolExecutor(registry).execute(
        ParsedCall(name="search_library", arguments={"query": "gan", "limit": 2}), context
    )

    assert record.success
    assert record.data == ["gan", "gan"]


def test_usage_log_stats_and_trimming() -> None:
    log = UsageLog(max_entries=2)
    log.log("chat", "a" * 30, "b" * 9, 10, True)
    log.log("tool_execution", "x", None, 20, False, error="bad")
    log.log("tool_execution", "y", "z", 30, True)

    assert len(log) == 2
    assert [e.input_summary for e in log.entries()] == ["y", "x"]
    assert len(log.entries_by_purpose("tool_execution")) == 2

    stats = log.stats()
    assert stats.total_calls == 2
    assert stats.successful_calls == 1
    assert stats.failed_calls == 1
    assert stats.average_duration_ms == 25
    assert stats.calls_by_purpose == {"tool_execution": 2}

    log.clear()
    assert log.stats().total_calls == 0
