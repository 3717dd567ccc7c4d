import json
from typing import Annotated, Any, Dict, List, Optional, Sequence

import pytest
from pydantic import Field

from tool_chat_lib.chat_core import (
    ChatTool,
    CompletionClient,
    ExecutionContext,
    ParameterType,
    ToolDefinition,
    ToolOutcome,
    ToolParameter,
    ToolRegistry,
    UsageLog,
)


class ScriptedClient(CompletionClient):
    """Completion client returning canned responses in order.

    The last response is repeated once the script runs out.
    """

    def __init__(self, responses: Sequence[str]) -> None:
        super().__init__(max_retries=0, base_retry_delay=0.0)
        self.responses = list(responses)
        self.prompts: List[str] = []

    async def _complete_impl(self, prompt: str) -> str:
        self.prompts.append(prompt)
        index = min(len(self.prompts) - 1, len(self.responses) - 1)
        return self.responses[index]

    @property
    def call_count(self) -> int:
        return len(self.prompts)


class FailingClient(CompletionClient):
    def __init__(self, error: Exception) -> None:
        super().__init__(max_retries=0, base_retry_delay=0.0)
        self.error = error

    async def _complete_impl(self, prompt: str) -> str:
        raise self.error


class CountingTool(ChatTool):
    """Tool that records every invocation and echoes its arguments."""

    def __init__(
        self,
        name: str = "counting",
        parameters: Optional[Dict[str, ToolParameter]] = None,
        requires_focus: bool = False,
    ) -> None:
        self._definition = ToolDefinition(
            name=name,
            description=f"{name} tool",
            parameters=parameters or {},
            requires_focus=requires_focus,
        )
        self.calls: List[Dict[str, Any]] = []

    @property
    def definition(self) -> ToolDefinition:
        return self._definition

    async def execute(self, arguments: Dict[str, Any], context: ExecutionContext) -> ToolOutcome:
        self.calls.append(dict(arguments))
        return ToolOutcome.ok(dict(arguments), metadata={"session": context.session_id})


class ExplodingTool(ChatTool):
    @property
    def definition(self) -> ToolDefinition:
        return ToolDefinition(name="exploding", description="always raises")

    async def execute(self, arguments: Dict[str, Any], context: ExecutionContext) -> ToolOutcome:
        raise RuntimeError("boom")


def tool_block(name: str, arguments: Dict[str, Any]) -> str:
    return "```tool\n" + json.dumps({"name": name, "arguments": arguments}) + "\n```"


@pytest.fixture
def page_tool() -> CountingTool:
    return CountingTool(
        name="go_to_page",
        parameters={
            "page": ToolParameter(type=ParameterType.NUMBER, description="Page number"),
            "highlight": ToolParameter(
                type=ParameterType.BOOLEAN, description="Highlight target", required=False, default=False
            ),
        },
    )


@pytest.fixture
def registry(page_tool: CountingTool) -> ToolRegistry:
    registry = ToolRegistry()
    registry.register(page_tool)
    return registry


@pytest.fixture
def usage_log() -> UsageLog:
    return UsageLog()


@pytest.fixture
def context() -> ExecutionContext:
    return ExecutionContext(session_id="session-1")


@pytest.fixture
def focus_context() -> ExecutionContext:
    return ExecutionContext(session_id="session-1", focus_id="paper-1")


@pytest.fixture
def annotated_search_func():
    def search_library(
        query: Annotated[str, Field(description="Search query")],
        limit: Annotated[int, Field(description="Maximum number of results")] = 5,
    ) -> List[str]:
        """Search the paper library."""
        return [query] * limit

    return search_library
