from typing import Annotated, Any, List

import pytest
from pydantic import Field

from tool_chat_lib.chat_core import (
    ParameterType,
    ToolNotFoundError,
    ToolRegistrationError,
    ToolRegistry,
    ToolValidationError,
)

from conftest import CountingTool


def test_register_and_lookup() -> None:
    registry = ToolRegistry()
    tool = CountingTool(name="a")

    registry.register(tool)

    assert "a" in registry
    assert len(registry) == 1
    assert registry.lookup("a") is tool
    assert registry.get("a") is tool
    assert registry.lookup("missing") is None


def test_register_duplicate_fails() -> None:
    registry = ToolRegistry()
    registry.register(CountingTool(name="a"))

    with pytest.raises(ToolRegistrationError, match="already registered"):
        registry.register(CountingTool(name="a"))


def test_available_definitions_filters_by_focus() -> None:
    registry = ToolRegistry()
    registry.register(CountingTool(name="a", requires_focus=True))
    registry.register(CountingTool(name="b", requires_focus=False))

    assert {d.name for d in registry.available_definitions(False)} == {"b"}
    assert {d.name for d in registry.available_definitions(True)} == {"a", "b"}


def test_names_and_unregister() -> None:
    registry = ToolRegistry()
    registry.register(CountingTool(name="a", requires_focus=True))
    registry.register(CountingTool(name="b"))

    assert registry.names() == ["a", "b"]
    assert registry.names(requires_focus=True) == ["a"]
    assert registry.names(requires_focus=False) == ["b"]

    registry.unregister("a")
    assert registry.names() == ["b"]

    with pytest.raises(ToolNotFoundError):
        registry.unregister("a")
    with pytest.raises(ToolNotFoundError):
        registry.get("a")

    registry.unregister_all()
    assert len(registry) == 0


def test_tools_view_is_read_only() -> None:
    registry = ToolRegistry()
    registry.register(CountingTool(name="a"))

    with pytest.raises(TypeError):
        registry.tools["b"] = CountingTool(name="b")  # type: ignore[index]


def test_registry_tool_decorator(annotated_search_func: Any) -> None:
    registry = ToolRegistry()
    registry.tool(annotated_search_func)

    definition = registry.get("search_library").definition
    assert definition.description == "Search the paper library."
    assert definition.requires_focus is False
    assert definition.parameters["query"].type is ParameterType.STRING
    assert definition.parameters["query"].required is True
    assert definition.parameters["limit"].type is ParameterType.NUMBER
    assert definition.parameters["limit"].required is False
    assert definition.parameters["limit"].default == 5


def test_registry_tool_decorator_with_options() -> None:
    registry = ToolRegistry()

    @registry.tool(name="highlight", requires_focus=True)
    def highlight_text(
        terms: Annotated[List[str], Field(description="Terms to highlight")],
        context: Any = None,
    ) -> int:
        """Highlight terms in the open paper."""
        return len(terms)

    definition = registry.get("highlight").definition
    assert definition.requires_focus is True
    assert list(definition.parameters) == ["terms"]
    assert definition.parameters["terms"].type is ParameterType.ARRAY
    assert highlight_text(["a"]) == 1


def test_registry_missing_docstring() -> None:
    registry = ToolRegistry()
    with pytest.raises(ToolValidationError, match="missing docstring"):

        @registry.tool
        def no_doc_tool(x: Annotated[int, Field(description="desc")]) -> None:
            pass


def test_registry_missing_parameter_description() -> None:
    registry = ToolRegistry()
    with pytest.raises(ToolValidationError, match="missing a description"):

        @registry.tool
        def undocumented(x: int) -> None:
            """Has a docstring."""


def test_registry_unsupported_parameter_type() -> None:
    registry = ToolRegistry()
    with pytest.raises(ToolValidationError, match="unsupported type"):

        @registry.tool
        def takes_dict(x: Annotated[dict, Field(description="A mapping")]) -> None:
            """Has a docstring."""
