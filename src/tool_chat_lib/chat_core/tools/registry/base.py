"""Tool registry holding the capabilities offered to the model."""

import inspect
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional

from ..base import ChatTool, FunctionTool, ToolFunction
from ..models import ToolDefinition, ToolParameter
from ..schema import ToolParameterFactory
from ...exceptions import ToolNotFoundError, ToolRegistrationError, ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)


class ToolRegistry:
    """
    A central registry to manage and access all available chat tools.

    The registry is built once at startup and handed to the executor and the
    orchestrator. After startup it is only read, so concurrent turns can share it.
    """

    def __init__(self) -> None:
        """Initialize the ToolRegistry."""
        self._tools: Dict[str, ChatTool] = {}

    def register(self, tool: ChatTool) -> None:
        """
        Register a new tool.

        Args:
            tool: The tool to register.

        Raises:
            ToolRegistrationError: If a tool with the same name already exists.
        """
        name = tool.definition.name
        if name in self._tools:
            msg = f"Tool '{name}' is already registered."
            logger.error(msg)
            raise ToolRegistrationError(msg)

        self._tools[name] = tool
        logger.info(f"Successfully registered tool: '{name}'")

    def unregister(self, tool_name: str) -> None:
        """Unregister a tool from the registry.

        Args:
            tool_name: The name of the tool to remove.

        Raises:
            ToolNotFoundError: If the tool does not exist in the registry.
        """
        if tool_name in self._tools:
            del self._tools[tool_name]
            logger.info(f"Successfully unregistered tool: '{tool_name}'")
        else:
            raise ToolNotFoundError(f"Tool '{tool_name}' not found in the registry.")

    def unregister_all(self) -> None:
        """Remove every registered tool."""
        self._tools.clear()
        logger.info("Cleared all tools.")

    def lookup(self, tool_name: str) -> Optional[ChatTool]:
        """Return the tool registered under ``tool_name``, or None."""
        return self._tools.get(tool_name)

    def get(self, tool_name: str) -> ChatTool:
        """Return the tool registered under ``tool_name``.

        Raises:
            ToolNotFoundError: If no such tool is registered.
        """
        tool = self._tools.get(tool_name)
        if tool is None:
            raise ToolNotFoundError(f"Tool '{tool_name}' not found in the registry.")
        return tool

    def available_definitions(self, has_focus: bool) -> List[ToolDefinition]:
        """Definitions of the tools that are legal in the current conversation state.

        Args:
            has_focus: Whether the turn has a focus document.

        Returns:
            Definitions in registration order. Tools that require a focus document are
            left out when ``has_focus`` is False.
        """
        return [
            tool.definition
            for tool in self._tools.values()
            if not tool.definition.requires_focus or has_focus
        ]

    def names(self, requires_focus: Optional[bool] = None) -> List[str]:
        """Names of registered tools.

        Args:
            requires_focus: If given, only tools whose ``requires_focus`` flag equals it.

        Returns:
            Tool names in registration order.
        """
        if requires_focus is None:
            return list(self._tools)
        return [name for name, tool in self._tools.items() if tool.definition.requires_focus == requires_focus]

    @property
    def tools(self) -> Mapping[str, ChatTool]:
        """Read-only view of the registered tools keyed by name."""
        return MappingProxyType(self._tools)

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, tool_name: object) -> bool:
        return tool_name in self._tools

    def tool(
        self,
        func: Optional[ToolFunction] = None,
        *,
        name: Optional[str] = None,
        description: Optional[str] = None,
        requires_focus: bool = False,
    ) -> Callable:
        """A decorator to turn a function into a chat tool.

        Can be used bare (``@registry.tool``) or with options
        (``@registry.tool(requires_focus=True)``). Every parameter except ``context``
        needs an ``Annotated[T, Field(description=...)]`` annotation.

        Returns:
            The original function, after registering it as a tool.
        """

        def decorator(f: ToolFunction) -> ToolFunction:
            definition = self._generate_tool_definition(
                f, name=name, description=description, requires_focus=requires_focus
            )
            self.register(FunctionTool(definition, f))
            return f

        if func is not None:
            return decorator(func)
        return decorator

    def _generate_tool_definition(
        self,
        func: ToolFunction,
        name: Optional[str] = None,
        description: Optional[str] = None,
        requires_focus: bool = False,
    ) -> ToolDefinition:
        """Generate a ToolDefinition from a callable function.

        Raises:
            ToolValidationError: If the function is missing a docstring or parameter descriptions.
        """
        tool_name = name or func.__name__
        if description is None:
            description = self._get_docstring_from_func(func, tool_name)

        parameters: Dict[str, ToolParameter] = {}
        for param_name, param in inspect.signature(func).parameters.items():
            if param_name in ("self", "context"):
                continue
            parameters[param_name] = ToolParameterFactory.build_parameter(param_name, param, tool_name)

        return ToolDefinition(
            name=tool_name,
            description=description,
            parameters=parameters,
            requires_focus=requires_focus,
        )

    @staticmethod
    def _get_docstring_from_func(func: ToolFunction, tool_name: str) -> str:
        doc = inspect.getdoc(func)
        if not doc:
            msg = f"Tool '{tool_name}' missing docstring. LLMs need a description of what the tool does."
            logger.error(msg)
            raise ToolValidationError(msg)
        return doc
