"""Capability contract for tools the model can invoke."""

from __future__ import annotations

import asyncio
import inspect
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Union

from .models import CoercedArguments, ExecutionContext, ToolDefinition, ToolOutcome

ToolFunction = Callable[..., Union[Any, Awaitable[Any]]]


class ChatTool(ABC):
    """
    A host-side capability exposed to the model.

    Subclasses provide a ``definition`` and implement ``execute``. ``execute`` may
    be a coroutine or a plain method; plain methods are run in a worker thread.
    Implementations can rely on ``arguments`` having been coerced against their
    own ``definition.parameters`` before the call.
    """

    @property
    @abstractmethod
    def definition(self) -> ToolDefinition:
        pass

    @abstractmethod
    def execute(
        self, arguments: CoercedArguments, context: ExecutionContext
    ) -> Union[ToolOutcome, Awaitable[ToolOutcome]]:
        pass

    @property
    def name(self) -> str:
        return self.definition.name

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class FunctionTool(ChatTool):
    """Adapts a plain function to the ``ChatTool`` contract.

    The function is called with the coerced arguments as keyword arguments. If its
    signature declares a ``context`` parameter, the ``ExecutionContext`` is passed
    as well. A returned ``ToolOutcome`` is used as is; any other return value
    becomes the data of a successful outcome.
    """

    def __init__(self, definition: ToolDefinition, func: ToolFunction) -> None:
        self._definition = definition
        self.func = func
        self._wants_context = "context" in inspect.signature(func).parameters

    @property
    def definition(self) -> ToolDefinition:
        return self._definition

    async def execute(self, arguments: CoercedArguments, context: ExecutionContext) -> ToolOutcome:
        kwargs = dict(arguments)
        if self._wants_context:
            kwargs["context"] = context

        if inspect.iscoroutinefunction(self.func):
            result = await self.func(**kwargs)
        else:
            result = await asyncio.to_thread(self.func, **kwargs)

        if isinstance(result, ToolOutcome):
            return result
        return ToolOutcome.ok(result)
