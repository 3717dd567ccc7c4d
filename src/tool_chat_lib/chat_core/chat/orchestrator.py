"""Multi-turn tool-calling loop over a plain text-completion model."""

from __future__ import annotations

import asyncio
import time
from contextlib import aclosing
from typing import AsyncGenerator, AsyncIterator, List, Optional, Sequence

from .events import (
    DeltaEvent,
    DoneEvent,
    ErrorEvent,
    StartEvent,
    StreamEvent,
    ToolCallFinishedEvent,
    ToolCallStartedEvent,
)
from .models import FocusEntity, FocusResolver, TurnResult
from .prompts import ToolCallingPrompts
from ..base import CompletionClient
from ..config import ChatSettings
from ..exceptions import ModelCallError
from ..logger import get_logger
from ..messages import BaseMessage
from ..tools.execution import ToolExecutor
from ..tools.models import ExecutionContext, ExecutionRecord
from ..tools.parsing import ToolCallParser
from ..tools.registry import ToolRegistry
from ..usage_log import UsageSink

logger = get_logger(__name__)

CHAT_PURPOSE = "chat"

ITERATION_LIMIT_NOTE = (
    "[Note: I executed multiple tool calls but need to stop here. "
    "Please rephrase your question if you need more information.]"
)


def _invalid_calls_note(errors: Sequence[str]) -> str:
    return f"[Note: I tried to use tools but encountered errors: {', '.join(errors)}]"


def _append_note(text: str, note: str) -> str:
    return f"{text}\n\n{note}" if text else note


class ChatOrchestrator:
    """
    Drives one chat turn: prompt, model call, parse, execute tools, repeat.

    Each model response is parsed for ``tool`` blocks. When it has none the turn
    ends with the response text. When it only has malformed blocks the turn ends
    with the text and a note listing the parse errors. Otherwise the valid calls
    are executed one after another and their results are sent back to the model in
    a continuation prompt. After ``settings.max_iterations`` rounds of tool use the
    turn is cut off with an advisory note.

    The same loop backs both ``send_message`` (collects the final result) and
    ``send_message_stream`` (yields progress events). The orchestrator holds no
    per-turn state, so one instance can serve many concurrent turns.
    """

    def __init__(
        self,
        client: CompletionClient,
        registry: ToolRegistry,
        executor: Optional[ToolExecutor] = None,
        parser: Optional[ToolCallParser] = None,
        focus_resolver: Optional[FocusResolver] = None,
        usage_sink: Optional[UsageSink] = None,
        settings: Optional[ChatSettings] = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            client: Completion model used for every model call.
            registry: Registry of the tools offered to the model.
            executor: Executor for tool calls. Defaults to one over ``registry``.
            parser: Parser for model responses.
            focus_resolver: Resolves focus ids to documents for the system prompt.
            usage_sink: Optional sink receiving one entry per model call and tool execution.
            settings: Loop settings. Defaults to ``ChatSettings()``.
        """
        self.client = client
        self.registry = registry
        self.executor = executor or ToolExecutor(registry, usage_sink=usage_sink)
        self.parser = parser or ToolCallParser()
        self.focus_resolver = focus_resolver
        self.usage_sink = usage_sink
        self.settings = settings or ChatSettings()

    async def send_message(
        self,
        session_id: str,
        message: str,
        focus_id: Optional[str] = None,
        history: Sequence[BaseMessage] = (),
        user_id: Optional[str] = None,
    ) -> TurnResult:
        """Run a turn to completion.

        Args:
            session_id: Chat session id.
            message: The user's message.
            focus_id: Id of the focus document, if the user has one open.
            history: Earlier messages of the conversation, oldest first.
            user_id: Optional user id passed through to tools.

        Returns:
            The final content and all tool executions of the turn.

        Raises:
            ModelCallError: If a model call fails.
        """
        logger.info(f"Processing message for session '{session_id}' (focus: {focus_id})")
        async with aclosing(self._run_turn(session_id, message, focus_id, history, user_id)) as events:
            async for event in events:
                if isinstance(event, DoneEvent):
                    return TurnResult(content=event.content, records=list(event.records))

        raise RuntimeError("Chat turn ended without a result.")  # pragma: no cover

    async def send_message_stream(
        self,
        session_id: str,
        message: str,
        focus_id: Optional[str] = None,
        history: Sequence[BaseMessage] = (),
        user_id: Optional[str] = None,
    ) -> AsyncIterator[StreamEvent]:
        """Run a turn and yield progress events.

        The stream starts with ``StartEvent`` and ends with exactly one ``DoneEvent``
        or ``ErrorEvent``. Any exception raised by the loop is reported as an
        ``ErrorEvent``. The caller may stop iterating, or ``aclose()`` the stream,
        between any two events.

        Args:
            session_id: Chat session id.
            message: The user's message.
            focus_id: Id of the focus document, if the user has one open.
            history: Earlier messages of the conversation, oldest first.
            user_id: Optional user id passed through to tools.

        Yields:
            Stream events in order.
        """
        try:
            async with aclosing(self._run_turn(session_id, message, focus_id, history, user_id)) as events:
                async for event in events:
                    yield event
        except Exception as exc:
            logger.error(f"Chat stream for session '{session_id}' failed: {exc}", exc_info=True)
            yield ErrorEvent(message=str(exc) or type(exc).__name__)

    async def _run_turn(
        self,
        session_id: str,
        message: str,
        focus_id: Optional[str],
        history: Sequence[BaseMessage],
        user_id: Optional[str],
    ) -> AsyncGenerator[StreamEvent, None]:
        yield StartEvent()

        context = ExecutionContext(focus_id=focus_id, session_id=session_id, user_id=user_id)
        focus = await self._resolve_focus(focus_id)
        prompt = self.build_prompt(message, context, focus, history)

        max_iterations = self.settings.max_iterations
        all_records: List[ExecutionRecord] = []
        final_text = ""
        iteration = 0

        while iteration < max_iterations:
            logger.debug(f"Iteration {iteration + 1}/{max_iterations}")

            response = await self._complete(prompt)
            yield DeltaEvent(text=response)

            parsed = self.parser.parse(response)
            logger.debug(f"Found {len(parsed.calls)} tool call(s)")

            if not parsed.has_calls:
                final_text = parsed.text
                break

            if not parsed.valid_calls:
                errors = [call.error or "Unknown error" for call in parsed.invalid_calls]
                logger.warning(f"All tool calls invalid: {errors}")
                final_text = _append_note(parsed.text, _invalid_calls_note(errors))
                break

            # Sequential on purpose: the continuation prompt reflects results in call order.
            records: List[ExecutionRecord] = []
            for call in parsed.valid_calls:
                yield ToolCallStartedEvent(tool_name=call.name)
                record = await self.executor.execute(call, context)
                records.append(record)
                all_records.append(record)
                yield ToolCallFinishedEvent(tool_name=record.tool_name, success=record.success, error=record.error)

            prompt = ToolCallingPrompts.build_tool_results_prompt(
                original_message=message,
                llm_response=response,
                records=records,
            )
            final_text = parsed.text
            iteration += 1

        if iteration >= max_iterations:
            logger.warning(f"Max iterations ({max_iterations}) reached for session '{session_id}'.")
            final_text = _append_note(final_text, ITERATION_LIMIT_NOTE)

        yield DoneEvent(content=final_text, records=all_records)

    def build_prompt(
        self,
        message: str,
        context: ExecutionContext,
        focus: Optional[FocusEntity],
        history: Sequence[BaseMessage],
    ) -> str:
        """Build the first prompt of a turn.

        Tools requiring a focus document are only offered when the turn has a focus id.

        Args:
            message: The user's message.
            context: The turn's execution context.
            focus: The resolved focus document, if any.
            history: Earlier messages, oldest first.

        Returns:
            The complete prompt text.
        """
        tools = self.registry.available_definitions(context.has_focus)
        system_prompt = ToolCallingPrompts.build_enhanced_system_prompt(
            tools, focus, include_examples=self.settings.include_examples
        )

        lines = [system_prompt, ""]

        window = self.settings.history_window
        recent = list(history)[-window:] if window else []
        if recent:
            lines.append("Previous conversation:")
            lines.extend(f"{msg.role}: {msg.content}" for msg in recent)
            lines.append("")

        lines.append(f"User: {message}")
        lines.append("")
        lines.append("Assistant:")
        return "\n".join(lines)

    async def _resolve_focus(self, focus_id: Optional[str]) -> Optional[FocusEntity]:
        if focus_id is None or self.focus_resolver is None:
            return None
        try:
            return await self.focus_resolver.lookup_focus_entity(focus_id)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.warning(f"Could not resolve focus document '{focus_id}': {exc}")
            return None

    async def _complete(self, prompt: str) -> str:
        start = time.perf_counter()
        try:
            response = await self.client.complete(prompt)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            duration_ms = int((time.perf_counter() - start) * 1000)
            self._log_usage(prompt, None, duration_ms, success=False, error=str(exc))
            logger.error(f"Model call failed: {exc}")
            raise ModelCallError(f"Model call failed: {exc}") from exc

        duration_ms = int((time.perf_counter() - start) * 1000)
        logger.debug(f"Model response length: {len(response)} chars")
        self._log_usage(prompt, response, duration_ms, success=True)
        return response

    def _log_usage(
        self, prompt: str, response: Optional[str], duration_ms: int, success: bool, error: Optional[str] = None
    ) -> None:
        if self.usage_sink is None:
            return
        try:
            self.usage_sink.log(
                purpose=CHAT_PURPOSE,
                input_summary=prompt,
                output_summary=response,
                duration_ms=duration_ms,
                success=success,
                error=error,
            )
        except Exception as exc:
            logger.warning(f"Usage sink rejected model call entry: {exc}")
