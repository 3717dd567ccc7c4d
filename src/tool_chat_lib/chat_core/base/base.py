"""Core abstraction for text-completion model clients."""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Callable, Coroutine

from ..logger import get_logger

logger = get_logger(__name__)


class CompletionClient(ABC):
    """Abstract base class for plain text-completion models.

    The orchestrator only needs ``complete(prompt) -> text``. Retrying transient
    provider failures is the client's job; the orchestrator treats any exception
    raised here as fatal to the current turn.
    """

    def __init__(self, max_retries: int = 3, base_retry_delay: float = 1.0):
        self.max_retries = max_retries
        self.base_retry_delay = base_retry_delay

    async def _execute_with_retry(
        self,
        func: Callable[..., Coroutine[Any, Any, str]],
        *args: Any,
        **kwargs: Any,
    ) -> str:
        """
        Executes a function with retry logic.

        Args:
            func: The asynchronous function to execute.
            *args: Positional arguments for the function.
            **kwargs: Keyword arguments for the function.

        Returns:
            The result of the function call.

        Raises:
            Exception: The last encountered exception if all retries fail.
        """

        delay = self.base_retry_delay
        for attempt in range(self.max_retries + 1):
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                if attempt == self.max_retries:
                    raise

                logger.warning(f"API Error (Retry: {attempt + 1}/{self.max_retries}): {e}. Waiting {delay}s...")
                await asyncio.sleep(delay)
                delay *= 2  # Exponential backoff

        msg = f"Failed to get response after {self.max_retries} retries."
        logger.error(msg)
        raise TimeoutError(msg)

    async def complete(self, prompt: str) -> str:
        """
        Sends a single prompt to the model and returns the generated text.

        Args:
            prompt: The complete prompt text.

        Returns:
            The raw text produced by the model.
        """
        return await self._execute_with_retry(self._complete_impl, prompt)

    @abstractmethod
    async def _complete_impl(self, prompt: str) -> str:
        pass
