from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion
from typing import Optional

from tool_chat_lib.chat_core import CompletionClient
from tool_chat_lib.chat_core.logger import get_logger

logger = get_logger(__name__)


class OpenAICompletionClient(CompletionClient):
    """
    Text completion over an OpenAI-compatible chat completions endpoint.

    The orchestrator sends the whole prompt as one user message and reads back plain
    text; tools are described inside the prompt, so no ``tools`` parameter is sent.
    This makes the client usable with gateways that lack native function calling.
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        model_name: str,
        sys_instruction: Optional[str] = None,
        temp: float = 0.7,
        max_tokens: int = 3000,
        max_retries: int = 3,
        base_retry_delay: float = 1.0,
    ):
        """
        Initializes the OpenAI completion client.

        Args:
            client: The initialized AsyncOpenAI client.
            model_name: The identifier for the model to use.
            sys_instruction: Optional system message sent ahead of every prompt.
            temp: The temperature for text generation, controlling randomness.
            max_tokens: The maximum number of tokens to generate in the response.
            max_retries: Retries for failed API calls, with exponential backoff.
            base_retry_delay: Delay in seconds before the first retry.
        """
        super().__init__(max_retries=max_retries, base_retry_delay=base_retry_delay)
        self.client: AsyncOpenAI = client
        self.model: str = model_name
        self.sys_instruction = sys_instruction
        self.temperature = temp
        self.max_tokens = max_tokens

    async def _complete_impl(self, prompt: str) -> str:
        messages = []
        if self.sys_instruction:
            messages.append({"role": "system", "content": self.sys_instruction})
        messages.append({"role": "user", "content": prompt})

        response: ChatCompletion = await self.client.chat.completions.create(
            model=self.model,
            messages=messages,  # type: ignore[arg-type]
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        return self._extract_text(response)

    @staticmethod
    def _extract_text(response: ChatCompletion) -> str:
        """Return the text of the first choice, or an empty string."""
        if not response.choices:
            logger.warning("Completion response has no choices.")
            return ""
        return response.choices[0].message.content or ""
