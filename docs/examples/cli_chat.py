import asyncio
import os
from typing import Annotated, List

from dotenv import load_dotenv
from openai import AsyncOpenAI
from pydantic import Field

from tool_chat_lib import ChatOrchestrator, ChatSettings, ToolRegistry, UsageLog, UserMessage, AssistantMessage
from tool_chat_lib.chat_core import BaseMessage, ScrollToLocationTool, setup_logging
from tool_chat_lib.llm_impl import OpenAICompletionClient

# Load environment variables
load_dotenv()


def build_registry() -> ToolRegistry:
    registry = ToolRegistry()
    registry.register(ScrollToLocationTool())

    @registry.tool
    def word_count(text: Annotated[str, Field(description="Text to count words in")]) -> int:
        """Count the words in a piece of text."""
        return len(text.split())

    return registry


async def main() -> None:
    """
    Main function to run a CLI chat with tool calling over an OpenAI-compatible endpoint.
    """
    print("Welcome to the CLI Chat!")
    setup_logging()

    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        print("Error: OPENAI_API_KEY not found in environment variables.")
        return

    client = OpenAICompletionClient(
        client=AsyncOpenAI(api_key=api_key, base_url=os.getenv("OPENAI_BASE_URL")),
        model_name=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
    )
    usage_log = UsageLog()
    orchestrator = ChatOrchestrator(
        client,
        build_registry(),
        usage_sink=usage_log,
        settings=ChatSettings.from_env(),
    )

    # Pretend a paper is open so focus-only tools are offered.
    focus_id = os.getenv("FOCUS_PAPER_ID", "demo-paper")
    history: List[BaseMessage] = []

    print("\nStart chatting! Type 'exit' or 'quit' to stop.")
    while True:
        user_input = input("\nYou: ").strip()
        if user_input.lower() in ["exit", "quit"]:
            print(f"Goodbye! {usage_log.stats().total_calls} calls logged.")
            break

        if not user_input:
            continue

        async for event in orchestrator.send_message_stream("cli", user_input, focus_id=focus_id, history=history):
            if event.type == "tool_call_started":
                print(f"  [tool] {event.tool_name} ...")
            elif event.type == "tool_call_finished":
                print(f"  [tool] {event.tool_name}: {'ok' if event.success else event.error}")
            elif event.type == "done":
                print(f"Assistant: {event.content}")
                history += [UserMessage(content=user_input), AssistantMessage(content=event.content)]
            elif event.type == "error":
                print(f"An error occurred: {event.message}")


if __name__ == "__main__":
    asyncio.run(main())
