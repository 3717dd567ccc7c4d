"""Prompt text for tool-enabled chat.

The model is told about the available tools in plain text and asked to call them
with ```tool``` code blocks, which ``ToolCallParser`` understands.
"""

import json
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from .models import FocusEntity
from ..tools.models import ExecutionRecord, ToolDefinition

_TOOL_BLOCK_EXAMPLE = """```tool
{
  "name": "tool_name",
  "arguments": {
    "param": "value"
  }
}
```"""


@dataclass(frozen=True)
class ChatExample:
    """Example exchange used for few-shot prompting."""

    user: str
    assistant: str


FEW_SHOT_EXAMPLES: List[ChatExample] = [
    ChatExample(
        user="Can you highlight where they discuss the transformer architecture?",
        assistant=(
            "I'll search for and highlight that section.\n\n"
            "```tool\n"
            '{\n  "name": "search_current_paper",\n  "arguments": {\n    "query": "transformer architecture"\n  }\n}\n'
            "```"
        ),
    ),
    ChatExample(
        user="Find related papers about attention mechanisms in my library",
        assistant=(
            "Let me search your library for papers about attention mechanisms.\n\n"
            "```tool\n"
            '{\n  "name": "search_library",\n  "arguments": {\n    "query": "attention mechanism",\n    "limit": 5\n  }\n}\n'
            "```"
        ),
    ),
    ChatExample(
        user="Where is the methodology section?",
        assistant=(
            "I'll help you navigate to the methodology section.\n\n"
            "```tool\n"
            '{\n  "name": "scroll_to_location",\n  "arguments": {\n    "section": "methodology"\n  }\n}\n'
            "```"
        ),
    ),
]


class ToolCallingPrompts:
    """Builders for the system prompt and the tool-results continuation prompt."""

    @staticmethod
    def build_system_prompt(tools: Sequence[ToolDefinition], focus: Optional[FocusEntity] = None) -> str:
        """Build the system prompt with the tool catalogue.

        Args:
            tools: Definitions of the tools the model may call in this turn.
            focus: The focus document, if one was resolved.

        Returns:
            The system prompt text.
        """
        lines: List[str] = ["You are a research assistant helping users understand academic papers.", ""]

        if tools:
            lines.append("You have access to the following tools:")
            lines.append("")
            for tool in tools:
                lines.append(f"## {tool.name}")
                lines.append(tool.description)
                lines.append("")
                if tool.parameters:
                    lines.append("Parameters:")
                    for name, param in tool.parameters.items():
                        required = "(required)" if param.required else "(optional)"
                        default_info = f" [default: {json.dumps(param.default)}]" if param.default is not None else ""
                        lines.append(f"- {name} ({param.type.value}): {param.description} {required}{default_info}")
                    lines.append("")

            lines.append("To use a tool, respond with a code block:")
            lines.append(_TOOL_BLOCK_EXAMPLE)
            lines.append("")
            lines.append("You can call tools multiple times in one response.")
            lines.append("After tool results, you'll receive them and can continue the conversation.")
            lines.append("")

        if focus is not None:
            lines.append("Current paper:")
            lines.append(f"- Title: {focus.title}")
            lines.append(f"- Authors: {focus.formatted_authors}")
            if focus.year is not None:
                lines.append(f"- Year: {focus.year}")
            if focus.venue:
                lines.append(f"- Conference: {focus.venue}")
            lines.append("")

        lines.extend(
            [
                "Guidelines:",
                "- Be concise and accurate",
                "- When answering questions about a paper, use tools to find specific information",
                "- Always cite specific sections or page numbers when possible",
                "- If you don't know something, say so rather than guessing",
            ]
        )
        return "\n".join(lines)

    @classmethod
    def build_enhanced_system_prompt(
        cls,
        tools: Sequence[ToolDefinition],
        focus: Optional[FocusEntity] = None,
        include_examples: bool = False,
    ) -> str:
        """Build the system prompt, optionally followed by few-shot examples."""
        base_prompt = cls.build_system_prompt(tools, focus)
        if not include_examples or not FEW_SHOT_EXAMPLES:
            return base_prompt

        lines = [base_prompt, "", "Examples of tool usage:", ""]
        for example in FEW_SHOT_EXAMPLES:
            lines.append(f"User: {example.user}")
            lines.append(f"Assistant: {example.assistant}")
            lines.append("")
        return "\n".join(lines)

    @classmethod
    def build_tool_results_prompt(
        cls, original_message: str, llm_response: str, records: Sequence[ExecutionRecord]
    ) -> str:
        """Build the continuation prompt that feeds tool results back to the model.

        Args:
            original_message: The user's message for this turn.
            llm_response: The model's previous raw response, tool blocks included.
            records: Executions performed for that response, in order.

        Returns:
            The continuation prompt text.
        """
        lines = ["Your previous response:", llm_response, "", "Tool execution results:"]
        for record in records:
            lines.append(f"Tool: {record.tool_name}")
            lines.append(f"Success: {'true' if record.success else 'false'}")
            if record.success:
                lines.append(f"Result: {cls.format_tool_result(record.data)}")
            else:
                lines.append(f"Error: {record.error}")
            if record.metadata:
                lines.append(f"Metadata: {cls.format_tool_result(record.metadata)}")
            lines.append("")

        lines.extend(
            [
                "Please continue your response to the user's original question:",
                f'"{original_message}"',
                "",
                "You can call more tools if needed, or provide your final answer.",
            ]
        )
        return "\n".join(lines)

    @classmethod
    def format_tool_result(cls, data: Any) -> str:
        """Render tool output for the prompt."""
        if data is None:
            return "null"
        if isinstance(data, bool):
            return "true" if data else "false"
        if isinstance(data, (str, int, float)):
            return str(data)
        if isinstance(data, dict):
            return "{" + ", ".join(f"{k}: {cls.format_tool_result(v)}" for k, v in data.items()) + "}"
        if isinstance(data, (list, tuple)):
            return "[" + ", ".join(cls.format_tool_result(item) for item in data) + "]"
        return str(data)
