from tool_chat_lib.chat_core import ToolCallParser
from tool_chat_lib.chat_core.tools.parsing import INVALID_CALL_NAME

from conftest import tool_block


def test_parse_text_without_blocks() -> None:
    result = ToolCallParser().parse("Hello!\n\n\n\nHow can I help?")

    assert not result.has_calls
    assert result.calls == []
    assert not result.all_valid
    assert result.text == "Hello!\n\nHow can I help?"


def test_parse_empty_response() -> None:
    result = ToolCallParser().parse("")

    assert not result.has_calls
    assert result.text == ""


def test_parse_single_valid_block() -> None:
    response = "Let me jump there.\n\n" + tool_block("go_to_page", {"page": 3}) + "\n\nOne moment."

    result = ToolCallParser().parse(response)

    assert result.has_calls
    assert result.all_valid
    assert len(result.valid_calls) == 1
    call = result.valid_calls[0]
    assert call.name == "go_to_page"
    assert call.arguments == {"page": 3}
    assert call.error is None
    assert "```" not in result.text
    assert result.text == "Let me jump there.\n\nOne moment."


def test_parse_malformed_json_block() -> None:
    response = "Trying a tool.\n```tool\n{\"name\": \"go_to_page\", \"arguments\": {\"page\": }\n```"

    result = ToolCallParser().parse(response)

    assert result.has_calls
    assert result.valid_calls == []
    assert len(result.invalid_calls) == 1
    invalid = result.invalid_calls[0]
    assert invalid.name == INVALID_CALL_NAME
    assert invalid.error is not None
    assert invalid.error.startswith("Failed to parse tool call")
    assert '"page": }' in invalid.raw
    assert result.text == "Trying a tool."


def test_parse_shape_mismatch_is_invalid() -> None:
    response = "\n".join(
        [
            "```tool",
            '{"arguments": {"page": 1}}',
            "```",
            "```tool",
            '{"name": "go_to_page", "arguments": [1, 2]}',
            "```",
            "```tool",
            '["not", "an", "object"]',
            "```",
        ]
    )

    result = ToolCallParser().parse(response)

    assert len(result.calls) == 3
    assert all(call.name == INVALID_CALL_NAME for call in result.calls)
    assert all(call.error for call in result.calls)


def test_parse_mixed_blocks_keeps_order() -> None:
    response = (
        "First\n"
        + tool_block("a", {"x": "1"})
        + "\nMiddle\n```tool\nnot json\n```\n"
        + tool_block("b", {})
        + "\nLast"
    )

    result = ToolCallParser().parse(response)

    assert [call.name for call in result.calls] == ["a", INVALID_CALL_NAME, "b"]
    assert [call.name for call in result.valid_calls] == ["a", "b"]
    assert result.has_calls
    assert not result.all_valid
    assert "First" in result.text
    assert "Middle" in result.text
    assert "Last" in result.text


def test_parse_missing_arguments_defaults_to_empty() -> None:
    result = ToolCallParser().parse('```tool\n{"name": "list_tags"}\n```')

    assert result.all_valid
    assert result.calls[0].arguments == {}


def test_parse_strips_html_comments() -> None:
    result = ToolCallParser().parse("<!-- tools: none -->\nThe answer is 42.")

    assert not result.has_calls
    assert result.text == "The answer is 42."


def test_parse_never_raises_on_garbage() -> None:
    parser = ToolCallParser()
    for response in ["```tool\n\n```", "```tool\n```", "```tool", "```tool\n{}\n```", "\x00\x01```"]:
        result = parser.parse(response)
        assert all(call.error is not None for call in result.calls)


def test_parse_oversized_integer_is_invalid() -> None:
    response = 'Jumping.\n```tool\n{"name": "go_to_page", "arguments": {"page": ' + "1" * 5000 + "}}\n```"

    result = ToolCallParser().parse(response)

    assert result.valid_calls == []
    assert len(result.invalid_calls) == 1
    assert result.invalid_calls[0].error.startswith("Failed to parse tool call")
    assert result.text == "Jumping."


def test_parse_deeply_nested_block_is_invalid() -> None:
    result = ToolCallParser().parse("```tool\n" + "[" * 100000 + "\n```")

    assert len(result.calls) == 1
    assert not result.calls[0].is_valid
    assert result.calls[0].error.startswith("Failed to parse tool call")


def test_parse_rejects_non_standard_constants() -> None:
    parser = ToolCallParser()
    for constant in ["NaN", "Infinity", "-Infinity"]:
        response = '```tool\n{"name": "go_to_page", "arguments": {"page": ' + constant + "}}\n```"

        result = parser.parse(response)

        assert result.valid_calls == []
        assert constant in (result.invalid_calls[0].error or "")
