# tests/chat/test_history.py
"""
Tests for converting neutral conversations into Gemini history
"""

import io

import pytest
from google.genai import types

from gemini_chat.chat import build_history, convert_part
from gemini_chat.core import (
    ContractViolation,
    DataReadError,
    Message,
    MessageConversionError,
    MessagePart,
    MessageRole,
    ToolResult,
    dumps,
    text_part,
    tool_call_part,
    tool_result_part,
)


class BrokenStream(io.RawIOBase):
    def readable(self):
        return True

    def read(self, size=-1):
        raise OSError("disk on fire")


def conversation(n):
    """n messages alternating user/model, ending with a user turn."""
    messages = []
    for i in range(n):
        from_user = (n - 1 - i) % 2 == 0
        messages.append(Message.user_text(f"u{i}") if from_user else Message.model_text(f"m{i}"))
    return messages


# ---------------------------------------------------------------------------
# Preconditions
# ---------------------------------------------------------------------------


def test_empty_conversation_fails_fast():
    with pytest.raises(ContractViolation, match="no messages"):
        build_history([])


def test_last_message_must_be_user():
    with pytest.raises(ContractViolation, match="last message must have user role"):
        build_history([Message.user_text("Hi!"), Message.model_text("Hello")])


def test_unknown_role_fails_fast():
    system = Message.model_construct(role="system", parts=[text_part("Be nice")])
    with pytest.raises(ContractViolation, match="unknown role system"):
        build_history([system, Message.user_text("Hi!")])


def test_unknown_part_type_fails_fast():
    video = MessagePart.model_construct(type="video")
    with pytest.raises(ContractViolation, match="unknown part type video"):
        build_history([Message(role=MessageRole.USER, parts=[video])])


# ---------------------------------------------------------------------------
# History split
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("n", [1, 2, 3, 5])
def test_history_split(n):
    history, live = build_history(conversation(n))

    assert len(history) == n - 1
    assert [p.text for p in live] == [f"u{n - 1}"]


def test_roles_are_mapped():
    history, _ = build_history(conversation(3))
    assert [c.role for c in history] == ["user", "model"]


def test_live_turn_keeps_all_parts_in_order():
    msg = Message(
        role=MessageRole.USER,
        parts=[text_part("first"), text_part("second"), text_part("third")],
    )
    _, live = build_history([msg])
    assert [p.text for p in live] == ["first", "second", "third"]


# ---------------------------------------------------------------------------
# Parts
# ---------------------------------------------------------------------------


def test_text_part_copied_verbatim():
    part = convert_part(text_part("  Hi!\n"))
    assert part.text == "  Hi!\n"


def test_tool_call_round_trip():
    args = {"path": "readme.txt", "depth": 2, "flags": [True, None], "nested": {"a": 1.5}}
    part = convert_part(tool_call_part("call_1", "read_file", dumps(args)))

    assert part.function_call.id == "call_1"
    assert part.function_call.name == "read_file"
    assert part.function_call.args == args


@pytest.mark.parametrize("args", ["{not json", "[1, 2]"])
def test_tool_call_bad_args(args):
    with pytest.raises(MessageConversionError, match="error unmarshaling request tool call args"):
        convert_part(tool_call_part("call_1", "read_file", args))


def test_tool_result_output():
    part = convert_part(
        tool_result_part(ToolResult(id="call_1", name="read_file", content="Hi!\n"))
    )

    assert part.function_response.id == "call_1"
    assert part.function_response.name == "read_file"
    assert part.function_response.response == {"output": "Hi!\n"}


@pytest.mark.parametrize("error", ["file not found", FileNotFoundError("file not found")])
def test_tool_result_error_suppresses_output(error):
    part = convert_part(
        tool_result_part(
            ToolResult(id="call_1", name="read_file", content="ignored", error=error)
        )
    )
    assert part.function_response.response == {"error": "file not found"}


def test_data_part_is_read_and_closed():
    stream = io.BytesIO(b"\xff\xd8\xff")
    part = convert_part(Message.user_data("image/jpeg", stream).parts[0])

    assert part.inline_data.mime_type == "image/jpeg"
    assert part.inline_data.data == b"\xff\xd8\xff"
    assert stream.closed


def test_data_read_failure_closes_stream():
    stream = BrokenStream()
    with pytest.raises(DataReadError, match="error reading request data: disk on fire"):
        build_history([Message.user_data("audio/mp4", stream)])
    assert stream.closed


def test_closed_data_stream_is_read_error():
    stream = io.BytesIO(b"\x89PNG")
    stream.close()

    with pytest.raises(DataReadError, match="error reading request data: I/O operation on closed file"):
        build_history([Message.user_data("image/png", stream)])


def test_tool_conversation():
    call = tool_call_part("call_1", "read_file", '{"path": "readme.txt"}')
    messages = [
        Message.user_text("What is in the readme.txt file?"),
        Message(role=MessageRole.MODEL, parts=[call]),
        Message.user_tool_result(ToolResult(id="call_1", name="read_file", content="Hi!\n")),
    ]

    history, live = build_history(messages)

    assert isinstance(history[1].parts[0].function_call, types.FunctionCall)
    assert live[0].function_response.response == {"output": "Hi!\n"}
