# gemini_chat/chat/history.py
"""
Neutral conversation → Gemini content history.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from contextlib import closing
from typing import Any

from google.genai import types

from gemini_chat.core import (
    ContractViolation,
    DataReadError,
    Message,
    MessageConversionError,
    MessagePart,
    MessagePartType,
    MessageRole,
    loads,
)
from gemini_chat.core.json_utils import JSONDecodeError

log = logging.getLogger(__name__)

_ROLE_MAP = {
    MessageRole.USER.value: "user",
    MessageRole.MODEL.value: "model",
}


def validate_messages(messages: Sequence[Message]) -> None:
    """Fail fast on conversations the adapter cannot send."""
    if not messages:
        raise ContractViolation("no messages")
    if messages[-1].role != MessageRole.USER:
        raise ContractViolation("last message must have user role")


def build_history(
    messages: Sequence[Message],
) -> tuple[list[types.Content], list[types.Part]]:
    """
    Convert messages into Gemini contents.

    The chat API takes prior turns as history and the newest turn as the
    message being sent, so the result is split accordingly.

    Returns:
        (history without the last turn, parts of the last turn)

    Raises:
        ContractViolation: empty conversation, last role not user, unknown
            role or part type
        MessageConversionError: malformed tool call arguments
        DataReadError: a data part's stream could not be read
    """
    validate_messages(messages)

    contents = [convert_message(m) for m in messages]
    last = contents.pop()
    log.debug("Built history of %d turns, live turn has %d parts", len(contents), len(last.parts or []))
    return contents, list(last.parts or [])


def convert_message(message: Message) -> types.Content:
    """Convert one message into a single Gemini turn."""
    role = _ROLE_MAP.get(_value(message.role))
    if role is None:
        raise ContractViolation(f"unknown role {_value(message.role)}")

    return types.Content(role=role, parts=[convert_part(p) for p in message.parts])


def convert_part(part: MessagePart) -> types.Part:
    kind = _value(part.type)

    if kind == MessagePartType.TEXT.value:
        return types.Part(text=part.text())

    if kind == MessagePartType.TOOL_CALL.value:
        tool_call = part.tool_call()
        try:
            args = loads(tool_call.args)
        except JSONDecodeError as e:
            raise MessageConversionError(
                f"error unmarshaling request tool call args: {e}"
            ) from e
        if not isinstance(args, dict):
            raise MessageConversionError(
                "error unmarshaling request tool call args: not a JSON object"
            )
        return types.Part(
            function_call=types.FunctionCall(
                id=tool_call.id, name=tool_call.name, args=args
            )
        )

    if kind == MessagePartType.TOOL_RESULT.value:
        tool_result = part.tool_result()
        response: dict[str, Any] = {"output": tool_result.content}
        if tool_result.error is not None:
            response = {"error": str(tool_result.error)}
        return types.Part(
            function_response=types.FunctionResponse(
                id=tool_result.id, name=tool_result.name, response=response
            )
        )

    if kind == MessagePartType.DATA.value:
        return types.Part(
            inline_data=types.Blob(mime_type=part.mime_type, data=_read_data(part.data))
        )

    raise ContractViolation(f"unknown part type {kind}")


def _read_data(stream: Any) -> bytes:
    with closing(stream):
        try:
            return stream.read()
        except Exception as e:
            raise DataReadError(f"error reading request data: {e}") from e


def _value(tag: Any) -> Any:
    return getattr(tag, "value", tag)
