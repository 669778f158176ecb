# gemini_chat/chat/completer.py
"""
Gemini chat completion
======================

Orchestrates one call: validate → config → history → chat session →
streaming send → lazy neutral response.
"""

from __future__ import annotations

import asyncio
import logging
import struct

from google import genai
from google.genai import types

from gemini_chat.chat.history import build_history, validate_messages
from gemini_chat.chat.stream import stream_parts
from gemini_chat.core import (
    ChatCompleteModel,
    ChatCompleteRequest,
    ChatCompleteResponse,
    LLMError,
    ResponseMetadata,
    SchemaConversionError,
    ToolConversionError,
)
from gemini_chat.schema import convert_response_schema, convert_tools

JSON_MIME_TYPE = "application/json"


def to_float32(value: float) -> float:
    """Round a temperature to the float32 precision the API stores."""
    return struct.unpack("f", struct.pack("f", value))[0]


class ChatCompleter:
    """
    Chat completer bound to one Gemini model.

    Instances hold no per-call state, so concurrent ``chat_complete`` calls
    are independent: each gets its own stream and usage accumulator.
    """

    def __init__(
        self,
        client: genai.Client,
        model: ChatCompleteModel | str = ChatCompleteModel.GEMINI_2_5_FLASH,
        *,
        timeout: float | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self.client = client
        self.model = model.value if isinstance(model, ChatCompleteModel) else model
        self.timeout = timeout
        self.log = log or logging.getLogger(__name__)

    async def chat_complete(
        self, request: ChatCompleteRequest, *, timeout: float | None = None
    ) -> ChatCompleteResponse:
        """
        Start a streaming completion.

        Args:
            request: Neutral request; the last message must be from the user
            timeout: Seconds until the stream is abandoned, defaults to the
                completer's timeout

        Returns:
            Response whose parts are read lazily from the network and whose
            ``meta.usage`` is complete once the parts are drained

        Raises:
            ContractViolation: invalid conversation
            ToolConversionError: a tool could not be declared
            SchemaConversionError: the response schema could not be converted
        """
        self.log.debug(
            "chat_complete model=%s message_count=%d", self.model, len(request.messages)
        )
        validate_messages(request.messages)

        config = self._build_config(request)

        try:
            history, live_parts = build_history(request.messages)
        except LLMError as e:
            self.log.error("Building Gemini history failed: %s", e)
            raise

        try:
            chat = self.client.aio.chats.create(
                model=self.model, config=config, history=history
            )
        except Exception as e:
            self.log.error("Creating Gemini chat failed: %s", e)
            raise
        stream = await chat.send_message_stream(live_parts)

        deadline = None
        timeout = timeout if timeout is not None else self.timeout
        if timeout is not None:
            deadline = asyncio.get_running_loop().time() + timeout

        meta = ResponseMetadata()
        parts = stream_parts(stream, meta, deadline=deadline, log=self.log)
        return ChatCompleteResponse(parts, meta)

    def _build_config(self, request: ChatCompleteRequest) -> types.GenerateContentConfig:
        config: dict = {}

        if request.temperature is not None:
            config["temperature"] = to_float32(request.temperature)
            self.log.debug("temperature=%s", request.temperature)

        if request.system is not None:
            # Gemini wants the system instruction as a user-role content block
            config["system_instruction"] = types.Content(
                role="user", parts=[types.Part(text=request.system)]
            )
            self.log.debug("has_system_prompt=True")

        if request.tools:
            try:
                config["tools"] = convert_tools(request.tools)
            except ToolConversionError as e:
                self.log.error("Tool conversion failed: %s", e)
                raise ToolConversionError(
                    f"error converting tools: {e}", tool_name=e.tool_name, model=self.model
                ) from e
            # Tool calls are handed back to the caller, never run by the SDK
            config["automatic_function_calling"] = types.AutomaticFunctionCallingConfig(
                disable=True
            )
            self.log.debug(
                "tool_count=%d tools=%s",
                len(request.tools),
                sorted(tool.name for tool in request.tools),
            )

        if request.response_schema is not None:
            try:
                config["response_schema"] = convert_response_schema(request.response_schema)
            except SchemaConversionError as e:
                self.log.error("Response schema conversion failed: %s", e)
                raise SchemaConversionError(
                    f"error converting response schema: {e}", model=self.model
                ) from e
            config["response_mime_type"] = JSON_MIME_TYPE
            self.log.debug("has_response_schema=True")

        return types.GenerateContentConfig(**config)
