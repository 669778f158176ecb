# gemini_chat/chat/stream.py
"""
Streaming response reassembly
=============================

Turns the SDK's stream of ``GenerateContentResponse`` chunks into neutral
message parts, in emission order, while keeping token usage up to date.
"""

from __future__ import annotations

import asyncio
import hashlib
import logging
import time
from collections.abc import AsyncIterator
from contextlib import aclosing

from google.genai import types

from gemini_chat.core import (
    MessageConversionError,
    MessagePart,
    ResponseMetadata,
    StreamTimeoutError,
    dumps,
    text_part,
    tool_call_part,
)
from gemini_chat.core.json_utils import JSONEncodeError

logger = logging.getLogger(__name__)


async def stream_parts(
    stream: AsyncIterator[types.GenerateContentResponse],
    meta: ResponseMetadata,
    *,
    deadline: float | None = None,
    log: logging.Logger | None = None,
) -> AsyncIterator[MessagePart]:
    """
    Yield neutral parts from a Gemini chunk stream.

    The next chunk is only pulled when the consumer asks for the next
    part. Any error ends the iteration: transport errors are re-raised
    unchanged, an expired ``deadline`` (event loop time) raises
    ``StreamTimeoutError``. The SDK stream is closed on every exit path.

    Args:
        stream: Async iterator returned by ``chat.send_message_stream``
        meta: Accumulator receiving usage from every chunk that has it
        deadline: Optional absolute ``loop.time()`` deadline
        log: Logger for failures and token counts, defaults to the module logger

    Yields:
        Text and tool call parts
    """
    log = log or logger
    seen_ids: set[str] = set()
    chunk_count = 0

    async with aclosing(stream):
        iterator = aiter(stream)
        while True:
            timeout = asyncio.timeout_at(deadline)
            try:
                async with timeout:
                    chunk = await anext(iterator)
            except StopAsyncIteration:
                break
            except TimeoutError as e:
                if timeout.expired():
                    log.error("Gemini stream deadline exceeded after %d chunks", chunk_count)
                    raise StreamTimeoutError("chat stream deadline exceeded") from e
                raise
            except Exception as e:
                log.error("Gemini chat stream send failed: %s", e)
                raise

            chunk_count += 1
            update_usage(meta, chunk.usage_metadata, log)

            if not chunk.candidates:
                continue
            content = chunk.candidates[0].content
            if content is None or not content.parts:
                continue

            for part in content.parts:
                if part.text:
                    yield text_part(part.text)

                if part.function_call is not None:
                    yield _tool_call(part.function_call, seen_ids)

    log.debug("Gemini stream completed with %d chunks", chunk_count)


def update_usage(
    meta: ResponseMetadata,
    usage: types.GenerateContentResponseUsageMetadata | None,
    log: logging.Logger = logger,
) -> None:
    # Gemini sends usage with every chunk: early chunks carry prompt tokens
    # only, the final one carries the complete counts. Last write wins.
    if usage is None:
        return

    prompt = usage.prompt_token_count or 0
    thoughts = usage.thoughts_token_count or 0
    completion = usage.candidates_token_count or 0

    meta.usage.prompt_tokens = prompt
    meta.usage.thoughts_tokens = thoughts
    meta.usage.completion_tokens = completion
    meta.usage.total_tokens = prompt + thoughts + completion

    log.debug(
        "Usage: prompt=%d thoughts=%d completion=%d", prompt, thoughts, completion
    )


def _tool_call(function_call: types.FunctionCall, seen_ids: set[str]) -> MessagePart:
    try:
        args = dumps(function_call.args or {})
    except JSONEncodeError as e:
        raise MessageConversionError(
            f"error marshaling response tool call args: {e}"
        ) from e

    call_id = function_call.id
    if not call_id:
        call_id = create_random_id()
        while call_id in seen_ids:
            call_id = create_random_id()
    seen_ids.add(call_id)

    return tool_call_part(call_id, function_call.name or "", args)


def create_random_id() -> str:
    """Hex SHA-256 of the current UTC time in RFC 3339 nanosecond format."""
    seconds, nanos = divmod(time.time_ns(), 1_000_000_000)
    stamp = time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(seconds))
    return hashlib.sha256(f"{stamp}.{nanos:09d}Z".encode()).hexdigest()
