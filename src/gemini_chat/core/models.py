"""
Neutral Conversation Models
===========================

Provider-agnostic Pydantic models for messages, parts, tools, schemas,
requests and responses. The Gemini-specific code only ever reads these.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from gemini_chat.core.enums import MessagePartType, MessageRole, SchemaType
from gemini_chat.core.errors import ContractViolation


class ToolCall(BaseModel):
    """A model-initiated function invocation."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    args: str = Field(default="{}", description="JSON-encoded arguments")


class ToolResult(BaseModel):
    """The caller-supplied outcome of executing a tool call."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: str
    name: str
    content: str = ""
    error: str | Exception | None = None


class MessagePart(BaseModel):
    """
    Tagged union over text, tool call, tool result and binary data.

    Exactly the payload named by ``type`` is set; building a part with a
    missing or extra payload fails validation. Reading another payload
    through the accessors raises ``ContractViolation``.
    """

    model_config = ConfigDict(frozen=True)

    type: MessagePartType
    text_value: str | None = None
    tool_call_value: ToolCall | None = None
    tool_result_value: ToolResult | None = None
    # Readable binary stream (anything with ``read()``), consumed once
    data: Any = None
    mime_type: str | None = None

    @model_validator(mode="after")
    def validate_payload(self) -> MessagePart:
        """Exactly the payload named by ``type`` is set."""
        expected = _PAYLOAD_FIELDS.get(self.type)
        for field in _PAYLOAD_FIELDS.values():
            is_set = getattr(self, field) is not None
            if field == expected and not is_set:
                raise ValueError(f"{self.type.value} part has no {field}")
            if field != expected and is_set:
                raise ValueError(f"{self.type.value} part must not set {field}")
        return self

    def _payload(self, expected: MessagePartType) -> Any:
        if self.type != expected:
            raise ContractViolation(f"message part is not {expected.value}")
        value = getattr(self, _PAYLOAD_FIELDS[expected])
        if value is None:
            raise ContractViolation(f"{expected.value} part has no payload")
        return value

    def text(self) -> str:
        return self._payload(MessagePartType.TEXT)

    def tool_call(self) -> ToolCall:
        return self._payload(MessagePartType.TOOL_CALL)

    def tool_result(self) -> ToolResult:
        return self._payload(MessagePartType.TOOL_RESULT)


_PAYLOAD_FIELDS = {
    MessagePartType.TEXT: "text_value",
    MessagePartType.TOOL_CALL: "tool_call_value",
    MessagePartType.TOOL_RESULT: "tool_result_value",
    MessagePartType.DATA: "data",
}


def text_part(text: str) -> MessagePart:
    return MessagePart(type=MessagePartType.TEXT, text_value=text)


def tool_call_part(id: str, name: str, args: str) -> MessagePart:
    return MessagePart(
        type=MessagePartType.TOOL_CALL,
        tool_call_value=ToolCall(id=id, name=name, args=args),
    )


def tool_result_part(result: ToolResult) -> MessagePart:
    return MessagePart(type=MessagePartType.TOOL_RESULT, tool_result_value=result)


def data_part(mime_type: str, data: Any) -> MessagePart:
    return MessagePart(type=MessagePartType.DATA, mime_type=mime_type, data=data)


class Message(BaseModel):
    """One conversation turn: a role and its ordered parts."""

    role: MessageRole
    parts: list[MessagePart] = Field(default_factory=list)

    @classmethod
    def user_text(cls, text: str) -> Message:
        return cls(role=MessageRole.USER, parts=[text_part(text)])

    @classmethod
    def model_text(cls, text: str) -> Message:
        return cls(role=MessageRole.MODEL, parts=[text_part(text)])

    @classmethod
    def user_data(cls, mime_type: str, data: Any) -> Message:
        return cls(role=MessageRole.USER, parts=[data_part(mime_type, data)])

    @classmethod
    def user_tool_result(cls, result: ToolResult) -> Message:
        return cls(role=MessageRole.USER, parts=[tool_result_part(result)])


class Schema(BaseModel):
    """
    Neutral response schema.

    Fields accept their camelCase JSON Schema spelling too, so
    ``Schema.model_validate({"type": "object", "anyOf": [...]})`` works.
    Constraint fields are carried as-is and never interpreted here.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    type: SchemaType | str | None = None
    properties: dict[str, Schema] | None = None
    property_ordering: list[str] | None = None
    required: list[str] | None = None
    items: Schema | None = None
    any_of: list[Schema] | None = None

    title: str | None = None
    description: str | None = None
    format: str | None = None
    pattern: str | None = None
    enum: list[str] | None = None
    nullable: bool | None = None
    default: Any = None
    example: Any = None
    min_length: int | None = None
    max_length: int | None = None
    min_items: int | None = None
    max_items: int | None = None
    min_properties: int | None = None
    max_properties: int | None = None
    minimum: float | None = None
    maximum: float | None = None


class ToolSchema(BaseModel):
    """
    Loosely-typed tool parameter schema.

    ``properties`` is either a map of property definitions, a full JSON
    Schema object (``{"properties": ..., "required": ...}``) or any value
    that serializes to one.
    """

    properties: Any = None


class Tool(BaseModel):
    """A function the model may call."""

    name: str
    description: str = ""
    parameters: ToolSchema = Field(default_factory=ToolSchema)


class ChatCompleteRequest(BaseModel):
    """Everything needed for one chat completion."""

    messages: list[Message] = Field(default_factory=list)
    # range checked by the backend
    temperature: float | None = None
    system: str | None = None
    tools: list[Tool] = Field(default_factory=list)
    response_schema: Schema | None = None


class Usage(BaseModel):
    """Token counts reported by the backend."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    thoughts_tokens: int = 0
    total_tokens: int = 0


class ResponseMetadata(BaseModel):
    """Mutable per-call accumulator, complete only once the parts are drained."""

    usage: Usage = Field(default_factory=Usage)


class ChatCompleteResponse:
    """
    Lazy response: a single-pass async iterator of parts plus metadata.

    ``meta`` is updated in place while the parts are consumed.
    """

    def __init__(self, parts: AsyncIterator[MessagePart], meta: ResponseMetadata):
        self._parts = parts
        self._consumed = False
        self.meta = meta

    def parts(self) -> AsyncIterator[MessagePart]:
        if self._consumed:
            raise ContractViolation("response parts can only be iterated once")
        self._consumed = True
        return self._parts

    async def text(self) -> str:
        """Drain the response and join its text parts."""
        chunks = []
        async for part in self.parts():
            if part.type == MessagePartType.TEXT:
                chunks.append(part.text())
        return "".join(chunks)

    async def aclose(self) -> None:
        """Stop the underlying stream without draining it."""
        aclose = getattr(self._parts, "aclose", None)
        if aclose is not None:
            await aclose()
