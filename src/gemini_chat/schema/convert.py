# gemini_chat/schema/convert.py
"""
Schema and tool conversion
~~~~~~~~~~~~~~~~~~~~~~~~~~

Two independent paths end in ``google.genai.types.Schema``:

* tool parameters arrive loosely typed (ad hoc JSON-like maps) and go
  through :func:`convert_tool_schema`;
* structured-output schemas arrive as the strict neutral
  :class:`~gemini_chat.core.Schema` and go through
  :func:`convert_response_schema`.

Unknown type tags become STRING on both paths.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from google.genai import types
from pydantic import BaseModel, ValidationError

from gemini_chat.core import (
    Schema,
    SchemaConversionError,
    SchemaType,
    Tool,
    ToolConversionError,
    ToolSchema,
    dumps,
    loads,
)
from gemini_chat.core.json_utils import JSONDecodeError, JSONEncodeError

log = logging.getLogger(__name__)

_TYPE_MAP: dict[str, types.Type] = {
    "string": types.Type.STRING,
    "number": types.Type.NUMBER,
    "integer": types.Type.INTEGER,
    "boolean": types.Type.BOOLEAN,
    "array": types.Type.ARRAY,
    "object": types.Type.OBJECT,
}

# copied verbatim whatever the resolved type is
_CONSTRAINT_FIELDS = (
    "title",
    "description",
    "format",
    "pattern",
    "enum",
    "nullable",
    "default",
    "example",
    "min_length",
    "max_length",
    "min_items",
    "max_items",
    "min_properties",
    "max_properties",
    "minimum",
    "maximum",
)


def _resolve_type(value: Any) -> types.Type:
    if isinstance(value, SchemaType):
        value = value.value
    if not isinstance(value, str):
        return types.Type.STRING
    return _TYPE_MAP.get(value, types.Type.STRING)


def _build_schema(kwargs: dict[str, Any]) -> types.Schema:
    try:
        return types.Schema(**kwargs)
    except ValidationError as e:
        raise SchemaConversionError(f"invalid schema: {e}") from e


# ───────────────────────────────────────────────────────── tools ──────────


def convert_tools(tools: Sequence[Tool]) -> list[types.Tool]:
    """
    Convert neutral tools into a single Gemini tool group.

    Declarations keep the input order. The first failing tool aborts the
    whole batch.

    Raises:
        ToolConversionError: naming the offending tool
    """
    declarations = []
    for tool in tools:
        try:
            declarations.append(convert_tool_to_function(tool))
        except SchemaConversionError as e:
            raise ToolConversionError(
                f"converting tool {tool.name}: {e}", tool_name=tool.name
            ) from e

    log.debug("Converted %d tool declarations", len(declarations))
    return [types.Tool(function_declarations=declarations)]


def convert_tool_to_function(tool: Tool) -> types.FunctionDeclaration:
    """Convert one neutral tool to a function declaration."""
    try:
        parameters = convert_tool_schema(tool.parameters)
    except SchemaConversionError as e:
        raise SchemaConversionError(f"converting schema: {e}") from e

    return types.FunctionDeclaration(
        name=tool.name,
        description=tool.description,
        parameters=parameters,
    )


def canonical_properties(properties: Any) -> dict[str, Any]:
    """
    Resolve loosely-typed tool properties to a plain dict.

    Mappings are taken as they are; anything else is pushed through a JSON
    round trip.

    Raises:
        SchemaConversionError: when the value does not marshal to a JSON object
    """
    if isinstance(properties, Mapping):
        return dict(properties)

    if isinstance(properties, BaseModel):
        properties = properties.model_dump(mode="json", exclude_none=True)

    try:
        encoded = dumps(properties)
    except JSONEncodeError as e:
        raise SchemaConversionError(f"marshaling properties: {e}") from e

    try:
        decoded = loads(encoded)
    except JSONDecodeError as e:
        raise SchemaConversionError(f"unmarshaling properties: {e}") from e

    if not isinstance(decoded, dict):
        raise SchemaConversionError(
            f"unmarshaling properties: expected a JSON object, got {type(decoded).__name__}"
        )
    return decoded


def convert_tool_schema(tool_schema: ToolSchema) -> types.Schema:
    """
    Convert tool parameters to an object schema.

    Accepts either a JSON Schema object (``properties`` + ``required``) or
    a flat map where every key is a property definition.
    """
    if not tool_schema.properties:
        return types.Schema(type=types.Type.OBJECT, properties={})

    props = canonical_properties(tool_schema.properties)
    required: list[str] | None = None

    nested = props.get("properties")
    if isinstance(nested, Mapping):
        # Standard JSON Schema format
        definitions = nested
        raw_required = props.get("required")
        if isinstance(raw_required, list):
            required = [r for r in raw_required if isinstance(r, str)]
    else:
        definitions = props

    converted = {}
    for name, definition in definitions.items():
        try:
            converted[name] = convert_property(definition)
        except SchemaConversionError as e:
            raise SchemaConversionError(f"converting property {name}: {e}") from e

    return types.Schema(type=types.Type.OBJECT, properties=converted, required=required)


def convert_property(definition: Any) -> types.Schema:
    """Convert one JSON-like property definition, recursively."""
    if not isinstance(definition, Mapping):
        raise SchemaConversionError("property is not a map")

    kwargs: dict[str, Any] = {"type": _resolve_type(definition.get("type"))}

    if kwargs["type"] == types.Type.ARRAY:
        items = definition.get("items")
        if isinstance(items, Mapping):
            try:
                kwargs["items"] = convert_property(items)
            except SchemaConversionError as e:
                raise SchemaConversionError(f"converting array items: {e}") from e

    elif kwargs["type"] == types.Type.OBJECT:
        nested = definition.get("properties")
        if isinstance(nested, Mapping):
            properties = {}
            for name, sub in nested.items():
                try:
                    properties[name] = convert_property(sub)
                except SchemaConversionError as e:
                    raise SchemaConversionError(
                        f"converting object property {name}: {e}"
                    ) from e
            kwargs["properties"] = properties
        required = definition.get("required")
        if isinstance(required, list):
            kwargs["required"] = [r for r in required if isinstance(r, str)]

    description = definition.get("description")
    if isinstance(description, str):
        kwargs["description"] = description

    return _build_schema(kwargs)


# ─────────────────────────────────────────────── response schema ──────────


def convert_response_schema(schema: Schema) -> types.Schema:
    """
    Convert a neutral response schema, mirroring its structure 1:1.

    Raises:
        SchemaConversionError: wrapped with the property name, ``items`` or
            the ``any_of`` index of the failing subtree
    """
    kwargs: dict[str, Any] = {"type": _resolve_type(schema.type)}

    if kwargs["type"] == types.Type.OBJECT:
        if schema.properties is not None:
            properties = {}
            for name, sub in schema.properties.items():
                try:
                    properties[name] = convert_response_schema(sub)
                except SchemaConversionError as e:
                    raise SchemaConversionError(f"converting property {name}: {e}") from e
            kwargs["properties"] = properties
        if schema.required is not None:
            kwargs["required"] = list(schema.required)
        if schema.property_ordering is not None:
            kwargs["property_ordering"] = list(schema.property_ordering)

    elif kwargs["type"] == types.Type.ARRAY and schema.items is not None:
        try:
            kwargs["items"] = convert_response_schema(schema.items)
        except SchemaConversionError as e:
            raise SchemaConversionError(f"converting items: {e}") from e

    for field in _CONSTRAINT_FIELDS:
        value = getattr(schema, field)
        if value is not None:
            kwargs[field] = value

    if schema.any_of:
        any_of = []
        for i, sub in enumerate(schema.any_of):
            try:
                any_of.append(convert_response_schema(sub))
            except SchemaConversionError as e:
                raise SchemaConversionError(f"converting any_of[{i}]: {e}") from e
        kwargs["any_of"] = any_of

    return _build_schema(kwargs)
