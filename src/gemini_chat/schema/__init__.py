# gemini_chat/schema/__init__.py
"""
Conversion of neutral tools and schemas to ``google.genai`` types.
"""

from .convert import (
    canonical_properties,
    convert_property,
    convert_response_schema,
    convert_tool_schema,
    convert_tool_to_function,
    convert_tools,
)

__all__ = [
    "canonical_properties",
    "convert_property",
    "convert_response_schema",
    "convert_tool_schema",
    "convert_tool_to_function",
    "convert_tools",
]
