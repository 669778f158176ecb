"""
Core Enumerations
=================

Type-safe enums for roles, part kinds, schema types and model identifiers.
No more magic strings!
"""

from enum import Enum


class MessageRole(str, Enum):
    """Chat message role."""

    USER = "user"
    MODEL = "model"


class MessagePartType(str, Enum):
    """Kind of payload a message part carries."""

    TEXT = "text"
    TOOL_CALL = "tool_call"
    TOOL_RESULT = "tool_result"
    DATA = "data"


class SchemaType(str, Enum):
    """Neutral schema value types."""

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"


class ChatCompleteModel(str, Enum):
    """Gemini models usable for chat completion."""

    GEMINI_2_0_FLASH = "models/gemini-2.0-flash"
    GEMINI_2_5_FLASH = "models/gemini-2.5-flash"
    GEMINI_2_5_PRO = "models/gemini-2.5-pro"


class ErrorSeverity(str, Enum):
    """How a caller should treat a failure."""

    PERMANENT = "permanent"
    RECOVERABLE = "recoverable"
