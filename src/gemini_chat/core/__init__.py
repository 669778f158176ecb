# gemini_chat/core/__init__.py
"""
Core neutral types, enums, errors and JSON helpers.
"""

from .enums import (
    ChatCompleteModel,
    ErrorSeverity,
    MessagePartType,
    MessageRole,
    SchemaType,
)
from .errors import (
    ContractViolation,
    ConversionError,
    DataReadError,
    LLMError,
    MessageConversionError,
    SchemaConversionError,
    StreamTimeoutError,
    ToolConversionError,
    TransportError,
)
from .json_utils import dumps, loads
from .models import (
    ChatCompleteRequest,
    ChatCompleteResponse,
    Message,
    MessagePart,
    ResponseMetadata,
    Schema,
    Tool,
    ToolCall,
    ToolResult,
    ToolSchema,
    Usage,
    data_part,
    text_part,
    tool_call_part,
    tool_result_part,
)

__all__ = [
    "ChatCompleteModel",
    "ChatCompleteRequest",
    "ChatCompleteResponse",
    "ContractViolation",
    "ConversionError",
    "DataReadError",
    "ErrorSeverity",
    "LLMError",
    "Message",
    "MessageConversionError",
    "MessagePart",
    "MessagePartType",
    "MessageRole",
    "ResponseMetadata",
    "Schema",
    "SchemaConversionError",
    "SchemaType",
    "StreamTimeoutError",
    "Tool",
    "ToolCall",
    "ToolConversionError",
    "ToolResult",
    "ToolSchema",
    "TransportError",
    "Usage",
    "data_part",
    "dumps",
    "loads",
    "text_part",
    "tool_call_part",
    "tool_result_part",
]
