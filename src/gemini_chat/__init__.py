# gemini_chat/__init__.py
"""
gemini-chat
===========

Drive Google Gemini through a provider-neutral chat-completion interface.
"""

__version__ = "0.1.0"

from gemini_chat.chat import ChatCompleter
from gemini_chat.client import Client
from gemini_chat.config import ClientConfig
from gemini_chat.core import (
    ChatCompleteModel,
    ChatCompleteRequest,
    ChatCompleteResponse,
    Message,
    MessagePart,
    MessagePartType,
    MessageRole,
    ResponseMetadata,
    Schema,
    Tool,
    ToolCall,
    ToolResult,
    ToolSchema,
    Usage,
)


def get_version():
    """Get gemini-chat version"""
    return __version__


__all__ = [
    "ChatCompleteModel",
    "ChatCompleteRequest",
    "ChatCompleteResponse",
    "ChatCompleter",
    "Client",
    "ClientConfig",
    "Message",
    "MessagePart",
    "MessagePartType",
    "MessageRole",
    "ResponseMetadata",
    "Schema",
    "Tool",
    "ToolCall",
    "ToolResult",
    "ToolSchema",
    "Usage",
    "get_version",
]
