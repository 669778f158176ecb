# gemini_chat/chat/__init__.py
"""
Request assembly, streaming reassembly and the chat completer.
"""

from .completer import ChatCompleter
from .history import build_history, convert_message, convert_part, validate_messages
from .stream import create_random_id, stream_parts, update_usage

__all__ = [
    "ChatCompleter",
    "build_history",
    "convert_message",
    "convert_part",
    "create_random_id",
    "stream_parts",
    "update_usage",
    "validate_messages",
]
