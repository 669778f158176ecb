"""
Error Types
===========

Recoverable failures derive from ``LLMError``. Caller misuse (empty
conversations, wrong roles, reading the wrong payload of a part) raises
``ContractViolation`` instead, which sits outside that
hierarchy: ``except LLMError`` never catches it.
"""

from __future__ import annotations

from typing import Any

from gemini_chat.core.enums import ErrorSeverity


class ContractViolation(AssertionError):
    """The caller broke a precondition of the adapter."""


class LLMError(Exception):
    """Base class for recoverable adapter errors."""

    severity: ErrorSeverity = ErrorSeverity.PERMANENT

    def __init__(
        self,
        message: str,
        *,
        severity: ErrorSeverity | None = None,
        provider: str = "gemini",
        model: str | None = None,
        **metadata: Any,
    ):
        super().__init__(message)
        if severity is not None:
            self.severity = severity
        self.provider = provider
        self.model = model
        self.metadata = metadata


class ConversionError(LLMError):
    """A neutral value could not be translated to or from the wire shape."""


class SchemaConversionError(ConversionError):
    """A tool or response schema could not be converted."""


class ToolConversionError(ConversionError):
    """A tool declaration could not be converted."""

    def __init__(self, message: str, *, tool_name: str, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.tool_name = tool_name


class MessageConversionError(ConversionError):
    """Tool call arguments could not be decoded or encoded."""


class DataReadError(LLMError):
    """Reading the byte stream of a data part failed."""


class TransportError(LLMError):
    """The streaming call could not be completed."""

    severity = ErrorSeverity.RECOVERABLE


class StreamTimeoutError(TransportError):
    """The stream deadline expired before the response finished."""
