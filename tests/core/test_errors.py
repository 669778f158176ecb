# tests/core/test_errors.py
"""
Unit tests for the error hierarchy
"""

import pytest

from gemini_chat.core import (
    ContractViolation,
    ConversionError,
    DataReadError,
    ErrorSeverity,
    LLMError,
    MessageConversionError,
    SchemaConversionError,
    StreamTimeoutError,
    ToolConversionError,
    TransportError,
)


class TestLLMErrors:
    def test_base_llm_error_creation(self):
        error = LLMError("Test error", model="models/gemini-2.5-flash")

        assert str(error) == "Test error"
        assert error.severity == ErrorSeverity.PERMANENT
        assert error.provider == "gemini"
        assert error.model == "models/gemini-2.5-flash"
        assert error.metadata == {}

    def test_llm_error_with_metadata(self):
        error = LLMError("Test error", severity=ErrorSeverity.RECOVERABLE, chunk=3)

        assert error.severity == ErrorSeverity.RECOVERABLE
        assert error.metadata["chunk"] == 3

    def test_tool_conversion_error_keeps_tool_name(self):
        error = ToolConversionError("converting tool read_file: boom", tool_name="read_file")
        assert error.tool_name == "read_file"

    def test_transport_errors_are_recoverable(self):
        assert TransportError("x").severity == ErrorSeverity.RECOVERABLE
        assert StreamTimeoutError("x").severity == ErrorSeverity.RECOVERABLE

    @pytest.mark.parametrize(
        "error_class",
        [SchemaConversionError, MessageConversionError],
    )
    def test_conversion_errors(self, error_class):
        error = error_class("bad")
        assert isinstance(error, ConversionError)
        assert isinstance(error, LLMError)

    def test_data_read_error_is_llm_error(self):
        assert isinstance(DataReadError("x"), LLMError)


class TestContractViolation:
    def test_outside_recoverable_hierarchy(self):
        assert not issubclass(ContractViolation, LLMError)
        assert issubclass(ContractViolation, AssertionError)

    def test_not_caught_as_llm_error(self):
        with pytest.raises(ContractViolation):
            try:
                raise ContractViolation("no messages")
            except LLMError:
                pytest.fail("contract violation caught as LLMError")
