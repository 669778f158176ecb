# tests/conftest.py
"""
Shared fixtures for gemini-chat tests.
"""

import pytest

from fakes import FakeGenAIClient, RecordingStream, make_chunk, make_usage, text
from gemini_chat.chat import ChatCompleter


@pytest.fixture
def hi_stream():
    """The canned answer to "Hi!"."""
    return RecordingStream(
        [
            make_chunk(
                text("Hi there! How can I help you today?"),
                usage=make_usage(3, 21, 9),
            )
        ]
    )


@pytest.fixture
def fake_client(hi_stream):
    return FakeGenAIClient(hi_stream)


@pytest.fixture
def completer(fake_client):
    return ChatCompleter(fake_client)
