# tests/core/test_json_utils.py
"""
Tests for gemini_chat.core.json_utils
"""

import pytest

import gemini_chat.core.json_utils as json_utils

TEST_DATA = {
    "string": "hello",
    "number": 42,
    "float": 3.14,
    "boolean": True,
    "null": None,
    "array": [1, 2, 3],
    "nested": {"key": "value", "count": 10},
}


def test_get_json_library():
    assert json_utils.get_json_library() == "orjson"


def test_dumps_returns_str():
    result = json_utils.dumps(TEST_DATA)
    assert isinstance(result, str)
    assert json_utils.loads(result) == TEST_DATA


def test_dumps_sort_keys():
    assert json_utils.dumps({"b": 1, "a": 2}, sort_keys=True) == '{"a":2,"b":1}'


def test_loads_bytes():
    assert json_utils.loads(b'{"a": 1}') == {"a": 1}


def test_loads_invalid():
    with pytest.raises(json_utils.JSONDecodeError):
        json_utils.loads("{not json")


def test_dumps_unserializable():
    with pytest.raises(json_utils.JSONEncodeError):
        json_utils.dumps({"a": object()})
