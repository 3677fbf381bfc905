"""Tests for the Vertex AI streaming tensor encoding."""

from __future__ import annotations

import pytest

from llm_drivers.vertexai.tensor import generate_streaming_prompt, to_tensor


def test_scalar_encodings():
    assert to_tensor("a") == {"stringVal": "a"}  # nosec B101
    assert to_tensor(True) == {"boolVal": True}  # nosec B101
    assert to_tensor(3) == {"intVal": 3}  # nosec B101
    assert to_tensor(0.5) == {"floatVal": 0.5}  # nosec B101
    assert to_tensor(None) is None  # nosec B101


def test_nested_structures_drop_none():
    assert to_tensor({"a": 1, "b": None, "c": [1, None, "x"]}) == {  # nosec B101
        "structVal": {"a": {"intVal": 1}, "c": {"listVal": [{"intVal": 1}, {"stringVal": "x"}]}}
    }


def test_unsupported_type_raises():
    with pytest.raises(TypeError):
        to_tensor(object())


def test_chat_prompt_becomes_streaming_envelope():
    payload = {
        "instances": [
            {"context": "ctx", "messages": [{"author": "user", "content": "hi"}]},
        ],
        "parameters": {"temperature": 0.3, "maxOutputTokens": 64},
    }
    envelope = generate_streaming_prompt(payload)
    assert envelope == {  # nosec B101
        "inputs": [
            {
                "structVal": {
                    "context": {"stringVal": "ctx"},
                    "messages": {
                        "listVal": [
                            {
                                "structVal": {
                                    "author": {"stringVal": "user"},
                                    "content": {"stringVal": "hi"},
                                }
                            }
                        ]
                    },
                }
            }
        ],
        "parameters": {
            "structVal": {"temperature": {"floatVal": 0.3}, "maxOutputTokens": {"intVal": 64}}
        },
    }
    assert "instances" not in envelope  # nosec B101
