"""Tests for the structured-output strategies."""

from __future__ import annotations

import json

import pytest

from llm_drivers.base.errors import ErrorCode, InvalidResponseError
from llm_drivers.base.logging import LogContext
from llm_drivers.base.models import PromptOptions
from llm_drivers.base.structured import FORMAT_OUTPUT_FUNCTION, FunctionCallStrategy, SafetyNoticeStrategy

SCHEMA = {"type": "object", "properties": {"answer": {"type": "integer"}}}


def test_function_call_params_absent_without_schema():
    assert FunctionCallStrategy().request_params(PromptOptions(model="m")) == {}  # nosec B101


def test_function_call_params_declare_single_forced_function():
    params = FunctionCallStrategy().request_params(PromptOptions(model="m", result_schema=SCHEMA))
    assert params["functions"] == [{"name": FORMAT_OUTPUT_FUNCTION, "parameters": SCHEMA}]  # nosec B101
    assert params["function_call"] == {"name": "format_output"}  # nosec B101


def test_function_call_extract_returns_arguments(log_messages):
    logger, messages = log_messages
    out = FunctionCallStrategy().extract('{"answer": 4}', raw={}, logger=logger, ctx=LogContext(provider="p"))
    assert out == '{"answer": 4}'  # nosec B101
    assert messages == []  # nosec B101


def test_function_call_extract_logs_raw_and_raises(log_messages):
    logger, messages = log_messages
    raw = {"choices": [{"message": {"content": "oops"}}]}
    with pytest.raises(InvalidResponseError) as info:
        FunctionCallStrategy().extract(None, raw=raw, logger=logger, ctx=LogContext(provider="openai", model="m"))
    assert info.value.code is ErrorCode.INVALID_RESPONSE  # nosec B101
    assert info.value.raw is raw  # nosec B101
    assert "Response is not valid: no data" in str(info.value)  # nosec B101
    event = json.loads(messages[-1])
    assert event["event"] == "completion.error"  # nosec B101
    assert event["raw_response"] == raw  # nosec B101
    assert event["error_code"] == "invalid_response"  # nosec B101


def test_safety_notice_added_only_with_schema():
    strategy = SafetyNoticeStrategy()
    safety = ["be nice"]
    assert strategy.augment_safety(safety, PromptOptions(model="m")) == ["be nice"]  # nosec B101
    augmented = strategy.augment_safety(safety, PromptOptions(model="m", result_schema=SCHEMA))
    assert len(augmented) == 2 and augmented[0] == "be nice"  # nosec B101
    assert '"answer"' in augmented[1]  # nosec B101
    assert safety == ["be nice"]  # nosec B101


def test_safety_notice_extract_returns_text_unvalidated():
    assert SafetyNoticeStrategy().extract("not json") == "not json"  # nosec B101
    assert SafetyNoticeStrategy().extract(None) == ""  # nosec B101
