"""Tests for token usage normalization."""

from __future__ import annotations

import types

from llm_drivers.base.models import TokenUsage
from llm_drivers.base.tokens import (
    extract_openai_token_usage,
    extract_vertex_token_usage,
    normalize_token_usage,
)


def test_total_derived_only_when_both_sides_known():
    assert normalize_token_usage(3, 4) == TokenUsage(prompt=3, result=4, total=7)  # nosec B101
    assert normalize_token_usage(3, None) == TokenUsage(prompt=3, result=None, total=None)  # nosec B101
    assert normalize_token_usage(None, 4) == TokenUsage(prompt=None, result=4, total=None)  # nosec B101


def test_reported_total_is_replaced_by_sum_of_sides():
    usage = {"usage": {"prompt_tokens": 5, "completion_tokens": 3, "total_tokens": 10}}
    assert extract_openai_token_usage(usage) == TokenUsage(5, 3, 8)  # nosec B101


def test_reported_total_dropped_when_a_side_is_missing():
    only_total = {"usage": {"prompt_tokens": None, "completion_tokens": None, "total_tokens": 10}}
    assert extract_openai_token_usage(only_total) == TokenUsage()  # nosec B101
    one_side = {"usage": {"prompt_tokens": 5, "total_tokens": 5}}
    assert extract_openai_token_usage(one_side) == TokenUsage(prompt=5, result=None, total=None)  # nosec B101


def test_zero_counts_are_kept():
    assert normalize_token_usage(0, 0) == TokenUsage(prompt=0, result=0, total=0)  # nosec B101


def test_invalid_values_become_none():
    usage = normalize_token_usage("x", True)
    assert usage == TokenUsage()  # nosec B101


def test_openai_usage_from_sdk_object_and_mapping():
    obj = types.SimpleNamespace(usage=types.SimpleNamespace(prompt_tokens=5, completion_tokens=2, total_tokens=7))
    assert extract_openai_token_usage(obj) == TokenUsage(5, 2, 7)  # nosec B101
    mapping = {"usage": {"prompt_tokens": 5, "completion_tokens": 2}}
    assert extract_openai_token_usage(mapping) == TokenUsage(5, 2, 7)  # nosec B101
    assert extract_openai_token_usage({}) == TokenUsage()  # nosec B101


def test_vertex_usage_reads_token_metadata():
    response = {
        "metadata": {
            "tokenMetadata": {
                "inputTokenCount": {"totalTokens": 11, "totalBillableCharacters": 40},
                "outputTokenCount": {"totalTokens": 6},
            }
        }
    }
    assert extract_vertex_token_usage(response) == TokenUsage(11, 6, 17)  # nosec B101
    assert extract_vertex_token_usage({"predictions": []}) == TokenUsage()  # nosec B101
