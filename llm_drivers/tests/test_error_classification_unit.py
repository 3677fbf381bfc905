from __future__ import annotations

import asyncio

import httpx

from llm_drivers.base.errors import (
    EmbeddingNotFoundError,
    ErrorCode,
    InvalidResponseError,
    UnsupportedModelError,
    classify_exception,
)


def _status_error(status: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://example.test")
    return httpx.HTTPStatusError("error", request=request, response=httpx.Response(status, request=request))


def test_http_status_mapping():
    assert classify_exception(_status_error(401)) is ErrorCode.AUTH  # nosec B101
    assert classify_exception(_status_error(429)) is ErrorCode.RATE_LIMIT  # nosec B101
    assert classify_exception(_status_error(503)) is ErrorCode.UNAVAILABLE  # nosec B101
    assert classify_exception(Exception("x")) is ErrorCode.UNKNOWN  # nosec B101


def test_timeouts_and_message_heuristics():
    assert classify_exception(asyncio.TimeoutError()) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(RuntimeError("Rate limit exceeded")) is ErrorCode.RATE_LIMIT  # nosec B101
    assert classify_exception(RuntimeError("connection refused")) is ErrorCode.UNAVAILABLE  # nosec B101


def test_driver_errors_carry_codes():
    unsupported = UnsupportedModelError("babbage-002", "openai", operation="training")
    assert classify_exception(unsupported) is ErrorCode.UNSUPPORTED  # nosec B101
    assert "babbage-002" in unsupported.message  # nosec B101
    invalid = InvalidResponseError("openai", raw={"x": 1})
    assert invalid.code is ErrorCode.INVALID_RESPONSE and invalid.raw == {"x": 1}  # nosec B101
    assert EmbeddingNotFoundError("vertexai").code is ErrorCode.NOT_FOUND  # nosec B101
    assert not unsupported.retryable  # nosec B101
