"""Focused tests for llm_drivers.base.logging."""

from __future__ import annotations

import json
import logging

from llm_drivers.base.logging import (
    REQUIRED_NORMALIZED_KEYS,
    _parse_level,  # type: ignore[attr-defined]
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)
from llm_drivers.base.log_support import LogContext
from llm_drivers.base.models import TokenUsage

from .conftest import ListHandler


def test_parse_level_variants():
    assert _parse_level(None) == logging.INFO  # nosec B101
    assert _parse_level("debug") == logging.DEBUG  # nosec B101
    assert _parse_level("WARN") == logging.WARNING  # nosec B101
    assert _parse_level("unknown", default=logging.ERROR) == logging.ERROR  # nosec B101


def test_normalized_log_event_emits_required_keys():
    logger = get_logger("drivers.test.logging")
    handler = ListHandler()
    logger.handlers[:] = [handler]
    logger.propagate = False
    try:
        normalized_log_event(
            logger,
            "completion.end",
            LogContext(provider="p", model="m"),
            phase="finalize",
            error_code="timeout",
            emitted=True,
            tokens=TokenUsage(prompt=1, result=2, total=3),
            phase_extra=None,
        )
    finally:
        logger.handlers[:] = []
        logger.propagate = True

    event = json.loads(handler.messages[-1])
    for key in REQUIRED_NORMALIZED_KEYS:
        assert key in event  # nosec B101
    assert event["tokens"] == {"prompt": 1, "result": 2, "total": 3}  # nosec B101
    assert event["provider"] == "p" and event["model"] == "m"  # nosec B101
    assert "phase_extra" not in event  # nosec B101


def test_log_event_drops_none_and_stringifies_unknown_values():
    logger = logging.getLogger("tests.drivers.log_event")
    handler = ListHandler()
    logger.handlers[:] = [handler]
    logger.propagate = False
    logger.setLevel(logging.INFO)
    log_event(logger, "x", LogContext(provider="p"), a=None, b=1, c=object())
    event = json.loads(handler.messages[-1])
    assert event["event"] == "x" and event["provider"] == "p" and event["b"] == 1  # nosec B101
    assert "a" not in event  # nosec B101
    assert event["c"].startswith("<object")  # nosec B101


def test_log_context_derive_leaves_original_untouched():
    ctx = LogContext(provider="openai", model="m", operation="completion", extra={"k": 1})
    derived = ctx.derive(response_id="r-1")
    derived.extra["k"] = 2
    assert ctx.response_id is None and ctx.extra == {"k": 1}  # nosec B101
    assert derived.to_dict() == {  # nosec B101
        "provider": "openai",
        "model": "m",
        "operation": "completion",
        "response_id": "r-1",
        "k": 2,
    }


def _file_handlers(logger: logging.Logger) -> list:
    return [h for h in logger.handlers if isinstance(h, logging.FileHandler)]


def test_configure_logger_sets_level_and_swaps_file_handler(tmp_path):
    first = tmp_path / "logs" / "first.log"
    second = tmp_path / "second.log"
    try:
        logger = configure_logger(level="DEBUG", file_path=str(first))
        assert logger.level == logging.DEBUG  # nosec B101
        assert [h.baseFilename for h in _file_handlers(logger)] == [str(first)]  # nosec B101

        get_logger("drivers.test.file").debug("written to file")
        assert "written to file" in first.read_text(encoding="utf-8")  # nosec B101

        configure_logger(level=logging.WARNING, file_path=str(second))
        assert logger.level == logging.WARNING  # nosec B101
        assert [h.baseFilename for h in _file_handlers(logger)] == [str(second)]  # nosec B101
        assert all(h.level == logging.WARNING for h in logger.handlers)  # nosec B101

        configure_logger(file_path=None)
        assert _file_handlers(logger) == []  # nosec B101
        assert logger.level == logging.WARNING  # nosec B101
    finally:
        configure_logger(level=logging.INFO, file_path=None)
