"""Pytest configuration for the drivers test suite.

Keeps configuration lookups hermetic: provider environment variables and the
external config file are cleared for every test so a developer's shell never
leaks into assertions.
"""

from __future__ import annotations

import logging
from typing import Iterator, List

import pytest

from llm_drivers.base.models import PromptRole, PromptSegment
from llm_drivers.config import reset_config_cache

_DRIVER_ENV_VARS = (
    "DRIVERS_CONFIG_FILE",
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "OPENAI_EMBEDDING_MODEL",
    "VERTEXAI_PROJECT",
    "VERTEXAI_REGION",
    "VERTEXAI_ACCESS_TOKEN",
    "VERTEXAI_BASE_URL",
    "VERTEXAI_EMBEDDING_MODEL",
    "GOOGLE_ACCESS_TOKEN",
)


@pytest.fixture(autouse=True)
def hermetic_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Remove driver env vars and drop the cached config file."""
    for name in _DRIVER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config_cache()
    yield
    reset_config_cache()


class ListHandler(logging.Handler):
    """Capture formatted log messages into a list for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: List[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())


@pytest.fixture()
def log_messages() -> Iterator[tuple]:
    """Yield ``(logger, messages)`` with a dedicated non-propagating logger."""
    logger = logging.getLogger("tests.drivers.capture")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    handler = ListHandler()
    logger.handlers[:] = [handler]
    try:
        yield logger, handler.messages
    finally:
        logger.handlers[:] = []


@pytest.fixture()
def terse_segments() -> List[PromptSegment]:
    return [
        PromptSegment(PromptRole.SYSTEM, "Be terse"),
        PromptSegment(PromptRole.USER, "2+2?"),
    ]
