"""Unified driver error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``llm_drivers.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.driver_errors import (
    EmbeddingNotFoundError,
    InvalidResponseError,
    UnsupportedModelError,
)
from .errors_parts.classification import classify_exception

__all__ = [
    "ErrorCode",
    "ProviderError",
    "UnsupportedModelError",
    "InvalidResponseError",
    "EmbeddingNotFoundError",
    "classify_exception",
]
