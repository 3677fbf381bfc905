"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `llm_drivers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .driver_errors import EmbeddingNotFoundError, InvalidResponseError, UnsupportedModelError
from .classification import classify_exception

__all__ = [
    "ErrorCode",
    "ProviderError",
    "UnsupportedModelError",
    "InvalidResponseError",
    "EmbeddingNotFoundError",
    "classify_exception",
]
