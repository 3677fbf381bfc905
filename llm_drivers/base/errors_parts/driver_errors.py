"""
Concrete driver failures raised by the transcoding layer.

Each class pins a normalized :class:`ErrorCode` so callers can branch on
either the exception type or ``exc.code``. None of these are retryable: they
describe a request the provider cannot satisfy or a response that violates
the caller's contract.
"""
from __future__ import annotations

from typing import Any, Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


class UnsupportedModelError(ProviderError):
    """Raised when an operation is requested for a model that cannot serve it.

    The message always names the rejected model; the driver never guesses a
    substitute.
    """

    def __init__(self, model: str, provider: str, operation: Optional[str] = None) -> None:
        what = f" for {operation}" if operation else ""
        super().__init__(
            code=ErrorCode.UNSUPPORTED,
            message=f"Unsupported model{what}: {model}",
            provider=provider,
            model=model,
        )


class InvalidResponseError(ProviderError):
    """Raised when a structured-output response lacks the required payload.

    ``raw`` carries the provider response so it can be inspected after the
    fact; the same payload is logged before the error is raised.
    """

    def __init__(
        self,
        provider: str,
        model: Optional[str] = None,
        message: str = "Response is not valid: no data",
        raw: Any = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.INVALID_RESPONSE,
            message=message,
            provider=provider,
            model=model,
            raw=raw,
        )


class EmbeddingNotFoundError(ProviderError):
    """Raised when an embeddings call returns an empty or missing vector."""

    def __init__(self, provider: str, model: Optional[str] = None) -> None:
        super().__init__(
            code=ErrorCode.NOT_FOUND,
            message="No embedding found",
            provider=provider,
            model=model,
        )


__all__ = [
    "UnsupportedModelError",
    "InvalidResponseError",
    "EmbeddingNotFoundError",
]
