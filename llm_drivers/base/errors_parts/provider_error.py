"""
Base exception of the driver error taxonomy.

Every error raised by the transcoding layer itself is a ``ProviderError``
carrying a normalized :class:`ErrorCode`. Transport exceptions are never
converted into this type.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Driver failure with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode`.
        message: Human-readable description; names the model where relevant.
        provider: Provider key the driver serves (``"openai"``, ``"vertexai"``).
        model: Model the failing call targeted, if any.
        retryable: Always ``False`` for the errors raised by drivers; kept so
            callers can share retry policies with other error sources.
        raw: Provider payload that triggered the error, for diagnosis.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    retryable: bool = False
    raw: Optional[Any] = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)

    def __str__(self) -> str:
        where = f"{self.provider}/{self.model}" if self.model else self.provider
        return f"[{where}] {self.code.value}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Return log-friendly fields; ``raw`` is left out."""
        return {
            "code": self.code.value,
            "message": self.message,
            "provider": self.provider,
            "model": self.model,
            "retryable": self.retryable,
        }


__all__ = ["ProviderError"]
