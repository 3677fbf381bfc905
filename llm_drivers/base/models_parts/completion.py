"""
Completion DTOs returned by non-streaming driver calls.

Token usage is optional field by field: providers omit accounting on some
paths, and a missing count stays ``None`` rather than being guessed.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class TokenUsage:
    """Normalized token accounting.

    Attributes:
        prompt: Tokens consumed by the prompt, when reported.
        result: Tokens generated for the result, when reported.
        total: Provider total, or ``prompt + result`` when both are known.
    """

    prompt: Optional[int] = None
    result: Optional[int] = None
    total: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the usage."""
        return asdict(self)


@dataclass
class Completion:
    """Canonical result of a completion call.

    Attributes:
        result: Plain text, or the structured payload when a result schema
            was requested (function-call arguments or the schema-instructed
            text, depending on the provider).
        token_usage: Normalized :class:`TokenUsage`.
    """

    result: Any
    token_usage: TokenUsage = field(default_factory=TokenUsage)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the completion."""
        return {"result": self.result, "token_usage": self.token_usage.to_dict()}


@dataclass
class EmbeddingsResult:
    """Vector returned for a single embeddings input."""

    embeddings: List[float]
    model: str

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the result."""
        return asdict(self)


__all__ = ["TokenUsage", "Completion", "EmbeddingsResult"]
