"""Per-call logging context for driver events.

One context is created per driver call and threaded through every event
that call emits, so ``completion.start`` and ``completion.end`` (or
``completion.error``) carry the same identifying fields.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Identifying fields shared by the events of one driver call.

    Attributes:
        provider: Canonical provider key.
        model: Model the call targets, when known.
        operation: Driver operation (``completion``, ``stream``, ``embeddings``...).
        response_id: Provider response or job identifier, once known.
        extra: Additional fields merged into every event.
    """

    provider: Optional[str] = None
    model: Optional[str] = None
    operation: Optional[str] = None
    response_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def derive(self, **changes: Any) -> "LogContext":
        """Return a copy with ``changes`` applied; this context is unchanged."""
        return replace(self, extra=dict(self.extra), **changes)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update(extra)
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
