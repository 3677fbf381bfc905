"""Token usage extraction helpers.

Converts provider-specific usage blocks into the canonical
:class:`TokenUsage` (``prompt``, ``result``, ``total``).

Rules
-----
1. Missing blocks or fields yield ``None``; extraction never raises.
2. Values are coerced to non-negative ``int``; anything else becomes ``None``.
3. ``total`` is always ``prompt + result`` when both are known and ``None``
   otherwise; a provider-reported total is not consulted.

Supported shapes
----------------
OpenAI:
    ``response.usage.prompt_tokens`` / ``completion_tokens``
Vertex AI (PaLM 2 / Codey predict):
    ``response.metadata.tokenMetadata.inputTokenCount.totalTokens``
    ``response.metadata.tokenMetadata.outputTokenCount.totalTokens``

Both attribute-style SDK objects and plain mappings are accepted.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..models import TokenUsage


def _coerce_int(value: Any) -> Optional[int]:
    """Coerce ``value`` to a non-negative ``int`` or ``None``."""
    if value is None or isinstance(value, bool):
        return None
    try:
        iv = int(value)
    except (TypeError, ValueError):
        return None
    return iv if iv >= 0 else None


def _lookup(obj: Any, path: Sequence[str]) -> Any:
    """Follow ``path`` through mappings or attributes; ``None`` when absent."""
    cur = obj
    for key in path:
        if cur is None:
            return None
        if isinstance(cur, Mapping):
            cur = cur.get(key)
        else:
            cur = getattr(cur, key, None)
    return cur


def normalize_token_usage(prompt: Any, result: Any) -> TokenUsage:
    """Build a :class:`TokenUsage` applying the coercion and total rules."""
    p = _coerce_int(prompt)
    r = _coerce_int(result)
    t = p + r if p is not None and r is not None else None
    return TokenUsage(prompt=p, result=r, total=t)


def extract_openai_token_usage(raw_response: Any) -> TokenUsage:
    """Extract OpenAI chat-completions usage from an SDK object or mapping."""
    usage = _lookup(raw_response, ("usage",))
    return normalize_token_usage(
        _lookup(usage, ("prompt_tokens",)),
        _lookup(usage, ("completion_tokens",)),
    )


def extract_vertex_token_usage(raw_response: Any) -> TokenUsage:
    """Extract Vertex AI predict usage; the API reports no separate total."""
    token_metadata = _lookup(raw_response, ("metadata", "tokenMetadata"))
    return normalize_token_usage(
        _lookup(token_metadata, ("inputTokenCount", "totalTokens")),
        _lookup(token_metadata, ("outputTokenCount", "totalTokens")),
    )


__all__ = [
    "normalize_token_usage",
    "extract_openai_token_usage",
    "extract_vertex_token_usage",
]
