"""llm_drivers.config.env
======================

Environment variable mapping and helpers for driver credentials.

Purpose
-------
- Single source of truth mapping provider identifiers to the environment
  variables holding their credentials (canonical name first, then aliases).
- Small lookup helpers that never raise; callers decide what a missing
  credential means.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

# Canonical provider -> env var mapping
ENV_MAP: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "vertexai": "VERTEXAI_ACCESS_TOKEN",
}

# Provider -> ordered tuple of acceptable env var names (canonical first).
# gcloud tooling commonly exports GOOGLE_ACCESS_TOKEN.
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "vertexai": ("VERTEXAI_ACCESS_TOKEN", "GOOGLE_ACCESS_TOKEN"),
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if ``val`` looks like a placeholder or test value.

    Heuristics (case-insensitive): contains ``placeholder``, ``changeme`` or
    ``example``, or starts with ``test_``.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return "placeholder" in v or "changeme" in v or "example" in v or v.startswith("test_")


def get_env_var_candidates(provider: str) -> Iterable[str]:
    """Yield acceptable variable names for ``provider``, canonical first."""
    p = (provider or "").lower()
    canonical = ENV_MAP.get(p)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(p, ()):
        if alias != canonical:
            yield alias


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Resolve a credential for ``provider`` from the process environment.

    Returns:
        ``(value, env_var_used)`` for the first non-empty, non-placeholder
        candidate, or ``(None, None)`` when nothing usable is set.
    """
    for name in get_env_var_candidates(provider):
        val = os.environ.get(name)
        if val and not is_placeholder(val):
            return val, name
    return None, None


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "is_placeholder",
    "get_env_var_candidates",
    "resolve_provider_key",
]
