"""Unified configuration layer for drivers.

Merge order (later wins)
------------------------
1. Built-in defaults (``config.defaults``)
2. Optional external file pointed to by ``DRIVERS_CONFIG_FILE`` (JSON or YAML)
3. Environment variables ``<PROVIDER>_<FIELD>`` (e.g. ``VERTEXAI_PROJECT``)
4. Credential from ``config.env`` when no ``api_key``/``access_token`` is set yet
5. In-code overrides (``None`` values ignored)

External config file example::

    openai:
      embedding_model: text-embedding-3-small
    vertexai:
      project: my-project
      region: europe-west4

Public API
----------
* ``get_provider_config(provider, overrides=None) -> dict``
* ``reset_config_cache()``
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import (
    DRIVERS_HTTP_TIMEOUT_SECONDS,
    OPENAI_DEFAULT_EMBEDDING_MODEL,
    VERTEXAI_DEFAULT_EMBEDDING_MODEL,
    VERTEXAI_DEFAULT_REGION,
)
from .env import resolve_provider_key

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {
        "embedding_model": OPENAI_DEFAULT_EMBEDDING_MODEL,
        "timeout_seconds": DRIVERS_HTTP_TIMEOUT_SECONDS,
    },
    "vertexai": {
        "region": VERTEXAI_DEFAULT_REGION,
        "embedding_model": VERTEXAI_DEFAULT_EMBEDDING_MODEL,
        "timeout_seconds": DRIVERS_HTTP_TIMEOUT_SECONDS,
    },
}

ENV_FIELD_MAP = {
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "access_token": "ACCESS_TOKEN",
    "base_url": "BASE_URL",
    "project": "PROJECT",
    "region": "REGION",
    "embedding_model": "EMBEDDING_MODEL",
}

# Which credential field each provider's env credential fills.
_CREDENTIAL_FIELD = {"openai": "api_key", "vertexai": "access_token"}

_FILE_CACHE: Optional[Dict[str, Any]] = None


def reset_config_cache() -> None:
    """Forget the parsed external config file (tests, live reload)."""
    global _FILE_CACHE
    _FILE_CACHE = None


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv("DRIVERS_CONFIG_FILE")
    if not path or not Path(path).is_file():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except ValueError:
        # YAML is a superset of JSON; anything JSON rejected gets a second try.
        data = yaml.safe_load(text) or {}
    _FILE_CACHE = data if isinstance(data, dict) else {}
    return _FILE_CACHE


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = provider.upper()
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val is not None:
            out[field] = val
    return out


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged configuration for ``provider``.

    Malformed YAML in the external file raises ``yaml.YAMLError``; an unset
    or missing file simply contributes nothing.
    """
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = {}

    cfg |= DEFAULTS.get(name, {})

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    cfg |= _env_overrides(name)

    credential_field = _CREDENTIAL_FIELD.get(name)
    if credential_field and not cfg.get(credential_field):
        value, _ = resolve_provider_key(name)
        if value:
            cfg[credential_field] = value

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    return cfg


__all__ = ["get_provider_config", "reset_config_cache", "DEFAULTS"]
