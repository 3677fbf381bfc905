"""Typed parameter object for driver initialization.

Purpose
-------
Capture the constructor parameters shared across drivers so the factory has
one stable contract to accept. Provider-specific fields (Vertex AI project
and region, for example) are first-class here because there are only two
providers; anything rarer travels in ``extra``.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and ``.model_dump()`` convenience.

Failure modes & side effects
----------------------------
- Pure data container: no I/O. Pydantic raises on wrongly typed inputs.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


class DriverParams(BaseModel):
    """Common driver initialization parameters.

    Attributes
    ----------
    api_key:
        API key for key-authenticated providers (OpenAI).
    access_token:
        OAuth bearer token for token-authenticated providers (Vertex AI).
    base_url:
        Optional override for the API base URL.
    project:
        Google Cloud project id (Vertex AI only).
    region:
        Google Cloud region (Vertex AI only).
    embedding_model:
        Default embeddings model used when a call does not name one.
    timeout_seconds:
        HTTP timeout hint applied by the transport.
    headers:
        Static HTTP headers added to every request.
    extra:
        Free-form provider-specific configuration bag.
    """

    model_config = ConfigDict(protected_namespaces=())

    api_key: Optional[str] = None
    access_token: Optional[str] = None
    base_url: Optional[str] = None
    project: Optional[str] = None
    region: Optional[str] = None
    embedding_model: Optional[str] = None
    timeout_seconds: Optional[float] = Field(default=None, gt=0)
    headers: Mapping[str, str] = Field(default_factory=dict)
    extra: Dict[str, Any] = Field(default_factory=dict)


__all__ = ["DriverParams"]
