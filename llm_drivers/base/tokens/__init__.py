"""Token accounting helpers."""

from .extraction import (
    extract_openai_token_usage,
    extract_vertex_token_usage,
    normalize_token_usage,
)

__all__ = [
    "normalize_token_usage",
    "extract_openai_token_usage",
    "extract_vertex_token_usage",
]
