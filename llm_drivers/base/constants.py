"""Base shared constants for drivers.

Central location to avoid scattering magic strings and default numbers.
"""
from __future__ import annotations

# Default HTTP timeouts (seconds)
DEFAULT_HTTP_TIMEOUT = 60.0          # single request timeout
DEFAULT_STREAM_READ_TIMEOUT = None   # no read timeout between streamed events

__all__ = [
    "DEFAULT_HTTP_TIMEOUT",
    "DEFAULT_STREAM_READ_TIMEOUT",
]
