"""HTTP transport helpers (httpx-based)."""

from .client import FetchClient, TokenProvider
from .sse import SSEStream, ServerSentEvent, sse

__all__ = ["FetchClient", "TokenProvider", "SSEStream", "ServerSentEvent", "sse"]
