"""Server-sent events reader for streaming HTTP responses.

``sse`` is passed as the ``reader`` of :meth:`FetchClient.post`; it turns an
open ``httpx.Response`` into an async iterator of :class:`ServerSentEvent`.
Lines are pulled from the response only as events are requested, and the
response is closed on exhaustion, on a read error, or on ``aclose()``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import AsyncIterator, List, Optional

import httpx


@dataclass
class ServerSentEvent:
    """A single dispatched event."""

    event: str = "message"
    data: str = ""
    id: Optional[str] = None
    retry: Optional[int] = None


class SSEStream:
    """Async iterator of events parsed from ``response.aiter_lines()``."""

    def __init__(self, response: httpx.Response) -> None:
        self._response = response
        self._lines: Optional[AsyncIterator[str]] = None
        self._closed = False

    @property
    def response(self) -> httpx.Response:
        return self._response

    def __aiter__(self) -> "SSEStream":
        return self

    async def __anext__(self) -> ServerSentEvent:
        if self._closed:
            raise StopAsyncIteration
        if self._lines is None:
            self._lines = self._response.aiter_lines()
        data: List[str] = []
        event = ServerSentEvent()
        pending = False
        while True:
            try:
                line = await self._lines.__anext__()
            except StopAsyncIteration:
                if pending:
                    event.data = "\n".join(data)
                    return event
                await self.aclose()
                raise
            except BaseException:
                await self.aclose()
                raise
            if not line:
                if pending:
                    event.data = "\n".join(data)
                    return event
                continue
            if line.startswith(":"):
                continue
            field, _, value = line.partition(":")
            if value.startswith(" "):
                value = value[1:]
            if field == "data":
                data.append(value)
            elif field == "event":
                event.event = value or "message"
            elif field == "id":
                event.id = value
            elif field == "retry" and value.isdigit():
                event.retry = int(value)
            else:
                continue
            pending = True

    async def aclose(self) -> None:
        """Close the underlying HTTP response (idempotent)."""
        if self._closed:
            return
        self._closed = True
        await self._response.aclose()


def sse(response: httpx.Response) -> SSEStream:
    """Reader turning a streaming response into server-sent events."""
    return SSEStream(response)


__all__ = ["ServerSentEvent", "SSEStream", "sse"]
