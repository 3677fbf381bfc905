"""Pull-based adapter from a provider stream to a fragment stream.

``MappedStream`` wraps any async iterable (an SDK stream, an SSE event
stream) and applies a per-item translator lazily: one source item is pulled
only when the consumer asks for the next fragment. Closing the mapped stream,
exiting its ``async with`` block, exhausting it, or an error while reading
all close the underlying source, so abandoning iteration early does not leak
the HTTP response behind it.

Translator contract: return the fragment text for an item, ``""`` for an
item without text, or ``None`` for an item that carries no fragment at all
(control frames). ``None`` is never yielded.
"""
from __future__ import annotations

import inspect
from typing import Any, AsyncGenerator, AsyncIterable, Callable, Optional

from .policy import EmptyDeltaPolicy


async def close_stream(obj: Any) -> None:
    """Close ``obj`` via ``aclose()`` or ``close()`` (sync or async) if it has one."""
    for attr in ("aclose", "close"):
        method = getattr(obj, attr, None)
        if callable(method):
            result = method()
            if inspect.isawaitable(result):
                await result
            return


async def _translated(
    source: AsyncIterable[Any],
    translate: Callable[[Any], Optional[str]],
    policy: EmptyDeltaPolicy,
) -> AsyncGenerator[str, None]:
    iterator = source.__aiter__()
    try:
        while True:
            try:
                item = await iterator.__anext__()
            except StopAsyncIteration:
                return
            fragment = translate(item)
            if fragment is None:
                continue
            if fragment == "" and policy is EmptyDeltaPolicy.DROP:
                continue
            yield fragment
    finally:
        if iterator is not source:
            await close_stream(iterator)
        await close_stream(source)


class MappedStream:
    """Async iterator yielding translated fragments in source order.

    Items are pulled by an inner async generator that holds no reference back
    to the wrapper, so a stream dropped mid-iteration is finalized by the
    event loop and its ``finally`` closes the source.
    """

    def __init__(
        self,
        source: AsyncIterable[Any],
        translate: Callable[[Any], Optional[str]],
        policy: EmptyDeltaPolicy = EmptyDeltaPolicy.FORWARD,
    ) -> None:
        self._source = source
        self._translate = translate
        self._policy = EmptyDeltaPolicy(policy)
        self._fragments: Optional[AsyncGenerator[str, None]] = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def __aiter__(self) -> "MappedStream":
        return self

    async def __anext__(self) -> str:
        if self._closed:
            raise StopAsyncIteration
        if self._fragments is None:
            self._fragments = _translated(self._source, self._translate, self._policy)
        try:
            return await self._fragments.__anext__()
        except BaseException:
            self._closed = True
            raise

    async def aclose(self) -> None:
        """Stop iteration and close the underlying source (idempotent)."""
        if self._closed:
            return
        self._closed = True
        if self._fragments is None:
            await close_stream(self._source)
        else:
            await self._fragments.aclose()

    async def __aenter__(self) -> "MappedStream":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


def map_stream(
    source: AsyncIterable[Any],
    translate: Callable[[Any], Optional[str]],
    policy: EmptyDeltaPolicy = EmptyDeltaPolicy.FORWARD,
) -> MappedStream:
    """Return a :class:`MappedStream` over ``source``."""
    return MappedStream(source, translate, policy)


__all__ = ["MappedStream", "map_stream", "close_stream"]
