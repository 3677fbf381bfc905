"""Streaming normalization package.

Provider streams are turned into lazy fragment streams by ``MappedStream``;
``safe_event_projection`` adapts event-stream payloads.
"""

from .policy import EmptyDeltaPolicy
from .mapped_stream import MappedStream, close_stream, map_stream
from .projection import dig, safe_event_projection

__all__ = [
    "EmptyDeltaPolicy",
    "MappedStream",
    "map_stream",
    "close_stream",
    "dig",
    "safe_event_projection",
]
