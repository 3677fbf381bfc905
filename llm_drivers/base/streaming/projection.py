"""Tolerant projection of server-sent event payloads.

Event-stream providers send one JSON document per event. A projector pulls
the text out of one nested field; this wrapper turns malformed JSON or an
unexpected structure into an empty fragment so one bad frame does not abort
an otherwise healthy stream.
"""
from __future__ import annotations

import json
from typing import Any, Callable, Optional

from ..http.sse import ServerSentEvent


def dig(data: Any, *path: Any) -> Any:
    """Index ``data`` along ``path`` (keys and list positions).

    Raises ``KeyError``/``IndexError``/``TypeError`` on a structural mismatch;
    callers wrap it with :func:`safe_event_projection`.
    """
    cur = data
    for key in path:
        cur = cur[key]
    return cur


def safe_event_projection(project: Callable[[Any], Any]) -> Callable[[ServerSentEvent], Optional[str]]:
    """Wrap ``project`` into an SSE-event translator.

    Returns ``None`` for events without data, the projected text for good
    events, and ``""`` when decoding or projection fails or yields no text.
    """

    def _translate(event: ServerSentEvent) -> Optional[str]:
        if not event.data:
            return None
        try:
            value = project(json.loads(event.data))
        except (ValueError, KeyError, IndexError, TypeError, AttributeError):
            return ""
        return value if isinstance(value, str) else ""

    return _translate


__all__ = ["dig", "safe_event_projection"]
