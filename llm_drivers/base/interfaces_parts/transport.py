"""Transport Protocol (single-class module).

The minimal HTTP collaborator REST-based drivers depend on. ``FetchClient``
is the bundled implementation; tests substitute in-memory fakes.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, runtime_checkable


@runtime_checkable
class Transport(Protocol):
    """JSON POST/GET transport bound to a provider base URL."""

    async def get(self, path: str) -> Any:
        ...

    async def post(self, path: str, *, payload: Any, reader: Optional[Callable[[Any], Any]] = None) -> Any:
        """Return decoded JSON, or ``reader(response)`` for streaming calls."""
        ...
