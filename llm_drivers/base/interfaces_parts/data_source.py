"""DataSource Protocol (single-class module).

Training datasets are handed to drivers as objects that can tell where their
content lives; upload mechanics stay with the driver.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class DataSource(Protocol):
    """A dataset reachable over HTTP(S)."""

    @property
    def name(self) -> str:
        """File name used when uploading the dataset."""
        ...

    async def get_url(self) -> str:
        """Return a fetch-able URL for the dataset content."""
        ...
