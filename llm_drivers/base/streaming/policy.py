"""Empty-delta forwarding policy for fragment streams."""
from __future__ import annotations

from enum import Enum


class EmptyDeltaPolicy(str, Enum):
    """What to do with chunks whose incremental text is empty.

    ``FORWARD`` yields ``""`` so callers counting chunks see every one;
    ``DROP`` skips them. Non-empty fragments keep arrival order either way.
    """

    FORWARD = "forward"
    DROP = "drop"


__all__ = ["EmptyDeltaPolicy"]
