"""Default prompt-segment partitioning shared by provider builders.

Drivers compose these helpers instead of inheriting a base builder. The
functions are pure: no I/O, no mutation of their inputs.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ..models import PromptRole, PromptSegment


@dataclass
class PartitionedSegments:
    """Segments split by role.

    Attributes:
        system: System contents in input order.
        safety: Safety contents in input order.
        messages: User and assistant segments in input order.
    """

    system: List[str] = field(default_factory=list)
    safety: List[str] = field(default_factory=list)
    messages: List[PromptSegment] = field(default_factory=list)


def partition_segments(segments: Iterable[PromptSegment]) -> PartitionedSegments:
    """Split ``segments`` by role without reordering or deduplicating."""
    out = PartitionedSegments()
    for segment in segments:
        if segment.role is PromptRole.SYSTEM:
            out.system.append(segment.content)
        elif segment.role is PromptRole.SAFETY:
            out.safety.append(segment.content)
        else:
            out.messages.append(segment)
    return out


def build_context(system: List[str], safety: List[str]) -> Optional[str]:
    """Join system and safety contents into one context string.

    System contents come first, newline-joined; safety contents follow behind
    an ``IMPORTANT:`` marker. Returns ``None`` when there is nothing to say.
    """
    context: List[str] = []
    if system:
        context.append("\n".join(system))
    if safety:
        context.append("IMPORTANT: " + "\n".join(safety))
    return "\n".join(context) if context else None


__all__ = ["PartitionedSegments", "partition_segments", "build_context"]
