"""
Prompt segment model shared by every driver.

A conversation is an ordered sequence of role-tagged segments. Order is
conversation order: builders may partition segments by role but never
reorder user/assistant turns relative to each other.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict


class PromptRole(str, Enum):
    """Role of a prompt segment.

    ``safety`` segments carry constraints the provider must honour; builders
    place them in the strongest slot the provider offers (system context,
    trailing system message).
    """

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    SAFETY = "safety"


@dataclass(frozen=True)
class PromptSegment:
    """A single immutable, role-tagged piece of prompt content.

    Attributes:
        role: The segment role; plain strings are coerced to :class:`PromptRole`.
        content: Text content of the segment.
    """

    role: PromptRole
    content: str

    def __post_init__(self) -> None:
        if not isinstance(self.role, PromptRole):
            object.__setattr__(self, "role", PromptRole(self.role))

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the segment."""
        data = asdict(self)
        data["role"] = self.role.value
        return data


__all__ = ["PromptRole", "PromptSegment"]
