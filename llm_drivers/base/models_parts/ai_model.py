"""
AIModel DTO for provider model listings.

Produced by mapping provider catalog records; read-only and never persisted.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict


class ModelType(str, Enum):
    """Coarse model category. Unrecognized provider types map to ``UNKNOWN``."""

    TEXT = "text"
    CHAT = "chat"
    EMBEDDING = "embedding"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class AIModel:
    """A single model listing entry.

    Attributes:
        id: Stable model identifier.
        name: Human-friendly display name.
        provider: Provider key owning this model.
        owner: Organization owning the model.
        type: :class:`ModelType` category.
    """

    id: str
    name: str
    provider: str
    owner: str
    type: ModelType = ModelType.UNKNOWN

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the entry."""
        data = asdict(self)
        data["type"] = self.type.value
        return data


__all__ = ["ModelType", "AIModel"]
