"""
Training (fine-tuning) DTOs.

Drivers only pass training requests through to provider job APIs; the
status vocabulary of each provider is folded onto :class:`TrainingJobStatus`.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .prompt_segment import PromptSegment


class TrainingJobStatus(str, Enum):
    """Closed set of canonical training job states."""

    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class TrainingJob:
    """A provider fine-tuning job.

    Attributes:
        id: Provider job identifier.
        status: Canonical status.
        model: Fine-tuned model identifier once the provider assigns one.
        details: Raw provider status for intermediate states, or an error
            description for failed jobs.
    """

    id: str
    status: TrainingJobStatus
    model: Optional[str] = None
    details: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the job."""
        data = asdict(self)
        data["status"] = self.status.value
        return data


@dataclass
class TrainingOptions:
    """Parameters for starting a training job."""

    model: str
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass
class TrainingPromptOptions:
    """Inputs for synthesizing one training example line.

    ``completion`` may be text or a structured value; structured values are
    serialized to JSON text in the emitted example.
    """

    segments: List[PromptSegment]
    completion: Any
    model: str


__all__ = [
    "TrainingJobStatus",
    "TrainingJob",
    "TrainingOptions",
    "TrainingPromptOptions",
]
