"""Models parts package public surface.

Re-exports individual DTOs so callers can import from
`llm_drivers.base.models_parts` if needed, while `llm_drivers.base.models`
remains the primary stable import path.
"""

from .prompt_segment import PromptRole, PromptSegment
from .execution_options import ExecutionOptions, PromptOptions
from .completion import Completion, EmbeddingsResult, TokenUsage
from .training import TrainingJob, TrainingJobStatus, TrainingOptions, TrainingPromptOptions
from .ai_model import AIModel, ModelType

__all__ = [
    "PromptRole",
    "PromptSegment",
    "PromptOptions",
    "ExecutionOptions",
    "TokenUsage",
    "Completion",
    "EmbeddingsResult",
    "TrainingJobStatus",
    "TrainingJob",
    "TrainingOptions",
    "TrainingPromptOptions",
    "ModelType",
    "AIModel",
]
