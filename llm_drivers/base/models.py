"""
Provider-agnostic DTOs for the driver layer.

Stable import path re-exporting the one-class-per-file implementations under
``llm_drivers.base.models_parts``.
"""

from .models_parts import (
    AIModel,
    Completion,
    EmbeddingsResult,
    ExecutionOptions,
    ModelType,
    PromptOptions,
    PromptRole,
    PromptSegment,
    TokenUsage,
    TrainingJob,
    TrainingJobStatus,
    TrainingOptions,
    TrainingPromptOptions,
)

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
