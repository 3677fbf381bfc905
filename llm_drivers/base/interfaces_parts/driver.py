"""Driver Protocol (single-class module).

The uniform surface every provider driver implements. Providers share
behavior by calling the composable helpers in ``llm_drivers.base.prompts``,
``structured``, ``tokens`` and ``streaming`` rather than by inheritance.
"""

from __future__ import annotations

from typing import AsyncIterator, List, Optional, Protocol, Sequence, runtime_checkable

from ..models import (
    AIModel,
    Completion,
    EmbeddingsResult,
    ExecutionOptions,
    PromptOptions,
    PromptSegment,
    TrainingJob,
    TrainingOptions,
    TrainingPromptOptions,
)
from ..request import ProviderRequest
from .data_source import DataSource


@runtime_checkable
class Driver(Protocol):
    """Uniform interface for large language model provider drivers.

    All network-bound operations are coroutines. Transport failures propagate
    unchanged; only ``validate_connection`` converts them into ``False``.
    """

    @property
    def provider(self) -> str:
        """Canonical provider identifier, e.g. ``"openai"`` or ``"vertexai"``."""
        ...

    def create_prompt(self, segments: Sequence[PromptSegment], options: PromptOptions) -> ProviderRequest:
        """Build the provider-native request for ``segments``."""
        ...

    def create_training_prompt(self, options: TrainingPromptOptions) -> str:
        """Return one training example line, or raise ``UnsupportedModelError``."""
        ...

    async def request_completion(self, prompt: ProviderRequest, options: ExecutionOptions) -> Completion:
        """Send ``prompt`` and return the normalized completion."""
        ...

    async def request_completion_stream(self, prompt: ProviderRequest, options: ExecutionOptions) -> AsyncIterator[str]:
        """Send ``prompt`` in streaming mode and return a lazy fragment stream."""
        ...

    async def execute(self, segments: Sequence[PromptSegment], options: ExecutionOptions) -> Completion:
        """Build the prompt for ``segments`` and request a completion."""
        ...

    async def stream(self, segments: Sequence[PromptSegment], options: ExecutionOptions) -> AsyncIterator[str]:
        """Build the prompt for ``segments`` and request a fragment stream."""
        ...

    async def generate_embeddings(self, content: str, model: Optional[str] = None) -> EmbeddingsResult:
        """Embed a single input."""
        ...

    async def list_models(self) -> List[AIModel]:
        """Return the provider catalog mapped to :class:`AIModel`."""
        ...

    async def list_trainable_models(self) -> List[AIModel]:
        """Return the subset of the catalog that accepts fine-tuning."""
        ...

    async def start_training(self, dataset: DataSource, options: TrainingOptions) -> TrainingJob:
        ...

    async def cancel_training(self, job_id: str) -> TrainingJob:
        ...

    async def get_training_job(self, job_id: str) -> TrainingJob:
        ...

    async def validate_connection(self) -> bool:
        """Return ``True`` when a lightweight listing call succeeds; never raises."""
        ...


__all__ = ["Driver"]
