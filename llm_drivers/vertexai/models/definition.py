"""ModelDefinition Protocol (single-class module).

A Vertex AI publisher model family is described by one definition object:
its catalog entry plus how to build prompts for it and how to call it. The
driver dispatches on ``definition.model.id``.
"""

from __future__ import annotations

from typing import AsyncIterator, Protocol, Sequence, runtime_checkable

from ...base.interfaces import Transport
from ...base.models import AIModel, Completion, ExecutionOptions, PromptOptions, PromptSegment
from ...base.request import BuiltRequest, ProviderRequest
from ...base.streaming import EmptyDeltaPolicy


@runtime_checkable
class ModelDefinition(Protocol):
    """Prompt builder and call adapter for one publisher model."""

    model: AIModel

    def create_prompt(self, segments: Sequence[PromptSegment], options: PromptOptions) -> BuiltRequest:
        ...

    async def request_completion(
        self, transport: Transport, prompt: ProviderRequest, options: ExecutionOptions
    ) -> Completion:
        ...

    async def request_completion_stream(
        self,
        transport: Transport,
        prompt: ProviderRequest,
        options: ExecutionOptions,
        policy: EmptyDeltaPolicy = EmptyDeltaPolicy.FORWARD,
    ) -> AsyncIterator[str]:
        ...


__all__ = ["ModelDefinition"]
