"""Shared ``:predict`` / ``:serverStreamingPredict`` call flow.

Chat and text publisher models differ only in how prompts are laid out and
where the generated text sits in a response; the calling convention is the
same. :class:`PredictModelDefinition` owns that convention and leaves the two
layout hooks to subclasses.

Runtime parameters (``temperature``, ``maxOutputTokens``) are attached to a
copy of the built request at call time. The streaming envelope is a
:class:`ReshapedRequest` derived from that copy, so the caller's request is
never modified and can be sent again.
"""
from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ...base.http import sse
from ...base.interfaces import Transport
from ...base.models import AIModel, Completion, ExecutionOptions, PromptOptions, PromptSegment
from ...base.request import BuiltRequest, ProviderRequest, ReshapedRequest, with_runtime_parameters
from ...base.streaming import EmptyDeltaPolicy, MappedStream, safe_event_projection
from ...base.structured import SafetyNoticeStrategy
from ...base.tokens import extract_vertex_token_usage
from ..tensor import generate_streaming_prompt


class PredictModelDefinition:
    """Base definition for publisher models served by ``:predict``."""

    def __init__(self, model: AIModel) -> None:
        self.model = model
        self._strategy = SafetyNoticeStrategy()

    @property
    def predict_path(self) -> str:
        return f"/publishers/google/models/{self.model.id}:predict"

    @property
    def stream_path(self) -> str:
        return f"/publishers/google/models/{self.model.id}:serverStreamingPredict?alt=sse"

    # ----- Layout hooks -----

    def create_prompt(self, segments: Sequence[PromptSegment], options: PromptOptions) -> BuiltRequest:  # pragma: no cover - abstract
        raise NotImplementedError

    def extract_result(self, response: Any) -> str:  # pragma: no cover - abstract
        """Return the generated text of a ``:predict`` response."""
        raise NotImplementedError

    def project_stream_event(self, data: Any) -> Any:  # pragma: no cover - abstract
        """Return the text fragment carried by one decoded stream event."""
        raise NotImplementedError

    # ----- Call flow -----

    @staticmethod
    def runtime_parameters(options: ExecutionOptions) -> Dict[str, Optional[Any]]:
        return {"temperature": options.temperature, "maxOutputTokens": options.max_tokens}

    def with_parameters(self, prompt: ProviderRequest, options: ExecutionOptions) -> BuiltRequest:
        """Return a copy of the built request with runtime parameters attached."""
        built = prompt.original if isinstance(prompt, ReshapedRequest) else prompt
        return BuiltRequest(payload=with_runtime_parameters(built.payload, self.runtime_parameters(options)))

    def reshape_for_streaming(self, prompt: ProviderRequest, options: ExecutionOptions) -> ReshapedRequest:
        """Return the tensor-encoded streaming envelope for ``prompt``."""
        return self.with_parameters(prompt, options).reshape(generate_streaming_prompt)

    async def request_completion(
        self, transport: Transport, prompt: ProviderRequest, options: ExecutionOptions
    ) -> Completion:
        payload = self.with_parameters(prompt, options).payload
        response = await transport.post(self.predict_path, payload=payload)
        return Completion(
            result=self._strategy.extract(self.extract_result(response)),
            token_usage=extract_vertex_token_usage(response),
        )

    async def request_completion_stream(
        self,
        transport: Transport,
        prompt: ProviderRequest,
        options: ExecutionOptions,
        policy: EmptyDeltaPolicy = EmptyDeltaPolicy.FORWARD,
    ) -> MappedStream:
        reshaped = self.reshape_for_streaming(prompt, options)
        events = await transport.post(self.stream_path, payload=reshaped.envelope, reader=sse)
        return MappedStream(events, safe_event_projection(self.project_stream_event), policy)


__all__ = ["PredictModelDefinition"]
