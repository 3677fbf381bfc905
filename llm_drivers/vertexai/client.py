"""Vertex AI driver for Google publisher models (PaLM 2, Codey).

Purpose:
- Implement the uniform driver surface over the Vertex AI REST API through a
  :class:`~llm_drivers.base.interfaces.Transport` (``FetchClient`` by default).
- Dispatch prompt building and completion calls to the model definition
  registered for the requested model id.
- Structured output uses the safety-notice strategy: the JSON schema is
  described in the prompt context and the text answer is returned as is.

External dependencies:
- ``httpx`` through ``FetchClient``; authentication is a bearer access token
  (static, or produced per request by ``token_provider``).

Failure semantics:
- Transport errors (``httpx.HTTPStatusError`` and friends) propagate
  unchanged, except in ``validate_connection`` which returns ``False``.
- Unknown model ids raise ``UnsupportedModelError``; fine-tuning is not
  supported by this driver.
"""

from __future__ import annotations

import logging
from typing import AsyncIterator, Dict, List, Mapping, Optional, Sequence

import httpx

from ..base.errors import (
    EmbeddingNotFoundError,
    ErrorCode,
    ProviderError,
    UnsupportedModelError,
    classify_exception,
)
from ..base.http import FetchClient, TokenProvider
from ..base.interfaces import DataSource, Transport
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import (
    AIModel,
    Completion,
    EmbeddingsResult,
    ExecutionOptions,
    ModelType,
    PromptOptions,
    PromptSegment,
    TrainingJob,
    TrainingOptions,
    TrainingPromptOptions,
)
from ..base.request import BuiltRequest, ProviderRequest
from ..base.streaming import EmptyDeltaPolicy, dig
from ..config import get_provider_config
from ..config.defaults import (
    VERTEXAI_BASE_URL_TEMPLATE,
    VERTEXAI_DEFAULT_EMBEDDING_MODEL,
    VERTEXAI_DEFAULT_REGION,
)
from .models import BUILTIN_DEFINITIONS, ModelDefinition

PROVIDER = "vertexai"

__all__ = ["VertexAIDriver"]


class VertexAIDriver:
    """Vertex AI implementation of the driver contract.

    Parameters are resolved through ``get_provider_config("vertexai")`` so
    ``VERTEXAI_PROJECT``, ``VERTEXAI_REGION`` and ``VERTEXAI_ACCESS_TOKEN``
    (or ``GOOGLE_ACCESS_TOKEN``) work without code changes.
    """

    def __init__(
        self,
        project: Optional[str] = None,
        region: Optional[str] = None,
        *,
        access_token: Optional[str] = None,
        token_provider: Optional[TokenProvider] = None,
        base_url: Optional[str] = None,
        embedding_model: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        headers: Optional[Mapping[str, str]] = None,
        fetch_client: Optional[Transport] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        definitions: Optional[Mapping[str, ModelDefinition]] = None,
        empty_delta_policy: EmptyDeltaPolicy = EmptyDeltaPolicy.FORWARD,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """Create the driver.

        ``fetch_client`` replaces the REST transport entirely; ``http_client``
        only swaps the ``httpx.AsyncClient`` used by the default one.

        Raises:
            ValueError: when no project is configured and no ``fetch_client``
                is supplied to stand in for the REST endpoint.
        """
        cfg = get_provider_config(
            PROVIDER,
            {
                "project": project,
                "region": region,
                "access_token": access_token,
                "base_url": base_url,
                "embedding_model": embedding_model,
                "timeout_seconds": timeout_seconds,
            },
        )
        self.project: Optional[str] = cfg.get("project")
        self.region: str = cfg.get("region") or VERTEXAI_DEFAULT_REGION
        self._embedding_model = cfg.get("embedding_model") or VERTEXAI_DEFAULT_EMBEDDING_MODEL
        self._definitions: Dict[str, ModelDefinition] = dict(definitions or BUILTIN_DEFINITIONS)
        self._empty_delta_policy = EmptyDeltaPolicy(empty_delta_policy)
        self._logger = logger or get_logger("drivers.vertexai")

        if fetch_client is None:
            if not self.project and not cfg.get("base_url"):
                raise ValueError("Vertex AI project is required (argument or VERTEXAI_PROJECT)")
            url = cfg.get("base_url") or VERTEXAI_BASE_URL_TEMPLATE.format(region=self.region, project=self.project)
            token = cfg.get("access_token")
            fetch_client = FetchClient(
                url,
                headers=headers,
                token_provider=token_provider or ((lambda: token) if token else None),
                timeout_seconds=float(cfg["timeout_seconds"]) if cfg.get("timeout_seconds") else None,
                client=http_client,
            )
        self.fetch_client: Transport = fetch_client

    @property
    def provider(self) -> str:
        """Return the canonical provider name."""
        return PROVIDER

    def get_definition(self, model: str) -> ModelDefinition:
        """Return the definition serving ``model``.

        Raises:
            UnsupportedModelError: for model ids without a definition.
        """
        definition = self._definitions.get(model)
        if definition is None:
            raise UnsupportedModelError(model, PROVIDER)
        return definition

    # ----- Prompting -----

    def create_prompt(self, segments: Sequence[PromptSegment], options: PromptOptions) -> BuiltRequest:
        return self.get_definition(options.model).create_prompt(segments, options)

    def create_training_prompt(self, options: TrainingPromptOptions) -> str:
        """Training data synthesis is not available for Vertex AI models."""
        raise UnsupportedModelError(options.model, PROVIDER, operation="training")

    # ----- Completion -----

    async def request_completion(self, prompt: ProviderRequest, options: ExecutionOptions) -> Completion:
        definition = self.get_definition(options.model)
        ctx = LogContext(provider=PROVIDER, model=options.model, operation="completion")
        normalized_log_event(
            self._logger,
            "completion.start",
            ctx,
            phase="start",
            structured=options.is_structured,
            emitted=False,
        )
        completion = await definition.request_completion(self.fetch_client, prompt, options)
        normalized_log_event(
            self._logger,
            "completion.end",
            ctx,
            phase="finalize",
            structured=options.is_structured,
            emitted=True,
            tokens=completion.token_usage,
        )
        return completion

    async def request_completion_stream(
        self, prompt: ProviderRequest, options: ExecutionOptions
    ) -> AsyncIterator[str]:
        """Open a server-sent event stream and return its text fragments.

        Malformed events yield ``""`` instead of ending the stream.
        """
        definition = self.get_definition(options.model)
        normalized_log_event(
            self._logger,
            "stream.start",
            LogContext(provider=PROVIDER, model=options.model, operation="stream"),
            phase="start",
            structured=options.is_structured,
            emitted=False,
        )
        return await definition.request_completion_stream(
            self.fetch_client, prompt, options, self._empty_delta_policy
        )

    async def execute(self, segments: Sequence[PromptSegment], options: ExecutionOptions) -> Completion:
        """Build the prompt for ``segments`` and request a completion."""
        return await self.request_completion(self.create_prompt(segments, options), options)

    async def stream(self, segments: Sequence[PromptSegment], options: ExecutionOptions) -> AsyncIterator[str]:
        """Build the prompt for ``segments`` and request a fragment stream."""
        return await self.request_completion_stream(self.create_prompt(segments, options), options)

    # ----- Embeddings -----

    async def generate_embeddings(self, content: str, model: Optional[str] = None) -> EmbeddingsResult:
        """Embed ``content`` with ``model`` (default ``textembedding-gecko``).

        Raises:
            EmbeddingNotFoundError: when the response carries no vector.
        """
        model = model or self._embedding_model
        response = await self.fetch_client.post(
            f"/publishers/google/models/{model}:predict",
            payload={"instances": [{"content": content}]},
        )
        try:
            values = dig(response, "predictions", 0, "embeddings", "values")
        except (KeyError, IndexError, TypeError):
            values = None
        if not values:
            raise EmbeddingNotFoundError(PROVIDER, model)
        normalized_log_event(
            self._logger,
            "embeddings.end",
            LogContext(provider=PROVIDER, model=model, operation="embeddings"),
            phase="finalize",
            emitted=True,
            dimensions=len(values),
        )
        return EmbeddingsResult(embeddings=list(values), model=model)

    # ----- Management -----

    async def list_models(self) -> List[AIModel]:
        """Return the built-in publisher models plus the default embeddings model."""
        models = [d.model for d in self._definitions.values()]
        models.append(
            AIModel(
                id=self._embedding_model,
                name="Embeddings for Text",
                provider=PROVIDER,
                owner="google",
                type=ModelType.EMBEDDING,
            )
        )
        return models

    async def list_trainable_models(self) -> List[AIModel]:
        return []

    async def start_training(self, dataset: DataSource, options: TrainingOptions) -> TrainingJob:
        raise UnsupportedModelError(options.model, PROVIDER, operation="training")

    async def cancel_training(self, job_id: str) -> TrainingJob:
        raise self._training_unsupported(job_id)

    async def get_training_job(self, job_id: str) -> TrainingJob:
        raise self._training_unsupported(job_id)

    @staticmethod
    def _training_unsupported(job_id: str) -> ProviderError:
        return ProviderError(
            code=ErrorCode.UNSUPPORTED,
            message=f"Training jobs are not supported by the Vertex AI driver: {job_id}",
            provider=PROVIDER,
        )

    async def validate_connection(self) -> bool:
        """Return ``True`` when listing endpoints succeeds, ``False`` otherwise."""
        ctx = LogContext(provider=PROVIDER, operation="validate")
        try:
            await self.fetch_client.get("/endpoints")
        except Exception as exc:  # noqa: BLE001 - any failure means "not connected"
            normalized_log_event(
                self._logger,
                "connection.validate",
                ctx,
                phase="validate",
                level=logging.WARNING,
                error_code=classify_exception(exc).value,
                emitted=False,
                error=str(exc),
            )
            return False
        normalized_log_event(self._logger, "connection.validate", ctx, phase="validate", emitted=True)
        return True

    async def aclose(self) -> None:
        """Close the transport when it supports closing."""
        closer = getattr(self.fetch_client, "aclose", None)
        if callable(closer):
            await closer()
