"""OpenAI driver built on the official async SDK.

Purpose:
- Implement the uniform :class:`~llm_drivers.base.interfaces.Driver` surface
  over Chat Completions, Embeddings, Models and Fine-tuning.
- Structured output uses the native function-declaration strategy: the
  request declares a single ``format_output`` function and the call is forced
  onto it; the function-call arguments are the result.

External dependencies:
- ``openai`` (``AsyncOpenAI``) for every API call.
- ``httpx`` to download training datasets before upload.

Failure semantics:
- SDK exceptions propagate unchanged; nothing is wrapped or retried here.
- A structured response without function-call arguments is logged with the
  raw response and rejected with ``InvalidResponseError``.
- ``validate_connection`` is the only method that converts failures, into
  ``False``.
"""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator, Callable, List, Mapping, Optional, Sequence

import httpx
from openai import AsyncOpenAI

from ..base.errors import EmbeddingNotFoundError, UnsupportedModelError, classify_exception
from ..base.interfaces import DataSource
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import (
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
from ..base.request import BuiltRequest, ProviderRequest, ReshapedRequest
from ..base.streaming import EmptyDeltaPolicy, MappedStream
from ..base.structured import FunctionCallStrategy
from ..base.tokens import extract_openai_token_usage
from ..config import get_provider_config
from ..config.defaults import OPENAI_DEFAULT_EMBEDDING_MODEL, OPENAI_TRAINABLE_MODELS
from .helpers import (
    PROVIDER,
    arguments_delta,
    build_messages,
    build_request_params,
    build_training_line,
    extract_function_arguments,
    extract_message_text,
    get_field,
    job_info,
    text_delta,
    to_ai_model,
)

__all__ = ["OpenAIDriver"]


class OpenAIDriver:
    """OpenAI implementation of the driver contract.

    Prompts are Chat Completions message lists wrapped in a
    :class:`BuiltRequest` (``{"messages": [...]}``); runtime options are
    attached when the request is sent.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        base_url: Optional[str] = None,
        embedding_model: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        headers: Optional[Mapping[str, str]] = None,
        client: Optional[AsyncOpenAI] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        empty_delta_policy: EmptyDeltaPolicy = EmptyDeltaPolicy.FORWARD,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """Create the driver.

        Parameters:
            api_key: OpenAI key; falls back to configuration and ``OPENAI_API_KEY``.
            base_url: Optional API base URL override (proxies, gateways).
            embedding_model: Default model for :meth:`generate_embeddings`.
            timeout_seconds: SDK request timeout.
            headers: Extra headers sent with every SDK request.
            client: Pre-built SDK client; tests inject fakes exposing the same
                namespaces (``chat.completions``, ``models``...).
            http_client: Client used to download training datasets.
            empty_delta_policy: Whether empty stream deltas are forwarded.
            logger: Logger for structured events; defaults to ``drivers.openai``.
        """
        cfg = get_provider_config(
            PROVIDER,
            {
                "api_key": api_key,
                "base_url": base_url,
                "embedding_model": embedding_model,
                "timeout_seconds": timeout_seconds,
            },
        )
        self._embedding_model = cfg.get("embedding_model") or OPENAI_DEFAULT_EMBEDDING_MODEL
        self._timeout = cfg.get("timeout_seconds")
        self._service = client or AsyncOpenAI(
            api_key=cfg.get("api_key"),
            base_url=cfg.get("base_url"),
            timeout=float(self._timeout) if self._timeout is not None else None,
            default_headers=dict(headers) if headers else None,
        )
        self._http_client = http_client
        self._empty_delta_policy = EmptyDeltaPolicy(empty_delta_policy)
        self._strategy = FunctionCallStrategy()
        self._logger = logger or get_logger("drivers.openai")

    @property
    def provider(self) -> str:
        """Return the canonical provider name."""
        return PROVIDER

    @property
    def service(self) -> AsyncOpenAI:
        """The underlying SDK client."""
        return self._service

    # ----- Prompting -----

    def create_prompt(self, segments: Sequence[PromptSegment], options: PromptOptions) -> BuiltRequest:
        """Build the Chat Completions message list for ``segments``.

        No schema notice is injected; the function declaration attached at
        call time is the only structured-output directive.
        """
        return BuiltRequest(payload={"messages": build_messages(segments)})

    def create_training_prompt(self, options: TrainingPromptOptions) -> str:
        """Return one chat fine-tuning JSONL line.

        Raises:
            UnsupportedModelError: for non-chat (non ``gpt``) model families.
        """
        if "gpt" not in options.model:
            raise UnsupportedModelError(options.model, PROVIDER, operation="training")
        return build_training_line(options.segments, options.completion)

    # ----- Completion -----

    async def request_completion(self, prompt: ProviderRequest, options: ExecutionOptions) -> Completion:
        """Send a non-streaming chat completion and normalize the response."""
        ctx = LogContext(provider=PROVIDER, model=options.model, operation="completion")
        params = build_request_params(self._messages(prompt), options)
        normalized_log_event(
            self._logger,
            "completion.start",
            ctx,
            phase="start",
            structured=options.is_structured,
            emitted=False,
        )
        resp = await self._service.chat.completions.create(**params)
        ctx = ctx.derive(response_id=get_field(resp, "id"))
        completion = self._extract_completion(resp, options, ctx)
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
        """Start a streaming chat completion and return its fragment stream.

        In structured mode each fragment is a piece of the function-call
        arguments JSON; fragments are yielded verbatim and never buffered.
        """
        ctx = LogContext(provider=PROVIDER, model=options.model, operation="stream")
        params = build_request_params(self._messages(prompt), options, stream=True)
        normalized_log_event(
            self._logger,
            "stream.start",
            ctx,
            phase="start",
            structured=options.is_structured,
            emitted=False,
        )
        stream = await self._service.chat.completions.create(**params)
        translate: Callable[[Any], str] = arguments_delta if options.is_structured else text_delta
        return MappedStream(stream, translate, self._empty_delta_policy)

    async def execute(self, segments: Sequence[PromptSegment], options: ExecutionOptions) -> Completion:
        """Build the prompt for ``segments`` and request a completion."""
        return await self.request_completion(self.create_prompt(segments, options), options)

    async def stream(self, segments: Sequence[PromptSegment], options: ExecutionOptions) -> AsyncIterator[str]:
        """Build the prompt for ``segments`` and request a fragment stream."""
        return await self.request_completion_stream(self.create_prompt(segments, options), options)

    def _messages(self, prompt: ProviderRequest) -> List[Any]:
        built = prompt.original if isinstance(prompt, ReshapedRequest) else prompt
        return list(built.payload.get("messages") or [])

    def _extract_completion(self, resp: Any, options: ExecutionOptions, ctx: LogContext) -> Completion:
        usage = extract_openai_token_usage(resp)
        if not options.is_structured:
            return Completion(result=extract_message_text(resp), token_usage=usage)
        result = self._strategy.extract(
            extract_function_arguments(resp),
            raw=resp,
            logger=self._logger,
            ctx=ctx,
        )
        return Completion(result=result, token_usage=usage)

    # ----- Embeddings -----

    async def generate_embeddings(self, content: str, model: Optional[str] = None) -> EmbeddingsResult:
        """Embed ``content`` with ``model`` (default ``text-embedding-ada-002``).

        Raises:
            EmbeddingNotFoundError: when the response carries no vector.
        """
        model = model or self._embedding_model
        res = await self._service.embeddings.create(input=content, model=model)
        embeddings = get_field(res, "data", 0, "embedding")
        if not embeddings:
            raise EmbeddingNotFoundError(PROVIDER, model)
        normalized_log_event(
            self._logger,
            "embeddings.end",
            LogContext(provider=PROVIDER, model=model, operation="embeddings"),
            phase="finalize",
            emitted=True,
            dimensions=len(embeddings),
        )
        return EmbeddingsResult(embeddings=list(embeddings), model=model)

    # ----- Training -----

    async def start_training(self, dataset: DataSource, options: TrainingOptions) -> TrainingJob:
        """Upload ``dataset`` and create a fine-tuning job on ``options.model``."""
        ctx = LogContext(provider=PROVIDER, model=options.model, operation="training")
        content = await self._download(await dataset.get_url())
        file = await self._service.files.create(file=(dataset.name, content), purpose="fine-tune")
        normalized_log_event(
            self._logger,
            "training.start",
            ctx,
            phase="start",
            training_file=get_field(file, "id"),
        )
        job = await self._service.fine_tuning.jobs.create(
            training_file=get_field(file, "id"),
            model=options.model,
            hyperparameters=dict(options.params),
        )
        return self._job(job, ctx)

    async def cancel_training(self, job_id: str) -> TrainingJob:
        job = await self._service.fine_tuning.jobs.cancel(job_id)
        return self._job(job, LogContext(provider=PROVIDER, operation="training", response_id=job_id))

    async def get_training_job(self, job_id: str) -> TrainingJob:
        job = await self._service.fine_tuning.jobs.retrieve(job_id)
        return self._job(job, LogContext(provider=PROVIDER, operation="training", response_id=job_id))

    def _job(self, job: Any, ctx: LogContext) -> TrainingJob:
        info = job_info(job)
        normalized_log_event(
            self._logger,
            "training.status",
            ctx,
            phase="status",
            job_id=info.id,
            status=info.status.value,
            details=info.details,
        )
        return info

    async def _download(self, url: str) -> bytes:
        if self._http_client is not None:
            resp = await self._http_client.get(url)
            resp.raise_for_status()
            return resp.content
        async with httpx.AsyncClient(timeout=self._timeout) as http:
            resp = await http.get(url)
            resp.raise_for_status()
            return resp.content

    # ----- Management -----

    async def list_models(self) -> List[AIModel]:
        """Return every model visible to the API key."""
        return await self._list_models()

    async def list_trainable_models(self) -> List[AIModel]:
        """Return the models accepted as fine-tuning bases."""
        return await self._list_models(lambda m: get_field(m, "id") in OPENAI_TRAINABLE_MODELS)

    async def _list_models(self, predicate: Optional[Callable[[Any], bool]] = None) -> List[AIModel]:
        page = await self._service.models.list()
        data = get_field(page, "data") or []
        return [to_ai_model(m) for m in data if predicate is None or predicate(m)]

    async def validate_connection(self) -> bool:
        """Return ``True`` when a models listing succeeds, ``False`` otherwise."""
        ctx = LogContext(provider=PROVIDER, operation="validate")
        try:
            await self._service.models.list()
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
