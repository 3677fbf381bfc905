"""Vertex AI driver tests with an in-memory transport.

The transport records every POST so request bodies can be asserted exactly;
streaming responses are fake event streams of ``ServerSentEvent``.
"""

from __future__ import annotations

import copy

import httpx
import pytest

from llm_drivers.base.errors import EmbeddingNotFoundError, ErrorCode, ProviderError, UnsupportedModelError
from llm_drivers.base.http import FetchClient, sse
from llm_drivers.base.models import (
    ExecutionOptions,
    ModelType,
    PromptRole,
    PromptSegment,
    TokenUsage,
    TrainingOptions,
    TrainingPromptOptions,
)
from llm_drivers.base.request import BuiltRequest
from llm_drivers.vertexai import VertexAIDriver

from .fakes import FakeEventStream, FakeTransport, sse_event

SCHEMA = {"type": "object", "properties": {"answer": {"type": "integer"}}}
CODEY_PREDICT = "/publishers/google/models/codechat-bison:predict"
CODEY_STREAM = "/publishers/google/models/codechat-bison:serverStreamingPredict?alt=sse"


def _driver(transport: FakeTransport, **kwargs) -> VertexAIDriver:
    return VertexAIDriver(project="proj", fetch_client=transport, **kwargs)


def _chat_prediction(content: str) -> dict:
    return {
        "predictions": [{"candidates": [{"author": "1", "content": content}], "safetyAttributes": {}}],
        "metadata": {
            "tokenMetadata": {
                "inputTokenCount": {"totalTokens": 12, "totalBillableCharacters": 30},
                "outputTokenCount": {"totalTokens": 1, "totalBillableCharacters": 1},
            }
        },
    }


def _chat_event(text: str) -> dict:
    return {
        "outputs": [
            {"structVal": {"candidates": {"listVal": [{"structVal": {"content": {"stringVal": text}}}]}}}
        ]
    }


def test_codey_prompt_layout():
    segments = [
        PromptSegment(PromptRole.SYSTEM, "You write Python"),
        PromptSegment(PromptRole.USER, "sort a list"),
        PromptSegment(PromptRole.SAFETY, "no shell commands"),
        PromptSegment(PromptRole.ASSISTANT, "sorted(xs)"),
    ]
    prompt = _driver(FakeTransport()).create_prompt(segments, ExecutionOptions(model="codechat-bison"))
    assert prompt.payload == {  # nosec B101
        "instances": [
            {
                "context": "You write Python\nIMPORTANT: no shell commands",
                "messages": [
                    {"author": "user", "content": "sort a list"},
                    {"author": "assistant", "content": "sorted(xs)"},
                ],
            }
        ],
        "parameters": {},
    }


def test_prompt_without_context_omits_key():
    prompt = _driver(FakeTransport()).create_prompt(
        [PromptSegment(PromptRole.USER, "hi")], ExecutionOptions(model="codechat-bison")
    )
    assert "context" not in prompt.payload["instances"][0]  # nosec B101


def test_schema_adds_exactly_one_notice_to_context():
    segments = [PromptSegment(PromptRole.USER, "2+2?")]
    prompt = _driver(FakeTransport()).create_prompt(
        segments, ExecutionOptions(model="codechat-bison", result_schema=SCHEMA)
    )
    context = prompt.payload["instances"][0]["context"]
    assert context.startswith("IMPORTANT: ")  # nosec B101
    assert context.count('"answer"') == 1  # nosec B101
    assert "functions" not in prompt.payload  # nosec B101


def test_unknown_model_is_rejected():
    with pytest.raises(UnsupportedModelError) as info:
        _driver(FakeTransport()).create_prompt([], ExecutionOptions(model="gemini-pro"))
    assert "gemini-pro" in info.value.message  # nosec B101


@pytest.mark.asyncio
async def test_execute_returns_result_and_usage(terse_segments):
    transport = FakeTransport({CODEY_PREDICT: _chat_prediction("4")})
    completion = await _driver(transport).execute(terse_segments, ExecutionOptions(model="codechat-bison"))
    assert completion.result == "4"  # nosec B101
    assert completion.token_usage == TokenUsage(prompt=12, result=1, total=13)  # nosec B101
    assert transport.posts[0]["path"] == CODEY_PREDICT  # nosec B101
    assert transport.posts[0]["reader"] is None  # nosec B101


@pytest.mark.asyncio
async def test_runtime_parameters_attached_to_copy(terse_segments):
    transport = FakeTransport({CODEY_PREDICT: _chat_prediction("ok")})
    driver = _driver(transport)
    prompt = driver.create_prompt(terse_segments, ExecutionOptions(model="codechat-bison"))
    original = copy.deepcopy(prompt.payload)

    await driver.request_completion(prompt, ExecutionOptions(model="codechat-bison", temperature=0.2))
    await driver.request_completion(prompt, ExecutionOptions(model="codechat-bison", max_tokens=50))

    assert transport.posts[0]["payload"]["parameters"] == {"temperature": 0.2}  # nosec B101
    assert transport.posts[1]["payload"]["parameters"] == {"maxOutputTokens": 50}  # nosec B101
    assert prompt.payload == original  # nosec B101


@pytest.mark.asyncio
async def test_missing_prediction_content_yields_empty_result():
    transport = FakeTransport({CODEY_PREDICT: {"predictions": [{"candidates": []}]}})
    completion = await _driver(transport).execute(
        [PromptSegment(PromptRole.USER, "hi")], ExecutionOptions(model="codechat-bison")
    )
    assert completion.result == ""  # nosec B101
    assert completion.token_usage == TokenUsage()  # nosec B101


@pytest.mark.asyncio
async def test_structured_result_is_returned_as_text(terse_segments):
    transport = FakeTransport({CODEY_PREDICT: _chat_prediction('{"answer": 4}')})
    options = ExecutionOptions(model="codechat-bison", result_schema=SCHEMA)
    completion = await _driver(transport).execute(terse_segments, options)
    assert completion.result == '{"answer": 4}'  # nosec B101


@pytest.mark.asyncio
async def test_stream_uses_tensor_envelope_and_projects_events(terse_segments):
    events = FakeEventStream(
        [sse_event(_chat_event("Hel")), sse_event("not json"), sse_event(_chat_event("lo"))]
    )
    transport = FakeTransport({CODEY_STREAM: events})
    driver = _driver(transport)
    prompt = driver.create_prompt(terse_segments, ExecutionOptions(model="codechat-bison"))
    original = copy.deepcopy(prompt.payload)

    stream = await driver.request_completion_stream(
        prompt, ExecutionOptions(model="codechat-bison", temperature=0.5)
    )
    assert [f async for f in stream] == ["Hel", "", "lo"]  # nosec B101

    post = transport.posts[0]
    assert post["path"] == CODEY_STREAM and post["reader"] is sse  # nosec B101
    envelope = post["payload"]
    assert "instances" not in envelope  # nosec B101
    struct = envelope["inputs"][0]["structVal"]
    assert struct["context"] == {"stringVal": "Be terse"}  # nosec B101
    assert struct["messages"]["listVal"][0]["structVal"]["content"] == {"stringVal": "2+2?"}  # nosec B101
    assert envelope["parameters"] == {"structVal": {"temperature": {"floatVal": 0.5}}}  # nosec B101
    assert prompt.payload == original  # nosec B101
    assert isinstance(prompt, BuiltRequest)  # nosec B101
    assert events.closed  # nosec B101


@pytest.mark.asyncio
async def test_stream_early_close_closes_event_source(terse_segments):
    events = FakeEventStream([sse_event(_chat_event(t)) for t in ("a", "b", "c")])
    driver = _driver(FakeTransport({CODEY_STREAM: events}))
    stream = await driver.stream(terse_segments, ExecutionOptions(model="codechat-bison"))
    async for _ in stream:
        break
    await stream.aclose()
    assert events.closed and events.pulled == 1  # nosec B101


@pytest.mark.asyncio
async def test_text_model_prompt_and_response():
    path = "/publishers/google/models/text-bison:predict"
    transport = FakeTransport({path: {"predictions": [{"content": "Paris"}]}})
    driver = _driver(transport)
    segments = [
        PromptSegment(PromptRole.SYSTEM, "Answer briefly"),
        PromptSegment(PromptRole.USER, "Capital of France?"),
    ]
    completion = await driver.execute(segments, ExecutionOptions(model="text-bison", max_tokens=5))
    assert completion.result == "Paris"  # nosec B101
    payload = transport.posts[0]["payload"]
    assert payload["instances"] == [{"prompt": "Answer briefly\n\nCapital of France?"}]  # nosec B101
    assert payload["parameters"] == {"maxOutputTokens": 5}  # nosec B101


@pytest.mark.asyncio
async def test_text_model_stream_projection():
    path = "/publishers/google/models/text-bison:serverStreamingPredict?alt=sse"
    events = FakeEventStream([sse_event({"outputs": [{"structVal": {"content": {"stringVal": "Par"}}}]})])
    driver = _driver(FakeTransport({path: events}))
    stream = await driver.stream([PromptSegment(PromptRole.USER, "q")], ExecutionOptions(model="text-bison"))
    assert [f async for f in stream] == ["Par"]  # nosec B101


@pytest.mark.asyncio
async def test_embeddings_default_model_and_vector():
    path = "/publishers/google/models/textembedding-gecko:predict"
    transport = FakeTransport({path: {"predictions": [{"embeddings": {"values": [0.5, 0.25]}}]}})
    result = await _driver(transport).generate_embeddings("hello")
    assert result.embeddings == [0.5, 0.25] and result.model == "textembedding-gecko"  # nosec B101
    assert transport.posts[0]["payload"] == {"instances": [{"content": "hello"}]}  # nosec B101


@pytest.mark.asyncio
async def test_embeddings_missing_vector_fails():
    path = "/publishers/google/models/textembedding-gecko@003:predict"
    transport = FakeTransport({path: {"predictions": [{"embeddings": {"values": []}}]}})
    with pytest.raises(EmbeddingNotFoundError):
        await _driver(transport).generate_embeddings("hello", model="textembedding-gecko@003")
    transport.responses[path] = {"predictions": []}
    with pytest.raises(EmbeddingNotFoundError):
        await _driver(transport).generate_embeddings("hello", model="textembedding-gecko@003")


@pytest.mark.asyncio
async def test_list_models():
    driver = _driver(FakeTransport())
    models = await driver.list_models()
    ids = [m.id for m in models]
    assert ids == ["codechat-bison", "chat-bison", "text-bison", "textembedding-gecko"]  # nosec B101
    assert models[0].name == "Codey for Code Chat" and models[0].type is ModelType.CHAT  # nosec B101
    assert models[-1].type is ModelType.EMBEDDING  # nosec B101
    assert await driver.list_trainable_models() == []  # nosec B101


@pytest.mark.asyncio
async def test_training_is_unsupported():
    driver = _driver(FakeTransport())
    with pytest.raises(UnsupportedModelError):
        driver.create_training_prompt(TrainingPromptOptions(segments=[], completion="x", model="chat-bison"))
    with pytest.raises(UnsupportedModelError):
        await driver.start_training(object(), TrainingOptions(model="chat-bison"))
    with pytest.raises(ProviderError) as info:
        await driver.get_training_job("job-1")
    assert info.value.code is ErrorCode.UNSUPPORTED  # nosec B101
    with pytest.raises(ProviderError):
        await driver.cancel_training("job-1")


@pytest.mark.asyncio
async def test_validate_connection():
    transport = FakeTransport({"/endpoints": {"endpoints": []}})
    assert await _driver(transport).validate_connection() is True  # nosec B101
    assert transport.gets == ["/endpoints"]  # nosec B101
    failing = FakeTransport(fail_get=httpx.ConnectError("refused"))
    assert await _driver(failing).validate_connection() is False  # nosec B101


@pytest.mark.asyncio
async def test_default_fetch_client_targets_regional_endpoint():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        driver = VertexAIDriver(project="proj", region="europe-west4", access_token="ya29.x", http_client=http)
        assert isinstance(driver.fetch_client, FetchClient)  # nosec B101
        assert await driver.validate_connection() is True  # nosec B101
    assert seen["url"] == (  # nosec B101
        "https://europe-west4-aiplatform.googleapis.com/v1/projects/proj/locations/europe-west4/endpoints"
    )
    assert seen["auth"] == "Bearer ya29.x"  # nosec B101


def test_project_required_without_transport():
    with pytest.raises(ValueError):
        VertexAIDriver()


def test_project_from_environment(monkeypatch):
    monkeypatch.setenv("VERTEXAI_PROJECT", "env-proj")
    assert VertexAIDriver().project == "env-proj"  # nosec B101
