"""
Pure translation helpers for the OpenAI driver.

Purpose:
- Build Chat Completions messages from prompt segments.
- Assemble call-time request parameters (runtime options plus the
  ``format_output`` function directive).
- Read text, function-call arguments and stream deltas out of SDK objects.
- Map fine-tuning jobs and model listings onto the canonical DTOs.

No network I/O happens here. Every reader accepts both SDK objects
(attribute access) and plain mappings so tests can use either.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..base.models import (
    AIModel,
    ModelType,
    PromptSegment,
    TrainingJob,
    TrainingJobStatus,
)
from ..base.prompts import partition_segments, serialize_completion
from ..base.structured import FunctionCallStrategy

PROVIDER = "openai"

_STRATEGY = FunctionCallStrategy()


def get_field(obj: Any, *path: Any) -> Any:
    """Follow ``path`` through attributes, mapping keys and list indexes.

    Returns ``None`` as soon as a step is missing.
    """
    cur = obj
    for step in path:
        if cur is None:
            return None
        if isinstance(step, int):
            try:
                cur = cur[step]
            except (IndexError, KeyError, TypeError):
                return None
        elif isinstance(cur, Mapping):
            cur = cur.get(step)
        else:
            cur = getattr(cur, step, None)
    return cur


def build_messages(segments: Sequence[PromptSegment]) -> List[Dict[str, str]]:
    """Return Chat Completions messages for ``segments``.

    System segments lead, user and assistant turns follow in input order, and
    safety segments are appended last as system messages so they are the
    final instruction the model reads.
    """
    parts = partition_segments(segments)
    messages: List[Dict[str, str]] = [{"role": "system", "content": c} for c in parts.system]
    messages.extend({"role": s.role.value, "content": s.content} for s in parts.messages)
    messages.extend({"role": "system", "content": c} for c in parts.safety)
    return messages


def build_request_params(
    messages: List[Dict[str, Any]],
    options: Any,
    *,
    stream: bool = False,
) -> Dict[str, Any]:
    """Assemble ``chat.completions.create`` parameters at call time.

    ``None``-valued runtime options are omitted. ``messages`` is copied so
    the built prompt is never shared with the SDK call.
    """
    params: Dict[str, Any] = {
        "model": options.model,
        "messages": [dict(m) for m in messages],
        "n": 1,
    }
    if getattr(options, "temperature", None) is not None:
        params["temperature"] = float(options.temperature)
    if getattr(options, "max_tokens", None) is not None:
        params["max_tokens"] = int(options.max_tokens)
    params |= _STRATEGY.request_params(options)
    if stream:
        params["stream"] = True
    return params


def extract_message_text(resp: Any) -> Optional[str]:
    """Return ``choices[0].message.content`` or ``None``."""
    return get_field(resp, "choices", 0, "message", "content")


def extract_function_arguments(resp: Any) -> Optional[str]:
    """Return ``choices[0].message.function_call.arguments`` or ``None``."""
    return get_field(resp, "choices", 0, "message", "function_call", "arguments")


def text_delta(chunk: Any) -> str:
    """Stream translator for free-text mode; missing content yields ``""``."""
    value = get_field(chunk, "choices", 0, "delta", "content")
    return value if isinstance(value, str) else ""


def arguments_delta(chunk: Any) -> str:
    """Stream translator for structured mode: the function-call argument fragment."""
    value = get_field(chunk, "choices", 0, "delta", "function_call", "arguments")
    return value if isinstance(value, str) else ""


def build_training_line(segments: Sequence[PromptSegment], completion: Any) -> str:
    """Return one chat fine-tuning example: the prompt messages plus the answer."""
    messages = build_messages(segments)
    messages.append({"role": "assistant", "content": serialize_completion(completion)})
    return json.dumps({"messages": messages}, ensure_ascii=False)


def _failure_details(error: Any) -> str:
    if not error:
        return "error"
    code = get_field(error, "code")
    message = get_field(error, "message")
    if code is None and message is None:
        return "error"
    details = f"{code} - {message}"
    param = get_field(error, "param")
    if param:
        details += f" [{param}]"
    return details


def job_info(job: Any) -> TrainingJob:
    """Map an OpenAI fine-tuning job onto :class:`TrainingJob`.

    ``succeeded``, ``failed`` and ``cancelled`` map one to one. Any other
    status (``validating_files``, ``queued``, ``running``...) maps to
    ``running`` with the raw status kept in ``details``.
    """
    raw_status = get_field(job, "status")
    details: Optional[str] = None
    if raw_status == "succeeded":
        status = TrainingJobStatus.SUCCEEDED
    elif raw_status == "failed":
        status = TrainingJobStatus.FAILED
        details = _failure_details(get_field(job, "error"))
    elif raw_status == "cancelled":
        status = TrainingJobStatus.CANCELLED
    else:
        status = TrainingJobStatus.RUNNING
        details = raw_status
    return TrainingJob(
        id=get_field(job, "id"),
        status=status,
        model=get_field(job, "fine_tuned_model") or None,
        details=details,
    )


def to_ai_model(model: Any) -> AIModel:
    """Map an OpenAI model record onto :class:`AIModel`."""
    model_id = get_field(model, "id")
    return AIModel(
        id=model_id,
        name=model_id,
        provider=PROVIDER,
        owner=get_field(model, "owned_by") or "",
        type=ModelType.TEXT if get_field(model, "object") == "model" else ModelType.UNKNOWN,
    )


__all__ = [
    "PROVIDER",
    "get_field",
    "build_messages",
    "build_request_params",
    "extract_message_text",
    "extract_function_arguments",
    "text_delta",
    "arguments_delta",
    "build_training_line",
    "job_info",
    "to_ai_model",
]
