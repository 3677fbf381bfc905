"""Chat publisher models (Codey code chat, PaLM 2 chat).

Request body::

    {"instances": [{"context": "...", "messages": [{"author": "user", "content": "..."}]}],
     "parameters": {}}

``context`` gathers system segments and, behind an ``IMPORTANT:`` marker,
safety segments plus the JSON notice when a result schema is requested. It is
omitted when empty.
"""
from __future__ import annotations

from typing import Any, Dict, Sequence

from ...base.models import PromptOptions, PromptSegment
from ...base.prompts import build_context, partition_segments
from ...base.request import BuiltRequest
from ...base.streaming import dig
from .predict import PredictModelDefinition


class ChatModelDefinition(PredictModelDefinition):
    """Definition for models taking ``context`` plus author-tagged ``messages``."""

    def create_prompt(self, segments: Sequence[PromptSegment], options: PromptOptions) -> BuiltRequest:
        parts = partition_segments(segments)
        safety = self._strategy.augment_safety(parts.safety, options)
        instance: Dict[str, Any] = {
            "messages": [{"author": s.role.value, "content": s.content} for s in parts.messages],
        }
        context = build_context(parts.system, safety)
        if context is not None:
            instance = {"context": context, **instance}
        return BuiltRequest(payload={"instances": [instance], "parameters": {}})

    def extract_result(self, response: Any) -> str:
        try:
            content = dig(response, "predictions", 0, "candidates", 0, "content")
        except (KeyError, IndexError, TypeError):
            return ""
        return content or ""

    def project_stream_event(self, data: Any) -> Any:
        return dig(data, "outputs", 0, "structVal", "candidates", "listVal", 0, "structVal", "content", "stringVal")


__all__ = ["ChatModelDefinition"]
