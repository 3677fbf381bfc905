"""Text publisher models (PaLM 2 text).

The text endpoint takes one prompt string per instance::

    {"instances": [{"prompt": "..."}], "parameters": {}}

The string is the chat context (system, then ``IMPORTANT:`` safety and JSON
notice) followed by a blank line and the conversation turns, one per line.
Assistant turns are prefixed ``assistant:`` so prior answers stay
distinguishable from the question.
"""
from __future__ import annotations

from typing import Any, List, Sequence

from ...base.models import PromptOptions, PromptRole, PromptSegment
from ...base.prompts import build_context, partition_segments
from ...base.request import BuiltRequest
from ...base.streaming import dig
from .predict import PredictModelDefinition


class TextModelDefinition(PredictModelDefinition):
    """Definition for single-prompt text generation models."""

    def create_prompt(self, segments: Sequence[PromptSegment], options: PromptOptions) -> BuiltRequest:
        parts = partition_segments(segments)
        safety = self._strategy.augment_safety(parts.safety, options)
        turns: List[str] = [
            f"assistant: {s.content}" if s.role is PromptRole.ASSISTANT else s.content for s in parts.messages
        ]
        blocks = [b for b in (build_context(parts.system, safety), "\n".join(turns)) if b]
        return BuiltRequest(payload={"instances": [{"prompt": "\n\n".join(blocks)}], "parameters": {}})

    def extract_result(self, response: Any) -> str:
        try:
            content = dig(response, "predictions", 0, "content")
        except (KeyError, IndexError, TypeError):
            return ""
        return content or ""

    def project_stream_event(self, data: Any) -> Any:
        return dig(data, "outputs", 0, "structVal", "content", "stringVal")


__all__ = ["TextModelDefinition"]
