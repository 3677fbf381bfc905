"""Structured-output strategies.

Two ways of obtaining schema-conformant output:

``FunctionCallStrategy``
    For providers with function/tool declarations. The request carries one
    synthetic ``format_output`` function whose parameters are the result
    schema, and the provider is told to call exactly that function. The
    function-call arguments are the structured result; a response without
    them is rejected with :class:`InvalidResponseError`.

``SafetyNoticeStrategy``
    For providers without native support. A textual notice describing the
    schema is appended to the safety context and the whole text result is
    returned as the structured payload candidate, unvalidated.

A request built with a schema carries exactly one of these directives.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..errors import InvalidResponseError
from ..logging import LogContext, normalized_log_event
from ..models import PromptOptions
from ..prompts import get_json_safety_notice

FORMAT_OUTPUT_FUNCTION = "format_output"


class FunctionCallStrategy:
    """Native function-declaration strategy."""

    function_name = FORMAT_OUTPUT_FUNCTION

    def request_params(self, options: PromptOptions) -> Dict[str, Any]:
        """Return the request parameters declaring the output function.

        Empty when ``options`` carries no result schema.
        """
        if not options.is_structured:
            return {}
        return {
            "functions": [{"name": self.function_name, "parameters": options.result_schema}],
            "function_call": {"name": self.function_name},
        }

    def extract(
        self,
        arguments: Any,
        *,
        raw: Any,
        logger: logging.Logger,
        ctx: LogContext,
    ) -> Any:
        """Return the function-call ``arguments`` or fail loudly.

        The raw response is logged at ERROR level before
        :class:`InvalidResponseError` is raised, so the payload survives for
        diagnosis even if the caller swallows the exception.
        """
        if arguments:
            return arguments
        normalized_log_event(
            logger,
            "completion.error",
            ctx,
            phase="extract",
            level=logging.ERROR,
            structured=True,
            error_code="invalid_response",
            emitted=False,
            message=f"[{ctx.provider}] Response is not valid",
            raw_response=raw,
        )
        raise InvalidResponseError(provider=ctx.provider or "unknown", model=ctx.model, raw=raw)


class SafetyNoticeStrategy:
    """Notice-injection strategy for providers without function calling."""

    def augment_safety(self, safety: List[str], options: PromptOptions) -> List[str]:
        """Return ``safety`` plus the JSON notice when a schema is requested.

        The input list is not modified.
        """
        if not options.is_structured:
            return list(safety)
        return [*safety, get_json_safety_notice(options.result_schema or {})]

    def extract(self, text: Optional[str]) -> str:
        """Return the full text result as the structured payload candidate."""
        return text or ""


__all__ = ["FORMAT_OUTPUT_FUNCTION", "FunctionCallStrategy", "SafetyNoticeStrategy"]
