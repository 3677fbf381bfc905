"""
Execution options DTO.

Validated with pydantic so out-of-range sampling parameters are rejected
before any provider request is built. ``result_schema`` is the single switch
between free-text and structured-output mode for both the streaming and the
non-streaming paths.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class PromptOptions(BaseModel):
    """Options a prompt builder needs: the target model and optional schema."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model: str = Field(..., min_length=1)
    result_schema: Optional[Dict[str, Any]] = None

    @property
    def is_structured(self) -> bool:
        """True when a JSON schema result is requested."""
        return self.result_schema is not None


class ExecutionOptions(PromptOptions):
    """Options for a single completion call.

    Attributes:
        model: Target model identifier (non-empty).
        temperature: Optional sampling temperature within ``[0.0, 2.0]``.
        max_tokens: Optional positive cap on generated tokens.
        result_schema: Optional JSON-schema-like mapping; when present the
            driver runs in structured-output mode.

    Raises:
        pydantic.ValidationError: On empty model or out-of-range parameters.
    """

    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(default=None, gt=0)


__all__ = ["PromptOptions", "ExecutionOptions"]
