"""llm_drivers package

One driver contract over several large language model providers.

Purpose:
    Callers describe a conversation as role-tagged prompt segments and get
    back a normalized :class:`Completion` (or a stream of text fragments)
    whichever provider serves it. Drivers are created by name::

        driver = llm_drivers.create("openai")
        completion = await driver.execute(segments, ExecutionOptions(model="gpt-4o-mini"))

Public API (re-exported):
    - Version: ``__version__``
    - Factory: :func:`create`, :class:`DriverFactory`, :class:`DriverParams`
    - Models: :class:`PromptSegment`, :class:`PromptRole`,
      :class:`ExecutionOptions`, :class:`Completion`, :class:`TokenUsage`
    - Exceptions: :class:`ProviderError`, :class:`ErrorCode`,
      :class:`UnsupportedModelError`, :class:`InvalidResponseError`,
      :class:`EmbeddingNotFoundError`, :class:`UnknownDriverError`

Driver modules are imported lazily, so importing this package does not load
any provider SDK.
"""

from typing import Any, Optional

from .base.dto import DriverParams
from .base.errors import (
    EmbeddingNotFoundError,
    ErrorCode,
    InvalidResponseError,
    ProviderError,
    UnsupportedModelError,
)
from .base.factory import DriverFactory, UnknownDriverError
from .base.interfaces import Driver
from .base.models import (
    Completion,
    ExecutionOptions,
    PromptRole,
    PromptSegment,
    TokenUsage,
)

__version__ = "0.1.0"


def create(provider: str, params: Optional[DriverParams] = None, **kwargs: Any) -> Any:
    """Create a driver by canonical provider name (``"openai"``, ``"vertexai"``)."""
    return DriverFactory.create(provider, params=params, **kwargs)


__all__ = [
    "__version__",
    "create",
    "DriverFactory",
    "DriverParams",
    "Driver",
    "PromptRole",
    "PromptSegment",
    "ExecutionOptions",
    "Completion",
    "TokenUsage",
    "ProviderError",
    "ErrorCode",
    "UnsupportedModelError",
    "InvalidResponseError",
    "EmbeddingNotFoundError",
    "UnknownDriverError",
]
