"""
Drivers Base Package

Exports the provider-agnostic driver contract, DTOs, the composable default
strategies (prompt partitioning, structured output, token usage, streaming)
and the driver factory.
"""

from .errors import (
    EmbeddingNotFoundError,
    ErrorCode,
    InvalidResponseError,
    ProviderError,
    UnsupportedModelError,
    classify_exception,
)
from .factory import DriverFactory, UnknownDriverError
from .dto import DriverParams
from .interfaces import DataSource, Driver, Transport
from .models import (
    AIModel,
    Completion,
    EmbeddingsResult,
    ExecutionOptions,
    ModelType,
    PromptOptions,
    PromptRole,
    PromptSegment,
    TokenUsage,
    TrainingJob,
    TrainingJobStatus,
    TrainingOptions,
    TrainingPromptOptions,
)
from .request import BuiltRequest, ProviderRequest, ReshapedRequest, with_runtime_parameters
from .streaming import EmptyDeltaPolicy, MappedStream, map_stream
from .structured import FORMAT_OUTPUT_FUNCTION, FunctionCallStrategy, SafetyNoticeStrategy

__all__ = [
    # Models
    "PromptRole",
    "PromptSegment",
    "PromptOptions",
    "ExecutionOptions",
    "TokenUsage",
    "Completion",
    "EmbeddingsResult",
    "TrainingJobStatus",
    "TrainingJob",
    "TrainingOptions",
    "TrainingPromptOptions",
    "ModelType",
    "AIModel",
    # Requests
    "BuiltRequest",
    "ReshapedRequest",
    "ProviderRequest",
    "with_runtime_parameters",
    # Interfaces
    "Driver",
    "DataSource",
    "Transport",
    # Strategies
    "FORMAT_OUTPUT_FUNCTION",
    "FunctionCallStrategy",
    "SafetyNoticeStrategy",
    "EmptyDeltaPolicy",
    "MappedStream",
    "map_stream",
    # Errors
    "ErrorCode",
    "ProviderError",
    "UnsupportedModelError",
    "InvalidResponseError",
    "EmbeddingNotFoundError",
    "classify_exception",
    # Factory
    "DriverFactory",
    "DriverParams",
    "UnknownDriverError",
]
