"""Composable default prompt strategy helpers."""

from .segments import PartitionedSegments, build_context, partition_segments
from .safety import get_json_safety_notice
from .training import create_training_prompt, serialize_completion

__all__ = [
    "PartitionedSegments",
    "partition_segments",
    "build_context",
    "get_json_safety_notice",
    "create_training_prompt",
    "serialize_completion",
]
