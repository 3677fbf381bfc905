"""Structured-output strategy package."""

from .strategy import FORMAT_OUTPUT_FUNCTION, FunctionCallStrategy, SafetyNoticeStrategy

__all__ = ["FORMAT_OUTPUT_FUNCTION", "FunctionCallStrategy", "SafetyNoticeStrategy"]
