"""OpenAI driver package.

Exports:
- ``OpenAIDriver``: Chat Completions, embeddings, model listing and
  fine-tuning pass-through over ``AsyncOpenAI``.
"""

from .client import OpenAIDriver

__all__ = ["OpenAIDriver"]
