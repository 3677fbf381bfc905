"""Vertex AI driver package.

Exports:
- ``VertexAIDriver``: chat/text completion, streaming and embeddings for
  Google publisher models over the Vertex AI REST API.
"""

from .client import VertexAIDriver

__all__ = ["VertexAIDriver"]
