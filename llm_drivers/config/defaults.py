"""llm_drivers.config.defaults
===========================

Small, stable default values used across the drivers. They can be overridden
via environment variables or an external configuration file, but provide
sensible fallbacks for local development and tests.

Only plain constants live here; nothing is imported from the driver packages.
"""

from __future__ import annotations

# ---- OpenAI ----
OPENAI_DEFAULT_EMBEDDING_MODEL = "text-embedding-ada-002"
# Models the fine-tuning API accepts as a base.
OPENAI_TRAINABLE_MODELS = frozenset(
    {
        "gpt-3.5-turbo-1106",
        "gpt-3.5-turbo-0613",
        "babbage-002",
        "davinci-002",
        "gpt-4-0613",
    }
)

# ---- Vertex AI ----
VERTEXAI_DEFAULT_REGION = "us-central1"
VERTEXAI_DEFAULT_EMBEDDING_MODEL = "textembedding-gecko"
VERTEXAI_BASE_URL_TEMPLATE = (
    "https://{region}-aiplatform.googleapis.com/v1/projects/{project}/locations/{region}"
)

# ---- HTTP ----
DRIVERS_HTTP_TIMEOUT_SECONDS = 60.0

__all__ = [
    "OPENAI_DEFAULT_EMBEDDING_MODEL",
    "OPENAI_TRAINABLE_MODELS",
    "VERTEXAI_DEFAULT_REGION",
    "VERTEXAI_DEFAULT_EMBEDDING_MODEL",
    "VERTEXAI_BASE_URL_TEMPLATE",
    "DRIVERS_HTTP_TIMEOUT_SECONDS",
]
