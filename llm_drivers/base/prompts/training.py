"""Default training-example synthesis."""
from __future__ import annotations

import json
from typing import Any


def serialize_completion(completion: Any) -> str:
    """Return ``completion`` as text, JSON-encoding structured values."""
    return completion if isinstance(completion, str) else json.dumps(completion, ensure_ascii=False)


def create_training_prompt(prompt: Any, completion: Any) -> str:
    """Return one JSONL training line pairing a built prompt with its completion."""
    return json.dumps(
        {"prompt": prompt, "completion": serialize_completion(completion)},
        ensure_ascii=False,
    )


__all__ = ["serialize_completion", "create_training_prompt"]
