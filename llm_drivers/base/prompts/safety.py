"""Textual structured-output instructions for providers without tool calling."""
from __future__ import annotations

import json
from typing import Any, Mapping


def get_json_safety_notice(schema: Mapping[str, Any]) -> str:
    """Return an instruction asking for a JSON answer conforming to ``schema``.

    The schema is serialized compactly and with stable key order so the same
    schema always produces the same prompt text.
    """
    serialized = json.dumps(schema, ensure_ascii=False, sort_keys=True)
    return (
        "The answer must be a JSON object using the following JSON Schema:\n"
        f"{serialized}\n"
        "Reply with the JSON object only, without any surrounding text or code fences."
    )


__all__ = ["get_json_safety_notice"]
