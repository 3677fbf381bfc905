"""Tensor encoding for the Vertex AI ``serverStreamingPredict`` endpoint.

The streaming endpoint does not accept the plain JSON ``instances`` body of
``:predict``; every value must be wrapped in a typed tensor field:

=========  ==============
Python     Tensor field
=========  ==============
``str``    ``stringVal``
``bool``   ``boolVal``
``int``    ``intVal``
``float``  ``floatVal``
``list``   ``listVal``
``dict``   ``structVal``
=========  ==============

``None`` values are dropped. Lists of objects become ``listVal`` entries of
``structVal`` tensors, which is what the chat ``messages`` field requires.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional


def to_tensor(value: Any) -> Optional[Dict[str, Any]]:
    """Encode ``value`` as a tensor, or ``None`` when ``value`` is ``None``.

    Raises:
        TypeError: for values with no tensor representation.
    """
    if value is None:
        return None
    # bool first: it is a subclass of int
    if isinstance(value, bool):
        return {"boolVal": value}
    if isinstance(value, str):
        return {"stringVal": value}
    if isinstance(value, int):
        return {"intVal": value}
    if isinstance(value, float):
        return {"floatVal": value}
    if isinstance(value, (list, tuple)):
        items = (to_tensor(v) for v in value)
        return {"listVal": [item for item in items if item is not None]}
    if isinstance(value, Mapping):
        return {"structVal": struct_fields(value)}
    raise TypeError(f"Cannot encode {type(value).__name__} as a tensor")


def struct_fields(value: Mapping[str, Any]) -> Dict[str, Any]:
    """Encode each field of ``value``, dropping ``None`` fields."""
    out: Dict[str, Any] = {}
    for key, item in value.items():
        encoded = to_tensor(item)
        if encoded is not None:
            out[key] = encoded
    return out


def generate_streaming_prompt(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Convert a ``:predict`` body into a ``:serverStreamingPredict`` envelope.

    ``instances`` become ``inputs`` (one ``structVal`` each) and
    ``parameters`` becomes a single ``structVal``.
    """
    return {
        "inputs": [to_tensor(instance) for instance in payload.get("instances") or []],
        "parameters": to_tensor(dict(payload.get("parameters") or {})),
    }


__all__ = ["to_tensor", "struct_fields", "generate_streaming_prompt"]
