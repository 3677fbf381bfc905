"""Request variants produced by prompt builders.

A builder returns a :class:`BuiltRequest`: the provider-native body, owned by
the call that built it and never mutated afterwards. Runtime parameters
(temperature, output caps) are attached at call time on a copy, so the same
built request can be sent again with different parameters.

A provider whose streaming endpoint needs a different envelope derives a
:class:`ReshapedRequest` from the built one right before the streaming call.
The reshaping is explicit and the original body is kept untouched beside
the envelope. Providers that do not need a streaming envelope never
construct one.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Union


@dataclass(frozen=True)
class BuiltRequest:
    """Ready-to-send provider request body."""

    payload: Dict[str, Any]

    def reshape(self, build_envelope: Callable[[Dict[str, Any]], Dict[str, Any]]) -> "ReshapedRequest":
        """Return a :class:`ReshapedRequest` whose envelope is built from a copy of the payload."""
        return ReshapedRequest(original=self, envelope=build_envelope(copy.deepcopy(self.payload)))


@dataclass(frozen=True)
class ReshapedRequest:
    """Streaming envelope derived from a built request."""

    original: BuiltRequest
    envelope: Dict[str, Any]


ProviderRequest = Union[BuiltRequest, ReshapedRequest]


def with_runtime_parameters(
    payload: Mapping[str, Any],
    parameters: Mapping[str, Optional[Any]],
    *,
    slot: str = "parameters",
) -> Dict[str, Any]:
    """Return a copy of ``payload`` with ``parameters`` merged into ``slot``.

    ``None`` values are dropped so unset options never reach the provider.
    ``payload`` itself is left unchanged.
    """
    out = copy.deepcopy(dict(payload))
    merged = dict(out.get(slot) or {})
    merged.update({k: v for k, v in parameters.items() if v is not None})
    out[slot] = merged
    return out


__all__ = ["BuiltRequest", "ReshapedRequest", "ProviderRequest", "with_runtime_parameters"]
