"""Driver factory utilities.

Purpose
-------
Create driver instances by canonical provider name. Driver modules are
imported lazily with ``importlib`` so that importing ``llm_drivers`` does
not pull in the OpenAI SDK unless an OpenAI driver is actually requested.

Timeout and fallback semantics
------------------------------
The factory performs no retries or fallbacks; it either returns an instance
or raises :class:`UnknownDriverError`.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from .dto.driver_params import DriverParams


class UnknownDriverError(Exception):
    """Raised when a driver cannot be resolved or initialized.

    Failure modes include an unregistered provider name, an import failure of
    the driver module, a missing driver class, and a constructor error.
    """


class DriverFactory:
    """Create drivers based on a canonical name (``"openai"``, ``"vertexai"``)."""

    _DRIVERS: Dict[str, Dict[str, str]] = {
        "openai": {"module": "llm_drivers.openai.client", "class": "OpenAIDriver"},
        "vertexai": {"module": "llm_drivers.vertexai.client", "class": "VertexAIDriver"},
    }

    @classmethod
    def create(
        cls,
        provider: str,
        *,
        params: Optional[DriverParams] = None,
        **kwargs: Any,
    ) -> Any:
        """Create a driver instance.

        Parameters
        ----------
        provider:
            Canonical provider name.
        params:
            Optional :class:`DriverParams`; explicit ``kwargs`` take precedence.
        **kwargs:
            Driver-specific constructor keyword arguments.

        Raises
        ------
        UnknownDriverError
            If the provider is unknown, its module fails to import, the class
            is missing, or the constructor raises.
        """
        merged_kwargs = cls._coerce_params(params, kwargs)

        name = (provider or "").lower().strip()
        entry = cls._DRIVERS.get(name)
        if not entry:
            raise UnknownDriverError(f"Unknown provider '{provider}'")

        module_path, class_name = entry["module"], entry["class"]
        try:
            mod = import_module(module_path)
        except ImportError as exc:  # pragma: no cover - import failure path
            raise UnknownDriverError(
                f"Failed to import module '{module_path}' for provider '{provider}': {exc}"
            ) from exc

        try:
            klass: Type = getattr(mod, class_name)
        except AttributeError as exc:
            raise UnknownDriverError(
                f"Driver class '{class_name}' not found in '{module_path}' for provider '{provider}'"
            ) from exc

        try:
            return klass(**merged_kwargs)
        except (TypeError, ValueError) as exc:
            raise UnknownDriverError(
                f"Invalid arguments for '{provider}' driver constructor: {exc}"
            ) from exc

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Return the supported canonical provider names in registration order."""
        return tuple(cls._DRIVERS.keys())

    @staticmethod
    def _coerce_params(params: Optional[DriverParams], kwargs: Mapping[str, Any]) -> Dict[str, Any]:
        """Merge ``DriverParams`` into ``kwargs``.

        ``None`` fields are skipped so driver defaults survive. ``headers``
        are shallow-merged, ``extra`` entries are spread into the keyword
        arguments, and explicit ``kwargs`` always win.
        """
        if params is None:
            return dict(kwargs)
        dumped: Dict[str, Any] = dict(params.model_dump(exclude_none=True))
        merged: Dict[str, Any] = dict(dumped.pop("extra", None) or {})
        headers = dict(dumped.pop("headers", None) or {})
        merged.update(dumped)
        if "headers" in kwargs:
            headers.update(kwargs["headers"])
        if headers:
            merged["headers"] = headers
        merged.update({k: v for k, v in kwargs.items() if k != "headers"})
        return merged


__all__ = ["DriverFactory", "UnknownDriverError"]
