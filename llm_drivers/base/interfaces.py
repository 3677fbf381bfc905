"""Driver-facing Protocols (stable import path)."""

from .interfaces_parts import DataSource, Driver, Transport

__all__ = ["Driver", "DataSource", "Transport"]
