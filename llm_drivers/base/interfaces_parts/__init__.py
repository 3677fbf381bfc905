"""Interfaces parts package public surface."""

from .data_source import DataSource
from .driver import Driver
from .transport import Transport

__all__ = ["DataSource", "Driver", "Transport"]
