"""Driver DTOs package."""

from .driver_params import DriverParams

__all__ = ["DriverParams"]
