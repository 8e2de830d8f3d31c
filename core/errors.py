"""
Simulation Error Types

The engine is pure arithmetic over validated inputs, so the error
taxonomy is small:

- InvalidConfigurationError: a configuration value is out of range or
  inconsistent. Raised at construction time, before any value is drawn.
- FatalConfigurationError: the random source is missing or broken. The
  engine never substitutes non-random values for a failed source.
- SeriesNotFoundError: a stored series id is unknown (live store only).
"""

from typing import Any, Optional


class SimulationError(Exception):
    """Base class for all simulation engine errors."""


class InvalidConfigurationError(SimulationError, ValueError):
    """
    A simulation configuration value is invalid.

    Attributes:
        field: Name of the offending configuration field (if known)
        value: The rejected value
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None
    ):
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value

    def to_dict(self) -> dict:
        """Convert to dictionary for API error responses."""
        return {
            "message": self.message,
            "field": self.field,
            "value": repr(self.value) if self.value is not None else None,
        }


class FatalConfigurationError(SimulationError):
    """The random source is unavailable or misbehaving."""


class SeriesNotFoundError(SimulationError, KeyError):
    """No series with the requested id exists in the store."""

    def __init__(self, series_id: str):
        super().__init__(series_id)
        self.series_id = series_id

    def __str__(self) -> str:
        return f"Series not found: {self.series_id}"
