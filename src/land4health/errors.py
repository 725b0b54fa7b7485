# src/land4health/errors.py

"""
This module defines the exception and warning types raised by land4health.

Validation errors are raised before any call to the reduction backend.
Backend failures abort the per-feature loop and carry the position of the
feature that failed.
"""

from typing import Optional

__all__ = [
    "Land4HealthError",
    "InvalidInputKind",
    "InvalidReducerName",
    "BackendCallFailure",
    "RepresentativityWarning"
]

class Land4HealthError(Exception):
    """Base class for all land4health errors."""

class InvalidInputKind(Land4HealthError, TypeError):
    """Raised when a region or raster expression is of an unsupported kind."""

class InvalidReducerName(Land4HealthError, ValueError):
    """Raised when a reducer name is outside the supported set."""

class BackendCallFailure(Land4HealthError, RuntimeError):
    """
    Raised when the remote reduction fails for one feature.

    Args:
        message: Human readable description of the failure.
        index: 0-based position of the failing feature in the region.
        total: Number of features in the region.
    """
    def __init__(self, message: str, index: Optional[int] = None, total: Optional[int] = None):
        super().__init__(message)
        self.index = index
        self.total = total

class RepresentativityWarning(UserWarning):
    """Emitted when a region is too small for the requested pixel resolution."""
