"""Exceptions raised by the ratgeom kernel.

Empty intersections are never errors; they are reported by returning
``None``.  The exceptions below cover the two fatal categories:
geometry that cannot be constructed, and precision requests the
rational backend cannot honour.
"""

from __future__ import annotations


class GeometryError(ValueError):
    """Base class for ratgeom failures."""

    def __init__(self, message, details=None):
        super().__init__(message)
        self.details = details or {}


class InvalidGeometryError(GeometryError):
    """Exception raised when a primitive is built from degenerate input."""


class PrecisionError(GeometryError, ArithmeticError):
    """Exception raised when a requested precision cannot be honoured."""


__all__ = ["GeometryError", "InvalidGeometryError", "PrecisionError"]
