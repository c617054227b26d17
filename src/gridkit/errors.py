"""Exception hierarchy for gridkit.

Every error raised by a matrix operation derives from ``MatrixError`` and
also from the closest built-in exception, so callers can catch either.
"""

from __future__ import annotations


class MatrixError(Exception):
    """Base class for all gridkit errors."""


class InvalidIndexError(MatrixError, IndexError):
    """A row, column or flat offset fell outside ``[0, bound)``."""


class InvalidMatrixSizeError(MatrixError, ValueError):
    """Data length does not match ``rows * columns``."""


class NilMatrixError(MatrixError, TypeError):
    """An optional matrix reference was ``None`` where a matrix is required."""


class CellTypeError(MatrixError, TypeError):
    """A value cannot be stored in the matrix's element type without loss."""
