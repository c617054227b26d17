"""gridkit: a generic two-dimensional matrix container.

Cells live in a flat row-major numpy array.  The container supports indexed
access, row/column extraction, predicate queries over rows, columns and point
sets, and in-place geometric transforms (transpose, mirror, rotate, row
shift).
"""

from __future__ import annotations

from gridkit.errors import (
    CellTypeError,
    InvalidIndexError,
    InvalidMatrixSizeError,
    MatrixError,
    NilMatrixError,
)
from gridkit.log import configure_logging
from gridkit.matrix import Matrix, format_matrix, require_matrix
from gridkit.points import Point, PointsLike, as_points, iter_points

__version__ = "0.1.0"

__all__ = [
    "CellTypeError",
    "InvalidIndexError",
    "InvalidMatrixSizeError",
    "Matrix",
    "MatrixError",
    "NilMatrixError",
    "Point",
    "PointsLike",
    "__version__",
    "as_points",
    "configure_logging",
    "format_matrix",
    "iter_points",
    "require_matrix",
]
