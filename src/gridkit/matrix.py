"""Two-dimensional matrix container over a flat row-major numpy array.

A :class:`Matrix` owns a one-dimensional ``numpy.ndarray`` of cells together
with its row and column counts.  Every row/column operation goes through the
two coordinate-mapping helpers ``_index`` and ``_pos``; geometric transforms
work on a 2-D view of the same storage so in-place mutations stay visible to
every holder of the backing array.

Cells can hold any element type.  Numeric and boolean data keep their numpy
dtype; text and arbitrary Python objects are stored with ``dtype=object``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Sequence

import numpy as np

from gridkit.config.settings import get_settings
from gridkit.errors import (
    CellTypeError,
    InvalidIndexError,
    InvalidMatrixSizeError,
    NilMatrixError,
)
from gridkit.points import Point, PointsLike, as_points, iter_points

logger = logging.getLogger(__name__)

Predicate = Callable[[Any], bool]

_TEXT_KINDS = "US"


# ---------------------------------------------------------------------------
# Storage helpers
# ---------------------------------------------------------------------------


def _to_python(value: Any) -> Any:
    """Unwrap numpy scalars into plain Python values."""
    return value.item() if isinstance(value, np.generic) else value


# Python types whose no-argument constructor gives their zero.
_SCALAR_TYPES = (bool, int, float, complex, str, bytes)


def _zero_value(dtype: np.dtype) -> Any:
    """Default value of an element type: 0, False, "" or None."""
    if dtype.kind in _TEXT_KINDS:
        return ""
    if dtype.kind == "O":
        return None
    return _to_python(np.zeros(1, dtype=dtype)[0])


def _object_zero(items: Sequence[Any]) -> Any:
    """Zero of the single scalar type shared by *items*, else None."""
    kinds = {type(item) for item in items}
    if len(kinds) == 1:
        (kind,) = kinds
        if kind in _SCALAR_TYPES:
            return kind()
    return None


def _dtype_of(value: Any) -> np.dtype:
    """dtype able to hold *value*; object for anything numpy would not treat as a scalar."""
    probe = np.asarray(value)
    return probe.dtype if probe.ndim == 0 else np.dtype(object)


def _fits(dtype: np.dtype, value: Any) -> bool:
    """True if *value* survives conversion to *dtype* unchanged."""
    if dtype.kind == "O":
        return True
    if np.ndim(value) != 0 or isinstance(value, (str, bytes)):
        return False
    try:
        converted = dtype.type(value)
    except (TypeError, ValueError, OverflowError):
        return False
    if converted == value:
        return True
    # NaN never compares equal to itself.
    return dtype.kind in "fc" and converted != converted and value != value


def _object_array(items: Sequence[Any]) -> np.ndarray:
    """Build a flat object array without numpy descending into nested items."""
    cells = np.empty(len(items), dtype=object)
    for offset, item in enumerate(items):
        cells[offset] = item
    return cells


def _coerce_cells(data: Any, dtype: Any) -> tuple[np.ndarray, Any]:
    """Return flat, contiguous cells for *data* plus their element zero value."""
    if dtype is not None and np.dtype(dtype).kind == "O" and not isinstance(data, np.ndarray):
        items = list(data)
        return _object_array(items), _object_zero(items)

    cells = np.asarray(data, dtype=dtype)
    if cells.ndim != 1:
        raise InvalidMatrixSizeError(
            f"Matrix data must be a flat sequence, got shape {cells.shape}"
        )
    if cells.dtype.kind in _TEXT_KINDS:
        # Fixed-width numpy strings truncate longer writes.
        items = data.tolist() if isinstance(data, np.ndarray) else list(data)
        return _object_array(items), ""
    if cells.dtype.kind == "O":
        return cells, _object_zero(cells.tolist())
    if not cells.flags.c_contiguous:
        cells = cells.copy()
    return cells, _zero_value(cells.dtype)


# ---------------------------------------------------------------------------
# Matrix
# ---------------------------------------------------------------------------


class Matrix:
    """A mutable ``rows x columns`` grid of cells stored in row-major order.

    ``Matrix(data, rows, columns)`` wraps a flat sequence whose length must
    equal ``rows * columns``; otherwise ``InvalidMatrixSizeError`` is raised.
    A one-dimensional ndarray that already has the target dtype is wrapped
    without copying.

    *default* is the value written by :meth:`zeros`, :meth:`shift_rows_down`
    and :meth:`remove_row`.  When omitted it is the zero of the element type.
    """

    def __init__(
        self,
        data: Any,
        rows: int,
        columns: int,
        dtype: Any = None,
        default: Any = None,
    ) -> None:
        cells, zero = _coerce_cells(data, dtype)
        if cells.size != rows * columns:
            raise InvalidMatrixSizeError(
                f"Expected {rows * columns} cells for a {rows}x{columns} matrix, "
                f"got {cells.size}"
            )
        if default is not None and not _fits(cells.dtype, default):
            raise CellTypeError(
                f"Default {default!r} cannot be stored in a {cells.dtype} matrix"
            )
        self._cells = cells
        self._rows = rows
        self._columns = columns
        self._default = zero if default is None else default

    # -- Construction -------------------------------------------------------

    @classmethod
    def zeros(
        cls,
        rows: int,
        columns: int,
        dtype: Any = None,
        default: Any = None,
    ) -> Matrix:
        """Return a ``rows x columns`` matrix with every cell set to the default.

        *dtype* is inferred from *default* when only that is given, and falls
        back to ``settings.default_dtype`` otherwise.  Shapes are not
        validated; numpy rejects negative sizes with ``ValueError``.
        """
        if dtype is None:
            dtype = get_settings().default_dtype if default is None else _dtype_of(default)
        dtype = np.dtype(dtype)
        fill = _zero_value(dtype) if default is None else default
        if dtype.kind in _TEXT_KINDS:
            dtype = np.dtype(object)
        if not _fits(dtype, fill):
            raise CellTypeError(f"Default {fill!r} cannot be stored in a {dtype} matrix")
        cells = np.full(rows * columns, fill, dtype=dtype)
        return cls(cells, rows, columns, default=fill)

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Sequence[Any]],
        dtype: Any = None,
        default: Any = None,
    ) -> Matrix:
        """Build a matrix from nested rows of equal length."""
        nested = [list(row) for row in rows]
        width = len(nested[0]) if nested else 0
        if any(len(row) != width for row in nested):
            raise InvalidMatrixSizeError("All rows must have the same length")
        flat = [cell for row in nested for cell in row]
        return cls(flat, len(nested), width, dtype=dtype, default=default)

    @classmethod
    def from_points(
        cls,
        points: PointsLike,
        value: Any,
        dtype: Any = None,
        default: Any = None,
    ) -> Matrix:
        """Build the smallest matrix containing *points* and mark them with *value*.

        The shape is ``(max_row + 1, max_column + 1)`` over all points; every
        other cell holds the default.  An empty point set gives a ``0 x 0``
        matrix.  *points* may be single-pass, it is materialised first.
        """
        visited = as_points(points)
        rows = max((point.row for point in visited), default=-1) + 1
        columns = max((point.column for point in visited), default=-1) + 1
        if dtype is None:
            dtype = _dtype_of(value)

        matrix = cls.zeros(rows, columns, dtype=dtype, default=default)
        matrix.set_batch(value, visited)
        logger.debug("Built %dx%d matrix from %d points", rows, columns, len(visited))
        return matrix

    # -- Introspection ------------------------------------------------------

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def shape(self) -> tuple[int, int]:
        """(rows, columns)"""
        return (self._rows, self._columns)

    @property
    def size(self) -> int:
        return self._cells.size

    @property
    def dtype(self) -> np.dtype:
        return self._cells.dtype

    @property
    def default(self) -> Any:
        return self._default

    @property
    def cells(self) -> list[Any]:
        """Copy of the flat row-major storage."""
        return self._cells.tolist()

    def to_rows(self) -> list[list[Any]]:
        return self._grid().tolist()

    def to_array(self) -> np.ndarray:
        """Return a 2-D copy of the cells."""
        return self._grid().copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and self.cells == other.cells

    def __repr__(self) -> str:
        return f"Matrix(rows={self._rows}, columns={self._columns}, dtype={self._cells.dtype})"

    def __str__(self) -> str:
        return format_matrix(self)

    # -- Coordinate mapping -------------------------------------------------

    def _index(self, row: int, column: int) -> int:
        """Map ``(row, column)`` to its offset in the flat storage."""
        if not (0 <= row < self._rows and 0 <= column < self._columns):
            raise InvalidIndexError(
                f"Cell ({row}, {column}) is outside a {self._rows}x{self._columns} matrix"
            )
        return self._columns * row + column

    def _pos(self, offset: int) -> Point:
        """Map a flat offset back to its ``(row, column)``."""
        if not 0 <= offset < self._cells.size:
            raise InvalidIndexError(
                f"Offset {offset} is outside a matrix of {self._cells.size} cells"
            )
        return Point(*divmod(offset, self._columns))

    def _check_row(self, row: int) -> None:
        if not 0 <= row < self._rows:
            raise InvalidIndexError(f"Row {row} is outside [0, {self._rows})")

    def _check_column(self, column: int) -> None:
        if not 0 <= column < self._columns:
            raise InvalidIndexError(f"Column {column} is outside [0, {self._columns})")

    def _grid(self) -> np.ndarray:
        """2-D view sharing memory with the flat storage."""
        return self._cells.reshape(self._rows, self._columns)

    # -- Element access -----------------------------------------------------

    def get(self, row: int, column: int) -> Any:
        return _to_python(self._cells[self._index(row, column)])

    def set(self, row: int, column: int, value: Any) -> None:
        """Write *value* at ``(row, column)``.

        Raises ``CellTypeError`` instead of converting when *value* would not
        read back unchanged from this matrix's element type.
        """
        offset = self._index(row, column)
        if not _fits(self._cells.dtype, value):
            raise CellTypeError(
                f"Cannot store {value!r} in a {self._cells.dtype} matrix without loss"
            )
        self._cells[offset] = value

    # -- Row / column views -------------------------------------------------

    def row_data(self, row: int) -> list[Any]:
        """Return a new list holding the cells of *row*."""
        self._check_row(row)
        if not self._columns:
            return []
        start = self._index(row, 0)
        stop = self._index(row, self._columns - 1) + 1
        return self._cells[start:stop].tolist()

    def column_data(self, column: int) -> list[Any]:
        """Return a new list holding the cells of *column*, top to bottom."""
        self._check_column(column)
        if not self._rows:
            return []
        return self._cells[self._index(0, column)::self._columns].tolist()

    # -- Predicate queries --------------------------------------------------

    def all_of_row(self, row: int, predicate: Predicate) -> bool:
        return all(predicate(cell) for cell in self.row_data(row))

    def all_of_column(self, column: int, predicate: Predicate) -> bool:
        return all(predicate(cell) for cell in self.column_data(column))

    def any_of_points(self, points: PointsLike, predicate: Predicate) -> bool:
        """Return True as soon as a visited cell satisfies *predicate*.

        Points are bounds-checked lazily in traversal order, so an invalid
        point after the first match is never looked at.
        """
        for row, column in iter_points(points):
            if predicate(self.get(row, column)):
                return True
        return False

    def filtered(self, predicate: Predicate) -> list[Point]:
        """Return the points whose cells satisfy *predicate*, in row-major order."""
        return [
            self._pos(offset)
            for offset, cell in enumerate(self._cells.tolist())
            if predicate(cell)
        ]

    # -- Batch mutation -----------------------------------------------------

    def set_batch(self, value: Any, points: PointsLike) -> None:
        """Write *value* at every point, in traversal order.

        Stops with ``InvalidIndexError`` at the first out-of-bounds point;
        cells written before it keep the new value.
        """
        written = 0
        for row, column in iter_points(points):
            self.set(row, column, value)
            written += 1
        logger.debug("set_batch wrote %d cells", written)

    def remove_row(self, row: int) -> None:
        """Delete *row*, moving every row above it down by one.

        The top row is refilled with the default value.  Rows below *row*
        and the shape are unchanged.
        """
        self._check_row(row)
        grid = self._grid()
        grid[1:row + 1] = grid[:row].copy()
        grid[0].fill(self._default)
        logger.debug("Removed row %d of %dx%d matrix", row, self._rows, self._columns)

    def shift_rows_down(self) -> None:
        """Move every row down by one; the last row is dropped."""
        if self._rows:
            self.remove_row(self._rows - 1)

    # -- Geometric transforms -----------------------------------------------

    def transpose(self) -> None:
        """Swap rows and columns; the storage is rebuilt in column-major scan order."""
        cells = self._grid().T.flatten()
        logger.debug("Transposing %dx%d matrix", self._rows, self._columns)
        self._cells, self._rows, self._columns = cells, self._columns, self._rows

    def mirror_rows(self) -> None:
        """Reverse the order of the rows in place."""
        grid = self._grid()
        grid[:] = grid[::-1].copy()

    def mirror_columns(self) -> None:
        """Reverse the order of the columns in place."""
        grid = self._grid()
        grid[:] = grid[:, ::-1].copy()

    def rotate(self) -> None:
        """Rotate 90° clockwise."""
        self.transpose()
        self.mirror_columns()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def require_matrix(matrix: Matrix | None) -> Matrix:
    """Return *matrix*, raising ``NilMatrixError`` if it is ``None``."""
    if matrix is None:
        raise NilMatrixError("Matrix object is None")
    return matrix


def format_matrix(matrix: Matrix, separator: str | None = None) -> str:
    """Render a matrix as text, one line per row."""
    sep = get_settings().cell_separator if separator is None else separator
    return "\n".join(
        sep.join(str(cell) for cell in row) for row in matrix.to_rows()
    )
