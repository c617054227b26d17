"""Point sets consumed by batch and query operations.

A point set is any finite iterable of ``(row, column)`` pairs: a list, a
tuple, a generator or a sequence of :class:`Point`.  Single-pass iterables
are fine for every operation; consumers that need two passes call
:func:`as_points` first.
"""

from __future__ import annotations

import numbers
from typing import Iterable, Iterator, NamedTuple


class Point(NamedTuple):
    """A ``(row, column)`` coordinate pair."""

    row: int
    column: int


PointsLike = Iterable[tuple[int, int]]


def iter_points(points: PointsLike) -> Iterator[Point]:
    """Yield each pair in *points* as a :class:`Point`.

    Raises ``TypeError`` for items that are not pairs of integers.  Items are
    validated lazily, in traversal order.
    """
    for item in points:
        try:
            row, column = item
        except (TypeError, ValueError):
            raise TypeError(f"Expected a (row, column) pair, got {item!r}") from None
        if not isinstance(row, numbers.Integral) or not isinstance(column, numbers.Integral):
            raise TypeError(f"Point coordinates must be integers, got {item!r}")
        yield Point(int(row), int(column))


def as_points(points: PointsLike) -> list[Point]:
    """Materialise *points* into a list so it can be traversed repeatedly."""
    return list(iter_points(points))
