"""Shared test fixtures for gridkit.

Provides small pre-built matrices so individual test modules stay focused.
"""

from __future__ import annotations

import pytest

from gridkit.matrix import Matrix

# ---------------------------------------------------------------------------
# Matrix fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def square() -> Matrix:
    """3x3 matrix holding 1..9 in row-major order."""
    return Matrix([1, 2, 3, 4, 5, 6, 7, 8, 9], 3, 3)


@pytest.fixture()
def wide() -> Matrix:
    """2x5 matrix holding 1..10."""
    return Matrix([1, 2, 3, 4, 5, 6, 7, 8, 9, 10], 2, 5)


@pytest.fixture()
def tall() -> Matrix:
    """4x3 matrix holding 1..12."""
    return Matrix(list(range(1, 13)), 4, 3)


@pytest.fixture()
def text_matrix() -> Matrix:
    """3x3 matrix of strings of varying width."""
    return Matrix(["1", "2", "3", "4", "some 5", "or 6", "7", "8", "9"], 3, 3)


@pytest.fixture()
def mixed() -> Matrix:
    """3x3 matrix used by predicate queries."""
    return Matrix([1, 2, 3, 4, 8, 12, 7, 8, 9], 3, 3)
