"""Shared test fixtures for proximity-grid."""

import pytest

from proximity_grid.core.grid import Grid


@pytest.fixture
def tie_grid():
    """2x2 grid, ids 1..4, with a tie at 500."""
    return Grid.from_amounts([[100, 500], [500, 900]])


@pytest.fixture
def square_grid():
    """2x2 grid used for the percentile scenario."""
    return Grid.from_amounts([[100, 200], [300, 400]])


@pytest.fixture
def small_grid():
    """3x4 grid with distinct amounts and one duplicate pair (ids 3 and 10)."""
    return Grid.from_amounts([
        [120, 450, 300, 999],
        [101, 640, 555, 512],
        [870, 300, 233, 777],
    ])


@pytest.fixture
def large_grid():
    """100x100 grid for bound tests."""
    from proximity_grid.core.grid_store import generate

    return generate(100, 100, rng=42)
