"""Grid generation and whole-grid edits.

All functions are pure: they take a Grid and return a new one (or the
same object when the edit does not apply).
"""

from __future__ import annotations

import logging

import numpy as np

from .grid import Cell, Grid
from .validation import is_valid_config

logger = logging.getLogger(__name__)

MIN_AMOUNT = 100
MAX_AMOUNT = 999


def _rng(rng: np.random.Generator | int | None) -> np.random.Generator:
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def random_amount(rng: np.random.Generator | int | None = None) -> int:
    """Uniform random three-digit amount in [100, 999]."""
    return int(_rng(rng).integers(MIN_AMOUNT, MAX_AMOUNT + 1))


def generate(
    row_count: int,
    col_count: int,
    rng: np.random.Generator | int | None = None,
    first_id: int = 1,
) -> Grid:
    """Generate a row_count x col_count grid of random amounts.

    Ids are assigned row-major starting at ``first_id``.
    """
    row_count = max(0, row_count)
    col_count = max(0, col_count)
    amounts = _rng(rng).integers(
        MIN_AMOUNT, MAX_AMOUNT + 1, size=(row_count, col_count),
    )
    return Grid.from_amounts(amounts, first_id=first_id)


def regenerate(
    rows: int,
    cols: int,
    x_count: int,
    rng: np.random.Generator | int | None = None,
) -> Grid:
    """Fresh grid for a valid (rows, cols, x_count), else the empty grid."""
    if not is_valid_config(rows, cols, x_count):
        logger.warning(
            "Configuration rows=%d cols=%d x=%d is out of range; using empty grid",
            rows, cols, x_count,
        )
        return Grid.empty()
    grid = generate(rows, cols, rng=rng)
    logger.debug("Generated %r", grid)
    return grid


def increment_amount(grid: Grid, cell_id: int) -> Grid:
    """Return a grid where ``cell_id`` has ``amount + 1``.

    The same grid object comes back when no cell has that id.
    """
    pos = grid.find(cell_id)
    if pos is None:
        return grid
    r, c = pos
    rows = [list(row) for row in grid.rows]
    rows[r][c] = rows[r][c].incremented()
    return Grid(rows)


def add_row(
    grid: Grid,
    rng: np.random.Generator | int | None = None,
) -> Grid:
    """Append a row of random amounts with fresh ids.

    An empty grid has no column count to copy, so it is returned as is.
    """
    if grid.n_cols == 0:
        return grid
    gen = _rng(rng)
    next_id = grid.max_id() + 1
    new_row = [
        Cell(id=next_id + j, amount=random_amount(gen))
        for j in range(grid.n_cols)
    ]
    return Grid(list(grid.rows) + [new_row])


def remove_row(grid: Grid, row_index: int) -> Grid:
    """Drop the row at ``row_index``; out-of-range indices are a no-op."""
    if not 0 <= row_index < grid.n_rows:
        return grid
    return Grid([row for i, row in enumerate(grid.rows) if i != row_index])
