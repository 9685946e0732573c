"""Input validation and the configuration validity rule."""

from __future__ import annotations

from collections import Counter
from typing import Any

import numpy as np

MAX_DIMENSION = 100


class ProximityIndexError(LookupError):
    """The proximity index disagrees with itself.

    Raised when ``sorted_amounts`` names an amount that ``ids_by_amount``
    does not hold, or the two structures count a different number of cells.
    This is a defect in index construction, never a user input problem.
    """


def is_valid_config(rows: int, cols: int, x_count: int) -> bool:
    """Return True if (rows, cols, x_count) describes a grid worth generating.

    ``1 <= rows <= 100``, ``1 <= cols <= 100`` and
    ``1 <= x_count <= rows * cols - 1``. Anything else maps to the empty grid.
    """
    if not 1 <= rows <= MAX_DIMENSION:
        return False
    if not 1 <= cols <= MAX_DIMENSION:
        return False
    return 1 <= x_count <= rows * cols - 1


def config_errors(rows: int, cols: int, x_count: int) -> dict[str, str]:
    """Return {field: message} for every out-of-range input.

    Messages are meant to be shown next to the inputs; an empty dict
    means the values are acceptable to the input layer. Zero rows or
    columns are accepted here (they clear the grid).
    """
    errors: dict[str, str] = {}
    if rows < 0 or rows > MAX_DIMENSION:
        errors["rows"] = f"M must be between 1 and {MAX_DIMENSION}"
    if cols < 0 or cols > MAX_DIMENSION:
        errors["cols"] = f"N must be between 1 and {MAX_DIMENSION}"
    max_x = rows * cols - 1
    if x_count < 0 or x_count > max_x:
        errors["x_count"] = f"X must be between 1 and {max_x}"
    return errors


def validate_rows(rows: Any) -> tuple[tuple, ...]:
    """Validate a nested sequence of cells for grid construction.

    Returns the rows as a tuple of tuples (unchanged cells).
    """
    if isinstance(rows, (str, bytes)) or not hasattr(rows, "__iter__"):
        raise TypeError(
            f"Expected a sequence of rows, got {type(rows).__name__}."
        )
    frozen = tuple(tuple(row) for row in rows)
    if frozen:
        widths = {len(row) for row in frozen}
        if len(widths) != 1:
            raise ValueError(
                f"All rows must have the same number of cells. "
                f"Found row lengths: {sorted(widths)[:5]}"
            )
    ids = [cell.id for row in frozen for cell in row]
    if len(set(ids)) != len(ids):
        dupes = sorted(i for i, n in Counter(ids).items() if n > 1)
        raise ValueError(
            f"Cell IDs must be unique. Found duplicates: {dupes[:5]}"
            + (f" (and {len(dupes) - 5} more)" if len(dupes) > 5 else "")
        )
    return frozen


def validate_amount(amount: Any) -> int:
    """Validate a cell amount: any integer (numpy integers included)."""
    if isinstance(amount, bool) or not isinstance(amount, (int, np.integer)):
        raise TypeError(
            f"Cell amounts must be integers, got {type(amount).__name__}."
        )
    return int(amount)


def validate_rank(rank: float) -> float:
    """Validate that a percentile rank lies in [0, 1]."""
    rank = float(rank)
    if not 0.0 <= rank <= 1.0:
        raise ValueError(
            f"Percentile rank must be between 0 and 1, got {rank}."
        )
    return rank
