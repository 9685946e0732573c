"""Row sums, column percentiles and the display summary table."""

from __future__ import annotations

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence

import numpy as np
import pandas as pd

from ..core.grid import Cell, Grid
from ..core.validation import validate_rank

DEFAULT_RANK = 0.6


def row_sum(row: Sequence[Cell]) -> int:
    """Exact sum of amounts in a row (0 for an empty row)."""
    return sum(cell.amount for cell in row)


def column_values(grid: Grid, col_index: int) -> list[int]:
    """Amount at ``col_index`` for every row; 0 where a row has no such cell."""
    return [
        row[col_index].amount if 0 <= col_index < len(row) else 0
        for row in grid.rows
    ]


def percentile(values: Sequence[float], rank: float) -> float:
    """Linear-interpolation percentile between closest ranks.

    Empty input gives 0 and a single value gives itself. Otherwise the
    fractional index ``(n - 1) * rank`` into the sorted values is
    interpolated between its floor and ceiling neighbours.
    A rank outside [0, 1] raises ValueError once there is data to rank.
    """
    if len(values) == 0:
        return 0
    rank = validate_rank(rank)
    ordered = np.sort(np.asarray(values))
    if len(ordered) == 1:
        return ordered[0].item()

    idx = (len(ordered) - 1) * rank
    lo = math.floor(idx)
    hi = math.ceil(idx)
    if lo == hi:
        return ordered[lo].item()
    frac = idx - lo
    return ordered[lo].item() * (1 - frac) + ordered[hi].item() * frac


def round_display(value: float, digits: int = 1) -> float:
    """Round half away from zero on the exact binary value of ``value``."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def compute_sums(grid: Grid) -> list[int]:
    """Sum of every row, top to bottom."""
    return [row_sum(row) for row in grid.rows]


def compute_percentiles(
    grid: Grid,
    col_count: int,
    rank: float = DEFAULT_RANK,
) -> list[float]:
    """Per-column percentile for columns ``0..col_count-1``, rounded to 0.1.

    ``col_count`` comes from the caller's configuration and may exceed the
    grid's width (e.g. an empty grid); such columns read as all zeros.
    """
    return [
        round_display(percentile(column_values(grid, col), rank))
        for col in range(col_count)
    ]


def row_shares(row: Sequence[Cell]) -> list[int]:
    """Each cell's share of the row sum, as a rounded percentage."""
    total = row_sum(row)
    if total == 0:
        return [0 for _ in row]
    return [int(round_display(cell.amount / total * 100, 0)) for cell in row]


def row_heat(row: Sequence[Cell]) -> list[int]:
    """Each cell's amount relative to the row maximum, as a rounded percentage."""
    peak = max((cell.amount for cell in row), default=0)
    if peak == 0:
        return [0 for _ in row]
    return [int(round_display(cell.amount / peak * 100, 0)) for cell in row]


def summary_frame(grid: Grid, rank: float = DEFAULT_RANK) -> pd.DataFrame:
    """Amount table with a trailing sum column and a percentile row.

    The percentile row's sum cell is NaN (nothing to sum).
    """
    df = grid.to_frame().astype(np.float64)
    df["Sum"] = np.asarray(compute_sums(grid), dtype=np.float64)
    label = f"{round(rank * 100):d}th percentile"
    pct = compute_percentiles(grid, grid.n_cols, rank) + [np.nan]
    df.loc[label] = pct
    return df
