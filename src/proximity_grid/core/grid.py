"""Cell and Grid: the immutable snapshot every other module derives from."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterator, Sequence

import numpy as np
import pandas as pd

from .validation import validate_amount, validate_rows


@dataclass(frozen=True)
class Cell:
    """A grid entry: a stable unique id and an integer amount."""

    id: int
    amount: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", validate_amount(self.amount))

    def incremented(self) -> Cell:
        """Return a copy with ``amount + 1`` and the same id."""
        return replace(self, amount=self.amount + 1)


class Grid:
    """Immutable rows x cols collection of cells.

    Rows are stored as tuples of :class:`Cell` in display order. Every
    edit produces a new Grid; nothing is patched in place.
    """

    __slots__ = ("_rows", "_n_cols")

    def __init__(self, rows: Sequence[Sequence[Cell]] = ()) -> None:
        self._rows: tuple[tuple[Cell, ...], ...] = validate_rows(rows)
        self._n_cols: int = len(self._rows[0]) if self._rows else 0

    @classmethod
    def empty(cls) -> Grid:
        """The safe empty state used for invalid configurations."""
        return cls(())

    @classmethod
    def from_amounts(
        cls,
        amounts: Sequence[Sequence[int]] | np.ndarray,
        first_id: int = 1,
    ) -> Grid:
        """Build a grid from a 2-D amount table, numbering cells row-major."""
        rows = []
        next_id = first_id
        for row_amounts in amounts:
            row = []
            for amount in row_amounts:
                row.append(Cell(id=next_id, amount=amount))
                next_id += 1
            rows.append(row)
        return cls(rows)

    @property
    def rows(self) -> tuple[tuple[Cell, ...], ...]:
        return self._rows

    @property
    def n_rows(self) -> int:
        return len(self._rows)

    @property
    def n_cols(self) -> int:
        return self._n_cols

    @property
    def shape(self) -> tuple[int, int]:
        return (self.n_rows, self._n_cols)

    @property
    def size(self) -> int:
        """Total number of cells."""
        return self.n_rows * self._n_cols

    @property
    def is_empty(self) -> bool:
        return self.size == 0

    @property
    def amounts(self) -> np.ndarray:
        """Int64 amounts (n_rows, n_cols), read-only."""
        values = np.array(
            [[cell.amount for cell in row] for row in self._rows],
            dtype=np.int64,
        ).reshape(self.shape)
        values.flags.writeable = False
        return values

    @property
    def ids(self) -> np.ndarray:
        """Int64 cell ids (n_rows, n_cols), read-only."""
        values = np.array(
            [[cell.id for cell in row] for row in self._rows],
            dtype=np.int64,
        ).reshape(self.shape)
        values.flags.writeable = False
        return values

    def cells(self) -> Iterator[Cell]:
        """Iterate over all cells in row-major order."""
        for row in self._rows:
            yield from row

    def find(self, cell_id: int) -> tuple[int, int] | None:
        """Return the (row, col) position of a cell id, or None if not found."""
        for r, row in enumerate(self._rows):
            for c, cell in enumerate(row):
                if cell.id == cell_id:
                    return (r, c)
        return None

    def max_id(self) -> int:
        """Largest cell id in the grid (0 for an empty grid)."""
        return max((cell.id for cell in self.cells()), default=0)

    def to_frame(self) -> pd.DataFrame:
        """Amounts as a DataFrame labelled ``M = i`` / ``N = j`` (1-based)."""
        return pd.DataFrame(
            self.amounts,
            index=[f"M = {i + 1}" for i in range(self.n_rows)],
            columns=[f"N = {j + 1}" for j in range(self._n_cols)],
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._rows == other._rows

    def __hash__(self) -> int:
        return hash(self._rows)

    def __repr__(self) -> str:
        return f"Grid(rows={self.n_rows}, cols={self._n_cols})"
