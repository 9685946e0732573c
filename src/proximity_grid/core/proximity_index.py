"""ProximityIndex: sorted amounts plus an amount -> cell ids reverse map.

Derived from a Grid and rebuilt wholesale whenever the grid changes.
Immutable; never patched incrementally.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from .grid import Grid
from .proximity import closest_cells
from .validation import ProximityIndexError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ProximityIndex:
    """Read-only view of all amounts in a grid.

    ``sorted_amounts`` holds one entry per cell, ascending. ``ids_by_amount``
    maps each distinct amount to the ids holding it, in row-major order.
    """

    sorted_amounts: np.ndarray = field(
        default_factory=lambda: np.empty(0, dtype=np.int64)
    )
    ids_by_amount: dict[int, tuple[int, ...]] = field(default_factory=dict)

    @classmethod
    def build(cls, grid: Grid) -> ProximityIndex:
        """Build the index from every cell of ``grid``."""
        groups: dict[int, list[int]] = {}
        for cell in grid.cells():
            groups.setdefault(cell.amount, []).append(cell.id)
        amounts = np.sort(grid.amounts.ravel(), kind="stable")
        amounts.flags.writeable = False
        index = cls(
            sorted_amounts=amounts,
            ids_by_amount={k: tuple(v) for k, v in groups.items()},
        )
        logger.debug(
            "Built proximity index: %d cells in %d groups",
            index.size, index.n_groups,
        )
        return index

    @classmethod
    def empty(cls) -> ProximityIndex:
        return cls()

    @property
    def size(self) -> int:
        """Number of cells indexed."""
        return len(self.sorted_amounts)

    @property
    def n_groups(self) -> int:
        """Number of distinct amounts."""
        return len(self.ids_by_amount)

    def ids_for(self, amount: int) -> tuple[int, ...]:
        """Return the ids of all cells holding ``amount``."""
        try:
            return self.ids_by_amount[amount]
        except KeyError:
            raise ProximityIndexError(
                f"No cells hold amount {amount}."
            ) from None

    def check_invariants(self) -> None:
        """Raise ProximityIndexError if the two structures disagree."""
        total = sum(len(ids) for ids in self.ids_by_amount.values())
        if total != self.size:
            raise ProximityIndexError(
                f"Index holds {total} ids but {self.size} sorted amounts."
            )
        missing = set(np.unique(self.sorted_amounts).tolist()) - set(self.ids_by_amount)
        if missing:
            raise ProximityIndexError(
                f"Sorted amounts without ids: {sorted(missing)[:5]}"
            )

    def closest_cells(self, amount: float, count: int) -> frozenset[int]:
        """Ids of at least ``count`` cells nearest ``amount``.

        See :func:`proximity_grid.core.proximity.closest_cells`.
        """
        return closest_cells(self.sorted_amounts, self.ids_by_amount, amount, count)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProximityIndex):
            return NotImplemented
        return (
            np.array_equal(self.sorted_amounts, other.sorted_amounts)
            and self.ids_by_amount == other.ids_by_amount
        )
