"""GridState: the single owner of the current grid and highlight set."""

from __future__ import annotations

import logging

import numpy as np
import param

from ..core.grid import Grid
from ..core.grid_store import add_row, increment_amount, regenerate, remove_row
from ..core.proximity_index import ProximityIndex
from ..core.validation import MAX_DIMENSION, config_errors, is_valid_config
from ..transform.statistics import DEFAULT_RANK, compute_percentiles, compute_sums

logger = logging.getLogger(__name__)


class GridState(param.Parameterized):
    """Reactive state behind the grid view.

    Changing ``rows``, ``cols`` or ``x_count`` replaces the grid with a
    freshly generated one (or the empty grid when the triple is out of
    range). Every grid replacement rebuilds the proximity index, the row
    sums and the percentile row. The view layer only calls the
    ``handle_*`` methods and reads params; it never edits the grid itself.
    """

    # --- Configuration ---
    rows = param.Integer(default=2, bounds=(0, MAX_DIMENSION))
    cols = param.Integer(default=2, bounds=(0, MAX_DIMENSION))
    x_count = param.Integer(default=1, bounds=(0, None))
    rank = param.Number(default=DEFAULT_RANK, bounds=(0.0, 1.0))
    seed = param.Integer(default=None, allow_None=True, doc="RNG seed for amounts")

    # --- Current snapshot (replaced, never mutated) ---
    grid = param.ClassSelector(class_=Grid, default=None, allow_None=True)

    # --- Derived from grid ---
    index = param.ClassSelector(class_=ProximityIndex, default=None, allow_None=True)
    sums = param.List(default=[])
    percentile_row = param.List(default=[])

    # --- Hover highlight ---
    highlighted_ids = param.Parameter(default=frozenset())

    def __init__(self, **params):
        super().__init__(**params)
        self._rng = np.random.default_rng(self.seed)
        if self.grid is None:
            self._regenerate()
        else:
            self._rebuild_derived()

    @param.depends("rows", "cols", "x_count", watch=True)
    def _regenerate(self):
        self.grid = regenerate(self.rows, self.cols, self.x_count, rng=self._rng)

    @param.depends("grid", "rank", watch=True)
    def _rebuild_derived(self):
        grid = self.grid if self.grid is not None else Grid.empty()
        self.index = ProximityIndex.build(grid)
        self.sums = compute_sums(grid)
        self.percentile_row = compute_percentiles(grid, self.cols, self.rank)

    # --- Events from the view ---

    def handle_hover(self, amount: float) -> frozenset[int]:
        """Highlight the ``x_count`` cells nearest ``amount``."""
        self.highlighted_ids = self.index.closest_cells(amount, self.x_count)
        return self.highlighted_ids

    def handle_mouse_leave(self) -> None:
        self.highlighted_ids = frozenset()

    def handle_click(self, cell_id: int) -> None:
        """Increment the clicked cell's amount."""
        new_grid = increment_amount(self.grid, cell_id)
        if new_grid is not self.grid:
            self.grid = new_grid

    def add_row(self) -> None:
        """Append a random row; ``rows`` follows without regenerating."""
        self._replace_keeping_cells(add_row(self.grid, rng=self._rng))

    def remove_row(self, row_index: int) -> None:
        """Remove a row; ``rows`` follows without regenerating.

        The grid empties when the shorter grid no longer fits ``x_count``.
        """
        self._replace_keeping_cells(remove_row(self.grid, row_index))

    def _replace_keeping_cells(self, new_grid: Grid) -> None:
        if new_grid is self.grid:
            return
        if new_grid.n_rows > MAX_DIMENSION:
            logger.warning("Grid already has %d rows; not adding more", MAX_DIMENSION)
            return
        n_rows = new_grid.n_rows
        if not is_valid_config(n_rows, self.cols, self.x_count):
            logger.warning(
                "Row edit leaves rows=%d cols=%d x=%d out of range; using empty grid",
                n_rows, self.cols, self.x_count,
            )
            new_grid = Grid.empty()
        with param.parameterized.discard_events(self):
            self.rows = n_rows
        self.grid = new_grid

    def input_errors(self, rows: int, cols: int, x_count: int) -> dict[str, str]:
        """Messages for inputs the view should flag, keyed by param name."""
        return config_errors(rows, cols, x_count)

    def __repr__(self) -> str:
        return (
            f"GridState(rows={self.rows}, cols={self.cols}, "
            f"x_count={self.x_count}, highlighted={len(self.highlighted_ids)})"
        )
