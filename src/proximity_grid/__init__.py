"""proximity-grid: random amount grids with row sums, column percentiles
and nearest-amount highlighting."""

from ._version import __version__
from .core.grid import Cell, Grid
from .core.grid_store import (
    add_row,
    generate,
    increment_amount,
    regenerate,
    remove_row,
)
from .core.proximity import closest_cells, closest_index
from .core.proximity_index import ProximityIndex
from .core.validation import ProximityIndexError, is_valid_config
from .transform.statistics import (
    compute_percentiles,
    compute_sums,
    percentile,
    row_sum,
    summary_frame,
)


def explore(rows=2, cols=2, x_count=1, seed=None, port=0, show=True):
    """Launch the interactive grid in a browser.

    Parameters
    ----------
    rows, cols : int
        Initial grid shape (0-100 each).
    x_count : int
        How many nearest cells a click highlights.
    seed : int, optional
        Seed for the random amounts.
    port : int
        Port number. 0 = auto-assign.
    show : bool
        Whether to open the browser automatically.
    """
    from .dashboard.app import GridDashboard
    from .dashboard.state import GridState

    state = GridState(rows=rows, cols=cols, x_count=x_count, seed=seed)
    GridDashboard(state).serve(port=port, show=show)


__all__ = [
    "__version__",
    "Cell",
    "Grid",
    "ProximityIndex",
    "ProximityIndexError",
    "add_row",
    "closest_cells",
    "closest_index",
    "compute_percentiles",
    "compute_sums",
    "explore",
    "generate",
    "increment_amount",
    "is_valid_config",
    "percentile",
    "regenerate",
    "remove_row",
    "row_sum",
    "summary_frame",
]
