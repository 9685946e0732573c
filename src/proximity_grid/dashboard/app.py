"""GridDashboard: Panel layout over a GridState."""

from __future__ import annotations

import logging

import pandas as pd
import panel as pn

from .state import GridState
from ..transform.statistics import row_heat, row_shares, summary_frame

logger = logging.getLogger(__name__)

_HIGHLIGHT_CSS = "background-color: #fde68a; font-weight: 600"
_PERCENTILE_CSS = "background-color: #f4f5f8; font-style: italic"
SUM_COLUMN = "Sum"


class GridDashboard:
    """Controls + table for exploring a random amount grid.

    - M / N / X inputs drive regeneration.
    - Clicking an amount highlights the X nearest amounts (the hover query).
    - "Increment" adds one to the last clicked cell, "Clear" drops the
      highlight.
    - Clicking a row's sum shows each cell's share of that row.
    - "Remove Row" drops the row numbered in the M selector.
    """

    def __init__(self, state: GridState | None = None) -> None:
        self.state = state if state is not None else GridState()
        self._selected_id: int | None = None
        self._share_row: int | None = None

        self.rows_input = pn.widgets.IntInput(
            name="Rows (M)", value=self.state.rows, start=0, end=100,
        )
        self.cols_input = pn.widgets.IntInput(
            name="Columns (N)", value=self.state.cols, start=0, end=100,
        )
        self.x_input = pn.widgets.IntInput(
            name="X (closest cells to highlight)", value=self.state.x_count, start=0,
        )
        self.rows_input.link(self.state, value="rows", bidirectional=True)
        self.cols_input.link(self.state, value="cols", bidirectional=True)
        self.x_input.link(self.state, value="x_count", bidirectional=True)

        self.errors_pane = pn.pane.Markdown("", styles={"color": "#d93025"})
        self.shares_pane = pn.pane.Markdown("")

        self.add_button = pn.widgets.Button(name="Add Row", button_type="primary")
        self.remove_index = pn.widgets.IntInput(
            name="Row to remove (M)", value=1, start=1, end=100,
        )
        self.remove_button = pn.widgets.Button(name="Remove Row", button_type="danger")
        self.increment_button = pn.widgets.Button(name="Increment")
        self.clear_button = pn.widgets.Button(name="Clear")
        self.add_button.on_click(lambda event: self._add_row())
        self.remove_button.on_click(
            lambda event: self._remove_row(self.remove_index.value - 1)
        )
        self.increment_button.on_click(lambda event: self._increment_selected())
        self.clear_button.on_click(lambda event: self.state.handle_mouse_leave())

        self.table = pn.widgets.Tabulator(
            summary_frame(self.state.grid, self.state.rank),
            disabled=True,
            selectable=False,
            sizing_mode="stretch_width",
        )
        self.table.style.apply(self._cell_styles, axis=None)
        self.table.on_click(self._on_table_click)

        self.state.param.watch(self._refresh, ["grid", "highlighted_ids", "rank"])
        self.state.param.watch(self._check_inputs, ["rows", "cols", "x_count"])

    # --- Rendering ---

    def _cell_styles(self, df: pd.DataFrame) -> pd.DataFrame:
        styles = pd.DataFrame("", index=df.index, columns=df.columns)
        grid = self.state.grid
        highlighted = self.state.highlighted_ids
        for r, row in enumerate(grid.rows):
            heat = row_heat(row) if r == self._share_row else None
            for c, cell in enumerate(row):
                if cell.id in highlighted:
                    styles.iat[r, c] = _HIGHLIGHT_CSS
                elif heat is not None:
                    styles.iat[r, c] = f"background-color: rgba(26,115,232,{heat[c] / 100:.2f})"
        if len(df.index) > grid.n_rows:
            styles.iloc[grid.n_rows:, :] = _PERCENTILE_CSS
        return styles

    def _refresh(self, *events) -> None:
        self.table.value = summary_frame(self.state.grid, self.state.rank)

    def _check_inputs(self, *events) -> None:
        errors = self.state.input_errors(self.state.rows, self.state.cols, self.state.x_count)
        self.errors_pane.object = "\n\n".join(errors.values())

    # --- Events ---

    def _on_table_click(self, event) -> None:
        grid = self.state.grid
        row = event.row
        if row is None or not 0 <= row < grid.n_rows:
            return
        if event.column == SUM_COLUMN:
            self._show_shares(row)
            return
        try:
            col = list(grid.to_frame().columns).index(event.column)
        except ValueError:
            return
        cell = grid.rows[row][col]
        self._selected_id = cell.id
        self.state.handle_hover(cell.amount)

    def _show_shares(self, row_index: int) -> None:
        self._share_row = row_index
        shares = row_shares(self.state.grid.rows[row_index])
        self.shares_pane.object = (
            f"**M = {row_index + 1}** share of sum: "
            + ", ".join(f"{s}%" for s in shares)
        )
        self._refresh()

    def _add_row(self) -> None:
        self.state.add_row()
        self.rows_input.value = self.state.rows

    def _remove_row(self, row_index: int) -> None:
        before = self.state.grid
        self.state.remove_row(row_index)
        if self._share_row is not None and self.state.grid is not before:
            if self._share_row == row_index or self.state.grid.is_empty:
                self._share_row = None
                self.shares_pane.object = ""
            elif self._share_row > row_index:
                self._share_row -= 1
        self.rows_input.value = self.state.rows

    def _increment_selected(self) -> None:
        if self._selected_id is None:
            return
        self.state.handle_click(self._selected_id)

    # --- Layout ---

    def build_panel(self) -> pn.Column:
        controls = pn.Row(
            self.rows_input, self.cols_input, self.x_input,
            sizing_mode="stretch_width",
        )
        buttons = pn.Row(
            self.add_button, self.remove_index, self.remove_button,
            self.increment_button, self.clear_button,
        )
        return pn.Column(
            controls,
            self.errors_pane,
            buttons,
            self.table,
            self.shares_pane,
            sizing_mode="stretch_width",
        )

    def serve(self, port: int = 0, show: bool = True, **kwargs) -> None:
        """Start the Panel server and optionally open the browser.

        Parameters
        ----------
        port : int
            Port number. 0 = auto-assign.
        show : bool
            Whether to open the browser automatically.
        **kwargs
            Additional keyword arguments passed to pn.serve().
        """
        pn.extension("tabulator", sizing_mode="stretch_width")
        logger.info("Serving grid dashboard on port %s", port or "auto")
        pn.serve(
            self.build_panel(),
            port=port or 0,
            show=show,
            title="proximity-grid",
            **kwargs,
        )
