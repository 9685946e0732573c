"""Tests for GridState, the reactive owner of grid and highlight."""

import numpy as np
import pytest

from proximity_grid.core.grid import Grid
from proximity_grid.dashboard.state import GridState


@pytest.fixture
def state():
    return GridState(rows=3, cols=4, x_count=2, seed=11)


@pytest.fixture
def tie_state(tie_grid):
    return GridState(rows=2, cols=2, x_count=1, grid=tie_grid)


class TestInit:
    def test_default_grid(self):
        s = GridState()
        assert s.grid.shape == (2, 2)
        assert s.index.size == 4

    def test_seeded(self):
        a = GridState(rows=3, cols=3, x_count=1, seed=5)
        b = GridState(rows=3, cols=3, x_count=1, seed=5)
        assert a.grid == b.grid

    def test_supplied_grid_derives(self, tie_state):
        assert tie_state.sums == [600, 1400]
        assert tie_state.percentile_row == [340.0, 740.0]

    def test_invalid_initial_config_empty(self):
        s = GridState(rows=2, cols=2, x_count=4)
        assert s.grid.is_empty
        assert s.sums == []
        assert s.percentile_row == [0.0, 0.0]


class TestRegeneration:
    def test_rows_change_regenerates(self, state):
        state.rows = 5
        assert state.grid.shape == (5, 4)
        assert state.index.size == 20
        assert len(state.sums) == 5

    def test_cols_change_regenerates(self, state):
        state.cols = 2
        assert state.grid.shape == (3, 2)
        assert len(state.percentile_row) == 2

    def test_x_change_regenerates(self, state):
        before = state.grid
        state.x_count = 3
        assert state.grid is not before

    def test_invalid_triple_empties(self, state):
        state.x_count = 12
        assert state.grid.is_empty
        assert state.index.size == 0
        assert state.handle_hover(500) == frozenset()

    def test_zero_rows_empties(self, state):
        state.rows = 0
        assert state.grid.is_empty

    def test_bounds_enforced(self, state):
        with pytest.raises(ValueError):
            state.rows = 101

    def test_sums_follow_grid(self, state):
        np.testing.assert_array_equal(state.sums, state.grid.amounts.sum(axis=1))


class TestHover:
    def test_hover_highlights(self, tie_state):
        assert tie_state.handle_hover(100) == {1}
        assert tie_state.highlighted_ids == {1}

    def test_hover_tie(self, tie_state):
        tie_state.handle_hover(500)
        assert tie_state.highlighted_ids == {2, 3}

    def test_leave_clears(self, tie_state):
        tie_state.handle_hover(500)
        tie_state.handle_mouse_leave()
        assert tie_state.highlighted_ids == frozenset()

    def test_next_hover_replaces(self, tie_state):
        tie_state.handle_hover(500)
        tie_state.handle_hover(900)
        assert tie_state.highlighted_ids == {4}

    def test_hover_uses_x_count(self, state):
        result = state.handle_hover(500)
        assert len(result) >= 2


class TestClick:
    def test_click_increments(self, tie_state):
        tie_state.handle_click(1)
        assert tie_state.grid.rows[0][0].amount == 101
        assert tie_state.sums == [601, 1400]
        assert tie_state.index.ids_for(101) == (1,)

    def test_click_breaks_tie(self, tie_state):
        tie_state.handle_click(2)
        assert tie_state.handle_hover(500) == {3}

    def test_click_missing_id_keeps_grid(self, tie_state):
        before = tie_state.grid
        tie_state.handle_click(99)
        assert tie_state.grid is before


class TestRows:
    def test_add_row_keeps_cells(self, state):
        before = state.grid
        state.add_row()
        assert state.rows == 4
        assert state.grid.n_rows == 4
        assert state.grid.rows[:3] == before.rows
        assert len(state.sums) == 4

    def test_remove_row_keeps_cells(self, state):
        before = state.grid
        state.remove_row(0)
        assert state.rows == 2
        assert state.grid.rows == before.rows[1:]

    def test_remove_out_of_range(self, state):
        before = state.grid
        state.remove_row(10)
        assert state.grid is before
        assert state.rows == 3

    def test_add_row_stops_at_limit(self):
        s = GridState(rows=100, cols=1, x_count=1, seed=0)
        s.add_row()
        assert s.grid.n_rows == 100

    def test_remove_row_below_x_count_empties(self):
        s = GridState(rows=2, cols=2, x_count=3, seed=1)
        s.remove_row(0)
        assert s.rows == 1
        assert s.grid.is_empty
        assert s.handle_hover(500) == frozenset()

    def test_remove_row_still_valid_keeps_cells(self):
        s = GridState(rows=3, cols=2, x_count=3, seed=1)
        before = s.grid
        s.remove_row(2)
        assert s.grid.rows == before.rows[:2]

    def test_remove_last_row_empties(self, tie_state):
        tie_state.remove_row(1)
        tie_state.remove_row(0)
        assert tie_state.rows == 0
        assert tie_state.grid.is_empty

    def test_add_to_empty_noop(self):
        s = GridState(rows=0, cols=3, x_count=1)
        s.add_row()
        assert s.grid == Grid.empty()


class TestInputErrors:
    def test_messages(self, state):
        errors = state.input_errors(2, 2, 5)
        assert errors == {"x_count": "X must be between 1 and 3"}
