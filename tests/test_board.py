"""Unit tests for the Tenner Grid board model."""

import pytest
import numpy as np
from tenner.core.board import CellPosition, TennerBoard, copy_grid, grid_shape


class TestCellPosition:
    """Tests for CellPosition neighbourhood helpers."""

    def test_corner_has_three_neighbours(self):
        """Test that neighbours are clipped at the grid edges."""
        adjacent = CellPosition(0, 0).adjacent_positions(3, 10)
        assert set(adjacent) == {(0, 1), (1, 0), (1, 1)}

    def test_interior_has_eight_neighbours(self):
        adjacent = CellPosition(1, 5).adjacent_positions(3, 10)
        assert len(adjacent) == 8
        assert (1, 5) not in adjacent

    def test_row_and_column_positions_exclude_self(self):
        pos = CellPosition(1, 2)
        assert len(pos.row_positions(10)) == 9
        assert pos not in pos.row_positions(10)
        assert pos.column_positions(4) == [(0, 2), (2, 2), (3, 2)]

    def test_is_adjacent(self):
        pos = CellPosition(2, 2)
        assert pos.is_adjacent((1, 1))
        assert pos.is_adjacent((3, 2))
        assert not pos.is_adjacent((2, 2))
        assert not pos.is_adjacent((2, 4))

    def test_plain_tuples_compare_equal(self):
        assert CellPosition(1, 3) == (1, 3)
        assert str(CellPosition(1, 3)) == "(1, 3)"


class TestGridHelpers:
    """Tests for grid shape and copy helpers."""

    def test_grid_shape(self):
        assert grid_shape([[1, 2, None], [4, 5, 6]]) == (2, 3)

    @pytest.mark.parametrize("grid", [[], [[]], [[1, 2], [3]]])
    def test_grid_shape_rejects_malformed(self, grid):
        assert grid_shape(grid) is None

    def test_copy_grid_is_deep(self):
        grid = [[1, None], [3, 4]]
        copied = copy_grid(grid)
        copied[0][1] = 2
        assert grid[0][1] is None


class TestTennerBoard:
    """Tests for TennerBoard class."""

    def test_create_empty_board(self):
        """Test creating an empty 5x10 board."""
        board = TennerBoard(rows=5)
        assert board.rows == 5
        assert board.columns == 10
        assert board.count_empty() == 50
        assert board.count_filled() == 0
        assert not board.is_complete()

    def test_invalid_dimensions(self):
        with pytest.raises(ValueError):
            TennerBoard(rows=0)

    def test_set_and_get(self):
        """Test setting and getting values."""
        board = TennerBoard(rows=3)
        board.set(0, 0, 0)
        assert board.get(0, 0) == 0
        assert not board.is_empty(0, 0)

        board.clear(0, 0)
        assert board.is_empty(0, 0)
        assert board.get(0, 0) is None

    def test_set_rejects_out_of_range(self):
        board = TennerBoard(rows=3)
        with pytest.raises(ValueError):
            board.set(0, 0, 10)
        with pytest.raises(ValueError):
            board.set(0, 0, -1)

    def test_row_col_and_neighbors(self):
        board = TennerBoard.from_grid([[1, 2, None], [4, None, 6], [None, 8, 9]])
        assert list(board.get_row(0)) == [1, 2]
        assert list(board.get_col(2)) == [6, 9]
        assert sorted(board.get_neighbors(1, 1)) == [1, 2, 4, 6, 8, 9]

    def test_empty_cells_row_major(self):
        board = TennerBoard.from_grid([[1, 2, None], [4, None, 6], [None, 8, 9]])
        assert board.get_empty_cells() == [(0, 2), (1, 1), (2, 0)]

    def test_column_sums(self):
        board = TennerBoard.from_grid([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
        assert board.column_sums() == [12, 15, 18]

        board.clear(0, 0)
        assert board.column_sums() is None

    def test_grid_round_trip(self):
        grid = [[1, 2, None], [4, None, 6], [None, 8, 9]]
        assert TennerBoard.from_grid(grid).to_grid() == grid

    def test_from_grid_rejects_bad_input(self):
        with pytest.raises(ValueError):
            TennerBoard.from_grid([[1, 2], [3]])
        with pytest.raises(ValueError):
            TennerBoard.from_grid([[1, 12]])

    def test_from_string(self):
        """Test creating board from string."""
        board = TennerBoard.from_string("12./4_6/.89")
        assert board.rows == 3
        assert board.columns == 3
        assert board.get(0, 0) == 1
        assert board.is_empty(1, 1)
        assert board.to_string() == "12./4.6/.89"

    @pytest.mark.parametrize("text", ["", "12/345", "1x3/456"])
    def test_from_string_rejects_malformed(self, text):
        with pytest.raises(ValueError):
            TennerBoard.from_string(text)

    def test_copy_is_independent(self):
        board = TennerBoard(rows=3)
        copied = board.copy()
        copied.set(0, 0, 5)
        assert board.is_empty(0, 0)
        assert board != copied

    def test_equality_and_hash(self):
        a = TennerBoard.from_string("12./4.6/.89")
        b = TennerBoard.from_grid(a.to_grid())
        assert a == b
        assert hash(a) == hash(b)

    def test_render_includes_sums(self):
        board = TennerBoard.from_string("12./4.6/.89")
        rendered = board.render([12, 15, 18])
        lines = rendered.splitlines()
        assert lines[0] == "+---+---+---+"
        assert "| 1 | 2 | . |" in lines
        assert lines[-1].split() == ["12", "15", "18"]

    def test_underlying_array(self):
        board = TennerBoard.from_string("12./4.6/.89")
        assert board.grid.dtype == np.int32
        assert board.grid[0, 2] == TennerBoard.EMPTY


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
