"""Tenner Grid board representation: positions, grid types and a numpy board."""

from __future__ import annotations
import numpy as np
from typing import List, Tuple, Optional, NamedTuple, Sequence

MIN_VALUE = 0
MAX_VALUE = 9
MIN_ROWS = 3
MAX_ROWS = 10
COLUMNS = 10
MIN_COLUMNS = 5
MAX_COLUMNS = 10

# None marks an unset cell
Grid = List[List[Optional[int]]]
SolvedGrid = List[List[int]]

_NEIGHBOR_OFFSETS = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1), (0, 1),
    (1, -1), (1, 0), (1, 1),
)


class CellPosition(NamedTuple):
    """A (row, column) cell address, 0-indexed."""
    row: int
    column: int

    def adjacent_positions(self, rows: int, columns: int) -> List[CellPosition]:
        """All 8-neighbours (including diagonals) clipped to the grid."""
        adjacent = []
        for row_offset, col_offset in _NEIGHBOR_OFFSETS:
            r = self.row + row_offset
            c = self.column + col_offset
            if 0 <= r < rows and 0 <= c < columns:
                adjacent.append(CellPosition(r, c))
        return adjacent

    def row_positions(self, columns: int) -> List[CellPosition]:
        """Positions in the same row, excluding self."""
        return [CellPosition(self.row, c) for c in range(columns) if c != self.column]

    def column_positions(self, rows: int) -> List[CellPosition]:
        """Positions in the same column, excluding self."""
        return [CellPosition(r, self.column) for r in range(rows) if r != self.row]

    def is_adjacent(self, other: Tuple[int, int]) -> bool:
        row_diff = abs(self.row - other[0])
        col_diff = abs(self.column - other[1])
        return row_diff <= 1 and col_diff <= 1 and (row_diff, col_diff) != (0, 0)

    def __str__(self) -> str:
        return f"({self.row}, {self.column})"


def grid_shape(grid: Sequence[Sequence[Optional[int]]]) -> Optional[Tuple[int, int]]:
    """
    Return (rows, columns) of a rectangular grid.

    Returns None for an empty grid, an empty row or ragged rows.
    """
    if not grid or not grid[0]:
        return None
    columns = len(grid[0])
    if any(len(row) != columns for row in grid):
        return None
    return len(grid), columns


def copy_grid(grid: Sequence[Sequence[Optional[int]]]) -> Grid:
    """Copy a grid into fresh nested lists."""
    return [list(row) for row in grid]


class TennerBoard:
    """
    Tenner Grid board of configurable height.

    A standard board has 10 columns and 3-10 rows. Cells hold 0-9;
    empty cells are stored as EMPTY (-1) in the underlying array.
    """

    EMPTY = -1

    def __init__(self, rows: int, columns: int = COLUMNS, grid: Optional[np.ndarray] = None):
        """
        Initialize a board.

        Args:
            rows: Number of rows.
            columns: Number of columns (10 for a regular Tenner Grid).
            grid: Optional initial array using EMPTY for blank cells.
        """
        if rows < 1 or columns < 1:
            raise ValueError(f"Board dimensions must be positive, got {rows}x{columns}")

        self.rows = rows
        self.columns = columns

        if grid is not None:
            if grid.shape != (rows, columns):
                raise ValueError(f"Grid shape must be ({rows}, {columns})")
            self.grid = grid.copy().astype(np.int32)
        else:
            self.grid = np.full((rows, columns), self.EMPTY, dtype=np.int32)

    def copy(self) -> TennerBoard:
        """Create a deep copy of the board."""
        return TennerBoard(self.rows, self.columns, self.grid)

    def get(self, row: int, col: int) -> Optional[int]:
        """Get value at (row, col), None when empty."""
        value = int(self.grid[row, col])
        return None if value == self.EMPTY else value

    def set(self, row: int, col: int, value: int) -> None:
        """Set value at (row, col)."""
        if value < MIN_VALUE or value > MAX_VALUE:
            raise ValueError(f"Value must be {MIN_VALUE}-{MAX_VALUE}, got {value}")
        self.grid[row, col] = value

    def clear(self, row: int, col: int) -> None:
        self.grid[row, col] = self.EMPTY

    def is_empty(self, row: int, col: int) -> bool:
        return self.grid[row, col] == self.EMPTY

    def get_row(self, row: int) -> np.ndarray:
        """Filled values of a row."""
        values = self.grid[row, :]
        return values[values != self.EMPTY]

    def get_col(self, col: int) -> np.ndarray:
        """Filled values of a column."""
        values = self.grid[:, col]
        return values[values != self.EMPTY]

    def get_neighbors(self, row: int, col: int) -> np.ndarray:
        """Filled values of the 8-neighbourhood of (row, col)."""
        positions = CellPosition(row, col).adjacent_positions(self.rows, self.columns)
        values = np.array([self.grid[r, c] for r, c in positions], dtype=np.int32)
        return values[values != self.EMPTY]

    def get_empty_cells(self) -> List[CellPosition]:
        """Empty positions in row-major order."""
        return [CellPosition(int(r), int(c)) for r, c in np.argwhere(self.grid == self.EMPTY)]

    def count_empty(self) -> int:
        return int(np.sum(self.grid == self.EMPTY))

    def count_filled(self) -> int:
        return int(np.sum(self.grid != self.EMPTY))

    def is_complete(self) -> bool:
        return self.count_empty() == 0

    def column_sums(self) -> Optional[List[int]]:
        """Per-column sums, or None while any cell is empty."""
        if not self.is_complete():
            return None
        return [int(s) for s in self.grid.sum(axis=0)]

    def to_grid(self) -> Grid:
        """Convert to nested lists with None for empty cells."""
        return [[None if v == self.EMPTY else int(v) for v in row] for row in self.grid]

    @classmethod
    def from_grid(cls, data: Sequence[Sequence[Optional[int]]]) -> TennerBoard:
        """Create a board from nested lists (None for empty cells)."""
        shape = grid_shape(data)
        if shape is None:
            raise ValueError("Grid must be non-empty and rectangular")
        arr = np.array(
            [[cls.EMPTY if v is None else v for v in row] for row in data],
            dtype=np.int32,
        )
        if np.any((arr != cls.EMPTY) & ((arr < MIN_VALUE) | (arr > MAX_VALUE))):
            raise ValueError(f"Cell values must be {MIN_VALUE}-{MAX_VALUE}")
        return cls(shape[0], shape[1], arr)

    def to_string(self) -> str:
        """
        Compact representation: one digit per cell, '.' for empty,
        rows separated by '/'.
        """
        return "/".join(
            "".join("." if v == self.EMPTY else str(v) for v in row)
            for row in self.grid
        )

    @classmethod
    def from_string(cls, s: str) -> TennerBoard:
        """
        Create a board from its compact representation.

        Args:
            s: Rows separated by '/', digits 0-9, '.' or '_' for empty cells.
        """
        rows = [r.strip() for r in s.strip().split("/")]
        if not rows or not rows[0]:
            raise ValueError("Board string is empty")
        data: Grid = []
        for r in rows:
            row: List[Optional[int]] = []
            for ch in r:
                if ch in "._":
                    row.append(None)
                elif ch.isdigit():
                    row.append(int(ch))
                else:
                    raise ValueError(f"Invalid board character {ch!r}")
            data.append(row)
        if grid_shape(data) is None:
            raise ValueError("All rows must have the same length")
        return cls.from_grid(data)

    def render(self, target_sums: Optional[Sequence[int]] = None) -> str:
        """Pretty-print the board, optionally with target sums underneath."""
        horizontal_sep = "+" + "---+" * self.columns
        lines = [horizontal_sep]
        for row in self.grid:
            cells = "|".join(" . " if v == self.EMPTY else f" {v} " for v in row)
            lines.append(f"|{cells}|")
            lines.append(horizontal_sep)
        if target_sums is not None:
            lines.append(" " + " ".join(f"{s:>3}" for s in target_sums))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"TennerBoard(rows={self.rows}, columns={self.columns}, filled={self.count_filled()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TennerBoard):
            return False
        return self.grid.shape == other.grid.shape and np.array_equal(self.grid, other.grid)

    def __hash__(self) -> int:
        return hash(self.to_string())
