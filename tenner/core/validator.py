"""Validation utilities for Tenner Grid puzzles."""

from __future__ import annotations
from typing import TYPE_CHECKING, Optional, Sequence, Set, Tuple

from .board import MAX_VALUE, MIN_VALUE, CellPosition, grid_shape

if TYPE_CHECKING:
    from .puzzle import TennerPuzzle

GridLike = Sequence[Sequence[Optional[int]]]

ALL_VALUES = frozenset(range(MIN_VALUE, MAX_VALUE + 1))


def _dimensions(grid: GridLike, puzzle: Optional[TennerPuzzle]) -> Optional[Tuple[int, int]]:
    shape = grid_shape(grid)
    if shape is None:
        return None
    if puzzle is not None and shape != (puzzle.rows, puzzle.columns):
        return None
    return shape


def _in_bounds(position: Tuple[int, int], shape: Tuple[int, int]) -> bool:
    return 0 <= position[0] < shape[0] and 0 <= position[1] < shape[1]


def blocked_values(position: Tuple[int, int], grid: GridLike) -> Set[int]:
    """
    Values already used by the row-mates and 8-neighbours of a cell.

    The cell's own content is ignored.
    """
    rows, columns = len(grid), len(grid[0])
    pos = CellPosition(*position)
    blocked = set()
    for r, c in pos.row_positions(columns):
        if grid[r][c] is not None:
            blocked.add(grid[r][c])
    for r, c in pos.adjacent_positions(rows, columns):
        if grid[r][c] is not None:
            blocked.add(grid[r][c])
    return blocked


def is_valid_placement(
    value: int,
    position: Tuple[int, int],
    grid: GridLike,
    puzzle: Optional[TennerPuzzle] = None,
) -> bool:
    """
    Check if placing a value at a position obeys the Tenner Grid rules.

    Column sums are not consulted; they can only be checked once a
    column is full.

    Args:
        value: Value to place (0-9).
        position: (row, column) of the cell.
        grid: Current grid, None for empty cells.
        puzzle: Optional puzzle whose dimensions the grid must match.

    Returns:
        False if the value is out of range, the position is out of bounds,
        or the value already appears in the row or among the 8 neighbours.
    """
    if value < MIN_VALUE or value > MAX_VALUE:
        return False

    shape = _dimensions(grid, puzzle)
    if shape is None or not _in_bounds(position, shape):
        return False

    return value not in blocked_values(position, grid)


def possible_values(
    position: Tuple[int, int],
    grid: GridLike,
    puzzle: Optional[TennerPuzzle] = None,
) -> Set[int]:
    """
    Get all values that could legally go into an empty cell.

    Returns an empty set for out-of-bounds positions, filled cells and
    given (pre-filled) cells of the puzzle.
    """
    shape = _dimensions(grid, puzzle)
    if shape is None or not _in_bounds(position, shape):
        return set()
    if grid[position[0]][position[1]] is not None:
        return set()
    if puzzle is not None and puzzle.is_prefilled(position):
        return set()

    return set(ALL_VALUES - blocked_values(position, grid))


def detect_conflicts(
    position: Tuple[int, int],
    grid: GridLike,
    puzzle: Optional[TennerPuzzle] = None,
) -> Set[CellPosition]:
    """
    Find every cell clashing with the cell at position.

    A clash is a row-mate or neighbour holding the same value.
    Empty cells have no conflicts.
    """
    shape = _dimensions(grid, puzzle)
    if shape is None or not _in_bounds(position, shape):
        return set()

    value = grid[position[0]][position[1]]
    if value is None:
        return set()

    rows, columns = shape
    pos = CellPosition(*position)
    conflicts = set()
    for peer in pos.row_positions(columns) + pos.adjacent_positions(rows, columns):
        if grid[peer.row][peer.column] == value:
            conflicts.add(peer)
    return conflicts


def conflicting_cells(grid: GridLike) -> Set[CellPosition]:
    """All filled cells that take part in at least one conflict."""
    shape = grid_shape(grid)
    if shape is None:
        return set()

    cells = set()
    for r in range(shape[0]):
        for c in range(shape[1]):
            if grid[r][c] is not None and detect_conflicts((r, c), grid):
                cells.add(CellPosition(r, c))
    return cells


def is_column_sum_valid(column: int, grid: GridLike, puzzle: TennerPuzzle) -> bool:
    """
    Check that a column is full and adds up to its target sum.

    Returns False for an out-of-range column or while any cell of the
    column is still empty.
    """
    if column < 0 or column >= puzzle.columns or column >= len(puzzle.target_sums):
        return False
    if _dimensions(grid, puzzle) is None:
        return False

    total = 0
    for row in range(puzzle.rows):
        value = grid[row][column]
        if value is None:
            return False
        total += value

    return total == puzzle.target_sums[column]


def is_puzzle_complete(grid: GridLike, puzzle: TennerPuzzle) -> bool:
    """
    Check if the puzzle is completely and correctly filled.

    Every cell must be set, no cell may conflict with another and every
    column must meet its target sum.
    """
    if _dimensions(grid, puzzle) is None:
        return False

    if any(value is None for row in grid for value in row):
        return False

    if conflicting_cells(grid):
        return False

    return all(is_column_sum_valid(col, grid, puzzle) for col in range(puzzle.columns))


def is_valid_complete_grid(grid: GridLike) -> bool:
    """
    Check that a grid is full, in range and free of row and adjacency clashes.

    Column sums are not involved; this is the structural invariant a
    generated solution grid must satisfy.
    """
    if grid_shape(grid) is None:
        return False

    for row in grid:
        for value in row:
            if value is None or value < MIN_VALUE or value > MAX_VALUE:
                return False

    return not conflicting_cells(grid)
