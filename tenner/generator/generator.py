"""Tenner Grid puzzle generator with configurable difficulty levels."""

from __future__ import annotations
import logging
import random
from datetime import date
from typing import List, Optional, Sequence

import numpy as np

from ..core.board import (
    COLUMNS, MAX_COLUMNS, MAX_ROWS, MAX_VALUE, MIN_COLUMNS, MIN_ROWS, MIN_VALUE,
    CellPosition, Grid, SolvedGrid, grid_shape,
)
from ..core.difficulty import Difficulty
from ..core.puzzle import TennerPuzzle
from ..core.validator import is_valid_placement
from ..solvers import PuzzleSolver
from .reducer import remove_cells

logger = logging.getLogger(__name__)

DAILY_ROWS = 5
DAILY_DIFFICULTY = Difficulty.MEDIUM


def generate_completed_grid(rows: int, columns: int = COLUMNS,
                            seed: Optional[int] = None) -> Optional[SolvedGrid]:
    """
    Generate a fully filled grid obeying the row and adjacency rules.

    Cells are filled row by row, left to right. Each cell tries the digits
    0-9 in a seed-derived order and keeps the first one that clashes with
    no placed row-mate or neighbour; a dead end backtracks to the previous
    cell, across row boundaries if needed.

    Args:
        rows: Number of rows (3-10).
        columns: Number of columns (5-10, 10 for a regular Tenner Grid).
        seed: Makes the result reproducible; None uses fresh randomness.

    Returns:
        The completed grid, or None for unsupported dimensions.
    """
    if rows < MIN_ROWS or rows > MAX_ROWS:
        return None
    if columns < MIN_COLUMNS or columns > MAX_COLUMNS:
        return None

    rng = random.Random(seed)
    cells = [CellPosition(r, c) for r in range(rows) for c in range(columns)]
    grid: Grid = [[None] * columns for _ in range(rows)]
    orders: List[Optional[List[int]]] = [None] * len(cells)
    backtracks = 0
    index = 0

    while index < len(cells):
        row, col = cells[index]
        grid[row][col] = None

        if orders[index] is None:
            order = list(range(MIN_VALUE, MAX_VALUE + 1))
            rng.shuffle(order)
            orders[index] = order

        order = orders[index]
        while order:
            value = order.pop(0)
            if is_valid_placement(value, (row, col), grid):
                grid[row][col] = value
                break

        if grid[row][col] is None:
            # Dead end: the previous cell moves on to its next candidate
            orders[index] = None
            backtracks += 1
            index -= 1
            if index < 0:
                return None
            continue

        index += 1

    logger.debug("Generated %dx%d grid (seed=%s, %d backtracks)", rows, columns, seed, backtracks)
    return [[int(v) for v in row] for row in grid]


def calculate_column_sums(grid: Sequence[Sequence[int]]) -> Optional[List[int]]:
    """
    Sum each column of a completed grid.

    Returns:
        One sum per column, or None if the grid is empty, has an empty row,
        has rows of different lengths or contains unset cells.
    """
    if grid_shape(grid) is None:
        return None
    if any(value is None for row in grid for value in row):
        return None
    return [int(s) for s in np.asarray(grid, dtype=np.int64).sum(axis=0)]


def generate_puzzle(
    rows: int,
    difficulty: Difficulty = Difficulty.MEDIUM,
    seed: Optional[int] = None,
    columns: int = COLUMNS,
    solver: Optional[PuzzleSolver] = None,
    prefilled_ratio: Optional[float] = None,
) -> Optional[TennerPuzzle]:
    """
    Generate a complete puzzle: solution grid, target sums and initial grid.

    The same seed drives both the grid fill and the cell removal, so a
    seeded call is reproducible end to end.

    Returns:
        The puzzle, or None for unsupported dimensions.
    """
    solution = generate_completed_grid(rows, columns, seed)
    if solution is None:
        return None

    target_sums = calculate_column_sums(solution)
    initial_grid = remove_cells(
        solution, target_sums, difficulty, seed=seed,
        solver=solver, prefilled_ratio=prefilled_ratio,
    )
    if initial_grid is None:
        return None

    return TennerPuzzle(
        rows=rows,
        columns=columns,
        target_sums=target_sums,
        initial_grid=initial_grid,
        solution=solution,
        difficulty=difficulty,
    )


def seed_for_date(day: date) -> int:
    """Deterministic seed for a calendar day, e.g. 2026-01-22 -> 20260122."""
    return day.year * 10000 + day.month * 100 + day.day


def generate_daily_puzzle(day: Optional[date] = None,
                          solver: Optional[PuzzleSolver] = None) -> TennerPuzzle:
    """The daily puzzle: everyone gets the same grid on the same day."""
    day = day or date.today()
    puzzle = generate_puzzle(DAILY_ROWS, DAILY_DIFFICULTY, seed=seed_for_date(day), solver=solver)
    logger.info("Daily puzzle for %s: %s", day.isoformat(), puzzle)
    return puzzle


class PuzzleGenerator:
    """
    Generator for Tenner Grid puzzles of a fixed size.

    Algorithm:
    1. Generate a complete valid grid using backtracking
    2. Derive the column target sums from it
    3. Remove cells down to the difficulty's fill ratio while the puzzle
       keeps a unique solution
    """

    def __init__(self, rows: int = 5, columns: int = COLUMNS, seed: Optional[int] = None,
                 solver: Optional[PuzzleSolver] = None):
        """
        Initialize the generator.

        Args:
            rows: Number of rows (3-10).
            columns: Number of columns (default 10 for a standard Tenner Grid).
            seed: Random seed for reproducibility. Each generated puzzle gets
                  its own seed drawn from this one.
            solver: Solver used for uniqueness checks.
        """
        if rows < MIN_ROWS or rows > MAX_ROWS:
            raise ValueError(f"Rows must be {MIN_ROWS}-{MAX_ROWS}, got {rows}")
        if columns < MIN_COLUMNS or columns > MAX_COLUMNS:
            raise ValueError(f"Columns must be {MIN_COLUMNS}-{MAX_COLUMNS}, got {columns}")

        self.rows = rows
        self.columns = columns
        self.seed = seed
        self.solver = solver or PuzzleSolver()
        self._rng = random.Random(seed)

    def generate(self, difficulty: Difficulty = Difficulty.MEDIUM,
                 prefilled_ratio: Optional[float] = None) -> TennerPuzzle:
        """
        Generate a puzzle with the specified difficulty.

        Args:
            difficulty: Desired difficulty level.
            prefilled_ratio: Override for the difficulty's fill ratio.
        """
        puzzle_seed = self._rng.getrandbits(63)
        return generate_puzzle(
            self.rows, difficulty, seed=puzzle_seed, columns=self.columns,
            solver=self.solver, prefilled_ratio=prefilled_ratio,
        )

    def generate_batch(self, count: int, difficulty: Difficulty = Difficulty.MEDIUM,
                       prefilled_ratio: Optional[float] = None) -> List[TennerPuzzle]:
        """Generate multiple puzzles of the same difficulty."""
        return [self.generate(difficulty, prefilled_ratio) for _ in range(count)]
