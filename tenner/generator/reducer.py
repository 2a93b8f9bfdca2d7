"""Cell removal: turns a completed grid into a puzzle with a unique solution."""

from __future__ import annotations
import logging
import random
from typing import Optional, Sequence

from ..core.board import CellPosition, Grid, copy_grid, grid_shape
from ..core.difficulty import Difficulty
from ..core.puzzle import TennerPuzzle
from ..core.validator import is_valid_complete_grid
from ..solvers import PuzzleSolver

logger = logging.getLogger(__name__)


def remove_cells(
    completed_grid: Sequence[Sequence[int]],
    column_sums: Sequence[int],
    difficulty: Difficulty,
    seed: Optional[int] = None,
    solver: Optional[PuzzleSolver] = None,
    prefilled_ratio: Optional[float] = None,
) -> Optional[Grid]:
    """
    Blank out cells of a completed grid while keeping a unique solution.

    Cells are visited once each in a seed-derived order. A cell stays blank
    only if the puzzle still has exactly one solution afterwards; otherwise
    it is restored. Removal stops once the share of given cells has dropped
    to the difficulty's fill ratio. The ratio is a target, not a promise:
    uniqueness always wins, so a puzzle may end up with more givens.

    The grid is unique before each step, so blanking a cell keeps it unique
    exactly when no completion puts a different value in that cell. Each
    step is therefore a single search that is expected to fail.

    A cell that cannot be removed never becomes removable later, since
    blanking other cells only adds solutions. One pass is therefore enough.

    Args:
        completed_grid: A fully filled, valid grid.
        column_sums: Target sum of each column of completed_grid.
        difficulty: Difficulty whose fill ratio sets the removal target.
        seed: Makes the removal order reproducible.
        solver: Solver used for uniqueness checks.
        prefilled_ratio: Override for the difficulty's fill ratio.

    Returns:
        The initial puzzle grid (None for blank cells), or None when the
        input grid is malformed, breaks the row or adjacency rules, or does
        not add up to column_sums.
    """
    shape = grid_shape(completed_grid)
    if shape is None or len(column_sums) != shape[1]:
        return None
    if not is_valid_complete_grid(completed_grid):
        return None

    rows, columns = shape
    if any(sum(row[c] for row in completed_grid) != column_sums[c] for c in range(columns)):
        return None

    solver = solver or PuzzleSolver()
    rng = random.Random(seed)
    ratio = difficulty.prefilled_ratio if prefilled_ratio is None else prefilled_ratio

    total_cells = rows * columns
    cells_to_remove = int(total_cells * (1.0 - ratio))

    puzzle_grid = copy_grid(completed_grid)
    # Reference puzzle for dimensions and sums; candidate grids are passed alongside it
    reference = TennerPuzzle(
        rows=rows,
        columns=columns,
        target_sums=list(column_sums),
        initial_grid=puzzle_grid,
        solution=copy_grid(completed_grid),
        difficulty=difficulty,
    )

    positions = [CellPosition(r, c) for r in range(rows) for c in range(columns)]
    rng.shuffle(positions)

    removed = 0
    for position in positions:
        if removed >= cells_to_remove:
            break

        row, col = position
        original_value = puzzle_grid[row][col]
        puzzle_grid[row][col] = None

        if solver.find_other_solution(reference, position, original_value, puzzle_grid) is None:
            removed += 1
        else:
            puzzle_grid[row][col] = original_value

    if removed < cells_to_remove:
        logger.warning(
            "Removed %d of %d targeted cells (%s); uniqueness prevents further removal",
            removed, cells_to_remove, difficulty.value,
        )
    else:
        logger.debug("Removed %d cells for %s puzzle", removed, difficulty.value)

    return puzzle_grid
