"""Immutable Tenner Grid puzzle bundle."""

from __future__ import annotations
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .board import (
    COLUMNS, MAX_ROWS, MAX_VALUE, MIN_ROWS, MIN_VALUE,
    Grid, SolvedGrid, TennerBoard, copy_grid,
)
from .difficulty import Difficulty


@dataclass(frozen=True, eq=False)
class TennerPuzzle:
    """
    A playable puzzle: the initial grid, the column target sums and the
    canonical solution.

    Grids are copied on construction; a puzzle is never mutated after
    it is created.
    """
    rows: int
    columns: int
    target_sums: List[int]
    initial_grid: Grid
    solution: SolvedGrid
    difficulty: Difficulty = Difficulty.MEDIUM
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        object.__setattr__(self, "target_sums", list(self.target_sums))
        object.__setattr__(self, "initial_grid", copy_grid(self.initial_grid))
        object.__setattr__(self, "solution", copy_grid(self.solution))

    @property
    def total_cells(self) -> int:
        return self.rows * self.columns

    @property
    def prefilled_count(self) -> int:
        return sum(1 for row in self.initial_grid for v in row if v is not None)

    @property
    def empty_cell_count(self) -> int:
        return self.total_cells - self.prefilled_count

    @property
    def prefilled_ratio(self) -> float:
        if self.total_cells == 0:
            return 0.0
        return self.prefilled_count / self.total_cells

    def is_valid_position(self, position: Tuple[int, int]) -> bool:
        row, column = position
        return 0 <= row < self.rows and 0 <= column < self.columns

    def initial_value(self, position: Tuple[int, int]) -> Optional[int]:
        if not self.is_valid_position(position):
            return None
        return self.initial_grid[position[0]][position[1]]

    def solution_value(self, position: Tuple[int, int]) -> Optional[int]:
        if not self.is_valid_position(position):
            return None
        return self.solution[position[0]][position[1]]

    def is_prefilled(self, position: Tuple[int, int]) -> bool:
        """True for given (non-editable) cells."""
        return self.initial_value(position) is not None

    def initial_board(self) -> TennerBoard:
        return TennerBoard.from_grid(self.initial_grid)

    def is_valid(self) -> bool:
        """
        Check the puzzle is a well-formed Tenner Grid.

        Requires exactly 10 columns, 3-10 rows, one target sum per column,
        grids of matching shape, solution values in 0-9 and every given
        cell agreeing with the solution.
        """
        if self.columns != COLUMNS:
            return False
        if not MIN_ROWS <= self.rows <= MAX_ROWS:
            return False
        if len(self.target_sums) != self.columns or any(s < 0 for s in self.target_sums):
            return False
        if not _has_shape(self.initial_grid, self.rows, self.columns):
            return False
        if not _has_shape(self.solution, self.rows, self.columns):
            return False

        for r in range(self.rows):
            for c in range(self.columns):
                value = self.solution[r][c]
                if value is None or not MIN_VALUE <= value <= MAX_VALUE:
                    return False
                given = self.initial_grid[r][c]
                if given is not None and given != value:
                    return False
        return True

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data view of the puzzle."""
        return {
            "id": self.id,
            "rows": self.rows,
            "columns": self.columns,
            "difficulty": self.difficulty.value,
            "target_sums": list(self.target_sums),
            "initial_grid": copy_grid(self.initial_grid),
            "solution": copy_grid(self.solution),
            "prefilled": self.prefilled_count,
            "created_at": self.created_at.isoformat(),
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TennerPuzzle):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return (
            f"TennerPuzzle({self.rows}x{self.columns}, {self.difficulty.display_name}, "
            f"prefilled {self.prefilled_count}/{self.total_cells} "
            f"({self.prefilled_ratio * 100:.1f}%), sums {self.target_sums})"
        )


def _has_shape(grid: Sequence[Sequence[Optional[int]]], rows: int, columns: int) -> bool:
    return len(grid) == rows and all(len(row) == columns for row in grid)
