"""Editable overlay over a puzzle's initial grid."""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..core.board import MAX_VALUE, MIN_VALUE, CellPosition, Grid, copy_grid
from ..core.puzzle import TennerPuzzle
from ..core.validator import is_puzzle_complete


@dataclass
class LiveGrid:
    """
    The grid a player is working on.

    Starts as a copy of the puzzle's initial grid. Given cells can never be
    changed; every other cell may be filled or cleared freely, including
    with values that break the rules.
    """
    puzzle: TennerPuzzle
    cells: Optional[Grid] = None
    selected: Optional[CellPosition] = None

    def __post_init__(self):
        self.cells = copy_grid(self.puzzle.initial_grid if self.cells is None else self.cells)
        if self.selected is not None:
            self.selected = CellPosition(*self.selected)

    def value(self, position: Tuple[int, int]) -> Optional[int]:
        if not self.puzzle.is_valid_position(position):
            return None
        return self.cells[position[0]][position[1]]

    def is_editable(self, position: Tuple[int, int]) -> bool:
        return self.puzzle.is_valid_position(position) and not self.puzzle.is_prefilled(position)

    def is_empty(self, position: Tuple[int, int]) -> bool:
        return self.puzzle.is_valid_position(position) and self.value(position) is None

    def place(self, position: Tuple[int, int], value: int) -> bool:
        """Write a value into an editable cell. Returns False if refused."""
        if not self.is_editable(position) or not MIN_VALUE <= value <= MAX_VALUE:
            return False
        self.cells[position[0]][position[1]] = value
        return True

    def clear(self, position: Tuple[int, int]) -> bool:
        if not self.is_editable(position):
            return False
        self.cells[position[0]][position[1]] = None
        return True

    def empty_positions(self) -> List[CellPosition]:
        """Empty cells in row-major order."""
        return [
            CellPosition(r, c)
            for r in range(self.puzzle.rows)
            for c in range(self.puzzle.columns)
            if self.cells[r][c] is None
        ]

    @property
    def is_completed(self) -> bool:
        return is_puzzle_complete(self.cells, self.puzzle)

    def copy(self) -> LiveGrid:
        return LiveGrid(self.puzzle, self.cells, self.selected)
