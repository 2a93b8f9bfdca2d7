"""Hints for a game in progress."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Iterable, Optional, Set, Tuple

from ..core.board import CellPosition
from ..core.validator import is_valid_placement, possible_values
from .live_grid import LiveGrid


class HintKind(Enum):
    """Kinds of hint offered to the player."""
    LOGICAL_MOVE = "logical_move"        # a cell whose value follows by deduction
    REVEAL_VALUE = "reveal_value"        # the solution value of a cell
    POSSIBLE_VALUES = "possible_values"  # every legal value of a cell


@dataclass(frozen=True)
class Hint:
    kind: HintKind
    position: CellPosition
    value: Optional[int] = None
    values: FrozenSet[int] = frozenset()

    @classmethod
    def logical_move(cls, position: Tuple[int, int], value: int) -> Hint:
        return cls(HintKind.LOGICAL_MOVE, CellPosition(*position), value=value)

    @classmethod
    def reveal(cls, position: Tuple[int, int], value: int) -> Hint:
        return cls(HintKind.REVEAL_VALUE, CellPosition(*position), value=value)

    @classmethod
    def possible(cls, position: Tuple[int, int], values: Iterable[int]) -> Hint:
        return cls(HintKind.POSSIBLE_VALUES, CellPosition(*position), values=frozenset(values))


class HintEngine:
    """
    Answers hint queries against a live grid.

    Read-only: neither the live grid nor its puzzle is ever modified.
    """

    def get_possible_values(self, position: Tuple[int, int], live: LiveGrid) -> Set[int]:
        """Legal values for an empty, editable cell; empty set otherwise."""
        return possible_values(position, live.cells, live.puzzle)

    def identify_next_cell(self, live: LiveGrid) -> Optional[Tuple[CellPosition, int]]:
        """
        Find a cell whose value is forced, without guessing.

        Naked singles are searched first in row-major order. Failing that,
        any column with one empty cell left forces that cell to
        target - sum(other cells), provided the value is a legal placement.

        Returns:
            (position, value), or None if the grid needs a guess.
        """
        for position in live.empty_positions():
            values = self.get_possible_values(position, live)
            if len(values) == 1:
                return position, next(iter(values))

        puzzle = live.puzzle
        for column in range(puzzle.columns):
            column_values = [live.cells[r][column] for r in range(puzzle.rows)]
            open_rows = [r for r, v in enumerate(column_values) if v is None]
            if len(open_rows) != 1:
                continue

            position = CellPosition(open_rows[0], column)
            value = puzzle.target_sums[column] - sum(v for v in column_values if v is not None)
            if live.is_editable(position) and is_valid_placement(value, position, live.cells, puzzle):
                return position, value

        return None

    def reveal_value(self, position: Tuple[int, int], live: LiveGrid) -> Optional[int]:
        """The solution value of an editable cell; None for given or invalid cells."""
        if not live.is_editable(position):
            return None
        return live.puzzle.solution_value(position)

    def reveal_hint(self, position: Tuple[int, int], live: LiveGrid) -> Optional[Hint]:
        value = self.reveal_value(position, live)
        if value is None:
            return None
        return Hint.reveal(position, value)

    def provide_hint(self, live: LiveGrid) -> Optional[Hint]:
        """
        Pick the most useful hint for the current grid.

        Strategy:
        1. A logical move, if one exists
        2. Otherwise the possible values of the selected cell, if it is empty
        3. Otherwise the possible values of the most constrained empty cell

        Returns None once the puzzle is complete.
        """
        if live.is_completed:
            return None

        move = self.identify_next_cell(live)
        if move is not None:
            return Hint.logical_move(*move)

        selected = live.selected
        if selected is not None and live.is_editable(selected) and live.is_empty(selected):
            return Hint.possible(selected, self.get_possible_values(selected, live))

        best: Optional[Tuple[CellPosition, Set[int]]] = None
        for position in live.empty_positions():
            values = self.get_possible_values(position, live)
            if values and (best is None or len(values) < len(best[1])):
                best = (position, values)

        if best is None:
            return None
        return Hint.possible(*best)

    def is_hint_still_valid(self, hint: Hint, live: LiveGrid) -> bool:
        """
        Check a hint still applies after the grid changed.

        Any hint about a cell that has since been filled is stale.
        """
        if not live.is_editable(hint.position) or not live.is_empty(hint.position):
            return False

        if hint.kind is HintKind.REVEAL_VALUE:
            return live.puzzle.solution_value(hint.position) == hint.value

        current = self.get_possible_values(hint.position, live)
        if hint.kind is HintKind.LOGICAL_MOVE:
            return hint.value in current
        return bool(current & hint.values)

    def estimate_difficulty(self, live: LiveGrid) -> float:
        """
        Rough difficulty of the remaining work, from 0.0 (done) to 1.0.

        Half the score comes from the share of empty cells and half from
        how open those cells still are (candidates out of 10). A blank grid
        scores 1.0, a full grid 0.0, and filling any cell lowers the score.
        """
        total = live.puzzle.total_cells
        empties = live.empty_positions()
        if total == 0 or not empties:
            return 0.0

        candidate_count = sum(len(self.get_possible_values(p, live)) for p in empties)
        score = (0.5 * len(empties) + 0.05 * candidate_count) / total
        return min(1.0, max(0.0, score))
