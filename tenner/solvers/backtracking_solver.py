"""Depth-first backtracking solver with constraint propagation."""

from __future__ import annotations
import logging
from typing import List, Optional, Sequence, Set, Tuple

from .base_solver import BaseSolver
from ..core.board import MAX_VALUE, MIN_VALUE, CellPosition, Grid, SolvedGrid
from ..core.puzzle import TennerPuzzle

logger = logging.getLogger(__name__)

# Cell domains are bitmasks: bit v set means value v is still possible
VALUE_COUNT = MAX_VALUE - MIN_VALUE + 1
FULL_DOMAIN = (1 << VALUE_COUNT) - 1
_BIT_COUNT = [bin(mask).count("1") for mask in range(FULL_DOMAIN + 1)]
_MASK_VALUES = [
    [v for v in range(MIN_VALUE, MAX_VALUE + 1) if mask >> v & 1]
    for mask in range(FULL_DOMAIN + 1)
]


def _range_mask(low: int, high: int) -> int:
    """Domain mask of the values low..high, clipped to 0-9."""
    low = max(low, MIN_VALUE)
    high = min(high, MAX_VALUE)
    if low > high:
        return 0
    return ((1 << (high + 1)) - 1) ^ ((1 << low) - 1)


class _Constraints:
    """Row, adjacency and column-sum rules over a flat list of cell domains."""

    def __init__(self, rows: int, columns: int, targets: Sequence[int], use_propagation: bool):
        self.rows = rows
        self.columns = columns
        self.targets = list(targets)
        self.use_propagation = use_propagation
        # A 10-wide row holds every value exactly once
        self.full_rows = columns == VALUE_COUNT

        self.peers: List[List[int]] = []
        for r in range(rows):
            for c in range(columns):
                pos = CellPosition(r, c)
                linked = set(pos.row_positions(columns)) | set(pos.adjacent_positions(rows, columns))
                self.peers.append(sorted(p.row * columns + p.column for p in linked))
        self.row_cells = [list(range(r * columns, (r + 1) * columns)) for r in range(rows)]
        self.column_cells = [list(range(c, rows * columns, columns)) for c in range(columns)]

    def propagate(self, domains: List[int], changed: Set[int]) -> bool:
        """
        Narrow domains in place until nothing changes.

        Returns False as soon as some cell is left without a value or a
        row or column can no longer be satisfied.
        """
        columns = self.columns
        pending = set(changed)
        dirty_rows: Set[int] = set()
        dirty_columns: Set[int] = set()

        while pending or dirty_rows or dirty_columns:
            while pending:
                cell = pending.pop()
                mask = domains[cell]
                if not mask:
                    return False
                dirty_rows.add(cell // columns)
                dirty_columns.add(cell % columns)
                if mask & (mask - 1):
                    continue
                # Fixed cell: its value is gone from every row-mate and neighbour
                for peer in self.peers[cell]:
                    if domains[peer] & mask:
                        reduced = domains[peer] & ~mask
                        if not reduced:
                            return False
                        domains[peer] = reduced
                        pending.add(peer)

            if self.use_propagation and self.full_rows:
                for row in dirty_rows:
                    if not self._hidden_singles(domains, row, pending):
                        return False
            dirty_rows.clear()

            for column in dirty_columns:
                if not self._column_bounds(domains, column, pending):
                    return False
            dirty_columns.clear()

        return True

    def _hidden_singles(self, domains: List[int], row: int, pending: Set[int]) -> bool:
        """Fix cells that are the only place left in their row for some value."""
        seen = twice = 0
        cells = self.row_cells[row]
        for cell in cells:
            mask = domains[cell]
            twice |= seen & mask
            seen |= mask
        if seen != FULL_DOMAIN:
            return False

        singles = seen & ~twice
        if not singles:
            return True
        for cell in cells:
            hit = domains[cell] & singles
            if not hit:
                continue
            if hit & (hit - 1):
                return False
            if domains[cell] != hit:
                domains[cell] = hit
                pending.add(cell)
        return True

    def _column_bounds(self, domains: List[int], column: int, pending: Set[int]) -> bool:
        """
        Keep the column target between the smallest and largest reachable sums.

        With propagation on, each open cell is also narrowed to the values
        that the other cells of the column can still complement.
        """
        cells = self.column_cells[column]
        target = self.targets[column]
        lows = []
        highs = []
        for cell in cells:
            mask = domains[cell]
            lows.append((mask & -mask).bit_length() - 1)
            highs.append(mask.bit_length() - 1)
        low_total = sum(lows)
        high_total = sum(highs)
        if not low_total <= target <= high_total:
            return False
        if not self.use_propagation:
            return True

        for cell, low, high in zip(cells, lows, highs):
            if low == high:
                continue
            allowed = _range_mask(target - (high_total - high), target - (low_total - low))
            reduced = domains[cell] & allowed
            if reduced != domains[cell]:
                if not reduced:
                    return False
                domains[cell] = reduced
                pending.add(cell)
        return True

    def to_grid(self, domains: Sequence[int]) -> SolvedGrid:
        columns = self.columns
        return [
            [domains[r * columns + c].bit_length() - 1 for c in range(columns)]
            for r in range(self.rows)
        ]

    def sums_match(self, grid: SolvedGrid) -> bool:
        return all(
            sum(row[c] for row in grid) == self.targets[c]
            for c in range(self.columns)
        )


class PuzzleSolver(BaseSolver):
    """
    Depth-first search with constraint propagation.

    Features:
    - Cell domains kept as bitmasks
    - A fixed value is removed from every row-mate and 8-neighbour
    - Hidden singles: in a 10-wide row each value must go somewhere, so a
      value with one possible cell left is placed there
    - Column-sum bounds: the target must lie between the smallest and
      largest sums the column can still reach, and open cells are narrowed
      to the values that keep it so
    - Branching on the open cell with the fewest candidates
    - Iterative search with an explicit stack, so depth is bounded by
      the number of cells rather than the interpreter's recursion limit
    - Early exit once the requested number of solutions is found
    """

    name = "Backtracking+Propagation"

    def __init__(self, use_propagation: bool = True, track_memory: bool = False):
        """
        Args:
            use_propagation: Apply hidden singles and column-sum narrowing.
                             Without it only row/adjacency elimination and a
                             column-sum bounds check are done.
            track_memory: See BaseSolver.
        """
        super().__init__(track_memory=track_memory)
        self.use_propagation = use_propagation

    def _search(self, puzzle: TennerPuzzle, grid: Grid, limit: int,
                exclude: Optional[Tuple[Tuple[int, int], int]] = None) -> List[SolvedGrid]:
        rows, columns = puzzle.rows, puzzle.columns
        constraints = _Constraints(rows, columns, puzzle.target_sums, self.use_propagation)

        domains = []
        for row in grid:
            for value in row:
                if value is None:
                    domains.append(FULL_DOMAIN)
                elif MIN_VALUE <= value <= MAX_VALUE:
                    domains.append(1 << value)
                else:
                    logger.debug("Given value %r out of range; no solutions", value)
                    return []

        if exclude is not None:
            (row, column), value = exclude
            if 0 <= row < rows and 0 <= column < columns and MIN_VALUE <= value <= MAX_VALUE:
                domains[row * columns + column] &= ~(1 << value)

        self.stats.nodes_explored += 1
        if not constraints.propagate(domains, set(range(len(domains)))):
            logger.debug("Given cells are inconsistent; no solutions")
            return []

        solutions: List[SolvedGrid] = []
        # Frames: [parent domains, branching cell, candidate values, next candidate index]
        stack: List[list] = []
        current: Optional[List[int]] = domains

        while True:
            if current is not None:
                cell = self._select_cell(current)
                if cell is None:
                    solution = constraints.to_grid(current)
                    if constraints.sums_match(solution):
                        solutions.append(solution)
                        if len(solutions) >= limit:
                            break
                else:
                    stack.append([current, cell, _MASK_VALUES[current[cell]], 0])
                current = None

            if not stack:
                break

            frame = stack[-1]
            parent, cell, values, index = frame
            if index >= len(values):
                stack.pop()
                self.stats.backtracks += 1
                continue

            frame[3] = index + 1
            child = parent[:]
            child[cell] = 1 << values[index]
            self.stats.nodes_explored += 1
            if constraints.propagate(child, {cell}):
                current = child

        logger.debug(
            "Search finished: %d solution(s), %d nodes, %d backtracks",
            len(solutions), self.stats.nodes_explored, self.stats.backtracks,
        )
        return solutions

    @staticmethod
    def _select_cell(domains: Sequence[int]) -> Optional[int]:
        """Open cell with the fewest candidates, None once every cell is fixed."""
        best = None
        best_count = VALUE_COUNT + 1
        for cell, mask in enumerate(domains):
            count = _BIT_COUNT[mask]
            if 1 < count < best_count:
                best, best_count = cell, count
                if count == 2:
                    break
        return best
