"""Base solver interface and common utilities."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List, Tuple
import time
import tracemalloc

from ..core.board import Grid, SolvedGrid, copy_grid
from ..core.puzzle import TennerPuzzle


@dataclass
class SolverStats:
    """Statistics from a solver run."""
    # Core metrics
    solved: bool = False
    solutions_found: int = 0
    time_seconds: float = 0.0
    memory_bytes: int = 0

    # Search metrics
    nodes_explored: int = 0
    backtracks: int = 0

    # Additional metadata
    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "solved": self.solved,
            "solutions_found": self.solutions_found,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "nodes_explored": self.nodes_explored,
            "backtracks": self.backtracks,
            "algorithm": self.algorithm,
            **self.extra
        }


class BaseSolver(ABC):
    """
    Abstract base class for Tenner Grid solvers.

    Subclasses implement `_search`, which enumerates completions of a
    partial grid up to a limit. Every public call records a fresh
    SolverStats on `self.stats`.
    """

    name: str = "BaseSolver"

    def __init__(self, track_memory: bool = False):
        """
        Args:
            track_memory: Record peak memory with tracemalloc (slow; meant
                          for benchmarking).
        """
        self.track_memory = track_memory
        self.stats = SolverStats(algorithm=self.name)

    def solve(self, puzzle: TennerPuzzle, initial_grid: Optional[Grid] = None) -> Optional[SolvedGrid]:
        """
        Find one completion of the puzzle.

        Args:
            puzzle: Puzzle supplying dimensions and target sums.
            initial_grid: Grid to complete (defaults to the puzzle's initial grid).

        Returns:
            The completed grid, or None if the grid is malformed or has no solution.
        """
        solutions = self._run(puzzle, initial_grid, limit=1)
        return solutions[0] if solutions else None

    def count_solutions(self, puzzle: TennerPuzzle, initial_grid: Optional[Grid] = None,
                        limit: int = 2) -> int:
        """Count completions of the puzzle, stopping once `limit` are found."""
        return len(self._run(puzzle, initial_grid, limit=limit))

    def has_unique_solution(self, puzzle: TennerPuzzle, initial_grid: Optional[Grid] = None) -> bool:
        """True if the puzzle has exactly one completion."""
        return self.count_solutions(puzzle, initial_grid, limit=2) == 1

    def find_other_solution(self, puzzle: TennerPuzzle, position: Tuple[int, int], value: int,
                            initial_grid: Optional[Grid] = None) -> Optional[SolvedGrid]:
        """
        Find a completion in which the cell at `position` does not hold `value`.

        If the grid with that cell set to `value` is known to have a single
        solution, the grid with the cell blank is unique exactly when this
        returns None.
        """
        solutions = self._run(puzzle, initial_grid, limit=1, exclude=(tuple(position), value))
        return solutions[0] if solutions else None

    def _run(self, puzzle: TennerPuzzle, initial_grid: Optional[Grid], limit: int,
             exclude: Optional[Tuple[Tuple[int, int], int]] = None) -> List[SolvedGrid]:
        self.stats = SolverStats(algorithm=self.name)
        if limit < 1:
            return []

        grid = initial_grid if initial_grid is not None else puzzle.initial_grid
        if not self._dimensions_match(puzzle, grid):
            self.stats.extra["error"] = "dimension mismatch"
            return []

        if self.track_memory:
            tracemalloc.start()
        start_time = time.perf_counter()

        try:
            solutions = self._search(puzzle, copy_grid(grid), limit, exclude)
        finally:
            self.stats.time_seconds = time.perf_counter() - start_time
            if self.track_memory:
                _, peak = tracemalloc.get_traced_memory()
                tracemalloc.stop()
                self.stats.memory_bytes = peak

        self.stats.solutions_found = len(solutions)
        self.stats.solved = bool(solutions)
        return solutions

    @staticmethod
    def _dimensions_match(puzzle: TennerPuzzle, grid: Grid) -> bool:
        if len(grid) != puzzle.rows or puzzle.rows == 0:
            return False
        if any(len(row) != puzzle.columns for row in grid):
            return False
        return len(puzzle.target_sums) == puzzle.columns

    @abstractmethod
    def _search(self, puzzle: TennerPuzzle, grid: Grid, limit: int,
                exclude: Optional[Tuple[Tuple[int, int], int]] = None) -> List[SolvedGrid]:
        """
        Internal search to be implemented by subclasses.

        Args:
            puzzle: The puzzle definition.
            grid: A private copy of the grid to complete (can be modified).
            limit: Stop after this many solutions.
            exclude: Optional ((row, column), value) pair the cell may not take.

        Returns:
            Up to `limit` distinct completed grids.
        """
        pass

    def reset_stats(self) -> None:
        """Reset solver statistics."""
        self.stats = SolverStats(algorithm=self.name)
