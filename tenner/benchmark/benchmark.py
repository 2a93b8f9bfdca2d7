"""Benchmarking framework for the puzzle pipeline: generate, reduce, solve."""

from __future__ import annotations
import time
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
from concurrent.futures import ThreadPoolExecutor, TimeoutError
import json
import logging
import os

import numpy as np
from tqdm import tqdm

from ..core.board import COLUMNS
from ..core.difficulty import Difficulty
from ..core.puzzle import TennerPuzzle
from ..generator import calculate_column_sums, generate_completed_grid, remove_cells
from ..solvers import PuzzleSolver

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Results from a single pipeline run."""
    puzzle_id: int
    difficulty: str
    rows: int
    seed: int
    completed: bool
    generate_seconds: float
    reduce_seconds: float
    solve_seconds: float
    unique: bool
    target_ratio: float
    prefilled_ratio: float
    nodes_explored: int
    backtracks: int
    memory_bytes: int
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle_id": self.puzzle_id,
            "difficulty": self.difficulty,
            "rows": self.rows,
            "seed": self.seed,
            "completed": self.completed,
            "generate_seconds": self.generate_seconds,
            "reduce_seconds": self.reduce_seconds,
            "solve_seconds": self.solve_seconds,
            "unique": self.unique,
            "target_ratio": self.target_ratio,
            "prefilled_ratio": self.prefilled_ratio,
            "nodes_explored": self.nodes_explored,
            "backtracks": self.backtracks,
            "memory_mb": self.memory_bytes / (1024 * 1024),
            **self.extra
        }


class Benchmark:
    """
    Times the puzzle pipeline for each difficulty.

    Every run generates a completed grid, removes cells, then solves the
    resulting puzzle from scratch and re-checks its uniqueness.
    """

    def __init__(
        self,
        rows: int = 5,
        puzzles_per_difficulty: int = 5,
        difficulties: Optional[List[Difficulty]] = None,
        timeout_seconds: float = 60.0,
        seed: int = 42,
        prefilled_ratios: Optional[Dict[Difficulty, float]] = None,
    ):
        """
        Initialize the benchmark.

        Args:
            rows: Grid height used for every puzzle.
            puzzles_per_difficulty: Number of pipeline runs per difficulty.
            difficulties: Difficulties to test (default: all).
            timeout_seconds: Maximum time per run.
            seed: Base seed; run i of a difficulty uses seed + i.
            prefilled_ratios: Optional per-difficulty fill ratio overrides.
        """
        self.rows = rows
        self.puzzles_per_difficulty = puzzles_per_difficulty
        self.difficulties = difficulties or list(Difficulty)
        self.timeout_seconds = timeout_seconds
        self.seed = seed
        self.prefilled_ratios = prefilled_ratios or {}
        self.results: List[BenchmarkResult] = []

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Run the full benchmark suite.

        Returns:
            List of BenchmarkResult objects.
        """
        self.results = []
        total_runs = len(self.difficulties) * self.puzzles_per_difficulty
        pbar = tqdm(total=total_runs, desc="Benchmarking", disable=not show_progress)

        for difficulty in self.difficulties:
            for puzzle_id in range(self.puzzles_per_difficulty):
                result = self._run_single(puzzle_id, difficulty, self.seed + puzzle_id)
                self.results.append(result)
                pbar.update(1)

        pbar.close()
        return self.results

    def _run_single(self, puzzle_id: int, difficulty: Difficulty, seed: int) -> BenchmarkResult:
        """
        Run the pipeline once, bounded by the timeout.

        A timed-out run is recorded as failed straight away. Its worker
        thread cannot be interrupted and finishes in the background, but the
        benchmark does not wait for it.
        """
        target_ratio = self.prefilled_ratios.get(difficulty, difficulty.prefilled_ratio)

        executor = ThreadPoolExecutor(max_workers=1)
        future = executor.submit(self._pipeline, puzzle_id, difficulty, seed, target_ratio)
        try:
            return future.result(timeout=self.timeout_seconds)
        except TimeoutError:
            logger.warning("Run %d (%s) timed out after %.1fs",
                           puzzle_id, difficulty.value, self.timeout_seconds)
            return self._failed(puzzle_id, difficulty, seed, target_ratio, "Timeout")
        except Exception as e:
            logger.error("Run %d (%s) failed: %s", puzzle_id, difficulty.value, e)
            return self._failed(puzzle_id, difficulty, seed, target_ratio, str(e))
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

    def _pipeline(self, puzzle_id: int, difficulty: Difficulty, seed: int,
                  target_ratio: float) -> BenchmarkResult:
        start = time.perf_counter()
        solution = generate_completed_grid(self.rows, COLUMNS, seed)
        generate_seconds = time.perf_counter() - start
        if solution is None:
            return self._failed(puzzle_id, difficulty, seed, target_ratio,
                                f"Unsupported row count {self.rows}")

        target_sums = calculate_column_sums(solution)
        start = time.perf_counter()
        initial_grid = remove_cells(solution, target_sums, difficulty, seed=seed,
                                    prefilled_ratio=target_ratio)
        reduce_seconds = time.perf_counter() - start

        puzzle = TennerPuzzle(
            rows=self.rows, columns=COLUMNS, target_sums=target_sums,
            initial_grid=initial_grid, solution=solution, difficulty=difficulty,
        )

        solver = PuzzleSolver(track_memory=True)
        solved = solver.solve(puzzle)
        stats = solver.stats
        unique = PuzzleSolver().has_unique_solution(puzzle)

        return BenchmarkResult(
            puzzle_id=puzzle_id,
            difficulty=difficulty.value,
            rows=self.rows,
            seed=seed,
            completed=solved == solution,
            generate_seconds=generate_seconds,
            reduce_seconds=reduce_seconds,
            solve_seconds=stats.time_seconds,
            unique=unique,
            target_ratio=target_ratio,
            prefilled_ratio=puzzle.prefilled_ratio,
            nodes_explored=stats.nodes_explored,
            backtracks=stats.backtracks,
            memory_bytes=stats.memory_bytes,
        )

    def _failed(self, puzzle_id: int, difficulty: Difficulty, seed: int,
                target_ratio: float, error: str) -> BenchmarkResult:
        return BenchmarkResult(
            puzzle_id=puzzle_id,
            difficulty=difficulty.value,
            rows=self.rows,
            seed=seed,
            completed=False,
            generate_seconds=0.0,
            reduce_seconds=0.0,
            solve_seconds=0.0,
            unique=False,
            target_ratio=target_ratio,
            prefilled_ratio=0.0,
            nodes_explored=0,
            backtracks=0,
            memory_bytes=0,
            extra={"error": error},
        )

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics from benchmark results."""
        summary = {
            "rows": self.rows,
            "total_runs": len(self.results),
            "difficulties": [d.value for d in self.difficulties],
            "results_by_difficulty": {},
        }

        for difficulty in self.difficulties:
            runs = [r for r in self.results if r.difficulty == difficulty.value]
            if not runs:
                continue
            ok = [r for r in runs if "error" not in r.extra]
            summary["results_by_difficulty"][difficulty.value] = {
                "runs": len(runs),
                "failures": len(runs) - len(ok),
                "unique_rate": sum(1 for r in runs if r.unique) / len(runs) * 100,
                "avg_generate_seconds": _mean([r.generate_seconds for r in ok]),
                "avg_reduce_seconds": _mean([r.reduce_seconds for r in ok]),
                "avg_solve_seconds": _mean([r.solve_seconds for r in ok]),
                "max_solve_seconds": max((r.solve_seconds for r in ok), default=0.0),
                "avg_prefilled_ratio": _mean([r.prefilled_ratio for r in ok]),
                "target_ratio": runs[0].target_ratio,
                "avg_nodes_explored": _mean([r.nodes_explored for r in ok]),
            }

        return summary

    def save_results(self, output_dir: str) -> List[str]:
        """Save raw results and the summary as JSON. Returns the file paths."""
        os.makedirs(output_dir, exist_ok=True)

        results_file = os.path.join(output_dir, "benchmark_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        logger.info("Benchmark results saved to %s", output_dir)
        return [results_file, summary_file]


def _mean(values: List[float]) -> float:
    return float(np.mean(values)) if values else 0.0
