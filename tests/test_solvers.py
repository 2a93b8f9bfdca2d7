"""Unit tests for the Tenner Grid solver."""

import pytest
from tenner.core.puzzle import TennerPuzzle
from tenner.core.validator import is_puzzle_complete, is_valid_complete_grid
from tenner.generator import generate_puzzle, Difficulty
from tenner.solvers import PuzzleSolver

SOLUTION = [[1, 2, 3], [4, 5, 6], [7, 8, 9]]
INITIAL = [[1, 2, None], [4, None, 6], [None, 8, None]]


def make_puzzle(initial, sums, solution=SOLUTION):
    return TennerPuzzle(rows=len(initial), columns=len(initial[0]), target_sums=sums,
                        initial_grid=initial, solution=solution)


@pytest.fixture
def unique_puzzle():
    """The 3x3 puzzle whose only completion is 1..9 in row order."""
    return make_puzzle([[1, 2, None], [4, None, 6], [None, 8, 9]], [12, 15, 18])


@pytest.fixture
def open_puzzle():
    """An all-empty 3x3 puzzle with loose sums and many completions."""
    solution = [[9, 3, 0], [4, 8, 1], [7, 9, 4]]
    return make_puzzle([[None] * 3 for _ in range(3)], [20, 20, 5], solution)


class TestPuzzleSolver:
    """Tests for PuzzleSolver."""

    def test_solves_unique_puzzle(self, unique_puzzle):
        """Test the solver finds the single completion."""
        solver = PuzzleSolver()
        assert solver.solve(unique_puzzle) == SOLUTION
        assert solver.has_unique_solution(unique_puzzle)

    def test_loose_sums_are_not_unique(self, open_puzzle):
        solver = PuzzleSolver()
        assert not solver.has_unique_solution(open_puzzle)
        assert solver.count_solutions(open_puzzle, limit=2) == 2

    def test_solution_satisfies_constraints(self, open_puzzle):
        solution = PuzzleSolver().solve(open_puzzle)
        assert solution is not None
        assert is_valid_complete_grid(solution)
        assert is_puzzle_complete(solution, open_puzzle)

    def test_count_stops_at_limit(self, open_puzzle):
        solver = PuzzleSolver()
        assert solver.count_solutions(open_puzzle, limit=5) == 5
        assert solver.stats.solutions_found == 5

    def test_stats_are_recorded(self, unique_puzzle):
        solver = PuzzleSolver()
        solver.solve(unique_puzzle)
        stats = solver.stats
        assert stats.solved
        assert stats.nodes_explored > 0
        assert stats.time_seconds >= 0
        assert stats.algorithm == "Backtracking+Propagation"
        assert stats.to_dict()["solutions_found"] == 1

    def test_dimension_mismatch(self, unique_puzzle):
        """Test that a grid of the wrong shape is rejected before searching."""
        solver = PuzzleSolver()
        short = [[1, 2, None], [4, None, 6]]
        assert solver.solve(unique_puzzle, short) is None
        assert not solver.has_unique_solution(unique_puzzle, short)
        assert solver.stats.extra["error"] == "dimension mismatch"

        ragged = [[1, 2, None], [4, None], [None, 8, 9]]
        assert not solver.has_unique_solution(unique_puzzle, ragged)

    def test_sums_length_mismatch(self):
        puzzle = make_puzzle(INITIAL, [12, 15])
        assert PuzzleSolver().solve(puzzle) is None

    def test_conflicting_givens(self):
        puzzle = make_puzzle([[1, 1, None], [None, None, None], [None, None, None]], [12, 15, 18])
        assert PuzzleSolver().solve(puzzle) is None

    def test_unreachable_sums(self):
        puzzle = make_puzzle([[None] * 3 for _ in range(3)], [28, 15, 18])
        assert PuzzleSolver().solve(puzzle) is None

    def test_initial_grid_override(self, unique_puzzle):
        """Test solving a different partial grid against the same sums."""
        solver = PuzzleSolver()
        assert solver.solve(unique_puzzle, INITIAL) == SOLUTION
        # The puzzle's own grid is untouched
        assert unique_puzzle.initial_grid[2][2] == 9

    def test_does_not_mutate_input(self):
        grid = [row[:] for row in INITIAL]
        PuzzleSolver().solve(make_puzzle(grid, [12, 15, 18]), grid)
        assert grid == INITIAL

    def test_complete_grid(self):
        puzzle = make_puzzle(SOLUTION, [12, 15, 18])
        solver = PuzzleSolver()
        assert solver.solve(puzzle) == SOLUTION
        assert solver.has_unique_solution(puzzle)

    def test_complete_grid_with_wrong_sums(self):
        puzzle = make_puzzle(SOLUTION, [12, 15, 17])
        assert PuzzleSolver().solve(puzzle) is None

    def test_without_propagation(self, unique_puzzle, open_puzzle):
        solver = PuzzleSolver(use_propagation=False)
        assert solver.solve(unique_puzzle) == SOLUTION
        assert not solver.has_unique_solution(open_puzzle)

    def test_propagation_does_not_change_counts(self, open_puzzle):
        """Test both modes agree on the number of completions."""
        plain = PuzzleSolver(use_propagation=False)
        propagated = PuzzleSolver()
        assert propagated.count_solutions(open_puzzle, limit=50) == plain.count_solutions(open_puzzle, limit=50)

    def test_zero_limit(self, open_puzzle):
        solver = PuzzleSolver()
        assert solver.count_solutions(open_puzzle, limit=0) == 0
        assert solver.count_solutions(open_puzzle, limit=-1) == 0
        assert not solver.stats.solved

    def test_find_other_solution_on_unique_grid(self, unique_puzzle):
        """Test no completion avoids the value of the single solution."""
        solver = PuzzleSolver()
        assert solver.find_other_solution(unique_puzzle, (1, 1), 5) is None
        assert solver.find_other_solution(unique_puzzle, (1, 1), 4) == SOLUTION

    def test_find_other_solution_on_open_grid(self, open_puzzle):
        solution = PuzzleSolver().find_other_solution(open_puzzle, (0, 0), 9)
        assert solution is not None
        assert solution[0][0] != 9
        assert is_puzzle_complete(solution, open_puzzle)

    def test_find_other_solution_excluding_given(self, unique_puzzle):
        assert PuzzleSolver().find_other_solution(unique_puzzle, (0, 0), 1) is None

    def test_solves_full_width_hard_puzzle(self):
        """Test a 10x10 grid with most cells blank is solved and checked for uniqueness."""
        puzzle = generate_puzzle(10, Difficulty.EXTREME, seed=3)
        solver = PuzzleSolver()
        assert solver.solve(puzzle) == puzzle.solution
        assert solver.has_unique_solution(puzzle)

    def test_track_memory(self, unique_puzzle):
        solver = PuzzleSolver(track_memory=True)
        solver.solve(unique_puzzle)
        assert solver.stats.memory_bytes > 0

    def test_solves_generated_puzzle(self):
        """Test solving a generated full-width puzzle from its initial grid."""
        puzzle = generate_puzzle(4, Difficulty.MEDIUM, seed=11)
        solver = PuzzleSolver()
        assert solver.solve(puzzle) == puzzle.solution
        assert solver.has_unique_solution(puzzle)

    def test_reset_stats(self, unique_puzzle):
        solver = PuzzleSolver()
        solver.solve(unique_puzzle)
        solver.reset_stats()
        assert solver.stats.nodes_explored == 0
        assert not solver.stats.solved


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
