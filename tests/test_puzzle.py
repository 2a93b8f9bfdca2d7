"""Unit tests for the puzzle bundle and difficulty table."""

import dataclasses

import pytest
from tenner.core.difficulty import DIFFICULTY_PROFILES, Difficulty
from tenner.core.puzzle import TennerPuzzle
from tenner.generator import generate_completed_grid, calculate_column_sums

SOLUTION = [[1, 2, 3], [4, 5, 6], [7, 8, 9]]
INITIAL = [[1, 2, None], [4, None, 6], [None, 8, 9]]


def full_width_puzzle(rows=3, seed=1):
    solution = generate_completed_grid(rows, seed=seed)
    initial = [row[:] for row in solution]
    initial[0][0] = None
    return TennerPuzzle(rows=rows, columns=10, target_sums=calculate_column_sums(solution),
                        initial_grid=initial, solution=solution, difficulty=Difficulty.HARD)


class TestDifficulty:
    """Tests for the difficulty table."""

    def test_ratios_decrease_with_difficulty(self):
        ratios = [d.prefilled_ratio for d in Difficulty]
        assert ratios == sorted(ratios, reverse=True)
        assert len(set(ratios)) == len(ratios)

    def test_every_level_has_a_profile(self):
        assert set(DIFFICULTY_PROFILES) == set(Difficulty)

    def test_profile_values(self):
        assert Difficulty.EASY.prefilled_ratio == 0.55
        assert Difficulty.EXTREME.row_range == (6, 10)
        assert Difficulty.HARD.profile.points == 50
        assert Difficulty.MEDIUM.display_name == "Medium"

    def test_parse(self):
        assert Difficulty.parse("Hard") is Difficulty.HARD
        assert Difficulty.parse(" easy ") is Difficulty.EASY
        with pytest.raises(ValueError, match="expected one of"):
            Difficulty.parse("expert")


class TestTennerPuzzle:
    """Tests for TennerPuzzle."""

    def test_counts(self):
        puzzle = TennerPuzzle(rows=3, columns=3, target_sums=[12, 15, 18],
                              initial_grid=INITIAL, solution=SOLUTION)
        assert puzzle.total_cells == 9
        assert puzzle.prefilled_count == 6
        assert puzzle.empty_cell_count == 3
        assert puzzle.prefilled_ratio == pytest.approx(6 / 9)
        assert puzzle.difficulty is Difficulty.MEDIUM

    def test_lookups(self):
        puzzle = TennerPuzzle(rows=3, columns=3, target_sums=[12, 15, 18],
                              initial_grid=INITIAL, solution=SOLUTION)
        assert puzzle.is_prefilled((0, 0))
        assert not puzzle.is_prefilled((1, 1))
        assert puzzle.initial_value((1, 1)) is None
        assert puzzle.solution_value((1, 1)) == 5
        assert puzzle.solution_value((3, 0)) is None
        assert not puzzle.is_valid_position((0, 3))

    def test_is_frozen(self):
        puzzle = TennerPuzzle(rows=3, columns=3, target_sums=[12, 15, 18],
                              initial_grid=INITIAL, solution=SOLUTION)
        with pytest.raises(dataclasses.FrozenInstanceError):
            puzzle.rows = 4

    def test_inputs_are_copied(self):
        initial = [row[:] for row in INITIAL]
        puzzle = TennerPuzzle(rows=3, columns=3, target_sums=[12, 15, 18],
                              initial_grid=initial, solution=SOLUTION)
        initial[1][1] = 5
        assert puzzle.initial_grid[1][1] is None

    def test_valid_full_width_puzzle(self):
        assert full_width_puzzle().is_valid()

    def test_narrow_puzzle_is_not_a_tenner_grid(self):
        puzzle = TennerPuzzle(rows=3, columns=3, target_sums=[12, 15, 18],
                              initial_grid=INITIAL, solution=SOLUTION)
        assert not puzzle.is_valid()

    def test_given_disagreeing_with_solution(self):
        puzzle = full_width_puzzle()
        initial = [row[:] for row in puzzle.initial_grid]
        initial[1][1] = (initial[1][1] + 1) % 10
        bad = dataclasses.replace(puzzle, initial_grid=initial)
        assert not bad.is_valid()

    def test_wrong_sums_length(self):
        puzzle = full_width_puzzle()
        assert not dataclasses.replace(puzzle, target_sums=puzzle.target_sums[:9]).is_valid()

    def test_too_many_rows(self):
        solution = generate_completed_grid(10, seed=1) + [list(range(10))]
        puzzle = TennerPuzzle(rows=11, columns=10, target_sums=calculate_column_sums(solution),
                              initial_grid=solution, solution=solution)
        assert not puzzle.is_valid()

    def test_to_dict(self):
        puzzle = full_width_puzzle()
        data = puzzle.to_dict()
        assert data["id"] == puzzle.id
        assert data["difficulty"] == "hard"
        assert data["prefilled"] == 29
        assert data["initial_grid"][0][0] is None
        assert data["target_sums"] == puzzle.target_sums

    def test_identity(self):
        a = full_width_puzzle()
        b = full_width_puzzle()
        assert a != b
        assert a == dataclasses.replace(a)
        assert len({a, b}) == 2

    def test_initial_board(self):
        board = full_width_puzzle().initial_board()
        assert board.rows == 3
        assert board.count_empty() == 1

    def test_str(self):
        assert "3x10" in str(full_width_puzzle())


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
