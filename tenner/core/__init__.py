"""Core module for Tenner Grid board representation and validation."""

from .board import (
    COLUMNS, MAX_COLUMNS, MAX_ROWS, MAX_VALUE, MIN_COLUMNS, MIN_ROWS, MIN_VALUE,
    CellPosition, Grid, SolvedGrid, TennerBoard,
)
from .difficulty import Difficulty, DifficultyProfile, DIFFICULTY_PROFILES
from .puzzle import TennerPuzzle
from .validator import (
    is_valid_placement, possible_values, detect_conflicts, conflicting_cells,
    is_column_sum_valid, is_puzzle_complete, is_valid_complete_grid,
)

__all__ = [
    "COLUMNS", "MAX_COLUMNS", "MAX_ROWS", "MAX_VALUE", "MIN_COLUMNS", "MIN_ROWS", "MIN_VALUE",
    "CellPosition", "Grid", "SolvedGrid", "TennerBoard",
    "Difficulty", "DifficultyProfile", "DIFFICULTY_PROFILES",
    "TennerPuzzle",
    "is_valid_placement", "possible_values", "detect_conflicts", "conflicting_cells",
    "is_column_sum_valid", "is_puzzle_complete", "is_valid_complete_grid",
]
