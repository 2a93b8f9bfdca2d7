"""Tenner Grid puzzle engine: generation, solving, validation and hints."""

from .core import (
    CellPosition, Difficulty, TennerBoard, TennerPuzzle,
    is_valid_placement, possible_values, detect_conflicts,
    is_column_sum_valid, is_puzzle_complete,
)
from .generator import (
    PuzzleGenerator, calculate_column_sums, generate_completed_grid,
    generate_daily_puzzle, generate_puzzle, remove_cells,
)
from .hints import Hint, HintEngine, HintKind, LiveGrid
from .solvers import PuzzleSolver
from .config import EngineConfig, load_config

__version__ = "1.0.0"

__all__ = [
    "CellPosition", "Difficulty", "TennerBoard", "TennerPuzzle",
    "is_valid_placement", "possible_values", "detect_conflicts",
    "is_column_sum_valid", "is_puzzle_complete",
    "PuzzleGenerator", "calculate_column_sums", "generate_completed_grid",
    "generate_daily_puzzle", "generate_puzzle", "remove_cells",
    "Hint", "HintEngine", "HintKind", "LiveGrid",
    "PuzzleSolver",
    "EngineConfig", "load_config",
]
