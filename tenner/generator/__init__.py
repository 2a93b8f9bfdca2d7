"""Generator module for creating Tenner Grid puzzles."""

from ..core.difficulty import Difficulty
from .reducer import remove_cells
from .generator import (
    PuzzleGenerator,
    calculate_column_sums,
    generate_completed_grid,
    generate_daily_puzzle,
    generate_puzzle,
    seed_for_date,
)

__all__ = [
    "Difficulty",
    "PuzzleGenerator",
    "calculate_column_sums",
    "generate_completed_grid",
    "generate_daily_puzzle",
    "generate_puzzle",
    "remove_cells",
    "seed_for_date",
]
