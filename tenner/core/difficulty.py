"""Difficulty levels and their configuration table."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


@dataclass(frozen=True)
class DifficultyProfile:
    """Business rules attached to a difficulty level."""
    prefilled_ratio: float
    min_rows: int
    max_rows: int
    estimated_minutes: int
    points: int


class Difficulty(Enum):
    """Difficulty levels for Tenner Grid puzzles."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXTREME = "extreme"

    @property
    def profile(self) -> DifficultyProfile:
        return DIFFICULTY_PROFILES[self]

    @property
    def prefilled_ratio(self) -> float:
        """Fraction of cells (0.0 to 1.0) left pre-filled in a puzzle."""
        return self.profile.prefilled_ratio

    @property
    def row_range(self) -> Tuple[int, int]:
        """Recommended (min, max) number of rows for this difficulty."""
        return self.profile.min_rows, self.profile.max_rows

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, name: str) -> Difficulty:
        """Look up a difficulty by name, case-insensitively."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            choices = ", ".join(d.value for d in cls)
            raise ValueError(f"Unknown difficulty {name!r} (expected one of: {choices})")


# Ordered by descending prefilled ratio as difficulty increases
DIFFICULTY_PROFILES: Dict[Difficulty, DifficultyProfile] = {
    Difficulty.EASY: DifficultyProfile(0.55, 3, 5, 5, 10),
    Difficulty.MEDIUM: DifficultyProfile(0.45, 4, 7, 10, 25),
    Difficulty.HARD: DifficultyProfile(0.35, 5, 10, 20, 50),
    Difficulty.EXTREME: DifficultyProfile(0.25, 6, 10, 30, 100),
}
