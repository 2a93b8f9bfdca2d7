"""Solvers module for Tenner Grid puzzles."""

from .base_solver import BaseSolver, SolverStats
from .backtracking_solver import PuzzleSolver

__all__ = [
    "BaseSolver",
    "SolverStats",
    "PuzzleSolver",
]
