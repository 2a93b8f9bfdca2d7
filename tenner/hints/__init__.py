"""Hint module: live-grid overlay and hint engine."""

from .live_grid import LiveGrid
from .hint_engine import Hint, HintEngine, HintKind

__all__ = ["LiveGrid", "Hint", "HintEngine", "HintKind"]
