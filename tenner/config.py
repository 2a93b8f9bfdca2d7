"""
Engine configuration.

Values come from the dataclass defaults, optionally a JSON file, and
finally environment variables (TENNER_LOG_LEVEL, TENNER_DEFAULT_ROWS).
"""

from __future__ import annotations
import json
import logging
import os
from dataclasses import dataclass, field, fields
from typing import Dict, Optional

from .core.board import MAX_ROWS, MIN_ROWS
from .core.difficulty import Difficulty


@dataclass
class EngineConfig:
    """Configuration for puzzle generation and the command-line tools."""

    # Puzzle defaults
    default_rows: int = 5
    default_difficulty: str = "medium"

    # Per-difficulty override of the pre-filled cell ratio, e.g. {"hard": 0.4}
    prefilled_ratios: Dict[str, float] = field(default_factory=dict)

    # Logging
    log_level: str = "WARNING"

    # Benchmark
    benchmark_timeout_seconds: float = 60.0

    def __post_init__(self):
        env_level = os.getenv("TENNER_LOG_LEVEL")
        if env_level:
            self.log_level = env_level
        env_rows = os.getenv("TENNER_DEFAULT_ROWS")
        if env_rows:
            self.default_rows = int(env_rows)
        self.validate()

    def validate(self) -> None:
        """Raise ValueError for settings the engine cannot honour."""
        if not MIN_ROWS <= self.default_rows <= MAX_ROWS:
            raise ValueError(f"default_rows must be {MIN_ROWS}-{MAX_ROWS}, got {self.default_rows}")
        Difficulty.parse(self.default_difficulty)
        for name, ratio in self.prefilled_ratios.items():
            Difficulty.parse(name)
            if not 0.0 <= ratio <= 1.0:
                raise ValueError(f"prefilled ratio for {name!r} must be within 0-1, got {ratio}")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level {self.log_level!r}")

    @property
    def difficulty(self) -> Difficulty:
        return Difficulty.parse(self.default_difficulty)

    def prefilled_ratio(self, difficulty: Difficulty) -> float:
        """Effective fill ratio for a difficulty, honouring overrides."""
        for name, ratio in self.prefilled_ratios.items():
            if Difficulty.parse(name) is difficulty:
                return ratio
        return difficulty.prefilled_ratio

    @classmethod
    def from_file(cls, path: str) -> EngineConfig:
        """
        Load configuration from a JSON file.

        Unknown keys are rejected so typos do not silently fall back to defaults.
        """
        with open(path, "r") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a JSON object")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys in {path}: {', '.join(unknown)}")
        return cls(**data)


def load_config(path: Optional[str] = None) -> EngineConfig:
    """Configuration from `path` if given, otherwise defaults plus environment."""
    if path:
        return EngineConfig.from_file(path)
    return EngineConfig()


def configure_logging(level: str = "WARNING") -> None:
    """Set up root logging for command-line use. Library code never calls this."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
