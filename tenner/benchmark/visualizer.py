"""Visualization utilities for benchmark results."""

from __future__ import annotations
import os
from typing import List

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult


class Visualizer:
    """
    Chart generator for pipeline benchmark results.

    Creates charts comparing difficulties across timing, fill ratio and
    search effort.
    """

    # Pipeline stage colors
    COLORS = {
        "generate": "#2ecc71",  # Green
        "reduce": "#3498db",    # Blue
        "solve": "#e74c3c",     # Red
    }

    def __init__(self, results: List[BenchmarkResult], output_dir: str = "results"):
        """
        Initialize the visualizer.

        Args:
            results: List of benchmark results.
            output_dir: Directory to save generated charts.
        """
        self.results = [r for r in results if "error" not in r.extra]
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")

    def _save(self, fig, filename: str) -> str:
        fig.tight_layout()
        path = os.path.join(self.output_dir, filename)
        fig.savefig(path, dpi=150, bbox_inches="tight")
        plt.close(fig)
        return path

    def _difficulties(self) -> List[str]:
        # Keep benchmark order rather than alphabetical
        seen = []
        for r in self.results:
            if r.difficulty not in seen:
                seen.append(r.difficulty)
        return seen

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        if not self.results:
            return []
        return [
            self.plot_stage_times(),
            self.plot_fill_ratio(),
            self.plot_search_effort(),
        ]

    def plot_stage_times(self) -> str:
        """Grouped bar chart of average time per pipeline stage and difficulty."""
        fig, ax = plt.subplots(figsize=(10, 6))

        difficulties = self._difficulties()
        x = np.arange(len(difficulties))
        width = 0.8 / len(self.COLORS)

        for i, stage in enumerate(self.COLORS):
            times = [
                np.mean([getattr(r, f"{stage}_seconds") for r in self.results if r.difficulty == d])
                for d in difficulties
            ]
            offset = (i - len(self.COLORS) / 2 + 0.5) * width
            ax.bar(x + offset, times, width, label=stage.capitalize(),
                   color=self.COLORS[stage], edgecolor='black', linewidth=0.5)

        ax.set_xlabel('Difficulty', fontsize=12)
        ax.set_ylabel('Average Time (seconds)', fontsize=12)
        ax.set_title('Pipeline Stage Time by Difficulty', fontsize=14, fontweight='bold')
        ax.set_xticks(x)
        ax.set_xticklabels([d.capitalize() for d in difficulties])
        ax.legend(title='Stage')
        ax.set_ylim(bottom=0)

        return self._save(fig, "stage_times.png")

    def plot_fill_ratio(self) -> str:
        """Achieved pre-filled ratio against each difficulty's target."""
        fig, ax = plt.subplots(figsize=(10, 6))

        difficulties = self._difficulties()
        achieved = [
            [r.prefilled_ratio * 100 for r in self.results if r.difficulty == d]
            for d in difficulties
        ]
        targets = [
            next(r.target_ratio for r in self.results if r.difficulty == d) * 100
            for d in difficulties
        ]

        sns.boxplot(data=achieved, ax=ax, color="#9b59b6")
        ax.scatter(range(len(difficulties)), targets, marker='D', color='black',
                   zorder=3, label='Target')

        ax.set_xlabel('Difficulty', fontsize=12)
        ax.set_ylabel('Pre-filled Cells (%)', fontsize=12)
        ax.set_title('Achieved vs Target Fill Ratio', fontsize=14, fontweight='bold')
        ax.set_xticks(range(len(difficulties)))
        ax.set_xticklabels([d.capitalize() for d in difficulties])
        ax.set_ylim(0, 100)
        ax.legend()

        return self._save(fig, "fill_ratio.png")

    def plot_search_effort(self) -> str:
        """Distribution of solver nodes explored per difficulty (log scale)."""
        fig, ax = plt.subplots(figsize=(10, 6))

        difficulties = self._difficulties()
        nodes = [
            [max(r.nodes_explored, 1) for r in self.results if r.difficulty == d]
            for d in difficulties
        ]

        sns.stripplot(data=nodes, ax=ax, size=6, jitter=0.2)
        ax.set_yscale('log')

        ax.set_xlabel('Difficulty', fontsize=12)
        ax.set_ylabel('Nodes Explored (log scale)', fontsize=12)
        ax.set_title('Solver Search Effort by Difficulty', fontsize=14, fontweight='bold')
        ax.set_xticks(range(len(difficulties)))
        ax.set_xticklabels([d.capitalize() for d in difficulties])

        return self._save(fig, "search_effort.png")
