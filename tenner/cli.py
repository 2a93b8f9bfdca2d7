"""Command-line interface for the Tenner Grid engine."""

import argparse
import sys
import json
from datetime import date
from typing import List, Optional, Tuple

from .config import EngineConfig, configure_logging, load_config
from .core.board import TennerBoard
from .core.difficulty import Difficulty
from .core.puzzle import TennerPuzzle
from .generator import PuzzleGenerator, generate_daily_puzzle
from .hints import HintEngine, HintKind, LiveGrid
from .solvers import PuzzleSolver

DIFFICULTY_CHOICES = [d.value for d in Difficulty]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tenner",
        description="Tenner Grid Puzzle Generator, Solver & Hint Engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate 3 hard puzzles with 6 rows
  tenner generate --rows 6 --difficulty hard --count 3

  # Today's daily puzzle
  tenner generate --daily today

  # Solve a puzzle ('.' = empty, '/' separates rows)
  tenner solve --puzzle "12./4.6/.89" --sums 12,15,18 --check-unique

  # Ask for a hint
  tenner hint --puzzle "01234/56789/12345/678.0" --sums 12,16,20,24,18
        """
    )
    parser.add_argument(
        "--config", "-c", type=str, default=None,
        help="JSON configuration file"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate command
    gen_parser = subparsers.add_parser("generate", help="Generate Tenner Grid puzzles")
    gen_parser.add_argument(
        "--rows", "-r", type=int, default=None,
        help="Number of rows, 3-10 (default: from config, 5)"
    )
    gen_parser.add_argument(
        "--difficulty", "-d", choices=DIFFICULTY_CHOICES + ["all"], default=None,
        help="Difficulty level (default: from config, medium)"
    )
    gen_parser.add_argument(
        "--count", "-n", type=int, default=1,
        help="Number of puzzles to generate (default: 1)"
    )
    gen_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )
    gen_parser.add_argument(
        "--daily", type=str, default=None, metavar="DATE",
        help="Generate the daily puzzle for DATE (YYYY-MM-DD or 'today')"
    )
    gen_parser.add_argument(
        "--json", action="store_true",
        help="Print puzzles as JSON instead of grids"
    )

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Solve a Tenner Grid puzzle")
    _add_puzzle_arguments(solve_parser)
    solve_parser.add_argument(
        "--check-unique", action="store_true",
        help="Also report whether the solution is unique"
    )

    # Hint command
    hint_parser = subparsers.add_parser("hint", help="Get a hint for a partially filled grid")
    _add_puzzle_arguments(hint_parser)
    hint_parser.add_argument(
        "--select", type=str, default=None, metavar="ROW,COL",
        help="Selected cell, e.g. 2,3"
    )

    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", help="Time generation and solving")
    bench_parser.add_argument(
        "--rows", "-r", type=int, default=None,
        help="Number of rows (default: from config, 5)"
    )
    bench_parser.add_argument(
        "--puzzles", "-n", type=int, default=5,
        help="Puzzles per difficulty (default: 5)"
    )
    bench_parser.add_argument(
        "--difficulty", "-d", choices=DIFFICULTY_CHOICES + ["all"], default="all",
        help="Difficulty to benchmark (default: all)"
    )
    bench_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    bench_parser.add_argument(
        "--seed", "-s", type=int, default=42,
        help="Random seed for reproducibility (default: 42)"
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )

    return parser


def _add_puzzle_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--puzzle", "-p", type=str, required=True,
        help="Grid string: digits, '.' for empty cells, '/' between rows"
    )
    parser.add_argument(
        "--sums", type=str, required=True,
        help="Comma-separated column target sums"
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"Error loading config: {e}")
        return 1

    configure_logging("DEBUG" if args.verbose else config.log_level)

    commands = {
        "generate": cmd_generate,
        "solve": cmd_solve,
        "hint": cmd_hint,
        "benchmark": cmd_benchmark,
    }
    return commands[args.command](args, config)


def _difficulties(name: Optional[str], config: EngineConfig) -> List[Difficulty]:
    if name == "all":
        return list(Difficulty)
    if name is None:
        return [config.difficulty]
    return [Difficulty(name)]


def _parse_puzzle(args) -> Optional[TennerPuzzle]:
    """Build a puzzle from --puzzle/--sums, solving it for its solution."""
    try:
        board = TennerBoard.from_string(args.puzzle)
        sums = [int(s) for s in args.sums.split(",")]
    except ValueError as e:
        print(f"Error parsing puzzle: {e}")
        return None

    if len(sums) != board.columns:
        print(f"Error parsing puzzle: expected {board.columns} sums, got {len(sums)}")
        return None

    grid = board.to_grid()
    unsolved = TennerPuzzle(rows=board.rows, columns=board.columns, target_sums=sums,
                            initial_grid=grid, solution=grid)
    solution = PuzzleSolver().solve(unsolved)
    if solution is None:
        print("✗ Puzzle has no solution")
        return None

    return TennerPuzzle(rows=board.rows, columns=board.columns, target_sums=sums,
                        initial_grid=grid, solution=solution)


def _parse_selection(text: str, puzzle: TennerPuzzle) -> Optional[Tuple[int, int]]:
    """Parse a 'ROW,COL' selection inside the puzzle, printing an error otherwise."""
    try:
        values = [int(v) for v in text.split(",")]
    except ValueError:
        values = []
    if len(values) != 2:
        print(f"Error parsing selection {text!r}: expected ROW,COL")
        return None

    row, column = values
    if not (0 <= row < puzzle.rows and 0 <= column < puzzle.columns):
        print(f"Error: selection ({row}, {column}) is outside the "
              f"{puzzle.rows}x{puzzle.columns} grid")
        return None
    return row, column


def cmd_generate(args, config: EngineConfig) -> int:
    """Handle the generate command."""
    if args.daily:
        try:
            day = date.today() if args.daily == "today" else date.fromisoformat(args.daily)
        except ValueError as e:
            print(f"Error parsing date: {e}")
            return 1
        puzzles = [generate_daily_puzzle(day)]
    else:
        rows = args.rows or config.default_rows
        try:
            generator = PuzzleGenerator(rows=rows, seed=args.seed)
        except ValueError as e:
            print(f"Error: {e}")
            return 1

        puzzles = []
        for difficulty in _difficulties(args.difficulty, config):
            if not args.json:
                print(f"\nGenerating {args.count} {difficulty.value} puzzle(s) with {rows} rows...")
            puzzles.extend(generator.generate_batch(
                args.count, difficulty, prefilled_ratio=config.prefilled_ratio(difficulty)))

    if args.json:
        print(json.dumps([p.to_dict() for p in puzzles], indent=2))
        return 0

    for i, puzzle in enumerate(puzzles, 1):
        print(f"\n--- Puzzle {i}: {puzzle} ---")
        print(puzzle.initial_board().render(puzzle.target_sums))
        print(f"String: {puzzle.initial_board().to_string()}")

    print(f"\nTotal puzzles generated: {len(puzzles)}")
    return 0


def cmd_solve(args, config: EngineConfig) -> int:
    """Handle the solve command."""
    puzzle = _parse_puzzle(args)
    if puzzle is None:
        return 1

    print("Input puzzle:")
    print(puzzle.initial_board().render(puzzle.target_sums))
    print()

    solver = PuzzleSolver()
    solution = solver.solve(puzzle)
    stats = solver.stats
    print(f"✓ Solved in {stats.time_seconds:.4f}s")
    if args.verbose:
        print(f"  Nodes explored: {stats.nodes_explored:,}")
        print(f"  Backtracks: {stats.backtracks:,}")
    print(TennerBoard.from_grid(solution).render(puzzle.target_sums))

    if args.check_unique:
        unique = solver.has_unique_solution(puzzle)
        print(f"Unique solution: {'yes' if unique else 'no'}")
    return 0


def cmd_hint(args, config: EngineConfig) -> int:
    """Handle the hint command."""
    puzzle = _parse_puzzle(args)
    if puzzle is None:
        return 1

    selected = None
    if args.select:
        selected = _parse_selection(args.select, puzzle)
        if selected is None:
            return 1

    live = LiveGrid(puzzle, selected=selected)
    engine = HintEngine()
    hint = engine.provide_hint(live)

    if hint is None:
        if live.is_completed:
            print("No hint available: the puzzle is already complete.")
        else:
            print("No hint available: no empty cell has a legal value left.")
    elif hint.kind is HintKind.LOGICAL_MOVE:
        print(f"Logical move: cell {hint.position} must be {hint.value}")
    else:
        values = ", ".join(str(v) for v in sorted(hint.values))
        print(f"Possible values for cell {hint.position}: {values}")

    print(f"Estimated difficulty: {engine.estimate_difficulty(live):.2f}")
    return 0


def cmd_benchmark(args, config: EngineConfig) -> int:
    """Handle the benchmark command."""
    from .benchmark import Benchmark, Visualizer

    difficulties = _difficulties(args.difficulty, config)
    rows = args.rows or config.default_rows

    print("=" * 60)
    print("TENNER GRID PIPELINE BENCHMARK")
    print("=" * 60)
    print(f"Rows: {rows}")
    print(f"Puzzles per difficulty: {args.puzzles}")
    print(f"Difficulties: {[d.value for d in difficulties]}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    benchmark = Benchmark(
        rows=rows,
        puzzles_per_difficulty=args.puzzles,
        difficulties=difficulties,
        timeout_seconds=config.benchmark_timeout_seconds,
        seed=args.seed,
        prefilled_ratios={d: config.prefilled_ratio(d) for d in difficulties},
    )
    results = benchmark.run()
    summary = benchmark.get_summary()

    print("\n" + "=" * 60)
    print("RESULTS SUMMARY")
    print("=" * 60)
    for difficulty, stats in summary["results_by_difficulty"].items():
        print(f"\n{difficulty}:")
        print(f"  Unique: {stats['unique_rate']:.1f}% ({stats['runs'] - stats['failures']}/{stats['runs']} ok)")
        print(f"  Avg Generate: {stats['avg_generate_seconds']:.4f}s")
        print(f"  Avg Reduce: {stats['avg_reduce_seconds']:.4f}s")
        print(f"  Avg Solve: {stats['avg_solve_seconds']:.4f}s")
        print(f"  Fill ratio: {stats['avg_prefilled_ratio'] * 100:.1f}% "
              f"(target {stats['target_ratio'] * 100:.0f}%)")

    benchmark.save_results(args.output)

    if not args.no_charts:
        print("\nGenerating charts...")
        charts = Visualizer(results, args.output).generate_all()
        for chart in charts:
            print(f"  - {chart.split('/')[-1]}")

    print("\n" + "=" * 60)
    print("Benchmark complete!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
