"""Command-line interface for the Sudoku constraint solver."""

import argparse
import json
import logging
import sys
from typing import List, Optional

from tqdm import tqdm

from .core.board import SudokuBoard
from .puzzle import Puzzle, SolutionStatus
from .solver import SudokuProblem


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Sudoku constraint solver: uniqueness checking and hints",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check how many solutions a puzzle has, and show it if unique
  python -m sudokumate.cli solve --puzzle "530070000600195000..."

  # A 6x6 puzzle with 2x3 boxes
  python -m sudokumate.cli solve --box-rows 2 --box-cols 3 --puzzle "..."

  # Ask for the next hint
  python -m sudokumate.cli hint --puzzle "530070000600195000..."

  # Classify every puzzle in a file, one per line
  python -m sudokumate.cli batch --input puzzles.txt --output results.json
        """
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level for solver diagnostics (default: WARNING)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Solve a Sudoku puzzle")
    _add_puzzle_arguments(solve_parser)
    solve_parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Show detailed solving statistics"
    )

    # Hint command
    hint_parser = subparsers.add_parser("hint", help="Get a hint for a Sudoku puzzle")
    _add_puzzle_arguments(hint_parser)

    # Batch command
    batch_parser = subparsers.add_parser("batch", help="Classify a file of puzzles")
    batch_parser.add_argument(
        "--input", "-i", type=str, required=True,
        help="Text file with one puzzle string per line"
    )
    batch_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Output file for results (JSON format)"
    )
    _add_box_arguments(batch_parser)

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "solve":
        return cmd_solve(args)
    elif args.command == "hint":
        return cmd_hint(args)
    elif args.command == "batch":
        return cmd_batch(args)
    return 1


def _add_box_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--box-rows", type=int, default=None,
        help="Rows per box (default: inferred for square boards)"
    )
    parser.add_argument(
        "--box-cols", type=int, default=None,
        help="Columns per box (default: inferred for square boards)"
    )


def _add_puzzle_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--puzzle", "-p", type=str, required=True,
        help="Puzzle string, row by row (0 or . for empty cells)"
    )
    _add_box_arguments(parser)


def configure_logging(level: str) -> None:
    """Send sudokumate log records at `level` or above to stderr."""
    logger = logging.getLogger("sudokumate")
    logger.setLevel(getattr(logging, level))
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
        ))
        logger.addHandler(handler)


def _parse_board(args) -> Optional[SudokuBoard]:
    try:
        return SudokuBoard.from_string(args.puzzle, args.box_rows, args.box_cols)
    except ValueError as e:
        print(f"Error parsing puzzle: {e}")
        return None


def cmd_solve(args) -> int:
    """Handle the solve command."""
    board = _parse_board(args)
    if board is None:
        return 1

    print("Input puzzle:")
    print(board)
    print()

    puzzle = Puzzle(board)
    status = puzzle.check_solutions()
    stats = puzzle.stats

    if status is SolutionStatus.SINGLE:
        print(f"✓ Unique solution found in {stats.time_seconds:.4f}s")
    elif status is SolutionStatus.NONE:
        print("✗ Puzzle has no solution")
    else:
        print("✗ Puzzle has more than one solution")

    if args.verbose:
        print(f"  Constraint applications: {stats.applications:,}")
        print(f"  Branches: {stats.branches:,}")
        print(f"  Max search depth: {stats.max_depth}")

    if puzzle.solution is not None:
        print(puzzle.solution)
    return 0


def cmd_hint(args) -> int:
    """Handle the hint command."""
    board = _parse_board(args)
    if board is None:
        return 1

    puzzle = Puzzle(board)
    status = puzzle.check_solutions()
    if status is not SolutionStatus.SINGLE:
        print(f"✗ Hints need a puzzle with a unique solution (solutions: {status.value})")
        return 1

    hint = puzzle.get_hint()
    if hint is None:
        print("No hint available")
        return 0

    print(hint)
    for row, col in hint.cells:
        print(f"  cell ({row}, {col})")
    for group in hint.groups:
        print(f"  {group}")
    return 0


def cmd_batch(args) -> int:
    """Handle the batch command."""
    try:
        with open(args.input, "r") as f:
            lines = [line.strip() for line in f]
    except OSError as e:
        print(f"Error reading puzzles: {e}")
        return 1
    puzzles = [line for line in lines if line and not line.startswith("#")]

    results = []
    counts = {status.value: 0 for status in SolutionStatus}
    counts["invalid"] = 0

    for index, puzzle_str in enumerate(tqdm(puzzles, desc="Puzzles"), 1):
        entry = {"index": index, "puzzle": puzzle_str}
        try:
            board = SudokuBoard.from_string(puzzle_str, args.box_rows, args.box_cols)
        except ValueError as e:
            entry["error"] = str(e)
            counts["invalid"] += 1
            results.append(entry)
            continue

        problem = SudokuProblem(board)
        status = SolutionStatus.from_n_solutions(problem.solve())
        entry["status"] = status.value
        entry["stats"] = problem.stats.to_dict()
        if status is SolutionStatus.SINGLE:
            entry["solution"] = problem.get_solution().to_string()
        counts[status.value] += 1
        results.append(entry)

    print(f"\nPuzzles classified: {len(results)}")
    for name, count in counts.items():
        print(f"  {name}: {count}")

    if args.output:
        with open(args.output, "w") as f:
            json.dump({"summary": counts, "results": results}, f, indent=2)
        print(f"\nResults saved to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
