"""Validation utilities for Sudoku puzzles."""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .board import SudokuBoard


def is_valid_placement(board: SudokuBoard, row: int, col: int, value: int) -> bool:
    """
    Check if placing a value at (row, col) is valid.

    Args:
        board: The Sudoku board.
        row: Row index.
        col: Column index.
        value: Value to check (1 to board.size).

    Returns:
        True if the placement is valid.
    """
    if value < 1 or value > board.size:
        return False

    if value in board.get_row(row):
        return False

    if value in board.get_col(col):
        return False

    if value in board.get_box(row, col):
        return False

    return True


def is_valid_board(board: SudokuBoard) -> bool:
    """
    Check if the entire board state is valid (no conflicts).

    Args:
        board: The Sudoku board to validate.

    Returns:
        True if no constraints are violated.
    """
    return board.is_valid()


def count_solutions(board: SudokuBoard) -> int:
    """
    Classify a puzzle by its number of solutions.

    Returns:
        NO_SOLUTION, SINGLE_SOLUTION or MANY_SOLUTIONS from the solver.
    """
    from ..solver.sudoku_problem import SudokuProblem

    return SudokuProblem(board).solve()


def has_unique_solution(board: SudokuBoard) -> bool:
    """
    Check if a puzzle has exactly one solution.

    Args:
        board: The puzzle board.

    Returns:
        True if the puzzle has exactly one solution.
    """
    from ..solver.problem import SINGLE_SOLUTION

    return count_solutions(board) == SINGLE_SOLUTION


def validate_solution(puzzle: SudokuBoard, solution: SudokuBoard) -> bool:
    """
    Validate that a solution correctly solves the puzzle.

    Args:
        puzzle: The original puzzle.
        solution: The proposed solution.

    Returns:
        True if solution is valid and matches puzzle clues.
    """
    if (puzzle.box_rows, puzzle.box_cols) != (solution.box_rows, solution.box_cols):
        return False

    clues = puzzle.grid != 0
    if (puzzle.grid[clues] != solution.grid[clues]).any():
        return False

    return solution.is_solved()
