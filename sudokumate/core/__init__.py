"""Core module for Sudoku board representation and validation."""

from .board import SudokuBoard, CellGroup, GroupKind
from .validator import (
    is_valid_placement,
    is_valid_board,
    count_solutions,
    has_unique_solution,
    validate_solution,
)

__all__ = [
    "SudokuBoard",
    "CellGroup",
    "GroupKind",
    "is_valid_placement",
    "is_valid_board",
    "count_solutions",
    "has_unique_solution",
    "validate_solution",
]
