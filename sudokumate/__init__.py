"""Constraint-propagation Sudoku solver with uniqueness checking and hints."""

from .core.board import SudokuBoard
from .solver import (
    ConstrainedProblem,
    SingleCandidateConstraint,
    Candidate,
    Constraint,
    SudokuProblem,
    NO_SOLUTION,
    SINGLE_SOLUTION,
    MANY_SOLUTIONS,
)
from .puzzle import Puzzle, SolutionStatus

__version__ = "1.0.0"

__all__ = [
    "SudokuBoard",
    "ConstrainedProblem",
    "SingleCandidateConstraint",
    "Candidate",
    "Constraint",
    "SudokuProblem",
    "NO_SOLUTION",
    "SINGLE_SOLUTION",
    "MANY_SOLUTIONS",
    "Puzzle",
    "SolutionStatus",
]
