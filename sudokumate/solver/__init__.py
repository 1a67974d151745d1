"""Generic constraint engine, and its Sudoku adapter."""

from .candidate import Candidate
from .constraint import Constraint, UNKNOWN_N_SOLUTIONS
from .single_candidate import SingleCandidateConstraint
from .problem import (
    ConstrainedProblem,
    Snapshot,
    SolveStats,
    NO_SOLUTION,
    SINGLE_SOLUTION,
    MANY_SOLUTIONS,
    describe_n_solutions,
)
from .errors import SolverError, GraphFrozenError, NoUniqueSolutionError
from .sudoku_problem import SudokuProblem, GridCandidate

__all__ = [
    "Candidate",
    "Constraint",
    "UNKNOWN_N_SOLUTIONS",
    "SingleCandidateConstraint",
    "ConstrainedProblem",
    "Snapshot",
    "SolveStats",
    "NO_SOLUTION",
    "SINGLE_SOLUTION",
    "MANY_SOLUTIONS",
    "describe_n_solutions",
    "SolverError",
    "GraphFrozenError",
    "NoUniqueSolutionError",
    "SudokuProblem",
    "GridCandidate",
]
