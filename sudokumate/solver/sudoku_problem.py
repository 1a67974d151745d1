"""Translation of a Sudoku board into a constrained problem and back."""

from __future__ import annotations
import logging
from typing import List

import numpy as np

from .candidate import Candidate
from .constraint import Constraint
from .problem import ConstrainedProblem, SolveStats
from .single_candidate import SingleCandidateConstraint
from ..core.board import SudokuBoard

logger = logging.getLogger(__name__)


class GridCandidate(Candidate):
    """Placing `value` in the cell at (row, col)."""

    __slots__ = ("row", "col", "value")

    def __init__(self, row: int, col: int, value: int):
        super().__init__(f"Row: {row}, Col: {col}, Val: {value}")
        self.row = row
        self.col = col
        self.value = value


class SudokuProblem:
    """
    Solves a Sudoku board as a generic constrained problem.

    Candidates are every (row, column, value) combination: 729 of them on
    a standard 9x9 grid. SingleCandidateConstraints then express that:

    - each cell holds exactly one value,
    - each row holds each value exactly once,
    - each column holds each value exactly once,
    - each box holds each value exactly once.

    Total: 324 constraints on a 9x9 grid. Filled cells become givens.
    """

    def __init__(self, board: SudokuBoard):
        """
        Build the constrained problem for a board.

        Args:
            board: The puzzle. It is copied, not modified.
        """
        self.board = board.copy()
        self.size = board.size

        self._candidates = self._init_candidates()
        self.constraints: List[Constraint] = self._init_constraints()
        self.givens = self._init_givens()
        logger.debug(
            "Building %dx%d Sudoku problem (%dx%d boxes, %d givens)",
            self.size, self.size, board.box_rows, board.box_cols, len(self.givens)
        )
        self.problem = ConstrainedProblem(
            self._candidates.flatten().tolist(),
            self.constraints,
            self.givens,
            label="Sudoku"
        )

    @property
    def stats(self) -> SolveStats:
        return self.problem.stats

    def candidate(self, row: int, col: int, value: int) -> GridCandidate:
        """The candidate for `value` (1 to size) at (row, col)."""
        return self._candidates[row, col, value - 1]

    def solve(self) -> int:
        """
        Solve the problem.

        Returns:
            NO_SOLUTION, SINGLE_SOLUTION or MANY_SOLUTIONS.
        """
        return self.problem.solve()

    def get_solution(self) -> SudokuBoard:
        """
        The unique solution as a board.

        Raises:
            NoUniqueSolutionError: If the last solve() did not find exactly
                one solution.
        """
        solution = self.board.copy()
        for candidate in self.problem.get_solution():
            solution.set(candidate.row, candidate.col, candidate.value)
        return solution

    def _init_candidates(self) -> np.ndarray:
        size = self.size
        candidates = np.empty((size, size, size), dtype=object)
        for r in range(size):
            for c in range(size):
                for v in range(size):
                    candidates[r, c, v] = GridCandidate(r, c, v + 1)
        return candidates

    def _init_constraints(self) -> List[Constraint]:
        size = self.size
        cands = self._candidates
        constraints = []

        for r in range(size):
            for c in range(size):
                constraints.append(self._constraint(f"Cell: [{r},{c}]", cands[r, c, :]))

        for r in range(size):
            for v in range(size):
                constraints.append(self._constraint(f"Row: {r} Value: {v + 1}", cands[r, :, v]))

        for c in range(size):
            for v in range(size):
                constraints.append(self._constraint(f"Col: {c} Value: {v + 1}", cands[:, c, v]))

        for b in range(size):
            box_row, box_col = self.board.box_cells(b)[0]
            box = cands[box_row:box_row + self.board.box_rows,
                        box_col:box_col + self.board.box_cols, :]
            for v in range(size):
                constraints.append(self._constraint(f"Box: {b} Value: {v + 1}", box[:, :, v]))

        return constraints

    @staticmethod
    def _constraint(label: str, candidates: np.ndarray) -> SingleCandidateConstraint:
        constraint = SingleCandidateConstraint(label)
        for candidate in candidates.flatten():
            constraint.add(candidate)
        return constraint

    def _init_givens(self) -> List[GridCandidate]:
        return [
            self.candidate(int(r), int(c), self.board.get(int(r), int(c)))
            for r, c in np.argwhere(self.board.grid != 0)
        ]
