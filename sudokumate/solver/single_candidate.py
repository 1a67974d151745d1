"""Constraint whose solution is exactly one of its candidates."""

from __future__ import annotations
from typing import FrozenSet, List, Optional

from .candidate import Candidate
from .constraint import Constraint, UNKNOWN_N_SOLUTIONS
from .errors import NoUniqueSolutionError


class SingleCandidateConstraint(Constraint):
    """
    Exactly one of the associated candidates is part of the solution.

    Once one candidate is known to be in the solution every other one
    can be eliminated, and once only one candidate remains it must be the
    solution. In a Sudoku this models "a cell holds one value" as well as
    "a row, column or box holds each value once".
    """

    def __init__(self, label: str = "Anonymous Single Candidate Constraint"):
        super().__init__(label)
        self._n_solutions: Optional[int] = None

    def apply(self) -> None:
        n_definite = len(self._definite)
        n_live = len(self._live)

        if n_definite > 1:
            self._n_solutions = 0
        elif n_definite == 1:
            if n_live > 0:
                self.eliminate_all(list(self._live))
            self._n_solutions = 1
        elif n_live > 1:
            self._n_solutions = n_live
        elif n_live == 1:
            self.include_all(list(self._live))
            self._n_solutions = 1
        else:
            self._n_solutions = 0

    def get_n_solutions(self) -> int:
        """
        Number of remaining solutions.

        Each live candidate is a distinct single-candidate solution, so the
        count is exact. Before the first apply() it is UNKNOWN_N_SOLUTIONS.
        """
        if self._n_solutions is None:
            return UNKNOWN_N_SOLUTIONS
        return self._n_solutions

    def get_solution(self) -> FrozenSet[Candidate]:
        if self._n_solutions != 1:
            raise NoUniqueSolutionError(f"{self} is not solved")
        return frozenset(self._definite)

    def get_possible_solutions(self) -> List[FrozenSet[Candidate]]:
        return [frozenset((candidate,)) for candidate in self._live]
