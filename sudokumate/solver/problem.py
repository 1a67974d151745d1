"""Constrained problem: propagation engine and backtracking driver."""

from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple

from .candidate import Candidate
from .constraint import Constraint, UNKNOWN_N_SOLUTIONS
from .errors import NoUniqueSolutionError, SolverError

logger = logging.getLogger(__name__)

NO_SOLUTION = 0
SINGLE_SOLUTION = 1
MANY_SOLUTIONS = UNKNOWN_N_SOLUTIONS


@dataclass
class SolveStats:
    """Statistics from the last apply() of a constrained problem."""
    n_solutions: int = UNKNOWN_N_SOLUTIONS
    time_seconds: float = 0.0

    # Propagation and search metrics
    applications: int = 0
    branches: int = 0
    backtracks: int = 0
    max_depth: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "n_solutions": describe_n_solutions(self.n_solutions),
            "time_seconds": self.time_seconds,
            "applications": self.applications,
            "branches": self.branches,
            "backtracks": self.backtracks,
            "max_depth": self.max_depth,
        }


def describe_n_solutions(n_solutions: int) -> str:
    """Human readable form of a solution classification."""
    if n_solutions == NO_SOLUTION:
        return "none"
    if n_solutions == SINGLE_SOLUTION:
        return "single"
    return "many"


@dataclass(frozen=True)
class Snapshot:
    """State of a problem at one point of the search, for exact restore."""
    live: Tuple[Candidate, ...]
    definite: Tuple[Candidate, ...]
    constraints: Tuple[Constraint, ...]


class ConstrainedProblem(Constraint):
    """
    A problem made of candidates, constraints and optional givens.

    The solution is a subset of the candidates that always contains the
    givens. Solving alternates two phases:

    1. Propagation: dirty constraints are applied until none is left.
       Applying one may eliminate or include candidates, which dirties
       every other constraint sharing them.
    2. Search: if unresolved constraints remain, one is picked and each
       of its possible solutions is tried in turn, recursing on the whole
       problem and restoring the exact prior state afterwards.

    The outcome is 0, 1 or MANY_SOLUTIONS. Search stops as soon as a
    second solution is found. A problem is itself a constraint over all
    of its candidates, so problems may be nested inside larger ones.
    """

    def __init__(
        self,
        candidates: Iterable[Candidate],
        constraints: Iterable[Constraint],
        givens: Iterable[Candidate] = (),
        label: str = "Constrained Problem"
    ):
        """
        Build the problem and propagate the givens into it.

        Args:
            candidates: Every candidate of the problem.
            constraints: Every constraint of the problem.
            givens: Candidates known to be part of the solution.
            label: Name returned by str().

        Raises:
            ValueError: If a constraint or given refers to a candidate
                outside the supplied candidates.
        """
        super().__init__(label)
        self._constraints: Dict[Constraint, None] = dict.fromkeys(constraints)
        self._dirty_queue: Dict[Constraint, None] = {}
        self._n_solutions = UNKNOWN_N_SOLUTIONS
        self._current_solution: Optional[FrozenSet[Candidate]] = None
        self.stats = SolveStats()

        for candidate in candidates:
            self.add(candidate)

        # Candidates already definite in a nested problem count as givens.
        inherited: Dict[Candidate, None] = {}
        for constraint in self._constraints:
            for candidate in (*constraint._live, *constraint._definite):
                if candidate not in self._live:
                    raise ValueError(
                        f"{constraint} refers to {candidate}, which is not a "
                        f"candidate of {self}"
                    )
            inherited.update(dict.fromkeys(constraint._definite))
            constraint.set_parent(self)
            constraint.freeze()
            # Every constraint is evaluated at least once.
            constraint.set_dirty()
        self.freeze()
        for candidate in self._live:
            candidate.freeze()

        givens = list(givens)
        for given in givens:
            if given not in self._live:
                raise ValueError(f"Given {given} is not a candidate of {self}")
        self.include_all(dict.fromkeys([*inherited, *givens]))

        logger.debug(
            "Built %s: %d candidates, %d constraints, %d givens",
            self, len(self._live) + len(self._definite),
            len(self._constraints), len(givens)
        )

    def _can_adopt(self, candidate: Candidate) -> bool:
        # Every constraint already holding a frozen candidate must sit in
        # this problem or in another problem.
        for owner in candidate.constraints:
            while owner.parent is not None and owner not in self._constraints:
                owner = owner.parent
            if owner not in self._constraints and not isinstance(owner, ConstrainedProblem):
                return False
        return True

    @property
    def active_constraints(self) -> Tuple[Constraint, ...]:
        """Constraints still unresolved on the current search path."""
        return tuple(self._constraints)

    @property
    def dirty_constraints(self) -> Tuple[Constraint, ...]:
        """Constraints awaiting re-application."""
        return tuple(self._dirty_queue)

    def apply(self) -> None:
        """
        Determine how many solutions the problem has.

        A unique solution found through search is committed to the graph,
        leaving every candidate either definite or eliminated.
        """
        self.stats = SolveStats()
        start_time = time.perf_counter()

        n_solutions = self._solve_recurse(0)
        self._n_solutions = MANY_SOLUTIONS if n_solutions > 1 else n_solutions

        if self._n_solutions == SINGLE_SOLUTION:
            self._commit_solution()
        else:
            self._current_solution = None

        self.stats.n_solutions = self._n_solutions
        self.stats.time_seconds = time.perf_counter() - start_time
        logger.debug(
            "%s classified as %s after %d applications, %d branches",
            self, describe_n_solutions(self._n_solutions),
            self.stats.applications, self.stats.branches
        )

    def get_n_solutions(self) -> int:
        """Returns NO_SOLUTION, SINGLE_SOLUTION or MANY_SOLUTIONS."""
        return self._n_solutions

    def get_solution(self) -> FrozenSet[Candidate]:
        """
        Candidates forming the unique solution.

        Raises:
            NoUniqueSolutionError: If the last apply() did not find exactly
                one solution.
        """
        if self._n_solutions != SINGLE_SOLUTION or self._current_solution is None:
            raise NoUniqueSolutionError(
                f"{self} has no unique solution "
                f"({describe_n_solutions(self._n_solutions)})"
            )
        return self._current_solution

    def get_possible_solutions(self) -> List[FrozenSet[Candidate]]:
        """
        Candidate sets that split this problem's solutions between them.

        With many solutions these are the possibilities of the constraint
        the problem would itself branch on next. Every solution of the
        problem contains exactly one of them, so a parent problem can
        search through a nested one without listing its solutions.
        """
        if self._n_solutions == NO_SOLUTION:
            return []
        if self._n_solutions == SINGLE_SOLUTION:
            return [self.get_solution()]
        if not self.propagate():
            return []
        if not self._constraints:
            return [frozenset(self._definite)]
        return self._select_branch_constraint().get_possible_solutions()

    def propagate(self) -> bool:
        """
        Apply dirty constraints until none remain.

        Constraints reaching a single solution are retired from the active
        set, and any others rejoin it. Returns False as soon as one
        constraint has no solution.
        """
        while self._dirty_queue:
            constraint, _ = self._dirty_queue.popitem()
            n_solutions = constraint.solve()
            self.stats.applications += 1
            if n_solutions == 0:
                # Keep it queued so a later pass sees the contradiction too.
                constraint.set_dirty()
                return False
            if n_solutions == 1:
                self._constraints.pop(constraint, None)
            else:
                # A parent's restore can reopen a constraint retired here.
                self._constraints.setdefault(constraint, None)
        return True

    def snapshot(self) -> Snapshot:
        """Capture the state needed to undo a speculative branch."""
        return Snapshot(
            live=tuple(self._live),
            definite=tuple(self._definite),
            constraints=tuple(self._constraints)
        )

    def restore(self, snapshot: Snapshot) -> None:
        """Undo every candidate movement since the snapshot was taken."""
        self.reinstate_all(
            [candidate for candidate in snapshot.live if candidate not in self._live]
        )
        self.include_all(
            [candidate for candidate in snapshot.definite
             if candidate not in self._definite]
        )
        self._constraints = dict.fromkeys(snapshot.constraints)

    def _add_dirty_constraint(self, constraint: Constraint) -> None:
        self._dirty_queue[constraint] = None

    def _remove_dirty_constraint(self, constraint: Constraint) -> None:
        self._dirty_queue.pop(constraint, None)

    def _solve_recurse(self, depth: int) -> int:
        """Returns 0, 1 or 2, where 2 stands for two or more."""
        self.stats.max_depth = max(self.stats.max_depth, depth)

        if not self.propagate():
            return 0

        if not self._constraints:
            self._current_solution = frozenset(self._definite)
            return 1

        constraint = self._select_branch_constraint()
        possible_solutions = constraint.get_possible_solutions()
        logger.debug(
            "Depth %d: branching on %s (%d possibilities)",
            depth, constraint, len(possible_solutions)
        )

        snapshot = self.snapshot()
        queued = self._ancestor_queues()
        n_solutions = 0
        for solution_set in possible_solutions:
            if n_solutions >= 2:
                break
            self.stats.branches += 1
            self.include_all(solution_set)
            n_solutions += self._solve_recurse(depth + 1)
            self.restore(snapshot)
            self.stats.backtracks += 1
        self._unqueue_since(queued)

        return min(n_solutions, 2)

    def _ancestor_queues(self) -> List[Tuple[ConstrainedProblem, FrozenSet[Constraint]]]:
        queues = []
        problem = self._parent
        while problem is not None:
            queues.append((problem, frozenset(problem._dirty_queue)))
            problem = problem._parent
        return queues

    @staticmethod
    def _unqueue_since(queues: List[Tuple[ConstrainedProblem, FrozenSet[Constraint]]]) -> None:
        # Branches are restored, so whatever they queued in enclosing
        # problems has not really changed.
        for problem, queued in queues:
            for constraint in list(problem._dirty_queue):
                if constraint not in queued:
                    constraint.set_clean()

    def _select_branch_constraint(self) -> Constraint:
        # Fewest remaining solutions first; ties keep insertion order.
        return min(self._constraints, key=lambda c: c.get_n_solutions())

    def _commit_solution(self) -> None:
        solution = self._current_solution
        pending = [c for c in solution if c not in self._definite]
        if not pending:
            return
        self.include_all(pending)
        if not self.propagate():
            raise SolverError(f"Solution of {self} is inconsistent with its constraints")
