"""Abstract constraint over a fixed subset of candidates."""

from __future__ import annotations
import sys
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Dict, FrozenSet, Iterable, List, Optional

from .candidate import Candidate
from .errors import GraphFrozenError

if TYPE_CHECKING:
    from .problem import ConstrainedProblem


# Returned by get_n_solutions() when more than one solution remains but
# counting them exactly would be expensive.
UNKNOWN_N_SOLUTIONS = sys.maxsize


class Constraint(ABC):
    """
    A rule restricting which of its candidates can hold together.

    Each constraint partitions its candidates into *live* (undecided) and
    *definite* (confirmed as part of the solution). Eliminated candidates
    are dropped from both. Whenever a candidate moves because of another
    constraint, this one is marked dirty and queued with its parent
    problem for re-application.

    Subclasses implement apply(), get_n_solutions(), get_solution() and
    get_possible_solutions().
    """

    def __init__(self, label: str = "Anonymous Constraint"):
        """
        Initialize an empty constraint.

        Args:
            label: Name returned by str(), useful when debugging.
        """
        self.label = label
        # Dicts are used as insertion-ordered sets so that iteration,
        # and therefore search order, is deterministic.
        self._live: Dict[Candidate, None] = {}
        self._definite: Dict[Candidate, None] = {}
        self._dirty = False
        self._frozen = False
        self._parent: Optional[ConstrainedProblem] = None

    def add(self, candidate: Candidate) -> None:
        """
        Associate a candidate with this constraint.

        Raises:
            GraphFrozenError: If the constraint already belongs to a
                problem that has been set up for solving, or the
                candidate does.
        """
        if self._frozen:
            raise GraphFrozenError(
                f"Cannot add {candidate} to {self}: the constraint graph is frozen"
            )
        candidate._attach(self)
        self._live[candidate] = None

    def freeze(self) -> None:
        """Disallow any further changes to candidate membership."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _can_adopt(self, candidate: Candidate) -> bool:
        """Whether a frozen candidate may still join this constraint."""
        return False

    @property
    def parent(self) -> Optional[ConstrainedProblem]:
        return self._parent

    def set_parent(self, parent: Optional[ConstrainedProblem]) -> None:
        """Attach the problem that owns this constraint's dirty queue."""
        self._parent = parent

    @abstractmethod
    def apply(self) -> None:
        """
        Apply the rule to the current partition.

        May eliminate candidates or include them in the solution. Must be
        idempotent while the partition is unchanged.
        """

    @abstractmethod
    def get_n_solutions(self) -> int:
        """
        Number of solutions remaining for this constraint alone.

        0 means unsatisfiable and 1 means solved. Larger values are either
        the exact count or UNKNOWN_N_SOLUTIONS.
        """

    @abstractmethod
    def get_solution(self) -> FrozenSet[Candidate]:
        """The unique confirmed candidate set. Only valid when solved."""

    @abstractmethod
    def get_possible_solutions(self) -> List[FrozenSet[Candidate]]:
        """Each remaining full solution of this constraint, as a candidate set."""

    def solve(self) -> int:
        """Apply the constraint, mark it clean and return its solution count."""
        self.apply()
        self.set_clean()
        return self.get_n_solutions()

    @property
    def live(self) -> FrozenSet[Candidate]:
        """Candidates still undecided from this constraint's view."""
        return frozenset(self._live)

    @property
    def definites(self) -> FrozenSet[Candidate]:
        """Candidates this constraint treats as part of the solution."""
        return frozenset(self._definite)

    @property
    def n_live(self) -> int:
        return len(self._live)

    @property
    def n_definite(self) -> int:
        return len(self._definite)

    def is_dirty(self) -> bool:
        return self._dirty

    def set_dirty(self) -> None:
        """Mark the constraint as needing re-application."""
        self._dirty = True
        if self._parent is not None:
            self._parent._add_dirty_constraint(self)

    def set_clean(self) -> None:
        """Mark the constraint as up to date with its partition."""
        self._dirty = False
        if self._parent is not None:
            self._parent._remove_dirty_constraint(self)

    def eliminate(self, candidate: Candidate) -> None:
        self._private_eliminate(candidate)
        candidate.eliminate(self)

    def include_in_solution(self, candidate: Candidate) -> None:
        self._private_include_in_solution(candidate)
        candidate.include_in_solution(self)

    def reinstate(self, candidate: Candidate) -> None:
        """Make a candidate live again, removing it from the solution if needed."""
        self._private_reinstate(candidate)
        candidate.reinstate(self)

    def eliminate_all(self, candidates: Iterable[Candidate]) -> None:
        for candidate in candidates:
            self.eliminate(candidate)

    def include_all(self, candidates: Iterable[Candidate]) -> None:
        for candidate in candidates:
            self.include_in_solution(candidate)

    def reinstate_all(self, candidates: Iterable[Candidate]) -> None:
        for candidate in candidates:
            self.reinstate(candidate)

    def _private_eliminate(self, candidate: Candidate) -> None:
        self._live.pop(candidate, None)
        self._definite.pop(candidate, None)

    def _private_include_in_solution(self, candidate: Candidate) -> None:
        self._live.pop(candidate, None)
        self._definite[candidate] = None

    def _private_reinstate(self, candidate: Candidate) -> None:
        self._definite.pop(candidate, None)
        self._live[candidate] = None

    def __str__(self) -> str:
        return self.label

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.label!r}, "
            f"live={len(self._live)}, definite={len(self._definite)})"
        )
