"""Solution candidates of a constrained problem."""

from __future__ import annotations
from typing import TYPE_CHECKING, Optional, Tuple

from .errors import GraphFrozenError

if TYPE_CHECKING:
    from .constraint import Constraint


class Candidate:
    """
    An atomic hypothesis that may or may not be part of the solution.

    A candidate has no status of its own. Each constraint it belongs to
    keeps it as live, definite or eliminated, and the candidate relays a
    change made by one constraint to all the others it belongs to.
    """

    __slots__ = ("label", "_constraints", "_frozen")

    def __init__(self, label: str = "Anonymous Candidate"):
        self.label = label
        self._constraints: list = []
        self._frozen = False

    @property
    def constraints(self) -> Tuple[Constraint, ...]:
        """Constraints this candidate participates in."""
        return tuple(self._constraints)

    def freeze(self) -> None:
        """Disallow joining further constraints, other than enclosing problems."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _attach(self, constraint: Constraint) -> None:
        if self._frozen and not constraint._can_adopt(self):
            raise GraphFrozenError(
                f"Cannot add {self} to {constraint}: the constraint graph is frozen"
            )
        if constraint not in self._constraints:
            self._constraints.append(constraint)

    def eliminate(self, origin: Optional[Constraint]) -> None:
        """Eliminate this candidate from every constraint except origin."""
        for constraint in self._constraints:
            if constraint is not origin:
                constraint._private_eliminate(self)
                constraint.set_dirty()

    def include_in_solution(self, origin: Optional[Constraint]) -> None:
        """Mark this candidate definite in every constraint except origin."""
        for constraint in self._constraints:
            if constraint is not origin:
                constraint._private_include_in_solution(self)
                constraint.set_dirty()

    def reinstate(self, origin: Optional[Constraint]) -> None:
        """Make this candidate live again in every constraint except origin."""
        for constraint in self._constraints:
            if constraint is not origin:
                constraint._private_reinstate(self)
                constraint.set_dirty()

    def __str__(self) -> str:
        return self.label

    def __repr__(self) -> str:
        return f"Candidate({self.label!r})"
