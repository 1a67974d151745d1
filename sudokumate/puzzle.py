"""A Sudoku puzzle being played: givens, entries, mark-up and hints."""

from __future__ import annotations
import logging
from enum import Enum
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .core.board import SudokuBoard
from .solver import SudokuProblem, SolveStats, NO_SOLUTION, SINGLE_SOLUTION
from .solver.errors import NoUniqueSolutionError
from .strategy import Hint, Strategy, default_strategies

logger = logging.getLogger(__name__)


class SolutionStatus(Enum):
    """How many solutions a puzzle has."""
    NONE = "none"
    SINGLE = "single"
    MANY = "many"

    @classmethod
    def from_n_solutions(cls, n_solutions: int) -> SolutionStatus:
        if n_solutions == NO_SOLUTION:
            return cls.NONE
        if n_solutions == SINGLE_SOLUTION:
            return cls.SINGLE
        return cls.MANY


class Puzzle:
    """
    A Sudoku puzzle of any box shape, as a player sees it.

    The givens are fixed. The player fills in other cells and crosses off
    candidates as mark-up. Once check_solutions() has established that
    the puzzle has a single solution, entries can be checked against it
    and hints requested. Hints come from the strategies, consulted in
    order; by default they look for singletons and hidden singles.
    """

    def __init__(self, board: SudokuBoard, strategies: Optional[Iterable[Strategy]] = None):
        """
        Initialize a puzzle.

        Args:
            board: The givens. Empty cells are 0.
            strategies: Hint strategies in the order they are consulted
                (default: singletons, then hidden singles).
        """
        self.givens = board.copy()
        self.entries = board.copy()
        self.strategies: List[Strategy] = (
            list(strategies) if strategies is not None else default_strategies()
        )
        self.status: Optional[SolutionStatus] = None
        self.solution: Optional[SudokuBoard] = None
        self.stats: Optional[SolveStats] = None
        self._crossed_off: Dict[Tuple[int, int], Set[int]] = {}

    @property
    def size(self) -> int:
        return self.givens.size

    def check_solutions(self) -> SolutionStatus:
        """
        Classify the puzzle by number of solutions.

        The solution is kept when there is exactly one.
        """
        problem = SudokuProblem(self.givens)
        self.status = SolutionStatus.from_n_solutions(problem.solve())
        self.stats = problem.stats
        self.solution = problem.get_solution() if self.status is SolutionStatus.SINGLE else None
        logger.info("Puzzle has %s solution(s)", self.status.value)
        return self.status

    def is_given(self, row: int, col: int) -> bool:
        return not self.givens.is_empty(row, col)

    def set_value(self, row: int, col: int, value: int) -> None:
        """Enter a value (1 to size) in a non-given cell."""
        if self.is_given(row, col):
            raise ValueError(f"Cell ({row}, {col}) is a given and cannot be changed")
        if value < 1 or value > self.size:
            raise ValueError(f"Value must be 1-{self.size}, got {value}")
        self.entries.set(row, col, value)

    def clear_value(self, row: int, col: int) -> None:
        if self.is_given(row, col):
            raise ValueError(f"Cell ({row}, {col}) is a given and cannot be changed")
        self.entries.clear(row, col)

    def cross_off(self, row: int, col: int, value: int) -> None:
        """Cross a candidate off the cell's mark-up."""
        self._crossed_off.setdefault((row, col), set()).add(value)

    def restore_candidate(self, row: int, col: int, value: int) -> None:
        """Reinstate a previously crossed-off candidate."""
        self._crossed_off.get((row, col), set()).discard(value)

    def crossed_off(self, row: int, col: int) -> Set[int]:
        return set(self._crossed_off.get((row, col), set()))

    def candidates(self, row: int, col: int) -> Set[int]:
        """
        Values not yet taken in the cell's row, column or box, ignoring
        mark-up. A filled cell's only candidate is its value.
        """
        if not self.entries.is_empty(row, col):
            return {self.entries.get(row, col)}
        return self.entries.get_candidates(row, col)

    def remaining_candidates(self, row: int, col: int) -> Set[int]:
        """Candidates left once crossed-off ones are removed."""
        return self.candidates(row, col) - self.crossed_off(row, col)

    def reset(self) -> None:
        """Clear all entries and mark-up, returning to just the givens."""
        self.entries = self.givens.copy()
        self._crossed_off.clear()

    def check_entries(self) -> Optional[Hint]:
        """
        Compare entries and mark-up against the solution.

        Returns:
            A hint listing the cells holding a wrong value, or with the
            correct value crossed off; None if there are no mistakes.

        Raises:
            NoUniqueSolutionError: If the puzzle is not known to have a
                single solution.
        """
        if self.solution is None:
            raise NoUniqueSolutionError("Puzzle has no known unique solution; call check_solutions() first")

        errors = []
        for row in range(self.size):
            for col in range(self.size):
                expected = self.solution.get(row, col)
                value = self.entries.get(row, col)
                if value != 0:
                    if value != expected:
                        errors.append((row, col))
                elif expected in self.crossed_off(row, col):
                    errors.append((row, col))

        if not errors:
            return None
        return Hint("BOO BOO", "The cells shown contain invalid values or mark up", cells=errors)

    def get_hint(self) -> Optional[Hint]:
        """
        A hint for what the player may do next.

        Mistakes are reported first. Otherwise each strategy is asked in
        turn; None means no strategy could help.
        """
        hint = self.check_entries()
        for strategy in self.strategies:
            if hint is not None:
                break
            hint = strategy.get_hint(self)
        return hint
