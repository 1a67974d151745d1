"""Singleton strategy: a cell that can only hold one value."""

from __future__ import annotations
from typing import TYPE_CHECKING, Optional

from .base import Strategy
from .hint import Hint

if TYPE_CHECKING:
    from ..puzzle import Puzzle


class SingletonStrategy(Strategy):
    """Finds an empty cell with exactly one remaining candidate."""

    name = "SINGLETON"

    def get_hint(self, puzzle: Puzzle) -> Optional[Hint]:
        for row, col in puzzle.entries.get_empty_cells():
            candidates = puzzle.remaining_candidates(row, col)
            if len(candidates) == 1:
                value = next(iter(candidates))
                return Hint(
                    self.name,
                    f"The cell highlighted can only contain the value {value}",
                    cells=[(row, col)],
                    values={value}
                )
        return None
