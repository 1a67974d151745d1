"""Hidden single strategy: a value that fits in only one cell of a group."""

from __future__ import annotations
from typing import TYPE_CHECKING, List, Optional, Tuple

from .base import Strategy
from .hint import Hint
from ..core.board import CellGroup

if TYPE_CHECKING:
    from ..puzzle import Puzzle


class HiddenSingleStrategy(Strategy):
    """
    Finds a value that can be placed in only one cell of a box, row or
    column. Boxes are checked first, then rows, then columns.
    """

    name = "HIDDEN SINGLE"

    def get_hint(self, puzzle: Puzzle) -> Optional[Hint]:
        board = puzzle.entries
        for group in (*board.boxes(), *board.rows(), *board.columns()):
            hint = self._check_group(puzzle, group)
            if hint is not None:
                return hint
        return None

    def _check_group(self, puzzle: Puzzle, group: CellGroup) -> Optional[Hint]:
        missing = set(range(1, puzzle.size + 1)) - puzzle.entries.group_values(group)
        for value in sorted(missing):
            cell = self._only_cell_for(puzzle, group, value)
            if cell is not None:
                return Hint(
                    self.name,
                    f"Within this {group.kind.value}, only one cell can contain the value {value}",
                    cells=[cell],
                    groups=[group],
                    values={value}
                )
        return None

    @staticmethod
    def _only_cell_for(puzzle: Puzzle, group: CellGroup, value: int) -> Optional[Tuple[int, int]]:
        possible: List[Tuple[int, int]] = []
        for row, col in group.cells:
            if value in puzzle.remaining_candidates(row, col):
                possible.append((row, col))
                if len(possible) > 1:
                    return None
        return possible[0] if possible else None
