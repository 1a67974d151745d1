"""Base strategy interface."""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

from .hint import Hint

if TYPE_CHECKING:
    from ..puzzle import Puzzle


class Strategy(ABC):
    """Abstract base class for hint strategies."""

    name: str = "Strategy"

    @abstractmethod
    def get_hint(self, puzzle: Puzzle) -> Optional[Hint]:
        """
        Look for a hint in the puzzle as it currently stands.

        Args:
            puzzle: The puzzle, with the player's entries and mark-up.

        Returns:
            A hint, or None if this strategy has nothing to offer.
        """
        pass
