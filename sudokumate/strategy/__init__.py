"""Hint strategies for Sudoku players."""

from typing import List

from .hint import Hint
from .base import Strategy
from .singleton import SingletonStrategy
from .hidden_single import HiddenSingleStrategy


def default_strategies() -> List[Strategy]:
    """Strategies consulted, in order, when a hint is requested."""
    return [SingletonStrategy(), HiddenSingleStrategy()]


__all__ = [
    "Hint",
    "Strategy",
    "SingletonStrategy",
    "HiddenSingleStrategy",
    "default_strategies",
]
