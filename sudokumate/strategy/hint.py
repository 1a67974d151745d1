"""Hints produced by solving strategies."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Set, Tuple

from ..core.board import CellGroup


@dataclass
class Hint:
    """
    What a strategy wants to tell the player.

    The text should describe the cells and values shown in general terms
    ("the cell highlighted") rather than naming them, so that a front end
    can point at them instead.
    """
    strategy: str
    text: str = ""
    cells: List[Tuple[int, int]] = field(default_factory=list)
    groups: List[CellGroup] = field(default_factory=list)
    values: Set[int] = field(default_factory=set)

    def to_dict(self) -> Dict[str, Any]:
        """Convert hint to dictionary."""
        return {
            "strategy": self.strategy,
            "text": self.text,
            "cells": [list(cell) for cell in self.cells],
            "groups": [{"kind": g.kind.value, "index": g.index} for g in self.groups],
            "values": sorted(self.values),
        }

    def __str__(self) -> str:
        return f"{self.strategy}: {self.text}"
