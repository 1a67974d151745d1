"""Sudoku board representation with rectangular boxes."""

from __future__ import annotations
from enum import Enum
from typing import Iterator, List, NamedTuple, Optional, Set, Tuple
import numpy as np


class GroupKind(Enum):
    """Kinds of cell group on the grid."""
    ROW = "row"
    COLUMN = "column"
    BOX = "box"


class CellGroup(NamedTuple):
    """A row, column or box, with the positions of its cells."""
    kind: GroupKind
    index: int
    cells: Tuple[Tuple[int, int], ...]

    def __str__(self) -> str:
        return f"{self.kind.value} {self.index}"


class SudokuBoard:
    """
    Represents a Sudoku board of configurable size.

    The grid is split into non-overlapping boxes of box_rows x box_cols
    cells, and holds values 1 to box_rows * box_cols. Standard Sudoku is
    9x9 with 3x3 boxes; a 6x6 puzzle uses 2x3 boxes.
    """

    def __init__(self, box_rows: int = 3, box_cols: int = 3, grid: Optional[np.ndarray] = None):
        """
        Initialize a Sudoku board.

        Args:
            box_rows: Number of rows in each box.
            box_cols: Number of columns in each box.
            grid: Optional initial grid. If None, creates empty board.
        """
        if box_rows < 1 or box_cols < 1:
            raise ValueError(f"Box dimensions must be positive, got {box_rows}x{box_cols}")

        self.box_rows = box_rows
        self.box_cols = box_cols
        self.size = box_rows * box_cols

        if grid is not None:
            grid = np.asarray(grid)
            if grid.shape != (self.size, self.size):
                raise ValueError(f"Grid shape must be ({self.size}, {self.size}), got {grid.shape}")
            if grid.min() < 0 or grid.max() > self.size:
                raise ValueError(f"Grid values must be 0-{self.size}")
            self.grid = grid.astype(np.int32)
        else:
            self.grid = np.zeros((self.size, self.size), dtype=np.int32)

    def copy(self) -> SudokuBoard:
        """Create a deep copy of the board."""
        return SudokuBoard(self.box_rows, self.box_cols, self.grid.copy())

    def get(self, row: int, col: int) -> int:
        """Get value at position (row, col). 0 means empty."""
        return int(self.grid[row, col])

    def set(self, row: int, col: int, value: int) -> None:
        """Set value at position (row, col). Use 0 to clear."""
        if value < 0 or value > self.size:
            raise ValueError(f"Value must be 0-{self.size}, got {value}")
        self.grid[row, col] = value

    def clear(self, row: int, col: int) -> None:
        """Clear the cell at position (row, col)."""
        self.grid[row, col] = 0

    def is_empty(self, row: int, col: int) -> bool:
        """Check if cell is empty (value is 0)."""
        return self.grid[row, col] == 0

    def get_row(self, row: int) -> np.ndarray:
        """Get all values in a row."""
        return self.grid[row, :]

    def get_col(self, col: int) -> np.ndarray:
        """Get all values in a column."""
        return self.grid[:, col]

    def box_origin(self, row: int, col: int) -> Tuple[int, int]:
        """Top-left position of the box containing (row, col)."""
        return (row // self.box_rows) * self.box_rows, (col // self.box_cols) * self.box_cols

    def get_box(self, row: int, col: int) -> np.ndarray:
        """Get all values in the box containing (row, col)."""
        box_row, box_col = self.box_origin(row, col)
        return self.grid[box_row:box_row + self.box_rows,
                         box_col:box_col + self.box_cols].flatten()

    def get_box_index(self, row: int, col: int) -> int:
        """Get the box index (0 to size-1) for a cell, numbered row-major."""
        boxes_per_band = self.size // self.box_cols
        return (row // self.box_rows) * boxes_per_band + (col // self.box_cols)

    def box_cells(self, index: int) -> Tuple[Tuple[int, int], ...]:
        """Positions of the cells in box `index`, row-major."""
        boxes_per_band = self.size // self.box_cols
        box_row = (index // boxes_per_band) * self.box_rows
        box_col = (index % boxes_per_band) * self.box_cols
        return tuple(
            (box_row + i, box_col + j)
            for i in range(self.box_rows)
            for j in range(self.box_cols)
        )

    def rows(self) -> List[CellGroup]:
        return [
            CellGroup(GroupKind.ROW, r, tuple((r, c) for c in range(self.size)))
            for r in range(self.size)
        ]

    def columns(self) -> List[CellGroup]:
        return [
            CellGroup(GroupKind.COLUMN, c, tuple((r, c) for r in range(self.size)))
            for c in range(self.size)
        ]

    def boxes(self) -> List[CellGroup]:
        return [CellGroup(GroupKind.BOX, b, self.box_cells(b)) for b in range(self.size)]

    def groups(self) -> Iterator[CellGroup]:
        """Every row, column and box, in that order."""
        yield from self.rows()
        yield from self.columns()
        yield from self.boxes()

    def group_values(self, group: CellGroup) -> Set[int]:
        """Values already placed in a cell group."""
        return {self.get(r, c) for r, c in group.cells} - {0}

    def get_candidates(self, row: int, col: int) -> Set[int]:
        """
        Get all valid candidate values for an empty cell.

        Returns:
            Set of values (1 to size) not yet used in the cell's row,
            column or box. Returns empty set if cell is not empty.
        """
        if not self.is_empty(row, col):
            return set()

        used = set(self.get_row(row).tolist())
        used |= set(self.get_col(col).tolist())
        used |= set(self.get_box(row, col).tolist())

        return set(range(1, self.size + 1)) - used

    def get_empty_cells(self) -> List[Tuple[int, int]]:
        """Get list of all empty cell positions, row-major."""
        return [(int(r), int(c)) for r, c in np.argwhere(self.grid == 0)]

    def count_empty(self) -> int:
        """Count the number of empty cells."""
        return int(np.sum(self.grid == 0))

    def count_filled(self) -> int:
        """Count the number of filled cells."""
        return int(np.sum(self.grid != 0))

    def is_complete(self) -> bool:
        """Check if all cells are filled."""
        return self.count_empty() == 0

    def is_valid(self) -> bool:
        """
        Check if the current board state is valid.
        Does not check if solution is complete, only if no conflicts exist.
        """
        for group in self.groups():
            values = [self.get(r, c) for r, c in group.cells]
            non_zero = [v for v in values if v != 0]
            if len(non_zero) != len(set(non_zero)):
                return False
        return True

    def is_solved(self) -> bool:
        """Check if the puzzle is completely and correctly solved."""
        return self.is_complete() and self.is_valid()

    @staticmethod
    def symbol(value: int) -> str:
        """Single character for a value: 1-9, then A, B, ... for 10 upwards."""
        if value == 0:
            return '0'
        if value <= 9:
            return str(value)
        return chr(ord('A') + value - 10)

    def to_string(self) -> str:
        """
        Convert board to a compact string representation.
        Uses 0 for empty cells, 1-9 for values, A-Z for 10 upwards.
        """
        return ''.join(self.symbol(int(v)) for v in self.grid.flatten())

    @classmethod
    def from_string(cls, s: str, box_rows: Optional[int] = None, box_cols: Optional[int] = None) -> SudokuBoard:
        """
        Create a board from a string representation.

        Args:
            s: String of length size*size with values, row by row.
               0 or . for empty, 1-9 for values, A-Z for 10 upwards.
               Whitespace is ignored.
            box_rows, box_cols: Box dimensions. When omitted the board is
               assumed square with square boxes (e.g. 81 chars -> 3x3).
        """
        s = ''.join(s.split())
        if box_rows is None or box_cols is None:
            size = int(round(len(s) ** 0.5))
            box_size = int(round(size ** 0.5))
            if size * size != len(s) or box_size * box_size != size:
                raise ValueError(
                    f"Cannot infer box dimensions from a string of length {len(s)}; "
                    "pass box_rows and box_cols"
                )
            box_rows = box_cols = box_size

        size = box_rows * box_cols
        if len(s) != size * size:
            raise ValueError(f"String length must be {size * size}, got {len(s)}")

        values = []
        for c in s:
            if c in '0.':
                values.append(0)
            elif c.isdigit():
                values.append(int(c))
            elif c.isalpha():
                values.append(ord(c.upper()) - ord('A') + 10)
            else:
                raise ValueError(f"Invalid character {c!r} in puzzle string")

        grid = np.array(values, dtype=np.int32).reshape(size, size)
        return cls(box_rows, box_cols, grid)

    @classmethod
    def from_2d_list(cls, data: List[List[int]], box_rows: Optional[int] = None,
                     box_cols: Optional[int] = None) -> SudokuBoard:
        """Create a board from a 2D list."""
        arr = np.array(data, dtype=np.int32)
        if box_rows is None or box_cols is None:
            box_rows = box_cols = int(round(arr.shape[0] ** 0.5))
        return cls(box_rows, box_cols, arr)

    def __str__(self) -> str:
        """Pretty-print the board."""
        lines = []
        boxes_per_band = self.size // self.box_cols
        horizontal_sep = '+' + (('-' * (self.box_cols * 2 + 1)) + '+') * boxes_per_band

        for i in range(self.size):
            if i % self.box_rows == 0:
                lines.append(horizontal_sep)

            row_str = '|'
            for j in range(self.size):
                val = self.get(i, j)
                row_str += ' .' if val == 0 else f' {self.symbol(val)}'
                if (j + 1) % self.box_cols == 0:
                    row_str += ' |'

            lines.append(row_str)

        lines.append(horizontal_sep)
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return (
            f"SudokuBoard(boxes={self.box_rows}x{self.box_cols}, "
            f"filled={self.count_filled()})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SudokuBoard):
            return False
        return (self.box_rows, self.box_cols) == (other.box_rows, other.box_cols) \
            and np.array_equal(self.grid, other.grid)

    def __hash__(self) -> int:
        return hash((self.box_rows, self.box_cols, self.to_string()))
