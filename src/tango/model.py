"""Tango grid data structures: cell values, edge constraints, and the grid itself."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

GRID_SIZE = 6


class CellValue(str, Enum):
    EMPTY = "EMPTY"
    SUN = "SUN"
    MOON = "MOON"


class ConstraintType(str, Enum):
    NONE = "NONE"
    EQUAL = "EQUAL"
    OPPOSITE = "OPPOSITE"


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


SYMBOLS = (CellValue.SUN, CellValue.MOON)


@dataclass
class Grid:
    """
    A square board of cells plus the two families of edge constraints.

    h_constraints[r][c] binds cells (r, c) and (r, c + 1); shape N x (N - 1).
    v_constraints[r][c] binds cells (r, c) and (r + 1, c); shape (N - 1) x N.
    """

    cells: List[List[CellValue]]
    h_constraints: List[List[ConstraintType]] = field(default_factory=list)
    v_constraints: List[List[ConstraintType]] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.cells)

    def copy(self) -> "Grid":
        return Grid(
            cells=[list(row) for row in self.cells],
            h_constraints=[list(row) for row in self.h_constraints],
            v_constraints=[list(row) for row in self.v_constraints],
        )

    def is_complete(self) -> bool:
        return all(cell != CellValue.EMPTY for row in self.cells for cell in row)

    def filled_count(self) -> int:
        return sum(1 for row in self.cells for cell in row if cell != CellValue.EMPTY)

    def constraint_count(self) -> int:
        revealed = 0
        for matrix in (self.h_constraints, self.v_constraints):
            revealed += sum(1 for row in matrix for c in row if c != ConstraintType.NONE)
        return revealed


def create_empty_grid(size: int = GRID_SIZE) -> Grid:
    return Grid(
        cells=[[CellValue.EMPTY] * size for _ in range(size)],
        h_constraints=[[ConstraintType.NONE] * (size - 1) for _ in range(size)],
        v_constraints=[[ConstraintType.NONE] * size for _ in range(size - 1)],
    )
