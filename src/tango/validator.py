"""Local consistency checks for a single Tango placement."""

from typing import List

from .model import CellValue, ConstraintType, Grid


def is_placement_valid(grid: Grid, row: int, col: int, value: CellValue) -> bool:
    """
    Return True when `value` at (row, col) breaks no rule given the rest of the grid.

    The target cell may be empty or already hold `value`. Edge constraints are only
    checked against the left and top neighbours; the right/bottom side of each
    constraint is covered when the search reaches that later cell.
    """
    cells = grid.cells
    size = grid.size

    # No three in a row, horizontally.
    if col >= 2 and cells[row][col - 1] == value and cells[row][col - 2] == value:
        return False
    if col < size - 2 and cells[row][col + 1] == value and cells[row][col + 2] == value:
        return False
    if 1 <= col < size - 1 and cells[row][col - 1] == value and cells[row][col + 1] == value:
        return False

    # Vertically.
    if row >= 2 and cells[row - 1][col] == value and cells[row - 2][col] == value:
        return False
    if row < size - 2 and cells[row + 1][col] == value and cells[row + 2][col] == value:
        return False
    if 1 <= row < size - 1 and cells[row - 1][col] == value and cells[row + 1][col] == value:
        return False

    if col > 0 and not _edge_ok(grid.h_constraints[row][col - 1], cells[row][col - 1], value):
        return False
    if row > 0 and not _edge_ok(grid.v_constraints[row - 1][col], cells[row - 1][col], value):
        return False

    row_values = [value if i == col else cells[row][i] for i in range(size)]
    if not _balanced(row_values, size):
        return False
    col_values = [value if i == row else cells[i][col] for i in range(size)]
    return _balanced(col_values, size)


def _edge_ok(constraint: ConstraintType, neighbor: CellValue, value: CellValue) -> bool:
    if neighbor == CellValue.EMPTY:
        return True
    if constraint == ConstraintType.EQUAL:
        return neighbor == value
    if constraint == ConstraintType.OPPOSITE:
        return neighbor != value
    return True


def _balanced(line: List[CellValue], size: int) -> bool:
    limit = size // 2
    suns = sum(1 for v in line if v == CellValue.SUN)
    moons = sum(1 for v in line if v == CellValue.MOON)
    return suns <= limit and moons <= limit


def grid_violations(grid: Grid) -> List[str]:
    """List every filled cell whose value fails the placement check."""
    problems: List[str] = []
    for r, row in enumerate(grid.cells):
        for c, value in enumerate(row):
            if value == CellValue.EMPTY:
                continue
            if not is_placement_valid(grid, r, c, value):
                problems.append(f"({r},{c}) {value.value}")
    return problems
