"""Depth-first backtracking search over Tango cells in row-major order."""

from typing import Callable, NamedTuple, Optional, Sequence

from .model import GRID_SIZE, SYMBOLS, CellValue, Grid
from .parser import normalize_grid
from .validator import is_placement_valid
from src.utils.trace import Tracer

ValueOrder = Callable[[Sequence[CellValue]], Sequence[CellValue]]


class SearchLimitExceeded(RuntimeError):
    """Raised when an explicit node budget runs out before the search finishes."""


class Hint(NamedTuple):
    row: int
    col: int
    value: CellValue


def _fixed_order(candidates: Sequence[CellValue]) -> Sequence[CellValue]:
    # SUN before MOON; decides which solution is returned when several exist.
    return candidates


class _Search:
    def __init__(
        self,
        grid: Grid,
        order_values: ValueOrder,
        tracer: Optional[Tracer],
        max_nodes: Optional[int],
    ) -> None:
        self.grid = grid
        self.order_values = order_values
        self.tracer = tracer
        self.max_nodes = max_nodes
        self.nodes = 0
        self.total = grid.size * grid.size

    def run(self, idx: int) -> bool:
        if idx == self.total:
            if self.tracer:
                self.tracer.log_solution_found(filled=self.total)
            return True

        size = self.grid.size
        row, col = divmod(idx, size)
        current = self.grid.cells[row][col]

        if current != CellValue.EMPTY:
            # Pre-filled cells are never changed; an inconsistent one sinks the search.
            ok = is_placement_valid(self.grid, row, col, current)
            if self.tracer:
                self.tracer.log_prefilled_check(row, col, current, ok)
            return ok and self.run(idx + 1)

        for value in self.order_values(list(SYMBOLS)):
            if not is_placement_valid(self.grid, row, col, value):
                continue
            self._count_node()
            self.grid.cells[row][col] = value
            if self.tracer:
                self.tracer.log_assign(row, col, value, depth=idx)
            if self.run(idx + 1):
                return True
            self.grid.cells[row][col] = CellValue.EMPTY

        if self.tracer:
            self.tracer.log_backtrack(row, col, depth=idx)
        return False

    def _count_node(self) -> None:
        self.nodes += 1
        if self.max_nodes is not None and self.nodes > self.max_nodes:
            raise SearchLimitExceeded(f"Search exceeded {self.max_nodes} placements")


def search(
    grid: Grid,
    order_values: Optional[ValueOrder] = None,
    tracer: Optional[Tracer] = None,
    max_nodes: Optional[int] = None,
) -> bool:
    """
    Fill `grid` in place. Returns True when every cell holds a consistent symbol.
    `order_values` picks the order in which SUN/MOON are tried at each empty cell.
    On failure, every cell the search placed is reset to EMPTY.
    """
    return _Search(grid, order_values or _fixed_order, tracer, max_nodes).run(0)


def solve(
    grid: Grid,
    tracer: Optional[Tracer] = None,
    max_nodes: Optional[int] = None,
    size: int = GRID_SIZE,
) -> Optional[Grid]:
    """
    Solve a grid on a private, shape-normalized copy.
    Returns the completed grid, or None when no solution exists.
    """
    working = normalize_grid(grid, size)
    if search(working, tracer=tracer, max_nodes=max_nodes):
        return working
    return None


def is_solvable(grid: Grid) -> bool:
    return solve(grid) is not None


def next_hint(grid: Grid) -> Optional[Hint]:
    """First empty cell (row-major) together with its value in the solved grid."""
    solution = solve(grid)
    if solution is None:
        return None
    working = normalize_grid(grid, solution.size)
    for r, row in enumerate(working.cells):
        for c, value in enumerate(row):
            if value == CellValue.EMPTY:
                return Hint(r, c, solution.cells[r][c])
    return None

