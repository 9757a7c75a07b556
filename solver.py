"""Top-level Tango solve interface.

Expose `solve_puzzle(puzzle)` that accepts either a Grid or a raw puzzle dictionary
compatible with `src.tango.parser.parse_grid`.
"""

import time
from dataclasses import dataclass
from typing import Any, Optional

from src.tango import solver_core
from src.tango.model import Grid
from src.tango.parser import parse_grid
from src.utils.trace import get_tracer

NO_SOLUTION_MESSAGE = "No solution found! Please check your constraints."


@dataclass
class SolveResult:
    solved: bool
    grid: Optional[Grid] = None
    duration_ms: float = 0.0
    error: Optional[str] = None


def solve_puzzle(puzzle: Any) -> SolveResult:
    """
    Solve a puzzle and report whether a full board was found.
    Accepts:
      - Grid instances (shape-normalized before solving)
      - Raw puzzle dictionaries (parsed via `parse_grid`); a nested "grid" dict is unwrapped
    """
    if isinstance(puzzle, Grid):
        grid = puzzle
    elif isinstance(puzzle, dict):
        raw = puzzle.get("grid") if isinstance(puzzle.get("grid"), dict) else puzzle
        grid = parse_grid(raw)
    else:
        raise TypeError("solve_puzzle expects a Grid instance or puzzle dictionary")

    start = time.perf_counter()
    solution = solver_core.solve(grid, tracer=get_tracer())
    duration_ms = (time.perf_counter() - start) * 1000.0

    if solution is None:
        return SolveResult(solved=False, duration_ms=duration_ms, error=NO_SOLUTION_MESSAGE)
    return SolveResult(solved=True, grid=solution, duration_ms=duration_ms)


__all__ = ["solve_puzzle", "SolveResult"]
