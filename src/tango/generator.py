"""Random puzzle generation: synthesize a full board, then erase cells and reveal hints."""

import random
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple, Union

from .model import CellValue, ConstraintType, Difficulty, Grid, create_empty_grid
from .solver_core import search
from src.utils.trace import Tracer

MAX_SYNTHESIS_ATTEMPTS = 100


class GenerationError(RuntimeError):
    """Raised when no full solution could be synthesized within the attempt bound."""


@dataclass(frozen=True)
class DifficultyProfile:
    cell_keep: float
    constraint_reveal: float


DIFFICULTY_PROFILES: Dict[Difficulty, DifficultyProfile] = {
    Difficulty.EASY: DifficultyProfile(cell_keep=0.55, constraint_reveal=0.40),
    Difficulty.MEDIUM: DifficultyProfile(cell_keep=0.40, constraint_reveal=0.30),
    Difficulty.HARD: DifficultyProfile(cell_keep=0.25, constraint_reveal=0.20),
}


def parse_difficulty(value: Union[Difficulty, str]) -> Difficulty:
    if isinstance(value, Difficulty):
        return value
    lowered = str(value).strip().lower()
    for difficulty in Difficulty:
        if difficulty.value.lower() == lowered or difficulty.name.lower() == lowered:
            return difficulty
    raise ValueError(f"Unknown difficulty: {value!r}")


def synthesize_solution(rng: random.Random, tracer: Optional[Tracer] = None) -> Grid:
    """Fill an unconstrained board, trying SUN/MOON in a fresh random order per cell."""

    def _shuffled(candidates: Sequence[CellValue]) -> Sequence[CellValue]:
        order = list(candidates)
        rng.shuffle(order)
        return order

    for attempt in range(1, MAX_SYNTHESIS_ATTEMPTS + 1):
        grid = create_empty_grid()
        if search(grid, order_values=_shuffled, tracer=tracer):
            return grid
        if tracer:
            tracer.log_restart(attempt)
    raise GenerationError(f"No full solution after {MAX_SYNTHESIS_ATTEMPTS} attempts")


def _relation(a: CellValue, b: CellValue) -> ConstraintType:
    return ConstraintType.EQUAL if a == b else ConstraintType.OPPOSITE


def generate_with_solution(
    difficulty: Union[Difficulty, str],
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    tracer: Optional[Tracer] = None,
) -> Tuple[Grid, Grid]:
    """
    Return (puzzle, full_solution). Every revealed constraint is read off the full
    solution, so the puzzle is always solvable; uniqueness is not checked.
    """
    profile = DIFFICULTY_PROFILES[parse_difficulty(difficulty)]
    rng = rng or random.Random(seed)

    solution = synthesize_solution(rng, tracer)
    puzzle = solution.copy()
    size = solution.size

    for r in range(size):
        for c in range(size):
            if rng.random() > profile.cell_keep:
                puzzle.cells[r][c] = CellValue.EMPTY

    for r in range(size):
        for c in range(size - 1):
            if rng.random() < profile.constraint_reveal:
                puzzle.h_constraints[r][c] = _relation(solution.cells[r][c], solution.cells[r][c + 1])
            else:
                puzzle.h_constraints[r][c] = ConstraintType.NONE

    for r in range(size - 1):
        for c in range(size):
            if rng.random() < profile.constraint_reveal:
                puzzle.v_constraints[r][c] = _relation(solution.cells[r][c], solution.cells[r + 1][c])
            else:
                puzzle.v_constraints[r][c] = ConstraintType.NONE

    return puzzle, solution


def generate(
    difficulty: Union[Difficulty, str],
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    tracer: Optional[Tracer] = None,
) -> Grid:
    puzzle, _ = generate_with_solution(difficulty, rng=rng, seed=seed, tracer=tracer)
    return puzzle
