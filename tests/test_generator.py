"""Tests for random puzzle generation."""

import random

import pytest

from src.tango import generator
from src.tango.generator import (
    DIFFICULTY_PROFILES,
    GenerationError,
    MAX_SYNTHESIS_ATTEMPTS,
    generate,
    generate_with_solution,
    parse_difficulty,
    synthesize_solution,
)
from src.tango.model import CellValue, ConstraintType, Difficulty
from src.tango.solver_core import solve
from src.tango.validator import grid_violations
from src.utils.trace import Tracer


def test_profiles_match_difficulty_table():
    assert DIFFICULTY_PROFILES[Difficulty.EASY].cell_keep == 0.55
    assert DIFFICULTY_PROFILES[Difficulty.EASY].constraint_reveal == 0.40
    assert DIFFICULTY_PROFILES[Difficulty.MEDIUM].cell_keep == 0.40
    assert DIFFICULTY_PROFILES[Difficulty.MEDIUM].constraint_reveal == 0.30
    assert DIFFICULTY_PROFILES[Difficulty.HARD].cell_keep == 0.25
    assert DIFFICULTY_PROFILES[Difficulty.HARD].constraint_reveal == 0.20


def test_synthesized_solution_is_complete_and_consistent():
    solution = synthesize_solution(random.Random(3))
    assert solution.is_complete()
    assert grid_violations(solution) == []
    assert solution.constraint_count() == 0


def test_puzzle_is_derived_from_its_solution():
    puzzle, solution = generate_with_solution(Difficulty.EASY, seed=11)
    for r in range(6):
        for c in range(6):
            if puzzle.cells[r][c] != CellValue.EMPTY:
                assert puzzle.cells[r][c] == solution.cells[r][c]
    for r in range(6):
        for c in range(5):
            constraint = puzzle.h_constraints[r][c]
            same = solution.cells[r][c] == solution.cells[r][c + 1]
            if constraint == ConstraintType.EQUAL:
                assert same
            elif constraint == ConstraintType.OPPOSITE:
                assert not same
    for r in range(5):
        for c in range(6):
            constraint = puzzle.v_constraints[r][c]
            same = solution.cells[r][c] == solution.cells[r + 1][c]
            if constraint == ConstraintType.EQUAL:
                assert same
            elif constraint == ConstraintType.OPPOSITE:
                assert not same


@pytest.mark.parametrize("difficulty", list(Difficulty))
@pytest.mark.parametrize("seed", range(15))
def test_generated_puzzles_are_solvable(difficulty, seed):
    puzzle = generate(difficulty, seed=seed)
    solution = solve(puzzle)
    assert solution is not None
    assert solution.is_complete()
    assert grid_violations(solution) == []


def test_same_seed_reproduces_the_same_puzzle():
    assert generate(Difficulty.HARD, seed=42) == generate(Difficulty.HARD, seed=42)
    assert generate("medium", rng=random.Random(5)) == generate("medium", rng=random.Random(5))


def test_different_seeds_vary_the_board():
    boards = {str(generate_with_solution(Difficulty.EASY, seed=s)[1].cells) for s in range(10)}
    assert len(boards) > 1


def test_density_follows_difficulty():
    rng = random.Random(1234)
    samples = 120
    filled = {}
    revealed = {}
    for difficulty in Difficulty:
        puzzles = [generate(difficulty, rng=rng) for _ in range(samples)]
        filled[difficulty] = sum(p.filled_count() for p in puzzles) / samples
        revealed[difficulty] = sum(p.constraint_count() for p in puzzles) / samples

    assert filled[Difficulty.EASY] > filled[Difficulty.MEDIUM] > filled[Difficulty.HARD]
    assert revealed[Difficulty.EASY] > revealed[Difficulty.MEDIUM] > revealed[Difficulty.HARD]
    # 36 cells and 60 constraint slots per board.
    assert filled[Difficulty.EASY] == pytest.approx(36 * 0.55, abs=2.0)
    assert filled[Difficulty.HARD] == pytest.approx(36 * 0.25, abs=2.0)
    assert revealed[Difficulty.MEDIUM] == pytest.approx(60 * 0.30, abs=2.5)


def test_parse_difficulty_accepts_names_and_rejects_unknown():
    assert parse_difficulty("Easy") is Difficulty.EASY
    assert parse_difficulty("HARD") is Difficulty.HARD
    assert parse_difficulty(Difficulty.MEDIUM) is Difficulty.MEDIUM
    with pytest.raises(ValueError):
        parse_difficulty("Extreme")


def test_synthesis_restarts_are_bounded(monkeypatch):
    calls = []

    def _always_fail(grid, order_values=None, tracer=None, max_nodes=None):
        calls.append(grid)
        return False

    monkeypatch.setattr(generator, "search", _always_fail)
    tracer = Tracer()
    with pytest.raises(GenerationError):
        generate(Difficulty.EASY, seed=0, tracer=tracer)

    assert len(calls) == MAX_SYNTHESIS_ATTEMPTS
    # Every attempt starts from its own empty grid.
    assert len({id(g) for g in calls}) == MAX_SYNTHESIS_ATTEMPTS
    assert tracer.summary()["num_restarts"] == MAX_SYNTHESIS_ATTEMPTS


def test_synthesis_retries_after_a_failed_attempt(monkeypatch):
    real_search = generator.search
    attempts = []

    def _fail_once(grid, order_values=None, tracer=None, max_nodes=None):
        attempts.append(grid.filled_count())
        if len(attempts) == 1:
            return False
        return real_search(grid, order_values=order_values, tracer=tracer, max_nodes=max_nodes)

    monkeypatch.setattr(generator, "search", _fail_once)
    solution = synthesize_solution(random.Random(9))
    assert solution.is_complete()
    assert attempts == [0, 0]
