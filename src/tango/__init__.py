"""Tango (sun/moon) grid model, validator, backtracking solver, and puzzle generator."""

from .model import CellValue, ConstraintType, Difficulty, Grid, GRID_SIZE, create_empty_grid
from .validator import is_placement_valid
from .solver_core import solve, search, is_solvable, next_hint
from .generator import generate, generate_with_solution
from .parser import parse_grid, grid_to_dict

__all__ = [
    "CellValue",
    "ConstraintType",
    "Difficulty",
    "Grid",
    "GRID_SIZE",
    "create_empty_grid",
    "is_placement_valid",
    "solve",
    "search",
    "is_solvable",
    "next_hint",
    "generate",
    "generate_with_solution",
    "parse_grid",
    "grid_to_dict",
]
