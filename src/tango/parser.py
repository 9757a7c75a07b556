"""Grid parser: convert untrusted puzzle data into well-shaped Grid objects.

Accepts what a hand-edited file or an image-to-grid step tends to produce:
- dicts keyed `cells` / `hConstraints` / `vConstraints` (snake_case keys also work)
- cell rows given as lists of tokens or as strings such as "SM..MS"
- loose tokens ("S", "sun", "=", "x", ...) and ragged or oversized matrices

Shapes are normalized by truncating extra entries and padding missing ones with
EMPTY / NONE, so downstream search never fails on shape noise alone.
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from .model import GRID_SIZE, CellValue, ConstraintType, Grid

_CELL_TOKENS: Dict[str, CellValue] = {
    "SUN": CellValue.SUN,
    "S": CellValue.SUN,
    "A": CellValue.SUN,
    "0": CellValue.SUN,
    "MOON": CellValue.MOON,
    "M": CellValue.MOON,
    "B": CellValue.MOON,
    "1": CellValue.MOON,
}

_CONSTRAINT_TOKENS: Dict[str, ConstraintType] = {
    "EQUAL": ConstraintType.EQUAL,
    "=": ConstraintType.EQUAL,
    "OPPOSITE": ConstraintType.OPPOSITE,
    "X": ConstraintType.OPPOSITE,
    "≠": ConstraintType.OPPOSITE,
}

_CELL_CHARS = {CellValue.SUN: "S", CellValue.MOON: "M", CellValue.EMPTY: "."}
_CONSTRAINT_CHARS = {ConstraintType.EQUAL: "=", ConstraintType.OPPOSITE: "x", ConstraintType.NONE: " "}


def _token(raw: Any) -> str:
    if raw is None:
        return ""
    if isinstance(raw, (CellValue, ConstraintType)):
        return raw.value
    return str(raw).strip().upper()


def parse_cell(raw: Any) -> CellValue:
    return _CELL_TOKENS.get(_token(raw), CellValue.EMPTY)


def parse_constraint(raw: Any) -> ConstraintType:
    return _CONSTRAINT_TOKENS.get(_token(raw), ConstraintType.NONE)


def _rows(raw: Any) -> List[Sequence[Any]]:
    if not isinstance(raw, (list, tuple)):
        return []
    rows: List[Sequence[Any]] = []
    for row in raw:
        if isinstance(row, str):
            rows.append(list(row))
        elif isinstance(row, (list, tuple)):
            rows.append(row)
        else:
            rows.append([])
    return rows


def _reshape(raw: Any, num_rows: int, num_cols: int, convert, filler) -> List[List[Any]]:
    rows = _rows(raw)[:num_rows]
    shaped = [[convert(v) for v in row[:num_cols]] for row in rows]
    for row in shaped:
        row.extend([filler] * (num_cols - len(row)))
    while len(shaped) < num_rows:
        shaped.append([filler] * num_cols)
    return shaped


def _first_present(payload: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in payload:
            return payload[key]
    return None


def parse_grid(raw: Any, size: int = GRID_SIZE) -> Grid:
    """Build a `size` x `size` Grid from a dict, tolerating bad tokens and shapes."""
    if isinstance(raw, Grid):
        return normalize_grid(raw, size)
    if not isinstance(raw, dict):
        raise TypeError("parse_grid expects a Grid or a dictionary")

    cells = raw.get("cells")
    h_raw = _first_present(raw, "hConstraints", "h_constraints")
    v_raw = _first_present(raw, "vConstraints", "v_constraints")

    return Grid(
        cells=_reshape(cells, size, size, parse_cell, CellValue.EMPTY),
        h_constraints=_reshape(h_raw, size, size - 1, parse_constraint, ConstraintType.NONE),
        v_constraints=_reshape(v_raw, size - 1, size, parse_constraint, ConstraintType.NONE),
    )


def normalize_grid(grid: Grid, size: int = GRID_SIZE) -> Grid:
    """Return a new, correctly dimensioned copy of `grid` (never aliases the input)."""
    return Grid(
        cells=_reshape(grid.cells, size, size, parse_cell, CellValue.EMPTY),
        h_constraints=_reshape(grid.h_constraints, size, size - 1, parse_constraint, ConstraintType.NONE),
        v_constraints=_reshape(grid.v_constraints, size - 1, size, parse_constraint, ConstraintType.NONE),
    )


def grid_to_dict(grid: Grid) -> Dict[str, Any]:
    return {
        "cells": [[c.value for c in row] for row in grid.cells],
        "hConstraints": [[c.value for c in row] for row in grid.h_constraints],
        "vConstraints": [[c.value for c in row] for row in grid.v_constraints],
    }


def format_grid(grid: Grid) -> str:
    """Render the board as text: S/M/. for cells, = and x between them."""
    lines: List[str] = []
    for r, row in enumerate(grid.cells):
        parts: List[str] = []
        for c, cell in enumerate(row):
            parts.append(_CELL_CHARS[cell])
            if c < len(row) - 1:
                parts.append(_CONSTRAINT_CHARS[grid.h_constraints[r][c]])
        lines.append("".join(parts))
        if r < grid.size - 1:
            lines.append(" ".join(_CONSTRAINT_CHARS[v] for v in grid.v_constraints[r]).rstrip())
    return "\n".join(lines)
