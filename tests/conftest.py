import pytest

from src.tango.model import CellValue, Grid, create_empty_grid

S = CellValue.SUN
M = CellValue.MOON


@pytest.fixture
def checkerboard() -> Grid:
    grid = create_empty_grid()
    for r in range(6):
        for c in range(6):
            grid.cells[r][c] = S if (r + c) % 2 == 0 else M
    return grid


@pytest.fixture
def paired_rows() -> Grid:
    """Rows alternate between SSMSMM and its complement."""
    top = [S, S, M, S, M, M]
    bottom = [M, M, S, M, S, S]
    grid = create_empty_grid()
    grid.cells = [list(top if r % 2 == 0 else bottom) for r in range(6)]
    return grid
