"""Instance layout — where the individual plants sit inside one cell."""

from __future__ import annotations

import math

from .models import CellCoord


def compute_sub_positions(n: int) -> list[tuple[float, float]]:
    """Spread ``n`` plants over the unit cell as ``(x, z)`` offsets in (0, 1).

    Items fill a near-square grid of ``ceil(sqrt(n))`` columns. Rows are
    spaced evenly top to bottom; each row, including a short last row, is
    centred on its own.
    """
    if n < 0:
        raise ValueError(f"instance count must be >= 0, got {n}")
    if n == 0:
        return []

    cols = math.ceil(math.sqrt(n))
    rows = math.ceil(n / cols)

    positions: list[tuple[float, float]] = []
    for r in range(rows):
        in_row = min(cols, n - r * cols)
        z = (r + 1) / (rows + 1)
        for i in range(in_row):
            positions.append(((i + 1) / (in_row + 1), z))
    return positions


def cell_positions(coord: CellCoord, n: int) -> list[tuple[float, float]]:
    """Offsets of ``compute_sub_positions`` in world units for one cell.

    Cells are unit boxes centred on ``(column, row)``.
    """
    return [
        (coord.column - 0.5 + x, coord.row - 0.5 + z)
        for x, z in compute_sub_positions(n)
    ]
