"""Grid model — garden dimensions and the cell → plant placement map."""

from __future__ import annotations

import logging
import re

from .models import CellCoord, GridDimensions, PlacementMap, ResizeResult


log = logging.getLogger("dyegarden.grid")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_dimension(value: str | int | None, current: int) -> int:
    """Coerce one size input to a dimension.

    Empty or non-numeric text keeps ``current``; numbers are read by their
    leading integer ("3.7" → 3) and clamped to at least 1.
    """
    if value is None:
        return current
    if isinstance(value, bool):
        return current
    if isinstance(value, int):
        return max(1, value)
    m = _LEADING_INT.match(value)
    if not m:
        return current
    return max(1, int(m.group(1)))


class GridModel:
    """Owns the garden size and the placement map.

    Every key of ``placements`` lies inside ``dimensions``; resizing prunes
    placements that fall outside and never adds any.
    """

    def __init__(self, dimensions: GridDimensions | None = None,
                 placements: PlacementMap | None = None) -> None:
        self.dimensions = dimensions or GridDimensions()
        self.placements: PlacementMap = {}
        for coord, entry_id in (placements or {}).items():
            coord = CellCoord(*coord)
            if self.dimensions.contains(coord):
                self.placements[coord] = entry_id

    @property
    def columns(self) -> int:
        return self.dimensions.columns

    @property
    def rows(self) -> int:
        return self.dimensions.rows

    def contains(self, coord: CellCoord) -> bool:
        return self.dimensions.contains(coord)

    def cells(self) -> list[CellCoord]:
        """All cells, row by row."""
        return [CellCoord(c, r) for r in range(self.rows) for c in range(self.columns)]

    def entry_at(self, coord: CellCoord) -> str | None:
        return self.placements.get(CellCoord(*coord))

    def resize(self, columns: str | int | None, rows: str | int | None) -> ResizeResult:
        """Apply new dimensions (free text or ints) and prune out-of-bounds cells."""
        new_dims = GridDimensions(
            columns=parse_dimension(columns, self.dimensions.columns),
            rows=parse_dimension(rows, self.dimensions.rows),
        )
        self.dimensions = new_dims

        pruned = [c for c in self.placements if not new_dims.contains(c)]
        for coord in pruned:
            del self.placements[coord]
        if pruned:
            log.debug("Resize to %dx%d pruned %d placement(s)",
                      new_dims.columns, new_dims.rows, len(pruned))
        return ResizeResult(dimensions=new_dims, pruned=pruned)

    def place(self, coord: CellCoord, entry_id: str) -> None:
        """Put ``entry_id`` in the cell, replacing any occupant."""
        self.placements[CellCoord(*coord)] = entry_id

    def erase(self, coord: CellCoord) -> bool:
        """Clear the cell. Returns False if it was already empty."""
        return self.placements.pop(CellCoord(*coord), None) is not None

    def clear(self) -> None:
        self.placements.clear()
