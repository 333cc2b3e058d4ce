"""Garden state dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple

from dyegarden.config import GRID_DEFAULTS


class CellCoord(NamedTuple):
    """One grid cell; column runs along x, row along z."""

    column: int
    row: int


PlacementMap = dict[CellCoord, str]


@dataclass
class GridDimensions:
    columns: int = GRID_DEFAULTS.columns
    rows: int = GRID_DEFAULTS.rows

    def contains(self, coord: CellCoord) -> bool:
        return 0 <= coord.column < self.columns and 0 <= coord.row < self.rows


@dataclass(frozen=True)
class ActiveFilterSets:
    """Selected sunlight and colour tags. An empty set filters nothing."""

    sun: frozenset[str] = frozenset()
    color: frozenset[str] = frozenset()


@dataclass
class SelectionState:
    """The plant to place, or erase mode. Never both."""

    selected_entry_id: str | None = None
    erase_mode: bool = False


@dataclass(frozen=True)
class SummaryLine:
    count: int


class ClickOutcome(Enum):
    PLACED = "placed"
    ERASED = "erased"
    IGNORED = "ignored"


@dataclass
class SizeInput:
    """Raw text of the width/length inputs, as typed by the user."""

    columns_text: str = str(GRID_DEFAULTS.columns)
    rows_text: str = str(GRID_DEFAULTS.rows)


@dataclass
class ResizeResult:
    dimensions: GridDimensions
    pruned: list[CellCoord] = field(default_factory=list)
