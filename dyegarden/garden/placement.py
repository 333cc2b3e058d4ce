"""Placement controller — turns a cell click into a place or an erase."""

from __future__ import annotations

import logging
from typing import Callable

from .grid import GridModel
from .models import CellCoord, ClickOutcome, SelectionState


log = logging.getLogger("dyegarden.placement")

Feedback = Callable[[], None]


def _no_feedback() -> None:
    pass


class PlacementController:
    """Dispatches cell clicks against the grid and the current selection.

    ``feedback`` is the device pulse (vibration) fired after a placement or
    a real erase. It is best-effort: failures are logged and dropped.
    """

    def __init__(self, grid: GridModel, selection: SelectionState | None = None,
                 feedback: Feedback | None = None) -> None:
        self.grid = grid
        self.selection = selection or SelectionState()
        self.feedback = feedback or _no_feedback

    # ── Selection ──────────────────────────────────────────────────

    def select_entry(self, entry_id: str) -> str | None:
        """Select a plant, or deselect it if already selected. Leaves erase mode."""
        self.selection.erase_mode = False
        if self.selection.selected_entry_id == entry_id:
            self.selection.selected_entry_id = None
        else:
            self.selection.selected_entry_id = entry_id
        return self.selection.selected_entry_id

    def toggle_erase(self) -> bool:
        self.selection.erase_mode = not self.selection.erase_mode
        self.selection.selected_entry_id = None
        return self.selection.erase_mode

    # ── Clicks ─────────────────────────────────────────────────────

    def click_cell(self, coord: CellCoord) -> ClickOutcome:
        coord = CellCoord(*coord)
        if not self.grid.contains(coord):
            return ClickOutcome.IGNORED

        if self.selection.erase_mode:
            if self.grid.erase(coord):
                self._pulse()
                return ClickOutcome.ERASED
            return ClickOutcome.IGNORED

        entry_id = self.selection.selected_entry_id
        if entry_id is None:
            return ClickOutcome.IGNORED

        self.grid.place(coord, entry_id)
        self._pulse()
        return ClickOutcome.PLACED

    def _pulse(self) -> None:
        try:
            self.feedback()
        except Exception as exc:
            log.debug("Device feedback failed: %s", exc)
