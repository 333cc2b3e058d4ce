"""
Garden session — the one owned state object for a configurator session.

A session ties together:
  catalog     the plant list (empty until loaded, or if loading failed)
  grid        garden size + placement map
  filters     selected sunlight / colour tags
  controller  selection, erase mode and cell clicks
  sheet       the bottom panel on narrow viewports
  link        share-link persistence against the browser location

Every mutation goes through a method here and is announced to
subscribers. Mutations of shared state (size, placements, filters) are
also written back to the location as a share token once the initial
restore has run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from dyegarden.catalog import CatalogIndex, CatalogResult, load_catalog_safe
from dyegarden.catalog.models import CatalogEntry
from dyegarden.garden import (
    ActiveFilterSets, CellCoord, ClickOutcome, GridDimensions, GridModel,
    PlacementController, SizeInput, SummaryLine, summarize, toggle_tag,
    visible_entries,
)
from dyegarden.garden.placement import Feedback
from dyegarden.panel import PanelSheet
from dyegarden.share import (
    Location, MemoryLocation, ShareLinkSync, ShareState, copy_share_url, share_url,
)


log = logging.getLogger("dyegarden.session")

Listener = Callable[["GardenSession"], None]


@dataclass
class GardenSession:
    location: Location = field(default_factory=MemoryLocation)
    feedback: Feedback | None = None
    catalog: CatalogIndex = field(default_factory=CatalogIndex)
    catalog_errors: list = field(default_factory=list)
    grid: GridModel = field(default_factory=GridModel)
    filters: ActiveFilterSets = field(default_factory=ActiveFilterSets)
    size_input: SizeInput = field(default_factory=SizeInput)
    sheet: PanelSheet = field(default_factory=PanelSheet)

    def __post_init__(self) -> None:
        self.controller = PlacementController(self.grid, feedback=self.feedback)
        self.link = ShareLinkSync(self.location)
        self._listeners: list[Listener] = []

    # ── Subscriptions ──────────────────────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns an unsubscribe callable."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _commit(self) -> None:
        self.link.state_changed(self.share_state())
        self._notify()

    # ── Catalog ────────────────────────────────────────────────────

    def set_catalog(self, result: CatalogResult) -> None:
        self.catalog = result.index()
        self.catalog_errors = list(result.errors)
        log.debug("Catalog set: %d plants, %d error(s)", len(self.catalog), len(self.catalog_errors))
        self._notify()

    def load_catalog(self, source: str | None = None) -> CatalogIndex:
        self.set_catalog(load_catalog_safe(source))
        return self.catalog

    # ── Restore ────────────────────────────────────────────────────

    def restore(self) -> ShareState:
        """Apply the state from the location fragment (once), then enable write-back."""
        state = self.link.restore(self.share_state())
        self.apply_share_state(state)
        self._commit()
        return state

    def apply_share_state(self, state: ShareState) -> None:
        self.grid.dimensions = GridDimensions(state.columns, state.rows)
        self.grid.placements = {}
        for coord, entry_id in state.placements.items():
            if self.grid.contains(coord):
                self.grid.place(coord, entry_id)
        self.filters = ActiveFilterSets(sun=state.sun, color=state.color)
        self.size_input = SizeInput(str(state.columns), str(state.rows))

    def share_state(self) -> ShareState:
        return ShareState(
            columns=self.grid.columns,
            rows=self.grid.rows,
            placements=dict(self.grid.placements),
            sun=self.filters.sun,
            color=self.filters.color,
        )

    # ── Grid size ──────────────────────────────────────────────────

    def edit_size(self, columns_text: str | int | None = None,
                  rows_text: str | int | None = None) -> GridDimensions:
        """Text typed into the width/length inputs."""
        if columns_text is not None:
            self.size_input.columns_text = str(columns_text)
        if rows_text is not None:
            self.size_input.rows_text = str(rows_text)
        before = (self.grid.columns, self.grid.rows, len(self.grid.placements))
        self.grid.resize(columns_text, rows_text)
        if (self.grid.columns, self.grid.rows, len(self.grid.placements)) != before:
            self._commit()
        return self.grid.dimensions

    def blur_size(self) -> SizeInput:
        """Leaving an input with empty text shows the current size again."""
        if self.size_input.columns_text == "":
            self.size_input.columns_text = str(self.grid.columns)
        if self.size_input.rows_text == "":
            self.size_input.rows_text = str(self.grid.rows)
        return self.size_input

    # ── Filters ────────────────────────────────────────────────────

    def toggle_sun(self, tag: str) -> frozenset[str]:
        self.filters = ActiveFilterSets(sun=toggle_tag(self.filters.sun, tag), color=self.filters.color)
        self._commit()
        return self.filters.sun

    def toggle_color(self, tag: str) -> frozenset[str]:
        self.filters = ActiveFilterSets(sun=self.filters.sun, color=toggle_tag(self.filters.color, tag))
        self._commit()
        return self.filters.color

    def visible_entries(self) -> list[CatalogEntry]:
        return visible_entries(self.catalog, self.filters.sun, self.filters.color)

    # ── Selection and clicks ───────────────────────────────────────

    # Selection is not part of the share token: announce, don't write back.
    def select_entry(self, entry_id: str) -> str | None:
        selected = self.controller.select_entry(entry_id)
        self._notify()
        return selected

    def toggle_erase(self) -> bool:
        erase_mode = self.controller.toggle_erase()
        self._notify()
        return erase_mode

    def click_cell(self, coord: CellCoord) -> ClickOutcome:
        outcome = self.controller.click_cell(coord)
        if outcome is not ClickOutcome.IGNORED:
            self._commit()
        return outcome

    # ── Results and sharing ────────────────────────────────────────

    def summary(self) -> dict[str, SummaryLine]:
        return summarize(self.grid.placements, self.catalog)

    def share_url(self, base_url: str) -> str:
        return share_url(base_url, self.share_state())

    def copy_share_url(self, base_url: str, clipboard: Callable[[str], None],
                       prompt: Callable[[str, str], None]) -> bool:
        return copy_share_url(self.share_url(base_url), clipboard, prompt)
