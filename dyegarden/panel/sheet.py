"""Bottom-sheet drag/snap state machine for narrow viewports.

States:
- COLLAPSED: height at the min anchor; only the drag handle is rendered
- HALF:      the initial anchor
- EXPANDED:  the max anchor
- DRAGGING:  pointer captured; height follows the pointer within [min, max]

On release the height snaps to the nearest anchor. When the release
height is exactly between two anchors the lower one wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from dyegarden.config import SHEET_RULES, SheetRules


class SheetState(Enum):
    COLLAPSED = "collapsed"
    HALF = "half"
    EXPANDED = "expanded"
    DRAGGING = "dragging"


class Tab(Enum):
    FILTERS = "filters"
    RESULTS = "results"


class GestureKind(Enum):
    TAP = "tap"
    DRAG = "drag"


@dataclass(frozen=True)
class PointerSample:
    """The parts of a pointer event the sheet needs (viewport pixels)."""

    x: float
    y: float
    pointer_id: int


@dataclass(frozen=True)
class GestureResult:
    kind: GestureKind
    released_height: float
    height: float            # after snapping


def clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def nearest_anchor(height: float, anchors: tuple[float, ...]) -> float:
    """Closest anchor; on a tie the first (lowest) one is kept."""
    best = anchors[0]
    best_d = abs(height - best)
    for a in anchors[1:]:
        d = abs(height - a)
        if d < best_d:
            best, best_d = a, d
    return best


class PanelSheet:
    def __init__(self, rules: SheetRules = SHEET_RULES) -> None:
        self.rules = rules
        self.height = rules.half_height
        self.active_tab = Tab.FILTERS
        self._pointer_id: int | None = None
        self._start_y = 0.0
        self._start_height = self.height
        self._moved = False

    # ── Derived ────────────────────────────────────────────────────

    @property
    def dragging(self) -> bool:
        return self._pointer_id is not None

    @property
    def state(self) -> SheetState:
        if self.dragging:
            return SheetState.DRAGGING
        if self.height == self.rules.min_height:
            return SheetState.COLLAPSED
        if self.height == self.rules.max_height:
            return SheetState.EXPANDED
        return SheetState.HALF

    @property
    def content_visible(self) -> bool:
        """Tabs and the active tab's content render above the collapsed anchor."""
        return self.height > self.rules.min_height + self.rules.collapsed_eps

    def select_tab(self, tab: Tab | str) -> Tab:
        self.active_tab = Tab(tab)
        return self.active_tab

    # ── Pointer events ─────────────────────────────────────────────

    def pointer_down(self, sample: PointerSample) -> None:
        self._pointer_id = sample.pointer_id
        self._start_y = sample.y
        self._start_height = self.height
        self._moved = False

    def pointer_move(self, sample: PointerSample, viewport_height: float) -> float:
        """Follow the pointer. Never snaps; returns the live height."""
        if not self.dragging or sample.pointer_id != self._pointer_id:
            return self.height
        dy = sample.y - self._start_y
        if abs(dy) > self.rules.tap_threshold_px:
            self._moved = True
        self.height = clamp(
            self._start_height - dy / viewport_height,
            self.rules.min_height, self.rules.max_height,
        )
        return self.height

    def pointer_up(self, sample: PointerSample) -> GestureResult | None:
        """Release the pointer and snap. None if the pointer was not captured."""
        if not self.dragging or sample.pointer_id != self._pointer_id:
            return None
        self._pointer_id = None
        released = self.height
        self.height = nearest_anchor(released, self.rules.anchors)
        kind = GestureKind.DRAG if self._moved else GestureKind.TAP
        return GestureResult(kind=kind, released_height=released, height=self.height)
