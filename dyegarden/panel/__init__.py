"""Bottom panel (Filters / Results) for narrow viewports."""

from .sheet import (
    GestureKind, GestureResult, PanelSheet, PointerSample, SheetState, Tab,
    clamp, nearest_anchor,
)

__all__ = [
    "GestureKind", "GestureResult", "PanelSheet", "PointerSample", "SheetState",
    "Tab", "clamp", "nearest_anchor",
]
