"""Tests for the bottom-sheet drag/snap state machine.

Run: python -m pytest tests/test_sheet.py -v
"""

from __future__ import annotations

import unittest

from dyegarden.config import SHEET_RULES, SheetRules
from dyegarden.panel import (
    GestureKind, PanelSheet, PointerSample, SheetState, Tab, nearest_anchor,
)


VIEWPORT = 800.0

# Binary-exact anchors so midpoints compare exactly.
EXACT_RULES = SheetRules(min_height=0.125, half_height=0.25, max_height=0.75)


def _drag(sheet: PanelSheet, dy: float, pointer_id: int = 1, start_y: float = 400.0):
    sheet.pointer_down(PointerSample(0, start_y, pointer_id))
    sheet.pointer_move(PointerSample(0, start_y + dy, pointer_id), VIEWPORT)
    return sheet.pointer_up(PointerSample(0, start_y + dy, pointer_id))


class TestInitialState(unittest.TestCase):

    def test_starts_half_open_on_filters(self):
        sheet = PanelSheet()
        self.assertEqual(sheet.height, SHEET_RULES.half_height)
        self.assertIs(sheet.state, SheetState.HALF)
        self.assertIs(sheet.active_tab, Tab.FILTERS)
        self.assertTrue(sheet.content_visible)


class TestDrag(unittest.TestCase):

    def test_move_follows_pointer_without_snapping(self):
        sheet = PanelSheet()
        sheet.pointer_down(PointerSample(0, 500, 1))
        h = sheet.pointer_move(PointerSample(0, 500 - 80, 1), VIEWPORT)
        self.assertAlmostEqual(h, 0.3 + 0.1)
        self.assertIs(sheet.state, SheetState.DRAGGING)

    def test_move_is_clamped(self):
        sheet = PanelSheet()
        sheet.pointer_down(PointerSample(0, 500, 1))
        self.assertEqual(sheet.pointer_move(PointerSample(0, -5000, 1), VIEWPORT), 0.9)
        self.assertEqual(sheet.pointer_move(PointerSample(0, 5000, 1), VIEWPORT), 0.05)

    def test_move_without_capture_ignored(self):
        sheet = PanelSheet()
        self.assertEqual(sheet.pointer_move(PointerSample(0, 0, 1), VIEWPORT), 0.3)
        self.assertIsNone(sheet.pointer_up(PointerSample(0, 0, 1)))

    def test_other_pointer_ignored(self):
        sheet = PanelSheet()
        sheet.pointer_down(PointerSample(0, 500, 1))
        sheet.pointer_move(PointerSample(0, 0, 2), VIEWPORT)
        self.assertEqual(sheet.height, 0.3)
        self.assertIsNone(sheet.pointer_up(PointerSample(0, 0, 2)))
        self.assertTrue(sheet.dragging)

    def test_drag_up_snaps_to_expanded(self):
        sheet = PanelSheet()
        result = _drag(sheet, -400)
        self.assertIs(result.kind, GestureKind.DRAG)
        self.assertEqual(sheet.height, 0.9)
        self.assertIs(sheet.state, SheetState.EXPANDED)

    def test_drag_down_snaps_to_collapsed_and_hides_content(self):
        sheet = PanelSheet()
        _drag(sheet, 180)
        self.assertEqual(sheet.height, 0.05)
        self.assertIs(sheet.state, SheetState.COLLAPSED)
        self.assertFalse(sheet.content_visible)

    def test_small_drag_snaps_back_to_half(self):
        sheet = PanelSheet()
        result = _drag(sheet, -40)
        self.assertIs(result.kind, GestureKind.DRAG)
        self.assertEqual(sheet.height, 0.3)

    def test_release_from_collapsed_starts_from_current_height(self):
        sheet = PanelSheet()
        _drag(sheet, 400)
        _drag(sheet, -600)
        self.assertEqual(sheet.height, 0.9)


class TestTap(unittest.TestCase):

    def test_tap_is_reported_not_acted_on(self):
        sheet = PanelSheet()
        result = _drag(sheet, 3)
        self.assertIs(result.kind, GestureKind.TAP)
        self.assertEqual(sheet.height, 0.3)

    def test_threshold_is_exclusive(self):
        sheet = PanelSheet()
        self.assertIs(_drag(sheet, 4).kind, GestureKind.TAP)
        self.assertIs(_drag(sheet, 4.5).kind, GestureKind.DRAG)


class TestSnapTieBreak(unittest.TestCase):

    def test_midpoint_half_max_snaps_to_half(self):
        sheet = PanelSheet(EXACT_RULES)
        # 0.25 → 0.5 is a 200 px upward drag on an 800 px viewport
        result = _drag(sheet, -200)
        self.assertEqual(result.released_height, 0.5)
        self.assertEqual(sheet.height, 0.25)

    def test_midpoint_min_half_snaps_to_min(self):
        self.assertEqual(nearest_anchor(0.1875, EXACT_RULES.anchors), 0.125)

    def test_nearest_otherwise(self):
        self.assertEqual(nearest_anchor(0.51, EXACT_RULES.anchors), 0.75)
        self.assertEqual(nearest_anchor(0.49, EXACT_RULES.anchors), 0.25)
        self.assertEqual(nearest_anchor(0.6, SHEET_RULES.anchors), 0.3)


class TestTabs(unittest.TestCase):

    def test_select_tab(self):
        sheet = PanelSheet()
        self.assertIs(sheet.select_tab("results"), Tab.RESULTS)
        self.assertIs(sheet.select_tab(Tab.FILTERS), Tab.FILTERS)

    def test_unknown_tab(self):
        with self.assertRaises(ValueError):
            PanelSheet().select_tab("settings")


if __name__ == "__main__":
    unittest.main()
