"""Tests for the share-link codec and the restore/write-back protocol.

Run: python -m pytest tests/test_share.py -v
"""

from __future__ import annotations

import json
import unittest
from urllib.parse import quote, unquote

from dyegarden.garden import CellCoord
from dyegarden.share import (
    ClipboardError, MemoryLocation, RestoreParseError, ShareLinkSync, ShareState,
    cell_key, copy_share_url, decode, encode, fragment_for, parse_cell_key, share_url,
    state_to_dict, token_from_fragment,
)


def _token(payload) -> str:
    return quote(json.dumps(payload), safe="")


SAMPLE_STATES = [
    ShareState(),
    ShareState(columns=1, rows=1),
    ShareState(columns=3, rows=2,
               placements={CellCoord(2, 1): "Woad", CellCoord(0, 0): "St John's Wort"},
               sun=frozenset({"Full Sun"}), color=frozenset({"Blue", "Yellow"})),
    ShareState(columns=12, rows=10,
               placements={CellCoord(c, r): f"p{(c * r) % 3}" for c in range(12) for r in range(10)},
               sun=frozenset({"Partial Sun", "Full Sun"})),
    ShareState(columns=2, rows=2, placements={CellCoord(1, 1): "Dyer's Chamomile"},
               color=frozenset({"Grün & Gelb"})),
]


class TestCellKeys(unittest.TestCase):

    def test_format(self):
        self.assertEqual(cell_key(CellCoord(3, 5)), "3,0,5")

    def test_parse(self):
        self.assertEqual(parse_cell_key("3,0,5"), CellCoord(3, 5))
        self.assertEqual(parse_cell_key("3,7,5"), CellCoord(3, 5))

    def test_parse_malformed(self):
        for key in ("", "1,2", "1,0,2,3", "a,0,1", "-1,0,0", "1.5,0,0"):
            self.assertIsNone(parse_cell_key(key), key)


class TestEncode(unittest.TestCase):

    def test_payload_fields(self):
        state = ShareState(columns=3, rows=2, placements={CellCoord(0, 1): "A"},
                           sun=frozenset({"Full Sun"}))
        payload = json.loads(unquote(encode(state)))
        self.assertEqual(payload, {"w": 3, "h": 2, "blocks": {"0,0,1": "A"},
                                   "sSun": ["Full Sun"], "sCol": []})

    def test_compact_and_escaped(self):
        token = encode(ShareState(placements={CellCoord(0, 0): "A"}))
        self.assertNotIn(" ", unquote(token))
        for ch in '{}":,# ':
            self.assertNotIn(ch, token)

    def test_canonical_regardless_of_insertion_order(self):
        a = ShareState(placements={CellCoord(1, 0): "A", CellCoord(0, 1): "B"})
        b = ShareState(placements={CellCoord(0, 1): "B", CellCoord(1, 0): "A"})
        self.assertEqual(encode(a), encode(b))

    def test_blocks_sorted_by_column_then_row(self):
        state = ShareState(columns=3, rows=3,
                           placements={CellCoord(1, 0): "x", CellCoord(0, 2): "y", CellCoord(0, 1): "z"})
        self.assertEqual(list(state_to_dict(state)["blocks"]), ["0,0,1", "0,0,2", "1,0,0"])


class TestDecode(unittest.TestCase):

    def test_single_block_scenario(self):
        token = _token({"w": 2, "h": 2, "blocks": {"0,0,0": "A"}, "sSun": [], "sCol": []})
        self.assertEqual(decode(token).placements, {CellCoord(0, 0): "A"})

    def test_round_trip_stability(self):
        for state in SAMPLE_STATES:
            token = encode(state)
            self.assertEqual(encode(decode(token)), token)
            self.assertEqual(decode(token), state)

    def test_unparsable_raises(self):
        oversized = quote('{"w":' + "1" * 5000 + "}", safe="")
        nested = quote("[" * 100000 + "]" * 100000, safe="")
        for token in ("", "not-json", "%7Bbroken", _token([1, 2]), _token("text"), "%FF%FE",
                      oversized, nested):
            with self.assertRaises(RestoreParseError, msg=token):
                decode(token)

    def test_bad_fields_keep_defaults(self):
        defaults = ShareState(columns=4, rows=5, sun=frozenset({"Full Sun"}))
        token = _token({"w": "wide", "h": 0, "blocks": [], "sSun": "Full Sun", "sCol": ["Red"]})
        state = decode(token, defaults)
        self.assertEqual((state.columns, state.rows), (4, 5))
        self.assertEqual(state.placements, {})
        self.assertEqual(state.sun, frozenset({"Full Sun"}))
        self.assertEqual(state.color, frozenset({"Red"}))

    def test_missing_fields_keep_defaults(self):
        defaults = ShareState(columns=3, rows=3, color=frozenset({"Blue"}))
        state = decode(_token({"w": 6}), defaults)
        self.assertEqual((state.columns, state.rows), (6, 3))
        self.assertEqual(state.color, frozenset({"Blue"}))

    def test_bool_dimension_rejected(self):
        state = decode(_token({"w": True, "h": 3}))
        self.assertEqual((state.columns, state.rows), (2, 3))

    def test_bad_block_entries_dropped(self):
        token = _token({"w": 3, "h": 3, "blocks": {"0,0,0": "A", "x,y": "B", "1,0,1": 7, "2,0,2": "C"}})
        self.assertEqual(decode(token).placements, {CellCoord(0, 0): "A", CellCoord(2, 2): "C"})

    def test_out_of_bounds_blocks_pruned(self):
        token = _token({"w": 2, "h": 2, "blocks": {"0,0,0": "A", "5,0,0": "B", "0,0,2": "C"}})
        self.assertEqual(decode(token).placements, {CellCoord(0, 0): "A"})

    def test_filters_with_non_strings_ignored(self):
        state = decode(_token({"sSun": ["Full Sun", 3]}))
        self.assertEqual(state.sun, frozenset())


class TestFragments(unittest.TestCase):

    def test_fragment_round_trip(self):
        token = encode(SAMPLE_STATES[2])
        self.assertEqual(token_from_fragment("#" + fragment_for(token)), token)
        self.assertEqual(token_from_fragment(fragment_for(token)), token)

    def test_no_state(self):
        self.assertIsNone(token_from_fragment(""))
        self.assertIsNone(token_from_fragment(None))
        self.assertIsNone(token_from_fragment("#about"))

    def test_share_url(self):
        url = share_url("https://garden.example/plan/?ref=x#old", ShareState())
        self.assertTrue(url.startswith("https://garden.example/plan/#state="))
        self.assertEqual(decode(token_from_fragment(url.split("#", 1)[1])), ShareState())


class TestShareLinkSync(unittest.TestCase):

    def test_no_write_before_restore(self):
        loc = MemoryLocation(fragment_for(encode(SAMPLE_STATES[2])))
        sync = ShareLinkSync(loc)
        self.assertFalse(sync.state_changed(ShareState()))
        self.assertEqual(loc.writes, 0)
        self.assertEqual(sync.restore(ShareState()), SAMPLE_STATES[2])

    def test_write_after_restore_replaces(self):
        loc = MemoryLocation()
        sync = ShareLinkSync(loc)
        sync.restore(ShareState())
        state = ShareState(placements={CellCoord(1, 1): "A"})
        self.assertTrue(sync.state_changed(state))
        self.assertTrue(sync.state_changed(state))
        self.assertEqual(loc.writes, 2)
        self.assertEqual(loc.fragment, fragment_for(encode(state)))

    def test_restore_only_once(self):
        sync = ShareLinkSync(MemoryLocation())
        sync.restore(ShareState())
        with self.assertRaises(RuntimeError):
            sync.restore(ShareState())

    def test_broken_link_falls_back_and_enables_writes(self):
        loc = MemoryLocation("#state=%7Bnot-json")
        sync = ShareLinkSync(loc)
        defaults = ShareState(columns=2, rows=2)
        with self.assertLogs("dyegarden.share", level="WARNING"):
            state = sync.restore(defaults)
        self.assertEqual(state, defaults)
        self.assertTrue(sync.restored)
        self.assertTrue(sync.state_changed(state))


class TestCopyShareUrl(unittest.TestCase):

    def test_clipboard_success(self):
        copied, prompted = [], []
        ok = copy_share_url("https://x/#state=1", copied.append, lambda m, u: prompted.append(u))
        self.assertTrue(ok)
        self.assertEqual(copied, ["https://x/#state=1"])
        self.assertEqual(prompted, [])

    def test_clipboard_failure_prompts(self):
        prompted = []

        def denied(_url):
            raise ClipboardError("permission denied")

        with self.assertLogs("dyegarden.share", level="ERROR"):
            ok = copy_share_url("https://x/#state=1", denied, lambda m, u: prompted.append((m, u)))
        self.assertFalse(ok)
        self.assertEqual(prompted, [("Copy this URL:", "https://x/#state=1")])

    def test_foreign_clipboard_error_is_wrapped(self):
        prompted = []

        def broken(_url):
            raise OSError("no display")

        with self.assertLogs("dyegarden.share", level="ERROR") as logs:
            ok = copy_share_url("https://x/#state=1", broken, lambda m, u: prompted.append(u))
        self.assertFalse(ok)
        self.assertEqual(prompted, ["https://x/#state=1"])
        self.assertIn("OSError: no display", logs.output[0])


if __name__ == "__main__":
    unittest.main()
