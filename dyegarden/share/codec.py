"""Share-link codec — the garden state as a URL-fragment token.

Payload (before percent-escaping) is compact JSON::

    {"w": 3, "h": 2, "blocks": {"0,0,1": "Woad"}, "sSun": ["Full Sun"], "sCol": []}

Block keys are ``"column,layer,row"`` with the layer fixed at 0. Encoding is
canonical (sorted blocks and tags) so re-encoding a decoded token yields
the same token.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote, unquote, urlsplit, urlunsplit

from dyegarden.config import GRID_DEFAULTS
from dyegarden.garden.models import CellCoord, GridDimensions


# Characters encodeURIComponent leaves alone.
_URI_COMPONENT_SAFE = "-_.!~*'()"

_FRAGMENT_STATE = re.compile(r"state=(.*)$")


class RestoreParseError(Exception):
    """Raised when a share token cannot be read as a JSON object at all."""

    def __init__(self, token: str, reason: str) -> None:
        self.token = token
        self.reason = reason
        super().__init__(f"Unreadable share token: {reason}")


@dataclass(frozen=True)
class ShareState:
    columns: int = GRID_DEFAULTS.columns
    rows: int = GRID_DEFAULTS.rows
    placements: dict[CellCoord, str] = field(default_factory=dict)
    sun: frozenset[str] = frozenset()
    color: frozenset[str] = frozenset()


# ── Cell keys ──────────────────────────────────────────────────────

def cell_key(coord: CellCoord) -> str:
    return f"{coord.column},{GRID_DEFAULTS.layer},{coord.row}"


def parse_cell_key(key: str) -> CellCoord | None:
    """``"c,l,r"`` → CellCoord, or None if malformed. The layer is discarded."""
    parts = key.split(",")
    if len(parts) != 3:
        return None
    try:
        column, _layer, row = (int(p) for p in parts)
    except ValueError:
        return None
    if column < 0 or row < 0:
        return None
    return CellCoord(column, row)


# ── Encode ─────────────────────────────────────────────────────────

def state_to_dict(state: ShareState) -> dict[str, Any]:
    """Serialize a ShareState to the JSON-safe payload dict."""
    ordered = sorted(state.placements.items(), key=lambda kv: (kv[0].column, kv[0].row))
    return {
        "w": state.columns,
        "h": state.rows,
        "blocks": {cell_key(c): entry_id for c, entry_id in ordered},
        "sSun": sorted(state.sun),
        "sCol": sorted(state.color),
    }


def encode(state: ShareState) -> str:
    payload = json.dumps(state_to_dict(state), separators=(",", ":"), ensure_ascii=False)
    return quote(payload, safe=_URI_COMPONENT_SAFE)


# ── Decode ─────────────────────────────────────────────────────────

def _positive_int(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        return None
    return value


def _tag_list(value: Any) -> frozenset[str] | None:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        return None
    return frozenset(value)


def _blocks(value: Any) -> dict[CellCoord, str] | None:
    if not isinstance(value, dict):
        return None
    placements: dict[CellCoord, str] = {}
    for key, entry_id in value.items():
        coord = parse_cell_key(key)
        if coord is None or not isinstance(entry_id, str):
            continue
        placements[coord] = entry_id
    return placements


def parse_state(data: Any, defaults: ShareState | None = None) -> ShareState:
    """Build a ShareState from a decoded payload dict.

    Each field is checked on its own; a missing or malformed field keeps
    the value from ``defaults``. Placements outside the resulting grid are
    dropped.
    """
    base = defaults or ShareState()
    if not isinstance(data, dict):
        raise RestoreParseError(repr(data)[:80], "payload is not a JSON object")

    columns = _positive_int(data.get("w")) or base.columns
    rows = _positive_int(data.get("h")) or base.rows
    placements = _blocks(data.get("blocks"))
    if placements is None:
        placements = dict(base.placements)
    sun = _tag_list(data.get("sSun"))
    color = _tag_list(data.get("sCol"))

    dims = GridDimensions(columns, rows)
    return ShareState(
        columns=columns,
        rows=rows,
        placements={c: e for c, e in placements.items() if dims.contains(c)},
        sun=base.sun if sun is None else sun,
        color=base.color if color is None else color,
    )


def decode(token: str, defaults: ShareState | None = None) -> ShareState:
    """Token → ShareState. Raises RestoreParseError if the token is unreadable."""
    try:
        payload = unquote(token, errors="strict")
    except UnicodeDecodeError as exc:
        raise RestoreParseError(token, f"bad percent-escape: {exc}") from exc
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise RestoreParseError(token, f"not JSON: {exc}") from exc
    except (ValueError, RecursionError) as exc:
        # oversized integer literals, pathological nesting
        raise RestoreParseError(token, f"unreadable JSON: {exc}") from exc
    return parse_state(data, defaults)


# ── Fragments and links ────────────────────────────────────────────

def fragment_for(token: str) -> str:
    return f"state={token}"


def token_from_fragment(fragment: str | None) -> str | None:
    """Pull the token out of ``#state=…``. None if there is none."""
    if not fragment:
        return None
    m = _FRAGMENT_STATE.search(fragment.lstrip("#"))
    return m.group(1) if m else None


def share_url(base_url: str, state: ShareState) -> str:
    """origin + path of ``base_url`` with the state fragment attached."""
    parts = urlsplit(base_url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", fragment_for(encode(state))))
