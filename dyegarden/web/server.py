"""
FastAPI web server — exposes one garden session to the browser front end.

Every mutating route answers with the full state, including the share
fragment the client should put in its location bar with replaceState.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from dyegarden.catalog import CatalogResult, catalog_to_dict
from dyegarden.config import GRID_DEFAULTS, Settings
from dyegarden.garden import (
    COLOR_OPTIONS, SUNLIGHT_OPTIONS, CellCoord, cell_positions, compute_sub_positions,
    summary_to_dict,
)
from dyegarden.panel import Tab
from dyegarden.share import MemoryLocation, cell_key
from dyegarden.session import GardenSession


log = logging.getLogger("dyegarden.server")

settings = Settings.from_env()

# ── App ────────────────────────────────────────────────────────────

app = FastAPI(title="Dye Garden Configurator")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Session state (persists across requests) ───────────────────────

_session: GardenSession | None = None


def _get_session() -> GardenSession:
    global _session
    if _session is None:
        _session = _new_session("")
    return _session


def _new_session(fragment: str) -> GardenSession:
    sess = GardenSession(location=MemoryLocation(fragment))
    sess.load_catalog(settings.catalog_source)
    sess.restore()
    return sess


def _state_dict(sess: GardenSession) -> dict[str, Any]:
    return {
        "columns": sess.grid.columns,
        "rows": sess.grid.rows,
        "size_input": {
            "columns": sess.size_input.columns_text,
            "rows": sess.size_input.rows_text,
        },
        "blocks": {cell_key(c): e for c, e in sorted(sess.grid.placements.items())},
        "sun": sorted(sess.filters.sun),
        "color": sorted(sess.filters.color),
        "selected": sess.controller.selection.selected_entry_id,
        "erase_mode": sess.controller.selection.erase_mode,
        "visible": [e.id for e in sess.visible_entries()],
        "summary": summary_to_dict(sess.summary(), sess.catalog),
        "sheet": {
            "height": sess.sheet.height,
            "state": sess.sheet.state.value,
            "tab": sess.sheet.active_tab.value,
            "content_visible": sess.sheet.content_visible,
        },
        "fragment": sess.location.fragment,
    }


# ── Models ─────────────────────────────────────────────────────────

class RestoreRequest(BaseModel):
    fragment: str = ""


class ResizeRequest(BaseModel):
    columns: str | int | None = None
    rows: str | int | None = None
    blur: bool = False


class FilterToggleRequest(BaseModel):
    kind: str = Field(..., description="'sun' or 'color'")
    tag: str


class SelectRequest(BaseModel):
    entry_id: str


class CellClickRequest(BaseModel):
    column: int = Field(..., ge=0)
    row: int = Field(..., ge=0)


class TabRequest(BaseModel):
    tab: str


# ── Routes ─────────────────────────────────────────────────────────

@app.get("/api/catalog")
def get_catalog():
    sess = _get_session()
    result = catalog_to_dict(CatalogResult(entries=list(sess.catalog), errors=sess.catalog_errors))
    result["options"] = {"sunlight": list(SUNLIGHT_OPTIONS), "colors": list(COLOR_OPTIONS)}
    return result


@app.get("/api/state")
def get_state():
    return _state_dict(_get_session())


@app.post("/api/restore")
def restore(req: RestoreRequest):
    """Start a session from the client's location fragment."""
    global _session
    _session = _new_session(req.fragment)
    log.info("Session started from fragment (%d chars)", len(req.fragment))
    return _state_dict(_session)


@app.post("/api/reset")
def reset_session():
    global _session
    _session = _new_session("")
    return {"status": "ok"}


@app.post("/api/resize")
def resize(req: ResizeRequest):
    sess = _get_session()
    sess.edit_size(req.columns, req.rows)
    if req.blur:
        sess.blur_size()
    return _state_dict(sess)


@app.post("/api/filters/toggle")
def toggle_filter(req: FilterToggleRequest):
    sess = _get_session()
    if req.kind == "sun":
        sess.toggle_sun(req.tag)
    elif req.kind == "color":
        sess.toggle_color(req.tag)
    else:
        raise HTTPException(400, f"Unknown filter kind '{req.kind}'")
    return _state_dict(sess)


@app.post("/api/select")
def select(req: SelectRequest):
    sess = _get_session()
    sess.select_entry(req.entry_id)
    return _state_dict(sess)


@app.post("/api/erase")
def toggle_erase():
    sess = _get_session()
    sess.toggle_erase()
    return _state_dict(sess)


@app.post("/api/cells/click")
def click_cell(req: CellClickRequest):
    sess = _get_session()
    outcome = sess.click_cell(CellCoord(req.column, req.row))
    return {"outcome": outcome.value, **_state_dict(sess)}


@app.post("/api/sheet/tab")
def select_tab(req: TabRequest):
    sess = _get_session()
    try:
        sess.sheet.select_tab(req.tab)
    except ValueError:
        raise HTTPException(400, f"Unknown tab '{req.tab}', expected one of {[t.value for t in Tab]}")
    return _state_dict(sess)


@app.get("/api/summary")
def get_summary():
    sess = _get_session()
    return {"summary": summary_to_dict(sess.summary(), sess.catalog)}


@app.get("/api/share")
def get_share(base_url: str | None = None):
    sess = _get_session()
    return {"url": sess.share_url(base_url or settings.public_url)}


@app.get("/api/layout/{n}")
def get_layout(n: int, column: int | None = None, row: int | None = None):
    """Sub-cell plant positions; world coordinates when a cell is given."""
    if not 0 <= n <= GRID_DEFAULTS.max_plants_per_cell:
        raise HTTPException(400, f"n must be between 0 and {GRID_DEFAULTS.max_plants_per_cell}")
    if column is not None and row is not None:
        positions = cell_positions(CellCoord(column, row), n)
    else:
        positions = compute_sub_positions(n)
    return {"n": n, "positions": [list(p) for p in positions]}


# ── Entry point ────────────────────────────────────────────────────

def main(host: str = "127.0.0.1", port: int = 8000):
    import uvicorn
    uvicorn.run("dyegarden.web.server:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    main()
