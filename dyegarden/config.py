"""Shared configuration for the garden configurator.

Constants live in frozen dataclasses with a module-level singleton each,
so the grid, the panel sheet and the web server all read the same values.
A handful of values can be overridden from the environment (or a ``.env``
file at the repository root) with ``DYEGARDEN_*`` variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


ROOT = Path(__file__).resolve().parent.parent


# ── .env loader ────────────────────────────────────────────────────

def load_env(root: Path = ROOT) -> None:
    """Pull .env then .env.local into os.environ; the real environment wins."""
    for name in (".env", ".env.local"):
        load_dotenv(root / name, override=False)


# ── Grid ───────────────────────────────────────────────────────────

@dataclass(frozen=True)
class GridDefaults:
    """Starting garden size, in cells (one cell = 1 m²)."""

    columns: int = 2
    rows: int = 2

    layer: int = 0
    """Fixed vertical component of share-link cell keys ("col,layer,row")."""

    max_plants_per_cell: int = 64
    """Largest instance count the layout endpoint will lay out."""


# ── Panel sheet ────────────────────────────────────────────────────

@dataclass(frozen=True)
class SheetRules:
    """Drag/snap parameters for the bottom panel.

    Heights are fractions of the viewport height.
    """

    min_height: float = 0.05
    """Collapsed anchor: only the drag handle is shown."""

    half_height: float = 0.3
    """Initial anchor."""

    max_height: float = 0.9
    """Expanded anchor."""

    tap_threshold_px: float = 4.0
    """Vertical travel (px) at or below which a gesture counts as a tap."""

    collapsed_eps: float = 0.005
    """Heights within this of min_height render as collapsed."""

    @property
    def anchors(self) -> tuple[float, float, float]:
        """Snap targets in ascending order."""
        return (self.min_height, self.half_height, self.max_height)


# ── Catalog / server ───────────────────────────────────────────────

@dataclass(frozen=True)
class Settings:
    catalog_source: str = str(ROOT / "catalog" / "plants.json")
    """Path or http(s) URL of the plant catalog."""

    catalog_timeout_s: float = 10.0
    log_level: str = "INFO"
    public_url: str = "http://127.0.0.1:8000/"
    """Base URL used when building share links."""

    @classmethod
    def from_env(cls) -> "Settings":
        load_env()
        base = cls()
        return cls(
            catalog_source=os.environ.get("DYEGARDEN_CATALOG", base.catalog_source),
            catalog_timeout_s=float(os.environ.get("DYEGARDEN_CATALOG_TIMEOUT", base.catalog_timeout_s)),
            log_level=os.environ.get("DYEGARDEN_LOG_LEVEL", base.log_level),
            public_url=os.environ.get("DYEGARDEN_PUBLIC_URL", base.public_url),
        )


# Module-level singletons, importable everywhere.
GRID_DEFAULTS = GridDefaults()
SHEET_RULES = SheetRules()
