"""Catalog serialization — convert dataclasses to JSON-safe dicts."""

from __future__ import annotations

from typing import Any

from .models import CatalogEntry, CatalogResult


def catalog_to_dict(result: CatalogResult) -> dict:
    """Serialize a CatalogResult to a JSON-safe dict for the web API."""
    return {
        "ok": result.ok,
        "entry_count": len(result.entries),
        "entries": [entry_to_dict(e) for e in result.entries],
        "errors": [{"entry_id": e.entry_id, "field": e.field, "message": e.message}
                   for e in result.errors],
    }


def entry_to_dict(e: CatalogEntry) -> dict:
    """Serialize a CatalogEntry using the catalog file's field names."""
    d: dict[str, Any] = {
        "name": e.id,
        "sunlight": sorted(e.light_need),
        "colors": sorted(e.output_color),
        "plantsPerBlock": e.multiplicity,
        "image": e.image,
        "modelPath": e.model_path,
    }
    if e.specific_colors:
        d["specificColors"] = list(e.specific_colors)
    if e.info_url:
        d["infoUrl"] = e.info_url
    return d
