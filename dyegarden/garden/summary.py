"""Aggregation — how many plants of each kind the garden needs."""

from __future__ import annotations

from collections import Counter
from typing import Any, Iterable, Mapping

from dyegarden.catalog.models import CatalogIndex

from .models import CellCoord, SummaryLine


def summarize(placements: Mapping[CellCoord, str] | Iterable[tuple[CellCoord, str]],
              catalog: CatalogIndex) -> dict[str, SummaryLine]:
    """Sum each placed plant's multiplicity over its occupied cells.

    Ids the catalog does not know (e.g. from an old share link) are
    skipped. Keys follow catalog order.
    """
    items = placements.items() if isinstance(placements, Mapping) else placements
    cells_per_entry = Counter(entry_id for _, entry_id in items)

    summary: dict[str, SummaryLine] = {}
    for entry in catalog:
        cells = cells_per_entry.get(entry.id, 0)
        if cells:
            summary[entry.id] = SummaryLine(count=cells * entry.multiplicity)
    return summary


def summary_to_dict(summary: dict[str, SummaryLine], catalog: CatalogIndex) -> list[dict[str, Any]]:
    """Rows for the results view: name, amount, dye swatches, info link."""
    rows = []
    for entry_id, line in summary.items():
        entry = catalog.get(entry_id)
        rows.append({
            "name": entry_id,
            "count": line.count,
            "specific_colors": list(entry.specific_colors) if entry else [],
            "info_url": entry.info_url if entry else None,
        })
    return rows
