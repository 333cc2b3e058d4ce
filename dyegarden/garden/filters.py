"""Filter engine — which catalog entries match the sunlight/colour filters."""

from __future__ import annotations

from typing import Iterable

from dyegarden.catalog.models import CatalogEntry


SUNLIGHT_OPTIONS = ("Partial Sun", "Full Sun")
COLOR_OPTIONS = (
    "Yellow", "Orange", "Red", "Pink", "Purple",
    "Blue", "Green", "Brown", "Grey", "Black",
)


def _passes(tags: frozenset[str], active: frozenset[str]) -> bool:
    return not active or not tags.isdisjoint(active)


def visible_entries(
    catalog: Iterable[CatalogEntry],
    sun_filter: frozenset[str],
    color_filter: frozenset[str],
) -> list[CatalogEntry]:
    """Entries matching any selected sunlight AND any selected colour.

    An empty filter lets everything through. Catalog order is preserved.
    """
    return [
        e for e in catalog
        if _passes(e.light_need, sun_filter) and _passes(e.output_color, color_filter)
    ]


def toggle_tag(active: frozenset[str], tag: str) -> frozenset[str]:
    """Add ``tag`` if absent, remove it if present."""
    return active - {tag} if tag in active else active | {tag}
