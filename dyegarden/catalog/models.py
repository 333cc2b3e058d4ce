"""Catalog dataclasses — typed representations of plant catalog records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator


@dataclass(frozen=True)
class CatalogEntry:
    id: str                             # plant name, unique
    light_need: frozenset[str]          # e.g. {"Full Sun", "Partial Sun"}
    output_color: frozenset[str]        # dye colours the plant yields
    multiplicity: int                   # plants per grid cell
    image: str = ""
    model_path: str = ""
    specific_colors: tuple[str, ...] = ()   # hex swatches for the results view
    info_url: str | None = None


@dataclass
class ValidationError:
    entry_id: str
    field: str
    message: str

    def __str__(self) -> str:
        return f"[{self.entry_id}] {self.field}: {self.message}"


class CatalogLoadError(Exception):
    """Raised when the catalog source cannot be read at all."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Cannot load catalog from '{source}': {reason}")


class CatalogIndex:
    """Ordered id → entry mapping, built once per catalog load.

    Iterates in catalog order. ``get`` returns None for unknown ids.
    """

    def __init__(self, entries: list[CatalogEntry] | None = None) -> None:
        self._entries: list[CatalogEntry] = list(entries or [])
        self._by_id: dict[str, CatalogEntry] = {e.id: e for e in self._entries}

    def get(self, entry_id: str) -> CatalogEntry | None:
        return self._by_id.get(entry_id)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._by_id

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def ids(self) -> list[str]:
        return [e.id for e in self._entries]


@dataclass
class CatalogResult:
    """Result of loading the catalog — entries + any validation errors."""
    entries: list[CatalogEntry] = field(default_factory=list)
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return len(self.errors) == 0

    def index(self) -> CatalogIndex:
        return CatalogIndex(self.entries)
