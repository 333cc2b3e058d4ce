"""Catalog loader — reads the plant list, parses and validates records."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import requests

from dyegarden.config import Settings

from .models import CatalogEntry, CatalogLoadError, CatalogResult, ValidationError


log = logging.getLogger("dyegarden.catalog")


# ── Validation ─────────────────────────────────────────────────────

def _validate_entry(entry: CatalogEntry) -> list[ValidationError]:
    """Run all validation checks on a single entry."""
    errs: list[ValidationError] = []
    eid = entry.id

    if not eid.strip():
        errs.append(ValidationError(eid, "name", "Must not be blank"))
    if entry.multiplicity <= 0:
        errs.append(ValidationError(eid, "plantsPerBlock", "Must be > 0"))
    if not entry.light_need:
        errs.append(ValidationError(eid, "sunlight", "No sunlight condition listed"))

    return errs


# ── Parsing ────────────────────────────────────────────────────────

def _parse_tags(value) -> frozenset[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise TypeError(f"expected a list of strings, got {value!r}")
    return frozenset(value)


def _parse_str(data: dict, key: str, default: str | None = ""):
    value = data.get(key, default)
    if value is not None and not isinstance(value, str):
        raise TypeError(f"{key} must be a string, got {value!r}")
    return value


def _parse_swatches(value) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise TypeError(f"specificColors must be a list of strings, got {value!r}")
    return tuple(value)


def _parse_entry(data: dict) -> CatalogEntry:
    multiplicity = data["plantsPerBlock"]
    if isinstance(multiplicity, bool) or not isinstance(multiplicity, int):
        raise TypeError(f"plantsPerBlock must be an integer, got {multiplicity!r}")
    name = data["name"]
    if not isinstance(name, str):
        raise TypeError(f"name must be a string, got {name!r}")
    return CatalogEntry(
        id=name,
        light_need=_parse_tags(data["sunlight"]),
        output_color=_parse_tags(data["colors"]),
        multiplicity=multiplicity,
        image=_parse_str(data, "image") or "",
        model_path=_parse_str(data, "modelPath") or "",
        specific_colors=_parse_swatches(data.get("specificColors")),
        info_url=_parse_str(data, "infoUrl", None) or None,
    )


def parse_catalog(records) -> CatalogResult:
    """Parse an already-decoded list of catalog records.

    Records that fail to parse or validate are skipped (error recorded).
    Later records reusing an earlier id are dropped.
    """
    entries: list[CatalogEntry] = []
    errors: list[ValidationError] = []

    if not isinstance(records, list):
        errors.append(ValidationError("_catalog", "root", "Expected a JSON list of plants"))
        return CatalogResult(entries=entries, errors=errors)

    seen: set[str] = set()
    for i, raw in enumerate(records):
        label = raw.get("name", f"#{i}") if isinstance(raw, dict) else f"#{i}"
        try:
            entry = _parse_entry(raw)
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            errors.append(ValidationError(str(label), "parse", f"Missing/invalid field: {exc}"))
            continue

        entry_errors = _validate_entry(entry)
        if entry_errors:
            errors.extend(entry_errors)
            continue

        if entry.id in seen:
            errors.append(ValidationError(entry.id, "name", "Duplicate plant name"))
            continue
        seen.add(entry.id)
        entries.append(entry)

    return CatalogResult(entries=entries, errors=errors)


# ── Fetching ───────────────────────────────────────────────────────

def fetch_records(source: str, timeout_s: float = 10.0):
    """Read the raw record list from a file path or an http(s) URL.

    Raises CatalogLoadError on any transport or decode failure.
    """
    if source.startswith(("http://", "https://")):
        try:
            resp = requests.get(source, timeout=timeout_s)
            resp.raise_for_status()
            return resp.json()
        except (requests.RequestException, ValueError) as exc:
            raise CatalogLoadError(source, str(exc)) from exc

    try:
        return json.loads(Path(source).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise CatalogLoadError(source, f"Parse error: {exc}") from exc
    except OSError as exc:
        raise CatalogLoadError(source, f"Read error: {exc}") from exc


# ── Public API ─────────────────────────────────────────────────────

def load_catalog(source: str | None = None, timeout_s: float | None = None) -> CatalogResult:
    """Load and validate the catalog. Raises CatalogLoadError."""
    settings = Settings.from_env()
    src = source or settings.catalog_source
    records = fetch_records(src, timeout_s or settings.catalog_timeout_s)
    result = parse_catalog(records)
    for err in result.errors:
        log.warning("Catalog record skipped: %s", err)
    log.info("Loaded %d plants from %s", len(result.entries), src)
    return result


def load_catalog_safe(source: str | None = None, timeout_s: float | None = None) -> CatalogResult:
    """Like load_catalog, but a failed load yields an empty catalog.

    The failure is logged and recorded on the result; it is never retried.
    """
    try:
        return load_catalog(source, timeout_s)
    except CatalogLoadError as exc:
        log.error("%s; continuing with an empty catalog", exc)
        return CatalogResult(
            entries=[],
            errors=[ValidationError("_catalog", "source", exc.reason)],
        )
