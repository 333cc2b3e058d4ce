"""Plant catalog — load, validate, index, and serialize the plant list."""

from .models import (
    CatalogEntry, CatalogIndex, CatalogLoadError, CatalogResult, ValidationError,
)
from .loader import load_catalog, load_catalog_safe, parse_catalog, fetch_records
from .serialization import catalog_to_dict, entry_to_dict

__all__ = [
    # Models
    "CatalogEntry", "CatalogIndex", "CatalogLoadError", "CatalogResult",
    "ValidationError",
    # Loader
    "load_catalog", "load_catalog_safe", "parse_catalog", "fetch_records",
    # Serialization
    "catalog_to_dict", "entry_to_dict",
]
