"""Garden — the grid, what is planted where, and what it adds up to.

Submodules:
  models     State dataclasses (cells, dimensions, filters, selection).
  grid       GridModel: size inputs, placement map, pruning on resize.
  filters    Sunlight/colour filtering of the catalog.
  placement  PlacementController: click → place / erase.
  summary    Plant counts per catalog entry.
  layout     Sub-cell positions for the individual plants.
"""

from .models import (
    ActiveFilterSets, CellCoord, ClickOutcome, GridDimensions, PlacementMap,
    ResizeResult, SelectionState, SizeInput, SummaryLine,
)
from .grid import GridModel, parse_dimension
from .filters import COLOR_OPTIONS, SUNLIGHT_OPTIONS, toggle_tag, visible_entries
from .placement import PlacementController
from .summary import summarize, summary_to_dict
from .layout import cell_positions, compute_sub_positions

__all__ = [
    # Models
    "ActiveFilterSets", "CellCoord", "ClickOutcome", "GridDimensions",
    "PlacementMap", "ResizeResult", "SelectionState", "SizeInput", "SummaryLine",
    # Grid
    "GridModel", "parse_dimension",
    # Filters
    "COLOR_OPTIONS", "SUNLIGHT_OPTIONS", "toggle_tag", "visible_entries",
    # Placement
    "PlacementController",
    # Summary
    "summarize", "summary_to_dict",
    # Layout
    "cell_positions", "compute_sub_positions",
]
