"""Marker-store boundary: record validation, filtering and render serialization."""

from .filters import LineupFilters, apply_filters, markers_for_map
from .models import (
    ClusterOut,
    LineupRow,
    MarkerOut,
    markers_from_rows,
    serialize_item,
    serialize_items,
)

__all__ = [
    "LineupFilters",
    "apply_filters",
    "markers_for_map",
    "ClusterOut",
    "LineupRow",
    "MarkerOut",
    "markers_from_rows",
    "serialize_item",
    "serialize_items",
]
