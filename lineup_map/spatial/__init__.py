"""
lineup_map/spatial: Proximity clustering of lineup markers.

This module groups nearby same-type markers into display clusters so the
map stays legible as marker density grows.
"""

from .clustering import (
    Cluster,
    ClusteringConfig,
    ClusteringDiagnostics,
    DisplayItem,
    Marker,
    Singleton,
    UtilityType,
    cluster_markers,
    cluster_with_diagnostics,
    sort_markers,
)
from .expand import (
    badge_count,
    expand,
    find_item,
    highlight_subset,
    index_items,
    is_cluster,
    is_singleton,
)
from .frames import (
    ClusterInfo,
    cluster_dataframe,
    label_cluster,
    markers_from_dataframe,
)
from .grid_index import GridIndex

__all__ = [
    # Types
    "Marker",
    "Singleton",
    "Cluster",
    "DisplayItem",
    "UtilityType",

    # Engine
    "ClusteringConfig",
    "ClusteringDiagnostics",
    "cluster_markers",
    "cluster_with_diagnostics",
    "sort_markers",
    "GridIndex",

    # Renderer helpers
    "badge_count",
    "expand",
    "find_item",
    "highlight_subset",
    "index_items",
    "is_cluster",
    "is_singleton",

    # DataFrame adapter
    "ClusterInfo",
    "cluster_dataframe",
    "label_cluster",
    "markers_from_dataframe",
]
