"""Lineup map: proximity clustering of utility lineup markers on a 2D map."""

from .spatial import (
    Cluster,
    ClusteringConfig,
    Marker,
    Singleton,
    UtilityType,
    cluster_markers,
    cluster_with_diagnostics,
)

__version__ = "0.1.0"

__all__ = [
    "Cluster",
    "ClusteringConfig",
    "Marker",
    "Singleton",
    "UtilityType",
    "cluster_markers",
    "cluster_with_diagnostics",
]
