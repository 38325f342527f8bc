"""
DataFrame adapter for the clustering engine.

Lets callers holding lineup rows in a :class:`~pandas.DataFrame` cluster
them directly and get back:
1. A copy of the frame with a ``cluster`` column (-1 = singleton)
2. One :class:`ClusterInfo` per cluster, with a deterministic label
3. The run's :class:`ClusteringDiagnostics`
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd

from .clustering import (
    Cluster,
    ClusteringConfig,
    ClusteringDiagnostics,
    Marker,
    cluster_with_diagnostics,
)


@dataclass
class ClusterInfo:
    """Information about a single cluster."""

    cluster_id: int
    """Cluster ID, in output order starting at 0."""

    label: str
    """Human-readable label (e.g., '3× smoke')."""

    category: str
    """Utility type shared by the members."""

    marker_ids: List[str]
    """Ids of the member markers, anchor first."""

    centroid_x: float
    centroid_y: float

    size: int = 0
    """Number of markers in cluster."""


def label_cluster(cluster: Cluster) -> str:
    """Deterministic label: member count and utility type."""
    return f"{cluster.size}× {cluster.category.value}"


def markers_from_dataframe(
    df: pd.DataFrame,
    *,
    id_col: str = "id",
    x_col: str = "landing_x",
    y_col: str = "landing_y",
    category_col: str = "utility_type",
) -> List[Marker]:
    """
    Build markers from a lineup DataFrame.

    Columns other than id/position/category are carried in each marker's
    payload.

    Raises:
        KeyError: If any of the required columns is missing
    """
    required = [id_col, x_col, y_col, category_col]
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise KeyError(f"Missing required columns: {', '.join(missing)}")

    extra_cols = [col for col in df.columns if col not in required]

    markers = []
    for record in df.to_dict(orient="records"):
        payload = {col: record[col] for col in extra_cols}
        markers.append(Marker(
            id=str(record[id_col]),
            x=float(record[x_col]),
            y=float(record[y_col]),
            category=record[category_col],
            payload=payload,
        ))
    return markers


def cluster_dataframe(
    df: pd.DataFrame,
    config: Optional[ClusteringConfig] = None,
    *,
    id_col: str = "id",
    x_col: str = "landing_x",
    y_col: str = "landing_y",
    category_col: str = "utility_type",
) -> Tuple[pd.DataFrame, List[ClusterInfo], ClusteringDiagnostics]:
    """
    Cluster the lineup rows of ``df``.

    Args:
        df: DataFrame with id, position and utility-type columns
        config: Clustering configuration (uses defaults if None)

    Returns:
        (df_with_clusters, cluster_infos, diagnostics)

    The returned frame is a copy with a ``cluster`` column. Cluster ID -1
    indicates a singleton (a marker drawn on its own).
    """
    markers = markers_from_dataframe(
        df, id_col=id_col, x_col=x_col, y_col=y_col, category_col=category_col
    )
    items, diagnostics = cluster_with_diagnostics(markers, config)

    assignment = {}
    clusters: List[ClusterInfo] = []
    for item in items:
        if not isinstance(item, Cluster):
            continue
        cid = len(clusters)
        for member in item.members:
            assignment[member.id] = cid
        clusters.append(ClusterInfo(
            cluster_id=cid,
            label=label_cluster(item),
            category=item.category.value,
            marker_ids=item.member_ids,
            centroid_x=float(item.x),
            centroid_y=float(item.y),
            size=item.size,
        ))

    df = df.copy()
    ids = df[id_col].astype(str)
    df["cluster"] = np.array([assignment.get(i, -1) for i in ids], dtype=int)

    return df, clusters, diagnostics
