"""
Proximity clustering of lineup markers for map display.

This module provides:
1. Marker and display item types (Singleton / Cluster)
2. Greedy anchor clustering with a sweep-line (sorted-by-y) search window
3. Opt-in connected-component linkage over the same proximity relation
4. Deterministic ordering (y, then id) so tie-breaking never depends on
   input order
5. Diagnostics for debugging marker density on a map

The engine is a pure function of (markers, radius). It never filters by
side or visibility: it clusters exactly the markers it is given. Markers are
assumed to be well formed; validation belongs to the marker-store boundary
(see :mod:`lineup_map.markers.models`).
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from .grid_index import GridIndex


logger = logging.getLogger(__name__)


LINKAGES = ("greedy", "connected")
INDEXES = ("sweep", "grid")


class UtilityType(Enum):
    """Closed set of marker categories. Grouping never crosses categories."""
    SMOKE = "smoke"
    FLASH = "flash"
    MOLOTOV = "molotov"
    HE = "he"

    @classmethod
    def coerce(cls, value: Union[str, "UtilityType"]) -> "UtilityType":
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


@dataclass(frozen=True)
class Marker:
    """A placed lineup marker, read-only to the clustering engine."""

    id: str
    """Opaque unique identifier, stable across recomputation."""

    x: float
    """Horizontal position in map coordinates."""

    y: float
    """Vertical position in map coordinates (the sweep axis)."""

    category: UtilityType
    """Utility type of the lineup."""

    payload: Mapping[str, Any] = field(default_factory=dict, compare=False)
    """Extra fields, passed through unchanged."""

    def __post_init__(self):
        if not isinstance(self.category, UtilityType):
            object.__setattr__(self, "category", UtilityType.coerce(self.category))

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Singleton:
    """A marker not grouped with any other."""

    marker: Marker
    kind: str = field(default="single", init=False)

    @property
    def x(self) -> float:
        return self.marker.x

    @property
    def y(self) -> float:
        return self.marker.y

    @property
    def category(self) -> UtilityType:
        return self.marker.category

    @property
    def size(self) -> int:
        return 1


@dataclass(frozen=True)
class Cluster:
    """Two or more same-category markers drawn as one aggregate point."""

    centroid: Tuple[float, float]
    """Unweighted mean of the member positions."""

    category: UtilityType
    """Category shared by every member."""

    members: Tuple[Marker, ...]
    """Members in sort order; the anchor comes first."""

    kind: str = field(default="cluster", init=False)

    @property
    def x(self) -> float:
        return self.centroid[0]

    @property
    def y(self) -> float:
        return self.centroid[1]

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def anchor(self) -> Marker:
        return self.members[0]

    @property
    def member_ids(self) -> List[str]:
        return [m.id for m in self.members]


DisplayItem = Union[Singleton, Cluster]


@dataclass
class ClusteringConfig:
    """Configuration for marker clustering."""

    radius: float = 30.0
    """Grouping distance threshold, in map units (inclusive)."""

    linkage: str = "greedy"
    """'greedy' (anchor-bound, default) or 'connected' (transitive)."""

    index: str = "sweep"
    """'sweep' (sorted-by-y scan) or 'grid' (uniform cell buckets)."""

    def validate(self) -> None:
        """Raise ``ValueError`` describing every invalid setting."""
        msg_parts = []
        if not _valid_radius(self.radius):
            msg_parts.append(f"radius must be a number >= 0, got {self.radius!r}")
        if self.linkage not in LINKAGES:
            msg_parts.append(f"linkage must be one of {', '.join(LINKAGES)}, got {self.linkage!r}")
        if self.index not in INDEXES:
            msg_parts.append(f"index must be one of {', '.join(INDEXES)}, got {self.index!r}")
        if msg_parts:
            raise ValueError("\n".join(msg_parts))


@dataclass
class ClusteringDiagnostics:
    """Summary of one clustering run."""

    num_markers: int
    """Total number of markers provided."""

    num_clusters: int
    """Number of clusters produced."""

    num_singletons: int
    """Number of markers left ungrouped."""

    radius: float
    linkage: str
    index: str

    cluster_sizes: List[int] = field(default_factory=list)
    """Size of each cluster, in output order."""

    comparisons: int = 0
    """Squared-distance tests performed."""

    config_used: Optional[ClusteringConfig] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)


def _valid_radius(radius) -> bool:
    try:
        return not math.isnan(radius) and radius >= 0
    except TypeError:
        return False


def _distance_sq(a: Marker, b: Marker) -> float:
    dx = a.x - b.x
    dy = a.y - b.y
    return dx * dx + dy * dy


def sort_markers(markers: Iterable[Marker]) -> List[Marker]:
    """
    Return markers in sweep order: y ascending, then id, then x.

    The id tie-break makes the order (and therefore which anchor claims a
    marker) independent of the input order.
    """
    return sorted(markers, key=lambda m: (m.y, m.id, m.x))


def _sweep_candidates(ordered: Sequence[Marker], radius: float) -> Callable[[int], Iterable[int]]:
    def candidates(i: int) -> Iterable[int]:
        anchor_y = ordered[i].y
        for j in range(i + 1, len(ordered)):
            # Sorted by y: every later marker is at least this far away.
            if ordered[j].y - anchor_y > radius:
                break
            yield j
    return candidates


def _grid_candidates(ordered: Sequence[Marker], radius: float) -> Callable[[int], Iterable[int]]:
    grid = GridIndex(ordered, radius)

    def candidates(i: int) -> Iterable[int]:
        return (j for j in grid.neighbors(i) if j > i)
    return candidates


def _greedy_groups(
    ordered: Sequence[Marker],
    radius_sq: float,
    candidates: Callable[[int], Iterable[int]],
) -> Tuple[List[List[Marker]], int]:
    """
    Anchor-greedy grouping.

    A marker is bound to the first unconsumed anchor that reaches it, and
    every distance in a group is measured from that anchor, so grouping is
    not transitive.
    """
    consumed = [False] * len(ordered)
    groups: List[List[Marker]] = []
    comparisons = 0

    for i, anchor in enumerate(ordered):
        if consumed[i]:
            continue
        consumed[i] = True
        group = [anchor]

        for j in candidates(i):
            if consumed[j]:
                continue
            candidate = ordered[j]
            if candidate.category != anchor.category:
                continue
            comparisons += 1
            if _distance_sq(anchor, candidate) <= radius_sq:
                group.append(candidate)
                consumed[j] = True

        groups.append(group)

    return groups, comparisons


def _connected_groups(
    ordered: Sequence[Marker],
    radius_sq: float,
    candidates: Callable[[int], Iterable[int]],
) -> Tuple[List[List[Marker]], int]:
    """Connected components of the same-category proximity graph (union-find)."""
    parent = list(range(len(ordered)))
    comparisons = 0

    def find(i: int) -> int:
        while parent[i] != i:
            parent[i] = parent[parent[i]]
            i = parent[i]
        return i

    for i, marker in enumerate(ordered):
        for j in candidates(i):
            if ordered[j].category != marker.category:
                continue
            comparisons += 1
            if _distance_sq(marker, ordered[j]) <= radius_sq:
                root_i, root_j = find(i), find(j)
                if root_i != root_j:
                    # Lowest sorted position stays the root.
                    parent[max(root_i, root_j)] = min(root_i, root_j)

    by_root: Dict[int, List[Marker]] = {}
    for i, marker in enumerate(ordered):
        by_root.setdefault(find(i), []).append(marker)

    return list(by_root.values()), comparisons


def _make_item(group: List[Marker]) -> DisplayItem:
    if len(group) == 1:
        return Singleton(marker=group[0])

    n = len(group)
    centroid = (
        sum(m.x for m in group) / n,
        sum(m.y for m in group) / n,
    )
    return Cluster(centroid=centroid, category=group[0].category, members=tuple(group))


def _run(
    markers: Iterable[Marker],
    config: ClusteringConfig,
) -> Tuple[List[DisplayItem], int]:
    config.validate()

    ordered = sort_markers(markers)
    if not ordered:
        return [], 0

    radius = float(config.radius)
    if config.index == "grid":
        candidates = _grid_candidates(ordered, radius)
    else:
        candidates = _sweep_candidates(ordered, radius)

    if config.linkage == "connected":
        groups, comparisons = _connected_groups(ordered, radius * radius, candidates)
    else:
        groups, comparisons = _greedy_groups(ordered, radius * radius, candidates)

    return [_make_item(group) for group in groups], comparisons


def cluster_markers(
    markers: Iterable[Marker],
    radius: float,
    *,
    linkage: str = "greedy",
    index: str = "sweep",
) -> List[DisplayItem]:
    """
    Group nearby same-category markers into display items.

    Args:
        markers: Markers to cluster (any order; may be empty)
        radius: Inclusive grouping distance in map units, must be >= 0
        linkage: 'greedy' binds each marker to the first anchor in sort order
            that reaches it; 'connected' merges transitively
        index: 'sweep' scans a y-sorted window; 'grid' uses cell buckets.
            Both produce the same items.

    Returns:
        One item per group, ordered by each group's first marker in sort
        order. Every input marker appears in exactly one item.

    Raises:
        ValueError: If radius is negative/NaN or linkage/index is unknown
    """
    config = ClusteringConfig(radius=radius, linkage=linkage, index=index)
    items, _comparisons = _run(markers, config)
    return items


def cluster_with_diagnostics(
    markers: Iterable[Marker],
    config: Optional[ClusteringConfig] = None,
) -> Tuple[List[DisplayItem], ClusteringDiagnostics]:
    """
    Cluster markers from a config and report what happened.

    Returns:
        (items, diagnostics)
    """
    if config is None:
        config = ClusteringConfig()

    markers = list(markers)
    items, comparisons = _run(markers, config)

    cluster_sizes = [item.size for item in items if isinstance(item, Cluster)]
    diagnostics = ClusteringDiagnostics(
        num_markers=len(markers),
        num_clusters=len(cluster_sizes),
        num_singletons=len(items) - len(cluster_sizes),
        radius=float(config.radius),
        linkage=config.linkage,
        index=config.index,
        cluster_sizes=cluster_sizes,
        comparisons=comparisons,
        config_used=config,
    )

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Clustering diagnostics: {diagnostics.to_json()}")

    return items, diagnostics
