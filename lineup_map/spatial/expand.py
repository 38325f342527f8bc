"""Helpers for mapping display items back to their markers (expand / highlight)."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from .clustering import Cluster, DisplayItem, Marker, Singleton


def expand(item: DisplayItem) -> List[Marker]:
    """Return the markers behind a display item."""
    if isinstance(item, Cluster):
        return list(item.members)
    return [item.marker]


def badge_count(item: DisplayItem) -> int:
    """Number shown on the item's badge (1 for a singleton)."""
    return item.size


def index_items(items: Iterable[DisplayItem]) -> Dict[str, DisplayItem]:
    """Map every marker id to the display item containing it."""
    lookup: Dict[str, DisplayItem] = {}
    for item in items:
        for marker in expand(item):
            lookup[marker.id] = item
    return lookup


def find_item(items: Iterable[DisplayItem], marker_id: str) -> Optional[DisplayItem]:
    for item in items:
        if any(marker.id == marker_id for marker in expand(item)):
            return item
    return None


def highlight_subset(markers: Iterable[Marker], item: DisplayItem) -> List[Marker]:
    """
    Markers from ``markers`` that belong to ``item``, in the caller's order.

    Used when a cluster is clicked: the caller temporarily shows only these
    markers as a highlighted subset.
    """
    wanted = {marker.id for marker in expand(item)}
    return [marker for marker in markers if marker.id in wanted]


def is_cluster(item: DisplayItem) -> bool:
    return isinstance(item, Cluster)


def is_singleton(item: DisplayItem) -> bool:
    return isinstance(item, Singleton)
