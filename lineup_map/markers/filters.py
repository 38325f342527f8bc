"""
Side / utility filters applied to markers before clustering.

The clustering engine clusters exactly what it is given, so visibility
filtering happens here, upstream of it.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List

from ..spatial.clustering import Marker, UtilityType


SIDES = ("t", "ct")


def _all_sides() -> Dict[str, bool]:
    return {side: True for side in SIDES}


def _all_utilities() -> Dict[str, bool]:
    return {utility.value: True for utility in UtilityType}


@dataclass(frozen=True)
class LineupFilters:
    """
    Visibility toggles for the map.

    Attributes:
        side: Which team sides are shown ('t', 'ct')
        utility: Which utility types are shown (smoke, flash, molotov, he)
    """
    side: Dict[str, bool] = field(default_factory=_all_sides)
    utility: Dict[str, bool] = field(default_factory=_all_utilities)

    def toggle_side(self, side: str) -> "LineupFilters":
        if side not in SIDES:
            raise ValueError(f"Unknown side '{side}'. Expected one of: {', '.join(SIDES)}")
        sides = dict(self.side)
        sides[side] = not sides.get(side, True)
        return replace(self, side=sides)

    def toggle_utility(self, utility: str) -> "LineupFilters":
        key = UtilityType.coerce(utility).value
        utilities = dict(self.utility)
        utilities[key] = not utilities.get(key, True)
        return replace(self, utility=utilities)

    def shows(self, marker: Marker) -> bool:
        if not self.utility.get(marker.category.value, True):
            return False

        side = marker.payload.get("side")
        if side is None:
            return all(self.side.get(s, True) for s in SIDES)
        return self.side.get(str(side).lower(), True)


def apply_filters(markers: Iterable[Marker], filters: LineupFilters) -> List[Marker]:
    """Keep the markers whose side and utility type are enabled."""
    return [marker for marker in markers if filters.shows(marker)]


def markers_for_map(markers: Iterable[Marker], map_name: str) -> List[Marker]:
    """Markers whose payload ``map_name`` matches, ignoring case."""
    wanted = map_name.lower()
    return [
        marker for marker in markers
        if str(marker.payload.get("map_name", "")).lower() == wanted
    ]
