"""
Pytest configuration and shared fixtures for lineup-map tests.

This file provides:
- Marker factories and sample lineup data
- Seeded random marker sets for property checks
- Common test utilities
"""

from typing import Any, Dict, List

import numpy as np
import pandas as pd
import pytest

from lineup_map.spatial.clustering import Cluster, Marker, Singleton, UtilityType


# ==============================================================================
# Marker Factories
# ==============================================================================

def make_marker(id, x, y, category="smoke", **payload) -> Marker:
    """Shorthand marker constructor used across tests."""
    return Marker(id=str(id), x=float(x), y=float(y), category=category, payload=payload)


def random_markers(seed: int, n: int = 80, extent: float = 200.0, grid: bool = False) -> List[Marker]:
    """
    Seeded random markers over a square map.

    With ``grid=True`` coordinates are snapped to multiples of 10 so that
    equal y values, coincident points and exact-radius distances are common.
    """
    rng = np.random.default_rng(seed)
    coords = rng.uniform(0, extent, size=(n, 2))
    if grid:
        coords = np.round(coords / 10.0) * 10.0
    categories = rng.choice([t.value for t in UtilityType], size=n)
    return [
        make_marker(f"m{i:03d}", x, y, cat)
        for i, ((x, y), cat) in enumerate(zip(coords.tolist(), categories.tolist()))
    ]


# ==============================================================================
# Sample Data
# ==============================================================================

@pytest.fixture
def three_smokes() -> List[Marker]:
    """Two close smokes and one far away."""
    return [
        make_marker(1, 0, 0, "smoke"),
        make_marker(2, 10, 0, "smoke"),
        make_marker(3, 100, 0, "smoke"),
    ]


@pytest.fixture
def collinear_chain() -> List[Marker]:
    """Markers at y=0, 20, 40: a chain longer than one radius of 25."""
    return [
        make_marker("a", 0, 0, "smoke"),
        make_marker("b", 0, 20, "smoke"),
        make_marker("c", 0, 40, "smoke"),
    ]


@pytest.fixture
def sample_rows() -> List[Dict[str, Any]]:
    """Lineup records as stored for a map."""
    return [
        {
            "id": "l1", "title": "Window smoke", "map_name": "mirage", "side": "t",
            "utility_type": "smoke", "landing_x": 412.0, "landing_y": 300.0,
            "origin_x": 120.0, "origin_y": 610.0, "description": "Jump throw",
            "user_id": "u1", "created_at": "2025-01-04T12:00:00Z",
        },
        {
            "id": "l2", "title": "Window smoke (walk)", "map_name": "mirage", "side": "t",
            "utility_type": "smoke", "landing_x": 420.0, "landing_y": 310.0,
            "user_id": "u2",
        },
        {
            "id": "l3", "title": "Connector flash", "map_name": "mirage", "side": "ct",
            "utility_type": "flash", "landing_x": 415.0, "landing_y": 305.0,
            "user_id": "u1",
        },
        {
            "id": "l4", "title": "Banana molly", "map_name": "inferno", "side": "ct",
            "utility_type": "molotov", "landing_x": 80.0, "landing_y": 640.0,
            "user_id": "u3",
        },
    ]


@pytest.fixture
def sample_lineups_df(sample_rows) -> pd.DataFrame:
    return pd.DataFrame(sample_rows)


@pytest.fixture
def sample_markers(sample_rows) -> List[Marker]:
    return [
        make_marker(
            r["id"], r["landing_x"], r["landing_y"], r["utility_type"],
            side=r["side"], map_name=r["map_name"],
        )
        for r in sample_rows
    ]


# ==============================================================================
# Utilities
# ==============================================================================

def partition_of(items) -> frozenset:
    """The grouping as a set of frozensets of marker ids."""
    groups = []
    for item in items:
        if isinstance(item, Cluster):
            groups.append(frozenset(item.member_ids))
        else:
            groups.append(frozenset([item.marker.id]))
    return frozenset(groups)


def all_ids(items) -> List[str]:
    ids = []
    for item in items:
        if isinstance(item, Cluster):
            ids.extend(item.member_ids)
        elif isinstance(item, Singleton):
            ids.append(item.marker.id)
    return ids


def assert_approx_equal(a: float, b: float, tolerance: float = 1e-9):
    """Assert two floats are approximately equal."""
    assert abs(a - b) < tolerance, f"{a} != {b} (tolerance={tolerance})"
