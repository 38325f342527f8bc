"""
Unit Tests for the Grid Index (lineup_map.spatial.grid_index)
"""

import warnings

import pytest

from lineup_map.spatial.clustering import cluster_markers, sort_markers
from lineup_map.spatial.grid_index import GridIndex
from tests.conftest import make_marker, random_markers


class TestGridIndex:
    """Test cell bucketing and neighbour lookup."""

    def test_empty(self):
        grid = GridIndex([], 10)

        assert len(grid) == 0
        assert grid.num_cells == 0

    def test_cells(self):
        markers = [make_marker("a", 1, 1), make_marker("b", 15, 1), make_marker("c", -1, 25)]
        grid = GridIndex(markers, 10)

        assert grid.cell_of(0) == (0, 0)
        assert grid.cell_of(1) == (1, 0)
        assert grid.cell_of(2) == (-1, 2)
        assert grid.num_cells == 3

    def test_neighbors_ascending_and_adjacent_only(self):
        markers = [
            make_marker("a", 5, 5),
            make_marker("b", 95, 95),
            make_marker("c", 12, 3),
            make_marker("d", 25, 5),
        ]
        grid = GridIndex(markers, 10)

        assert grid.neighbors(0) == [0, 2]
        assert grid.neighbors(2) == [0, 2, 3]
        assert grid.neighbors(1) == [1]

    def test_zero_cell_size_buckets_exact_positions(self):
        markers = [make_marker("a", 3, 3), make_marker("b", 3, 3), make_marker("c", 3, 3.5)]
        grid = GridIndex(markers, 0)

        assert grid.neighbors(0) == [0, 1]
        assert grid.neighbors(2) == [2]

    @pytest.mark.parametrize("seed", [0, 5, 9])
    @pytest.mark.parametrize("radius", [5, 10, 33])
    def test_neighbors_cover_every_pair_within_radius(self, seed, radius):
        ordered = sort_markers(random_markers(seed, n=60, grid=True))
        grid = GridIndex(ordered, radius)

        for i, a in enumerate(ordered):
            found = set(grid.neighbors(i))
            for j, b in enumerate(ordered):
                if (a.x - b.x) ** 2 + (a.y - b.y) ** 2 <= radius * radius:
                    assert j in found

    def test_tiny_cell_size_stays_quiet_and_exact(self):
        """Coordinates far beyond the int64 cell range collapse without warnings."""
        markers = [
            make_marker("a", 1.0, 2.0),
            make_marker("b", 1.0, 2.0),
            make_marker("c", 1e10, -3.0),
            make_marker("d", -5.0, 1e10),
        ]

        with warnings.catch_warnings():
            warnings.simplefilter("error")
            ordered = sort_markers(markers)
            grid = GridIndex(ordered, 1e-300)
            items = cluster_markers(markers, 1e-300, index="grid")

        pos = {m.id: i for i, m in enumerate(ordered)}
        assert pos["b"] in grid.neighbors(pos["a"])
        assert items == cluster_markers(markers, 1e-300)
        assert [item.size for item in items] == [1, 2, 1]
