"""Uniform grid buckets used as a spatial index for marker clustering."""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

import numpy as np


# Cells are padded slightly past the radius so that float rounding in the
# division can never push two in-range markers more than one cell apart.
CELL_PADDING = 1e-9
MAX_CELL = float(2 ** 62)


class GridIndex:
    """
    Bucket markers into square cells of side ``cell_size``.

    Markers are referenced by their position in the sequence passed in (the
    clustering sort order). Any two markers within ``cell_size`` of each
    other land in the same or adjacent cells, so :meth:`neighbors` returns a
    superset of the true neighbours; callers still apply the exact distance
    test. A ``cell_size`` of 0 buckets by exact position.
    """

    def __init__(self, markers: Sequence, cell_size: float):
        self.cell_size = float(cell_size)
        self._cells: Dict[Tuple, List[int]] = {}

        if len(markers) == 0:
            self._keys: List[Tuple] = []
            return

        coords = np.array([(m.x, m.y) for m in markers], dtype=float)
        if self.cell_size > 0:
            with np.errstate(over="ignore"):
                scaled = coords / (self.cell_size * (1 + CELL_PADDING))
            # Cells past the int64 range collapse onto the boundary; markers
            # within radius of such a marker share its exact coordinate.
            scaled = np.clip(scaled, -MAX_CELL, MAX_CELL)
            cells = np.floor(scaled).astype(np.int64)
            self._keys = [tuple(c) for c in cells.tolist()]
        else:
            self._keys = [tuple(c) for c in coords.tolist()]

        for i, key in enumerate(self._keys):
            self._cells.setdefault(key, []).append(i)

    def __len__(self) -> int:
        return len(self._keys)

    @property
    def num_cells(self) -> int:
        return len(self._cells)

    def cell_of(self, i: int) -> Tuple:
        return self._keys[i]

    def neighbors(self, i: int) -> List[int]:
        """Positions in the 3x3 block of cells around marker ``i``, ascending."""
        key = self._keys[i]
        if self.cell_size <= 0:
            return list(self._cells[key])

        cx, cy = key
        found: List[int] = []
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                found.extend(self._cells.get((cx + dx, cy + dy), ()))
        found.sort()
        return found
