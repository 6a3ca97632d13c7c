"""Cubic occupancy lattice and grid/world coordinate conversion."""
from __future__ import annotations

from typing import Iterator, List

from .entities import GridCoordinate, Vec3

Lattice = List[List[List[bool]]]

NEIGHBOUR_OFFSETS = (
    (1, 0, 0),
    (-1, 0, 0),
    (0, 1, 0),
    (0, -1, 0),
    (0, 0, 1),
    (0, 0, -1),
)


class SpatialGrid:
    """size³ booleans indexed grid[x][y][z].

    Out-of-bounds reads report occupied and out-of-bounds writes are ignored, so
    callers can probe neighbours at the lattice edge without their own checks.
    """

    def __init__(self, size: int, cell_size: float):
        self.size = size
        self.cell_size = cell_size
        self.cells: Lattice = []
        self.reset()

    def reset(self, size: int | None = None, cell_size: float | None = None) -> None:
        if size is not None:
            self.size = size
        if cell_size is not None:
            self.cell_size = cell_size
        n = self.size
        self.cells = [[[False for _ in range(n)] for _ in range(n)] for _ in range(n)]

    def is_valid(self, coord: GridCoordinate) -> bool:
        n = self.size
        return 0 <= coord[0] < n and 0 <= coord[1] < n and 0 <= coord[2] < n

    def is_occupied(self, coord: GridCoordinate) -> bool:
        if not self.is_valid(coord):
            return True
        x, y, z = coord
        return self.cells[x][y][z]

    def set_occupied(self, coord: GridCoordinate, value: bool = True) -> None:
        if self.is_valid(coord):
            x, y, z = coord
            self.cells[x][y][z] = value

    def has_adjacent_empty_space(self, coord: GridCoordinate) -> bool:
        x, y, z = coord
        for dx, dy, dz in NEIGHBOUR_OFFSETS:
            n = GridCoordinate(x + dx, y + dy, z + dz)
            if self.is_valid(n) and not self.cells[n.x][n.y][n.z]:
                return True
        return False

    def center(self) -> GridCoordinate:
        half = self.size // 2
        return GridCoordinate(half, half, half)

    def grid_to_world(self, coord: GridCoordinate) -> Vec3:
        # Integer half keeps the centre cell at the world origin for odd and even sizes.
        half = self.size // 2
        return Vec3(
            (coord[0] - half) * self.cell_size,
            (coord[1] - half) * self.cell_size,
            (coord[2] - half) * self.cell_size,
        )

    def world_bounds(self):
        """(min, max) world corners spanned by cell centres, padded by half a cell."""
        lo = self.grid_to_world(GridCoordinate(0, 0, 0))
        hi = self.grid_to_world(GridCoordinate(self.size - 1, self.size - 1, self.size - 1))
        pad = self.cell_size / 2
        return (
            Vec3(lo.x - pad, lo.y - pad, lo.z - pad),
            Vec3(hi.x + pad, hi.y + pad, hi.z + pad),
        )

    def occupied_cells(self) -> Iterator[GridCoordinate]:
        n = self.size
        for x in range(n):
            for y in range(n):
                for z in range(n):
                    if self.cells[x][y][z]:
                        yield GridCoordinate(x, y, z)

    def occupied_count(self) -> int:
        return sum(1 for _ in self.occupied_cells())

    def snapshot(self) -> Lattice:
        return [[list(col) for col in plane] for plane in self.cells]


__all__ = ["SpatialGrid", "NEIGHBOUR_OFFSETS"]
