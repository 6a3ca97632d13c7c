"""Room connectivity: greedy spanning tree, loop edges, vertical links and corridor carving.

Phase A grows a tree from the first room by repeatedly linking the closest
(connected, unconnected) pair, then adds ``floor(len(rooms) * loop_factor)``
random extra pairs so the layout is not a pure tree. Phase B links rooms stacked
directly on top of each other with a single vertical corridor piece.

Corridors follow an axis-by-axis staircase (all of X, then Y, then Z). Cells
already taken by rooms or earlier corridors are walked through, not re-carved,
and the connection is recorded either way.
"""
from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from voxel_dungeon.logging_utils import get_logger

from .entities import EntityKind, GridCoordinate, SceneObject, SceneRegistry, Vec3
from .grid import SpatialGrid
from .rooms import Room

log = get_logger("voxel_dungeon.corridors")

CORRIDOR_SCALE = 0.7
VERTICAL_CORRIDOR_SCALE = (0.5, 0.9, 0.5)
VERTICAL_CORRIDOR_ROTATION = 45.0
DEFAULT_LOOP_FACTOR = 0.3

Edge = Tuple[Room, Room]


@dataclass
class ConnectionReport:
    tree_edges: List[Edge] = field(default_factory=list)
    loop_edges: List[Edge] = field(default_factory=list)
    vertical_edges: List[Edge] = field(default_factory=list)
    corridor_cells: int = 0

    @property
    def edge_count(self) -> int:
        return len(self.tree_edges) + len(self.loop_edges) + len(self.vertical_edges)


def _step_path(start: GridCoordinate, goal: GridCoordinate):
    """Yield every cell after ``start`` on the X-then-Y-then-Z walk to ``goal``."""
    cur = list(start)
    for axis in range(3):
        while cur[axis] != goal[axis]:
            cur[axis] += 1 if goal[axis] > cur[axis] else -1
            yield GridCoordinate(*cur)


class CorridorConnector:
    def __init__(
        self,
        grid: SpatialGrid,
        registry: SceneRegistry,
        rng=None,
        loop_factor: float = DEFAULT_LOOP_FACTOR,
    ):
        self.grid = grid
        self.registry = registry
        self.rng = rng if rng is not None else random
        self.loop_factor = loop_factor
        self.corridor_cells: List[GridCoordinate] = []

    # ------------------------------------------------------------------
    # Phase A
    # ------------------------------------------------------------------
    def connect_rooms(self, rooms: List[Room], parent: Optional[SceneObject] = None) -> ConnectionReport:
        report = ConnectionReport()
        if not rooms:
            return report
        carved_before = len(self.corridor_cells)

        connected = [rooms[0]]
        unconnected = list(rooms[1:])
        while unconnected:
            best = math.inf
            pair = None
            for a in connected:
                for b in unconnected:
                    d = a.coord.distance_to(b.coord)
                    if d < best:
                        best = d
                        pair = (a, b)
            a, b = pair
            self.create_corridor(a, b, parent)
            report.tree_edges.append(pair)
            connected.append(b)
            unconnected.remove(b)

        extra = int(len(rooms) * self.loop_factor)
        for _ in range(extra):
            a = rooms[self.rng.randrange(len(rooms))]
            b = rooms[self.rng.randrange(len(rooms))]
            if a is not b and not a.is_connected(b):
                self.create_corridor(a, b, parent)
                report.loop_edges.append((a, b))

        report.vertical_edges = self.connect_vertical(rooms, parent)
        report.corridor_cells = len(self.corridor_cells) - carved_before
        log.debug(
            event="rooms_connected",
            rooms=len(rooms),
            tree_edges=len(report.tree_edges),
            loop_edges=len(report.loop_edges),
            vertical_edges=len(report.vertical_edges),
            corridor_cells=report.corridor_cells,
        )
        return report

    def create_corridor(self, a: Room, b: Room, parent: Optional[SceneObject] = None) -> List[GridCoordinate]:
        carved = []
        for cell in _step_path(a.coord, b.coord):
            if not self.grid.is_occupied(cell):
                self._place_corridor(cell, parent)
                carved.append(cell)
        a.connect(b)
        return carved

    def _place_corridor(self, cell: GridCoordinate, parent: Optional[SceneObject]) -> SceneObject:
        self.grid.set_occupied(cell, True)
        obj = self.registry.spawn(
            EntityKind.CORRIDOR,
            local_position=self.grid.grid_to_world(cell),
            scale=Vec3.uniform(self.grid.cell_size * CORRIDOR_SCALE),
            parent=parent,
            coord=cell,
        )
        self.corridor_cells.append(cell)
        return obj

    # ------------------------------------------------------------------
    # Phase B
    # ------------------------------------------------------------------
    def connect_vertical(self, rooms: List[Room], parent: Optional[SceneObject] = None) -> List[Edge]:
        """Link rooms sharing X and Z whose Y differs by one, unless already linked."""
        edges = []
        for i, a in enumerate(rooms):
            for b in rooms[i + 1:]:
                if a.coord.x != b.coord.x or a.coord.z != b.coord.z:
                    continue
                if abs(a.coord.y - b.coord.y) != 1 or a.is_connected(b):
                    continue
                self._place_vertical_corridor(a, b, parent)
                a.connect(b)
                edges.append((a, b))
        return edges

    def _place_vertical_corridor(self, a: Room, b: Room, parent: Optional[SceneObject]) -> SceneObject:
        lower = a if a.coord.y < b.coord.y else b
        cell = lower.coord.offset(dy=1)
        sx, sy, sz = VERTICAL_CORRIDOR_SCALE
        size = self.grid.cell_size
        obj = self.registry.spawn(
            EntityKind.VERTICAL_CORRIDOR,
            local_position=self.grid.grid_to_world(cell),
            scale=Vec3(sx * size, sy * size, sz * size),
            rotation_y=VERTICAL_CORRIDOR_ROTATION,
            parent=parent,
            coord=cell,
        )
        # The link cell is normally the upper room itself; only claim it if still free.
        if not self.grid.is_occupied(cell):
            self.grid.set_occupied(cell, True)
        return obj


__all__ = ["CorridorConnector", "ConnectionReport", "CORRIDOR_SCALE"]
