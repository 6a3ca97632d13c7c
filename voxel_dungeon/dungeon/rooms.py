import random
from dataclasses import dataclass, field
from typing import List, Optional, Set

from voxel_dungeon.logging_utils import get_logger

from .entities import EntityKind, GridCoordinate, SceneObject, SceneRegistry, Vec3
from .grid import SpatialGrid

log = get_logger("voxel_dungeon.rooms")

# Fraction of a cell filled by room geometry.
ROOM_SCALE = 0.9
DEFAULT_MAX_ATTEMPTS = 100


@dataclass(eq=False)
class Room:
    coord: GridCoordinate
    obj: SceneObject
    connections: Set["Room"] = field(default_factory=set)
    barriers: list = field(default_factory=list)

    def connect(self, other: "Room") -> None:
        if other is self:
            return
        self.connections.add(other)
        other.connections.add(self)

    def is_connected(self, other: "Room") -> bool:
        return other in self.connections

    @property
    def world_position(self) -> Vec3:
        return self.obj.world_position

    @property
    def scale(self) -> Vec3:
        return self.obj.scale

    def __repr__(self):
        return f"Room(coord={tuple(self.coord)}, connections={len(self.connections)})"


class RoomPlacer:
    """Marks room cells in the grid and spawns their geometry records."""

    def __init__(
        self,
        grid: SpatialGrid,
        registry: SceneRegistry,
        rng=None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        self.grid = grid
        self.registry = registry
        self.rng = rng if rng is not None else random
        self.max_attempts = max_attempts
        self.rooms: List[Room] = []

    def place_room_at_center(self, parent: Optional[SceneObject] = None) -> Room:
        return self.place_room(self.grid.center(), parent)

    def try_place_room(self, parent: Optional[SceneObject] = None) -> Optional[Room]:
        """Sample random cells until one is free and not boxed in.

        Returns None after ``max_attempts`` rejections; the caller simply ends up
        with one room fewer. Rejected cells are not remembered between trials.
        """
        n = self.grid.size
        for _ in range(self.max_attempts):
            pos = GridCoordinate(self.rng.randrange(n), self.rng.randrange(n), self.rng.randrange(n))
            if not self.grid.is_occupied(pos) and self.grid.has_adjacent_empty_space(pos):
                return self.place_room(pos, parent)
        log.debug(event="room_place_exhausted", attempts=self.max_attempts, placed=len(self.rooms))
        return None

    def place_room(self, coord: GridCoordinate, parent: Optional[SceneObject] = None) -> Room:
        self.grid.set_occupied(coord, True)
        obj = self.registry.spawn(
            EntityKind.ROOM,
            local_position=self.grid.grid_to_world(coord),
            scale=Vec3.uniform(self.grid.cell_size * ROOM_SCALE),
            parent=parent,
            coord=coord,
        )
        room = Room(coord=coord, obj=obj)
        self.rooms.append(room)
        return room

    def clear_rooms(self) -> None:
        for room in self.rooms:
            self.registry.destroy(room.obj)
            room.barriers = []
            room.connections.clear()
        self.rooms.clear()


__all__ = ["Room", "RoomPlacer", "ROOM_SCALE"]
