"""Invisible collision slabs that keep occupants inside a room.

Barriers are returned as plain data (room-local position and size); the host
physics layer turns each ``BarrierSpec`` into a collider parented to the room.
The ceiling is left open.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from voxel_dungeon.logging_utils import get_logger

from .entities import Vec3

log = get_logger("voxel_dungeon.barriers")

EDGE_OFFSET = 0.02
BARRIER_HEIGHT = 0.1
BARRIER_THICKNESS = 0.01


class BarrierKind(Enum):
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"
    FLOOR = "floor"


@dataclass(frozen=True)
class BarrierSpec:
    kind: BarrierKind
    local_position: Vec3
    size: Vec3

    @property
    def thickness(self) -> float:
        return min(self.size)

    def to_dict(self) -> Dict[str, object]:
        return {
            "kind": self.kind.value,
            "local_position": self.local_position.as_list(),
            "size": self.size.as_list(),
        }


class BoundaryAttacher:
    def __init__(
        self,
        edge_offset: float = EDGE_OFFSET,
        barrier_height: float = BARRIER_HEIGHT,
        thickness: float = BARRIER_THICKNESS,
    ):
        self.edge_offset = edge_offset
        self.barrier_height = barrier_height
        self.thickness = thickness
        self._attached: List = []

    def barrier_specs(self, scale: Vec3) -> List[BarrierSpec]:
        half_w = scale.x / 2
        half_h = scale.y / 2
        half_d = scale.z / 2
        off = self.edge_offset
        wall_x = Vec3(scale.x, self.barrier_height, self.thickness)
        wall_z = Vec3(self.thickness, self.barrier_height, scale.z)
        return [
            BarrierSpec(BarrierKind.NORTH, Vec3(0.0, 0.0, half_d - off), wall_x),
            BarrierSpec(BarrierKind.SOUTH, Vec3(0.0, 0.0, -half_d + off), wall_x),
            BarrierSpec(BarrierKind.EAST, Vec3(half_w - off, 0.0, 0.0), wall_z),
            BarrierSpec(BarrierKind.WEST, Vec3(-half_w + off, 0.0, 0.0), wall_z),
            BarrierSpec(BarrierKind.FLOOR, Vec3(0.0, -half_h + off, 0.0), Vec3(scale.x, self.thickness, scale.z)),
        ]

    def attach(self, room) -> List[BarrierSpec]:
        if room is None or room.obj is None:
            return []
        room.barriers = self.barrier_specs(room.scale)
        self._attached.append(room)
        log.debug(event="barriers_attached", coord=tuple(room.coord), count=len(room.barriers))
        return room.barriers

    def remove_barriers(self, room: Optional[object]) -> None:
        if room is None or not getattr(room, "barriers", None):
            return
        room.barriers = []
        if room in self._attached:
            self._attached.remove(room)

    def clear(self) -> None:
        for room in self._attached:
            room.barriers = []
        self._attached = []

    @property
    def attached_rooms(self) -> List:
        return list(self._attached)


__all__ = ["BarrierKind", "BarrierSpec", "BoundaryAttacher"]
