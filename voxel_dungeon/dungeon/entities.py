"""Typed scene records shared by every generation phase.

Rooms, corridors and occupants are not engine objects here: each one is a
``SceneObject`` held by a ``SceneRegistry`` the orchestrator owns. The host
turns these records into real geometry using the template names it supplied.
Lookups that used to be scene-wide tag scans go through ``SceneRegistry.find``.
"""
from __future__ import annotations

import itertools
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Mapping, NamedTuple, Optional

from .errors import MissingTemplateError


class GridCoordinate(NamedTuple):
    x: int
    y: int
    z: int

    def offset(self, dx: int = 0, dy: int = 0, dz: int = 0) -> "GridCoordinate":
        return GridCoordinate(self.x + dx, self.y + dy, self.z + dz)

    def distance_to(self, other: "GridCoordinate") -> float:
        return math.sqrt((self.x - other.x) ** 2 + (self.y - other.y) ** 2 + (self.z - other.z) ** 2)


class Vec3(NamedTuple):
    x: float
    y: float
    z: float

    def __add__(self, other):  # type: ignore[override]
        return Vec3(self.x + other[0], self.y + other[1], self.z + other[2])

    def scale(self, factor: float) -> "Vec3":
        return Vec3(self.x * factor, self.y * factor, self.z * factor)

    def as_list(self) -> List[float]:
        return [self.x, self.y, self.z]

    @classmethod
    def uniform(cls, value: float) -> "Vec3":
        return cls(value, value, value)


ZERO = Vec3(0.0, 0.0, 0.0)


class EntityKind(Enum):
    CONTAINER = "container"
    ROOM = "room"
    CORRIDOR = "corridor"
    VERTICAL_CORRIDOR = "vertical_corridor"
    ENEMY = "enemy"
    TREASURE = "treasure"


@dataclass(eq=False)
class SceneObject:
    """One placed piece of geometry. Identity semantics: two objects are never equal."""

    id: int
    kind: EntityKind
    template: str
    local_position: Vec3 = ZERO
    scale: Vec3 = Vec3(1.0, 1.0, 1.0)
    rotation_y: float = 0.0
    parent: Optional["SceneObject"] = None
    coord: Optional[GridCoordinate] = None
    alive: bool = True

    @property
    def world_position(self) -> Vec3:
        if self.parent is None:
            return self.local_position
        return self.parent.world_position + self.local_position

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "template": self.template,
            "local_position": self.local_position.as_list(),
            "world_position": self.world_position.as_list(),
            "scale": self.scale.as_list(),
            "rotation_y": self.rotation_y,
            "parent": self.parent.id if self.parent is not None else None,
            "coord": list(self.coord) if self.coord is not None else None,
        }


@dataclass
class TemplateSet:
    """Host-supplied template name per entity kind (the prefab catalogue)."""

    templates: Dict[EntityKind, str] = field(default_factory=dict)

    @classmethod
    def defaults(cls) -> "TemplateSet":
        return cls({kind: kind.value for kind in EntityKind})

    @classmethod
    def from_mapping(cls, mapping: Mapping) -> "TemplateSet":
        out = {}
        for key, value in mapping.items():
            kind = key if isinstance(key, EntityKind) else EntityKind(key)
            if value:
                out[kind] = value
        return cls(out)

    def get(self, kind: EntityKind) -> Optional[str]:
        return self.templates.get(kind)

    def require(self, kind: EntityKind) -> str:
        name = self.templates.get(kind)
        if not name:
            raise MissingTemplateError(kind)
        return name

    def missing(self, kinds) -> List[EntityKind]:
        return [k for k in kinds if not self.templates.get(k)]


class SceneRegistry:
    """Owns every SceneObject produced by one generation pass."""

    def __init__(self, templates: Optional[TemplateSet] = None):
        self.templates = templates if templates is not None else TemplateSet.defaults()
        self._objects: Dict[int, SceneObject] = {}
        self._ids = itertools.count(1)

    def spawn(
        self,
        kind: EntityKind,
        *,
        local_position: Vec3 = ZERO,
        scale: Vec3 = Vec3(1.0, 1.0, 1.0),
        rotation_y: float = 0.0,
        parent: Optional[SceneObject] = None,
        coord: Optional[GridCoordinate] = None,
        template: Optional[str] = None,
    ) -> SceneObject:
        if template is None:
            template = self.templates.require(kind)
        obj = SceneObject(
            id=next(self._ids),
            kind=kind,
            template=template,
            local_position=local_position,
            scale=scale,
            rotation_y=rotation_y,
            parent=parent,
            coord=coord,
        )
        self._objects[obj.id] = obj
        return obj

    def children_of(self, obj: SceneObject) -> List[SceneObject]:
        return [o for o in self._objects.values() if o.parent is obj]

    def destroy(self, obj: Optional[SceneObject]) -> int:
        """Remove ``obj`` and its descendants; returns how many records were dropped."""
        if obj is None or obj.id not in self._objects:
            return 0
        removed = 0
        for child in self.children_of(obj):
            removed += self.destroy(child)
        del self._objects[obj.id]
        obj.alive = False
        return removed + 1

    def clear(self) -> None:
        for obj in self._objects.values():
            obj.alive = False
        self._objects.clear()
        self._ids = itertools.count(1)

    def find(self, kind: EntityKind) -> List[SceneObject]:
        return [o for o in self._objects.values() if o.kind is kind]

    def count(self, kind: EntityKind) -> int:
        return sum(1 for o in self._objects.values() if o.kind is kind)

    def __contains__(self, obj) -> bool:
        return getattr(obj, "id", None) in self._objects and self._objects[obj.id] is obj

    def __iter__(self) -> Iterator[SceneObject]:
        return iter(list(self._objects.values()))

    def __len__(self) -> int:
        return len(self._objects)


__all__ = [
    "GridCoordinate",
    "Vec3",
    "ZERO",
    "EntityKind",
    "SceneObject",
    "TemplateSet",
    "SceneRegistry",
]
