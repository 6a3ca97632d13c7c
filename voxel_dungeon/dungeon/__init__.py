"""Public dungeon package interface."""

from .barriers import BarrierKind, BarrierSpec, BoundaryAttacher
from .config import DungeonConfig
from .corridors import ConnectionReport, CorridorConnector
from .entities import (
    EntityKind,
    GridCoordinate,
    SceneObject,
    SceneRegistry,
    TemplateSet,
    Vec3,
)
from .errors import ConfigError, DungeonError, MissingTemplateError
from .grid import SpatialGrid
from .pipeline import DungeonLayout, DungeonOrchestrator, GenerationState
from .populator import PopulationReport, Populator
from .rooms import Room, RoomPlacer

__all__ = [
    "BarrierKind",
    "BarrierSpec",
    "BoundaryAttacher",
    "ConfigError",
    "ConnectionReport",
    "CorridorConnector",
    "DungeonConfig",
    "DungeonError",
    "DungeonLayout",
    "DungeonOrchestrator",
    "EntityKind",
    "GenerationState",
    "GridCoordinate",
    "MissingTemplateError",
    "PopulationReport",
    "Populator",
    "Room",
    "RoomPlacer",
    "SceneObject",
    "SceneRegistry",
    "SpatialGrid",
    "TemplateSet",
    "Vec3",
]
