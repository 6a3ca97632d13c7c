"""Pipeline orchestration for dungeon generation.

``DungeonOrchestrator.generate()`` runs the whole sequence on every call:

    reset -> centre room -> extra rooms -> connect -> barriers -> populate

There is no partial regeneration. Every call first tears down the previous
pass (scene records, barriers, grid) so nothing outlives the pass that made it.
Room placement that runs out of attempts only makes the dungeon smaller; bad
configuration and missing templates abort the call with an exception.
"""
from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from voxel_dungeon.logging_utils import get_logger

from .barriers import BoundaryAttacher
from .config import DungeonConfig
from .corridors import ConnectionReport, CorridorConnector
from .entities import EntityKind, GridCoordinate, SceneObject, SceneRegistry, TemplateSet, Vec3, ZERO
from .errors import DungeonError, MissingTemplateError
from .grid import SpatialGrid
from .metrics import init_metrics
from .populator import PopulationReport, Populator
from .rooms import Room, RoomPlacer

log = get_logger("voxel_dungeon.pipeline")

SPAWN_HEIGHT_OFFSET = 0.05
CONTAINER_TEMPLATE = "DungeonContainer"


class GenerationState(Enum):
    IDLE = "idle"
    RESETTING = "resetting"
    PLACING_ROOMS = "placing_rooms"
    CONNECTING = "connecting"
    POPULATING = "populating"
    READY = "ready"


@dataclass
class DungeonLayout:
    """Result of one generation pass, shaped for the host that builds real geometry."""

    seed: int
    target_room_count: int
    rooms: List[Room]
    corridor_cells: List[GridCoordinate]
    connections: ConnectionReport
    population: PopulationReport
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def room_count(self) -> int:
        return len(self.rooms)

    def to_dict(self) -> Dict[str, Any]:
        index = {id(r): i for i, r in enumerate(self.rooms)}
        rooms = []
        for i, r in enumerate(self.rooms):
            rooms.append(
                {
                    "index": i,
                    "coord": list(r.coord),
                    "world_position": r.world_position.as_list(),
                    "scale": r.scale.as_list(),
                    "connections": sorted(index[id(o)] for o in r.connections if id(o) in index),
                    "barriers": [b.to_dict() for b in r.barriers],
                }
            )
        return {
            "seed": self.seed,
            "target_room_count": self.target_room_count,
            "room_count": self.room_count,
            "rooms": rooms,
            "corridor_cells": [list(c) for c in self.corridor_cells],
            "enemies": [o.to_dict() for o in self.population.enemies],
            "treasures": [o.to_dict() for o in self.population.treasures],
            "metrics": dict(self.metrics),
        }


class DungeonOrchestrator:
    def __init__(
        self,
        config: DungeonConfig | None = None,
        templates: TemplateSet | None = None,
        *,
        seed: int | None = None,
        origin: Vec3 = ZERO,
    ):
        self.config = config if config is not None else DungeonConfig()
        self.default_seed = seed
        self.templates = templates if templates is not None else TemplateSet.defaults()
        self.origin = Vec3(*origin)
        self.registry = SceneRegistry(self.templates)
        self.grid = SpatialGrid(self.config.grid_size, self.config.cell_size)
        self.barriers = BoundaryAttacher()
        self.state = GenerationState.IDLE
        self.seed: Optional[int] = seed if seed is not None else self.config.seed
        self.target_room_count = 0
        self.metrics: Dict[str, Any] = {}
        self.layout: Optional[DungeonLayout] = None
        self._placer: Optional[RoomPlacer] = None
        self._connector: Optional[CorridorConnector] = None
        self.container: Optional[SceneObject] = None

    @property
    def rooms(self) -> List[Room]:
        return list(self._placer.rooms) if self._placer is not None else []

    @property
    def room_count(self) -> int:
        return len(self.rooms)

    @property
    def corridor_cells(self) -> List[GridCoordinate]:
        return list(self._connector.corridor_cells) if self._connector is not None else []

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------
    def _required_kinds(self) -> List[EntityKind]:
        kinds = [EntityKind.ROOM, EntityKind.CORRIDOR, EntityKind.VERTICAL_CORRIDOR]
        if self.config.enemy_spawn_chance > 0:
            kinds.append(EntityKind.ENEMY)
        if self.config.treasure_spawn_chance > 0:
            kinds.append(EntityKind.TREASURE)
        return kinds

    def generate(self, seed: int | None = None) -> DungeonLayout:
        cfg = self.config.validate()
        missing = self.templates.missing(self._required_kinds())
        if missing:
            log.error(event="generation_failed", reason="missing_template", kind=missing[0].value)
            raise MissingTemplateError(missing[0])
        if seed is None:
            seed = self.default_seed
        if seed is None:
            seed = cfg.seed
        if seed is None:
            seed = random.randint(0, 2**31 - 1)
        self.seed = seed
        rng = random.Random(seed)
        log.info(event="generation_start", seed=seed, grid_size=cfg.grid_size, cell_size=cfg.cell_size)
        try:
            return self._run_pipeline(cfg, rng)
        except DungeonError as exc:
            log.error(event="generation_failed", seed=seed, error=exc)
            self.clear()
            raise

    def _run_pipeline(self, cfg: DungeonConfig, rng: random.Random) -> DungeonLayout:
        """Execute the ordered phases with per-phase timing when metrics are enabled."""
        metrics: Dict[str, Any] = init_metrics() if cfg.enable_metrics else {}
        phase_times: Dict[str, int] = {}
        start = time.perf_counter()

        def _phase(label, fn, *a, **k):
            if not cfg.enable_metrics:
                return fn(*a, **k)
            ps = time.perf_counter()
            r = fn(*a, **k)
            phase_times[label] = int((time.perf_counter() - ps) * 1000)
            return r

        self.state = GenerationState.RESETTING
        _phase("reset", self._reset, cfg, rng)

        self.state = GenerationState.PLACING_ROOMS
        failures = _phase("place_rooms", self._place_rooms, cfg, rng)

        self.state = GenerationState.CONNECTING
        connections = _phase("connect", self._connector.connect_rooms, self._placer.rooms, self.container)
        if cfg.enable_room_barriers:
            _phase("barriers", self._attach_barriers)

        self.state = GenerationState.POPULATING
        populator = Populator(self.registry, rng, cfg.enemy_spawn_chance, cfg.treasure_spawn_chance)
        population = _phase("populate", populator.populate, self._placer.rooms)

        rooms = self._placer.rooms
        if cfg.enable_metrics:
            metrics.update(
                rooms_requested=self.target_room_count,
                rooms_placed=len(rooms),
                placement_failures=failures,
                corridor_cells=connections.corridor_cells,
                tree_edges=len(connections.tree_edges),
                loop_edges=len(connections.loop_edges),
                vertical_edges=len(connections.vertical_edges),
                barriers=sum(len(r.barriers) for r in rooms),
                enemies=len(population.enemies),
                treasures=len(population.treasures),
            )
            metrics["runtime_ms"] = int((time.perf_counter() - start) * 1000)
            metrics["phase_ms"] = phase_times
        self.metrics = metrics

        self.layout = DungeonLayout(
            seed=self.seed,
            target_room_count=self.target_room_count,
            rooms=list(rooms),
            corridor_cells=list(self._connector.corridor_cells),
            connections=connections,
            population=population,
            metrics=metrics,
        )
        self.state = GenerationState.READY
        log.info(
            event="generation_complete",
            seed=self.seed,
            rooms=len(rooms),
            requested=self.target_room_count,
            corridors=len(self._connector.corridor_cells),
        )
        return self.layout

    def _reset(self, cfg: DungeonConfig, rng: random.Random) -> None:
        self._teardown()
        self.grid.reset(cfg.grid_size, cfg.cell_size)
        self.container = self.registry.spawn(
            EntityKind.CONTAINER,
            local_position=self.origin,
            template=self.templates.get(EntityKind.CONTAINER) or CONTAINER_TEMPLATE,
        )
        self._placer = RoomPlacer(self.grid, self.registry, rng, cfg.max_place_attempts)
        self._connector = CorridorConnector(self.grid, self.registry, rng, cfg.loop_factor)

    def _place_rooms(self, cfg: DungeonConfig, rng: random.Random) -> int:
        self.target_room_count = rng.randint(cfg.min_rooms, cfg.max_rooms)
        self._placer.place_room_at_center(self.container)
        failures = 0
        for _ in range(1, self.target_room_count):
            if self._placer.try_place_room(self.container) is None:
                failures += 1
        if failures:
            log.info(event="rooms_short", requested=self.target_room_count, failures=failures)
        return failures

    def _attach_barriers(self) -> None:
        for room in self._placer.rooms:
            self.barriers.attach(room)

    def _teardown(self) -> None:
        self.barriers.clear()
        if self._placer is not None:
            self._placer.clear_rooms()
        self.registry.clear()
        self._placer = None
        self._connector = None
        self.container = None
        self.layout = None
        self.target_room_count = 0

    def clear(self) -> None:
        """Drop the current dungeon and return to IDLE with an empty grid."""
        self._teardown()
        self.grid.reset()
        self.metrics = {}
        self.state = GenerationState.IDLE

    # ------------------------------------------------------------------
    # Spawn point
    # ------------------------------------------------------------------
    def get_first_room_position(self) -> Vec3:
        rooms = self.rooms
        if not rooms:
            return self.origin
        return rooms[0].world_position

    def get_spawn_position(self, height_offset: float = SPAWN_HEIGHT_OFFSET, margin: float | None = None) -> Vec3:
        """First-room position lifted by ``height_offset`` and clamped inside the lattice bounds."""
        base = self.get_first_room_position() + (0.0, height_offset, 0.0)
        lo, hi = self.grid.world_bounds()
        lo = self.origin + lo
        hi = self.origin + hi
        if margin is None:
            margin = self.grid.cell_size / 2
        out = []
        for v, a, b in zip(base, lo, hi):
            a, b = a + margin, b - margin
            if a > b:
                a = b = (a + b) / 2
            out.append(min(max(v, a), b))
        return Vec3(*out)


__all__ = ["DungeonOrchestrator", "DungeonLayout", "GenerationState"]
