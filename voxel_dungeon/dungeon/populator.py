"""Occupant placement for finished rooms (enemies, treasure).

Each room gets two independent Bernoulli trials; a room can end up with both
occupants, one, or neither. Occupants are children of their room and sit at its
local origin.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List

from voxel_dungeon.logging_utils import get_logger

from .entities import EntityKind, SceneObject, SceneRegistry, Vec3

log = get_logger("voxel_dungeon.populator")

ENEMY_SCALE_RANGE = (0.8, 1.2)


@dataclass
class PopulationReport:
    enemies: List[SceneObject] = field(default_factory=list)
    treasures: List[SceneObject] = field(default_factory=list)


class Populator:
    def __init__(self, registry: SceneRegistry, rng=None, enemy_chance: float = 0.3, treasure_chance: float = 0.2):
        self.registry = registry
        self.rng = rng if rng is not None else random
        self.enemy_chance = enemy_chance
        self.treasure_chance = treasure_chance

    def populate(self, rooms) -> PopulationReport:
        report = PopulationReport()
        for room in rooms:
            if self.rng.random() < self.enemy_chance:
                report.enemies.append(self._spawn_enemy(room))
            if self.rng.random() < self.treasure_chance:
                report.treasures.append(self._spawn_treasure(room))
        log.debug(event="rooms_populated", enemies=len(report.enemies), treasures=len(report.treasures))
        return report

    def _spawn_enemy(self, room) -> SceneObject:
        scale = self.rng.uniform(*ENEMY_SCALE_RANGE)
        return self.registry.spawn(
            EntityKind.ENEMY,
            scale=Vec3.uniform(scale),
            rotation_y=float(self.rng.randrange(360)),
            parent=room.obj,
        )

    def _spawn_treasure(self, room) -> SceneObject:
        return self.registry.spawn(
            EntityKind.TREASURE,
            rotation_y=float(self.rng.randrange(360)),
            parent=room.obj,
        )


__all__ = ["Populator", "PopulationReport"]
