import random

import pytest

from voxel_dungeon.dungeon import EntityKind, GridCoordinate, RoomPlacer, SceneRegistry, SpatialGrid, Vec3
from voxel_dungeon.dungeon.rooms import ROOM_SCALE


class _ScriptedRng:
    """Returns queued randrange values; fails loudly if the placer asks for more."""

    def __init__(self, values):
        self.values = list(values)

    def randrange(self, n):
        return self.values.pop(0)


def test_center_room_always_placed(grid, registry):
    placer = RoomPlacer(grid, registry, random.Random(0))
    room = placer.place_room_at_center()
    assert room.coord == GridCoordinate(2, 2, 2)
    assert grid.is_occupied(room.coord)
    assert room.world_position == Vec3(0.0, 0.0, 0.0)
    assert room.scale == Vec3.uniform(0.2 * ROOM_SCALE)
    assert room.obj.kind is EntityKind.ROOM
    assert placer.rooms == [room]


def test_try_place_room_skips_occupied_cells(grid, registry):
    placer = RoomPlacer(grid, registry, _ScriptedRng([2, 2, 2, 0, 1, 4]))
    placer.place_room_at_center()
    room = placer.try_place_room()
    assert room is not None
    assert room.coord == GridCoordinate(0, 1, 4)
    assert len(placer.rooms) == 2


def test_try_place_room_rejects_enclosed_cells(grid, registry):
    target = GridCoordinate(1, 1, 1)
    for dx, dy, dz in [(1, 0, 0), (-1, 0, 0), (0, 1, 0), (0, -1, 0), (0, 0, 1), (0, 0, -1)]:
        grid.set_occupied(target.offset(dx, dy, dz))
    placer = RoomPlacer(grid, registry, _ScriptedRng([1, 1, 1, 3, 3, 3]))
    room = placer.try_place_room()
    assert room.coord == GridCoordinate(3, 3, 3)
    assert not grid.is_occupied(target)


def test_exhaustion_returns_none(registry):
    g = SpatialGrid(1, 1.0)
    placer = RoomPlacer(g, registry, random.Random(3))
    placer.place_room_at_center()
    assert placer.try_place_room() is None
    assert len(placer.rooms) == 1


def test_attempt_cap_is_respected(grid, registry):
    class CountingRng(random.Random):
        calls = 0

        def randrange(self, *a, **k):
            CountingRng.calls += 1
            return 2

    placer = RoomPlacer(grid, registry, CountingRng(1), max_attempts=7)
    placer.place_room_at_center()
    assert placer.try_place_room() is None
    assert CountingRng.calls == 7 * 3


def test_clear_rooms_destroys_records(grid, registry):
    placer = RoomPlacer(grid, registry, random.Random(9))
    a = placer.place_room_at_center()
    b = placer.try_place_room()
    a.connect(b)
    placer.clear_rooms()
    assert placer.rooms == []
    assert registry.count(EntityKind.ROOM) == 0
    assert not a.obj.alive and not b.obj.alive
    assert not a.connections


def test_room_connections_are_symmetric(grid, registry):
    placer = RoomPlacer(grid, registry)
    a = placer.place_room(GridCoordinate(0, 0, 0))
    b = placer.place_room(GridCoordinate(4, 4, 4))
    a.connect(b)
    assert a.is_connected(b) and b.is_connected(a)
    a.connect(a)
    assert a not in a.connections


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
def test_random_rooms_never_share_a_cell(grid, registry, seed):
    placer = RoomPlacer(grid, registry, random.Random(seed))
    placer.place_room_at_center()
    for _ in range(30):
        placer.try_place_room()
    coords = [r.coord for r in placer.rooms]
    assert len(coords) == len(set(coords))
    assert grid.occupied_count() == len(coords)
