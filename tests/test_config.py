import pytest

from voxel_dungeon.dungeon import ConfigError, DungeonConfig


def test_defaults_validate():
    cfg = DungeonConfig().validate()
    assert cfg.grid_size == 5
    assert cfg.cell_size == 0.2
    assert (cfg.min_rooms, cfg.max_rooms) == (10, 20)
    assert cfg.enable_room_barriers is True


def test_from_env_overrides():
    env = {
        "DUNGEON_GRID_SIZE": "7",
        "DUNGEON_CELL_SIZE": "0.5",
        "DUNGEON_MIN_ROOMS": "3",
        "DUNGEON_MAX_ROOMS": "6",
        "DUNGEON_ENEMY_SPAWN_CHANCE": "0.75",
        "DUNGEON_ENABLE_ROOM_BARRIERS": "false",
        "DUNGEON_SEED": "99",
    }
    cfg = DungeonConfig.from_env(env)
    assert cfg.grid_size == 7
    assert cfg.cell_size == 0.5
    assert (cfg.min_rooms, cfg.max_rooms) == (3, 6)
    assert cfg.enemy_spawn_chance == 0.75
    assert cfg.enable_room_barriers is False
    assert cfg.seed == 99


@pytest.mark.parametrize("raw,expected", [("1", True), ("yes", True), ("0", False), ("no", False), ("", False)])
def test_env_boolean_parsing(raw, expected):
    cfg = DungeonConfig.from_env({"DUNGEON_ENABLE_METRICS": raw})
    assert cfg.enable_metrics is expected


def test_empty_seed_means_random():
    assert DungeonConfig.from_env({"DUNGEON_SEED": ""}).seed is None


def test_unparseable_env_value():
    with pytest.raises(ConfigError) as exc:
        DungeonConfig.from_env({"DUNGEON_GRID_SIZE": "big"})
    assert exc.value.field == "grid_size"


def test_keyword_overrides_beat_env():
    cfg = DungeonConfig.from_env({"DUNGEON_GRID_SIZE": "7"}, grid_size=9, seed=None)
    assert cfg.grid_size == 9
    assert cfg.seed is None


def test_unknown_override_rejected():
    with pytest.raises(ConfigError):
        DungeonConfig.from_env({}, wormholes=True)


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("DUNGEON_MAX_ROOMS", "12")
    assert DungeonConfig.from_env().max_rooms == 12


def test_to_dict_round_trip():
    cfg = DungeonConfig(grid_size=6, seed=3)
    assert DungeonConfig(**cfg.to_dict()) == cfg
