import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from voxel_dungeon.dungeon import DungeonConfig, DungeonOrchestrator, SceneRegistry, SpatialGrid  # noqa: E402


@pytest.fixture(autouse=True)
def _clean_dungeon_env(monkeypatch):
    """Keep DUNGEON_* variables from the developer shell out of config tests."""
    for key in list(os.environ):
        if key.startswith("DUNGEON_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def small_config():
    return DungeonConfig(grid_size=5, cell_size=0.2, min_rooms=10, max_rooms=10, seed=1234)


@pytest.fixture()
def orchestrator(small_config):
    return DungeonOrchestrator(small_config)


@pytest.fixture()
def grid():
    return SpatialGrid(5, 0.2)


@pytest.fixture()
def registry():
    return SceneRegistry()
