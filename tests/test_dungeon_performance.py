import time

import pytest

from voxel_dungeon.dungeon import DungeonConfig, DungeonOrchestrator

# Simple performance guardrail. Not a strict micro-benchmark; aims to catch large regressions.


@pytest.mark.performance
def test_generation_medium_grid():
    seeds = [10101, 20202, 30303]
    max_seconds_per = 2.0  # generous threshold; tune as needed
    for s in seeds:
        start = time.perf_counter()
        d = DungeonOrchestrator(DungeonConfig(grid_size=12, min_rooms=60, max_rooms=80, seed=s))
        layout = d.generate()
        elapsed = time.perf_counter() - start
        assert layout.room_count > 0
        assert elapsed < max_seconds_per, f"Seed {s} took {elapsed:.3f}s (> {max_seconds_per}s)"
