"""
project: Voxel Dungeon
module: __init__.py
License: MIT

Procedural 3D dungeon generator: rooms on a cubic occupancy grid, corridor
connectivity, room boundary barriers and occupant population. Rendering and
physics live in the host; this package only produces layout records.
"""

__version__ = "0.1.0"

from .dungeon import DungeonConfig, DungeonOrchestrator  # noqa: E402,F401

__all__ = ["DungeonConfig", "DungeonOrchestrator", "__version__"]
