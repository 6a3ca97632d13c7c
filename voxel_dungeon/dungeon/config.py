import math
import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional

from .errors import ConfigError

_FALSE_STRINGS = {"0", "false", "no", ""}


@dataclass
class DungeonConfig:
    grid_size: int = 5
    cell_size: float = 0.2
    min_rooms: int = 10
    max_rooms: int = 20
    enemy_spawn_chance: float = 0.3
    treasure_spawn_chance: float = 0.2
    enable_room_barriers: bool = True
    seed: Optional[int] = None
    max_place_attempts: int = 100
    loop_factor: float = 0.3
    enable_metrics: bool = True

    def validate(self) -> "DungeonConfig":
        """Reject settings the later phases cannot cope with. Returns self for chaining."""
        for name in ("grid_size", "min_rooms", "max_rooms", "max_place_attempts"):
            value = getattr(self, name)
            if not _is_int(value):
                raise ConfigError(name, f"must be an integer (got {value!r})")
        for name in ("cell_size", "enemy_spawn_chance", "treasure_spawn_chance", "loop_factor"):
            value = getattr(self, name)
            if not _is_finite(value):
                raise ConfigError(name, f"must be a finite number (got {value!r})")
        if self.seed is not None and not _is_int(self.seed):
            raise ConfigError("seed", f"must be an integer or None (got {self.seed!r})")
        if self.grid_size < 1:
            raise ConfigError("grid_size", f"must be an integer >= 1 (got {self.grid_size!r})")
        if not self.cell_size > 0:
            raise ConfigError("cell_size", f"must be > 0 (got {self.cell_size!r})")
        if self.min_rooms < 1:
            raise ConfigError("min_rooms", f"must be >= 1 (got {self.min_rooms!r})")
        if self.min_rooms > self.max_rooms:
            raise ConfigError(
                "min_rooms", f"min_rooms ({self.min_rooms}) exceeds max_rooms ({self.max_rooms})"
            )
        for name in ("enemy_spawn_chance", "treasure_spawn_chance"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigError(name, f"must be within [0, 1] (got {value!r})")
        if self.max_place_attempts < 1:
            raise ConfigError("max_place_attempts", f"must be >= 1 (got {self.max_place_attempts!r})")
        if self.loop_factor < 0:
            raise ConfigError("loop_factor", f"must be >= 0 (got {self.loop_factor!r})")
        return self

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, prefix: str = "DUNGEON_", **overrides):
        """Build a config from ``DUNGEON_*`` variables, then apply keyword overrides.

        ``DUNGEON_GRID_SIZE=7`` sets ``grid_size``; booleans treat anything outside
        {0,false,no,""} as true. Keyword overrides whose value is None are ignored.
        """
        env = os.environ if environ is None else environ
        cfg = cls()
        for f in fields(cls):
            key = prefix + f.name.upper()
            if key not in env:
                continue
            raw = env[key].strip()
            setattr(cfg, f.name, _coerce(f.name, f.default, raw))
        for name, value in overrides.items():
            if value is None:
                continue
            if not hasattr(cfg, name):
                raise ConfigError(name, "unknown setting")
            setattr(cfg, name, value)
        return cfg

    def to_dict(self):
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_finite(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _coerce(name: str, default, raw: str):
    if isinstance(default, bool):
        return raw.lower() not in _FALSE_STRINGS
    if name == "seed" and not raw:
        return None
    try:
        if isinstance(default, int) or name == "seed":
            return int(raw)
        if isinstance(default, float):
            return float(raw)
    except ValueError:
        raise ConfigError(name, f"cannot parse {raw!r}") from None
    return raw


__all__ = ["DungeonConfig"]
