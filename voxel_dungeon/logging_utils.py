"""Print-based structured logging for generation events.

Each call emits one line, either ``level=.. ts=.. logger=.. event=.. k=v``
or, with VOXEL_DUNGEON_LOG_JSON=1, one JSON object. Errors go to stderr.

    log = get_logger("voxel_dungeon.pipeline")
    log.info(event="generation_complete", seed=42, rooms=10)

Grid coordinates and vectors are written compactly (``coord=2,3,2``) so a
line stays splittable on spaces. Fields set to None are dropped.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
CURRENT_LEVEL = LEVELS.get(os.getenv("VOXEL_DUNGEON_LOG_LEVEL", "info").lower(), 20)
JSON_MODE = os.getenv("VOXEL_DUNGEON_LOG_JSON", "0").lower() in ("1", "true", "yes", "on")


def _value(v) -> str:
    if isinstance(v, (int, float)):
        return str(v)
    if isinstance(v, tuple) and all(isinstance(c, (int, float)) for c in v):
        return ",".join(str(c) for c in v)
    return str(v).replace(" ", "_")


def _format(level: str, **fields) -> str:
    fields = {k: v for k, v in fields.items() if v is not None}
    ts = int(time.time())
    if JSON_MODE:
        return json.dumps({"level": level, "ts": ts, **fields}, separators=(",", ":"), default=str)
    return " ".join([f"level={level}", f"ts={ts}"] + [f"{k}={_value(v)}" for k, v in fields.items()])


def set_level(level: str) -> None:
    """Change the process-wide threshold (CLI ``--log-level``)."""
    global CURRENT_LEVEL
    CURRENT_LEVEL = LEVELS[level.lower()]


class _Logger:
    def __init__(self, name: str):
        self.name = name

    def _log(self, lvl: str, **fields):
        if LEVELS[lvl] < CURRENT_LEVEL:
            return
        line = _format(lvl, logger=self.name, **fields)
        print(line, file=sys.stderr if lvl == "error" else sys.stdout)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE = {}


def get_logger(name: str = "voxel_dungeon") -> _Logger:
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]
