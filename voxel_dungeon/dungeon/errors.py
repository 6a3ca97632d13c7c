"""Exception types raised by the generator.

Placement exhaustion is deliberately absent: a room that cannot be placed just
shrinks the dungeon and is reported through metrics.
"""


class DungeonError(Exception):
    """Base class for generation failures surfaced to callers of ``generate()``."""


class ConfigError(DungeonError, ValueError):
    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class MissingTemplateError(DungeonError, LookupError):
    def __init__(self, kind):
        name = getattr(kind, "value", kind)
        super().__init__(f"no template registered for {name!r}")
        self.kind = kind


__all__ = ["DungeonError", "ConfigError", "MissingTemplateError"]
