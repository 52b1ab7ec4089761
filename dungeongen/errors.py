"""
Exceptions raised while building or post-processing a grid.
"""


class DungeonGenError(RuntimeError):
    """Base class for every error raised by dungeongen."""


class OutOfBoundsError(DungeonGenError):
    """A coordinate fell outside the buffer, or a floor tile was placed in the border margin."""

    def __init__(self, x: int, y: int, message: str = "Coordinate out of bounds") -> None:
        super().__init__(f"{message}: ({x}, {y})")
        self.x = x
        self.y = y


class NotEnoughSpaceError(DungeonGenError):
    """The requested number of rooms does not fit on the grid."""


class GenerationTimeoutError(DungeonGenError):
    """Generation ran out of wall-clock time or attempts."""


class FloorCollisionError(DungeonGenError):
    """A room footprint (or its wall perimeter) overlaps an existing floor tile."""


class ConfigError(DungeonGenError, ValueError):
    """The generation parameters are inconsistent."""
