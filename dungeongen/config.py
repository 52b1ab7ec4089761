from dataclasses import dataclass

from .errors import ConfigError


@dataclass
class GenerationConfig:
    """
    Parameters shared by every generator.

    A Grid owns one of these; callers may change fields between
    generator calls, generators only read them.
    """

    border: int = 2  # no floor is ever placed in this margin
    wall_thickness: int = 2
    corridor_width: int = 2
    min_room_width: int = 4
    min_room_height: int = 4
    max_room_width: int = 8  # also the lattice cell size for grid rooms
    max_room_height: int = 8
    allow_random_corridor_offset: bool = False

    # Seconds
    retry_timeout: float = 0.25
    failure_timeout: float = 2.0
    max_attempts: int = 10_000

    # Floor regions smaller than this are removed by clean_islands()
    min_island_size: int = 26

    def validate(self) -> None:
        """Raise ConfigError if the parameters every generator uses are out of range."""
        if self.border < 0:
            raise ConfigError(f"border must be >= 0, got {self.border}")
        if self.wall_thickness < 0:
            raise ConfigError(f"wall_thickness must be >= 0, got {self.wall_thickness}")
        if self.corridor_width < 1:
            raise ConfigError(f"corridor_width must be >= 1, got {self.corridor_width}")
        if self.retry_timeout <= 0 or self.failure_timeout <= 0:
            raise ConfigError("timeouts must be positive")
        if self.max_attempts < 1:
            raise ConfigError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.min_island_size < 0:
            raise ConfigError(f"min_island_size must be >= 0, got {self.min_island_size}")

    def validate_rooms(self) -> None:
        """
        validate(), plus the room size and lattice rules.

        Only the room generators need these; the random walk ignores room
        sizes, so a corridor wider than the smallest room is fine there.
        """
        self.validate()
        if self.min_room_width < 1 or self.min_room_height < 1:
            raise ConfigError("minimum room size must be at least 1x1")
        if self.min_room_width > self.max_room_width:
            raise ConfigError(
                f"min_room_width ({self.min_room_width}) > max_room_width ({self.max_room_width})"
            )
        if self.min_room_height > self.max_room_height:
            raise ConfigError(
                f"min_room_height ({self.min_room_height}) > max_room_height ({self.max_room_height})"
            )
        if self.corridor_width > min(self.min_room_width, self.min_room_height):
            raise ConfigError(
                f"corridor_width ({self.corridor_width}) is wider than the smallest room"
            )
        if self.grid_room_size < self.corridor_width:
            raise ConfigError(
                "max_room_width must leave room for wall_thickness and a corridor: "
                f"{self.max_room_width} - {self.wall_thickness} < {self.corridor_width}"
            )

    @property
    def lattice_cell_size(self) -> int:
        return self.max_room_width

    @property
    def grid_room_size(self) -> int:
        """Side of the square floor area of a lattice room (cell minus its wall)."""
        return self.max_room_width - self.wall_thickness
