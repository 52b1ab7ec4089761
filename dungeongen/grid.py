"""
The tile grid every generator draws into.

Tiles are stored in a numpy array indexed [row, column], i.e. [y, x]. The
public read/write API takes (x, y) to keep the generator code readable.
"""

import random
import time
from contextlib import contextmanager
from typing import Iterator, List, Optional, Tuple

import numpy as np

from .config import GenerationConfig
from .errors import ConfigError, OutOfBoundsError
from .retry import Clock
from .tiles import Tile
from . import freeform_rooms, grid_rooms, random_walk, topology

# Type Definition
TileMap = np.ndarray


class Grid:
    def __init__(
        self,
        width: int,
        height: int,
        config: Optional[GenerationConfig] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        """
        Args:
            width, height: Size of the tile buffer
            config: Generation parameters (defaults to GenerationConfig())
            seed: Seed for the grid's own random source; ignored if rng is given
            rng: Random source to use instead of a freshly seeded one
            clock: Monotonic clock in seconds, drives the retry timers
        """
        if width < 1 or height < 1:
            raise ConfigError(f"grid must be at least 1x1, got {width}x{height}")

        self.width: int = width
        self.height: int = height
        self.config: GenerationConfig = config if config is not None else GenerationConfig()
        self.rng: random.Random = rng if rng is not None else random.Random(seed)
        self.clock: Clock = clock or time.monotonic
        self.tiles: TileMap
        self.clear()

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height}, floor={self.count(Tile.FLOOR)})"

    @property
    def border(self) -> int:
        return self.config.border

    @border.setter
    def border(self, value: int) -> None:
        self.config.border = value

    @property
    def center(self) -> Tuple[int, int]:
        return (self.width // 2, self.height // 2)

    def clear(self, width: Optional[int] = None, height: Optional[int] = None) -> None:
        """Throw away every tile (optionally resizing) and start from VOID."""
        if width is not None:
            self.width = width
        if height is not None:
            self.height = height
        self.tiles = np.full((self.height, self.width), Tile.VOID, dtype=np.int8)

    def in_buffer(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def in_playable_area(self, x: int, y: int) -> bool:
        """True if a floor tile may be placed at (x, y)."""
        b = self.border
        return b <= x < self.width - b and b <= y < self.height - b

    def read(self, x: int, y: int) -> Tile:
        """
        Returns the tile at (x, y).

        Raises OutOfBoundsError inside the border margin as well as outside
        the buffer, so scans naturally stop at the playable area.
        """
        if not self.in_playable_area(x, y):
            raise OutOfBoundsError(x, y)
        return Tile(int(self.tiles[y, x]))

    def write(self, x: int, y: int, tile: Tile) -> None:
        """
        Set the tile at (x, y).

        Only FLOOR is kept out of the border margin; walls may sit anywhere
        in the buffer so they can cap the playable area.
        """
        if not self.in_buffer(x, y):
            raise OutOfBoundsError(x, y)
        if tile == Tile.FLOOR and not self.in_playable_area(x, y):
            raise OutOfBoundsError(x, y, "Floor placed in border")
        self.tiles[y, x] = tile

    @contextmanager
    def without_border(self) -> Iterator["Grid"]:
        """Temporarily treat the whole buffer as playable."""
        saved = self.config.border
        self.config.border = 0
        try:
            yield self
        finally:
            self.config.border = saved

    def count(self, tile: Tile) -> int:
        return int(np.count_nonzero(self.tiles == tile))

    def positions(self, tile: Tile) -> List[Tuple[int, int]]:
        """All (x, y) holding the given tile, row-major."""
        return [(int(col), int(row)) for row, col in np.argwhere(self.tiles == tile)]

    def random_int(self, low: int, high: int) -> int:
        """Uniform integer in [low, high], both inclusive."""
        return self.rng.randint(low, high)

    # Generators

    def generate_random_walk(self, tile_budget: int) -> None:
        """Carve a chaotic, cave-like floor of roughly tile_budget tiles."""
        random_walk.generate_random_walk(self, tile_budget)

    def generate_grid_rooms(self, room_count: int) -> None:
        """Lay out equally sized rooms on a lattice joined by straight corridors."""
        grid_rooms.generate_grid_rooms(self, room_count)

    def generate_freeform_rooms(self, room_count: int) -> None:
        """Grow a chain of randomly sized rooms, each joined to an earlier one."""
        freeform_rooms.generate_freeform_rooms(self, room_count)

    # Post-processing

    def thicken_walls(self) -> None:
        topology.thicken_walls(self)

    def prune_walls(self, min_neighbor_floor: int) -> int:
        return topology.prune_walls(self, min_neighbor_floor)

    def clean_islands(self, min_size: Optional[int] = None) -> int:
        if min_size is None:
            min_size = self.config.min_island_size
        return topology.clean_islands(self, min_size)
