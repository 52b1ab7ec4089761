"""Procedural dungeon map generation on a tile grid."""

from dungeongen.tiles import Tile
from dungeongen.config import GenerationConfig
from dungeongen.errors import (
    DungeonGenError,
    OutOfBoundsError,
    NotEnoughSpaceError,
    GenerationTimeoutError,
    FloorCollisionError,
    ConfigError,
)
from dungeongen.geometry import Position, Direction, Rect
from dungeongen.grid import Grid, TileMap
from dungeongen.grid_rooms import LatticeLayout, lattice_capacity
from dungeongen.freeform_rooms import FreeformLayout
from dungeongen.topology import floor_regions, floor_bounding_box, is_floor_connected
