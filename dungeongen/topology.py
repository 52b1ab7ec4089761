"""
Post-processing passes that work purely on a grid's current tiles.

Typical use after a generator has run:

    grid.clean_islands()      # drop floor fragments that float on their own
    grid.prune_walls(5)       # open up thin wall slivers, repeat as needed
    grid.thicken_walls()      # surround every floor with walls
"""

from collections import deque
from typing import TYPE_CHECKING, Deque, List, Optional, Set, Tuple

import numpy as np

from .tiles import Tile

if TYPE_CHECKING:
    from .grid import Grid

Region = Set[Tuple[int, int]]

# 8-neighbourhood offsets: (delta_row, delta_col)
NEIGHBOR_OFFSETS = [(dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if (dr, dc) != (0, 0)]


def thicken_walls(grid: "Grid") -> None:
    """
    Write WALL into every VOID tile within wall_thickness of a FLOOR tile,
    and turn any leftover PENDING_WALL into WALL.

    Walls may reach into the border margin and up to the buffer edge. Only
    VOID->WALL and PENDING_WALL->WALL happen, so running it twice changes
    nothing.
    """
    t = grid.config.wall_thickness
    tiles = grid.tiles
    with grid.without_border():
        for y in range(grid.height):
            for x in range(grid.width):
                tile = grid.read(x, y)
                if tile == Tile.FLOOR:
                    neighborhood = tiles[max(0, y - t) : y + t + 1, max(0, x - t) : x + t + 1]
                    neighborhood[neighborhood == Tile.VOID] = Tile.WALL
                elif tile == Tile.PENDING_WALL:
                    grid.write(x, y, Tile.WALL)


def finalize_pending_walls(grid: "Grid") -> int:
    """Turn every PENDING_WALL into WALL. Returns how many were converted."""
    pending = grid.tiles == Tile.PENDING_WALL
    grid.tiles[pending] = Tile.WALL
    return int(np.count_nonzero(pending))


def floor_neighbor_counts(grid: "Grid") -> np.ndarray:
    """Number of FLOOR tiles among each cell's 8 neighbours."""
    floor = np.pad((grid.tiles == Tile.FLOOR).astype(np.int8), 1)
    rows, cols = grid.tiles.shape
    counts = np.zeros((rows, cols), dtype=np.int8)
    for dr, dc in NEIGHBOR_OFFSETS:
        counts += floor[1 + dr : 1 + dr + rows, 1 + dc : 1 + dc + cols]
    return counts


def playable_mask(grid: "Grid") -> np.ndarray:
    """Boolean mask of cells where floor may be placed."""
    mask = np.zeros(grid.tiles.shape, dtype=bool)
    b = grid.border
    mask[b : grid.height - b, b : grid.width - b] = True
    return mask


def prune_walls(grid: "Grid", min_neighbor_floor: int) -> int:
    """
    Turn walls that are mostly surrounded by floor into floor.

    A single pass: neighbour counts come from the grid as it was when the
    pass started, so the result doesn't depend on scan order. Unlike an
    in-place row-major scan, a wall converted in this pass doesn't count
    as floor for its neighbours until the next pass. Callers run it several
    times to erode thicker fragments. Walls in the border margin
    are left alone. Returns the number of walls converted.
    """
    counts = floor_neighbor_counts(grid)
    convert = (grid.tiles == Tile.WALL) & (counts >= min_neighbor_floor) & playable_mask(grid)
    grid.tiles[convert] = Tile.FLOOR
    return int(np.count_nonzero(convert))


def floor_regions(grid: "Grid") -> List[Region]:
    """
    Split the floor into 4-connected regions.

    Regions are returned in the row-major order of their first tile.
    """
    floor: Region = set(grid.positions(Tile.FLOOR))
    regions: List[Region] = []
    visited: Region = set()

    for start in grid.positions(Tile.FLOOR):
        if start in visited:
            continue
        region: Region = {start}
        queue: Deque[Tuple[int, int]] = deque([start])
        while queue:
            x, y = queue.popleft()
            for neighbor in ((x - 1, y), (x + 1, y), (x, y - 1), (x, y + 1)):
                if neighbor in floor and neighbor not in region:
                    region.add(neighbor)
                    queue.append(neighbor)
        visited |= region
        regions.append(region)

    return regions


def is_floor_connected(grid: "Grid") -> bool:
    """True if the grid has floor and all of it forms one region."""
    return len(floor_regions(grid)) == 1


def clean_islands(grid: "Grid", min_size: int) -> int:
    """
    Erase floor regions with fewer than min_size tiles.

    Returns the number of tiles turned back into VOID.
    """
    cleared = 0
    for region in floor_regions(grid):
        if len(region) >= min_size:
            continue
        for x, y in region:
            grid.tiles[y, x] = Tile.VOID
        cleared += len(region)
    return cleared


def floor_bounding_box(grid: "Grid") -> Optional[Tuple[int, int, int, int]]:
    """(min_x, min_y, max_x, max_y) of all FLOOR tiles, inclusive, or None."""
    rows, cols = np.where(grid.tiles == Tile.FLOOR)
    if len(rows) == 0:
        return None
    return int(cols.min()), int(rows.min()), int(cols.max()), int(rows.max())
