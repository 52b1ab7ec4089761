"""
Random Walk Generation
======================

A cursor starts at the centre of the grid and staggers around, carving a
corridor_width square of floor at every step, until tile_budget new floor
tiles exist. The result looks chaotic but natural, and every tile touches
the rest of the cave.

If a carve would leave the playable area the cursor jumps back to the
centre. A finished walk is only kept if:

1. its bounding box spans at least half the grid's width or height, and
2. the row through the middle of the bounding box reads floor, gap, floor
   (the "convexity" check: the cave isn't one unbroken run on that line).

Otherwise the grid is cleared and the walk starts over. Keep tile_budget
well below the playable area or generation can take a long time.
"""

import logging
from typing import TYPE_CHECKING

from .errors import ConfigError, OutOfBoundsError
from .geometry import DIRECTIONS, Rect
from .retry import Deadline, RetryGeneration, run_with_retries
from .tiles import Tile

if TYPE_CHECKING:
    from .grid import Grid

logger = logging.getLogger(__name__)


def scanline_has_gap(grid: "Grid", y: int, start_x: int, end_x: int) -> bool:
    """
    True if row y, read from start_x up to (not including) end_x, holds
    floor, then void, then floor again.

    Cells that can't be read (border margin) are skipped.
    """
    found_floor = False
    in_gap = False
    for x in range(start_x, end_x):
        try:
            tile = grid.read(x, y)
        except OutOfBoundsError:
            continue
        if tile == Tile.FLOOR:
            if found_floor and in_gap:
                return True
            found_floor = True
        elif tile == Tile.VOID and found_floor:
            in_gap = True
    return False


def _walk(grid: "Grid", tile_budget: int, deadline: Deadline) -> None:
    w, h = grid.width, grid.height
    center_x, center_y = grid.center
    size = grid.config.corridor_width

    x, y = center_x, center_y
    min_x, max_x, min_y, max_y = w, 0, h, 0

    carved = 0
    while carved < tile_budget:
        deadline.check()

        step = grid.rng.choice(DIRECTIONS).step()
        x += step.column
        y += step.row

        escaped = False
        for bx, by in Rect.centered(x, y, size, size).cells():
            if grid.in_playable_area(bx, by) and grid.read(bx, by) != Tile.VOID:
                continue
            try:
                grid.write(bx, by, Tile.FLOOR)
            except OutOfBoundsError:
                escaped = True
                break
            carved += 1

        if escaped:
            x, y = center_x, center_y
            continue

        min_x, max_x = min(min_x, x), max(max_x, x)
        min_y, max_y = min(min_y, y), max(max_y, y)

    if max_x - min_x < w // 2 and max_y - min_y < h // 2:
        raise RetryGeneration("bounds too small")

    mid_y = min_y + (max_y - min_y) // 2
    if not scanline_has_gap(grid, mid_y, min_x, max_x):
        raise RetryGeneration("no convexity")


def generate_random_walk(grid: "Grid", tile_budget: int) -> None:
    """
    Fill grid with a random-walk cave of about tile_budget floor tiles.

    Raises:
        GenerationTimeoutError: no acceptable walk was found in time
    """
    grid.config.validate()
    if tile_budget < 1:
        raise ConfigError(f"tile_budget must be >= 1, got {tile_budget}")
    logger.debug("Random walk: %d tiles on %dx%d", tile_budget, grid.width, grid.height)
    run_with_retries(grid, lambda deadline: _walk(grid, tile_budget, deadline), "random walk")
