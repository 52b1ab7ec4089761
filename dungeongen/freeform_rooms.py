"""
Freeform Room Generation
========================

Rooms of random size grow outwards from the centre of the grid:

1. Place a randomly sized room at the grid centre; it is the first anchor.
2. For every further room:
   a. Pick a random size and a random direction
   b. Put the room next to the anchor in that direction, leaving a
      wall_thickness gap, centred on the anchor's centre line
   c. If it (or its wall perimeter) would touch existing floor, or leave
      the playable area, roll back: a random room placed earlier becomes
      the anchor and the same slot is tried again
   d. Otherwise carve a corridor through the gap; the new room becomes
      the anchor
3. Convert the reserved perimeters (PENDING_WALL) into walls.

Rolling back to any earlier room, rather than only the previous one, lets
the dungeon branch instead of dead-ending.
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Tuple

from .errors import FloorCollisionError, NotEnoughSpaceError, OutOfBoundsError
from .geometry import DIRECTIONS, Direction, Rect
from .grid_rooms import check_capacity
from .retry import Deadline, run_with_retries
from .tiles import Tile
from .topology import finalize_pending_walls

if TYPE_CHECKING:
    from .grid import Grid

logger = logging.getLogger(__name__)


@dataclass
class FreeformLayout:
    """Rooms in placement order, and the corridor carved for each room after the first."""

    rooms: List[Rect] = field(default_factory=list)
    corridors: List[Rect] = field(default_factory=list)


def place_room(grid: "Grid", room: Rect, wall_thickness: int) -> None:
    """
    Write a room's floor and reserve its wall perimeter.

    The whole footprint, perimeter included, is checked before anything is
    written, so a failed placement leaves the grid untouched. Perimeter
    cells that already hold something are left as they are.

    Raises:
        FloorCollisionError: the footprint touches existing floor
        OutOfBoundsError: the footprint reaches the border margin
    """
    footprint = room.expanded(wall_thickness)
    for x, y in footprint.cells():
        if grid.read(x, y) == Tile.FLOOR:
            raise FloorCollisionError(f"Floor tile already placed at ({x}, {y})")

    for x, y in footprint.cells():
        if room.contains(x, y):
            grid.write(x, y, Tile.FLOOR)
        elif grid.read(x, y) == Tile.VOID:
            grid.write(x, y, Tile.PENDING_WALL)


def adjacent_room(anchor: Rect, width: int, height: int, direction: Direction, gap: int) -> Rect:
    """A width x height room next to anchor, gap tiles away, sharing its centre line."""
    center_x, center_y = anchor.center
    if direction == Direction.WEST:
        return Rect(anchor.left - gap - width, center_y - height // 2, width, height)
    if direction == Direction.EAST:
        return Rect(anchor.right + gap, center_y - height // 2, width, height)
    if direction == Direction.NORTH:
        return Rect(center_x - width // 2, anchor.top - gap - height, width, height)
    return Rect(center_x - width // 2, anchor.bottom + gap, width, height)


def bridge_corridor(anchor: Rect, room: Rect, direction: Direction, width: int, offset: int = 0) -> Rect:
    """
    The corridor filling the gap between anchor and a room placed next to it.

    offset shifts it sideways along the shared edge; keep it within
    +/-(narrower span - width) // 2 so the corridor meets both rooms.
    """
    center_x, center_y = anchor.center
    if direction.is_horizontal:
        left = min(anchor.right, room.right)
        return Rect(left, center_y - width // 2 + offset, max(anchor.left, room.left) - left, width)
    top = min(anchor.bottom, room.bottom)
    return Rect(center_x - width // 2 + offset, top, width, max(anchor.top, room.top) - top)


def _random_size(grid: "Grid") -> Tuple[int, int]:
    config = grid.config
    width = grid.random_int(config.min_room_width, config.max_room_width)
    height = grid.random_int(config.min_room_height, config.max_room_height)
    return width, height


def _corridor_offset(grid: "Grid", anchor: Rect, room: Rect, direction: Direction) -> int:
    if not grid.config.allow_random_corridor_offset:
        return 0
    if direction.is_horizontal:
        span = min(anchor.height, room.height)
    else:
        span = min(anchor.width, room.width)
    bound = max(0, (span - grid.config.corridor_width) // 2)
    return grid.random_int(-bound, bound)


def _place_rooms(grid: "Grid", room_count: int, deadline: Deadline) -> FreeformLayout:
    config = grid.config
    t = config.wall_thickness
    center_x, center_y = grid.center

    width, height = _random_size(grid)
    first = Rect.centered(center_x, center_y, width, height)
    try:
        place_room(grid, first, t)
    except (FloorCollisionError, OutOfBoundsError) as exc:
        raise NotEnoughSpaceError(f"Not enough space for the first room {first}") from exc

    layout = FreeformLayout(rooms=[first])
    anchor = first

    while len(layout.rooms) < room_count:
        deadline.check()

        width, height = _random_size(grid)
        direction = grid.rng.choice(DIRECTIONS)
        room = adjacent_room(anchor, width, height, direction, t)

        try:
            place_room(grid, room, t)
        except (FloorCollisionError, OutOfBoundsError) as exc:
            logger.debug("rollback: %s", exc)
            anchor = grid.rng.choice(layout.rooms)
            continue

        offset = _corridor_offset(grid, anchor, room, direction)
        corridor = bridge_corridor(anchor, room, direction, config.corridor_width, offset)
        for x, y in corridor.cells():
            if grid.read(x, y) != Tile.FLOOR:
                grid.write(x, y, Tile.FLOOR)

        layout.rooms.append(room)
        layout.corridors.append(corridor)
        anchor = room

    finalize_pending_walls(grid)
    return layout


def generate_freeform_rooms(grid: "Grid", room_count: int) -> FreeformLayout:
    """
    Fill grid with room_count randomly sized rooms joined by short corridors.

    The space check uses the same lattice capacity as grid rooms, although
    placement itself is tile-accurate. Returns the placed rooms and
    corridors; the grid doesn't keep them.

    Raises:
        NotEnoughSpaceError: room_count exceeds the lattice capacity
        GenerationTimeoutError: the rooms couldn't be placed in time
    """
    grid.config.validate_rooms()
    check_capacity(grid, room_count)
    return run_with_retries(
        grid, lambda deadline: _place_rooms(grid, room_count, deadline), "freeform rooms"
    )
