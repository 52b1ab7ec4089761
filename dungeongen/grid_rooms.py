"""
Grid Room Generation
====================

Rooms all have the same size and sit on a coarse lattice whose cells are
max_room_width tiles wide. The outermost ring of lattice cells is never
used, which leaves space for walls.

1. Start with the centre lattice cell occupied.
2. Walk a cursor over the lattice in random cardinal steps. Each accepted
   cell is appended to the current "run"; a cell that wasn't occupied yet
   becomes a new room. Stepping back onto an occupied cell is allowed (it
   closes a loop) unless that cell already has two or more occupied
   neighbours.
3. When a step is rejected (lattice border, or a crowded cell) backtrack:
   jump to the first visited cell that can still grow and start a new run
   there.
4. Materialise: every occupied cell becomes a square floor room, and
   consecutive cells of a run are joined by a straight corridor.
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Tuple

import numpy as np

from .errors import ConfigError, NotEnoughSpaceError
from .geometry import DIRECTIONS, Position, Rect
from .retry import Deadline, run_with_retries
from .tiles import Tile

if TYPE_CHECKING:
    from .grid import Grid

logger = logging.getLogger(__name__)

# A run is a list of lattice cells visited consecutively without backtracking
Run = List[Position]


@dataclass
class LatticeLayout:
    """Room adjacency decided on the lattice, before any tile is written."""

    occupied: np.ndarray  # bool, indexed [row, column]
    runs: List[Run] = field(default_factory=list)

    @classmethod
    def empty(cls, width: int, height: int) -> "LatticeLayout":
        return cls(occupied=np.zeros((height, width), dtype=bool))

    @property
    def width(self) -> int:
        return self.occupied.shape[1]

    @property
    def height(self) -> int:
        return self.occupied.shape[0]

    @property
    def room_count(self) -> int:
        return int(np.count_nonzero(self.occupied))

    def rooms(self) -> List[Position]:
        """Occupied cells, row-major."""
        return [Position(row=int(r), column=int(c)) for r, c in np.argwhere(self.occupied)]

    def is_interior(self, cell: Position) -> bool:
        """True for cells that may hold a room (not on the lattice border)."""
        return 0 < cell.row < self.height - 1 and 0 < cell.column < self.width - 1

    def is_occupied(self, cell: Position) -> bool:
        if not (0 <= cell.row < self.height and 0 <= cell.column < self.width):
            return False
        return bool(self.occupied[cell.row, cell.column])

    def occupy(self, cell: Position) -> bool:
        """Mark cell occupied. Returns True if it wasn't occupied before."""
        if self.is_occupied(cell):
            return False
        self.occupied[cell.row, cell.column] = True
        return True

    def occupied_neighbors(self, cell: Position) -> int:
        return sum(1 for neighbor in cell.neighbors() if self.is_occupied(neighbor))

    def can_grow(self, cell: Position) -> bool:
        return any(
            self.is_interior(neighbor) and not self.is_occupied(neighbor)
            for neighbor in cell.neighbors()
        )

    def corridors(self) -> List[Tuple[Position, Position]]:
        """Pairs of consecutive cells in every run."""
        pairs = []
        for run in self.runs:
            pairs.extend(zip(run, run[1:]))
        return pairs


def lattice_size(grid: "Grid") -> Tuple[int, int]:
    """(width, height) of the lattice, including its unused outer ring."""
    s = grid.config.lattice_cell_size
    playable_width = grid.width - grid.border * 2
    playable_height = grid.height - grid.border * 2
    return max(0, playable_width // s), max(0, playable_height // s)


def lattice_capacity(grid: "Grid") -> int:
    """Maximum number of rooms the lattice (minus its outer ring) can hold."""
    mw, mh = lattice_size(grid)
    return max(0, mw - 2) * max(0, mh - 2)


def check_capacity(grid: "Grid", room_count: int) -> None:
    """Raise NotEnoughSpaceError if room_count can't fit, before anything is written."""
    if room_count < 1:
        raise ConfigError(f"room_count must be >= 1, got {room_count}")
    mw, mh = lattice_size(grid)
    capacity = lattice_capacity(grid)
    logger.debug(
        "Max grid size is %d x %d, so max room count is %d", max(0, mw - 2), max(0, mh - 2), capacity
    )
    if room_count > capacity:
        raise NotEnoughSpaceError(
            f"Not enough space to generate dungeon: {room_count} rooms requested, "
            f"lattice holds {capacity}"
        )


def _backtrack(layout: LatticeLayout) -> Position:
    """
    Pick a visited cell to resume the walk from.

    Prefers the earliest cell with at most two occupied neighbours that can
    still grow; otherwise the earliest cell that can grow at all.
    """
    fallback: Optional[Position] = None
    for run in layout.runs:
        for cell in run:
            if not layout.can_grow(cell):
                continue
            if layout.occupied_neighbors(cell) <= 2:
                return cell
            if fallback is None:
                fallback = cell
    if fallback is None:
        raise NotEnoughSpaceError("Not enough space to generate dungeon: lattice is full")
    return fallback


def layout_lattice(
    grid: "Grid", room_count: int, deadline: Optional[Deadline] = None
) -> LatticeLayout:
    """
    Decide which lattice cells hold rooms and how they are connected.

    Uses grid's size, config and random source but doesn't touch its tiles.
    """
    mw, mh = lattice_size(grid)
    layout = LatticeLayout.empty(mw, mh)

    cursor = Position(row=mh // 2, column=mw // 2)
    layout.occupy(cursor)
    layout.runs.append([cursor])
    placed = 1

    while placed < room_count:
        if deadline is not None:
            deadline.check()

        candidate = cursor.moved(grid.rng.choice(DIRECTIONS))
        crowded = layout.is_occupied(candidate) and layout.occupied_neighbors(candidate) >= 2
        if not layout.is_interior(candidate) or crowded:
            cursor = _backtrack(layout)
            # A run that never got past its starting cell carries no corridors
            if len(layout.runs[-1]) == 1:
                layout.runs[-1] = [cursor]
            else:
                layout.runs.append([cursor])
            continue

        if layout.occupy(candidate):
            placed += 1
        layout.runs[-1].append(candidate)
        cursor = candidate

    return layout


def room_rect(grid: "Grid", cell: Position) -> Rect:
    """Floor area of the room in a lattice cell: the cell inset by the wall."""
    config = grid.config
    s = config.lattice_cell_size
    inset = config.wall_thickness // 2
    size = config.grid_room_size
    return Rect(
        grid.border + cell.column * s + inset,
        grid.border + cell.row * s + inset,
        size,
        size,
    )


def corridor_rect(grid: "Grid", start: Position, end: Position, offset: int = 0) -> Rect:
    """
    Straight corridor between the centres of two neighbouring lattice rooms.

    offset shifts the corridor sideways; it must stay within
    +/-(room size - corridor width) // 2 for the corridor to meet both rooms.
    """
    if abs(start.row - end.row) + abs(start.column - end.column) != 1:
        raise ValueError(f"lattice cells {start} and {end} are not neighbours")

    cw = grid.config.corridor_width
    start_x, start_y = room_rect(grid, start).center
    end_x, end_y = room_rect(grid, end).center

    if start.row == end.row:
        return Rect(min(start_x, end_x), start_y - cw // 2 + offset, abs(end_x - start_x) + 1, cw)
    return Rect(start_x - cw // 2 + offset, min(start_y, end_y), cw, abs(end_y - start_y) + 1)


def _corridor_offset(grid: "Grid") -> int:
    if not grid.config.allow_random_corridor_offset:
        return 0
    bound = (grid.config.grid_room_size - grid.config.corridor_width) // 2
    return grid.random_int(-bound, bound)


def materialize(grid: "Grid", layout: LatticeLayout) -> None:
    """Write rooms and corridors for a finished layout onto the grid."""
    for cell in layout.rooms():
        for x, y in room_rect(grid, cell).cells():
            grid.write(x, y, Tile.FLOOR)

    for start, end in layout.corridors():
        if start == end:
            continue
        for x, y in corridor_rect(grid, start, end, _corridor_offset(grid)).cells():
            grid.write(x, y, Tile.FLOOR)


def generate_grid_rooms(grid: "Grid", room_count: int) -> LatticeLayout:
    """
    Fill grid with room_count equally sized rooms aligned to a lattice.

    Returns the lattice layout that was materialised.

    Raises:
        NotEnoughSpaceError: room_count exceeds the lattice capacity
        GenerationTimeoutError: no layout was finished in time
    """
    grid.config.validate_rooms()
    check_capacity(grid, room_count)

    def attempt(deadline: Deadline) -> LatticeLayout:
        layout = layout_lattice(grid, room_count, deadline)
        materialize(grid, layout)
        return layout

    return run_with_retries(grid, attempt, "grid rooms")
