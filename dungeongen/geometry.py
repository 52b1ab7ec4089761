from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Tuple


@dataclass(frozen=True)
class Position:
    """A cell position, measured in tiles (or lattice cells)."""

    row: int
    column: int

    def moved(self, direction: "Direction") -> "Position":
        step = direction.step()
        return Position(row=self.row + step.row, column=self.column + step.column)

    def neighbors(self) -> Iterator["Position"]:
        for direction in Direction:
            yield self.moved(direction)


class Direction(Enum):
    """Cardinal directions used by the walkers and room placement."""

    NORTH = auto()
    SOUTH = auto()
    EAST = auto()
    WEST = auto()

    def step(self) -> Position:
        """Returns the Position offset for moving one step in this direction."""
        steps = {
            Direction.NORTH: Position(row=-1, column=0),
            Direction.SOUTH: Position(row=1, column=0),
            Direction.EAST: Position(row=0, column=1),
            Direction.WEST: Position(row=0, column=-1),
        }
        return steps[self]

    @property
    def is_horizontal(self) -> bool:
        return self in (Direction.EAST, Direction.WEST)


# Fixed order so a seeded rng always maps to the same direction
DIRECTIONS = (Direction.WEST, Direction.EAST, Direction.NORTH, Direction.SOUTH)


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle of tiles; right and bottom are exclusive."""

    left: int
    top: int
    width: int
    height: int

    @classmethod
    def centered(cls, center_x: int, center_y: int, width: int, height: int) -> "Rect":
        return cls(center_x - width // 2, center_y - height // 2, width, height)

    @property
    def right(self) -> int:
        return self.left + self.width

    @property
    def bottom(self) -> int:
        return self.top + self.height

    @property
    def center(self) -> Tuple[int, int]:
        return (self.left + self.width // 2, self.top + self.height // 2)

    def expanded(self, margin: int) -> "Rect":
        return Rect(self.left - margin, self.top - margin, self.width + 2 * margin, self.height + 2 * margin)

    def contains(self, x: int, y: int) -> bool:
        return self.left <= x < self.right and self.top <= y < self.bottom

    def overlaps(self, other: "Rect") -> bool:
        return (
            self.left < other.right
            and other.left < self.right
            and self.top < other.bottom
            and other.top < self.bottom
        )

    def cells(self) -> Iterator[Tuple[int, int]]:
        """Yields (x, y) for every tile, row-major."""
        for y in range(self.top, self.bottom):
            for x in range(self.left, self.right):
                yield x, y
