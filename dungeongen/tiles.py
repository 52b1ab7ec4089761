from enum import IntEnum


class Tile(IntEnum):
    """
    Occupancy state of a single grid cell.

    PENDING_WALL only exists while freeform rooms are being placed: it
    reserves a room's perimeter until it is known whether a neighbouring
    room or corridor will overwrite it with floor. Generators normalise it
    to WALL before returning.
    """

    VOID = 0
    WALL = 1
    PENDING_WALL = 2
    FLOOR = 3
