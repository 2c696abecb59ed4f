"""Neighborhood patterns: ordered relative offsets around a cell."""

from enum import Enum
from numbers import Integral
from typing import Iterable, Tuple

Offset = Tuple[int, int]
Neighborhood = Tuple[Offset, ...]


class Direction(Enum):
    """Compass directions on the grid.

    North is towards row 0, so moving north decrements ``y``.
    """

    NORTH = (0, -1)
    NORTHEAST = (1, -1)
    EAST = (1, 0)
    SOUTHEAST = (1, 1)
    SOUTH = (0, 1)
    SOUTHWEST = (-1, 1)
    WEST = (-1, 0)
    NORTHWEST = (-1, -1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


CENTER: Neighborhood = ((0, 0),)

VON_NEUMANN: Neighborhood = (
    Direction.NORTH.value,
    Direction.EAST.value,
    Direction.SOUTH.value,
    Direction.WEST.value,
)

# Clockwise from north
MOORE: Neighborhood = tuple(direction.value for direction in Direction)

MOORE_WITH_CENTER: Neighborhood = CENTER + MOORE

# (west, self, east) for one-dimensional rules laid out along a row
ELEMENTARY: Neighborhood = (Direction.WEST.value, (0, 0), Direction.EAST.value)


def validate_pattern(pattern: Iterable[Offset]) -> Neighborhood:
    """Normalize a sequence of offsets into a tuple of ``(dx, dy)`` tuples.

    Args:
        pattern: Iterable of integer pairs

    Returns:
        Tuple of offsets in the original order

    Raises:
        ValueError: If the pattern is empty or an offset is not an integer pair
    """
    offsets = []
    for offset in pattern:
        try:
            dx, dy = offset
        except (TypeError, ValueError):
            raise ValueError(f"Offset {offset!r} is not a (dx, dy) pair") from None
        if isinstance(dx, bool) or isinstance(dy, bool) or not isinstance(dx, Integral) or not isinstance(dy, Integral):
            raise ValueError(f"Offset {offset!r} must contain integers")
        offsets.append((int(dx), int(dy)))

    if not offsets:
        raise ValueError("Neighborhood pattern must contain at least one offset")

    return tuple(offsets)
