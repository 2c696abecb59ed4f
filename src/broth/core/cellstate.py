"""Cell state values for binary automata."""

from enum import IntEnum


class CellState(IntEnum):
    """Binary cell state used by the default configuration.

    The grid and universe accept any comparable value as a cell state;
    this enum is only the conventional choice for two-state automata.
    """

    DEAD = 0
    ALIVE = 1

    def __str__(self) -> str:
        return self.name.capitalize()
