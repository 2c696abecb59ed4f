"""Toroidal grid data structure for cellular automata."""

from numbers import Integral
from typing import Any, Callable, Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .cellstate import CellState
from .exceptions import InvalidDimension
from .neighborhoods import Direction, Offset


def _check_dimension(axis: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, Integral) or value <= 0:
        raise InvalidDimension(axis, value)
    return int(value)


class Grid:
    """Represents a 2D toroidal grid of cell states.

    Cells are stored row-major in a numpy array of shape (height, width).
    Every coordinate is resolved modulo the grid dimensions, so there are
    no out-of-bounds accesses: (x, y) and (x + k*width, y + j*height) name
    the same cell.
    """

    def __init__(
        self,
        width: int,
        height: int,
        fill: Any = CellState.DEAD,
        initializer: Optional[Callable[[int, int], Any]] = None,
        buffer: Optional[np.ndarray] = None,
    ) -> None:
        """Initialize a new grid.

        Args:
            width: Number of columns, must be positive
            height: Number of rows, must be positive
            fill: State every cell starts in. None keeps a supplied
                buffer's existing contents and is only valid with a buffer
                or an initializer.
            initializer: Optional callable (x, y) -> state overriding fill
            buffer: Optional pre-allocated numpy array with width*height
                elements, used in place as the backing store

        Raises:
            InvalidDimension: If width or height is not a positive integer
            ValueError: If the buffer cannot hold exactly width*height cells,
                or fill is None with nothing else to initialize the cells
        """
        self.width = _check_dimension("width", width)
        self.height = _check_dimension("height", height)

        if buffer is None:
            if fill is None and initializer is None:
                raise ValueError("fill=None needs a buffer or an initializer")
            self._cells = np.empty((self.height, self.width), dtype=object)
        else:
            self._cells = self._adopt_buffer(buffer)

        if initializer is not None:
            for y in range(self.height):
                for x in range(self.width):
                    self._cells[y, x] = initializer(x, y)
        elif fill is not None:
            self._cells.fill(fill)

    def _release(self) -> np.ndarray:
        """Hand the backing array to a new owner.

        The grid keeps an independent copy of its contents, so later writes
        through it no longer reach the released array.
        """
        cells = self._cells
        self._cells = cells.copy()
        return cells

    def _adopt_buffer(self, buffer: np.ndarray) -> np.ndarray:
        if not isinstance(buffer, np.ndarray):
            raise ValueError(f"Buffer must be a numpy array, got {type(buffer).__name__}")
        if buffer.size != self.width * self.height:
            raise ValueError(
                f"Buffer holds {buffer.size} cells, grid needs {self.width}x{self.height}"
            )

        cells = buffer.reshape((self.height, self.width))
        if not np.shares_memory(cells, buffer):
            raise ValueError("Buffer must be contiguous so it can be used in place")
        return cells

    @property
    def shape(self) -> Tuple[int, int]:
        """Get grid dimensions as (width, height)."""
        return (self.width, self.height)

    def dimensions(self) -> Tuple[int, int]:
        """Return (width, height)."""
        return (self.width, self.height)

    def resolve(self, x: int, y: int) -> Tuple[int, int]:
        """Map any integer coordinate onto the grid.

        Returns:
            (x, y) with 0 <= x < width and 0 <= y < height
        """
        return (x % self.width, y % self.height)

    def coordinate(self, x: int, y: int, direction: Direction) -> Tuple[int, int]:
        """Get the wrapped coordinate of the neighbor in a compass direction."""
        return self.resolve(x + direction.dx, y + direction.dy)

    def get(self, x: int, y: int) -> Any:
        """Get the state of a cell.

        Args:
            x: Column coordinate, any integer
            y: Row coordinate, any integer

        Returns:
            State stored at the wrapped coordinate
        """
        return self._cells[y % self.height, x % self.width]

    def set(self, x: int, y: int, value: Any) -> None:
        """Set the state of a cell at the wrapped coordinate."""
        self._cells[y % self.height, x % self.width] = value

    def neighbors(self, x: int, y: int, pattern: Iterable[Offset]) -> Tuple[Any, ...]:
        """Get the states around a cell.

        Args:
            x: Column coordinate of the center cell
            y: Row coordinate of the center cell
            pattern: Relative (dx, dy) offsets

        Returns:
            Tuple of states, one per offset, in pattern order
        """
        cells = self._cells
        width, height = self.width, self.height
        return tuple(cells[(y + dy) % height, (x + dx) % width] for dx, dy in pattern)

    def cells(self) -> Iterator[Tuple[int, int, Any]]:
        """Iterate over (x, y, state) in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y, self._cells[y, x])

    def count(self, state: Any = CellState.ALIVE) -> int:
        """Count cells holding the given state."""
        return sum(1 for value in self._cells.flat if value == state)

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return self.count(CellState.ALIVE)

    def fill(self, value: Any) -> None:
        """Set every cell to the same state."""
        self._cells.fill(value)

    def copy(self) -> "Grid":
        """Return an independent grid with the same contents."""
        return Grid(self.width, self.height, fill=None, buffer=self._cells.copy())

    def to_array(self) -> np.ndarray:
        """Return a copy of the backing array, shape (height, width)."""
        return self._cells.copy()

    def to_list(self) -> List[List[Any]]:
        """Convert grid to a row-major nested list.

        Returns:
            List of rows, each a list of states
        """
        return [[self._cells[y, x] for x in range(self.width)] for y in range(self.height)]

    def from_list(self, data: List[List[Any]]) -> None:
        """Load grid contents from a row-major nested list.

        Args:
            data: height rows of width states each

        Raises:
            ValueError: If data dimensions don't match grid
        """
        if len(data) != self.height or any(len(row) != self.width for row in data):
            raise ValueError(f"Data shape doesn't match grid {self.width}x{self.height}")

        for y, row in enumerate(data):
            for x, value in enumerate(row):
                self._cells[y, x] = value

    def _exchange(self, buffer: np.ndarray) -> np.ndarray:
        """Install buffer as the backing store and return the previous one."""
        previous = self._cells
        self._cells = buffer
        return previous

    def __eq__(self, other: object) -> bool:
        """Check if two grids hold the same states."""
        if not isinstance(other, (Grid, GridView)):
            return NotImplemented
        if isinstance(other, GridView):
            other = other._grid
        return self.shape == other.shape and bool(np.array_equal(self._cells, other._cells))

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height})"

    def __str__(self) -> str:
        """String representation showing living cells as '*' and dead as '.'."""
        result = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                value = self._cells[y, x]
                if value == CellState.ALIVE:
                    row.append("*")
                elif value == CellState.DEAD:
                    row.append(".")
                else:
                    row.append(str(value))
            result.append("".join(row))
        return "\n".join(result)


class GridView:
    """Read-only view of a grid.

    The view follows the grid it wraps, so a view obtained from a universe
    always shows that universe's current generation.
    """

    def __init__(self, grid: Grid) -> None:
        self._grid = grid

    @property
    def width(self) -> int:
        return self._grid.width

    @property
    def height(self) -> int:
        return self._grid.height

    @property
    def shape(self) -> Tuple[int, int]:
        return self._grid.shape

    @property
    def population(self) -> int:
        return self._grid.population

    def dimensions(self) -> Tuple[int, int]:
        return self._grid.dimensions()

    def resolve(self, x: int, y: int) -> Tuple[int, int]:
        return self._grid.resolve(x, y)

    def coordinate(self, x: int, y: int, direction: Direction) -> Tuple[int, int]:
        return self._grid.coordinate(x, y, direction)

    def get(self, x: int, y: int) -> Any:
        return self._grid.get(x, y)

    def neighbors(self, x: int, y: int, pattern: Iterable[Offset]) -> Tuple[Any, ...]:
        return self._grid.neighbors(x, y, pattern)

    def cells(self) -> Iterator[Tuple[int, int, Any]]:
        return self._grid.cells()

    def count(self, state: Any = CellState.ALIVE) -> int:
        return self._grid.count(state)

    def copy(self) -> Grid:
        """Return an independent, writable copy of the viewed grid."""
        return self._grid.copy()

    def to_array(self) -> np.ndarray:
        return self._grid.to_array()

    def to_list(self) -> List[List[Any]]:
        return self._grid.to_list()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, GridView):
            other = other._grid
        return self._grid.__eq__(other)

    def __repr__(self) -> str:
        return f"GridView(width={self.width}, height={self.height})"

    def __str__(self) -> str:
        return str(self._grid)
