"""Read-only snapshot consumers: row rendering, text and JSON records."""

import json
from numbers import Integral
from pathlib import Path
from typing import Any, Callable, Dict, List, Union

from .core.cellstate import CellState
from .core.grid import Grid, GridView

GridLike = Union[Grid, GridView]


def state_name(state: Any) -> str:
    """Name a state for export.

    CellState members, and the integers 0 and 1 a numeric buffer stores for
    them, are written as "Dead"/"Alive". Any other state uses ``str()``.
    """
    if isinstance(state, Integral) and not isinstance(state, bool) and state in (0, 1):
        state = CellState(int(state))
    return str(state)


def grid_to_rows(grid: GridLike, formatter: Callable[[Any], str] = state_name) -> List[List[str]]:
    """Render a grid as row-major rows of formatted states."""
    width, height = grid.dimensions()
    return [[formatter(grid.get(x, y)) for x in range(width)] for y in range(height)]


def format_grid(grid: GridLike, alive: str = "o", dead: str = "x") -> str:
    """Render a binary grid as text, one line per row."""
    width, height = grid.dimensions()
    lines = []
    for y in range(height):
        line = []
        for x in range(width):
            line.append(alive if grid.get(x, y) == CellState.ALIVE else dead)
        lines.append("".join(line))
    return "\n".join(lines)


class SnapshotRecorder:
    """Collects one snapshot per generation for JSON export.

    The document layout is ``{"note": str, "states": [rows, ...]}`` where
    each entry of ``states`` is a generation rendered with ``grid_to_rows``.
    """

    def __init__(self, note: str = "", formatter: Callable[[Any], str] = state_name) -> None:
        self.note = note
        self.formatter = formatter
        self.states: List[List[List[str]]] = []

    def record(self, grid: GridLike) -> None:
        """Append a snapshot of the grid's current contents."""
        self.states.append(grid_to_rows(grid, self.formatter))

    def to_dict(self) -> Dict[str, Any]:
        return {"note": self.note, "states": self.states}

    def to_json(self, indent: Union[int, None] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def save(self, path: Union[str, Path]) -> Path:
        """Write the recorded snapshots to a JSON file.

        Returns:
            Path written
        """
        filepath = Path(path)
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        return filepath

    def __len__(self) -> int:
        return len(self.states)
