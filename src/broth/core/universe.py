"""Generation stepping for cellular automata on a toroidal grid."""

import logging
from typing import Any, Callable, Iterable, Optional

import numpy as np

from .cellstate import CellState
from .grid import Grid, GridView
from .neighborhoods import Neighborhood, Offset
from .rules import Rule, as_rule

logger = logging.getLogger(__name__)


class Universe:
    """Advances a grid one generation at a time under a transition rule.

    The universe owns its grid plus a staging buffer of the same shape.
    ``step()`` evaluates the rule for every cell against the current buffer,
    writing results only into the staging buffer, and swaps the two once
    every cell has been computed. A rule therefore never observes a
    next-generation value, and a rule that raises leaves the grid and the
    generation counter untouched.
    """

    def __init__(
        self,
        initial_grid: Grid,
        rule: Any,
        pattern: Optional[Iterable[Offset]] = None,
        shadow: Optional[np.ndarray] = None,
        vectorized: bool = True,
    ) -> None:
        """Initialize the universe.

        Args:
            initial_grid: Generation 0. The universe takes over its backing
                array without copying it; the caller's grid is left holding
                a private copy, so writes through it never reach the
                universe.
            rule: Rule instance or callable (neighborhood) -> next state
            pattern: Neighborhood offsets when rule is a bare callable
            shadow: Optional pre-allocated staging array with the grid's
                backing shape and dtype
            vectorized: Use a rule's whole-array implementation when it has one

        Raises:
            ValueError: If the shadow buffer doesn't match the grid
        """
        if not isinstance(initial_grid, Grid):
            raise TypeError(f"Expected a Grid, got {type(initial_grid).__name__}")

        self._rule = as_rule(rule, pattern)
        self._pattern: Neighborhood = tuple(self._rule.pattern)
        self._generation = 0
        self.vectorized = vectorized

        cells = initial_grid._cells
        if shadow is None:
            self._shadow = np.empty_like(cells)
        else:
            if not isinstance(shadow, np.ndarray) or shadow.shape != cells.shape or shadow.dtype != cells.dtype:
                raise ValueError(
                    f"Shadow buffer must have shape {cells.shape} and dtype {cells.dtype}"
                )
            if np.shares_memory(shadow, cells):
                raise ValueError("Shadow buffer must not overlap the grid's buffer")
            self._shadow = shadow

        self._grid = Grid(
            initial_grid.width, initial_grid.height, fill=None, buffer=initial_grid._release()
        )
        self._view = GridView(self._grid)

    @property
    def rule(self) -> Rule:
        """The transition rule."""
        return self._rule

    @property
    def pattern(self) -> Neighborhood:
        """Neighborhood offsets passed to the rule."""
        return self._pattern

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self._grid.count(CellState.ALIVE)

    def generation(self) -> int:
        """Number of completed steps."""
        return self._generation

    def current(self) -> GridView:
        """Read-only view of the present generation."""
        return self._view

    def snapshot(self) -> Grid:
        """Independent copy of the present generation."""
        return self._grid.copy()

    def step(self) -> None:
        """Advance the universe by one generation.

        Raises:
            Whatever the rule raises; the universe is left at its
            pre-step generation.
        """
        staged = self._shadow
        cells = self._grid._cells

        if self.vectorized and self._rule.vectorized:
            logger.debug("Generation %d: array update with %r", self._generation, self._rule)
            self._rule.apply_array(cells, staged)
        else:
            logger.debug("Generation %d: per-cell update with %r", self._generation, self._rule)
            self._apply_rule(staged)

        self._shadow = self._grid._exchange(staged)
        self._generation += 1

    def _apply_rule(self, staged: np.ndarray) -> None:
        """Evaluate the rule for every cell into the staging buffer."""
        grid = self._grid
        rule = self._rule
        pattern = self._pattern
        for y in range(grid.height):
            for x in range(grid.width):
                staged[y, x] = rule(grid.neighbors(x, y, pattern))

    def run(self, generations: int, callback: Optional[Callable[["Universe"], None]] = None) -> int:
        """Advance the universe several generations.

        Args:
            generations: Number of steps to take
            callback: Optional function called with the universe after each step

        Returns:
            Generation reached
        """
        if generations < 0:
            raise ValueError(f"generations must be non-negative, got {generations}")

        for _ in range(generations):
            self.step()
            if callback is not None:
                callback(self)

        return self._generation

    def __repr__(self) -> str:
        return (
            f"Universe({self._grid.width}x{self._grid.height}, rule={self._rule!r}, "
            f"generation={self._generation})"
        )
