"""Transition rules mapping a neighborhood to a cell's next state."""

import logging
import re
from abc import ABC, abstractmethod
from numbers import Integral
from typing import Any, Callable, FrozenSet, Iterable, Optional, Sequence

import numpy as np
import torch
import torch.nn.functional as F

from .cellstate import CellState
from .neighborhoods import ELEMENTARY, MOORE_WITH_CENTER, Neighborhood, Offset, validate_pattern

logger = logging.getLogger(__name__)


class Rule(ABC):
    """Base class for transition rules.

    A rule declares the neighborhood ``pattern`` it reads and maps the states
    at those offsets, in pattern order, to the cell's next state. Rules must
    be pure and deterministic, and total over every neighborhood they can be
    given.

    Subclasses may also offer a whole-array implementation by setting
    ``vectorized`` and overriding ``apply_array``. It must produce exactly
    what per-cell evaluation would.
    """

    pattern: Neighborhood = MOORE_WITH_CENTER
    vectorized = False

    @abstractmethod
    def __call__(self, neighborhood: Sequence[Any]) -> Any:
        """Map the neighborhood states, in pattern order, to the next state."""

    def apply_array(self, cells: np.ndarray, out: np.ndarray) -> None:
        """Write the next generation of ``cells`` into ``out``.

        Args:
            cells: Current states, shape (height, width), read only
            out: Destination array of the same shape
        """
        raise NotImplementedError(f"{type(self).__name__} has no array implementation")


class FunctionRule(Rule):
    """Rule backed by a plain callable taking the neighborhood tuple."""

    def __init__(
        self,
        func: Callable[[Sequence[Any]], Any],
        pattern: Iterable[Offset] = MOORE_WITH_CENTER,
        name: Optional[str] = None,
    ) -> None:
        if not callable(func):
            raise TypeError(f"Rule function must be callable, got {type(func).__name__}")
        self.func = func
        self.pattern = validate_pattern(pattern)
        self.name = name or getattr(func, "__name__", "rule")

    def __call__(self, neighborhood: Sequence[Any]) -> Any:
        return self.func(neighborhood)

    def __repr__(self) -> str:
        return f"FunctionRule({self.name}, pattern={self.pattern})"


class ElementaryRule(Rule):
    """Wolfram elementary rule applied along each row.

    The neighborhood is (west, self, east). Alive cells count as 1, so the
    three states form a 3-bit index (west is the high bit) into the rule
    number: rule 30 maps 100, 011, 010 and 001 to alive.
    """

    pattern = ELEMENTARY
    vectorized = True

    def __init__(self, number: int, alive: Any = CellState.ALIVE, dead: Any = CellState.DEAD) -> None:
        if isinstance(number, bool) or not isinstance(number, Integral) or not 0 <= number <= 255:
            raise ValueError(f"Elementary rule number must be in 0..255, got {number!r}")
        self.number = int(number)
        self.alive = alive
        self.dead = dead
        self._table = tuple(alive if (self.number >> index) & 1 else dead for index in range(8))

    def __call__(self, neighborhood: Sequence[Any]) -> Any:
        west, center, east = neighborhood
        index = 4 * int(west == self.alive) + 2 * int(center == self.alive) + int(east == self.alive)
        return self._table[index]

    def apply_array(self, cells: np.ndarray, out: np.ndarray) -> None:
        alive = np.asarray(cells == self.alive, dtype=bool).astype(np.uint8)
        west = np.roll(alive, 1, axis=1)
        east = np.roll(alive, -1, axis=1)
        index = (west << 2) | (alive << 1) | east
        table = np.array([(self.number >> i) & 1 for i in range(8)], dtype=bool)

        out.fill(self.dead)
        out[table[index]] = self.alive

    def __repr__(self) -> str:
        return f"ElementaryRule({self.number})"


_LIFE_NOTATION = re.compile(r"^B([0-8]*)/S([0-8]*)$", re.IGNORECASE)


class LifeLikeRule(Rule):
    """Outer-totalistic rule on the Moore neighborhood (e.g. Conway's B3/S23).

    The neighborhood is the cell itself followed by its eight Moore
    neighbors. A dead cell becomes alive when its live-neighbor count is in
    ``birth``; a live cell stays alive when the count is in ``survive``.
    """

    pattern = MOORE_WITH_CENTER
    vectorized = True

    def __init__(
        self,
        birth: Iterable[int],
        survive: Iterable[int],
        alive: Any = CellState.ALIVE,
        dead: Any = CellState.DEAD,
    ) -> None:
        self.birth = self._check_counts("birth", birth)
        self.survive = self._check_counts("survive", survive)
        self.alive = alive
        self.dead = dead

        # 3x3 kernel counting the eight neighbors, not the center
        self._kernel = (
            torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)
        )

    @staticmethod
    def _check_counts(label: str, counts: Iterable[int]) -> FrozenSet[int]:
        result = frozenset(int(count) for count in counts)
        invalid = sorted(count for count in result if not 0 <= count <= 8)
        if invalid:
            raise ValueError(f"{label} counts must be in 0..8, got {invalid}")
        return result

    @classmethod
    def from_string(cls, notation: str, **kwargs: Any) -> "LifeLikeRule":
        """Create a rule from B/S notation such as ``"B3/S23"``.

        Raises:
            ValueError: If the notation is malformed
        """
        match = _LIFE_NOTATION.match(notation.strip())
        if match is None:
            raise ValueError(f"Invalid life-like rule notation: {notation!r}")
        birth, survive = match.groups()
        return cls((int(c) for c in birth), (int(c) for c in survive), **kwargs)

    @property
    def notation(self) -> str:
        birth = "".join(str(c) for c in sorted(self.birth))
        survive = "".join(str(c) for c in sorted(self.survive))
        return f"B{birth}/S{survive}"

    def __call__(self, neighborhood: Sequence[Any]) -> Any:
        center = neighborhood[0]
        count = sum(1 for state in neighborhood[1:] if state == self.alive)
        if center == self.alive:
            return self.alive if count in self.survive else self.dead
        return self.alive if count in self.birth else self.dead

    def count_neighbors(self, alive: np.ndarray) -> np.ndarray:
        """Count live neighbors for every cell using PyTorch convolution.

        Args:
            alive: Boolean array, shape (height, width)

        Returns:
            Integer array of neighbor counts with the same shape
        """
        tensor = torch.from_numpy(alive.astype(np.float32)).unsqueeze(0).unsqueeze(0)
        # Circular padding gives the toroidal wrap
        padded = F.pad(tensor, (1, 1, 1, 1), mode="circular")
        counts = F.conv2d(padded, self._kernel)
        return counts[0, 0].numpy().round().astype(np.int8)

    def apply_array(self, cells: np.ndarray, out: np.ndarray) -> None:
        alive = np.asarray(cells == self.alive, dtype=bool)
        counts = self.count_neighbors(alive)

        born = ~alive & np.isin(counts, sorted(self.birth))
        stays = alive & np.isin(counts, sorted(self.survive))

        out.fill(self.dead)
        out[born | stays] = self.alive

    def __repr__(self) -> str:
        return f"LifeLikeRule({self.notation!r})"


_NAMED_RULES = {
    "life": "B3/S23",
    "conway": "B3/S23",
    "highlife": "B36/S23",
    "seeds": "B2/S",
}


def parse_rule(text: str) -> Rule:
    """Build a rule from its conventional text form.

    Accepts a Wolfram number (``"30"`` or ``"rule30"``), B/S notation
    (``"B3/S23"``) or a known name (``"life"``, ``"highlife"``, ``"seeds"``).

    Raises:
        ValueError: If the text is not a recognised rule
    """
    value = text.strip().lower()
    value = _NAMED_RULES.get(value, value)

    if value.startswith("rule"):
        value = value[len("rule"):]
    if value.isdigit():
        rule: Rule = ElementaryRule(int(value))
    elif value.startswith("b"):
        rule = LifeLikeRule.from_string(value)
    else:
        raise ValueError(f"Unrecognised rule: {text!r}")

    logger.debug("Parsed rule %r as %r", text, rule)
    return rule


def as_rule(rule: Any, pattern: Optional[Iterable[Offset]] = None) -> Rule:
    """Coerce a Rule or a bare callable into a Rule.

    Args:
        rule: Rule instance or callable taking the neighborhood tuple
        pattern: Offsets for a bare callable (defaults to the cell plus its
            Moore neighbors)

    Raises:
        ValueError: If a pattern is given that contradicts a Rule's own
        TypeError: If rule is neither a Rule nor callable
    """
    if isinstance(rule, Rule):
        if pattern is not None and validate_pattern(pattern) != tuple(rule.pattern):
            raise ValueError(f"{rule!r} declares its own neighborhood pattern")
        return rule
    if callable(rule):
        return FunctionRule(rule, MOORE_WITH_CENTER if pattern is None else pattern)
    raise TypeError(f"Expected a Rule or callable, got {type(rule).__name__}")
