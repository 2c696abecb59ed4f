"""Core cellular automata engine: toroidal grid, rules and universe."""

from .cellstate import CellState
from .exceptions import InvalidDimension
from .neighborhoods import (
    CENTER,
    ELEMENTARY,
    MOORE,
    MOORE_WITH_CENTER,
    VON_NEUMANN,
    Direction,
    validate_pattern,
)
from .grid import Grid, GridView
from .rules import ElementaryRule, FunctionRule, LifeLikeRule, Rule, as_rule, parse_rule
from .universe import Universe
from .patterns import Pattern, PatternLibrary

__all__ = [
    "CellState",
    "InvalidDimension",
    "Direction",
    "CENTER",
    "ELEMENTARY",
    "MOORE",
    "MOORE_WITH_CENTER",
    "VON_NEUMANN",
    "validate_pattern",
    "Grid",
    "GridView",
    "Rule",
    "FunctionRule",
    "ElementaryRule",
    "LifeLikeRule",
    "as_rule",
    "parse_rule",
    "Universe",
    "Pattern",
    "PatternLibrary",
]
