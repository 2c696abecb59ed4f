"""Substrate for cellular automata on a toroidal grid."""

__version__ = "0.1.0"

from .core.cellstate import CellState
from .core.exceptions import InvalidDimension
from .core.grid import Grid, GridView
from .core.rules import ElementaryRule, FunctionRule, LifeLikeRule, Rule
from .core.universe import Universe
from .core.patterns import Pattern, PatternLibrary

__all__ = [
    "CellState",
    "InvalidDimension",
    "Grid",
    "GridView",
    "Rule",
    "FunctionRule",
    "ElementaryRule",
    "LifeLikeRule",
    "Universe",
    "Pattern",
    "PatternLibrary",
]
