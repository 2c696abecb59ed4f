"""Frontend interfaces for cellular automata."""

from .cli import CLIUniverse

__all__ = ["CLIUniverse"]
