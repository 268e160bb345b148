"""Frontend interfaces for cellular automata."""

from .cli import CLIGameOfLife

__all__ = ["CLIGameOfLife"]
