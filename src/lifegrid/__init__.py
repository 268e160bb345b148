"""Bounded-grid life-like cellular automata."""

__version__ = "0.1.0"

from .core.grid import Coordinate, Dimension
from .core.rule import Rule
from .core.world import World
from .core.game import Simulation, simulate
from .core.patterns import Pattern, PatternLibrary

__all__ = ["Coordinate", "Dimension", "Rule", "World", "Simulation", "simulate", "Pattern", "PatternLibrary"]
