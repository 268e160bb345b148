"""Core cellular automata logic."""

from .grid import Coordinate, Dimension
from .rule import Rule
from .world import World, WorldInvariantError
from .game import Simulation, SimulationConfig, generations, simulate
from .patterns import Pattern, PatternLibrary, apply_offsets_to_shape

__all__ = [
    "Coordinate",
    "Dimension",
    "Rule",
    "World",
    "WorldInvariantError",
    "Simulation",
    "SimulationConfig",
    "generations",
    "simulate",
    "Pattern",
    "PatternLibrary",
    "apply_offsets_to_shape",
]
