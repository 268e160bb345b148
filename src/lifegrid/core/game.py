"""Generation chains: running a world forward and keeping the snapshots."""

from collections import deque
from dataclasses import dataclass
from itertools import islice
from typing import Any, Deque, Dict, Iterator, List, Optional

import numpy as np

from .world import World


@dataclass
class SimulationConfig:
    """Configuration for a simulation run."""

    width: int = 40
    height: int = 20
    pattern: str = "random"
    iterations: int = 200
    rule: str = "B3/S23"
    delay: float = 0.1
    clear_screen: bool = True
    seed: Optional[int] = None


def generations(world: World) -> Iterator[World]:
    """Lazily yield ``world`` followed by each successive generation."""
    while True:
        yield world
        world = world.step()


def simulate(world: World, num_iterations: int) -> List[World]:
    """Run a world forward eagerly.

    Args:
        world: Initial generation
        num_iterations: Number of worlds to return, the first being ``world``

    Returns:
        List of snapshots, empty if ``num_iterations`` is not positive
    """
    if num_iterations <= 0:
        return []
    return list(islice(generations(world), num_iterations))


class Simulation:
    """A linear chain of generations with every snapshot retained.

    There is no terminal state and no cycle detection; the caller decides
    how many generations to run.
    """

    def __init__(self, world: World, history_limit: int = 100) -> None:
        """Initialize the chain with its first generation.

        Args:
            world: Initial generation
            history_limit: Number of population samples kept for rate statistics
        """
        self._worlds: List[World] = [world]
        self._population_history: Deque[int] = deque(maxlen=history_limit)
        self._population_history.append(world.population)

    @classmethod
    def from_history(cls, worlds: List[World], history_limit: int = 100) -> "Simulation":
        """Rebuild a chain from already computed generations.

        Raises:
            ValueError: If ``worlds`` is empty
        """
        if not worlds:
            raise ValueError("Cannot build a simulation from an empty history")

        simulation = cls(worlds[0], history_limit)
        for world in worlds[1:]:
            simulation._worlds.append(world)
            simulation._population_history.append(world.population)
        return simulation

    @property
    def generation(self) -> int:
        """Index of the current generation (0 for the initial world)."""
        return len(self._worlds) - 1

    @property
    def current(self) -> World:
        """Most recent generation."""
        return self._worlds[-1]

    @property
    def history(self) -> List[World]:
        """All generations so far, oldest first."""
        return list(self._worlds)

    @property
    def population(self) -> int:
        return self.current.population

    @property
    def population_history(self) -> list:
        """Recent population counts."""
        return list(self._population_history)

    def step(self) -> World:
        """Advance one generation and return it."""
        world = self.current.step()
        self._worlds.append(world)
        self._population_history.append(world.population)
        return world

    def run(self, num_generations: int) -> World:
        """Advance ``num_generations`` generations.

        Returns:
            The final generation
        """
        for _ in range(num_generations):
            self.step()
        return self.current

    def get_population_change_rate(self, window_size: int = 10) -> float:
        """Calculate recent population change rate.

        Args:
            window_size: Number of recent generations to consider

        Returns:
            Average population change per generation
        """
        recent_history = list(self._population_history)[-window_size:]
        if len(recent_history) < 2:
            return 0.0

        changes = np.diff(recent_history)
        return float(np.mean(changes))

    def get_statistics(self) -> Dict[str, Any]:
        """Get simulation statistics for the current generation."""
        world = self.current
        area = world.dimension.area
        return {
            "generation": self.generation,
            "population": world.population,
            "population_density": world.population / area if area else 0.0,
            "population_change_rate": self.get_population_change_rate(),
            "grid_size": (world.width, world.height),
            "rule": str(world.rule),
        }
