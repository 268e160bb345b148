"""Generation snapshots and the step algorithm."""

from typing import Iterable, Iterator, List, Optional, TextIO

import numpy as np
import torch
import torch.nn.functional as F

from .grid import Coordinate, Dimension
from .patterns import (
    PatternGenerator,
    big_crunch_generator,
    dead_generator,
    glider_generator,
    random_generator,
    spaceship_generator,
)
from .rule import Rule

# Moore neighborhood without the center cell
_NEIGHBOR_KERNEL = torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)


class WorldInvariantError(RuntimeError):
    """Raised when a world's cell storage does not cover its dimension."""


class World:
    """One generation of a life-like automaton on a bounded grid.

    Cells are stored densely in a numpy array indexed ``cells[x, y]`` with
    shape ``(width, height)``, so every in-range coordinate has exactly one
    cell. Coordinates outside the grid are permanently dead. The cell
    content never changes after construction; :meth:`step` returns a new
    World.
    """

    def __init__(self, cells: np.ndarray, dimension: Dimension, rule: Optional[Rule] = None) -> None:
        """Initialize a world from a cell array.

        Args:
            cells: Array of shape (width, height), nonzero means alive
            dimension: Grid extent
            rule: Active rule (defaults to Conway's rule)

        Raises:
            WorldInvariantError: If the array shape does not match the dimension
        """
        self._dimension = Dimension(*dimension)
        cells = np.asarray(cells)
        if cells.shape != (self._dimension.width, self._dimension.height):
            raise WorldInvariantError(
                f"Cell array shape {cells.shape} doesn't cover grid "
                f"{self._dimension.width}x{self._dimension.height}"
            )

        self._cells = np.array(cells != 0, dtype=np.int8)
        self._cells.flags.writeable = False
        self.rule = rule if rule is not None else Rule.default()

    @classmethod
    def create_initial_world(cls, dimension: Dimension, generator: PatternGenerator) -> "World":
        """Seed a world by applying a generator to every coordinate.

        Coordinates are visited in row-major order, so stateful generators
        (random sources) are consumed in a stable order.

        Args:
            dimension: Grid extent
            generator: Pattern generator deciding each cell's initial state

        Returns:
            New World with the default rule
        """
        dimension = Dimension(*dimension)
        cells = np.zeros((dimension.width, dimension.height), dtype=np.int8)
        for coordinate in dimension.coordinates():
            if generator(dimension, coordinate):
                cells[coordinate.x, coordinate.y] = 1
        return cls(cells, dimension)

    @classmethod
    def from_coordinates(
        cls, dimension: Dimension, alive: Iterable[Coordinate], rule: Optional[Rule] = None
    ) -> "World":
        """Create a world with the given live cells.

        Coordinates outside the grid are ignored.
        """
        dimension = Dimension(*dimension)
        cells = np.zeros((dimension.width, dimension.height), dtype=np.int8)
        for x, y in alive:
            if dimension.contains(Coordinate(x, y)):
                cells[x, y] = 1
        return cls(cells, dimension, rule)

    @classmethod
    def create_dead_world(cls, dimension: Dimension) -> "World":
        return cls.create_initial_world(dimension, dead_generator)

    @classmethod
    def create_random_world(cls, dimension: Dimension) -> "World":
        return cls.create_initial_world(dimension, random_generator)

    @classmethod
    def create_glider_world(cls, dimension: Dimension) -> "World":
        return cls.create_initial_world(dimension, glider_generator)

    @classmethod
    def create_spaceship_world(cls, dimension: Dimension) -> "World":
        return cls.create_initial_world(dimension, spaceship_generator)

    @classmethod
    def create_big_crunch_world(cls, dimension: Dimension) -> "World":
        return cls.create_initial_world(dimension, big_crunch_generator)

    @property
    def dimension(self) -> Dimension:
        """Grid extent."""
        return self._dimension

    @property
    def width(self) -> int:
        return self._dimension.width

    @property
    def height(self) -> int:
        return self._dimension.height

    @property
    def cells(self) -> np.ndarray:
        """Read-only cell array of shape (width, height)."""
        return self._cells

    @property
    def population(self) -> int:
        """Number of living cells."""
        return int(np.count_nonzero(self._cells))

    def set_rule(self, rule: Rule) -> None:
        """Replace the rule used by subsequent :meth:`step` calls."""
        self.rule = rule

    def get_cell(self, coordinate: Coordinate) -> bool:
        """Get the state of a cell.

        Args:
            coordinate: Cell position

        Returns:
            True if alive; always False outside the grid
        """
        x, y = coordinate
        if not self._dimension.contains(Coordinate(x, y)):
            return False
        return bool(self._cells[x, y])

    def coordinates(self) -> Iterator[Coordinate]:
        """Every stored coordinate, row-major."""
        return self._dimension.coordinates()

    def alive_coordinates(self) -> List[Coordinate]:
        """Coordinates of living cells, row-major."""
        return [Coordinate(int(x), int(y)) for y, x in np.argwhere(self._cells.T > 0)]

    def neighbor_count(self, coordinate: Coordinate) -> int:
        """Count living neighbors of a single cell.

        Off-grid neighbors count as dead.

        Returns:
            Number of living neighbors (0-8)
        """
        x, y = coordinate
        count = 0
        for dx in [-1, 0, 1]:
            for dy in [-1, 0, 1]:
                if dx == 0 and dy == 0:
                    continue
                if self.get_cell(Coordinate(x + dx, y + dy)):
                    count += 1
        return count

    def neighbor_counts(self) -> np.ndarray:
        """Count neighbors for all cells with a zero-padded convolution.

        Returns:
            int8 array of shape (width, height) with counts 0-8
        """
        if self._dimension.area == 0:
            return np.zeros_like(self._cells)

        # PyTorch expects (height, width), so transpose in and out
        source = torch.from_numpy(np.ascontiguousarray(self._cells.T, dtype=np.float32))
        neighbors = F.conv2d(source.unsqueeze(0).unsqueeze(0), _NEIGHBOR_KERNEL, padding=1)
        return neighbors[0, 0].numpy().astype(np.int8).T

    def step(self) -> "World":
        """Compute the next generation.

        Live cells survive when their neighbor count is in ``rule.surviving``,
        dead cells are born when it is in ``rule.born``; every other cell is
        dead. The successor keeps this world's dimension and rule.

        Returns:
            New World; this one is left untouched
        """
        counts = self.neighbor_counts()
        alive = self._cells > 0

        survive = alive & np.isin(counts, list(self.rule.surviving))
        birth = ~alive & np.isin(counts, list(self.rule.born))

        return World(survive | birth, self._dimension, self.rule)

    def render(self, alive: str = "x", dead: str = " ") -> str:
        """Draw the world as a bordered character grid.

        Raises:
            WorldInvariantError: If the cell storage no longer covers the grid
        """
        if self._cells.shape != (self.width, self.height):
            raise WorldInvariantError(f"Cell storage {self._cells.shape} lost coverage of {self._dimension}")

        bar = "|" + "-" * self.width + "|"
        lines = [bar]
        for y in range(self.height):
            row = "".join(alive if self._cells[x, y] else dead for x in range(self.width))
            lines.append(f"|{row}|")
        lines.append(bar)
        return "\n".join(lines)

    def render_to(self, sink: TextIO) -> None:
        """Write the rendered world to a text stream."""
        sink.write(self.render())
        sink.write("\n")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, World):
            return False
        return (
            self._dimension == other._dimension
            and self.rule == other.rule
            and np.array_equal(self._cells, other._cells)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"World({self.width}x{self.height}, rule={self.rule}, population={self.population})"

    def __str__(self) -> str:
        return self.render()
