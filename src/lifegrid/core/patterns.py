"""Initial-pattern generators and the built-in pattern library."""

import random
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

from .grid import Coordinate, Dimension

# (dimension, coordinate) -> alive
PatternGenerator = Callable[[Dimension, Coordinate], bool]


GLIDER: List[Coordinate] = [
    Coordinate(0, 1),
    Coordinate(1, 2),
    Coordinate(2, 0),
    Coordinate(2, 1),
    Coordinate(2, 2),
]

GLIDER_OFFSETS: List[Coordinate] = [
    Coordinate(0, 8),
    Coordinate(0, 2),
    Coordinate(8, 8),
    Coordinate(8, 2),
    Coordinate(15, 8),
    Coordinate(15, 2),
    Coordinate(22, 8),
    Coordinate(22, 2),
]

GLIDER_SIMPLE_OFFSETS: List[Coordinate] = GLIDER_OFFSETS[:6]

LIGHTWEIGHT_SPACESHIP: List[Coordinate] = [
    Coordinate(1, 0),
    Coordinate(2, 0),
    Coordinate(3, 0),
    Coordinate(4, 0),
    Coordinate(0, 1),
    Coordinate(4, 1),
    Coordinate(4, 2),
    Coordinate(0, 3),
    Coordinate(3, 3),
]

SPACESHIP_OFFSETS: List[Coordinate] = [
    Coordinate(0, 8),
    Coordinate(0, 2),
    Coordinate(8, 8),
    Coordinate(8, 2),
]

BIG_CRUNCH: List[Coordinate] = [
    # Upper ring
    Coordinate(0, 0),
    Coordinate(1, 0),
    Coordinate(2, 0),
    Coordinate(0, 1),
    Coordinate(0, 2),
    Coordinate(2, 1),
    Coordinate(2, 2),
    # Lower ring
    Coordinate(0, 6),
    Coordinate(1, 6),
    Coordinate(2, 6),
    Coordinate(0, 4),
    Coordinate(0, 5),
    Coordinate(2, 4),
    Coordinate(2, 5),
]


def apply_offsets_to_shape(
    shape: Sequence[Coordinate], offsets: Sequence[Coordinate]
) -> List[Coordinate]:
    """Translate a shape by every offset and collect the union.

    Args:
        shape: Relative coordinates of the shape's live cells
        offsets: Translations to apply

    Returns:
        All translated coordinates, one copy of the shape per offset
    """
    positions: List[Coordinate] = []
    for offset in offsets:
        positions.extend(position.shift(offset) for position in shape)
    return positions


def is_in_shape(cells: Sequence[Coordinate], coordinate: Coordinate) -> bool:
    """Linear-scan membership test for a coordinate in a list of cells."""
    return any(cell == coordinate for cell in cells)


def dead_generator(dimension: Dimension, coordinate: Coordinate) -> bool:
    """Every cell starts dead."""
    return False


def random_generator(dimension: Dimension, coordinate: Coordinate) -> bool:
    """Independent fair coin flip per cell."""
    return random.random() < 0.5


def glider_generator(dimension: Dimension, coordinate: Coordinate) -> bool:
    """Eight gliders tiled across the grid."""
    return is_in_shape(apply_offsets_to_shape(GLIDER, GLIDER_OFFSETS), coordinate)


def glider_simple_generator(dimension: Dimension, coordinate: Coordinate) -> bool:
    """Six gliders, the first six tiles of :func:`glider_generator`."""
    return is_in_shape(apply_offsets_to_shape(GLIDER, GLIDER_SIMPLE_OFFSETS), coordinate)


def spaceship_generator(dimension: Dimension, coordinate: Coordinate) -> bool:
    """Four lightweight spaceships."""
    return is_in_shape(
        apply_offsets_to_shape(LIGHTWEIGHT_SPACESHIP, SPACESHIP_OFFSETS), coordinate
    )


def big_crunch_offset(dimension: Dimension) -> Coordinate:
    """Offset that centers the big crunch shape on the grid."""
    return Coordinate(dimension.width // 2 - 2, dimension.height // 2 - 3)


def big_crunch_generator(dimension: Dimension, coordinate: Coordinate) -> bool:
    """Two stacked rings centered on the grid."""
    cells = apply_offsets_to_shape(BIG_CRUNCH, [big_crunch_offset(dimension)])
    return is_in_shape(cells, coordinate)


def make_random_generator(probability: float = 0.5, seed: Optional[int] = None) -> PatternGenerator:
    """Create a random generator with its own seeded source.

    Args:
        probability: Chance each cell is alive (0.0 to 1.0)
        seed: Seed for reproducible worlds (None for fresh entropy)

    Returns:
        Pattern generator drawing from a private numpy Generator
    """
    rng = np.random.default_rng(seed)

    def generator(dimension: Dimension, coordinate: Coordinate) -> bool:
        return bool(rng.random() < probability)

    return generator


class Pattern:
    """A named shape replicated at a list of offsets."""

    def __init__(
        self,
        name: str,
        shape: Sequence[Coordinate],
        offsets: Optional[Sequence[Coordinate]] = None,
        description: str = "",
    ) -> None:
        """Initialize a pattern.

        Args:
            name: Pattern name
            shape: Relative coordinates of the live cells
            offsets: Where to place copies (defaults to a single copy at the origin)
            description: Optional description
        """
        self.name = name
        self.shape = [Coordinate(*cell) for cell in shape]
        self.offsets = [Coordinate(*offset) for offset in (offsets or [Coordinate(0, 0)])]
        self.description = description

    def cells(self, dimension: Optional[Dimension] = None) -> List[Coordinate]:
        """All live coordinates of the placed pattern.

        Args:
            dimension: If given, drop cells that fall outside the grid
        """
        cells = apply_offsets_to_shape(self.shape, self.offsets)
        if dimension is None:
            return cells
        return [cell for cell in cells if dimension.contains(cell)]

    def generator(self, dimension: Dimension, coordinate: Coordinate) -> bool:
        """Pattern generator for this pattern."""
        return is_in_shape(apply_offsets_to_shape(self.shape, self.offsets), coordinate)

    def get_bounding_box(self) -> Tuple[int, int, int, int]:
        """Get bounding box of the shape.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        if not self.shape:
            return (0, 0, 0, 0)

        xs = [cell.x for cell in self.shape]
        ys = [cell.y for cell in self.shape]
        return (min(xs), min(ys), max(xs), max(ys))

    def get_size(self) -> Tuple[int, int]:
        """Get shape size as (width, height)."""
        min_x, min_y, max_x, max_y = self.get_bounding_box()
        return (max_x - min_x + 1, max_y - min_y + 1)


class PatternLibrary:
    """Registry of pattern generators by identifier."""

    def __init__(self) -> None:
        self._generators: Dict[str, PatternGenerator] = {}
        self._descriptions: Dict[str, str] = {}
        self._load_builtin_patterns()

    def _load_builtin_patterns(self) -> None:
        """Register the built-in generators."""
        self.add_generator("dead", dead_generator, "Empty world")
        self.add_generator("random", random_generator, "Each cell alive with 50% chance")
        self.add_generator("glider", glider_generator, "Eight gliders")
        self.add_generator("glider_simple", glider_simple_generator, "Six gliders")
        self.add_generator("spaceship", spaceship_generator, "Four lightweight spaceships")
        self.add_generator("big_crunch", big_crunch_generator, "Two centered rings")

    def add_generator(self, name: str, generator: PatternGenerator, description: str = "") -> None:
        """Register a generator under a name, replacing any previous one."""
        self._generators[name] = generator
        self._descriptions[name] = description

    def add_pattern(self, pattern: Pattern) -> None:
        """Register a shape-based pattern under its name."""
        self.add_generator(pattern.name, pattern.generator, pattern.description)

    def get_generator(self, name: str) -> Optional[PatternGenerator]:
        """Get a generator by name.

        Args:
            name: Pattern identifier

        Returns:
            Generator or None if not found
        """
        return self._generators.get(name)

    def get_description(self, name: str) -> str:
        """Description of a registered pattern (empty if none)."""
        return self._descriptions.get(name, "")

    def list_patterns(self) -> List[str]:
        """Get list of all pattern names."""
        return list(self._generators.keys())
