"""Coordinate and dimension value types for the cellular grid."""

from typing import Iterator, NamedTuple


class Coordinate(NamedTuple):
    """Immutable 2D integer position on the grid."""

    x: int
    y: int

    def shift(self, offset: "Coordinate") -> "Coordinate":
        """Return a new coordinate translated by ``offset``.

        Args:
            offset: Translation to apply component-wise

        Returns:
            Translated coordinate
        """
        return Coordinate(self.x + offset.x, self.y + offset.y)


class Dimension(NamedTuple):
    """Rectangular extent ``[0, width) x [0, height)`` of a grid."""

    width: int
    height: int

    @property
    def area(self) -> int:
        """Total number of cells."""
        return self.width * self.height

    def contains(self, coordinate: Coordinate) -> bool:
        """Check whether a coordinate lies inside the grid."""
        return 0 <= coordinate.x < self.width and 0 <= coordinate.y < self.height

    def coordinates(self) -> Iterator[Coordinate]:
        """Yield every in-range coordinate in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield Coordinate(x, y)
