"""Tests for the World class."""

import io

import numpy as np
import pytest

from lifegrid.core.grid import Coordinate, Dimension
from lifegrid.core.patterns import dead_generator, glider_generator, make_random_generator
from lifegrid.core.rule import Rule
from lifegrid.core.world import World, WorldInvariantError


def world_from_rows(rows, rule=None):
    """Build a world from strings where 'x' marks a live cell."""
    dimension = Dimension(len(rows[0]), len(rows))
    alive = [Coordinate(x, y) for y, row in enumerate(rows) for x, ch in enumerate(row) if ch == "x"]
    return World.from_coordinates(dimension, alive, rule)


class TestWorldCreation:
    """Test cases for world construction."""

    @pytest.mark.parametrize("width, height", [(1, 1), (3, 7), (40, 20)])
    def test_dead_world_is_dense_and_dead(self, width, height):
        """Test that every in-range coordinate exists and is dead."""
        world = World.create_initial_world(Dimension(width, height), dead_generator)

        assert world.cells.shape == (width, height)
        assert len(list(world.coordinates())) == width * height
        assert world.population == 0
        assert not any(world.get_cell(c) for c in world.coordinates())

    def test_default_rule_attached(self):
        world = World.create_dead_world(Dimension(3, 3))
        assert world.rule == Rule.default()

    def test_generator_called_row_major(self):
        """Test that the generator visits every coordinate once, row by row."""
        calls = []

        def recording_generator(dimension, coordinate):
            calls.append(coordinate)
            return False

        World.create_initial_world(Dimension(3, 2), recording_generator)

        assert calls == list(Dimension(3, 2).coordinates())
        assert len(set(calls)) == 6

    def test_from_coordinates_ignores_off_grid(self):
        world = World.from_coordinates(Dimension(3, 3), [(1, 1), (-1, 0), (3, 3)])
        assert world.alive_coordinates() == [Coordinate(1, 1)]

    def test_shape_mismatch_is_invariant_violation(self):
        with pytest.raises(WorldInvariantError):
            World(np.zeros((2, 3)), Dimension(3, 2))

    def test_cells_read_only(self):
        world = World.create_dead_world(Dimension(3, 3))
        with pytest.raises(ValueError):
            world.cells[0, 0] = 1

    def test_constructor_copies_input(self):
        """Test that later changes to the source array don't leak in."""
        cells = np.zeros((3, 3), dtype=np.int8)
        world = World(cells, Dimension(3, 3))
        cells[1, 1] = 1
        assert world.population == 0

    def test_convenience_constructors(self):
        dimension = Dimension(40, 20)
        assert World.create_dead_world(dimension).population == 0
        assert World.create_glider_world(dimension).population == 40
        assert World.create_spaceship_world(dimension).population == 36
        assert World.create_big_crunch_world(dimension).population == 14
        assert World.create_random_world(dimension).cells.shape == (40, 20)


class TestWorldQueries:
    """Test cases for cell and neighbor queries."""

    def test_get_cell_off_grid_is_dead(self):
        world = world_from_rows(["xxx", "xxx", "xxx"])
        assert world.get_cell(Coordinate(1, 1))
        assert not world.get_cell(Coordinate(-1, 0))
        assert not world.get_cell(Coordinate(0, -1))
        assert not world.get_cell(Coordinate(3, 0))
        assert not world.get_cell(Coordinate(0, 3))

    def test_neighbor_count_interior(self):
        world = world_from_rows(["xxx", "xxx", "xxx"])
        assert world.neighbor_count(Coordinate(1, 1)) == 8

    def test_neighbor_count_corner_only_counts_in_range(self):
        world = world_from_rows(["xxx", "xxx", "xxx"])
        assert world.neighbor_count(Coordinate(0, 0)) == 3
        assert world.neighbor_count(Coordinate(2, 1)) == 5

    def test_neighbor_counts_match_single_cell_counts(self):
        """Test the convolution against the per-cell loop."""
        world = World.create_initial_world(Dimension(9, 7), make_random_generator(seed=3))
        counts = world.neighbor_counts()

        assert counts.shape == (9, 7)
        for coordinate in world.coordinates():
            assert counts[coordinate.x, coordinate.y] == world.neighbor_count(coordinate)

    def test_alive_coordinates_row_major(self):
        world = world_from_rows(["..x", "x..", ".x."])
        assert world.alive_coordinates() == [Coordinate(2, 0), Coordinate(0, 1), Coordinate(1, 2)]


class TestStep:
    """Test cases for the step algorithm."""

    def test_lone_cell_dies(self):
        """Test that an isolated cell dies and births nothing."""
        world = world_from_rows(["...", ".x.", "..."])
        successor = world.step()
        assert successor.population == 0

    def test_block_still_life(self):
        """Test a 2x2 block on a 4x4 grid, cell by cell."""
        rows = ["....", ".xx.", ".xx.", "...."]
        world = world_from_rows(rows)

        successor = world.step()

        assert successor.alive_coordinates() == world.alive_coordinates()
        for coordinate in world.coordinates():
            assert successor.get_cell(coordinate) == world.get_cell(coordinate)

        # Diagonal corners see one neighbor, edge-adjacent cells see two
        assert world.neighbor_count(Coordinate(0, 0)) == 1
        assert world.neighbor_count(Coordinate(1, 0)) == 2
        assert world.neighbor_count(Coordinate(1, 1)) == 3

    def test_blinker_oscillates(self):
        """Test period-2 oscillation of a blinker on 5x5."""
        horizontal = world_from_rows([".....", ".....", ".xxx.", ".....", "....."])
        vertical = world_from_rows([".....", "..x..", "..x..", "..x..", "....."])

        first = horizontal.step()
        second = first.step()

        assert first == vertical
        assert second == horizontal

    def test_step_does_not_mutate(self):
        world = world_from_rows([".....", ".....", ".xxx.", ".....", "....."])
        before = world.cells.copy()

        world.step()

        assert np.array_equal(world.cells, before)

    def test_step_preserves_coordinate_set(self):
        world = World.create_initial_world(Dimension(12, 5), make_random_generator(seed=11))
        successor = world.step()

        assert successor.dimension == world.dimension
        assert list(successor.coordinates()) == list(world.coordinates())
        assert successor.cells.shape == world.cells.shape

    def test_step_is_deterministic(self):
        world = World.create_initial_world(Dimension(40, 20), glider_generator)
        assert world.step() == world.step()

    def test_corner_cell_at_origin(self):
        """Test that a cell at (0, 0) steps without touching off-grid cells."""
        world = world_from_rows(["xx.", "x..", "..."])
        successor = world.step()

        # Each of the three live cells has two neighbors; (1, 1) is born
        assert successor.alive_coordinates() == [
            Coordinate(0, 0),
            Coordinate(1, 0),
            Coordinate(0, 1),
            Coordinate(1, 1),
        ]

    def test_no_wraparound(self):
        """Test that cells on opposite edges don't see each other."""
        world = world_from_rows(["x...x", ".....", "x...x"])
        assert world.neighbor_count(Coordinate(0, 0)) == 0
        assert world.step().population == 0

    def test_successor_keeps_rule(self):
        rule = Rule.named("highlife")
        world = world_from_rows(["...", ".x.", "..."], rule)
        assert world.step().rule == rule

    def test_set_rule_affects_next_step(self):
        """Test a custom birth count through set_rule."""
        world = world_from_rows(["x.x", "...", "..."])
        assert world.step().population == 0

        world.set_rule(Rule(set(), {2}))
        successor = world.step()

        assert successor.alive_coordinates() == [Coordinate(1, 0), Coordinate(1, 1)]
        # The current generation is untouched by the rule change
        assert world.alive_coordinates() == [Coordinate(0, 0), Coordinate(2, 0)]

    def test_empty_rule_kills_everything(self):
        world = world_from_rows(["xxx", "xxx", "xxx"], Rule(set(), set()))
        assert world.step().population == 0

    def test_generation_chain_is_retained(self):
        world = world_from_rows([".....", ".....", ".xxx.", ".....", "....."])
        chain = [world]
        for _ in range(4):
            chain.append(chain[-1].step())

        assert chain[0] == chain[2] == chain[4]
        assert chain[1] == chain[3]
        assert chain[0] != chain[1]


class TestRender:
    """Test cases for text rendering."""

    def test_render(self):
        world = world_from_rows(["x..", ".x."])
        expected = "\n".join(["|---|", "|x  |", "| x |", "|---|"])
        assert world.render() == expected

    def test_render_custom_glyphs(self):
        world = world_from_rows(["x."])
        assert world.render(alive="#", dead=".") == "|--|\n|#.|\n|--|"

    def test_render_to_sink(self):
        world = world_from_rows(["x"])
        sink = io.StringIO()

        world.render_to(sink)

        assert sink.getvalue() == "|-|\n|x|\n|-|\n"

    def test_render_detects_lost_coverage(self):
        world = world_from_rows(["x."])
        world._cells = np.zeros((1, 1), dtype=np.int8)
        with pytest.raises(WorldInvariantError):
            world.render()


class TestEquality:
    """Test cases for world comparison."""

    def test_equal_worlds(self):
        assert world_from_rows(["x.", ".x"]) == world_from_rows(["x.", ".x"])

    def test_different_rule_not_equal(self):
        assert world_from_rows(["x."]) != world_from_rows(["x."], Rule.named("seeds"))

    def test_different_dimension_not_equal(self):
        assert world_from_rows(["x."]) != world_from_rows(["x.."])

    def test_not_equal_to_other_types(self):
        assert world_from_rows(["x."]) != "x."

    def test_repr(self):
        assert repr(world_from_rows(["x."])) == "World(2x1, rule=B3/S23, population=1)"
