"""Command-line interface for bounded-grid life simulations."""

import argparse
import sys
import time
from typing import List, Optional, TextIO

from ..core.game import SimulationConfig, Simulation, simulate
from ..core.grid import Dimension
from ..core.patterns import PatternLibrary, make_random_generator
from ..core.rule import NAMED_RULES, Rule
from ..core.world import World

# ANSI: clear screen, cursor home
CLEAR_SCREEN = "\x1b[2J\x1b[H"


def parse_rule(text: str) -> Rule:
    """Parse a rule given by name (``highlife``) or B/S notation (``B36/S23``).

    Raises:
        ValueError: If the text is neither
    """
    key = text.strip().lower().replace("-", "_")
    if key in NAMED_RULES:
        return Rule.named(key)
    return Rule.from_string(text)


class CLIGameOfLife:
    """Command-line interface for running and playing back simulations."""

    def __init__(self, output: Optional[TextIO] = None) -> None:
        """Initialize CLI interface.

        Args:
            output: Stream frames are written to (defaults to stdout)
        """
        self.pattern_library = PatternLibrary()
        self.output = output

    @property
    def _out(self) -> TextIO:
        return self.output if self.output is not None else sys.stdout

    def build_world(self, config: SimulationConfig, verbose: bool = False) -> World:
        """Create the initial world described by a configuration.

        An unknown pattern falls back to a random world with a warning.
        """
        dimension = Dimension(config.width, config.height)

        if config.pattern == "random" and config.seed is not None:
            generator = make_random_generator(seed=config.seed)
        else:
            generator = self.pattern_library.get_generator(config.pattern)

        if generator is None:
            print(f"Warning: Pattern '{config.pattern}' not found, using random population")
            generator = self.pattern_library.get_generator("random")

        if verbose:
            print(f"Initializing {config.width}x{config.height} grid with pattern '{config.pattern}'")

        world = World.create_initial_world(dimension, generator)
        world.set_rule(parse_rule(config.rule))
        return world

    def run_simulation(self, config: SimulationConfig, verbose: bool = False) -> List[World]:
        """Compute every generation up front.

        Returns:
            ``config.iterations`` worlds, the first being the initial one
        """
        world = self.build_world(config, verbose)

        if verbose:
            print(f"Initial population: {world.population} cells")
            print(f"Running {config.iterations} generations (rule {world.rule})...")

        start_time = time.time()
        worlds = simulate(world, config.iterations)
        duration = time.time() - start_time

        if verbose:
            speed = len(worlds) / duration if duration > 0 else 0
            print(f"Computed {len(worlds)} generations in {duration:.3f}s ({speed:.0f} gen/s)")

        return worlds

    def play(self, worlds: List[World], delay: float = 0.1, clear_screen: bool = True) -> None:
        """Render each world in turn, pausing ``delay`` seconds between frames."""
        out = self._out
        for world in worlds:
            if clear_screen:
                out.write(CLEAR_SCREEN)
            world.render_to(out)
            out.write("\n")
            out.flush()
            if delay > 0:
                time.sleep(delay)

    def summarize(self, worlds: List[World]) -> None:
        """Print statistics for the last generation of a run."""
        if not worlds:
            print("No generations simulated")
            return

        simulation = Simulation.from_history(worlds)
        stats = simulation.get_statistics()
        print(f"\nSimulation completed after {stats['generation']} generations")
        print(f"  Grid size: {stats['grid_size'][0]}x{stats['grid_size'][1]}")
        print(f"  Rule: {stats['rule']}")
        print(f"  Initial population: {worlds[0].population}")
        print(f"  Final population: {stats['population']}")
        print(f"  Population density: {stats['population_density']:.2%}")
        print(f"  Population change rate: {stats['population_change_rate']:.2f}")

    def list_patterns(self) -> None:
        """List available patterns."""
        print("Available patterns:")
        for name in self.pattern_library.list_patterns():
            description = self.pattern_library.get_description(name)
            if description:
                print(f"  {name}: {description}")
            else:
                print(f"  {name}")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    defaults = SimulationConfig()
    parser = argparse.ArgumentParser(
        description="Animate a life-like cellular automaton in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Random 40x20 world for 200 generations
  lifegrid-cli

  # Gliders on a wider grid
  lifegrid-cli -W 60 -H 30 --pattern glider

  # HighLife rule, no animation delay
  lifegrid-cli --rule highlife --delay 0

  # Reproducible random world
  lifegrid-cli --seed 42 -n 50

  # List available patterns
  lifegrid-cli --list-patterns
        """,
    )

    # Grid configuration
    parser.add_argument("-W", "--width", type=int, default=defaults.width, help=f"Grid width (default: {defaults.width})")

    parser.add_argument(
        "-H", "--height", type=int, default=defaults.height, help=f"Grid height (default: {defaults.height})"
    )

    parser.add_argument(
        "--pattern",
        type=str,
        default=defaults.pattern,
        help=f"Initial pattern (default: {defaults.pattern})",
    )

    parser.add_argument(
        "--rule",
        type=str,
        default=defaults.rule,
        help=f"Rule in B/S notation or by name, e.g. 'highlife' (default: {defaults.rule})",
    )

    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for a reproducible random pattern",
    )

    # Simulation configuration
    parser.add_argument(
        "-n",
        "--iterations",
        type=int,
        default=defaults.iterations,
        help=f"Number of generations to show (default: {defaults.iterations})",
    )

    # Output configuration
    parser.add_argument(
        "-d",
        "--delay",
        type=float,
        default=defaults.delay,
        help=f"Seconds between frames (default: {defaults.delay})",
    )

    parser.add_argument(
        "--no-clear",
        action="store_true",
        help="Don't clear the terminal between frames",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print progress information and final statistics",
    )

    parser.add_argument(
        "--list-patterns",
        action="store_true",
        help="List all available patterns and exit",
    )

    return parser


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors = []

    if args.width <= 0:
        errors.append("Width must be positive")

    if args.height <= 0:
        errors.append("Height must be positive")

    if args.iterations <= 0:
        errors.append("Iterations must be positive")

    if args.delay < 0:
        errors.append("Delay must be non-negative")

    try:
        parse_rule(args.rule)
    except ValueError as e:
        errors.append(str(e))

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def config_from_args(args: argparse.Namespace) -> SimulationConfig:
    """Build a simulation configuration from parsed arguments."""
    return SimulationConfig(
        width=args.width,
        height=args.height,
        pattern=args.pattern,
        iterations=args.iterations,
        rule=args.rule,
        delay=args.delay,
        clear_screen=not args.no_clear,
        seed=args.seed,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    cli = CLIGameOfLife()

    if args.list_patterns:
        cli.list_patterns()
        return 0

    if not validate_args(args):
        return 1

    if cli.pattern_library.get_generator(args.pattern) is None:
        available = cli.pattern_library.list_patterns()
        print(f"Error: Pattern '{args.pattern}' not found")
        print(f"Available patterns: {', '.join(available)}")
        return 1

    config = config_from_args(args)

    try:
        worlds = cli.run_simulation(config, verbose=args.verbose)
        cli.play(worlds, delay=config.delay, clear_screen=config.clear_screen)

        if args.verbose:
            cli.summarize(worlds)

        return 0

    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1
    except Exception as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
