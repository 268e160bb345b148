#!/usr/bin/env python3
"""
Example usage of the lifegrid package.
"""

from lifegrid import Dimension, Rule, Simulation, World


def main():
    """Demonstrate programmatic usage of the lifegrid package."""
    # Seed a world with the centered big crunch pattern
    world = World.create_big_crunch_world(Dimension(20, 12))
    world.set_rule(Rule.default())
    simulation = Simulation(world)

    print("Initial state:")
    print(world.render())
    print(f"Population: {simulation.population}")
    print()

    # Run simulation for 10 generations
    for _ in range(10):
        current = simulation.step()
        print(f"Generation {simulation.generation}:")
        print(current.render())
        print(f"Population: {current.population}")
        print()

    # Show statistics
    stats = simulation.get_statistics()
    print("Final statistics:")
    for key, value in stats.items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
