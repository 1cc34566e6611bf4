#!/usr/bin/env python3
"""
Example usage of the lifegrid package.
"""

import numpy as np

from lifegrid import Grid, PatternLibrary, Simulation
from lifegrid.formats import to_data_url


def main():
    """Demonstrate programmatic usage of the lifegrid package."""
    grid = Grid(20, 20)
    simulation = Simulation(grid)

    # Stamp a glider near the corner so it wraps across the edges
    library = PatternLibrary()
    glider = library.get_pattern("Glider")
    if glider:
        glider.stamp(grid, 17, 17)

    print("Initial state:")
    print(grid)
    print()

    simulation.run(8)
    print(f"Generation {simulation.generation}:")
    print(grid)
    print()

    print("RLE:")
    print(grid.to_rle())
    print()
    print("Life 1.06:")
    print(grid.to_life_106())
    print()
    print("Data URL:")
    print(to_data_url(grid))
    print()

    # Reproducible soup
    grid.randomize(np.random.default_rng(2024))
    simulation.load(grid)
    generation, reason = simulation.run_until_stable(max_generations=500)
    print(f"Random soup stopped at generation {generation} ({reason})")

    stats = simulation.get_statistics()
    print("Final statistics:")
    for key, value in stats.items():
        if key != "population_history":
            print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
