#!/usr/bin/env python3
"""
Example usage of the broth package: Wolfram rule 30 and a glider.
"""

from broth import CellState, Grid, LifeLikeRule, PatternLibrary, Universe
from broth.core.neighborhoods import ELEMENTARY
from broth.export import SnapshotRecorder, format_grid


def rule30(neighborhood):
    """Rule 30 spelled out as a lookup on (west, self, east)."""
    alive = CellState.ALIVE
    west, center, east = (state == alive for state in neighborhood)
    return alive if west != (center or east) else CellState.DEAD


def main():
    """Demonstrate programmatic usage of the broth package."""
    print("Wolfram rule 30 example")

    grid = Grid(31, 1)
    grid.set(15, 0, CellState.ALIVE)
    universe = Universe(grid, rule30, pattern=ELEMENTARY)

    recorder = SnapshotRecorder("simulating rule 30")
    recorder.record(universe.current())
    print(format_grid(universe.current()))

    for _ in range(15):
        universe.step()
        recorder.record(universe.current())
        print(format_grid(universe.current()))

    recorder.save("simulation.json")
    print(f"Wrote {len(recorder)} generations to simulation.json")
    print()

    # Glider on a small torus
    grid = Grid(12, 12)
    glider = PatternLibrary().get_pattern("Glider")
    glider.apply_to_grid(grid, offset_x=4, offset_y=4)
    universe = Universe(grid, LifeLikeRule.from_string("B3/S23"))

    for _ in range(4):
        universe.step()
    print(f"Glider after {universe.generation()} generations:")
    print(universe.current())
    print(f"Population: {universe.population}")


if __name__ == "__main__":
    main()
