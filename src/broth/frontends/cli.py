"""Command-line interface for running cellular automata."""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from ..config import RunConfig
from ..core.cellstate import CellState
from ..core.grid import Grid, GridView
from ..core.patterns import PatternLibrary
from ..core.universe import Universe
from ..export import SnapshotRecorder, format_grid

logger = logging.getLogger(__name__)


class CLIUniverse:
    """Command-line interface for running universe simulations."""

    def __init__(self) -> None:
        self.pattern_library = PatternLibrary()

    def build_universe(self, config: RunConfig, verbose: bool = False) -> Universe:
        """Create and seed a universe from a run configuration.

        Seeding uses the named pattern if any, otherwise random cells at
        ``population_rate``; explicit ``seed_cells`` are switched on last.
        With none of these, the middle cell of the grid is switched on.
        """
        grid = Grid(config.width, config.height)

        if config.pattern:
            pattern = self.pattern_library.get_pattern(config.pattern)
            if pattern:
                if verbose:
                    print(f"Loading pattern '{config.pattern}' at ({config.pattern_x}, {config.pattern_y})")
                pattern.apply_to_grid(grid, config.pattern_x, config.pattern_y)
            else:
                print(f"Warning: Pattern '{config.pattern}' not found, using random population")
                self._randomize(grid, config)
        elif config.population_rate > 0:
            if verbose:
                print(f"Generating random population (rate: {config.population_rate:.2%})")
            self._randomize(grid, config)
        elif not config.seed_cells:
            grid.set(config.width // 2, config.height // 2, CellState.ALIVE)

        for x, y in config.seed_cells:
            grid.set(x, y, CellState.ALIVE)

        return Universe(grid, config.build_rule())

    def _randomize(self, grid: Grid, config: RunConfig) -> None:
        rng = np.random.default_rng(config.seed)
        mask = rng.random((grid.height, grid.width)) < config.population_rate
        for y, x in zip(*np.nonzero(mask)):
            grid.set(int(x), int(y), CellState.ALIVE)

    def run_simulation(
        self,
        config: RunConfig,
        show_grid: bool = False,
        json_path: Optional[str] = None,
        note: Optional[str] = None,
        verbose: bool = False,
    ) -> Tuple[int, Dict[str, Any]]:
        """Run a simulation.

        Args:
            config: Run configuration
            show_grid: Print every generation (small grids only)
            json_path: Optional path to write every generation as JSON
            note: Note stored in the JSON document
            verbose: Print progress updates

        Returns:
            Tuple of (final_generation, statistics)
        """
        universe = self.build_universe(config, verbose=verbose)
        view = universe.current()

        if verbose:
            print(f"Initializing {config.width}x{config.height} universe with rule {universe.rule!r}")

        recorder = None
        if json_path:
            recorder = SnapshotRecorder(note if note is not None else f"simulating rule {config.rule}")
            recorder.record(view)

        initial_population = universe.population

        if show_grid:
            print(self._format_grid(view))

        def after_step(stepped: Universe) -> None:
            if show_grid:
                print(self._format_grid(stepped.current()))
            if recorder is not None:
                recorder.record(stepped.current())

        start_time = time.time()
        final_generation = universe.run(config.generations, after_step)
        duration = time.time() - start_time

        stats: Dict[str, Any] = {
            "generation": final_generation,
            "rule": repr(universe.rule),
            "grid_size": (config.width, config.height),
            "initial_population": initial_population,
            "population": universe.population,
            "population_density": universe.population / (config.width * config.height),
            "duration_seconds": duration,
            "generations_per_second": final_generation / duration if duration > 0 else 0,
        }

        if recorder is not None:
            stats["json_path"] = str(recorder.save(json_path))
            logger.debug("Wrote %d snapshots to %s", len(recorder), json_path)

        return final_generation, stats

    def _format_grid(self, grid: GridView, max_size: int = 200) -> str:
        """Format grid for display, truncating if too large."""
        if grid.width > max_size or grid.height > max_size:
            return f"Grid too large to display ({grid.width}x{grid.height})"

        return format_grid(grid)

    def list_patterns(self) -> None:
        """List available seed patterns."""
        print("Available patterns:")
        for name in self.pattern_library.list_patterns():
            pattern = self.pattern_library.get_pattern(name)
            width, height = pattern.get_size()
            print(f"  {name:<24} {width}x{height}  {pattern.description}")


def parse_cell(text: str) -> Tuple[int, int]:
    """Parse an "X,Y" cell coordinate."""
    try:
        x, y = (int(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Cell must be given as X,Y, got '{text}'") from None
    return (x, y)


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Run cellular automata on a toroidal grid",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Wolfram rule 30 on a ring of 7 cells, starting from cell 3
  broth-cli -W 7 -H 1 --rule 30 --cell 3,0 -m 3 --show-grid

  # Record each generation to JSON
  broth-cli -W 3 -H 1 --rule 30 --cell 1,0 -m 3 --json simulation.json

  # Glider under Conway's rules on a 20x20 torus
  broth-cli -W 20 -H 20 --rule B3/S23 --pattern Glider -m 80

  # List available patterns
  broth-cli --list-patterns
        """,
    )

    parser.add_argument("-W", "--width", type=int, default=64, help="Grid width (default: 64)")

    parser.add_argument("-H", "--height", type=int, default=1, help="Grid height (default: 1)")

    parser.add_argument(
        "-r",
        "--rule",
        type=str,
        default="30",
        help="Rule: Wolfram number, B/S notation or 'life' (default: 30)",
    )

    parser.add_argument(
        "-m",
        "--generations",
        type=int,
        default=32,
        help="Generations to simulate (default: 32)",
    )

    parser.add_argument(
        "-p",
        "--population",
        dest="population_rate",
        type=float,
        default=0.0,
        help="Initial random population rate 0.0-1.0 (default: 0.0)",
    )

    parser.add_argument("--seed", type=int, help="Random seed for reproducible populations")

    parser.add_argument(
        "--pattern",
        type=str,
        help="Place a library pattern instead of a random population",
    )

    parser.add_argument(
        "--pattern-x",
        type=int,
        default=0,
        help="X offset for pattern placement (default: 0)",
    )

    parser.add_argument(
        "--pattern-y",
        type=int,
        default=0,
        help="Y offset for pattern placement (default: 0)",
    )

    parser.add_argument(
        "--cell",
        dest="seed_cells",
        type=parse_cell,
        action="append",
        metavar="X,Y",
        help="Switch on a cell (repeatable)",
    )

    parser.add_argument(
        "-g",
        "--show-grid",
        action="store_true",
        help="Print every generation",
    )

    parser.add_argument("--json", dest="json_path", type=str, help="Write every generation to a JSON file")

    parser.add_argument("--note", type=str, help="Note stored in the JSON file")

    parser.add_argument(
        "--list-patterns",
        action="store_true",
        help="List all available patterns and exit",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print detailed progress information and debug logging",
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

    if not 0.0 <= args.population_rate <= 1.0:
        errors.append("Population rate must be between 0.0 and 1.0")

    if args.generations < 0:
        errors.append("Generations must not be negative")

    if args.json_path and not Path(args.json_path).resolve().parent.is_dir():
        errors.append(f"Directory for JSON output does not exist: {args.json_path}")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def print_results(final_generation: int, stats: Dict[str, Any], verbose: bool) -> None:
    """Print simulation results.

    Args:
        final_generation: Final generation number
        stats: Statistics dictionary
        verbose: Whether to show detailed statistics
    """
    print(f"\nSimulation completed after {final_generation} generations")

    if verbose:
        print("\nDetailed Statistics:")
        print(f"  Rule: {stats['rule']}")
        print(f"  Grid size: {stats['grid_size'][0]}x{stats['grid_size'][1]}")
        print(f"  Initial population: {stats['initial_population']}")
        print(f"  Final population: {stats['population']}")
        print(f"  Population density: {stats['population_density']:.2%}")
        print(f"  Duration: {stats['duration_seconds']:.3f} seconds")
        print(f"  Speed: {stats['generations_per_second']:.0f} generations/second")
    else:
        print(
            "Population: {} -> {}, Duration: {:.3f}s".format(
                stats["initial_population"], stats["population"], stats["duration_seconds"]
            )
        )

    if "json_path" in stats:
        print(f"Snapshots written to {stats['json_path']}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    cli = CLIUniverse()

    if args.list_patterns:
        cli.list_patterns()
        return 0

    if not validate_args(args):
        return 1

    if args.pattern and cli.pattern_library.get_pattern(args.pattern) is None:
        print(f"Error: Pattern '{args.pattern}' not found")
        print(f"Available patterns: {', '.join(cli.pattern_library.list_patterns())}")
        return 1

    try:
        config = RunConfig.from_args(args)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    try:
        final_generation, stats = cli.run_simulation(
            config,
            show_grid=args.show_grid,
            json_path=args.json_path,
            note=args.note,
            verbose=args.verbose,
        )
        print_results(final_generation, stats, args.verbose)
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
