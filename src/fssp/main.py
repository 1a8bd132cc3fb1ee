"""
Command-line interface for the firing squad simulator.

Usage:
    python -m fssp.main --help
    python -m fssp.main 20 --rules waksman-slim.rul.txt
    python -m fssp.main 20 --rules waksman-slim.rul.txt --dump
    python -m fssp.main 64 --rules waksman-slim.rul.txt --save-diagram fire.png
"""

import argparse
import sys
import time
from typing import Optional, Sequence

from .config import Config
from .errors import SpecificationError, UndefinedTransition
from .rules import load_file
from .simulation import Simulation
from .visualization import save_space_time_diagram


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with all options."""
    parser = argparse.ArgumentParser(
        description="Firing Squad Synchronization Problem simulator",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "cells", type=int, nargs="?", default=10,
        help="Number of interior cells"
    )
    parser.add_argument(
        "--rules", type=str, default="waksman-slim.rul.txt", dest="rule_file",
        help="Rule specification file"
    )
    parser.add_argument(
        "-d", "--dump", action="store_true",
        help="Dump cells for each generation"
    )
    parser.add_argument(
        "--max-steps", type=int, default=None, dest="max_steps",
        help="Generation budget (default: 4 * cells + 16)"
    )
    parser.add_argument(
        "--save-diagram", type=str, default=None, dest="save_diagram",
        help="Save the space-time diagram to this image file"
    )
    parser.add_argument(
        "--no-progress", action="store_false", dest="show_progress",
        help="Hide the progress bar"
    )

    return parser


def format_line(names: Sequence[str]) -> str:
    """Join interior state names for display."""
    return "|".join(names)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = Config.from_args(args)
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    try:
        catalog, table = load_file(config.rule_file)
    except OSError as e:
        print(f"Cannot read rules: {e}", file=sys.stderr)
        return 1
    except SpecificationError as e:
        print(f"{config.rule_file}: {e}", file=sys.stderr)
        return 1

    sim = Simulation(catalog, table, config.cells)
    budget = config.step_budget
    record = config.dump or config.save_diagram is not None

    start = time.perf_counter()
    try:
        if record:
            history = []
            for names in sim.history(budget):
                history.append(names)
                if config.dump:
                    print(format_line(names))
            settled = sim.is_settled()
        else:
            settled = sim.run(budget, show_progress=config.show_progress)
    except UndefinedTransition as e:
        print(f"Generation {sim.step_count + 1}: {e}", file=sys.stderr)
        return 1
    elapsed = time.perf_counter() - start

    if config.save_diagram:
        save_space_time_diagram(
            history, catalog, config.save_diagram,
            title=f"{config.cells} cells, {sim.step_count} generations",
        )
        print(f"Diagram saved to {config.save_diagram}")

    if not settled:
        print(f"Not fired after {sim.step_count} generations", file=sys.stderr)
        return 2

    print(f"Fired: {config.cells} cells, {sim.step_count} generations, {elapsed:.6f}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
