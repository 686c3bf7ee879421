"""Entry point for ``python -m antsystem``.

Loads the default YAML config, builds a simulation engine and either
opens a Pygame window to watch the ants forage or, with ``--headless``,
runs a fixed number of ticks and logs a summary.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import pathlib

from antsystem.simulation.config import SimulationConfig
from antsystem.simulation.engine import SimulationEngine
from antsystem.world.cell import CellType

logger = logging.getLogger("antsystem")

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)


def build_parser() -> argparse.ArgumentParser:
    """Return the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="antsystem",
        description="Ant System foraging simulation on a 2D grid",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Override the RNG seed from the config file",
    )
    parser.add_argument(
        "--food",
        type=int,
        nargs=2,
        action="append",
        metavar=("X", "Y"),
        default=[],
        help="Place a food cell before starting (repeatable)",
    )
    parser.add_argument(
        "--headless",
        type=int,
        metavar="TICKS",
        default=None,
        help="Run TICKS ticks without a window and log a summary",
    )
    parser.add_argument(
        "--speed",
        type=float,
        default=10.0,
        help="Simulation ticks per second in the window (default: 10)",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=30,
        help="Target frames per second (default: 30)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI args, create engine, run headless or launch renderer."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = SimulationConfig.from_yaml(args.config)
    if args.seed is not None:
        config = dataclasses.replace(config, seed=args.seed)
    engine = SimulationEngine(config=config)
    for x, y in args.food:
        if not engine.place(x, y, CellType.FOOD):
            logger.warning("could not place food at (%d, %d)", x, y)

    if args.headless is not None:
        engine.run(args.headless)
        logger.info("summary: %s", engine.summary())
        return

    from antsystem.ui.pygame_client import PygameRenderer

    renderer = PygameRenderer(
        engine=engine,
        cell_size=config.cell_spacing,
        ticks_per_second=args.speed,
    )
    renderer.run(fps=args.fps)


if __name__ == "__main__":
    main()
