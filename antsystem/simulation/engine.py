"""SimulationEngine — the driver around ``Grid.tick``.

Owns the grid built from a config and hands every tick's render data to
registered listeners.  Wall-clock pacing is left to whoever calls
``step``; the engine never sleeps or schedules anything itself.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from numpy.random import Generator

from antsystem.simulation.config import SimulationConfig
from antsystem.simulation.frames import Frame
from antsystem.world.cell import CellType
from antsystem.world.grid import Grid

logger = logging.getLogger(__name__)

FrameListener = Callable[[Frame], None]


@dataclass
class SimulationEngine:
    """Drives the simulation forward tick by tick.

    Attributes:
        config: Validated simulation configuration.
        rng: Optional injected generator; ``config.seed`` is used when
            omitted.
        grid: The grid, population and pheromone field.
        listeners: Callables receiving each tick's Frame.
    """

    config: SimulationConfig
    rng: Generator | None = None
    grid: Grid = field(init=False)
    listeners: list[FrameListener] = field(init=False, default_factory=list)

    def __post_init__(self) -> None:
        """Build the grid and log the parameter set."""
        self.grid = Grid(config=self.config, rng=self.rng)
        cfg = self.config
        logger.info(
            "AS parameters: alpha=%s beta=%s rho=%s Q=%s tau0=%s m=%d "
            "maxL=%d~%d steps/tick=%d grid=%dx%d",
            cfg.alpha,
            cfg.beta,
            cfg.rho,
            cfg.q,
            cfg.tau0,
            cfg.ant_count,
            cfg.min_max_path_length,
            cfg.max_max_path_length,
            cfg.steps_per_tick,
            self.grid.width,
            self.grid.height,
        )

    @property
    def tick(self) -> int:
        """Ticks completed so far."""
        return self.grid.tick_count

    def add_listener(self, listener: FrameListener) -> None:
        """Register a callable to receive every Frame."""
        self.listeners.append(listener)

    def place(self, x: int, y: int, cell_type: CellType) -> bool:
        """Place FOOD or BARRIER (or clear to NORMAL) at ``(x, y)``."""
        return self.grid.set_cell_type(x, y, cell_type)

    def step(self) -> Frame:
        """Advance the simulation by one tick and notify listeners."""
        frame = self.grid.tick()
        for listener in self.listeners:
            listener(frame)
        return frame

    def run(self, ticks: int) -> None:
        """Run the simulation for a fixed number of ticks.

        Args:
            ticks: Number of ticks to advance.
        """
        for _ in range(ticks):
            self.step()

    def summary(self) -> dict[str, int]:
        """Counters describing the population's progress."""
        colony = self.grid.colony
        return {
            "tick": self.tick,
            "ants": len(colony.ants),
            "carrying": colony.carrying,
            "food_found": colony.food_found,
            "round_trips": colony.round_trips,
            "abandoned": colony.abandoned,
            "active_cells": len(self.grid.active_cells),
        }
