"""Shared fixtures for the antsystem test suite."""

from __future__ import annotations

from collections.abc import Callable

import numpy as np
import pytest
from numpy.random import Generator

from antsystem.simulation.config import SimulationConfig
from antsystem.world.cell import CellType
from antsystem.world.grid import Grid


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def small_config() -> SimulationConfig:
    """A 5x5 grid (one pixel per cell), home at (2, 2), no ants."""
    return SimulationConfig(
        width=5,
        height=5,
        cell_spacing=1,
        alpha=1.0,
        beta=2.0,
        rho=0.02,
        q=100.0,
        tau0=0.01,
        ant_count=0,
        min_max_path_length=50,
        max_max_path_length=60,
        steps_per_tick=5,
    )


@pytest.fixture
def small_grid(small_config: SimulationConfig, rng: Generator) -> Grid:
    """An empty 5x5 grid sharing the seeded generator."""
    return Grid(config=small_config, rng=rng)


@pytest.fixture
def wall_off() -> Callable[..., None]:
    """Return a helper turning every cell but home and the given ones to barrier."""

    def _wall_off(grid: Grid, *open_cells: tuple[int, int]) -> None:
        keep = set(open_cells) | {(grid.home_cell.x, grid.home_cell.y)}
        for row in grid.cells:
            for cell in row:
                if (cell.x, cell.y) not in keep:
                    grid.set_cell_type(cell.x, cell.y, CellType.BARRIER)

    return _wall_off
