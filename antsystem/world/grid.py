"""Grid — the spatial container for the simulation.

The Grid owns the cell matrix, the single home cell, the immutable
parameter bundle, the ant population and the set of cells touched since
the last evaporation pass.  One ``tick`` runs the canonical order:

1. Top the population up to ``ant_count``
2. ``steps_per_tick`` sub-steps, every ant moving once per sub-step in
   a fixed order, deposits visible immediately to later ants
3. One evaporation pass over the active cells, producing render data
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

import numpy as np
from numpy.random import Generator

from antsystem.colony.colony import Colony
from antsystem.pheromones.evaporation import evaporate_cells, render_cells
from antsystem.pheromones.fields import PheromoneChannel
from antsystem.simulation.config import SimulationConfig
from antsystem.simulation.frames import CellFrame, Frame
from antsystem.world.cell import Cell, CellType

logger = logging.getLogger(__name__)

# 8-connectivity: the four axis moves followed by the four diagonals.
# Every move costs one path step, so a diagonal is as cheap as a side step.
MOVES: tuple[tuple[int, int], ...] = (
    (-1, 0),
    (1, 0),
    (0, -1),
    (0, 1),
    (-1, -1),
    (1, -1),
    (-1, 1),
    (1, 1),
)


@dataclass(eq=False)
class Grid:
    """A 2D grid of cells plus everything that acts on it.

    Attributes:
        config: Validated, immutable simulation parameters.
        rng: Seeded random generator shared by every ant.  Built from
            ``config.seed`` when not supplied.
        width: Number of columns.
        height: Number of rows.
        cells: 2D list of Cell objects indexed as ``cells[y][x]``.
        home_cell: The single HOME cell, at the grid centre.
        colony: The ant population.
        tick_count: Ticks completed so far.
    """

    config: SimulationConfig
    rng: Generator | None = None
    width: int = field(init=False)
    height: int = field(init=False)
    cells: list[list[Cell]] = field(init=False, repr=False)
    home_cell: Cell = field(init=False)
    colony: Colony = field(init=False, repr=False)
    tick_count: int = field(init=False, default=0)
    _active: dict[Cell, None] = field(init=False, repr=False, default_factory=dict)
    _landmarks: dict[Cell, None] = field(init=False, repr=False, default_factory=dict)

    def __post_init__(self) -> None:
        """Build the cell matrix and place home at the centre."""
        if self.rng is None:
            self.rng = np.random.default_rng(self.config.seed)
        self.width = self.config.columns
        self.height = self.config.rows
        self.cells = [
            [Cell(x=x, y=y) for x in range(self.width)] for y in range(self.height)
        ]
        hx, hy = self.width // 2, self.height // 2
        self.home_cell = Cell.home(hx, hy)
        self.cells[hy][hx] = self.home_cell
        self._landmarks[self.home_cell] = None
        self.colony = Colony()

    # -- Spatial queries ------------------------------------------------------

    def cell_at(self, x: int, y: int) -> Cell | None:
        """Return the cell at ``(x, y)``, or None when out of bounds."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            return None
        return self.cells[y][x]

    def moves_from(self, cell: Cell) -> list[Cell]:
        """Return the cells reachable in one step from ``cell``.

        Off-grid offsets and BARRIER cells are dropped; order follows
        ``MOVES``.
        """
        result: list[Cell] = []
        for offset in MOVES:
            target = cell.neighbour(offset, self)
            if target is not None and target.type is not CellType.BARRIER:
                result.append(target)
        return result

    def distance_to_home(self, cell: Cell) -> float:
        """Euclidean distance from ``cell`` to the home cell."""
        return math.hypot(cell.x - self.home_cell.x, cell.y - self.home_cell.y)

    # -- Active set -----------------------------------------------------------

    def register_active(self, cell: Cell) -> None:
        """Mark ``cell`` as touched, moving it to the most-recent position."""
        self._active.pop(cell, None)
        self._active[cell] = None

    @property
    def active_cells(self) -> list[Cell]:
        """Touched cells, least recently touched first."""
        return list(self._active)

    # -- External placement and inspection -------------------------------------

    def set_cell_type(self, x: int, y: int, new_type: CellType) -> bool:
        """Change the type of the cell at ``(x, y)``.

        The home cell is fixed and a second home cannot be created;
        such requests, and off-grid coordinates, are ignored.

        Args:
            x: Column index.
            y: Row index.
            new_type: FOOD, BARRIER or NORMAL.

        Returns:
            True if the cell changed.
        """
        cell = self.cell_at(x, y)
        if cell is None or cell is self.home_cell or new_type is CellType.HOME:
            logger.debug("ignored %s placement at (%d, %d)", new_type.name, x, y)
            return False
        cell.change_type(new_type)
        if new_type is CellType.NORMAL:
            self._landmarks.pop(cell, None)
        else:
            self._landmarks[cell] = None
        return True

    def landmarks(self) -> list[CellFrame]:
        """Home, food and barrier cells, in placement order, at full intensity."""
        return [
            CellFrame(x=cell.x, y=cell.y, type=cell.type, intensity=1.0)
            for cell in self._landmarks
        ]

    def inspect(self, x: int, y: int) -> tuple[float, float] | None:
        """Log and return ``(food, home)`` pheromone at ``(x, y)``."""
        cell = self.cell_at(x, y)
        if cell is None:
            return None
        logger.info(
            "cell (%d, %d) %s food_tau=%.3f home_tau=%.3f",
            x,
            y,
            cell.type.name,
            cell.food_pheromone,
            cell.home_pheromone,
        )
        return cell.food_pheromone, cell.home_pheromone

    # -- Tick ------------------------------------------------------------------

    def evaporate_and_render(self) -> list[CellFrame]:
        """Evaporate every active cell and return their display state.

        Must run once per tick, after all sub-steps; evaporating between
        sub-steps would erode trails before a leg completes.

        Returns:
            One CellFrame per active cell, intensities normalised against
            the brightest NORMAL cell on the display channel.
        """
        channel: PheromoneChannel = self.config.display_channel
        active = self.active_cells
        peak = evaporate_cells(active, self.config.rho, channel)
        return render_cells(active, peak, channel)

    def tick(self, steps_per_tick: int | None = None) -> Frame:
        """Advance the simulation by one tick.

        Args:
            steps_per_tick: Sub-steps to run; defaults to
                ``config.steps_per_tick``.

        Returns:
            The render data for this tick.
        """
        steps = self.config.steps_per_tick if steps_per_tick is None else steps_per_tick
        self.colony.top_up(self, self.config.ant_count)

        for _ in range(steps):
            for ant in self.colony.ants:
                ant.move()

        cells = self.evaporate_and_render()
        self.tick_count += 1
        return Frame(
            tick=self.tick_count,
            cells=cells,
            ants=self.colony.snapshot(),
            landmarks=self.landmarks(),
        )
