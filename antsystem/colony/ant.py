"""Ant -- an Ant System agent building paths between home and food.

Each ant walks one leg at a time (home to food, then food to home),
choosing every step with the AS transition rule:

    P_j = tau_j^alpha * eta_j^beta / sum_l(tau_l^alpha * eta_l^beta)

- **SEEKING_FOOD**: ``tau`` is the cell's food pheromone plus ``tau0``
  and ``eta`` is 1; the ant has no idea where food is.
- **CARRYING_FOOD**: ``tau`` is the home pheromone plus ``tau0`` and
  ``eta`` is the inverse Euclidean distance to home (100 on home).
- **Tabu list**: the current path.  Cells already on it are skipped
  unless that leaves nothing, in which case every neighbour is allowed
  again so the ant cannot lock up.
- **Ant-cycle deposit**: nothing is laid while walking.  When a leg
  finishes, ``Q / L`` goes onto every cell of the path, so short legs
  are reinforced harder than long ones.

Ants are never destroyed.  Finishing a round trip, overrunning the
sampled path cap or standing on an isolated cell all reset the ant in
place at home.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from antsystem.pheromones.fields import PheromoneChannel
from antsystem.world.cell import CellType

if TYPE_CHECKING:
    from numpy.random import Generator

    from antsystem.world.cell import Cell
    from antsystem.world.grid import Grid

logger = logging.getLogger(__name__)

# -- Constants ---------------------------------------------------------------

_HOME_HEURISTIC = 100.0  # eta on the home cell itself (distance 0)


class Status(Enum):
    """Foraging phase of an ant."""

    SEEKING_FOOD = auto()
    CARRYING_FOOD = auto()


def roulette_wheel(probs: Sequence[float], rng: Generator) -> int:
    """Pick an index with probability proportional to ``probs``.

    Draws a single ``r`` in [0, 1) and returns the first index whose
    running sum reaches it.  If rounding leaves the total just short of
    ``r``, the last index is returned.

    Args:
        probs: Normalised probabilities (sum to 1).
        rng: Seeded random generator.

    Returns:
        The selected index.
    """
    r = float(rng.random())
    cumulative = 0.0
    for i, p in enumerate(probs):
        cumulative += p
        if r <= cumulative:
            return i
    return len(probs) - 1


def normalise(values: NDArray[np.float64]) -> NDArray[np.float64]:
    """Turn desirability values into a probability vector.

    - Finite positive sum: plain division.
    - Zero sum (everything underflowed): uniform over all candidates.
    - Infinite sum (a sentinel endpoint, or overflow): uniform over the
      infinite entries, which dominate every finite one.

    Args:
        values: Non-negative desirability per candidate.

    Returns:
        Probabilities summing to 1.
    """
    n = len(values)
    total = float(values.sum())
    if np.isinf(total):
        mask = np.isinf(values).astype(np.float64)
        return mask / mask.sum()
    if total <= 0.0:
        return np.full(n, 1.0 / n)
    return values / total


@dataclass(eq=False)
class Ant:
    """A single foraging ant.

    Attributes:
        grid: The grid the ant lives on (parameters, home, RNG).
        path: Cells visited on the current leg, oldest first.  Doubles
            as the tabu list.
        status: Current foraging phase.
        max_path_length: Path cap for the current trip, sampled on
            every reset so resets are staggered across the population.
        food_found: Legs completed from home to food.
        round_trips: Legs completed from food back home.
        abandoned: Trips discarded for overrunning the cap or
            having no legal move.
    """

    grid: Grid = field(repr=False)
    path: list[Cell] = field(init=False, default_factory=list)
    status: Status = field(init=False, default=Status.SEEKING_FOOD)
    max_path_length: int = field(init=False, default=0)
    food_found: int = 0
    round_trips: int = 0
    abandoned: int = 0

    def __post_init__(self) -> None:
        """Place the ant at home, seeking food."""
        self.reset()

    @property
    def position(self) -> Cell:
        """The cell the ant is standing on."""
        return self.path[-1]

    def reset(self) -> None:
        """Return to home, seeking food, with a fresh path cap."""
        config = self.grid.config
        self.path = [self.grid.home_cell]
        self.status = Status.SEEKING_FOOD
        self.max_path_length = int(
            self.grid.rng.integers(
                config.min_max_path_length,
                config.max_max_path_length,
                endpoint=True,
            ),
        )

    # -- Transition rule ------------------------------------------------------

    def candidates(self, current: Cell) -> list[Cell]:
        """Legal next cells from ``current`` after tabu filtering.

        Returns an empty list only when ``current`` has no non-barrier
        neighbour at all.
        """
        neighbours = self.grid.moves_from(current)
        on_path = set(self.path)
        allowed = [cell for cell in neighbours if cell not in on_path]
        # Dead end: every neighbour is already on the path
        return allowed or neighbours

    def desirability(self, cells: Sequence[Cell]) -> NDArray[np.float64]:
        """Return ``tau^alpha * eta^beta`` for each cell."""
        config = self.grid.config
        if self.status is Status.SEEKING_FOOD:
            tau = np.array(
                [c.get_pheromone(PheromoneChannel.FOOD) for c in cells],
                dtype=np.float64,
            )
            eta = np.ones(len(cells), dtype=np.float64)
        else:
            tau = np.array(
                [c.get_pheromone(PheromoneChannel.HOME) for c in cells],
                dtype=np.float64,
            )
            dist = np.array(
                [self.grid.distance_to_home(c) for c in cells],
                dtype=np.float64,
            )
            eta = np.full(len(cells), _HOME_HEURISTIC)
            np.divide(1.0, dist, out=eta, where=dist > 0)
        tau += config.tau0
        with np.errstate(over="ignore", under="ignore", invalid="ignore"):
            values = np.power(tau, config.alpha) * np.power(eta, config.beta)
        # inf * 0 when a sentinel meets an underflowed heuristic
        values[np.isnan(values)] = 0.0
        return values

    def transition_probabilities(self, cells: Sequence[Cell]) -> NDArray[np.float64]:
        """Return the AS transition probabilities over ``cells``."""
        return normalise(self.desirability(cells))

    def select_next(self, current: Cell) -> Cell | None:
        """Choose the next cell by roulette wheel, or None if boxed in."""
        allowed = self.candidates(current)
        if not allowed:
            return None
        probs = self.transition_probabilities(allowed)
        return allowed[roulette_wheel(probs, self.grid.rng)]

    # -- Movement ---------------------------------------------------------------

    def move(self) -> None:
        """Take one step and apply any resulting state transition."""
        nxt = self.select_next(self.position)
        if nxt is None:
            self.abandoned += 1
            self.reset()
            return

        if nxt.type is CellType.FOOD and self.status is Status.SEEKING_FOOD:
            self.path.append(nxt)
            self.deposit_pheromone(PheromoneChannel.FOOD)
            logger.debug("ant reached food at (%d, %d) in %d", nxt.x, nxt.y, len(self.path))
            self.food_found += 1
            self.status = Status.CARRYING_FOOD
            self.path = [nxt]
        elif nxt.type is CellType.HOME and self.status is Status.CARRYING_FOOD:
            self.path.append(nxt)
            self.deposit_pheromone(PheromoneChannel.HOME)
            logger.debug("ant returned home in %d", len(self.path))
            self.round_trips += 1
            self.reset()
        else:
            self.path.append(nxt)
            self.grid.register_active(nxt)

        if len(self.path) > self.max_path_length:
            self.abandoned += 1
            self.reset()

    def deposit_pheromone(self, channel: PheromoneChannel) -> None:
        """Lay ``Q / L`` on every cell of the current path.

        A single-cell path carries no trail and is skipped.  Endpoint
        cells ignore the deposit but are still registered as active.

        Args:
            channel: FOOD after reaching food, HOME after reaching home.
        """
        length = len(self.path)
        if length <= 1:
            return
        delta = self.grid.config.q / length
        for cell in self.path:
            cell.add_pheromone(delta, channel)
            self.grid.register_active(cell)
