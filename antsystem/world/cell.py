"""Cell — a single tile in the grid.

Each cell has a type tag and two pheromone scalars.  Pheromone is only
ever changed on NORMAL cells; HOME and FOOD cells hold a saturating
sentinel on their own channel and zero on the other, and BARRIER cells
hold nothing and are never entered.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from antsystem.pheromones.fields import (
    EVAPORATION_FLOOR,
    SENTINEL,
    PheromoneChannel,
)

if TYPE_CHECKING:
    from antsystem.world.grid import Grid


class CellType(Enum):
    """What occupies a grid location."""

    NORMAL = "normal"
    HOME = "home"
    FOOD = "food"
    BARRIER = "barrier"


@dataclass(eq=False)
class Cell:
    """A single tile in the grid.

    Cells compare and hash by identity: an ant's path is a sequence of
    cell references, and the tabu check asks "is this the same cell".

    Attributes:
        x: Column position.
        y: Row position.
        type: What occupies this location.
        food_pheromone: Trail leading toward food.
        home_pheromone: Trail leading toward home.
    """

    x: int
    y: int
    type: CellType = CellType.NORMAL
    food_pheromone: float = 0.0
    home_pheromone: float = 0.0

    @classmethod
    def home(cls, x: int, y: int) -> Cell:
        """Create the home cell at ``(x, y)``."""
        return cls(
            x=x,
            y=y,
            type=CellType.HOME,
            food_pheromone=0.0,
            home_pheromone=SENTINEL,
        )

    def get_pheromone(self, channel: PheromoneChannel) -> float:
        """Return the concentration on ``channel``."""
        if channel is PheromoneChannel.FOOD:
            return self.food_pheromone
        return self.home_pheromone

    def add_pheromone(self, amount: float, channel: PheromoneChannel) -> None:
        """Deposit ``amount`` on ``channel``; no-op unless NORMAL.

        Args:
            amount: Quantity to add (Q / L for an ant-cycle deposit).
            channel: Which trail to reinforce.
        """
        if self.type is not CellType.NORMAL:
            return
        if channel is PheromoneChannel.FOOD:
            self.food_pheromone += amount
        else:
            self.home_pheromone += amount

    def evaporate(self, rho: float) -> None:
        """Apply ``tau <- (1 - rho) * tau`` to both channels.

        Values that drop below ``EVAPORATION_FLOOR`` become exactly 0 so
        float residue never lingers on abandoned trails.

        Args:
            rho: Evaporation rate in (0, 1).
        """
        if self.type is not CellType.NORMAL:
            return
        keep = 1.0 - rho
        self.food_pheromone *= keep
        self.home_pheromone *= keep
        if self.food_pheromone < EVAPORATION_FLOOR:
            self.food_pheromone = 0.0
        if self.home_pheromone < EVAPORATION_FLOOR:
            self.home_pheromone = 0.0

    def change_type(self, new_type: CellType) -> None:
        """Switch this cell's type, restoring the type's pheromone invariant.

        Args:
            new_type: The type to switch to.
        """
        self.type = new_type
        if new_type is CellType.BARRIER:
            self.food_pheromone = 0.0
            self.home_pheromone = 0.0
        elif new_type is CellType.FOOD:
            self.food_pheromone = SENTINEL
            self.home_pheromone = 0.0
        elif new_type is CellType.NORMAL:
            # a cleared FOOD cell must not keep its sentinel
            self.food_pheromone = 0.0
            self.home_pheromone = 0.0

    def neighbour(
        self,
        offset: tuple[int, int],
        grid: Grid,
        steps: int = 1,
    ) -> Cell | None:
        """Return the cell ``steps`` moves along ``offset``, or None off-grid.

        Barriers are returned like any other cell; callers filter them.
        """
        dx, dy = offset
        return grid.cell_at(self.x + dx * steps, self.y + dy * steps)
