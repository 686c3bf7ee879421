"""Colony — the ant population sharing one home cell.

Ants are created lazily: each tick the colony is topped up to the
configured count before anyone moves.  Nobody is ever removed, so the
order of ``ants`` (creation order) is the fixed order in which they
move every sub-step.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from antsystem.colony.ant import Ant, Status
from antsystem.simulation.frames import AntFrame

if TYPE_CHECKING:
    from antsystem.world.grid import Grid


@dataclass
class Colony:
    """All ants foraging from one home.

    Attributes:
        ants: Population in creation order.
    """

    ants: list[Ant] = field(default_factory=list)

    def spawn_ant(self, grid: Grid) -> Ant:
        """Create a new ant at home.

        Args:
            grid: The grid the ant will walk on.

        Returns:
            The newly created Ant (also appended to ``self.ants``).
        """
        ant = Ant(grid=grid)
        self.ants.append(ant)
        return ant

    def top_up(self, grid: Grid, count: int) -> int:
        """Spawn ants until the population reaches ``count``.

        Returns:
            Number of ants created.
        """
        created = 0
        while len(self.ants) < count:
            self.spawn_ant(grid)
            created += 1
        return created

    @property
    def food_found(self) -> int:
        """Legs completed from home to food, over all ants."""
        return sum(ant.food_found for ant in self.ants)

    @property
    def round_trips(self) -> int:
        """Legs completed from food back home, over all ants."""
        return sum(ant.round_trips for ant in self.ants)

    @property
    def abandoned(self) -> int:
        """Trips discarded without a deposit, over all ants."""
        return sum(ant.abandoned for ant in self.ants)

    @property
    def carrying(self) -> int:
        """Ants currently on their way home with food."""
        return sum(1 for ant in self.ants if ant.status is Status.CARRYING_FOOD)

    def snapshot(self) -> list[AntFrame]:
        """Position and status of every ant, in move order."""
        return [
            AntFrame(x=ant.position.x, y=ant.position.y, status=ant.status)
            for ant in self.ants
        ]
