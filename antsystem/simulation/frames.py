"""Plain render data handed from the core to whatever draws it.

The core never touches a window.  Once per tick it produces a ``Frame``
describing the active cells and every ant, and listeners decide what to
do with it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from antsystem.colony.ant import Status
    from antsystem.world.cell import CellType


@dataclass(frozen=True)
class CellFrame:
    """Display state of one active cell.

    Attributes:
        x: Column index.
        y: Row index.
        type: Cell type at render time.
        intensity: Displayed pheromone, normalised to [0, 1].
    """

    x: int
    y: int
    type: CellType
    intensity: float


@dataclass(frozen=True)
class AntFrame:
    """Display state of one ant."""

    x: int
    y: int
    status: Status


@dataclass(frozen=True)
class Frame:
    """Everything a renderer needs for one tick.

    Attributes:
        tick: Ticks completed, this one included.
        cells: Active cells with their pheromone intensity.
        ants: Every ant, in move order.
        landmarks: Home, food and barrier cells.
    """

    tick: int
    cells: list[CellFrame] = field(default_factory=list)
    ants: list[AntFrame] = field(default_factory=list)
    landmarks: list[CellFrame] = field(default_factory=list)
