"""Evaporation and display normalisation over the active cells.

Only cells an ant has touched can hold pheromone above zero, so the
pass runs over the Grid's active set rather than the whole matrix.
Kept apart from ``Grid`` so the normalisation rule can be tested on
plain cell lists.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from antsystem.simulation.frames import CellFrame
from antsystem.world.cell import CellType

if TYPE_CHECKING:
    from antsystem.pheromones.fields import PheromoneChannel
    from antsystem.world.cell import Cell


def evaporate_cells(
    cells: Iterable[Cell],
    rho: float,
    channel: PheromoneChannel,
) -> float:
    """Evaporate every cell and return the peak of ``channel``.

    Only NORMAL cells contribute to the peak; endpoint sentinels would
    otherwise flatten every trail to zero intensity.

    Args:
        cells: Cells to evaporate, in active-set order.
        rho: Evaporation rate in (0, 1).
        channel: The channel the renderer displays.

    Returns:
        The largest post-evaporation value among NORMAL cells (0.0 if
        there are none).
    """
    peak = 0.0
    for cell in cells:
        cell.evaporate(rho)
        if cell.type is CellType.NORMAL:
            value = cell.get_pheromone(channel)
            if value > peak:
                peak = value
    return peak


def intensity(value: float, peak: float) -> float:
    """Map a pheromone value to a display intensity in [0, 1].

    ``max(peak, 1)`` keeps the divisor positive before any trail exists.
    """
    scaled = value / max(peak, 1.0)
    return min(max(scaled, 0.0), 1.0)


def render_cells(
    cells: Iterable[Cell],
    peak: float,
    channel: PheromoneChannel,
) -> list[CellFrame]:
    """Build one CellFrame per cell, normalised against ``peak``."""
    return [
        CellFrame(
            x=cell.x,
            y=cell.y,
            type=cell.type,
            intensity=intensity(cell.get_pheromone(channel), peak),
        )
        for cell in cells
    ]
