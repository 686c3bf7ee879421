"""Pheromone channels and the constants shared by every cell.

Each cell carries two independent scalar trails.  Ants that reach food
lay the FOOD channel along the path they walked so searching ants can
follow it outward; ants that reach home lay the HOME channel so loaded
ants can follow it back.
"""

from __future__ import annotations

import math
from enum import Enum

# Saturating value held by the endpoint cells: FOOD cells on the food
# channel, the HOME cell on the home channel.
SENTINEL = math.inf

# Evaporated values below this snap to exactly zero.
EVAPORATION_FLOOR = 1e-10


class PheromoneChannel(Enum):
    """The two trail fields stored on every cell."""

    FOOD = "food"
    HOME = "home"
