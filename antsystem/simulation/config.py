"""Config — Ant System parameters, loadable from YAML files.

All tunable constants (grid size, AS exponents, evaporation and deposit
constants, population and path caps) live in YAML and are parsed into a
frozen dataclass here.  The Grid owns one instance for its whole life so
parameters cannot shift under a running simulation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

from antsystem.pheromones.fields import PheromoneChannel
from antsystem.simulation.errors import InvalidConfiguration

logger = logging.getLogger(__name__)

# rho is kept strictly inside (0, 1)
_RHO_FLOOR = 1e-6
_RHO_CEIL = 1.0 - 1e-6

_CHANNEL_NAMES: dict[str, PheromoneChannel] = {
    "food": PheromoneChannel.FOOD,
    "home": PheromoneChannel.HOME,
}


@dataclass(frozen=True)
class SimulationConfig:
    """Immutable parameter bundle for one simulation.

    Attributes:
        width: Drawing-area width in pixels.
        height: Drawing-area height in pixels.
        cell_spacing: Pixel size of a cell; the grid has
            ``width // cell_spacing`` columns and
            ``height // cell_spacing`` rows.
        alpha: Pheromone importance exponent (>= 0).
        beta: Heuristic importance exponent (>= 0).
        rho: Evaporation rate, strictly inside (0, 1).
        q: Deposit constant; a completed leg of length L adds ``q / L``.
        tau0: Base pheromone added to every candidate's trail value.
        ant_count: Target population size.
        min_max_path_length: Lower bound of the per-ant path cap.
        max_max_path_length: Upper bound of the per-ant path cap.
        steps_per_tick: Ant sub-steps per tick before evaporation.
        display_channel: Which pheromone the renderer is fed.
        seed: RNG seed used when no generator is injected.
    """

    width: int = 800
    height: int = 600
    cell_spacing: int = 20
    alpha: float = 1.0
    beta: float = 2.0
    rho: float = 0.02
    q: float = 100.0
    tau0: float = 0.01
    ant_count: int = 50
    min_max_path_length: int = 1500
    max_max_path_length: int = 2000
    steps_per_tick: int = 5
    display_channel: PheromoneChannel = PheromoneChannel.FOOD
    seed: int = 42

    def __post_init__(self) -> None:
        """Validate ranges and clamp rho into the open unit interval."""
        for name in ("alpha", "beta", "q", "tau0"):
            value = getattr(self, name)
            if value < 0:
                msg = f"{name} must be >= 0, got {value}"
                raise InvalidConfiguration(msg)

        if self.width <= 0 or self.height <= 0 or self.cell_spacing <= 0:
            msg = (
                "width, height and cell_spacing must be positive, got "
                f"{self.width}x{self.height} @ {self.cell_spacing}"
            )
            raise InvalidConfiguration(msg)
        if self.columns < 1 or self.rows < 1:
            msg = (
                f"a {self.width}x{self.height} area at spacing "
                f"{self.cell_spacing} holds no cells"
            )
            raise InvalidConfiguration(msg)

        if self.ant_count < 0:
            msg = f"ant_count must be >= 0, got {self.ant_count}"
            raise InvalidConfiguration(msg)
        if self.steps_per_tick < 1:
            msg = f"steps_per_tick must be >= 1, got {self.steps_per_tick}"
            raise InvalidConfiguration(msg)
        if self.min_max_path_length < 1:
            msg = (
                "min_max_path_length must be >= 1, got "
                f"{self.min_max_path_length}"
            )
            raise InvalidConfiguration(msg)
        if self.min_max_path_length > self.max_max_path_length:
            msg = (
                f"path length bounds are inverted: {self.min_max_path_length}"
                f" > {self.max_max_path_length}"
            )
            raise InvalidConfiguration(msg)

        if not isinstance(self.display_channel, PheromoneChannel):
            msg = f"unknown display channel {self.display_channel!r}"
            raise InvalidConfiguration(msg)

        if not _RHO_FLOOR <= self.rho <= _RHO_CEIL:
            clamped = min(max(self.rho, _RHO_FLOOR), _RHO_CEIL)
            logger.warning("rho=%s outside (0, 1); clamped to %s", self.rho, clamped)
            object.__setattr__(self, "rho", clamped)

    @property
    def columns(self) -> int:
        """Number of grid columns."""
        return self.width // self.cell_spacing

    @property
    def rows(self) -> int:
        """Number of grid rows."""
        return self.height // self.cell_spacing

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A validated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            InvalidConfiguration: If a value is out of range.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        channel_name = str(data.get("display_channel", "food")).lower()
        if channel_name not in _CHANNEL_NAMES:
            msg = f"display_channel must be 'food' or 'home', got {channel_name!r}"
            raise InvalidConfiguration(msg)

        return cls(
            width=data.get("width", cls.width),
            height=data.get("height", cls.height),
            cell_spacing=data.get("cell_spacing", cls.cell_spacing),
            alpha=data.get("alpha", cls.alpha),
            beta=data.get("beta", cls.beta),
            rho=data.get("rho", cls.rho),
            q=data.get("q", cls.q),
            tau0=data.get("tau0", cls.tau0),
            ant_count=data.get("ant_count", cls.ant_count),
            min_max_path_length=data.get(
                "min_max_path_length",
                cls.min_max_path_length,
            ),
            max_max_path_length=data.get(
                "max_max_path_length",
                cls.max_max_path_length,
            ),
            steps_per_tick=data.get("steps_per_tick", cls.steps_per_tick),
            display_channel=_CHANNEL_NAMES[channel_name],
            seed=data.get("seed", cls.seed),
        )
