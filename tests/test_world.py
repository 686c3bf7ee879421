"""Tests for antsystem.world.cell and antsystem.world.grid."""

import math
from dataclasses import replace

import pytest
from numpy.random import Generator

from antsystem.pheromones.fields import SENTINEL, PheromoneChannel
from antsystem.simulation.config import SimulationConfig
from antsystem.world.cell import Cell, CellType
from antsystem.world.grid import MOVES, Grid


class TestCell:
    """Tests for the Cell dataclass."""

    def test_default_values(self) -> None:
        cell = Cell(x=0, y=0)
        assert cell.type is CellType.NORMAL
        assert cell.food_pheromone == 0.0
        assert cell.home_pheromone == 0.0

    def test_identity_equality(self) -> None:
        assert Cell(x=1, y=1) != Cell(x=1, y=1)

    def test_add_pheromone_per_channel(self) -> None:
        cell = Cell(x=0, y=0)
        cell.add_pheromone(2.5, PheromoneChannel.FOOD)
        cell.add_pheromone(1.0, PheromoneChannel.HOME)
        cell.add_pheromone(0.5, PheromoneChannel.FOOD)
        assert cell.get_pheromone(PheromoneChannel.FOOD) == 3.0
        assert cell.get_pheromone(PheromoneChannel.HOME) == 1.0

    @pytest.mark.parametrize("cell_type", [CellType.FOOD, CellType.BARRIER])
    def test_add_pheromone_ignored_off_normal(self, cell_type: CellType) -> None:
        cell = Cell(x=0, y=0)
        cell.change_type(cell_type)
        before = (cell.food_pheromone, cell.home_pheromone)
        cell.add_pheromone(10.0, PheromoneChannel.FOOD)
        cell.add_pheromone(10.0, PheromoneChannel.HOME)
        assert (cell.food_pheromone, cell.home_pheromone) == before

    def test_home_cell_invariant(self) -> None:
        home = Cell.home(3, 4)
        assert home.type is CellType.HOME
        assert home.home_pheromone == SENTINEL
        assert home.food_pheromone == 0.0
        home.add_pheromone(5.0, PheromoneChannel.FOOD)
        home.evaporate(0.5)
        assert home.food_pheromone == 0.0
        assert home.home_pheromone == SENTINEL

    def test_evaporate_multiplies_both_channels(self) -> None:
        cell = Cell(x=0, y=0, food_pheromone=10.0, home_pheromone=4.0)
        cell.evaporate(0.1)
        assert cell.food_pheromone == pytest.approx(9.0)
        assert cell.home_pheromone == pytest.approx(3.6)

    def test_evaporation_monotone_until_clamped(self) -> None:
        cell = Cell(x=0, y=0, food_pheromone=1.0)
        previous = cell.food_pheromone
        last_positive = previous
        for _ in range(200):
            cell.evaporate(0.5)
            value = cell.food_pheromone
            if value == 0.0:
                break
            assert value < previous
            previous = last_positive = value
        assert cell.food_pheromone == 0.0
        assert last_positive >= 1e-10

    def test_evaporate_clamps_residue(self) -> None:
        cell = Cell(x=0, y=0, food_pheromone=1.5e-10, home_pheromone=1e-3)
        cell.evaporate(0.5)
        assert cell.food_pheromone == 0.0
        assert cell.home_pheromone > 0.0

    def test_change_to_food(self) -> None:
        cell = Cell(x=0, y=0, food_pheromone=3.0, home_pheromone=2.0)
        cell.change_type(CellType.FOOD)
        assert cell.type is CellType.FOOD
        assert cell.food_pheromone == SENTINEL
        assert cell.home_pheromone == 0.0

    def test_change_to_barrier(self) -> None:
        cell = Cell(x=0, y=0, food_pheromone=3.0, home_pheromone=2.0)
        cell.change_type(CellType.BARRIER)
        assert cell.food_pheromone == 0.0
        assert cell.home_pheromone == 0.0

    def test_clearing_food_drops_sentinel(self) -> None:
        cell = Cell(x=0, y=0)
        cell.change_type(CellType.FOOD)
        cell.change_type(CellType.NORMAL)
        assert cell.food_pheromone == 0.0
        assert not math.isinf(cell.food_pheromone)

    def test_neighbour_in_and_out_of_bounds(self, small_grid: Grid) -> None:
        corner = small_grid.cell_at(0, 0)
        assert corner is not None
        assert corner.neighbour((1, 1), small_grid) is small_grid.cell_at(1, 1)
        assert corner.neighbour((1, 0), small_grid, steps=3) is small_grid.cell_at(3, 0)
        assert corner.neighbour((-1, 0), small_grid) is None
        assert corner.neighbour((0, 1), small_grid, steps=5) is None

    def test_neighbour_returns_barriers(self, small_grid: Grid) -> None:
        small_grid.set_cell_type(1, 0, CellType.BARRIER)
        corner = small_grid.cell_at(0, 0)
        assert corner is not None
        target = corner.neighbour((1, 0), small_grid)
        assert target is not None
        assert target.type is CellType.BARRIER


class TestGrid:
    """Tests for the Grid container."""

    def test_dimensions(self, small_grid: Grid) -> None:
        assert small_grid.width == 5
        assert small_grid.height == 5
        assert len(small_grid.cells) == 5
        assert len(small_grid.cells[0]) == 5

    def test_dimensions_floor_spacing(self, small_config: SimulationConfig) -> None:
        grid = Grid(config=replace(small_config, width=105, height=59, cell_spacing=20))
        assert (grid.width, grid.height) == (5, 2)

    def test_single_home_at_centre(self, small_grid: Grid) -> None:
        homes = [c for row in small_grid.cells for c in row if c.type is CellType.HOME]
        assert homes == [small_grid.home_cell]
        assert (small_grid.home_cell.x, small_grid.home_cell.y) == (2, 2)
        assert small_grid.cell_at(2, 2) is small_grid.home_cell

    def test_cell_at_valid(self, small_grid: Grid) -> None:
        cell = small_grid.cell_at(3, 1)
        assert cell is not None
        assert (cell.x, cell.y) == (3, 1)

    @pytest.mark.parametrize(("x", "y"), [(5, 0), (0, 5), (-1, 2), (2, -1)])
    def test_cell_at_out_of_bounds(self, small_grid: Grid, x: int, y: int) -> None:
        assert small_grid.cell_at(x, y) is None

    def test_move_table_is_eight_connected(self) -> None:
        assert len(MOVES) == 8
        assert len(set(MOVES)) == 8
        assert (0, 0) not in MOVES
        assert all(max(abs(dx), abs(dy)) == 1 for dx, dy in MOVES)

    def test_moves_from_corner(self, small_grid: Grid) -> None:
        corner = small_grid.cell_at(0, 0)
        assert corner is not None
        assert len(small_grid.moves_from(corner)) == 3

    def test_moves_from_centre(self, small_grid: Grid) -> None:
        assert len(small_grid.moves_from(small_grid.home_cell)) == 8

    def test_moves_skip_barriers(self, small_grid: Grid) -> None:
        small_grid.set_cell_type(1, 1, CellType.BARRIER)
        small_grid.set_cell_type(3, 3, CellType.BARRIER)
        moves = small_grid.moves_from(small_grid.home_cell)
        assert len(moves) == 6
        assert all(c.type is not CellType.BARRIER for c in moves)

    def test_distance_to_home(self, small_grid: Grid) -> None:
        assert small_grid.distance_to_home(small_grid.home_cell) == 0.0
        corner = small_grid.cell_at(0, 0)
        assert corner is not None
        assert small_grid.distance_to_home(corner) == pytest.approx(math.sqrt(8))

    def test_register_active_deduplicates(self, small_grid: Grid) -> None:
        a = small_grid.cell_at(0, 0)
        b = small_grid.cell_at(1, 0)
        c = small_grid.cell_at(2, 0)
        for cell in (a, b, c, a):
            assert cell is not None
            small_grid.register_active(cell)
        assert small_grid.active_cells == [b, c, a]

    def test_set_cell_type(self, small_grid: Grid) -> None:
        assert small_grid.set_cell_type(0, 0, CellType.FOOD)
        cell = small_grid.cell_at(0, 0)
        assert cell is not None
        assert cell.type is CellType.FOOD

    def test_set_cell_type_rejects_home_changes(self, small_grid: Grid) -> None:
        assert not small_grid.set_cell_type(2, 2, CellType.BARRIER)
        assert not small_grid.set_cell_type(0, 0, CellType.HOME)
        assert not small_grid.set_cell_type(9, 9, CellType.FOOD)
        assert small_grid.home_cell.type is CellType.HOME
        cell = small_grid.cell_at(0, 0)
        assert cell is not None
        assert cell.type is CellType.NORMAL

    def test_landmarks_track_placements(self, small_grid: Grid) -> None:
        def placed() -> list[tuple[int, int, CellType]]:
            return [(c.x, c.y, c.type) for c in small_grid.landmarks()]

        assert placed() == [(2, 2, CellType.HOME)]
        small_grid.set_cell_type(0, 0, CellType.FOOD)
        small_grid.set_cell_type(4, 1, CellType.BARRIER)
        assert placed() == [
            (2, 2, CellType.HOME),
            (0, 0, CellType.FOOD),
            (4, 1, CellType.BARRIER),
        ]
        small_grid.set_cell_type(0, 0, CellType.NORMAL)
        assert placed() == [(2, 2, CellType.HOME), (4, 1, CellType.BARRIER)]
        # retyping an existing landmark keeps one entry
        small_grid.set_cell_type(4, 1, CellType.FOOD)
        assert placed() == [(2, 2, CellType.HOME), (4, 1, CellType.FOOD)]

    def test_single_step_tick_moves_each_ant_once(
        self,
        small_config: SimulationConfig,
        rng: Generator,
    ) -> None:
        grid = Grid(config=replace(small_config, ant_count=3, steps_per_tick=5), rng=rng)
        frame = grid.tick(1)
        assert len(grid.colony.ants) == 3
        assert [len(ant.path) for ant in grid.colony.ants] == [2, 2, 2]
        assert all(ant.path[0] is grid.home_cell for ant in grid.colony.ants)
        assert frame.tick == 1

    def test_inspect(self, small_grid: Grid) -> None:
        cell = small_grid.cell_at(1, 1)
        assert cell is not None
        cell.add_pheromone(2.0, PheromoneChannel.FOOD)
        assert small_grid.inspect(1, 1) == (2.0, 0.0)
        assert small_grid.inspect(-1, 0) is None
