"""Pygame 2D visualization for the Ant System simulation.

Draws the latest Frame published by the engine: pheromone intensity on
touched cells, home, food, barriers and ants.  Mouse clicks place food
(left) or barriers (right) and inspect a cell (middle).  The simulation
steps at a configurable tick rate, 10 per second by default, while the
display refreshes at the Pygame frame rate.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

import numpy as np
import pygame

if TYPE_CHECKING:
    from antsystem.simulation.engine import SimulationEngine
    from antsystem.simulation.frames import CellFrame, Frame

from antsystem.colony.ant import Status
from antsystem.world.cell import CellType

# Colour palette
_BG = (30, 20, 10)
_HOME = (200, 60, 60)
_FOOD = (50, 200, 30)
_BARRIER = (90, 90, 90)

_ANT_COLOURS: dict[Status, tuple[int, int, int]] = {
    Status.SEEKING_FOOD: (220, 220, 220),
    Status.CARRYING_FOOD: (255, 200, 50),
}

# Pheromone colour (cyan glow)
_TRAIL_COLOUR = np.array([0, 180, 255], dtype=np.float64)

_LEFT, _MIDDLE, _RIGHT = 1, 2, 3


class PygameRenderer:
    """Renders a SimulationEngine's frames into a Pygame window.

    Attributes:
        engine: The simulation engine to visualise.
        cell_size: Pixel size of each grid cell.
        screen: The Pygame display surface.
    """

    _SPEED_STEPS: ClassVar[list[float]] = [1.0, 2.0, 5.0, 10.0, 20.0, 50.0, 100.0]

    def __init__(
        self,
        engine: SimulationEngine,
        cell_size: int = 20,
        ticks_per_second: float = 10.0,
    ) -> None:
        """Initialise the renderer and subscribe to the engine.

        Args:
            engine: The simulation engine to render.
            cell_size: Pixel width/height per grid cell.
            ticks_per_second: Simulation ticks per real-time second.
        """
        self.engine = engine
        self.cell_size = cell_size
        self.ticks_per_second = ticks_per_second
        self._speed_index = self._nearest_speed(ticks_per_second)
        self._tick_accumulator = 0.0
        self._frame: Frame | None = None
        self._landmarks: list[CellFrame] = engine.grid.landmarks()
        engine.add_listener(self._on_frame)

        w = engine.grid.width * cell_size
        h = engine.grid.height * cell_size
        self._panel_width = 220
        self._win_w = w + self._panel_width
        self._win_h = h

        pygame.init()
        self.screen = pygame.display.set_mode((self._win_w, self._win_h))
        pygame.display.set_caption("Ant System")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 14)
        self.running = True
        self.paused = False

    def _nearest_speed(self, tps: float) -> int:
        """Return the index of the closest speed preset."""
        diffs = [abs(s - tps) for s in self._SPEED_STEPS]
        return diffs.index(min(diffs))

    def _on_frame(self, frame: Frame) -> None:
        self._frame = frame
        self._landmarks = frame.landmarks

    def run(self, fps: int = 30) -> None:
        """Main loop: handle events, step sim, render.

        Args:
            fps: Target frames per second.
        """
        while self.running:
            dt = self.clock.tick(fps) / 1000.0
            self._handle_events()
            if not self.paused:
                self._tick_accumulator += self.ticks_per_second * dt
                steps = int(self._tick_accumulator)
                self._tick_accumulator -= steps
                for _ in range(steps):
                    self.engine.step()
            self._draw()

        pygame.quit()

    def _handle_events(self) -> None:
        """Process Pygame input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.MOUSEBUTTONDOWN:
                self._handle_click(event.pos, event.button)
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_SPACE:
                    self.paused = not self.paused
                elif event.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self._speed_index = min(
                        len(self._SPEED_STEPS) - 1,
                        self._speed_index + 1,
                    )
                    self.ticks_per_second = self._SPEED_STEPS[self._speed_index]
                elif event.key == pygame.K_MINUS:
                    self._speed_index = max(0, self._speed_index - 1)
                    self.ticks_per_second = self._SPEED_STEPS[self._speed_index]

    def _handle_click(self, pos: tuple[int, int], button: int) -> None:
        """Translate a click into a placement or inspection."""
        x, y = pos[0] // self.cell_size, pos[1] // self.cell_size
        if button == _LEFT:
            self.engine.place(x, y, CellType.FOOD)
        elif button == _RIGHT:
            self.engine.place(x, y, CellType.BARRIER)
        elif button == _MIDDLE:
            self.engine.grid.inspect(x, y)
        # placements show at once, even while paused
        self._landmarks = self.engine.grid.landmarks()

    def _draw(self) -> None:
        """Render one frame."""
        self.screen.fill(_BG)
        self._draw_pheromone()
        self._draw_fixed_cells()
        self._draw_ants()
        self._draw_info_panel()
        pygame.display.flip()

    def _draw_pheromone(self) -> None:
        """Draw normalised pheromone intensity as a translucent overlay."""
        if self._frame is None:
            return
        cs = self.cell_size
        overlay = pygame.Surface((self._win_w - self._panel_width, self._win_h), pygame.SRCALPHA)
        colour = _TRAIL_COLOUR.astype(int).tolist()
        for cell in self._frame.cells:
            if cell.type is CellType.NORMAL and cell.intensity > 0:
                alpha = int(cell.intensity * 255)
                pygame.draw.rect(overlay, (*colour, alpha), (cell.x * cs, cell.y * cs, cs, cs))
        self.screen.blit(overlay, (0, 0))

    def _draw_fixed_cells(self) -> None:
        """Draw home, food and barrier cells."""
        cs = self.cell_size
        colours = {CellType.HOME: _HOME, CellType.FOOD: _FOOD, CellType.BARRIER: _BARRIER}
        for cell in self._landmarks:
            colour = colours.get(cell.type)
            if colour is not None:
                pygame.draw.rect(self.screen, colour, (cell.x * cs, cell.y * cs, cs, cs))

    def _draw_ants(self) -> None:
        """Draw each ant as a small coloured dot."""
        if self._frame is None:
            return
        cs = self.cell_size
        radius = max(2, cs // 4)
        for ant in self._frame.ants:
            cx = ant.x * cs + cs // 2
            cy = ant.y * cs + cs // 2
            pygame.draw.circle(self.screen, _ANT_COLOURS[ant.status], (cx, cy), radius)

    def _draw_info_panel(self) -> None:
        """Draw a stats panel on the right side of the window."""
        panel_x = self.engine.grid.width * self.cell_size + 10
        y = 10
        stats = self.engine.summary()

        lines = [
            f"Tick: {stats['tick']}",
            f"Speed: {self.ticks_per_second:.1f} t/s",
            f"{'PAUSED' if self.paused else 'RUNNING'}",
            "",
            f"Ants: {stats['ants']}",
            f"Carrying: {stats['carrying']}",
            f"Food found: {stats['food_found']}",
            f"Round trips: {stats['round_trips']}",
            f"Abandoned: {stats['abandoned']}",
            "",
            "--- Controls ---",
            "L-click: food",
            "R-click: barrier",
            "M-click: inspect",
            "SPACE: pause",
            "+/-: speed",
            "ESC: quit",
        ]

        for line in lines:
            surf = self.font.render(line, True, (200, 200, 200))
            self.screen.blit(surf, (panel_x, y))
            y += 18
