"""
Desktop window for DOWNHILL using pygame.

Turns keyboard presses into KEY_DOWN events, ticks the frame loop and
shows the game canvas scaled up, with optional debug and log overlays.
"""

import asyncio
import logging
from dataclasses import dataclass

import pygame

from downhill.core.constants import Key
from downhill.core.events import Event, EventBus, EventType, key_down_event, tick_event
from downhill.core.game import Game
from downhill.settings import DisplaySettings

logger = logging.getLogger(__name__)


# pygame key -> logical game key
KEY_BINDINGS: dict[int, Key] = {
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_UP: Key.UP,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_SPACE: Key.JUMP,
    pygame.K_p: Key.PAUSE,
    pygame.K_r: Key.RESET,
}


@dataclass
class WindowConfig:
    """Simulator window configuration."""
    width: int = 480
    height: int = 360
    scale: int = 2
    title: str = "DOWNHILL"
    fps: int = 60

    # Colors
    panel_color: tuple[int, int, int] = (20, 20, 30)
    text_color: tuple[int, int, int] = (200, 200, 220)

    @classmethod
    def from_settings(cls, display: DisplaySettings) -> "WindowConfig":
        return cls(
            width=display.width,
            height=display.height,
            scale=display.scale,
            title=display.title,
            fps=display.fps,
        )

    @property
    def window_size(self) -> tuple[int, int]:
        return self.width * self.scale, self.height * self.scale


class SimulatorLogHandler(logging.Handler):
    """Keeps the most recent log lines for the log overlay."""

    def __init__(self, max_lines: int = 20) -> None:
        super().__init__()
        self.max_lines = max_lines
        self.lines: list[str] = []
        self.setFormatter(logging.Formatter("%(levelname).1s %(name)s: %(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        self.lines.append(self.format(record))
        # Keep buffer size limited
        if len(self.lines) > self.max_lines * 2:
            self.lines = self.lines[-self.max_lines:]


class SimulatorWindow:
    """
    Window hosting a Game.

    Keyboard Mapping:
        ARROWS: Steer / climb
        SPACE: Jump
        P: Pause / resume
        R: Reset
        D: Toggle debug overlay
        L: Toggle log overlay
        ESC / Q: Exit
    """

    def __init__(self, game: Game, config: WindowConfig | None = None) -> None:
        self.game = game
        self.config = config or WindowConfig()
        self.event_bus: EventBus = game.event_bus

        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._running = False
        self._frame_count = 0
        self._show_debug = False
        self._show_log = False

        self._log_handler = SimulatorLogHandler()
        logging.getLogger().addHandler(self._log_handler)

        logger.info("SimulatorWindow created")

    @property
    def running(self) -> bool:
        return self._running

    @property
    def frame_count(self) -> int:
        return self._frame_count

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        self._screen = pygame.display.set_mode(self.config.window_size, pygame.DOUBLEBUF)
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(None, 18)

        logger.info(f"Pygame initialized: {self.config.window_size[0]}x{self.config.window_size[1]}")

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event.key)

    def _handle_keydown(self, key: int) -> None:
        """Handle key press."""
        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._running = False
        elif key == pygame.K_d:
            self._show_debug = not self._show_debug
        elif key == pygame.K_l:
            self._show_log = not self._show_log
        elif key in KEY_BINDINGS:
            # Dispatched at the next frame boundary
            self.event_bus.queue_event(key_down_event(KEY_BINDINGS[key].value))

    def _render(self) -> None:
        """Blit the game canvas and overlays."""
        if not self._screen:
            return

        surface = pygame.surfarray.make_surface(self.game.canvas.buffer.swapaxes(0, 1))
        scaled = pygame.transform.scale(surface, self.config.window_size)
        self._screen.blit(scaled, (0, 0))

        if self._show_debug:
            self._render_lines(self._debug_lines(), top=True)
        if self._show_log:
            self._render_lines(self._log_handler.lines[-self._log_handler.max_lines:], top=False)

        pygame.display.flip()

    def _debug_lines(self) -> list[str]:
        skier = self.game.skier
        return [
            f"FPS: {self._clock.get_fps():.1f}" if self._clock else "FPS: --",
            f"Frame: {self._frame_count}",
            f"Mode: {self.game.mode.name}",
            f"Skier: {skier.state.name} {skier.direction.name} speed {skier.speed}",
            f"Position: {skier.position.x:.0f}, {skier.position.y:.0f}",
            f"Rhino: {self.game.rhino.state.name}",
            f"Obstacles: {len(self.game.obstacle_manager.obstacles)}",
        ]

    def _render_lines(self, lines: list[str], top: bool) -> None:
        if not self._screen or not self._font or not lines:
            return

        line_height = 16
        width, height = self.config.window_size
        panel_height = line_height * len(lines) + 8
        y = 0 if top else height - panel_height

        panel = pygame.Surface((width, panel_height), pygame.SRCALPHA)
        panel.fill((*self.config.panel_color, 200))
        self._screen.blit(panel, (0, y))

        for line in lines:
            text_surface = self._font.render(line, True, self.config.text_color)
            self._screen.blit(text_surface, (6, y + 4))
            y += line_height

    async def run(self) -> None:
        """Main simulator loop."""
        self._init_pygame()
        self._running = True

        logger.info("Simulator started")

        while self._running:
            self._handle_events()

            # Input first, so keys land between frames
            await self.event_bus.process_queue()

            # Tick drives the game's frame queue
            if self._clock:
                delta = self._clock.get_time() / 1000.0
                self.event_bus.emit(tick_event(delta, self._frame_count))

            self._render()

            if self._clock:
                self._clock.tick(self.config.fps)

            self._frame_count += 1

            # Yield to other tasks
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        self.event_bus.emit(Event(EventType.SHUTDOWN, source="window"))
        logging.getLogger().removeHandler(self._log_handler)
        pygame.quit()
        logger.info("Simulator stopped")

    def stop(self) -> None:
        """Stop the simulator."""
        self._running = False
