"""
The main game: owns the world, runs the frame loop and routes input.

Each frame the game window is recentered on the skier, obstacles are
placed in newly revealed ground, the skier and then the rhino are
updated, the score is counted and everything is drawn. The loop never
re-arms itself while paused or once the skier is dead; resuming or
resetting asks the scheduler for a frame.
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional

from downhill.assets.images import ImageManager
from downhill.assets.sprites import make_sprite_loader
from downhill.core.clock import Clock, FrameQueue, FrameScheduler, SystemClock
from downhill.core.constants import IMAGES, Key
from downhill.core.events import Event, EventBus, EventType
from downhill.core.geometry import Rect
from downhill.core.state import GameMode, StateMachine
from downhill.entities.obstacles import ObstacleManager
from downhill.entities.rhino import Rhino
from downhill.entities.skier import Skier, SkierState
from downhill.exceptions import DownhillError
from downhill.graphics.canvas import Canvas
from downhill.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# Screen coordinates of the instructions and score
GAME_METADATA_X = 10
RESET_TEXT_Y = 10
PAUSE_TEXT_Y = 24
SCORE_TEXT_Y = 38

RESET_TEXT = "PRESS R TO RESET"
PAUSE_TEXT = "PRESS P TO PAUSE"

# Pause icon, slightly below center so it doesn't hide the skier
PAUSE_ICON_OFFSET = 15
PAUSE_ICON_WIDTH = 20
PAUSE_ICON_HEIGHT = 40

SKIER_START_X = 0
SKIER_START_Y = 0
RHINO_START_X = -500
RHINO_START_Y = -2000


@dataclass
class World:
    """Everything that a reset throws away."""

    skier: Skier
    rhino: Rhino
    obstacle_manager: ObstacleManager
    game_window: Rect
    score: int = 0
    game_time: float = 0.0
    game_over: bool = False


class Game:
    """
    Runs the frame loop over a World.

    Time comes from the injected clock and every frame is requested from
    the injected scheduler, so a host (or a test) decides when frames
    happen. Keys arrive as KEY_DOWN events on the event bus and are
    dispatched between frames.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        clock: Optional[Clock] = None,
        scheduler: Optional[FrameScheduler] = None,
        event_bus: Optional[EventBus] = None,
        image_manager: Optional[ImageManager] = None,
        canvas: Optional[Canvas] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.clock = clock or SystemClock()
        self.scheduler = scheduler or FrameQueue()
        self.event_bus = event_bus or EventBus()

        display = self.settings.display
        self.canvas = canvas or Canvas(display.width, display.height)
        self.image_manager = image_manager or ImageManager(
            make_sprite_loader(self.settings.sprites_path)
        )
        self.rng = rng or random.Random(self.settings.gameplay.seed)

        self.state_machine = StateMachine(GameMode.PLAYING)
        self.state_machine.add_listener(self._on_mode_changed)

        self._loaded = False
        self._frame_pending = False

        self.world = self.create_world()
        self._last_skier_state = self.world.skier.state

        self.event_bus.subscribe(EventType.KEY_DOWN, self._on_key_down)

    # World
    def create_world(self) -> World:
        """Build a fresh world with the skier at the top of the slope."""
        gameplay = self.settings.gameplay

        obstacle_manager = ObstacleManager(
            self.image_manager,
            self.canvas,
            rng=self.rng,
            width=self.canvas.width,
            height=self.canvas.height,
            placement_chance=gameplay.obstacle_chance,
            placement_chance_step=gameplay.obstacle_chance_step,
            max_placement_chance=gameplay.obstacle_chance_max,
        )
        skier = Skier(
            SKIER_START_X,
            SKIER_START_Y,
            self.image_manager,
            obstacle_manager,
            self.canvas,
            starting_speed=gameplay.starting_speed,
            diagonal_speed_reducer=gameplay.diagonal_speed_reducer,
            speed_increase_threshold=gameplay.speed_increase_threshold,
            animation_frame_ms=gameplay.animation_frame_ms,
        )
        rhino = Rhino(
            RHINO_START_X,
            RHINO_START_Y,
            self.image_manager,
            self.canvas,
            start_score=gameplay.rhino_start_score,
            starting_speed=gameplay.rhino_starting_speed,
            speed_per_score=gameplay.rhino_speed_per_score,
            max_speed=gameplay.rhino_max_speed,
            animation_frame_ms=gameplay.animation_frame_ms,
        )

        world = World(
            skier=skier,
            rhino=rhino,
            obstacle_manager=obstacle_manager,
            game_window=self.calculate_game_window(skier),
            game_time=self.clock.now(),
        )
        obstacle_manager.place_initial_obstacles()
        return world

    @property
    def skier(self) -> Skier:
        return self.world.skier

    @property
    def rhino(self) -> Rhino:
        return self.world.rhino

    @property
    def obstacle_manager(self) -> ObstacleManager:
        return self.world.obstacle_manager

    @property
    def score(self) -> int:
        return self.world.score

    @property
    def game_window(self) -> Rect:
        return self.world.game_window

    @property
    def mode(self) -> GameMode:
        return self.state_machine.state

    def is_playing(self) -> bool:
        return self.state_machine.state == GameMode.PLAYING

    def is_paused(self) -> bool:
        return self.state_machine.state == GameMode.PAUSED

    # Lifecycle
    async def load(self) -> None:
        """Load every sprite. The game can't start until this has finished."""
        await self.image_manager.load_images(IMAGES)
        self._loaded = True
        logger.info("Game assets loaded")

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def start(self) -> None:
        """Request the first frame."""
        if not self._loaded:
            raise DownhillError("Game assets must be loaded before starting")

        logger.info("Game started")
        self.event_bus.emit(Event(EventType.GAME_STARTED, source="game"))
        self.request_next_frame()

    def pause_or_resume(self) -> None:
        """Pause a running game, or resume a paused one on the next frame."""
        if self.is_playing():
            self.state_machine.transition(GameMode.PAUSED)
        elif self.is_paused():
            self.state_machine.transition(GameMode.PLAYING)
            self.request_next_frame()

    def reset(self) -> None:
        """Throw the world away and start over, playing."""
        logger.info(f"Resetting game at score {self.world.score}")
        self.world = self.create_world()
        self._last_skier_state = self.world.skier.state
        self.state_machine.reset(notify=False)

        self.event_bus.emit(Event(EventType.GAME_RESET, source="game"))
        if self._loaded:
            self.request_next_frame()

    def request_next_frame(self) -> None:
        """Ask the scheduler for a frame unless one is already on its way."""
        if self._frame_pending:
            return
        self._frame_pending = True
        self.scheduler.request_frame(self.run)

    # Input
    def handle_input(self, input_key: Key | str) -> bool:
        """Handle the game's own keys: pause and reset."""
        if input_key == Key.PAUSE:
            self.pause_or_resume()
        elif input_key == Key.RESET:
            self.reset()
        else:
            return False

        return True

    def handle_key_down(self, input_key: Key | str) -> bool:
        """
        Offer a key to the game, then to the skier if playing.

        Returns:
            True if either of them handled it
        """
        handled_by_game = self.handle_input(input_key)
        handled_by_skier = self.is_playing() and self.world.skier.handle_input(input_key)

        if handled_by_skier:
            self._publish_skier_state()

        if not (handled_by_game or handled_by_skier):
            logger.debug(f"Unhandled key: {input_key}")

        return handled_by_game or handled_by_skier

    def _on_key_down(self, event: Event) -> None:
        key = event.data.get("key")
        if key is None:
            return
        self.handle_key_down(key)

    # Frame loop
    def run(self) -> None:
        """
        Run one frame.

        While playing: update, score and draw, then request the next
        frame unless the game is over. While paused: draw the pause
        icon and stop.
        """
        self._frame_pending = False

        if self.is_playing():
            self.canvas.clear_canvas()

            self.update_game_window()
            self.update_current_score()
            self.draw_game_window()

            if self.is_game_over():
                self.end_game()
            else:
                self.request_next_frame()
        elif self.is_paused():
            self.draw_pause_icon()

    def is_game_over(self) -> bool:
        """The skier is dead and the rhino has finished eating."""
        return self.world.skier.is_dead() and not self.world.rhino.is_eating()

    def end_game(self) -> None:
        """Stop scheduling frames. Only a reset starts play again."""
        if self.world.game_over:
            return

        self.world.game_over = True
        logger.info(f"Game over at score {self.world.score}")
        self.event_bus.emit(Event(EventType.GAME_OVER, data={"score": self.world.score}, source="game"))

    def update_game_window(self) -> None:
        """Advance the world by one frame."""
        world = self.world
        world.game_time = self.clock.now()

        previous_game_window = world.game_window
        world.game_window = self.calculate_game_window(world.skier)

        # Obstacles get more frequent as the score grows
        threshold = self.settings.gameplay.obstacle_frequency_increase_threshold
        if world.score % threshold == 0:
            world.obstacle_manager.increase_obstacle_placement_chance()

        world.obstacle_manager.place_new_obstacle(world.game_window, previous_game_window)
        world.obstacle_manager.remove_passed_obstacles(world.game_window)

        if not world.skier.is_dead():
            world.skier.update(world.game_time, world.score)

        # A dead skier still gets eaten to the end
        if not self.is_game_over():
            world.rhino.update(world.game_time, world.score, world.skier)

        self._publish_skier_state()

    def update_current_score(self) -> None:
        """One point per frame spent moving down the hill."""
        if self.world.skier.is_moving_downwards():
            self.world.score += 1

    def calculate_game_window(self, skier: Skier) -> Rect:
        """The visible rectangle of the world, centered on the skier."""
        return Rect.centered_on(skier.get_position(), self.canvas.width, self.canvas.height)

    # Drawing
    def draw_game_window(self) -> None:
        """Draw everything with the draw offset at the game window's corner."""
        window = self.world.game_window
        self.canvas.set_draw_offset(window.left, window.top)
        self.draw_game_metadata()

        self.world.skier.draw()
        self.world.rhino.draw()
        self.world.obstacle_manager.draw_obstacles()

    def draw_game_metadata(self) -> None:
        self.canvas.draw_text(RESET_TEXT, GAME_METADATA_X, RESET_TEXT_Y)
        self.canvas.draw_text(PAUSE_TEXT, GAME_METADATA_X, PAUSE_TEXT_Y)
        self.canvas.draw_text(f"SCORE: {self.world.score}", GAME_METADATA_X, SCORE_TEXT_Y)

    def draw_pause_icon(self) -> None:
        x1 = self.canvas.width // 2 - PAUSE_ICON_OFFSET
        x2 = self.canvas.width // 2 + PAUSE_ICON_OFFSET
        y = self.canvas.height // 2 + PAUSE_ICON_OFFSET
        self.canvas.fill_rect(x1, y, PAUSE_ICON_WIDTH, PAUSE_ICON_HEIGHT)
        self.canvas.fill_rect(x2, y, PAUSE_ICON_WIDTH, PAUSE_ICON_HEIGHT)

    # Notifications
    def _on_mode_changed(self, old_mode: GameMode, new_mode: GameMode) -> None:
        event_type = EventType.GAME_PAUSED if new_mode == GameMode.PAUSED else EventType.GAME_RESUMED
        self.event_bus.emit(Event(event_type, data={"score": self.world.score}, source="game"))

    def _publish_skier_state(self) -> None:
        state: SkierState = self.world.skier.state
        if state == self._last_skier_state:
            return

        old_state, self._last_skier_state = self._last_skier_state, state
        self.event_bus.emit(Event(
            EventType.SKIER_STATE_CHANGED,
            data={"from": old_state.value, "to": state.value, "score": self.world.score},
            source="skier",
        ))
