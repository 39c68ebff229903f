"""Shared fixtures: loaded sprites, a manual clock and a game driven frame by frame."""

import random

import pytest

from downhill.assets.images import ImageManager
from downhill.core.clock import FrameQueue, ManualClock
from downhill.core.constants import GAME_HEIGHT, GAME_WIDTH, IMAGES
from downhill.core.events import EventBus
from downhill.core.game import Game
from downhill.entities.obstacles import Obstacle, ObstacleKind, ObstacleManager
from downhill.entities.skier import Skier
from downhill.graphics.canvas import Canvas
from downhill.settings import DisplaySettings, GameplaySettings, Settings

FRAME_MS = 16.0


@pytest.fixture
async def image_manager():
    """Every built-in sprite, loaded."""
    manager = ImageManager()
    await manager.load_images(IMAGES)
    return manager


@pytest.fixture
def canvas():
    return Canvas(GAME_WIDTH, GAME_HEIGHT)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def obstacle_manager(image_manager, canvas, rng):
    return ObstacleManager(image_manager, canvas, rng=rng)


@pytest.fixture
def skier(image_manager, obstacle_manager, canvas):
    return Skier(0, 0, image_manager, obstacle_manager, canvas)


@pytest.fixture
def place_obstacle(image_manager, canvas, obstacle_manager):
    """Put an obstacle of the given kind at a fixed spot."""
    def place(kind: ObstacleKind, x: float = 0, y: float = 0) -> Obstacle:
        obstacle = Obstacle(x, y, kind, image_manager, canvas)
        obstacle_manager.add_obstacle(obstacle)
        return obstacle

    return place


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def frame_queue():
    return FrameQueue()


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def settings():
    """Default display, a fixed seed and a rhino that stays out of the way."""
    return Settings(
        _env_file=None,
        display=DisplaySettings(width=GAME_WIDTH, height=GAME_HEIGHT),
        gameplay=GameplaySettings(seed=7, rhino_start_score=1_000_000),
    )


@pytest.fixture
async def game(settings, clock, frame_queue, event_bus, image_manager, canvas):
    """A loaded game that has not been started."""
    game = Game(
        settings=settings,
        clock=clock,
        scheduler=frame_queue,
        event_bus=event_bus,
        image_manager=image_manager,
        canvas=canvas,
        rng=random.Random(7),
    )
    await game.load()
    return game


def clear_slope(game: Game) -> None:
    """Remove every obstacle and stop new ones from appearing."""
    manager = game.obstacle_manager
    manager.obstacles.clear()
    manager.placement_chance = 0.0
    manager.placement_chance_step = 0.0


def run_frames(game: Game, frame_queue: FrameQueue, clock: ManualClock, count: int) -> None:
    """Tick the host loop `count` times, advancing the clock before each tick."""
    for _ in range(count):
        clock.advance(FRAME_MS)
        frame_queue.run_pending()
