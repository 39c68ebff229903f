"""
Obstacles on the slope and the manager that places them.

New obstacles only appear in territory the game window has just
revealed, so nothing pops into existence in front of the player.
"""

import bisect
import logging
import math
import random
from enum import Enum

from downhill.assets.images import ImageManager
from downhill.core.constants import GAME_HEIGHT, GAME_WIDTH, ImageName
from downhill.core.geometry import Position, Rect
from downhill.entities.entity import Entity
from downhill.graphics.canvas import Canvas

logger = logging.getLogger(__name__)


class ObstacleKind(Enum):
    """Every kind of obstacle that can be placed."""
    TREE = "tree"
    TREE_CLUSTER = "tree_cluster"
    ROCK1 = "rock_1"
    ROCK2 = "rock_2"
    JUMP_RAMP = "jump_ramp"


OBSTACLE_IMAGES: dict[ObstacleKind, ImageName] = {
    ObstacleKind.TREE: ImageName.TREE,
    ObstacleKind.TREE_CLUSTER: ImageName.TREE_CLUSTER,
    ObstacleKind.ROCK1: ImageName.ROCK1,
    ObstacleKind.ROCK2: ImageName.ROCK2,
    ObstacleKind.JUMP_RAMP: ImageName.JUMP_RAMP,
}

# Obstacles a jumping skier sails over
JUMPABLE_OBSTACLES: frozenset[ObstacleKind] = frozenset({
    ObstacleKind.ROCK1,
    ObstacleKind.ROCK2,
    ObstacleKind.JUMP_RAMP,
})

# Initial placement: one obstacle per REDUCER x REDUCER area of the screen
STARTING_OBSTACLE_REDUCER = 300
STARTING_OBSTACLE_GAP = 50
# Minimum distance kept between two obstacles on both axes
DISTANCE_BETWEEN_OBSTACLES = 50
# Give up on a placement after this many tries
MAX_PLACEMENT_ATTEMPTS = 50
# Obstacles further than this above the game window are dropped, in screen heights
PASSED_OBSTACLE_SCREENS = 1


class Obstacle(Entity):
    """A static obstacle of a fixed kind."""

    def __init__(
        self,
        x: float,
        y: float,
        kind: ObstacleKind,
        image_manager: ImageManager,
        canvas: Canvas,
    ):
        super().__init__(x, y, image_manager, canvas)
        self.kind = kind
        self.image_name = OBSTACLE_IMAGES[kind]

    @property
    def is_jumpable(self) -> bool:
        return self.kind in JUMPABLE_OBSTACLES

    def __repr__(self) -> str:
        return f"Obstacle({self.kind.value}, x={self.position.x:.0f}, y={self.position.y:.0f})"


class ObstacleManager:
    """Owns every obstacle in the world and decides where new ones go."""

    def __init__(
        self,
        image_manager: ImageManager,
        canvas: Canvas,
        rng: random.Random | None = None,
        width: int = GAME_WIDTH,
        height: int = GAME_HEIGHT,
        placement_chance: float = 1 / 8,
        placement_chance_step: float = 0.01,
        max_placement_chance: float = 0.5,
    ):
        self.image_manager = image_manager
        self.canvas = canvas
        self.rng = rng or random.Random()
        self.width = width
        self.height = height

        self.placement_chance = placement_chance
        self.placement_chance_step = placement_chance_step
        self.max_placement_chance = max_placement_chance

        self.obstacles: list[Obstacle] = []

    def get_obstacles(self) -> list[Obstacle]:
        return self.obstacles

    def draw_obstacles(self) -> None:
        for obstacle in self.obstacles:
            obstacle.draw()

    def place_initial_obstacles(self) -> None:
        """Scatter the first obstacles below the skier's starting point."""
        count = math.ceil(
            (self.width / STARTING_OBSTACLE_REDUCER)
            * (self.height / STARTING_OBSTACLE_REDUCER)
        )

        min_x = -STARTING_OBSTACLE_GAP
        max_x = self.width + STARTING_OBSTACLE_GAP
        min_y = self.height / 2 + 100
        max_y = self.height + STARTING_OBSTACLE_GAP

        for _ in range(count):
            self.place_random_obstacle(min_x, max_x, min_y, max_y)

        logger.debug(f"Placed {len(self.obstacles)} initial obstacles")

    def increase_obstacle_placement_chance(self) -> None:
        """Make new obstacles a little more likely, up to the cap."""
        new_chance = min(
            self.max_placement_chance,
            self.placement_chance + self.placement_chance_step,
        )
        if new_chance != self.placement_chance:
            logger.debug(f"Obstacle chance {self.placement_chance:.3f} -> {new_chance:.3f}")
        self.placement_chance = new_chance

    def place_new_obstacle(self, game_window: Rect, previous_game_window: Rect) -> None:
        """Maybe place one obstacle along the edges the window moved towards."""
        if self.rng.random() >= self.placement_chance:
            return

        if game_window.left < previous_game_window.left:
            self.place_obstacle_left(game_window)
        elif game_window.left > previous_game_window.left:
            self.place_obstacle_right(game_window)

        if game_window.top < previous_game_window.top:
            self.place_obstacle_top(game_window)
        elif game_window.top > previous_game_window.top:
            self.place_obstacle_bottom(game_window)

    def place_obstacle_left(self, game_window: Rect) -> None:
        self.place_random_obstacle(
            game_window.left, game_window.left, game_window.top, game_window.bottom
        )

    def place_obstacle_right(self, game_window: Rect) -> None:
        self.place_random_obstacle(
            game_window.right, game_window.right, game_window.top, game_window.bottom
        )

    def place_obstacle_top(self, game_window: Rect) -> None:
        self.place_random_obstacle(
            game_window.left, game_window.right, game_window.top, game_window.top
        )

    def place_obstacle_bottom(self, game_window: Rect) -> None:
        self.place_random_obstacle(
            game_window.left, game_window.right, game_window.bottom, game_window.bottom
        )

    def place_random_obstacle(
        self, min_x: float, max_x: float, min_y: float, max_y: float
    ) -> Obstacle | None:
        """Place a random kind of obstacle at a free spot in the given area."""
        position = self.calculate_open_position(min_x, max_x, min_y, max_y)
        if position is None:
            logger.debug("No open position for a new obstacle")
            return None

        kind = self.rng.choice(list(ObstacleKind))
        obstacle = Obstacle(position.x, position.y, kind, self.image_manager, self.canvas)
        self.add_obstacle(obstacle)
        return obstacle

    def add_obstacle(self, obstacle: Obstacle) -> None:
        """Add an obstacle, keeping the list ordered top to bottom."""
        bisect.insort(self.obstacles, obstacle, key=lambda o: o.position.y)

    def remove_passed_obstacles(self, game_window: Rect) -> int:
        """
        Forget obstacles the skier has left far behind.

        Returns:
            Number of obstacles removed
        """
        cutoff = game_window.top - self.height * PASSED_OBSTACLE_SCREENS
        first_kept = bisect.bisect_left(self.obstacles, cutoff, key=lambda o: o.position.y)
        if first_kept:
            del self.obstacles[:first_kept]
            logger.debug(f"Removed {first_kept} passed obstacles")
        return first_kept

    def calculate_open_position(
        self, min_x: float, max_x: float, min_y: float, max_y: float
    ) -> Position | None:
        for _ in range(MAX_PLACEMENT_ATTEMPTS):
            x = self.rng.randint(math.floor(min_x), math.floor(max_x))
            y = self.rng.randint(math.floor(min_y), math.floor(max_y))

            crowded = any(
                abs(x - o.position.x) < DISTANCE_BETWEEN_OBSTACLES
                and abs(y - o.position.y) < DISTANCE_BETWEEN_OBSTACLES
                for o in self.obstacles
            )
            if not crowded:
                return Position(x, y)

        return None
