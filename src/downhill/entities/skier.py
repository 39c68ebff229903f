"""
The skier is the entity controlled by the player.

The skier skis down the hill at one of five angles, jumps off ramps
and over rocks, crashes into anything else, and dies if the rhino
catches them.

States:
    SKIING: Moving and colliding
    JUMPING: Moving and colliding, cannot turn, lands when the jump animation ends
    CRASHED: Not moving, waiting for a left or right turn to recover
    DEAD: Eaten by the rhino; ignores input and is not drawn
"""

import logging
from enum import Enum
from typing import Optional

from downhill.animation.sprite_animation import SpriteAnimation
from downhill.assets.images import ImageManager
from downhill.core.constants import (
    ANIMATION_FRAME_SPEED_MS,
    DIAGONAL_SPEED_REDUCER,
    SPEED_INCREASE_THRESHOLD,
    STARTING_SPEED,
    ImageName,
    Key,
)
from downhill.core.geometry import Rect, intersect_two_rects
from downhill.entities.entity import Entity
from downhill.entities.obstacles import (
    JUMPABLE_OBSTACLES,
    Obstacle,
    ObstacleKind,
    ObstacleManager,
)
from downhill.graphics.canvas import Canvas

logger = logging.getLogger(__name__)


class SkierState(Enum):
    """The different states the skier can be in."""
    SKIING = "skiing"
    JUMPING = "jumping"
    CRASHED = "crashed"
    DEAD = "dead"


class Direction(Enum):
    """The five directions the skier can face, ordered from left to right."""
    LEFT = 0
    LEFT_DOWN = 1
    DOWN = 2
    RIGHT_DOWN = 3
    RIGHT = 4

    def turned_left(self) -> "Direction":
        """One step to the left, staying at LEFT once there."""
        return Direction(max(self.value - 1, Direction.LEFT.value))

    def turned_right(self) -> "Direction":
        """One step to the right, staying at RIGHT once there."""
        return Direction(min(self.value + 1, Direction.RIGHT.value))

    @property
    def is_downward(self) -> bool:
        return self in (Direction.LEFT_DOWN, Direction.DOWN, Direction.RIGHT_DOWN)

    @property
    def is_horizontal(self) -> bool:
        return self in (Direction.LEFT, Direction.RIGHT)


# Image to display for the skier based upon which direction they're facing
DIRECTION_IMAGES: dict[Direction, ImageName] = {
    Direction.LEFT: ImageName.SKIER_LEFT,
    Direction.LEFT_DOWN: ImageName.SKIER_LEFTDOWN,
    Direction.DOWN: ImageName.SKIER_DOWN,
    Direction.RIGHT_DOWN: ImageName.SKIER_RIGHTDOWN,
    Direction.RIGHT: ImageName.SKIER_RIGHT,
}

# Frames of the jump; landing happens when the last one has been shown
IMAGES_JUMPING: list[ImageName] = [
    ImageName.SKIER_JUMP1,
    ImageName.SKIER_JUMP2,
    ImageName.SKIER_JUMP3,
    ImageName.SKIER_JUMP4,
    ImageName.SKIER_JUMP5,
]


class Interaction(Enum):
    """What hitting an obstacle does to the skier."""
    NONE = "none"
    JUMP = "jump"
    CRASH = "crash"


def _build_interactions() -> dict[tuple[SkierState, ObstacleKind], Interaction]:
    table: dict[tuple[SkierState, ObstacleKind], Interaction] = {}
    for kind in ObstacleKind:
        # Ramps launch a skiing skier; everything else stops them
        table[(SkierState.SKIING, kind)] = (
            Interaction.JUMP if kind is ObstacleKind.JUMP_RAMP else Interaction.CRASH
        )
        table[(SkierState.JUMPING, kind)] = (
            Interaction.NONE if kind in JUMPABLE_OBSTACLES else Interaction.CRASH
        )
    return table


# Crashed and dead skiers never collide, so they have no entries
INTERACTIONS: dict[tuple[SkierState, ObstacleKind], Interaction] = _build_interactions()


class Skier(Entity):
    """The player-controlled skier."""

    def __init__(
        self,
        x: float,
        y: float,
        image_manager: ImageManager,
        obstacle_manager: ObstacleManager,
        canvas: Canvas,
        starting_speed: float = STARTING_SPEED,
        diagonal_speed_reducer: float = DIAGONAL_SPEED_REDUCER,
        speed_increase_threshold: int = SPEED_INCREASE_THRESHOLD,
        animation_frame_ms: float = ANIMATION_FRAME_SPEED_MS,
    ):
        super().__init__(x, y, image_manager, canvas, animation_frame_ms)
        self.obstacle_manager = obstacle_manager

        self.starting_speed = starting_speed
        self.diagonal_speed_reducer = diagonal_speed_reducer
        self.speed_increase_threshold = speed_increase_threshold

        self.state = SkierState.SKIING
        self.direction = Direction.DOWN
        self.image_name = DIRECTION_IMAGES[self.direction]
        self.speed: float = starting_speed

        # Speed held at take-off, given back on landing
        self.speed_on_landing: Optional[float] = None
        # Score that last raised the speed, so a held score only counts once
        self.last_speed_increase_score: Optional[int] = None

        self.setup_animations()

    # State queries
    def is_skiing(self) -> bool:
        return self.state == SkierState.SKIING

    def is_jumping(self) -> bool:
        return self.state == SkierState.JUMPING

    def is_crashed(self) -> bool:
        return self.state == SkierState.CRASHED

    def is_dead(self) -> bool:
        return self.state == SkierState.DEAD

    def is_downwards_facing(self) -> bool:
        return self.direction.is_downward

    def is_moving_downwards(self) -> bool:
        """Facing down the hill with some speed: the condition for scoring."""
        return self.is_downwards_facing() and self.speed > 0

    def setup_animations(self) -> None:
        self.animations[SkierState.JUMPING.value] = SpriteAnimation(
            IMAGES_JUMPING,
            looping=False,
            callback=self.land_from_jump,
        )

    def set_direction(self, direction: Direction) -> None:
        self.direction = direction
        self.set_directional_image()

    def set_directional_image(self) -> None:
        """Show the image for the current direction unless mid-jump or crashed."""
        if self.is_skiing():
            self.image_name = DIRECTION_IMAGES[self.direction]

    # Frame update
    def update(self, game_time: float, current_score: int) -> None:
        """
        Move the skier and check whether they hit anything.

        Only skiing and jumping skiers move. The speed is raised at
        score milestones afterwards.
        """
        if self.is_skiing():
            self.move()
            self.check_if_hit_obstacle()
        elif self.is_jumping():
            self.move()
            self.animate(game_time)
            self.check_if_hit_obstacle()

        self.increase_speed_if_threshold_met(current_score)

    def increase_speed_if_threshold_met(self, current_score: int) -> bool:
        """
        Raise the speed by one each time the score lands on a multiple of
        the threshold.

        A score of zero never counts, a score held at a multiple across
        several frames counts once, and crashed or dead skiers stay at 0.

        Returns:
            True if the speed was raised
        """
        if self.is_crashed() or self.is_dead():
            return False
        if current_score <= 0 or current_score % self.speed_increase_threshold != 0:
            return False
        if current_score == self.last_speed_increase_score:
            return False

        self.last_speed_increase_score = current_score
        self.speed += 1
        logger.debug(f"Skier speed raised to {self.speed} at score {current_score}")
        return True

    def draw(self, enlarge: bool = False) -> None:
        """Draw the skier unless dead. Jumping skiers are drawn enlarged."""
        if self.is_dead():
            return

        super().draw(enlarge or self.is_jumping())

    # Movement
    def move(self) -> None:
        """Move along the current direction. Fully horizontal skiers stand still."""
        if self.direction == Direction.LEFT_DOWN:
            self.move_skier_left_down()
        elif self.direction == Direction.DOWN:
            self.move_skier_down()
        elif self.direction == Direction.RIGHT_DOWN:
            self.move_skier_right_down()

    def move_skier_left(self) -> None:
        """Sidestep left by a fixed amount."""
        self.position.x -= self.starting_speed

    def move_skier_left_down(self) -> None:
        self.position.x -= self.speed / self.diagonal_speed_reducer
        self.position.y += self.speed / self.diagonal_speed_reducer

    def move_skier_down(self) -> None:
        self.position.y += self.speed

    def move_skier_right_down(self) -> None:
        self.position.x += self.speed / self.diagonal_speed_reducer
        self.position.y += self.speed / self.diagonal_speed_reducer

    def move_skier_right(self) -> None:
        """Sidestep right by a fixed amount."""
        self.position.x += self.starting_speed

    def move_skier_up(self) -> None:
        """Step back up the hill by a fixed amount."""
        self.position.y -= self.starting_speed

    # Input
    def handle_input(self, input_key: Key | str) -> bool:
        """
        Handle a key press.

        Returns:
            True if the key is one of the skier's keys. Dead skiers handle nothing.
        """
        if self.is_dead():
            return False

        if input_key == Key.JUMP:
            self.jump()
        elif input_key == Key.LEFT:
            self.turn_left()
        elif input_key == Key.RIGHT:
            self.turn_right()
        elif input_key == Key.UP:
            self.turn_up()
        elif input_key == Key.DOWN:
            self.turn_down()
        else:
            return False

        return True

    def turn_left(self) -> None:
        """
        Turn one step left, or sidestep left when already facing left.

        A crashed skier first recovers facing left. Jumping skiers can't turn.
        """
        if self.is_crashed():
            self.recover_from_crash(Direction.LEFT)

        if self.is_jumping():
            return

        if self.direction == Direction.LEFT:
            self.move_skier_left()
        else:
            self.set_direction(self.direction.turned_left())

    def turn_right(self) -> None:
        """
        Turn one step right, or sidestep right when already facing right.

        A crashed skier first recovers facing right. Jumping skiers can't turn.
        """
        if self.is_crashed():
            self.recover_from_crash(Direction.RIGHT)

        if self.is_jumping():
            return

        if self.direction == Direction.RIGHT:
            self.move_skier_right()
        else:
            self.set_direction(self.direction.turned_right())

    def turn_up(self) -> None:
        """Step up the hill, only possible while facing fully left or right."""
        if self.is_crashed():
            return

        if self.direction.is_horizontal:
            self.move_skier_up()

    def turn_down(self) -> None:
        """Face straight down. A crashed skier has to turn sideways first."""
        if self.is_crashed():
            return

        self.set_direction(Direction.DOWN)

    def jump(self) -> None:
        """
        Take off. Crashed skiers can't jump.

        Jumping again mid-air restarts the jump but keeps the speed from
        the original take-off.
        """
        if self.is_crashed() or self.is_dead():
            return

        if not self.is_jumping():
            self.speed_on_landing = self.speed
            self.state = SkierState.JUMPING
            logger.debug(f"Skier jumped at speed {self.speed}")

        self.set_animation(SkierState.JUMPING.value)

    # Collisions
    def get_bounds(self) -> Optional[Rect]:
        """
        Collision box that stops a quarter of the sprite above its center,
        so a crashed skier ends up inside the obstacle rather than above it.
        """
        image = self.get_image()
        if not image:
            return None

        return Rect(
            self.position.x - image.width / 2,
            self.position.y - image.height / 2,
            self.position.x + image.width / 2,
            self.position.y - image.height / 4,
        )

    def check_if_hit_obstacle(self) -> Optional[Obstacle]:
        """
        Interact with the first obstacle the skier overlaps, if any.

        Returns:
            The obstacle that was hit
        """
        skier_bounds = self.get_bounds()
        if not skier_bounds:
            return None

        for obstacle in self.obstacle_manager.get_obstacles():
            obstacle_bounds = obstacle.get_bounds()
            if not obstacle_bounds:
                continue

            if intersect_two_rects(skier_bounds, obstacle_bounds):
                self.interact_with_obstacle(obstacle)
                return obstacle

        return None

    def interact_with_obstacle(self, obstacle: Obstacle) -> Interaction:
        """Apply the interaction for the current state and the obstacle's kind."""
        interaction = INTERACTIONS.get((self.state, obstacle.kind), Interaction.NONE)

        if interaction == Interaction.JUMP:
            self.jump()
        elif interaction == Interaction.CRASH:
            logger.info(f"Skier crashed into {obstacle.kind.value} while {self.state.value}")
            self.crash()

        return interaction

    # Transitions
    def crash(self) -> None:
        """Stop dead and show the crash image."""
        self.state = SkierState.CRASHED
        self.speed = 0
        self.speed_on_landing = None
        self.stop_animation()
        self.image_name = ImageName.SKIER_CRASH

    def recover_from_crash(self, new_direction: Direction) -> None:
        """Get back up facing the given side at the starting speed."""
        self.state = SkierState.SKIING
        self.speed = self.starting_speed
        self.set_direction(new_direction)
        logger.debug(f"Skier recovered facing {new_direction.name}")

    def land_from_jump(self) -> None:
        """Back to skiing at the speed held before the jump."""
        self.state = SkierState.SKIING
        if self.speed_on_landing is not None:
            self.speed = self.speed_on_landing
        self.speed_on_landing = None
        self.set_directional_image()

    def die(self) -> None:
        """Caught by the rhino."""
        if self.is_dead():
            return

        self.state = SkierState.DEAD
        self.speed = 0
        self.speed_on_landing = None
        self.stop_animation()
        logger.info("Skier died")
