"""The rhino waits up the hill, then chases the skier and eats them."""

import logging
import math
from enum import Enum

from downhill.animation.sprite_animation import SpriteAnimation
from downhill.assets.images import ImageManager
from downhill.core.constants import ANIMATION_FRAME_SPEED_MS, ImageName
from downhill.core.geometry import intersect_two_rects
from downhill.entities.entity import Entity
from downhill.entities.skier import Skier
from downhill.graphics.canvas import Canvas

logger = logging.getLogger(__name__)


class RhinoState(Enum):
    WAITING = "waiting"
    RUNNING = "running"
    EATING = "eating"
    CELEBRATING = "celebrating"


IMAGES_RUNNING: list[ImageName] = [
    ImageName.RHINO_RUN_LEFT,
    ImageName.RHINO_RUN_LEFT2,
]

IMAGES_EATING: list[ImageName] = [
    ImageName.RHINO_LIFT,
    ImageName.RHINO_LIFT_MOUTH_OPEN,
    ImageName.RHINO_LIFT_EAT1,
    ImageName.RHINO_LIFT_EAT2,
    ImageName.RHINO_LIFT_EAT3,
    ImageName.RHINO_LIFT_EAT4,
]

IMAGES_CELEBRATING: list[ImageName] = [
    ImageName.RHINO_LIFT_EAT4,
    ImageName.RHINO_LIFT,
]


class Rhino(Entity):
    """Chases the skier once the score is high enough.

    It only reads the skier's position each frame; the one change it
    makes to the skier is calling die() on contact.
    """

    def __init__(
        self,
        x: float,
        y: float,
        image_manager: ImageManager,
        canvas: Canvas,
        start_score: int = 300,
        starting_speed: float = 4.0,
        speed_per_score: float = 0.002,
        max_speed: float = 12.0,
        animation_frame_ms: float = ANIMATION_FRAME_SPEED_MS,
    ):
        super().__init__(x, y, image_manager, canvas, animation_frame_ms)
        self.image_name = ImageName.RHINO
        self.state = RhinoState.WAITING

        self.start_score = start_score
        self.starting_speed = starting_speed
        self.speed_per_score = speed_per_score
        self.max_speed = max_speed

        self.setup_animations()

    def setup_animations(self) -> None:
        self.animations[RhinoState.RUNNING.value] = SpriteAnimation(IMAGES_RUNNING)
        self.animations[RhinoState.EATING.value] = SpriteAnimation(
            IMAGES_EATING,
            looping=False,
            callback=self.celebrate,
        )
        self.animations[RhinoState.CELEBRATING.value] = SpriteAnimation(IMAGES_CELEBRATING)

    def speed_for_score(self, current_score: int) -> float:
        """The rhino gets faster the further the skier has come."""
        return min(
            self.max_speed,
            self.starting_speed + current_score * self.speed_per_score,
        )

    def update(self, game_time: float, current_score: int, skier: Skier) -> None:
        if self.state == RhinoState.WAITING:
            if current_score < self.start_score:
                return
            self.start_running()

        if self.state == RhinoState.RUNNING:
            self.move_towards(skier, self.speed_for_score(current_score))
            self.animate(game_time)
            self.check_if_caught_skier(skier)
        else:
            self.animate(game_time)

    def start_running(self) -> None:
        logger.info("Rhino started chasing")
        self.state = RhinoState.RUNNING
        self.set_animation(RhinoState.RUNNING.value)

    def move_towards(self, skier: Skier, speed: float) -> None:
        target = skier.get_position()
        dx = target.x - self.position.x
        dy = target.y - self.position.y
        distance = math.hypot(dx, dy)

        if distance <= speed:
            self.position.x = target.x
            self.position.y = target.y
            return

        self.position.x += dx / distance * speed
        self.position.y += dy / distance * speed

    def check_if_caught_skier(self, skier: Skier) -> bool:
        if skier.is_dead():
            return False

        rhino_bounds = self.get_bounds()
        skier_bounds = skier.get_bounds()
        if not rhino_bounds or not skier_bounds:
            return False

        if not intersect_two_rects(rhino_bounds, skier_bounds):
            return False

        self.eat(skier)
        return True

    def eat(self, skier: Skier) -> None:
        logger.info("Rhino caught the skier")
        skier.die()
        self.position.x = skier.position.x
        self.position.y = skier.position.y
        self.state = RhinoState.EATING
        self.set_animation(RhinoState.EATING.value)

    def celebrate(self) -> None:
        self.state = RhinoState.CELEBRATING
        self.set_animation(RhinoState.CELEBRATING.value)

    def is_eating(self) -> bool:
        return self.state == RhinoState.EATING
