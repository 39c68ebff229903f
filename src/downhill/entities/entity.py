"""Base class for anything placed and drawn in the game world."""

import logging
from typing import Optional

from downhill.animation.sprite_animation import SpriteAnimation
from downhill.assets.images import ImageHandle, ImageManager
from downhill.core.constants import ANIMATION_FRAME_SPEED_MS, ImageName
from downhill.core.geometry import Position, Rect
from downhill.graphics.canvas import Canvas

logger = logging.getLogger(__name__)

# Scale applied to an entity's sprite when drawn enlarged
IMAGE_ENLARGE_FACTOR = 1.5


class Entity:
    """A positioned sprite with optional frame animations.

    The position is the sprite's center. Bounds run from the top of the
    sprite down to its center line, so things standing "on" the snow only
    collide with their upper half.
    """

    image_name: ImageName = ImageName.TREE

    def __init__(
        self,
        x: float,
        y: float,
        image_manager: ImageManager,
        canvas: Canvas,
        animation_frame_ms: float = ANIMATION_FRAME_SPEED_MS,
    ):
        self.position = Position(x, y)
        self.image_manager = image_manager
        self.canvas = canvas

        self.animations: dict[str, SpriteAnimation] = {}
        self.animation_frame_ms = animation_frame_ms
        self.current_animation: Optional[SpriteAnimation] = None
        self.current_animation_frame = 0
        self._animation_frame_time: Optional[float] = None

    def get_position(self) -> Position:
        return self.position

    def get_image(self) -> Optional[ImageHandle]:
        return self.image_manager.get_image(self.image_name)

    def get_bounds(self) -> Optional[Rect]:
        """Collision rectangle, or None while the sprite is not loaded."""
        image = self.get_image()
        if not image:
            return None

        return Rect(
            self.position.x - image.width / 2,
            self.position.y - image.height / 2,
            self.position.x + image.width / 2,
            self.position.y,
        )

    def draw(self, enlarge: bool = False) -> None:
        """Draw the current image centered on the entity's position."""
        image = self.get_image()
        if not image:
            return

        width = image.width
        height = image.height
        if enlarge:
            width *= IMAGE_ENLARGE_FACTOR
            height *= IMAGE_ENLARGE_FACTOR

        self.canvas.draw_image(
            image.data,
            self.position.x - width / 2,
            self.position.y - height / 2,
            width,
            height,
        )

    # Animation
    def set_animation(self, key: str) -> None:
        """Start one of the entity's animations from its first frame."""
        self.current_animation = self.animations[key]
        self.current_animation_frame = 0
        self._animation_frame_time = None
        self.image_name = self.current_animation.images[0]

    def stop_animation(self) -> None:
        self.current_animation = None
        self.current_animation_frame = 0
        self._animation_frame_time = None

    def animate(self, game_time: float) -> None:
        """Advance the current animation if its frame time has elapsed."""
        if self.current_animation is None:
            return

        if self._animation_frame_time is None:
            self._animation_frame_time = game_time
            return

        if game_time - self._animation_frame_time >= self.animation_frame_ms:
            self.next_animation_frame(game_time)

    def next_animation_frame(self, game_time: float) -> None:
        animation = self.current_animation
        if animation is None:
            return

        self._animation_frame_time = game_time
        self.current_animation_frame += 1

        if self.current_animation_frame >= animation.frame_count:
            if not animation.looping:
                self.stop_animation()
                if animation.callback:
                    animation.callback()
                return
            self.current_animation_frame = 0

        self.image_name = animation.images[self.current_animation_frame]
