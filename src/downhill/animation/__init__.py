"""Animation module for DOWNHILL."""

from downhill.animation.sprite_animation import SpriteAnimation

__all__ = ["SpriteAnimation"]
