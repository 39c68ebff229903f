"""Sprite loading for DOWNHILL."""

from downhill.assets.images import ImageHandle, ImageManager
from downhill.assets.sprites import make_sprite_loader, paint_sprite

__all__ = ["ImageHandle", "ImageManager", "make_sprite_loader", "paint_sprite"]
