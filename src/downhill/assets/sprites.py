"""
Sprite sources for DOWNHILL.

The built-in sprites are painted procedurally into RGBA numpy arrays
with the drawing primitives. A directory of PNG files can replace any
of them; those are read with Pillow.
"""

import logging
from pathlib import Path
from typing import Callable

import numpy as np
from numpy.typing import NDArray
from PIL import Image

from downhill.core.constants import ImageName
from downhill.graphics.primitives import draw_circle, draw_line, draw_rect

logger = logging.getLogger(__name__)

Sprite = NDArray[np.uint8]

# Palette (RGBA)
JACKET = (200, 40, 50, 255)
PANTS = (40, 50, 110, 255)
SKIN = (240, 200, 160, 255)
SKI = (30, 30, 30, 255)
NEEDLES = (30, 120, 60, 255)
NEEDLES_DARK = (20, 90, 45, 255)
TRUNK = (110, 70, 35, 255)
STONE = (130, 130, 140, 255)
STONE_DARK = (95, 95, 105, 255)
WOOD = (170, 120, 70, 255)
WOOD_DARK = (120, 80, 45, 255)
HIDE = (150, 150, 160, 255)
HIDE_DARK = (105, 105, 115, 255)
HORN = (235, 230, 210, 255)
MOUTH = (170, 30, 40, 255)


def _blank(width: int, height: int) -> Sprite:
    return np.zeros((height, width, 4), dtype=np.uint8)


def _skier(ski_dx: int, ski_dy: int, arms_up: bool = False) -> Sprite:
    """Upright skier with skis pointing along (ski_dx, ski_dy)."""
    sprite = _blank(14, 22)
    draw_circle(sprite, 7, 3, 2, SKIN)
    draw_rect(sprite, 4, 6, 6, 7, JACKET)
    draw_rect(sprite, 5, 13, 4, 5, PANTS)
    if arms_up:
        draw_line(sprite, 4, 7, 1, 2, JACKET)
        draw_line(sprite, 9, 7, 12, 2, JACKET)
    else:
        draw_line(sprite, 3, 7, 1, 14, SKI)
        draw_line(sprite, 10, 7, 12, 14, SKI)
    for foot_x in (5, 8):
        draw_line(sprite, foot_x - ski_dx, 19 - ski_dy, foot_x + ski_dx, 19 + ski_dy, SKI)
    return sprite


def _crashed_skier() -> Sprite:
    sprite = _blank(18, 14)
    draw_line(sprite, 1, 12, 16, 3, SKI)
    draw_line(sprite, 1, 3, 16, 12, SKI)
    draw_rect(sprite, 5, 6, 8, 4, JACKET)
    draw_circle(sprite, 14, 7, 2, SKIN)
    return sprite


def _tree() -> Sprite:
    sprite = _blank(16, 26)
    for row in range(20):
        half = 1 + row * 7 // 19
        color = NEEDLES if row % 6 < 4 else NEEDLES_DARK
        draw_rect(sprite, 8 - half, row, half * 2, 1, color)
    draw_rect(sprite, 6, 20, 4, 6, TRUNK)
    return sprite


def _tree_cluster() -> Sprite:
    sprite = _blank(32, 32)
    tree = _tree()
    for x, y in ((0, 6), (16, 6), (8, 0)):
        region = sprite[y:y + 26, x:x + 16]
        mask = tree[:, :, 3] > 0
        region[mask] = tree[mask]
    return sprite


def _rock(width: int, height: int) -> Sprite:
    sprite = _blank(width, height)
    radius = height // 2
    draw_circle(sprite, radius, height - radius, radius, STONE)
    draw_circle(sprite, width - radius - 1, height - radius, radius, STONE)
    draw_rect(sprite, radius, 1, width - 2 * radius, height - 1, STONE)
    draw_rect(sprite, 2, height - 2, width - 4, 2, STONE_DARK)
    return sprite


def _jump_ramp() -> Sprite:
    sprite = _blank(26, 12)
    draw_rect(sprite, 0, 0, 26, 12, WOOD)
    for x in range(2, 26, 6):
        draw_rect(sprite, x, 0, 2, 12, WOOD_DARK)
    draw_rect(sprite, 0, 10, 26, 2, WOOD_DARK)
    return sprite


def _rhino(leg_shift: int = 0) -> Sprite:
    sprite = _blank(30, 20)
    draw_rect(sprite, 6, 5, 20, 10, HIDE)
    draw_rect(sprite, 0, 7, 8, 7, HIDE)
    draw_line(sprite, 1, 7, 0, 3, HORN)
    draw_rect(sprite, 3, 9, 1, 1, SKI)
    for leg_x in (8, 13, 19, 23):
        offset = leg_shift if leg_x in (8, 19) else -leg_shift
        draw_rect(sprite, leg_x + offset, 15, 3, 5, HIDE_DARK)
    return sprite


def _rhino_lift(mouth_open: bool = False, chew: int = 0) -> Sprite:
    """Rhino standing on its hind legs, optionally with a skier in its mouth."""
    sprite = _blank(24, 32)
    draw_rect(sprite, 6, 10, 12, 16, HIDE)
    draw_rect(sprite, 7, 26, 3, 6, HIDE_DARK)
    draw_rect(sprite, 14, 26, 3, 6, HIDE_DARK)
    draw_rect(sprite, 7, 0, 10, 11, HIDE)
    draw_line(sprite, 12, 0, 12, -3, HORN)
    if mouth_open or chew:
        draw_rect(sprite, 9, 6, 6, 3 if mouth_open else 2, MOUTH)
    if chew:
        # Bits of the skier disappear over the eat frames
        draw_rect(sprite, 9, 4 - min(chew, 3), 6 - chew, 2, JACKET)
    return sprite


PAINTERS: dict[ImageName, Callable[[], Sprite]] = {
    ImageName.SKIER_CRASH: _crashed_skier,
    ImageName.SKIER_LEFT: lambda: _skier(-5, 0),
    ImageName.SKIER_LEFTDOWN: lambda: _skier(-3, 2),
    ImageName.SKIER_DOWN: lambda: _skier(0, 3),
    ImageName.SKIER_RIGHTDOWN: lambda: _skier(3, 2),
    ImageName.SKIER_RIGHT: lambda: _skier(5, 0),
    ImageName.SKIER_JUMP1: lambda: _skier(0, 3, arms_up=True),
    ImageName.SKIER_JUMP2: lambda: _skier(2, 2, arms_up=True),
    ImageName.SKIER_JUMP3: lambda: _skier(4, 0, arms_up=True),
    ImageName.SKIER_JUMP4: lambda: _skier(2, -2, arms_up=True),
    ImageName.SKIER_JUMP5: lambda: _skier(0, 3),
    ImageName.TREE: _tree,
    ImageName.TREE_CLUSTER: _tree_cluster,
    ImageName.ROCK1: lambda: _rock(16, 8),
    ImageName.ROCK2: lambda: _rock(20, 10),
    ImageName.JUMP_RAMP: _jump_ramp,
    ImageName.RHINO: _rhino,
    ImageName.RHINO_RUN_LEFT: lambda: _rhino(leg_shift=1),
    ImageName.RHINO_RUN_LEFT2: lambda: _rhino(leg_shift=-1),
    ImageName.RHINO_LIFT: _rhino_lift,
    ImageName.RHINO_LIFT_MOUTH_OPEN: lambda: _rhino_lift(mouth_open=True),
    ImageName.RHINO_LIFT_EAT1: lambda: _rhino_lift(chew=1),
    ImageName.RHINO_LIFT_EAT2: lambda: _rhino_lift(chew=2),
    ImageName.RHINO_LIFT_EAT3: lambda: _rhino_lift(chew=3),
    ImageName.RHINO_LIFT_EAT4: lambda: _rhino_lift(chew=4),
}


def paint_sprite(name: ImageName) -> Sprite:
    """Paint one of the built-in sprites."""
    return PAINTERS[name]()


def load_sprite_file(path: Path) -> Sprite:
    """Read an image file into an RGBA array."""
    with Image.open(path) as img:
        return np.asarray(img.convert("RGBA"), dtype=np.uint8).copy()


def make_sprite_loader(sprites_path: Path | None = None) -> Callable[[ImageName], Sprite]:
    """
    Build the loader used by the image manager.

    Args:
        sprites_path: Directory with <name>.png files. Names without a file
            there use the built-in sprite.

    Returns:
        Function mapping an image name to its RGBA array
    """
    def load(name: ImageName) -> Sprite:
        if sprites_path is not None:
            candidate = sprites_path / f"{name.value}.png"
            if candidate.exists():
                logger.debug(f"Loading sprite file: {candidate}")
                return load_sprite_file(candidate)
        return paint_sprite(name)

    return load
