"""Frame buffer the game draws into each frame."""

import logging

import numpy as np
from numpy.typing import NDArray

from downhill.graphics.primitives import (
    Color, clear, draw_image, draw_rect, draw_text, scale_image
)

logger = logging.getLogger(__name__)

SNOW_COLOR: Color = (255, 255, 255)
INK_COLOR: Color = (20, 20, 30)


class Canvas:
    """
    A fixed-size RGB frame buffer with a world-space draw offset.

    Images are placed in world coordinates and shifted by the draw
    offset; text and rectangles are placed in screen coordinates so the
    HUD stays put while the world scrolls.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.buffer: NDArray[np.uint8] = np.zeros((height, width, 3), dtype=np.uint8)
        self.draw_offset_x = 0.0
        self.draw_offset_y = 0.0
        self.clear_canvas()
        logger.debug(f"Canvas created: {width}x{height}")

    def clear_canvas(self) -> None:
        clear(self.buffer, SNOW_COLOR)

    def set_draw_offset(self, x: float, y: float) -> None:
        self.draw_offset_x = x
        self.draw_offset_y = y

    def draw_image(
        self,
        image: NDArray[np.uint8],
        x: float,
        y: float,
        width: float,
        height: float,
    ) -> None:
        """Draw an image whose top-left corner is at world (x, y)."""
        width = max(1, round(width))
        height = max(1, round(height))
        sized = scale_image(image, width, height)
        draw_image(
            self.buffer,
            sized,
            round(x - self.draw_offset_x),
            round(y - self.draw_offset_y),
        )

    def draw_text(
        self, text: str, x: int, y: int, color: Color = INK_COLOR, scale: int = 2
    ) -> None:
        draw_text(self.buffer, text, x, y, color, scale=scale)

    def fill_rect(
        self, x: int, y: int, width: int, height: int, color: Color = INK_COLOR
    ) -> None:
        draw_rect(self.buffer, x, y, width, height, color, filled=True)

