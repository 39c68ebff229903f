"""Graphics module for DOWNHILL rendering."""

from downhill.graphics.canvas import Canvas
from downhill.graphics.primitives import (
    draw_rect,
    draw_circle,
    draw_line,
    draw_text,
    draw_image,
    scale_image,
    clear,
)

__all__ = [
    "Canvas",
    # Primitives
    "draw_rect",
    "draw_circle",
    "draw_line",
    "draw_text",
    "draw_image",
    "scale_image",
    "clear",
]
