"""Positions, rectangles and overlap tests in world coordinates."""

from dataclasses import dataclass


@dataclass
class Position:
    """A point in the game world."""
    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle given by its four edges."""
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @classmethod
    def centered_on(cls, center: Position, width: float, height: float) -> "Rect":
        """Build a rectangle of the given size centered on a point."""
        left = center.x - width / 2
        top = center.y - height / 2
        return cls(left, top, left + width, top + height)


def intersect_two_rects(rect1: Rect, rect2: Rect) -> bool:
    """Check whether two rectangles overlap. Touching edges count as overlap."""
    return not (
        rect2.left > rect1.right
        or rect2.right < rect1.left
        or rect2.top > rect1.bottom
        or rect2.bottom < rect1.top
    )
