"""Frame-by-frame sprite animations."""

from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from downhill.core.constants import ImageName


@dataclass
class SpriteAnimation:
    """A sequence of images played one after another.

    Attributes:
        images: Frames in play order
        looping: Restart from the first frame after the last one
        callback: Called when a non-looping animation runs past its last frame
    """

    images: Sequence[ImageName]
    looping: bool = True
    callback: Optional[Callable[[], None]] = field(default=None, repr=False)

    def __post_init__(self):
        if not self.images:
            raise ValueError("An animation needs at least one image")

    @property
    def frame_count(self) -> int:
        return len(self.images)
