"""Image manager: loads every sprite up front and hands out sized handles."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

import numpy as np
from numpy.typing import NDArray

from downhill.assets.sprites import make_sprite_loader
from downhill.core.constants import ImageName
from downhill.exceptions import AssetLoadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageHandle:
    """A loaded sprite with its size."""

    name: ImageName
    data: NDArray[np.uint8]

    @property
    def width(self) -> int:
        return self.data.shape[1]

    @property
    def height(self) -> int:
        return self.data.shape[0]


class ImageManager:
    """Loads sprites asynchronously and looks them up by name.

    Lookups return None until the image has been loaded, so callers
    can skip drawing and collision for anything not ready yet.
    """

    def __init__(
        self,
        loader: Optional[Callable[[ImageName], NDArray[np.uint8]]] = None,
    ):
        self._loader = loader or make_sprite_loader()
        self._images: dict[ImageName, ImageHandle] = {}

    async def load_images(self, names: Iterable[ImageName]) -> None:
        """Load all the given images.

        Args:
            names: Image names to load

        Raises:
            AssetLoadError: If any image fails to load
        """
        names = list(names)
        results = await asyncio.gather(
            *(asyncio.to_thread(self._loader, name) for name in names),
            return_exceptions=True,
        )

        failed = []
        for name, result in zip(names, results):
            if isinstance(result, Exception):
                logger.error(f"Failed to load image {name.value}: {result}")
                failed.append(name.value)
                continue
            self._images[name] = ImageHandle(name=name, data=result)

        if failed:
            raise AssetLoadError(f"Could not load images: {', '.join(failed)}")

        logger.info(f"Loaded {len(names)} images")

    def get_image(self, name: ImageName) -> Optional[ImageHandle]:
        """Get a loaded image, or None if it is not loaded yet."""
        return self._images.get(name)

    def is_loaded(self, name: ImageName) -> bool:
        return name in self._images

    @property
    def loaded_count(self) -> int:
        return len(self._images)
