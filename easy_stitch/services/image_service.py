from pathlib import Path
from typing import Iterable, List, Union
import logging

from ..models.image import Image
from ..repositories.image_repository import ImageRepository

logger = logging.getLogger(__name__)


class ImageService:
    """I/O helpers.  No compositing logic."""
    def __init__(self):
        self.image_repository = ImageRepository()

    def load(self, path: Union[str, Path]) -> Image:
        """Load a single image from disk into an RGBA Image object."""
        img = self.image_repository.load(path)
        logger.info(f"Loaded {img.path} ({img.width}x{img.height})")
        return img

    def load_all(self, paths: Iterable[Union[str, Path]]) -> List[Image]:
        """
        Decode every path, in order, before anything is stitched.
        The first unreadable file aborts the whole batch.
        """
        return [self.load(p) for p in paths]

    def save(self, image: Image) -> None:
        """
        Business-level method to save the image to its path.
        """
        self.image_repository.save(image)
        logger.info(f"Saved {image.path} ({image.width}x{image.height})")
