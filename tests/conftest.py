import numpy as np
import pytest

from easy_stitch.models.image import Image
from easy_stitch.repositories.image_repository import ImageRepository


def random_rgba(width: int, height: int, seed: int = 0) -> np.ndarray:
    """Random RGBA pixels with every channel in [1, 255], so blank (zero) areas stand out."""
    rng = np.random.default_rng(seed)
    return rng.integers(1, 255, size=(height, width, 4), dtype=np.uint8, endpoint=True)


@pytest.fixture
def make_image():
    """Factory fixture: make_image(width, height, seed=0) -> Image."""
    def _make(width: int, height: int, seed: int = 0) -> Image:
        return Image(pixels=random_rgba(width, height, seed))
    return _make


@pytest.fixture
def write_png(tmp_path):
    """Factory fixture writing a random RGBA PNG and returning (path, pixels)."""
    repo = ImageRepository()

    def _write(name: str, width: int, height: int, seed: int = 0):
        pixels = random_rgba(width, height, seed)
        path = tmp_path / name
        repo.save(Image(pixels=pixels, path=path))
        return path, pixels
    return _write
