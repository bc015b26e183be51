from __future__ import annotations
from pathlib import Path
from typing import List, Sequence, Tuple, Union
import logging
import os

import numpy as np
from dotenv import load_dotenv

from ..errors import CapacityExceeded, ConfigError, InvalidInput
from ..models.axis import Axis
from ..models.image import Image

logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()

U32_MAX = 2**32 - 1
RGBA_CHANNELS = 4


def max_dimension_from_env() -> int:
    """MAX_CANVAS_DIMENSION as a positive int; unset or empty means U32_MAX."""
    raw = os.getenv("MAX_CANVAS_DIMENSION", "").strip()
    if not raw:
        return U32_MAX
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"MAX_CANVAS_DIMENSION must be a positive integer, got {raw!r}") from None
    if value < 1:
        raise ConfigError(f"MAX_CANVAS_DIMENSION must be a positive integer, got {value}")
    return value


class StitchingService:
    """
    Concatenates RGBA images along an axis into one freshly allocated canvas.

    *   Pure: inputs are only read, the output is a new Image.
    *   Shorter images are top-aligned (horizontal) or left-aligned
        (vertical); whatever they don't cover stays transparent black.
    """

    def __init__(self, max_dimension: int | None = None):
        if max_dimension is None:
            max_dimension = max_dimension_from_env()
        self.MAX_DIMENSION = max_dimension
        self.MAX_BYTES = np.iinfo(np.intp).max

    @staticmethod
    def _check_rgba(img: Image, index: int) -> None:
        pixels = img.pixels
        if pixels.ndim != 3 or pixels.shape[2] != RGBA_CHANNELS or pixels.dtype != np.uint8:
            raise InvalidInput(
                f"Image #{index} must be (H, W, 4) uint8 RGBA, "
                f"got shape {pixels.shape} dtype {pixels.dtype}"
            )

    def _validate(self, images: Sequence[Image]) -> None:
        if not images:
            raise InvalidInput("Cannot stitch an empty image sequence")
        for i, img in enumerate(images):
            self._check_rgba(img, i)

    def compute_canvas_size(self, images: Sequence[Image], axis: Axis) -> Tuple[int, int]:
        """
        Args:
            images: Non-empty sequence of RGBA images.
            axis: Layout direction.

        Returns:
            (width, height) of the stitched canvas.

        Raises:
            InvalidInput: empty sequence or non-RGBA buffer.
            CapacityExceeded: canvas too large to address.
        """
        self._validate(images)
        extent = [0, 0]  # (rows, columns), matching array axes
        extent[axis.primary] = sum(int(img.pixels.shape[axis.primary]) for img in images)
        extent[axis.secondary] = max(int(img.pixels.shape[axis.secondary]) for img in images)
        height, width = extent

        if width > self.MAX_DIMENSION or height > self.MAX_DIMENSION:
            raise CapacityExceeded(
                f"Stitched canvas {width}x{height} exceeds the maximum dimension {self.MAX_DIMENSION}"
            )
        if width * height * RGBA_CHANNELS > self.MAX_BYTES:
            raise CapacityExceeded(f"Stitched canvas {width}x{height} is too large to allocate")
        return width, height

    @staticmethod
    def compute_offsets(images: Sequence[Image], axis: Axis) -> List[int]:
        """Offset of each image along the stitching axis (cumulative sum of the ones before it)."""
        offsets, current = [], 0
        for img in images:
            offsets.append(current)
            current += int(img.pixels.shape[axis.primary])
        return offsets

    def stitch(
        self,
        images: Sequence[Image],
        axis: Axis = Axis.HORIZONTAL,
        path: Union[str, Path, None] = None,
    ) -> Image:
        """
        Lay *images* out along *axis* with no gaps, no scaling and no blending.

        Returns:
            A new Image; its path is *path* (the encoder's destination), if given.
        """
        images = list(images)
        width, height = self.compute_canvas_size(images, axis)
        offsets = self.compute_offsets(images, axis)
        logger.info(f"Stitching {len(images)} image(s) {axis.value}ly into {width}x{height}")
        logger.debug(f"Offsets along {axis.value} axis: {offsets}")

        try:
            canvas = np.zeros((height, width, RGBA_CHANNELS), dtype=np.uint8)
        except MemoryError as err:
            raise CapacityExceeded(f"Not enough memory for a {width}x{height} canvas") from err
        for img, offset in zip(images, offsets):
            rows, cols = img.pixels.shape[:2]
            region = [slice(0, rows), slice(0, cols)]
            region[axis.primary] = slice(offset, offset + img.pixels.shape[axis.primary])
            canvas[tuple(region)] = img.pixels

        return Image(pixels=canvas, path=Path(path) if path is not None else None)
