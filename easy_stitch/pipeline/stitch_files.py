"""
Stitch Files Pipeline
Decodes every input, stitches them along the configured axis and writes
the result. The overwrite guard runs first so an existing output is never touched.
"""

from __future__ import annotations

import logging

from ..models.image import Image
from ..models.stitch_config import StitchConfig
from ..services.image_service import ImageService
from ..services.stitching_service import StitchingService

logger = logging.getLogger(__name__)


def stitch_files(
    config: StitchConfig,
    *,
    image_service: ImageService | None = None,
    stitching_service: StitchingService | None = None,
) -> Image:
    """
    Run the whole load -> stitch -> save sequence for *config*.

    Raises:
        OutputExists: output present and config.force is off (nothing is read or written).
        InvalidInput: no inputs.
        DecodeError: an input could not be decoded.
        CapacityExceeded: the combined canvas is too large.
        EncodeError: the result could not be written.
        ConfigError: MAX_CANVAS_DIMENSION is not a positive integer.
    """
    image_service = image_service or ImageService()
    stitching_service = stitching_service or StitchingService()

    config.validate()

    images = image_service.load_all(config.inputs)
    stitched = stitching_service.stitch(images, config.axis, path=config.output)
    # inputs are no longer needed once the canvas is populated
    del images

    image_service.save(stitched)
    logger.info(f"Wrote {len(config.inputs)} image(s) to {config.output}")
    return stitched
