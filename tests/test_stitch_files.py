import numpy as np
import pytest

from easy_stitch.errors import CapacityExceeded, DecodeError, OutputExists
from easy_stitch.models.stitch_config import StitchConfig
from easy_stitch.pipeline.stitch_files import stitch_files
from easy_stitch.repositories.image_repository import ImageRepository
from easy_stitch.services.image_service import ImageService
from easy_stitch.services.stitching_service import StitchingService


def test_stitches_and_writes_output(write_png, tmp_path):
    a, a_pixels = write_png("a.png", 2, 3, seed=1)
    b, b_pixels = write_png("b.png", 3, 2, seed=2)
    out = tmp_path / "out.png"

    stitched = stitch_files(StitchConfig(inputs=[a, b], output=out))

    assert stitched.path == out
    written = ImageRepository().load(out)
    assert (written.width, written.height) == (5, 3)
    np.testing.assert_array_equal(written.pixels[:, :2], a_pixels)
    np.testing.assert_array_equal(written.pixels[:2, 2:], b_pixels)
    assert not written.pixels[2:, 2:].any()


def test_vertical(write_png, tmp_path):
    a, _ = write_png("a.png", 4, 1, seed=1)
    b, _ = write_png("b.png", 2, 2, seed=2)
    out = tmp_path / "out.png"

    stitch_files(StitchConfig(inputs=[a, b], output=out, vertical=True))

    written = ImageRepository().load(out)
    assert (written.width, written.height) == (4, 3)


def test_existing_output_checked_before_decoding(tmp_path):
    out = tmp_path / "out.png"
    out.write_bytes(b"original")
    config = StitchConfig(inputs=[tmp_path / "does-not-exist.png"], output=out)

    with pytest.raises(OutputExists):
        stitch_files(config)
    assert out.read_bytes() == b"original"


def test_decode_error_leaves_no_output(write_png, tmp_path):
    a, _ = write_png("a.png", 1, 1)
    out = tmp_path / "out.png"

    with pytest.raises(DecodeError):
        stitch_files(StitchConfig(inputs=[a, tmp_path / "missing.png"], output=out))
    assert not out.exists()


def test_capacity_error_leaves_no_output(write_png, tmp_path):
    a, _ = write_png("a.png", 3, 1)
    out = tmp_path / "out.png"

    with pytest.raises(CapacityExceeded):
        stitch_files(
            StitchConfig(inputs=[a, a], output=out),
            image_service=ImageService(),
            stitching_service=StitchingService(max_dimension=5),
        )
    assert not out.exists()
