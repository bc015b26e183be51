class StitchError(Exception):
    """Base class for every failure reported by easy-stitch."""


class DecodeError(StitchError, OSError):
    """An input file could not be read or is not a supported image."""


class EncodeError(StitchError, OSError):
    """The stitched image could not be written to the output path."""


class InvalidInput(StitchError, ValueError):
    """Nothing to stitch, or a pixel buffer is not 8-bit RGBA."""


class CapacityExceeded(StitchError, OverflowError):
    """The combined canvas would be larger than can be addressed."""


class OutputExists(StitchError, FileExistsError):
    """The output file already exists and overwriting was not allowed."""

    def __init__(self, path):
        super().__init__(f"file '{path}' already exists, use -f to overwrite")
        self.path = path


class ConfigError(StitchError, ValueError):
    """An environment setting holds a value that cannot be used."""
