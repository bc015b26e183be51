from __future__ import annotations
from enum import Enum


class Axis(Enum):
    """
    Direction images are laid out in.

    Pixel arrays are indexed (row, column), so horizontal stitching sums
    along array axis 1 and takes the max along axis 0; vertical is the mirror.
    """
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def primary(self) -> int:
        """Array axis the images are concatenated along."""
        return 1 if self is Axis.HORIZONTAL else 0

    @property
    def secondary(self) -> int:
        """Array axis whose extent is the max over all images."""
        return 1 - self.primary

    @classmethod
    def from_vertical_flag(cls, vertical: bool) -> "Axis":
        return cls.VERTICAL if vertical else cls.HORIZONTAL
