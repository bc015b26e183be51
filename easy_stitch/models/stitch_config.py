from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import List
import argparse
import os

from dotenv import load_dotenv

from .axis import Axis
from ..errors import InvalidInput, OutputExists

# Load environment variables
load_dotenv()
DEFAULT_OUTPUT_PATH = os.getenv("DEFAULT_OUTPUT_PATH") or "output.png"


@dataclass
class StitchConfig:
    """
    Run configuration, built once at program entry and validated before
    any image is decoded.
    """
    inputs: List[Path]                      # ordered input files
    output: Path = field(default_factory=lambda: Path(DEFAULT_OUTPUT_PATH))
    vertical: bool = False                  # stack top-to-bottom instead of left-to-right
    force: bool = False                     # allow overwriting an existing output

    def __post_init__(self):
        self.inputs = [Path(p) for p in self.inputs]
        self.output = Path(self.output)

    @property
    def axis(self) -> Axis:
        return Axis.from_vertical_flag(self.vertical)

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "StitchConfig":
        return cls(
            inputs=list(args.files),
            output=Path(args.output) if args.output else Path(DEFAULT_OUTPUT_PATH),
            vertical=bool(args.vertical),
            force=bool(args.force),
        )

    def validate(self) -> None:
        if not self.inputs:
            raise InvalidInput("At least one input image is required")
        if self.output.exists() and not self.force:
            raise OutputExists(self.output)
