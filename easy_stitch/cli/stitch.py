import argparse
import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

from ..errors import OutputExists, StitchError
from ..models.stitch_config import DEFAULT_OUTPUT_PATH, StitchConfig
from ..pipeline.stitch_files import stitch_files

# Load environment variables first
load_dotenv()

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    # --- Centralized Logging Configuration ---
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="easy-stitch",
        description="Concatenate images side-by-side (default) or stacked vertically.",
    )
    ap.add_argument("files", metavar="FILE", nargs="+",
                    help="input images, stitched in the order given")
    ap.add_argument("-o", "--output", default=None,
                    help=f"output image path (default: {DEFAULT_OUTPUT_PATH})")
    ap.add_argument("-v", "--vertical", action="store_true",
                    help="stack images top-to-bottom instead of left-to-right")
    ap.add_argument("-f", "--force", action="store_true",
                    help="overwrite the output file if it already exists")
    ap.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "WARNING"),
                    help="logging level (DEBUG, INFO, WARNING, ...)")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    config = StitchConfig.from_args(args)
    try:
        stitch_files(config)
    except OutputExists as err:
        # existing output is reported, exit status stays 0
        print(f"Error: {err}")
        return 0
    except StitchError as err:
        logger.debug("Stitching failed", exc_info=True)
        print(f"Error: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
