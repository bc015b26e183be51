from pathlib import Path
from typing import Union
import os
import tempfile
import numpy as np
import cv2
from PIL import Image as PILImage

from ..models.image import Image
from ..errors import DecodeError, EncodeError

# Pillow writers that cannot store an alpha channel; alpha is dropped for these.
RGB_ONLY_FORMATS = {"JPEG", "MPO", "PPM", "PCX", "EPS"}


class ImageRepository:
    """
    Handles file I/O for Image entities.
    Decoding goes through OpenCV, encoding through Pillow.
    """

    # ---------- private helpers ----------
    @staticmethod
    def _to_uint8(arr: np.ndarray, path: Path) -> np.ndarray:
        if arr.dtype == np.uint8:
            return arr
        if arr.dtype == np.uint16:
            return np.round(arr / 257.0).astype(np.uint8)
        if np.issubdtype(arr.dtype, np.floating):
            return np.round(np.clip(arr, 0.0, 1.0) * 255.0).astype(np.uint8)
        raise DecodeError(f"Unsupported sample type {arr.dtype}: {path}")

    @staticmethod
    def _to_rgba(arr: np.ndarray, path: Path) -> np.ndarray:
        """
        OpenCV hands back GRAY (H, W), BGR (H, W, 3) or BGRA (H, W, 4).
        Everything leaves here as RGBA.
        """
        if arr.ndim == 2 or (arr.ndim == 3 and arr.shape[2] == 1):
            return cv2.cvtColor(arr, cv2.COLOR_GRAY2RGBA)
        if arr.ndim == 3 and arr.shape[2] == 3:
            return cv2.cvtColor(arr, cv2.COLOR_BGR2RGBA)
        if arr.ndim == 3 and arr.shape[2] == 4:
            return cv2.cvtColor(arr, cv2.COLOR_BGRA2RGBA)
        raise DecodeError(f"Unsupported channel layout {arr.shape}: {path}")

    @staticmethod
    def _format_for(path: Path) -> str:
        """Pillow format name registered for the path's extension."""
        PILImage.init()
        fmt = PILImage.registered_extensions().get(path.suffix.lower())
        if fmt is None or fmt not in PILImage.SAVE:
            raise EncodeError(f"Unknown or unwritable image format '{path.suffix}': {path}")
        return fmt

    @staticmethod
    def _default_file_mode() -> int:
        # temp files are created 0600; give the output the usual umask-based mode
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask

    # ---------- public API ----------
    def load(self, path: Union[str, Path]) -> Image:
        path = Path(path)
        if not path.is_file():
            raise DecodeError(f"Image not found: {path}")

        try:
            arr = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
        except cv2.error as err:
            raise DecodeError(f"Image unreadable: {path}: {err}") from err

        if arr is None:
            raise DecodeError(f"Image unreadable or unsupported format: {path}")

        arr = self._to_rgba(self._to_uint8(arr, path), path)
        return Image(pixels=np.ascontiguousarray(arr), path=path)

    def save(self, image: Image) -> None:
        """
        Encode to a temporary file next to the destination, then move it
        into place. A failed encode leaves any existing file untouched.
        """
        if image.path is None:
            raise EncodeError("Image has no destination path")
        path = Path(image.path)
        fmt = self._format_for(path)

        pil_img = PILImage.fromarray(image.pixels)
        if fmt in RGB_ONLY_FORMATS:
            pil_img = pil_img.convert("RGB")

        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                dir=path.parent, prefix=f".{path.stem}.", suffix=path.suffix, delete=False
            ) as tmp:
                tmp_name = tmp.name
                pil_img.save(tmp, format=fmt)
            if path.exists():
                os.chmod(tmp_name, path.stat().st_mode & 0o777)
            else:
                os.chmod(tmp_name, self._default_file_mode())
            os.replace(tmp_name, path)
            tmp_name = None
        except (OSError, ValueError, KeyError) as err:
            raise EncodeError(f"Could not write {path}: {err}") from err
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.remove(tmp_name)
