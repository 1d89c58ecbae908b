from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

import cv2
import numpy as np

from .models import AssetLoadError, OutputWriteError

logger = logging.getLogger(__name__)


def load_sheet(path: str | Path) -> np.ndarray:
    """Load a sprite sheet as a BGRA uint8 array."""
    path = Path(path)
    if not path.is_file():
        raise AssetLoadError(f"Sprite sheet not found: {path}")
    sheet = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if sheet is None:
        raise AssetLoadError(f"Unable to decode sprite sheet {path}")
    if sheet.dtype != np.uint8:
        raise AssetLoadError(f"Sprite sheet {path} must be 8-bit, got {sheet.dtype}")
    if sheet.ndim == 2:
        sheet = cv2.cvtColor(sheet, cv2.COLOR_GRAY2BGRA)
    elif sheet.shape[2] == 3:
        sheet = cv2.cvtColor(sheet, cv2.COLOR_BGR2BGRA)
    logger.debug("loaded sprite sheet %s (%dx%d)", path, sheet.shape[1], sheet.shape[0])
    return sheet


def encode_image(canvas: np.ndarray, suffix: str) -> bytes:
    """Encode a canvas into file bytes; the format follows `suffix` (e.g. '.png')."""
    if not suffix:
        raise OutputWriteError("Output path has no extension; cannot pick an image format")
    try:
        ok, buf = cv2.imencode(suffix, canvas)
    except cv2.error as exc:
        raise OutputWriteError(f"Unable to encode image as '{suffix}': {exc}") from exc
    if not ok:
        raise OutputWriteError(f"Unable to encode image as '{suffix}'")
    return buf.tobytes()


def _umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def save_image(canvas: np.ndarray, path: str | Path) -> Path:
    """
    Encode in memory, write a sibling temp file and rename it into place, so a
    failed encode or write never leaves a partial file behind.
    """
    path = Path(path)
    data = encode_image(canvas, path.suffix.lower())
    tmp_path = None
    try:
        # Sibling temp file so the final rename stays on one filesystem
        with tempfile.NamedTemporaryFile(
            dir=path.parent, prefix=f".{path.stem}.", suffix=".tmp", delete=False
        ) as tmp:
            tmp_path = tmp.name
            tmp.write(data)
        os.chmod(tmp_path, 0o666 & ~_umask())
        os.replace(tmp_path, path)
    except OSError as exc:
        if tmp_path and os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise OutputWriteError(f"Unable to write {path}: {exc}") from exc
    logger.info("wrote %d bytes to %s", len(data), path)
    return path
