from __future__ import annotations

import logging
from typing import Optional

import cv2
import numpy as np
import segno

from . import config
from .models import EncodingCapacityExceeded

logger = logging.getLogger(__name__)


def make_matrix(content: str, error: str = config.DEFAULT_ERROR) -> np.ndarray:
    """Encode `content` into a square boolean module matrix (no quiet zone)."""
    try:
        qr = segno.make(content, error=error, micro=False, boost_error=False)
    except segno.DataOverflowError as exc:
        raise EncodingCapacityExceeded(
            f"{len(content)} characters do not fit a QR code at level '{error.upper()}': {exc}"
        ) from exc
    matrix = np.array(qr.matrix, dtype=bool)
    logger.info("encoded %d characters as QR version %s (%s)", len(content), qr.version, qr.error)
    return matrix


def decode_canvas(
    canvas: np.ndarray,
    quiet_zone: int = config.DEFAULT_QUIET_ZONE,
    block_size: int = 1,
) -> Optional[str]:
    """
    Read a rendered canvas back with OpenCV's QR detector.
    Returns the decoded text or None when nothing could be read.
    """
    pad = quiet_zone * block_size
    bordered = cv2.copyMakeBorder(
        canvas, pad, pad, pad, pad, cv2.BORDER_CONSTANT, value=config.COLOR_LIGHT
    )
    if bordered.ndim == 3 and bordered.shape[2] == 4:
        gray = cv2.cvtColor(bordered, cv2.COLOR_BGRA2GRAY)
    elif bordered.ndim == 3:
        gray = cv2.cvtColor(bordered, cv2.COLOR_BGR2GRAY)
    else:
        gray = bordered
    detector = cv2.QRCodeDetector()
    data, points, _ = detector.detectAndDecode(gray)
    if points is None or not data:
        return None
    return data
