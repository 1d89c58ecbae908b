import logging

import cv2
import numpy as np
import pytest

from qrtile import config

SPRITE = config.SPRITE_BLOCK_SIZE
# Rows tinted on phase-1 frames; kept at the top edge so module centers stay clean.
BAND = 6


def make_sheet() -> np.ndarray:
    """Four-frame BGRA strip: light/phase0, light/phase1, dark/phase0, dark/phase1."""
    sheet = np.zeros((SPRITE, 4 * SPRITE, 4), dtype=np.uint8)
    sheet[:, 0:SPRITE] = config.COLOR_LIGHT
    sheet[:, SPRITE : 2 * SPRITE] = config.COLOR_LIGHT
    sheet[:BAND, SPRITE : 2 * SPRITE] = (200, 200, 200, 255)
    sheet[:, 2 * SPRITE : 3 * SPRITE] = config.COLOR_DARK
    sheet[:, 3 * SPRITE :] = config.COLOR_DARK
    sheet[:BAND, 3 * SPRITE :] = (60, 60, 60, 255)
    return sheet


def make_gapped_sheet() -> np.ndarray:
    """
    Frames that keep module centers readable but break the solid runs a
    detector needs to find position markers: dark frames are inset squares
    with a light border and a light hole, light frames carry a dark dot.
    """
    sheet = np.zeros((SPRITE, 4 * SPRITE, 4), dtype=np.uint8)
    sheet[:] = config.COLOR_LIGHT
    margin, hole, dot = 3, 6, 8
    mid = SPRITE // 2
    # light/phase1: small dark dot
    lo, hi = mid - dot // 2, mid + dot // 2
    sheet[lo:hi, SPRITE + lo : SPRITE + hi] = config.COLOR_DARK
    for x0 in (2 * SPRITE, 3 * SPRITE):
        sheet[margin : SPRITE - margin, x0 + margin : x0 + SPRITE - margin] = config.COLOR_DARK
    # dark/phase1: light hole in the core
    x0 = 3 * SPRITE
    lo, hi = mid - hole // 2, mid + hole // 2
    sheet[lo:hi, x0 + lo : x0 + hi] = config.COLOR_LIGHT
    return sheet


@pytest.fixture
def sheet():
    return make_sheet()


@pytest.fixture
def sheet_path(tmp_path):
    path = tmp_path / "sheet.png"
    assert cv2.imwrite(str(path), make_sheet())
    return path


@pytest.fixture
def gapped_sheet_path(tmp_path):
    path = tmp_path / "gapped.png"
    assert cv2.imwrite(str(path), make_gapped_sheet())
    return path


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("qrtile")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
