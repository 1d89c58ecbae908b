"""
Finder and alignment pattern regeneration.

Stylized tilers can make the QR position markers hard to read. The helpers
here rebuild them as flat black/white blocks and stamp them back over a
finished canvas at the positions mandated for the canvas' QR version.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

import numpy as np

from . import config
from .blit import copy_paste, solid_block
from .models import GeometryError

logger = logging.getLogger(__name__)

# Versions where the even-rounded step drifts from the ISO/IEC 18004 table.
_STEP_OVERRIDES = {36: 26, 39: 28}


def _concentric_block(modules: int, block_size: int, rings: int = 3) -> np.ndarray:
    """Alternate dark/light squares inset one module at a time, dark outermost."""
    black = solid_block(block_size, config.COLOR_DARK)
    white = solid_block(block_size, config.COLOR_LIGHT)
    side = modules * block_size
    block = np.zeros((side, side, len(config.COLOR_DARK)), dtype=np.uint8)
    for inset in range(rings):
        src = black if inset % 2 == 0 else white
        for y in range(inset, modules - inset):
            for x in range(inset, modules - inset):
                copy_paste(src, block, 0, 0, block_size, block_size, x * block_size, y * block_size)
    block.flags.writeable = False
    return block


def finder_block(block_size: int) -> np.ndarray:
    """7x7 finder: dark ring, light ring, 3x3 dark core."""
    return _concentric_block(config.FINDER_MODULES, block_size)


def alignment_block(block_size: int) -> np.ndarray:
    """5x5 alignment: dark ring, light ring, single dark center."""
    return _concentric_block(config.ALIGNMENT_MODULES, block_size)


def qr_version(size: int) -> int:
    """QR version for a grid of `size` modules per side (17 + 4 * version)."""
    version, rem = divmod(size - 17, 4)
    if rem or not 1 <= version <= config.MAX_VERSION:
        raise GeometryError(f"{size} modules per side is not a valid QR grid size")
    return version


def alignment_coords(version: int, size: int) -> List[int]:
    if version == 1:
        return []
    divs = 2 + version // 7
    total_dist = size - 7 - 6
    divisor = 2 * (divs - 1)
    # Step must be even, for alignment patterns to agree with timing patterns
    step = _STEP_OVERRIDES.get(version, ((total_dist + divisor // 2 + 1) // divisor) * 2)
    coords = [6]
    for i in range(divs - 2, -1, -1):
        coords.append(size - 7 - i * step)
    return coords


def _grid_size(canvas: np.ndarray, block_size: int) -> int:
    h, w = canvas.shape[:2]
    if h != w or w % block_size:
        raise GeometryError(f"canvas {w}x{h} is not a square multiple of {block_size}")
    return w // block_size


def stamp_finders(canvas: np.ndarray, block_size: int) -> None:
    side = config.FINDER_MODULES * block_size
    width = canvas.shape[1]
    height = canvas.shape[0]
    positions = [
        (0, 0),  # top-left
        (width - side, 0),  # top-right
        (0, height - side),  # bottom-left
    ]
    block = finder_block(block_size)
    for px, py in positions:
        copy_paste(block, canvas, 0, 0, side, side, px, py)


def alignment_centers(size: int) -> List[Tuple[int, int]]:
    """Module coordinates of every alignment pattern for a `size` grid."""
    coords = alignment_coords(qr_version(size), size)
    corners = {(6, 6), (6, size - 7), (size - 7, 6)}
    return [(x, y) for x in coords for y in coords if (x, y) not in corners]


def stamp_alignments(canvas: np.ndarray, block_size: int) -> List[Tuple[int, int]]:
    size = _grid_size(canvas, block_size)
    side = config.ALIGNMENT_MODULES * block_size
    half = config.ALIGNMENT_MODULES // 2
    block = alignment_block(block_size)
    centers = alignment_centers(size)
    for x, y in centers:
        copy_paste(
            block,
            canvas,
            0,
            0,
            side,
            side,
            x * block_size - half * block_size,
            y * block_size - half * block_size,
        )
    return centers


def stamp_patterns(canvas: np.ndarray, block_size: int) -> List[Tuple[int, int]]:
    """Stamp finders and alignment patterns; returns the alignment centers used."""
    size = _grid_size(canvas, block_size)
    stamp_finders(canvas, block_size)
    centers = stamp_alignments(canvas, block_size)
    logger.debug(
        "stamped 3 finders and %d alignment patterns on version %d grid",
        len(centers),
        qr_version(size),
    )
    return centers
