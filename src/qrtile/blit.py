from __future__ import annotations

import numpy as np

from .models import GeometryError


def _check_rect(buf: np.ndarray, x0: int, y0: int, width: int, height: int, what: str) -> None:
    h, w = buf.shape[:2]
    if x0 < 0 or y0 < 0 or width < 0 or height < 0 or x0 + width > w or y0 + height > h:
        raise GeometryError(
            f"{what} rect ({x0}, {y0}, {width}x{height}) outside {w}x{h} buffer"
        )


def copy_paste(
    src: np.ndarray,
    dst: np.ndarray,
    src_x: int,
    src_y: int,
    width: int,
    height: int,
    dst_x: int,
    dst_y: int,
) -> None:
    """Copy a width x height pixel rectangle from `src` into `dst` verbatim."""
    _check_rect(src, src_x, src_y, width, height, "source")
    _check_rect(dst, dst_x, dst_y, width, height, "destination")
    if src.shape[2:] != dst.shape[2:]:
        raise GeometryError(f"channel mismatch: {src.shape[2:]} vs {dst.shape[2:]}")
    dst[dst_y : dst_y + height, dst_x : dst_x + width] = src[
        src_y : src_y + height, src_x : src_x + width
    ]


def solid_block(block_size: int, color: tuple[int, ...]) -> np.ndarray:
    """Return a square BGRA block filled with `color`."""
    return np.full((block_size, block_size, len(color)), color, dtype=np.uint8)
