from __future__ import annotations

import logging
from typing import Optional, Tuple, Union

import numpy as np

from . import config
from .blit import copy_paste, solid_block
from .models import AssetLoadError, GeometryError, TileStyle

logger = logging.getLogger(__name__)


def _blank_canvas(width: int, block_size: int) -> np.ndarray:
    if width <= 0 or block_size <= 0:
        raise GeometryError(f"invalid canvas geometry: width={width} block_size={block_size}")
    side = width * block_size
    return np.zeros((side, side, len(config.COLOR_DARK)), dtype=np.uint8)


class FlatTiler:
    """Plain black/white modules of a configurable size."""

    style = TileStyle.FLAT

    def __init__(self, block_size: int, width: int) -> None:
        self.block_size = block_size
        self.image = _blank_canvas(width, block_size)
        self.black = solid_block(block_size, config.COLOR_DARK)
        self.white = solid_block(block_size, config.COLOR_LIGHT)

    def tile(self, x: int, y: int, value: bool) -> None:
        src = self.black if value else self.white
        copy_paste(
            src,
            self.image,
            0,
            0,
            self.block_size,
            self.block_size,
            x * self.block_size,
            y * self.block_size,
        )

    def finalize(self) -> np.ndarray:
        return self.image.copy()


class SpriteTiler:
    """
    Modules sampled from a sprite strip that alternates between two frames.

    The strip holds four frames of `SPRITE_BLOCK_SIZE` pixels side by side:
    light/phase 0, light/phase 1, dark/phase 0, dark/phase 1. The phase flips
    after every tile, whatever its value, so the output depends on the order
    modules are fed in (row-major for the render pipeline).
    """

    style = TileStyle.BOUNCY

    def __init__(self, sheet: np.ndarray, width: int) -> None:
        self.block_size = config.SPRITE_BLOCK_SIZE
        need_w = self.block_size * config.SPRITE_FRAMES
        if sheet.ndim != 3 or sheet.shape[0] < self.block_size or sheet.shape[1] < need_w:
            raise AssetLoadError(
                f"sprite sheet must be at least {need_w}x{self.block_size}, got shape {sheet.shape}"
            )
        if sheet.shape[2] != len(config.COLOR_DARK):
            raise AssetLoadError(f"sprite sheet must be BGRA, got {sheet.shape[2]} channels")
        self.sheet = sheet
        self.image = _blank_canvas(width, self.block_size)
        self.tiles_rendered = 0

    @property
    def phase(self) -> bool:
        return self.tiles_rendered % 2 == 1

    def frame_origin(self, index: int, value: bool) -> Tuple[int, int]:
        """Sheet origin of the frame used for the `index`-th tile."""
        return self.block_size * (index % 2 + 2 * int(bool(value))), 0

    def tile(self, x: int, y: int, value: bool) -> None:
        x0, y0 = self.frame_origin(self.tiles_rendered, value)
        copy_paste(
            self.sheet,
            self.image,
            x0,
            y0,
            self.block_size,
            self.block_size,
            x * self.block_size,
            y * self.block_size,
        )
        self.tiles_rendered += 1

    def finalize(self) -> np.ndarray:
        return self.image.copy()


Tiler = Union[FlatTiler, SpriteTiler]


def make_tiler(
    style: TileStyle,
    width: int,
    block_size: int = config.DEFAULT_BLOCK_SIZE,
    sheet: Optional[np.ndarray] = None,
) -> Tiler:
    logger.debug("creating %s tiler for %dx%d modules", style, width, width)
    if style == TileStyle.FLAT:
        return FlatTiler(block_size, width)
    if style == TileStyle.BOUNCY:
        if sheet is None:
            raise AssetLoadError("bounce style requires a sprite sheet")
        return SpriteTiler(sheet, width)
    raise ValueError(f"Unknown tile style '{style}'")
