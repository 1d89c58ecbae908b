from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence, Union

import numpy as np

from . import config
from .images import load_sheet, save_image
from .models import GeometryError, RenderState, TileStyle, VerificationError
from .patterns import qr_version, stamp_patterns
from .qrencode import decode_canvas, make_matrix
from .tilers import Tiler, make_tiler

logger = logging.getLogger(__name__)

MatrixLike = Union[np.ndarray, Sequence[Sequence[bool]]]


def as_matrix(matrix: MatrixLike) -> np.ndarray:
    """Normalize a module matrix to a read-only square bool array."""
    try:
        arr = np.array(matrix, dtype=bool)
    except ValueError as exc:  # ragged rows
        raise GeometryError(f"module matrix is not rectangular: {exc}") from exc
    if arr.ndim != 2 or arr.size == 0:
        raise GeometryError(f"module matrix must be a non-empty 2-D grid, got shape {arr.shape}")
    if arr.shape[0] != arr.shape[1]:
        raise GeometryError(f"module matrix must be square, got {arr.shape[0]}x{arr.shape[1]}")
    arr.flags.writeable = False
    return arr


class RenderPipeline:
    """
    One-shot renderer: EMPTY -> TILING -> FINALIZED.

    Modules are tiled row-major (row 0 left to right, then row 1, ...). For
    any style other than the flat one, finder and alignment patterns are
    re-stamped on the finalized canvas.
    """

    def __init__(
        self,
        style: TileStyle = TileStyle.FLAT,
        block_size: Optional[int] = None,
        sheet_path: Union[str, Path] = config.DEFAULT_SHEET,
    ) -> None:
        self.style = TileStyle(style)
        self.block_size = block_size
        self.sheet_path = sheet_path
        self.state = RenderState.EMPTY
        self.tiler: Optional[Tiler] = None

    def _build_tiler(self, width: int) -> Tiler:
        if self.style == TileStyle.BOUNCY:
            if self.block_size is not None and self.block_size != config.SPRITE_BLOCK_SIZE:
                logger.warning(
                    "block size %d ignored for the %s style; using the sprite size %d",
                    self.block_size,
                    self.style,
                    config.SPRITE_BLOCK_SIZE,
                )
            return make_tiler(self.style, width, sheet=load_sheet(self.sheet_path))
        block_size = self.block_size if self.block_size is not None else config.DEFAULT_BLOCK_SIZE
        return make_tiler(self.style, width, block_size=block_size)

    def render(self, matrix: MatrixLike) -> np.ndarray:
        if self.state != RenderState.EMPTY:
            raise RuntimeError(f"Render pipeline already used (state={self.state.value})")
        modules = as_matrix(matrix)
        width = modules.shape[0]
        tiler = self._build_tiler(width)
        self.tiler = tiler

        self.state = RenderState.TILING
        for y, row in enumerate(modules):
            for x, value in enumerate(row):
                tiler.tile(x, y, bool(value))
        image = tiler.finalize()
        self.state = RenderState.FINALIZED

        if self.style != TileStyle.FLAT:
            stamp_patterns(image, tiler.block_size)
        logger.info(
            "rendered %dx%d modules as %s (%dx%d px)",
            width,
            width,
            self.style,
            image.shape[1],
            image.shape[0],
        )
        return image


def render_matrix(
    matrix: MatrixLike,
    style: TileStyle = TileStyle.FLAT,
    block_size: Optional[int] = None,
    sheet_path: Union[str, Path] = config.DEFAULT_SHEET,
) -> np.ndarray:
    return RenderPipeline(style, block_size=block_size, sheet_path=sheet_path).render(matrix)


def render_content(
    content: str,
    style: TileStyle = TileStyle.FLAT,
    block_size: Optional[int] = None,
    sheet_path: Union[str, Path] = config.DEFAULT_SHEET,
    error: str = config.DEFAULT_ERROR,
) -> np.ndarray:
    matrix = make_matrix(content, error=error)
    return render_matrix(matrix, style, block_size=block_size, sheet_path=sheet_path)


def render_to_file(
    content: str,
    target: Union[str, Path] = config.DEFAULT_TARGET,
    style: TileStyle = TileStyle.FLAT,
    block_size: Optional[int] = None,
    sheet_path: Union[str, Path] = config.DEFAULT_SHEET,
    verify: bool = False,
) -> Path:
    """Encode, render and write `content`; nothing is written if any step fails."""
    matrix = make_matrix(content)
    pipeline = RenderPipeline(style, block_size=block_size, sheet_path=sheet_path)
    image = pipeline.render(matrix)
    if verify:
        assert pipeline.tiler is not None
        decoded = decode_canvas(image, block_size=pipeline.tiler.block_size)
        if decoded != content:
            raise VerificationError(
                f"rendered version {qr_version(matrix.shape[0])} code decoded as {decoded!r}"
            )
        logger.info("read-back check passed")
    return save_image(image, target)
