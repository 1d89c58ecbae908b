from __future__ import annotations

import enum


class TileStyle(str, enum.Enum):
    FLAT = "base"
    BOUNCY = "bounce"

    def __str__(self) -> str:
        return self.value


class RenderState(enum.Enum):
    EMPTY = "empty"
    TILING = "tiling"
    FINALIZED = "finalized"


class RenderError(Exception):
    """Base class for every failure that aborts a render."""


class EncodingCapacityExceeded(RenderError):
    pass


class AssetLoadError(RenderError):
    pass


class OutputWriteError(RenderError):
    pass


class GeometryError(RenderError):
    """Internal invariant violated: bad matrix shape or out-of-bounds copy."""


class VerificationError(RenderError):
    pass
