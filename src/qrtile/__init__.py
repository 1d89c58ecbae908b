"""Styled QR code rendering: tile strategies and finder/alignment re-stamping."""

__all__ = [
    "config",
    "models",
    "blit",
    "tilers",
    "patterns",
    "qrencode",
    "images",
    "render",
    "logging_config",
    "cli",
]
