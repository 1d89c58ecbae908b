from __future__ import annotations

import argparse
import sys
from typing import List

from . import config
from .logging_config import setup_logging
from .models import RenderError, TileStyle
from .render import render_to_file


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="qrtile", description="Render text as a styled QR code image")
    parser.add_argument("-t", "--target", default=config.DEFAULT_TARGET, help="Output file name")
    parser.add_argument(
        "-s",
        "--style",
        type=TileStyle,
        choices=list(TileStyle),
        default=TileStyle.FLAT,
        help="Tiler style: base, bounce (ignores block size)",
    )
    parser.add_argument(
        "-b",
        "--block-size",
        type=int,
        default=None,
        help=f"Block size in pixels (default {config.DEFAULT_BLOCK_SIZE})",
    )
    parser.add_argument("--sheet", default=config.DEFAULT_SHEET, help="Sprite sheet for the bounce style")
    parser.add_argument("--verify", action="store_true", help="Decode the rendered code before writing it")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...)")
    parser.add_argument("--log-file", default=None, help="Also write the log to this file")
    parser.add_argument("content", help="Content to encode (must be last)")
    return parser


def main(argv: List[str] | None = None) -> None:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.block_size is not None and args.block_size <= 0:
        parser.error("block-size must be > 0")
    try:
        setup_logging(args.log_level, log_file=args.log_file)
    except (ValueError, OSError) as exc:
        parser.error(str(exc))

    try:
        path = render_to_file(
            args.content,
            target=args.target,
            style=args.style,
            block_size=args.block_size,
            sheet_path=args.sheet,
            verify=args.verify,
        )
    except RenderError as exc:
        print(f"[qrtile] error: {exc}", file=sys.stderr)
        sys.exit(1)
    print(f"[qrtile] wrote {path} style={args.style}")


if __name__ == "__main__":
    main()
