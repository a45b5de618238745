"""Command line interface for the simple PC-6001 converter."""

from __future__ import annotations

import argparse
import sys

from .converter import MAX_HEIGHT, MAX_WIDTH, ConversionError, ConvertOptions, convert_file
from .palette import COLOR_SET_1, COLOR_SET_2, format_palette_text


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Convert an image into raw PC-6001 SCREEN 3 / SCREEN 4 VRAM bytes.\n"
            f"SCREEN 3 halves a {MAX_WIDTH}x{MAX_HEIGHT} source to 128 dots wide and maps it to 4 colors.\n"
            "SCREEN 4 thresholds every pixel to black or white (no downsampling).\n"
            "The output has no header; load it directly into VRAM.\n"
            f"Color set 1: {format_palette_text(COLOR_SET_1)}\n"
            f"Color set 2: {format_palette_text(COLOR_SET_2)}"
        ),
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument("input", help="Source image (any format Pillow can read)")
    parser.add_argument("output", help="Destination file for the raw VRAM bytes")
    parser.add_argument(
        "--mode",
        type=int,
        choices=[3, 4],
        default=3,
        help="Target screen mode (3: 4-color, 4: monochrome)",
    )
    parser.add_argument(
        "--color-set",
        type=int,
        choices=[1, 2],
        default=1,
        help="Palette used for SCREEN 3 color matching",
    )
    parser.add_argument(
        "--width",
        type=int,
        help=f"Expected source width (default {MAX_WIDTH}, even for SCREEN 3)",
    )
    parser.add_argument(
        "--height",
        type=int,
        help=f"Expected source height (default {MAX_HEIGHT})",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = ConvertOptions()
        options.mode = args.mode
        options.color_set = args.color_set
        options.width = args.width
        options.height = args.height

        written = convert_file(args.input, args.output, options)
    except ConversionError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(f"wrote {args.output} ({written} bytes)")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
