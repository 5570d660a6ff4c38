#!/usr/bin/env python3
"""
Preview the compiled atlas.

Decodes the packed glyph bitmaps (the same bytes written to the table)
and draws them, so what you see is exactly what the target renders.

Usage:
    python -m fontgen.preview -o preview
    python -m fontgen.preview --text "Hello 25°"

Requirements:
    pip install freetype-py Pillow
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from PIL import Image

from . import config
from .bitpack import unpack
from .emitter import emit
from .errors import FontGenError
from .model import FontSizeRecord, Glyph
from .outline import FreeTypeSource

CELL_PADDING = 2
SHEET_COLUMNS = 16


def glyph_image(glyph: Glyph) -> Image.Image:
    """1-bit image of one glyph, ink black on white."""
    bitmap = glyph.bitmap
    img = Image.new("1", (bitmap.width, bitmap.height), color=255)
    img.putdata([0 if bit else 255 for bit in unpack(bitmap.bits, bitmap.width, bitmap.height)])
    return img


def ascii_art(glyph: Glyph) -> list[str]:
    bitmap = glyph.bitmap
    bits = unpack(bitmap.bits, bitmap.width, bitmap.height)
    w = bitmap.width
    return [
        "".join("█" if bits[y * w + x] else "·" for x in range(w))
        for y in range(bitmap.height)
    ]


def render_sheet(record: FontSizeRecord, columns: int = SHEET_COLUMNS,
                 scale: int = 1) -> Image.Image:
    """
    Draw every glyph of a record on a grid, aligned on a common baseline.

    Args:
        record: Font/size to draw
        columns: Glyphs per row
        scale: Integer zoom factor

    Returns:
        Mode "1" image
    """
    glyphs = list(record.glyphs.values())
    if not glyphs:
        return Image.new("1", (1, 1), color=255)

    # Extents of all glyphs relative to the pen origin on the baseline
    left = max(0, max(-g.metrics.bearing_x for g in glyphs))
    right = max(1, max(g.metrics.bearing_x + g.metrics.width for g in glyphs))
    above = max(0, max(-g.metrics.bearing_y for g in glyphs))
    below = max(1, max(g.metrics.bearing_y + g.metrics.height for g in glyphs))

    cell_w = left + right + 2 * CELL_PADDING
    cell_h = above + below + 2 * CELL_PADDING
    rows = (len(glyphs) + columns - 1) // columns

    sheet = Image.new("1", (columns * cell_w, rows * cell_h), color=255)
    for i, glyph in enumerate(glyphs):
        pen_x = (i % columns) * cell_w + CELL_PADDING + left
        pen_y = (i // columns) * cell_h + CELL_PADDING + above
        sheet.paste(glyph_image(glyph),
                    (pen_x + glyph.metrics.bearing_x, pen_y + glyph.metrics.bearing_y))

    if scale > 1:
        sheet = sheet.resize((sheet.width * scale, sheet.height * scale), Image.NEAREST)
    return sheet


def print_text(record: FontSizeRecord, text: str):
    print(f"\n{record.font_name} {record.pixel_size}px:")
    print("-" * 40)
    for char in text:
        glyph = record.glyphs.get(ord(char))
        if glyph is None:
            print(f"'{char}' (U+{ord(char):04X}): NOT IN ATLAS")
            continue
        m = glyph.metrics
        print(f"'{char}' (U+{ord(char):04X}) {m.width}x{m.height} "
              f"advance={m.advance_x} bearing=({m.bearing_x}, {m.bearing_y}):")
        for line in ascii_art(glyph):
            print(f"  {line}")
        print()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Render preview sheets of the font atlas",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # One PNG per font size in ./preview
  python -m fontgen.preview

  # Terminal preview of some characters
  python -m fontgen.preview --text "Hello 25°" --no-sheets
        """
    )
    parser.add_argument('-o', '--output-dir', type=Path, default=Path('preview'),
                        help='Directory for PNG sheets (default: preview)')
    parser.add_argument('--scale', type=int, default=4,
                        help='Zoom factor for the sheets (default: 4)')
    parser.add_argument('--text',
                        help='Characters to print as terminal art')
    parser.add_argument('--no-sheets', action='store_true',
                        help="Don't write PNG sheets")
    args = parser.parse_args(argv)

    try:
        atlas = emit(config.FONTS, FreeTypeSource(), params=config.RASTER_PARAMS)
    except (FontGenError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    if not atlas:
        print("Error: No fonts could be loaded", file=sys.stderr)
        return 1

    if not args.no_sheets:
        args.output_dir.mkdir(parents=True, exist_ok=True)
        for record in atlas:
            path = args.output_dir / f"{record.font_name}_{record.pixel_size}.png"
            render_sheet(record, scale=args.scale).save(path)
            print(f"Preview saved: {path}")

    if args.text:
        for record in atlas:
            print_text(record, args.text)

    return 0


if __name__ == "__main__":
    sys.exit(main())
