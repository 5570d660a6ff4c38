#!/usr/bin/env python3
"""
Compile the embedded font atlas.

Rasterizes every font, size and code point listed in fontgen/config.py to
1bpp bitmaps and writes them, with their metrics, as a source table.

Usage:
    python -m fontgen

Requirements:
    pip install freetype-py Pillow
"""

import argparse
import sys

from . import config
from .emitter import emit
from .errors import FontGenError
from .outline import FreeTypeSource
from .writer import AtlasWriter


def run(fonts=config.FONTS, output_path=config.OUTPUT_PATH, params=config.RASTER_PARAMS,
        source=None) -> int:
    """
    Build the atlas and publish it at ``output_path``.

    Returns:
        Process exit code: 0 on success, 1 on any fatal error
    """
    if source is None:
        source = FreeTypeSource()

    print(f"Writing output: {output_path}")
    try:
        with AtlasWriter(output_path) as sink:
            atlas = emit(fonts, source, sink=sink, params=params)
    except (FontGenError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        print("No output written.", file=sys.stderr)
        return 1

    glyph_count = sum(len(record.glyphs) for record in atlas)
    print(f"Done! {len(atlas)} font sizes, {glyph_count} glyphs -> {output_path}")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Compile the embedded 1bpp font atlas",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Fonts, sizes and code points are set in fontgen/config.py.
Output: {config.OUTPUT_PATH}

Examples:
  # Run from the project root
  python -m fontgen
        """
    )
    parser.parse_args(argv)
    return run()


if __name__ == "__main__":
    sys.exit(main())
