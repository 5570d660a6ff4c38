"""
Atlas emitter: drives the rasterizer over fonts x sizes x code points.

Order is fonts, then sizes, then code points, all as requested. Emitted
identifiers are derived from that order, so it is never sorted.
"""

from __future__ import annotations

import sys
from typing import Iterable

from .errors import FontGenError, OutlineLoadError
from .model import FontSizeRecord, FontSpec
from .rasterize import DEFAULT_PARAMS, RasterParams, rasterize


def build_record(source, handle, spec: FontSpec, size: int,
                 params: RasterParams = DEFAULT_PARAMS) -> FontSizeRecord:
    """
    Rasterize every code point of ``spec`` at one size.

    Raises:
        FontGenError: Any glyph failure, annotated with font, size and code point
    """
    glyphs = {}
    for codepoint in spec.codepoints:
        if codepoint in glyphs:
            continue
        try:
            glyphs[codepoint] = rasterize(source, handle, size, codepoint, params)
        except FontGenError as e:
            e.font, e.size, e.codepoint = spec.name, size, codepoint
            raise

    try:
        extents = source.font_metrics(handle, size)
    except FontGenError as e:
        e.font, e.size = spec.name, size
        raise
    return FontSizeRecord(
        font_name=spec.name,
        pixel_size=size,
        line_height=round(extents.line_height),
        ascent=round(extents.ascent),
        descent=round(extents.descent),
        glyphs=glyphs,
    )


def emit(fonts: Iterable[FontSpec], source, sink=None,
         params: RasterParams = DEFAULT_PARAMS) -> list[FontSizeRecord]:
    """
    Build the atlas.

    A font that fails to load is skipped with a warning. Any other error
    aborts the run.
    Font names must be unique since they prefix the emitted symbols.

    Args:
        fonts: FontSpecs in output order
        source: OutlineSource
        sink: Optional object with write_record(record), fed as records finish
        params: Margin and threshold

    Returns:
        One FontSizeRecord per loaded (font, size), in request order

    Raises:
        ValueError: Two FontSpecs share a name
        FontGenError: Any failure other than a font load, annotated with font and size
    """
    fonts = list(fonts)
    seen = set()
    for spec in fonts:
        if spec.name in seen:
            raise ValueError(f"Font name '{spec.name}' is used by more than one font")
        seen.add(spec.name)

    atlas: list[FontSizeRecord] = []

    for spec in fonts:
        print(f"Loading font: {spec.path}")
        try:
            handle = source.load(spec.path)
        except OutlineLoadError as e:
            print(f"Warning: skipping font '{spec.name}': {e}", file=sys.stderr)
            continue

        try:
            for size in spec.sizes:
                record = build_record(source, handle, spec, size, params)
                print(f"  {spec.name} {size}px: {len(record.glyphs)} glyphs")
                atlas.append(record)
                if sink is not None:
                    sink.write_record(record)
        finally:
            source.release(handle)

    return atlas
