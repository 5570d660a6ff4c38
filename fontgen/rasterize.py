"""
Glyph rasterizer: one (font, size, code point) to metrics + packed 1bpp bitmap.

The bitmap is the glyph's ink box plus a margin on every side so the
anti-aliased edge is never clipped. The pen is placed so that the ink's
top-left corner lands exactly on (margin, margin); the bearings in the
emitted metrics are shifted by the same margin.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .bitpack import pack
from .encoding import encode_codepoint
from .errors import GlyphRenderError
from .model import Glyph, GlyphBitmap, GlyphMetrics, InkExtents


@dataclass(frozen=True)
class RasterParams:
    margin: int = 1
    threshold: int = 128  # coverage > threshold is ink

    def __post_init__(self):
        if self.margin < 0:
            raise ValueError(f"margin must be >= 0, got {self.margin}")
        if not 0 <= self.threshold <= 255:
            raise ValueError(f"threshold must be in 0..255, got {self.threshold}")


DEFAULT_PARAMS = RasterParams()


def glyph_dimensions(ink: InkExtents, pixel_size: int,
                     params: RasterParams = DEFAULT_PARAMS) -> tuple[int, int]:
    """
    Bitmap size for a glyph.

    Zero-ink glyphs (space) fall back to the advance for the width and to
    the requested pixel size for the height.
    """
    pad = 2 * params.margin
    width = math.ceil(ink.ink_width) + pad
    height = math.ceil(ink.ink_height) + pad

    if width <= pad:
        width = round(ink.advance_x)
    if height <= pad:
        height = pixel_size

    return max(width, 1), max(height, 1)


def threshold(coverage: bytes, level: int = DEFAULT_PARAMS.threshold) -> list[bool]:
    return [sample > level for sample in coverage]


def rasterize(source, handle, pixel_size: int, codepoint: int,
              params: RasterParams = DEFAULT_PARAMS) -> Glyph:
    """
    Rasterize one glyph.

    Args:
        source: OutlineSource
        handle: Handle from source.load()
        pixel_size: Requested size in pixels
        codepoint: Unicode code point
        params: Margin and threshold

    Returns:
        Glyph whose metrics and bitmap share one width/height computation

    Raises:
        UnsupportedCodepointError: Code point cannot be encoded
        GlyphRenderError: The source failed on this glyph
    """
    text = encode_codepoint(codepoint)
    ink = source.metrics(handle, pixel_size, text)
    width, height = glyph_dimensions(ink, pixel_size, params)

    origin = (-ink.x_bearing + params.margin, -ink.y_bearing + params.margin)
    coverage = source.raster(handle, pixel_size, text, width, height, origin)
    if len(coverage) != width * height:
        raise GlyphRenderError(
            codepoint, f"coverage has {len(coverage)} samples, expected {width * height}"
        )

    bits = threshold(coverage, params.threshold)
    try:
        metrics = GlyphMetrics(
            width=width,
            height=height,
            advance_x=round(ink.advance_x),
            bearing_x=round(ink.x_bearing) - params.margin,
            bearing_y=round(ink.y_bearing) - params.margin,
        )
    except ValueError as e:
        raise GlyphRenderError(codepoint, str(e)) from e
    bitmap = GlyphBitmap(width=width, height=height, bits=pack(bits, width, height))
    return Glyph(codepoint=codepoint, metrics=metrics, bitmap=bitmap)
