"""
fontgen - offline 1bpp font atlas compiler.

Modules:
    encoding: code point to UTF-8 bytes
    bitpack: MSB-first 1bpp packing
    outline: font backend interface and FreeType implementation
    rasterize: glyph metrics and thresholded bitmap
    emitter: fonts x sizes x code points pipeline
    writer: Zig / C table output with atomic publish
    preview: PNG and terminal previews of the packed glyphs
"""
from .bitpack import pack, packed_size, unpack
from .emitter import emit
from .encoding import encode_codepoint
from .errors import (
    FontGenError,
    GlyphRenderError,
    OutlineLoadError,
    OutputWriteError,
    UnsupportedCodepointError,
)
from .model import FontSizeRecord, FontSpec, Glyph, GlyphBitmap, GlyphMetrics
from .rasterize import RasterParams, rasterize
from .writer import AtlasWriter

__all__ = [
    "AtlasWriter",
    "FontGenError",
    "FontSizeRecord",
    "FontSpec",
    "Glyph",
    "GlyphBitmap",
    "GlyphMetrics",
    "GlyphRenderError",
    "OutlineLoadError",
    "OutputWriteError",
    "RasterParams",
    "UnsupportedCodepointError",
    "emit",
    "encode_codepoint",
    "pack",
    "packed_size",
    "rasterize",
    "unpack",
]
