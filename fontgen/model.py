"""Records passed between the rasterizer, the emitter and the table writers."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from .bitpack import packed_size

# Font names end up inside emitted identifiers (glyph_<name>_<size>_<cp>)
IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Field ranges of the emitted Glyph struct
U16_MIN, U16_MAX = 0, 0xFFFF
I16_MIN, I16_MAX = -0x8000, 0x7FFF


@dataclass(frozen=True)
class InkExtents:
    """Glyph ink box in pixels. y points down: y_bearing < 0 above the baseline."""
    ink_width: float
    ink_height: float
    x_bearing: float
    y_bearing: float
    advance_x: float


@dataclass(frozen=True)
class FontExtents:
    line_height: float
    ascent: float
    descent: float


@dataclass(frozen=True)
class GlyphBitmap:
    width: int
    height: int
    bits: bytes  # packed, see bitpack

    def __post_init__(self):
        expected = packed_size(self.width, self.height)
        if len(self.bits) != expected:
            raise ValueError(
                f"Bitmap {self.width}x{self.height} needs {expected} bytes, got {len(self.bits)}"
            )


@dataclass(frozen=True)
class GlyphMetrics:
    width: int
    height: int
    advance_x: int
    bearing_x: int
    bearing_y: int

    def __post_init__(self):
        for name in ("width", "height", "advance_x"):
            value = getattr(self, name)
            if not U16_MIN <= value <= U16_MAX:
                raise ValueError(f"{name} {value} does not fit in u16")
        for name in ("bearing_x", "bearing_y"):
            value = getattr(self, name)
            if not I16_MIN <= value <= I16_MAX:
                raise ValueError(f"{name} {value} does not fit in i16")


@dataclass(frozen=True)
class Glyph:
    codepoint: int
    metrics: GlyphMetrics
    bitmap: GlyphBitmap


@dataclass(frozen=True)
class FontSizeRecord:
    font_name: str
    pixel_size: int
    line_height: int
    ascent: int
    descent: int
    glyphs: dict[int, Glyph] = field(default_factory=dict)


@dataclass(frozen=True)
class FontSpec:
    path: Path
    name: str
    sizes: tuple[int, ...]
    codepoints: tuple[int, ...]

    def __post_init__(self):
        if not IDENTIFIER_PATTERN.match(self.name):
            raise ValueError(f"Font name must be a valid identifier: {self.name!r}")
        for size in self.sizes:
            if size <= 0:
                raise ValueError(f"Pixel size must be positive: {size}")
        if len(set(self.sizes)) != len(self.sizes):
            raise ValueError(f"Duplicate pixel sizes for font '{self.name}': {self.sizes}")
