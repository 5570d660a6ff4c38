"""
Outline Source - font loading, glyph metrics and coverage rasters
=================================================================
Defines the interface the rasterizer consumes and a FreeType
implementation of it.

All coordinates handed across the interface are pixels with the y axis
pointing down (raster convention). FreeType works in 26.6 fixed point
with y pointing up; FreeTypeSource converts at the boundary.

Requirements:
    pip install freetype-py Pillow
"""

from __future__ import annotations

import math
import sys
from pathlib import Path

import freetype
from freetype.ft_errors import FT_Exception
from PIL import Image

from .errors import FontGenError, GlyphRenderError, OutlineLoadError
from .model import FontExtents, InkExtents


class OutlineSource:
    """
    Interface of a vector font backend.

    ``text`` is always one UTF-8 encoded code point, as produced by
    encoding.encode_codepoint().
    """

    def load(self, path):
        """
        Open a font file.

        Returns:
            Opaque handle passed to the other methods

        Raises:
            OutlineLoadError: If the file is missing or not a usable font
        """
        raise NotImplementedError

    def metrics(self, handle, size: int, text: bytes) -> InkExtents:
        """Ink box and advance of one glyph at ``size`` pixels."""
        raise NotImplementedError

    def font_metrics(self, handle, size: int) -> FontExtents:
        """Line height, ascent and descent at ``size`` pixels."""
        raise NotImplementedError

    def raster(self, handle, size: int, text: bytes, width: int, height: int,
               origin: tuple[float, float]) -> bytes:
        """
        Render one glyph into a width x height coverage buffer.

        Args:
            handle: Handle returned by load()
            size: Pixel size
            text: Encoded code point
            width: Buffer width in pixels
            height: Buffer height in pixels
            origin: Pen position (x, y) inside the buffer, may be fractional

        Returns:
            width * height coverage bytes (0-255), row-major
        """
        raise NotImplementedError

    def release(self, handle):
        """Release a handle returned by load()."""
        raise NotImplementedError


class FontHandle:
    """An open FreeType face and the file it came from."""

    def __init__(self, path: Path, face: freetype.Face):
        self.path = path
        self.face = face

    def __repr__(self):
        state = "open" if self.face is not None else "released"
        return f"<FontHandle {self.path} ({state})>"


def _identity() -> freetype.FT_Matrix:
    return freetype.FT_Matrix(0x10000, 0, 0, 0x10000)


class FreeTypeSource(OutlineSource):
    """
    OutlineSource backed by freetype-py.

    Glyphs are loaded unhinted so the ink box keeps its fractional extents
    and the pen can be placed at sub-pixel offsets. Coverage is composited
    into a Pillow "L" canvas.
    """

    LOAD_FLAGS = freetype.FT_LOAD_NO_HINTING | freetype.FT_LOAD_NO_BITMAP

    def load(self, path):
        path = Path(path)
        try:
            face = freetype.Face(str(path))
        except (FT_Exception, OSError) as e:
            raise OutlineLoadError(path, str(e)) from e
        return FontHandle(path, face)

    def release(self, handle: FontHandle):
        # freetype-py frees the FT_Face when the last reference goes away
        handle.face = None

    def _load_glyph(self, handle: FontHandle, size: int, text: bytes, flags: int):
        char = text.decode("utf-8")
        face = handle.face
        try:
            face.set_pixel_sizes(0, size)
            face.load_char(char, flags)
        except FT_Exception as e:
            raise GlyphRenderError(ord(char), str(e)) from e
        return face.glyph

    def metrics(self, handle: FontHandle, size: int, text: bytes) -> InkExtents:
        char = text.decode("utf-8")
        if handle.face.get_char_index(char) == 0:
            print(f"Warning: U+{ord(char):04X} not in {handle.path.name}, using .notdef",
                  file=sys.stderr)

        slot = self._load_glyph(handle, size, text, self.LOAD_FLAGS)

        if slot.format == freetype.FT_GLYPH_FORMAT_OUTLINE:
            bbox = slot.outline.get_bbox()
            x_min, y_min, x_max, y_max = bbox.xMin, bbox.yMin, bbox.xMax, bbox.yMax
        else:
            m = slot.metrics
            x_min = m.horiBearingX
            y_max = m.horiBearingY
            x_max = x_min + m.width
            y_min = y_max - m.height

        return InkExtents(
            ink_width=(x_max - x_min) / 64,
            ink_height=(y_max - y_min) / 64,
            x_bearing=x_min / 64,
            y_bearing=-y_max / 64,
            advance_x=slot.metrics.horiAdvance / 64,
        )

    def font_metrics(self, handle: FontHandle, size: int) -> FontExtents:
        face = handle.face
        try:
            face.set_pixel_sizes(0, size)
        except FT_Exception as e:
            raise FontGenError(f"Cannot set pixel size: {e}") from e
        metrics = face.size
        return FontExtents(
            line_height=metrics.height / 64,
            ascent=metrics.ascender / 64,
            descent=-metrics.descender / 64,
        )

    def raster(self, handle: FontHandle, size: int, text: bytes, width: int, height: int,
               origin: tuple[float, float]) -> bytes:
        ox, oy = origin
        ix, iy = math.floor(ox), math.floor(oy)

        # Sub-pixel part of the pen position goes into the outline transform,
        # the integer part into the paste offset. FreeType's y axis points up.
        delta = freetype.FT_Vector(round((ox - ix) * 64), -round((oy - iy) * 64))

        face = handle.face
        face.set_transform(_identity(), delta)
        try:
            slot = self._load_glyph(handle, size, text,
                                    self.LOAD_FLAGS | freetype.FT_LOAD_RENDER)
            bitmap = slot.bitmap
            left, top = slot.bitmap_left, slot.bitmap_top
            buffer = bytes(bitmap.buffer)
        finally:
            face.set_transform(_identity(), freetype.FT_Vector(0, 0))

        canvas = Image.new("L", (width, height), 0)
        if bitmap.width and bitmap.rows:
            glyph = Image.frombytes("L", (bitmap.width, bitmap.rows), buffer,
                                    "raw", "L", bitmap.pitch)
            # paste() clips whatever falls outside the canvas
            canvas.paste(glyph, (ix + left, iy - top))
        return canvas.tobytes()
