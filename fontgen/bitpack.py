"""
1bpp bitmap packing.

Format:
- Row-major, top to bottom, left to right
- 8 pixels per byte, first pixel in the MSB
- The last byte of each glyph is zero-padded in its low bits
- Packing never spans two glyphs
"""

from __future__ import annotations

from typing import Sequence


def packed_size(width: int, height: int) -> int:
    return (width * height + 7) // 8


def pack(bits: Sequence[bool], width: int, height: int) -> bytes:
    """
    Pack a 1-bit bitmap into bytes, MSB first.

    Args:
        bits: width * height samples, row-major
        width: Bitmap width in pixels
        height: Bitmap height in pixels

    Returns:
        ceil(width * height / 8) bytes
    """
    count = width * height
    if len(bits) != count:
        raise ValueError(f"Expected {count} samples for {width}x{height}, got {len(bits)}")

    out = bytearray(packed_size(width, height))
    for i, bit in enumerate(bits):
        if bit:
            out[i >> 3] |= 0x80 >> (i & 7)
    return bytes(out)


def unpack(data: bytes, width: int, height: int) -> list[bool]:
    """Inverse of pack(): expand packed bytes back into width * height samples."""
    expected = packed_size(width, height)
    if len(data) != expected:
        raise ValueError(f"Expected {expected} bytes for {width}x{height}, got {len(data)}")

    return [bool(data[i >> 3] & (0x80 >> (i & 7))) for i in range(width * height)]
