"""Code point to UTF-8 byte sequence."""

from __future__ import annotations

from .errors import UnsupportedCodepointError

SURROGATE_FIRST = 0xD800
SURROGATE_LAST = 0xDFFF


def encode_codepoint(codepoint: int) -> bytes:
    """
    Encode a code point as 1, 2 or 3 UTF-8 bytes.

    Args:
        codepoint: Unicode code point below 0x10000

    Returns:
        Encoded bytes

    Raises:
        UnsupportedCodepointError: negative, surrogate or >= 0x10000
    """
    if codepoint < 0 or codepoint >= 0x10000:
        raise UnsupportedCodepointError(codepoint)
    if SURROGATE_FIRST <= codepoint <= SURROGATE_LAST:
        raise UnsupportedCodepointError(codepoint)

    if codepoint < 0x80:
        return bytes([codepoint])
    if codepoint < 0x800:
        return bytes([
            0xC0 | (codepoint >> 6),
            0x80 | (codepoint & 0x3F),
        ])
    return bytes([
        0xE0 | (codepoint >> 12),
        0x80 | ((codepoint >> 6) & 0x3F),
        0x80 | (codepoint & 0x3F),
    ])
