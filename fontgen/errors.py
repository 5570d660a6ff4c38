"""Exceptions raised while building a font atlas."""

from __future__ import annotations


class FontGenError(Exception):
    """
    Base class for atlas build failures.

    The emitter fills in ``font``, ``size`` and ``codepoint`` as the error
    travels up, so the message always names the offending glyph.
    """

    def __init__(self, message: str, font: str | None = None,
                 size: int | None = None, codepoint: int | None = None):
        super().__init__(message)
        self.message = message
        self.font = font
        self.size = size
        self.codepoint = codepoint

    def __str__(self) -> str:
        where = []
        if self.font is not None:
            where.append(f"font={self.font}")
        if self.size is not None:
            where.append(f"size={self.size}")
        if self.codepoint is not None:
            where.append(f"codepoint=U+{self.codepoint:04X}")
        if not where:
            return self.message
        return f"{self.message} ({', '.join(where)})"


class OutlineLoadError(FontGenError):
    """Font file missing or unreadable. The font is skipped."""

    def __init__(self, path, reason: str = ""):
        message = f"Cannot load font {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.path = path


class UnsupportedCodepointError(FontGenError):
    """Code point outside the 1-3 byte encoding range."""

    def __init__(self, codepoint: int):
        super().__init__("Unsupported code point", codepoint=codepoint)


class GlyphRenderError(FontGenError):
    """The outline library failed to load or render a single glyph."""

    def __init__(self, codepoint: int, reason: str = ""):
        message = "Cannot render glyph"
        if reason:
            message += f": {reason}"
        super().__init__(message, codepoint=codepoint)


class OutputWriteError(FontGenError):
    """The atlas destination cannot be written."""

    def __init__(self, path, reason: str = ""):
        message = f"Cannot write output {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.path = path
