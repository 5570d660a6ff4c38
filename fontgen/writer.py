"""
Atlas table writers.

Generates a source file containing:
- A glyph record type (width, height, advance_x, bearing_x, bearing_y, data)
- A font record type (height, ascent, descent, code point -> glyph table)
- One byte array per (font, size, code point): glyph_<font>_<size>_<cp>
- One constructor per (font, size): init_<font>_<size>

Glyph bytes are the bitpack output unchanged: row-major, MSB first,
each glyph padded to a whole byte.

The file is written to a temporary path next to the destination and
renamed over it only when the whole atlas has been written.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from .errors import OutputWriteError
from .model import FontSizeRecord, Glyph


def format_bytes(data: bytes, indent: str = "    ") -> str:
    """Hex literals, 16 per line, each line ending with a comma."""
    lines = []
    for i in range(0, len(data), 16):
        chunk = data[i:i + 16]
        lines.append(indent + ", ".join(f"0x{b:02X}" for b in chunk) + ",")
    return "\n".join(lines)


def glyph_symbol(record: FontSizeRecord, codepoint: int) -> str:
    return f"glyph_{record.font_name}_{record.pixel_size}_{codepoint}"


def init_symbol(record: FontSizeRecord) -> str:
    return f"init_{record.font_name}_{record.pixel_size}"


class TableFormat:
    """Text of one target language. Subclasses implement header() and record()."""

    def header(self) -> str:
        raise NotImplementedError

    def record(self, record: FontSizeRecord) -> str:
        raise NotImplementedError

    def footer(self) -> str:
        return ""


class ZigTable(TableFormat):
    def header(self) -> str:
        return (
            'const std = @import("std");\n'
            "\n"
            "pub const Glyph = struct {\n"
            "    width: u16,\n"
            "    height: u16,\n"
            "    advance_x: u16,\n"
            "    bearing_x: i16,\n"
            "    bearing_y: i16,\n"
            "    data: []const u8,\n"
            "};\n"
            "\n"
            "pub const Font = struct {\n"
            "    height: u16,\n"
            "    ascent: u16,\n"
            "    descent: u16,\n"
            "    glyphs: std.AutoHashMap(u32, Glyph),\n"
            "};\n"
            "\n"
        )

    def _glyph_entry(self, record: FontSizeRecord, glyph: Glyph) -> str:
        m = glyph.metrics
        return (
            f"    try glyphs.put({glyph.codepoint}, Glyph{{ "
            f".width = {m.width}, .height = {m.height}, .advance_x = {m.advance_x}, "
            f".bearing_x = {m.bearing_x}, .bearing_y = {m.bearing_y}, "
            f".data = &{glyph_symbol(record, glyph.codepoint)} }});\n"
        )

    def record(self, record: FontSizeRecord) -> str:
        parts = [f"// Font: {record.font_name} {record.pixel_size}\n"]

        for glyph in record.glyphs.values():
            parts.append(f"const {glyph_symbol(record, glyph.codepoint)} = [_]u8{{\n")
            parts.append(format_bytes(glyph.bitmap.bits) + "\n")
            parts.append("};\n")

        parts.append(f"pub fn {init_symbol(record)}(allocator: std.mem.Allocator) !Font {{\n")
        parts.append("    var glyphs = std.AutoHashMap(u32, Glyph).init(allocator);\n")
        for glyph in record.glyphs.values():
            parts.append(self._glyph_entry(record, glyph))
        parts.append(
            f"    return Font{{ .height = {record.line_height}, .ascent = {record.ascent}, "
            f".descent = {record.descent}, .glyphs = glyphs }};\n"
        )
        parts.append("}\n\n")
        return "".join(parts)


class CTable(TableFormat):
    """
    C flavour of the table.

    C has no hash map, so the code point -> glyph association is a
    constant array of entries in request order, returned by the
    constructor together with its length.

    Args:
        header_only: Emit a self-contained header (include guard,
            static inline constructors)
    """

    GUARD = "FONTGEN_FONT_DATA_H"

    def __init__(self, header_only: bool = False):
        self.header_only = header_only

    def header(self) -> str:
        parts = []
        if self.header_only:
            parts.append(f"#ifndef {self.GUARD}\n#define {self.GUARD}\n\n")
        parts.append(
            "#include <stddef.h>\n"
            "#include <stdint.h>\n"
            "\n"
            "typedef struct {\n"
            "    uint16_t width;\n"
            "    uint16_t height;\n"
            "    uint16_t advance_x;\n"
            "    int16_t bearing_x;\n"
            "    int16_t bearing_y;\n"
            "    const uint8_t *data;\n"
            "} fontgen_glyph_t;\n"
            "\n"
            "typedef struct {\n"
            "    uint32_t codepoint;\n"
            "    fontgen_glyph_t glyph;\n"
            "} fontgen_glyph_entry_t;\n"
            "\n"
            "typedef struct {\n"
            "    uint16_t height;\n"
            "    uint16_t ascent;\n"
            "    uint16_t descent;\n"
            "    const fontgen_glyph_entry_t *glyphs;\n"
            "    size_t glyph_count;\n"
            "} fontgen_font_t;\n"
            "\n"
        )
        return "".join(parts)

    def record(self, record: FontSizeRecord) -> str:
        table = f"glyphs_{record.font_name}_{record.pixel_size}"
        parts = [f"// Font: {record.font_name} {record.pixel_size}\n"]

        for glyph in record.glyphs.values():
            parts.append(f"static const uint8_t {glyph_symbol(record, glyph.codepoint)}[] = {{\n")
            parts.append(format_bytes(glyph.bitmap.bits) + "\n")
            parts.append("};\n")

        parts.append(f"static const fontgen_glyph_entry_t {table}[] = {{\n")
        for glyph in record.glyphs.values():
            m = glyph.metrics
            parts.append(
                f"    {{ {glyph.codepoint}, {{ {m.width}, {m.height}, {m.advance_x}, "
                f"{m.bearing_x}, {m.bearing_y}, {glyph_symbol(record, glyph.codepoint)} }} }},\n"
            )
        parts.append("};\n")

        linkage = "static inline " if self.header_only else ""
        parts.append(f"{linkage}fontgen_font_t {init_symbol(record)}(void)\n{{\n")
        parts.append(
            f"    fontgen_font_t font = {{ {record.line_height}, {record.ascent}, "
            f"{record.descent}, {table}, {len(record.glyphs)} }};\n"
        )
        parts.append("    return font;\n}\n\n")
        return "".join(parts)

    def footer(self) -> str:
        if self.header_only:
            return f"#endif // {self.GUARD}\n"
        return ""


def table_for_path(path) -> TableFormat:
    """Pick the table format from the output file extension."""
    suffix = Path(path).suffix.lower()
    if suffix == ".zig":
        return ZigTable()
    if suffix == ".c":
        return CTable()
    if suffix == ".h":
        return CTable(header_only=True)
    raise ValueError(f"Unsupported output extension '{suffix}' (use .zig, .c or .h)")


class AtlasWriter:
    """
    Output sink for emitter.emit().

    Use as a context manager. Nothing appears at ``path`` unless the block
    exits without an exception.

    Attributes:
        path: Final destination
        table: TableFormat used for the text
        records_written: Number of FontSizeRecords written so far
    """

    def __init__(self, path, table: TableFormat | None = None):
        self.path = Path(path)
        self.table = table if table is not None else table_for_path(self.path)
        self.records_written = 0
        self.file = None
        self._tmp_path = None

    def __enter__(self):
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp",
                                       dir=self.path.parent)
        except OSError as e:
            raise OutputWriteError(self.path, e.strerror or str(e)) from e

        self._tmp_path = Path(tmp)
        self.file = os.fdopen(fd, "w", encoding="utf-8", newline="\n")
        try:
            self._write(self.table.header())
        except OutputWriteError:
            self._discard()
            raise
        return self

    def _write(self, text: str):
        try:
            self.file.write(text)
        except OSError as e:
            raise OutputWriteError(self.path, e.strerror or str(e)) from e

    def write_record(self, record: FontSizeRecord):
        self._write(self.table.record(record))
        self.records_written += 1

    def _discard(self):
        self.file.close()
        self._tmp_path.unlink(missing_ok=True)

    def __exit__(self, exc_type, exc, tb):
        if exc_type is not None:
            self._discard()
            return False

        try:
            self._write(self.table.footer())
            self.file.close()
            os.chmod(self._tmp_path, 0o644)
            os.replace(self._tmp_path, self.path)
        except OutputWriteError:
            self._discard()
            raise
        except OSError as e:
            self._discard()
            raise OutputWriteError(self.path, e.strerror or str(e)) from e
        return False
