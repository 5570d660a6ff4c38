from pathlib import Path

import pytest

from fontgen.bitpack import unpack
from fontgen.emitter import emit
from fontgen.model import FontSizeRecord, FontSpec
from fontgen.preview import ascii_art, glyph_image, render_sheet


@pytest.fixture
def record(source):
    spec = FontSpec(Path("good.ttf"), "f", sizes=(10,), codepoints=(0x20, 0x41, 0x42))
    return emit([spec], source)[0]


def test_glyph_image_matches_packed_bits(record):
    glyph = record.glyphs[0x41]
    img = glyph_image(glyph)
    assert img.size == (glyph.bitmap.width, glyph.bitmap.height)

    bits = unpack(glyph.bitmap.bits, glyph.bitmap.width, glyph.bitmap.height)
    pixels = [img.getpixel((x, y)) == 0
              for y in range(img.height) for x in range(img.width)]
    assert pixels == bits


def test_ascii_art(record):
    glyph = record.glyphs[0x41]
    lines = ascii_art(glyph)
    assert len(lines) == glyph.bitmap.height
    assert all(len(line) == glyph.bitmap.width for line in lines)
    assert set(lines[0]) == {"·"}
    assert any("█" in line for line in lines)


def test_sheet_layout(record):
    sheet = render_sheet(record, columns=2, scale=3)
    single = render_sheet(record, columns=2)
    assert sheet.size == (single.width * 3, single.height * 3)
    # 3 glyphs on 2 columns: 2 rows of cells
    assert single.width % 2 == 0 and single.height % 2 == 0
    # something was drawn
    assert single.getextrema()[0] == 0


def test_empty_record():
    record = FontSizeRecord("f", 10, 12, 9, 3)
    assert render_sheet(record).size == (1, 1)
