import pytest

from fontgen.bitpack import packed_size, unpack
from fontgen.errors import GlyphRenderError, UnsupportedCodepointError
from fontgen.model import InkExtents
from fontgen.rasterize import RasterParams, glyph_dimensions, rasterize, threshold

from conftest import FakeSource


@pytest.fixture
def handle(source):
    return source.load("good.ttf")


def test_threshold_is_strictly_greater_than_128():
    assert threshold(bytes([0, 127, 128, 129, 255])) == [False, False, False, True, True]


def test_threshold_level_is_configurable():
    assert threshold(bytes([10, 11]), level=10) == [False, True]


def test_dimensions_add_margin():
    ink = InkExtents(12.6, 17.2, 0.8, -17.2, 14.4)
    assert glyph_dimensions(ink, 20) == (15, 20)


def test_zero_ink_dimensions_fall_back():
    ink = InkExtents(0.0, 0.0, 0.0, 0.0, 9.2)
    assert glyph_dimensions(ink, 20) == (9, 20)


def test_zero_advance_never_gives_empty_bitmap():
    ink = InkExtents(0.0, 0.0, 0.0, 0.0, 0.0)
    width, height = glyph_dimensions(ink, 12)
    assert width >= 1 and height == 12


def test_letter_metrics(source, handle):
    glyph = rasterize(source, handle, 20, 0x41)
    m = glyph.metrics
    assert (m.width, m.height) == (15, 20)
    assert m.advance_x == 14
    assert m.bearing_x == 0    # round(0.8) - 1
    assert m.bearing_y == -18  # round(-17.2) - 1


def test_ink_lands_inside_margin(source, handle):
    rasterize(source, handle, 20, 0x41)
    _, width, height, origin = source.raster_calls[-1]
    assert origin == pytest.approx((0.2, 18.2))

    glyph = rasterize(source, handle, 20, 0x41)
    bits = unpack(glyph.bitmap.bits, width, height)
    assert not any(bits[:width])                                  # top margin
    assert not any(bits[(height - 1) * width:])                   # bottom margin
    assert not any(bits[y * width] for y in range(height))        # left margin
    assert not any(bits[y * width + width - 1] for y in range(height))
    assert any(bits)


def test_space(source, handle):
    glyph = rasterize(source, handle, 20, 0x20)
    assert glyph.metrics.width == round(4.6 * 2)
    assert glyph.metrics.height == 20
    assert glyph.bitmap.bits == bytes(packed_size(9, 20))


def test_metrics_and_bitmap_agree(source, handle):
    for codepoint in (0x20, 0x41, 0xB0, 0xE30D):
        for size in (10, 14, 20, 50):
            glyph = rasterize(source, handle, size, codepoint)
            assert glyph.metrics.width == glyph.bitmap.width
            assert glyph.metrics.height == glyph.bitmap.height
            assert len(glyph.bitmap.bits) == packed_size(glyph.bitmap.width, glyph.bitmap.height)


def test_repeatable(source, handle):
    first = rasterize(source, handle, 20, 0x41)
    second = rasterize(FakeSource(), handle, 20, 0x41)
    assert first == second


def test_margin_parameter(source, handle):
    glyph = rasterize(source, handle, 20, 0x41, RasterParams(margin=2))
    assert (glyph.metrics.width, glyph.metrics.height) == (17, 22)
    assert glyph.metrics.bearing_x == -1
    assert source.raster_calls[-1][3] == pytest.approx((1.2, 19.2))


def test_unsupported_codepoint(source, handle):
    with pytest.raises(UnsupportedCodepointError):
        rasterize(source, handle, 20, 0x10000)
    assert source.raster_calls == []


def test_short_coverage_buffer(handle):
    class ShortSource(FakeSource):
        def raster(self, *args):
            return super().raster(*args)[:-1]

    with pytest.raises(GlyphRenderError) as info:
        rasterize(ShortSource(), handle, 20, 0x41)
    assert info.value.codepoint == 0x41


@pytest.mark.parametrize("kwargs", [{"margin": -1}, {"threshold": 256}, {"threshold": -1}])
def test_params_validation(kwargs):
    with pytest.raises(ValueError):
        RasterParams(**kwargs)


def test_metrics_outside_glyph_fields(handle):
    class WideAdvanceSource(FakeSource):
        def metrics(self, handle, size, text):
            ink = super().metrics(handle, size, text)
            return InkExtents(ink.ink_width, ink.ink_height, ink.x_bearing,
                              ink.y_bearing, 70000.0)

    with pytest.raises(GlyphRenderError, match="advance_x 70000 does not fit in u16") as info:
        rasterize(WideAdvanceSource(), handle, 20, 0x41)
    assert info.value.codepoint == 0x41
