from pathlib import Path

import pytest

from fontgen.errors import OutlineLoadError
from fontgen.model import FontExtents, FontSpec, InkExtents
from fontgen.outline import OutlineSource

SPACE = 0x20


class FakeHandle:
    def __init__(self, path):
        self.path = path


class FakeSource(OutlineSource):
    """
    Deterministic outline source.

    Every non-space glyph is a 6.3 x 8.6 box (at size 10, scaling with the
    size) sitting on the baseline, filled with a diagonal stripe pattern.
    Space has no ink.
    """

    def __init__(self, fonts=("good.ttf",)):
        self.fonts = set(fonts)
        self.loaded = []
        self.released = []
        self.raster_calls = []

    def load(self, path):
        path = Path(path)
        if path.name not in self.fonts:
            raise OutlineLoadError(path, "No such file")
        handle = FakeHandle(path)
        self.loaded.append(handle)
        return handle

    def release(self, handle):
        self.released.append(handle)

    def metrics(self, handle, size, text):
        scale = size / 10
        if ord(text.decode("utf-8")) == SPACE:
            return InkExtents(0.0, 0.0, 0.0, 0.0, 4.6 * scale)
        return InkExtents(
            ink_width=6.3 * scale,
            ink_height=8.6 * scale,
            x_bearing=0.4 * scale,
            y_bearing=-8.6 * scale,
            advance_x=7.2 * scale,
        )

    def font_metrics(self, handle, size):
        return FontExtents(line_height=size * 1.2, ascent=size * 0.9, descent=size * 0.25)

    def raster(self, handle, size, text, width, height, origin):
        self.raster_calls.append((text, width, height, origin))
        ink = self.metrics(handle, size, text)
        x0 = origin[0] + ink.x_bearing
        y0 = origin[1] + ink.y_bearing
        x1 = x0 + ink.ink_width
        y1 = y0 + ink.ink_height

        out = bytearray(width * height)
        for y in range(height):
            for x in range(width):
                cx, cy = x + 0.5, y + 0.5
                if x0 <= cx < x1 and y0 <= cy < y1 and (x + y) % 3:
                    out[y * width + x] = 255
        return bytes(out)


@pytest.fixture
def source():
    return FakeSource(fonts=("good.ttf", "other.ttf"))


@pytest.fixture
def good_spec():
    return FontSpec(path=Path("fonts/good.ttf"), name="f", sizes=(20,), codepoints=(0x20, 0x41))
