"""Fonts, sizes and code points baked into the atlas. Paths are relative to the project root."""

from pathlib import Path

from .model import FontSpec
from .rasterize import RasterParams

FONT_DIR = Path("lib/fonts")
OUTPUT_PATH = Path("src/font_data.zig")

# 1px margin, > 128 is ink
RASTER_PARAMS = RasterParams(margin=1, threshold=128)

# Space through tilde
ASCII_PRINTABLE = tuple(range(0x20, 0x7F))
DEGREE_SIGN = 0xB0

UBUNTU_SIZES = (14, 20, 24, 26, 34)
UBUNTU_CODEPOINTS = ASCII_PRINTABLE + (DEGREE_SIGN,)

MATERIAL_SIZES = (14, 24, 50)
MATERIAL_ICONS = (
    0xE30D, 0xE1FF, 0xE322, 0xF7A4, 0xF168, 0xE80D, 0xE923,
    0xF090, 0xF09B, 0xE8E8, 0xE2BF, 0xF1CA, 0xE63E, 0xE1DA, 0xEB2F,
)

FONTS = (
    FontSpec(
        path=FONT_DIR / "Ubuntu-Regular.ttf",
        name="ubuntu",
        sizes=UBUNTU_SIZES,
        codepoints=UBUNTU_CODEPOINTS,
    ),
    FontSpec(
        path=FONT_DIR / "MaterialSymbolsRounded.ttf",
        name="material",
        sizes=MATERIAL_SIZES,
        codepoints=MATERIAL_ICONS,
    ),
)
