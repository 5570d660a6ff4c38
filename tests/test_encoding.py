import pytest

from fontgen.encoding import encode_codepoint
from fontgen.errors import UnsupportedCodepointError


@pytest.mark.parametrize("codepoint,length", [
    (0x20, 1),
    (0x7F, 1),
    (0x80, 2),
    (0xB0, 2),
    (0x7FF, 2),
    (0x800, 3),
    (0xE30D, 3),
    (0xFFFF, 3),
])
def test_matches_utf8(codepoint, length):
    encoded = encode_codepoint(codepoint)
    assert len(encoded) == length
    assert encoded == chr(codepoint).encode("utf-8")


def test_degree_sign():
    assert encode_codepoint(0xB0) == b"\xc2\xb0"


@pytest.mark.parametrize("codepoint", [0x10000, 0x1F600, 0x10FFFF, -1, 0xD800, 0xDFFF])
def test_out_of_range(codepoint):
    with pytest.raises(UnsupportedCodepointError) as info:
        encode_codepoint(codepoint)
    assert info.value.codepoint == codepoint
