"""Tests for glyph tables and font rasterisation."""

import pytest
from PIL import ImageFont

from ledpanel.core.errors import ConfigurationError, GlyphNotFoundError
from ledpanel.fonts import STANDARD, GlyphTable, get_font, rasterize_font

from .conftest import GLYPH_A


def test_lookup(glyphs):
    assert glyphs.lookup("A") == GLYPH_A
    assert "A" in glyphs
    assert "Z" not in glyphs
    assert "AB" not in glyphs


def test_lookup_missing(glyphs):
    with pytest.raises(GlyphNotFoundError) as exc_info:
        glyphs.lookup("~")
    assert exc_info.value.details["code"] == ord("~")


def test_characters_in_code_order(glyphs):
    assert glyphs.characters == " ABI"
    assert len(glyphs) == 4


def test_wrong_row_count_rejected():
    with pytest.raises(ConfigurationError):
        GlyphTable(5, 5, {ord("A"): (1, 2, 3)})


def test_row_wider_than_glyph_rejected():
    with pytest.raises(ConfigurationError):
        GlyphTable(2, 3, {ord("A"): (0b111, 0b1000)})


def test_non_positive_dimensions_rejected():
    with pytest.raises(ConfigurationError):
        GlyphTable(0, 8, {})


def test_standard_font_covers_printable_ascii():
    assert STANDARD.char_rows == 8
    assert STANDARD.char_cols == 8
    for code in range(0x20, 0x7F):
        assert chr(code) in STANDARD
    assert STANDARD.lookup(" ") == (0,) * 8


def test_get_font():
    assert get_font("standard") is STANDARD
    with pytest.raises(ConfigurationError):
        get_font("nope")


def test_rasterize_font_shape():
    table = rasterize_font(ImageFont.load_default(), chars="A .", char_rows=8, char_cols=8)

    assert table.characters == " .A"
    assert table.lookup(" ") == (0,) * 8
    for mask in table.lookup("A"):
        assert 0 <= mask < 256
