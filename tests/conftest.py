"""Shared fixtures: a 5x5 glyph table and mock-backed panels."""

import pytest

from ledpanel.core.config import ColorConfig
from ledpanel.display.mock import MockSurface
from ledpanel.fonts import GlyphTable
from ledpanel.panel import LEDPanel

GLYPH_A = (0b01110, 0b10001, 0b11111, 0b10001, 0b10001)
GLYPH_B = (0b01111, 0b10001, 0b01111, 0b10001, 0b01111)
GLYPH_I = (0b00100, 0b00100, 0b00100, 0b00100, 0b00100)
GLYPH_SPACE = (0, 0, 0, 0, 0)

COLORS = ColorConfig(on="#FF0000", off="#444444", background="#000000")


@pytest.fixture
def glyphs() -> GlyphTable:
    return GlyphTable(
        5,
        5,
        {
            ord("A"): GLYPH_A,
            ord("B"): GLYPH_B,
            ord("I"): GLYPH_I,
            ord(" "): GLYPH_SPACE,
        },
        name="test5x5",
    )


@pytest.fixture
def surface() -> MockSurface:
    return MockSurface()


@pytest.fixture
def make_panel(glyphs, surface):
    """Factory for panels of a given length drawing on the mock surface."""

    def _make(length: int, on_step=None) -> LEDPanel:
        return LEDPanel(
            length=length,
            color=COLORS,
            font=glyphs,
            surface=surface,
            on_step=on_step,
        )

    return _make
