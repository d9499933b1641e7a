"""Glyph tables for the LED panel."""

from ..core.errors import ConfigurationError
from .glyphs import Glyph, GlyphTable
from .raster import load_font, rasterize_font
from .standard import STANDARD

__all__ = [
    "Glyph",
    "GlyphTable",
    "STANDARD",
    "get_font",
    "load_font",
    "rasterize_font",
]

FONT_NAMES = ("standard", "pillow")


def get_font(name: str) -> GlyphTable:
    """Resolve a glyph table by configuration name.

    Raises:
        ConfigurationError: If the name is not a known font
    """
    if name == "standard":
        return STANDARD
    if name == "pillow":
        return rasterize_font(load_font())
    raise ConfigurationError(
        "Unknown font",
        details={"font": name, "available": ", ".join(FONT_NAMES)},
    )
