"""Build glyph tables by rasterising Pillow fonts into fixed-size cells."""

import logging
import string
from functools import lru_cache
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from .glyphs import GlyphTable

logger = logging.getLogger(__name__)

PRINTABLE_ASCII = "".join(ch for ch in string.printable if ch.isprintable())

# Font paths to search before falling back to Pillow's built-in font
FONT_PATHS = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/truetype/freefont/FreeMono.ttf",
    "/System/Library/Fonts/Menlo.ttc",  # macOS
]


@lru_cache(maxsize=16)
def load_font(path: str | None = None, size: int = 8) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Load a TrueType font, or the first system monospace font found.

    Falls back to Pillow's default font when nothing can be loaded.
    """
    candidates = [path] if path else [p for p in FONT_PATHS if Path(p).exists()]
    for candidate in candidates:
        try:
            return ImageFont.truetype(candidate, size)
        except OSError as e:
            logger.warning("Failed to load font %s: %s", candidate, e)

    logger.debug("Using Pillow default font")
    return ImageFont.load_default()


def rasterize_glyph(
    font: ImageFont.FreeTypeFont | ImageFont.ImageFont,
    char: str,
    char_rows: int,
    char_cols: int,
    threshold: int = 128,
) -> tuple[int, ...]:
    """Render one character into a ``char_rows`` x ``char_cols`` cell.

    Pixels at or above ``threshold`` become set bits; bit 0 is the left
    column. Anything drawn outside the cell is clipped.
    """
    cell = Image.new("L", (char_cols, char_rows), 0)
    ImageDraw.Draw(cell).text((0, 0), char, font=font, fill=255)

    rows = []
    for r in range(char_rows):
        mask = 0
        for c in range(char_cols):
            if cell.getpixel((c, r)) >= threshold:
                mask |= 1 << c
        rows.append(mask)
    return tuple(rows)


def rasterize_font(
    font: ImageFont.FreeTypeFont | ImageFont.ImageFont,
    chars: str = PRINTABLE_ASCII,
    char_rows: int = 8,
    char_cols: int = 8,
    threshold: int = 128,
    name: str = "pillow",
) -> GlyphTable:
    """Build a ``GlyphTable`` holding one rasterised glyph per character."""
    glyphs = {
        ord(ch): rasterize_glyph(font, ch, char_rows, char_cols, threshold)
        for ch in dict.fromkeys(chars)
    }
    logger.debug("Rasterised %d glyphs into %dx%d cells", len(glyphs), char_rows, char_cols)
    return GlyphTable(char_rows, char_cols, glyphs, name=name)
