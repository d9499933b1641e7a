"""Display subsystem for the LED panel.

Provides:
- TextMatrix builder turning text into transposed glyph row-masks
- LightGrid holding every light's on/off state
- Surfaces that paint lights (Pillow image, mock)
- Color primitives
"""

from .graphics import Color, PanelColors
from .grid import LightGrid
from .mock import MockSurface
from .surface import DisplaySurface, ImageSurface
from .text_matrix import TextMatrix, build_text_matrix

__all__ = [
    "Color",
    "DisplaySurface",
    "ImageSurface",
    "LightGrid",
    "MockSurface",
    "PanelColors",
    "TextMatrix",
    "build_text_matrix",
]
