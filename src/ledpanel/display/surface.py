"""Drawable surfaces that turn logical lights into pixels.

The light grid only needs ``set_cell_color(row, col, color)``; anything
with that method can back a panel.
"""

import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from PIL import Image, ImageDraw

from .graphics import Color

logger = logging.getLogger(__name__)


@runtime_checkable
class DisplaySurface(Protocol):
    """Anything that can paint one light cell."""

    def set_cell_color(self, row: int, col: int, color: Color) -> None: ...


class ImageSurface:
    """Pillow-backed surface drawing each light as an ellipse.

    The image is ``led_width * cols`` by ``led_height * rows`` pixels,
    filled with the background color; cell (row, col) occupies the
    ``led_size`` box at ``(led_width * col, led_height * row)``.

    Usage:
        surface = ImageSurface(8, 64, (10, 10), Color(0, 0, 0))
        surface.set_cell_color(0, 0, Color(255, 48, 48))
        surface.save("panel.png")
    """

    def __init__(
        self,
        rows: int,
        cols: int,
        led_size: tuple[int, int],
        background: Color,
    ) -> None:
        self.rows = rows
        self.cols = cols
        self.led_width, self.led_height = led_size
        self.background = background

        self._image = Image.new(
            "RGB",
            (self.led_width * cols, self.led_height * rows),
            background.to_tuple(),
        )
        self._draw = ImageDraw.Draw(self._image)

        logger.debug(
            "ImageSurface created: %dx%d cells, %dx%d px",
            cols,
            rows,
            self._image.width,
            self._image.height,
        )

    @property
    def size(self) -> tuple[int, int]:
        """Image size in pixels as (width, height)."""
        return self._image.size

    def set_cell_color(self, row: int, col: int, color: Color) -> None:
        """Paint one light."""
        x = self.led_width * col
        y = self.led_height * row
        box = (x, y, x + self.led_width - 1, y + self.led_height - 1)
        # Repaint the background first so a dimmer color fully replaces a brighter one
        self._draw.rectangle(box, fill=self.background.to_tuple())
        self._draw.ellipse(box, fill=color.to_tuple())

    @property
    def image(self) -> Image.Image:
        """Copy of the current frame."""
        return self._image.copy()

    def save(self, path: str | Path) -> None:
        """Write the current frame to an image file."""
        self._image.save(path)
        logger.info("Saved panel frame to %s", path)
