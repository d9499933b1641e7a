"""Mock surface for development and testing.

Records every paint call instead of drawing pixels.
"""

import logging

from .graphics import Color

logger = logging.getLogger(__name__)


class MockSurface:
    """Surface that remembers what it was asked to paint.

    Attributes:
        calls: Every ``(row, col, color)`` in call order
        colors: Last color painted per ``(row, col)``
    """

    def __init__(self) -> None:
        self.calls: list[tuple[int, int, Color]] = []
        self.colors: dict[tuple[int, int], Color] = {}

    def set_cell_color(self, row: int, col: int, color: Color) -> None:
        self.calls.append((row, col, color))
        self.colors[(row, col)] = color

    def color_at(self, row: int, col: int) -> Color | None:
        return self.colors.get((row, col))

    def reset_calls(self) -> None:
        """Forget recorded calls; cell colors are kept."""
        logger.debug("MockSurface: dropping %d recorded calls", len(self.calls))
        self.calls.clear()
