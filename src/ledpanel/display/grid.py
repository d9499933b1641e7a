"""Logical on/off state of every light on the panel.

Cells are addressed by (row, column) and mirrored onto a display
surface, one paint call per update. Every public method bounds-checks
its indices with ``assert_boundaries``.
"""

import logging

from ..core.errors import assert_boundaries
from .graphics import PanelColors
from .surface import DisplaySurface
from .text_matrix import TextMatrix

logger = logging.getLogger(__name__)


class LightGrid:
    """``char_rows`` x ``char_cols * length`` lights, allocated once.

    Args:
        surface: Where light changes are painted
        char_rows: Glyph height, the number of light rows
        char_cols: Glyph width in bit-columns
        length: Number of characters visible at once
        colors: On/off/background colors for every light
    """

    def __init__(
        self,
        surface: DisplaySurface,
        char_rows: int,
        char_cols: int,
        length: int,
        colors: PanelColors,
    ) -> None:
        self.surface = surface
        self.char_rows = char_rows
        self.char_cols = char_cols
        self.length = length
        self.colors = colors
        self._cells = [[False] * self.width for _ in range(char_rows)]

        for row in range(char_rows):
            for col in range(self.width):
                surface.set_cell_color(row, col, colors.off)

        logger.debug("LightGrid allocated: %d rows x %d cols", char_rows, self.width)

    @property
    def width(self) -> int:
        """Number of physical light columns."""
        return self.char_cols * self.length

    @property
    def height(self) -> int:
        return self.char_rows

    def clear_row(self, row: int) -> None:
        """Turn every light in ``row`` off."""
        assert_boundaries(row, self.char_rows)
        cells = self._cells[row]
        for col in range(self.width):
            cells[col] = False
            self.surface.set_cell_color(row, col, self.colors.off)

    def set_led(self, row: int, col_panel: int, bit: int | bool) -> None:
        """Turn one light on or off."""
        assert_boundaries(row, self.char_rows)
        assert_boundaries(col_panel, self.width)
        lit = bool(bit)
        self._cells[row][col_panel] = lit
        self.surface.set_cell_color(
            row, col_panel, self.colors.on if lit else self.colors.off
        )

    def draw_led(
        self,
        row: int,
        col_panel: int,
        col_text: int,
        matrix: TextMatrix,
        draw_length: int,
    ) -> None:
        """Light ``(row, col_panel)`` from bit-column ``col_text`` of the text.

        ``col_text`` indexes the circular text buffer of ``draw_length``
        characters, so it is bounded by ``draw_length * char_cols``.
        This is deliberately wider than ``char_cols * length``: loop and
        scroll steps address text columns past the panel width.
        """
        assert_boundaries(row, self.char_rows)
        assert_boundaries(col_panel, self.width)
        assert_boundaries(col_text, draw_length * self.char_cols)
        mask = matrix.mask(row, col_text // self.char_cols)
        self.set_led(row, col_panel, (mask >> (col_text % self.char_cols)) & 1)

    def is_lit(self, row: int, col: int) -> bool:
        assert_boundaries(row, self.char_rows)
        assert_boundaries(col, self.width)
        return self._cells[row][col]

    def snapshot(self) -> tuple[tuple[bool, ...], ...]:
        """Immutable copy of every light's state, row-major."""
        return tuple(tuple(row) for row in self._cells)

    def render_ascii(self, on: str = "#", off: str = ".") -> str:
        """Text picture of the grid, one line per row."""
        return "\n".join(
            "".join(on if lit else off for lit in row) for row in self._cells
        )
