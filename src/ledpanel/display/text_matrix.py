"""Text matrix builder.

Converts a string into glyph row-masks transposed so that the outer
index is the glyph row and the inner index is the character position.
The engine then reads one mask per character per row while scanning
the panel column by column.
"""

from dataclasses import dataclass

from ..fonts.glyphs import GlyphTable


@dataclass(frozen=True)
class TextMatrix:
    """Row-masks of a rendered string: ``matrix[row][char_index]``."""

    rows: tuple[tuple[int, ...], ...]
    text_length: int

    def __getitem__(self, row: int) -> tuple[int, ...]:
        return self.rows[row]

    def __len__(self) -> int:
        return len(self.rows)

    def mask(self, row: int, index: int) -> int:
        """Row-mask of character ``index``; positions past the text are blank."""
        if index >= self.text_length:
            return 0
        return self.rows[row][index]


def build_text_matrix(text: str, glyphs: GlyphTable) -> TextMatrix:
    """Look up every character and transpose the result.

    Raises:
        GlyphNotFoundError: If any character is missing from ``glyphs``
    """
    matrix = [glyphs.lookup(char) for char in text]
    rows = tuple(
        tuple(glyph[row] for glyph in matrix) for row in range(glyphs.char_rows)
    )
    return TextMatrix(rows=rows, text_length=len(text))
