"""Glyph tables: fixed-size row bit-masks looked up by character code."""

from typing import Iterator, Mapping, Sequence

from ..core.errors import ConfigurationError, GlyphNotFoundError

# One row bit-mask per glyph row; bit c of row r lights (r, c), bit 0 is leftmost.
Glyph = tuple[int, ...]


class GlyphTable:
    """Immutable mapping from character code to glyph.

    Every glyph has exactly ``char_rows`` rows, each a mask of at most
    ``char_cols`` significant bits. The shape is checked once here so the
    drawing code can treat both dimensions as constants.
    """

    def __init__(
        self,
        char_rows: int,
        char_cols: int,
        glyphs: Mapping[int, Sequence[int]],
        name: str = "custom",
    ) -> None:
        if char_rows < 1 or char_cols < 1:
            raise ConfigurationError(
                "Glyph dimensions must be positive",
                details={"char_rows": char_rows, "char_cols": char_cols},
            )

        self.char_rows = char_rows
        self.char_cols = char_cols
        self.name = name
        self._glyphs: dict[int, Glyph] = {}

        limit = 1 << char_cols
        for code, rows in glyphs.items():
            glyph = tuple(rows)
            if len(glyph) != char_rows:
                raise ConfigurationError(
                    "Glyph has wrong number of rows",
                    details={"code": code, "rows": len(glyph), "expected": char_rows},
                )
            for mask in glyph:
                if mask < 0 or mask >= limit:
                    raise ConfigurationError(
                        "Glyph row wider than char_cols",
                        details={"code": code, "mask": mask, "char_cols": char_cols},
                    )
            self._glyphs[code] = glyph

    def lookup(self, char: str) -> Glyph:
        """Return the glyph for a single character.

        Raises:
            GlyphNotFoundError: If the table has no entry for ``char``
        """
        try:
            return self._glyphs[ord(char)]
        except KeyError:
            raise GlyphNotFoundError(char) from None

    def __contains__(self, char: object) -> bool:
        return isinstance(char, str) and len(char) == 1 and ord(char) in self._glyphs

    def __len__(self) -> int:
        return len(self._glyphs)

    def __iter__(self) -> Iterator[str]:
        return (chr(code) for code in sorted(self._glyphs))

    @property
    def characters(self) -> str:
        """All characters with a glyph, in code order."""
        return "".join(self)

    def __repr__(self) -> str:
        return (
            f"GlyphTable(name={self.name!r}, {self.char_rows}x{self.char_cols}, "
            f"glyphs={len(self._glyphs)})"
        )
