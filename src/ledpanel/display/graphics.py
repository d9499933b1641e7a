"""Color primitives for the LED panel."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Color:
    """RGB color with utility methods."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        # Clamp values
        object.__setattr__(self, "r", max(0, min(255, self.r)))
        object.__setattr__(self, "g", max(0, min(255, self.g)))
        object.__setattr__(self, "b", max(0, min(255, self.b)))

    @classmethod
    def from_hex(cls, hex_color: str) -> "Color":
        """Create color from hex string (e.g., '#FF5500', 'FF5500' or '#F50')."""
        hex_color = hex_color.lstrip("#")
        if len(hex_color) == 3:
            hex_color = "".join(c * 2 for c in hex_color)
        if len(hex_color) != 6:
            raise ValueError(f"Invalid hex color: {hex_color!r}")
        return cls(
            r=int(hex_color[0:2], 16),
            g=int(hex_color[2:4], 16),
            b=int(hex_color[4:6], 16),
        )

    def to_tuple(self) -> tuple[int, int, int]:
        """Convert to RGB tuple."""
        return (self.r, self.g, self.b)

    def to_hex(self) -> str:
        """Convert to hex string."""
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


@dataclass(frozen=True)
class PanelColors:
    """Resolved on/off/background triple shared by every light."""

    on: Color
    off: Color
    background: Color

    @classmethod
    def from_hex(cls, on: str, off: str, background: str) -> "PanelColors":
        return cls(Color.from_hex(on), Color.from_hex(off), Color.from_hex(background))
