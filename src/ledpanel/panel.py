"""LED panel: text rendered as an animated dot-matrix display.

Usage:
    panel = LEDPanel(length=8, color=ColorConfig(on="#FF3030"), led_size=(10, 10))
    panel.loopable_draw("HELLO WORLD", 0.05)
    await panel.scroll_draw("BYE", 0.05)
    panel.surface.save("panel.png")
"""

import logging

from .animation import AnimationEngine, AnimationSession
from .animation.engine import StepCallback
from .core.config import ColorConfig, PanelConfig
from .display.graphics import PanelColors
from .display.grid import LightGrid
from .display.surface import DisplaySurface, ImageSurface
from .fonts import GlyphTable, get_font

logger = logging.getLogger(__name__)


class LEDPanel:
    """A row of ``length`` character cells made of individual lights.

    Construction sizes the surface, allocates the light grid and paints
    every light off; none of that is revisited afterward.

    Args:
        length: Number of characters the panel shows at once
        color: On/off/background colors
        led_size: (width, height) of one light in pixels
        font: Glyph table, or the name of a built-in one
        surface: Surface to paint on; an ``ImageSurface`` is created if omitted
        on_step: Called with the session after every animation step
    """

    def __init__(
        self,
        length: int,
        color: ColorConfig | None = None,
        led_size: tuple[int, int] = (10, 10),
        font: GlyphTable | str = "standard",
        surface: DisplaySurface | None = None,
        on_step: StepCallback | None = None,
    ) -> None:
        color = color or ColorConfig()
        self.glyphs = get_font(font) if isinstance(font, str) else font
        self.colors = PanelColors.from_hex(color.on, color.off, color.background)
        self.led_size = led_size

        if surface is None:
            surface = ImageSurface(
                self.glyphs.char_rows,
                self.glyphs.char_cols * length,
                led_size,
                self.colors.background,
            )
        self.surface = surface

        self.grid = LightGrid(
            surface,
            self.glyphs.char_rows,
            self.glyphs.char_cols,
            length,
            self.colors,
        )
        self.engine = AnimationEngine(self.grid, self.glyphs, on_step=on_step)

        logger.info(
            "LED panel created: %d chars, %dx%d lights, font=%s",
            length,
            self.grid.width,
            self.grid.height,
            self.glyphs.name,
        )

    @classmethod
    def from_config(
        cls,
        config: PanelConfig,
        surface: DisplaySurface | None = None,
        on_step: StepCallback | None = None,
    ) -> "LEDPanel":
        """Create a panel from validated configuration."""
        return cls(
            length=config.length,
            color=config.color,
            led_size=config.led_size,
            font=config.font,
            surface=surface,
            on_step=on_step,
        )

    @property
    def length(self) -> int:
        return self.grid.length

    @property
    def char_rows(self) -> int:
        return self.glyphs.char_rows

    @property
    def char_cols(self) -> int:
        return self.glyphs.char_cols

    def loopable_draw(self, text: str, interval: float) -> AnimationSession:
        """Marquee text that does not fit; center text that does.

        Runs until another draw replaces it, so there is nothing to await.
        """
        return self.engine.loop(text, interval)

    async def scroll_draw(self, text: str, interval: float) -> bool:
        """Scroll text across once; True when it completed."""
        return await self.engine.scroll(text, interval)

    async def vertical_reveal_draw(self, text: str, interval: float) -> bool:
        """Reveal centered text top-down then clear it; True when it completed."""
        return await self.engine.vertical_reveal(text, interval)

    def stop(self) -> bool:
        """Cancel the running animation, leaving the lights as they are."""
        return self.engine.cancel()
