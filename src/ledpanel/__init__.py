"""Dot-matrix LED panel text renderer.

Converts text into bitmap glyphs, lays them out across a fixed grid of
lights and animates them:
- Looping marquee (or a centered static draw for short text)
- One-shot scroll from off-screen left to off-screen right
- Vertical reveal-and-clear
"""

__version__ = "1.0.0"

from .panel import LEDPanel

__all__ = ["LEDPanel", "__version__"]
