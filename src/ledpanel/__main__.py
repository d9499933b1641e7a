"""LED panel command line.

Usage:
    python -m ledpanel [options] TEXT

Options:
    --config PATH     Path to a YAML config file
    --mode MODE       loop, scroll or vertical (default from config)
    --interval S      Seconds between steps
    --duration S      Seconds to run a looping animation
    --length N        Characters visible at once
    --output FILE     Write frames to FILE (.gif animates, anything else saves the last frame)
    --ascii           Print the final frame as text
    --debug           Enable debug logging
"""

import argparse
import asyncio
import sys
from pathlib import Path

from PIL import Image

from . import __version__
from .animation import AnimationSession
from .core.config import Config, ConfigManager
from .core.errors import LEDPanelError
from .core.logging import get_logger, setup_logging, setup_logging_from_config
from .display.surface import ImageSurface
from .panel import LEDPanel

logger = get_logger(__name__)


class FrameRecorder:
    """Collects one image per animation step."""

    def __init__(self, surface: ImageSurface) -> None:
        self._surface = surface
        self.frames: list[Image.Image] = []

    def __call__(self, session: AnimationSession) -> None:
        self.frames.append(self._surface.image)

    def save(self, path: Path, interval: float) -> None:
        """Write frames as an animated GIF, or the last frame as a still image."""
        if not self.frames:
            self.frames.append(self._surface.image)

        if path.suffix.lower() == ".gif" and len(self.frames) > 1:
            self.frames[0].save(
                path,
                save_all=True,
                append_images=self.frames[1:],
                duration=max(int(interval * 1000), 20),
                loop=0,
            )
        else:
            self.frames[-1].save(path)
        logger.info("Wrote %d frame(s) to %s", len(self.frames), path)


async def run_animation(panel: LEDPanel, text: str, config: Config) -> bool:
    """Run the configured animation to completion (or for ``duration`` when looping)."""
    animation = config.animation

    if animation.mode == "scroll":
        return await panel.scroll_draw(text, animation.interval)
    if animation.mode == "vertical":
        return await panel.vertical_reveal_draw(text, animation.interval)

    session = panel.loopable_draw(text, animation.interval)
    if not session.done:
        await asyncio.sleep(animation.duration)
        panel.stop()
        await session.wait()
    return True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ledpanel",
        description="Render text on a dot-matrix LED panel",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("text", help="Text to display")
    parser.add_argument("--config", type=Path, default=None, help="Path to config file")
    parser.add_argument("--mode", choices=["loop", "scroll", "vertical"], default=None)
    parser.add_argument("--interval", type=float, default=None, help="Seconds between steps")
    parser.add_argument("--duration", type=float, default=None, help="Seconds to loop")
    parser.add_argument("--length", type=int, default=None, help="Characters visible at once")
    parser.add_argument("--output", type=Path, default=None, help="Output image (.gif, .png)")
    parser.add_argument("--ascii", action="store_true", help="Print the final frame as text")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(level="DEBUG" if args.debug else "INFO")

    try:
        manager = ConfigManager(args.config)
        config = manager.override(
            panel={"length": args.length},
            animation={
                "mode": args.mode,
                "interval": args.interval,
                "duration": args.duration,
            },
        )
        setup_logging_from_config(config.logging, debug=args.debug)

        panel = LEDPanel.from_config(config.panel)
        recorder = FrameRecorder(panel.surface)
        panel.engine.on_step = recorder

        completed = asyncio.run(run_animation(panel, args.text, config))
        logger.debug("Animation completed=%s, frames=%d", completed, len(recorder.frames))

        if args.output:
            recorder.save(args.output, config.animation.interval)
        if args.ascii:
            print(panel.grid.render_ascii())
        return 0

    except LEDPanelError as e:
        logger.error("%s", e)
        logger.debug("Error details: %s", e.to_dict())
        return 1


if __name__ == "__main__":
    sys.exit(main())
