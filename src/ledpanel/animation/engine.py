"""Animation engine: scroll arithmetic and the three animation modes.

The text is treated as a circular buffer ``draw_length`` characters wide.
A window as wide as the panel slides over it; for panel column ``col`` at
scroll ``offset`` the text bit-column is
``(col + offset) % (draw_length * char_cols)``. Positions past the end of
the text are blank, which gives the gap between repeats and the blank
lead-in of a scroll.

Only one session may write to the grid at a time: every entry point
cancels the current session before installing its own, and each timed
mode checks its cancellation token before every step.
"""

import asyncio
import logging
from typing import Awaitable, Callable

from ..core.errors import AnimationError
from ..display.grid import LightGrid
from ..display.text_matrix import TextMatrix, build_text_matrix
from ..fonts.glyphs import GlyphTable
from .session import AnimationMode, AnimationSession

logger = logging.getLogger(__name__)

StepCallback = Callable[[AnimationSession], None]


class AnimationEngine:
    """Single scheduler that owns a light grid.

    Args:
        grid: Lights to draw on
        glyphs: Glyph table used to build text matrices
        on_step: Called with the session after every drawn step
    """

    def __init__(
        self,
        grid: LightGrid,
        glyphs: GlyphTable,
        on_step: StepCallback | None = None,
    ) -> None:
        if glyphs.char_rows != grid.char_rows or glyphs.char_cols != grid.char_cols:
            raise AnimationError(
                "Glyph table does not match grid",
                details={
                    "glyphs": f"{glyphs.char_rows}x{glyphs.char_cols}",
                    "grid": f"{grid.char_rows}x{grid.char_cols}",
                },
            )
        self.grid = grid
        self.glyphs = glyphs
        self.on_step = on_step
        self._session: AnimationSession | None = None

    @property
    def length(self) -> int:
        return self.grid.length

    @property
    def char_rows(self) -> int:
        return self.grid.char_rows

    @property
    def char_cols(self) -> int:
        return self.grid.char_cols

    @property
    def session(self) -> AnimationSession | None:
        """The session that currently owns the grid, or the last one that did."""
        return self._session

    @property
    def is_running(self) -> bool:
        return self._session is not None and not self._session.done

    # -------------------------------------------------------------------------
    # Row and step computation
    # -------------------------------------------------------------------------

    def build_matrix(self, text: str) -> TextMatrix:
        return build_text_matrix(text, self.glyphs)

    def center_offset(self, text: str) -> int:
        """Static offset that centers text no wider than the panel."""
        return (len(text) - self.length) * self.char_cols // 2

    def draw_row(self, row: int, offset: int, draw_length: int, matrix: TextMatrix) -> None:
        """Draw one row of the window starting ``offset`` bit-columns into the text."""
        buffer_width = draw_length * self.char_cols
        for col in range(self.grid.width):
            col_text = (col + offset) % buffer_width
            self.grid.draw_led(row, col, col_text, matrix, draw_length)

    def draw_step(self, offset: int, draw_length: int, matrix: TextMatrix) -> None:
        """Draw every row at ``offset``."""
        for row in range(self.char_rows):
            self.draw_row(row, offset, draw_length, matrix)

    # -------------------------------------------------------------------------
    # Modes
    # -------------------------------------------------------------------------

    def loop(self, text: str, interval: float) -> AnimationSession:
        """Show text as a marquee, or centered if it fits the panel.

        Text longer than the panel scrolls one bit-column every ``interval``
        seconds until another animation replaces it. Shorter text is drawn
        once, centered, with no timer. Requires a running event loop only
        in the scrolling case.
        """
        self._check_interval(interval)
        self.cancel()
        matrix = self.build_matrix(text)

        if len(text) > self.length:
            session = AnimationSession(
                AnimationMode.LOOP, text, interval, matrix, draw_length=len(text) + 1
            )
            self._install(session, self._run_loop)
            return session

        session = AnimationSession(
            AnimationMode.STATIC,
            text,
            interval,
            matrix,
            draw_length=self.length,
            offset=self.center_offset(text),
        )
        self._session = session
        self.draw_step(session.offset, session.draw_length, matrix)
        self._record_step(session)
        logger.debug("Static draw of %r at offset %d", text, session.offset)
        return session

    async def scroll(self, text: str, interval: float) -> bool:
        """Scroll text once across the panel, entering and leaving off-screen.

        Returns:
            True when the scroll completed, False if it was superseded
        """
        self._check_interval(interval)
        self.cancel()
        matrix = self.build_matrix(text)
        session = AnimationSession(
            AnimationMode.SCROLL,
            text,
            interval,
            matrix,
            draw_length=len(text) + self.length,
            offset=-self.length * self.char_cols,
        )
        self._install(session, self._run_scroll)
        return await session.wait()

    async def vertical_reveal(self, text: str, interval: float) -> bool:
        """Draw centered text row by row, then clear it row by row.

        Returns:
            True when both passes completed, False if superseded
        """
        self._check_interval(interval)
        self.cancel()
        matrix = self.build_matrix(text)
        session = AnimationSession(
            AnimationMode.VERTICAL_REVEAL,
            text,
            interval,
            matrix,
            draw_length=self.length,
            offset=self.center_offset(text),
        )
        self._install(session, self._run_vertical_reveal)
        return await session.wait()

    def cancel(self) -> bool:
        """Stop whatever session owns the grid.

        Returns:
            True if a running session was cancelled
        """
        session = self._session
        if session is None or not session.cancel():
            return False
        logger.info("Cancelled %s animation of %r", session.mode.value, session.text)
        return True

    # -------------------------------------------------------------------------
    # Step runners
    # -------------------------------------------------------------------------

    async def _run_loop(self, session: AnimationSession) -> None:
        while not session.cancelled:
            await asyncio.sleep(session.interval)
            if session.cancelled:
                return
            self.draw_step(session.offset, session.draw_length, session.matrix)
            self._record_step(session)
            session.offset += 1

    async def _run_scroll(self, session: AnimationSession) -> None:
        last_offset = len(session.text) * self.char_cols
        for offset in range(session.offset, last_offset + 1):
            if session.cancelled:
                return
            session.offset = offset
            self.draw_step(offset, session.draw_length, session.matrix)
            self._record_step(session)
            await asyncio.sleep(session.interval)

    async def _run_vertical_reveal(self, session: AnimationSession) -> None:
        for row in range(self.char_rows):
            if session.cancelled:
                return
            self.draw_row(row, session.offset, session.draw_length, session.matrix)
            self._record_step(session)
            await asyncio.sleep(session.interval)

        for row in range(self.char_rows):
            await asyncio.sleep(session.interval)
            if session.cancelled:
                return
            self.grid.clear_row(row)
            self._record_step(session)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _install(
        self,
        session: AnimationSession,
        runner: Callable[[AnimationSession], Awaitable[None]],
    ) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise AnimationError(
                "Timed animations need a running event loop",
                details={"mode": session.mode.value},
                cause=e,
            ) from e

        task = loop.create_task(runner(session), name=f"ledpanel-{session.mode.value}")
        session.attach(task)
        task.add_done_callback(lambda t: self._on_session_done(session, t))
        self._session = session
        logger.info(
            "Started %s animation of %r (interval=%.3fs)",
            session.mode.value,
            session.text,
            session.interval,
        )

    def _on_session_done(self, session: AnimationSession, task: "asyncio.Task[None]") -> None:
        if task.cancelled():
            logger.debug("%s session ended after %d steps (cancelled)", session.mode.value, session.steps)
            return

        error = task.exception()
        if error is None:
            logger.info("Finished %s animation after %d steps", session.mode.value, session.steps)
        elif session.mode is AnimationMode.LOOP:
            # Nobody awaits a loop, so this is the only place its error surfaces
            logger.error("Loop animation of %r failed", session.text, exc_info=error)
        else:
            logger.debug("%s session failed: %s", session.mode.value, error)

    def _record_step(self, session: AnimationSession) -> None:
        session.steps += 1
        if self.on_step is not None:
            self.on_step(session)

    @staticmethod
    def _check_interval(interval: float) -> None:
        if interval < 0:
            raise AnimationError("Interval must not be negative", details={"interval": interval})
