"""Animation sessions: one running mode plus its cancellation handle."""

import asyncio
from enum import Enum

from ..display.text_matrix import TextMatrix


class AnimationMode(Enum):
    """Ways a panel can animate text."""

    STATIC = "static"  # centered single draw, no timer
    LOOP = "loop"  # endless marquee
    SCROLL = "scroll"  # one pass from off-screen left to off-screen right
    VERTICAL_REVEAL = "vertical_reveal"  # rows drawn top-down, then cleared


class AnimationSession:
    """State of one animation run.

    A session is owned by exactly one engine. Timed modes are backed by an
    asyncio task; the static mode has none and is finished on creation.

    Attributes:
        mode: Which animation is running
        text: Text being drawn
        interval: Seconds between steps
        matrix: Text matrix built for this run
        draw_length: Width of the circular text buffer in characters
        offset: Current scroll offset in bit-columns
        steps: Number of steps drawn so far
    """

    def __init__(
        self,
        mode: AnimationMode,
        text: str,
        interval: float,
        matrix: TextMatrix,
        draw_length: int,
        offset: int = 0,
    ) -> None:
        self.mode = mode
        self.text = text
        self.interval = interval
        self.matrix = matrix
        self.draw_length = draw_length
        self.offset = offset
        self.steps = 0
        self._cancel_requested = False
        self._task: asyncio.Task[None] | None = None

    def attach(self, task: "asyncio.Task[None]") -> None:
        """Bind the task that runs this session's steps."""
        self._task = task

    @property
    def cancelled(self) -> bool:
        """True once ``cancel()`` was called or the task was cancelled."""
        if self._cancel_requested:
            return True
        return self._task is not None and self._task.cancelled()

    @property
    def done(self) -> bool:
        return self._task is None or self._task.done()

    @property
    def exception(self) -> BaseException | None:
        """Error that ended the session, if any."""
        if self._task is None or not self._task.done() or self._task.cancelled():
            return None
        return self._task.exception()

    def cancel(self) -> bool:
        """Stop the session before its next step.

        Returns:
            True if the session was still running
        """
        if self.done:
            return False
        self._cancel_requested = True
        if self._task is not None:
            self._task.cancel()
        return True

    async def wait(self) -> bool:
        """Wait for the session to end.

        Returns:
            True if it ran to completion, False if it was cancelled

        Raises:
            LEDPanelError: Whatever error aborted a step
        """
        if self._task is None:
            return not self._cancel_requested
        try:
            await self._task
        except asyncio.CancelledError:
            if self._cancel_requested:
                return False
            raise
        return not self._cancel_requested

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "done" if self.done else "running"
        return (
            f"AnimationSession(mode={self.mode.value}, text={self.text!r}, "
            f"offset={self.offset}, steps={self.steps}, {state})"
        )
