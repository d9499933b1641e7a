"""Tests for the animation engine: offsets, wraparound and the three modes."""

import asyncio
import logging

import pytest

from ledpanel.animation import AnimationEngine, AnimationMode
from ledpanel.core.errors import AnimationError, GlyphNotFoundError, LEDPanelError
from ledpanel.display.graphics import PanelColors
from ledpanel.display.grid import LightGrid
from ledpanel.display.mock import MockSurface
from ledpanel.fonts import STANDARD
from ledpanel.panel import LEDPanel

from .conftest import GLYPH_A, GLYPH_B

COLORS = PanelColors.from_hex("#FF0000", "#444444", "#000000")


def expected_frame(panel, text, offset, draw_length):
    """Draw ``text`` on a fresh grid of the same shape and return its lights."""
    grid = LightGrid(MockSurface(), panel.char_rows, panel.char_cols, panel.length, panel.colors)
    engine = AnimationEngine(grid, panel.glyphs)
    engine.draw_step(offset, draw_length, engine.build_matrix(text))
    return grid.snapshot()


class StepLog:
    """on_step callback recording (mode, offset, lights) per step."""

    def __init__(self) -> None:
        self.panel = None
        self.steps = []

    def __call__(self, session) -> None:
        self.steps.append((session.mode, session.offset, self.panel.grid.snapshot()))


@pytest.fixture
def step_log():
    return StepLog()


# -----------------------------------------------------------------------------
# Offsets and wraparound
# -----------------------------------------------------------------------------


def test_center_offset(make_panel):
    engine = make_panel(4).engine

    assert engine.center_offset("ABIA") == 0
    assert engine.center_offset("AB") == -5
    assert engine.center_offset("A") == -8


def test_center_offset_even_glyph_width():
    grid = LightGrid(MockSurface(), 8, 8, 6, COLORS)
    engine = AnimationEngine(grid, STANDARD)

    assert engine.center_offset("HI") == -16
    assert engine.center_offset("HELLO!") == 0


def test_draw_row_wraps_around_buffer(make_panel):
    panel = make_panel(2)
    matrix = panel.engine.build_matrix("AB")

    # Shifting by one whole character shows B then wraps back to A
    panel.engine.draw_row(2, 5, 2, matrix)

    row = panel.grid.snapshot()[2]
    assert row[:5] == tuple(bool((GLYPH_B[2] >> c) & 1) for c in range(5))
    assert row[5:] == tuple(bool((GLYPH_A[2] >> c) & 1) for c in range(5))


def test_negative_offset_shows_blank_padding(make_panel):
    panel = make_panel(2)
    matrix = panel.engine.build_matrix("A")

    panel.engine.draw_step(-5, 2, matrix)

    lights = panel.grid.snapshot()
    for row in range(5):
        assert not any(lights[row][:5])
        assert lights[row][5:] == tuple(bool((GLYPH_A[row] >> c) & 1) for c in range(5))


def test_engine_rejects_mismatched_glyph_table(glyphs):
    grid = LightGrid(MockSurface(), 8, 8, 2, COLORS)

    with pytest.raises(AnimationError):
        AnimationEngine(grid, glyphs)


# -----------------------------------------------------------------------------
# Loop / static
# -----------------------------------------------------------------------------


def test_short_text_draws_once_centered(make_panel, step_log):
    panel = make_panel(4, on_step=step_log)
    step_log.panel = panel

    session = panel.loopable_draw("AB", 0.5)

    assert session.mode is AnimationMode.STATIC
    assert session.done
    assert len(step_log.steps) == 1
    assert panel.grid.snapshot() == expected_frame(panel, "AB", -5, 4)


def test_static_draw_needs_no_event_loop(make_panel):
    panel = make_panel(3)

    session = panel.loopable_draw("AB", 1.0)

    assert session.mode is AnimationMode.STATIC
    assert not panel.engine.is_running


def test_long_text_loop_needs_event_loop(make_panel):
    panel = make_panel(1)

    with pytest.raises(AnimationError):
        panel.loopable_draw("AB", 0.1)


@pytest.mark.asyncio
async def test_loop_steps_offset_by_one(make_panel, step_log):
    panel = make_panel(1, on_step=step_log)
    step_log.panel = panel

    session = panel.loopable_draw("AB", 0)
    for _ in range(8):
        await asyncio.sleep(0)
    panel.stop()
    await session.wait()

    offsets = [offset for _, offset, _ in step_log.steps]
    assert offsets == list(range(len(offsets)))
    assert len(offsets) >= 3
    # Each step drew its offset over a three-character buffer (text plus one blank)
    for _, offset, lights in step_log.steps:
        assert lights == expected_frame(panel, "AB", offset, 3)


@pytest.mark.asyncio
async def test_loop_reentry_cancels_previous_loop(make_panel):
    panel = make_panel(1)

    first = panel.loopable_draw("AB", 0)
    for _ in range(5):
        await asyncio.sleep(0)
    second = panel.loopable_draw("BA", 0)
    await asyncio.sleep(0)
    await asyncio.sleep(0)

    assert first.cancelled
    assert first.done
    assert panel.engine.session is second

    first_steps = first.steps
    for _ in range(5):
        await asyncio.sleep(0)

    assert first.steps == first_steps
    assert second.steps > 0
    assert not second.done

    panel.stop()
    assert await second.wait() is False


@pytest.mark.asyncio
async def test_loop_step_count_bounded_by_elapsed_time(make_panel):
    panel = make_panel(1)
    interval = 0.01
    loop = asyncio.get_running_loop()

    start = loop.time()
    panel.loopable_draw("AB", interval)
    session = panel.loopable_draw("BA", interval)
    await asyncio.sleep(0.1)
    elapsed = loop.time() - start
    panel.stop()
    await session.wait()

    assert session.steps <= elapsed / interval + 1


@pytest.mark.asyncio
async def test_short_text_cancels_running_loop(make_panel):
    panel = make_panel(2)

    looping = panel.loopable_draw("ABI", 0)
    await asyncio.sleep(0)
    panel.loopable_draw("A", 0)
    await asyncio.sleep(0)

    assert looping.cancelled
    assert panel.engine.session.mode is AnimationMode.STATIC


# -----------------------------------------------------------------------------
# Scroll
# -----------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_scroll_steps_through_inclusive_range(make_panel, step_log):
    panel = make_panel(4, on_step=step_log)
    step_log.panel = panel

    completed = await panel.scroll_draw("AB", 0)

    assert completed is True
    assert len(step_log.steps) == (2 + 4) * 5 + 1
    offsets = [offset for _, offset, _ in step_log.steps]
    assert offsets == list(range(-20, 11))


@pytest.mark.asyncio
async def test_scroll_starts_and_ends_off_screen(make_panel, step_log):
    panel = make_panel(4, on_step=step_log)
    step_log.panel = panel

    await panel.scroll_draw("AB", 0)

    first_lights = step_log.steps[0][2]
    last_lights = step_log.steps[-1][2]
    assert not any(any(row) for row in first_lights)
    assert not any(any(row) for row in last_lights)

    # At offset 0 the text sits at the left edge
    at_zero = next(lights for _, offset, lights in step_log.steps if offset == 0)
    assert at_zero == expected_frame(panel, "AB", 0, 6)


@pytest.mark.asyncio
async def test_scroll_cancels_running_loop(make_panel):
    panel = make_panel(1)

    looping = panel.loopable_draw("AB", 0)
    await asyncio.sleep(0)

    assert await panel.scroll_draw("A", 0) is True
    assert looping.cancelled


@pytest.mark.asyncio
async def test_scroll_superseded_returns_false(make_panel):
    panel = make_panel(2)

    scrolling = asyncio.create_task(panel.scroll_draw("AB", 0))
    await asyncio.sleep(0)
    await asyncio.sleep(0)
    panel.loopable_draw("A", 0)

    assert await scrolling is False
    assert panel.engine.session.mode is AnimationMode.STATIC


@pytest.mark.asyncio
async def test_scroll_missing_glyph_raises(make_panel):
    panel = make_panel(2)

    with pytest.raises(GlyphNotFoundError):
        await panel.scroll_draw("AZ", 0)


@pytest.mark.asyncio
async def test_negative_interval_rejected(make_panel):
    panel = make_panel(2)

    with pytest.raises(AnimationError):
        await panel.scroll_draw("AB", -1)


# -----------------------------------------------------------------------------
# Vertical reveal
# -----------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_vertical_reveal_draws_all_rows_before_clearing(make_panel, step_log):
    panel = make_panel(2, on_step=step_log)
    step_log.panel = panel
    full = expected_frame(panel, "A", panel.engine.center_offset("A"), 2)
    blank = (False,) * panel.grid.width

    completed = await panel.vertical_reveal_draw("A", 0)

    assert completed is True
    assert len(step_log.steps) == 2 * panel.char_rows

    reveal, clear = step_log.steps[:5], step_log.steps[5:]
    for k, (_, _, lights) in enumerate(reveal, start=1):
        assert lights[:k] == full[:k]
        assert all(row == blank for row in lights[k:])
    for k, (_, _, lights) in enumerate(clear, start=1):
        assert all(row == blank for row in lights[:k])
        assert lights[k:] == full[k:]

    assert not any(any(row) for row in panel.grid.snapshot())


@pytest.mark.asyncio
async def test_vertical_reveal_superseded_by_scroll(make_panel):
    panel = make_panel(2)

    revealing = asyncio.create_task(panel.vertical_reveal_draw("AB", 0.01))
    await asyncio.sleep(0.015)

    assert await panel.scroll_draw("B", 0) is True
    assert await revealing is False


# -----------------------------------------------------------------------------
# Surface failures
# -----------------------------------------------------------------------------


class SurfaceFault(LEDPanelError):
    """Raised by FailingSurface once armed."""


class FailingSurface(MockSurface):
    """Mock surface whose next paint raises after ``armed`` is set."""

    def __init__(self) -> None:
        super().__init__()
        self.armed = False
        self.error = SurfaceFault("Surface went away")

    def set_cell_color(self, row, col, color) -> None:
        if self.armed:
            raise self.error
        super().set_cell_color(row, col, color)


@pytest.fixture
def failing_panel(glyphs):
    """Length-1 panel whose surface fails once armed; construction paints normally."""
    surface = FailingSurface()
    panel = LEDPanel(length=1, font=glyphs, surface=surface)
    surface.armed = True
    return panel


@pytest.mark.asyncio
async def test_scroll_surface_error_propagates(failing_panel):
    with pytest.raises(SurfaceFault) as excinfo:
        await failing_panel.scroll_draw("AB", 0)

    assert excinfo.value is failing_panel.surface.error
    assert not failing_panel.engine.is_running


@pytest.mark.asyncio
async def test_loop_surface_error_is_logged_and_reraised(failing_panel, caplog):
    caplog.set_level(logging.ERROR, logger="ledpanel.animation.engine")
    error = failing_panel.surface.error

    session = failing_panel.loopable_draw("AB", 0)
    for _ in range(5):
        await asyncio.sleep(0)

    assert session.done
    assert session.exception is error
    assert not failing_panel.engine.is_running
    assert any(
        record.levelno == logging.ERROR and record.name == "ledpanel.animation.engine"
        for record in caplog.records
    )

    with pytest.raises(SurfaceFault):
        await session.wait()
