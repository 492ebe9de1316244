from __future__ import annotations

import random

import pytest

from matrix_rain.field import RainField
from matrix_rain.loop import LoopState, RainLoop
from matrix_rain.sampler import Sampler

from .conftest import RecordingRenderer, ScriptedKeys

PERIOD = 0.05


def make_loop(clock, presses=None, renderer=None):
    field = RainField(16, 8, 10, Sampler("ab", random.Random(3)))
    keys = ScriptedKeys(clock, presses)
    renderer = renderer or RecordingRenderer(clock)
    return RainLoop(field, renderer, keys, frame_period=PERIOD, clock=clock), keys, renderer


def test_starts_running(clock):
    loop, _, _ = make_loop(clock)
    assert loop.state is LoopState.RUNNING


def test_frames_are_paced_at_the_frame_period(clock):
    loop, keys, renderer = make_loop(clock)
    drawn = loop.run(max_frames=6)
    assert drawn == 6
    assert len(renderer.frames) == 6
    gaps = [b - a for a, b in zip(renderer.draw_times, renderer.draw_times[1:])]
    assert gaps == pytest.approx([PERIOD] * 5)
    assert all(0.0 <= t <= PERIOD for t in keys.timeouts)


def test_quit_key_stops_within_one_frame_period(clock):
    press_at = clock() + 3.3 * PERIOD
    loop, _, renderer = make_loop(clock, presses=[(press_at, "q")])
    loop.run()
    assert loop.state is LoopState.STOPPED
    assert clock() - press_at <= PERIOD
    # no frame drawn after the quit key
    assert renderer.draw_times[-1] <= press_at


def test_uppercase_q_also_quits(clock):
    loop, _, _ = make_loop(clock, presses=[(clock() + PERIOD, "Q")])
    loop.run()
    assert loop.state is LoopState.STOPPED


def test_other_keys_do_not_advance_early(clock):
    start = clock()
    presses = [(start + 0.2 * PERIOD, "x"), (start + 1.5 * PERIOD, " ")]
    loop, _, renderer = make_loop(clock, presses=presses)
    loop.run(max_frames=3)
    assert loop.state is LoopState.RUNNING
    assert renderer.draw_times == pytest.approx(
        [start, start + PERIOD, start + 2 * PERIOD]
    )


def test_stopped_loop_does_nothing(clock):
    loop, keys, renderer = make_loop(clock)
    loop.stop()
    loop.tick()
    assert loop.state is LoopState.STOPPED
    assert keys.timeouts == []
    assert renderer.frames == []


def test_renderer_failure_propagates(clock):
    class BrokenRenderer(RecordingRenderer):
        def draw(self, cells):
            raise OSError("terminal went away")

    loop, _, _ = make_loop(clock, renderer=BrokenRenderer())
    with pytest.raises(OSError):
        loop.run()


def test_keyboard_interrupt_stops_the_loop(clock):
    class InterruptingKeys:
        def poll(self, timeout):
            raise KeyboardInterrupt

    field = RainField(4, 4, 4, Sampler("a", random.Random(1)))
    loop = RainLoop(field, RecordingRenderer(), InterruptingKeys(), clock=clock)
    assert loop.run() == 0
    assert loop.state is LoopState.STOPPED


def test_slow_frames_resync_instead_of_catching_up(clock):
    class SlowRenderer(RecordingRenderer):
        def draw(self, cells):
            super().draw(cells)
            clock.advance(3 * PERIOD)

    renderer = SlowRenderer(clock)
    loop, keys, _ = make_loop(clock, renderer=renderer)
    loop.run(max_frames=4)
    gaps = [b - a for a, b in zip(renderer.draw_times, renderer.draw_times[1:])]
    assert gaps == pytest.approx([3 * PERIOD] * 3)
    assert keys.timeouts == pytest.approx([0.0] * 4)


def test_frame_period_must_be_positive(clock):
    field = RainField(4, 4, 4, Sampler("a"))
    with pytest.raises(ValueError):
        RainLoop(field, RecordingRenderer(), ScriptedKeys(clock), frame_period=0)
