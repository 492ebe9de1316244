# SPDX-License-Identifier: MIT
from __future__ import annotations

import random
from typing import Iterable, List, Optional

import pytest
from typer.testing import CliRunner

from matrix_rain.sampler import Sampler
from matrix_rain.trail import Cell


class FakeClock:
    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScriptedKeys:
    """
    Key source driven by a fake clock: each poll waits out its timeout
    unless a key is scheduled inside that window.
    """

    def __init__(self, clock: FakeClock, presses: Optional[List[tuple]] = None) -> None:
        self.clock = clock
        # (time, key) pairs, ordered by time
        self.presses = sorted(presses or [])
        self.timeouts: List[float] = []

    def poll(self, timeout: float) -> Optional[str]:
        self.timeouts.append(timeout)
        if self.presses and self.presses[0][0] <= self.clock.now + timeout:
            at, key = self.presses.pop(0)
            self.clock.now = max(self.clock.now, at)
            return key
        self.clock.advance(timeout)
        return None


class RecordingRenderer:
    def __init__(self, clock: Optional[FakeClock] = None) -> None:
        self.clock = clock
        self.frames: List[List[Cell]] = []
        self.draw_times: List[float] = []
        self.entered = False
        self.exited = False

    def __enter__(self) -> "RecordingRenderer":
        self.entered = True
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.exited = True

    def draw(self, cells: Iterable[Cell]) -> None:
        self.frames.append(list(cells))
        if self.clock is not None:
            self.draw_times.append(self.clock())


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture()
def sampler(rng) -> Sampler:
    return Sampler("abc", rng)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()
