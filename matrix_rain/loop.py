# matrix_rain/loop.py
"""
The animation loop.

One thread does everything, strictly in order, once per frame: poll the
keyboard (bounded wait), advance the field, draw it, schedule the next frame.
The keyboard poll doubles as the frame wait, so a quit key is noticed within
one frame period.
"""

from __future__ import annotations

import enum
import logging
import time
from typing import Callable, Iterable, Optional, Protocol

from .field import RainField
from .trail import Cell

logger = logging.getLogger(__name__)

FPS = 20
QUIT_KEYS = frozenset({"q", "Q"})


class KeySource(Protocol):
    def poll(self, timeout: float) -> Optional[str]: ...


class FrameSink(Protocol):
    def draw(self, cells: Iterable[Cell]) -> None: ...


class LoopState(enum.Enum):
    RUNNING = "running"
    STOPPED = "stopped"


class RainLoop:
    def __init__(
        self,
        field: RainField,
        renderer: FrameSink,
        keys: KeySource,
        frame_period: float = 1.0 / FPS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if frame_period <= 0:
            raise ValueError("frame_period must be positive")
        self.field = field
        self.renderer = renderer
        self.keys = keys
        self.frame_period = frame_period
        self.clock = clock
        self.state = LoopState.RUNNING
        self.frames = 0
        self._next_frame = clock()

    @property
    def running(self) -> bool:
        return self.state is LoopState.RUNNING

    def stop(self) -> None:
        if self.state is LoopState.RUNNING:
            logger.debug("stopping after %d frames", self.frames)
        self.state = LoopState.STOPPED

    def _time_left(self) -> float:
        return min(self.frame_period, max(0.0, self._next_frame - self.clock()))

    def tick(self) -> None:
        """Run one loop iteration; draws a frame once one is due."""
        if not self.running:
            return

        key = self.keys.poll(self._time_left())
        if key in QUIT_KEYS:
            self.stop()
            return
        if self._time_left() > 0:
            # woken early by some other key; the frame is not due yet
            return

        self.field.advance_frame()
        self.renderer.draw(self.field.live_cells())
        self.frames += 1

        self._next_frame += self.frame_period
        now = self.clock()
        if self._next_frame < now:
            # running behind: don't try to catch up, just resync
            self._next_frame = now

    def run(self, max_frames: Optional[int] = None) -> int:
        """
        Tick until the quit key is pressed (or ``max_frames`` frames have
        been drawn). Returns the number of frames drawn.
        """
        logger.debug("loop started, frame period %.3fs", self.frame_period)
        try:
            while self.running:
                if max_frames is not None and self.frames >= max_frames:
                    break
                self.tick()
        except KeyboardInterrupt:
            self.stop()
        return self.frames
