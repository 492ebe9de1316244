# matrix_rain/field.py

from __future__ import annotations

import logging
import math
from itertools import chain
from typing import Iterator, List

from .errors import ConfigError
from .sampler import Sampler
from .trail import Cell, Trail

logger = logging.getLogger(__name__)

# Scales the per-column spawn probability; 1.0 aims to refill the whole
# deficit within a frame or two.
SPAWN_RATE = 1.0
# A column takes no new trail while its newest head is in the top rows
SPAWN_CLEARANCE = 2


class RainField:
    """
    All live trails on a ``width`` x ``height`` grid.

    ``density`` is the number of cells per expected trail, so the field keeps
    at most ``ceil(width * height / density)`` trails alive.
    """

    def __init__(
        self,
        width: int,
        height: int,
        density: int,
        sampler: Sampler,
        spawn_rate: float = SPAWN_RATE,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ConfigError(f"terminal size must be positive, got {width}x{height}")
        if density <= 0:
            raise ConfigError(f"trail density must be positive, got {density}")
        self.width = width
        self.height = height
        self.density = density
        self.sampler = sampler
        self.spawn_rate = spawn_rate
        self.cap = math.ceil(width * height / density)
        self.trails: List[Trail] = []
        self.frame = 0
        logger.debug(
            "rain field %dx%d density=%d cap=%d", width, height, density, self.cap
        )

    @property
    def trail_count(self) -> int:
        return len(self.trails)

    def advance_frame(self) -> None:
        """Advance every trail, drop the expired ones, then spawn new ones."""
        self.trails = [trail for trail in self.trails if trail.advance()]
        self._spawn()
        self.frame += 1

    def _free_columns(self) -> List[int]:
        busy = {
            trail.column for trail in self.trails if trail.near_top(SPAWN_CLEARANCE)
        }
        return [col for col in range(self.width) if col not in busy]

    def _spawn(self) -> None:
        deficit = self.cap - len(self.trails)
        if deficit <= 0:
            return
        free = self._free_columns()
        if not free:
            return

        probability = min(1.0, self.spawn_rate * deficit / len(free))
        spawned = 0
        for column in free:
            if len(self.trails) >= self.cap:
                break
            if self.sampler.chance(probability):
                self.trails.append(Trail.spawn(column, self.height, self.sampler))
                spawned += 1
        if spawned:
            logger.debug(
                "frame %d: spawned %d, %d/%d live",
                self.frame, spawned, len(self.trails), self.cap,
            )

    def live_cells(self) -> Iterator[Cell]:
        return chain.from_iterable(trail.cells() for trail in self.trails)
