# matrix_rain/sampler.py
"""
Random glyphs and trail parameters.

The Sampler owns nothing but its configuration and the random source it was
given, so a seeded ``random.Random`` makes a whole animation reproducible.
"""

from __future__ import annotations

import random
from typing import List, Optional, Sequence, Tuple

from .errors import ConfigError

MIN_TRAIL_LENGTH = 4
# Mostly one row per frame, now and then a faster trail for variety
TRAIL_SPEEDS: Tuple[int, ...] = (1, 1, 1, 2)
SPAWN_JITTER = 2


class Sampler:
    def __init__(
        self,
        charset: str,
        rng: Optional[random.Random] = None,
        *,
        min_length: int = MIN_TRAIL_LENGTH,
        speeds: Sequence[int] = TRAIL_SPEEDS,
        spawn_jitter: int = SPAWN_JITTER,
    ) -> None:
        if not charset:
            raise ConfigError("character set must not be empty")
        if min_length < 1:
            raise ConfigError("minimum trail length must be at least 1")
        if not speeds or min(speeds) < 1:
            raise ConfigError("trail speeds must be positive")
        self.charset = charset
        self.rng = rng or random.Random()
        self.min_length = min_length
        self.speeds = tuple(speeds)
        self.spawn_jitter = max(0, spawn_jitter)

    def uniform_index(self, n: int) -> int:
        return self.rng.randrange(n)

    def sample_character(self) -> str:
        """Return one glyph drawn uniformly from the character set."""
        return self.charset[self.uniform_index(len(self.charset))]

    def sample_characters(self, n: int) -> List[str]:
        return [self.sample_character() for _ in range(n)]

    def sample_trail_params(self, terminal_height: int) -> Tuple[int, int]:
        """
        Return ``(length, speed)`` for a new trail.

        The length lies in ``[min_length, terminal_height]``; on terminals
        shorter than ``min_length`` the lower bound shrinks to the height.
        """
        upper = max(1, terminal_height)
        lower = min(self.min_length, upper)
        length = self.rng.randint(lower, upper)
        speed = self.speeds[self.uniform_index(len(self.speeds))]
        return length, speed

    def sample_column(self, width: int) -> int:
        return self.uniform_index(width)

    def sample_start_row(self) -> int:
        """Head row for a new trail: on the top row or a little above it."""
        return -self.uniform_index(self.spawn_jitter + 1)

    def chance(self, probability: float) -> bool:
        """True with the given probability (clamped to [0, 1])."""
        if probability <= 0.0:
            return False
        if probability >= 1.0:
            return True
        return self.rng.random() < probability
