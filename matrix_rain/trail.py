# matrix_rain/trail.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, NamedTuple

from .sampler import Sampler

# Chance per frame that a body glyph is swapped for a new one
SHIMMER_RATE = 0.05


class Cell(NamedTuple):
    row: int
    column: int
    character: str
    brightness: float


@dataclass
class Trail:
    """
    One falling streak of glyphs.

    ``characters[0]`` is the head at ``head_row``; ``characters[i]`` sits
    ``i`` rows above it. Glyphs stay on the row they were written to: each
    row the head moves down pushes a fresh glyph and drops the oldest one.
    """

    column: int
    height: int
    head_row: int
    length: int
    speed: int
    characters: List[str]
    sampler: Sampler = field(compare=False, repr=False)
    shimmer_rate: float = field(default=SHIMMER_RATE, compare=False)

    @classmethod
    def spawn(cls, column: int, height: int, sampler: Sampler) -> "Trail":
        length, speed = sampler.sample_trail_params(height)
        return cls(
            column=column,
            height=height,
            head_row=sampler.sample_start_row(),
            length=length,
            speed=speed,
            characters=sampler.sample_characters(length),
            sampler=sampler,
        )

    @property
    def expired(self) -> bool:
        """True once the tail has left the bottom of the screen."""
        return self.head_row - self.length >= self.height

    def near_top(self, rows: int) -> bool:
        """True while the head is still within the top ``rows`` rows."""
        return self.head_row < rows

    def advance(self) -> bool:
        """Move one frame down; return False when the trail has expired."""
        for _ in range(self.speed):
            self.head_row += 1
            self.characters.insert(0, self.sampler.sample_character())
            self.characters.pop()

        # shimmer: never touches the head
        for i in range(1, len(self.characters)):
            if self.sampler.chance(self.shimmer_rate):
                self.characters[i] = self.sampler.sample_character()

        return not self.expired

    def cells(self) -> Iterator[Cell]:
        for i, char in enumerate(self.characters):
            row = self.head_row - i
            if 0 <= row < self.height:
                yield Cell(row, self.column, char, 1.0 - i / self.length)
