"""
Timing primitives - grid resolution.

A progression is laid out on a fixed grid of ticks. The resolution says
how many ticks make up one 4/4 bar.
"""

from __future__ import annotations

from enum import IntEnum

from dust_chords.constants import BEATS_PER_BAR


class Resolution(IntEnum):
    """Grid subdivision, valued in ticks per bar."""

    QUARTER = 4
    EIGHTH = 8
    SIXTEENTH = 16
    THIRTY_SECOND = 32

    @property
    def ticks_per_bar(self) -> int:
        return int(self.value)

    @property
    def ticks_per_beat(self) -> int:
        return int(self.value) // BEATS_PER_BAR

    @property
    def beats_per_tick(self) -> float:
        """Length of one tick in beats (an eighth note is 0.5)."""
        return BEATS_PER_BAR / int(self.value)

    def ticks_for_bars(self, bars: int) -> int:
        """Total ticks in `bars` bars."""
        return bars * int(self.value)
