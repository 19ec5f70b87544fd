"""
Voice leading - pick the smoothest voicing for each chord in a sequence.
"""

from __future__ import annotations

from collections.abc import Sequence

from .chord import ChordSpec

# Octave shifts searched for each chord, in tie-break order
SHIFTS: tuple[int, ...] = (-1, 0, 1)


def voicing_candidates(spec: ChordSpec) -> list[ChordSpec]:
    """Every inversion of `spec` at each searched octave shift."""
    return [candidate for shift in SHIFTS for candidate in spec.shift(shift).inversions()]


def voice_lead(specs: Sequence[ChordSpec]) -> list[ChordSpec]:
    """
    Re-voice a chord sequence so each chord moves minimally from the last.

    The first chord is kept as given. Each following chord becomes the
    candidate voicing closest to the previous *chosen* voicing, so choices
    chain through the sequence. The first candidate with the minimum
    distance wins.

    Args:
        specs: Chords in playing order

    Returns:
        A list of the same length with re-voiced chords
    """
    if not specs:
        return []

    result = [specs[0]]
    for spec in specs[1:]:
        prev = result[-1]
        result.append(min(voicing_candidates(spec), key=lambda c: c.distance(prev)))
    return result
