"""
Scale primitives - Mode and Degree.

A mode is a fixed seven-step semitone table. A degree is a 1-indexed
position in that table plus a chromatic adjustment. Degrees past 7 wrap
into the next octave (degree 8 is degree 1 an octave up, 9 is the ninth).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from .errors import DegreeParseError

MAJOR_STEPS: tuple[int, ...] = (0, 2, 4, 5, 7, 9, 11)
MINOR_STEPS: tuple[int, ...] = (0, 1, 3, 5, 7, 8, 10)


class Mode(str, Enum):
    """Scale quality. Only major and natural minor are supported."""

    MAJOR = "major"
    MINOR = "minor"

    @property
    def steps(self) -> tuple[int, ...]:
        """Semitones from the tonic for each of the seven scale steps."""
        return MAJOR_STEPS if self is Mode.MAJOR else MINOR_STEPS

    def degree_to_semitones(self, degree: int) -> int:
        """
        Semitones from the tonic to a natural scale degree, with octave wrap.

        Args:
            degree: 1-indexed degree (8 = tonic an octave up)

        Returns:
            Semitones above the tonic
        """
        return self.steps[(degree - 1) % 7] + 12 * ((degree - 1) // 7)

    @classmethod
    def parse(cls, name: str) -> Mode:
        """Parse 'major' or 'minor' (case-insensitive)."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown mode: {name}") from None


@dataclass(frozen=True)
class Degree:
    """
    A scale degree with a chromatic adjustment.

    Degree is 1 or greater; values past 7 extend into the next octave.
    Adj is semitones: -1 = flat, +1 = sharp. Octave shifts on chord roots
    are also stored here as multiples of 12.

    Examples:
        Degree(1) = tonic
        Degree(7, -1) = flat 7
        Degree(9) = ninth (second, an octave up)
        Degree(11, 1) = sharp eleven
    """

    degree: int
    adj: int = 0

    def __post_init__(self) -> None:
        if self.degree < 1:
            raise ValueError(f"Degree must be >= 1, got {self.degree}")

    def to_semitones(self, mode: Mode) -> int:
        """
        Resolve to semitones above the tonic in a mode.

        Args:
            mode: The mode whose step table to use

        Returns:
            Semitones from the tonic, including octave wrap and adjustment
        """
        return mode.degree_to_semitones(self.degree) + self.adj

    def adjusted(self, adj: int) -> Degree:
        """Return a copy with `adj` more semitones of adjustment."""
        return replace(self, adj=self.adj + adj)

    def __str__(self) -> str:
        if self.adj < 0:
            return "b" * -self.adj + str(self.degree)
        return "#" * self.adj + str(self.degree)

    def __repr__(self) -> str:
        if self.adj == 0:
            return f"Degree({self.degree})"
        return f"Degree({self.degree}, {self.adj})"

    @classmethod
    def parse(cls, text: str) -> Degree:
        """
        Parse a degree like '5', 'b7', '#11' or 'bb3'.

        Accidentals net out, so '#b7' is a natural 7.

        Raises:
            DegreeParseError: If the text is not accidentals followed by digits
        """
        adj = 0
        pos = 0
        while pos < len(text) and text[pos] in "b#":
            adj += 1 if text[pos] == "#" else -1
            pos += 1

        digits = text[pos:]
        if not digits.isdigit() or not digits.isascii():
            raise DegreeParseError(f"Invalid degree: {text!r}")

        value = int(digits)
        if value < 1:
            raise DegreeParseError(f"Degree must be >= 1: {text!r}")
        return cls(value, adj)
