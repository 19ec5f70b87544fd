"""
Pitch primitives - Note and Interval.

A Note is an absolute pitch counted in semitones above A0.
An Interval is a signed distance between notes in semitones.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import ClassVar

from dust_chords.constants import MIDI_NOTE_OFFSET

from .errors import IntervalParseError, InvalidNoteNameError, InvalidOctaveError
from .scale import Degree, Mode

# Flat-preferred names, starting from A (semitone 0 = A0)
NOTE_NAMES: tuple[str, ...] = (
    "A",
    "Bb",
    "B",
    "C",
    "Db",
    "D",
    "Eb",
    "E",
    "F",
    "Gb",
    "G",
    "Ab",
)

# Sharp spellings accepted on input only
_SHARP_ALIASES: dict[str, str] = {
    "A#": "Bb",
    "C#": "Db",
    "D#": "Eb",
    "F#": "Gb",
    "G#": "Ab",
}

# Interval names for each semitone (0-11), used for display
_INTERVAL_NAMES: tuple[str, ...] = (
    "P1",
    "m2",
    "M2",
    "m3",
    "M3",
    "P4",
    "d5",
    "P5",
    "m6",
    "M6",
    "m7",
    "M7",
)

# All accepted names, including augmented/diminished enharmonics
_INTERVAL_PARSE: dict[str, int] = {
    "P1": 0,
    "d2": 0,
    "m2": 1,
    "A1": 1,
    "M2": 2,
    "d3": 2,
    "m3": 3,
    "A2": 3,
    "M3": 4,
    "d4": 4,
    "P4": 5,
    "A3": 5,
    "d5": 6,
    "A4": 6,
    "P5": 7,
    "d6": 7,
    "m6": 8,
    "A5": 8,
    "M6": 9,
    "d7": 9,
    "m7": 10,
    "A6": 10,
    "M7": 11,
    "d8": 11,
    "P8": 12,
    "A7": 12,
}


@total_ordering
class Interval:
    """
    Distance between pitches in semitones.

    Chords are interval lists from their root; degrees resolve to intervals
    through a mode, and `to_degree` goes back the other way.

    Immutable and hashable.
    """

    __slots__ = ("_semitones",)
    _semitones: int

    # Named intervals (class constants)
    UNISON: ClassVar[Interval]
    MINOR_SECOND: ClassVar[Interval]
    MAJOR_SECOND: ClassVar[Interval]
    MINOR_THIRD: ClassVar[Interval]
    MAJOR_THIRD: ClassVar[Interval]
    PERFECT_FOURTH: ClassVar[Interval]
    TRITONE: ClassVar[Interval]
    PERFECT_FIFTH: ClassVar[Interval]
    MINOR_SIXTH: ClassVar[Interval]
    MAJOR_SIXTH: ClassVar[Interval]
    MINOR_SEVENTH: ClassVar[Interval]
    MAJOR_SEVENTH: ClassVar[Interval]
    OCTAVE: ClassVar[Interval]

    # Short aliases
    P1: ClassVar[Interval]
    m2: ClassVar[Interval]
    M2: ClassVar[Interval]
    m3: ClassVar[Interval]
    M3: ClassVar[Interval]
    P4: ClassVar[Interval]
    d5: ClassVar[Interval]
    P5: ClassVar[Interval]
    m6: ClassVar[Interval]
    M6: ClassVar[Interval]
    m7: ClassVar[Interval]
    M7: ClassVar[Interval]
    P8: ClassVar[Interval]

    def __init__(self, semitones: int) -> None:
        """Create an interval with the given number of semitones."""
        object.__setattr__(self, "_semitones", semitones)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Interval is immutable")

    @property
    def semitones(self) -> int:
        """Number of semitones in this interval."""
        return self._semitones

    def to_degree(self, mode: Mode) -> Degree:
        """
        Convert back to a scale degree within one octave.

        The semitones are reduced modulo 12, matched to the highest scale
        step at or below them, and the remainder becomes the adjustment.

        m3 in major -> Degree(2, 1)
        m3 in minor -> Degree(3)

        Args:
            mode: The mode whose step table to search

        Returns:
            A Degree between 1 and 7
        """
        reduced = self._semitones % 12
        index = max(i for i, step in enumerate(mode.steps) if step <= reduced)
        return Degree(index + 1, reduced - mode.steps[index])

    def __add__(self, other: Interval) -> Interval:
        """Add two intervals."""
        if not isinstance(other, Interval):
            return NotImplemented
        return Interval(self._semitones + other._semitones)

    def __sub__(self, other: Interval) -> Interval:
        """Subtract an interval from another."""
        if not isinstance(other, Interval):
            return NotImplemented
        return Interval(self._semitones - other._semitones)

    def __neg__(self) -> Interval:
        return Interval(-self._semitones)

    def __abs__(self) -> Interval:
        return Interval(abs(self._semitones))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return self._semitones == other._semitones

    def __lt__(self, other: Interval) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return self._semitones < other._semitones

    def __hash__(self) -> int:
        return hash(self._semitones)

    def __repr__(self) -> str:
        return f"Interval({self._semitones})"

    def __str__(self) -> str:
        """Interval name, reduced to within an octave."""
        return _INTERVAL_NAMES[self._semitones % 12]

    @classmethod
    def parse(cls, name: str) -> Interval:
        """
        Parse an interval name like 'm3', 'P5' or 'A4'.

        Raises:
            IntervalParseError: If the name is not recognised
        """
        name = name.strip()
        if name not in _INTERVAL_PARSE:
            raise IntervalParseError(f"Unknown interval: {name!r}")
        return cls(_INTERVAL_PARSE[name])


# Initialize class constants after class is defined
Interval.UNISON = Interval(0)
Interval.MINOR_SECOND = Interval(1)
Interval.MAJOR_SECOND = Interval(2)
Interval.MINOR_THIRD = Interval(3)
Interval.MAJOR_THIRD = Interval(4)
Interval.PERFECT_FOURTH = Interval(5)
Interval.TRITONE = Interval(6)
Interval.PERFECT_FIFTH = Interval(7)
Interval.MINOR_SIXTH = Interval(8)
Interval.MAJOR_SIXTH = Interval(9)
Interval.MINOR_SEVENTH = Interval(10)
Interval.MAJOR_SEVENTH = Interval(11)
Interval.OCTAVE = Interval(12)

# Short aliases
Interval.P1 = Interval.UNISON
Interval.m2 = Interval.MINOR_SECOND
Interval.M2 = Interval.MAJOR_SECOND
Interval.m3 = Interval.MINOR_THIRD
Interval.M3 = Interval.MAJOR_THIRD
Interval.P4 = Interval.PERFECT_FOURTH
Interval.d5 = Interval.TRITONE
Interval.P5 = Interval.PERFECT_FIFTH
Interval.m6 = Interval.MINOR_SIXTH
Interval.M6 = Interval.MAJOR_SIXTH
Interval.m7 = Interval.MINOR_SEVENTH
Interval.M7 = Interval.MAJOR_SEVENTH
Interval.P8 = Interval.OCTAVE


@dataclass(frozen=True, order=True)
class Note:
    """
    An absolute pitch, in semitones above A0.

    Names cycle A, Bb, B, C ... Ab and the octave number changes at C,
    so C3 = 27 and C4 = 39. MIDI note numbers are semitones + 21.

    Immutable, hashable and totally ordered.
    """

    semitones: int

    @property
    def name(self) -> str:
        """Pitch name without octave (e.g. 'Eb')."""
        return NOTE_NAMES[self.semitones % 12]

    @property
    def octave(self) -> int:
        """Octave number; increments at C."""
        return (self.semitones + 9) // 12

    def to_midi(self) -> int:
        """Convert to a MIDI note number. A0 = 21, C4 = 60."""
        return self.semitones + MIDI_NOTE_OFFSET

    @classmethod
    def from_midi(cls, midi_note: int) -> Note:
        """Create a note from a MIDI note number."""
        return cls(midi_note - MIDI_NOTE_OFFSET)

    def __add__(self, other: Interval) -> Note:
        if not isinstance(other, Interval):
            return NotImplemented
        return Note(self.semitones + other.semitones)

    def __sub__(self, other: Interval | Note) -> Note | Interval:
        if isinstance(other, Interval):
            return Note(self.semitones - other.semitones)
        if isinstance(other, Note):
            return Interval(self.semitones - other.semitones)
        return NotImplemented

    def __str__(self) -> str:
        return f"{self.name}{self.octave}"

    def __repr__(self) -> str:
        return f"Note({self.semitones})"

    @classmethod
    def parse(cls, text: str) -> Note:
        """
        Parse a note name like 'C3', 'Bb0' or 'F#4'.

        Args:
            text: Pitch name followed by an integer octave

        Returns:
            Parsed Note

        Raises:
            InvalidNoteNameError: If the pitch name is unknown
            InvalidOctaveError: If the octave is not an integer
        """
        text = text.strip()
        split = 0
        while split < len(text) and (text[split].isalpha() or text[split] == "#"):
            split += 1

        name, octave_str = text[:split], text[split:]
        name = _SHARP_ALIASES.get(name, name)
        if name not in NOTE_NAMES:
            raise InvalidNoteNameError(f"Unknown note name: {text!r}")

        try:
            octave = int(octave_str)
        except ValueError:
            raise InvalidOctaveError(f"Invalid octave in note: {text!r}") from None

        offset = NOTE_NAMES.index(name)
        return cls((octave - (offset + 9) // 12) * 12 + offset)
