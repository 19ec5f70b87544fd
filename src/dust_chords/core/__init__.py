"""
Core music primitives.

These are the value types everything else composes on:
- Note: Absolute pitch in semitones above A0
- Interval: Signed distance between pitches
- Mode: Major or minor step table
- Degree: Scale position plus chromatic adjustment
- Key: Root note plus mode, resolves degrees to notes
- Triad: Base interval skeleton of a chord
- ChordSpec: Mode-relative chord in roman-numeral notation
- Chord: Concrete root note plus intervals
- Resolution: Tick grid subdivision
- voice_lead: Smoothest voicing for a chord sequence
"""

from dust_chords.core.chord import Chord, ChordSpec
from dust_chords.core.errors import (
    ChordParseError,
    DegreeParseError,
    EmptyTemplateError,
    IntervalParseError,
    InvalidBassError,
    InvalidChordError,
    InvalidCountError,
    InvalidExtensionError,
    InvalidNoteNameError,
    InvalidNumeralError,
    InvalidOctaveError,
    InvalidRelativeKeyError,
    InvalidTriadSymbolError,
    NoteParseError,
    TemplateError,
    TemplateLoadError,
)
from dust_chords.core.key import Key
from dust_chords.core.notation import NUMERALS, Triad
from dust_chords.core.pitch import Interval, Note
from dust_chords.core.scale import Degree, Mode
from dust_chords.core.timing import Resolution
from dust_chords.core.voicing import voice_lead

__all__ = [
    # Pitch
    "Note",
    "Interval",
    # Scale
    "Mode",
    "Degree",
    "Key",
    # Chord
    "NUMERALS",
    "Triad",
    "ChordSpec",
    "Chord",
    "voice_lead",
    # Timing
    "Resolution",
    # Errors
    "NoteParseError",
    "InvalidNoteNameError",
    "InvalidOctaveError",
    "DegreeParseError",
    "IntervalParseError",
    "ChordParseError",
    "InvalidChordError",
    "InvalidNumeralError",
    "InvalidTriadSymbolError",
    "InvalidExtensionError",
    "InvalidBassError",
    "InvalidRelativeKeyError",
    "InvalidCountError",
    "TemplateError",
    "EmptyTemplateError",
    "TemplateLoadError",
]
