"""
Error taxonomy for the chord engine.

Every failure here is a parse or validation failure, so all errors derive
from ValueError. Each malformed component gets its own subclass so callers
can report exactly which part of the input was wrong.
"""

from __future__ import annotations


class NoteParseError(ValueError):
    """A note name like 'C3' could not be parsed."""


class InvalidNoteNameError(NoteParseError):
    """The letter/accidental prefix is not a known note name."""


class InvalidOctaveError(NoteParseError):
    """The octave suffix is not an integer."""


class DegreeParseError(ValueError):
    """A scale degree like 'b7' or '#11' could not be parsed."""


class IntervalParseError(ValueError):
    """An interval name like 'm3' is not recognised."""


class ChordParseError(ValueError):
    """
    Base class for chord notation parse failures.

    The offending input is kept on `text` so a UI can echo it back.
    """

    def __init__(self, message: str, text: str = "") -> None:
        super().__init__(message)
        self.text = text


class InvalidChordError(ChordParseError):
    """The input does not match the chord grammar at all."""


class InvalidNumeralError(ChordParseError):
    """The roman numeral mixes case or is not I-VII."""


class InvalidTriadSymbolError(ChordParseError):
    """An unknown symbol sits where a triad symbol is expected."""


class InvalidExtensionError(ChordParseError):
    """The extension list or one of its degrees is malformed."""


class InvalidBassError(InvalidExtensionError):
    """The bass degree after '/' is malformed."""


class InvalidRelativeKeyError(ChordParseError):
    """The numeral after '~' is not a valid roman numeral."""


class InvalidCountError(ChordParseError):
    """An inversion or octave-shift count is not a number."""


class TemplateError(ValueError):
    """Base class for progression template failures."""


class EmptyTemplateError(TemplateError):
    """The template has no patterns for the requested mode."""


class TemplateLoadError(TemplateError):
    """A template configuration could not be read or validated."""
