"""
Chord notation - triads, numerals and the chord grammar parser.

The grammar, in order of appearance:

    chord      := numeral accidental* triad? (":" (degree ("," degree)* ","?)?)?
                  bass? inversion? shift? rel_key?
    numeral    := [IViv]+            uppercase = major, lowercase = minor
    accidental := 'b' | '#'
    triad      := '+' | '-' | '_' | '^' | '5'
    degree     := accidental* digits
    bass       := '/' degree
    inversion  := '%' digits
    shift      := ('>' | '<') digits
    rel_key    := '~' numeral

Examples: "I", "iii-:7", "V:b7~V", "IV%2<1", "bVII", "I^:b7,9/5".
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import (
    DegreeParseError,
    InvalidBassError,
    InvalidChordError,
    InvalidCountError,
    InvalidExtensionError,
    InvalidNumeralError,
    InvalidRelativeKeyError,
    InvalidTriadSymbolError,
)
from .scale import Degree, Mode

NUMERALS: tuple[str, ...] = ("I", "II", "III", "IV", "V", "VI", "VII")

_NUMERAL_CHARS = "IViv"
_SECTION_CHARS = ":/%><~"


class Triad(str, Enum):
    """
    Base interval skeleton of a chord, valued by its notation symbol.

    MODE has no symbol: it is a major or minor triad following the
    chord's own mode.
    """

    MODE = ""
    DIMINISHED = "-"
    AUGMENTED = "+"
    SUS2 = "_"
    SUS4 = "^"
    POWER = "5"

    def semitones(self, mode: Mode) -> tuple[int, ...]:
        """Semitones above the chord root for this triad."""
        if self is Triad.MODE:
            return (0, 4, 7) if mode is Mode.MAJOR else (0, 3, 7)
        return _TRIAD_SEMITONES[self]


_TRIAD_SEMITONES: dict[Triad, tuple[int, ...]] = {
    Triad.DIMINISHED: (0, 3, 6),
    Triad.AUGMENTED: (0, 4, 8),
    Triad.SUS2: (0, 2, 7),
    Triad.SUS4: (0, 5, 7),
    Triad.POWER: (0, 7),
}


def render_numeral(degree: int, mode: Mode) -> str:
    """Roman numeral for a degree; lowercase for minor."""
    numeral = NUMERALS[(degree - 1) % 7]
    return numeral if mode is Mode.MAJOR else numeral.lower()


def read_numeral(text: str) -> tuple[int, Mode]:
    """
    Read a bare roman numeral like 'IV' or 'vi'.

    Returns:
        (degree, mode) where mode comes from the numeral's case

    Raises:
        InvalidNumeralError: If case is mixed or the numeral is not I-VII
    """
    if text.isupper():
        mode = Mode.MAJOR
    elif text.islower():
        mode = Mode.MINOR
    else:
        raise InvalidNumeralError(f"Numeral mixes upper and lower case: {text!r}", text)

    upper = text.upper()
    if upper not in NUMERALS:
        raise InvalidNumeralError(f"Unknown roman numeral: {text!r}", text)
    return NUMERALS.index(upper) + 1, mode


@dataclass(frozen=True)
class ChordParts:
    """The components of one parsed chord, before assembly into a ChordSpec."""

    root: Degree
    mode: Mode
    triad: Triad
    extensions: tuple[Degree, ...]
    bass_degree: Degree | None
    inversion: int
    rel_key: tuple[int, Mode] | None


class _ChordParser:
    """Single-use recursive-descent parser over one chord string."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def take_while(self, chars: str) -> str:
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] in chars:
            self.pos += 1
        return self.text[start : self.pos]

    def take_section(self) -> str:
        """Consume up to the next section marker or end of input."""
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] not in _SECTION_CHARS:
            self.pos += 1
        return self.text[start : self.pos]

    def parse(self) -> ChordParts:
        numeral = self.take_while(_NUMERAL_CHARS)
        if not numeral:
            raise InvalidChordError(f"Chord must start with a roman numeral: {self.text!r}", self.text)
        degree, mode = read_numeral(numeral)

        adj = 0
        for symbol in self.take_while("b#"):
            adj += 1 if symbol == "#" else -1

        triad = self.parse_triad()
        extensions = self.parse_extensions()
        bass = self.parse_bass()
        inversion = self.parse_count("%")

        if self.peek() == ">":
            adj += 12 * self.parse_count(">")
        elif self.peek() == "<":
            adj -= 12 * self.parse_count("<")

        rel_key = self.parse_rel_key()

        if self.pos < len(self.text):
            raise InvalidChordError(
                f"Unexpected {self.text[self.pos:]!r} in chord {self.text!r}", self.text
            )

        return ChordParts(
            root=Degree(degree, adj),
            mode=mode,
            triad=triad,
            extensions=extensions,
            bass_degree=bass,
            inversion=inversion,
            rel_key=rel_key,
        )

    def parse_triad(self) -> Triad:
        char = self.peek()
        if not char or char in _SECTION_CHARS:
            return Triad.MODE
        if char in "+-_^5":
            self.pos += 1
            return Triad(char)
        raise InvalidTriadSymbolError(f"Invalid triad symbol {char!r} in {self.text!r}", self.text)

    def parse_extensions(self) -> tuple[Degree, ...]:
        if self.peek() != ":":
            return ()
        self.pos += 1
        body = self.take_section()
        if not body:
            return ()
        # A single trailing comma is allowed: "I:7," is "I:7"
        parts = body.split(",")
        if len(parts) > 1 and not parts[-1]:
            parts.pop()
        try:
            return tuple(Degree.parse(part) for part in parts)
        except DegreeParseError as e:
            raise InvalidExtensionError(
                f"Invalid extensions {body!r} in {self.text!r}", self.text
            ) from e

    def parse_bass(self) -> Degree | None:
        if self.peek() != "/":
            return None
        self.pos += 1
        body = self.take_section()
        try:
            return Degree.parse(body)
        except DegreeParseError as e:
            raise InvalidBassError(f"Invalid bass {body!r} in {self.text!r}", self.text) from e

    def parse_count(self, marker: str) -> int:
        if self.peek() != marker:
            return 0
        self.pos += 1
        body = self.take_section()
        if not (body.isdigit() and body.isascii()):
            raise InvalidCountError(
                f"Count after {marker!r} must be a number, got {body!r}", self.text
            )
        return int(body)

    def parse_rel_key(self) -> tuple[int, Mode] | None:
        if self.peek() != "~":
            return None
        self.pos += 1
        body = self.take_section()
        if not body or any(c not in _NUMERAL_CHARS for c in body):
            raise InvalidRelativeKeyError(f"Invalid relative key {body!r}", self.text)
        try:
            return read_numeral(body)
        except InvalidNumeralError as e:
            raise InvalidRelativeKeyError(f"Invalid relative key {body!r}", self.text) from e


def parse_chord(text: str) -> ChordParts:
    """
    Parse chord notation into its components.

    Args:
        text: A chord such as 'iii-:7/5~ii'

    Returns:
        The parsed ChordParts

    Raises:
        ChordParseError: A subclass naming the malformed component
    """
    return _ChordParser(text.strip()).parse()
