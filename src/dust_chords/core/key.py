"""
Key - a root note plus a mode.

This is the context for resolving scale degrees to absolute notes.
"""

from __future__ import annotations

from dataclasses import dataclass

from dust_chords.constants import DEFAULT_KEY_ROOT

from .pitch import Interval, Note
from .scale import Degree, Mode


@dataclass(frozen=True)
class Key:
    """
    A tonal center: root note and mode.

    Degree 1 always resolves to the root.

    Examples:
        Key(Note.parse("C3"), Mode.MAJOR) = C major, rooted at C3
        Key(Note.parse("A3"), Mode.MINOR) = A minor, rooted at A3
    """

    root: Note
    mode: Mode = Mode.MAJOR

    def interval(self, degree: Degree) -> Interval:
        """
        Interval from the root to a degree of this key.

        Args:
            degree: Scale degree, octave-wrapping past 7

        Returns:
            Interval above the root
        """
        return Interval(degree.to_semitones(self.mode))

    def note(self, degree: Degree) -> Note:
        """
        Resolve a degree to an absolute note.

        Args:
            degree: Scale degree, octave-wrapping past 7

        Returns:
            The resolved Note
        """
        return self.root + self.interval(degree)

    def __str__(self) -> str:
        return f"{self.root} {self.mode.value}"

    @classmethod
    def default(cls) -> Key:
        """C4 major."""
        return cls(Note(DEFAULT_KEY_ROOT), Mode.MAJOR)

    @classmethod
    def parse(cls, name: str) -> Key:
        """
        Parse a key from a string like 'C3_major' or 'A3_minor'.

        Args:
            name: Root note and mode with an underscore separator

        Returns:
            Parsed Key object
        """
        parts = name.split("_")
        if len(parts) != 2:
            raise ValueError(f"Invalid key format: {name}. Expected 'note_mode' like 'C3_major'")

        root_str, mode_str = parts
        return cls(Note.parse(root_str), Mode.parse(mode_str))
