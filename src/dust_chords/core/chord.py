"""
Chord primitives - ChordSpec and Chord.

A ChordSpec is a mode-relative chord description written in roman-numeral
notation. It knows its intervals but not its pitch; resolving it against a
Key yields a Chord, which is a concrete root note plus intervals.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from .key import Key
from .notation import Triad, parse_chord, render_numeral
from .pitch import Interval, Note
from .scale import Degree, Mode


@dataclass(frozen=True)
class Chord:
    """
    A resolved chord: a root note and intervals above it.

    Intervals are kept in construction order. Duplicate intervals are kept
    too, so cluster chords survive resolution.
    """

    root: Note
    intervals: tuple[Interval, ...]

    def notes(self) -> list[Note]:
        """All notes of the chord, sorted ascending."""
        return sorted(self.root + interval for interval in self.intervals)

    def to_midi(self) -> list[int]:
        """MIDI note numbers for the chord, sorted ascending."""
        return [note.to_midi() for note in self.notes()]

    def __str__(self) -> str:
        return "-".join(str(note) for note in self.notes())


@dataclass(frozen=True)
class ChordSpec:
    """
    A mode-relative chord, as written in roman-numeral notation.

    Fields:
        root: Scale degree of the chord root. Accidentals and octave
            shifts are both stored in its adjustment.
        mode: The chord's own quality (uppercase numeral = major).
        triad: Base skeleton; MODE follows `mode`.
        extensions: Added degrees, resolved through the effective mode.
        bass_degree: Degree to put in the bass; lower tones go up an octave.
        inversion: Number of lowest tones rotated up an octave.
        rel_key: (degree, mode) of a relative key, for secondary chords.

    The effective mode for extensions and bass is the relative key's mode
    when one is set, otherwise the chord's own mode.

    Examples:
        ChordSpec.parse("V:b7~V") = V7 of V
        ChordSpec.parse("ii-:7") = half-diminished ii in a minor key
    """

    root: Degree
    mode: Mode = Mode.MAJOR
    triad: Triad = Triad.MODE
    extensions: tuple[Degree, ...] = field(default_factory=tuple)
    bass_degree: Degree | None = None
    inversion: int = 0
    rel_key: tuple[int, Mode] | None = None

    def __post_init__(self) -> None:
        if self.inversion < 0:
            raise ValueError(f"Inversion must be >= 0, got {self.inversion}")
        if not isinstance(self.extensions, tuple):
            object.__setattr__(self, "extensions", tuple(self.extensions))

    @classmethod
    def parse(cls, text: str) -> ChordSpec:
        """
        Parse chord notation like 'I', 'iii-:7/5~ii' or 'IV%2<1'.

        Raises:
            ChordParseError: A subclass naming the malformed component
        """
        parts = parse_chord(text)
        return cls(
            root=parts.root,
            mode=parts.mode,
            triad=parts.triad,
            extensions=parts.extensions,
            bass_degree=parts.bass_degree,
            inversion=parts.inversion,
            rel_key=parts.rel_key,
        )

    # Builders - each returns a new spec

    def with_triad(self, triad: Triad) -> ChordSpec:
        return replace(self, triad=triad)

    def add(self, degree: int, adj: int = 0) -> ChordSpec:
        """Add an extension degree (e.g. add(7, -1) for a flat seven)."""
        return replace(self, extensions=(*self.extensions, Degree(degree, adj)))

    def with_bass(self, degree: int, adj: int = 0) -> ChordSpec:
        return replace(self, bass_degree=Degree(degree, adj))

    def with_rel_key(self, degree: int, mode: Mode) -> ChordSpec:
        return replace(self, rel_key=(degree, mode))

    def with_inversion(self, inversion: int) -> ChordSpec:
        return replace(self, inversion=inversion)

    def adjust(self, adj: int) -> ChordSpec:
        """Shift the root by `adj` semitones."""
        return replace(self, root=self.root.adjusted(adj))

    def shift(self, octaves: int) -> ChordSpec:
        """Shift the whole chord by whole octaves."""
        return self.adjust(12 * octaves)

    # Resolution

    @property
    def effective_mode(self) -> Mode:
        """Mode used to resolve extensions and the bass degree."""
        return self.rel_key[1] if self.rel_key else self.mode

    def intervals(self) -> list[Interval]:
        """
        Intervals above the chord root, in voicing order.

        Steps:
            1. Triad skeleton from the chord's own mode
            2. Extensions via the effective mode
            3. Tones below the bass degree go up an octave
            4. The lowest `inversion` tones rotate up an octave
            5. Everything moves by the relative key's offset

        Returns:
            Intervals, not sorted
        """
        semitones = list(self.triad.semitones(self.mode))
        semitones.extend(ext.to_semitones(self.effective_mode) for ext in self.extensions)

        if self.bass_degree is not None:
            bass = self.bass_degree.to_semitones(self.effective_mode)
            semitones = [s + 12 if s < bass else s for s in semitones]

        if self.inversion > 0:
            n = min(self.inversion, len(semitones))
            semitones = semitones[n:] + [s + 12 for s in semitones[:n]]

        offset = 0
        if self.rel_key is not None:
            offset = self.mode.steps[(self.rel_key[0] - 1) % 7]

        return [Interval(s + offset) for s in semitones]

    def intervals_from_key_root(self) -> list[Interval]:
        """Intervals measured from the key's tonic rather than the chord root."""
        root = Interval(self.root.to_semitones(self.mode))
        return [root + interval for interval in self.intervals()]

    def chord_for_key(self, key: Key) -> Chord:
        """
        Resolve this spec to a concrete chord in a key.

        Only the root uses the key; the intervals come from the ChordSpec itself.

        Args:
            key: The key context

        Returns:
            A concrete Chord
        """
        return Chord(key.note(self.root), tuple(self.intervals()))

    def distance(self, other: ChordSpec) -> int:
        """
        Voice-leading distance to another spec, in semitones.

        Each tone of this chord, in order, claims the nearest tone of
        `other` not yet claimed; the first nearest wins ties. Once every
        tone of `other` is claimed, the remaining tones measure against the
        nearest tone of `other` regardless. The result depends on this
        chord's tone order and is not symmetric.
        """
        targets = [i.semitones for i in other.intervals_from_key_root()]
        unclaimed = list(targets)
        total = 0

        for interval in self.intervals_from_key_root():
            source = interval.semitones
            pool = unclaimed or targets
            if not pool:
                break

            best = 0
            best_distance = abs(source - pool[0])
            for idx, target in enumerate(pool[1:], start=1):
                dist = abs(source - target)
                if dist < best_distance:
                    best, best_distance = idx, dist

            total += best_distance
            if unclaimed:
                unclaimed.pop(best)

        return total

    def inversions(self) -> list[ChordSpec]:
        """One variant per chord tone, with that tone as the bass degree."""
        return [
            replace(self, bass_degree=interval.to_degree(self.mode))
            for interval in self.intervals()
        ]

    def __str__(self) -> str:
        if self.mode is Mode.MINOR or self.triad is Triad.DIMINISHED:
            numeral = render_numeral(self.root.degree, Mode.MINOR)
        else:
            numeral = render_numeral(self.root.degree, Mode.MAJOR)

        adj = self.root.adj
        accidentals = ("b" if adj < 0 else "#") * (abs(adj) % 12)

        parts = [numeral, accidentals, self.triad.value]
        if self.extensions:
            parts.append(":" + ",".join(str(ext) for ext in self.extensions))
        if self.bass_degree is not None:
            parts.append(f"/{self.bass_degree}")
        if self.inversion > 0:
            parts.append(f"%{self.inversion}")
        octaves = abs(adj) // 12
        if octaves:
            parts.append(f"{'>' if adj > 0 else '<'}{octaves}")
        if self.rel_key is not None:
            parts.append("~" + render_numeral(*self.rel_key))

        return "".join(parts)
