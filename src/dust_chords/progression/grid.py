"""
Progression grid - chords placed on a fixed-resolution tick grid.

The sequence holds one slot per tick: a ChordSpec where a chord starts,
None for a rest. The chord index is derived from the sequence and lists
the ticks holding chords, so chords can be addressed by order as well
as by position.
"""

from __future__ import annotations

import random
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from dust_chords.constants import DEFAULT_BARS
from dust_chords.core.chord import Chord, ChordSpec
from dust_chords.core.key import Key
from dust_chords.core.scale import Mode
from dust_chords.core.timing import Resolution
from dust_chords.core.voicing import voice_lead

if TYPE_CHECKING:
    from dust_chords.progression.template import ProgressionTemplate


class Progression:
    """
    A time-gridded chord sequence, mutated in place by its owner.

    Every mutator leaves `chord_index` consistent with `sequence`. Writing
    to `sequence` directly requires a call to `update_chords()` afterwards.
    """

    def __init__(
        self,
        sequence: Iterable[ChordSpec | None],
        resolution: Resolution = Resolution.EIGHTH,
    ) -> None:
        self.resolution = Resolution(resolution)
        self.sequence: list[ChordSpec | None] = list(sequence)
        self.chord_index: list[int] = []
        self.update_chords()

    @classmethod
    def from_timing(
        cls,
        timing: Sequence[bool],
        chords: Iterable[ChordSpec],
        resolution: Resolution = Resolution.EIGHTH,
    ) -> Progression:
        """
        Place chords on the ticks marked True in a timing mask.

        Args:
            timing: One flag per tick; True starts a chord
            chords: Chords consumed in order, one per True tick
            resolution: Grid resolution

        Returns:
            A new Progression
        """
        chord_iter = iter(chords)
        sequence = [next(chord_iter) if hit else None for hit in timing]
        return cls(sequence, resolution)

    @classmethod
    def empty(cls, bars: int = DEFAULT_BARS, resolution: Resolution = Resolution.EIGHTH) -> Progression:
        """A progression of `bars` bars with no chords."""
        return cls([None] * resolution.ticks_for_bars(bars), resolution)

    def __len__(self) -> int:
        return len(self.sequence)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Progression):
            return NotImplemented
        return self.resolution == other.resolution and self.sequence == other.sequence

    def __repr__(self) -> str:
        return f"Progression({self.bars()} bars, {len(self.chord_index)} chords, {self.resolution.name})"

    def __str__(self) -> str:
        return " ".join(str(spec) if spec is not None else "." for spec in self.sequence)

    def bars(self) -> int:
        """Number of whole bars in the grid."""
        return len(self.sequence) // self.resolution.ticks_per_bar

    def update_chords(self) -> None:
        """Recompute the chord index from the sequence."""
        self.chord_index = [tick for tick, spec in enumerate(self.sequence) if spec is not None]

    def chord(self, idx: int) -> ChordSpec | None:
        """The idx-th chord in playing order, or None if out of range."""
        if not 0 <= idx < len(self.chord_index):
            return None
        return self.sequence[self.chord_index[idx]]

    def chords(self) -> list[ChordSpec]:
        """All chords in playing order, without rests."""
        return [spec for spec in self.sequence if spec is not None]

    def set_chord(self, idx: int, spec: ChordSpec) -> None:
        """Replace the idx-th chord; rests stay where they are."""
        self.sequence[self.chord_index[idx]] = spec

    def prev_chord(self, idx: int) -> ChordSpec:
        """
        The chord before the idx-th chord, wrapping to the last chord.

        Raises:
            IndexError: If the progression has no chords
        """
        if not self.chord_index:
            raise IndexError("Progression has no chords")
        prev = (idx - 1) % len(self.chord_index)
        return self.sequence[self.chord_index[prev]]  # type: ignore[return-value]

    def delete_chord_at(self, tick: int) -> None:
        self.sequence[tick] = None
        self.update_chords()

    def insert_chord_at(self, tick: int, spec: ChordSpec) -> None:
        self.sequence[tick] = spec
        self.update_chords()

    def seq_idx_to_chord_idx(self, tick: int) -> int:
        """Number of chords strictly before `tick`."""
        return sum(1 for chord_tick in self.chord_index if chord_tick < tick)

    def tick_position(self, tick: int) -> tuple[int, int]:
        """Convert a flat tick to (bar, step within bar)."""
        return divmod(tick, self.resolution.ticks_per_bar)

    def tick_at(self, bar: int, step: int) -> int:
        """Convert (bar, step within bar) to a flat tick."""
        return bar * self.resolution.ticks_per_bar + step

    def in_key(self, key: Key) -> list[Chord | None]:
        """Resolve every tick against a key; rests stay None."""
        return [spec.chord_for_key(key) if spec is not None else None for spec in self.sequence]

    def voice_lead(self) -> Progression:
        """A new progression with voice-led chords at the same ticks."""
        voiced = iter(voice_lead(self.chords()))
        sequence = [next(voiced) if spec is not None else None for spec in self.sequence]
        return Progression(sequence, self.resolution)

    def cycle_chord(
        self,
        idx: int,
        template: ProgressionTemplate,
        mode: Mode,
        step: int = 1,
    ) -> ChordSpec | None:
        """
        Swap the idx-th chord for its neighbour among the template's candidates.

        Candidates are the transitions from the previous chord. The current
        chord moves `step` places through them, wrapping around; if it is
        not a candidate, the first candidate is used.

        Args:
            idx: Chord index to change
            template: Template supplying transitions
            mode: Mode whose transitions to use
            step: +1 to cycle forward, -1 to cycle back

        Returns:
            The new chord, or None if there were no candidates
        """
        current = self.chord(idx)
        if current is None:
            return None

        candidates = template.next(self.prev_chord(idx), mode)
        if not candidates:
            return None

        if current in candidates:
            replacement = candidates[(candidates.index(current) + step) % len(candidates)]
        else:
            replacement = candidates[0]

        self.set_chord(idx, replacement)
        return replacement

    def suggest_chord_at(
        self,
        tick: int,
        template: ProgressionTemplate,
        mode: Mode,
        rng: random.Random | None = None,
    ) -> ChordSpec:
        """
        Insert a chord at `tick` that follows on from the chord before it.

        With no chords yet, a random chord for the mode is used. Otherwise
        the first transition candidate of the preceding chord is used,
        falling back to a random chord when there are none.

        Returns:
            The inserted chord
        """
        if not self.chord_index:
            spec = template.rand_chord(mode, rng)
        else:
            prev = self.prev_chord(self.seq_idx_to_chord_idx(tick))
            candidates = template.next(prev, mode)
            spec = candidates[0] if candidates else template.rand_chord(mode, rng)

        self.insert_chord_at(tick, spec)
        return spec
