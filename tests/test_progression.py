"""
Tests for the progression grid and its mutators.
"""

import random

import pytest

from dust_chords.core import ChordSpec, Key, Mode, Note, Resolution
from dust_chords.progression import Progression, ProgressionTemplate


def grid(text: str, resolution: Resolution = Resolution.EIGHTH) -> Progression:
    """Build a progression from 'I . . V' style text, '.' marking a rest."""
    return Progression(
        [ChordSpec.parse(t) if t != "." else None for t in text.split()],
        resolution,
    )


@pytest.fixture
def progression() -> Progression:
    """One bar of eighths with three chords."""
    return grid("I . . V . vi . .")


class TestConstruction:
    """Tests for building progressions."""

    def test_chord_index(self, progression: Progression) -> None:
        assert progression.chord_index == [0, 3, 5]
        assert len(progression) == 8

    def test_from_timing(self) -> None:
        chords = [ChordSpec.parse("I"), ChordSpec.parse("V")]
        progression = Progression.from_timing([True, False, True, False], chords, Resolution.QUARTER)
        assert progression == grid("I . V .", Resolution.QUARTER)
        assert progression.chord_index == [0, 2]

    def test_empty(self) -> None:
        progression = Progression.empty(2, Resolution.SIXTEENTH)
        assert len(progression) == 32
        assert progression.chord_index == []
        assert progression.chords() == []

    def test_bars(self) -> None:
        assert Progression.empty(3).bars() == 3
        assert Progression.empty().bars() == 2

    def test_str(self, progression: Progression) -> None:
        assert str(progression) == "I . . V . vi . ."

    def test_repr(self, progression: Progression) -> None:
        assert repr(progression) == "Progression(1 bars, 3 chords, EIGHTH)"

    def test_equality_includes_resolution(self) -> None:
        assert grid("I . V .") == grid("I . V .")
        assert grid("I . V .") != grid("I . V .", Resolution.QUARTER)


class TestChordAccess:
    """Tests for addressing chords by order."""

    def test_chord(self, progression: Progression) -> None:
        assert progression.chord(0) == ChordSpec.parse("I")
        assert progression.chord(2) == ChordSpec.parse("vi")

    def test_chord_out_of_range(self, progression: Progression) -> None:
        assert progression.chord(3) is None
        assert progression.chord(-1) is None

    def test_chords(self, progression: Progression) -> None:
        assert [str(c) for c in progression.chords()] == ["I", "V", "vi"]

    def test_set_chord_keeps_timing(self, progression: Progression) -> None:
        progression.set_chord(1, ChordSpec.parse("IV"))
        assert str(progression) == "I . . IV . vi . ."
        assert progression.chord_index == [0, 3, 5]

    def test_prev_chord(self, progression: Progression) -> None:
        assert progression.prev_chord(2) == ChordSpec.parse("V")

    def test_prev_chord_wraps(self, progression: Progression) -> None:
        """The first chord's predecessor is the last chord."""
        assert progression.prev_chord(0) == ChordSpec.parse("vi")

    def test_prev_chord_empty(self) -> None:
        with pytest.raises(IndexError):
            Progression.empty(1).prev_chord(0)


class TestEditing:
    """Tests for inserting and deleting chords."""

    def test_delete(self, progression: Progression) -> None:
        progression.delete_chord_at(3)
        assert str(progression) == "I . . . . vi . ."
        assert progression.chord_index == [0, 5]

    def test_insert(self, progression: Progression) -> None:
        progression.insert_chord_at(2, ChordSpec.parse("ii"))
        assert progression.chord_index == [0, 2, 3, 5]
        assert progression.chord(1) == ChordSpec.parse("ii")

    def test_insert_replaces(self, progression: Progression) -> None:
        progression.insert_chord_at(3, ChordSpec.parse("IV"))
        assert progression.chord_index == [0, 3, 5]
        assert progression.chord(1) == ChordSpec.parse("IV")

    def test_manual_edit_needs_update(self, progression: Progression) -> None:
        progression.sequence[7] = ChordSpec.parse("IV")
        assert progression.chord_index == [0, 3, 5]
        progression.update_chords()
        assert progression.chord_index == [0, 3, 5, 7]

    @pytest.mark.parametrize(("tick", "idx"), [(0, 0), (1, 1), (3, 1), (4, 2), (7, 3)])
    def test_seq_idx_to_chord_idx(self, progression: Progression, tick: int, idx: int) -> None:
        """Counts chords strictly before the tick."""
        assert progression.seq_idx_to_chord_idx(tick) == idx


class TestGridPositions:
    """Tests for tick/bar conversion."""

    def test_tick_position(self) -> None:
        progression = Progression.empty(2)
        assert progression.tick_position(0) == (0, 0)
        assert progression.tick_position(11) == (1, 3)

    def test_tick_at(self) -> None:
        progression = Progression.empty(2, Resolution.SIXTEENTH)
        assert progression.tick_at(1, 3) == 19
        assert progression.tick_position(progression.tick_at(1, 3)) == (1, 3)


class TestResolution:
    """Tests for resolving and voicing."""

    def test_in_key(self, progression: Progression, c_major: Key) -> None:
        chords = progression.in_key(c_major)
        assert len(chords) == 8
        assert chords[1] is None
        assert chords[0] is not None
        assert chords[0].notes() == [Note.parse("C3"), Note.parse("E3"), Note.parse("G3")]
        assert chords[5] is not None
        assert chords[5].notes() == [Note.parse("A3"), Note.parse("C4"), Note.parse("E4")]

    def test_voice_lead_keeps_rests(self, a_minor: Key) -> None:
        progression = grid(". i VI III v")
        voiced = progression.voice_lead()
        assert voiced.chord_index == [1, 2, 3, 4]
        assert voiced.sequence[0] is None
        notes = [str(chord) for chord in voiced.in_key(a_minor) if chord is not None]
        assert notes == ["A3-C4-E4", "A3-C4-F4", "G3-C4-E4", "G3-B3-E4"]

    def test_voice_lead_returns_new(self, progression: Progression) -> None:
        before = str(progression)
        voiced = progression.voice_lead()
        assert voiced is not progression
        assert str(progression) == before
        assert voiced.resolution == progression.resolution


class TestCycleChord:
    """Tests for cycling a chord through template candidates."""

    def test_cycle_forward(self, template: ProgressionTemplate) -> None:
        """Candidates after I are I IV V I V IV; V moves to the next one."""
        progression = grid("I . V .")
        assert str(progression.cycle_chord(1, template, Mode.MAJOR)) == "I"
        assert str(progression) == "I . I ."

    def test_cycle_back(self, template: ProgressionTemplate) -> None:
        progression = grid("I . V .")
        assert str(progression.cycle_chord(1, template, Mode.MAJOR, step=-1)) == "IV"

    def test_cycle_first_uses_last_as_previous(self, template: ProgressionTemplate) -> None:
        """Candidates after V are V I vi V IV I; I moves to vi."""
        progression = grid("I . V .")
        assert str(progression.cycle_chord(0, template, Mode.MAJOR)) == "vi"

    def test_not_a_candidate(self, template: ProgressionTemplate) -> None:
        progression = grid("I . ii .")
        assert str(progression.cycle_chord(1, template, Mode.MAJOR)) == "I"

    def test_no_candidates(self, template: ProgressionTemplate) -> None:
        progression = grid("ii . I .")
        assert progression.cycle_chord(1, template, Mode.MAJOR) is None
        assert str(progression) == "ii . I ."

    def test_out_of_range(self, template: ProgressionTemplate) -> None:
        assert grid("I . V .").cycle_chord(5, template, Mode.MAJOR) is None


class TestSuggestChord:
    """Tests for suggest_chord_at()."""

    def test_follows_preceding_chord(self, template: ProgressionTemplate) -> None:
        progression = grid("V . . . vi . . .")
        spec = progression.suggest_chord_at(2, template, Mode.MAJOR)
        assert spec == ChordSpec.parse("V")
        assert progression.chord_index == [0, 2, 4]

    def test_start_wraps_to_last_chord(self, template: ProgressionTemplate) -> None:
        progression = grid(". . vi .")
        assert progression.suggest_chord_at(0, template, Mode.MAJOR) == ChordSpec.parse("vi")

    def test_empty_progression(self, template: ProgressionTemplate, rng: random.Random) -> None:
        progression = Progression.empty(1)
        spec = progression.suggest_chord_at(3, template, Mode.MINOR, rng)
        assert spec in template.minor.chords()
        assert progression.chord_index == [3]

    def test_unknown_preceding_chord(self, template: ProgressionTemplate, rng: random.Random) -> None:
        progression = grid("ii . . .")
        spec = progression.suggest_chord_at(2, template, Mode.MAJOR, rng)
        assert spec in template.major.chords()
        assert progression.sequence[2] == spec
