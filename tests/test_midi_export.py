"""
MIDI export tests.

Covers the event layer (MidiEvent, events_to_midi) and the progression
layer (progression_to_events, save_progression).
"""

from pathlib import Path

import pytest
from mido import MidiFile

from dust_chords.compiler import (
    TICKS_PER_BEAT,
    MidiEvent,
    events_to_midi,
    progression_to_events,
    progression_to_midi,
    save_progression,
)
from dust_chords.constants import DEFAULT_TRACK_NAME
from dust_chords.core import ChordSpec, Key, Resolution
from dust_chords.progression import Progression


def grid(text: str, resolution: Resolution = Resolution.EIGHTH) -> Progression:
    return Progression(
        [ChordSpec.parse(t) if t != "." else None for t in text.split()],
        resolution,
    )


class TestMidiEvent:
    """Test MidiEvent dataclass."""

    def test_create_valid_event(self) -> None:
        event = MidiEvent(pitch=60, start_ticks=0, duration_ticks=480, velocity=100)
        assert event.pitch == 60
        assert event.channel == 0

    def test_event_validation_pitch_range(self) -> None:
        """Pitch must be 0-127."""
        with pytest.raises(ValueError, match="Pitch must be 0-127"):
            MidiEvent(pitch=128, start_ticks=0, duration_ticks=480, velocity=100)
        with pytest.raises(ValueError, match="Pitch must be 0-127"):
            MidiEvent(pitch=-1, start_ticks=0, duration_ticks=480, velocity=100)

    def test_event_validation_velocity_range(self) -> None:
        with pytest.raises(ValueError, match="Velocity must be 0-127"):
            MidiEvent(pitch=60, start_ticks=0, duration_ticks=480, velocity=128)

    def test_event_validation_channel_range(self) -> None:
        with pytest.raises(ValueError, match="Channel must be 0-15"):
            MidiEvent(pitch=60, start_ticks=0, duration_ticks=480, velocity=100, channel=16)

    def test_end_ticks(self) -> None:
        event = MidiEvent(pitch=60, start_ticks=240, duration_ticks=480, velocity=100)
        assert event.end_ticks == 720


class TestEventsToMidi:
    """Test the events_to_midi function."""

    def test_empty_events(self) -> None:
        mid = events_to_midi([])
        assert len(mid.tracks) == 1
        assert mid.ticks_per_beat == TICKS_PER_BEAT

    def test_track_name(self) -> None:
        mid = events_to_midi([])
        names = [msg.name for msg in mid.tracks[0] if msg.type == "track_name"]
        assert names == [DEFAULT_TRACK_NAME]

    def test_tempo_setting(self) -> None:
        """Tempo is stored in microseconds per beat."""
        mid = events_to_midi([], tempo_bpm=90)
        tempo_msgs = [msg for msg in mid.tracks[0] if msg.type == "set_tempo"]
        assert len(tempo_msgs) == 1
        assert tempo_msgs[0].tempo == 666_667

    def test_note_off_before_note_on(self) -> None:
        """A note ending where another starts is released first."""
        events = [
            MidiEvent(pitch=60, start_ticks=0, duration_ticks=480, velocity=100),
            MidiEvent(pitch=67, start_ticks=480, duration_ticks=480, velocity=100),
        ]
        mid = events_to_midi(events)
        notes = [(msg.type, msg.note) for msg in mid.tracks[0] if msg.type in ("note_on", "note_off")]
        assert notes == [
            ("note_on", 60),
            ("note_off", 60),
            ("note_on", 67),
            ("note_off", 67),
        ]

    def test_delta_times(self) -> None:
        events = [MidiEvent(pitch=60, start_ticks=240, duration_ticks=480, velocity=100)]
        mid = events_to_midi(events)
        times = [msg.time for msg in mid.tracks[0] if msg.type in ("note_on", "note_off")]
        assert times == [240, 480]


class TestProgressionToEvents:
    """Test laying a progression out as note events."""

    def test_sustained_chords(self, c_major: Key) -> None:
        """Each chord lasts until the next one, the last until the end."""
        events = progression_to_events(grid("I . . V . . . ."), c_major)
        assert [e.pitch for e in events] == [48, 52, 55, 55, 59, 62]
        assert [e.start_ticks for e in events] == [0, 0, 0, 720, 720, 720]
        assert [e.duration_ticks for e in events] == [720, 720, 720, 1200, 1200, 1200]

    def test_unsustained_chords(self, c_major: Key) -> None:
        """Without sustain each chord lasts one grid step."""
        events = progression_to_events(grid("I . . V . . . ."), c_major, sustain=False)
        assert {e.duration_ticks for e in events} == {240}

    def test_step_follows_resolution(self, c_major: Key) -> None:
        events = progression_to_events(grid("I . V .", Resolution.QUARTER), c_major)
        assert [e.start_ticks for e in events] == [0, 0, 0, 960, 960, 960]

    def test_velocity_and_channel(self, c_major: Key) -> None:
        events = progression_to_events(grid("I . . ."), c_major, velocity=90, channel=3)
        assert {(e.velocity, e.channel) for e in events} == {(90, 3)}

    def test_empty_progression(self, c_major: Key) -> None:
        assert progression_to_events(Progression.empty(2), c_major) == []


class TestSaveProgression:
    """Test writing .mid files."""

    def test_save_and_reload(self, temp_midi_path: Path, c_major: Key) -> None:
        path = save_progression(grid("I . . V . vi . ."), c_major, temp_midi_path, tempo_bpm=100)
        assert path.exists()

        loaded = MidiFile(str(path))
        assert loaded.ticks_per_beat == TICKS_PER_BEAT
        note_ons = [msg for msg in loaded.tracks[0] if msg.type == "note_on"]
        assert len(note_ons) == 9
        tempo = next(msg for msg in loaded.tracks[0] if msg.type == "set_tempo")
        assert tempo.tempo == int(60_000_000 / 100)

    def test_creates_parent_directory(self, temp_dir: Path, c_major: Key) -> None:
        path = save_progression(grid("I . . ."), c_major, temp_dir / "out" / "chords.mid")
        assert path.exists()

    def test_same_progression_same_output(self, temp_dir: Path, a_minor: Key) -> None:
        """Export is deterministic."""
        progression = grid("i . VI . III . v .")
        first = save_progression(progression, a_minor, temp_dir / "a.mid")
        second = save_progression(progression, a_minor, temp_dir / "b.mid")
        assert first.read_bytes() == second.read_bytes()

    def test_progression_to_midi(self, a_minor: Key) -> None:
        mid = progression_to_midi(grid("i . . ."), a_minor)
        pitches = sorted(msg.note for msg in mid.tracks[0] if msg.type == "note_on")
        assert pitches == [57, 60, 64]
