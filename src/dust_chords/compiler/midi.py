"""
MIDI export - write a progression to a standard MIDI file.

This module converts a Progression, resolved in a key, to note events
and then to a single-track MidiFile using mido.
All operations are deterministic: same input -> same output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from mido import Message, MetaMessage, MidiFile, MidiTrack, bpm2tempo

from dust_chords.constants import DEFAULT_TEMPO_BPM, DEFAULT_TRACK_NAME, DEFAULT_VELOCITY

if TYPE_CHECKING:
    from collections.abc import Sequence

    from dust_chords.core.key import Key
    from dust_chords.progression.grid import Progression

logger = logging.getLogger(__name__)

# Standard ticks per beat (quarter note) - industry standard
TICKS_PER_BEAT = 480


@dataclass(frozen=True)
class MidiEvent:
    """
    One sounding note, in absolute MIDI ticks.

    Grid positions are never negative, so only the MIDI byte ranges are
    checked. Pitch can leave 0-127 when a chord is shifted by octaves.
    """

    pitch: int
    start_ticks: int
    duration_ticks: int
    velocity: int
    channel: int = 0

    def __post_init__(self) -> None:
        _check_range("Pitch", self.pitch, 127)
        _check_range("Velocity", self.velocity, 127)
        _check_range("Channel", self.channel, 15)

    @property
    def end_ticks(self) -> int:
        return self.start_ticks + self.duration_ticks


def _check_range(label: str, value: int, high: int) -> None:
    if not 0 <= value <= high:
        raise ValueError(f"{label} must be 0-{high}, got {value}")


def _timeline(events: Sequence[MidiEvent]) -> list[tuple[int, Message]]:
    """Note on/off pairs at absolute ticks; releases sort ahead of attacks."""
    timeline: list[tuple[int, int, Message]] = []
    for event in events:
        timeline.append(
            (
                event.end_ticks,
                0,
                Message("note_off", channel=event.channel, note=event.pitch, velocity=0),
            )
        )
        timeline.append(
            (
                event.start_ticks,
                1,
                Message(
                    "note_on", channel=event.channel, note=event.pitch, velocity=event.velocity
                ),
            )
        )
    timeline.sort(key=lambda item: (item[0], item[1]))
    return [(tick, msg) for tick, _, msg in timeline]


def events_to_midi(
    events: Sequence[MidiEvent],
    tempo_bpm: int = DEFAULT_TEMPO_BPM,
    ticks_per_beat: int = TICKS_PER_BEAT,
    track_name: str = DEFAULT_TRACK_NAME,
) -> MidiFile:
    """
    Write note events to a single-track MidiFile.

    Args:
        events: Notes in any order
        tempo_bpm: Tempo in beats per minute
        ticks_per_beat: MIDI resolution
        track_name: Stored as the track's name meta message

    Returns:
        A mido MidiFile ready to be saved
    """
    track = MidiTrack(
        [
            MetaMessage("track_name", name=track_name, time=0),
            MetaMessage("set_tempo", tempo=bpm2tempo(tempo_bpm), time=0),
        ]
    )

    previous = 0
    for tick, msg in _timeline(events):
        track.append(msg.copy(time=tick - previous))
        previous = tick

    track.append(MetaMessage("end_of_track", time=0))
    mid = MidiFile(ticks_per_beat=ticks_per_beat)
    mid.tracks.append(track)
    return mid


def progression_to_events(
    progression: Progression,
    key: Key,
    ticks_per_beat: int = TICKS_PER_BEAT,
    velocity: int = DEFAULT_VELOCITY,
    channel: int = 0,
    sustain: bool = True,
) -> list[MidiEvent]:
    """
    Resolve a progression in a key and lay its chords out as note events.

    Args:
        progression: The chord grid
        key: Key to resolve chords in
        ticks_per_beat: MIDI resolution
        velocity: Note velocity for every note
        channel: MIDI channel
        sustain: Hold each chord until the next one (or the end of the
            grid); otherwise each chord lasts a single grid step

    Returns:
        Note events in chord order
    """
    step_ticks = ticks_per_beat // progression.resolution.ticks_per_beat
    chords = progression.in_key(key)
    starts = progression.chord_index
    total = len(progression.sequence)

    events: list[MidiEvent] = []
    for n, tick in enumerate(starts):
        chord = chords[tick]
        if chord is None:
            continue
        if sustain:
            end = starts[n + 1] if n + 1 < len(starts) else total
        else:
            end = tick + 1
        for pitch in chord.to_midi():
            events.append(
                MidiEvent(
                    pitch=pitch,
                    start_ticks=tick * step_ticks,
                    duration_ticks=(end - tick) * step_ticks,
                    velocity=velocity,
                    channel=channel,
                )
            )

    logger.debug(f"Exported {len(starts)} chords as {len(events)} note events")
    return events


def progression_to_midi(
    progression: Progression,
    key: Key,
    tempo_bpm: int = DEFAULT_TEMPO_BPM,
    ticks_per_beat: int = TICKS_PER_BEAT,
    velocity: int = DEFAULT_VELOCITY,
    channel: int = 0,
    sustain: bool = True,
) -> MidiFile:
    """Convert a progression straight to a MidiFile."""
    events = progression_to_events(
        progression,
        key,
        ticks_per_beat=ticks_per_beat,
        velocity=velocity,
        channel=channel,
        sustain=sustain,
    )
    return events_to_midi(events, tempo_bpm=tempo_bpm, ticks_per_beat=ticks_per_beat)


def save_progression(
    progression: Progression,
    key: Key,
    path: Path,
    tempo_bpm: int = DEFAULT_TEMPO_BPM,
    sustain: bool = True,
) -> Path:
    """
    Write a progression to a .mid file.

    Args:
        progression: The chord grid
        key: Key to resolve chords in
        path: Output file path
        tempo_bpm: Tempo in beats per minute
        sustain: Hold each chord until the next one

    Returns:
        The path written
    """
    mid = progression_to_midi(progression, key, tempo_bpm=tempo_bpm, sustain=sustain)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    mid.save(str(path))
    return path
