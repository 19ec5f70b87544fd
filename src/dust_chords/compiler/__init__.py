"""
MIDI export - progressions to standard MIDI files.
"""

from dust_chords.compiler.midi import (
    TICKS_PER_BEAT,
    MidiEvent,
    events_to_midi,
    progression_to_events,
    progression_to_midi,
    save_progression,
)

__all__ = [
    "TICKS_PER_BEAT",
    "MidiEvent",
    "events_to_midi",
    "progression_to_events",
    "progression_to_midi",
    "save_progression",
]
