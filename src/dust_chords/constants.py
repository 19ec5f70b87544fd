"""
Constants shared across the chord engine.

No magic numbers - note offsets, meter and defaults live here.
"""

from typing import Literal

# Semitone 0 is A0, which is MIDI note 21
MIDI_NOTE_OFFSET = 21

# Meter is always 4/4
BEATS_PER_BAR = 4

# C4 (semitones above A0)
DEFAULT_KEY_ROOT = 39

DEFAULT_BARS = 2

# Default grid resolution in ticks per bar (eighth notes)
DEFAULT_RESOLUTION = 8

DEFAULT_TEMPO_BPM = 120
DEFAULT_VELOCITY = 64
DEFAULT_TRACK_NAME = "Dust Chords"

# Schema versions - frozen for v1
SchemaVersion = Literal["template/v1"]
TEMPLATE_SCHEMA: SchemaVersion = "template/v1"


class ErrorMessages:
    """Standardized error messages."""

    EMPTY_TEMPLATE = "Template has no {mode} patterns."
    TEMPLATE_EXISTS = "Template already exists in project: {name}"
    INVALID_PATTERN = "Invalid {mode} pattern '{pattern}': {error}"
    INVALID_TEMPLATE_FILE = "Invalid template file {path}: {error}"
    NO_PROJECT_PATH = "No project path configured"
