"""
dust-chords - roman-numeral chords, voice leading and progression generation.

Layers, leaves first:
- core: Note, Interval, Mode, Degree, Key, ChordSpec, Chord, voice_lead
- progression: Progression grid and ProgressionTemplate generation
- models / templates: YAML template configuration and loading
- compiler: MIDI file export
"""

__version__ = "0.1.0"
