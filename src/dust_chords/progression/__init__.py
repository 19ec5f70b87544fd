"""
Progressions - the tick grid and the template-driven generator.
"""

from dust_chords.progression.grid import Progression
from dust_chords.progression.template import (
    ModeTemplate,
    ProgressionTemplate,
    parse_pattern,
    render_pattern,
)

__all__ = [
    "ModeTemplate",
    "Progression",
    "ProgressionTemplate",
    "parse_pattern",
    "render_pattern",
]
