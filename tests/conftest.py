"""
Pytest configuration and shared fixtures.
"""

import random
import tempfile
from pathlib import Path

import pytest

from dust_chords.core import Key, Mode, Note
from dust_chords.progression import ProgressionTemplate


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_midi_path(temp_dir: Path) -> Path:
    """Path for a temporary MIDI file."""
    return temp_dir / "test.mid"


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible generation."""
    return random.Random(1234)


@pytest.fixture
def c_major() -> Key:
    """C major rooted at C3."""
    return Key(Note.parse("C3"), Mode.MAJOR)


@pytest.fixture
def a_minor() -> Key:
    """A minor rooted at A3."""
    return Key(Note.parse("A3"), Mode.MINOR)


@pytest.fixture
def template() -> ProgressionTemplate:
    """A small two-mode template."""
    return ProgressionTemplate.from_patterns(
        major=["I V vi IV", "I IV V"],
        minor=["i VI III VII"],
        name="test",
    )
