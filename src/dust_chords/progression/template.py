"""
Progression templates - example patterns compiled into a transition graph.

Each mode owns a list of example chord patterns. From every chord in a
pattern the walk may repeat it, step back to the chord before it, or step
forward to the chord after it (wrapping around the pattern). Candidates
for chords shared between patterns accumulate, so a chord used in several
patterns can move to any of their neighbours.

Generation is a first-order random walk over that graph, zipped with a
randomly generated rhythm.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable, Sequence

from dust_chords.constants import ErrorMessages
from dust_chords.core.chord import ChordSpec
from dust_chords.core.errors import ChordParseError, EmptyTemplateError, TemplateLoadError
from dust_chords.core.scale import Mode
from dust_chords.core.timing import Resolution
from dust_chords.models.template import TemplateConfig
from dust_chords.progression.grid import Progression

logger = logging.getLogger(__name__)


def parse_pattern(text: str) -> list[ChordSpec]:
    """Parse a space-separated pattern like 'I V vi IV'."""
    return [ChordSpec.parse(token) for token in text.split()]


def render_pattern(pattern: Sequence[ChordSpec]) -> str:
    """Inverse of `parse_pattern`."""
    return " ".join(str(spec) for spec in pattern)


class ModeTemplate:
    """Example patterns for one mode and the transitions built from them."""

    def __init__(self, patterns: Iterable[Sequence[ChordSpec]] = ()) -> None:
        self.patterns: list[list[ChordSpec]] = [list(p) for p in patterns]
        self.transitions: dict[str, list[ChordSpec]] = {}
        self.update_transitions()

    def update_transitions(self) -> None:
        """Rebuild the transition map from the current patterns."""
        self.transitions = {}
        for pattern in self.patterns:
            n = len(pattern)
            for i, chord in enumerate(pattern):
                candidates = self.transitions.setdefault(str(chord), [])
                candidates.append(chord)
                candidates.append(pattern[(i - 1) % n])
                candidates.append(pattern[(i + 1) % n])

        logger.debug(f"Rebuilt transitions: {len(self.transitions)} chords")

    def next(self, chord: ChordSpec) -> list[ChordSpec]:
        """Candidate chords to follow `chord`; empty if it is unknown."""
        return list(self.transitions.get(str(chord), []))

    def add_pattern(self, pattern: Sequence[ChordSpec]) -> None:
        if not pattern:
            raise ValueError("Pattern must contain at least one chord")
        self.patterns.append(list(pattern))
        self.update_transitions()

    def remove_pattern(self, index: int) -> list[ChordSpec]:
        removed = self.patterns.pop(index)
        self.update_transitions()
        return removed

    def chords(self) -> list[ChordSpec]:
        """Every distinct chord across all patterns, in first-seen order."""
        seen: dict[str, ChordSpec] = {}
        for pattern in self.patterns:
            for chord in pattern:
                seen.setdefault(str(chord), chord)
        return list(seen.values())


class ProgressionTemplate:
    """
    A library of example progressions for major and minor keys.

    All random choices go through the `rng` argument; pass a seeded
    `random.Random` for reproducible output.
    """

    def __init__(
        self,
        major: ModeTemplate | None = None,
        minor: ModeTemplate | None = None,
        resolution: Resolution = Resolution.EIGHTH,
        name: str = "",
    ) -> None:
        self.major = major or ModeTemplate()
        self.minor = minor or ModeTemplate()
        self.resolution = Resolution(resolution)
        self.name = name

    @classmethod
    def from_patterns(
        cls,
        major: Iterable[str] = (),
        minor: Iterable[str] = (),
        resolution: Resolution = Resolution.EIGHTH,
        name: str = "",
    ) -> ProgressionTemplate:
        """
        Build a template from pattern strings.

        Args:
            major: Patterns for major keys, e.g. ["I V vi IV"]
            minor: Patterns for minor keys
            resolution: Default grid resolution for generation
            name: Template name

        Raises:
            TemplateLoadError: If any chord in a pattern fails to parse
        """
        return cls(
            major=ModeTemplate(_parse_patterns(major, Mode.MAJOR)),
            minor=ModeTemplate(_parse_patterns(minor, Mode.MINOR)),
            resolution=resolution,
            name=name,
        )

    @classmethod
    def from_config(cls, config: TemplateConfig) -> ProgressionTemplate:
        """Build a template from a validated configuration model."""
        return cls.from_patterns(
            major=config.major,
            minor=config.minor,
            resolution=Resolution(config.resolution),
            name=config.name,
        )

    def to_config(self) -> TemplateConfig:
        """Convert back to a configuration model, rendering every chord."""
        return TemplateConfig(
            name=self.name or "untitled",
            resolution=int(self.resolution),
            major=[render_pattern(p) for p in self.major.patterns],
            minor=[render_pattern(p) for p in self.minor.patterns],
        )

    def for_mode(self, mode: Mode) -> ModeTemplate:
        return self.major if mode is Mode.MAJOR else self.minor

    def update_transitions(self) -> None:
        """Rebuild the transitions of both modes."""
        self.major.update_transitions()
        self.minor.update_transitions()

    def next(self, chord: ChordSpec, mode: Mode) -> list[ChordSpec]:
        """Candidate chords to follow `chord` in the given mode."""
        return self.for_mode(mode).next(chord)

    def rand_pattern(self, mode: Mode, rng: random.Random | None = None) -> list[ChordSpec]:
        """
        Pick one of the mode's patterns at random.

        Raises:
            EmptyTemplateError: If the mode has no patterns
        """
        rng = rng or random.Random()
        patterns = [p for p in self.for_mode(mode).patterns if p]
        if not patterns:
            raise EmptyTemplateError(ErrorMessages.EMPTY_TEMPLATE.format(mode=mode.value))
        return list(rng.choice(patterns))

    def rand_chord(self, mode: Mode, rng: random.Random | None = None) -> ChordSpec:
        """Pick a random chord from a random pattern of the mode."""
        rng = rng or random.Random()
        return rng.choice(self.rand_pattern(mode, rng))

    def gen_chords(
        self,
        seed: ChordSpec,
        mode: Mode,
        count: int,
        rng: random.Random | None = None,
    ) -> list[ChordSpec]:
        """
        Random walk of `count` chords starting at `seed`.

        Each step draws uniformly from the transitions of the previous
        chord. A chord with no transitions restarts the walk from a random
        chord of the mode.

        Args:
            seed: First chord of the walk
            mode: Mode whose transitions to follow
            count: Number of chords to produce (including the seed)
            rng: Random source

        Returns:
            List of `count` chords
        """
        rng = rng or random.Random()
        if count <= 0:
            return []

        chords = [seed]
        while len(chords) < count:
            candidates = self.next(chords[-1], mode)
            if candidates:
                chords.append(rng.choice(candidates))
            else:
                logger.debug(f"No transitions from {chords[-1]}, picking a random {mode.value} chord")
                chords.append(self.rand_chord(mode, rng))
        return chords

    def gen_timing(
        self,
        bars: int,
        rng: random.Random | None = None,
        resolution: Resolution | None = None,
    ) -> list[bool]:
        """
        Random rhythm: one flag per tick, True where a chord starts.

        The first tick always holds a chord. After each chord a rest of
        0 to ticks_per_bar - 1 ticks is drawn, then the next chord follows,
        until the grid is full.

        Args:
            bars: Length in bars
            rng: Random source
            resolution: Grid resolution (defaults to the template's)

        Returns:
            Exactly bars * ticks_per_bar flags
        """
        rng = rng or random.Random()
        resolution = resolution or self.resolution
        total = resolution.ticks_for_bars(bars)
        if total <= 0:
            return []

        timing = [True]
        while len(timing) < total:
            rest = rng.randrange(resolution.ticks_per_bar)
            timing.extend([False] * rest)
            timing.append(True)
        return timing[:total]

    def gen_progression_from_seed(
        self,
        seed: ChordSpec,
        mode: Mode,
        bars: int,
        rng: random.Random | None = None,
        resolution: Resolution | None = None,
    ) -> Progression:
        """
        Generate a progression whose first chord is `seed`.

        Args:
            seed: Chord on the first tick
            mode: Mode whose transitions to follow
            bars: Length in bars
            rng: Random source
            resolution: Grid resolution (defaults to the template's)

        Returns:
            A new Progression
        """
        rng = rng or random.Random()
        resolution = resolution or self.resolution
        timing = self.gen_timing(bars, rng, resolution)
        chords = self.gen_chords(seed, mode, sum(timing), rng)
        return Progression.from_timing(timing, chords, resolution)

    def gen_progression(
        self,
        bars: int,
        mode: Mode,
        rng: random.Random | None = None,
        resolution: Resolution | None = None,
    ) -> Progression:
        """Generate a progression starting from a random chord of the mode."""
        rng = rng or random.Random()
        seed = self.rand_chord(mode, rng)
        return self.gen_progression_from_seed(seed, mode, bars, rng, resolution)


def _parse_patterns(patterns: Iterable[str], mode: Mode) -> list[list[ChordSpec]]:
    parsed = []
    for text in patterns:
        try:
            parsed.append(parse_pattern(text))
        except ChordParseError as e:
            raise TemplateLoadError(
                ErrorMessages.INVALID_PATTERN.format(mode=mode.value, pattern=text, error=e)
            ) from e
    return parsed
