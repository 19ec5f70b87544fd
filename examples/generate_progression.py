#!/usr/bin/env python3
"""
Example: Generate chord progressions from the bundled template.

Generates a random progression, voice-leads it, prints the chords in a
key and writes both versions to MIDI files you can open in any DAW.

Usage:
    python examples/generate_progression.py [seed]
    # Creates: examples/output/progression.mid
    #          examples/output/progression_voiced.mid
"""

import logging
import random
import sys
from pathlib import Path

from dust_chords.compiler import save_progression
from dust_chords.core import ChordSpec, Key
from dust_chords.templates import TemplateLoader


def main() -> None:
    """Generate example progressions."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    seed = int(sys.argv[1]) if len(sys.argv) > 1 else 42
    rng = random.Random(seed)
    output_dir = Path(__file__).parent / "output"

    template = TemplateLoader().get_template("default")
    if template is None:
        raise SystemExit("Bundled template 'default' is missing")

    key = Key.parse("A3_minor")

    # Example 1: Random progression, four bars
    print(f"Generating a 4-bar progression in {key} (seed {seed})...")
    progression = template.gen_progression(4, key.mode, rng)
    print(f"  Grid:   {progression}")
    print_chords(progression.chords(), key)

    # Example 2: Same chords, voice-led
    voiced = progression.voice_lead()
    print("\nVoice-led:")
    print_chords(voiced.chords(), key)

    # Example 3: Cycle the second chord through its alternatives
    if len(progression.chord_index) > 1:
        print("\nCycling chord 2:")
        for _ in range(3):
            spec = progression.cycle_chord(1, template, key.mode)
            print(f"  -> {spec}")

    path = save_progression(progression, key, output_dir / "progression.mid")
    print(f"\n  Created: {path}")
    path = save_progression(voiced, key, output_dir / "progression_voiced.mid")
    print(f"  Created: {path}")


def print_chords(chords: list[ChordSpec], key: Key) -> None:
    for spec in chords:
        print(f"  {str(spec):<12} {spec.chord_for_key(key)}")


if __name__ == "__main__":
    main()
