
"""
Auratones - chord voicing generation for fretted instruments and keyboards.

Given a root and a chord quality, auratones produces concrete, playable
voicings: fret-per-string assignments for a six-string guitar in standard
tuning, and two-octave key layouts for a keyboard. It is the generator behind
a chord library, so every voicing it returns has been checked both for theory
(it really contains the chord) and for the hand (it can really be played).

What it does:

- **Shape-based guitar voicings.** A catalog of movable CAGED-style grips is
  placed at every position that puts the root on the shape's root string,
  then filtered by the chord's interval content and by playability limits
  (stretch, fret range, number of stopped notes, meaningful barres).
- **Slash chords.** Inversions are derived by muting strings until a chord
  tone other than the root is lowest, following conventional bass rules per
  quality (``C/E``, ``Am7/G``, ``G7/F``).
- **Dedup and ranking.** Sound-equivalent voicings collapse to one, and each
  symbol keeps its lowest-position variants first.
- **Keyboard voicings.** Close-position stacks fitted into a 24-key window
  around a reference note, plus slash-bass variants.
- **Transposition.** A submitted movable voicing is slid to the other eleven
  roots.
- **Symbols.** Chord symbols are built and parsed (``"Dbm7b5"``,
  ``"C6/9"``, ``"Am7/G"``).
- **Auditioning.** Render a generated library to a Standard MIDI File.

Minimal example:

    ```python
    import auratones

    entries = auratones.generate_voicings_for_root("C", "guitar")

    for entry in entries[:3]:
        print(entry.symbol, [v.frets for v in entry.variants])
    ```

Package-level exports: ``generate_voicings_for_root``, ``generate_all``,
``compute_transpositions``, ``parse_symbol``, ``ChordEntry``, ``Voicing``,
``KeyboardVoicing``.
"""

import auratones.generator
import auratones.symbols
import auratones.transpose
import auratones.voicing


ChordEntry = auratones.voicing.ChordEntry
KeyboardVoicing = auratones.voicing.KeyboardVoicing
Voicing = auratones.voicing.Voicing
compute_transpositions = auratones.transpose.compute_transpositions
generate_all = auratones.generator.generate_all
generate_voicings_for_root = auratones.generator.generate_voicings_for_root
parse_symbol = auratones.symbols.parse_symbol
