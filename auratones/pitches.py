"""Pitch class arithmetic and note spelling.

Module-level constants:
- `SHARP_NAMES`: Pitch class → sharp-preferring note name (``1`` → ``"C#"``)
- `FLAT_NAMES`: Pitch class → flat-preferring note name (``1`` → ``"Db"``)
- `SHARP_KEYS`: Key signatures whose roots are spelled with sharps

Module-level helpers:
- `normalize_pc(x)`: Fold any integer into 0–11.
- `label_for(pc, prefer_flat)`: Display name for a pitch class.
- `pc_from_label(label)`: Strict lookup against the two display tables. Raises
  `UnknownLabelError` for anything else.
- `normalize_root(root)`: Lenient lookup that also accepts ``"B#"``, ``"Fb"``,
  double sharps and double flats.
- `spell_above(root_label, interval)`: Name a chord tone in its root's spelling.

Whether a pitch class is shown with a sharp or a flat is a display concern only;
every computation in the package works on integers.
"""

import typing


SHARP_NAMES: typing.Tuple[str, ...] = (
	"C",
	"C#",
	"D",
	"D#",
	"E",
	"F",
	"F#",
	"G",
	"G#",
	"A",
	"A#",
	"B",
)

FLAT_NAMES: typing.Tuple[str, ...] = (
	"C",
	"Db",
	"D",
	"Eb",
	"E",
	"F",
	"Gb",
	"G",
	"Ab",
	"A",
	"Bb",
	"B",
)

SHARP_KEYS: typing.FrozenSet[str] = frozenset({"C", "G", "D", "A", "E", "B", "F#", "C#"})

FLAT_KEYS: typing.FrozenSet[str] = frozenset({"F", "Bb", "Eb", "Ab", "Db", "Gb", "Cb"})

_LETTER_PC: typing.Dict[str, int] = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}


class UnknownLabelError (ValueError):
	pass


def normalize_pc (x: int) -> int:

	"""Fold an integer into a pitch class (0–11).

	Python's modulo already returns a non-negative result for a positive
	divisor, so negative offsets are safe.

	Example:
		```python
		normalize_pc(14)   # → 2
		normalize_pc(-1)   # → 11
		```
	"""

	return x % 12


def label_for (pc: int, prefer_flat: bool = False) -> str:

	"""Return the display name for a pitch class.

	Parameters:
		pc: Pitch class (any integer; it is normalized first).
		prefer_flat: Use the flat table (``"Bb"``) instead of the sharp one (``"A#"``).
	"""

	table = FLAT_NAMES if prefer_flat else SHARP_NAMES

	return table[normalize_pc(pc)]


def pc_from_label (label: str) -> int:

	"""Look up a note name in the sharp table, then the flat table.

	Parameters:
		label: Note name exactly as it appears in one of the tables
			(e.g. ``"C"``, ``"F#"``, ``"Bb"``).

	Returns:
		Pitch class integer (0–11).

	Raises:
		UnknownLabelError: If the name is in neither table.

	Example:
		```python
		pc_from_label("F#")  # → 6
		pc_from_label("Gb")  # → 6
		```
	"""

	if label in SHARP_NAMES:
		return SHARP_NAMES.index(label)

	if label in FLAT_NAMES:
		return FLAT_NAMES.index(label)

	raise UnknownLabelError(f"Unknown note label: {label!r}. Expected e.g. 'C', 'F#', 'Bb'.")


def normalize_root (root: str) -> int:

	"""Parse a root name with any number of accidentals.

	Accepts a letter A–G (either case) followed by ``#`` and ``b`` characters, so
	enharmonic spellings outside the display tables (``"B#"``, ``"Fb"``,
	``"C##"``, ``"Ebb"``) resolve too.

	Raises:
		UnknownLabelError: If the text is not a letter plus accidentals.
	"""

	if not root or root[0].upper() not in _LETTER_PC:
		raise UnknownLabelError(f"Unknown root: {root!r}")

	pc = _LETTER_PC[root[0].upper()]

	for accidental in root[1:]:

		if accidental == "#":
			pc += 1

		elif accidental == "b":
			pc -= 1

		else:
			raise UnknownLabelError(f"Unknown root: {root!r}")

	return normalize_pc(pc)


def enharmonic_names (pc: int) -> typing.Tuple[str, str]:

	"""Return the sharp and flat names of a pitch class (``1`` → ``("C#", "Db")``)."""

	return SHARP_NAMES[normalize_pc(pc)], FLAT_NAMES[normalize_pc(pc)]


def spell_above (root_label: str, interval: int) -> str:

	"""Name the note ``interval`` semitones above a root, in the root's spelling.

	Flat roots spell flat and sharp roots spell sharp. Natural roots spell their
	minor 3rd and minor 7th with flats (``Cm/Eb``, ``C7/Bb``), everything else
	with sharps (``D/F#``).

	Raises:
		UnknownLabelError: If ``root_label`` is not a letter plus accidentals.

	Example:
		```python
		spell_above("Eb", 10)  # → "Db"
		spell_above("C", 3)    # → "Eb"
		spell_above("F#", 4)   # → "A#"
		```
	"""

	root_pc = normalize_root(root_label)
	accidentals = root_label[1:]

	if "b" in accidentals:
		prefer_flat = True

	elif "#" in accidentals:
		prefer_flat = False

	else:
		prefer_flat = normalize_pc(interval) in (3, 10)

	return label_for(root_pc + interval, prefer_flat=prefer_flat)


def spell_root (
	pc: int,
	key: str = "C",
	direction: typing.Optional[str] = None,
	prefer_sharps: typing.Optional[bool] = None
) -> str:

	"""Name a root pitch class in the context of a key.

	An explicit chromatic ``direction`` wins (``"up"`` spells with sharps,
	``"down"`` with flats), then ``prefer_sharps``, then the key signature.

	Parameters:
		pc: Pitch class to spell.
		key: Key signature name, e.g. ``"G"`` or ``"Eb"``.
		direction: ``"up"``, ``"down"`` or ``None``.
		prefer_sharps: Override for the key-signature rule.

	Example:
		```python
		spell_root(10, key="F")   # → "Bb"
		spell_root(10, key="E")   # → "A#"
		spell_root(10, key="E", direction="down")  # → "Bb"
		```
	"""

	if direction not in (None, "up", "down"):
		raise ValueError(f"direction must be 'up', 'down' or None, not {direction!r}")

	if key not in SHARP_KEYS and key not in FLAT_KEYS:
		raise UnknownLabelError(f"Unknown key signature: {key!r}")

	if direction is not None:
		use_sharp = direction == "up"

	elif prefer_sharps is not None:
		use_sharp = prefer_sharps

	else:
		use_sharp = key in SHARP_KEYS

	return label_for(pc, prefer_flat=not use_sharp)
