"""Chord recipes: the interval content of each chord quality.

A recipe is the set of semitone intervals (0–11) above the root that a voicing
must sound. The same table drives both the fretted and the keyboard pipelines.

Extended and altered recipes are deliberately compact: ``"9"`` is root, 3rd,
b7 and 9th with no 5th, ``"13"`` drops the 5th and the 9th, and ``"sus4add9"``
has no 5th. A guitar grip that adds the missing tones still matches, because a
voicing only has to contain the recipe (extra doublings are fine).

Module-level constants:
- `CHORD_RECIPES`: Recipe id → interval tuple
- `RECIPE_SUFFIX`: Recipe id → chord symbol suffix (``"m7b5"``, ``"m(add9)"``)
- `RECIPE_ORDER`: Stable iteration order for batch generation
"""

import typing

import auratones.pitches


CHORD_RECIPES: typing.Dict[str, typing.Tuple[int, ...]] = {

	# Triads
	"major": (0, 4, 7),
	"minor": (0, 3, 7),
	"dim": (0, 3, 6),
	"aug": (0, 4, 8),

	# 6ths, add9 and sus
	"6": (0, 4, 7, 9),
	"m6": (0, 3, 7, 9),
	"add9": (0, 4, 7, 2),
	"m_add9": (0, 3, 7, 2),
	"sus2": (0, 2, 7),
	"sus4": (0, 5, 7),

	# 7ths
	"7": (0, 4, 7, 10),
	"maj7": (0, 4, 7, 11),
	"m7": (0, 3, 7, 10),
	"m7b5": (0, 3, 6, 10),
	"dim7": (0, 3, 6, 9),

	# 9ths: 1, 3, b7, 9 (no 5th)
	"9": (0, 4, 10, 2),
	"m9": (0, 3, 10, 2),
	"maj9": (0, 4, 11, 2),

	# 11ths and sus4 add 9
	"11": (0, 4, 10, 5),
	"sus4add9": (0, 5, 2),

	# 13ths: 1, 3, b7, 13
	"13": (0, 4, 10, 9),
	"m13": (0, 3, 10, 9),

	# Altered dominants
	"7b9": (0, 4, 10, 1),
	"7#9": (0, 4, 10, 3),
	"7b5": (0, 4, 6, 10),
	"7#5": (0, 4, 8, 10),
	"9b5": (0, 4, 10, 2, 6),
	"9#5": (0, 4, 10, 2, 8),
	"13b9": (0, 4, 10, 1, 9),
	"13#11": (0, 4, 10, 6, 9),
	"7#11": (0, 4, 10, 6),
	"7b13": (0, 4, 10, 8),

	# Others
	"6/9": (0, 4, 9, 2),
	"m11": (0, 3, 10, 5),
	"7sus4": (0, 5, 10),
}

RECIPE_SUFFIX: typing.Dict[str, str] = {
	"major": "",
	"minor": "m",
	"dim": "dim",
	"aug": "aug",
	"6": "6",
	"m6": "m6",
	"add9": "add9",
	"m_add9": "m(add9)",
	"sus2": "sus2",
	"sus4": "sus4",
	"sus4add9": "sus4add9",
	"7": "7",
	"maj7": "maj7",
	"m7": "m7",
	"m7b5": "m7b5",
	"dim7": "dim7",
	"9": "9",
	"m9": "m9",
	"maj9": "maj9",
	"11": "11",
	"13": "13",
	"m13": "m13",
	"7b9": "7b9",
	"7#9": "7#9",
	"7b5": "7b5",
	"7#5": "7#5",
	"9b5": "9b5",
	"9#5": "9#5",
	"13b9": "13b9",
	"13#11": "13#11",
	"7#11": "7#11",
	"7b13": "7b13",
	"6/9": "6/9",
	"m11": "m11",
	"7sus4": "7sus4",
}

RECIPE_ORDER: typing.Tuple[str, ...] = tuple(CHORD_RECIPES)


class UnknownRecipeError (ValueError):
	pass


def get_recipe (recipe_id: str) -> typing.Tuple[int, ...]:

	"""Return the interval tuple for a recipe id.

	Raises:
		UnknownRecipeError: If the id is not registered.

	Example:
		```python
		get_recipe("m7b5")  # → (0, 3, 6, 10)
		```
	"""

	if recipe_id not in CHORD_RECIPES:
		raise UnknownRecipeError(f"Unknown chord recipe: {recipe_id!r}")

	return CHORD_RECIPES[recipe_id]


def chord_tones (root_pc: int, recipe_id: str) -> typing.FrozenSet[int]:

	"""Return the pitch classes a voicing of this chord must contain."""

	return frozenset(auratones.pitches.normalize_pc(root_pc + iv) for iv in get_recipe(recipe_id))


def symbol_for (root_label: str, recipe_id: str, bass_label: typing.Optional[str] = None) -> str:

	"""Build a chord symbol such as ``"Cmaj7"`` or ``"Am7/G"``."""

	if recipe_id not in RECIPE_SUFFIX:
		raise UnknownRecipeError(f"Unknown chord recipe: {recipe_id!r}")

	symbol = f"{root_label}{RECIPE_SUFFIX[recipe_id]}"

	if bass_label is not None:
		symbol = f"{symbol}/{bass_label}"

	return symbol
