"""Chord symbol parsing.

Turns display symbols back into ``(root, recipe, bass)`` triples so that
hand-entered chord names (``"Dbm7b5"``, ``"C#maj7"``, ``"Am7/G"``, ``"C6/9"``)
can be matched against the recipe table.
"""

import dataclasses
import re
import typing

import auratones.pitches
import auratones.recipes


# Alternative spellings accepted on input, on top of every suffix in RECIPE_SUFFIX.
QUALITY_ALIASES: typing.Dict[str, str] = {
	"maj": "major",
	"M": "major",
	"min": "minor",
	"-": "minor",
	"+": "aug",
	"°": "dim",
	"°7": "dim7",
	"ø": "m7b5",
	"ø7": "m7b5",
	"min7": "m7",
	"-7": "m7",
	"M7": "maj7",
	"Δ7": "maj7",
	"Δ": "maj7",
	"M9": "maj9",
	"min9": "m9",
	"madd9": "m_add9",
	"minadd9": "m_add9",
	"7sus": "7sus4",
	"dom7": "7",
	"9sus4": "sus4add9",
}

_SYMBOL_RE = re.compile(r"^([A-Ga-g])([#b]{0,2})(.*)$")
_BASS_RE = re.compile(r"^[A-Ga-g][#b]{0,2}$")

_SUFFIX_TO_RECIPE: typing.Dict[str, str] = {
	suffix: recipe_id for recipe_id, suffix in auratones.recipes.RECIPE_SUFFIX.items()
}


@dataclasses.dataclass(frozen=True)
class ParsedSymbol:

	"""
	A chord symbol resolved against the recipe table.
	"""

	root_pc: int
	recipe_id: str
	bass_pc: typing.Optional[int] = None


def detect_recipe (quality: str) -> str:

	"""Map a quality suffix (``""``, ``"m7b5"``, ``"min7"``) to a recipe id.

	Raises:
		UnknownRecipeError: If the suffix is not recognised.
	"""

	quality = quality.replace(" ", "")

	if quality in _SUFFIX_TO_RECIPE:
		return _SUFFIX_TO_RECIPE[quality]

	if quality in QUALITY_ALIASES:
		return QUALITY_ALIASES[quality]

	raise auratones.recipes.UnknownRecipeError(f"Unknown chord quality: {quality!r}")


def parse_symbol (text: str) -> ParsedSymbol:

	"""Parse a chord symbol into root pitch class, recipe id and optional bass.

	A trailing ``/X`` is read as a slash bass only when ``X`` is a note name, so
	``"C6/9"`` stays a 6/9 chord while ``"C6/9/E"`` gets an E bass.

	Raises:
		UnknownLabelError: If the root or bass is not a note name.
		UnknownRecipeError: If the quality is not recognised.

	Example:
		```python
		parse_symbol("Dbm7b5")  # → ParsedSymbol(root_pc=1, recipe_id="m7b5", bass_pc=None)
		parse_symbol("Am7/G")   # → ParsedSymbol(root_pc=9, recipe_id="m7", bass_pc=7)
		```
	"""

	symbol = text.strip()
	match = _SYMBOL_RE.match(symbol)

	if match is None:
		raise auratones.pitches.UnknownLabelError(f"Not a chord symbol: {text!r}")

	root_pc = auratones.pitches.normalize_root(match.group(1) + match.group(2))
	quality = match.group(3)
	bass_pc: typing.Optional[int] = None

	if "/" in quality:
		head, tail = quality.rsplit("/", 1)

		if _BASS_RE.match(tail):
			bass_pc = auratones.pitches.normalize_root(tail)
			quality = head

	return ParsedSymbol(root_pc=root_pc, recipe_id=detect_recipe(quality), bass_pc=bass_pc)
