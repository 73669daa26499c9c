"""Batch generation of chord library entries.

This is the entry point used by seeding jobs: for one root (or all twelve) it
runs every recipe through the guitar or keyboard pipeline and returns
``ChordEntry`` objects ready to be serialized.

Guitar pipeline:
	recipes → shape placements → slash variants → dedup → rank and cap

Keyboard pipeline:
	recipes → close-position stack → two-octave fit → slash variants → dedup

Output is deterministic: the same root and settings always give the same list.
"""

import dataclasses
import logging
import re
import typing

import auratones.fretboard
import auratones.keyboard
import auratones.pitches
import auratones.ranking
import auratones.recipes
import auratones.shapes
import auratones.slash
import auratones.voicing


logger = logging.getLogger(__name__)

GUITAR = "guitar"
KEYBOARD = "keyboard"

# Keyboard entries are stored under the "piano" instrument name.
_STORED_NAME: typing.Dict[str, str] = {GUITAR: "guitar", KEYBOARD: "piano", "piano": "piano"}


@dataclasses.dataclass
class GeneratorSettings:

	"""
	Tunable limits for batch generation.

	Parameters:
		max_symbols_per_root: Cap on guitar symbols per root (``None`` for no cap).
		variants_per_symbol: Cap on guitar voicings per symbol (``None`` for no cap).
		keyboard_center: Reference MIDI note for keyboard layouts.
		keyboard_max_symbols_per_root: Cap on keyboard symbols per root (``None`` for no cap).
		include_slash: Generate slash-bass variants.
	"""

	max_symbols_per_root: typing.Optional[int] = auratones.ranking.DEFAULT_MAX_SYMBOLS
	variants_per_symbol: typing.Optional[int] = auratones.ranking.DEFAULT_VARIANTS_PER_SYMBOL
	keyboard_center: int = auratones.keyboard.DEFAULT_CENTER
	keyboard_max_symbols_per_root: typing.Optional[int] = None
	include_slash: bool = True

	@classmethod
	def from_mapping (cls, data: typing.Optional[typing.Mapping[str, typing.Any]]) -> "GeneratorSettings":

		"""Build settings from a config mapping, ignoring unknown keys.

		Raises:
			ValueError: If a known key has a value of the wrong type.
		"""

		if not data:
			return cls()

		known = {field.name for field in dataclasses.fields(cls)}
		values = {key: value for key, value in data.items() if key in known}

		for key in ("max_symbols_per_root", "variants_per_symbol", "keyboard_center", "keyboard_max_symbols_per_root"):
			if key in values and values[key] is not None and not isinstance(values[key], int):
				raise ValueError(f"{key} must be an integer, not {values[key]!r}")

		return cls(**values)


def _guitar_entries (root_label: str, root_pc: int, settings: GeneratorSettings) -> typing.List[auratones.voicing.ChordEntry]:

	bucket: typing.List[typing.Tuple[str, auratones.voicing.Voicing]] = []

	for recipe_id in auratones.shapes.QUALITY_SHAPES:
		symbol = auratones.recipes.symbol_for(root_label, recipe_id)

		for voicing in auratones.fretboard.enumerate_voicings(root_pc, recipe_id):
			bucket.append((symbol, voicing))

			if not settings.include_slash:
				continue

			for variant in auratones.slash.slash_variants(voicing, root_pc, recipe_id, root_label=root_label):
				bucket.append((auratones.recipes.symbol_for(root_label, recipe_id, variant.bass_label), variant))

	return auratones.ranking.collect_entries(
		bucket,
		instrument="guitar",
		max_symbols=settings.max_symbols_per_root,
		variants_per_symbol=settings.variants_per_symbol,
	)


def _keyboard_entries (root_label: str, root_pc: int, settings: GeneratorSettings) -> typing.List[auratones.voicing.ChordEntry]:

	entries: typing.List[auratones.voicing.ChordEntry] = []

	for recipe_id in auratones.recipes.RECIPE_ORDER:

		if settings.keyboard_max_symbols_per_root is not None and len(entries) >= settings.keyboard_max_symbols_per_root:
			break

		variants = auratones.keyboard.keyboard_voicings(
			root_pc,
			recipe_id,
			center=settings.keyboard_center,
			include_slash=settings.include_slash,
			root_label=root_label,
		)

		entries.append(auratones.voicing.ChordEntry(
			symbol=auratones.recipes.symbol_for(root_label, recipe_id),
			instrument="piano",
			variants=list(variants),
		))

	return entries


def generate_voicings_for_root (
	root_label: str,
	instrument: str = GUITAR,
	settings: typing.Optional[GeneratorSettings] = None
) -> typing.List[auratones.voicing.ChordEntry]:

	"""Generate every chord entry for one root.

	Parameters:
		root_label: Root name from the sharp or flat table (``"C"``, ``"F#"``, ``"Bb"``).
		instrument: ``"guitar"`` or ``"keyboard"`` (``"piano"`` is accepted too).
		settings: Generation limits; defaults to ``GeneratorSettings()``.

	Returns:
		Chord entries. Symbols with no playable voicing are omitted.

	Raises:
		UnknownLabelError: If ``root_label`` is not a note name.
		ValueError: If ``instrument`` is not supported.

	Example:
		```python
		entries = generate_voicings_for_root("C", "guitar")
		[entry.symbol for entry in entries][:3]  # → ['C', 'C/E', 'C/G']
		```
	"""

	if instrument not in _STORED_NAME:
		raise ValueError(f"Unsupported instrument: {instrument!r}. Expected 'guitar' or 'keyboard'.")

	settings = settings or GeneratorSettings()
	root_pc = auratones.pitches.pc_from_label(root_label)

	if instrument == GUITAR:
		entries = _guitar_entries(root_label, root_pc, settings)
	else:
		entries = _keyboard_entries(root_label, root_pc, settings)

	logger.info(f"{root_label} ({_STORED_NAME[instrument]}): {len(entries)} symbols, {sum(len(e.variants) for e in entries)} voicings")

	return entries


def generate_all (
	instrument: str = GUITAR,
	roots: typing.Optional[typing.Sequence[str]] = None,
	settings: typing.Optional[GeneratorSettings] = None
) -> typing.List[auratones.voicing.ChordEntry]:

	"""
	Generate entries for several roots (all twelve, sharp-spelled, by default).
	"""

	if roots is None:
		roots = auratones.pitches.SHARP_NAMES

	entries: typing.List[auratones.voicing.ChordEntry] = []

	for root in roots:
		entries.extend(generate_voicings_for_root(root, instrument, settings))

	return entries


def canonical_chords (
	pcs: typing.Optional[typing.Sequence[int]] = None,
	recipes: typing.Optional[typing.Sequence[str]] = None
) -> typing.List[typing.Dict[str, typing.Any]]:

	"""Return one canonical chord record per (root, recipe) pair.

	Records carry a storage-safe id (``"r1__6_9"`` for C#6/9), the root pitch
	class, the recipe id and intervals, and the default sharp-spelled symbol.

	Raises:
		ValueError: For a pitch class outside 0–11.
		UnknownRecipeError: For an unknown recipe.
	"""

	if pcs is None:
		pcs = range(12)

	if recipes is None:
		recipes = auratones.recipes.RECIPE_ORDER

	records: typing.List[typing.Dict[str, typing.Any]] = []

	for pc in pcs:

		if not 0 <= pc <= 11:
			raise ValueError(f"Invalid pitch class: {pc}")

		root_label = auratones.pitches.label_for(pc)

		for recipe_id in recipes:
			records.append({
				"id": f"r{pc}__{recipe_id.replace('/', '_')}",
				"pc": pc,
				"recipeId": recipe_id,
				"intervals": list(auratones.recipes.get_recipe(recipe_id)),
				"symbolDefault": auratones.recipes.symbol_for(root_label, recipe_id),
				"hasSlash": False,
			})

	return records


def document_id (instrument: str, symbol: str) -> str:

	"""Return the storage document id of a chord entry.

	Slashes become a double underscore so slash chords stay recognisable, any
	other character outside ``[A-Za-z0-9_.-]`` becomes an underscore.

	Example:
		```python
		document_id("guitar", "C#m7/G#")  # → "guitar__C_m7__G_"
		```
	"""

	safe = re.sub(r"[^\w\-.]+", "_", symbol.replace("/", "__"))

	return f"{instrument}__{safe}"
