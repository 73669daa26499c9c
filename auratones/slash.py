"""Slash-chord (inverted bass) variants of fretted voicings.

Given a validated voicing, a slash variant puts another chord tone in the bass by
muting every string below the lowest string that sounds that tone. The rule table
says which bass tones are conventional for which qualities:

- 3rd in the bass for major- and minor-family chords
- 5th in the bass for most qualities
- b7 in the bass for dominant and minor-7th families

A variant is kept only if the shortened voicing still contains the whole recipe,
really has the requested tone lowest, and is still playable.
"""

import dataclasses
import typing

import auratones.fretboard
import auratones.instruments
import auratones.pitches
import auratones.recipes
import auratones.voicing


@dataclasses.dataclass(frozen=True)
class SlashBassRule:

	"""
	Qualities that conventionally take a given interval in the bass.
	"""

	allow_for: typing.FrozenSet[str]
	bass_interval: str
	weight: int


SLASH_BASS_RULES: typing.Tuple[SlashBassRule, ...] = (

	# Third in the bass, major side
	SlashBassRule(
		allow_for=frozenset({
			"major", "6", "add9", "6/9", "7", "maj7", "9", "maj9", "11", "13",
			"sus2", "sus4", "sus4add9", "aug",
		}),
		bass_interval="3",
		weight=3,
	),

	# Third in the bass, minor side ("3" resolves to the b3 for these)
	SlashBassRule(
		allow_for=frozenset({"minor", "m6", "m_add9", "m7", "m9", "m11", "m13"}),
		bass_interval="3",
		weight=3,
	),

	# Fifth in the bass
	SlashBassRule(
		allow_for=frozenset({
			"major", "minor", "6", "m6", "add9", "m_add9", "6/9", "7", "maj7", "m7",
			"9", "maj9", "m9", "11", "m11", "13", "m13", "sus2", "sus4", "sus4add9",
			"dim", "dim7", "m7b5", "aug",
		}),
		bass_interval="5",
		weight=3,
	),

	# b7 in the bass, dominant families
	SlashBassRule(
		allow_for=frozenset({
			"7", "9", "11", "13", "7b9", "7#9", "9b5", "9#5", "13b9", "13#11", "7#11",
			"7b5", "7#5",
		}),
		bass_interval="b7",
		weight=2,
	),

	# b7 in the bass, minor-7th families
	SlashBassRule(
		allow_for=frozenset({"m7", "m9", "m11", "m13"}),
		bass_interval="b7",
		weight=2,
	),
)


def bass_interval_semitone (interval_text: str, intervals: typing.Sequence[int]) -> typing.Optional[int]:

	"""Resolve a bass-interval name against a recipe.

	``"3"`` means whichever third the chord has (major preferred), so the same
	rule serves major and minor qualities.

	Returns:
		Semitones above the root, or ``None`` if the name does not apply.

	Example:
		```python
		bass_interval_semitone("3", (0, 4, 7, 11))  # → 4
		bass_interval_semitone("3", (0, 3, 7))      # → 3
		bass_interval_semitone("3", (0, 5, 7))      # → None
		```
	"""

	if interval_text == "3":
		if 4 in intervals:
			return 4
		if 3 in intervals:
			return 3
		return None

	fixed = {"b3": 3, "5": 7, "b7": 10}

	return fixed.get(interval_text)


def bass_targets (quality_key: str, intervals: typing.Sequence[int]) -> typing.List[int]:

	"""
	Return the distinct bass intervals allowed for a quality, in rule order.
	"""

	targets: typing.List[int] = []

	for rule in SLASH_BASS_RULES:

		if quality_key not in rule.allow_for:
			continue

		iv = bass_interval_semitone(rule.bass_interval, intervals)

		if iv is not None and iv not in targets:
			targets.append(iv)

	return targets


def _clip_barres (barres: typing.Sequence[auratones.voicing.Barre], lowest: int) -> typing.Tuple[auratones.voicing.Barre, ...]:

	"""Trim barres so they start at the new bass string; drop any left with no strings."""

	clipped: typing.List[auratones.voicing.Barre] = []

	for barre in barres:
		if barre.high < lowest:
			continue
		clipped.append(auratones.voicing.Barre(fret=barre.fret, start=max(barre.low, lowest), end=barre.high, finger=barre.finger))

	return tuple(clipped)


def slash_variants (
	voicing: auratones.voicing.Voicing,
	root_pc: int,
	recipe_id: str,
	quality_key: typing.Optional[str] = None,
	instrument: auratones.instruments.Instrument = auratones.instruments.GUITAR,
	root_label: typing.Optional[str] = None
) -> typing.List[auratones.voicing.Voicing]:

	"""Derive slash-bass variants from a validated voicing.

	For each allowed bass interval, the physically lowest string already sounding
	that tone becomes the bass and every string below it is muted. Targets not
	sounded anywhere in the voicing are skipped.

	Parameters:
		voicing: A voicing that already passed theory and playability checks.
		root_pc: Chord root pitch class.
		recipe_id: Recipe the voicing realises.
		quality_key: Key used to look up the rule table (defaults to ``recipe_id``).
		root_label: Root name whose spelling the bass label follows. Without one
			the bass is named from the sharp table.

	Returns:
		Variants with ``bass_pc``, ``bass_label`` and ``bass_string`` set.
	"""

	intervals = auratones.recipes.get_recipe(recipe_id)
	quality_key = recipe_id if quality_key is None else quality_key

	per_string = [instrument.pitch_class_at(string, fret) for string, fret in enumerate(voicing.frets)]
	variants: typing.List[auratones.voicing.Voicing] = []

	for iv in bass_targets(quality_key, intervals):
		target_pc = auratones.pitches.normalize_pc(root_pc + iv)
		candidates = [string for string, pc in enumerate(per_string) if pc == target_pc]

		if not candidates:
			continue

		chosen = min(candidates)
		frets = tuple(auratones.instruments.MUTED if string < chosen else fret for string, fret in enumerate(voicing.frets))

		if not auratones.fretboard.matches_recipe(frets, intervals, root_pc, instrument):
			continue

		lowest = auratones.fretboard.bass_string(frets)

		if lowest is None or instrument.pitch_class_at(lowest, frets[lowest]) != target_pc:
			continue

		# Point the root marker at the lowest root left sounding.
		root_strings = [string for string in range(lowest, len(frets)) if per_string[string] == auratones.pitches.normalize_pc(root_pc)]
		root_string = root_strings[0] if root_strings else None

		if root_label is None:
			bass_label = auratones.pitches.label_for(target_pc)
		else:
			bass_label = auratones.pitches.spell_above(root_label, iv)

		variant = voicing.replace(
			frets=frets,
			barres=_clip_barres(voicing.barres, lowest),
			root_string=root_string,
			root_fret=frets[root_string] if root_string is not None else None,
			bass_pc=target_pc,
			bass_label=bass_label,
			bass_string=lowest,
		)

		if auratones.fretboard.check_playability(variant, instrument).ok:
			variants.append(variant)

	return variants
