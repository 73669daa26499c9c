"""Keyboard chord voicings.

Keyboard voicings are simpler than fretted ones: the chord is stacked in close
position, then laid out inside a two-octave window (24 keys) whose centre sits
as close as possible to a reference note. Slash variants re-base one chord tone
underneath the stack.

Example:
	```python
	from auratones.keyboard import keyboard_voicings

	variants = keyboard_voicings(0, "major", center=64)
	variants[0].keys  # [48, 52, 55, 67]
	variants[1].keys  # [52, 55, 60, 64, 67] - C/E
	```
"""

import typing

import auratones.pitches
import auratones.recipes
import auratones.voicing


WINDOW = 24

# E4
DEFAULT_CENTER = 64


def nearest_pitch (pc: int, around: int) -> int:

	"""Return the MIDI note of pitch class ``pc`` closest to ``around``.

	Searches one octave either side; on a tie the lower note wins.
	"""

	best = around
	best_distance: typing.Optional[int] = None

	for midi in range(around - 12, around + 13):

		if midi % 12 != auratones.pitches.normalize_pc(pc):
			continue

		distance = abs(midi - around)

		if best_distance is None or distance < best_distance:
			best = midi
			best_distance = distance

	return best


def next_pitch_at_least (pc: int, minimum: int) -> int:

	"""
	Return the lowest MIDI note of pitch class ``pc`` at or above ``minimum``.
	"""

	return minimum + auratones.pitches.normalize_pc(pc - minimum)


def build_closed_stack (root_pc: int, intervals: typing.Sequence[int], center: int = DEFAULT_CENTER) -> typing.List[int]:

	"""Stack the chord tones in close position, ascending.

	The stack starts an octave below the root nearest ``center``, each tone
	placed on the first matching key above the previous one. Three-note chords
	get the top note doubled an octave up to fill out the sound.

	Parameters:
		root_pc: Root pitch class.
		intervals: Recipe intervals (any order; they are sorted).
		center: Reference MIDI note.
	"""

	root_near = nearest_pitch(root_pc, center)
	notes: typing.List[int] = []

	for i, iv in enumerate(sorted(auratones.pitches.normalize_pc(x) for x in intervals)):
		previous = root_near - WINDOW if i == 0 else notes[-1]
		notes.append(next_pitch_at_least(root_pc + iv, previous + 1))

	if 0 < len(notes) <= 3:
		notes.append(notes[-1] + 12)

	return notes


def fit_two_octaves (keys: typing.Sequence[int], center: int = DEFAULT_CENTER) -> typing.Tuple[int, typing.List[int]]:

	"""Lay keys out in a 24-key window centred as near ``center`` as possible.

	If the keys span two octaves or more, the top key is folded down an octave
	until they fit. Window origins from 24 keys below the median up to the
	median are scored by the squared distance of the window centre to
	``center``; the first best origin wins.

	Returns:
		``(base_key, keys)`` with ``keys`` strictly ascending and
		``max(keys) - min(keys) < 24``.

	Raises:
		ValueError: If ``keys`` is empty.
	"""

	if not keys:
		raise ValueError("Cannot fit an empty key list")

	out = sorted(keys)

	while out[-1] - out[0] >= WINDOW:
		out[-1] -= 12
		out.sort()

	out = sorted(set(out))

	median = out[len(out) // 2]
	base = median - 12
	best_base = base
	best_score: typing.Optional[int] = None

	for candidate in range(base - 12, base + 13):

		if not (candidate <= out[0] and out[-1] <= candidate + WINDOW - 1):
			continue

		score = (candidate + 12 - center) ** 2

		if best_score is None or score < best_score:
			best_score = score
			best_base = candidate

	return best_base, out


def _nudge_collisions (keys: typing.List[int]) -> typing.List[int]:

	"""Raise any key within a semitone of the key below it by an octave.

	The first key is the bass and never moves.
	"""

	out = list(keys)

	for _ in range(len(out) * 2):
		clash = next((i for i in range(1, len(out)) if out[i] - out[i - 1] < 2), None)

		if clash is None:
			break

		out[clash] += 12
		out = out[:1] + sorted(set(out[1:]))

	return out


def _drop_clashing_doublings (keys: typing.Sequence[int]) -> typing.List[int]:

	"""Remove keys above the bass that sit within a semitone of a neighbour and double another key.

	Folding into the window can bring a nudged key back down next to its
	neighbour. Only doublings are removed, so every chord tone still sounds; a
	clash between two distinct chord tones (the 9th and minor 3rd of
	``m(add9)``) is part of the chord and stays.
	"""

	out = list(keys)

	while True:
		doubled = next((
			j
			for i in range(1, len(out)) if out[i] - out[i - 1] < 2
			for j in (i, i - 1)
			if j > 0 and sum(1 for key in out if key % 12 == out[j] % 12) > 1
		), None)

		if doubled is None:
			return out

		del out[doubled]


def keyboard_slash_variants (
	root_pc: int,
	intervals: typing.Sequence[int],
	keys: typing.Sequence[int],
	center: int = DEFAULT_CENTER,
	root_label: typing.Optional[str] = None
) -> typing.List[auratones.voicing.KeyboardVoicing]:

	"""Build slash-bass variants of a fitted keyboard voicing.

	Candidate basses are the minor 3rd, major 3rd and 5th when the chord has
	them, plus the b7 when it has one. The bass is taken a fifth or so below the
	stack's median, every other key is lifted above it, collisions are nudged up
	an octave and the result is fitted back into the window. Doubled tones the
	fold leaves within a semitone of a neighbour are then dropped.

	The bass label follows ``root_label``'s spelling when one is given.
	"""

	recipe_pcs = [auratones.pitches.normalize_pc(iv) for iv in intervals]
	targets = [iv for iv in (3, 4, 7, 10) if iv in recipe_pcs]

	median = list(keys)[len(keys) // 2]
	variants: typing.List[auratones.voicing.KeyboardVoicing] = []

	for iv in targets:
		target_pc = auratones.pitches.normalize_pc(root_pc + iv)
		bass = nearest_pitch(target_pc, median - 7)

		upper: typing.Set[int] = set()

		for key in keys:
			while key <= bass:
				key += 12
			upper.add(key)

		stacked = _nudge_collisions([bass] + sorted(upper))
		_, folded = fit_two_octaves(stacked, center)
		base_key, fitted = fit_two_octaves(_drop_clashing_doublings(folded), center)

		variants.append(auratones.voicing.KeyboardVoicing(
			base_key=base_key,
			keys=tuple(fitted),
			pcs=tuple(recipe_pcs),
			bass=fitted[0],
			bass_label=_bass_label(fitted[0], root_pc, root_label),
		))

	return variants


def _bass_label (bass: int, root_pc: int, root_label: typing.Optional[str]) -> str:

	if root_label is None:
		return auratones.pitches.label_for(bass)

	return auratones.pitches.spell_above(root_label, bass - root_pc)


def keyboard_voicings (
	root_pc: int,
	recipe_id: str,
	center: int = DEFAULT_CENTER,
	include_slash: bool = True,
	root_label: typing.Optional[str] = None
) -> typing.List[auratones.voicing.KeyboardVoicing]:

	"""Return the close-position voicing of a chord followed by its slash variants.

	Variants with an identical key sequence are collapsed, first one kept.
	``root_label`` sets the spelling of bass labels; without it they come from
	the sharp table.

	Raises:
		UnknownRecipeError: If ``recipe_id`` is not registered.
	"""

	intervals = auratones.recipes.get_recipe(recipe_id)
	base_key, keys = fit_two_octaves(build_closed_stack(root_pc, intervals, center), center)

	variants = [auratones.voicing.KeyboardVoicing(
		base_key=base_key,
		keys=tuple(keys),
		pcs=tuple(auratones.pitches.normalize_pc(iv) for iv in intervals),
		bass=keys[0],
		bass_label=_bass_label(keys[0], root_pc, root_label),
	)]

	if include_slash:
		variants.extend(keyboard_slash_variants(root_pc, intervals, keys, center, root_label))

	unique: typing.List[auratones.voicing.KeyboardVoicing] = []
	seen: typing.Set[typing.Tuple[int, ...]] = set()

	for variant in variants:
		if variant.keys in seen:
			continue
		seen.add(variant.keys)
		unique.append(variant)

	return unique
