"""Transposing a submitted voicing to every other root.

When a player adds a movable voicing for one root, the same hand shape slid up
or down the neck gives the chord for the other eleven roots. A voicing is
movable when it uses no genuinely open strings: an open string sounds the same
pitch wherever the hand goes, so the chord would change quality. Open strings
that lie under a barre are read as held by the barre.

For each target root the shape moves by the smaller of the two octave-equivalent
offsets (up or down) that keeps its lowest stopped fret between 1 and 11. Roots
that fit neither way are skipped.
"""

import logging
import typing

import auratones.instruments
import auratones.pitches
import auratones.recipes
import auratones.voicing


logger = logging.getLogger(__name__)

MIN_TARGET_FRET = 1
MAX_TARGET_FRET = 11


def is_movable (voicing: auratones.voicing.Voicing) -> bool:

	"""
	Return ``True`` unless an open string lies outside every barre.
	"""

	for string, fret in enumerate(voicing.frets):
		if fret == auratones.instruments.OPEN and not any(barre.covers(string) for barre in voicing.barres):
			return False

	return True


def _resolve_barred_open_strings (voicing: auratones.voicing.Voicing) -> typing.Tuple[int, ...]:

	"""Replace open strings under a barre with the barre's fret."""

	frets = list(voicing.frets)

	for string, fret in enumerate(frets):
		if fret != auratones.instruments.OPEN:
			continue

		covering = [barre.fret for barre in voicing.barres if barre.covers(string)]

		if covering:
			frets[string] = min(covering)

	return tuple(frets)


def choose_offset (frets: typing.Sequence[int], source_pc: int, target_pc: int) -> typing.Optional[int]:

	"""Pick the semitone offset that moves a shape from one root to another.

	Both the upward offset (0–11) and its downward octave equivalent are tried.
	An offset is valid when the lowest stopped fret lands within 1–11. The
	smaller absolute offset wins; on a tie (a tritone) the one with the lower
	resulting fret wins.

	Returns:
		The offset, or ``None`` if neither direction keeps the shape in range.

	Example:
		```python
		# A-shape C major (x 3 5 5 5 3) to D: up 2 is fine
		choose_offset([-1, 3, 5, 5, 5, 3], 0, 2)   # → 2
		# ... to A: up 9 lands on fret 12, down 3 lands on fret 0 - neither fits
		choose_offset([-1, 3, 5, 5, 5, 3], 0, 9)   # → None
		```
	"""

	stopped = auratones.instruments.fretted(frets)

	if not stopped:
		return None

	up = auratones.pitches.normalize_pc(target_pc - source_pc)
	low = min(stopped)

	valid = [
		(abs(offset), low + offset, offset)
		for offset in (up, up - 12)
		if MIN_TARGET_FRET <= low + offset <= MAX_TARGET_FRET
	]

	if not valid:
		return None

	return min(valid)[2]


def transpose_voicing (voicing: auratones.voicing.Voicing, offset: int, prefer_flat: bool = False) -> auratones.voicing.Voicing:

	"""Shift every stopped fret, barre and root marker by ``offset`` semitones.

	Muted strings stay muted; open strings under a barre move with the barre.
	The caller is responsible for choosing an offset that stays on the neck.
	"""

	frets = tuple(
		f + offset if auratones.instruments.fret_state(f) is auratones.instruments.FretState.FRETTED else f
		for f in _resolve_barred_open_strings(voicing)
	)

	stopped = auratones.instruments.fretted(frets)

	bass_pc = voicing.bass_pc
	bass_label = voicing.bass_label

	if bass_pc is not None:
		bass_pc = auratones.pitches.normalize_pc(bass_pc + offset)
		bass_label = auratones.pitches.label_for(bass_pc, prefer_flat=prefer_flat)

	return voicing.replace(
		base_fret=max(1, min(stopped)) if stopped else voicing.base_fret,
		frets=frets,
		barres=tuple(
			auratones.voicing.Barre(fret=barre.fret + offset, start=barre.start, end=barre.end, finger=barre.finger)
			for barre in voicing.barres
		),
		root_fret=voicing.root_fret + offset if voicing.root_fret is not None else None,
		bass_pc=bass_pc,
		bass_label=bass_label,
	)


def compute_transpositions (
	voicing: auratones.voicing.Voicing,
	source_root: str,
	target_roots: typing.Optional[typing.Sequence[str]] = None,
	recipe_id: str = "major"
) -> typing.Dict[str, typing.List[auratones.voicing.Voicing]]:

	"""Generate the same movable shape for other roots.

	Parameters:
		voicing: The submitted voicing, played with root ``source_root``.
		source_root: Root name of the submitted voicing.
		target_roots: Root names to generate for; defaults to the other eleven
			roots in sharp spelling.
		recipe_id: Recipe of the submitted voicing, used to name the results.

	Returns:
		Target chord symbol → voicings. Slash voicings keep a slash bass, moved
		with the shape. Non-movable voicings yield an empty mapping.

	Raises:
		UnknownLabelError: For an unknown root name.
		UnknownRecipeError: For an unknown recipe.

	Example:
		```python
		c_major = Voicing(base_fret=3, frets=(-1, 3, 5, 5, 5, 3))
		result = compute_transpositions(c_major, "C", ["D", "Bb"])
		result["D"][0].frets   # → (-1, 5, 7, 7, 7, 5)
		result["Bb"][0].frets  # → (-1, 1, 3, 3, 3, 1)
		```
	"""

	auratones.recipes.get_recipe(recipe_id)
	source_pc = auratones.pitches.normalize_root(source_root)

	if target_roots is None:
		target_roots = [name for name in auratones.pitches.SHARP_NAMES if auratones.pitches.pc_from_label(name) != source_pc]

	if not is_movable(voicing):
		logger.info(f"Voicing {list(voicing.frets)} uses open strings; not transposing")
		return {}

	resolved = _resolve_barred_open_strings(voicing)
	result: typing.Dict[str, typing.List[auratones.voicing.Voicing]] = {}

	for target in target_roots:
		target_pc = auratones.pitches.normalize_root(target)

		if target_pc == source_pc:
			continue

		offset = choose_offset(resolved, source_pc, target_pc)

		if offset is None:
			logger.debug(f"No in-range position for {target}; skipped")
			continue

		moved = transpose_voicing(voicing, offset, prefer_flat="b" in target[1:])
		symbol = auratones.recipes.symbol_for(target, recipe_id, moved.bass_label if moved.is_slash else None)

		result.setdefault(symbol, []).append(moved)

	return result
