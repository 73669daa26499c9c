"""Fretted voicing enumeration.

For a root and a recipe, every candidate shape is placed at every barre position
that puts the root on the shape's root string. Each placement is then checked:

- **Theory**: the sounding pitch classes contain every chord tone of the recipe
  (a superset test, so doubled or extra tones are allowed).
- **Playability**: at least three stopped notes, nothing above the instrument's
  highest usable fret, a stretch of at most five frets, and every barre holding
  down at least three strings.

The search space is a handful of shapes times at most two positions each, so it
is walked exhaustively. Placements that fail either check are simply dropped;
that is the normal outcome for most of them, not an error.
"""

import dataclasses
import logging
import typing

import auratones.instruments
import auratones.pitches
import auratones.recipes
import auratones.shapes
import auratones.voicing


logger = logging.getLogger(__name__)

SPAN_LIMIT = 5
MIN_FRETTED = 3
MIN_BARRE_STRINGS = 3


@dataclasses.dataclass(frozen=True)
class Playability:

	"""
	Result of a playability check with the reasons for any failure.
	"""

	ok: bool
	reasons: typing.Tuple[str, ...] = ()


def sounding_pitch_classes (frets: typing.Sequence[int], instrument: auratones.instruments.Instrument = auratones.instruments.GUITAR) -> typing.Set[int]:

	"""
	Return the set of pitch classes sounded by the non-muted strings.
	"""

	pcs: typing.Set[int] = set()

	for string, fret in enumerate(frets):
		pc = instrument.pitch_class_at(string, fret)
		if pc is not None:
			pcs.add(pc)

	return pcs


def matches_recipe (
	frets: typing.Sequence[int],
	intervals: typing.Iterable[int],
	root_pc: int,
	instrument: auratones.instruments.Instrument = auratones.instruments.GUITAR
) -> bool:

	"""Check that a fret assignment sounds every tone of a chord.

	Parameters:
		frets: Absolute fret per string.
		intervals: Recipe intervals above the root.
		root_pc: Root pitch class.

	Example:
		```python
		# Open C major: x 3 2 0 1 0
		matches_recipe([-1, 3, 2, 0, 1, 0], [0, 4, 7], 0)  # → True
		```
	"""

	pcs = sounding_pitch_classes(frets, instrument)

	return all(auratones.pitches.normalize_pc(root_pc + iv) in pcs for iv in intervals)


def bass_string (frets: typing.Sequence[int]) -> typing.Optional[int]:

	"""
	Return the index of the lowest-pitched sounding string, or ``None`` if all are muted.
	"""

	for string, fret in enumerate(frets):
		if auratones.instruments.fret_state(fret) is not auratones.instruments.FretState.MUTED:
			return string

	return None


def bass_pitch_class (frets: typing.Sequence[int], instrument: auratones.instruments.Instrument = auratones.instruments.GUITAR) -> typing.Optional[int]:

	"""
	Return the pitch class of the lowest sounding string.
	"""

	string = bass_string(frets)

	if string is None:
		return None

	return instrument.pitch_class_at(string, frets[string])


def check_playability (voicing: auratones.voicing.Voicing, instrument: auratones.instruments.Instrument = auratones.instruments.GUITAR) -> Playability:

	"""Check the ergonomic limits of a voicing.

	A barre counts the strings in its range that sound at or above the barre
	fret, since a higher stopped note on a barred string still needs the barre
	underneath it.

	Returns:
		``Playability`` with ``ok`` set and the list of failed rules, if any.
	"""

	reasons: typing.List[str] = []
	stopped = auratones.instruments.fretted(voicing.frets)

	if len(stopped) < MIN_FRETTED:
		reasons.append("Too few fretted notes")

	if stopped:
		low = min(stopped)
		high = max(stopped)

		if high > instrument.max_fret:
			reasons.append(f"Too high fret (> {instrument.max_fret})")

		if high - low > SPAN_LIMIT:
			reasons.append(f"Span > {SPAN_LIMIT}")

	for barre in voicing.barres:
		held = sum(
			1 for string, fret in enumerate(voicing.frets)
			if barre.covers(string) and fret >= barre.fret
		)

		if held < MIN_BARRE_STRINGS:
			reasons.append("Barre not meaningful")

	return Playability(ok=not reasons, reasons=tuple(reasons))


def barre_positions (
	root_pc: int,
	pattern: auratones.shapes.ShapePattern,
	instrument: auratones.instruments.Instrument = auratones.instruments.GUITAR
) -> typing.List[int]:

	"""Return every barre position that puts the root on the shape's root string.

	Positions repeat every 12 frets. Position 0 is excluded: open-position chords
	are not produced by sliding a movable shape.

	Example:
		```python
		# A-shape, root on the A string (pc 9): C (pc 0) sits at fret 3 and 15
		barre_positions(0, SHAPES["major_A"])  # → [3, 15]
		```
	"""

	base = auratones.pitches.normalize_pc(root_pc - instrument.tuning[pattern.root_string])

	return [position for position in range(base, instrument.max_fret + 1, 12) if position >= 1]


def try_shape (
	root_pc: int,
	intervals: typing.Sequence[int],
	pattern: auratones.shapes.ShapePattern,
	position: int,
	instrument: auratones.instruments.Instrument = auratones.instruments.GUITAR
) -> typing.Optional[auratones.voicing.Voicing]:

	"""Place a shape at a barre position and validate the result.

	Returns:
		The voicing, or ``None`` if the placement fails theory or playability.
	"""

	# A negative offset at a low position would run off the nut. Checked on the
	# offsets, since a fret of -1 would otherwise read as a muted string.
	if any(off is not None and position + off < 0 for off in pattern.offsets):
		return None

	frets = pattern.instantiate(position)

	if not matches_recipe(frets, intervals, root_pc, instrument):
		return None

	stopped = auratones.instruments.fretted(frets)
	barres: typing.Tuple[auratones.voicing.Barre, ...] = ()

	if pattern.barre is not None:
		barres = (auratones.voicing.Barre(fret=position, start=pattern.barre[0], end=pattern.barre[1], finger=1),)

	voicing = auratones.voicing.Voicing(
		base_fret=max(1, min(stopped + [position])),
		frets=tuple(frets),
		barres=barres,
		root_string=pattern.root_string,
		root_fret=position,
	)

	if not check_playability(voicing, instrument).ok:
		return None

	return voicing


def enumerate_voicings (
	root_pc: int,
	recipe_id: str,
	instrument: auratones.instruments.Instrument = auratones.instruments.GUITAR
) -> typing.List[auratones.voicing.Voicing]:

	"""Return every valid shape placement for a chord, in shape then position order.

	Parameters:
		root_pc: Root pitch class (0–11).
		recipe_id: Key of ``CHORD_RECIPES``.

	Returns:
		Validated voicings. May be empty when no registered shape fits the
		fret limits for this root.

	Raises:
		UnknownRecipeError: If ``recipe_id`` is not registered.

	Example:
		```python
		voicings = enumerate_voicings(0, "m7b5")
		voicings[0].frets  # → (-1, 3, 4, 3, 4, 3)
		```
	"""

	intervals = auratones.recipes.get_recipe(recipe_id)
	found: typing.List[auratones.voicing.Voicing] = []
	tried = 0

	for pattern in auratones.shapes.shapes_for(recipe_id):
		for position in barre_positions(root_pc, pattern, instrument):
			tried += 1
			voicing = try_shape(root_pc, intervals, pattern, position, instrument)

			if voicing is not None:
				found.append(voicing)

	logger.debug(f"{recipe_id} on pc {root_pc}: {len(found)} of {tried} placements kept")

	return found
