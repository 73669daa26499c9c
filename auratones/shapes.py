"""Movable guitar shapes.

Each ``ShapePattern`` is a quality-agnostic fingering skeleton. Placing it at
barre position ``B`` adds ``B`` to every string offset; the string named by
``root_string`` then sounds the root whenever ``tuning[root_string] + B`` lands
on the root's pitch class.

The families follow the CAGED system:

- ``*_E``: root on the low E string, full barre
- ``*_A``: root on the A string, low E muted
- ``*_D_hi``: root on the D string, top-string triads
- ``*_comp*``: compact extended grips that drop the root or 5th to stay playable

``QUALITY_SHAPES`` lists, per recipe id, the shapes worth trying in order.

Example:
	```python
	shape = SHAPES["major_A"]
	shape.instantiate(3)  # → [-1, 3, 5, 5, 5, 3]  (C major, A-shape)
	```
"""

import dataclasses
import typing

import auratones.instruments
import auratones.recipes


# Muted string marker inside offset tables.
X = None

# Barre ranges as inclusive (low string, high string) index pairs.
BARRE_ALL = (0, 5)
BARRE_A = (1, 5)


@dataclasses.dataclass(frozen=True)
class ShapePattern:

	"""
	A movable fingering skeleton.

	Parameters:
		name: Registry key.
		root_string: Index of the string that carries the root at the barre position.
		offsets: Fret offset from the barre position per string, or ``None`` for a muted string.
		barre: Inclusive string range held down by the index finger, if the shape barres.
	"""

	name: str
	root_string: int
	offsets: typing.Tuple[typing.Optional[int], ...]
	barre: typing.Optional[typing.Tuple[int, int]] = None


	def instantiate (self, position: int) -> typing.List[int]:

		"""
		Return absolute frets for the shape placed at barre ``position``.
		"""

		return [auratones.instruments.MUTED if off is None else position + off for off in self.offsets]


@dataclasses.dataclass(frozen=True)
class QualityShapes:

	"""
	Candidate shapes and display suffix for one recipe.
	"""

	shapes: typing.Tuple[str, ...]
	suffix: str


def _shape (name: str, root_string: int, offsets: typing.Sequence[typing.Optional[int]], barre: typing.Optional[typing.Tuple[int, int]] = None) -> ShapePattern:

	return ShapePattern(name=name, root_string=root_string, offsets=tuple(offsets), barre=barre)


_SHAPE_LIST: typing.List[ShapePattern] = [

	# Major / minor (E, A)
	_shape("major_E", 0, [0, 2, 2, 1, 0, 0], BARRE_ALL),
	_shape("major_A", 1, [X, 0, 2, 2, 2, 0], BARRE_A),
	_shape("minor_E", 0, [0, 2, 2, 0, 0, 0], BARRE_ALL),
	_shape("minor_A", 1, [X, 0, 2, 2, 1, 0], BARRE_A),

	# Sevenths (E, A)
	_shape("dom7_E", 0, [0, 2, 0, 1, 0, 2], BARRE_ALL),
	_shape("dom7_A", 1, [X, 0, 2, 0, 2, 0], BARRE_A),
	_shape("maj7_E", 0, [0, 2, 1, 1, 0, 0], BARRE_ALL),
	_shape("maj7_A", 1, [X, 0, 2, 1, 2, 0], BARRE_A),
	_shape("m7_E", 0, [0, 2, 0, 0, 0, 0], BARRE_ALL),
	_shape("m7_A", 1, [X, 0, 2, 0, 1, 0], BARRE_A),

	# m7b5 / dim7
	_shape("m7b5_A", 1, [X, 0, 1, 0, 1, 0], (1, 4)),
	_shape("dim7_A", 1, [X, 0, 1, -1, 1, X]),

	# 6 / m6, sus, add9 (E-like)
	_shape("six_E", 0, [0, 2, 2, 1, 2, 0], BARRE_ALL),
	_shape("six_A", 1, [X, 0, 2, 2, 2, 2]),
	_shape("m6_E", 0, [0, 2, 2, 0, 2, 0], BARRE_ALL),
	_shape("sus4_E", 0, [0, 2, 2, 2, 0, 0], BARRE_ALL),
	_shape("sus2_E", 0, [0, 2, 2, -1, 0, 0], BARRE_ALL),
	_shape("add9_E", 0, [0, 2, 4, 1, 0, 0], BARRE_ALL),
	_shape("madd9_E", 0, [0, 2, 4, 0, 0, 0], BARRE_ALL),
	_shape("madd9_A", 1, [X, 0, 2, 4, 1, 0]),

	# Altered dominants (compact, root on A)
	_shape("dom7b9_A", 1, [X, 0, -1, 0, -1, X]),
	_shape("dom7#9_A", 1, [X, 0, -1, 0, 1, X]),
	_shape("dom7b5_A", 1, [X, 0, 1, 0, 2, X]),
	_shape("dom7#5_A", 1, [X, 0, X, 0, 2, 1]),
	_shape("dom9b5_A", 1, [X, 0, -1, 0, 0, -1]),
	_shape("dom9#5_A", 1, [X, 0, -1, 0, 0, 1]),
	_shape("dom13b9_A", 1, [X, 0, -1, 0, -1, 2]),
	_shape("dom13#11_A", 1, [X, 0, 1, 0, 2, 2]),
	_shape("dom7#11_A", 1, [X, 0, 1, 0, 2, 0]),

	# 9ths
	_shape("dom9_A_comp1", 1, [X, 0, -1, 0, 0, X]),
	_shape("dom9_E_comp1", 0, [0, X, 0, 1, 0, 2]),
	_shape("m9_A_comp1", 1, [X, 0, -2, 0, 0, X]),
	_shape("m9_E_comp1", 0, [0, X, 0, 0, 0, 2]),
	_shape("maj9_A_comp1", 1, [X, 0, -1, 1, 0, X]),
	_shape("maj9_E_comp1", 0, [0, X, 1, 1, 0, 2]),
	_shape("dom9_A_comp2", 1, [X, 0, -1, 0, 0, 0]),
	_shape("dom9_E_comp2", 0, [0, X, 0, 1, 3, 2]),
	_shape("m9_A_comp2", 1, [X, 0, -2, 0, 0, 0]),
	_shape("m9_E_comp2", 0, [0, 2, 0, 0, 0, 2]),
	_shape("maj9_A_comp2", 1, [X, 0, -1, 1, 0, 0]),
	_shape("maj9_E_comp2", 0, [0, 2, 1, 1, 0, 2]),

	# 11ths
	_shape("dom11_A_comp1", 1, [X, 0, 0, 0, 2, X]),
	_shape("dom11_E_comp1", 0, [0, 0, 0, 1, 0, X]),
	_shape("dom11_A_comp2", 1, [X, 0, 0, 0, 2, 0]),
	_shape("dom11_E_comp2", 0, [0, 0, 0, 1, 0, 0]),
	_shape("m11_A_comp1", 1, [X, 0, 0, 0, 1, X]),
	_shape("m11_E_comp1", 0, [0, 0, 0, 0, 0, X]),
	_shape("sus4add9_E_alt", 0, [0, 2, 2, 2, 0, 2], BARRE_ALL),

	# 13ths
	_shape("dom13_A_comp1", 1, [X, 0, -1, 0, X, 2]),
	_shape("dom13_A_comp2", 1, [X, 0, -1, 0, 2, 2]),
	_shape("dom13_A_comp3", 1, [X, 0, X, 0, 2, 2]),
	_shape("dom13_E_comp1", 0, [0, 2, 0, 1, 2, X]),
	_shape("dom13_E_comp2", 0, [0, 2, 0, 1, 2, 0]),
	_shape("dom13_9_A", 1, [X, 0, -1, 0, 0, 2]),
	_shape("m13_A_comp1", 1, [X, 0, X, 0, 1, 2]),
	_shape("m13_E_comp1", 0, [0, 2, 0, 0, 2, X]),
	_shape("m13_A_comp2", 1, [X, 0, -2, 0, X, 2]),
	_shape("m13_E_comp2", 0, [0, 2, 0, 0, 2, 0]),

	# D-shape triads on the top strings
	_shape("triad_D_hi", 2, [X, X, 0, 2, 3, 2]),
	_shape("mtriad_D_hi", 2, [X, X, 0, 2, 3, 1]),
	_shape("aug_D_hi", 2, [X, X, 0, 3, 3, 2]),
	_shape("aug_A", 1, [X, 0, -1, -2, -2, X]),
	_shape("dim_D_hi", 2, [X, X, 0, 1, 3, 1]),

	# add9 / 6/9
	_shape("add9_A_comp", 1, [X, 0, -1, 2, 0, 0]),
	_shape("add9_D_hi", 2, [X, X, 0, 2, 5, 2]),
	_shape("sixnine_E", 0, [0, 2, 2, 1, 2, 2], BARRE_ALL),
	_shape("maj69_A", 1, [X, 0, -1, -1, 0, 0]),

	# More dominant colours
	_shape("7b9_E", 0, [0, 2, 0, 1, 0, 1]),
	_shape("7#9_E", 0, [0, X, 0, 1, X, 3]),
	_shape("7b13_A", 1, [X, 0, -1, 0, X, 1]),
	_shape("7sus4_A", 1, [X, 0, 2, 0, 3, 0]),
	_shape("7sus4add9_A", 1, [X, 0, 0, 0, 0, X]),

	# sus2 / sus4 on the A string
	_shape("sus2_A_comp", 1, [X, 0, 2, 2, 0, 0]),
	_shape("sus4_A_comp", 1, [X, 0, 2, 2, 3, 0]),
]

SHAPES: typing.Dict[str, ShapePattern] = {shape.name: shape for shape in _SHAPE_LIST}


def _quality (*shape_names: str, recipe_id: str) -> QualityShapes:

	return QualityShapes(shapes=shape_names, suffix=auratones.recipes.RECIPE_SUFFIX[recipe_id])


QUALITY_SHAPES: typing.Dict[str, QualityShapes] = {

	# Triads and simple colours
	"major": _quality("major_E", "major_A", "triad_D_hi", recipe_id="major"),
	"minor": _quality("minor_E", "minor_A", "mtriad_D_hi", recipe_id="minor"),
	"dim": _quality("m7b5_A", "dim_D_hi", recipe_id="dim"),
	"aug": _quality("aug_A", "aug_D_hi", recipe_id="aug"),
	"6": _quality("six_E", "six_A", recipe_id="6"),
	"m6": _quality("m6_E", recipe_id="m6"),
	"add9": _quality("add9_E", "add9_A_comp", "add9_D_hi", recipe_id="add9"),
	"m_add9": _quality("madd9_E", "madd9_A", recipe_id="m_add9"),
	"6/9": _quality("sixnine_E", "maj69_A", recipe_id="6/9"),
	"sus2": _quality("sus2_E", "sus2_A_comp", recipe_id="sus2"),
	"sus4": _quality("sus4_E", "sus4_A_comp", recipe_id="sus4"),
	"sus4add9": _quality("sus4add9_E_alt", "7sus4add9_A", recipe_id="sus4add9"),

	# Sevenths
	"7": _quality("dom7_E", "dom7_A", recipe_id="7"),
	"maj7": _quality("maj7_E", "maj7_A", recipe_id="maj7"),
	"m7": _quality("m7_E", "m7_A", recipe_id="m7"),
	"m7b5": _quality("m7b5_A", recipe_id="m7b5"),
	"dim7": _quality("dim7_A", recipe_id="dim7"),
	"7sus4": _quality("7sus4_A", recipe_id="7sus4"),

	# 9ths
	"9": _quality("dom9_A_comp1", "dom9_E_comp1", "dom9_A_comp2", "dom9_E_comp2", recipe_id="9"),
	"m9": _quality("m9_A_comp1", "m9_E_comp1", "m9_A_comp2", "m9_E_comp2", recipe_id="m9"),
	"maj9": _quality("maj9_A_comp1", "maj9_E_comp1", "maj9_A_comp2", "maj9_E_comp2", recipe_id="maj9"),

	# 11ths
	"11": _quality("dom11_A_comp1", "dom11_E_comp1", "dom11_A_comp2", "dom11_E_comp2", recipe_id="11"),
	"m11": _quality("m11_A_comp1", "m11_E_comp1", recipe_id="m11"),

	# 13ths
	"13": _quality(
		"dom13_A_comp1", "dom13_A_comp2", "dom13_A_comp3",
		"dom13_E_comp1", "dom13_E_comp2", "dom13_9_A", recipe_id="13"
	),
	"m13": _quality("m13_A_comp1", "m13_E_comp1", "m13_A_comp2", "m13_E_comp2", recipe_id="m13"),

	# Altered dominants
	"7b9": _quality("dom7b9_A", "7b9_E", recipe_id="7b9"),
	"7#9": _quality("dom7#9_A", "7#9_E", recipe_id="7#9"),
	"7b5": _quality("dom7b5_A", recipe_id="7b5"),
	"7#5": _quality("dom7#5_A", recipe_id="7#5"),
	"9b5": _quality("dom9b5_A", recipe_id="9b5"),
	"9#5": _quality("dom9#5_A", recipe_id="9#5"),
	"13b9": _quality("dom13b9_A", recipe_id="13b9"),
	"13#11": _quality("dom13#11_A", recipe_id="13#11"),
	"7#11": _quality("dom7#11_A", recipe_id="7#11"),
	"7b13": _quality("7b13_A", recipe_id="7b13"),
}


def get_shape (name: str) -> ShapePattern:

	"""
	Return a registered shape by name.
	"""

	if name not in SHAPES:
		raise ValueError(f"Unknown shape: {name!r}")

	return SHAPES[name]


def shapes_for (recipe_id: str) -> typing.List[ShapePattern]:

	"""Return the candidate shapes for a recipe, in trial order.

	A known recipe without registered grips yields an empty list rather than
	an error.
	"""

	auratones.recipes.get_recipe(recipe_id)

	if recipe_id not in QUALITY_SHAPES:
		return []

	return [get_shape(name) for name in QUALITY_SHAPES[recipe_id].shapes]
