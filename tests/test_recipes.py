import pytest

import auratones.pitches
import auratones.recipes
import auratones.symbols


def test_every_recipe_has_root_and_valid_intervals () -> None:

	"""Intervals are pitch classes, unique within a recipe, and include the root."""

	for recipe_id, intervals in auratones.recipes.CHORD_RECIPES.items():
		assert 0 in intervals, recipe_id
		assert all(0 <= iv <= 11 for iv in intervals), recipe_id
		assert len(set(intervals)) == len(intervals), recipe_id


def test_every_recipe_has_a_suffix () -> None:

	"""Symbols can be built for every recipe in iteration order."""

	assert set(auratones.recipes.RECIPE_SUFFIX) == set(auratones.recipes.CHORD_RECIPES)
	assert auratones.recipes.RECIPE_ORDER[0] == "major"


def test_get_recipe_known_and_unknown () -> None:

	"""Lookup returns the stored tuple; a miss raises UnknownRecipeError."""

	assert auratones.recipes.get_recipe("m7b5") == (0, 3, 6, 10)
	assert auratones.recipes.get_recipe("13#11") == (0, 4, 10, 6, 9)

	with pytest.raises(auratones.recipes.UnknownRecipeError):
		auratones.recipes.get_recipe("maj13")


def test_chord_tones_transposes () -> None:

	"""Chord tones are the intervals shifted by the root, folded into the octave."""

	assert auratones.recipes.chord_tones(9, "m7") == frozenset({9, 0, 4, 7})


def test_symbol_for () -> None:

	"""Symbols join root, suffix and optional bass."""

	assert auratones.recipes.symbol_for("C", "major") == "C"
	assert auratones.recipes.symbol_for("A", "m7", "G") == "Am7/G"
	assert auratones.recipes.symbol_for("D", "m_add9") == "Dm(add9)"
	assert auratones.recipes.symbol_for("C", "6/9") == "C6/9"


# ─── Parsing ───


def test_parse_plain_symbols () -> None:

	"""Root spelling and quality suffix are both resolved."""

	parsed = auratones.symbols.parse_symbol("Dbm7b5")

	assert parsed.root_pc == 1
	assert parsed.recipe_id == "m7b5"
	assert parsed.bass_pc is None

	assert auratones.symbols.parse_symbol("C#maj7").recipe_id == "maj7"
	assert auratones.symbols.parse_symbol("G").recipe_id == "major"


def test_parse_slash_symbol () -> None:

	"""A trailing note name after a slash is the bass."""

	parsed = auratones.symbols.parse_symbol("Am7/G")

	assert parsed.root_pc == 9
	assert parsed.recipe_id == "m7"
	assert parsed.bass_pc == 7


def test_parse_six_nine_is_not_a_slash_chord () -> None:

	"""The slash inside 6/9 belongs to the quality."""

	assert auratones.symbols.parse_symbol("C6/9") == auratones.symbols.ParsedSymbol(root_pc=0, recipe_id="6/9")
	assert auratones.symbols.parse_symbol("C6/9/E").bass_pc == 4


def test_parse_aliases () -> None:

	"""Common alternative spellings map to recipe ids."""

	assert auratones.symbols.parse_symbol("Cmin7").recipe_id == "m7"
	assert auratones.symbols.parse_symbol("Bø").recipe_id == "m7b5"
	assert auratones.symbols.parse_symbol("F°7").recipe_id == "dim7"
	assert auratones.symbols.parse_symbol("EΔ7").recipe_id == "maj7"


def test_symbols_round_trip_through_parser () -> None:

	"""Every generated symbol parses back to its recipe."""

	for recipe_id in auratones.recipes.RECIPE_ORDER:
		symbol = auratones.recipes.symbol_for("F#", recipe_id)
		parsed = auratones.symbols.parse_symbol(symbol)

		assert parsed.root_pc == 6
		assert parsed.recipe_id == recipe_id


def test_parse_errors () -> None:

	"""Unknown roots and qualities raise the matching errors."""

	with pytest.raises(auratones.pitches.UnknownLabelError):
		auratones.symbols.parse_symbol("H7")

	with pytest.raises(auratones.recipes.UnknownRecipeError):
		auratones.symbols.parse_symbol("Cwhatever")
