import pytest

import auratones.keyboard
import auratones.recipes


def test_nearest_pitch_prefers_lower_on_tie () -> None:

	"""The closest note of a pitch class wins; a tritone tie goes down."""

	assert auratones.keyboard.nearest_pitch(0, 64) == 60
	assert auratones.keyboard.nearest_pitch(4, 64) == 64
	assert auratones.keyboard.nearest_pitch(10, 64) == 58


def test_next_pitch_at_least () -> None:

	"""The search includes the minimum itself."""

	assert auratones.keyboard.next_pitch_at_least(0, 37) == 48
	assert auratones.keyboard.next_pitch_at_least(4, 52) == 52


def test_closed_stack_doubles_triad_top () -> None:

	"""Triads gain an octave doubling of their top note."""

	assert auratones.keyboard.build_closed_stack(0, (0, 4, 7), 64) == [48, 52, 55, 67]
	assert auratones.keyboard.build_closed_stack(0, (0, 4, 7, 11), 64) == [48, 52, 55, 59]


def test_fit_two_octaves_centres_window () -> None:

	"""The window is the admissible origin closest to the centre."""

	assert auratones.keyboard.fit_two_octaves([48, 52, 55, 67], 64) == (48, [48, 52, 55, 67])


def test_fit_two_octaves_folds_wide_chords () -> None:

	"""Keys two octaves apart or more are folded down and deduplicated."""

	base, keys = auratones.keyboard.fit_two_octaves([43, 48, 52, 55, 67], 64)

	assert keys == [43, 48, 52, 55]
	assert base == 43

	with pytest.raises(ValueError):
		auratones.keyboard.fit_two_octaves([], 64)


def test_c_major_at_e4 () -> None:

	"""C major around E4: close triad plus doubling, then C/E and C/G."""

	variants = auratones.keyboard.keyboard_voicings(0, "major", center=64)

	assert [v.keys for v in variants] == [
		(48, 52, 55, 67),
		(52, 55, 60, 64, 67),
		(43, 48, 52, 55),
	]

	assert [v.bass_label for v in variants] == ["C", "E", "G"]
	assert variants[0].base_key == 48
	assert variants[0].pcs == (0, 4, 7)


def test_without_slash () -> None:

	"""Only the root-position voicing is returned."""

	assert len(auratones.keyboard.keyboard_voicings(0, "major", include_slash=False)) == 1


@pytest.mark.parametrize("center", [48, 60, 64, 72])
def test_every_keyboard_voicing_fits_window (center: int) -> None:

	"""Keys ascend strictly, stay inside the window, sound the chord and put the bass lowest."""

	for root_pc in range(12):
		for recipe_id in auratones.recipes.RECIPE_ORDER:
			tones = auratones.recipes.chord_tones(root_pc, recipe_id)

			for variant in auratones.keyboard.keyboard_voicings(root_pc, recipe_id, center=center):
				keys = list(variant.keys)

				assert keys == sorted(set(keys))
				assert keys[-1] - keys[0] < auratones.keyboard.WINDOW
				assert variant.base_key <= keys[0]
				assert keys[-1] <= variant.base_key + auratones.keyboard.WINDOW - 1
				assert {k % 12 for k in keys} == tones
				assert variant.bass == keys[0]


def test_unknown_recipe () -> None:

	"""Unknown recipes raise rather than produce nothing."""

	with pytest.raises(auratones.recipes.UnknownRecipeError):
		auratones.keyboard.keyboard_voicings(0, "nope")


def test_folded_slash_drops_clashing_doubling () -> None:

	"""Cm(add9)/Eb around C3: the doubled Eb folded next to the D is removed."""

	variants = auratones.keyboard.keyboard_voicings(0, "m_add9", center=48)

	assert variants[0].keys == (36, 38, 39, 43)
	assert variants[1].keys == (27, 36, 38, 43)
	assert variants[1].bass == 27


@pytest.mark.parametrize("center", [48, 60, 64, 72])
def test_no_doubled_key_sits_a_semitone_from_a_neighbour (center: int) -> None:

	"""Keys closer than a whole tone are always distinct chord tones sounded once."""

	for root_pc in range(12):
		for recipe_id in auratones.recipes.RECIPE_ORDER:
			for variant in auratones.keyboard.keyboard_voicings(root_pc, recipe_id, center=center):
				keys = list(variant.keys)
				counts = {pc: sum(1 for k in keys if k % 12 == pc) for pc in {k % 12 for k in keys}}

				for i in range(1, len(keys)):
					if keys[i] - keys[i - 1] >= 2:
						continue

					assert counts[keys[i] % 12] == 1, variant.keys

					if i > 1:
						assert counts[keys[i - 1] % 12] == 1, variant.keys


def test_bass_labels_follow_root_label () -> None:

	"""Given a flat root name, bass labels use flats."""

	variants = auratones.keyboard.keyboard_voicings(3, "m7", root_label="Eb")

	assert [v.bass_label for v in variants][0] == "Eb"
	assert all("#" not in v.bass_label for v in variants)
	assert [v.bass_label for v in auratones.keyboard.keyboard_voicings(3, "m7")][0] == "D#"
