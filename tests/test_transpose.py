import auratones.fretboard
import auratones.pitches
import auratones.transpose
import auratones.voicing


def test_is_movable (open_c_major: auratones.voicing.Voicing, c_major_a_shape: auratones.voicing.Voicing) -> None:

	"""Open strings pin a voicing unless a barre holds them."""

	assert not auratones.transpose.is_movable(open_c_major)
	assert auratones.transpose.is_movable(c_major_a_shape)

	barred_open = auratones.voicing.Voicing(
		base_fret=1,
		frets=(-1, 0, 2, 2, 2, 0),
		barres=(auratones.voicing.Barre(fret=1, start=1, end=5),),
	)

	assert auratones.transpose.is_movable(barred_open)


def test_choose_offset () -> None:

	"""The smaller in-range offset wins; out-of-range targets give None."""

	frets = [-1, 3, 5, 5, 5, 3]

	assert auratones.transpose.choose_offset(frets, 0, 2) == 2
	assert auratones.transpose.choose_offset(frets, 0, 10) == -2
	assert auratones.transpose.choose_offset(frets, 0, 9) is None
	assert auratones.transpose.choose_offset([-1, -1, -1, -1, -1, -1], 0, 2) is None


def test_choose_offset_tritone_goes_whichever_way_fits () -> None:

	"""A tritone move goes up from low positions and down from high ones."""

	assert auratones.transpose.choose_offset([-1, 3, 5, 5, 5, 3], 0, 6) == 6
	assert auratones.transpose.choose_offset([-1, 7, 9, 9, 9, 7], 4, 10) == -6


def test_transpose_voicing_moves_everything (c_major_a_shape: auratones.voicing.Voicing) -> None:

	"""Frets, barre, root marker and base fret all shift together."""

	moved = auratones.transpose.transpose_voicing(c_major_a_shape, 2)

	assert moved.frets == (-1, 5, 7, 7, 7, 5)
	assert moved.barres == (auratones.voicing.Barre(fret=5, start=1, end=5),)
	assert moved.root_fret == 5
	assert moved.root_string == 1
	assert moved.base_fret == 5


def test_compute_transpositions (c_major_a_shape: auratones.voicing.Voicing) -> None:

	"""Targets within reach are produced under their own symbol; others are skipped."""

	result = auratones.transpose.compute_transpositions(c_major_a_shape, "C", ["D", "Bb", "A"])

	assert set(result) == {"D", "Bb"}
	assert result["D"][0].frets == (-1, 5, 7, 7, 7, 5)
	assert result["Bb"][0].frets == (-1, 1, 3, 3, 3, 1)


def test_transpositions_keep_the_chord (c_major_a_shape: auratones.voicing.Voicing) -> None:

	"""Every transposed voicing still spells a major triad on its new root and stays playable."""

	result = auratones.transpose.compute_transpositions(c_major_a_shape, "C")

	assert "C" not in result
	assert result

	for symbol, voicings in result.items():
		root_pc = auratones.pitches.pc_from_label(symbol)

		for voicing in voicings:
			assert auratones.fretboard.matches_recipe(voicing.frets, (0, 4, 7), root_pc)
			assert auratones.fretboard.check_playability(voicing).ok


def test_transposition_round_trip (c_major_a_shape: auratones.voicing.Voicing) -> None:

	"""Moving to D and back to C restores the original frets."""

	there = auratones.transpose.compute_transpositions(c_major_a_shape, "C", ["D"])["D"][0]
	back = auratones.transpose.compute_transpositions(there, "D", ["C"])["C"][0]

	assert back.frets == c_major_a_shape.frets
	assert back.barres == c_major_a_shape.barres


def test_open_voicing_is_not_transposed (open_c_major: auratones.voicing.Voicing) -> None:

	"""Voicings that rely on open strings produce nothing."""

	assert auratones.transpose.compute_transpositions(open_c_major, "C") == {}


def test_slash_bass_moves_with_shape () -> None:

	"""A slash voicing keeps its bass interval and is named after the new bass."""

	c_over_g = auratones.voicing.Voicing(
		base_fret=8,
		frets=(-1, 10, 10, 9, 8, 8),
		barres=(auratones.voicing.Barre(fret=8, start=1, end=5),),
		bass_pc=7,
		bass_label="G",
		bass_string=1,
	)

	result = auratones.transpose.compute_transpositions(c_over_g, "C", ["Bb"])

	assert list(result) == ["Bb/F"]
	assert result["Bb/F"][0].bass_pc == 5
	assert result["Bb/F"][0].frets == (-1, 8, 8, 7, 6, 6)
