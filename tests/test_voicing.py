import pytest

import auratones.voicing


def test_to_dict_omits_absent_fields (open_c_major: auratones.voicing.Voicing) -> None:

	"""Unspecified fingers, missing barres and non-slash bass fields are left out."""

	assert open_c_major.to_dict() == {"baseFret": 1, "frets": [-1, 3, 2, 0, 1, 0], "gridFrets": 4}


def test_to_dict_full (c_major_a_shape: auratones.voicing.Voicing) -> None:

	"""Barres use from/to string indices; root markers are written when known."""

	data = c_major_a_shape.replace(fingers=(None, 1, 3, 3, 3, 1), bass_pc=7, bass_label="G", bass_string=2).to_dict()

	assert data["barres"] == [{"fret": 3, "from": 1, "to": 5, "finger": 1}]
	assert data["fingers"] == [None, 1, 3, 3, 3, 1]
	assert data["rootString"] == 1
	assert data["rootFret"] == 3
	assert (data["bassPc"], data["bassLabel"], data["bassString"]) == (7, "G", 2)


def test_from_dict_reads_zero_fingers_as_unspecified () -> None:

	"""Stored zeros mean 'no finger given'; an all-zero list means no fingering at all."""

	partial = auratones.voicing.Voicing.from_dict({"baseFret": 1, "frets": [-1, 3, 2, 0, 1, 0], "fingers": [0, 3, 2, 0, 1, 0]})
	empty = auratones.voicing.Voicing.from_dict({"frets": [-1, 3, 2, 0, 1, 0], "fingers": [0, 0, 0, 0, 0, 0]})

	assert partial.fingers == (None, 3, 2, None, 1, None)
	assert empty.fingers is None
	assert empty.base_fret == 1


def test_round_trip (c_major_a_shape: auratones.voicing.Voicing) -> None:

	"""A voicing survives serialization unchanged."""

	assert auratones.voicing.Voicing.from_dict(c_major_a_shape.to_dict()) == c_major_a_shape


def test_voicing_validation () -> None:

	"""Lists are stored as tuples; malformed frets and fingers are rejected."""

	voicing = auratones.voicing.Voicing(base_fret=1, frets=[-1, 3, 2, 0, 1, 0])

	assert voicing.frets == (-1, 3, 2, 0, 1, 0)
	assert hash(voicing)
	assert not voicing.is_slash

	with pytest.raises(ValueError):
		auratones.voicing.Voicing(base_fret=1, frets=(-2, 3, 2, 0, 1, 0))

	with pytest.raises(ValueError):
		auratones.voicing.Voicing(base_fret=1, frets=(-1, 3, 2, 0, 1, 0), fingers=(1, 2))


def test_barre_direction () -> None:

	"""A barre covers its range whichever way round it is written."""

	barre = auratones.voicing.Barre(fret=5, start=5, end=1)

	assert (barre.low, barre.high) == (1, 5)
	assert barre.covers(3)
	assert not barre.covers(0)


def test_keyboard_voicing_document () -> None:

	"""Keyboard variants carry an empty verification slot."""

	voicing = auratones.voicing.KeyboardVoicing(base_key=48, keys=(48, 52, 55, 67), pcs=(0, 4, 7), bass=48, bass_label="C")

	assert voicing.to_dict() == {
		"baseKey": 48,
		"keys": [48, 52, 55, 67],
		"pcs": [0, 4, 7],
		"bass": 48,
		"bassLabel": "C",
		"verify": None,
	}
	assert auratones.voicing.KeyboardVoicing.from_dict(voicing.to_dict()) == voicing


def test_chord_entry_documents () -> None:

	"""Entries validate the instrument and pick the variant type from it."""

	with pytest.raises(ValueError):
		auratones.voicing.ChordEntry(symbol="C", instrument="banjo")

	entry = auratones.voicing.ChordEntry.from_dict({
		"symbol": " C ",
		"instrument": "Piano",
		"variants": [{"baseKey": 48, "keys": [48, 52, 55], "pcs": [0, 4, 7], "bass": 48, "bassLabel": "C"}],
	})

	assert entry.symbol == "C"
	assert entry.instrument == "piano"
	assert isinstance(entry.variants[0], auratones.voicing.KeyboardVoicing)
	assert entry.to_dict()["aliases"] == []
