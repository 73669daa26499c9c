import typing

import pytest

import auratones.generator
import auratones.voicing


@pytest.fixture
def open_c_major () -> auratones.voicing.Voicing:

	"""Open-position C major: x 3 2 0 1 0."""

	return auratones.voicing.Voicing(base_fret=1, frets=(-1, 3, 2, 0, 1, 0))


@pytest.fixture
def c_major_a_shape () -> auratones.voicing.Voicing:

	"""Barred A-shape C major at the third fret: x 3 5 5 5 3."""

	return auratones.voicing.Voicing(
		base_fret=3,
		frets=(-1, 3, 5, 5, 5, 3),
		barres=(auratones.voicing.Barre(fret=3, start=1, end=5),),
		root_string=1,
		root_fret=3,
	)


@pytest.fixture(scope="session")
def c_guitar_entries () -> typing.List[auratones.voicing.ChordEntry]:

	"""Generated guitar entries for C, shared across tests since generation walks every recipe."""

	return auratones.generator.generate_voicings_for_root("C", "guitar")


@pytest.fixture
def tmp_config (tmp_path: typing.Any) -> typing.Callable[[str], str]:

	"""Write a YAML config file and return its path."""

	def _write (text: str) -> str:
		path = tmp_path / "auratones.yaml"
		path.write_text(text)
		return str(path)

	return _write
