import json
import logging
import pathlib
import typing

import pytest

import auratones.__main__


def test_load_config_missing_file_warns (tmp_path: pathlib.Path, caplog: pytest.LogCaptureFixture) -> None:

	"""A missing config file logs a warning and yields an empty mapping."""

	with caplog.at_level(logging.WARNING):
		config = auratones.__main__.load_config(str(tmp_path / "absent.yaml"))

	assert config == {}
	assert "not found" in caplog.text


def test_load_config_reads_yaml (tmp_config: typing.Callable[[str], str]) -> None:

	"""Sections are returned as nested mappings; an empty file is an empty mapping."""

	path = tmp_config("generator:\n  variants_per_symbol: 2\nmidi:\n  bpm: 100\n")

	assert auratones.__main__.load_config(path) == {"generator": {"variants_per_symbol": 2}, "midi": {"bpm": 100}}
	assert auratones.__main__.load_config(tmp_config("")) == {}


def test_flags_override_config (tmp_config: typing.Callable[[str], str]) -> None:

	"""Command-line values win over the file; unset flags leave file values alone."""

	config = auratones.__main__.load_config(tmp_config("generator:\n  variants_per_symbol: 2\n  max_symbols_per_root: 10\n"))
	args = auratones.__main__.build_parser().parse_args(["guitar", "--max-per-root", "5", "--no-slash"])

	settings = auratones.__main__.settings_from_args(args, config)

	assert settings.max_symbols_per_root == 5
	assert settings.variants_per_symbol == 2
	assert settings.include_slash is False


def test_keyboard_max_per_root_targets_keyboard_cap () -> None:

	"""--max-per-root caps keyboard symbols in keyboard mode."""

	args = auratones.__main__.build_parser().parse_args(["keyboard", "--max-per-root", "3", "--center", "60"])
	settings = auratones.__main__.settings_from_args(args, {})

	assert settings.keyboard_max_symbols_per_root == 3
	assert settings.keyboard_center == 60
	assert settings.max_symbols_per_root == 40


def test_main_writes_json (tmp_path: pathlib.Path) -> None:

	"""Generated entries are written with their document ids."""

	output = tmp_path / "out.json"

	auratones.__main__.main([
		"keyboard", "--roots", "C,F#", "--max-per-root", "2",
		"--config", str(tmp_path / "none.yaml"), "--output", str(output),
	])

	documents = json.loads(output.read_text())

	assert [doc["id"] for doc in documents] == ["piano__C", "piano__Cm", "piano__F_", "piano__F_m"]
	assert documents[0]["variants"][0]["verify"] is None


def test_main_canonical_to_stdout (tmp_path: pathlib.Path, capsys: pytest.CaptureFixture) -> None:

	"""Canonical records go to stdout when no output file is given."""

	auratones.__main__.main(["canonical", "--config", str(tmp_path / "none.yaml")])

	records = json.loads(capsys.readouterr().out)

	assert records[0]["id"] == "r0__major"


def test_main_renders_midi (tmp_path: pathlib.Path, tmp_config: typing.Callable[[str], str]) -> None:

	"""--midi writes a preview using the midi config section."""

	midi_path = tmp_path / "preview.mid"
	config = tmp_config("midi:\n  bpm: 80\n  strum_ticks: 20\n")

	auratones.__main__.main([
		"guitar", "--roots", "E", "--max-per-root", "3", "--variants", "1",
		"--config", config, "--output", str(tmp_path / "out.json"), "--midi", str(midi_path),
	])

	assert midi_path.exists()
