"""Command-line chord library generator.

Usage:
	python -m auratones guitar --roots C,F# --output guitar.json
	python -m auratones keyboard --center 60 --midi keyboard.mid
	python -m auratones canonical

Settings are read from ``auratones.yaml`` (or ``--config``) when present:

	generator:
	  max_symbols_per_root: 40
	  variants_per_symbol: 3
	  keyboard_center: 64
	  include_slash: true
	midi:
	  bpm: 90
	  strum_ticks: 30

Command-line flags override the file.
"""

import argparse
import json
import logging
import os
import sys
import typing

import yaml

import auratones.generator
import auratones.midi_export


# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEFAULT_CONFIG = "auratones.yaml"


def load_config (config_path: str = DEFAULT_CONFIG) -> dict:

	"""
	Load configuration from a YAML file.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return {}

	with open(config_path, 'r') as f:
		return yaml.safe_load(f) or {}


def build_parser () -> argparse.ArgumentParser:

	parser = argparse.ArgumentParser(prog="auratones", description="Generate chord voicing libraries")
	parser.add_argument("mode", choices=["guitar", "keyboard", "canonical"], help="What to generate")
	parser.add_argument("--roots",        type=str, default=None,            help="Comma-separated roots (default: all twelve)")
	parser.add_argument("--center",       type=int, default=None,            help="Keyboard reference MIDI note (default: 64)")
	parser.add_argument("--max-per-root", type=int, default=None,            help="Cap on symbols per root")
	parser.add_argument("--variants",     type=int, default=None,            help="Cap on guitar voicings per symbol")
	parser.add_argument("--no-slash",     action="store_true",               help="Skip slash-bass variants")
	parser.add_argument("--config",       type=str, default=DEFAULT_CONFIG,  help=f"YAML settings file (default: {DEFAULT_CONFIG})")
	parser.add_argument("--output",       type=str, default=None,            help="Write JSON here instead of stdout")
	parser.add_argument("--midi",         type=str, default=None,            help="Also render the voicings to this MIDI file")

	return parser


def settings_from_args (args: argparse.Namespace, config: dict) -> auratones.generator.GeneratorSettings:

	"""
	Merge the ``generator`` config section with command-line overrides.
	"""

	values = dict(config.get('generator') or {})

	if args.center is not None:
		values['keyboard_center'] = args.center

	if args.max_per_root is not None:
		if args.mode == "keyboard":
			values['keyboard_max_symbols_per_root'] = args.max_per_root
		else:
			values['max_symbols_per_root'] = args.max_per_root

	if args.variants is not None:
		values['variants_per_symbol'] = args.variants

	if args.no_slash:
		values['include_slash'] = False

	return auratones.generator.GeneratorSettings.from_mapping(values)


def main (argv: typing.Optional[typing.List[str]] = None) -> None:

	"""
	Main entry point for the auratones command line.
	"""

	args = build_parser().parse_args(argv)
	config = load_config(args.config)
	settings = settings_from_args(args, config)

	roots = [r.strip() for r in args.roots.split(",") if r.strip()] if args.roots else None

	if args.mode == "canonical":
		payload: typing.Any = auratones.generator.canonical_chords()
		entries = []

	else:
		entries = auratones.generator.generate_all(args.mode, roots=roots, settings=settings)
		payload = [
			{"id": auratones.generator.document_id(entry.instrument, entry.symbol), **entry.to_dict()}
			for entry in entries
		]

	text = json.dumps(payload, indent=2, ensure_ascii=False)

	if args.output:
		with open(args.output, 'w', encoding='utf-8') as f:
			f.write(text + "\n")
		logger.info(f"Wrote {len(payload)} records to {args.output}")
	else:
		sys.stdout.write(text + "\n")

	if args.midi:
		midi_config = config.get('midi') or {}
		auratones.midi_export.save_entries(
			entries,
			args.midi,
			bpm=midi_config.get('bpm', auratones.midi_export.DEFAULT_BPM),
			strum_ticks=midi_config.get('strum_ticks', 0),
		)


if __name__ == "__main__":
	main()
