"""Render chord entries to a Standard MIDI File for auditioning.

Each variant becomes one bar: every sounding note starts on the downbeat (or
strummed a few ticks apart, low string first) and is released at the end of
the bar. Entries follow one another in order, so a whole generated library can
be dropped into a DAW and played through.
"""

import logging
import typing

import mido

import auratones.instruments
import auratones.voicing


logger = logging.getLogger(__name__)

TICKS_PER_BEAT = 480
BEATS_PER_BAR = 4
DEFAULT_BPM = 90
DEFAULT_VELOCITY = 90


def voicing_pitches (
	variant: auratones.voicing.VariantType,
	instrument: auratones.instruments.Instrument = auratones.instruments.GUITAR
) -> typing.List[int]:

	"""Return the sounding MIDI notes of a variant, lowest first.

	Fretted voicings are read string by string (muted strings skipped); keyboard
	voicings already carry their keys.

	Example:
		```python
		voicing_pitches(Voicing(base_fret=1, frets=(-1, 3, 2, 0, 1, 0)))
		# → [48, 52, 55, 60, 64]
		```
	"""

	if isinstance(variant, auratones.voicing.KeyboardVoicing):
		return sorted(variant.keys)

	pitches = []

	for string, fret in enumerate(variant.frets):
		pitch = instrument.midi_pitch_at(string, fret)
		if pitch is not None:
			pitches.append(pitch)

	return pitches


def entries_to_midi (
	entries: typing.Iterable[auratones.voicing.ChordEntry],
	bpm: float = DEFAULT_BPM,
	strum_ticks: int = 0,
	velocity: int = DEFAULT_VELOCITY,
	channel: int = 0
) -> mido.MidiFile:

	"""Build a single-track MIDI file with one bar per variant.

	Parameters:
		entries: Chord entries to render, in playing order.
		bpm: Tempo written at the start of the track.
		strum_ticks: Delay between successive notes of a chord; ``0`` plays
			them together.
		velocity: Note-on velocity.
		channel: MIDI channel (0–15).

	Each bar carries a marker with the chord symbol, so the DAW timeline shows
	which chord is which.
	"""

	if strum_ticks < 0:
		raise ValueError("strum_ticks must not be negative")

	mid = mido.MidiFile(type=1)
	mid.ticks_per_beat = TICKS_PER_BEAT
	track = mido.MidiTrack()
	mid.tracks.append(track)

	track.append(mido.MetaMessage('set_tempo', tempo=mido.bpm2tempo(bpm), time=0))

	bar_ticks = TICKS_PER_BEAT * BEATS_PER_BAR

	# Absolute-time events, converted to deltas once sorted.
	events: typing.List[typing.Tuple[int, int, typing.Union[mido.Message, mido.MetaMessage]]] = []
	bar = 0

	for entry in entries:
		for variant in entry.variants:
			start = bar * bar_ticks
			pitches = voicing_pitches(variant)

			# Ordering key: markers, then note-offs, then note-ons at the same tick.
			events.append((start, 0, mido.MetaMessage('marker', text=entry.symbol)))

			for i, pitch in enumerate(pitches):
				on_tick = min(start + i * strum_ticks, start + bar_ticks - 1)
				events.append((on_tick, 2, mido.Message('note_on', channel=channel, note=pitch, velocity=velocity)))
				events.append((start + bar_ticks, 1, mido.Message('note_off', channel=channel, note=pitch, velocity=0)))

			bar += 1

	events.sort(key=lambda event: (event[0], event[1]))

	last_tick = 0

	for tick, _, message in events:
		message.time = tick - last_tick
		track.append(message)
		last_tick = tick

	logger.debug(f"Rendered {bar} bars at {bpm} BPM")

	return mid


def save_entries (
	entries: typing.Iterable[auratones.voicing.ChordEntry],
	filename: str,
	bpm: float = DEFAULT_BPM,
	strum_ticks: int = 0
) -> None:

	"""Render entries and write them to ``filename``.

	Raises:
		OSError: If the file cannot be written (logged first).
	"""

	mid = entries_to_midi(entries, bpm=bpm, strum_ticks=strum_ticks)

	logger.info(f"Saving MIDI preview ({len(mid.tracks[0])} messages) to {filename}...")

	try:
		mid.save(filename)
		logger.info(f"Saved {filename}")
	except OSError as e:
		logger.error(f"Failed to save MIDI preview: {e}")
		raise
