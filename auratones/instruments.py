"""Fretted instrument model.

Strings are indexed from the lowest-pitched string (index 0) to the highest.
A fret assignment holds one integer per string:

- ``-1``: the string is muted
- ``0``: the open string sounds
- ``n > 0``: the string is stopped at absolute fret ``n``

``FretState`` names those three cases so that code never has to compare
against the sentinel directly.
"""

import dataclasses
import enum
import typing

import auratones.pitches


MUTED = -1
OPEN = 0


class FretState (enum.Enum):

	"""What a single string is doing in a fret assignment."""

	MUTED = "muted"
	OPEN = "open"
	FRETTED = "fretted"


def fret_state (fret: int) -> FretState:

	"""Classify one entry of a fret assignment.

	Raises:
		ValueError: For negative values other than the ``-1`` mute marker.
	"""

	if fret == MUTED:
		return FretState.MUTED

	if fret < MUTED:
		raise ValueError(f"Invalid fret value: {fret}")

	if fret == OPEN:
		return FretState.OPEN

	return FretState.FRETTED


def fretted (frets: typing.Sequence[int]) -> typing.List[int]:

	"""Return the stopped (non-open, non-muted) frets of an assignment."""

	return [f for f in frets if fret_state(f) is FretState.FRETTED]


@dataclasses.dataclass(frozen=True)
class Instrument:

	"""
	A fretted instrument in a fixed tuning.

	Parameters:
		name: Instrument identifier used in stored chord entries.
		tuning: Pitch class of each open string, low to high.
		open_pitches: MIDI note number of each open string, low to high.
		max_fret: Highest fret a generated voicing may use.
	"""

	name: str
	tuning: typing.Tuple[int, ...]
	open_pitches: typing.Tuple[int, ...]
	max_fret: int = 15

	def __post_init__ (self) -> None:
		if len(self.tuning) != len(self.open_pitches):
			raise ValueError("tuning and open_pitches must have one entry per string")

	@property
	def string_count (self) -> int:
		return len(self.tuning)


	def pitch_class_at (self, string: int, fret: int) -> typing.Optional[int]:

		"""
		Return the pitch class sounded by a string, or ``None`` when it is muted.
		"""

		if fret_state(fret) is FretState.MUTED:
			return None

		return auratones.pitches.normalize_pc(self.tuning[string] + fret)


	def midi_pitch_at (self, string: int, fret: int) -> typing.Optional[int]:

		"""
		Return the MIDI note sounded by a string, or ``None`` when it is muted.
		"""

		if fret_state(fret) is FretState.MUTED:
			return None

		return self.open_pitches[string] + fret


	def check_frets (self, frets: typing.Sequence[int]) -> None:

		"""
		Raise ``ValueError`` unless the assignment has one valid entry per string.
		"""

		if len(frets) != self.string_count:
			raise ValueError(f"{self.name} needs {self.string_count} frets, got {len(frets)}")

		for f in frets:
			fret_state(f)


# Standard tuning: E2 A2 D3 G3 B3 E4
GUITAR = Instrument(
	name="guitar",
	tuning=(4, 9, 2, 7, 11, 4),
	open_pitches=(40, 45, 50, 55, 59, 64),
)
