"""Voicing and chord entry value types.

These mirror the JSON documents stored per ``(instrument, symbol)`` pair and
served to the chord library UI. Field names on the wire are camelCase and
optional fields are omitted rather than written as zero:

- ``fingers`` absent: fingering unspecified
- ``barres`` absent: no barre
- ``bassPc`` / ``bassLabel`` / ``bassString``: present on slash variants only

String references (``rootString``, ``bassString``, barre ``from`` / ``to``) are
0-based indices into ``frets``, lowest-pitched string first.
"""

import dataclasses
import typing

import auratones.instruments


@dataclasses.dataclass(frozen=True)
class Barre:

	"""
	One finger holding strings ``start`` to ``end`` (inclusive) at ``fret``.
	"""

	fret: int
	start: int
	end: int
	finger: typing.Optional[int] = 1

	@property
	def low (self) -> int:
		return min(self.start, self.end)

	@property
	def high (self) -> int:
		return max(self.start, self.end)

	def covers (self, string: int) -> bool:
		return self.low <= string <= self.high

	def to_dict (self) -> typing.Dict[str, typing.Any]:

		data: typing.Dict[str, typing.Any] = {"fret": self.fret, "from": self.start, "to": self.end}

		if self.finger is not None:
			data["finger"] = self.finger

		return data

	@classmethod
	def from_dict (cls, data: typing.Mapping[str, typing.Any]) -> "Barre":
		return cls(fret=int(data["fret"]), start=int(data["from"]), end=int(data["to"]), finger=data.get("finger"))


@dataclasses.dataclass(frozen=True)
class Voicing:

	"""
	A single playable fretted chord.

	Parameters:
		base_fret: Lowest fret shown on the chord diagram.
		frets: Absolute fret per string (``-1`` muted, ``0`` open).
		fingers: Finger number per string, ``None`` where unspecified.
		barres: Barres held in this voicing.
		root_string: String carrying the chord root.
		root_fret: Absolute fret of that root.
		bass_pc: Bass pitch class of a slash variant.
		bass_label: Display name of that bass.
		bass_string: String sounding that bass.
		grid_frets: Number of fret rows the diagram shows.
	"""

	base_fret: int
	frets: typing.Tuple[int, ...]
	fingers: typing.Optional[typing.Tuple[typing.Optional[int], ...]] = None
	barres: typing.Tuple[Barre, ...] = ()
	root_string: typing.Optional[int] = None
	root_fret: typing.Optional[int] = None
	bass_pc: typing.Optional[int] = None
	bass_label: typing.Optional[str] = None
	bass_string: typing.Optional[int] = None
	grid_frets: int = 4

	def __post_init__ (self) -> None:

		# Accept lists from callers but store tuples so voicings stay hashable.
		object.__setattr__(self, "frets", tuple(self.frets))
		object.__setattr__(self, "barres", tuple(self.barres))

		if self.fingers is not None:
			object.__setattr__(self, "fingers", tuple(self.fingers))

			if len(self.fingers) != len(self.frets):
				raise ValueError("fingers must have one entry per string")

		for f in self.frets:
			auratones.instruments.fret_state(f)

	@property
	def is_slash (self) -> bool:
		return self.bass_pc is not None


	def replace (self, **changes: typing.Any) -> "Voicing":

		"""
		Return a copy with some fields changed.
		"""

		return dataclasses.replace(self, **changes)


	def to_dict (self) -> typing.Dict[str, typing.Any]:

		"""
		Serialize to the stored JSON shape, omitting absent optional fields.
		"""

		data: typing.Dict[str, typing.Any] = {
			"baseFret": self.base_fret,
			"frets": list(self.frets),
		}

		if self.fingers is not None:
			data["fingers"] = list(self.fingers)

		if self.barres:
			data["barres"] = [barre.to_dict() for barre in self.barres]

		data["gridFrets"] = self.grid_frets

		optional = (
			("rootString", self.root_string),
			("rootFret", self.root_fret),
			("bassPc", self.bass_pc),
			("bassLabel", self.bass_label),
			("bassString", self.bass_string),
		)

		for key, value in optional:
			if value is not None:
				data[key] = value

		return data


	@classmethod
	def from_dict (cls, data: typing.Mapping[str, typing.Any]) -> "Voicing":

		"""Build a voicing from its stored JSON shape.

		A finger number of ``0`` in stored data means "unspecified" and is read
		back as ``None``; a list with no specified fingers becomes ``None``.
		"""

		fingers: typing.Optional[typing.Tuple[typing.Optional[int], ...]] = None

		if data.get("fingers") is not None:
			parsed = tuple(int(n) if n else None for n in data["fingers"])

			if any(n is not None for n in parsed):
				fingers = parsed

		return cls(
			base_fret=int(data.get("baseFret", 1)),
			frets=tuple(int(f) for f in data["frets"]),
			fingers=fingers,
			barres=tuple(Barre.from_dict(b) for b in data.get("barres") or ()),
			root_string=data.get("rootString"),
			root_fret=data.get("rootFret"),
			bass_pc=data.get("bassPc"),
			bass_label=data.get("bassLabel"),
			bass_string=data.get("bassString"),
			grid_frets=int(data.get("gridFrets", 4)),
		)


@dataclasses.dataclass(frozen=True)
class KeyboardVoicing:

	"""
	A keyboard chord laid out inside a two-octave window.

	Parameters:
		base_key: Lowest MIDI note of the rendered window.
		keys: Sounding MIDI notes, strictly ascending.
		pcs: Recipe intervals (0–11) the voicing realises.
		bass: Lowest sounding MIDI note.
		bass_label: Display name of the bass.
	"""

	base_key: int
	keys: typing.Tuple[int, ...]
	pcs: typing.Tuple[int, ...]
	bass: int
	bass_label: str

	def to_dict (self) -> typing.Dict[str, typing.Any]:

		return {
			"baseKey": self.base_key,
			"keys": list(self.keys),
			"pcs": list(self.pcs),
			"bass": self.bass,
			"bassLabel": self.bass_label,
			"verify": None,
		}

	@classmethod
	def from_dict (cls, data: typing.Mapping[str, typing.Any]) -> "KeyboardVoicing":

		return cls(
			base_key=int(data["baseKey"]),
			keys=tuple(int(k) for k in data["keys"]),
			pcs=tuple(int(pc) for pc in data.get("pcs", ())),
			bass=int(data["bass"]),
			bass_label=str(data["bassLabel"]),
		)


VariantType = typing.Union[Voicing, KeyboardVoicing]

INSTRUMENTS: typing.Tuple[str, ...] = ("guitar", "ukulele", "piano")


@dataclasses.dataclass
class ChordEntry:

	"""
	All stored voicings of one chord symbol on one instrument.
	"""

	symbol: str
	instrument: str
	variants: typing.List[VariantType] = dataclasses.field(default_factory=list)
	aliases: typing.List[str] = dataclasses.field(default_factory=list)

	def __post_init__ (self) -> None:
		if self.instrument not in INSTRUMENTS:
			raise ValueError(f"Unknown instrument: {self.instrument!r}. Expected one of {INSTRUMENTS}")

	def to_dict (self) -> typing.Dict[str, typing.Any]:

		return {
			"symbol": self.symbol,
			"aliases": list(self.aliases),
			"instrument": self.instrument,
			"variants": [variant.to_dict() for variant in self.variants],
		}

	@classmethod
	def from_dict (cls, data: typing.Mapping[str, typing.Any]) -> "ChordEntry":

		instrument = str(data.get("instrument", "guitar")).lower()
		variant_cls: typing.Any = KeyboardVoicing if instrument == "piano" else Voicing

		return cls(
			symbol=str(data["symbol"]).strip(),
			instrument=instrument,
			variants=[variant_cls.from_dict(v) for v in data.get("variants") or ()],
			aliases=list(data.get("aliases") or ()),
		)
