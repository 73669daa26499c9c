"""Deduplication, ranking and merging of voicings.

Two kinds of identity are used:

- **Signature** (``voicing_signature``): what the voicing sounds like. Sorted
  pitch classes, bass pitch class and fret pattern. With ``normalize_position``
  the pattern is taken relative to the lowest stopped fret, so a shape and its
  octave transposition collapse to one entry; without it, only identical
  placements do.
- **Fingerprint** (``variant_fingerprint``): what the stored document says.
  Frets, barres (range order ignored) and fingers (an all-unspecified list
  counts as no fingering). Used when merging new variants into stored entries.
"""

import json
import typing

import auratones.fretboard
import auratones.instruments
import auratones.voicing


T = typing.TypeVar("T")

DEFAULT_MAX_SYMBOLS = 40
DEFAULT_VARIANTS_PER_SYMBOL = 3

# Sort key for voicings with no stopped notes, so they rank last.
NO_FRET = 99

REMOVE_SCOPES = ("single", "shape")


def voicing_signature (
	voicing: auratones.voicing.Voicing,
	normalize_position: bool = True,
	instrument: auratones.instruments.Instrument = auratones.instruments.GUITAR
) -> str:

	"""Return the canonical sound signature of a voicing.

	Parameters:
		voicing: Voicing to describe.
		normalize_position: Express stopped frets relative to the lowest one, so
			the same shape at another position yields the same signature.

	Example:
		```python
		voicing_signature(Voicing(base_fret=1, frets=(1, 3, 3, 2, 1, 1)))
		# → "0,5,9|b:5|r:0.2.2.1.0.0"
		```
	"""

	pcs = ",".join(str(pc) for pc in sorted(auratones.fretboard.sounding_pitch_classes(voicing.frets, instrument)))
	bass_pc = auratones.fretboard.bass_pitch_class(voicing.frets, instrument)
	bass = "x" if bass_pc is None else str(bass_pc)

	frets = list(voicing.frets)

	if normalize_position:
		stopped = auratones.instruments.fretted(frets)
		min_pos = min(stopped) if stopped else 0
		frets = [f if f <= 0 else f - min_pos for f in frets]

	return f"{pcs}|b:{bass}|r:{'.'.join(str(f) for f in frets)}"


def dedup (items: typing.Iterable[T], key: typing.Callable[[T], typing.Hashable]) -> typing.List[T]:

	"""Collapse items sharing a key; the first one seen wins.

	Running it on its own output returns the same list.
	"""

	seen: typing.Set[typing.Hashable] = set()
	kept: typing.List[T] = []

	for item in items:
		k = key(item)

		if k in seen:
			continue

		seen.add(k)
		kept.append(item)

	return kept


def lowest_fretted (voicing: auratones.voicing.Voicing) -> int:

	"""
	Return the lowest stopped fret, or ``NO_FRET`` if nothing is stopped.
	"""

	stopped = auratones.instruments.fretted(voicing.frets)

	return min(stopped) if stopped else NO_FRET


def rank_variants (variants: typing.Iterable[auratones.voicing.Voicing], cap: typing.Optional[int] = DEFAULT_VARIANTS_PER_SYMBOL) -> typing.List[auratones.voicing.Voicing]:

	"""Order voicings by playing position (lowest first) and keep at most ``cap``.

	The sort is stable, so voicings at the same position keep their discovery order.
	"""

	ranked = sorted(variants, key=lowest_fretted)

	if cap is not None:
		ranked = ranked[:cap]

	return ranked


def collect_entries (
	bucket: typing.Iterable[typing.Tuple[str, auratones.voicing.Voicing]],
	instrument: str = "guitar",
	max_symbols: typing.Optional[int] = DEFAULT_MAX_SYMBOLS,
	variants_per_symbol: typing.Optional[int] = DEFAULT_VARIANTS_PER_SYMBOL,
	normalize_position: bool = True
) -> typing.List[auratones.voicing.ChordEntry]:

	"""Turn raw ``(symbol, voicing)`` candidates into capped chord entries.

	Candidates are deduplicated across every symbol by signature (first seen
	wins), grouped by symbol, then symbols are taken in sorted order up to
	``max_symbols`` with their voicings ranked and capped.

	Parameters:
		bucket: Candidates in discovery order.
		instrument: Instrument name written on each entry.
		max_symbols: Cap on distinct symbols, ``None`` for no cap.
		variants_per_symbol: Cap on voicings per symbol, ``None`` for no cap.
		normalize_position: Signature variant used for deduplication.
	"""

	unique = dedup(bucket, key=lambda item: voicing_signature(item[1], normalize_position))

	by_symbol: typing.Dict[str, typing.List[auratones.voicing.Voicing]] = {}

	for symbol, voicing in unique:
		by_symbol.setdefault(symbol, []).append(voicing)

	entries: typing.List[auratones.voicing.ChordEntry] = []

	for symbol in sorted(by_symbol):

		if max_symbols is not None and len(entries) >= max_symbols:
			break

		entries.append(auratones.voicing.ChordEntry(
			symbol=symbol,
			instrument=instrument,
			variants=list(rank_variants(by_symbol[symbol], variants_per_symbol)),
		))

	return entries


def variant_fingerprint (variant: auratones.voicing.VariantType) -> str:

	"""Return the stored-document identity of a variant.

	Keyboard variants are identified by their key sequence.
	"""

	if isinstance(variant, auratones.voicing.KeyboardVoicing):
		return json.dumps({"keys": list(variant.keys)})

	barres = [
		{"fret": b.fret, "from": b.low, "to": b.high, "finger": b.finger}
		for b in variant.barres
	]

	fingers = [f or 0 for f in variant.fingers] if variant.fingers is not None else []

	if all(f == 0 for f in fingers):
		fingers = []

	return json.dumps({"frets": list(variant.frets), "barres": barres, "fingers": fingers})


def shape_fingerprint (variant: auratones.voicing.VariantType) -> str:

	"""Return a position-free identity: the same hand shape anywhere on the neck.

	Transposed copies of a voicing share this fingerprint with the original.
	"""

	if isinstance(variant, auratones.voicing.KeyboardVoicing):
		low = min(variant.keys) if variant.keys else 0
		return json.dumps({"intervals": [k - low for k in variant.keys]})

	stopped = auratones.instruments.fretted(variant.frets)
	min_pos = min(stopped) if stopped else 0
	relative = [f if f <= 0 else f - min_pos for f in variant.frets]
	fingers = [f or 0 for f in variant.fingers] if variant.fingers is not None else []

	if all(f == 0 for f in fingers):
		fingers = []

	return json.dumps({"frets": relative, "fingers": fingers})


def merge_variants (
	existing: typing.Iterable[auratones.voicing.VariantType],
	incoming: typing.Iterable[auratones.voicing.VariantType]
) -> typing.List[auratones.voicing.VariantType]:

	"""Append new variants to stored ones, skipping any already present.

	Existing variants keep their order and are never replaced.
	"""

	return dedup(list(existing) + list(incoming), key=variant_fingerprint)


def remove_variants (
	variants: typing.Iterable[auratones.voicing.VariantType],
	target: auratones.voicing.VariantType,
	scope: str = "single"
) -> typing.List[auratones.voicing.VariantType]:

	"""Remove a variant from a list.

	Parameters:
		variants: Stored variants.
		target: The variant to remove.
		scope: ``"single"`` removes exact matches; ``"shape"`` also removes every
			variant with the same hand shape and fingering at other positions.
	"""

	if scope not in REMOVE_SCOPES:
		raise ValueError(f"scope must be one of {REMOVE_SCOPES}, not {scope!r}")

	identity = variant_fingerprint if scope == "single" else shape_fingerprint
	target_key = identity(target)

	return [variant for variant in variants if identity(variant) != target_key]
