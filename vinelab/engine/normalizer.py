"""Lab report key/value normalization, the only entry point for raw external shapes."""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from vinelab.engine.parameters import ParameterSet
from vinelab.models.enums import Parameter

_logger = logging.getLogger("vinelab.engine.normalizer")

_KEY_NOISE = re.compile(r"[^a-z0-9]")
_LEADING_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

# Keys are compared after lower-casing and stripping everything but [a-z0-9].
PARAMETER_ALIASES: Mapping[str, Parameter] = MappingProxyType(
	{
		"ph": Parameter.ph,
		"soilph": Parameter.ph,
		"ec": Parameter.ec,
		"soilec": Parameter.ec,
		"electricalconductivity": Parameter.ec,
		"organiccarbon": Parameter.organic_carbon,
		"oc": Parameter.organic_carbon,
		"organicmatter": Parameter.organic_matter,
		"om": Parameter.organic_matter,
		# Specific petiole nitrogen forms before the generic soil one
		"totalnitrogen": Parameter.total_nitrogen,
		"totalnitrogenasn": Parameter.total_nitrogen,
		"tn": Parameter.total_nitrogen,
		"nitratenitrogen": Parameter.nitrate_nitrogen,
		"nitratenitrogenasno3n": Parameter.nitrate_nitrogen,
		"no3n": Parameter.nitrate_nitrogen,
		"ammonicalnitrogen": Parameter.ammonical_nitrogen,
		"ammoniacalnitrogen": Parameter.ammonical_nitrogen,
		"ammoniumnitrogen": Parameter.ammonical_nitrogen,
		"ammonicalnitrogenasnh4n": Parameter.ammonical_nitrogen,
		"ammoniacalnitrogenasnh4n": Parameter.ammonical_nitrogen,
		"ammoniumnitrogenasnh4n": Parameter.ammonical_nitrogen,
		"nh4n": Parameter.ammonical_nitrogen,
		"nitrogen": Parameter.nitrogen,
		"availablenitrogen": Parameter.nitrogen,
		"n": Parameter.nitrogen,
		"phosphorus": Parameter.phosphorus,
		"phosphorous": Parameter.phosphorus,
		"availablephosphorus": Parameter.phosphorus,
		"p": Parameter.phosphorus,
		"potassium": Parameter.potassium,
		"availablepotassium": Parameter.potassium,
		"k": Parameter.potassium,
		"calciumcarbonate": Parameter.calcium_carbonate,
		"caco3": Parameter.calcium_carbonate,
		"calcium": Parameter.calcium,
		"ca": Parameter.calcium,
		"magnesium": Parameter.magnesium,
		"mg": Parameter.magnesium,
		"sulfur": Parameter.sulfur,
		"sulphur": Parameter.sulfur,
		"s": Parameter.sulfur,
		"iron": Parameter.iron,
		"ferrous": Parameter.iron,
		"fe": Parameter.iron,
		"manganese": Parameter.manganese,
		"mn": Parameter.manganese,
		"zinc": Parameter.zinc,
		"zn": Parameter.zinc,
		"copper": Parameter.copper,
		"cu": Parameter.copper,
		"boron": Parameter.boron,
		"b": Parameter.boron,
		"molybdenum": Parameter.molybdenum,
		"mo": Parameter.molybdenum,
		"sodium": Parameter.sodium,
		"na": Parameter.sodium,
		"chloride": Parameter.chloride,
		"cl": Parameter.chloride,
		"carbonate": Parameter.carbonate,
		"co3": Parameter.carbonate,
		"bicarbonate": Parameter.bicarbonate,
		"hco3": Parameter.bicarbonate,
	}
)


def canonical_token(raw_key: str) -> str:
	return _KEY_NOISE.sub("", raw_key.lower())


def normalize(raw_key: str) -> Parameter | str:
	"""Map a lab-report key to its canonical parameter, or return it unchanged."""
	return PARAMETER_ALIASES.get(canonical_token(raw_key), raw_key)


def parse_numeric(raw: Any) -> float | None:
	"""Return ``raw`` as a finite float, or ``None`` when it is not one.

	Strings keep their leading number, so ``"6.8 ppm"`` reads as ``6.8`` while
	``"<0.5"``, ``"N/A"`` and ``"NaN"`` give ``None``. Booleans are rejected even
	though they are ``int`` subclasses.
	"""
	if isinstance(raw, bool):
		return None
	if isinstance(raw, (int, float)):
		value = float(raw)
	elif isinstance(raw, str):
		match = _LEADING_NUMBER.match(raw.strip())
		if match is None:
			return None
		value = float(match.group(0))
	else:
		return None
	return value if math.isfinite(value) else None


def normalize_parameters(raw: Mapping[str, Any]) -> ParameterSet:
	"""Canonicalize keys and coerce values; unusable entries are dropped, never raised."""
	values: dict[Parameter, float] = {}
	dropped: list[str] = []
	for raw_key, raw_value in raw.items():
		key = normalize(str(raw_key))
		if not isinstance(key, Parameter):
			dropped.append(str(raw_key))
			continue
		value = parse_numeric(raw_value)
		if value is None:
			dropped.append(str(raw_key))
			continue
		values[key] = value

	if dropped:
		_logger.debug("lab_parameters_dropped", extra={"keys": dropped})
	return ParameterSet(values)


def _is_non_finite(raw: Any) -> bool:
	if isinstance(raw, float):
		return not math.isfinite(raw)
	if isinstance(raw, str):
		try:
			return not math.isfinite(float(raw.strip()))
		except ValueError:
			return False
	return False


def non_finite_parameters(raw: Mapping[str, Any]) -> frozenset[Parameter]:
	"""Canonical parameters whose raw value is NaN or infinite.

	These are dropped from the :class:`ParameterSet` like any other unusable
	value, but unlike ``"pending"`` or ``None`` they count as data-quality
	violations.
	"""
	flagged: set[Parameter] = set()
	for raw_key, raw_value in raw.items():
		key = normalize(str(raw_key))
		if isinstance(key, Parameter) and _is_non_finite(raw_value):
			flagged.add(key)
	return frozenset(flagged)
