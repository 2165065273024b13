"""Canonical parameter metadata and the typed parameter map consumed by rule sets."""

from __future__ import annotations

import math
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from vinelab.models.enums import Parameter, TestTypeEnum


class InvalidParameterValueError(ValueError):
	"""Raised when a caller hands the engine a value the normalizer would never produce."""


@dataclass(frozen=True, slots=True)
class ParameterSpec:
	label: str
	soil_unit: str
	petiole_unit: str

	def unit(self, test_type: TestTypeEnum) -> str:
		return self.soil_unit if test_type == TestTypeEnum.soil else self.petiole_unit


PARAMETER_SPECS: Mapping[Parameter, ParameterSpec] = MappingProxyType(
	{
		Parameter.ph: ParameterSpec("pH", "", ""),
		Parameter.ec: ParameterSpec("EC", "dS/m", "dS/m"),
		Parameter.organic_carbon: ParameterSpec("Organic Carbon", "%", "%"),
		Parameter.organic_matter: ParameterSpec("Organic Matter", "%", "%"),
		Parameter.nitrogen: ParameterSpec("Nitrogen", "ppm", "%"),
		Parameter.total_nitrogen: ParameterSpec("Total Nitrogen", "%", "%"),
		Parameter.nitrate_nitrogen: ParameterSpec("Nitrate N", "ppm", "ppm"),
		Parameter.ammonical_nitrogen: ParameterSpec("Ammonical N", "ppm", "ppm"),
		Parameter.phosphorus: ParameterSpec("Phosphorus", "ppm", "%"),
		Parameter.potassium: ParameterSpec("Potassium", "ppm", "%"),
		Parameter.calcium: ParameterSpec("Calcium", "ppm", "%"),
		Parameter.calcium_carbonate: ParameterSpec("Calcium Carbonate", "%", "%"),
		Parameter.magnesium: ParameterSpec("Magnesium", "ppm", "%"),
		Parameter.sulfur: ParameterSpec("Sulfur", "ppm", "%"),
		Parameter.iron: ParameterSpec("Iron", "ppm", "ppm"),
		Parameter.manganese: ParameterSpec("Manganese", "ppm", "ppm"),
		Parameter.zinc: ParameterSpec("Zinc", "ppm", "ppm"),
		Parameter.copper: ParameterSpec("Copper", "ppm", "ppm"),
		Parameter.boron: ParameterSpec("Boron", "ppm", "ppm"),
		Parameter.molybdenum: ParameterSpec("Molybdenum", "ppm", "ppm"),
		Parameter.sodium: ParameterSpec("Sodium", "ppm", "%"),
		Parameter.chloride: ParameterSpec("Chloride", "ppm", "%"),
		Parameter.carbonate: ParameterSpec("Carbonate", "meq/L", "meq/L"),
		Parameter.bicarbonate: ParameterSpec("Bicarbonate", "meq/L", "meq/L"),
	}
)


def format_value(value: float) -> str:
	"""Render a measurement the way it was entered (``5.0`` -> ``5``, ``8.2`` -> ``8.2``)."""
	if float(value).is_integer():
		return str(int(value))
	return repr(float(value))


class ParameterSet(Mapping[Parameter, float]):
	"""Immutable ``Parameter -> float`` map; every value is a finite real number.

	Rule sets only ever see this type. Anything else (unknown keys, NaN,
	infinities, strings) is a caller bug and raises
	:class:`InvalidParameterValueError` at construction time.
	"""

	__slots__ = ("_values",)

	def __init__(self, values: Mapping[Parameter | str, Any] | None = None) -> None:
		checked: dict[Parameter, float] = {}
		for key, value in (values or {}).items():
			try:
				parameter = Parameter(key)
			except ValueError as exc:
				raise InvalidParameterValueError(f"unknown canonical parameter: {key!r}") from exc
			if isinstance(value, bool) or not isinstance(value, (int, float)):
				raise InvalidParameterValueError(
					f"{parameter.value}: expected a number, got {type(value).__name__}"
				)
			number = float(value)
			if not math.isfinite(number):
				raise InvalidParameterValueError(f"{parameter.value}: value must be finite, got {value!r}")
			checked[parameter] = number
		self._values: Mapping[Parameter, float] = MappingProxyType(checked)

	def __getitem__(self, key: Parameter) -> float:
		return self._values[key]

	def __iter__(self) -> Iterator[Parameter]:
		return iter(self._values)

	def __len__(self) -> int:
		return len(self._values)

	def __repr__(self) -> str:
		body = ", ".join(f"{key.value}={value!r}" for key, value in self._values.items())
		return f"ParameterSet({body})"

	def as_dict(self) -> dict[str, float]:
		return {key.value: value for key, value in self._values.items()}
