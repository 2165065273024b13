"""Plausibility gate: reject lab values that can only be data-entry errors."""

from __future__ import annotations

import logging
from collections.abc import Collection, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from vinelab.engine.parameters import ParameterSet, format_value
from vinelab.models.enums import Parameter, PriorityEnum, RecommendationTypeEnum, TestTypeEnum
from vinelab.schemas.lab_tests import Recommendation

_logger = logging.getLogger("vinelab.engine.validation")

DATA_QUALITY = "Data Quality"


@dataclass(frozen=True, slots=True)
class ValidationRange:
	min: float
	max: float

	def __post_init__(self) -> None:
		if self.min > self.max:
			raise ValueError(f"invalid validation range: {self.min} > {self.max}")

	def contains(self, value: float) -> bool:
		return self.min <= value <= self.max

	def describe(self) -> str:
		return f"{format_value(self.min)}-{format_value(self.max)}"


def _ranges(bounds: Mapping[Parameter, tuple[float, float]]) -> Mapping[Parameter, ValidationRange]:
	return MappingProxyType({key: ValidationRange(low, high) for key, (low, high) in bounds.items()})


SOIL_VALIDATION_RANGES = _ranges(
	{
		Parameter.ph: (0, 14),
		Parameter.ec: (0, 20),
		Parameter.organic_carbon: (0, 20),
		Parameter.organic_matter: (0, 30),
		Parameter.nitrogen: (0, 2000),
		Parameter.phosphorus: (0, 500),
		Parameter.potassium: (0, 3000),
		Parameter.calcium: (0, 20000),
		Parameter.calcium_carbonate: (0, 100),
		Parameter.magnesium: (0, 5000),
		Parameter.sulfur: (0, 1000),
		Parameter.iron: (0, 1000),
		Parameter.manganese: (0, 500),
		Parameter.zinc: (0, 100),
		Parameter.copper: (0, 100),
		Parameter.boron: (0, 10),
		Parameter.molybdenum: (0, 10),
		Parameter.sodium: (0, 10000),
		Parameter.chloride: (0, 10000),
		Parameter.carbonate: (0, 100),
		Parameter.bicarbonate: (0, 100),
	}
)

PETIOLE_VALIDATION_RANGES = _ranges(
	{
		Parameter.total_nitrogen: (0, 10),
		Parameter.nitrate_nitrogen: (0, 10000),
		Parameter.ammonical_nitrogen: (0, 10000),
		Parameter.phosphorus: (0, 2),
		Parameter.potassium: (0, 6),
		Parameter.calcium: (0, 6),
		Parameter.magnesium: (0, 3),
		Parameter.sulfur: (0, 2),
		Parameter.iron: (0, 500),
		Parameter.manganese: (0, 500),
		Parameter.zinc: (0, 500),
		Parameter.copper: (0, 200),
		Parameter.boron: (0, 300),
		Parameter.molybdenum: (0, 10),
		Parameter.sodium: (0, 5),
		Parameter.chloride: (0, 5),
	}
)

VALIDATION_RANGES: Mapping[TestTypeEnum, Mapping[Parameter, ValidationRange]] = MappingProxyType(
	{
		TestTypeEnum.soil: SOIL_VALIDATION_RANGES,
		TestTypeEnum.petiole: PETIOLE_VALIDATION_RANGES,
	}
)


def validate(
	test_type: TestTypeEnum,
	parameters: ParameterSet,
	ranges: Mapping[TestTypeEnum, Mapping[Parameter, ValidationRange]] = VALIDATION_RANGES,
	non_finite: Collection[Parameter] = (),
) -> list[str]:
	"""Canonical names of out-of-range or non-finite parameters, in vocabulary order.

	``non_finite`` names parameters whose raw value was NaN or infinite and so
	never reached ``parameters``.
	"""
	table = ranges[TestTypeEnum(test_type)]
	return [
		parameter.value
		for parameter in Parameter
		if parameter in table
		and (
			parameter in non_finite
			or (parameter in parameters and not table[parameter].contains(parameters[parameter]))
		)
	]


def _violation_detail(
	name: str,
	parameters: ParameterSet,
	table: Mapping[Parameter, ValidationRange],
	non_finite: Collection[Parameter],
) -> str:
	parameter = Parameter(name)
	if parameter in non_finite:
		return f"{name} (not a finite number)"
	return f"{name} ({format_value(parameters[parameter])} outside {table[parameter].describe()})"


def data_quality_recommendation(
	test_type: TestTypeEnum,
	violations: list[str],
	parameters: ParameterSet,
	ranges: Mapping[TestTypeEnum, Mapping[Parameter, ValidationRange]] = VALIDATION_RANGES,
	non_finite: Collection[Parameter] = (),
) -> Recommendation:
	table = ranges[TestTypeEnum(test_type)]
	details = ", ".join(_violation_detail(name, parameters, table, non_finite) for name in violations)
	_logger.warning(
		"lab_test_validation_failed",
		extra={"test_type": TestTypeEnum(test_type).value, "parameters": violations},
	)
	return Recommendation(
		priority=PriorityEnum.critical,
		type=RecommendationTypeEnum.action,
		parameter=DATA_QUALITY,
		technical=(
			f"Invalid test data: {details}. These values are not physically plausible "
			f"for a {TestTypeEnum(test_type).value} test. Verify the lab report and re-enter the values "
			"before acting on any recommendation."
		),
		simple="काही चाचणी मूल्ये चुकीची दिसत आहेत. अहवाल तपासा. / Some test values look wrong. Please check the lab report.",
		icon="🔴",
	)
