"""Threshold-cascade machinery shared by the soil and petiole rule sets.

A :class:`ParameterRule` is an ordered list of :class:`Band` s. The first band
whose range contains the measured value (and whose optional condition on one
other parameter holds) fires; every cascade ends in a catch-all band, so a
present parameter always yields exactly one recommendation.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass, field

from vinelab.engine.parameters import ParameterSet, format_value
from vinelab.engine.treatments import TreatmentTable
from vinelab.models.enums import Parameter, PriorityEnum, RecommendationTypeEnum, TestTypeEnum
from vinelab.schemas.lab_tests import Recommendation


@dataclass(frozen=True, slots=True)
class Threshold:
	low: float = -math.inf
	high: float = math.inf
	low_inclusive: bool = True
	high_inclusive: bool = True

	def contains(self, value: float) -> bool:
		above_low = value >= self.low if self.low_inclusive else value > self.low
		below_high = value <= self.high if self.high_inclusive else value < self.high
		return above_low and below_high


def below(value: float) -> Threshold:
	return Threshold(high=value, high_inclusive=False)


def above(value: float) -> Threshold:
	return Threshold(low=value, low_inclusive=False)


def at_least(value: float) -> Threshold:
	return Threshold(low=value)


def between(low: float, high: float) -> Threshold:
	return Threshold(low=low, high=high)


ANY = Threshold()


@dataclass(frozen=True, slots=True)
class Condition:
	"""Guard on a second parameter; an absent parameter never satisfies it."""

	parameter: Parameter
	threshold: Threshold

	def holds(self, parameters: ParameterSet) -> bool:
		value = parameters.get(self.parameter)
		return value is not None and self.threshold.contains(value)


@dataclass(frozen=True, slots=True)
class Band:
	threshold: Threshold
	priority: PriorityEnum
	type: RecommendationTypeEnum
	icon: str
	technical: str
	simple: str
	treatments: tuple[str, ...] = ()
	when: Condition | None = None

	def matches(self, value: float, parameters: ParameterSet) -> bool:
		if not self.threshold.contains(value):
			return False
		return self.when is None or self.when.holds(parameters)


@dataclass(frozen=True, slots=True)
class ParameterRule:
	parameter: Parameter
	label: str
	bands: tuple[Band, ...]

	def __post_init__(self) -> None:
		if not self.bands:
			raise ValueError(f"{self.parameter.value}: rule needs at least one band")
		last = self.bands[-1]
		if last.threshold != ANY or last.when is not None:
			raise ValueError(f"{self.parameter.value}: last band must be an unconditional catch-all")

	def referenced_parameters(self) -> set[Parameter]:
		return {self.parameter} | {band.when.parameter for band in self.bands if band.when is not None}

	def evaluate(self, parameters: ParameterSet, treatments: TreatmentTable) -> Recommendation | None:
		value = parameters.get(self.parameter)
		if value is None:
			return None
		band = next(band for band in self.bands if band.matches(value, parameters))
		context = {"value": format_value(value), "dose": treatments.dosages()}
		return Recommendation(
			priority=band.priority,
			type=band.type,
			parameter=self.label,
			technical=band.technical.format(**context),
			simple=band.simple.format(**context),
			icon=band.icon,
			treatments=band.treatments,
		)


@dataclass(frozen=True)
class RuleSet:
	test_type: TestTypeEnum
	rules: tuple[ParameterRule, ...] = field(default_factory=tuple)

	def __iter__(self) -> Iterator[ParameterRule]:
		return iter(self.rules)

	def treatment_keys(self) -> set[str]:
		return {key for rule in self.rules for band in rule.bands for key in band.treatments}

	def generate(self, parameters: ParameterSet, treatments: TreatmentTable) -> list[Recommendation]:
		"""One recommendation per present parameter, in rule declaration order."""
		recommendations: list[Recommendation] = []
		for rule in self.rules:
			recommendation = rule.evaluate(parameters, treatments)
			if recommendation is not None:
				recommendations.append(recommendation)
		return recommendations


# Display icons
ICON_CRITICAL = "🔴"
ICON_HIGH = "🟡"
ICON_WATCH = "⚠️"
ICON_OPTIMAL = "✅"
ICON_SAVINGS = "💰"
