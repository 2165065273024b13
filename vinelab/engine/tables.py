"""Immutable rule tables injected into :class:`~vinelab.engine.core.LabTestEngine`."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from vinelab.engine.disease_risk import DISEASE_RISK_RULES, DiseaseRiskRule
from vinelab.engine.petiole_rules import PETIOLE_RULES
from vinelab.engine.reminders import DEFAULT_PETIOLE_INTERVAL_DAYS, DEFAULT_SOIL_INTERVAL_DAYS
from vinelab.engine.rules import RuleSet
from vinelab.engine.soil_rules import SOIL_RULES
from vinelab.engine.treatments import TreatmentTable, default_treatment_table
from vinelab.engine.validation import VALIDATION_RANGES, ValidationRange
from vinelab.models.enums import Parameter, TestTypeEnum

if TYPE_CHECKING:
	from vinelab.config import Settings


@dataclass(frozen=True)
class RuleTables:
	validation_ranges: Mapping[TestTypeEnum, Mapping[Parameter, ValidationRange]] = field(
		default_factory=lambda: VALIDATION_RANGES
	)
	rule_sets: Mapping[TestTypeEnum, RuleSet] = field(
		default_factory=lambda: {TestTypeEnum.soil: SOIL_RULES, TestTypeEnum.petiole: PETIOLE_RULES}
	)
	treatments: TreatmentTable = field(default_factory=default_treatment_table)
	disease_risks: Mapping[TestTypeEnum, tuple[DiseaseRiskRule, ...]] = field(
		default_factory=lambda: DISEASE_RISK_RULES
	)
	soil_interval_days: int = DEFAULT_SOIL_INTERVAL_DAYS
	petiole_interval_days: int = DEFAULT_PETIOLE_INTERVAL_DAYS
	follow_up_months: int = 2
	maintenance_months: int = 3

	def __post_init__(self) -> None:
		object.__setattr__(self, "validation_ranges", MappingProxyType(dict(self.validation_ranges)))
		object.__setattr__(self, "rule_sets", MappingProxyType(dict(self.rule_sets)))
		object.__setattr__(
			self, "disease_risks", MappingProxyType({key: tuple(rules) for key, rules in self.disease_risks.items()})
		)
		for test_type in TestTypeEnum:
			if test_type not in self.rule_sets:
				raise ValueError(f"no rule set configured for {test_type.value} tests")
			if test_type not in self.validation_ranges:
				raise ValueError(f"no validation ranges configured for {test_type.value} tests")
			if test_type not in self.disease_risks:
				raise ValueError(f"no disease risk rules configured for {test_type.value} tests")
		for rule_set in self.rule_sets.values():
			self.treatments.require(rule_set.treatment_keys())
		if self.follow_up_months < 1 or self.maintenance_months < 1:
			raise ValueError("plan offsets must be at least one month")

	def rule_set(self, test_type: TestTypeEnum | str) -> RuleSet:
		return self.rule_sets[TestTypeEnum(test_type)]

	@classmethod
	def from_settings(cls, settings: Settings) -> RuleTables:
		return cls(
			soil_interval_days=settings.soil_test_interval_days,
			petiole_interval_days=settings.petiole_test_interval_days,
			follow_up_months=settings.plan_follow_up_months,
			maintenance_months=settings.plan_maintenance_months,
		)


def default_tables() -> RuleTables:
	return RuleTables()
