"""LabTestEngine: the pure recommendation / plan / reminder pipeline."""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from vinelab.engine import disease_risk, planner, reminders
from vinelab.engine.normalizer import non_finite_parameters, normalize_parameters
from vinelab.engine.priority import sort_recommendations
from vinelab.engine.tables import RuleTables, default_tables
from vinelab.engine.validation import data_quality_recommendation, validate
from vinelab.models.enums import TestTypeEnum
from vinelab.schemas.lab_tests import (
	DiseaseRiskAlert,
	FertilizerPlanItem,
	Recommendation,
	ReminderStatus,
	TestRecord,
)

_logger = logging.getLogger("vinelab.engine.core")


class LabTestEngine:
	"""Stateless apart from the immutable :class:`RuleTables` it is built with.

	Identical inputs always give identical outputs; nothing here performs I/O
	or reads the clock.
	"""

	def __init__(self, tables: RuleTables | None = None) -> None:
		self._tables = tables or default_tables()

	@property
	def tables(self) -> RuleTables:
		return self._tables

	# ── Recommendations ────────────────────────────────────────────────────

	def recommend(self, test_type: TestTypeEnum | str, raw_parameters: Mapping[str, Any]) -> list[Recommendation]:
		"""normalize → validate → rule set (or data-quality short-circuit) → priority sort."""
		test_type = TestTypeEnum(test_type)
		parameters = normalize_parameters(raw_parameters)
		non_finite = non_finite_parameters(raw_parameters)

		ranges = self._tables.validation_ranges
		violations = validate(test_type, parameters, ranges, non_finite)
		if violations:
			return [data_quality_recommendation(test_type, violations, parameters, ranges, non_finite)]

		generated = self._tables.rule_set(test_type).generate(parameters, self._tables.treatments)
		_logger.debug(
			"lab_test_recommendations_generated",
			extra={"test_type": test_type.value, "count": len(generated)},
		)
		return sort_recommendations(generated)

	def soil_recommendations(self, raw_parameters: Mapping[str, Any]) -> list[Recommendation]:
		return self.recommend(TestTypeEnum.soil, raw_parameters)

	def petiole_recommendations(self, raw_parameters: Mapping[str, Any]) -> list[Recommendation]:
		return self.recommend(TestTypeEnum.petiole, raw_parameters)

	# ── Disease risk ───────────────────────────────────────────────────────

	def disease_risk_alerts(
		self, test_type: TestTypeEnum | str, raw_parameters: Mapping[str, Any]
	) -> list[DiseaseRiskAlert]:
		"""Disease pressure implied by the nutrient levels; none for data that fails validation."""
		test_type = TestTypeEnum(test_type)
		parameters = normalize_parameters(raw_parameters)
		non_finite = non_finite_parameters(raw_parameters)
		if validate(test_type, parameters, self._tables.validation_ranges, non_finite):
			return []
		return disease_risk.disease_risk_alerts(test_type, parameters, self._tables.disease_risks)

	# ── Planning ───────────────────────────────────────────────────────────

	def plan(
		self,
		test_record: TestRecord,
		recommendations: Sequence[Recommendation],
		start_date: dt.date,
	) -> list[FertilizerPlanItem]:
		return planner.build_plan(
			test_record,
			sort_recommendations(recommendations),
			start_date,
			treatments=self._tables.treatments,
			follow_up_months=self._tables.follow_up_months,
			maintenance_months=self._tables.maintenance_months,
		)

	# ── Reminders ──────────────────────────────────────────────────────────

	def reminders(self, soil_age_days: int | None, petiole_age_days: int | None) -> ReminderStatus:
		return reminders.check_test_reminders(
			soil_age_days,
			petiole_age_days,
			soil_interval=self._tables.soil_interval_days,
			petiole_interval=self._tables.petiole_interval_days,
		)
