"""Lab-test application service: recommendations, plans, task drafts, reminders, expense matching."""

from __future__ import annotations

import datetime as dt
import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from vinelab.config import Settings, get_settings
from vinelab.engine import LabTestEngine, RuleTables
from vinelab.engine.planner import summarize_plan
from vinelab.engine.reminders import age_in_days
from vinelab.engine.validation import DATA_QUALITY
from vinelab.models.enums import ApplicationMethodEnum, PriorityEnum, RecommendationTypeEnum, TestTypeEnum
from vinelab.schemas.lab_tests import (
	DiseaseRisksResponse,
	ExpenseMatchResponse,
	FertilizerPlanItem,
	PlanResponse,
	Recommendation,
	RecommendationsResponse,
	ReminderStatus,
	ROIEstimate,
	TaskDraft,
	TestRecord,
)

logger = logging.getLogger("vinelab.services.lab_tests")

_TASK_VERBS: dict[ApplicationMethodEnum, str] = {
	ApplicationMethodEnum.soil: "Apply",
	ApplicationMethodEnum.foliar: "Spray",
	ApplicationMethodEnum.fertigation: "Add to fertigation",
}

# Sources that block the rest of the programme until corrected.
_HIGH_PRIORITY_SOURCES = ("ph", "ec")

EXPENSE_KEYWORDS: tuple[str, ...] = (
	"lime",
	"gypsum",
	"urea",
	"dap",
	"mop",
	"potash",
	"zinc",
	"boron",
	"iron",
	"calcium",
	"magnesium",
	"compost",
)

# First rupee amount in a savings recommendation, e.g. "Save ₹15,000-20,000" -> 15000.
_RUPEE_AMOUNT = re.compile(r"₹([\d,]+)")

# Yield loss (percent) an uncorrected finding is expected to cause.
_YIELD_IMPACT: dict[PriorityEnum, int] = {PriorityEnum.critical: 25, PriorityEnum.high: 12}
MAX_YIELD_IMPACT = 50


class LabTestService:
	"""Service wrapping :class:`LabTestEngine` for the HTTP layer."""

	def __init__(self, engine: LabTestEngine | None = None, settings: Settings | None = None):
		self.settings = settings or get_settings()
		self.engine = engine or LabTestEngine(RuleTables.from_settings(self.settings))

	def recommend(self, test_type: TestTypeEnum, raw_parameters: Mapping[str, Any]) -> RecommendationsResponse:
		recommendations = self.engine.recommend(test_type, raw_parameters)
		data_quality_ok = not any(rec.parameter == DATA_QUALITY for rec in recommendations)
		logger.info(
			"lab_test_recommendations",
			extra={
				"test_type": TestTypeEnum(test_type).value,
				"count": len(recommendations),
				"data_quality_ok": data_quality_ok,
			},
		)
		return RecommendationsResponse(
			test_type=test_type,
			data_quality_ok=data_quality_ok,
			recommendations=recommendations,
		)

	def disease_risks(self, test_type: TestTypeEnum, raw_parameters: Mapping[str, Any]) -> DiseaseRisksResponse:
		alerts = self.engine.disease_risk_alerts(test_type, raw_parameters)
		logger.info(
			"lab_test_disease_risks",
			extra={
				"test_type": TestTypeEnum(test_type).value,
				"nutrients": [alert.nutrient for alert in alerts],
			},
		)
		return DiseaseRisksResponse(test_type=test_type, alerts=alerts)

	def estimate_roi(
		self,
		recommendations: Iterable[Recommendation],
		test_cost: float,
		farm_area: float = 1,
	) -> ROIEstimate:
		"""Return on the cost of a lab test from the savings and yield protection it points to.

		Savings come from the first rupee amount quoted by each ``savings``
		recommendation, scaled by ``farm_area`` in acres. Yield impact adds 25%
		per critical and 12% per high finding, capped at 50%. Only savings
		count towards the ROI percentage.
		"""
		if test_cost <= 0:
			raise ValueError(f"test cost must be positive, got {test_cost}")
		if farm_area <= 0:
			raise ValueError(f"farm area must be positive, got {farm_area}")

		savings = 0.0
		yield_impact = 0
		for recommendation in recommendations:
			if recommendation.type == RecommendationTypeEnum.savings:
				match = _RUPEE_AMOUNT.search(recommendation.simple)
				if match is not None:
					savings += int(match.group(1).replace(",", "")) * farm_area
			yield_impact += _YIELD_IMPACT.get(PriorityEnum(recommendation.priority), 0)

		return ROIEstimate(
			estimated_savings=savings,
			estimated_yield_impact=min(yield_impact, MAX_YIELD_IMPACT),
			estimated_roi=(savings - test_cost) / test_cost * 100,
		)

	def plan(
		self,
		test_record: TestRecord,
		start_date: dt.date,
		recommendations: Sequence[Recommendation] | None = None,
	) -> PlanResponse:
		"""Build the plan from ``recommendations``, regenerating them from the record when omitted."""
		if recommendations is None:
			recommendations = self.engine.recommend(test_record.test_type, test_record.parameters)
		items = self.engine.plan(test_record, recommendations, start_date)
		return PlanResponse(
			test_type=test_record.test_type,
			start_date=start_date,
			items=items,
			summary=summarize_plan(items),
			tasks=self.plan_tasks(items, test_record),
		)

	def plan_tasks(self, plan: Iterable[FertilizerPlanItem], test_record: TestRecord) -> list[TaskDraft]:
		"""One pending fertilization task per scheduled application."""
		test_label = TestTypeEnum(test_record.test_type).value
		tasks: list[TaskDraft] = []
		for item in plan:
			for application in item.applications:
				verb = _TASK_VERBS[ApplicationMethodEnum(application.method)]
				source = application.recommendation_source.lower()
				priority = "high" if any(token in source.split() for token in _HIGH_PRIORITY_SOURCES) else "medium"
				tasks.append(
					TaskDraft(
						farm_id=test_record.farm_id,
						title=f"{verb}: {application.product}",
						description=(
							f"{application.purpose}\n\n"
							f"Dosage: {application.dosage}\n"
							f"Method: {application.method}\n"
							f"Growth Stage: {item.growth_stage}\n\n"
							f"Based on {test_label} test from {test_record.date.isoformat()}"
						),
						due_date=item.date,
						priority=priority,
					)
				)
		return tasks

	def reminders(
		self,
		latest_soil_test_date: dt.date | None,
		latest_petiole_test_date: dt.date | None,
		today: dt.date,
	) -> ReminderStatus:
		return self.engine.reminders(
			age_in_days(latest_soil_test_date, today),
			age_in_days(latest_petiole_test_date, today),
		)

	def match_expense(
		self,
		description: str,
		recommendations: Iterable[Recommendation],
	) -> ExpenseMatchResponse:
		"""First recommendation mentioning a product named in the expense description."""
		lowered = description.lower()
		products = [keyword for keyword in EXPENSE_KEYWORDS if keyword in lowered]
		if products:
			for recommendation in recommendations:
				technical = recommendation.technical.lower()
				if any(keyword in technical for keyword in products):
					return ExpenseMatchResponse(matched=True, recommendation=recommendation)
		return ExpenseMatchResponse(matched=False)
