"""Turn urgent lab-test recommendations into a dated fertilizer schedule.

Applications come from the shared treatment table. Recommendations produced
by the rule sets carry their treatment keys; recommendations assembled by a
caller (no keys) are matched against the table by parameter and keywords in
their technical text, with the quoted dosage preferred over the table value.
"""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Iterable, Sequence

from dateutil.relativedelta import relativedelta

from vinelab.engine.normalizer import normalize_parameters
from vinelab.engine.treatments import TreatmentTable
from vinelab.engine.validation import DATA_QUALITY
from vinelab.models.enums import Parameter, PriorityEnum, RecommendationTypeEnum, TestTypeEnum
from vinelab.schemas.lab_tests import (
	FertilizerApplication,
	FertilizerPlanItem,
	PlanSummary,
	Recommendation,
	TestRecord,
)

_logger = logging.getLogger("vinelab.engine.planner")

_URGENT = frozenset({PriorityEnum.critical, PriorityEnum.high})

IMMEDIATE_STAGE = {
	TestTypeEnum.soil: (
		"Pre-season / Bud Break",
		"Priority applications based on soil test. Apply before active growth begins.",
	),
	TestTypeEnum.petiole: (
		"Immediate Corrective Action",
		"Apply within 7 days based on petiole test results. Monitor plant response after 10-14 days.",
	),
}

FOLLOW_UP_STAGE = "Vegetative Growth"
FOLLOW_UP_NOTES = "Test soil again to confirm pH has reached optimal range after correction."
FOLLOW_UP_SOURCE = "pH monitoring"

MAINTENANCE_STAGE = "Flowering / Fruit Set"
MAINTENANCE_NOTES = "Regular fertigation schedule to support fruit development."
MAINTENANCE_SOURCE = "Maintenance"
MAINTENANCE_NITROGEN_RANGE = (150.0, 400.0)


def urgent_actions(recommendations: Iterable[Recommendation]) -> list[Recommendation]:
	return [
		rec
		for rec in recommendations
		if rec.priority in _URGENT and rec.type == RecommendationTypeEnum.action
	]


def _month_label(date: dt.date) -> str:
	return date.strftime("%B %Y")


def _application(table: TreatmentTable, key: str, source: str, dosage: str | None = None) -> FertilizerApplication:
	treatment = table[key]
	return FertilizerApplication(
		product=treatment.product,
		dosage=dosage or treatment.dosage,
		method=treatment.method,
		purpose=treatment.purpose,
		recommendation_source=source,
	)


def resolve_applications(
	test_type: TestTypeEnum,
	recommendation: Recommendation,
	table: TreatmentTable,
) -> list[FertilizerApplication]:
	if recommendation.treatments:
		table.require(recommendation.treatments)
		return [_application(table, key, recommendation.parameter) for key in recommendation.treatments]

	keys = table.match_text(test_type, recommendation.parameter, recommendation.technical)
	return [
		_application(table, key, recommendation.parameter, table[key].dosage_from(recommendation.technical))
		for key in keys
	]


def build_plan(
	test_record: TestRecord,
	recommendations: Sequence[Recommendation],
	start_date: dt.date,
	*,
	treatments: TreatmentTable,
	follow_up_months: int = 2,
	maintenance_months: int = 3,
) -> list[FertilizerPlanItem]:
	"""Schedule the critical/high actions of ``recommendations``.

	Returns ``[]`` when there is nothing urgent to act on, or when the
	recommendations are a data-quality rejection.
	"""
	actions = urgent_actions(recommendations)
	if not actions:
		return []
	if any(rec.parameter == DATA_QUALITY for rec in actions):
		_logger.info("fertilizer_plan_skipped", extra={"reason": "data_quality", "farm_id": test_record.farm_id})
		return []

	test_type = TestTypeEnum(test_record.test_type)
	plan: list[FertilizerPlanItem] = []

	immediate = [app for rec in actions for app in resolve_applications(test_type, rec, treatments)]
	if immediate:
		stage, notes = IMMEDIATE_STAGE[test_type]
		plan.append(
			FertilizerPlanItem(
				month=_month_label(start_date),
				date=start_date,
				growth_stage=stage,
				applications=tuple(immediate),
				notes=notes,
			)
		)

	if test_type == TestTypeEnum.soil:
		if any(rec.parameter == "pH" for rec in actions):
			follow_up = start_date + relativedelta(months=follow_up_months)
			plan.append(
				FertilizerPlanItem(
					month=_month_label(follow_up),
					date=follow_up,
					growth_stage=FOLLOW_UP_STAGE,
					applications=(_application(treatments, "soil_follow_up_test", FOLLOW_UP_SOURCE),),
					notes=FOLLOW_UP_NOTES,
				)
			)

		nitrogen = normalize_parameters(test_record.parameters).get(Parameter.nitrogen)
		low, high = MAINTENANCE_NITROGEN_RANGE
		if nitrogen is not None and low <= nitrogen <= high:
			maintenance = start_date + relativedelta(months=maintenance_months)
			plan.append(
				FertilizerPlanItem(
					month=_month_label(maintenance),
					date=maintenance,
					growth_stage=MAINTENANCE_STAGE,
					applications=(_application(treatments, "soil_npk_maintenance", MAINTENANCE_SOURCE),),
					notes=MAINTENANCE_NOTES,
				)
			)

	plan.sort(key=lambda item: item.date)
	return plan


def summarize_plan(plan: Sequence[FertilizerPlanItem]) -> PlanSummary:
	"""Counts for dashboards: items, applications and calendar months spanned."""
	if not plan:
		return PlanSummary()
	first = min(item.date for item in plan)
	last = max(item.date for item in plan)
	months = (last.year - first.year) * 12 + (last.month - first.month) + 1
	return PlanSummary(
		item_count=len(plan),
		application_count=sum(len(item.applications) for item in plan),
		months=months,
	)
