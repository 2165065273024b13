"""Lab-test interpretation and fertilizer-planning engine.

The functions below run against a shared engine built from the default rule
tables. Build a :class:`LabTestEngine` directly to use substitute tables.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Mapping, Sequence
from functools import lru_cache
from typing import Any

from vinelab.engine.core import LabTestEngine
from vinelab.engine.parameters import InvalidParameterValueError, ParameterSet
from vinelab.engine.tables import RuleTables, default_tables
from vinelab.schemas.lab_tests import (
	DiseaseRiskAlert,
	FertilizerPlanItem,
	Recommendation,
	ReminderStatus,
	TestRecord,
)

__all__ = [
	"InvalidParameterValueError",
	"LabTestEngine",
	"ParameterSet",
	"RuleTables",
	"check_test_reminders",
	"default_engine",
	"default_tables",
	"generate_disease_risk_alerts",
	"generate_fertilizer_plan",
	"generate_petiole_test_recommendations",
	"generate_soil_test_recommendations",
]


@lru_cache
def default_engine() -> LabTestEngine:
	return LabTestEngine(default_tables())


def generate_soil_test_recommendations(parameters: Mapping[str, Any]) -> list[Recommendation]:
	return default_engine().soil_recommendations(parameters)


def generate_petiole_test_recommendations(parameters: Mapping[str, Any]) -> list[Recommendation]:
	return default_engine().petiole_recommendations(parameters)


def generate_disease_risk_alerts(test_type: str, parameters: Mapping[str, Any]) -> list[DiseaseRiskAlert]:
	return default_engine().disease_risk_alerts(test_type, parameters)


def generate_fertilizer_plan(
	test_record: TestRecord,
	recommendations: Sequence[Recommendation],
	start_date: dt.date,
) -> list[FertilizerPlanItem]:
	return default_engine().plan(test_record, recommendations, start_date)


def check_test_reminders(soil_age_days: int | None, petiole_age_days: int | None) -> ReminderStatus:
	return default_engine().reminders(soil_age_days, petiole_age_days)
