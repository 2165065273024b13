from __future__ import annotations

import math

import pytest

from vinelab.engine import generate_soil_test_recommendations
from vinelab.engine.normalizer import normalize_parameters
from vinelab.engine.soil_rules import SOIL_RULES
from vinelab.engine.treatments import default_treatment_table
from vinelab.models.enums import PriorityEnum, RecommendationTypeEnum


def _by_parameter(recs: list) -> dict:
	return {rec.parameter: rec for rec in recs}


def test_highly_acidic_soil_needs_heavy_lime() -> None:
	recs = generate_soil_test_recommendations({"ph": 5.0})

	assert len(recs) == 1
	rec = recs[0]
	assert rec.priority == PriorityEnum.critical
	assert rec.type == RecommendationTypeEnum.action
	assert "lime" in rec.technical
	assert "2-3 tons/acre" in rec.technical
	assert "pH 5)" in rec.technical
	assert rec.treatments == ("soil_lime_heavy",)


def test_neutral_ph_is_optimal_without_action() -> None:
	recs = generate_soil_test_recommendations({"ph": 7.0})

	assert len(recs) == 1
	assert recs[0].priority == PriorityEnum.optimal
	assert recs[0].type == RecommendationTypeEnum.optimal
	assert "Apply" not in recs[0].technical
	assert recs[0].treatments == ()


def test_low_phosphorus_with_alkaline_soil_corrects_ph_first() -> None:
	with_ph = _by_parameter(generate_soil_test_recommendations({"phosphorus": 15, "ph": 8.2}))["Phosphorus"]
	alone = _by_parameter(generate_soil_test_recommendations({"phosphorus": 15}))["Phosphorus"]

	assert with_ph.priority == PriorityEnum.high
	assert with_ph.technical.index("gypsum") < with_ph.technical.index("DAP")
	assert with_ph.treatments == ("soil_dap_after_gypsum",)
	assert alone.priority == PriorityEnum.high
	assert "gypsum" not in alone.technical
	assert alone.treatments == ("soil_dap",)
	assert with_ph.technical != alone.technical


@pytest.mark.parametrize(
	("ph", "priority", "rec_type"),
	[
		(5.49, PriorityEnum.critical, RecommendationTypeEnum.action),
		(5.5, PriorityEnum.high, RecommendationTypeEnum.action),
		(5.99, PriorityEnum.high, RecommendationTypeEnum.action),
		(6.0, PriorityEnum.low, RecommendationTypeEnum.watch),
		(6.5, PriorityEnum.optimal, RecommendationTypeEnum.optimal),
		(7.5, PriorityEnum.optimal, RecommendationTypeEnum.optimal),
		(7.8, PriorityEnum.low, RecommendationTypeEnum.watch),
		(8.0, PriorityEnum.low, RecommendationTypeEnum.watch),
		(8.01, PriorityEnum.high, RecommendationTypeEnum.action),
		(8.5, PriorityEnum.high, RecommendationTypeEnum.action),
		(8.51, PriorityEnum.critical, RecommendationTypeEnum.action),
	],
)
def test_ph_band_boundaries(ph: float, priority: PriorityEnum, rec_type: RecommendationTypeEnum) -> None:
	(rec,) = generate_soil_test_recommendations({"ph": ph})

	assert (rec.priority, rec.type) == (priority, rec_type)


@pytest.mark.parametrize(
	("ec", "priority"),
	[
		(4.0, PriorityEnum.critical),
		(2.0, PriorityEnum.high),
		(1.5, PriorityEnum.moderate),
		(1.49, PriorityEnum.optimal),
	],
)
def test_ec_band_boundaries(ec: float, priority: PriorityEnum) -> None:
	(rec,) = generate_soil_test_recommendations({"ec": ec})

	assert rec.priority == priority


def test_nitrogen_bounds_are_inclusive_for_adequate_range() -> None:
	recs = _by_parameter(generate_soil_test_recommendations({"nitrogen": 150}))
	assert recs["Nitrogen"].priority == PriorityEnum.optimal

	recs = _by_parameter(generate_soil_test_recommendations({"nitrogen": 401}))
	assert recs["Nitrogen"].priority == PriorityEnum.moderate
	assert recs["Nitrogen"].type == RecommendationTypeEnum.action


def test_surplus_nutrients_report_savings() -> None:
	recs = _by_parameter(generate_soil_test_recommendations({"phosphorus": 95, "potassium": 620}))

	assert recs["Phosphorus"].type == RecommendationTypeEnum.savings
	assert recs["Potassium"].type == RecommendationTypeEnum.savings
	assert "₹" in recs["Phosphorus"].technical


def test_micronutrient_cascades_close_with_optimal_findings() -> None:
	recs = _by_parameter(
		generate_soil_test_recommendations(
			{"zinc": 0.6, "boron": 0.8, "iron": 3, "sulfur": 40, "manganese": 2, "copper": 1.2}
		)
	)

	assert recs["Zinc"].priority == PriorityEnum.moderate
	assert recs["Boron"].priority == PriorityEnum.optimal
	assert recs["Iron"].treatments == ("soil_ferrous_sulfate",)
	assert recs["Sulfur"].priority == PriorityEnum.optimal
	assert recs["Manganese"].type == RecommendationTypeEnum.action
	assert recs["Copper"].type == RecommendationTypeEnum.optimal


def test_one_recommendation_per_present_parameter() -> None:
	raw = {"ph": 6.2, "ec": 0.4, "N": 90, "P": 45, "K": 250, "OM": 0.8, "Zn": 2, "Mo": 0.1}
	recs = generate_soil_test_recommendations(raw)

	# molybdenum has no rule
	assert sorted(rec.parameter for rec in recs) == sorted(
		["pH", "EC", "Nitrogen", "Phosphorus", "Potassium", "Organic Matter", "Zinc"]
	)


def test_recommendations_are_sorted_by_priority_stably() -> None:
	recs = generate_soil_test_recommendations({"ph": 5.0, "ec": 4.5, "nitrogen": 100, "potassium": 150})

	assert [rec.parameter for rec in recs] == ["pH", "EC", "Nitrogen", "Potassium"]
	assert [rec.priority for rec in recs] == [
		PriorityEnum.critical,
		PriorityEnum.critical,
		PriorityEnum.high,
		PriorityEnum.high,
	]


def test_generation_is_deterministic() -> None:
	raw = {"ph": 8.7, "phosphorus": 12, "organic matter": "2.1 %"}

	assert generate_soil_test_recommendations(raw) == generate_soil_test_recommendations(raw)


def test_empty_or_unparseable_input_yields_no_recommendations() -> None:
	assert generate_soil_test_recommendations({}) == []
	assert generate_soil_test_recommendations({"ph": "pending", "texture": "loam"}) == []


def test_non_finite_input_is_a_data_quality_finding() -> None:
	recs = generate_soil_test_recommendations({"ph": math.nan, "ec": math.inf})

	assert len(recs) == 1
	assert recs[0].priority == PriorityEnum.critical
	assert recs[0].parameter == "Data Quality"


def test_rule_text_quotes_table_dosages() -> None:
	table = default_treatment_table()
	recs = SOIL_RULES.generate(normalize_parameters({"nitrogen": 100, "potassium": 120}), table)

	for rec in recs:
		for key in rec.treatments:
			assert table[key].dosage in rec.technical
