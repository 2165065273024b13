from __future__ import annotations

import pytest

from vinelab.engine import generate_petiole_test_recommendations
from vinelab.models.enums import PriorityEnum, RecommendationTypeEnum


def _by_parameter(recs: list) -> dict:
	return {rec.parameter: rec for rec in recs}


def test_low_nitrogen_prescribes_foliar_urea_and_fertigation() -> None:
	(rec,) = generate_petiole_test_recommendations({"Total Nitrogen": 1.6})

	assert rec.parameter == "Nitrogen"
	assert rec.priority == PriorityEnum.high
	assert "1.6%" in rec.technical
	assert rec.treatments == ("petiole_urea_foliar", "petiole_can_fertigation")


def test_generic_nitrogen_key_is_not_read_by_petiole_rules() -> None:
	assert generate_petiole_test_recommendations({"nitrogen": 1.0}) == []


@pytest.mark.parametrize(
	("potassium", "priority", "rec_type"),
	[
		(1.2, PriorityEnum.critical, RecommendationTypeEnum.action),
		(1.5, PriorityEnum.high, RecommendationTypeEnum.action),
		(2.0, PriorityEnum.optimal, RecommendationTypeEnum.optimal),
		(3.5, PriorityEnum.optimal, RecommendationTypeEnum.optimal),
		(3.6, PriorityEnum.moderate, RecommendationTypeEnum.watch),
	],
)
def test_potassium_band_boundaries(potassium: float, priority: PriorityEnum, rec_type: RecommendationTypeEnum) -> None:
	(rec,) = generate_petiole_test_recommendations({"potassium": potassium})

	assert (rec.priority, rec.type) == (priority, rec_type)


def test_calcium_and_magnesium_have_two_optimal_bands() -> None:
	excellent = _by_parameter(generate_petiole_test_recommendations({"calcium": 3.8, "magnesium": 1.2}))
	adequate = _by_parameter(generate_petiole_test_recommendations({"calcium": 2.0, "magnesium": 0.6}))

	assert excellent["Calcium"].technical.startswith("Excellent")
	assert adequate["Calcium"].technical.startswith("Petiole calcium is adequate")
	assert excellent["Magnesium"].priority == adequate["Magnesium"].priority == PriorityEnum.optimal


def test_ferrous_key_feeds_iron_rule() -> None:
	(rec,) = generate_petiole_test_recommendations({"Ferrous": 32})

	assert rec.parameter == "Iron"
	assert rec.type == RecommendationTypeEnum.action
	assert rec.treatments == ("petiole_iron_foliar",)


def test_micronutrients_above_limits_are_optimal() -> None:
	recs = generate_petiole_test_recommendations(
		{"zinc": 45, "boron": 40, "iron": 80, "manganese": 60, "copper": 9, "sulphur": 0.3}
	)

	assert {rec.priority for rec in recs} == {PriorityEnum.optimal}
	assert len(recs) == 6


def test_petiole_output_is_sorted_most_urgent_first() -> None:
	recs = generate_petiole_test_recommendations(
		{"total_nitrogen": 2.5, "phosphorus": 0.1, "potassium": 1.0, "zinc": 10}
	)

	assert [rec.parameter for rec in recs] == ["Potassium", "Phosphorus", "Zinc", "Nitrogen"]
