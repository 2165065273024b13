from __future__ import annotations

import pytest

from vinelab.engine import RuleTables, generate_disease_risk_alerts
from vinelab.engine.disease_risk import DISEASE_RISK_RULES, disease_risk_alerts
from vinelab.engine.normalizer import normalize_parameters
from vinelab.models.enums import RiskLevelEnum, TestTypeEnum


@pytest.mark.parametrize(
	("raw", "nutrient", "level"),
	[
		({"calcium": 1000}, None, None),
		({"calcium": 999}, "calcium", RiskLevelEnum.medium),
		({"calcium": 800}, "calcium", RiskLevelEnum.medium),
		({"calcium": 799}, "calcium", RiskLevelEnum.high),
		({"potassium": 200}, None, None),
		({"potassium": 150}, "potassium", RiskLevelEnum.medium),
		({"potassium": 149}, "potassium", RiskLevelEnum.high),
		({"nitrogen": 400}, None, None),
		({"nitrogen": 450}, "nitrogen_excess", RiskLevelEnum.medium),
		({"nitrogen": 501}, "nitrogen_excess", RiskLevelEnum.high),
		({"magnesium": 119}, "magnesium", RiskLevelEnum.low),
		({"magnesium": 10}, "magnesium", RiskLevelEnum.low),
		({"magnesium": 120}, None, None),
		({"boron": 0.5}, None, None),
		({"boron": 0.3}, "boron", RiskLevelEnum.medium),
		({"boron": 0.2}, "boron", RiskLevelEnum.high),
	],
)
def test_soil_thresholds(raw: dict, nutrient: str | None, level: RiskLevelEnum | None) -> None:
	alerts = generate_disease_risk_alerts("soil", raw)

	if nutrient is None:
		assert alerts == []
	else:
		(alert,) = alerts
		assert (alert.nutrient, alert.risk_level) == (nutrient, level)
		assert alert.test_type == TestTypeEnum.soil


@pytest.mark.parametrize(
	("raw", "nutrient", "level"),
	[
		({"calcium": 1.5}, None, None),
		({"calcium": 1.3}, "calcium", RiskLevelEnum.medium),
		({"calcium": 1.1}, "calcium", RiskLevelEnum.high),
		({"potassium": 1.2}, "potassium", RiskLevelEnum.medium),
		({"potassium": 1.19}, "potassium", RiskLevelEnum.high),
		({"total nitrogen": 4.0}, None, None),
		({"total nitrogen": 4.5}, "nitrogen_excess", RiskLevelEnum.medium),
		({"total nitrogen": 5.1}, "nitrogen_excess", RiskLevelEnum.high),
		({"magnesium": 0.29}, "magnesium", RiskLevelEnum.low),
		({"magnesium": 0.3}, None, None),
		({"boron": 30}, None, None),
		({"boron": 25}, "boron", RiskLevelEnum.medium),
		({"boron": 19}, "boron", RiskLevelEnum.high),
	],
)
def test_petiole_thresholds(raw: dict, nutrient: str | None, level: RiskLevelEnum | None) -> None:
	alerts = generate_disease_risk_alerts("petiole", raw)

	if nutrient is None:
		assert alerts == []
	else:
		(alert,) = alerts
		assert (alert.nutrient, alert.risk_level) == (nutrient, level)


def test_alert_carries_diseases_and_preventive_actions() -> None:
	(alert,) = generate_disease_risk_alerts("petiole", {"Calcium": 1.0})

	assert alert.disease_risks == ("Powdery Mildew", "Bunch Rot", "Berry Cracking")
	assert alert.risk_explanation.startswith("Low calcium weakens cell walls")
	assert alert.preventive_actions[0] == "Apply calcium nitrate through fertigation at 10-15 kg/acre"


def test_alerts_follow_rule_order() -> None:
	alerts = generate_disease_risk_alerts(
		"soil", {"boron": 0.1, "magnesium": 50, "nitrogen": 600, "potassium": 100, "calcium": 500}
	)

	assert [alert.nutrient for alert in alerts] == [
		"calcium",
		"potassium",
		"nitrogen_excess",
		"magnesium",
		"boron",
	]


def test_soil_nitrogen_key_is_not_read_for_petiole_tests() -> None:
	assert generate_disease_risk_alerts("petiole", {"nitrogen": 4.8}) == []


def test_invalid_data_raises_no_alerts() -> None:
	assert generate_disease_risk_alerts("soil", {"calcium": 500, "ph": 99}) == []
	assert generate_disease_risk_alerts("soil", {"potassium": float("nan"), "calcium": 500}) == []


def test_rule_tables_hold_substitute_disease_rules() -> None:
	tables = RuleTables(disease_risks={TestTypeEnum.soil: (), TestTypeEnum.petiole: ()})
	params = normalize_parameters({"calcium": 100})

	assert disease_risk_alerts(TestTypeEnum.soil, params, tables.disease_risks) == []
	assert disease_risk_alerts(TestTypeEnum.soil, params, DISEASE_RISK_RULES) != []


def test_rule_tables_require_disease_rules_for_every_test_type() -> None:
	with pytest.raises(ValueError, match="disease risk"):
		RuleTables(disease_risks={TestTypeEnum.soil: ()})


def test_disease_risk_table_is_read_only() -> None:
	with pytest.raises(TypeError):
		DISEASE_RISK_RULES[TestTypeEnum.soil] = ()  # type: ignore[index]
