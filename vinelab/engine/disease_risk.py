"""Nutrient imbalances that raise disease pressure in the vineyard.

Each :class:`DiseaseRiskRule` watches one parameter per test type. A value
inside ``trigger`` raises an alert; the alert is ``high`` when the value is
also inside ``severe``, otherwise it takes the rule's default ``level``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from vinelab.engine.parameters import ParameterSet
from vinelab.engine.rules import Threshold, above, below
from vinelab.models.enums import Parameter, RiskLevelEnum, TestTypeEnum
from vinelab.schemas.lab_tests import DiseaseRiskAlert


@dataclass(frozen=True, slots=True)
class RiskProfile:
	diseases: tuple[str, ...]
	explanation: str
	prevention: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class DiseaseRiskRule:
	nutrient: str
	parameter: Parameter
	trigger: Threshold
	profile: RiskProfile
	severe: Threshold | None = None
	level: RiskLevelEnum = RiskLevelEnum.medium

	def evaluate(self, test_type: TestTypeEnum, parameters: ParameterSet) -> DiseaseRiskAlert | None:
		value = parameters.get(self.parameter)
		if value is None or not self.trigger.contains(value):
			return None
		severe = self.severe is not None and self.severe.contains(value)
		return DiseaseRiskAlert(
			test_type=test_type,
			nutrient=self.nutrient,
			risk_level=RiskLevelEnum.high if severe else self.level,
			disease_risks=self.profile.diseases,
			risk_explanation=self.profile.explanation,
			preventive_actions=self.profile.prevention,
		)


# ── Risk profiles ───────────────────────────────────────────────────────────

LOW_CALCIUM = RiskProfile(
	("Powdery Mildew", "Bunch Rot", "Berry Cracking"),
	"Low calcium weakens cell walls, making vines more susceptible to powdery mildew and bunch rot. "
	"Berry cracking is also more common.",
	(
		"Apply calcium nitrate through fertigation at 10-15 kg/acre",
		"Foliar spray of calcium chloride during berry development",
		"Monitor for early signs of powdery mildew (white powdery spots on leaves)",
	),
)

LOW_POTASSIUM = RiskProfile(
	("Downy Mildew", "General Weakness", "Pest Susceptibility"),
	"Low potassium weakens overall vine health and disease resistance. "
	"Vines become more vulnerable to pests and fungal diseases.",
	(
		"Apply potassium sulfate through fertigation at 15-20 kg/acre",
		"Foliar spray of potassium nitrate",
		"Increase pest monitoring during low-K periods",
	),
)

EXCESS_NITROGEN = RiskProfile(
	("Fungal Diseases", "Soft Growth", "Botrytis"),
	"Excess nitrogen causes soft, succulent growth that is highly prone to fungal infections "
	"and botrytis bunch rot.",
	(
		"Reduce nitrogen fertilization immediately",
		"Improve air circulation through pruning",
		"Increase fungicide application frequency",
	),
)

LOW_MAGNESIUM = RiskProfile(
	("Chlorosis", "Poor Photosynthesis"),
	"Magnesium deficiency causes interveinal chlorosis (yellowing between leaf veins) and reduces "
	"photosynthesis efficiency.",
	(
		"Apply Epsom salt (magnesium sulfate) at 10-15 kg/acre",
		"Foliar spray of magnesium sulfate (1%)",
		"Monitor for improved leaf greenness",
	),
)

LOW_BORON = RiskProfile(
	("Poor Fruit Set", "Bunch Necrosis"),
	"Boron deficiency causes poor fruit set, reduced berry size, and bunch necrosis (browning).",
	(
		"Apply borax at 5-10 kg/acre before flowering",
		"Foliar spray of boric acid (0.1-0.2%) during bloom",
		"Critical timing: just before and after flowering",
	),
)

# ── Rules per test type ─────────────────────────────────────────────────────

SOIL_DISEASE_RISKS: tuple[DiseaseRiskRule, ...] = (
	DiseaseRiskRule("calcium", Parameter.calcium, below(1000), LOW_CALCIUM, severe=below(800)),
	DiseaseRiskRule("potassium", Parameter.potassium, below(200), LOW_POTASSIUM, severe=below(150)),
	DiseaseRiskRule("nitrogen_excess", Parameter.nitrogen, above(400), EXCESS_NITROGEN, severe=above(500)),
	DiseaseRiskRule("magnesium", Parameter.magnesium, below(120), LOW_MAGNESIUM, level=RiskLevelEnum.low),
	DiseaseRiskRule("boron", Parameter.boron, below(0.5), LOW_BORON, severe=below(0.3)),
)

# Petiole thresholds are percentages except boron, which is ppm.
PETIOLE_DISEASE_RISKS: tuple[DiseaseRiskRule, ...] = (
	DiseaseRiskRule("calcium", Parameter.calcium, below(1.5), LOW_CALCIUM, severe=below(1.2)),
	DiseaseRiskRule("potassium", Parameter.potassium, below(1.5), LOW_POTASSIUM, severe=below(1.2)),
	DiseaseRiskRule(
		"nitrogen_excess", Parameter.total_nitrogen, above(4.0), EXCESS_NITROGEN, severe=above(5.0)
	),
	DiseaseRiskRule("magnesium", Parameter.magnesium, below(0.3), LOW_MAGNESIUM, level=RiskLevelEnum.low),
	DiseaseRiskRule("boron", Parameter.boron, below(30), LOW_BORON, severe=below(20)),
)

DISEASE_RISK_RULES: Mapping[TestTypeEnum, tuple[DiseaseRiskRule, ...]] = MappingProxyType(
	{
		TestTypeEnum.soil: SOIL_DISEASE_RISKS,
		TestTypeEnum.petiole: PETIOLE_DISEASE_RISKS,
	}
)


def disease_risk_alerts(
	test_type: TestTypeEnum,
	parameters: ParameterSet,
	rules: Mapping[TestTypeEnum, tuple[DiseaseRiskRule, ...]] = DISEASE_RISK_RULES,
) -> list[DiseaseRiskAlert]:
	"""Alerts in rule order: calcium, potassium, excess nitrogen, magnesium, boron."""
	test_type = TestTypeEnum(test_type)
	alerts: list[DiseaseRiskAlert] = []
	for rule in rules[test_type]:
		alert = rule.evaluate(test_type, parameters)
		if alert is not None:
			alerts.append(alert)
	return alerts
