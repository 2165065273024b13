"""Soil test threshold cascades (grape cultivation, ppm / % / dS/m units)."""

from __future__ import annotations

from vinelab.engine.rules import (
	ANY,
	ICON_CRITICAL,
	ICON_HIGH,
	ICON_OPTIMAL,
	ICON_SAVINGS,
	ICON_WATCH,
	Band,
	Condition,
	ParameterRule,
	RuleSet,
	above,
	at_least,
	below,
	between,
)
from vinelab.models.enums import Parameter, PriorityEnum, RecommendationTypeEnum, TestTypeEnum

_P = PriorityEnum
_T = RecommendationTypeEnum

# ── pH ──────────────────────────────────────────────────────────────────────

PH = ParameterRule(
	Parameter.ph,
	"pH",
	(
		Band(
			below(5.5),
			_P.critical,
			_T.action,
			ICON_CRITICAL,
			"Soil is highly acidic (pH {value}). Apply agricultural lime (CaCO₃) at "
			"{dose[soil_lime_heavy]} to raise pH to optimal range (6.5-7.5).",
			"खूप आम्लयुक्त माती आहे. चुना 2-3 टन प्रति एकर टाका. / Soil is too acidic. Add lime 2-3 tons per acre.",
			treatments=("soil_lime_heavy",),
		),
		Band(
			below(6.0),
			_P.high,
			_T.action,
			ICON_HIGH,
			"Soil is moderately acidic (pH {value}). Apply {dose[soil_lime]} agricultural lime "
			"before planting season.",
			"माती थोडी आम्लयुक्त आहे. चुना 1-2 टन टाका. / Soil is slightly acidic. Add lime 1-2 tons per acre.",
			treatments=("soil_lime",),
		),
		Band(
			above(8.5),
			_P.critical,
			_T.action,
			ICON_CRITICAL,
			"Soil is highly alkaline (pH {value}). Apply gypsum (CaSO₄) at {dose[soil_gypsum_heavy]} "
			"or elemental sulfur at {dose[soil_elemental_sulfur]}.",
			"खूप क्षारीय माती आहे. जिप्सम 1-2 टन किंवा गंधक टाका. / Soil is too alkaline. Add gypsum 1-2 tons or sulfur.",
			treatments=("soil_gypsum_heavy",),
		),
		Band(
			above(8.0),
			_P.high,
			_T.action,
			ICON_HIGH,
			"Soil is moderately alkaline (pH {value}). Apply gypsum at {dose[soil_gypsum]} to lower pH.",
			"माती थोडी क्षारीय आहे. जिप्सम 500 किलो-1 टन टाका. / Soil is slightly alkaline. Add gypsum 500kg-1 ton.",
			treatments=("soil_gypsum",),
		),
		Band(
			between(6.5, 7.5),
			_P.optimal,
			_T.optimal,
			ICON_OPTIMAL,
			"pH is optimal for grape cultivation ({value}). No correction needed.",
			"द्राक्षासाठी योग्य pH आहे. / pH is perfect for grapes.",
		),
		Band(
			ANY,
			_P.low,
			_T.watch,
			ICON_WATCH,
			"pH is acceptable ({value}) but monitor regularly. Optimal range is 6.5-7.5.",
			"pH ठीक आहे पण लक्ष ठेवा. / pH is okay, keep watching.",
		),
	),
)

# ── Salinity ────────────────────────────────────────────────────────────────

EC = ParameterRule(
	Parameter.ec,
	"EC",
	(
		Band(
			at_least(4.0),
			_P.critical,
			_T.action,
			ICON_CRITICAL,
			"Very high salinity (EC {value} dS/m). Immediate leaching irrigation required. "
			"Apply {dose[soil_leaching_heavy]} water quantity to flush salts.",
			"खूप मीठ आहे मातीत. लगेच धुवाईसाठी पाणी द्या. / Too much salt. Give heavy watering now to wash it out.",
			treatments=("soil_leaching_heavy",),
		),
		Band(
			at_least(2.0),
			_P.high,
			_T.action,
			ICON_HIGH,
			"Moderate salt buildup (EC {value} dS/m). Schedule leaching irrigation with "
			"{dose[soil_leaching]} water quantity.",
			"माती मीठ वाढत आहे. जास्त पाणी देऊन धुवा. / Salt is building up. Give extra watering to clean soil.",
			treatments=("soil_leaching",),
		),
		Band(
			at_least(1.5),
			_P.moderate,
			_T.watch,
			ICON_WATCH,
			"EC is slightly elevated ({value} dS/m). Monitor irrigation water quality and consider "
			"occasional leaching.",
			"माती थोडी मीठ होत आहे. लक्ष ठेवा. / Soil getting a bit salty. Keep an eye on it.",
		),
		Band(
			ANY,
			_P.optimal,
			_T.optimal,
			ICON_OPTIMAL,
			"Salinity is in optimal range (EC {value} dS/m). Soil health is good.",
			"मीठपणा योग्य आहे. माती चांगली आहे. / Salinity is good. Soil is healthy.",
		),
	),
)

# ── Macronutrients ──────────────────────────────────────────────────────────

NITROGEN = ParameterRule(
	Parameter.nitrogen,
	"Nitrogen",
	(
		Band(
			below(150),
			_P.high,
			_T.action,
			ICON_HIGH,
			"Low nitrogen ({value} ppm). Apply urea at {dose[soil_urea]} or well-decomposed compost "
			"at {dose[soil_compost]}.",
			"नायट्रोजन कमी आहे. युरिया 25-30 किलो किंवा खत 2-3 टन टाका. / Nitrogen is low. Add urea 25-30 kg or compost.",
			treatments=("soil_urea",),
		),
		Band(
			above(400),
			_P.moderate,
			_T.action,
			ICON_WATCH,
			"Excess nitrogen ({value} ppm). Reduce nitrogen fertilizers to prevent soft vegetative "
			"growth and disease susceptibility.",
			"नायट्रोजन जास्त आहे. युरिया कमी करा. / Too much nitrogen. Reduce urea application.",
		),
		Band(
			ANY,
			_P.optimal,
			_T.optimal,
			ICON_OPTIMAL,
			"Nitrogen is in adequate range ({value} ppm). Maintain current fertilization practices.",
			"नायट्रोजन योग्य आहे. सध्याचे खत चालू ठेवा. / Nitrogen is good. Continue same fertilizer.",
		),
	),
)

PHOSPHORUS = ParameterRule(
	Parameter.phosphorus,
	"Phosphorus",
	(
		# High pH locks phosphorus up; the same severity, but gypsum goes first.
		Band(
			below(20),
			_P.high,
			_T.action,
			ICON_HIGH,
			"Low phosphorus ({value} ppm) with high pH reduces P availability. First correct pH with "
			"gypsum, then apply DAP at {dose[soil_dap_after_gypsum]}.",
			"फॉस्फरस कमी आणि pH जास्त. प्रथम pH दुरुस्त करा नंतर डीएपी द्या. / Phosphorus low and pH high. "
			"Fix pH first, then add DAP.",
			treatments=("soil_dap_after_gypsum",),
			when=Condition(Parameter.ph, above(8.0)),
		),
		Band(
			below(20),
			_P.high,
			_T.action,
			ICON_HIGH,
			"Low phosphorus ({value} ppm). Apply DAP or SSP at {dose[soil_dap]} before flowering stage.",
			"फॉस्फरस कमी आहे. डीएपी 50-60 किलो प्रति एकर टाका. / Phosphorus is low. Add DAP 50-60 kg per acre.",
			treatments=("soil_dap",),
		),
		Band(
			above(80),
			_P.low,
			_T.savings,
			ICON_SAVINGS,
			"High phosphorus ({value} ppm). You can skip phosphate fertilizers this season. "
			"Potential savings: ₹15,000-20,000 per acre.",
			"फॉस्फरस जास्त आहे. यावर्षी डीएपी वाचवा. ₹15,000-20,000 बचत होईल. / Phosphorus is high. "
			"Skip DAP this year. Save ₹15,000-20,000.",
		),
		Band(
			ANY,
			_P.optimal,
			_T.optimal,
			ICON_OPTIMAL,
			"Phosphorus is adequate ({value} ppm). Apply maintenance dose of "
			"{dose[soil_dap_maintenance]} DAP.",
			"फॉस्फरस योग्य आहे. कायम ठेवण्यासाठी 30-40 किलो डीएपी द्या. / Phosphorus is good. "
			"Give 30-40 kg DAP to maintain.",
		),
	),
)

POTASSIUM = ParameterRule(
	Parameter.potassium,
	"Potassium",
	(
		Band(
			below(200),
			_P.high,
			_T.action,
			ICON_HIGH,
			"Low potassium ({value} ppm). Apply muriate of potash (MOP) at {dose[soil_mop]}. "
			"Critical for fruit quality and disease resistance.",
			"पोटॅश कमी आहे. एमओपी 40-50 किलो टाका. फळाच्या गुणवत्तेसाठी महत्वाचे. / Potash is low. "
			"Add MOP 40-50 kg. Important for fruit quality.",
			treatments=("soil_mop",),
		),
		Band(
			above(500),
			_P.low,
			_T.savings,
			ICON_SAVINGS,
			"Potassium is abundant ({value} ppm). Reduce or skip potash application. "
			"Potential savings: ₹8,000-12,000 per acre.",
			"पोटॅश जास्त आहे. एमओपी वाचवा. ₹8,000-12,000 बचत. / Potash is high. Skip MOP. Save ₹8,000-12,000.",
		),
		Band(
			ANY,
			_P.optimal,
			_T.optimal,
			ICON_OPTIMAL,
			"Potassium is in optimal range ({value} ppm). Continue current potash application.",
			"पोटॅश योग्य आहे. सध्याचे खत चालू ठेवा. / Potash is good. Continue same fertilizer.",
		),
	),
)

ORGANIC_MATTER = ParameterRule(
	Parameter.organic_matter,
	"Organic Matter",
	(
		Band(
			below(1.0),
			_P.high,
			_T.action,
			ICON_HIGH,
			"Very low organic matter ({value}%). Apply {dose[soil_compost_heavy]} well-decomposed FYM "
			"or compost to improve soil health.",
			"सेंद्रिय पदार्थ फार कमी आहे. शेणखत किंवा कंपोस्ट 5-7 टन टाका. / Organic matter very low. "
			"Add compost 5-7 tons.",
			treatments=("soil_compost_heavy",),
		),
		Band(
			above(3.0),
			_P.optimal,
			_T.optimal,
			ICON_OPTIMAL,
			"Excellent organic matter content ({value}%). Soil structure and microbial activity are healthy.",
			"सेंद्रिय पदार्थ उत्तम आहे. माती चांगली आहे. / Organic matter excellent. Soil is healthy.",
		),
		Band(
			ANY,
			_P.moderate,
			_T.watch,
			ICON_WATCH,
			"Organic matter is moderate ({value}%). Continue adding {dose[soil_compost]} compost annually.",
			"सेंद्रिय पदार्थ ठीक आहे. दरवर्षी 2-3 टन खत टाका. / Organic matter okay. Add 2-3 tons compost yearly.",
		),
	),
)

# ── Micronutrients ──────────────────────────────────────────────────────────


def _micronutrient(
	parameter: Parameter,
	label: str,
	limit: float,
	technical: str,
	simple: str,
	treatment: str,
) -> ParameterRule:
	"""Deficiency action below ``limit``, otherwise an optimal finding."""
	return ParameterRule(
		parameter,
		label,
		(
			Band(below(limit), _P.moderate, _T.action, ICON_WATCH, technical, simple, treatments=(treatment,)),
			Band(
				ANY,
				_P.optimal,
				_T.optimal,
				ICON_OPTIMAL,
				f"{label} is sufficient ({{value}} ppm). No supplementation needed.",
				f"{label} योग्य आहे. / {label} is good.",
			),
		),
	)


ZINC = _micronutrient(
	Parameter.zinc,
	"Zinc",
	1.0,
	"Low zinc ({value} ppm). Apply zinc sulfate at {dose[soil_zinc_sulfate]} or foliar spray of 0.5% ZnSO₄.",
	"झिंक कमी आहे. झिंक सल्फेट 10-15 किलो किंवा पानांवर फवारा. / Zinc is low. Add zinc sulfate 10-15 kg.",
	"soil_zinc_sulfate",
)

BORON = _micronutrient(
	Parameter.boron,
	"Boron",
	0.5,
	"Low boron ({value} ppm). Apply borax at {dose[soil_borax]}. Essential for fruit set and development.",
	"बोरॉन कमी आहे. बोरॅक्स 5-10 किलो टाका. फळधारणेसाठी गरजेचे. / Boron is low. Add borax 5-10 kg. "
	"Important for fruit.",
	"soil_borax",
)

IRON = _micronutrient(
	Parameter.iron,
	"Iron",
	5.0,
	"Low iron ({value} ppm). Apply ferrous sulfate at {dose[soil_ferrous_sulfate]} or foliar spray chelated iron.",
	"लोह कमी आहे. फेरस सल्फेट 20-25 किलो किंवा पानांवर फवारा. / Iron is low. Add ferrous sulfate.",
	"soil_ferrous_sulfate",
)

SULFUR = _micronutrient(
	Parameter.sulfur,
	"Sulfur",
	15,
	"Low sulfur ({value} ppm). Apply gypsum at {dose[soil_sulfur_gypsum]} or switch to sulfate-based fertilizers.",
	"गंधक कमी आहे. जिप्सम 100-200 किलो टाका. / Sulfur is low. Add gypsum 100-200 kg.",
	"soil_sulfur_gypsum",
)

MANGANESE = _micronutrient(
	Parameter.manganese,
	"Manganese",
	5,
	"Low manganese ({value} ppm). Apply manganese sulfate at {dose[soil_manganese_sulfate]}.",
	"मँगनीज कमी आहे. मँगनीज सल्फेट 5-10 किलो टाका. / Manganese is low. Add manganese sulfate 5-10 kg.",
	"soil_manganese_sulfate",
)

COPPER = _micronutrient(
	Parameter.copper,
	"Copper",
	0.5,
	"Low copper ({value} ppm). Apply copper sulfate at {dose[soil_copper_sulfate]}.",
	"तांबे कमी आहे. कॉपर सल्फेट 2-5 किलो टाका. / Copper is low. Add copper sulfate 2-5 kg.",
	"soil_copper_sulfate",
)

SOIL_RULES = RuleSet(
	TestTypeEnum.soil,
	(PH, EC, NITROGEN, PHOSPHORUS, POTASSIUM, ORGANIC_MATTER, ZINC, BORON, IRON, SULFUR, MANGANESE, COPPER),
)
