"""Petiole (leaf-stalk tissue) threshold cascades; macronutrients in %, micronutrients in ppm."""

from __future__ import annotations

from vinelab.engine.rules import (
	ANY,
	ICON_CRITICAL,
	ICON_HIGH,
	ICON_OPTIMAL,
	ICON_SAVINGS,
	ICON_WATCH,
	Band,
	ParameterRule,
	RuleSet,
	above,
	below,
)
from vinelab.models.enums import Parameter, PriorityEnum, RecommendationTypeEnum, TestTypeEnum

_P = PriorityEnum
_T = RecommendationTypeEnum

# ── Macronutrients ──────────────────────────────────────────────────────────

NITROGEN = ParameterRule(
	Parameter.total_nitrogen,
	"Nitrogen",
	(
		Band(
			below(2.0),
			_P.high,
			_T.action,
			ICON_HIGH,
			"Low petiole nitrogen ({value}%). Apply immediate foliar spray of urea (1-2%) or increase "
			"fertigation nitrogen by 20%.",
			"नायट्रोजन कमी आहे. युरिया पानांवर फवारा किंवा फर्टिगेशनमध्ये वाढवा. / Nitrogen low. "
			"Spray urea on leaves or increase in drip.",
			treatments=("petiole_urea_foliar", "petiole_can_fertigation"),
		),
		Band(
			above(4.0),
			_P.moderate,
			_T.action,
			ICON_WATCH,
			"Excess petiole nitrogen ({value}%). Reduce nitrogen fertilization to prevent excessive "
			"vegetative growth and disease risk.",
			"नायट्रोजन जास्त आहे. युरिया कमी करा, नाहीतर रोग येऊ शकतो. / Nitrogen too high. "
			"Reduce urea to avoid diseases.",
		),
		Band(
			ANY,
			_P.optimal,
			_T.optimal,
			ICON_OPTIMAL,
			"Petiole nitrogen is optimal ({value}%). Continue current nitrogen management.",
			"नायट्रोजन योग्य आहे. सध्याचे खत चालू ठेवा. / Nitrogen is good. Continue same fertilizer.",
		),
	),
)

PHOSPHORUS = ParameterRule(
	Parameter.phosphorus,
	"Phosphorus",
	(
		Band(
			below(0.2),
			_P.high,
			_T.action,
			ICON_HIGH,
			"Low petiole phosphorus ({value}%). Apply phosphoric acid through fertigation at "
			"{dose[petiole_phosphoric_acid]} or foliar spray of DAP (2%).",
			"फॉस्फरस कमी आहे. फॉस्फोरिक ऍसिड किंवा डीएपी फवारा द्या. / Phosphorus low. "
			"Give phosphoric acid or spray DAP.",
			treatments=("petiole_phosphoric_acid", "petiole_dap_foliar"),
		),
		Band(
			above(0.6),
			_P.low,
			_T.savings,
			ICON_SAVINGS,
			"High petiole phosphorus ({value}%). Plant is well-supplied. Reduce phosphorus fertilization.",
			"फॉस्फरस जास्त आहे. डीएपी कमी करा, पैसे वाचवा. / Phosphorus high. Reduce DAP, save money.",
		),
		Band(
			ANY,
			_P.optimal,
			_T.optimal,
			ICON_OPTIMAL,
			"Petiole phosphorus is adequate ({value}%). Maintain current phosphorus application.",
			"फॉस्फरस योग्य आहे. सध्याचे खत चालू ठेवा. / Phosphorus is good. Continue same fertilizer.",
		),
	),
)

POTASSIUM = ParameterRule(
	Parameter.potassium,
	"Potassium",
	(
		Band(
			below(1.5),
			_P.critical,
			_T.action,
			ICON_CRITICAL,
			"Very low petiole potassium ({value}%). Immediate action required. Apply potassium sulfate "
			"through fertigation at {dose[petiole_sop]}. Critical for fruit quality and color development.",
			"पोटॅश फार कमी आहे. लगेच पोटॅश सल्फेट 15-20 किलो द्या. फळाच्या रंगासाठी महत्वाचे. / "
			"Potash very low. Give potash sulfate 15-20 kg now. Important for fruit color.",
			treatments=("petiole_sop",),
		),
		Band(
			below(2.0),
			_P.high,
			_T.action,
			ICON_HIGH,
			"Low petiole potassium ({value}%). Increase potassium fertigation by 30%. "
			"Critical stage for berry development.",
			"पोटॅश कमी आहे. फर्टिगेशनमध्ये पोटॅश वाढवा. / Potash low. Increase potash in drip system.",
			treatments=("petiole_sop_boost",),
		),
		Band(
			above(3.5),
			_P.moderate,
			_T.watch,
			ICON_WATCH,
			"High petiole potassium ({value}%). May interfere with calcium and magnesium uptake. "
			"Monitor and adjust if needed.",
			"पोटॅश जास्त आहे. कॅल्शियम शोषणात अडथळा येऊ शकतो. / Potash high. May affect calcium uptake.",
		),
		Band(
			ANY,
			_P.optimal,
			_T.optimal,
			ICON_OPTIMAL,
			"Petiole potassium is optimal ({value}%). Excellent for fruit quality and sugar development.",
			"पोटॅश योग्य आहे. फळाच्या गुणवत्तेसाठी उत्तम. / Potash is perfect. Great for fruit quality.",
		),
	),
)

CALCIUM = ParameterRule(
	Parameter.calcium,
	"Calcium",
	(
		Band(
			below(1.5),
			_P.high,
			_T.action,
			ICON_HIGH,
			"Low petiole calcium ({value}%). Apply calcium nitrate through fertigation at "
			"{dose[petiole_calcium_nitrate]} or foliar spray. Low calcium increases powdery mildew susceptibility.",
			"कॅल्शियम कमी आहे. कॅल्शियम नायट्रेट द्या. कमी कॅल्शियममुळे रोग वाढतात. / Calcium low. "
			"Give calcium nitrate. Low calcium increases diseases.",
			treatments=("petiole_calcium_nitrate",),
		),
		Band(
			above(3.5),
			_P.optimal,
			_T.optimal,
			ICON_OPTIMAL,
			"Excellent petiole calcium ({value}%). Strong cell walls and good disease resistance.",
			"कॅल्शियम उत्तम आहे. रोगप्रतिकारशक्ती चांगली. / Calcium excellent. Disease resistance good.",
		),
		Band(
			ANY,
			_P.optimal,
			_T.optimal,
			ICON_OPTIMAL,
			"Petiole calcium is adequate ({value}%). Maintain current calcium management.",
			"कॅल्शियम योग्य आहे. सध्याचे खत चालू ठेवा. / Calcium is good. Continue same fertilizer.",
		),
	),
)

MAGNESIUM = ParameterRule(
	Parameter.magnesium,
	"Magnesium",
	(
		Band(
			below(0.3),
			_P.high,
			_T.action,
			ICON_HIGH,
			"Low petiole magnesium ({value}%). Apply magnesium sulfate (Epsom salt) at {dose[petiole_epsom]} "
			"or foliar spray at 1%. Essential for chlorophyll production.",
			"मॅग्नेशियम कमी आहे. एप्सम सॉल्ट 10-15 किलो द्या. पानांच्या हरेपणासाठी गरजेचे. / Magnesium low. "
			"Give Epsom salt 10-15 kg. Needed for green leaves.",
			treatments=("petiole_epsom",),
		),
		Band(
			above(1.0),
			_P.optimal,
			_T.optimal,
			ICON_OPTIMAL,
			"Excellent petiole magnesium ({value}%). Photosynthesis and chlorophyll production are optimal.",
			"मॅग्नेशियम उत्तम आहे. प्रकाशसंश्लेषण चांगले चालू आहे. / Magnesium excellent. Photosynthesis working well.",
		),
		Band(
			ANY,
			_P.optimal,
			_T.optimal,
			ICON_OPTIMAL,
			"Petiole magnesium is adequate ({value}%). Continue current magnesium application.",
			"मॅग्नेशियम योग्य आहे. सध्याचे खत चालू ठेवा. / Magnesium is good. Continue same fertilizer.",
		),
	),
)

# ── Micronutrients ──────────────────────────────────────────────────────────


def _deficiency(
	parameter: Parameter,
	label: str,
	limit: float,
	unit: str,
	technical: str,
	simple: str,
	treatment: str,
) -> ParameterRule:
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
				f"Petiole {label.lower()} is adequate ({{value}}{unit}).",
				f"{label} योग्य आहे. / {label} is good.",
			),
		),
	)


SULFUR = _deficiency(
	Parameter.sulfur,
	"Sulfur",
	0.15,
	"%",
	"Low petiole sulfur ({value}%). Replace part of the nitrate sources with sulfate-based fertilizers "
	"through fertigation.",
	"गंधक कमी आहे. सल्फेट खत ड्रिपमधून द्या. / Sulfur low. Give sulfate fertilizer through drip.",
	"petiole_sulfate_fertigation",
)

ZINC = _deficiency(
	Parameter.zinc,
	"Zinc",
	20,
	" ppm",
	"Low petiole zinc ({value} ppm). Apply foliar spray of zinc sulfate (0.5%) during active growth stages.",
	"झिंक कमी आहे. पानांवर झिंक फवारा द्या. / Zinc low. Spray zinc on leaves.",
	"petiole_zinc_foliar",
)

BORON = _deficiency(
	Parameter.boron,
	"Boron",
	30,
	" ppm",
	"Low petiole boron ({value} ppm). Apply borax foliar spray (0.1-0.2%) before and after flowering. "
	"Critical for fruit set.",
	"बोरॉन कमी आहे. फुलण्यापूर्वी आणि नंतर फवारा द्या. फळधारणेसाठी महत्वाचे. / Boron low. "
	"Spray before and after flowering. Important for fruit set.",
	"petiole_boron_foliar",
)

IRON = _deficiency(
	Parameter.iron,
	"Iron",
	50,
	" ppm",
	"Low petiole iron ({value} ppm). Apply chelated iron foliar spray or through fertigation. "
	"Symptoms: yellowing between leaf veins.",
	"लोह कमी आहे. पानांवर किंवा ड्रिपमध्ये लोह द्या. पाने पिवळी पडू शकतात. / Iron low. Spray on leaves. "
	"Leaves may turn yellow.",
	"petiole_iron_foliar",
)

MANGANESE = _deficiency(
	Parameter.manganese,
	"Manganese",
	40,
	" ppm",
	"Low petiole manganese ({value} ppm). Apply manganese sulfate foliar spray (0.2-0.3%).",
	"मँगनीज कमी आहे. पानांवर मँगनीज फवारा द्या. / Manganese low. Spray manganese on leaves.",
	"petiole_manganese_foliar",
)

COPPER = _deficiency(
	Parameter.copper,
	"Copper",
	5,
	" ppm",
	"Low petiole copper ({value} ppm). Apply copper sulfate foliar spray (0.2%).",
	"तांबे कमी आहे. पानांवर कॉपर फवारा द्या. / Copper low. Spray copper on leaves.",
	"petiole_copper_foliar",
)

PETIOLE_RULES = RuleSet(
	TestTypeEnum.petiole,
	(NITROGEN, PHOSPHORUS, POTASSIUM, CALCIUM, MAGNESIUM, SULFUR, ZINC, BORON, IRON, MANGANESE, COPPER),
)
