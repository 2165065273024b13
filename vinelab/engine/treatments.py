"""Shared product/dosage/method table used by both the rule sets and the plan generator.

Rule sets interpolate ``Treatment.dosage`` into their technical prose and tag
each recommendation with the treatment keys it prescribes; the plan generator
reads the same entries back. Dosage constants therefore exist exactly once.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from vinelab.models.enums import ApplicationMethodEnum, TestTypeEnum

# "25-30 kg/acre", "1-2 tons/acre", "5–7 liters/acre"
RANGE_PER_ACRE = re.compile(r"\d+(?:\.\d+)?\s*[-–]\s*\d+(?:\.\d+)?\s*(?:kg|tons?|liters?)/acre")
PERCENT_OF_NORMAL = re.compile(r"\d+%\s*of normal")


@dataclass(frozen=True, slots=True)
class Treatment:
	product: str
	dosage: str
	method: ApplicationMethodEnum
	purpose: str
	dosage_pattern: re.Pattern[str] | None = RANGE_PER_ACRE

	def dosage_from(self, text: str) -> str:
		"""Dosage quoted in ``text`` when present, else the table value."""
		if self.dosage_pattern is None:
			return self.dosage
		match = self.dosage_pattern.search(text)
		return match.group(0) if match else self.dosage


@dataclass(frozen=True, slots=True)
class KeywordMatcher:
	"""Maps free-text recommendations (no treatment keys) back onto table entries.

	``entries`` are ``(keywords, treatment_key)`` pairs checked in order; an
	empty keyword tuple always matches. With ``first_only`` the scan stops at
	the first hit, otherwise every matching entry contributes.
	"""

	entries: tuple[tuple[tuple[str, ...], str], ...]
	first_only: bool = True

	def match(self, text: str) -> list[str]:
		lowered = text.lower()
		keys: list[str] = []
		for keywords, key in self.entries:
			if keywords and not any(token in lowered for token in keywords):
				continue
			keys.append(key)
			if self.first_only:
				break
		return keys


@dataclass(frozen=True)
class TreatmentTable:
	treatments: Mapping[str, Treatment]
	matchers: Mapping[tuple[TestTypeEnum, str], KeywordMatcher] = field(default_factory=dict)

	def __post_init__(self) -> None:
		object.__setattr__(self, "treatments", MappingProxyType(dict(self.treatments)))
		object.__setattr__(self, "matchers", MappingProxyType(dict(self.matchers)))
		missing = sorted(
			key
			for matcher in self.matchers.values()
			for _keywords, key in matcher.entries
			if key not in self.treatments
		)
		if missing:
			raise ValueError(f"keyword matchers reference unknown treatments: {', '.join(missing)}")

	def __getitem__(self, key: str) -> Treatment:
		return self.treatments[key]

	def __contains__(self, key: object) -> bool:
		return key in self.treatments

	def dosages(self) -> dict[str, str]:
		return {key: treatment.dosage for key, treatment in self.treatments.items()}

	def require(self, keys: Iterable[str]) -> None:
		missing = sorted({key for key in keys if key not in self.treatments})
		if missing:
			raise ValueError(f"unknown treatments: {', '.join(missing)}")

	def match_text(self, test_type: TestTypeEnum, parameter: str, text: str) -> list[str]:
		matcher = self.matchers.get((test_type, parameter))
		if matcher is None:
			return []
		return matcher.match(text)


_SOIL = ApplicationMethodEnum.soil
_FOLIAR = ApplicationMethodEnum.foliar
_FERTIGATION = ApplicationMethodEnum.fertigation

TREATMENTS: Mapping[str, Treatment] = MappingProxyType({
	# ── Soil: pH correction ────────────────────────────────────────────────
	"soil_lime_heavy": Treatment(
		"Agricultural Lime (CaCO₃)", "2-3 tons/acre", _SOIL, "Raise soil pH to optimal range (6.5-7.5)"
	),
	"soil_lime": Treatment(
		"Agricultural Lime (CaCO₃)", "1-2 tons/acre", _SOIL, "Raise soil pH to optimal range (6.5-7.5)"
	),
	"soil_gypsum_heavy": Treatment("Gypsum (CaSO₄)", "1-2 tons/acre", _SOIL, "Lower soil pH to optimal range"),
	"soil_gypsum": Treatment("Gypsum (CaSO₄)", "500-1000 kg/acre", _SOIL, "Lower soil pH to optimal range"),
	"soil_elemental_sulfur": Treatment("Elemental Sulfur", "200-400 kg/acre", _SOIL, "Lower soil pH"),
	# ── Soil: salinity ──────────────────────────────────────────────────────
	"soil_leaching_heavy": Treatment(
		"Water (Leaching Irrigation)",
		"150% of normal",
		_FERTIGATION,
		"Flush excess salts from soil",
		dosage_pattern=PERCENT_OF_NORMAL,
	),
	"soil_leaching": Treatment(
		"Water (Leaching Irrigation)",
		"120% of normal",
		_FERTIGATION,
		"Flush excess salts from soil",
		dosage_pattern=PERCENT_OF_NORMAL,
	),
	# ── Soil: macronutrients ────────────────────────────────────────────────
	"soil_urea": Treatment("Urea (46-0-0)", "25-30 kg/acre", _SOIL, "Correct nitrogen deficiency"),
	"soil_dap": Treatment("DAP (18-46-0) or SSP", "50-60 kg/acre", _SOIL, "Correct phosphorus deficiency"),
	"soil_dap_after_gypsum": Treatment(
		"DAP (18-46-0) or SSP",
		"50-60 kg/acre",
		_SOIL,
		"Correct phosphorus deficiency once gypsum has lowered pH",
	),
	"soil_dap_maintenance": Treatment("DAP (18-46-0)", "30-40 kg/acre", _SOIL, "Maintain phosphorus levels"),
	"soil_mop": Treatment("Muriate of Potash (MOP)", "40-50 kg/acre", _SOIL, "Correct potassium deficiency"),
	# ── Soil: organic matter ────────────────────────────────────────────────
	"soil_compost_heavy": Treatment(
		"Well-decomposed FYM or Compost",
		"5-7 tons/acre",
		_SOIL,
		"Improve soil structure and microbial activity",
	),
	"soil_compost": Treatment(
		"Well-decomposed FYM or Compost",
		"2-3 tons/acre",
		_SOIL,
		"Build organic matter",
	),
	# ── Soil: micronutrients ────────────────────────────────────────────────
	"soil_zinc_sulfate": Treatment("Zinc Sulfate (ZnSO₄)", "10-15 kg/acre", _SOIL, "Correct zinc deficiency"),
	"soil_zinc_foliar": Treatment(
		"Zinc Sulfate (ZnSO₄)", "10-15 kg/acre", _FOLIAR, "Correct zinc deficiency"
	),
	"soil_borax": Treatment("Borax", "5-10 kg/acre", _SOIL, "Correct boron deficiency (essential for fruit set)"),
	"soil_ferrous_sulfate": Treatment(
		"Ferrous Sulfate or Chelated Iron", "20-25 kg/acre", _SOIL, "Correct iron deficiency"
	),
	"soil_iron_foliar": Treatment(
		"Ferrous Sulfate or Chelated Iron", "20-25 kg/acre", _FOLIAR, "Correct iron deficiency"
	),
	"soil_sulfur_gypsum": Treatment("Gypsum (CaSO₄)", "100-200 kg/acre", _SOIL, "Correct sulfur deficiency"),
	"soil_manganese_sulfate": Treatment(
		"Manganese Sulfate (MnSO₄)", "5-10 kg/acre", _SOIL, "Correct manganese deficiency"
	),
	"soil_copper_sulfate": Treatment("Copper Sulfate (CuSO₄)", "2-5 kg/acre", _SOIL, "Correct copper deficiency"),
	# ── Soil: maintenance program ───────────────────────────────────────────
	"soil_npk_maintenance": Treatment(
		"Balanced NPK (19-19-19) through fertigation",
		"2-3 kg/acre/week",
		_FERTIGATION,
		"Maintain nitrogen levels during active growth",
		dosage_pattern=None,
	),
	"soil_follow_up_test": Treatment(
		"Soil Test (Follow-up)",
		"1 test",
		_SOIL,
		"Verify pH correction was successful",
		dosage_pattern=None,
	),
	# ── Petiole: corrective actions ─────────────────────────────────────────
	"petiole_urea_foliar": Treatment(
		"Urea Foliar Spray (1-2%)",
		"1-2% solution",
		_FOLIAR,
		"Immediate nitrogen correction",
		dosage_pattern=None,
	),
	"petiole_can_fertigation": Treatment(
		"Calcium Ammonium Nitrate through drip",
		"Increase by 20% for 2 weeks",
		_FERTIGATION,
		"Boost nitrogen uptake",
		dosage_pattern=None,
	),
	"petiole_phosphoric_acid": Treatment(
		"Phosphoric Acid (H₃PO₄)", "5-7 liters/acre", _FERTIGATION, "Correct phosphorus deficiency"
	),
	"petiole_dap_foliar": Treatment(
		"DAP Foliar Spray (2%)", "2% solution", _FOLIAR, "Quick phosphorus boost", dosage_pattern=None
	),
	"petiole_sop": Treatment(
		"Potassium Sulfate (SOP)", "15-20 kg/acre", _FERTIGATION, "Improve fruit quality and color development"
	),
	"petiole_sop_boost": Treatment(
		"Potassium Sulfate (SOP)",
		"Increase by 30%",
		_FERTIGATION,
		"Support berry development",
		dosage_pattern=None,
	),
	"petiole_calcium_nitrate": Treatment(
		"Calcium Nitrate", "10-15 kg/acre", _FERTIGATION, "Improve disease resistance and cell wall strength"
	),
	"petiole_epsom": Treatment(
		"Epsom Salt (MgSO₄)", "10-15 kg/acre", _FOLIAR, "Improve chlorophyll production and photosynthesis"
	),
	"petiole_epsom_fertigation": Treatment(
		"Epsom Salt (MgSO₄)", "10-15 kg/acre", _FERTIGATION, "Improve chlorophyll production and photosynthesis"
	),
	"petiole_zinc_foliar": Treatment(
		"Zinc Foliar Spray", "0.5% solution", _FOLIAR, "Correct zinc deficiency", dosage_pattern=None
	),
	"petiole_boron_foliar": Treatment(
		"Boron Foliar Spray", "0.1-0.2% solution", _FOLIAR, "Correct boron deficiency", dosage_pattern=None
	),
	"petiole_iron_foliar": Treatment(
		"Iron Foliar Spray", "0.5-1% solution", _FOLIAR, "Correct iron deficiency", dosage_pattern=None
	),
	"petiole_sulfate_fertigation": Treatment(
		"Sulfate-based fertilizer through drip",
		"Replace 25% of nitrate sources",
		_FERTIGATION,
		"Correct sulfur deficiency",
		dosage_pattern=None,
	),
	"petiole_manganese_foliar": Treatment(
		"Manganese Foliar Spray", "0.2-0.3% solution", _FOLIAR, "Correct manganese deficiency", dosage_pattern=None
	),
	"petiole_copper_foliar": Treatment(
		"Copper Foliar Spray", "0.2% solution", _FOLIAR, "Correct copper deficiency", dosage_pattern=None
	),
})

_soil = TestTypeEnum.soil
_petiole = TestTypeEnum.petiole
_ALWAYS: tuple[str, ...] = ()

KEYWORD_MATCHERS: Mapping[tuple[TestTypeEnum, str], KeywordMatcher] = MappingProxyType({
	(_soil, "pH"): KeywordMatcher(
		(
			(("lime",), "soil_lime"),
			(("gypsum",), "soil_gypsum"),
			(("sulfur",), "soil_elemental_sulfur"),
		)
	),
	(_soil, "EC"): KeywordMatcher(((("leaching",), "soil_leaching"),)),
	(_soil, "Nitrogen"): KeywordMatcher(((("urea",), "soil_urea"),)),
	(_soil, "Phosphorus"): KeywordMatcher(
		(
			(("gypsum",), "soil_dap_after_gypsum"),
			(("dap", "ssp"), "soil_dap"),
		)
	),
	(_soil, "Potassium"): KeywordMatcher(((("mop",), "soil_mop"),)),
	(_soil, "Organic Matter"): KeywordMatcher(((_ALWAYS, "soil_compost"),)),
	(_soil, "Zinc"): KeywordMatcher(
		(
			(("foliar",), "soil_zinc_foliar"),
			(_ALWAYS, "soil_zinc_sulfate"),
		)
	),
	(_soil, "Boron"): KeywordMatcher(((_ALWAYS, "soil_borax"),)),
	(_soil, "Iron"): KeywordMatcher(
		(
			(("foliar",), "soil_iron_foliar"),
			(_ALWAYS, "soil_ferrous_sulfate"),
		)
	),
	(_soil, "Sulfur"): KeywordMatcher(((_ALWAYS, "soil_sulfur_gypsum"),)),
	(_soil, "Manganese"): KeywordMatcher(((_ALWAYS, "soil_manganese_sulfate"),)),
	(_soil, "Copper"): KeywordMatcher(((_ALWAYS, "soil_copper_sulfate"),)),
	(_petiole, "Nitrogen"): KeywordMatcher(
		(
			(("urea",), "petiole_urea_foliar"),
			(("fertigation",), "petiole_can_fertigation"),
		),
		first_only=False,
	),
	(_petiole, "Phosphorus"): KeywordMatcher(
		(
			(("phosphoric acid",), "petiole_phosphoric_acid"),
			(("dap",), "petiole_dap_foliar"),
		),
		first_only=False,
	),
	(_petiole, "Potassium"): KeywordMatcher(((_ALWAYS, "petiole_sop"),)),
	(_petiole, "Calcium"): KeywordMatcher(((_ALWAYS, "petiole_calcium_nitrate"),)),
	(_petiole, "Magnesium"): KeywordMatcher(
		(
			(("foliar",), "petiole_epsom"),
			(_ALWAYS, "petiole_epsom_fertigation"),
		)
	),
	(_petiole, "Zinc"): KeywordMatcher(((_ALWAYS, "petiole_zinc_foliar"),)),
	(_petiole, "Boron"): KeywordMatcher(((_ALWAYS, "petiole_boron_foliar"),)),
	(_petiole, "Iron"): KeywordMatcher(((_ALWAYS, "petiole_iron_foliar"),)),
	(_petiole, "Sulfur"): KeywordMatcher(((_ALWAYS, "petiole_sulfate_fertigation"),)),
	(_petiole, "Manganese"): KeywordMatcher(((_ALWAYS, "petiole_manganese_foliar"),)),
	(_petiole, "Copper"): KeywordMatcher(((_ALWAYS, "petiole_copper_foliar"),)),
})


def default_treatment_table() -> TreatmentTable:
	return TreatmentTable(treatments=TREATMENTS, matchers=KEYWORD_MATCHERS)
