"""Closed vocabularies shared by the lab-test engine, schemas and routes.

Every StrEnum value is also the wire value used in request/response bodies,
so renaming a member is a breaking API change.
"""

from enum import StrEnum

# ── Lab test enums ──────────────────────────────────────────────────────────


class TestTypeEnum(StrEnum):
    """Kind of laboratory assay a record comes from."""

    __test__ = False  # not a pytest test class

    soil = "soil"
    petiole = "petiole"


class PriorityEnum(StrEnum):
    """Recommendation urgency, declared from most to least urgent."""

    critical = "critical"
    high = "high"
    moderate = "moderate"
    low = "low"
    optimal = "optimal"


class RecommendationTypeEnum(StrEnum):
    """What the grower is expected to do with a finding."""

    action = "action"
    watch = "watch"
    optimal = "optimal"
    savings = "savings"


class ApplicationMethodEnum(StrEnum):
    """How a fertilizer product reaches the vine."""

    soil = "soil"
    foliar = "foliar"
    fertigation = "fertigation"


class RiskLevelEnum(StrEnum):
    """Likelihood that a nutrient imbalance turns into disease pressure."""

    low = "low"
    medium = "medium"
    high = "high"


# ── Canonical parameter vocabulary ──────────────────────────────────────────


class Parameter(StrEnum):
    """Canonical lab parameter names produced by the normalizer."""

    ph = "ph"
    ec = "ec"
    organic_carbon = "organic_carbon"
    organic_matter = "organic_matter"
    nitrogen = "nitrogen"
    total_nitrogen = "total_nitrogen"
    nitrate_nitrogen = "nitrate_nitrogen"
    ammonical_nitrogen = "ammonical_nitrogen"
    phosphorus = "phosphorus"
    potassium = "potassium"
    calcium = "calcium"
    calcium_carbonate = "calcium_carbonate"
    magnesium = "magnesium"
    sulfur = "sulfur"
    iron = "iron"
    manganese = "manganese"
    zinc = "zinc"
    copper = "copper"
    boron = "boron"
    molybdenum = "molybdenum"
    sodium = "sodium"
    chloride = "chloride"
    carbonate = "carbonate"
    bicarbonate = "bicarbonate"
