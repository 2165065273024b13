"""Total order over recommendation priorities."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from vinelab.models.enums import PriorityEnum
from vinelab.schemas.lab_tests import Recommendation

PRIORITY_ORDER: Mapping[PriorityEnum, int] = MappingProxyType(
	{priority: rank for rank, priority in enumerate(PriorityEnum)}
)

PRIORITY_LABELS: Mapping[PriorityEnum, str] = MappingProxyType(
	{
		PriorityEnum.critical: "Urgent Action Required",
		PriorityEnum.high: "High Priority",
		PriorityEnum.moderate: "Monitor",
		PriorityEnum.low: "Suggestion",
		PriorityEnum.optimal: "Optimal",
	}
)


def priority_rank(priority: PriorityEnum | str) -> int:
	"""0 for ``critical`` through 4 for ``optimal``."""
	return PRIORITY_ORDER[PriorityEnum(priority)]


def sort_recommendations(recommendations: Iterable[Recommendation]) -> list[Recommendation]:
	"""Most urgent first; ties keep their generation order."""
	return sorted(recommendations, key=lambda rec: priority_rank(rec.priority))


def priority_label(priority: PriorityEnum | str) -> str:
	return PRIORITY_LABELS[PriorityEnum(priority)]
