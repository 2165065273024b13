"""Shared vocabulary registry.

Application code can import enums from here::

    from vinelab.models import Parameter, PriorityEnum, TestTypeEnum
"""

from vinelab.models.enums import (
    ApplicationMethodEnum,
    Parameter,
    PriorityEnum,
    RecommendationTypeEnum,
    RiskLevelEnum,
    TestTypeEnum,
)

__all__ = [
    "ApplicationMethodEnum",
    "Parameter",
    "PriorityEnum",
    "RecommendationTypeEnum",
    "RiskLevelEnum",
    "TestTypeEnum",
]
